"""Timeframe parsing utilities for term catalogs."""

import re
from datetime import date, timedelta

MONTHS_PER_YEAR = 12
MONTHS_PER_QUARTER = 3
MONTHS_PER_HALF = 6


def month_end(year: int, month: int) -> date:
    """Return the last day of the given month."""
    if month == MONTHS_PER_YEAR:
        return date(year, 12, 31)
    return date(year, month + 1, 1) - timedelta(days=1)


def add_months(year: int, month: int, count: int) -> tuple[int, int]:
    """Shift a (year, month) pair by ``count`` months."""
    offset = year * MONTHS_PER_YEAR + (month - 1) + count
    return offset // MONTHS_PER_YEAR, offset % MONTHS_PER_YEAR + 1


def _fiscal_span(year: int, index: int, months: int, fiscal_year_start: int) -> tuple[date, date]:
    """Date range of the ``index``-th block of ``months`` months in a fiscal year.

    Fiscal year ``year`` starts in calendar year ``year``; with a January start
    the fiscal and calendar years coincide.
    """
    start_year, start_month = add_months(year, fiscal_year_start, index * months)
    end_year, end_month = add_months(start_year, start_month, months - 1)
    return date(start_year, start_month, 1), month_end(end_year, end_month)


def parse_timeframe(
    timeframe_str: str, fiscal_year_start: int = 1
) -> tuple[date | None, date | None]:
    """Parse a timeframe string to (start_date, end_date).

    Supported formats:
    - "2025q1", "2025Q3" - quarter of the (fiscal) year
    - "2025h1", "2025H2" - half of the (fiscal) year
    - "2025-01" - calendar month
    - "2025" - calendar year

    Args:
        timeframe_str: The timeframe string to parse
        fiscal_year_start: Month number (1-12) when the fiscal year starts

    Returns:
        Tuple of (start_date, end_date), or (None, None) if unparseable
    """
    text = timeframe_str.strip()

    quarter_match = re.match(r"^(\d{4})[qQ]([1-4])$", text)
    if quarter_match:
        year, quarter = int(quarter_match.group(1)), int(quarter_match.group(2))
        return _fiscal_span(year, quarter - 1, MONTHS_PER_QUARTER, fiscal_year_start)

    half_match = re.match(r"^(\d{4})[hH]([12])$", text)
    if half_match:
        year, half = int(half_match.group(1)), int(half_match.group(2))
        return _fiscal_span(year, half - 1, MONTHS_PER_HALF, fiscal_year_start)

    month_match = re.match(r"^(\d{4})-(\d{2})$", text)
    if month_match:
        year, month = int(month_match.group(1)), int(month_match.group(2))
        if month < 1 or month > MONTHS_PER_YEAR:
            return (None, None)
        return (date(year, month, 1), month_end(year, month))

    year_match = re.match(r"^(\d{4})$", text)
    if year_match:
        year = int(year_match.group(1))
        return (date(year, 1, 1), date(year, 12, 31))

    return (None, None)
