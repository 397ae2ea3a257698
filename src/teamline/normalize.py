"""Normalization of raw interval records.

Raw records are plain mappings with the keys ``id``, ``group``, ``label``,
``start``, ``end`` and optionally ``color_key`` and ``status``. Dates may be
``date``/``datetime`` objects or strings. Records that cannot be turned into an
interval are skipped and reported, never raised.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any

from .logger import get_logger
from .models import Interval, SkippedItem

# Records without an owner land in this group
UNASSIGNED_GROUP = "unassigned"

DATE_FORMATS = ("%m/%d/%Y", "%Y/%m/%d", "%m/%d/%y", "%d %b %Y", "%b %d, %Y")


@dataclass(slots=True, frozen=True)
class NormalizeResult:
    """Intervals that survived normalization plus the records that did not."""

    intervals: list[Interval] = field(default_factory=list[Interval])
    skipped: list[SkippedItem] = field(default_factory=list[SkippedItem])


def coerce_date(value: Any) -> date | None:
    """Convert a cell value to a date, dropping any time component.

    Returns None for empty or unparseable values.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def normalize_records(
    records: Iterable[Mapping[str, Any]],
    *,
    fallback_dates: Mapping[str, tuple[date | None, date | None]] | None = None,
    allow_single_date: bool = False,
    fill_missing_from_range: bool = False,
) -> NormalizeResult:
    """Turn raw records into validated intervals.

    Missing dates are filled in this order before a record is given up on:

    1. ``fallback_dates[id]`` (e.g. a project's own start/due date)
    2. with ``allow_single_date``, the other end of the same record
    3. with ``fill_missing_from_range``, the earliest start or latest end found
       on any record

    An end before its start is clamped to the start.

    Args:
        records: Raw records in input order
        fallback_dates: Per-id (start, end) replacements for missing dates
        allow_single_date: Use a lone start or end date for both ends
        fill_missing_from_range: Fill gaps from the overall date range

    Returns:
        NormalizeResult with intervals in input order and skipped records
    """
    logger = get_logger()
    fallbacks = fallback_dates or {}
    skipped: list[SkippedItem] = []
    pending: list[tuple[dict[str, Any], date | None, date | None]] = []

    for position, record in enumerate(records):
        item_id = _text(record.get("id")) or _text(record.get("label"))
        if not item_id:
            item_id = f"#{position + 1}"
            skipped.append(SkippedItem(item_id, "missing id"))
            logger.warning(f"Warning: record {item_id} has no id or label. Skipping.")
            continue

        start = coerce_date(record.get("start"))
        end = coerce_date(record.get("end"))

        fallback_start, fallback_end = fallbacks.get(item_id, (None, None))
        if start is None and fallback_start is not None:
            start = fallback_start
            logger.adjustment(f"'{item_id}' has no start date; using fallback {start}")
        if end is None and fallback_end is not None:
            end = fallback_end
            logger.adjustment(f"'{item_id}' has no end date; using fallback {end}")

        if allow_single_date:
            if start is None and end is not None:
                start = end
            elif end is None and start is not None:
                end = start

        pending.append((dict(record, id=item_id), start, end))

    range_start: date | None = None
    range_end: date | None = None
    if fill_missing_from_range:
        starts = [start for _, start, _ in pending if start is not None]
        ends = [end for _, _, end in pending if end is not None]
        range_start = min(starts) if starts else None
        range_end = max(ends) if ends else None

    intervals: list[Interval] = []
    for record, start, end in pending:
        item_id = record["id"]
        if start is None and range_start is not None:
            start = range_start
            logger.adjustment(f"'{item_id}' has no start date; using range start {start}")
        if end is None and range_end is not None:
            end = range_end
            logger.adjustment(f"'{item_id}' has no end date; using range end {end}")

        if start is None or end is None:
            missing = "start" if start is None else "end"
            skipped.append(SkippedItem(item_id, f"invalid or missing {missing} date"))
            logger.warning(f"Warning: '{item_id}' has no valid {missing} date. Skipping.")
            continue

        if end < start:
            logger.adjustment(f"'{item_id}' ends ({end}) before it starts ({start}); using {start}")
            end = start

        intervals.append(
            Interval(
                id=item_id,
                group_key=_text(record.get("group")) or UNASSIGNED_GROUP,
                label=_text(record.get("label")) or item_id,
                start=start,
                end=end,
                color_key=_text(record.get("color_key")) or None,
                status=_text(record.get("status")) or None,
            )
        )

    return NormalizeResult(intervals=intervals, skipped=skipped)


def normalize_interval(interval: Interval) -> Interval:
    """Re-assert ``start <= end`` on an already-built interval."""
    if interval.end >= interval.start:
        return interval
    get_logger().adjustment(
        f"'{interval.id}' ends ({interval.end}) before it starts ({interval.start}); "
        f"using {interval.start}"
    )
    return replace(interval, end=interval.start)
