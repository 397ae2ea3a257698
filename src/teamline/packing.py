"""Row packing for overlapping bars.

Items are taken in start order (ties keep input order) and each goes into
the first existing row where it overlaps nothing; otherwise a new row is
opened. Processing in start order makes this first-fit pass optimal for
interval graphs: the row count equals the largest number of items active at
any single point.

The same pass packs calendar intervals (``pack_intervals``) and bars already
resolved to columns (``pack_placements``). The grid packs placements, since
weekend snapping in work-week mode can put two date-disjoint intervals on the
same column.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any, Protocol, TypeVar

from .logger import get_logger, placements_enabled
from .models import Interval, Placement


class _Packable(Protocol):
    def overlaps(self, other: Any) -> bool: ...


P = TypeVar("P", bound=_Packable)


def _first_fit(
    items: Iterable[P], start: Callable[[P], Any], name: Callable[[P], str]
) -> list[list[P]]:
    logger = get_logger()
    ordered = sorted(items, key=start)  # sorted() is stable

    rows: list[list[P]] = []
    for item in ordered:
        for row_number, row in enumerate(rows):
            if not any(item.overlaps(member) for member in row):
                row.append(item)
                if placements_enabled():
                    logger.placement(f"  {name(item)}: row {row_number}")
                break
        else:
            rows.append([item])
            if placements_enabled():
                logger.placement(f"  {name(item)}: new row {len(rows) - 1}")

    return rows


def pack_intervals(intervals: Iterable[Interval]) -> list[list[Interval]]:
    """Assign intervals to the minimum number of rows with no shared day.

    Args:
        intervals: Intervals of one group, in input order

    Returns:
        Rows in creation order, each listing its intervals in start order
    """
    return _first_fit(intervals, lambda i: i.start, lambda i: i.id)


def pack_placements(placements: Iterable[Placement]) -> list[list[Placement]]:
    """Assign placed bars to the minimum number of rows with no shared column."""
    return _first_fit(placements, lambda p: p.start_column, lambda p: p.interval.id)


def max_concurrency(intervals: Sequence[Interval]) -> int:
    """Largest number of intervals active on any one day.

    This is the lower bound on rows that ``pack_intervals`` always meets.
    """
    # Starts sort before ends on the same day because ranges are closed
    events: list[tuple[int, int]] = []
    for interval in intervals:
        events.append((interval.start.toordinal(), 0))
        events.append((interval.end.toordinal(), 1))
    events.sort()

    active = 0
    peak = 0
    for _, kind in events:
        if kind == 0:
            active += 1
            peak = max(peak, active)
        else:
            active -= 1
    return peak
