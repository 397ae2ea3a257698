"""Data models for Teamline timelines."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .columns import DateColumnIndex


@dataclass(slots=True, frozen=True)
class Interval:
    """One bar to draw: a project assignment, customer engagement or milestone.

    Both ends are inclusive whole days and ``start <= end`` always holds once
    the interval has gone through normalization.
    """

    id: str
    group_key: str
    label: str
    start: date
    end: date
    color_key: str | None = None  # Intervals sharing a color key share a color
    status: str | None = None  # Passed through to the renderer untouched

    def overlaps(self, other: Interval) -> bool:
        """Return True if the two closed ranges share at least one day."""
        return self.start <= other.end and self.end >= other.start

    @property
    def color_identifier(self) -> str:
        """Identifier used for color assignment."""
        return self.color_key or self.id


@dataclass(slots=True, frozen=True)
class Term:
    """A named calendar epoch (e.g. a fiscal quarter) used for header coloring."""

    name: str
    start: date
    end: date
    color: str

    def contains(self, day: date) -> bool:
        """Return True if ``day`` falls inside the term (inclusive)."""
        return self.start <= day <= self.end


@dataclass(slots=True, frozen=True)
class IntervalGroup:
    """All intervals sharing one owner, packed independently of other groups."""

    key: str
    label: str
    intervals: Sequence[Interval] = ()
    color: str | None = None  # Fixed bar color overriding the color assigner
    pack: bool = True  # False gives every interval its own row
    label_by_first_interval: bool = False  # Label each row by its first interval


@dataclass(slots=True, frozen=True)
class DayColumn:
    """A calendar day and the column it occupies."""

    day: date
    column: int
    is_weekend: bool = False


@dataclass(slots=True, frozen=True)
class WeekSegment:
    """A run of columns belonging to one calendar week."""

    start_column: int
    end_column: int
    label: str
    color: str
    text_color: str


@dataclass(slots=True, frozen=True)
class TermSegment:
    """A maximal run of columns whose days resolve to the same term (or none)."""

    start_column: int
    end_column: int
    label: str
    color: str
    text_color: str
    term: Term | None = None


@dataclass(slots=True, frozen=True)
class Placement:
    """An interval positioned on the column axis."""

    interval: Interval
    start_column: int
    end_column: int
    color: str

    def overlaps(self, other: Placement) -> bool:
        """Return True if the two bars share at least one column."""
        return self.start_column <= other.end_column and self.end_column >= other.start_column

    @property
    def width(self) -> int:
        """Number of columns the bar spans."""
        return self.end_column - self.start_column + 1


@dataclass(slots=True, frozen=True)
class GridRow:
    """One output row: a packed row of intervals tagged with its group."""

    group_key: str
    label: str
    placements: list[Placement] = field(default_factory=list[Placement])

    @property
    def intervals(self) -> list[Interval]:
        """Intervals in this row, in placement order."""
        return [p.interval for p in self.placements]


@dataclass(slots=True, frozen=True)
class SkippedItem:
    """An input record dropped during normalization."""

    item_id: str
    reason: str


@dataclass(slots=True, frozen=True)
class LayoutAnomaly:
    """A date that fell outside the column index and was clamped."""

    interval_id: str
    field: str  # "start" or "end"
    requested: date
    clamped_to: date


@dataclass(slots=True, frozen=True)
class GridModel:
    """The finished layout handed to a renderer."""

    column_index: DateColumnIndex
    week_segments: list[WeekSegment]
    term_segments: list[TermSegment]
    rows: list[GridRow]
    anomalies: list[LayoutAnomaly] = field(default_factory=list[LayoutAnomaly])

    def group_row_ranges(self) -> dict[str, tuple[int, int]]:
        """Map each group key to the (first, last) index of its rows."""
        ranges: dict[str, tuple[int, int]] = {}
        for index, row in enumerate(self.rows):
            first, _ = ranges.get(row.group_key, (index, index))
            ranges[row.group_key] = (first, index)
        return ranges

    def to_dict(self) -> dict[str, Any]:
        """Plain-data representation for YAML/JSON output."""
        index = self.column_index
        return {
            "columns": {
                "first": index.first_column,
                "last": index.last_column,
                "start": index.first_day.isoformat(),
                "end": index.last_day.isoformat(),
                "include_weekends": index.include_weekends,
                "weekend_columns": index.weekend_columns(),
            },
            "weeks": [
                {
                    "start_column": w.start_column,
                    "end_column": w.end_column,
                    "label": w.label,
                    "color": w.color,
                    "text_color": w.text_color,
                }
                for w in self.week_segments
            ],
            "terms": [
                {
                    "start_column": t.start_column,
                    "end_column": t.end_column,
                    "label": t.label,
                    "color": t.color,
                    "text_color": t.text_color,
                }
                for t in self.term_segments
            ],
            "rows": [
                {
                    "group": row.group_key,
                    "label": row.label,
                    "bars": [
                        {
                            "id": p.interval.id,
                            "label": p.interval.label,
                            "start": p.interval.start.isoformat(),
                            "end": p.interval.end.isoformat(),
                            "start_column": p.start_column,
                            "end_column": p.end_column,
                            "color": p.color,
                            "status": p.interval.status,
                        }
                        for p in row.placements
                    ],
                }
                for row in self.rows
            ],
            "anomalies": [
                {
                    "id": a.interval_id,
                    "field": a.field,
                    "requested": a.requested.isoformat(),
                    "clamped_to": a.clamped_to.isoformat(),
                }
                for a in self.anomalies
            ],
        }
