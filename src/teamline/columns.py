"""Day-indexed column axis for timeline grids.

The axis always covers whole weeks: it starts on a Monday and ends on a Friday
(work-week mode) or Sunday (full-week mode). In work-week mode Saturdays and
Sundays take no column at all.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from datetime import date, timedelta

from .colors import NEUTRAL_COLOR, contrast_text_color
from .logger import debug_enabled, get_logger
from .models import DayColumn, Term, TermSegment, WeekSegment
from .terms import NoTerms, TermResolver

SATURDAY = 5  # date.weekday() value
WORK_DAYS_PER_WEEK = 5
DAYS_PER_WEEK = 7


def start_of_week(day: date) -> date:
    """Return the Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())


def end_of_week(day: date, include_weekends: bool = False) -> date:
    """Return the Friday (or Sunday, with weekends) of the week containing ``day``."""
    length = DAYS_PER_WEEK if include_weekends else WORK_DAYS_PER_WEEK
    return start_of_week(day) + timedelta(days=length - 1)


def is_weekend(day: date) -> bool:
    return day.weekday() >= SATURDAY


@dataclass(slots=True, frozen=True)
class ColumnLookup:
    """Result of mapping a date onto the axis."""

    column: int
    day: date  # The indexed day actually used
    out_of_range: bool = False


class DateColumnIndex:
    """Ordered mapping from calendar day to column position.

    Columns are contiguous, strictly increasing with date, and start at
    ``first_column``.
    """

    def __init__(
        self, days: Sequence[DayColumn], *, include_weekends: bool, first_column: int
    ) -> None:
        if not days:
            raise ValueError("a column index needs at least one day")
        self.days = list(days)
        self.include_weekends = include_weekends
        self.first_column = first_column
        self._columns = {d.day: d.column for d in self.days}

    @classmethod
    def build(
        cls,
        min_date: date,
        max_date: date,
        include_weekends: bool = False,
        first_column: int = 2,
    ) -> DateColumnIndex:
        """Build an index covering ``min_date`` through ``max_date`` in whole weeks.

        Args:
            min_date: Earliest date to cover; extended back to its Monday
            max_date: Latest date to cover; extended forward to its Friday/Sunday.
                      A value before ``min_date`` is treated as ``min_date``.
            include_weekends: Give Saturdays and Sundays their own columns
            first_column: Column of the first day (the one after any label column)

        Returns:
            The built index
        """
        if first_column < 1:
            raise ValueError(f"first_column must be positive, got {first_column}")

        logger = get_logger()
        if max_date < min_date:
            logger.adjustment(
                f"Column range end {max_date} precedes start {min_date}; covering one week"
            )
            max_date = min_date

        first_day = start_of_week(min_date)
        last_day = end_of_week(max_date, include_weekends)

        days: list[DayColumn] = []
        column = first_column
        current = first_day
        while current <= last_day:
            weekend = is_weekend(current)
            if include_weekends or not weekend:
                days.append(DayColumn(day=current, column=column, is_weekend=weekend))
                column += 1
            current += timedelta(days=1)

        index = cls(days, include_weekends=include_weekends, first_column=first_column)
        logger.adjustment(
            f"Built {len(index)} columns from {first_day} to {last_day} "
            f"({'full' if include_weekends else 'work'} weeks)"
        )
        if debug_enabled():
            for day_column in index.days:
                logger.debug(f"  {day_column.day.isoformat()} -> column {day_column.column}")
        return index

    # ------------------------------------------------------------------
    # Basic lookups
    # ------------------------------------------------------------------

    @property
    def first_day(self) -> date:
        return self.days[0].day

    @property
    def last_day(self) -> date:
        return self.days[-1].day

    @property
    def last_column(self) -> int:
        return self.days[-1].column

    def __len__(self) -> int:
        return len(self.days)

    def __iter__(self) -> Iterator[DayColumn]:
        return iter(self.days)

    def __contains__(self, day: object) -> bool:
        return day in self._columns

    def column_for(self, day: date) -> int | None:
        """Column of ``day``, or None if the day is not indexed."""
        return self._columns.get(day)

    def day_for(self, column: int) -> date | None:
        """Day shown in ``column``, or None if the column is outside the axis."""
        offset = column - self.first_column
        if 0 <= offset < len(self.days):
            return self.days[offset].day
        return None

    def weekend_columns(self) -> list[int]:
        """Columns holding Saturdays and Sundays (empty in work-week mode)."""
        return [d.column for d in self.days if d.is_weekend]

    def locate(self, day: date, *, forward: bool = True) -> ColumnLookup:
        """Map any date onto the axis.

        Dates before or after the axis clamp to its first or last column and
        are flagged ``out_of_range``. A date inside the axis that has no column
        (a weekend in work-week mode) moves to the next indexed day when
        ``forward`` is set and to the previous one otherwise.

        The weekend right after the last work week is the exception: it has no
        following indexed day, so it clamps back to the last Friday whatever
        ``forward`` says, and is not flagged. A bar starting on that weekend is
        therefore drawn on the Friday before it.
        """
        if day < self.first_day:
            return ColumnLookup(self.first_column, self.first_day, out_of_range=True)
        if day > self.last_day:
            # The trailing weekend of the last work week is inside the axis
            in_last_week = day <= end_of_week(self.last_day, include_weekends=True)
            return ColumnLookup(self.last_column, self.last_day, out_of_range=not in_last_week)

        step = timedelta(days=1 if forward else -1)
        current = day
        while current not in self._columns:
            current += step
        return ColumnLookup(self._columns[current], current)

    # ------------------------------------------------------------------
    # Header segments
    # ------------------------------------------------------------------

    def week_segments(
        self, terms: TermResolver | None = None, neutral_color: str = NEUTRAL_COLOR
    ) -> list[WeekSegment]:
        """One segment per calendar week, labeled ``MM/DD-MM/DD``.

        Each week is colored by the term its Monday falls in.
        """
        resolver = terms if terms is not None else NoTerms()
        segments: list[WeekSegment] = []
        week_days: list[DayColumn] = []

        for day_column in self.days:
            if week_days and start_of_week(day_column.day) != start_of_week(week_days[0].day):
                segments.append(self._week_segment(week_days, resolver, neutral_color))
                week_days = []
            week_days.append(day_column)
        segments.append(self._week_segment(week_days, resolver, neutral_color))

        return segments

    def _week_segment(
        self, week_days: list[DayColumn], resolver: TermResolver, neutral_color: str
    ) -> WeekSegment:
        monday = start_of_week(week_days[0].day)
        last = end_of_week(monday, self.include_weekends)
        term = resolver.resolve(monday)
        color = term.color if term is not None else neutral_color
        return WeekSegment(
            start_column=week_days[0].column,
            end_column=week_days[-1].column,
            label=f"{monday:%m/%d}-{last:%m/%d}",
            color=color,
            text_color=contrast_text_color(color),
        )

    def term_segments(
        self, terms: TermResolver | None = None, neutral_color: str = NEUTRAL_COLOR
    ) -> list[TermSegment]:
        """Coalesce adjacent columns resolving to the same term into segments.

        Days with no term form their own segments with an empty label and the
        neutral color. The segments tile the whole axis in column order.
        """
        resolver = terms if terms is not None else NoTerms()
        segments: list[TermSegment] = []

        current_term = resolver.resolve(self.first_day)
        start_column = self.first_column
        previous_column = self.first_column

        for day_column in self.days[1:]:
            term = resolver.resolve(day_column.day)
            if _term_name(term) != _term_name(current_term):
                segments.append(
                    _term_segment(current_term, start_column, previous_column, neutral_color)
                )
                current_term = term
                start_column = day_column.column
            previous_column = day_column.column

        segments.append(_term_segment(current_term, start_column, previous_column, neutral_color))
        return segments

    # ------------------------------------------------------------------
    # Today
    # ------------------------------------------------------------------

    def today_column(self, today: date) -> int | None:
        """Column a renderer should treat as "today".

        Returns today's column when indexed; for an unindexed weekend day the
        next indexed day's column; the first column when ``today`` precedes
        the axis; None when it is past the end.
        """
        if today > self.last_day:
            return None
        return self.locate(today, forward=True).column

    def hidden_column_count(self, today: date) -> int:
        """Number of data columns before today's column."""
        column = self.today_column(today)
        if column is None:
            return len(self.days)
        return column - self.first_column


def _term_name(term: Term | None) -> str | None:
    return term.name if term is not None else None


def _term_segment(
    term: Term | None, start_column: int, end_column: int, neutral_color: str
) -> TermSegment:
    color = term.color if term is not None else neutral_color
    return TermSegment(
        start_column=start_column,
        end_column=end_column,
        label=term.name if term is not None else "",
        color=color,
        text_color=contrast_text_color(color),
        term=term,
    )
