"""Timeline building: from interval lists to a finished grid model."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any

from .colors import ColorAssigner
from .columns import DateColumnIndex
from .config import TimelineConfig
from .grid import assemble
from .grouping import build_groups
from .logger import get_logger
from .models import GridModel, IntervalGroup, SkippedItem
from .normalize import normalize_interval, normalize_records
from .terms import TermResolver


@dataclass(slots=True, frozen=True)
class TimelineResult:
    """A built grid plus what was dropped on the way."""

    grid: GridModel
    skipped: list[SkippedItem] = field(default_factory=list[SkippedItem])
    colors: dict[str, str] = field(default_factory=dict[str, str])


class TimelineBuilder:
    """Build timeline grids from grouped intervals.

    Each call to ``build`` is independent: it makes its own column index and
    its own color assigner, so two timelines built by the same builder never
    share color history.
    """

    def __init__(
        self,
        config: TimelineConfig | None = None,
        *,
        terms: TermResolver | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            config: Timeline configuration (defaults if omitted)
            terms: Term resolver overriding the configured terms
        """
        self.config = config or TimelineConfig()
        self.terms = terms if terms is not None else self.config.term_resolver()

    def date_range(self, groups: Sequence[IntervalGroup]) -> tuple[date, date] | None:
        """Earliest start and latest end over all groups, or None if empty."""
        intervals = [interval for group in groups for interval in group.intervals]
        if not intervals:
            return None
        return min(i.start for i in intervals), max(i.end for i in intervals)

    def build(
        self,
        groups: Sequence[IntervalGroup],
        *,
        today: date,
        colors: ColorAssigner | None = None,
    ) -> GridModel:
        """Lay out groups (already in display order) on a fresh grid.

        Args:
            groups: Groups in display order
            today: Reference day; anchors the axis when there are no intervals
            colors: Color assigner to use; a fresh one from the palette if omitted

        Returns:
            The assembled grid model
        """
        logger = get_logger()
        groups = [
            replace(group, intervals=[normalize_interval(i) for i in group.intervals])
            for group in groups
        ]

        span = self.date_range(groups)
        if span is None:
            logger.adjustment(f"No intervals to lay out; showing the week of {today}")
            span = (today, today)

        column_index = DateColumnIndex.build(
            span[0],
            span[1],
            include_weekends=self.config.include_weekends,
            first_column=self.config.first_data_column,
        )
        return assemble(
            groups,
            column_index,
            terms=self.terms,
            colors=colors if colors is not None else ColorAssigner(self.config.palette),
            neutral_color=self.config.neutral_color,
        )

    def build_from_records(
        self,
        records: Iterable[Mapping[str, Any]],
        *,
        today: date,
        fallback_dates: Mapping[str, tuple[date | None, date | None]] | None = None,
    ) -> TimelineResult:
        """Normalize raw records, group them per the config and build the grid."""
        normalized = normalize_records(
            records,
            fallback_dates=fallback_dates,
            allow_single_date=self.config.allow_single_date,
            fill_missing_from_range=self.config.fill_missing_from_range,
        )
        groups_config = self.config.groups
        groups = build_groups(
            normalized.intervals,
            leading=groups_config.leading,
            order=groups_config.order,
            labels=groups_config.labels,
            colors=groups_config.colors,
            unpacked=groups_config.unpacked,
            label_by_first_interval=groups_config.label_by_first_interval,
        )
        colors = ColorAssigner(self.config.palette)
        grid = self.build(groups, today=today, colors=colors)
        return TimelineResult(grid=grid, skipped=normalized.skipped, colors=colors.assignments())
