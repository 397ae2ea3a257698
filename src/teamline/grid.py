"""Grid assembly: packed rows from every group merged onto one column axis."""

from __future__ import annotations

from collections.abc import Sequence

from .colors import NEUTRAL_COLOR, ColorAssigner
from .columns import DateColumnIndex
from .logger import get_logger
from .models import GridModel, GridRow, Interval, IntervalGroup, LayoutAnomaly, Placement
from .packing import pack_placements
from .terms import TermResolver


def place_interval(
    interval: Interval,
    column_index: DateColumnIndex,
    color: str,
    anomalies: list[LayoutAnomaly],
) -> Placement:
    """Resolve an interval's days to a column span.

    Dates outside the index are clamped to its boundary columns and recorded
    in ``anomalies``. Weekend ends in work-week mode snap inward; a span that
    collapses entirely collapses onto its start column.
    """
    logger = get_logger()

    start = column_index.locate(interval.start, forward=True)
    end = column_index.locate(interval.end, forward=False)

    for field_name, requested, lookup in (
        ("start", interval.start, start),
        ("end", interval.end, end),
    ):
        if lookup.out_of_range:
            anomalies.append(LayoutAnomaly(interval.id, field_name, requested, lookup.day))
            logger.warning(
                f"Warning: {field_name} date {requested} of '{interval.id}' is outside "
                f"the timeline; clamped to {lookup.day}"
            )

    end_column = max(end.column, start.column)
    if end_column != end.column:
        logger.adjustment(f"'{interval.id}' has no indexed days; drawn on column {start.column}")

    return Placement(
        interval=interval,
        start_column=start.column,
        end_column=end_column,
        color=color,
    )


def assemble(
    groups: Sequence[IntervalGroup],
    column_index: DateColumnIndex,
    *,
    terms: TermResolver | None = None,
    colors: ColorAssigner | None = None,
    neutral_color: str = NEUTRAL_COLOR,
) -> GridModel:
    """Pack each group and concatenate the rows in the given group order.

    Args:
        groups: Groups in display order (the caller decides the order)
        column_index: Axis built over the global date range
        terms: Term resolver for the header segments
        colors: Color assigner for this build; a fresh one if omitted
        neutral_color: Header color for days outside any term

    Returns:
        The assembled grid model
    """
    logger = get_logger()
    assigner = colors if colors is not None else ColorAssigner()
    anomalies: list[LayoutAnomaly] = []
    rows: list[GridRow] = []

    for group in groups:
        # Bars are placed before packing so rows are checked on their drawn columns
        placed = [
            place_interval(
                interval,
                column_index,
                group.color or assigner.color_for(interval.color_identifier),
                anomalies,
            )
            for interval in sorted(group.intervals, key=lambda i: i.start)
        ]
        packed = pack_placements(placed) if group.pack else [[p] for p in placed]
        logger.adjustment(f"{group.label}: {len(placed)} interval(s) in {len(packed)} row(s)")

        for placements in packed:
            first = placements[0].interval
            label = first.label if group.label_by_first_interval else group.label
            rows.append(GridRow(group_key=group.key, label=label, placements=placements))

    return GridModel(
        column_index=column_index,
        week_segments=column_index.week_segments(terms, neutral_color),
        term_segments=column_index.term_segments(terms, neutral_color),
        rows=rows,
        anomalies=anomalies,
    )
