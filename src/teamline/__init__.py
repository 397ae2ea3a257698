"""Teamline - compact timeline grids for overlapping assignments."""

from .colors import ColorAssigner
from .columns import DateColumnIndex
from .grid import assemble
from .models import (
    GridModel,
    GridRow,
    Interval,
    IntervalGroup,
    LayoutAnomaly,
    Placement,
    SkippedItem,
    Term,
    TermSegment,
    WeekSegment,
)
from .packing import pack_intervals, pack_placements
from .terms import FunctionTermResolver, MonthRule, MonthRuleTerms, TermCatalog, TermResolver
from .timeline import TimelineBuilder, TimelineResult

__version__ = "0.1.0"

__all__ = [
    "ColorAssigner",
    "DateColumnIndex",
    "FunctionTermResolver",
    "GridModel",
    "GridRow",
    "Interval",
    "IntervalGroup",
    "LayoutAnomaly",
    "MonthRule",
    "MonthRuleTerms",
    "Placement",
    "SkippedItem",
    "Term",
    "TermCatalog",
    "TermResolver",
    "TermSegment",
    "TimelineBuilder",
    "TimelineResult",
    "WeekSegment",
    "assemble",
    "pack_intervals",
    "pack_placements",
]
