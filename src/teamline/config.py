"""Configuration loading for timeline builds.

A single YAML file (``teamline.yaml``) describes the grid axis, the term
headers, group ordering and the input column names.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from .colors import DEFAULT_PALETTE, NEUTRAL_COLOR
from .exceptions import ConfigError
from .models import Term
from .terms import MonthRule, MonthRuleTerms, TermCatalog, TermResolver
from .timeframes import parse_timeframe

DEFAULT_CONFIG_NAME = "teamline.yaml"


class TermDefinition(BaseModel):
    """A dated term: either explicit start/end dates or a timeframe string."""

    name: str
    color: str
    start: date | None = None
    end: date | None = None
    timeframe: str | None = None  # e.g. "2025q1", "2025h2", "2025-03"

    @model_validator(mode="after")
    def validate_range(self) -> TermDefinition:
        """Require exactly one way of giving the dates."""
        has_dates = self.start is not None or self.end is not None
        if has_dates and self.timeframe is not None:
            raise ValueError(f"Term '{self.name}' gives both dates and a timeframe")
        if self.timeframe is None:
            if self.start is None or self.end is None:
                raise ValueError(f"Term '{self.name}' needs start and end dates or a timeframe")
            if self.end < self.start:
                raise ValueError(f"Term '{self.name}' ends before it starts")
        return self

    def to_term(self, fiscal_year_start: int = 1) -> Term:
        if self.timeframe is None:
            assert self.start is not None and self.end is not None
            return Term(name=self.name, start=self.start, end=self.end, color=self.color)

        start, end = parse_timeframe(self.timeframe, fiscal_year_start)
        if start is None or end is None:
            raise ValueError(f"Term '{self.name}' has unparseable timeframe '{self.timeframe}'")
        return Term(name=self.name, start=start, end=end, color=self.color)


class TermRuleDefinition(BaseModel):
    """A yearly term given by month numbers; Nov-Jan style rollover is allowed."""

    name: str
    start_month: int = Field(ge=1, le=12)
    end_month: int = Field(ge=1, le=12)
    color: str

    def to_rule(self) -> MonthRule:
        return MonthRule(
            name=self.name,
            start_month=self.start_month,
            end_month=self.end_month,
            color=self.color,
        )


DEFAULT_TERM_RULES: tuple[TermRuleDefinition, ...] = (
    TermRuleDefinition(name="T1", start_month=2, end_month=4, color="#2f75b5"),
    TermRuleDefinition(name="T2", start_month=5, end_month=7, color="#4a4e69"),
    TermRuleDefinition(name="T3", start_month=8, end_month=10, color="#3a6b35"),
    TermRuleDefinition(name="T4", start_month=11, end_month=1, color="#8b0000"),
)


class GroupsConfig(BaseModel):
    """Group ordering and per-group presentation."""

    leading: list[str] = Field(default_factory=list)  # Shown first, in this order
    order: Literal["alpha", "input"] = "alpha"  # Order of the remaining groups
    labels: dict[str, str] = Field(default_factory=dict)
    colors: dict[str, str] = Field(default_factory=dict)  # Fixed bar colors
    unpacked: list[str] = Field(default_factory=list)  # One interval per row
    label_by_first_interval: list[str] = Field(default_factory=list)


class ColumnMapping(BaseModel):
    """Input column names for each interval field."""

    id: str = "Project"
    group: str = "Person"
    label: str | None = "Summary"
    start: str = "Start Date"
    end: str = "End Date"
    color_key: str | None = "Epic Name"
    status: str | None = "Status"

    def required(self) -> list[str]:
        return [self.id, self.group, self.start, self.end]


class DetailColumns(BaseModel):
    """Column names of the optional details table keyed by interval id.

    Details fill in whatever the interval rows leave blank: labels, color
    keys, status and missing dates.
    """

    id: str = "Key"
    label: str | None = "Summary"
    start: str | None = "Start Date"
    end: str | None = "Due Date"
    color_key: str | None = "Epic Name"
    status: str | None = "Status"


class TimelineConfig(BaseModel):
    """Everything a timeline build can be configured with."""

    include_weekends: bool = False
    first_data_column: int = Field(default=2, ge=1)
    palette: list[str] = Field(default_factory=lambda: list(DEFAULT_PALETTE), min_length=1)
    neutral_color: str = NEUTRAL_COLOR
    fiscal_year_start: int = Field(default=1, ge=1, le=12)
    terms: list[TermDefinition] | None = None
    term_rules: list[TermRuleDefinition] | None = None
    groups: GroupsConfig = GroupsConfig()
    columns: ColumnMapping = ColumnMapping()
    detail_columns: DetailColumns = DetailColumns()
    allow_single_date: bool = False
    fill_missing_from_range: bool = False

    @model_validator(mode="after")
    def validate_term_source(self) -> TimelineConfig:
        """Terms come from a catalog or from month rules, not both."""
        if self.terms is not None and self.term_rules is not None:
            raise ValueError("Configure either 'terms' or 'term_rules', not both")
        if self.terms is not None:
            for term in self.terms:
                term.to_term(self.fiscal_year_start)  # Surface bad timeframes at load time
        return self

    def term_resolver(self) -> TermResolver:
        """Build the resolver for header terms.

        Falls back to the default T1-T4 month rules when neither a catalog
        nor rules are configured.
        """
        if self.terms is not None:
            return TermCatalog([t.to_term(self.fiscal_year_start) for t in self.terms])
        rules = self.term_rules if self.term_rules is not None else DEFAULT_TERM_RULES
        return MonthRuleTerms([r.to_rule() for r in rules])


def load_config(config_path: Path | str) -> TimelineConfig:
    """Load timeline configuration from a YAML file.

    An empty file yields the default configuration.

    Raises:
        ConfigError: If the file is missing, not YAML, or invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with config_path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except UnicodeDecodeError as e:
        raise ConfigError(f"Config file {config_path} is not UTF-8 text: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file {config_path} is not valid YAML: {e}") from e

    if data is None:
        return TimelineConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    try:
        return TimelineConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {config_path}:\n{e}") from e


def discover_config(explicit: Path | None = None, near: Path | None = None) -> TimelineConfig:
    """Find and load configuration.

    Search order:
    1. Explicit path (must exist)
    2. ``teamline.yaml`` next to the input file
    3. ``teamline.yaml`` in the current directory
    4. Defaults
    """
    if explicit is not None:
        return load_config(explicit)

    candidates: list[Path] = []
    if near is not None:
        candidates.append(Path(near).parent / DEFAULT_CONFIG_NAME)
    candidates.append(Path(DEFAULT_CONFIG_NAME))

    for candidate in candidates:
        if candidate.exists():
            return load_config(candidate)
    return TimelineConfig()
