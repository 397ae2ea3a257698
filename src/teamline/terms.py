"""Term resolution: which named epoch (if any) a calendar day belongs to.

Two representations are supported behind the same ``TermResolver`` interface:

- ``TermCatalog``: an explicit list of dated terms, searched in order.
- ``MonthRuleTerms``: month-number rules (e.g. Nov-Jan) that repeat every
  year, including rules that roll over into the next year.

Arbitrary callables can be adapted with ``FunctionTermResolver``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from .models import Term
from .timeframes import MONTHS_PER_YEAR, add_months, month_end


class TermResolver(Protocol):
    """Anything that maps a day to at most one term."""

    def resolve(self, day: date) -> Term | None:
        """Return the term containing ``day``, or None."""
        ...


class TermCatalog:
    """Fixed catalog of dated terms.

    If ranges overlap the first matching term in catalog order wins.
    """

    def __init__(self, terms: Sequence[Term]) -> None:
        self.terms = list(terms)

    def resolve(self, day: date) -> Term | None:
        for term in self.terms:
            if term.contains(day):
                return term
        return None


@dataclass(slots=True, frozen=True)
class MonthRule:
    """A yearly term spanning ``start_month`` through ``end_month`` inclusive.

    ``end_month`` may be smaller than ``start_month``, in which case the term
    rolls over into the following year (Nov-Jan).
    """

    name: str
    start_month: int
    end_month: int
    color: str

    def __post_init__(self) -> None:
        for month in (self.start_month, self.end_month):
            if month < 1 or month > MONTHS_PER_YEAR:
                raise ValueError(f"Invalid month {month} in term rule '{self.name}'")

    @property
    def length_months(self) -> int:
        return (self.end_month - self.start_month) % MONTHS_PER_YEAR + 1

    def term_for(self, day: date) -> Term | None:
        """Return the concrete term occurrence containing ``day``, if any."""
        offset = (day.month - self.start_month) % MONTHS_PER_YEAR
        if offset >= self.length_months:
            return None

        # The occurrence is named after the year it started in
        start_year = day.year if day.month >= self.start_month else day.year - 1
        end_year, end_month = add_months(start_year, self.start_month, self.length_months - 1)
        return Term(
            name=f"{self.name} {start_year}",
            start=date(start_year, self.start_month, 1),
            end=month_end(end_year, end_month),
            color=self.color,
        )


class MonthRuleTerms:
    """Terms derived from month rules; first matching rule wins."""

    def __init__(self, rules: Sequence[MonthRule]) -> None:
        self.rules = list(rules)

    def resolve(self, day: date) -> Term | None:
        for rule in self.rules:
            term = rule.term_for(day)
            if term is not None:
                return term
        return None


class FunctionTermResolver:
    """Adapt a plain ``date -> Term | None`` function to ``TermResolver``."""

    def __init__(self, func: Callable[[date], Term | None]) -> None:
        self._func = func

    def resolve(self, day: date) -> Term | None:
        return self._func(day)


class NoTerms:
    """Resolver for grids without term headers."""

    def resolve(self, day: date) -> Term | None:
        return None
