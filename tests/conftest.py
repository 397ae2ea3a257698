"""Pytest configuration and fixtures for teamline tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, timedelta

import pytest

from teamline.logger import reset_logger
from teamline.models import Interval

BASE_DATE = date(2025, 1, 6)  # A Monday


@pytest.fixture(autouse=True)
def clean_logger() -> None:
    """Reset the teamline logger before each test for isolation."""
    reset_logger()


@pytest.fixture
def make_span() -> Callable[..., Interval]:
    """Factory for intervals given as day offsets from Monday 2025-01-06.

    Handy for packing tests that reason in day indices rather than dates.
    """

    def _make(
        interval_id: str,
        start_day: int,
        end_day: int,
        *,
        group: str = "alice",
        color_key: str | None = None,
    ) -> Interval:
        return Interval(
            id=interval_id,
            group_key=group,
            label=interval_id,
            start=BASE_DATE + timedelta(days=start_day),
            end=BASE_DATE + timedelta(days=end_day),
            color_key=color_key,
        )

    return _make


@pytest.fixture
def make_interval() -> Callable[..., Interval]:
    """Factory for intervals given as ISO date strings."""

    def _make(  # noqa: PLR0913 - mirrors the Interval fields
        interval_id: str,
        start: str,
        end: str,
        *,
        group: str = "alice",
        label: str | None = None,
        color_key: str | None = None,
        status: str | None = None,
    ) -> Interval:
        return Interval(
            id=interval_id,
            group_key=group,
            label=label or interval_id,
            start=date.fromisoformat(start),
            end=date.fromisoformat(end),
            color_key=color_key,
            status=status,
        )

    return _make
