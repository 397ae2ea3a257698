"""Tests for row packing."""

import random
from collections.abc import Callable
from datetime import date, timedelta

from teamline.models import Interval, Placement
from teamline.packing import max_concurrency, pack_intervals, pack_placements

SpanFactory = Callable[..., Interval]


def ids(rows: list[list[Interval]]) -> list[list[str]]:
    return [[interval.id for interval in row] for row in rows]


class TestOverlaps:
    """Test closed-range overlap."""

    def test_shared_single_day_overlaps(self, make_span: SpanFactory) -> None:
        assert make_span("a", 1, 3).overlaps(make_span("b", 3, 5))

    def test_adjacent_days_do_not_overlap(self, make_span: SpanFactory) -> None:
        assert not make_span("a", 1, 3).overlaps(make_span("b", 4, 5))

    def test_containment_overlaps(self, make_span: SpanFactory) -> None:
        assert make_span("a", 1, 10).overlaps(make_span("b", 4, 5))


class TestPackIntervals:
    """Test first-fit packing in start order."""

    def test_reuses_first_free_row(self, make_span: SpanFactory) -> None:
        rows = pack_intervals(
            [make_span("a", 1, 5), make_span("b", 3, 7), make_span("c", 6, 10)]
        )
        assert ids(rows) == [["a", "c"], ["b"]]

    def test_single_day_touch_needs_new_row(self, make_span: SpanFactory) -> None:
        rows = pack_intervals([make_span("a", 1, 3), make_span("b", 3, 5)])
        assert ids(rows) == [["a"], ["b"]]

    def test_adjacent_intervals_share_row(self, make_span: SpanFactory) -> None:
        rows = pack_intervals([make_span("a", 1, 3), make_span("b", 4, 5)])
        assert ids(rows) == [["a", "b"]]

    def test_sorted_by_start_regardless_of_input(self, make_span: SpanFactory) -> None:
        rows = pack_intervals(
            [make_span("c", 6, 10), make_span("b", 3, 7), make_span("a", 1, 5)]
        )
        assert ids(rows) == [["a", "c"], ["b"]]

    def test_equal_starts_keep_input_order(self, make_span: SpanFactory) -> None:
        rows = pack_intervals(
            [make_span("first", 1, 2), make_span("second", 1, 4), make_span("third", 1, 1)]
        )
        assert ids(rows) == [["first"], ["second"], ["third"]]

    def test_empty_input(self) -> None:
        assert pack_intervals([]) == []

    def test_single_interval(self, make_span: SpanFactory) -> None:
        assert ids(pack_intervals([make_span("a", 0, 0)])) == [["a"]]

    def test_later_row_filled_when_earlier_rows_busy(self, make_span: SpanFactory) -> None:
        rows = pack_intervals(
            [
                make_span("a", 0, 10),
                make_span("b", 0, 2),
                make_span("c", 3, 4),
            ]
        )
        assert ids(rows) == [["a"], ["b", "c"]]

    def test_rows_never_overlap_and_match_concurrency(self) -> None:
        """Packing is optimal: row count equals the peak number of active intervals."""
        rng = random.Random(1234)
        base = date(2025, 1, 1)
        for trial in range(50):
            intervals = []
            for n in range(rng.randint(1, 25)):
                start = rng.randint(0, 60)
                length = rng.randint(0, 15)
                intervals.append(
                    Interval(
                        id=f"t{trial}-{n}",
                        group_key="g",
                        label=f"t{trial}-{n}",
                        start=base + timedelta(days=start),
                        end=base + timedelta(days=start + length),
                    )
                )

            rows = pack_intervals(intervals)

            assert len(rows) == max_concurrency(intervals)
            assert sorted(i.id for row in rows for i in row) == sorted(i.id for i in intervals)
            for row in rows:
                for left, right in zip(row, row[1:]):
                    assert left.end < right.start


class TestPackPlacements:
    """Test packing bars by their drawn columns."""

    def place(self, make_span: SpanFactory, name: str, start: int, end: int) -> Placement:
        return Placement(
            interval=make_span(name, 0, 0), start_column=start, end_column=end, color="#ffffff"
        )

    def test_shared_column_needs_new_row(self, make_span: SpanFactory) -> None:
        """Bars with disjoint dates that land on one column still need separate rows."""
        rows = pack_placements(
            [self.place(make_span, "weekend", 7, 7), self.place(make_span, "monday", 7, 8)]
        )
        assert [[p.interval.id for p in row] for row in rows] == [["weekend"], ["monday"]]

    def test_adjacent_columns_share_row(self, make_span: SpanFactory) -> None:
        rows = pack_placements(
            [self.place(make_span, "b", 5, 6), self.place(make_span, "a", 2, 4)]
        )
        assert [[p.interval.id for p in row] for row in rows] == [["a", "b"]]


class TestMaxConcurrency:
    """Test the concurrency sweep."""

    def test_empty(self) -> None:
        assert max_concurrency([]) == 0

    def test_touching_counts(self, make_span: SpanFactory) -> None:
        assert max_concurrency([make_span("a", 1, 3), make_span("b", 3, 5)]) == 2

    def test_disjoint(self, make_span: SpanFactory) -> None:
        assert max_concurrency([make_span("a", 1, 3), make_span("b", 4, 5)]) == 1
