"""Tests for splitting goal bars into week rows."""

import random
from datetime import date, timedelta

import pytest

from nanal.core.dates import Month
from nanal.core.items import RangedItem
from nanal.core.rows import RowSegment, cell_position, split_into_rows


@pytest.fixture
def may():
    # May 1, 2024 is a Wednesday: offset 3, five rows
    return Month(2024, 5)


def goal(start: str, end: str) -> RangedItem:
    return RangedItem(
        id="g",
        start_date=date.fromisoformat(start),
        end_date=date.fromisoformat(end),
    )


class TestCellPosition:
    def test_first_day(self):
        assert cell_position(1, 3) == (0, 3)

    def test_wraps_to_next_row(self):
        assert cell_position(5, 3) == (1, 0)

    def test_last_day_of_may(self):
        assert cell_position(31, 3) == (4, 5)


class TestSplitIntoRows:
    def test_single_row(self, may):
        segments = split_into_rows(goal("2024-05-05", "2024-05-11"), 0, may)
        assert segments == [
            RowSegment(
                row_index=1,
                start_column=0,
                end_column=6,
                lane=0,
                is_interval_start=True,
                is_interval_end=True,
            )
        ]

    def test_single_day(self, may):
        segments = split_into_rows(goal("2024-05-15", "2024-05-15"), 2, may)
        assert len(segments) == 1
        assert segments[0].row_index == 2
        assert segments[0].start_column == segments[0].end_column == 3
        assert segments[0].span == 1
        assert segments[0].lane == 2

    def test_spans_several_rows(self, may):
        segments = split_into_rows(goal("2024-05-02", "2024-05-20"), 1, may)
        assert [(s.row_index, s.start_column, s.end_column) for s in segments] == [
            (0, 4, 6),
            (1, 0, 6),
            (2, 0, 6),
            (3, 0, 1),
        ]
        assert [s.is_interval_start for s in segments] == [True, False, False, False]
        assert [s.is_interval_end for s in segments] == [False, False, False, True]
        assert all(s.lane == 1 for s in segments)

    def test_clipped_at_month_start(self, may):
        segments = split_into_rows(goal("2024-04-25", "2024-05-05"), 0, may)
        assert segments == [
            RowSegment(0, 3, 6, 0, is_interval_start=False, is_interval_end=False),
            RowSegment(1, 0, 0, 0, is_interval_start=False, is_interval_end=True),
        ]

    def test_clipped_at_month_end(self, may):
        segments = split_into_rows(goal("2024-05-30", "2024-06-04"), 0, may)
        assert segments == [
            RowSegment(4, 4, 5, 0, is_interval_start=True, is_interval_end=False),
        ]

    def test_clipped_both_ends(self, may):
        segments = split_into_rows(goal("2024-04-01", "2024-06-30"), 0, may)
        assert len(segments) == may.row_count
        assert (segments[0].start_column, segments[-1].end_column) == (3, 5)
        assert not any(s.is_interval_start or s.is_interval_end for s in segments)

    def test_outside_month(self, may):
        assert split_into_rows(goal("2024-06-01", "2024-06-10"), 0, may) == []
        assert split_into_rows(goal("2024-04-01", "2024-04-30"), 0, may) == []

    def test_inverted_interval(self, may):
        assert split_into_rows(goal("2024-05-10", "2024-05-01"), 0, may) == []

    def test_explicit_offset(self, may):
        segments = split_into_rows(goal("2024-05-01", "2024-05-08"), 0, may, first_weekday_offset=0)
        assert [(s.row_index, s.start_column, s.end_column) for s in segments] == [
            (0, 0, 6),
            (1, 0, 0),
        ]

    @pytest.mark.parametrize("seed", range(20))
    def test_segments_are_contiguous(self, seed):
        rng = random.Random(seed)
        month = Month(2024, rng.randint(1, 12))
        start = month.first_day + timedelta(days=rng.randint(-15, 30))
        end = start + timedelta(days=rng.randint(0, 45))
        item = RangedItem(id="g", start_date=start, end_date=end)

        segments = split_into_rows(item, 0, month)

        display_start = max(start, month.first_day)
        display_end = min(end, month.last_day)
        if display_start > display_end:
            assert segments == []
            return

        first_row = cell_position(display_start.day, month.first_weekday_offset)[0]
        last_row = cell_position(display_end.day, month.first_weekday_offset)[0]
        assert [s.row_index for s in segments] == list(range(first_row, last_row + 1))
        for inner in segments[:-1]:
            assert inner.end_column == 6
        for inner in segments[1:]:
            assert inner.start_column == 0
        # Each covered day shows up exactly once
        assert sum(s.span for s in segments) == (display_end - display_start).days + 1
