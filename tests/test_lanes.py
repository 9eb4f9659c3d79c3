"""Tests for goal-bar lane packing."""

import random
from datetime import date, timedelta

import pytest

from nanal.core.items import RangedItem
from nanal.core.lanes import assign_lanes, lane_count


def goal(goal_id: str, start: str, end: str) -> RangedItem:
    return RangedItem(
        id=goal_id,
        start_date=date.fromisoformat(start),
        end_date=date.fromisoformat(end),
    )


def max_overlap(items: list[RangedItem]) -> int:
    """Most goals covering any single day."""
    if not items:
        return 0
    counts: dict[date, int] = {}
    for item in items:
        d = item.start_date
        while d <= item.end_date:
            counts[d] = counts.get(d, 0) + 1
            d += timedelta(days=1)
    return max(counts.values())


def assert_no_shared_lanes(items: list[RangedItem], lanes: dict[str, int]) -> None:
    for i, a in enumerate(items):
        for b in items[i + 1 :]:
            if a.overlaps(b):
                assert lanes[a.id] != lanes[b.id], f"{a.id} and {b.id} share lane {lanes[a.id]}"


class TestAssignLanes:
    def test_empty(self):
        assert assign_lanes([]) == {}
        assert lane_count({}) == 0

    def test_single_goal(self):
        assert assign_lanes([goal("a", "2024-05-01", "2024-05-10")]) == {"a": 0}

    def test_disjoint_goals_share_lane(self):
        lanes = assign_lanes(
            [
                goal("a", "2024-05-01", "2024-05-05"),
                goal("b", "2024-05-06", "2024-05-10"),
            ]
        )
        assert lanes == {"a": 0, "b": 0}

    def test_touching_goals_do_not_share_lane(self):
        lanes = assign_lanes(
            [
                goal("a", "2024-05-01", "2024-05-10"),
                goal("b", "2024-05-10", "2024-05-12"),
            ]
        )
        assert lanes == {"a": 0, "b": 1}

    def test_lane_is_reused_once_free(self):
        lanes = assign_lanes(
            [
                goal("a", "2024-05-01", "2024-05-10"),
                goal("b", "2024-05-05", "2024-05-15"),
                goal("c", "2024-05-11", "2024-05-20"),
            ]
        )
        assert lanes == {"a": 0, "b": 1, "c": 0}

    def test_longer_goal_wins_lower_lane_on_same_start(self):
        lanes = assign_lanes(
            [
                goal("short", "2024-05-01", "2024-05-03"),
                goal("long", "2024-05-01", "2024-05-20"),
            ]
        )
        assert lanes == {"long": 0, "short": 1}

    def test_id_breaks_remaining_ties(self):
        lanes = assign_lanes(
            [
                goal("y", "2024-05-01", "2024-05-03"),
                goal("x", "2024-05-01", "2024-05-03"),
            ]
        )
        assert lanes == {"x": 0, "y": 1}

    def test_input_order_does_not_matter(self):
        items = [
            goal("a", "2024-05-01", "2024-05-10"),
            goal("b", "2024-05-01", "2024-05-10"),
            goal("c", "2024-05-03", "2024-05-04"),
            goal("d", "2024-05-11", "2024-05-31"),
        ]
        assert assign_lanes(items) == assign_lanes(list(reversed(items)))

    def test_every_goal_gets_a_lane(self):
        items = [goal(str(i), "2024-05-01", "2024-05-31") for i in range(10)]
        lanes = assign_lanes(items)
        assert sorted(lanes.values()) == list(range(10))

    def test_accepts_generator_and_leaves_input_alone(self):
        items = [
            goal("b", "2024-05-05", "2024-05-06"),
            goal("a", "2024-05-01", "2024-05-10"),
        ]
        snapshot = list(items)
        assign_lanes(item for item in items)
        assert items == snapshot


class TestMinimalLanes:
    @pytest.mark.parametrize(
        "items",
        [
            [
                goal("a", "2024-05-01", "2024-05-31"),
                goal("b", "2024-05-02", "2024-05-04"),
                goal("c", "2024-05-05", "2024-05-07"),
                goal("d", "2024-05-08", "2024-05-10"),
            ],
            [
                goal("a", "2024-05-01", "2024-05-10"),
                goal("b", "2024-05-03", "2024-05-12"),
                goal("c", "2024-05-05", "2024-05-14"),
                goal("d", "2024-05-11", "2024-05-20"),
                goal("e", "2024-05-13", "2024-05-22"),
            ],
            [
                goal("a", "2024-04-20", "2024-05-02"),
                goal("b", "2024-05-02", "2024-05-02"),
                goal("c", "2024-05-02", "2024-06-10"),
                goal("d", "2024-05-03", "2024-05-03"),
            ],
            [goal(str(i), f"2024-05-{i + 1:02d}", f"2024-05-{i + 1:02d}") for i in range(7)],
        ],
    )
    def test_lane_count_matches_max_overlap(self, items):
        lanes = assign_lanes(items)
        assert_no_shared_lanes(items, lanes)
        assert lane_count(lanes) == max_overlap(items)


class TestRandomIntervals:
    @pytest.mark.parametrize("seed", range(25))
    def test_overlapping_goals_never_share_lane(self, seed):
        rng = random.Random(seed)
        base = date(2024, 5, 1)
        items = []
        for i in range(rng.randint(1, 40)):
            start = base + timedelta(days=rng.randint(-10, 40))
            end = start + timedelta(days=rng.randint(0, 20))
            items.append(RangedItem(id=f"g{i}", start_date=start, end_date=end))

        lanes = assign_lanes(items)

        assert set(lanes) == {item.id for item in items}
        assert_no_shared_lanes(items, lanes)
        assert lane_count(lanes) == max_overlap(items)
