"""Lane packing for goal bars - pure logic, no I/O."""

from datetime import date
from typing import Iterable

from .items import RangedItem


def lane_sort_key(item: RangedItem) -> tuple[date, int, str]:
    """
    Placement order: earliest start first, longer goals first on ties.

    Long-running bars claim the low lanes so they stay put while shorter
    goals come and go. The id makes the order independent of input order.
    """
    return (item.start_date, -item.duration_days(), item.id)


def assign_lanes(items: Iterable[RangedItem]) -> dict[str, int]:
    """
    Assign each goal a 0-based lane so overlapping goals never share one.

    Greedy interval colouring: each goal takes the first lane whose last
    goal ended strictly before this one starts. Goals touching on the same
    day count as overlapping.

    Pure function - no I/O. Every input goal gets exactly one lane.
    """
    lane_ends: list[date] = []
    assignment: dict[str, int] = {}

    for item in sorted(items, key=lane_sort_key):
        for lane, lane_end in enumerate(lane_ends):
            if lane_end < item.start_date:
                lane_ends[lane] = item.end_date
                assignment[item.id] = lane
                break
        else:
            lane_ends.append(item.end_date)
            assignment[item.id] = len(lane_ends) - 1

    return assignment


def lane_count(assignment: dict[str, int]) -> int:
    """Number of lanes used by an assignment."""
    if not assignment:
        return 0
    return max(assignment.values()) + 1
