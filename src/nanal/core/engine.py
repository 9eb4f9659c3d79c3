"""Calendar engine facade - pure orchestration, no I/O.

Combines the recurrence resolver, lane packer and row splitter for one
visible month. Every call recomputes from the items passed in.
"""

import logging
from dataclasses import dataclass, field
from datetime import date

from .dates import Month, date_range, grid_dates
from .items import InstantItem, RangedItem
from .lanes import assign_lanes, lane_count
from .recurrence import occurs_on
from .rows import split_into_rows

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BarMetrics:
    """Row geometry supplied by the rendering surface, in its own units."""

    row_height: float
    bar_height: float
    bar_gap: float = 0
    bottom_padding: float = 0

    def top_for(self, lane: int) -> float:
        """Top offset of a lane's bar inside its row, stacked up from the bottom."""
        return (
            self.row_height
            - self.bottom_padding
            - self.bar_height
            - lane * (self.bar_height + self.bar_gap)
        )


@dataclass(frozen=True)
class BarSegment:
    """One drawable piece of a goal bar."""

    item_id: str
    row_index: int
    start_column: int
    end_column: int
    lane: int
    is_interval_start: bool
    is_interval_end: bool
    title: str = ""
    color: str = ""
    top: float | None = None

    def to_dict(self) -> dict:
        data = {
            "itemId": self.item_id,
            "rowIndex": self.row_index,
            "startColumn": self.start_column,
            "endColumn": self.end_column,
            "lane": self.lane,
            "isIntervalStart": self.is_interval_start,
            "isIntervalEnd": self.is_interval_end,
            "title": self.title,
            "color": self.color,
        }
        if self.top is not None:
            data["top"] = self.top
        return data


@dataclass
class MonthLayout:
    """Goal-bar layout for one month."""

    month: Month
    first_weekday_offset: int
    row_count: int
    lanes: dict[str, int] = field(default_factory=dict)
    segments: list[BarSegment] = field(default_factory=list)

    @property
    def lane_count(self) -> int:
        return lane_count(self.lanes)

    def segments_for(self, item_id: str) -> list[BarSegment]:
        return [s for s in self.segments if s.item_id == item_id]

    def rows(self) -> dict[int, list[BarSegment]]:
        """Segments grouped by row, every grid row present."""
        grouped: dict[int, list[BarSegment]] = {row: [] for row in range(self.row_count)}
        for segment in self.segments:
            grouped.setdefault(segment.row_index, []).append(segment)
        return grouped

    def to_dict(self) -> dict:
        return {
            "month": str(self.month),
            "firstWeekdayOffset": self.first_weekday_offset,
            "rowCount": self.row_count,
            "laneCount": self.lane_count,
            "segments": [s.to_dict() for s in self.segments],
        }


@dataclass
class DayCell:
    """One square of the month grid."""

    date: date
    in_month: bool
    is_today: bool
    items: list[InstantItem]
    overflow: int = 0

    @property
    def total(self) -> int:
        return len(self.items) + self.overflow


def is_excluded(item: InstantItem, target: date) -> bool:
    return target in item.excluded_dates


def occurring_on(tasks: list[InstantItem], target: date) -> list[InstantItem]:
    """
    Tasks occurring on a date, minus their excluded dates.

    Pure function - no I/O. Input order is preserved.
    """
    return [t for t in tasks if occurs_on(t, target) and not is_excluded(t, target)]


def occurrences_between(
    tasks: list[InstantItem],
    start: date,
    end: date,
) -> dict[date, list[InstantItem]]:
    """Occurring tasks for each date from start to end inclusive."""
    return {d: occurring_on(tasks, d) for d in date_range(start, end)}


def month_occurrences(tasks: list[InstantItem], month: Month) -> dict[date, list[InstantItem]]:
    return occurrences_between(tasks, month.first_day, month.last_day)


def month_cells(
    tasks: list[InstantItem],
    month: Month,
    today: date | None = None,
    max_items: int | None = 3,
    min_rows: int = 0,
) -> list[DayCell]:
    """
    Day cells for the padded month grid.

    Each cell lists at most max_items tasks (all of them when None); the
    rest are counted in overflow. Days of adjacent months are included with in_month=False.
    """
    cells = []
    for d in grid_dates(month, min_rows=min_rows):
        day_tasks = occurring_on(tasks, d)
        shown = day_tasks if max_items is None else day_tasks[:max_items]
        cells.append(
            DayCell(
                date=d,
                in_month=month.contains(d),
                is_today=today is not None and d == today,
                items=shown,
                overflow=len(day_tasks) - len(shown),
            )
        )
    return cells


def visible_goals(goals: list[RangedItem], month: Month) -> list[RangedItem]:
    """
    Goals whose interval intersects the month.

    Goals ending before they start are skipped with a warning rather than
    laid out as degenerate bars.
    """
    visible = []
    for goal in goals:
        if goal.end_date < goal.start_date:
            logger.warning(
                f"Skipping goal {goal.id}: end {goal.end_date} is before start {goal.start_date}"
            )
            continue
        if goal.intersects(month.first_day, month.last_day):
            visible.append(goal)
    return visible


def layout_month(
    goals: list[RangedItem],
    month: Month,
    metrics: BarMetrics | None = None,
) -> MonthLayout:
    """
    Lane and row-segment layout of goal bars for a month.

    Pure function - no I/O. Segments are ordered by row, lane, then start
    column. With metrics, each segment also carries its top offset.
    """
    visible = visible_goals(goals, month)
    lanes = assign_lanes(visible)
    offset = month.first_weekday_offset

    segments = []
    for goal in visible:
        lane = lanes[goal.id]
        top = metrics.top_for(lane) if metrics else None
        for row in split_into_rows(goal, lane, month, offset):
            segments.append(
                BarSegment(
                    item_id=goal.id,
                    row_index=row.row_index,
                    start_column=row.start_column,
                    end_column=row.end_column,
                    lane=row.lane,
                    is_interval_start=row.is_interval_start,
                    is_interval_end=row.is_interval_end,
                    title=goal.title,
                    color=goal.color,
                    top=top,
                )
            )

    segments.sort(key=lambda s: (s.row_index, s.lane, s.start_column))

    return MonthLayout(
        month=month,
        first_weekday_offset=offset,
        row_count=month.row_count,
        lanes=lanes,
        segments=segments,
    )
