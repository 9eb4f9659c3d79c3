"""Functional core - pure calendar logic with no I/O."""

from .dates import Month, day_of_week, days_in_month, format_date, parse_date, grid_dates
from .items import InstantItem, RangedItem
from .recurrence import WeeklyRule, parse_rule, occurs_on, next_occurrences
from .lanes import assign_lanes, lane_count
from .rows import RowSegment, split_into_rows
from .engine import (
    BarMetrics,
    BarSegment,
    DayCell,
    MonthLayout,
    occurring_on,
    month_occurrences,
    month_cells,
    visible_goals,
    layout_month,
)

__all__ = [
    # Dates
    "Month",
    "day_of_week",
    "days_in_month",
    "format_date",
    "parse_date",
    "grid_dates",
    # Items
    "InstantItem",
    "RangedItem",
    # Recurrence
    "WeeklyRule",
    "parse_rule",
    "occurs_on",
    "next_occurrences",
    # Layout
    "assign_lanes",
    "lane_count",
    "RowSegment",
    "split_into_rows",
    # Facade
    "BarMetrics",
    "BarSegment",
    "DayCell",
    "MonthLayout",
    "occurring_on",
    "month_occurrences",
    "month_cells",
    "visible_goals",
    "layout_month",
]
