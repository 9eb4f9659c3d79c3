"""Calendar engine bound to an item repository.

This is the entry point a rendering surface talks to. It reads the current
items through the repository on every call and hands them to the pure core.
"""

from datetime import date

from .core.dates import Month
from .core.engine import (
    BarMetrics,
    DayCell,
    MonthLayout,
    layout_month,
    month_cells,
    month_occurrences,
    occurring_on,
)
from .core.items import InstantItem
from .ports import ItemRepository


class CalendarEngine:
    """Occurrence and goal-bar layout queries over a repository."""

    def __init__(self, repository: ItemRepository):
        self.repository = repository

    def tasks_on(self, target: date) -> list[InstantItem]:
        """Tasks occurring on a date."""
        return occurring_on(self.repository.fetch_tasks(), target)

    def agenda(self, month: Month) -> dict[date, list[InstantItem]]:
        """Occurring tasks for every day of the month."""
        return month_occurrences(self.repository.fetch_tasks(), month)

    def cells(
        self,
        month: Month,
        today: date | None = None,
        max_items: int | None = 3,
        min_rows: int = 0,
    ) -> list[DayCell]:
        """Day cells for the month grid."""
        return month_cells(
            self.repository.fetch_tasks(),
            month,
            today=today,
            max_items=max_items,
            min_rows=min_rows,
        )

    def layout(self, month: Month, metrics: BarMetrics | None = None) -> MonthLayout:
        """Goal-bar layout for the month."""
        return layout_month(self.repository.fetch_goals(), month, metrics)
