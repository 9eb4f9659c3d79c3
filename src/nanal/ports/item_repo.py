"""Item repository interface."""

from typing import Protocol

from nanal.core.items import InstantItem, RangedItem


class ItemRepository(Protocol):
    """Interface for loading calendar items from any backend."""

    def fetch_tasks(self) -> list[InstantItem]:
        """Fetch all tasks."""
        ...

    def fetch_goals(self) -> list[RangedItem]:
        """Fetch all goals."""
        ...
