"""Composite item store - remote document store with local fallback."""

import logging

from nanal.core.items import InstantItem, RangedItem

from .file_store import FileItemStore
from .remote_store import RemoteItemStore, RemoteStoreError

logger = logging.getLogger(__name__)


class CompositeItemStore:
    """
    Prefers the remote store, falls back to the local file.

    Implements ItemRepository protocol. The local store is used when no
    remote is configured, when the remote fails, or when it has nothing.
    """

    def __init__(self, local: FileItemStore, remote: RemoteItemStore | None = None):
        self.local = local
        self.remote = remote

    def _fetch_remote(self, what: str, fetch):
        if self.remote is None:
            return []
        try:
            return fetch()
        except RemoteStoreError as e:
            logger.warning(f"Remote {what} unavailable, using local store: {e}")
            return []

    def fetch_tasks(self) -> list[InstantItem]:
        tasks = self._fetch_remote("tasks", lambda: self.remote.fetch_tasks())
        return tasks or self.local.fetch_tasks()

    def fetch_goals(self) -> list[RangedItem]:
        goals = self._fetch_remote("goals", lambda: self.remote.fetch_goals())
        return goals or self.local.fetch_goals()
