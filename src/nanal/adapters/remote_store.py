"""Remote document store adapter - HTTP client for item fetching."""

from datetime import datetime

import requests

from nanal.config import Config, load_config
from nanal.core.items import InstantItem, RangedItem

from .records import goals_from_document, tasks_from_document


class RemoteStoreError(Exception):
    """Raised when the remote store cannot be reached or read."""

    pass


class RemoteItemStore:
    """
    Remote document store adapter.

    Implements ItemRepository protocol. Each user has one document at
    {base_url}/users/{user_id} holding their tasks and goals. No business
    logic - just I/O.
    """

    def __init__(
        self,
        base_url: str,
        user_id: str,
        token: str = "",
        timeout: float = 10,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_id = user_id
        self.token = token
        self.timeout = timeout
        self._session = session or requests.Session()

    @classmethod
    def from_config(cls, config: Config | None = None) -> "RemoteItemStore | None":
        """Build from config, or None if no remote store is configured."""
        config = config or load_config()
        if not config.remote_url or not config.remote_user:
            return None
        return cls(
            base_url=config.remote_url,
            user_id=config.remote_user,
            token=config.remote_token,
            timeout=config.remote_timeout,
        )

    @property
    def document_url(self) -> str:
        return f"{self.base_url}/users/{self.user_id}"

    def _headers(self) -> dict:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def load(self) -> dict:
        """Fetch the user's document. A missing document is empty."""
        try:
            resp = self._session.get(
                self.document_url,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RemoteStoreError(f"Remote store unreachable: {e}") from e

        if resp.status_code == 404:
            return {}
        if resp.status_code != 200:
            raise RemoteStoreError(f"Remote store returned {resp.status_code}: {resp.text}")

        try:
            data = resp.json()
        except ValueError as e:
            raise RemoteStoreError(f"Remote store returned invalid JSON: {e}") from e
        return data if isinstance(data, dict) else {}

    def save(self, document: dict) -> None:
        """Replace the user's document with a timestamped copy of `document`."""
        document = {**document, "backupTimestamp": datetime.now().isoformat()}
        try:
            resp = self._session.put(
                self.document_url,
                json=document,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RemoteStoreError(f"Remote store unreachable: {e}") from e

        if resp.status_code not in (200, 201, 204):
            raise RemoteStoreError(f"Remote store returned {resp.status_code}: {resp.text}")

    def fetch_tasks(self) -> list[InstantItem]:
        return tasks_from_document(self.load())

    def fetch_goals(self) -> list[RangedItem]:
        return goals_from_document(self.load())
