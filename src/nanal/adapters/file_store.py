"""File-based item storage adapter."""

import json
import logging
from pathlib import Path

from nanal.core.items import InstantItem, RangedItem

from .records import document_from_items, goals_from_document, tasks_from_document

logger = logging.getLogger(__name__)


class FileItemStore:
    """
    Local JSON file storage.

    Implements ItemRepository protocol. The whole app state lives in one
    document: {"tasks": [...], "goals": [...]}.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def load(self) -> dict:
        """Read the stored document. Returns {} if missing or unreadable."""
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.error(f"Unexpected document in {self.path}: {type(data).__name__}")
            return {}
        return data

    def save(self, tasks: list[InstantItem], goals: list[RangedItem]) -> None:
        """Write tasks and goals, keeping any other keys in the document."""
        document = self.load()
        document.update(document_from_items(tasks, goals))
        self.write(document)

    def write(self, document: dict) -> None:
        """Replace the stored document as-is."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(document, indent=2, ensure_ascii=False))

    def fetch_tasks(self) -> list[InstantItem]:
        return tasks_from_document(self.load())

    def fetch_goals(self) -> list[RangedItem]:
        return goals_from_document(self.load())
