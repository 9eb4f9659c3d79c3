"""Conversion between stored documents and calendar items."""

import logging

from nanal.core.items import InstantItem, RangedItem

logger = logging.getLogger(__name__)


def tasks_from_document(document: dict) -> list[InstantItem]:
    """Parse the "tasks" list of a stored document, skipping bad records."""
    tasks = []
    for record in document.get("tasks") or []:
        try:
            tasks.append(InstantItem.from_record(record))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Skipping task record {_record_id(record)}: {e}")
    return tasks


def goals_from_document(document: dict) -> list[RangedItem]:
    """Parse the "goals" list of a stored document, skipping bad records."""
    goals = []
    for record in document.get("goals") or []:
        try:
            goals.append(RangedItem.from_record(record))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Skipping goal record {_record_id(record)}: {e}")
    return goals


def document_from_items(tasks: list[InstantItem], goals: list[RangedItem]) -> dict:
    return {
        "tasks": [t.to_record() for t in tasks],
        "goals": [g.to_record() for g in goals],
    }


def _record_id(record) -> str:
    if isinstance(record, dict):
        return repr(record.get("id"))
    return repr(record)
