"""Recurrence resolution for tasks - pure logic, no I/O.

Only the weekly-by-day subset is understood:

    FREQ=WEEKLY;BYDAY=MO

Anything else resolves to "does not recur" rather than an error.
"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta

from .dates import DAY_CODES, day_of_week, is_same_day
from .items import InstantItem

logger = logging.getLogger(__name__)

_RRULE_PREFIX = "RRULE:"


@dataclass(frozen=True)
class WeeklyRule:
    """A weekly rule on a single weekday (0 = Sunday)."""

    weekday: int

    @property
    def day_code(self) -> str:
        return DAY_CODES[self.weekday]

    def to_rule(self) -> str:
        return f"FREQ=WEEKLY;BYDAY={self.day_code}"


def parse_rule(text: str | None) -> WeeklyRule | None:
    """
    Parse a recurrence rule string.

    Returns None when the rule is missing, malformed, or uses anything
    beyond FREQ=WEEKLY with exactly one BYDAY code.
    """
    if not text or not text.strip():
        return None

    body = text.strip()
    if body.upper().startswith(_RRULE_PREFIX):
        body = body[len(_RRULE_PREFIX):]

    parts: dict[str, str] = {}
    for part in body.split(";"):
        part = part.strip()
        if not part:
            continue
        key, sep, value = part.partition("=")
        key = key.strip().upper()
        if not sep or not key or key in parts:
            logger.debug(f"Unsupported recurrence rule: {text!r}")
            return None
        parts[key] = value.strip().upper()

    if set(parts) != {"FREQ", "BYDAY"} or parts["FREQ"] != "WEEKLY":
        logger.debug(f"Unsupported recurrence rule: {text!r}")
        return None

    code = parts["BYDAY"]
    if code not in DAY_CODES:
        logger.debug(f"Unsupported BYDAY in recurrence rule: {text!r}")
        return None

    return WeeklyRule(weekday=DAY_CODES.index(code))


def occurs_on(item: InstantItem, target: date) -> bool:
    """
    Does the task occur on the target date?

    Pure function - no I/O. Excluded dates are not consulted here; see
    nanal.core.engine.occurring_on.
    """
    # Direct date match takes precedence over recurrence
    if item.start_at is not None and is_same_day(item.start_at, target):
        return True
    if item.end_at is not None and is_same_day(item.end_at, target):
        return True

    if item.is_recurring and item.start_at is not None:
        rule = parse_rule(item.recurrence_rule)
        if rule is not None:
            return day_of_week(target) == rule.weekday and target >= item.start_at.date()

    # Floating items (no dates at all) show up everywhere
    return item.is_floating


def next_occurrences(rule: WeeklyRule, start: date, count: int) -> list[date]:
    """The first `count` dates on or after start that match the rule."""
    if count <= 0:
        return []
    first = start + timedelta(days=(rule.weekday - day_of_week(start)) % 7)
    return [first + timedelta(weeks=i) for i in range(count)]
