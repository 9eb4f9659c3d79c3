"""Calendar items - tasks (instant) and goals (ranged). No I/O dependencies."""

from dataclasses import dataclass, field
from datetime import date, datetime

from .dates import format_date, parse_date, parse_datetime


@dataclass(frozen=True)
class InstantItem:
    """A task with optional start/end timestamps, possibly recurring."""

    id: str
    title: str = ""
    start_at: datetime | None = None
    end_at: datetime | None = None
    is_recurring: bool = False
    recurrence_rule: str | None = None
    excluded_dates: frozenset[date] = field(default_factory=frozenset)
    status: str = "TODO"
    category: str = ""
    # Stored as a bare YYYY-MM-DD; written back the same way
    start_is_date: bool = field(default=False, compare=False, repr=False)
    end_is_date: bool = field(default=False, compare=False, repr=False)

    @property
    def is_floating(self) -> bool:
        """No start and no end - shows up on every date."""
        return self.start_at is None and self.end_at is None

    @property
    def is_done(self) -> bool:
        return self.status == "DONE"

    @classmethod
    def from_record(cls, data: dict) -> "InstantItem":
        """Create from a stored task record. Raises ValueError on bad dates."""
        start_at = _optional_datetime(data, "startAt")
        end_at = _optional_datetime(data, "endAt")

        excluded = set()
        for raw in data.get("excludedDates") or []:
            d = parse_date(raw)
            if d is None:
                raise ValueError(f"Invalid excluded date: {raw!r}")
            excluded.add(d)

        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            start_at=start_at,
            end_at=end_at,
            is_recurring=bool(data.get("isRecurring", False)),
            recurrence_rule=data.get("recurrenceRule") or None,
            excluded_dates=frozenset(excluded),
            status=data.get("status", "TODO") or "TODO",
            category=data.get("categoryId", "") or "",
            start_is_date=_is_bare_date(data.get("startAt")),
            end_is_date=_is_bare_date(data.get("endAt")),
        )

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "startAt": _format_stamp(self.start_at, self.start_is_date),
            "endAt": _format_stamp(self.end_at, self.end_is_date),
            "isRecurring": self.is_recurring,
            "recurrenceRule": self.recurrence_rule,
            "excludedDates": sorted(format_date(d) for d in self.excluded_dates),
            "status": self.status,
            "categoryId": self.category,
        }


@dataclass(frozen=True)
class RangedItem:
    """
    A goal spanning an inclusive date range.

    start_date <= end_date is the caller's responsibility; nothing here
    repairs it.
    """

    id: str
    start_date: date
    end_date: date
    title: str = ""
    color: str = ""
    progress: int = 0

    def duration_days(self) -> int:
        """Length of the interval in days (0 for a single-day goal)."""
        return (self.end_date - self.start_date).days

    def overlaps(self, other: "RangedItem") -> bool:
        """Inclusive overlap - touching on the same day counts."""
        return self.start_date <= other.end_date and other.start_date <= self.end_date

    def intersects(self, start: date, end: date) -> bool:
        return self.start_date <= end and start <= self.end_date

    @classmethod
    def from_record(cls, data: dict) -> "RangedItem":
        """Create from a stored goal record. Raises ValueError on bad dates."""
        start = parse_date(data.get("startDate"))
        end = parse_date(data.get("endDate"))
        if start is None or end is None:
            raise ValueError(
                f"Goal {data.get('id')!r} needs startDate and endDate, "
                f"got {data.get('startDate')!r}..{data.get('endDate')!r}"
            )
        return cls(
            id=str(data["id"]),
            start_date=start,
            end_date=end,
            title=data.get("title", ""),
            color=data.get("categoryColor") or data.get("color") or "",
            progress=int(data.get("progress") or 0),
        )

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "startDate": format_date(self.start_date),
            "endDate": format_date(self.end_date),
            "color": self.color,
            "progress": self.progress,
        }


def _optional_datetime(data: dict, key: str) -> datetime | None:
    raw = data.get(key)
    if raw is None or raw == "":
        return None
    parsed = parse_datetime(raw)
    if parsed is None:
        raise ValueError(f"Invalid {key}: {raw!r}")
    return parsed


def _is_bare_date(raw) -> bool:
    return isinstance(raw, str) and len(raw.strip()) == 10


def _format_stamp(value: datetime | None, as_date: bool) -> str | None:
    if value is None:
        return None
    if as_date and value.time() == datetime.min.time():
        return format_date(value)
    return value.isoformat()
