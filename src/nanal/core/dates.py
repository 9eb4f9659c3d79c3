"""Pure date helpers for the month grid - no I/O dependencies.

Weekdays follow the grid layout: 0 = Sunday .. 6 = Saturday.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterator

DAYS_PER_WEEK = 7

DAY_CODES = ("SU", "MO", "TU", "WE", "TH", "FR", "SA")


def day_of_week(d: date) -> int:
    """Day of week with Sunday as 0."""
    return (d.weekday() + 1) % DAYS_PER_WEEK


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def format_date(d: date) -> str:
    """Format as YYYY-MM-DD."""
    return d.strftime("%Y-%m-%d")


def parse_date(value: str | date | None) -> date | None:
    """
    Parse a calendar date from a record value.

    Accepts date/datetime objects, "YYYY-MM-DD" and ISO date-times
    ("YYYY-MM-DDTHH:MM[:SS]"). Returns None for empty or unparseable input.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    value = value.strip()
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def parse_datetime(value: str | date | None) -> datetime | None:
    """Parse a naive date-time; a bare date becomes midnight."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    value = value.strip()
    if not value:
        return None
    if value.endswith("Z"):
        # fromisoformat only accepts a Z suffix from 3.11 on
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    # Timezones are not converted, only dropped
    return parsed.replace(tzinfo=None)


def is_same_day(a: date, b: date) -> bool:
    """Compare calendar days, ignoring any time component."""
    if isinstance(a, datetime):
        a = a.date()
    if isinstance(b, datetime):
        b = b.date()
    return a == b


def date_range(start: date, end: date) -> Iterator[date]:
    """Yield every date from start to end inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


@dataclass(frozen=True, order=True)
class Month:
    """A visible calendar month. `month` is 1-12."""

    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month out of range: {self.month}")

    @classmethod
    def from_date(cls, d: date) -> "Month":
        return cls(d.year, d.month)

    @classmethod
    def parse(cls, value: str) -> "Month":
        """Parse "YYYY-MM"."""
        try:
            year_str, month_str = value.strip().split("-")
            return cls(int(year_str), int(month_str))
        except ValueError as e:
            raise ValueError(f"Invalid month '{value}', expected YYYY-MM") from e

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, days_in_month(self.year, self.month))

    @property
    def day_count(self) -> int:
        return days_in_month(self.year, self.month)

    @property
    def first_weekday_offset(self) -> int:
        """Column of the 1st in a Sunday-first grid."""
        return day_of_week(self.first_day)

    @property
    def row_count(self) -> int:
        """Week rows needed to show every day of the month."""
        cells = self.first_weekday_offset + self.day_count
        return (cells + DAYS_PER_WEEK - 1) // DAYS_PER_WEEK

    def contains(self, d: date) -> bool:
        return self.first_day <= d <= self.last_day

    def days(self) -> list[date]:
        return list(date_range(self.first_day, self.last_day))

    def next(self) -> "Month":
        if self.month == 12:
            return Month(self.year + 1, 1)
        return Month(self.year, self.month + 1)

    def previous(self) -> "Month":
        if self.month == 1:
            return Month(self.year - 1, 12)
        return Month(self.year, self.month - 1)

    def label(self) -> str:
        return self.first_day.strftime("%B %Y")

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


def grid_dates(month: Month, min_rows: int = 0) -> list[date]:
    """
    Dates shown in the month grid, padded to whole weeks.

    Leading cells come from the previous month and trailing cells from the
    next month. With min_rows, the grid is padded to at least that many rows
    (6 gives the fixed 42-cell grid).
    """
    rows = max(month.row_count, min_rows)
    start = month.first_day - timedelta(days=month.first_weekday_offset)
    return [start + timedelta(days=i) for i in range(rows * DAYS_PER_WEEK)]
