"""Splitting goal bars into week-row segments - pure logic, no I/O."""

from dataclasses import dataclass

from .dates import DAYS_PER_WEEK, Month
from .items import RangedItem


@dataclass(frozen=True)
class RowSegment:
    """The part of a goal bar drawn in one week row."""

    row_index: int
    start_column: int
    end_column: int
    lane: int
    is_interval_start: bool
    is_interval_end: bool

    @property
    def span(self) -> int:
        """Number of day columns covered."""
        return self.end_column - self.start_column + 1


def cell_position(day_of_month: int, first_weekday_offset: int) -> tuple[int, int]:
    """(row, column) of a day of the month in the grid."""
    cell = first_weekday_offset + day_of_month - 1
    return cell // DAYS_PER_WEEK, cell % DAYS_PER_WEEK


def split_into_rows(
    item: RangedItem,
    lane: int,
    month: Month,
    first_weekday_offset: int | None = None,
) -> list[RowSegment]:
    """
    Split a goal's interval, clipped to the month, into one segment per row.

    Interior rows span the full week. The start/end flags mark the rows
    holding the goal's real (unclipped) start and end, so a bar cut off by
    the month boundary can be drawn with a flat edge.

    Returns [] when the goal does not touch the month, including inverted
    intervals (end before start).
    """
    if first_weekday_offset is None:
        first_weekday_offset = month.first_weekday_offset

    display_start = max(item.start_date, month.first_day)
    display_end = min(item.end_date, month.last_day)
    if display_start > display_end:
        return []

    start_row, start_column = cell_position(display_start.day, first_weekday_offset)
    end_row, end_column = cell_position(display_end.day, first_weekday_offset)

    starts_here = item.start_date == display_start
    ends_here = item.end_date == display_end

    segments = []
    for row in range(start_row, end_row + 1):
        segments.append(
            RowSegment(
                row_index=row,
                start_column=start_column if row == start_row else 0,
                end_column=end_column if row == end_row else DAYS_PER_WEEK - 1,
                lane=lane,
                is_interval_start=starts_here and row == start_row,
                is_interval_end=ends_here and row == end_row,
            )
        )
    return segments
