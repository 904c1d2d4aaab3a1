"""Month grouping for the calendar view.

Records are bucketed into 12 months and each month is cut into week rows of
7 cells. The last row of a month is padded with ``None`` (blank cells).
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field

from daily_highs.schemas import TemperatureRecord

DAYS_PER_ROW = 7

#: Month whose block ends a printed page (June: two pages of six months).
PAGE_BREAK_MONTH = 6

MONTH_NAMES = list(calendar.month_name)[1:]


@dataclass
class DayCell:
    """One filled calendar cell."""

    day: int
    record: TemperatureRecord

    @property
    def temperature(self) -> str:
        return self.record.display_temperature


@dataclass
class MonthBlock:
    """A month's records laid out as week rows."""

    month: int
    name: str
    cells: list[DayCell] = field(default_factory=list)

    @property
    def rows(self) -> list[list[DayCell | None]]:
        return chunk_rows(self.cells)

    @property
    def page_break_after(self) -> bool:
        return self.month == PAGE_BREAK_MONTH


def _month_day(record: TemperatureRecord) -> tuple[int, int]:
    """Parse month and day out of the M/D/YYYY display date."""
    month, day, _year = record.date.split("/")
    return int(month), int(day)


def group_by_month(records: list[TemperatureRecord]) -> list[MonthBlock]:
    """
    Bucket records into 12 months, each sorted by day of month.

    Always returns all 12 months, empty ones included.
    """
    blocks = [MonthBlock(month=i + 1, name=name) for i, name in enumerate(MONTH_NAMES)]
    for record in records:
        month, day = _month_day(record)
        blocks[month - 1].cells.append(DayCell(day=day, record=record))
    for block in blocks:
        block.cells.sort(key=lambda cell: cell.day)
    return blocks


def chunk_rows(cells: list[DayCell], size: int = DAYS_PER_ROW) -> list[list[DayCell | None]]:
    """Split cells into rows of ``size``; pad the last row with None."""
    rows: list[list[DayCell | None]] = []
    for start in range(0, len(cells), size):
        row: list[DayCell | None] = list(cells[start : start + size])
        row.extend([None] * (size - len(row)))
        rows.append(row)
    return rows
