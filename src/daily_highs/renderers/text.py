"""Plain-text renderers for terminal output."""

from __future__ import annotations

from daily_highs.grouping import DayCell, group_by_month
from daily_highs.schemas import DayFailure, TemperatureRecord

_CELL_WIDTH = 9


def format_table(records: list[TemperatureRecord]) -> str:
    """Two-column ``Date  High (F)`` table."""
    if not records:
        return "No temperature data available."
    lines = [f"{'Date':<12} {'High (°F)':>9}", f"{'-' * 12} {'-' * 9}"]
    lines.extend(f"{r.date:<12} {r.display_temperature:>9}" for r in records)
    return "\n".join(lines)


def _cell_text(cell: DayCell) -> str:
    temp = cell.temperature
    if cell.record.high_temperature is not None:
        temp += "°"
    return f"{cell.day:>2}:{temp:<{_CELL_WIDTH - 3}}"


def format_calendar(records: list[TemperatureRecord]) -> str:
    """Month blocks with week rows of ``day:temp`` cells; empty months are skipped."""
    if not records:
        return "No temperature data available."
    blocks: list[str] = []
    for month in group_by_month(records):
        if not month.cells:
            continue
        lines = [month.name]
        for row in month.rows:
            cells = [_cell_text(cell) if cell else " " * _CELL_WIDTH for cell in row]
            lines.append("".join(cells).rstrip())
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def format_failures(failures: list[DayFailure]) -> str:
    """Summary of days that failed to fetch."""
    if not failures:
        return ""
    lines = [f"{len(failures)} day(s) failed:"]
    lines.extend(f"  {f.sort_key}: {f.reason}" for f in failures)
    return "\n".join(lines)
