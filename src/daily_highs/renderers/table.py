"""Date / high temperature table renderer."""

from __future__ import annotations

from daily_highs.renderers import render_template
from daily_highs.schemas import TemperatureRecord


def build_table_html(records: list[TemperatureRecord]) -> str:
    """Build an HTML table with one row per day."""
    if not records:
        return "<p>No temperature data available.</p>"

    rows = [
        {
            "date": r.date,
            "temperature": r.display_temperature,
            "is_sentinel": r.high_temperature is None,
            "error": r.error or "",
        }
        for r in records
    ]
    return render_template("table.html.j2", rows=rows)
