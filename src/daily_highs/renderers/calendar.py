"""Month-by-month calendar renderer.

Twelve month blocks, each a table of week rows (7 day/temperature cell
pairs). June's block forces a page break so a printout splits the year in
two halves.
"""

from __future__ import annotations

from daily_highs.grouping import group_by_month
from daily_highs.renderers import render_template
from daily_highs.schemas import TemperatureRecord


def build_calendar_html(records: list[TemperatureRecord]) -> str:
    """Build the calendar HTML for a (year-filtered) record list."""
    if not records:
        return "<p>No temperature data available.</p>"

    return render_template("calendar.html.j2", months=group_by_month(records))
