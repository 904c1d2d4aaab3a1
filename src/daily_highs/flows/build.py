"""
Prefect flow for building a printable static page from fetched records.

Run after the fetch flow:
    daily-highs refresh
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo

from prefect import flow, task

from daily_highs.config import get_settings
from daily_highs.datasources import PROVIDERS
from daily_highs.renderers import render_template
from daily_highs.renderers.calendar import build_calendar_html
from daily_highs.renderers.table import build_table_html
from daily_highs.schemas import FetchOutcome


def _heading(outcome: FetchOutcome) -> tuple[str, str]:
    """Page subtitle and results heading for the provider kind."""
    adapter_cls = PROVIDERS.get(outcome.provider)
    horizon = adapter_cls.forecast_horizon_days if adapter_cls else None
    if horizon is not None:
        return f"{horizon}-Day Forecast", "Forecast High Temperatures"
    if outcome.records:
        return f"Historical Data for {outcome.records[0].year}", "Historical High Temperatures"
    return "Historical Data for Last Year", "Historical High Temperatures"


@task(name="build-html")
def build_html(outcome: FetchOutcome, zip_code: str, timezone: str) -> str:
    """Build the full HTML page for a fetch outcome."""
    adapter_cls = PROVIDERS.get(outcome.provider)
    subtitle, heading = _heading(outcome)
    updated = datetime.now(ZoneInfo(timezone)).strftime("%Y-%m-%d %H:%M")

    return render_template(
        "base.html.j2",
        zip_code=zip_code,
        subtitle=subtitle,
        heading=heading,
        error=outcome.error,
        calendar_html=build_calendar_html(outcome.records),
        table_html=build_table_html(outcome.records),
        failures=outcome.failures,
        source=adapter_cls.source if adapter_cls else outcome.provider,
        updated=updated,
    )


@task(name="write-site")
def write_site(html: str, site_dir: Path) -> Path:
    """Write HTML to site directory."""
    site_dir.mkdir(parents=True, exist_ok=True)
    output_path = site_dir / "index.html"
    with output_path.open("w") as f:
        f.write(html)
    return output_path


@flow(name="build-site", log_prints=True)
def build_all(outcome: FetchOutcome, site_dir: Path | None = None) -> dict[str, Any]:
    """
    Build the static page from a fetch outcome.

    The page is built even when the fetch failed, so the error is visible.
    """
    settings = get_settings()
    site_dir = site_dir or Path(settings.site_dir)

    print("Building HTML...")
    html = build_html(outcome, settings.zip_code, settings.timezone)

    print("Writing site...")
    output_path = write_site(html, site_dir)

    print(f"Site built: {output_path}")
    return {"pages": 1, "records": len(outcome.records), "output": str(output_path)}
