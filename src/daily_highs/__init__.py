"""Daily Highs - daily high temperatures for a ZIP code, as a table or calendar.

Architecture::

    datasources/   Provider adapters (Open-Meteo, OpenWeather, WeatherAPI)
    normalize.py   Payload shapes -> TemperatureRecord, dedup, year completion
    sequential.py  Per-day fetch loop with fixed delay and Retry-After handling
    pipeline.py    One user-triggered fetch: range -> request(s) -> records
    grouping.py    Month buckets and week rows for the calendar view
    renderers/     Pure records -> HTML / text
    flows/         Prefect orchestration (fetch, then build the printable page)
    services/      Shared utilities (HTTP client with retry)

Data flow: datasources -> pipeline -> grouping -> renderers -> site/index.html

Extension points:
  - New provider:      datasources/__init__.py
  - New output layout: renderers/__init__.py
"""

__version__ = "0.1.0"

from daily_highs.config import Settings
from daily_highs.schemas import DateRange, TemperatureRecord

__all__ = ["DateRange", "Settings", "TemperatureRecord", "__version__"]
