"""Open-Meteo weather data source (free, no API key).

Public API:
  - archive: OpenMeteoArchive (last calendar year, year-completion filter)
  - forecast: OpenMeteoForecast (16-day forecast)
  - client: API URLs, shared constants
"""

from daily_highs.datasources.open_meteo.archive import OpenMeteoArchive
from daily_highs.datasources.open_meteo.client import OPEN_METEO_API, OPEN_METEO_HISTORICAL
from daily_highs.datasources.open_meteo.forecast import OpenMeteoForecast

__all__ = [
    "OPEN_METEO_API",
    "OPEN_METEO_HISTORICAL",
    "OpenMeteoArchive",
    "OpenMeteoForecast",
]
