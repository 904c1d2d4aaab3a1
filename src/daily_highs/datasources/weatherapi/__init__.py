"""WeatherAPI.com data source (paid, API key required).

Public API:
  - history: WeatherApiHistory (sequential per-day history for last year)
  - forecast: WeatherApiForecast (14-day forecast, single request)
"""

from daily_highs.datasources.weatherapi.client import WEATHERAPI_FORECAST, WEATHERAPI_HISTORY
from daily_highs.datasources.weatherapi.forecast import WeatherApiForecast
from daily_highs.datasources.weatherapi.history import WeatherApiHistory

__all__ = [
    "WEATHERAPI_FORECAST",
    "WEATHERAPI_HISTORY",
    "WeatherApiForecast",
    "WeatherApiHistory",
]
