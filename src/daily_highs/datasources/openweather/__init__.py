"""OpenWeather data source (API key required).

Public API:
  - forecast: OpenWeatherForecast (5 day / 3 hour buckets collapsed per day)
"""

from daily_highs.datasources.openweather.client import OPENWEATHER_FORECAST_API
from daily_highs.datasources.openweather.forecast import OpenWeatherForecast

__all__ = ["OPENWEATHER_FORECAST_API", "OpenWeatherForecast"]
