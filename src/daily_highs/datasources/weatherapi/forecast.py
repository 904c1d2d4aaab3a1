"""14-day forecast highs from WeatherAPI (one request)."""

from __future__ import annotations

from typing import Any

from daily_highs.datasources.base import ZipCodeAdapter
from daily_highs.datasources.weatherapi.client import FORECAST_HORIZON_DAYS, WEATHERAPI_FORECAST
from daily_highs.normalize import normalize_daily_observations
from daily_highs.schemas import DateRange, RequestSpec, TemperatureRecord


class WeatherApiForecast(ZipCodeAdapter):
    name = "weatherapi-forecast"
    source = "weatherapi.com (forecast)"
    requires_api_key = True
    forecast_horizon_days = FORECAST_HORIZON_DAYS

    def build_request(self, date_range: DateRange) -> RequestSpec:
        params: dict[str, Any] = {
            "key": self.api_key,
            "q": self.zip_code,
            "days": len(date_range),
            "aqi": "no",
            "alerts": "no",
        }
        return RequestSpec(url=WEATHERAPI_FORECAST, params=params)

    def normalize(self, payload: Any) -> list[TemperatureRecord]:
        return normalize_daily_observations(payload)
