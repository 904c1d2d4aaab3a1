"""5-day forecast highs from OpenWeather's 3-hour bucket forecast."""

from __future__ import annotations

from typing import Any

from daily_highs.datasources.base import ZipCodeAdapter
from daily_highs.datasources.openweather.client import (
    FORECAST_HORIZON_DAYS,
    MAX_BUCKETS,
    OPENWEATHER_FORECAST_API,
)
from daily_highs.normalize import normalize_three_hour_buckets
from daily_highs.schemas import DateRange, RequestSpec, TemperatureRecord


class OpenWeatherForecast(ZipCodeAdapter):
    """Daily highs as the max ``temp_max`` across each day's 3-hour buckets."""

    name = "openweather-forecast"
    source = "openweathermap.org"
    requires_api_key = True
    forecast_horizon_days = FORECAST_HORIZON_DAYS

    def build_request(self, date_range: DateRange) -> RequestSpec:  # noqa: ARG002
        # The endpoint has no date parameters; it always returns the next 5 days.
        params: dict[str, Any] = {
            "zip": f"{self.zip_code},us",
            "appid": self.api_key,
            "units": "imperial",
            "cnt": MAX_BUCKETS,
        }
        return RequestSpec(url=OPENWEATHER_FORECAST_API, params=params)

    def normalize(self, payload: Any) -> list[TemperatureRecord]:
        return normalize_three_hour_buckets(payload)
