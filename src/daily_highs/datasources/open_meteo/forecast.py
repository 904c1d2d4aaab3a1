"""16-day daily high forecast from the Open-Meteo Forecast API."""

from __future__ import annotations

from typing import Any

from daily_highs.datasources.base import CoordinateAdapter
from daily_highs.datasources.open_meteo.client import (
    DAILY_HIGH_VAR,
    FORECAST_HORIZON_DAYS,
    OPEN_METEO_API,
)
from daily_highs.normalize import normalize_parallel_arrays
from daily_highs.schemas import DateRange, RequestSpec, TemperatureRecord


class OpenMeteoForecast(CoordinateAdapter):
    name = "open-meteo-forecast"
    source = "open-meteo.com"
    forecast_horizon_days = FORECAST_HORIZON_DAYS

    def build_request(self, date_range: DateRange) -> RequestSpec:
        params: dict[str, Any] = {
            "latitude": self.lat,
            "longitude": self.lon,
            "daily": DAILY_HIGH_VAR,
            "temperature_unit": "fahrenheit",
            "timezone": self.timezone,
            "forecast_days": len(date_range),
        }
        return RequestSpec(url=OPEN_METEO_API, params=params)

    def normalize(self, payload: Any) -> list[TemperatureRecord]:
        return normalize_parallel_arrays(payload, DAILY_HIGH_VAR)
