"""Last year's daily highs from WeatherAPI history, fetched one day at a time."""

from __future__ import annotations

from datetime import date
from typing import Any

from daily_highs.datasources.base import ZipCodeAdapter
from daily_highs.datasources.weatherapi.client import WEATHERAPI_HISTORY
from daily_highs.normalize import (
    complete_year,
    normalize_daily_observation,
    normalize_daily_observations,
)
from daily_highs.schemas import DateRange, RequestSpec, TemperatureRecord


class WeatherApiHistory(ZipCodeAdapter):
    """Per-day ``forecast.forecastday[0].day.maxtemp_f`` observations."""

    name = "weatherapi-history"
    source = "weatherapi.com (history)"
    requires_api_key = True
    sequential = True

    def build_request(self, date_range: DateRange) -> RequestSpec:  # noqa: ARG002
        msg = f"{self.name} fetches one day per request; use build_day_request"
        raise NotImplementedError(msg)

    def build_day_request(self, day: date) -> RequestSpec:
        params: dict[str, Any] = {
            "key": self.api_key,
            "q": self.zip_code,
            "dt": day.isoformat(),
        }
        return RequestSpec(url=WEATHERAPI_HISTORY, params=params)

    def normalize(self, payload: Any) -> list[TemperatureRecord]:
        return normalize_daily_observations(payload)

    def normalize_day(self, payload: Any, day: date) -> TemperatureRecord:
        return normalize_daily_observation(payload, day)

    def finalize(self, records: list[TemperatureRecord]) -> list[TemperatureRecord]:
        return complete_year(super().finalize(records))
