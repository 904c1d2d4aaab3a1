"""Last year's daily highs from the Open-Meteo Archive API (free, no key)."""

from __future__ import annotations

from typing import Any

from daily_highs.datasources.base import CoordinateAdapter
from daily_highs.datasources.open_meteo.client import DAILY_HIGH_VAR, OPEN_METEO_HISTORICAL
from daily_highs.normalize import complete_year, normalize_parallel_arrays
from daily_highs.schemas import DateRange, RequestSpec, TemperatureRecord


class OpenMeteoArchive(CoordinateAdapter):
    """Historical daily highs as parallel ``time`` / ``temperature_2m_max`` arrays."""

    name = "open-meteo-archive"
    source = "open-meteo.com (archive)"

    def build_request(self, date_range: DateRange) -> RequestSpec:
        params: dict[str, Any] = {
            "latitude": self.lat,
            "longitude": self.lon,
            "start_date": date_range.start.isoformat(),
            "end_date": date_range.end.isoformat(),
            "daily": DAILY_HIGH_VAR,
            "temperature_unit": "fahrenheit",
            "timezone": self.timezone,
        }
        return RequestSpec(url=OPEN_METEO_HISTORICAL, params=params)

    def normalize(self, payload: Any) -> list[TemperatureRecord]:
        return normalize_parallel_arrays(payload, DAILY_HIGH_VAR)

    def finalize(self, records: list[TemperatureRecord]) -> list[TemperatureRecord]:
        return complete_year(super().finalize(records))
