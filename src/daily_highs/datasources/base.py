"""Provider adapter interface.

One ``ProviderAdapter`` subclass per payload shape.  The pipeline only talks
to this interface:

    range_ = adapter.date_range(today)
    payload = get_json(**adapter.build_request(range_))   # single request
    records = adapter.finalize(adapter.normalize(payload))

Sequential adapters (``sequential = True``) instead build and normalize one
request per day via ``build_day_request`` / ``normalize_day``. Their
``build_request`` raises, since no single query covers the range.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import TYPE_CHECKING, Any, Self

from daily_highs.normalize import dedupe_by_day, sort_records
from daily_highs.schemas import DateRange, RequestSpec, TemperatureRecord

if TYPE_CHECKING:
    from daily_highs.config import Settings


class ProviderAdapter(ABC):
    """Request building and normalization for one weather provider."""

    #: Registry key, e.g. ``"open-meteo-archive"``.
    name: str = ""
    #: Human-readable source for page footers.
    source: str = ""
    requires_api_key: bool = False
    #: Fetch one request per day instead of one request for the whole range.
    sequential: bool = False
    #: Days ahead a forecast provider exposes; None for historical providers.
    forecast_horizon_days: int | None = None

    def __init__(self, api_key: str | None = None) -> None:
        self.api_key = api_key

    @classmethod
    def from_settings(cls, settings: Settings, api_key: str | None = None) -> Self:
        """Build from configuration; an explicit ``api_key`` overrides the configured one."""
        return cls(api_key or settings.api_key_for(cls.name))

    @property
    def is_forecast(self) -> bool:
        return self.forecast_horizon_days is not None

    def date_range(self, today: date) -> DateRange:
        """Last calendar year, or the forecast window starting today."""
        if self.forecast_horizon_days is not None:
            return DateRange.forecast_window(today, self.forecast_horizon_days)
        return DateRange.last_calendar_year(today)

    @abstractmethod
    def build_request(self, date_range: DateRange) -> RequestSpec:
        """Query for the whole range (single-request adapters)."""

    @abstractmethod
    def normalize(self, payload: Any) -> list[TemperatureRecord]:
        """Map a raw payload to records."""

    def build_day_request(self, day: date) -> RequestSpec:
        """Query for one day (sequential adapters)."""
        msg = f"{self.name} does not fetch per day"
        raise NotImplementedError(msg)

    def normalize_day(self, payload: Any, day: date) -> TemperatureRecord:
        """Map a single-day payload to a record (sequential adapters)."""
        msg = f"{self.name} does not fetch per day"
        raise NotImplementedError(msg)

    def finalize(self, records: list[TemperatureRecord]) -> list[TemperatureRecord]:
        """Sort and dedupe. Historical adapters extend this."""
        return dedupe_by_day(sort_records(records))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class CoordinateAdapter(ProviderAdapter):
    """Provider queried by latitude/longitude in a named timezone."""

    def __init__(
        self,
        api_key: str | None = None,
        *,
        lat: float = 45.5372,
        lon: float = -122.6508,
        timezone: str = "America/Los_Angeles",
    ) -> None:
        super().__init__(api_key)
        self.lat = lat
        self.lon = lon
        self.timezone = timezone

    @classmethod
    def from_settings(cls, settings: Settings, api_key: str | None = None) -> Self:
        return cls(
            api_key or settings.api_key_for(cls.name),
            lat=settings.lat,
            lon=settings.lon,
            timezone=settings.timezone,
        )


class ZipCodeAdapter(ProviderAdapter):
    """Provider queried by US ZIP code."""

    def __init__(self, api_key: str | None = None, *, zip_code: str = "97212") -> None:
        super().__init__(api_key)
        self.zip_code = zip_code

    @classmethod
    def from_settings(cls, settings: Settings, api_key: str | None = None) -> Self:
        return cls(api_key or settings.api_key_for(cls.name), zip_code=settings.zip_code)
