"""
Domain models for daily highs.

Pydantic models shared by every provider adapter. Adapters normalize their
raw payloads into ``TemperatureRecord`` - this is the canonical shape that
grouping and rendering consume.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date, timedelta
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

# =============================================================================
# Records
# =============================================================================


class Sentinel(StrEnum):
    """Placeholder shown instead of a temperature."""

    NOT_AVAILABLE = "N/A"
    ERROR = "Error"


def us_date(day: date) -> str:
    """Format a date the way en-US locales do: ``1/1/2023``."""
    return f"{day.month}/{day.day}/{day.year}"


class TemperatureRecord(BaseModel):
    """One day's high temperature (Fahrenheit), normalized across providers."""

    model_config = ConfigDict(frozen=True)

    date: str = Field(..., description="Display date, M/D/YYYY")
    sort_key: str = Field(..., description="ISO date, YYYY-MM-DD")
    high_temperature: float | None = None
    sentinel: Sentinel | None = None
    error: str | None = Field(default=None, description="Failure reason for Error sentinels")

    @classmethod
    def for_day(cls, day: date, high_temperature: float | None, **kwargs: Any) -> TemperatureRecord:
        """Build a record for a calendar day."""
        return cls(
            date=us_date(day),
            sort_key=day.isoformat(),
            high_temperature=high_temperature,
            **kwargs,
        )

    @classmethod
    def not_available(cls, day: date) -> TemperatureRecord:
        return cls.for_day(day, None, sentinel=Sentinel.NOT_AVAILABLE)

    @classmethod
    def failed(cls, day: date, reason: str) -> TemperatureRecord:
        return cls.for_day(day, None, sentinel=Sentinel.ERROR, error=reason)

    @property
    def day(self) -> date:
        return date.fromisoformat(self.sort_key)

    @property
    def year(self) -> int:
        return int(self.sort_key[:4])

    @property
    def display_temperature(self) -> str:
        """Whole-degree temperature, or the sentinel text."""
        if self.high_temperature is None:
            return str(self.sentinel or Sentinel.NOT_AVAILABLE)
        return f"{self.high_temperature:.0f}"


# =============================================================================
# Requests
# =============================================================================


class DateRange(BaseModel):
    """Inclusive range of calendar days."""

    model_config = ConfigDict(frozen=True)

    start: date
    end: date

    @model_validator(mode="after")
    def _check_order(self) -> DateRange:
        if self.start > self.end:
            msg = f"start {self.start} is after end {self.end}"
            raise ValueError(msg)
        return self

    @classmethod
    def last_calendar_year(cls, today: date) -> DateRange:
        """Jan 1 through Dec 31 of the year before ``today``."""
        year = today.year - 1
        return cls(start=date(year, 1, 1), end=date(year, 12, 31))

    @classmethod
    def forecast_window(cls, today: date, horizon_days: int) -> DateRange:
        """``horizon_days`` days starting today."""
        return cls(start=today, end=today + timedelta(days=horizon_days - 1))

    def days(self) -> Iterator[date]:
        current = self.start
        while current <= self.end:
            yield current
            current += timedelta(days=1)

    def __len__(self) -> int:
        return (self.end - self.start).days + 1


class RequestSpec(BaseModel):
    """An outbound GET a provider adapter wants issued."""

    url: str
    params: dict[str, Any] = Field(default_factory=dict)


# =============================================================================
# Fetch state
# =============================================================================


class Status(StrEnum):
    """Status enum for tracking a fetch."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class DayFailure(BaseModel):
    """A day whose fetch failed, and why."""

    sort_key: str
    reason: str


class FetchState(BaseModel):
    """Progress of a fetch, passed through the sequential loop.

    ``records`` holds everything accumulated so far, success and error
    entries intermixed, so it can be published for incremental display.
    """

    status: Status = Status.PENDING
    total: int = 0
    completed: int = 0
    records: list[TemperatureRecord] = Field(default_factory=list)
    failures: list[DayFailure] = Field(default_factory=list)
    rate_limit_waits: int = 0
    error: str | None = None

    @property
    def progress(self) -> float:
        """Fraction of days processed (0-1)."""
        return self.completed / self.total if self.total else 0.0


class FetchOutcome(BaseModel):
    """Result of one user-triggered fetch."""

    provider: str
    date_range: DateRange | None = None
    records: list[TemperatureRecord] = Field(default_factory=list)
    failures: list[DayFailure] = Field(default_factory=list)
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None
