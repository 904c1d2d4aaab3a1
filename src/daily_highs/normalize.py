"""Response normalization: provider payloads -> ``TemperatureRecord`` lists.

Three payload shapes are understood:

- **Parallel arrays** (Open-Meteo): ``daily.time[i]`` pairs with
  ``daily.temperature_2m_max[i]``.
- **3-hour buckets** (OpenWeather 5 day / 3 hour forecast): a ``list`` of
  buckets, each with an epoch ``dt`` and ``main.temp_max``.
- **Per-day observations** (WeatherAPI history): ``forecast.forecastday[]``
  entries whose ``day.maxtemp_f`` may be missing.

Plus the post-processing steps shared by adapters: sorting, dedup by day and
the historical year-completion filter.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from datetime import UTC, date, datetime, timedelta
from typing import Any

from daily_highs.schemas import TemperatureRecord

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest whole degree, halves toward +infinity (45.5 -> 46, -0.5 -> 0)."""
    return math.floor(value + 0.5)


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool) and math.isfinite(value)


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _parse_day(value: Any) -> date | None:
    """ISO ``YYYY-MM-DD`` payload string -> date, or None if it won't parse."""
    if not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


# =============================================================================
# Parallel arrays
# =============================================================================


def normalize_parallel_arrays(
    payload: Any,
    temperature_key: str = "temperature_2m_max",
) -> list[TemperatureRecord]:
    """
    Normalize an Open-Meteo style ``daily`` block.

    Entries with a null temperature or an unparseable date are skipped and
    values are rounded to whole degrees. Arrays of different lengths can't
    be paired reliably, so nothing is produced for them.

    Args:
        payload: Raw API response with a ``daily`` key.
        temperature_key: Name of the daily high array.

    Returns:
        Records in payload order.
    """
    daily = _as_dict(_as_dict(payload).get("daily"))
    times = daily.get("time")
    temps = daily.get(temperature_key)
    if not isinstance(times, list) or not isinstance(temps, list):
        logger.warning("Payload has no daily.time/%s arrays", temperature_key)
        return []
    if len(times) != len(temps):
        logger.warning(
            "daily.time has %d entries but %s has %d; dropping payload",
            len(times),
            temperature_key,
            len(temps),
        )
        return []

    records: list[TemperatureRecord] = []
    for date_str, temp in zip(times, temps, strict=True):
        if not _is_number(temp):
            continue
        day = _parse_day(date_str)
        if day is None:
            logger.warning("Skipping daily entry with unparseable date %r", date_str)
            continue
        records.append(TemperatureRecord.for_day(day, float(round_half_up(temp))))
    return records


# =============================================================================
# 3-hour buckets
# =============================================================================


def _bucket_local_date(bucket: dict[str, Any], utc_offset: timedelta) -> date | None:
    """Calendar day of a forecast bucket in the location's local time."""
    ts = bucket.get("dt")
    if _is_number(ts):
        try:
            return (datetime.fromtimestamp(ts, tz=UTC) + utc_offset).date()
        except (OverflowError, OSError, ValueError):
            return None
    dt_txt = bucket.get("dt_txt")
    if isinstance(dt_txt, str):
        # dt_txt is UTC ("2024-06-01 21:00:00")
        try:
            naive = datetime.fromisoformat(dt_txt)
        except ValueError:
            return None
        return (naive + utc_offset).date()
    return None


def normalize_three_hour_buckets(payload: Any) -> list[TemperatureRecord]:
    """
    Collapse 3-hour forecast buckets into one record per local calendar day.

    Each day keeps the maximum ``main.temp_max`` seen among its buckets.
    The local day uses ``city.timezone`` (offset seconds from UTC) when the
    payload has one.
    """
    payload = _as_dict(payload)
    offset_seconds = _as_dict(payload.get("city")).get("timezone")
    utc_offset = timedelta(seconds=offset_seconds if _is_number(offset_seconds) else 0)

    highs: dict[date, float] = {}
    for bucket in _as_list(payload.get("list")):
        if not isinstance(bucket, dict):
            continue
        temp_max = _as_dict(bucket.get("main")).get("temp_max")
        if not _is_number(temp_max):
            continue
        day = _bucket_local_date(bucket, utc_offset)
        if day is None:
            logger.warning("Skipping forecast bucket without a usable timestamp")
            continue
        if day not in highs or temp_max > highs[day]:
            highs[day] = float(temp_max)

    return [TemperatureRecord.for_day(day, highs[day]) for day in sorted(highs)]


# =============================================================================
# Per-day observations
# =============================================================================


def observation_high(entry: Any, field: str = "maxtemp_f") -> float | None:
    """Pull ``day.<field>`` out of one forecastday entry, or None."""
    value = _as_dict(_as_dict(entry).get("day")).get(field)
    return float(value) if _is_number(value) else None


def _forecast_days(payload: Any) -> list[Any]:
    return _as_list(_as_dict(_as_dict(payload).get("forecast")).get("forecastday"))


def normalize_daily_observation(payload: Any, day: date) -> TemperatureRecord:
    """
    Normalize a single-day history response.

    The first ``forecastday`` entry is used. A missing value, or a body of
    the wrong shape, becomes an ``N/A`` sentinel record rather than an error.
    """
    days = _forecast_days(payload)
    high = observation_high(days[0]) if days else None
    if high is None:
        return TemperatureRecord.not_available(day)
    return TemperatureRecord.for_day(day, float(round_half_up(high)))


def normalize_daily_observations(payload: Any) -> list[TemperatureRecord]:
    """Normalize a multi-day response (one record per dated forecastday entry)."""
    records: list[TemperatureRecord] = []
    for entry in _forecast_days(payload):
        day = _parse_day(_as_dict(entry).get("date"))
        if day is None:
            logger.warning("Skipping forecastday entry without a usable date")
            continue
        high = observation_high(entry)
        if high is None:
            records.append(TemperatureRecord.not_available(day))
        else:
            records.append(TemperatureRecord.for_day(day, float(round_half_up(high))))
    return records


# =============================================================================
# Post-processing
# =============================================================================


def sort_records(records: list[TemperatureRecord]) -> list[TemperatureRecord]:
    """Chronological order by ISO sort key."""
    return sorted(records, key=lambda r: r.sort_key)


def dedupe_by_day(records: list[TemperatureRecord]) -> list[TemperatureRecord]:
    """Keep the first record seen for each calendar day."""
    seen: set[str] = set()
    unique: list[TemperatureRecord] = []
    for record in records:
        if record.sort_key in seen:
            continue
        seen.add(record.sort_key)
        unique.append(record)
    return unique


def canonical_year(records: list[TemperatureRecord]) -> int | None:
    """Year with the most records; ties go to the year seen first."""
    if not records:
        return None
    counts = Counter(r.year for r in records)
    # Counter preserves insertion order and max() returns the first maximal item
    return max(counts, key=lambda year: counts[year])


def complete_year(records: list[TemperatureRecord]) -> list[TemperatureRecord]:
    """
    Restrict a historical result set to its canonical year.

    Records outside the canonical year are dropped. If that year's Jan 1 or
    Dec 31 is missing after filtering but exists somewhere in ``records``,
    it is put back at the start or end.

    Args:
        records: Sorted, deduplicated records.

    Returns:
        Records of the canonical year only, still in order.
    """
    year = canonical_year(records)
    if year is None:
        return []

    final = [r for r in records if r.year == year]
    present = {r.sort_key for r in final}

    jan1 = date(year, 1, 1).isoformat()
    dec31 = date(year, 12, 31).isoformat()
    if jan1 not in present:
        entry = next((r for r in records if r.sort_key == jan1), None)
        if entry is not None:
            final.insert(0, entry)
    if dec31 not in present:
        entry = next((r for r in records if r.sort_key == dec31), None)
        if entry is not None:
            final.append(entry)
    return final
