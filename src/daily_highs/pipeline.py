"""
Fetch-and-normalize pipeline.

One call = one user-triggered fetch:

    adapter -> date range -> request(s) -> normalize -> finalize -> records

Single-request adapters abort on a transport/HTTP failure and report one
error message. Sequential adapters degrade per day instead (see
``daily_highs.sequential``).
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import date
from typing import Any, TypeVar

from daily_highs.datasources.base import ProviderAdapter
from daily_highs.errors import (
    DailyHighsError,
    MissingCredentialError,
    ProviderRequestError,
    user_message,
)
from daily_highs.schemas import FetchOutcome, FetchState, Status, TemperatureRecord
from daily_highs.sequential import (
    DEFAULT_DELAY_SECONDS,
    DEFAULT_MAX_RATE_LIMIT_RETRIES,
    DEFAULT_RETRY_AFTER_SECONDS,
    Sleeper,
    fetch_days_sequentially,
    with_rate_limit_retry,
)
from daily_highs.services.http import get_json

logger = logging.getLogger(__name__)

T = TypeVar("T")


def check_credentials(adapter: ProviderAdapter) -> None:
    """Raise before any request if the provider needs a key we don't have."""
    if adapter.requires_api_key and not (adapter.api_key or "").strip():
        raise MissingCredentialError(adapter.name)


def _normalized(normalize: Callable[..., T], *args: Any) -> T:
    """Run an adapter normalizer, reporting payload shape errors as a bad response."""
    try:
        return normalize(*args)
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        logger.warning("Could not normalize payload: %r", exc)
        raise ProviderRequestError("Invalid response", f"Unexpected payload: {exc}") from exc


def fetch_high_temperatures(  # noqa: PLR0913
    adapter: ProviderAdapter,
    *,
    today: date | None = None,
    delay_seconds: float = DEFAULT_DELAY_SECONDS,
    default_retry_after: float = DEFAULT_RETRY_AFTER_SECONDS,
    max_rate_limit_retries: int | None = DEFAULT_MAX_RATE_LIMIT_RETRIES,
    sleep: Sleeper = time.sleep,
    on_progress: Callable[[FetchState], None] | None = None,
) -> FetchOutcome:
    """
    Fetch daily highs from ``adapter`` and normalize them.

    Args:
        adapter: Provider to query.
        today: Reference date for the range (default: today).
        delay_seconds: Pause between per-day requests (sequential adapters).
        default_retry_after: Wait for a 429 without Retry-After.
        max_rate_limit_retries: 429 retry cap per request (None = unlimited).
        sleep: Sleep function (injectable for tests).
        on_progress: Receives partial state after every day (sequential only).

    Returns:
        FetchOutcome with ordered records, or ``error`` set to the
        user-facing message when the fetch failed outright.
    """
    today = today or date.today()
    date_range = adapter.date_range(today)
    outcome = FetchOutcome(provider=adapter.name, date_range=date_range)

    try:
        check_credentials(adapter)
        logger.info(
            "Fetching %s highs for %s..%s", adapter.name, date_range.start, date_range.end
        )

        if adapter.sequential:

            def _fetch_day(day: date) -> TemperatureRecord:
                spec = adapter.build_day_request(day)
                payload: Any = get_json(spec.url, spec.params)
                return _normalized(adapter.normalize_day, payload, day)

            state = fetch_days_sequentially(
                list(date_range.days()),
                _fetch_day,
                delay_seconds=delay_seconds,
                default_retry_after=default_retry_after,
                max_rate_limit_retries=max_rate_limit_retries,
                sleep=sleep,
                on_progress=on_progress,
            )
            records = state.records
            outcome.failures = state.failures
        else:
            spec = adapter.build_request(date_range)
            payload = with_rate_limit_retry(
                lambda: get_json(spec.url, spec.params),
                default_retry_after=default_retry_after,
                max_retries=max_rate_limit_retries,
                sleep=sleep,
            )
            records = _normalized(adapter.normalize, payload)
    except DailyHighsError as exc:
        logger.error("Fetch from %s failed: %s", adapter.name, exc)
        outcome.error = user_message(exc)
        if on_progress is not None:
            on_progress(FetchState(status=Status.FAILED, error=outcome.error))
        return outcome

    outcome.records = adapter.finalize(records)
    logger.info("Normalized %d records from %s", len(outcome.records), adapter.name)
    return outcome
