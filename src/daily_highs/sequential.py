"""
Sequential per-day fetch loop with rate-limit handling.

Days are fetched strictly one after another with a fixed delay between
requests. Per-day outcomes:

- success: record appended, advance.
- HTTP 429: sleep for the server's ``Retry-After`` (or the default), then
  retry the *same* day. Retries per day are capped by ``max_retries``
  (``None`` = no cap); once exhausted the day gets an ``Error`` sentinel.
- any other ``ProviderRequestError``: ``Error`` sentinel for that day, advance.

After every step the state is published via ``on_progress`` so callers can
display partial results.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import date
from typing import TypeVar

from daily_highs.errors import ProviderRequestError, RateLimitedError
from daily_highs.schemas import DayFailure, FetchState, Status, TemperatureRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_DELAY_SECONDS = 1.0
DEFAULT_RETRY_AFTER_SECONDS = 60.0
DEFAULT_MAX_RATE_LIMIT_RETRIES = 5

Sleeper = Callable[[float], None]


def with_rate_limit_retry(
    call: Callable[[], T],
    *,
    default_retry_after: float = DEFAULT_RETRY_AFTER_SECONDS,
    max_retries: int | None = DEFAULT_MAX_RATE_LIMIT_RETRIES,
    sleep: Sleeper = time.sleep,
    on_wait: Callable[[float], None] | None = None,
) -> T:
    """
    Run ``call``, waiting out HTTP 429 responses.

    Args:
        call: Zero-argument function that performs one request.
        default_retry_after: Wait used when the response has no Retry-After.
        max_retries: Retries allowed after a 429 (None = unlimited).
        sleep: Sleep function (injectable for tests).
        on_wait: Called with the wait duration before each sleep.

    Raises:
        RateLimitedError: Still rate limited after ``max_retries`` retries.
    """
    attempt = 0
    while True:
        try:
            return call()
        except RateLimitedError as exc:
            if max_retries is not None and attempt >= max_retries:
                raise
            attempt += 1
            wait = exc.retry_after if exc.retry_after is not None else default_retry_after
            logger.warning("Rate limited; waiting %.0fs before retry %d", wait, attempt)
            if on_wait is not None:
                on_wait(wait)
            sleep(wait)


def fetch_days_sequentially(
    days: list[date],
    fetch_day: Callable[[date], TemperatureRecord],
    *,
    delay_seconds: float = DEFAULT_DELAY_SECONDS,
    default_retry_after: float = DEFAULT_RETRY_AFTER_SECONDS,
    max_rate_limit_retries: int | None = DEFAULT_MAX_RATE_LIMIT_RETRIES,
    sleep: Sleeper = time.sleep,
    on_progress: Callable[[FetchState], None] | None = None,
) -> FetchState:
    """
    Fetch ``days`` one at a time, tolerating per-day failures.

    Args:
        days: Days to fetch, in order.
        fetch_day: Performs the request for one day and returns its record.
            Raises ``ProviderRequestError`` (or ``RateLimitedError``) on failure.
        delay_seconds: Pause between consecutive days.
        default_retry_after: Wait for a 429 without a Retry-After header.
        max_rate_limit_retries: Retry cap per day for 429s (None = unlimited).
        sleep: Sleep function (injectable for tests).
        on_progress: Receives the state after every day.

    Returns:
        Final state; ``records`` has one entry per day.
    """
    state = FetchState(status=Status.IN_PROGRESS, total=len(days))

    def _count_wait(_seconds: float) -> None:
        state.rate_limit_waits += 1

    for i, day in enumerate(days):
        try:
            record = with_rate_limit_retry(
                lambda day=day: fetch_day(day),  # type: ignore[misc]
                default_retry_after=default_retry_after,
                max_retries=max_rate_limit_retries,
                sleep=sleep,
                on_wait=_count_wait,
            )
        except RateLimitedError:
            reason = "Rate limited: retries exhausted"
            logger.warning("Giving up on %s: %s", day, reason)
            record = TemperatureRecord.failed(day, reason)
            state.failures.append(DayFailure(sort_key=day.isoformat(), reason=reason))
        except ProviderRequestError as exc:
            logger.warning("Fetch failed for %s: %s", day, exc)
            record = TemperatureRecord.failed(day, str(exc))
            state.failures.append(DayFailure(sort_key=day.isoformat(), reason=str(exc)))

        state.records.append(record)
        state.completed += 1
        if on_progress is not None:
            on_progress(state)

        if i < len(days) - 1 and delay_seconds > 0:
            sleep(delay_seconds)

    state.status = Status.COMPLETED
    return state
