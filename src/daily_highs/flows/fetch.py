"""
Prefect flow for fetching daily high temperatures.

Run locally:
    python -m daily_highs.flows.fetch

Run with Prefect dashboard:
    prefect server start &
    python -m daily_highs.flows.fetch
"""

from __future__ import annotations

from prefect import flow, task

from daily_highs.config import get_settings
from daily_highs.datasources import get_adapter
from daily_highs.pipeline import fetch_high_temperatures
from daily_highs.schemas import FetchOutcome, FetchState


def _print_progress(state: FetchState) -> None:
    """Report sequential progress every 10% and at the end."""
    if not state.total:
        return
    step = max(state.total // 10, 1)
    if state.completed % step == 0 or state.completed == state.total:
        print(
            f"  {state.completed}/{state.total} days "
            f"({state.progress:.0%}, {len(state.failures)} failed, "
            f"{state.rate_limit_waits} rate-limit waits)"
        )


@task(name="fetch-records")
def fetch_records(provider: str | None = None, api_key: str | None = None) -> FetchOutcome:
    """Fetch and normalize records from one provider."""
    settings = get_settings()
    adapter = get_adapter(settings, provider, api_key)
    return fetch_high_temperatures(
        adapter,
        delay_seconds=settings.request_delay_seconds,
        default_retry_after=settings.default_retry_after_seconds,
        max_rate_limit_retries=settings.max_rate_limit_retries,
        on_progress=_print_progress,
    )


@flow(name="fetch-highs", log_prints=True)
def fetch_all(provider: str | None = None, api_key: str | None = None) -> FetchOutcome:
    """
    Fetch daily highs from the configured provider.

    This is the Prefect flow wrapping one user-triggered fetch.
    Fatal errors come back in ``outcome.error`` rather than failing the flow.
    """
    name = provider or get_settings().provider
    print(f"Fetching daily highs from {name}...")
    outcome = fetch_records(name, api_key)

    if outcome.error:
        print(outcome.error)
    else:
        print(f"Fetched {len(outcome.records)} days from {name}")
        if outcome.failures:
            print(f"{len(outcome.failures)} day(s) failed and are marked Error")
    return outcome


if __name__ == "__main__":
    result = fetch_all()
    print(f"Flow complete: {len(result.records)} records, error={result.error}")
