"""
Tests for the fetch-and-normalize pipeline.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any
from unittest.mock import Mock, patch

import pytest

from daily_highs.datasources import OpenMeteoArchive, OpenWeatherForecast, WeatherApiHistory
from daily_highs.errors import (
    USER_ERROR_PREFIX,
    MissingCredentialError,
    ProviderRequestError,
    RateLimitedError,
)
from daily_highs.pipeline import check_credentials, fetch_high_temperatures
from daily_highs.schemas import DateRange, FetchState, Sentinel, Status

TODAY = date(2024, 3, 15)


def archive_payload() -> dict[str, Any]:
    return {
        "daily": {
            "time": ["2022-12-31", "2023-01-01", "2023-01-02", "2023-01-03"],
            "temperature_2m_max": [39.6, 45.2, None, 47.5],
        }
    }


class TestCheckCredentials:
    def test_missing_key_raises(self) -> None:
        with pytest.raises(MissingCredentialError):
            check_credentials(OpenWeatherForecast(None))

    def test_blank_key_raises(self) -> None:
        with pytest.raises(MissingCredentialError):
            check_credentials(OpenWeatherForecast("   "))

    def test_keyless_provider_passes(self) -> None:
        check_credentials(OpenMeteoArchive())


class TestSingleRequest:
    """Single-request adapters."""

    @patch("daily_highs.pipeline.get_json")
    def test_archive_success(self, mock_get_json: Mock) -> None:
        mock_get_json.return_value = archive_payload()

        outcome = fetch_high_temperatures(OpenMeteoArchive(), today=TODAY, sleep=Mock())

        assert outcome.success
        assert outcome.provider == "open-meteo-archive"
        assert outcome.date_range == DateRange(start=date(2023, 1, 1), end=date(2023, 12, 31))
        assert [(r.date, r.high_temperature) for r in outcome.records] == [
            ("1/1/2023", 45),
            ("1/3/2023", 48),
        ]
        _url, params = mock_get_json.call_args.args
        assert params["start_date"] == "2023-01-01"

    @patch("daily_highs.pipeline.get_json")
    def test_http_failure_is_single_error_message(self, mock_get_json: Mock) -> None:
        mock_get_json.side_effect = ProviderRequestError("HTTP 500", "Failed to fetch data")

        outcome = fetch_high_temperatures(OpenMeteoArchive(), today=TODAY, sleep=Mock())

        assert not outcome.success
        assert outcome.records == []
        assert outcome.error == f"{USER_ERROR_PREFIX}HTTP 500: Failed to fetch data"

    @patch("daily_highs.pipeline.get_json")
    def test_missing_credential_blocks_request(self, mock_get_json: Mock) -> None:
        outcome = fetch_high_temperatures(OpenWeatherForecast(None), today=TODAY)

        assert outcome.error is not None
        assert outcome.error.startswith(USER_ERROR_PREFIX)
        assert "API key required" in outcome.error
        mock_get_json.assert_not_called()

    @patch("daily_highs.pipeline.get_json")
    def test_rate_limit_waits_then_succeeds(self, mock_get_json: Mock) -> None:
        mock_get_json.side_effect = [RateLimitedError(retry_after=3), archive_payload()]
        sleeps: list[float] = []

        outcome = fetch_high_temperatures(OpenMeteoArchive(), today=TODAY, sleep=sleeps.append)

        assert outcome.success
        assert sleeps == [3]
        assert mock_get_json.call_count == 2

    @patch("daily_highs.pipeline.get_json")
    def test_rate_limit_cap_is_fatal_for_single_request(self, mock_get_json: Mock) -> None:
        mock_get_json.side_effect = RateLimitedError()

        outcome = fetch_high_temperatures(
            OpenMeteoArchive(), today=TODAY, max_rate_limit_retries=1, sleep=Mock()
        )

        assert outcome.error == f"{USER_ERROR_PREFIX}HTTP 429: Rate limited"

    @patch("daily_highs.pipeline.get_json")
    def test_unparseable_dates_are_skipped(self, mock_get_json: Mock) -> None:
        mock_get_json.return_value = {
            "daily": {
                "time": ["2023-01-01", "garbage", None],
                "temperature_2m_max": [45.2, 50.0, 51.0],
            }
        }

        outcome = fetch_high_temperatures(OpenMeteoArchive(), today=TODAY, sleep=Mock())

        assert outcome.success
        assert [(r.date, r.high_temperature) for r in outcome.records] == [("1/1/2023", 45)]

    @patch("daily_highs.pipeline.get_json")
    def test_non_object_body_yields_no_records(self, mock_get_json: Mock) -> None:
        mock_get_json.return_value = ["not", "an", "object"]

        outcome = fetch_high_temperatures(OpenMeteoArchive(), today=TODAY, sleep=Mock())

        assert outcome.success
        assert outcome.records == []

    @patch("daily_highs.pipeline.get_json")
    def test_normalizer_error_is_single_error_message(
        self, mock_get_json: Mock, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        adapter = OpenMeteoArchive()
        mock_get_json.return_value = archive_payload()
        monkeypatch.setattr(adapter, "normalize", Mock(side_effect=KeyError("daily")))

        outcome = fetch_high_temperatures(adapter, today=TODAY, sleep=Mock())

        assert outcome.error is not None
        assert outcome.error.startswith(f"{USER_ERROR_PREFIX}Invalid response:")

    @patch("daily_highs.pipeline.get_json")
    def test_failure_reports_failed_progress(self, mock_get_json: Mock) -> None:
        mock_get_json.side_effect = ProviderRequestError("Network error", "timed out")
        states: list[FetchState] = []

        fetch_high_temperatures(
            OpenMeteoArchive(), today=TODAY, sleep=Mock(), on_progress=states.append
        )

        assert states[-1].status == Status.FAILED
        assert states[-1].error is not None


class TestSequential:
    """Per-day adapters run through the sequential loop."""

    @pytest.fixture
    def adapter(self, monkeypatch: pytest.MonkeyPatch) -> WeatherApiHistory:
        adapter = WeatherApiHistory("key")
        short = DateRange(start=date(2023, 1, 1), end=date(2023, 1, 4))
        monkeypatch.setattr(adapter, "date_range", lambda _today: short)
        return adapter

    @staticmethod
    def day_payload(iso: str, high: float) -> dict[str, Any]:
        return {"forecast": {"forecastday": [{"date": iso, "day": {"maxtemp_f": high}}]}}

    @patch("daily_highs.pipeline.get_json")
    def test_all_days_fetched_in_order(self, mock_get_json: Mock, adapter: WeatherApiHistory) -> None:
        mock_get_json.side_effect = lambda _url, params: self.day_payload(params["dt"], 50.0)
        sleeps: list[float] = []

        outcome = fetch_high_temperatures(
            adapter, today=TODAY, delay_seconds=1.0, sleep=sleeps.append
        )

        assert outcome.success
        assert [r.sort_key for r in outcome.records] == [
            "2023-01-01",
            "2023-01-02",
            "2023-01-03",
            "2023-01-04",
        ]
        assert sleeps == [1.0, 1.0, 1.0]
        assert [c.args[1]["dt"] for c in mock_get_json.call_args_list] == [
            "2023-01-01",
            "2023-01-02",
            "2023-01-03",
            "2023-01-04",
        ]

    @patch("daily_highs.pipeline.get_json")
    def test_partial_failures_and_rate_limits(
        self, mock_get_json: Mock, adapter: WeatherApiHistory
    ) -> None:
        limited: set[str] = set()

        def fake_get_json(_url: str, params: dict[str, Any]) -> dict[str, Any]:
            dt = params["dt"]
            if dt == "2023-01-02":
                raise ProviderRequestError("HTTP 400", "Failed to fetch data")
            if dt == "2023-01-03" and dt not in limited:
                limited.add(dt)
                raise RateLimitedError(retry_after=10)
            return self.day_payload(dt, 61.0)

        mock_get_json.side_effect = fake_get_json
        sleeps: list[float] = []
        progress: list[int] = []

        outcome = fetch_high_temperatures(
            adapter,
            today=TODAY,
            delay_seconds=0,
            sleep=sleeps.append,
            on_progress=lambda s: progress.append(s.completed),
        )

        assert outcome.success
        assert len(outcome.records) == 4
        assert outcome.records[1].sentinel == Sentinel.ERROR
        assert outcome.records[2].high_temperature == 61
        assert [f.sort_key for f in outcome.failures] == ["2023-01-02"]
        assert sleeps == [10]
        assert progress == [1, 2, 3, 4]

    @pytest.mark.parametrize("bad_body", [[], {"forecast": {"forecastday": [None]}}, "text"])
    @patch("daily_highs.pipeline.get_json")
    def test_malformed_day_body_does_not_stop_loop(
        self, mock_get_json: Mock, bad_body: object, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        adapter = WeatherApiHistory("key")
        two_days = DateRange(start=date(2023, 1, 1), end=date(2023, 1, 2))
        monkeypatch.setattr(adapter, "date_range", lambda _today: two_days)
        mock_get_json.side_effect = [bad_body, self.day_payload("2023-01-02", 52.0)]

        outcome = fetch_high_temperatures(adapter, today=TODAY, delay_seconds=0, sleep=Mock())

        assert outcome.success
        assert len(outcome.records) == 2
        assert outcome.records[0].sentinel == Sentinel.NOT_AVAILABLE
        assert outcome.records[1].high_temperature == 52

    @patch("daily_highs.pipeline.get_json")
    def test_normalizer_error_becomes_day_failure(
        self, mock_get_json: Mock, adapter: WeatherApiHistory, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        original = adapter.normalize_day

        def flaky_normalize(payload: Any, day: date) -> Any:
            if day == date(2023, 1, 2):
                raise TypeError("unexpected field type")
            return original(payload, day)

        monkeypatch.setattr(adapter, "normalize_day", flaky_normalize)
        mock_get_json.side_effect = lambda _url, params: self.day_payload(params["dt"], 50.0)

        outcome = fetch_high_temperatures(adapter, today=TODAY, delay_seconds=0, sleep=Mock())

        assert outcome.success
        assert len(outcome.records) == 4
        assert outcome.records[1].sentinel == Sentinel.ERROR
        assert [f.sort_key for f in outcome.failures] == ["2023-01-02"]
        assert outcome.failures[0].reason.startswith("Invalid response:")

    @patch("daily_highs.pipeline.get_json")
    def test_missing_key_blocks_loop(self, mock_get_json: Mock) -> None:
        outcome = fetch_high_temperatures(WeatherApiHistory(None), today=TODAY)
        assert outcome.error is not None
        mock_get_json.assert_not_called()

    @patch("daily_highs.pipeline.get_json")
    def test_full_year_length(self, mock_get_json: Mock) -> None:
        """N days with all successes gives N records."""
        mock_get_json.side_effect = lambda _url, params: self.day_payload(params["dt"], 50.0)

        outcome = fetch_high_temperatures(
            WeatherApiHistory("key"), today=TODAY, delay_seconds=0, sleep=Mock()
        )

        assert len(outcome.records) == 365
        assert outcome.records[0].sort_key == "2023-01-01"
        assert outcome.records[-1].sort_key == "2023-12-31"
        assert date.fromisoformat(outcome.records[-1].sort_key) - date.fromisoformat(
            outcome.records[0].sort_key
        ) == timedelta(days=364)
