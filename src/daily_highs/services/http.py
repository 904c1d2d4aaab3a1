"""
HTTP access to the weather providers.

``get_json`` issues one GET through a shared session and maps every failure
to a ``ProviderRequestError``. Gateway errors (502/503/504) are retried by
urllib3 with backoff. A 429 becomes ``RateLimitedError`` carrying the
provider's ``Retry-After`` so the fetch loop decides when to try again.

Usage::

    from daily_highs.services.http import get_json

    data = get_json("https://api.example.com/v1/data", params={"q": "97212"})
"""

from __future__ import annotations

import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from daily_highs.errors import ProviderRequestError, RateLimitedError

logger = logging.getLogger(__name__)

#: Gateway errors only; 429 is left to the fetch loop.
DEFAULT_RETRY = Retry(
    total=3,
    backoff_factor=1,  # 0s, 2s, 4s between retries
    status_forcelist=[502, 503, 504],
    allowed_methods=["GET", "HEAD", "OPTIONS"],
    raise_on_status=False,  # let get_json() classify the status
)

DEFAULT_TIMEOUT = 30  # seconds
USER_AGENT = "daily-highs/0.1"


class TimeoutHTTPAdapter(HTTPAdapter):
    """``HTTPAdapter`` that applies ``timeout`` when the caller gives none."""

    def __init__(self, *args: Any, timeout: float = DEFAULT_TIMEOUT, **kwargs: Any) -> None:
        self.timeout = timeout
        super().__init__(*args, **kwargs)

    def send(  # type: ignore[override]
        self, request: requests.PreparedRequest, timeout: Any = None, **kwargs: Any
    ) -> requests.Response:
        return super().send(
            request, timeout=self.timeout if timeout is None else timeout, **kwargs
        )


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Session for provider calls: 5xx retry and a default timeout on both schemes.

    Args:
        retry: Retry policy (``DEFAULT_RETRY`` when omitted).
        timeout: Seconds allowed per request unless the call passes its own.
    """
    provider_session = requests.Session()
    adapter = TimeoutHTTPAdapter(max_retries=retry or DEFAULT_RETRY, timeout=timeout)
    for prefix in ("https://", "http://"):
        provider_session.mount(prefix, adapter)
    provider_session.headers["User-Agent"] = USER_AGENT
    return provider_session


#: Shared by every provider request.
session: requests.Session = create_session()


def parse_retry_after(value: str | None) -> float | None:
    """Parse a ``Retry-After`` header given in seconds. Dates are not supported."""
    if value is None:
        return None
    try:
        seconds = float(value.strip())
    except ValueError:
        return None
    return seconds if seconds >= 0 else None


def get_json(url: str, params: dict[str, Any] | None = None) -> Any:
    """
    GET ``url`` and decode the JSON body.

    Raises:
        RateLimitedError: Status 429.
        ProviderRequestError: Transport failure, other non-2xx status, or a
            body that isn't JSON.
    """
    logger.debug("GET %s params=%s", url, params)
    try:
        resp = session.get(url, params=params or {})
    except requests.RequestException as exc:
        raise ProviderRequestError("Network error", str(exc)) from exc

    if resp.status_code == 429:
        raise RateLimitedError(parse_retry_after(resp.headers.get("Retry-After")))
    if not resp.ok:
        raise ProviderRequestError(
            f"HTTP {resp.status_code}", "Failed to fetch data", status_code=resp.status_code
        )

    try:
        return resp.json()
    except ValueError as exc:
        raise ProviderRequestError("Invalid response", f"body is not JSON ({exc})") from exc
