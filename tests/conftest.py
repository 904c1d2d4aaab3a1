"""Shared test helpers."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import pytest
import requests


def make_response(
    status_code: int = 200,
    body: Any = None,
    headers: dict[str, str] | None = None,
) -> requests.Response:
    """Build a real ``requests.Response`` without touching the network."""
    resp = requests.Response()
    resp.status_code = status_code
    resp.encoding = "utf-8"
    resp._content = body.encode() if isinstance(body, str) else json.dumps(body or {}).encode()
    resp.headers.update(headers or {})
    resp.url = "https://api.example.com/test"
    return resp


@pytest.fixture
def fake_response() -> Callable[..., requests.Response]:
    return make_response


@pytest.fixture
def sleeps() -> list[float]:
    """Collects sleep durations; pass ``sleeps.append`` as the sleep function."""
    return []
