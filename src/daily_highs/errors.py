"""Exception types raised while fetching and normalizing temperature data."""

from __future__ import annotations

#: Prefix for every fatal error shown to the user.
USER_ERROR_PREFIX = "Failed to fetch temperature data: "


class DailyHighsError(Exception):
    """Base class for all application errors."""


class MissingCredentialError(DailyHighsError):
    """A provider needs an API key and none was configured."""

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(f"API key required for provider {provider!r}")


class UnknownProviderError(DailyHighsError):
    """Configuration names a provider that doesn't exist."""

    def __init__(self, name: str, known: list[str]) -> None:
        self.name = name
        super().__init__(f"Unknown provider {name!r} (choose from: {', '.join(known)})")


class ProviderRequestError(DailyHighsError):
    """Transport failure or non-success HTTP status from a provider.

    ``str()`` renders as ``"<category>: <detail>"`` so the failure category
    leads the message, e.g. ``"HTTP 500: Failed to fetch data"``.
    """

    def __init__(self, category: str, detail: str, status_code: int | None = None) -> None:
        self.category = category
        self.detail = detail
        self.status_code = status_code
        super().__init__(f"{category}: {detail}")


class RateLimitedError(ProviderRequestError):
    """HTTP 429 from a provider. Carries the server's Retry-After, if given."""

    def __init__(self, retry_after: float | None = None) -> None:
        self.retry_after = retry_after
        super().__init__("HTTP 429", "Rate limited", status_code=429)


def user_message(exc: Exception) -> str:
    """Format a fatal error as the single user-facing message string."""
    return f"{USER_ERROR_PREFIX}{exc}"
