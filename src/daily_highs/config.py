"""
Application settings.

Values come from environment variables prefixed with ``DAILY_HIGHS_`` or from
a local ``.env`` file, e.g.::

    DAILY_HIGHS_PROVIDER=weatherapi-history
    DAILY_HIGHS_WEATHERAPI_API_KEY=...
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for fetching and rendering daily highs."""

    model_config = SettingsConfigDict(
        env_prefix="DAILY_HIGHS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_parse_none_str="none",
    )

    app_name: str = "daily-highs"
    app_env: str = "development"
    debug: bool = False

    # Location (default: Portland, OR 97212)
    zip_code: str = "97212"
    lat: float = Field(default=45.5372, ge=-90, le=90)
    lon: float = Field(default=-122.6508, ge=-180, le=180)
    timezone: str = "America/Los_Angeles"

    # Provider selection and credentials
    provider: str = "open-meteo-archive"
    openweather_api_key: str | None = None
    weatherapi_api_key: str | None = None

    # Sequential fetch pacing
    request_delay_seconds: float = Field(default=1.0, ge=0)
    default_retry_after_seconds: float = Field(default=60.0, ge=0)
    max_rate_limit_retries: int | None = Field(default=5, ge=0)

    # Local site
    api_port: int = 8000
    site_dir: str = "site"

    def api_key_for(self, provider: str) -> str | None:
        """Return the configured API key for a provider name, if any."""
        if provider.startswith("openweather"):
            return self.openweather_api_key
        if provider.startswith("weatherapi"):
            return self.weatherapi_api_key
        return None


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
