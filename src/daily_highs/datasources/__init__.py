"""External weather providers.

Each subdirectory is one provider with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants
    └── {feature}.py      # One ProviderAdapter per endpoint

Adding a new provider
---------------------
1. Create ``datasources/{name}/`` with files above.
   See ``open_meteo/`` for a minimal example.

2. Subclass ``ProviderAdapter`` (``base.py``): set ``name``, implement
   ``build_request`` and ``normalize``.  Reuse a normalizer from
   ``daily_highs.normalize`` when the payload shape matches one.

3. Register the class in ``PROVIDERS`` below. Subclass ``CoordinateAdapter`` or
   ``ZipCodeAdapter``, or override ``from_settings``, so ``get_adapter`` can
   build it from configuration.

4. Add tests in ``tests/test_datasources.py``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from daily_highs.datasources.base import ProviderAdapter
from daily_highs.datasources.open_meteo import OpenMeteoArchive, OpenMeteoForecast
from daily_highs.datasources.openweather import OpenWeatherForecast
from daily_highs.datasources.weatherapi import WeatherApiForecast, WeatherApiHistory
from daily_highs.errors import UnknownProviderError

if TYPE_CHECKING:
    from daily_highs.config import Settings

PROVIDERS: dict[str, type[ProviderAdapter]] = {
    cls.name: cls
    for cls in (
        OpenMeteoArchive,
        OpenMeteoForecast,
        OpenWeatherForecast,
        WeatherApiHistory,
        WeatherApiForecast,
    )
}


def get_adapter(settings: Settings, name: str | None = None, api_key: str | None = None) -> ProviderAdapter:
    """
    Build the adapter selected by configuration.

    Args:
        settings: Location and credentials.
        name: Provider name; defaults to ``settings.provider``.
        api_key: Overrides the key from settings.

    Raises:
        UnknownProviderError: ``name`` isn't registered.
    """
    name = name or settings.provider
    cls = PROVIDERS.get(name)
    if cls is None:
        raise UnknownProviderError(name, sorted(PROVIDERS))
    return cls.from_settings(settings, api_key)


__all__ = [
    "PROVIDERS",
    "OpenMeteoArchive",
    "OpenMeteoForecast",
    "OpenWeatherForecast",
    "ProviderAdapter",
    "WeatherApiForecast",
    "WeatherApiHistory",
    "get_adapter",
]
