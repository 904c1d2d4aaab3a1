"""WeatherAPI.com constants.

API docs: https://www.weatherapi.com/docs/
History is queried one day per request (``dt``); the paid plans cap how fast
those can be issued, hence the sequential loop with a fixed delay.
"""

WEATHERAPI_BASE = "https://api.weatherapi.com/v1"
WEATHERAPI_HISTORY = f"{WEATHERAPI_BASE}/history.json"
WEATHERAPI_FORECAST = f"{WEATHERAPI_BASE}/forecast.json"

FORECAST_HORIZON_DAYS = 14
