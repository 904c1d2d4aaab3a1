"""OpenWeather API constants.

API docs: https://openweathermap.org/forecast5
The free tier's 5 day / 3 hour forecast is the only daily-ish product without
a subscription, so the forecast horizon is 5 days.
"""

OPENWEATHER_FORECAST_API = "https://api.openweathermap.org/data/2.5/forecast"

FORECAST_HORIZON_DAYS = 5

# 8 buckets per day * 5 days
MAX_BUCKETS = 40
