"""OpenWeatherMap data source.

Fetches the current-weather report for a city name, city id or coordinates.

Public API:
  - current: fetch_current (raw body), parse_current (validated record)
  - client: API URL, location/query building
"""

from weather_poller.datasources.openweather.client import (
    OPENWEATHER_CURRENT_API,
    build_params,
    location_params,
)
from weather_poller.datasources.openweather.current import fetch_current, parse_current

__all__ = [
    "OPENWEATHER_CURRENT_API",
    "build_params",
    "fetch_current",
    "location_params",
    "parse_current",
]
