"""OpenWeatherMap API constants and query building.

API docs:
  - Current weather: https://openweathermap.org/current
"""

from __future__ import annotations

import re

from weather_poller.schemas import Target

OPENWEATHER_CURRENT_API = "https://api.openweathermap.org/data/2.5/weather"

# "45.52,-122.68" or "45.52 , -122.68"
_COORDS_RE = re.compile(r"(-?\d+\.\d+)\s*,\s*(-?\d+\.\d+)")


def location_params(location: str) -> dict[str, str]:
    """
    Map a free-form location to the query parameters that select it.

    A purely numeric location is a city id, a decimal ``lat,lon`` pair is a
    coordinate lookup, and anything else is a city name query.
    """
    if location.isdigit():
        return {"id": location}
    match = _COORDS_RE.search(location)
    if match:
        return {"lat": match.group(1), "lon": match.group(2)}
    return {"q": location}


def build_params(target: Target) -> dict[str, str]:
    """Full query string parameters for one current-weather request."""
    params = location_params(target.location)
    params.update(
        {
            "units": target.units.value,
            "lang": target.language,
            "appid": target.credential,
        }
    )
    return params


def redact(params: dict[str, str]) -> dict[str, str]:
    """Copy of ``params`` that is safe to log."""
    return {k: ("***" if k == "appid" else v) for k, v in params.items()}
