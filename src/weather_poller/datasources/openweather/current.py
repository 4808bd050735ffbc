"""Current weather from the OpenWeatherMap ``/data/2.5/weather`` endpoint.

``fetch_current`` and ``parse_current`` are the two halves of one poll tick.
Each raises a ``WeatherPollerError`` subclass on failure; neither retries.
"""

from __future__ import annotations

import logging

import requests
from pydantic import ValidationError

from weather_poller.datasources.openweather.client import (
    OPENWEATHER_CURRENT_API,
    build_params,
    redact,
)
from weather_poller.errors import FetchError, ParseError, RemoteStatusError
from weather_poller.schemas import CurrentWeather, Target
from weather_poller.services.http import session as default_session

logger = logging.getLogger(__name__)


def fetch_current(
    target: Target,
    *,
    base_url: str = OPENWEATHER_CURRENT_API,
    session: requests.Session | None = None,
) -> str:
    """
    Fetch the raw current-weather document for ``target``.

    Args:
        target: Location, units, language and API key to query with.
        base_url: Endpoint URL (overridable for proxies and tests).
        session: Session to send with (default: the shared session).

    Returns:
        Response body text of a 2xx response.

    Raises:
        FetchError: The request never got a response.
        RemoteStatusError: The response status was not 2xx. A bad API key
            shows up here as 401.
    """
    params = build_params(target)
    logger.debug("GET %s params=%s", base_url, redact(params))

    try:
        resp = (session or default_session).get(base_url, params=params)
    except requests.RequestException as exc:
        raise FetchError(str(exc)) from exc

    if not 200 <= resp.status_code < 300:
        raise RemoteStatusError(resp.status_code, resp.reason or "")
    return resp.text


def parse_current(raw: str | bytes) -> CurrentWeather:
    """
    Validate a raw response body into a ``CurrentWeather`` record.

    Raises:
        ParseError: Malformed JSON or a missing/mistyped field. No partial
            record is ever returned.
    """
    try:
        return CurrentWeather.model_validate_json(raw)
    except ValidationError as exc:
        raise ParseError(f"invalid current weather document: {exc}") from exc
