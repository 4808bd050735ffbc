"""Weather Poller - background OpenWeatherMap polling with exactly-once delivery.

Architecture::

    datasources/   External APIs (OpenWeatherMap current weather: fetch + parse)
    polling/       Tick, single-slot mailbox, background poller, one-shot helpers
    services/      Shared utilities (HTTP session with default timeout)
    schemas.py     Target, WeatherRecord and error models
    config.py      Settings from WEATHER_POLLER_* environment variables

Data flow: Target -> Poller thread -> PollCycle (fetch -> parse) -> Outcome
-> DeliveryChannel -> consumer (poll() / wait_take() / fetch_once_*()).

Nothing is cached: each outcome is handed out at most once.
"""

__version__ = "0.1.0"
__author__ = "Michael Howden"

from weather_poller.config import Settings
from weather_poller.polling import (
    LOADING,
    NO_NEW_DATA,
    Failure,
    Poller,
    Success,
    fetch_once_async,
    fetch_once_blocking,
    poll,
    start,
)
from weather_poller.schemas import CurrentWeather, ErrorDetail, ErrorKind, Target, Units

__all__ = [
    "LOADING",
    "NO_NEW_DATA",
    "CurrentWeather",
    "ErrorDetail",
    "ErrorKind",
    "Failure",
    "Poller",
    "Settings",
    "Success",
    "Target",
    "Units",
    "__version__",
    "fetch_once_async",
    "fetch_once_blocking",
    "poll",
    "start",
]
