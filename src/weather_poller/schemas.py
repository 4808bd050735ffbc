"""
Domain models for the weather poller.

Pydantic models for the poll target and the OpenWeatherMap current-weather
document. The poller core never looks inside a record; the parser validates
the whole document or nothing.
"""

from __future__ import annotations

from datetime import timedelta
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

# =============================================================================
# Target
# =============================================================================


class Units(StrEnum):
    """Unit system requested from the remote service."""

    METRIC = "metric"
    IMPERIAL = "imperial"
    STANDARD = "standard"


class Target(BaseModel):
    """What to poll and how often.

    ``interval`` of zero selects one-shot mode: the poller stops itself after
    the first successful update.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    location: str = Field(..., description="City name, city id, or 'lat,lon'")
    units: Units = Units.METRIC
    language: str = "en"
    credential: str = Field(default="", repr=False, description="API key (appid)")
    interval: timedelta = timedelta(0)

    @field_validator("interval")
    @classmethod
    def _non_negative(cls, value: timedelta) -> timedelta:
        if value < timedelta(0):
            raise ValueError("interval must not be negative")
        return value

    @classmethod
    def from_minutes(
        cls,
        location: str,
        units: Units | str,
        language: str,
        credential: str,
        interval_minutes: int = 0,
    ) -> Target:
        """Build a target with the interval given in whole minutes."""
        if interval_minutes < 0:
            raise ValueError("interval_minutes must not be negative")
        return cls(
            location=location,
            units=Units(units),
            language=language,
            credential=credential,
            interval=timedelta(minutes=interval_minutes),
        )

    @property
    def one_shot(self) -> bool:
        """True when the poller should stop after the first success."""
        return self.interval == timedelta(0)


# =============================================================================
# Errors as data
# =============================================================================


class ErrorKind(StrEnum):
    """Why a tick did not produce a record."""

    AWAITING_FIRST_RESULT = "awaiting_first_result"
    TRANSPORT = "transport"
    REMOTE_STATUS = "remote_status"
    PARSE_FAILURE = "parse_failure"


class ErrorDetail(BaseModel):
    """Failure description delivered to the consumer in place of a record."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str
    status_code: int | None = Field(default=None, description="Set for REMOTE_STATUS only")


# =============================================================================
# Current weather (OpenWeatherMap /data/2.5/weather)
# =============================================================================


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Coord(_Record):
    """Location coordinates."""

    lon: float
    lat: float


class Condition(_Record):
    """Weather condition description (Rain, Snow, Clouds, ...)."""

    id: int
    main: str
    description: str
    icon: str


class MainReport(_Record):
    """Temperature, pressure and humidity.

    Temperatures are Kelvin for ``standard``, Celsius for ``metric`` and
    Fahrenheit for ``imperial``. Pressures are hPa.
    """

    temp: float
    feels_like: float
    pressure: float
    humidity: float
    temp_min: float
    temp_max: float
    sea_level: float | None = None
    grnd_level: float | None = None


class Wind(_Record):
    """Wind speed (m/s, or mph for imperial) and meteorological direction."""

    speed: float
    deg: float
    gust: float | None = None


class Clouds(_Record):
    """Cloudiness, %."""

    all: float


class Volume(_Record):
    """Rain or snow volume for the last 1 and 3 hours, mm."""

    h1: float | None = Field(default=None, alias="1h")
    h3: float | None = Field(default=None, alias="3h")


class Sys(_Record):
    """Country and sun times (unix, UTC)."""

    type: int | None = None
    id: int | None = None
    message: float | None = None
    country: str
    sunrise: int
    sunset: int


class CurrentWeather(_Record):
    """A complete current-weather report for one location."""

    coord: Coord
    weather: tuple[Condition, ...]
    base: str
    main: MainReport
    visibility: int
    wind: Wind
    clouds: Clouds
    rain: Volume | None = None
    snow: Volume | None = None
    dt: int
    sys: Sys
    timezone: int
    id: int
    name: str
    cod: int


#: The opaque record type handed out by the poller.
WeatherRecord = CurrentWeather
