"""
Application settings.

Values come from ``WEATHER_POLLER_*`` environment variables or a ``.env``
file in the working directory, e.g.::

    WEATHER_POLLER_API_KEY=...
    WEATHER_POLLER_LOCATION="45.52,-122.68"
    WEATHER_POLLER_INTERVAL_MINUTES=5
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from weather_poller.datasources.openweather.client import OPENWEATHER_CURRENT_API
from weather_poller.schemas import Target, Units

#: Spacing between attempts in one-shot mode, where there is no interval to reuse.
DEFAULT_RETRY_SECONDS = 10.0


class Settings(BaseSettings):
    """Runtime configuration for the poller and CLI."""

    model_config = SettingsConfigDict(
        env_prefix="WEATHER_POLLER_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "weather-poller"
    debug: bool = False

    api_key: str = Field(default="", repr=False)
    location: str = "London"
    units: Units = Units.METRIC
    language: str = "en"
    interval_minutes: int = Field(default=10, ge=0)
    retry_seconds: float = Field(default=DEFAULT_RETRY_SECONDS, gt=0)

    base_url: str = OPENWEATHER_CURRENT_API
    request_timeout: float = Field(default=30.0, gt=0)

    def target(self, location: str | None = None, interval_minutes: int | None = None) -> Target:
        """Build a poll target from these settings, with optional overrides."""
        return Target.from_minutes(
            location or self.location,
            self.units,
            self.language,
            self.api_key,
            self.interval_minutes if interval_minutes is None else interval_minutes,
        )


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
