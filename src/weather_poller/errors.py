"""Exceptions raised by the fetch and parse steps.

These never cross into consumer code from the background thread: the poll
cycle converts them to failure outcomes. They do surface when the fetch or
parse functions are called directly.
"""

from __future__ import annotations


class WeatherPollerError(Exception):
    """Base exception for all weather poller errors."""


class FetchError(WeatherPollerError):
    """Raised when the request could not be completed (DNS, connect, timeout)."""


class RemoteStatusError(WeatherPollerError):
    """Raised when the remote service answers with a non-2xx status."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"{status_code} {reason}".strip())


class ParseError(WeatherPollerError):
    """Raised when a response body is not a valid current-weather document."""
