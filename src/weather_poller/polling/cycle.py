"""One poll attempt: fetch, then parse, folded into a single outcome."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from weather_poller.datasources.openweather import fetch_current, parse_current
from weather_poller.errors import FetchError, ParseError, RemoteStatusError
from weather_poller.polling.outcome import Failure, Outcome, Success
from weather_poller.schemas import ErrorDetail, ErrorKind, Target, WeatherRecord

logger = logging.getLogger(__name__)

Fetch = Callable[[Target], str | bytes]
Parse = Callable[[str | bytes], WeatherRecord]


@dataclass(frozen=True)
class PollCycle:
    """
    Stateless fetch+parse step run once per tick.

    Errors never escape ``attempt``: every failure of ``fetch`` or ``parse``
    comes back as a ``Failure`` outcome. Exceptions outside the
    ``WeatherPollerError`` hierarchy are folded in too (fetch side as
    TRANSPORT, parse side as PARSE_FAILURE) so a misbehaving collaborator
    cannot kill the poll thread.
    """

    fetch: Fetch = field(default=fetch_current)
    parse: Parse = field(default=parse_current)

    def attempt(self, target: Target) -> Outcome:
        """Run one fetch+parse and return its outcome."""
        try:
            raw = self.fetch(target)
        except RemoteStatusError as exc:
            return _failure(ErrorKind.REMOTE_STATUS, str(exc), status_code=exc.status_code)
        except FetchError as exc:
            return _failure(ErrorKind.TRANSPORT, str(exc))
        except Exception as exc:
            logger.exception("Fetch raised an unexpected error")
            return _failure(ErrorKind.TRANSPORT, f"{type(exc).__name__}: {exc}")

        # Parse only runs on a successful fetch.
        try:
            record = self.parse(raw)
        except ParseError as exc:
            return _failure(ErrorKind.PARSE_FAILURE, str(exc))
        except Exception as exc:
            logger.exception("Parse raised an unexpected error")
            return _failure(ErrorKind.PARSE_FAILURE, f"{type(exc).__name__}: {exc}")

        return Success(record)


def _failure(kind: ErrorKind, message: str, status_code: int | None = None) -> Failure:
    return Failure(ErrorDetail(kind=kind, message=message, status_code=status_code))
