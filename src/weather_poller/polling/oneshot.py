"""Fetch the weather once, blocking or async.

Both entry points start a one-shot poller (``interval == 0``), wait for its
first successful outcome and return it. Failed ticks are retried by the
poller every ``retry_delay`` seconds, so a wrong API key keeps retrying until
``timeout`` runs out or the caller gives up. The poll thread is stopped on
every exit path.
"""

from __future__ import annotations

import asyncio
import logging
import time

from weather_poller.config import DEFAULT_RETRY_SECONDS
from weather_poller.errors import WeatherPollerError
from weather_poller.polling.cycle import PollCycle
from weather_poller.polling.outcome import Failure, NoNewData, Outcome, Success
from weather_poller.polling.poller import Poller, start
from weather_poller.schemas import Units

logger = logging.getLogger(__name__)


def fetch_once_blocking(
    location: str,
    units: Units | str = Units.METRIC,
    language: str = "en",
    credential: str = "",
    *,
    timeout: float | None = None,
    cycle: PollCycle | None = None,
    retry_delay: float = DEFAULT_RETRY_SECONDS,
) -> Success:
    """
    Block the calling thread until the first successful update.

    Args:
        location: City name, city id, or ``"lat,lon"``.
        units: Unit system for the report.
        language: Language code for condition descriptions.
        credential: OpenWeatherMap API key.
        timeout: Seconds to wait before giving up (default: wait forever).
        cycle: Poll cycle to run (default: OpenWeatherMap fetch+parse).
        retry_delay: Seconds between failed attempts.

    Raises:
        TimeoutError: ``timeout`` passed without a successful update.
    """
    poller = start(location, units, language, credential, 0, cycle=cycle, retry_delay=retry_delay)
    deadline = None if timeout is None else time.monotonic() + timeout
    try:
        while True:
            remaining = None if deadline is None else deadline - time.monotonic()
            if remaining is not None and remaining <= 0:
                raise TimeoutError(f"no weather for {location!r} within {timeout}s")
            result = _accept(poller, poller.wait_take(remaining))
            if result is not None:
                break
    finally:
        poller.stop()
    poller.wait()
    return result


async def fetch_once_async(
    location: str,
    units: Units | str = Units.METRIC,
    language: str = "en",
    credential: str = "",
    *,
    timeout: float | None = None,
    cycle: PollCycle | None = None,
    retry_delay: float = DEFAULT_RETRY_SECONDS,
) -> Success:
    """
    Await the first successful update without blocking the event loop.

    Same arguments as ``fetch_once_blocking``. Cancelling the awaiting task
    stops the poller.

    Raises:
        TimeoutError: ``timeout`` passed without a successful update.
    """
    poller = start(location, units, language, credential, 0, cycle=cycle, retry_delay=retry_delay)
    try:
        async with asyncio.timeout(timeout):
            while True:
                result = _accept(poller, await poller.wait_take_async())
                if result is not None:
                    break
    finally:
        poller.stop()
    await asyncio.to_thread(poller.wait)
    return result


def _accept(poller: Poller, outcome: Outcome | NoNewData) -> Success | None:
    """The success we are waiting for, or None to keep waiting."""
    if isinstance(outcome, NoNewData) and poller.channel.closed:
        # The final success can land between a timed-out wait and the close.
        outcome = poller.poll()
        if isinstance(outcome, NoNewData):
            raise WeatherPollerError(f"{poller!r} stopped without producing a result")
    if isinstance(outcome, Success):
        return outcome
    if isinstance(outcome, Failure):
        if outcome.loading:
            logger.debug("Waiting for first result from %r", poller.target.location)
        else:
            logger.info(
                "Attempt for %r failed, retrying: %s", poller.target.location, outcome.error.message
            )
    return None
