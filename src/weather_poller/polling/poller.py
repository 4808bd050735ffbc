"""
Background poller: runs one poll cycle per tick on its own thread.

Lifecycle::

    STARTING ──start()──▶ AWAITING_FIRST_RESULT ──success──▶ RUNNING
                               │    ▲  failure                  │ every interval
                               │    └───────┘                   ▼
                               │                           (publish, repeat)
                               └──success, one-shot──▶ STOPPED ◀──stop()── any

``start()`` publishes a ``loading...`` failure before the thread runs, so an
early probe sees "not ready" instead of nothing. The first tick runs
immediately. Every tick's outcome is published, success or failure, and
replaces whatever the consumer has not taken yet. With ``interval == 0`` the
poller stops after the first success and retries failures every
``retry_delay`` seconds until then.

``stop()`` is cooperative: a tick already in flight finishes, but its outcome
is dropped and no further tick starts.
"""

from __future__ import annotations

import logging
import threading
from enum import StrEnum
from types import TracebackType

from weather_poller.config import DEFAULT_RETRY_SECONDS
from weather_poller.polling.channel import DeliveryChannel
from weather_poller.polling.cycle import PollCycle
from weather_poller.polling.outcome import Failure, NoNewData, Outcome, loading_failure
from weather_poller.schemas import Target, Units

logger = logging.getLogger(__name__)


class PollerState(StrEnum):
    """Where the poller is in its lifecycle."""

    STARTING = "starting"
    AWAITING_FIRST_RESULT = "awaiting_first_result"
    RUNNING = "running"
    STOPPED = "stopped"


class Poller:
    """Polls ``target`` on a background thread and delivers each outcome once."""

    def __init__(
        self,
        target: Target,
        *,
        cycle: PollCycle | None = None,
        retry_delay: float = DEFAULT_RETRY_SECONDS,
    ) -> None:
        if retry_delay <= 0:
            raise ValueError("retry_delay must be positive")
        self.target = target
        self.cycle = cycle or PollCycle()
        self.retry_delay = retry_delay
        self.channel = DeliveryChannel()

        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._state = PollerState.STARTING
        self._ticks = 0
        self._thread = threading.Thread(
            target=self._run, name=f"weather-poller[{target.location}]", daemon=True
        )

    def __repr__(self) -> str:
        return f"Poller(location={self.target.location!r}, state={self._state.value})"

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def state(self) -> PollerState:
        return self._state

    @property
    def ticks(self) -> int:
        """Number of outcomes published by completed ticks."""
        return self._ticks

    @property
    def alive(self) -> bool:
        return self._thread.is_alive()

    def start(self) -> Poller:
        """Publish the loading placeholder and launch the poll thread."""
        with self._lock:
            if self._state is not PollerState.STARTING:
                raise RuntimeError(f"{self!r} cannot be started again")
            self.channel.publish(loading_failure())
            self._set_state(PollerState.AWAITING_FIRST_RESULT)
        self._thread.start()
        return self

    def stop(self) -> None:
        """Stop before the next tick. No outcome is published after this returns."""
        with self._lock:
            if self._stop.is_set():
                return
            self._stop.set()
            if self._state is not PollerState.STOPPED:
                self._set_state(PollerState.STOPPED)
        if not self._thread.is_alive():
            self.channel.close()

    def wait(self, timeout: float | None = None) -> bool:
        """Join the poll thread. Returns True if it has exited."""
        if self._thread.ident is None:
            return self._state is PollerState.STOPPED
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def __enter__(self) -> Poller:
        if self._state is PollerState.STARTING:
            self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Consumer access
    # ------------------------------------------------------------------

    def poll(self) -> Outcome | NoNewData:
        """Non-blocking probe: the next undelivered outcome or ``NO_NEW_DATA``."""
        return self.channel.try_take()

    def wait_take(self, timeout: float | None = None) -> Outcome | NoNewData:
        """Block until the next outcome (``NO_NEW_DATA`` on timeout or shutdown)."""
        return self.channel.wait_take(timeout)

    async def wait_take_async(self) -> Outcome | NoNewData:
        """Await the next outcome (``NO_NEW_DATA`` once stopped and drained)."""
        return await self.channel.wait_take_async()

    # ------------------------------------------------------------------
    # Poll thread
    # ------------------------------------------------------------------

    def _run(self) -> None:
        target = self.target
        logger.info(
            "Polling %r (%s, %s) %s",
            target.location,
            target.units.value,
            target.language,
            "once" if target.one_shot else f"every {target.interval}",
        )
        try:
            while not self._stop.is_set():
                outcome = self.cycle.attempt(target)
                if self._deliver(outcome):
                    break
                if self._stop.wait(self._next_delay()):
                    break
        finally:
            with self._lock:
                self._stop.set()
                if self._state is not PollerState.STOPPED:
                    self._set_state(PollerState.STOPPED)
            self.channel.close()
            logger.debug("Poll thread for %r exited after %d tick(s)", target.location, self._ticks)

    def _deliver(self, outcome: Outcome) -> bool:
        """Publish one tick's outcome. Returns True when the loop should end."""
        with self._lock:
            if self._stop.is_set():
                logger.debug("Discarding outcome of tick in flight at stop: %r", outcome)
                return True
            self.channel.publish(outcome)
            self._ticks += 1

            if isinstance(outcome, Failure):
                logger.warning(
                    "Tick %d for %r failed: %s",
                    self._ticks,
                    self.target.location,
                    outcome.error.message,
                )
                return False

            logger.debug("Tick %d for %r succeeded", self._ticks, self.target.location)
            if self.target.one_shot:
                self._set_state(PollerState.STOPPED)
                return True
            if self._state is PollerState.AWAITING_FIRST_RESULT:
                self._set_state(PollerState.RUNNING)
            return False

    def _next_delay(self) -> float:
        if self.target.one_shot:
            return self.retry_delay
        return self.target.interval.total_seconds()

    def _set_state(self, state: PollerState) -> None:
        logger.info("%r: %s -> %s", self.target.location, self._state.value, state.value)
        self._state = state


def start(
    location: str,
    units: Units | str = Units.METRIC,
    language: str = "en",
    credential: str = "",
    interval_minutes: int = 0,
    *,
    cycle: PollCycle | None = None,
    retry_delay: float = DEFAULT_RETRY_SECONDS,
) -> Poller:
    """
    Start polling and return the running poller as the consumer's handle.

    ``interval_minutes == 0`` runs in one-shot mode: retry until the first
    success, publish it, and stop.
    """
    target = Target.from_minutes(location, units, language, credential, interval_minutes)
    return Poller(target, cycle=cycle, retry_delay=retry_delay).start()


def poll(handle: Poller) -> Outcome | NoNewData:
    """Probe ``handle`` for an outcome it has not handed out yet."""
    return handle.poll()
