"""Single-slot, last-write-wins handoff from the poll thread to one consumer.

The slot holds at most one undelivered outcome. ``publish`` overwrites it
unconditionally; a take empties it. Nothing is kept after a take, so the
same outcome can never be handed out twice, and an outcome that is
overwritten before anyone takes it is gone for good.

One consumer per channel. Concurrent takers race for the slot and only one
of them gets each outcome.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time

from weather_poller.polling.outcome import NO_NEW_DATA, NoNewData, Outcome

logger = logging.getLogger(__name__)


class DeliveryChannel:
    """Mutex-guarded mailbox with blocking, async and non-blocking takes."""

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._slot: Outcome | None = None
        self._closed = False
        self._async_waiters: list[tuple[asyncio.AbstractEventLoop, asyncio.Future[None]]] = []
        self.published = 0
        self.overwritten = 0

    # ------------------------------------------------------------------
    # Producer side
    # ------------------------------------------------------------------

    def publish(self, outcome: Outcome) -> None:
        """Put ``outcome`` in the slot, replacing any undelivered one."""
        with self._cond:
            if self._slot is not None:
                self.overwritten += 1
                logger.debug("Dropping undelivered %r", self._slot)
            self._slot = outcome
            self.published += 1
            self._cond.notify_all()
            self._wake_async_waiters()

    def close(self) -> None:
        """Mark the producer as gone. Waiters return once the slot is empty."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()
            self._wake_async_waiters()

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Consumer side
    # ------------------------------------------------------------------

    def try_take(self) -> Outcome | NoNewData:
        """Take the pending outcome without blocking, or ``NO_NEW_DATA``."""
        with self._cond:
            return self._take_locked()

    def wait_take(self, timeout: float | None = None) -> Outcome | NoNewData:
        """
        Block until an outcome is available and take it.

        Returns ``NO_NEW_DATA`` if ``timeout`` seconds pass first, or if the
        channel is closed with nothing pending.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            while self._slot is None and not self._closed:
                remaining = None if deadline is None else deadline - time.monotonic()
                if remaining is not None and remaining <= 0:
                    break
                self._cond.wait(remaining)
            return self._take_locked()

    async def wait_take_async(self) -> Outcome | NoNewData:
        """
        Suspend the calling task until an outcome is available and take it.

        Returns ``NO_NEW_DATA`` if the channel is closed with nothing
        pending. Bound the wait with ``asyncio.timeout`` or cancel the task.
        """
        loop = asyncio.get_running_loop()
        while True:
            with self._cond:
                if self._slot is not None or self._closed:
                    return self._take_locked()
                waiter: asyncio.Future[None] = loop.create_future()
                self._async_waiters.append((loop, waiter))
            try:
                await waiter
            finally:
                with self._cond:
                    if (loop, waiter) in self._async_waiters:
                        self._async_waiters.remove((loop, waiter))

    # ------------------------------------------------------------------

    def _take_locked(self) -> Outcome | NoNewData:
        outcome, self._slot = self._slot, None
        return NO_NEW_DATA if outcome is None else outcome

    def _wake_async_waiters(self) -> None:
        waiters, self._async_waiters = self._async_waiters, []
        for loop, waiter in waiters:
            try:
                loop.call_soon_threadsafe(_resolve, waiter)
            except RuntimeError:
                # Loop already closed; its waiter can never be resumed.
                logger.debug("Skipping waiter on closed event loop")


def _resolve(waiter: asyncio.Future[None]) -> None:
    if not waiter.done():
        waiter.set_result(None)
