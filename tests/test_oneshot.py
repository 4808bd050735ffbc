"""Tests for the blocking and async one-shot helpers."""

from __future__ import annotations

import asyncio
import threading

import pytest
from conftest import ScriptedFetch, wait_until

from weather_poller.errors import FetchError, RemoteStatusError
from weather_poller.polling.cycle import PollCycle
from weather_poller.polling.oneshot import fetch_once_async, fetch_once_blocking
from weather_poller.polling.outcome import Success


def _poll_threads(location: str) -> list[threading.Thread]:
    return [t for t in threading.enumerate() if t.name == f"weather-poller[{location}]"]


class TestFetchOnceBlocking:
    """Blocking variant."""

    def test_returns_first_success(self, london_body: str) -> None:
        outcome = fetch_once_blocking(
            "London", "metric", "en", "secret", cycle=PollCycle(fetch=ScriptedFetch(london_body))
        )
        assert isinstance(outcome, Success)
        assert outcome.record.name == "London"

    def test_retries_failures(self, london_body: str) -> None:
        fetch = ScriptedFetch(
            RemoteStatusError(401, "Unauthorized"), FetchError("down"), london_body
        )
        outcome = fetch_once_blocking(
            "London", cycle=PollCycle(fetch=fetch), retry_delay=0.01, timeout=2
        )
        assert isinstance(outcome, Success)
        assert fetch.calls == 3

    def test_tears_down_poll_thread(self, london_body: str) -> None:
        fetch_once_blocking("Teardown-Blocking", cycle=PollCycle(fetch=ScriptedFetch(london_body)))
        assert _poll_threads("Teardown-Blocking") == []

    def test_timeout(self) -> None:
        fetch = ScriptedFetch(RemoteStatusError(401, "Unauthorized"))
        with pytest.raises(TimeoutError):
            fetch_once_blocking(
                "Timeout-Blocking", cycle=PollCycle(fetch=fetch), retry_delay=0.01, timeout=0.1
            )
        assert wait_until(lambda: _poll_threads("Timeout-Blocking") == [])
        calls = fetch.calls
        assert not wait_until(lambda: fetch.calls > calls, timeout=0.1)


class TestFetchOnceAsync:
    """Cooperative variant."""

    @pytest.mark.asyncio
    async def test_returns_first_success(self, london_body: str) -> None:
        outcome = await fetch_once_async(
            "London", "metric", "en", "secret", cycle=PollCycle(fetch=ScriptedFetch(london_body))
        )
        assert isinstance(outcome, Success)
        assert outcome.record.name == "London"

    @pytest.mark.asyncio
    async def test_retries_failures(self, london_body: str) -> None:
        fetch = ScriptedFetch(FetchError("down"), london_body)
        outcome = await fetch_once_async(
            "London", cycle=PollCycle(fetch=fetch), retry_delay=0.01, timeout=2
        )
        assert isinstance(outcome, Success)
        assert fetch.calls == 2

    @pytest.mark.asyncio
    async def test_tears_down_poll_thread(self, london_body: str) -> None:
        await fetch_once_async("Teardown-Async", cycle=PollCycle(fetch=ScriptedFetch(london_body)))
        assert _poll_threads("Teardown-Async") == []

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        fetch = ScriptedFetch(FetchError("down"))
        with pytest.raises(TimeoutError):
            await fetch_once_async(
                "Timeout-Async", cycle=PollCycle(fetch=fetch), retry_delay=0.01, timeout=0.1
            )
        assert wait_until(lambda: _poll_threads("Timeout-Async") == [])

    @pytest.mark.asyncio
    async def test_cancel_stops_poller(self) -> None:
        fetch = ScriptedFetch(FetchError("down"))
        task = asyncio.create_task(
            fetch_once_async("Cancel-Async", cycle=PollCycle(fetch=fetch), retry_delay=0.01)
        )
        await asyncio.sleep(0.05)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert wait_until(lambda: _poll_threads("Cancel-Async") == [])


@pytest.mark.asyncio
async def test_blocking_and_async_return_identical_records(london_body: str) -> None:
    blocking = fetch_once_blocking("London", cycle=PollCycle(fetch=ScriptedFetch(london_body)))
    cooperative = await fetch_once_async(
        "London", cycle=PollCycle(fetch=ScriptedFetch(london_body))
    )
    assert blocking.record == cooperative.record
    assert blocking.record.model_dump_json() == cooperative.record.model_dump_json()
