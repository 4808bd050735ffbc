"""Shared fixtures: a sample current-weather document and fake fetchers."""

from __future__ import annotations

import copy
import json
import threading
import time
from collections.abc import Callable
from typing import Any

import pytest

from weather_poller.schemas import Target

# Trimmed from a real /data/2.5/weather response for London.
LONDON: dict[str, Any] = {
    "coord": {"lon": -0.1257, "lat": 51.5085},
    "weather": [{"id": 803, "main": "Clouds", "description": "broken clouds", "icon": "04d"}],
    "base": "stations",
    "main": {
        "temp": 14.2,
        "feels_like": 13.6,
        "temp_min": 12.9,
        "temp_max": 15.3,
        "pressure": 1012,
        "humidity": 77,
    },
    "visibility": 10000,
    "wind": {"speed": 4.6, "deg": 240},
    "clouds": {"all": 75},
    "rain": {"1h": 0.21},
    "dt": 1760700000,
    "sys": {"type": 2, "id": 2075535, "country": "GB", "sunrise": 1760682302, "sunset": 1760719967},
    "timezone": 3600,
    "id": 2643743,
    "name": "London",
    "cod": 200,
}


def weather_body(**overrides: Any) -> str:
    """JSON body of the London document with top-level fields replaced."""
    doc = copy.deepcopy(LONDON)
    doc.update(overrides)
    return json.dumps(doc)


def wait_until(predicate: Callable[[], bool], timeout: float = 2.0) -> bool:
    """Spin until ``predicate()`` is true or ``timeout`` passes."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


class ScriptedFetch:
    """Fetch stand-in that replays bodies or raises exceptions in order.

    The last step repeats once the script runs out.
    """

    def __init__(self, *steps: str | BaseException) -> None:
        self.steps = list(steps)
        self.calls = 0

    def __call__(self, target: Target) -> str:
        step = self.steps[min(self.calls, len(self.steps) - 1)]
        self.calls += 1
        if isinstance(step, BaseException):
            raise step
        return step


class GatedFetch:
    """Fetch stand-in that blocks each call until the test releases it.

    Call ``n`` returns a body with ``dt`` of ``1000 + n`` so outcomes from
    different ticks can be told apart.
    """

    def __init__(self) -> None:
        self.gate = threading.Semaphore(0)
        self.calls = 0
        self.entered = threading.Event()

    def release(self, n: int = 1) -> None:
        for _ in range(n):
            self.gate.release()

    def __call__(self, target: Target) -> str:
        self.calls += 1
        call = self.calls
        self.entered.set()
        self.gate.acquire()
        return weather_body(dt=1000 + call)


@pytest.fixture
def london_body() -> str:
    return weather_body()


@pytest.fixture
def target() -> Target:
    return Target(location="London", credential="secret")
