"""Tick outcomes: what a consumer gets when it probes the poller.

A probe yields exactly one of three things:

  - ``NO_NEW_DATA``: nothing arrived since the last successful take
  - ``Success(record)``: a fresh weather record
  - ``Failure(error)``: this tick failed, or the first tick is still running

Outcome instances compare by identity. Two takes never hand out the same
instance, even when the remote data happens to be unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, TypeAlias

from weather_poller.schemas import ErrorDetail, ErrorKind, WeatherRecord

#: Message of the failure published before the first tick completes.
LOADING: Final = "loading..."


class NoNewData:
    """Nothing new since the last take."""

    _instance: NoNewData | None = None

    def __new__(cls) -> NoNewData:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_NEW_DATA"

    def __bool__(self) -> bool:
        return False


NO_NEW_DATA: Final = NoNewData()


@dataclass(frozen=True, eq=False)
class Success:
    """A tick that produced a record."""

    record: WeatherRecord

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, eq=False)
class Failure:
    """A tick that did not produce a record."""

    error: ErrorDetail

    @property
    def ok(self) -> bool:
        return False

    @property
    def loading(self) -> bool:
        """True for the placeholder published before the first tick."""
        return self.error.kind is ErrorKind.AWAITING_FIRST_RESULT


Outcome: TypeAlias = Success | Failure


def loading_failure() -> Failure:
    """A fresh "not ready yet" failure."""
    return Failure(ErrorDetail(kind=ErrorKind.AWAITING_FIRST_RESULT, message=LOADING))
