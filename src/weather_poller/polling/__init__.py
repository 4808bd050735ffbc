"""Polling engine: tick, mailbox, background loop, one-shot helpers.

    cycle.py     PollCycle: fetch + parse -> one Outcome, never raises
    channel.py   DeliveryChannel: single slot, last write wins, take empties it
    poller.py    Poller: background thread + lifecycle state machine
    oneshot.py   fetch_once_blocking / fetch_once_async
    outcome.py   NO_NEW_DATA | Success | Failure
"""

from weather_poller.polling.channel import DeliveryChannel
from weather_poller.polling.cycle import PollCycle
from weather_poller.polling.oneshot import fetch_once_async, fetch_once_blocking
from weather_poller.polling.outcome import (
    LOADING,
    NO_NEW_DATA,
    Failure,
    NoNewData,
    Outcome,
    Success,
)
from weather_poller.polling.poller import Poller, PollerState, poll, start

__all__ = [
    "LOADING",
    "NO_NEW_DATA",
    "DeliveryChannel",
    "Failure",
    "NoNewData",
    "Outcome",
    "PollCycle",
    "Poller",
    "PollerState",
    "Success",
    "fetch_once_async",
    "fetch_once_blocking",
    "poll",
    "start",
]
