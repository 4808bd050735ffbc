"""Tests for PollCycle: fetch + parse folded into one outcome."""

from __future__ import annotations

from unittest.mock import Mock

from conftest import ScriptedFetch

from weather_poller.errors import FetchError, ParseError, RemoteStatusError
from weather_poller.polling.cycle import PollCycle
from weather_poller.polling.outcome import Failure, Success
from weather_poller.schemas import CurrentWeather, ErrorKind, Target


class TestAttempt:
    """Outcome mapping for each failure class."""

    def test_success(self, target: Target, london_body: str) -> None:
        outcome = PollCycle(fetch=ScriptedFetch(london_body)).attempt(target)
        assert isinstance(outcome, Success)
        assert isinstance(outcome.record, CurrentWeather)
        assert outcome.record.name == "London"
        assert outcome.ok

    def test_transport_error(self, target: Target) -> None:
        outcome = PollCycle(fetch=ScriptedFetch(FetchError("connection refused"))).attempt(target)
        assert isinstance(outcome, Failure)
        assert outcome.error.kind is ErrorKind.TRANSPORT
        assert "connection refused" in outcome.error.message
        assert outcome.error.status_code is None

    def test_remote_status_keeps_code(self, target: Target) -> None:
        fetch = ScriptedFetch(RemoteStatusError(401, "Unauthorized"))
        outcome = PollCycle(fetch=fetch).attempt(target)
        assert isinstance(outcome, Failure)
        assert outcome.error.kind is ErrorKind.REMOTE_STATUS
        assert outcome.error.status_code == 401
        assert outcome.error.message == "401 Unauthorized"

    def test_truncated_body_is_parse_failure(self, target: Target, london_body: str) -> None:
        outcome = PollCycle(fetch=ScriptedFetch(london_body[:40])).attempt(target)
        assert isinstance(outcome, Failure)
        assert outcome.error.kind is ErrorKind.PARSE_FAILURE

    def test_parse_not_called_after_fetch_failure(self, target: Target) -> None:
        parse = Mock()
        PollCycle(fetch=ScriptedFetch(FetchError("down")), parse=parse).attempt(target)
        parse.assert_not_called()

    def test_parse_receives_raw_body(self, target: Target) -> None:
        parse = Mock(return_value="record")
        outcome = PollCycle(fetch=ScriptedFetch("raw"), parse=parse).attempt(target)
        parse.assert_called_once_with("raw")
        assert isinstance(outcome, Success)
        assert outcome.record == "record"

    def test_custom_parse_error(self, target: Target) -> None:
        parse = Mock(side_effect=ParseError("missing field 'main'"))
        outcome = PollCycle(fetch=ScriptedFetch("{}"), parse=parse).attempt(target)
        assert isinstance(outcome, Failure)
        assert outcome.error.kind is ErrorKind.PARSE_FAILURE
        assert outcome.error.message == "missing field 'main'"


class TestUnexpectedErrors:
    """Foreign exceptions still come back as outcomes."""

    def test_fetch_side(self, target: Target) -> None:
        outcome = PollCycle(fetch=ScriptedFetch(OSError("socket closed"))).attempt(target)
        assert isinstance(outcome, Failure)
        assert outcome.error.kind is ErrorKind.TRANSPORT
        assert outcome.error.message == "OSError: socket closed"

    def test_parse_side(self, target: Target) -> None:
        parse = Mock(side_effect=KeyError("main"))
        outcome = PollCycle(fetch=ScriptedFetch("{}"), parse=parse).attempt(target)
        assert isinstance(outcome, Failure)
        assert outcome.error.kind is ErrorKind.PARSE_FAILURE


def test_cycle_is_stateless(target: Target, london_body: str) -> None:
    cycle = PollCycle(fetch=ScriptedFetch(london_body))
    first = cycle.attempt(target)
    second = cycle.attempt(target)
    assert first is not second
    assert isinstance(first, Success) and isinstance(second, Success)
    assert first.record is not second.record
    assert first.record == second.record
