# Area: Match Tests
"""Tests for bounded polling waits."""

import threading
from unittest.mock import patch

import pytest

from bwai_shotgun._match.polling import PollPolicy, poll_until
from bwai_shotgun.errors import HostDiedError, MatchCancelledError, SynchronizationTimeoutError

MOCK_TIME = "bwai_shotgun._match.polling.time"


def wait(condition, policy=PollPolicy(interval_seconds=0.01, attempts=5), **kwargs):
    return poll_until(
        condition,
        policy,
        bot="Foo",
        stage="await-test",
        timeout_message="never happened",
        **kwargs,
    )


class TestPollPolicy:

    def test_defaults(self):
        policy = PollPolicy()
        assert policy.interval_seconds == 0.1
        assert policy.attempts == 100
        assert policy.budget_seconds == pytest.approx(10.0)


class TestPollUntil:
    """poll_until()"""

    def test_immediate_success(self):
        with patch(MOCK_TIME) as mock_time:
            assert wait(lambda: True) == 1
            mock_time.sleep.assert_not_called()

    def test_success_after_retries(self):
        results = iter([False, False, True])
        with patch(MOCK_TIME) as mock_time:
            assert wait(lambda: next(results)) == 3
            assert mock_time.sleep.call_count == 2
            mock_time.sleep.assert_called_with(0.01)

    def test_timeout(self):
        calls = []
        with patch(MOCK_TIME) as mock_time:
            with pytest.raises(SynchronizationTimeoutError) as exc_info:
                wait(lambda: calls.append(1) or False)
            # No sleep after the last attempt
            assert mock_time.sleep.call_count == 4
        assert len(calls) == 5
        error = exc_info.value
        assert error.bot == "Foo"
        assert error.stage == "await-test"
        assert error.attempts == 5
        assert error.interval_seconds == 0.01
        assert "never happened" in error.message

    def test_timeout_names_the_log(self, tmp_path):
        with patch(MOCK_TIME):
            with pytest.raises(SynchronizationTimeoutError) as exc_info:
                wait(lambda: False, log_path=tmp_path / "game_err.log")
        assert exc_info.value.path == tmp_path / "game_err.log"
        assert "game_err.log" in exc_info.value.format_error_log()

    def test_condition_can_abort(self):
        def died():
            raise HostDiedError("gone", bot="Foo", stage="await-test", returncode=1)

        with patch(MOCK_TIME):
            with pytest.raises(HostDiedError):
                wait(died)

    def test_stop_event_cancels(self):
        stop = threading.Event()
        stop.set()
        with pytest.raises(MatchCancelledError) as exc_info:
            wait(lambda: True, stop_event=stop)
        assert exc_info.value.stage == "await-test"

    def test_stop_event_set_while_waiting(self):
        stop = threading.Event()
        calls = []

        def condition():
            calls.append(1)
            stop.set()
            return False

        with pytest.raises(MatchCancelledError):
            wait(condition, stop_event=stop)
        assert len(calls) == 1

    def test_stop_event_is_used_for_sleeping(self):
        stop = threading.Event()
        results = iter([False, True])
        with patch.object(stop, "wait") as mock_wait, patch(MOCK_TIME) as mock_time:
            assert wait(lambda: next(results), stop_event=stop) == 2
            mock_wait.assert_called_once_with(0.01)
            mock_time.sleep.assert_not_called()
