# Area: Match
"""
bwai_shotgun._match.polling — Bounded polling waits
===================================================

The BWAPI game table has no notification mechanism, so every wait on it
is a fixed-interval poll with a bounded number of attempts. The default
budget is 100 attempts of 100 ms (10 seconds).

A condition returns True when satisfied and may raise to abort the wait
(e.g. a process died). Exhausting the budget raises
SynchronizationTimeoutError; setting the optional stop event (Ctrl+C)
raises MatchCancelledError at the next tick.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from ..errors import MatchCancelledError, SynchronizationTimeoutError

logger = logging.getLogger("bwai_shotgun.polling")


@dataclass(frozen=True)
class PollPolicy:
    """Fixed-interval retry budget."""
    interval_seconds: float = 0.1
    attempts: int = 100

    @property
    def budget_seconds(self) -> float:
        return self.interval_seconds * self.attempts


def poll_until(
    condition: Callable[[], bool],
    policy: PollPolicy,
    *,
    bot: Optional[str],
    stage: str,
    timeout_message: str,
    stop_event: Optional[threading.Event] = None,
    log_path: Optional[Path] = None,
) -> int:
    """
    Evaluate ``condition`` until it returns True.

    Returns the number of attempts used. ``log_path`` is reported with a
    timeout as the file to look at.

    Raises
    ------
    SynchronizationTimeoutError
        If the condition never held within the budget.
    MatchCancelledError
        If ``stop_event`` was set while waiting.
    """
    for attempt in range(1, policy.attempts + 1):
        if stop_event is not None and stop_event.is_set():
            raise MatchCancelledError("Match setup interrupted", bot=bot, stage=stage)
        if condition():
            logger.debug("%s: %s satisfied after %d attempt(s)", bot, stage, attempt)
            return attempt
        if attempt < policy.attempts:
            _sleep(policy.interval_seconds, stop_event)

    raise SynchronizationTimeoutError(
        f"{timeout_message} (waited {policy.budget_seconds:.1f}s)",
        bot=bot,
        stage=stage,
        attempts=policy.attempts,
        interval_seconds=policy.interval_seconds,
        path=log_path,
    )


def _sleep(seconds: float, stop_event: Optional[threading.Event]) -> None:
    if stop_event is not None:
        stop_event.wait(seconds)
    else:
        time.sleep(seconds)
