# Area: Match
"""
bwai_shotgun._match.supervisor — Steady-state process supervision
=================================================================

Once every participant runs, the supervisor only has to notice engines
that have exited. A bot client without its engine is useless, so it is
killed. The loop ends when no instance is left; there is no overall
timeout.

Every process is started through the execution wrapper (wine, Sandboxie),
so the spawned process may only be the parent of the real engine or bot.
Kills therefore take down the whole process tree, descendants first.
"""

from __future__ import annotations

import logging
import subprocess
import threading
import time
from typing import List, Optional

import psutil

from .instances import ActiveInstance

logger = logging.getLogger("bwai_shotgun.supervisor")

KILL_WAIT_SECONDS = 5.0


class ProcessSupervisor:
    """Reaps finished instances until none remain."""

    def __init__(self, tick_seconds: float = 1.0):
        self.tick_seconds = tick_seconds

    def reap(self, instances: List[ActiveInstance]) -> int:
        """
        Remove every instance whose engine has exited (in place).

        Returns the number of instances removed.
        """
        finished = [instance for instance in instances if instance.host_exited()]
        for instance in finished:
            if instance.bot_running():
                kill_tree(instance.name, instance.bot)
            instances.remove(instance)
            logger.info("%s finished, %d bots remaining", instance.name, len(instances))
        return len(finished)

    def run(
        self,
        instances: List[ActiveInstance],
        stop_event: Optional[threading.Event] = None,
    ) -> None:
        """Block until every engine has exited, or the stop event is set."""
        while instances:
            if stop_event is not None and stop_event.is_set():
                self.shutdown(instances)
                return
            self.reap(instances)
            if instances:
                self._pause(stop_event)
        logger.info("All games finished")

    def shutdown(self, instances: List[ActiveInstance]) -> None:
        """Kill every remaining engine and bot process."""
        logger.warning("Stopping %d running bots", len(instances))
        for instance in list(instances):
            if instance.bot_running():
                kill_tree(instance.name, instance.bot)
            if not instance.host_exited():
                kill_tree(instance.name, instance.host)
            instances.remove(instance)

    def _pause(self, stop_event: Optional[threading.Event]) -> None:
        # Returns early once the stop event is set
        if stop_event is not None:
            stop_event.wait(self.tick_seconds)
        else:
            time.sleep(self.tick_seconds)


def child_processes(process: subprocess.Popen) -> List[psutil.Process]:
    """All descendants of ``process``; empty if it is already gone."""
    try:
        return psutil.Process(process.pid).children(recursive=True)
    except psutil.Error as e:
        logger.debug("Could not list children of process %s: %s", process.pid, e)
        return []


def kill_tree(name: str, process: subprocess.Popen) -> None:
    """Kill ``process`` and every process it started."""
    children = child_processes(process)
    for child in children:
        try:
            child.kill()
        except psutil.NoSuchProcess:
            logger.debug("Child process %s of %s already exited", child.pid, name)
        except psutil.AccessDenied as e:
            logger.warning("Could not kill child process %s of %s: %s", child.pid, name, e)

    _kill(name, process)

    if children:
        _, alive = psutil.wait_procs(children, timeout=KILL_WAIT_SECONDS)
        for child in alive:
            logger.warning("Child process %s of %s did not exit after kill", child.pid, name)


def _kill(name: str, process: subprocess.Popen) -> None:
    try:
        process.kill()
        process.wait(timeout=KILL_WAIT_SECONDS)
    except subprocess.TimeoutExpired:
        logger.warning("Process %s of %s did not exit after kill", process.pid, name)
    except OSError as e:
        logger.warning("Could not kill process %s of %s: %s", process.pid, name, e)
