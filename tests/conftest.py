# Area: Test Support
"""Shared fakes: shared memory segment, engine/bot processes, shotgun folders."""

import json
import logging
import struct
import threading
from pathlib import Path
from typing import Callable, Dict, List, Optional
from unittest.mock import patch

import psutil
import pytest

from bwai_shotgun._shared.game_table import SLOT_COUNT, SLOT_FORMAT, SLOT_SIZE, TABLE_SIZE


def pack_table(slots: List[tuple]) -> bytearray:
    """Pack (pid, connected, keep_alive) tuples into a full 96-byte table."""
    raw = bytearray(TABLE_SIZE)
    for i, slot in enumerate(slots[:SLOT_COUNT]):
        struct.pack_into(SLOT_FORMAT, raw, i * SLOT_SIZE, *slot)
    return raw


class FakeSegment:
    """Stands in for multiprocessing.shared_memory.SharedMemory."""

    def __init__(self, raw: bytearray):
        self.raw = raw
        self.closed = False

    @property
    def buf(self) -> memoryview:
        return memoryview(self.raw)

    @property
    def size(self) -> int:
        return len(self.raw)

    def close(self) -> None:
        self.closed = True

    def set_slot(self, index: int, pid: int, connected: bool, keep_alive: int = 0) -> None:
        struct.pack_into(SLOT_FORMAT, self.raw, index * SLOT_SIZE, pid, connected, keep_alive)


class FakeProcess:
    """Minimal Popen stand-in."""

    def __init__(self, pid: int, returncode: Optional[int] = None):
        self.pid = pid
        self.returncode = returncode
        self.killed = False

    def poll(self) -> Optional[int]:
        return self.returncode

    def kill(self) -> None:
        self.killed = True
        if self.returncode is None:
            self.returncode = -9

    def wait(self, timeout=None) -> Optional[int]:
        return self.returncode


class FakeChild:
    """psutil.Process stand-in for a descendant started by a wrapper."""

    def __init__(self, pid: int, gone: bool = False, denied: bool = False):
        self.pid = pid
        self.killed = False
        self._gone = gone
        self._denied = denied

    def kill(self) -> None:
        if self._gone:
            raise psutil.NoSuchProcess(self.pid)
        if self._denied:
            raise psutil.AccessDenied(self.pid)
        self.killed = True

    def is_running(self) -> bool:
        return not (self.killed or self._gone)

    def wait(self, timeout=None) -> Optional[int]:
        if self.is_running():
            raise psutil.TimeoutExpired(timeout, self.pid)
        return -9


class TickingEvent(threading.Event):
    """
    Stop event whose supervisor-length waits run ``on_tick`` instead of
    blocking; shorter poll waits return immediately.
    """

    def __init__(self, on_tick: Callable[[float], None], tick_seconds: float = 1.0):
        super().__init__()
        self.on_tick = on_tick
        self.tick_seconds = tick_seconds
        self.ticks = 0

    def wait(self, timeout=None) -> bool:
        if timeout is not None and timeout >= self.tick_seconds:
            self.ticks += 1
            self.on_tick(timeout)
        return self.is_set()


class FakeEngineWorld:
    """
    Spawn function that simulates BWAPI: an engine registers a free slot
    in the segment, a bot client marks the newest free slot connected.
    """

    def __init__(self, segment: FakeSegment):
        self.segment = segment
        self.calls: List[Dict] = []
        self.processes: List[FakeProcess] = []
        self.engine_registers = True
        self.bot_connects = True
        self.bot_exit_code: Optional[int] = None
        self.engine_exit_code: Optional[int] = None
        self._next_pid = 1000
        self._slots: List[int] = []

    def __call__(self, command, cwd=None, env=None, stdout=None, stderr=None):
        self._next_pid += 1
        pid = self._next_pid
        is_engine = Path(command[0]).name in ("bwheadless.exe", "injectory_x86.exe")
        self.calls.append({
            "command": list(command),
            "cwd": cwd,
            "env": env,
            "stdout": getattr(stdout, "name", None),
            "stderr": getattr(stderr, "name", None),
            "engine": is_engine,
        })
        if is_engine:
            process = FakeProcess(pid, returncode=self.engine_exit_code)
            if self.engine_registers and self.engine_exit_code is None:
                index = len(self._slots)
                self._slots.append(pid)
                self.segment.set_slot(index, pid, False)
        else:
            process = FakeProcess(pid, returncode=self.bot_exit_code)
            if self.bot_connects and self.bot_exit_code is None and self._slots:
                index = len(self._slots) - 1
                self.segment.set_slot(index, self._slots[index], True)
        self.processes.append(process)
        return process

    @property
    def engine_calls(self) -> List[Dict]:
        return [c for c in self.calls if c["engine"]]

    @property
    def bot_calls(self) -> List[Dict]:
        return [c for c in self.calls if not c["engine"]]


def write_json(path: Path, data: dict) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def segment():
    return FakeSegment(pack_table([]))


@pytest.fixture
def engine_world(segment):
    return FakeEngineWorld(segment)


@pytest.fixture
def shotgun_home(tmp_path):
    """
    A complete installation: StarCraft folder with a map, tools folder
    with both launchers and WMode.dll.
    """
    starcraft = tmp_path / "StarCraft"
    (starcraft / "maps").mkdir(parents=True)
    (starcraft / "StarCraft.exe").write_bytes(b"MZ")
    (starcraft / "maps" / "test.scx").write_bytes(b"map")
    tools = tmp_path / "base" / "tools"
    tools.mkdir(parents=True)
    for tool in ("bwheadless.exe", "injectory_x86.exe", "WMode.dll"):
        (tools / tool).write_bytes(b"MZ")
    return {"base": tmp_path / "base", "starcraft": starcraft, "tools": tools}


@pytest.fixture
def make_bot(shotgun_home):
    """Create bots/<name>/ with bot.json, BWAPI.dll and one binary in AI/."""

    def _make(name: str, binary: Optional[str] = "bot.dll", race: str = "Protoss",
              executable: Optional[str] = None) -> Path:
        folder = shotgun_home["base"] / "bots" / name
        ai = folder / "bwapi-data" / "AI"
        ai.mkdir(parents=True)
        (folder / "bwapi-data" / "BWAPI.dll").write_bytes(b"bwapi")
        if binary:
            (ai / binary).write_bytes(b"bin")
        definition = {"race": race}
        if executable:
            definition["executable"] = executable
        write_json(folder / "bot.json", definition)
        return folder

    return _make


@pytest.fixture(autouse=True)
def process_tree():
    """Fake pids never reach psutil; set ``return_value`` to give a process children."""
    with patch("bwai_shotgun._match.supervisor.child_processes", return_value=[]) as mock_tree:
        yield mock_tree


@pytest.fixture(autouse=True)
def reset_package_logger():
    """setup_logging() detaches the package logger from root; undo it for caplog."""
    yield
    pkg_logger = logging.getLogger("bwai_shotgun")
    for handler in list(pkg_logger.handlers):
        handler.close()
    pkg_logger.handlers.clear()
    pkg_logger.propagate = True
    pkg_logger.setLevel(logging.NOTSET)
