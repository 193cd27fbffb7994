# Area: Shared
"""
bwai_shotgun._shared.game_table — BWAPI shared game table reader
================================================================

BWAPI publishes a fixed-size table of 8 slots in a named shared memory
segment. Every running BWAPI server registers its process id there and
flips ``is_connected`` once a client bot has attached.

The layout mirrors the producer's C struct:

    struct GameInstance { uint32 server_process_id; bool is_connected;
                          uint32 last_keep_alive_time; }   // 12 bytes
    struct GameTable    { GameInstance instances[8]; }     // 96 bytes

The reader never writes to the segment and never locks it. A snapshot
is a best-effort copy that may be torn or stale.
"""

from __future__ import annotations

import logging
import os
import struct
import sys
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

logger = logging.getLogger("bwai_shotgun.game_table")

SEGMENT_NAME = r"Local\bwapi_shared_memory_game_list"
SLOT_COUNT = 8
SLOT_FORMAT = "<I?3xI"
SLOT_SIZE = struct.calcsize(SLOT_FORMAT)
TABLE_SIZE = SLOT_SIZE * SLOT_COUNT


@dataclass(frozen=True)
class SlotStatus:
    """One slot of the game table."""
    server_process_id: int
    is_connected: bool
    last_keep_alive_time: int

    @property
    def is_empty(self) -> bool:
        return self.server_process_id == 0


@dataclass(frozen=True)
class GameTable:
    """Point-in-time copy of all 8 slots."""
    slots: Tuple[SlotStatus, ...]

    def occupied(self) -> List[SlotStatus]:
        return [slot for slot in self.slots if not slot.is_empty]

    def connected_count(self) -> int:
        """Number of slots with the connected flag set."""
        return sum(1 for slot in self.slots if slot.is_connected)

    def has_free_slot(self) -> bool:
        """True if a registered server is still waiting for its client."""
        return any(not slot.is_connected for slot in self.occupied())

    def all_slots_filled(self) -> bool:
        """True if every registered server has a client (vacuously true)."""
        return all(slot.is_connected for slot in self.occupied())

    def connected_process_ids(self) -> List[int]:
        return [s.server_process_id for s in self.occupied() if s.is_connected]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "game_instances": [
                {
                    "server_process_id": slot.server_process_id,
                    "is_connected": slot.is_connected,
                    "last_keep_alive_time": slot.last_keep_alive_time,
                }
                for slot in self.slots
            ]
        }


def decode_game_table(raw: bytes) -> GameTable:
    """Decode the raw 96-byte segment into a GameTable.

    Raises:
        ValueError: If fewer than TABLE_SIZE bytes are supplied
    """
    if len(raw) < TABLE_SIZE:
        raise ValueError(
            f"Game table needs {TABLE_SIZE} bytes, got {len(raw)}"
        )
    slots = tuple(
        SlotStatus(*struct.unpack_from(SLOT_FORMAT, raw, i * SLOT_SIZE))
        for i in range(SLOT_COUNT)
    )
    return GameTable(slots=slots)


class SharedSegment(Protocol):
    """The part of a shared memory handle the reader relies on."""

    @property
    def buf(self) -> memoryview: ...

    @property
    def size(self) -> int: ...

    def close(self) -> None: ...


SegmentOpener = Callable[[str], SharedSegment]


def open_shared_segment(name: str) -> SharedSegment:
    """
    Attach to an existing named segment; raises if it does not exist.

    The segment belongs to BWAPI, so it is never registered with the
    resource tracker (which would unlink it when this process exits).
    """
    from multiprocessing import resource_tracker, shared_memory

    if sys.version_info >= (3, 13):
        return shared_memory.SharedMemory(name=name, create=False, track=False)
    segment = shared_memory.SharedMemory(name=name, create=False)
    if os.name == "posix":
        resource_tracker.unregister(segment._name, "shared_memory")
    return segment


class GameTableAccess:
    """
    Lazily attached, read-only view of the BWAPI game table.

    Construct once per run and pass it to whoever needs to poll. The
    attachment is kept for the lifetime of the object; while the segment
    does not exist yet, every ``snapshot()`` retries the attachment.
    """

    def __init__(
        self,
        name: str = SEGMENT_NAME,
        opener: SegmentOpener = open_shared_segment,
    ) -> None:
        self.name = name
        self._opener = opener
        self._segment: Optional[SharedSegment] = None

    @property
    def attached(self) -> bool:
        return self._segment is not None

    def _attach(self) -> Optional[SharedSegment]:
        if self._segment is not None:
            return self._segment
        try:
            segment = self._opener(self.name)
        except (OSError, ValueError) as e:
            logger.debug("Game table not available: %s", e)
            return None
        if segment.size < TABLE_SIZE:
            logger.debug(
                "Game table segment too small (%d bytes), retrying later",
                segment.size,
            )
            segment.close()
            return None
        logger.debug("Attached to game table '%s'", self.name)
        self._segment = segment
        return segment

    def snapshot(self) -> Optional[GameTable]:
        """Return a copy of the table, or None if it is not published yet."""
        segment = self._attach()
        if segment is None:
            return None
        raw = bytes(segment.buf[:TABLE_SIZE])
        return decode_game_table(raw)

    def connected_client_count(self) -> int:
        table = self.snapshot()
        return table.connected_count() if table is not None else 0

    def close(self) -> None:
        segment, self._segment = self._segment, None
        if segment is not None:
            segment.close()

    def __enter__(self) -> "GameTableAccess":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
