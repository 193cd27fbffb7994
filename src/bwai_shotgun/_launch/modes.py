# Area: Launch
"""Connect modes: host a game with a map and player count, or join one."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..types import ConnectRole


@dataclass(frozen=True)
class ConnectMode:
    role: ConnectRole
    map: Optional[str] = None
    player_count: Optional[int] = None

    @classmethod
    def host(cls, map: str, player_count: int) -> "ConnectMode":
        if player_count < 1:
            raise ValueError(f"player_count must be positive, got {player_count}")
        return cls(role=ConnectRole.HOST, map=map, player_count=player_count)

    @classmethod
    def join(cls) -> "ConnectMode":
        return cls(role=ConnectRole.JOIN)

    @property
    def is_host(self) -> bool:
        return self.role == ConnectRole.HOST
