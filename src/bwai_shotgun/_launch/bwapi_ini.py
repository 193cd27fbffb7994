# Area: Launch
"""
bwai_shotgun._launch.bwapi_ini — Generated engine configuration
===============================================================

BWAPI reads ``bwapi.ini`` once at engine startup. One file is written
per bot, fresh before every launch, and its location is passed through
the ``BWAPI_CONFIG_INI`` environment variable.

Example (injected host):

    [ai]
    ai = C:\\bots\\Foo\\bwapi-data\\AI\\Foo.dll
    [auto_menu]
    auto_menu=LAN
    lan_mode=Local PC
    character_name=Foo
    race=Zerg
    map=maps\\(2)Destination.scx
    wait_for_min_players=2
    wait_for_max_players=2
    save_replay = replays/...
    [starcraft]
    speed_override = 0
    sound = OFF
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..types import ConnectRole, Race
from .modes import ConnectMode

REPLAY_PATH_TEMPLATE = (
    "replays/$Y $b $d/%MAP%_%BOTRACE%%ALLYRACES%vs%ENEMYRACES%_$H$M$S.rep"
)


@dataclass(frozen=True)
class AutoMenu:
    """LAN auto-menu block, used when BWAPI drives the game menus itself."""
    character_name: str
    race: Race
    game_name: str
    mode: ConnectMode


@dataclass
class BwapiIni:
    """Contents of one bot's ``bwapi.ini``."""
    ai_module: Optional[str] = None
    tournament_module: Optional[str] = None
    # 0 = full throttle, -1 = normal human speed
    game_speed: int = 0
    auto_menu: Optional[AutoMenu] = None

    def lines(self) -> List[str]:
        out = ["[ai]", f"ai = {self.ai_module or ''}"]
        if self.tournament_module:
            out.append(f"tournament = {self.tournament_module}")

        out.append("[auto_menu]")
        menu = self.auto_menu
        if menu is not None:
            out.append("auto_menu=LAN")
            out.append("lan_mode=Local PC")
            out.append(f"character_name={menu.character_name}")
            out.append(f"race={menu.race}")
            if menu.mode.role == ConnectRole.HOST:
                out.append(f"map={menu.mode.map}")
                out.append(f"wait_for_min_players={menu.mode.player_count}")
                out.append(f"wait_for_max_players={menu.mode.player_count}")
            else:
                out.append(f"game={menu.game_name}")

        out.append(f"save_replay = {REPLAY_PATH_TEMPLATE}")
        out.append("[starcraft]")
        out.append(f"speed_override = {self.game_speed}")
        out.append("sound = OFF")
        return out

    def render(self) -> str:
        return "\n".join(self.lines()) + "\n"

    def write(self, path: Path) -> Path:
        path.write_text(self.render(), encoding="utf-8")
        return path
