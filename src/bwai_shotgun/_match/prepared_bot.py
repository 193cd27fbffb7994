# Area: Match
"""
bwai_shotgun._match.prepared_bot — Per-match bot setup
======================================================

Combines a bot's static definition (``bot.json``) with its entry in the
match config. Preparing a bot creates the folders BWAPI and the bot
expect:

    bots/<name>/
        bwapi-data/AI/       bot binary (dll, jar or exe)
        bwapi-data/read/     created here
        bwapi-data/write/    created here
        bwapi-data/bwapi.ini written by the launch builder
        logs/                created here
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from ..config import BotConfig, BotDefinition
from ..errors import ConfigurationError
from ..types import Race
from .._launch.tournament import TournamentModuleTable
from .binary import BotArtifact, DynamicModule, resolve, resolve_override

logger = logging.getLogger("bwai_shotgun.prepared_bot")


@dataclass
class PreparedBot:
    """A bot ready to be handed to a launch builder."""
    name: str
    display_name: str
    binary: BotArtifact
    race: Race
    working_dir: Path
    log_dir: Path
    headful: bool = False
    tournament_module: Optional[Path] = None

    @property
    def bwapi_data_dir(self) -> Path:
        return self.working_dir / "bwapi-data"

    @property
    def bwapi_dll(self) -> Path:
        return self.bwapi_data_dir / "BWAPI.dll"

    @property
    def bwapi_ini(self) -> Path:
        return self.bwapi_data_dir / "bwapi.ini"

    @property
    def ai_module_path(self) -> str:
        """Path BWAPI should load as AI module; empty for client bots."""
        if isinstance(self.binary, DynamicModule):
            return str(self.binary.path)
        return ""

    @property
    def runs_in_engine(self) -> bool:
        return self.binary.runs_in_engine

    @classmethod
    def prepare(
        cls,
        config: BotConfig,
        bot_folder: Path,
        definition: BotDefinition,
        tm_table: Optional[TournamentModuleTable] = None,
        use_tournament_module: bool = False,
    ) -> "PreparedBot":
        """
        Create the bot's folders, resolve its binary and race.

        Raises
        ------
        ConfigurationError
            If a folder cannot be created.
        ArtifactError
            If the bot binary cannot be resolved.
        """
        bwapi_data = bot_folder / "bwapi-data"
        log_dir = bot_folder / "logs"
        for folder in (bwapi_data / "read", bwapi_data / "write", log_dir):
            try:
                folder.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ConfigurationError(
                    f"Could not create folder: {e}",
                    bot=config.name,
                    stage="prepare",
                    path=folder,
                ) from e

        if definition.executable:
            override = Path(definition.executable)
            if not override.is_absolute():
                override = bot_folder / override
            binary = resolve_override(override, bot=config.name)
        else:
            binary = resolve(bwapi_data / "AI", bot=config.name)

        tournament_module = None
        if use_tournament_module and tm_table is not None:
            tournament_module = tm_table.module_for(bwapi_data / "BWAPI.dll", bot=config.name)

        return cls(
            name=config.name,
            display_name=config.display_name,
            binary=binary,
            race=config.race or definition.race,
            working_dir=bot_folder,
            log_dir=log_dir,
            headful=config.headful,
            tournament_module=tournament_module,
        )


def order_for_launch(bots: Iterable[PreparedBot]) -> List[PreparedBot]:
    """In-engine bots first; separately spawned clients need a waiting engine slot."""
    return sorted(bots, key=lambda bot: 0 if bot.runs_in_engine else 1)
