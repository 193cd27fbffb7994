"""
bwai_shotgun — Local StarCraft: Brood War bot matches
======================================================

Launches several BWAPI bots against each other on one machine: one
StarCraft engine per bot, started through bwheadless (headless) or
injectory (visible window), synchronized through BWAPI's shared game
table.

Quick Start (game.json in the current folder):
    bwai-shotgun

From Python:
    from pathlib import Path
    from bwai_shotgun import MatchRunner, MatchSettings
    from bwai_shotgun.config import load_game_config, load_shotgun_config

    base = Path("C:/bwai-shotgun")
    settings = MatchSettings(base, load_shotgun_config(base), load_game_config(base))
    MatchRunner(settings).run()

Folder layout
-------------
    <base>/shotgun.json          installation settings
    <base>/game.json             the match
    <base>/tools/                bwheadless.exe, injectory_x86.exe, WMode.dll
    <base>/tm/                   tournament modules and modules.json
    <base>/bots/<name>/bot.json  one folder per bot
"""

from .config import (
    BotConfig,
    BotDefinition,
    GameConfig,
    MatchSettings,
    ShotgunConfig,
)
from .errors import (
    AmbiguousArtifactError,
    ArtifactError,
    ArtifactNotFoundError,
    ClientDiedError,
    ConfigurationError,
    HostDiedError,
    MatchCancelledError,
    ProcessDiedError,
    ShotgunError,
    SynchronizationTimeoutError,
    UnsupportedArtifactError,
)
from .runner import MatchRunner
from .types import ConnectRole, Race

__all__ = [
    # Main classes
    "MatchRunner",
    "MatchSettings",
    # Config models
    "BotConfig",
    "BotDefinition",
    "GameConfig",
    "ShotgunConfig",
    # Errors
    "ShotgunError",
    "ConfigurationError",
    "ArtifactError",
    "ArtifactNotFoundError",
    "AmbiguousArtifactError",
    "UnsupportedArtifactError",
    "SynchronizationTimeoutError",
    "ProcessDiedError",
    "HostDiedError",
    "ClientDiedError",
    "MatchCancelledError",
    # Enums
    "ConnectRole",
    "Race",
]
__version__ = "0.1.0"
