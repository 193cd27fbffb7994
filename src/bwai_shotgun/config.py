# Area: Shared
"""
bwai_shotgun.config — Configuration models and loading
======================================================

Three JSON files drive a match, all validated with pydantic:

    <base>/shotgun.json          installation settings (optional)
    <base>/game.json             the match: map, bots, host mode
    <base>/bots/<name>/bot.json  per-bot defaults: race, executable

Environment variables (also read from a ``.env`` file by the CLI):

    SHOTGUN_HOME       base folder (default: current directory)
    STARCRAFT_PATH     StarCraft installation folder
    JAVA_PATH          java executable used for .jar bots
"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .errors import ConfigurationError
from .types import Race
from ._launch.wrapper import ExecutionWrapper
from ._shared.game_table import SLOT_COUNT

logger = logging.getLogger("bwai_shotgun.config")

SHOTGUN_CONFIG_FILE = "shotgun.json"
GAME_CONFIG_FILE = "game.json"
BOT_CONFIG_FILE = "bot.json"

STARCRAFT_REGISTRY_KEY = r"SOFTWARE\Blizzard Entertainment\Starcraft"

# Environment variables copied over config values: {env var: config key}
ENV_OVERRIDES = {
    "STARCRAFT_PATH": "starcraft_path",
    "JAVA_PATH": "java_path",
}


def _parse_race(value: Any) -> Any:
    if value is None or isinstance(value, Race):
        return value
    return Race.parse(value)


class ShotgunConfig(BaseModel):
    """Installation-level settings from ``shotgun.json``."""

    starcraft_path: Optional[Path] = None
    java_path: Optional[str] = None
    wrapper: ExecutionWrapper = Field(default_factory=ExecutionWrapper.default)
    poll_interval_seconds: float = Field(default=0.1, gt=0)
    poll_attempts: int = Field(default=100, ge=1)
    supervisor_tick_seconds: float = Field(default=1.0, gt=0)

    def get_starcraft_path(self) -> Path:
        """Configured StarCraft folder, falling back to the Windows registry."""
        if self.starcraft_path:
            return Path(self.starcraft_path)
        install_path = _registry_install_path()
        if install_path:
            return Path(install_path)
        raise ConfigurationError(
            "Could not find StarCraft installation, set 'starcraft_path' in "
            f"'{SHOTGUN_CONFIG_FILE}' or the STARCRAFT_PATH environment variable",
            stage="locate-starcraft",
        )

    def java_executable(self) -> str:
        return self.java_path or "java.exe"


class BotConfig(BaseModel):
    """One participant entry in ``game.json``."""

    name: str = Field(min_length=1)
    player_name: Optional[str] = None
    race: Optional[Race] = None
    headful: bool = False

    @field_validator("race", mode="before")
    @classmethod
    def parse_race(cls, value: Any) -> Any:
        return _parse_race(value)

    @property
    def display_name(self) -> str:
        return self.player_name or self.name


class GameConfig(BaseModel):
    """The match described by ``game.json`` or the command line."""

    map: str = ""
    game_name: Optional[str] = None
    bots: List[BotConfig] = Field(min_length=1)
    human_host: bool = False
    human_speed: bool = False
    latency_frames: Optional[int] = Field(default=None, ge=0)
    timeout_frames: Optional[int] = Field(default=None, ge=1)
    tournament_module: bool = False

    @model_validator(mode="after")
    def check_map(self) -> "GameConfig":
        if not self.map and not self.human_host:
            raise ValueError("Map must be set for non-human hosted games")
        return self

    @model_validator(mode="after")
    def check_player_count(self) -> "GameConfig":
        # One game table slot per engine
        if len(self.bots) > SLOT_COUNT:
            raise ValueError(
                f"At most {SLOT_COUNT} bots per game are supported, got {len(self.bots)}"
            )
        return self

    @property
    def player_count(self) -> int:
        return len(self.bots)

    def validate_map(self, starcraft_path: Path) -> None:
        """Ensure the map exists, either absolute or relative to StarCraft.

        Raises:
            ConfigurationError: If the map cannot be found
        """
        if not self.map:
            return
        absolute = Path(self.map)
        relative = starcraft_path / self.map
        if absolute.is_absolute() and absolute.exists():
            return
        if relative.exists():
            return
        raise ConfigurationError(
            f"Could not find map '{self.map}'",
            stage="validate-map",
            path=absolute if absolute.is_absolute() else relative,
        )


class BotDefinition(BaseModel):
    """Per-bot defaults from ``bots/<name>/bot.json``."""

    race: Race
    executable: Optional[str] = None

    @field_validator("race", mode="before")
    @classmethod
    def parse_race(cls, value: Any) -> Any:
        return _parse_race(value)


@dataclass
class MatchSettings:
    """Everything a match run needs, with the folder layout resolved."""

    base_dir: Path
    shotgun: ShotgunConfig
    game: GameConfig

    @property
    def tools_dir(self) -> Path:
        return self.base_dir / "tools"

    @property
    def bots_dir(self) -> Path:
        return self.base_dir / "bots"

    @property
    def tm_dir(self) -> Path:
        return self.base_dir / "tm"

    @property
    def log_dir(self) -> Path:
        return self.base_dir / "logs"

    def bot_folder(self, name: str) -> Path:
        return self.bots_dir / name


def base_folder() -> Path:
    """Shotgun base folder: SHOTGUN_HOME or the current directory."""
    home = os.environ.get("SHOTGUN_HOME")
    return Path(home) if home else Path.cwd()


def load_json(path: Path) -> Dict[str, Any]:
    """Read a JSON object from ``path``.

    Raises:
        ConfigurationError: If the file is unreadable or not a JSON object
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(
            f"Could not read '{path.name}': {e}", stage="load-config", path=path
        ) from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"'{path.name}' is not valid JSON: {e}", stage="load-config", path=path
        ) from e
    if not isinstance(raw, dict):
        raise ConfigurationError(
            f"Expected a JSON object at the root of '{path.name}'",
            stage="load-config",
            path=path,
        )
    return raw


def _validation_message(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        loc = ".".join(str(p) for p in item.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {item.get('msg')}")
    return "; ".join(parts)


def load_shotgun_config(base_dir: Path) -> ShotgunConfig:
    """Load ``shotgun.json`` (defaults if missing) and apply env overrides."""
    path = base_dir / SHOTGUN_CONFIG_FILE
    data: Dict[str, Any] = {}
    if path.exists():
        data = load_json(path)
    else:
        logger.warning(f"{SHOTGUN_CONFIG_FILE} not found, using defaults")

    for env_key, config_key in ENV_OVERRIDES.items():
        if os.environ.get(env_key):
            data[config_key] = os.environ[env_key]

    try:
        return ShotgunConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid config in '{SHOTGUN_CONFIG_FILE}': {_validation_message(e)}",
            stage="load-config",
            path=path,
        ) from e


def load_game_config(base_dir: Path) -> GameConfig:
    """Load ``game.json``."""
    path = base_dir / GAME_CONFIG_FILE
    if not path.exists():
        raise ConfigurationError(
            f"Could not load '{GAME_CONFIG_FILE}'", stage="load-config", path=path
        )
    try:
        return GameConfig.model_validate(load_json(path))
    except ValidationError as e:
        raise ConfigurationError(
            f"'{GAME_CONFIG_FILE}' is invalid: {_validation_message(e)}",
            stage="load-config",
            path=path,
        ) from e


def load_bot_definition(bot_folder: Path, bot_name: str) -> BotDefinition:
    """Load ``bot.json`` for one bot."""
    path = bot_folder / BOT_CONFIG_FILE
    if not path.exists():
        raise ConfigurationError(
            f"Could not read '{BOT_CONFIG_FILE}' for bot '{bot_name}'",
            bot=bot_name,
            stage="load-config",
            path=path,
        )
    try:
        return BotDefinition.model_validate(load_json(path))
    except ValidationError as e:
        raise ConfigurationError(
            f"Could not read '{BOT_CONFIG_FILE}': {_validation_message(e)}",
            bot=bot_name,
            stage="load-config",
            path=path,
        ) from e


def _registry_install_path() -> Optional[str]:
    if sys.platform != "win32":
        return None
    import winreg

    try:
        with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, STARCRAFT_REGISTRY_KEY) as key:
            value, _ = winreg.QueryValueEx(key, "InstallPath")
    except OSError as e:
        logger.debug("StarCraft registry lookup failed: %s", e)
        return None
    return str(value)
