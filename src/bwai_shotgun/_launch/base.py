# Area: Launch
"""
bwai_shotgun._launch.base — Launch builder interface
====================================================

A launch builder turns one prepared bot plus the match-level launch
context into a LaunchPlan: the engine command, its environment
overrides, its working directory and the generated ``bwapi.ini``.

Two builders implement the interface:
- HeadlessLauncher: bwheadless.exe, everything passed as flags
- InjectedLauncher: injectory_x86.exe, BWAPI auto-menu in bwapi.ini

Both check their preconditions first and raise ConfigurationError with
the exact missing path, then write ``bwapi.ini`` and return the plan.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional

from ..errors import ConfigurationError
from ..types import ConnectRole
from .modes import ConnectMode
from .wrapper import ExecutionWrapper

if TYPE_CHECKING:
    from .._match.prepared_bot import PreparedBot

CONFIG_ENV_VAR = "BWAPI_CONFIG_INI"
TM_RESULTS_ENV_VAR = "TM_LOG_RESULTS"
TM_FRAMETIMES_ENV_VAR = "TM_LOG_FRAMETIMES"
TM_TIMEOUT_ENV_VAR = "TM_TIMEOUT_FRAMES"


@dataclass(frozen=True)
class LaunchContext:
    """Match-level inputs shared by every bot launch."""
    starcraft_exe: Path
    tools_dir: Path
    mode: ConnectMode
    game_name: Optional[str] = None
    wrapper: ExecutionWrapper = field(default_factory=ExecutionWrapper)
    # 0 = full throttle, -1 = human speed
    game_speed: int = 0
    latency_frames: Optional[int] = None
    timeout_frames: Optional[int] = None


@dataclass
class LaunchPlan:
    """Everything needed to spawn one engine process."""
    command: List[str]
    env: Dict[str, str]
    working_dir: Path
    config_path: Path
    role: ConnectRole

    @property
    def is_host(self) -> bool:
        return self.role == ConnectRole.HOST


class LaunchBuilder(ABC):
    """Interface for the engine launch strategies."""

    #: Executable name inside the tools folder
    tool_name: str = ""

    @abstractmethod
    def build(self, bot: "PreparedBot", ctx: LaunchContext) -> LaunchPlan:
        """
        Build the launch plan for ``bot``.

        Side effect: writes ``<bot>/bwapi-data/bwapi.ini``.

        Raises
        ------
        ConfigurationError
            If StarCraft, the bot's BWAPI files or the tool are missing.
        """


def require_file(path: Path, message: str, bot: str) -> Path:
    if not path.exists():
        raise ConfigurationError(message, bot=bot, stage="build-launch", path=path)
    return path


def check_engine_files(bot: "PreparedBot", ctx: LaunchContext, tool_name: str) -> Path:
    """Check StarCraft, bwapi-data, BWAPI.dll and the tool; return the tool path."""
    require_file(ctx.starcraft_exe, "Could not find 'StarCraft.exe'", bot.name)
    require_file(
        bot.bwapi_data_dir,
        f"Missing '{bot.bwapi_data_dir}' - please read the instructions on how to setup a bot.",
        bot.name,
    )
    require_file(bot.bwapi_dll, f"Could not find '{bot.bwapi_dll}'", bot.name)
    tool = ctx.tools_dir / tool_name
    require_file(
        tool,
        f"Could not find '{tool}'. Please make sure to extract all files, "
        "or check your antivirus software.",
        bot.name,
    )
    return tool


def engine_environment(bot: "PreparedBot", ini_path: Path, ctx: LaunchContext) -> Dict[str, str]:
    """Environment overrides shared by both launch strategies."""
    # Newer BWAPI versions ignore the install path registry key but honour this
    env = {
        CONFIG_ENV_VAR: str(ini_path),
        TM_RESULTS_ENV_VAR: str(bot.log_dir / "result.json"),
        TM_FRAMETIMES_ENV_VAR: str(bot.log_dir / "frames.csv"),
    }
    if ctx.timeout_frames is not None:
        env[TM_TIMEOUT_ENV_VAR] = str(ctx.timeout_frames)
    return env
