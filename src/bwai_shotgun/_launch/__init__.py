# Area: Launch
"""
Engine launch builders.

This package contains:
- The LaunchBuilder interface and LaunchPlan
- bwheadless and injectory builders
- bwapi.ini generation
- Execution wrappers and tournament module lookup
"""

from typing import TYPE_CHECKING

from .base import LaunchBuilder, LaunchContext, LaunchPlan
from .bwapi_ini import AutoMenu, BwapiIni
from .headless import HeadlessLauncher
from .injected import InjectedLauncher
from .modes import ConnectMode
from .tournament import TournamentModuleTable
from .wrapper import ExecutionWrapper

if TYPE_CHECKING:
    from .._match.prepared_bot import PreparedBot


def launcher_for(bot: "PreparedBot") -> LaunchBuilder:
    """Headful bots get a visible, injected StarCraft; the rest run headless."""
    if bot.headful:
        return InjectedLauncher()
    return HeadlessLauncher()


__all__ = [
    "AutoMenu",
    "BwapiIni",
    "ConnectMode",
    "ExecutionWrapper",
    "HeadlessLauncher",
    "InjectedLauncher",
    "LaunchBuilder",
    "LaunchContext",
    "LaunchPlan",
    "TournamentModuleTable",
    "launcher_for",
]
