# Area: Match
"""Running engine/bot process pairs."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import Optional


@dataclass
class ActiveInstance:
    """
    One launched participant.

    ``host`` is the engine process (bwheadless or injectory). ``bot`` is
    the separately spawned client, None for in-engine (DLL) bots.
    """
    name: str
    host: subprocess.Popen
    bot: Optional[subprocess.Popen] = None

    def host_exited(self) -> bool:
        return self.host.poll() is not None

    def bot_running(self) -> bool:
        return self.bot is not None and self.bot.poll() is None
