# Area: Launch
"""
bwai_shotgun._launch.injected — injectory launch builder
========================================================

Starts a visible StarCraft through ``tools/injectory_x86.exe``, which
injects BWAPI.dll (and WMode.dll for windowed mode) at startup. BWAPI's
LAN auto-menu, written into ``bwapi.ini``, then hosts or joins the game.

injectory does not touch the registry the way bwheadless does, so bots
built against BWAPI older than 4.x will most likely not work here.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .base import LaunchBuilder, LaunchContext, LaunchPlan, check_engine_files, engine_environment, require_file
from .bwapi_ini import AutoMenu, BwapiIni

if TYPE_CHECKING:
    from .._match.prepared_bot import PreparedBot

logger = logging.getLogger("bwai_shotgun.launch.injected")


class InjectedLauncher(LaunchBuilder):
    """Launch strategy for headful bots."""

    tool_name = "injectory_x86.exe"
    wmode_dll = "WMode.dll"

    def __init__(self, wmode: bool = True):
        self.wmode = wmode

    def build(self, bot: "PreparedBot", ctx: LaunchContext) -> LaunchPlan:
        injectory = check_engine_files(bot, ctx, self.tool_name)
        wmode = None
        if self.wmode:
            wmode = require_file(
                ctx.tools_dir / self.wmode_dll,
                f"Could not find '{ctx.tools_dir / self.wmode_dll}'",
                bot.name,
            )

        ini_path = BwapiIni(
            ai_module=bot.ai_module_path,
            tournament_module=str(bot.tournament_module) if bot.tournament_module else None,
            game_speed=ctx.game_speed,
            auto_menu=AutoMenu(
                character_name=bot.display_name,
                race=bot.race,
                game_name=ctx.game_name or bot.display_name,
                mode=ctx.mode,
            ),
        ).write(bot.bwapi_ini)

        cmd = ctx.wrapper.wrap(injectory)
        cmd += ["-l", str(ctx.starcraft_exe)]
        cmd += ["-i", str(bot.bwapi_dll)]
        if wmode is not None:
            cmd.append(str(wmode))
        cmd += ["--wait-for-exit", "--kill-on-exit"]

        logger.debug("injectory command for %s: %s", bot.name, cmd)
        return LaunchPlan(
            command=cmd,
            env=engine_environment(bot, ini_path, ctx),
            working_dir=bot.working_dir,
            config_path=ini_path,
            role=ctx.mode.role,
        )
