# Area: Launch
"""
bwai_shotgun._launch.headless — bwheadless launch builder
=========================================================

Starts StarCraft without a window through ``tools/bwheadless.exe``.
Role, race, name and map travel as command-line flags; ``bwapi.ini``
only carries the AI and tournament modules.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .base import LaunchBuilder, LaunchContext, LaunchPlan, check_engine_files, engine_environment
from .bwapi_ini import BwapiIni

if TYPE_CHECKING:
    from .._match.prepared_bot import PreparedBot

logger = logging.getLogger("bwai_shotgun.launch.headless")


class HeadlessLauncher(LaunchBuilder):
    """Launch strategy for headless bots."""

    tool_name = "bwheadless.exe"

    def build(self, bot: "PreparedBot", ctx: LaunchContext) -> LaunchPlan:
        bwheadless = check_engine_files(bot, ctx, self.tool_name)

        ini_path = BwapiIni(
            ai_module=bot.ai_module_path,
            tournament_module=str(bot.tournament_module) if bot.tournament_module else None,
            game_speed=ctx.game_speed,
        ).write(bot.bwapi_ini)

        cmd = ctx.wrapper.wrap(bwheadless)
        cmd += ["-e", str(ctx.starcraft_exe)]
        if ctx.game_name:
            cmd += ["-g", ctx.game_name]
        cmd += ["-r", str(bot.race)]
        cmd += ["-l", str(bot.bwapi_dll)]
        cmd += ["--installpath", str(bot.working_dir)]
        cmd += ["-n", bot.display_name]
        if ctx.latency_frames is not None:
            cmd += ["-gs", str(ctx.latency_frames)]
        if ctx.mode.is_host:
            starcraft_dir = ctx.starcraft_exe.parent
            cmd += ["-m", str(starcraft_dir / ctx.mode.map)]
            cmd += ["-h", str(ctx.mode.player_count)]

        logger.debug("bwheadless command for %s: %s", bot.name, cmd)
        return LaunchPlan(
            command=cmd,
            env=engine_environment(bot, ini_path, ctx),
            working_dir=bot.working_dir,
            config_path=ini_path,
            role=ctx.mode.role,
        )
