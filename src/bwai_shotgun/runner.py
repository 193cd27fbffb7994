# Area: Match
"""
bwai_shotgun.runner — Match runner
==================================

Runs one match from loaded settings to the end of the last game:

    1. locate StarCraft and validate the map
    2. preflight warnings (SNP driver, stale game table entries,
       duplicate names, race mismatches)
    3. prepare every bot
    4. launch them through the MatchOrchestrator
    5. supervise until every engine has exited

Ctrl+C sets a stop event: pending waits abort with MatchCancelledError,
a running supervision kills the remaining processes.
"""

from __future__ import annotations

import logging
import signal
import subprocess
import threading
from collections import Counter
from pathlib import Path
from typing import List, Optional

from .config import MatchSettings, load_bot_definition
from ._launch.tournament import TournamentModuleTable
from ._match import MatchOrchestrator, PreparedBot, ProcessSupervisor
from ._match.orchestrator import Spawn
from ._shared import GameTableAccess, setup_logging
from .types import Race

logger = logging.getLogger("bwai_shotgun.runner")

SNP_DIRECT_IP = "SNP_DirectIP.snp"
# Size of the bundled SNP_DirectIP.snp that supports full 8 player games
SNP_DIRECT_IP_SIZE = 46100


class MatchRunner:
    """
    Runs a single match.

    Usage::

        settings = MatchSettings(base_dir, load_shotgun_config(base_dir),
                                 load_game_config(base_dir))
        exit_code = MatchRunner(settings).run()
    """

    def __init__(
        self,
        settings: MatchSettings,
        table: Optional[GameTableAccess] = None,
        spawn: Spawn = subprocess.Popen,
        log_level: int = logging.INFO,
        configure_logging: bool = True,
    ):
        self.settings = settings
        self.table = table or GameTableAccess()
        self.spawn = spawn
        self.stop_event = threading.Event()

        if configure_logging:
            setup_logging(log_file_path=settings.log_dir / "shotgun.log", level=log_level)

    def run(self) -> int:
        """
        Run the match. Blocks until all games have ended.

        Returns 0 once every instance has finished.

        Raises
        ------
        ShotgunError
            Any setup failure; processes started before it keep running.
        """
        previous_handler = signal.signal(signal.SIGINT, self._on_interrupt)
        try:
            self._log_startup()
            starcraft_path = self.settings.shotgun.get_starcraft_path()
            self.settings.game.validate_map(starcraft_path)
            self._check_snp(starcraft_path)
            self._check_game_table()
            self._check_display_names()

            bots = self.prepare_bots()
            orchestrator = MatchOrchestrator(
                self.settings,
                self.table,
                spawn=self.spawn,
                stop_event=self.stop_event,
            )
            instances = orchestrator.launch(bots)

            supervisor = ProcessSupervisor(self.settings.shotgun.supervisor_tick_seconds)
            supervisor.run(instances, stop_event=self.stop_event)
            return 0
        finally:
            signal.signal(signal.SIGINT, previous_handler)
            self.table.close()

    def prepare_bots(self) -> List[PreparedBot]:
        """Load each bot's definition and prepare it, in game config order."""
        game = self.settings.game
        tm_table = None
        if game.tournament_module:
            tm_table = TournamentModuleTable.load(self.settings.tm_dir)

        prepared = []
        for config in game.bots:
            bot_folder = self.settings.bot_folder(config.name)
            definition = load_bot_definition(bot_folder, config.name)
            if (
                config.race is not None
                and definition.race != Race.RANDOM
                and config.race != definition.race
            ):
                logger.warning(
                    "Bot '%s' is configured to play as %s, but its default race is %s!",
                    config.name, config.race, definition.race,
                )
            prepared.append(PreparedBot.prepare(
                config,
                bot_folder,
                definition,
                tm_table=tm_table,
                use_tournament_module=game.tournament_module,
            ))
        return prepared

    def _on_interrupt(self, signum, frame) -> None:
        logger.warning("Interrupted, stopping match")
        self.stop_event.set()

    def _log_startup(self) -> None:
        game = self.settings.game
        logger.info("=" * 60)
        logger.info("  BWAI Shotgun — Starting match")
        logger.info(f"  Map:   {game.map or '(chosen by human host)'}")
        logger.info(f"  Bots:  {', '.join(bot.name for bot in game.bots)}")
        logger.info(f"  Host:  {'human' if game.human_host else game.bots[0].name}")
        logger.info("=" * 60)

    def _check_snp(self, starcraft_path: Path) -> None:
        snp = starcraft_path / SNP_DIRECT_IP
        if not snp.exists():
            logger.warning(
                "Could not find '%s' in your StarCraft installation, "
                "please copy the provided one or install BWAPI.",
                SNP_DIRECT_IP,
            )
        elif snp.stat().st_size != SNP_DIRECT_IP_SIZE:
            logger.warning(
                "The '%s' in your StarCraft installation might not support more "
                "than ~6 bots per game. Overwrite it with the included one to support more.",
                SNP_DIRECT_IP,
            )

    def _check_game_table(self) -> None:
        table = self.table.snapshot()
        if table is None:
            return
        for pid in table.connected_process_ids():
            logger.warning(
                "The process %d is in the game table already and will interfere "
                "with game creation.",
                pid,
            )

    def _check_display_names(self) -> None:
        counts = Counter(bot.display_name for bot in self.settings.game.bots)
        for name, count in counts.items():
            if count > 1:
                logger.warning(
                    "%d bots use the name '%s', joining bots may not find the right game",
                    count, name,
                )
