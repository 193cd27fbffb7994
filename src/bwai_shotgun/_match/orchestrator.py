# Area: Match
"""
bwai_shotgun._match.orchestrator — Sequential match setup
=========================================================

Launches the participants of one match strictly one after another:

    for each bot (in-engine bots first):
        1. pick the role (first bot hosts unless a human hosts)
        2. build the launch plan and spawn the engine
        3. client bots: wait for a free slot in the game table
        4. client bots: spawn the bot process
        5. client bots: wait for the connected count to rise
        6. record the instance, later bots join

Any failure aborts the remaining setup. Processes started so far are
left running; the caller decides what to do with them.
"""

from __future__ import annotations

import logging
import os
import subprocess
import threading
from pathlib import Path
from typing import Callable, List, Optional

from ..config import MatchSettings
from ..errors import ClientDiedError, ConfigurationError, HostDiedError
from .._launch import ConnectMode, LaunchContext, LaunchPlan, launcher_for
from .._shared.game_table import GameTableAccess
from .binary import BotArtifact, NativeExecutable, ScriptArchive
from .instances import ActiveInstance
from .polling import PollPolicy, poll_until
from .prepared_bot import PreparedBot, order_for_launch

logger = logging.getLogger("bwai_shotgun.orchestrator")

Spawn = Callable[..., subprocess.Popen]

STARCRAFT_EXE = "StarCraft.exe"
HUMAN_SPEED = -1


class MatchOrchestrator:
    """Launches engine and bot processes for one match."""

    def __init__(
        self,
        settings: MatchSettings,
        table: GameTableAccess,
        spawn: Spawn = subprocess.Popen,
        stop_event: Optional[threading.Event] = None,
        policy: Optional[PollPolicy] = None,
    ):
        self.settings = settings
        self.table = table
        self.spawn = spawn
        self.stop_event = stop_event
        self.policy = policy or PollPolicy(
            interval_seconds=settings.shotgun.poll_interval_seconds,
            attempts=settings.shotgun.poll_attempts,
        )

    def launch(self, bots: List[PreparedBot]) -> List[ActiveInstance]:
        """
        Launch all bots and return the running instances in launch order.

        Raises
        ------
        ConfigurationError
            If a launch plan cannot be built or a process cannot be spawned.
        SynchronizationTimeoutError
            If a slot or a connection never shows up in the game table.
        HostDiedError, ClientDiedError
            If a process exits while its connection is awaited.
        MatchCancelledError
            If the stop event is set during a wait.
        """
        game = self.settings.game
        starcraft_exe = self.settings.shotgun.get_starcraft_path() / STARCRAFT_EXE
        game_name = game.game_name
        is_host = not game.human_host
        instances: List[ActiveInstance] = []

        for bot in order_for_launch(bots):
            if is_host:
                mode = ConnectMode.host(game.map, game.player_count)
                if bot.headful:
                    # Joiners look the game up by the host's name
                    game_name = bot.display_name
            else:
                mode = ConnectMode.join()

            ctx = LaunchContext(
                starcraft_exe=starcraft_exe,
                tools_dir=self.settings.tools_dir,
                mode=mode,
                game_name=game_name,
                wrapper=self.settings.shotgun.wrapper,
                game_speed=HUMAN_SPEED if game.human_speed else 0,
                latency_frames=game.latency_frames,
                timeout_frames=game.timeout_frames,
            )
            instances.append(self._launch_bot(bot, ctx))
            is_host = False

        logger.info("All %d bots launched", len(instances))
        return instances

    def _launch_bot(self, bot: PreparedBot, ctx: LaunchContext) -> ActiveInstance:
        plan = launcher_for(bot).build(bot, ctx)
        logger.info(
            "Starting %s as %s (%s)", bot.display_name, plan.role.value, bot.binary.path.name
        )

        baseline = self.table.connected_client_count()
        host = self._spawn_engine(bot, plan)
        if bot.runs_in_engine:
            return ActiveInstance(name=bot.name, host=host)

        poll_until(
            lambda: self._slot_ready(bot, host),
            self.policy,
            bot=bot.name,
            stage="await-slot",
            timeout_message="BWAPI did not register the game in the game table",
            stop_event=self.stop_event,
            log_path=bot.log_dir / "game_err.log",
        )

        client = self._spawn_bot(bot, ctx)
        poll_until(
            lambda: self._client_connected(bot, host, client, baseline),
            self.policy,
            bot=bot.name,
            stage="await-connection",
            timeout_message="Bot did not connect to BWAPI",
            stop_event=self.stop_event,
            log_path=bot.log_dir / "bot_err.log",
        )
        logger.info("%s connected", bot.display_name)
        return ActiveInstance(name=bot.name, host=host, bot=client)

    def _slot_ready(self, bot: PreparedBot, host: subprocess.Popen) -> bool:
        self._check_host(bot, host, "await-slot")
        table = self.table.snapshot()
        return table is not None and table.has_free_slot()

    def _client_connected(
        self,
        bot: PreparedBot,
        host: subprocess.Popen,
        client: subprocess.Popen,
        baseline: int,
    ) -> bool:
        self._check_host(bot, host, "await-connection")
        returncode = client.poll()
        if returncode is not None:
            raise ClientDiedError(
                "Bot process exited before connecting to BWAPI",
                bot=bot.name,
                stage="await-connection",
                returncode=returncode,
                log_path=bot.log_dir / "bot_err.log",
            )
        return self.table.connected_client_count() > baseline

    def _check_host(self, bot: PreparedBot, host: subprocess.Popen, stage: str) -> None:
        returncode = host.poll()
        if returncode is not None:
            raise HostDiedError(
                "StarCraft exited before the bot connected",
                bot=bot.name,
                stage=stage,
                returncode=returncode,
                log_path=bot.log_dir / "game_err.log",
            )

    def _spawn_engine(self, bot: PreparedBot, plan: LaunchPlan) -> subprocess.Popen:
        return self._spawn(
            plan.command,
            bot=bot,
            cwd=plan.working_dir,
            extra_env=plan.env,
            log_prefix="game",
            stage="spawn-engine",
        )

    def _spawn_bot(self, bot: PreparedBot, ctx: LaunchContext) -> subprocess.Popen:
        if not bot.binary.path.exists():
            raise ConfigurationError(
                f"Could not find bot binary '{bot.binary.path.name}'",
                bot=bot.name,
                stage="spawn-bot",
                path=bot.binary.path,
            )
        return self._spawn(
            self.bot_command(bot.binary, ctx),
            bot=bot,
            cwd=bot.working_dir,
            extra_env=None,
            log_prefix="bot",
            stage="spawn-bot",
        )

    def bot_command(self, binary: BotArtifact, ctx: LaunchContext) -> List[str]:
        """Command line for a separately spawned bot."""
        if isinstance(binary, ScriptArchive):
            java = self.settings.shotgun.java_executable()
            return ctx.wrapper.wrap(java) + ["-jar", str(binary.path)]
        if isinstance(binary, NativeExecutable):
            return ctx.wrapper.wrap(binary.path)
        raise ValueError(f"{binary.path.name} is loaded by BWAPI, not spawned")

    def _spawn(
        self,
        command: List[str],
        bot: PreparedBot,
        cwd: Path,
        extra_env: Optional[dict],
        log_prefix: str,
        stage: str,
    ) -> subprocess.Popen:
        env: Optional[dict] = None
        if extra_env:
            env = dict(os.environ)
            env.update(extra_env)
        out_path = bot.log_dir / f"{log_prefix}_out.log"
        err_path = bot.log_dir / f"{log_prefix}_err.log"
        try:
            with open(out_path, "w", encoding="utf-8") as out, \
                    open(err_path, "w", encoding="utf-8") as err:
                process = self.spawn(command, cwd=str(cwd), env=env, stdout=out, stderr=err)
        except OSError as e:
            raise ConfigurationError(
                f"Could not start '{command[0]}': {e}",
                bot=bot.name,
                stage=stage,
                path=command[0],
            ) from e
        logger.debug("%s %s process started (pid %s)", bot.name, log_prefix, process.pid)
        return process

