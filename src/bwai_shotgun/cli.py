# Area: Shared
"""
bwai_shotgun.cli — Command-line interface
=========================================

Provides the CLI entry points.

Usage:
    bwai-shotgun                                  # Run the match in game.json
    bwai-shotgun --map maps/Fighting.scx melee A B  # Bots A and B, A hosts
    bwai-shotgun --map maps/Fighting.scx human A B  # You host, A and B join
    bwai-game-table                               # Dump the BWAPI game table

Settings can also come from a ``.env`` file in the working directory:
    SHOTGUN_HOME=C:\\bwai-shotgun
    STARCRAFT_PATH=C:\\StarCraft
    SHOTGUN_LOG_LEVEL=DEBUG
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from .config import (
    BotConfig,
    GameConfig,
    MatchSettings,
    base_folder,
    load_game_config,
    load_shotgun_config,
)
from .errors import ConfigurationError, ShotgunError
from .runner import MatchRunner
from ._shared import GameTableAccess, log_shotgun_error


def build_parser() -> argparse.ArgumentParser:
    """Build the ``bwai-shotgun`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="bwai-shotgun",
        description="Start a local StarCraft: Brood War bot match",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bwai-shotgun
  bwai-shotgun --map maps/Fighting.scx melee PurpleWave Stardust
  bwai-shotgun --map maps/Fighting.scx human PurpleWave

Either give no game arguments (game.json is used) or both --map and a
game type.
        """,
    )

    parser.add_argument(
        "--base-dir",
        type=str,
        help="Shotgun base folder with tools/, bots/ and game.json "
             "(default: SHOTGUN_HOME or the current directory)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        help="Log level (default: SHOTGUN_LOG_LEVEL or INFO)",
    )

    parser.add_argument(
        "-m", "--map",
        type=str,
        help="Path of the map to host, absolute or relative to StarCraft",
    )

    subparsers = parser.add_subparsers(dest="game_type")
    melee = subparsers.add_parser("melee", help="Host a melee game")
    melee.add_argument("bots", nargs="+", help="Names of bots to play")
    human = subparsers.add_parser(
        "human",
        help="You will host a game the bots can join (select Local PC network)",
    )
    human.add_argument("bots", nargs="+", help="Names of bots to play")

    return parser


def game_from_args(args: argparse.Namespace) -> Optional[GameConfig]:
    """
    Game config from the command line, None if no game arguments were given.

    Raises
    ------
    ConfigurationError
        If only one of map and game type is given.
    """
    if args.map is None and args.game_type is None:
        return None
    if args.map is None or args.game_type is None:
        raise ConfigurationError(
            "Either no or all arguments are required. Use '-h' to get help.",
            stage="parse-args",
        )
    try:
        return GameConfig(
            map=args.map,
            bots=[BotConfig(name=name) for name in args.bots],
            human_host=args.game_type == "human",
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid arguments: {e}", stage="parse-args") from e


def resolve_log_level(value: Optional[str]) -> int:
    name = (value or os.environ.get("SHOTGUN_LOG_LEVEL") or "INFO").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level '{name}'", stage="parse-args")
    return level


def load_settings(args: argparse.Namespace) -> MatchSettings:
    """Resolve the base folder and load shotgun.json plus the game config."""
    base_dir = Path(args.base_dir) if args.base_dir else base_folder()
    shotgun = load_shotgun_config(base_dir)
    game = game_from_args(args)
    if game is None:
        game = load_game_config(base_dir)
    return MatchSettings(base_dir=base_dir, shotgun=shotgun, game=game)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        level = resolve_log_level(args.log_level)
        settings = load_settings(args)
        runner = MatchRunner(settings, log_level=level)
        return runner.run()
    except ShotgunError as e:
        log_shotgun_error(e)
        return 1


def dump_game_table() -> int:
    """Print the BWAPI game table as JSON; prints nothing if it is unavailable."""
    with GameTableAccess() as access:
        table = access.snapshot()
    if table is not None:
        print(json.dumps(table.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
