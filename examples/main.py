"""
main.py — Run a match from Python
=================================

Same as running ``bwai-shotgun``, but with the match defined in code
instead of game.json.

    python main.py

The runner will:
  1. Check your StarCraft installation and the map
  2. Prepare each bot folder (bwapi-data/read, write, logs)
  3. Start one StarCraft per bot, in-engine (DLL) bots first
  4. Wait until every engine has exited

Press Ctrl+C to stop.
"""

import sys
from pathlib import Path

from bwai_shotgun import BotConfig, GameConfig, MatchRunner, MatchSettings, ShotgunError
from bwai_shotgun.config import load_shotgun_config
from bwai_shotgun._shared import log_shotgun_error

# ── Base folder with tools/, bots/ and shotgun.json ──
base_dir = Path(__file__).resolve().parent.parent

# ── The match ──
game = GameConfig(
    map="maps/BroodWar/(2)Benzene.scx",
    bots=[
        # First bot hosts the game
        BotConfig(name="PurpleWave", race="p"),
        # Visible window through injectory
        BotConfig(name="Stardust", player_name="Dust", headful=True),
    ],
    # Skip frame limiting so the game runs at full speed
    human_speed=False,
)

settings = MatchSettings(
    base_dir=base_dir,
    shotgun=load_shotgun_config(base_dir),
    game=game,
)

try:
    sys.exit(MatchRunner(settings).run())
except ShotgunError as e:
    log_shotgun_error(e)
    sys.exit(1)
