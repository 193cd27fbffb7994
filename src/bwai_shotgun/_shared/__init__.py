# Area: Shared
"""
Shared utilities used by the launchers and the match orchestrator.

This package contains:
- Logging configuration
- The BWAPI shared game table reader
"""

from .logging_config import (
    setup_logging,
    log_and_terminate,
    log_shotgun_error,
)
from .game_table import (
    GameTable,
    GameTableAccess,
    SlotStatus,
    decode_game_table,
)

__all__ = [
    "setup_logging",
    "log_and_terminate",
    "log_shotgun_error",
    "GameTable",
    "GameTableAccess",
    "SlotStatus",
    "decode_game_table",
]
