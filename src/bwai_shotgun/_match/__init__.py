# Area: Match
"""
Match setup and supervision.

This package contains:
- Bot binary resolution and per-match bot preparation
- Bounded polling waits on the game table
- The sequential launch orchestrator
- The process supervisor
"""

from .binary import (
    ArtifactKind,
    BotArtifact,
    DynamicModule,
    NativeExecutable,
    ScriptArchive,
    classify,
    resolve,
    resolve_override,
)
from .instances import ActiveInstance
from .orchestrator import MatchOrchestrator
from .polling import PollPolicy, poll_until
from .prepared_bot import PreparedBot, order_for_launch
from .supervisor import ProcessSupervisor

__all__ = [
    "ActiveInstance",
    "ArtifactKind",
    "BotArtifact",
    "DynamicModule",
    "MatchOrchestrator",
    "NativeExecutable",
    "PollPolicy",
    "PreparedBot",
    "ProcessSupervisor",
    "ScriptArchive",
    "classify",
    "order_for_launch",
    "poll_until",
    "resolve",
    "resolve_override",
]
