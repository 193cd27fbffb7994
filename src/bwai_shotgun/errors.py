# Area: Shared
"""
bwai_shotgun.errors — Custom exception classes
===============================================

Defines the exception hierarchy for match setup errors.
Each exception stores which bot, which stage and which path failed so
the CLI can print an actionable error block.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .error_formatter import format_error_block

PathLike = Union[str, Path]


class ShotgunError(Exception):
    """Base exception for all bwai_shotgun errors."""

    error_type = "SHOTGUN_ERROR"

    def __init__(
        self,
        message: str,
        bot: Optional[str] = None,
        stage: Optional[str] = None,
        path: Optional[PathLike] = None,
    ):
        self.message = message
        self.bot = bot
        self.stage = stage
        self.path = Path(path) if path is not None else None
        super().__init__(message)

    def details(self) -> Dict[str, Any]:
        """Extra key/value context shown in the error block."""
        return {}

    def format_error_log(self) -> str:
        return format_error_block(
            error_type=self.error_type,
            message=self.message,
            bot=self.bot,
            stage=self.stage,
            path=str(self.path) if self.path is not None else None,
            details=self.details(),
        )


class ConfigurationError(ShotgunError):
    """Raised when a required file, tool or setting is missing or invalid."""

    error_type = "CONFIGURATION_ERROR"


class ArtifactError(ShotgunError):
    """Base class for bot binary resolution failures."""

    error_type = "ARTIFACT_ERROR"


class ArtifactNotFoundError(ArtifactError):
    """Raised when a bot folder holds no dll/jar/exe candidate."""

    error_type = "ARTIFACT_NOT_FOUND"

    def __init__(self, directory: PathLike, bot: Optional[str] = None):
        super().__init__(
            f"No bot binary found in '{directory}'",
            bot=bot,
            stage="resolve-binary",
            path=directory,
        )


class AmbiguousArtifactError(ArtifactError):
    """Raised when several equally strong bot binaries are found."""

    error_type = "AMBIGUOUS_ARTIFACT"

    def __init__(
        self,
        directory: PathLike,
        candidates: List[Path],
        bot: Optional[str] = None,
    ):
        self.candidates = list(candidates)
        super().__init__(
            f"Found multiple binary candidates in '{directory}', "
            "please select one with 'executable' in 'bot.json'",
            bot=bot,
            stage="resolve-binary",
            path=directory,
        )

    def details(self) -> Dict[str, Any]:
        return {"candidates": [p.name for p in self.candidates]}


class UnsupportedArtifactError(ArtifactError):
    """Raised when an explicit executable override has an unknown extension."""

    error_type = "UNSUPPORTED_ARTIFACT"

    def __init__(self, path: PathLike, bot: Optional[str] = None):
        super().__init__(
            f"'{path}' is not a dll, jar or exe",
            bot=bot,
            stage="resolve-binary",
            path=path,
        )


class SynchronizationTimeoutError(ShotgunError):
    """Raised when a polling wait exhausts its retry budget."""

    error_type = "SYNCHRONIZATION_TIMEOUT"

    def __init__(
        self,
        message: str,
        bot: Optional[str],
        stage: str,
        attempts: int,
        interval_seconds: float,
        path: Optional[PathLike] = None,
    ):
        self.attempts = attempts
        self.interval_seconds = interval_seconds
        super().__init__(message, bot=bot, stage=stage, path=path)

    def details(self) -> Dict[str, Any]:
        return {
            "attempts": self.attempts,
            "interval_seconds": self.interval_seconds,
        }


class ProcessDiedError(ShotgunError):
    """Raised when a spawned process exits while a wait is in progress."""

    error_type = "PROCESS_DIED"

    def __init__(
        self,
        message: str,
        bot: Optional[str],
        stage: str,
        returncode: Optional[int],
        log_path: Optional[PathLike] = None,
    ):
        self.returncode = returncode
        super().__init__(message, bot=bot, stage=stage, path=log_path)

    def details(self) -> Dict[str, Any]:
        return {"exit_code": self.returncode}


class HostDiedError(ProcessDiedError):
    """The engine process exited before the bot client connected."""

    error_type = "HOST_DIED"


class ClientDiedError(ProcessDiedError):
    """The bot process exited before it connected to the engine."""

    error_type = "CLIENT_DIED"


class MatchCancelledError(ShotgunError):
    """Raised when match setup is interrupted by the operator."""

    error_type = "MATCH_CANCELLED"
