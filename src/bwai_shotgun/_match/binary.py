# Area: Match
"""
bwai_shotgun._match.binary — Bot binary resolution
==================================================

A bot is one of three artifact kinds, told apart by file extension:

    .dll  DynamicModule     loaded by BWAPI inside the engine
    .jar  ScriptArchive     started as ``java -jar``, connects as a client
    .exe  NativeExecutable  started directly, connects as a client

``resolve()`` scans ``bwapi-data/AI`` once (non-recursive) and picks the
strongest kind, NativeExecutable > DynamicModule > ScriptArchive. Two
candidates of the winning kind are ambiguous; weaker extras are ignored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..errors import AmbiguousArtifactError, ArtifactNotFoundError, UnsupportedArtifactError

logger = logging.getLogger("bwai_shotgun.binary")


class ArtifactKind(Enum):
    """Artifact kinds; the value is the precedence strength."""
    SCRIPT_ARCHIVE = 1
    DYNAMIC_MODULE = 2
    NATIVE_EXECUTABLE = 3


@dataclass(frozen=True)
class DynamicModule:
    path: Path
    kind = ArtifactKind.DYNAMIC_MODULE

    @property
    def runs_in_engine(self) -> bool:
        return True


@dataclass(frozen=True)
class ScriptArchive:
    path: Path
    kind = ArtifactKind.SCRIPT_ARCHIVE

    @property
    def runs_in_engine(self) -> bool:
        return False


@dataclass(frozen=True)
class NativeExecutable:
    path: Path
    kind = ArtifactKind.NATIVE_EXECUTABLE

    @property
    def runs_in_engine(self) -> bool:
        return False


BotArtifact = Union[DynamicModule, ScriptArchive, NativeExecutable]

_EXTENSIONS = {
    "dll": DynamicModule,
    "jar": ScriptArchive,
    "exe": NativeExecutable,
}


def classify(path: Path) -> Optional[BotArtifact]:
    """Classify ``path`` by its lower-cased extension, None if unknown."""
    ext = path.suffix.lower().lstrip(".")
    artifact_type = _EXTENSIONS.get(ext)
    if artifact_type is None:
        return None
    return artifact_type(path)


def resolve(directory: Path, bot: Optional[str] = None) -> BotArtifact:
    """
    Pick the single bot binary in ``directory``.

    Raises
    ------
    ArtifactNotFoundError
        If the directory is missing or holds no dll/jar/exe.
    AmbiguousArtifactError
        If the strongest kind present has more than one candidate.
    """
    if not directory.is_dir():
        raise ArtifactNotFoundError(directory, bot=bot)

    by_kind: Dict[ArtifactKind, List[BotArtifact]] = {}
    for entry in sorted(directory.iterdir()):
        if not entry.is_file():
            continue
        artifact = classify(entry)
        if artifact is not None:
            by_kind.setdefault(artifact.kind, []).append(artifact)

    if not by_kind:
        raise ArtifactNotFoundError(directory, bot=bot)

    strongest = max(by_kind, key=lambda kind: kind.value)
    winners = by_kind[strongest]
    if len(winners) > 1:
        raise AmbiguousArtifactError(directory, [a.path for a in winners], bot=bot)

    artifact = winners[0]
    logger.debug("Resolved %s binary: %s", bot or directory, artifact.path.name)
    return artifact


def resolve_override(path: Path, bot: Optional[str] = None) -> BotArtifact:
    """Classify an explicitly configured binary; existence is checked at launch."""
    artifact = classify(path)
    if artifact is None:
        raise UnsupportedArtifactError(path, bot=bot)
    return artifact
