# Area: Launch
"""
bwai_shotgun._launch.tournament — Tournament module compatibility
=================================================================

A tournament module only works with the BWAPI version it was built
against. Each bot ships its own BWAPI.dll, so the version is detected
from the CRC32 of that file and looked up in ``tm/modules.json``:

    {
      "checksums": {"<crc32 hex>": "<bwapi version>", ...},
      "modules":   {"<bwapi version>": "<module file in tm/>", ...}
    }

The values are tied to third-party releases, so they live in that data
file and not in code.
"""

from __future__ import annotations

import logging
import zlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from ..errors import ConfigurationError

logger = logging.getLogger("bwai_shotgun.launch.tournament")

TABLE_FILE = "modules.json"


def engine_checksum(bwapi_dll: Path) -> str:
    """CRC32 of a BWAPI.dll as 8 lower-case hex digits."""
    crc = 0
    with open(bwapi_dll, "rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            crc = zlib.crc32(chunk, crc)
    return f"{crc & 0xFFFFFFFF:08x}"


@dataclass
class TournamentModuleTable:
    """Checksum -> BWAPI version -> tournament module file."""
    tm_dir: Path
    checksums: Dict[str, str] = field(default_factory=dict)
    modules: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def load(cls, tm_dir: Path) -> "TournamentModuleTable":
        """Load ``<tm_dir>/modules.json``; an absent file gives an empty table."""
        from ..config import load_json

        path = tm_dir / TABLE_FILE
        if not path.exists():
            logger.debug("No tournament module table at %s", path)
            return cls(tm_dir=tm_dir)
        raw = load_json(path)
        checksums = raw.get("checksums") or {}
        modules = raw.get("modules") or {}
        if not isinstance(checksums, dict) or not isinstance(modules, dict):
            raise ConfigurationError(
                f"'{TABLE_FILE}' needs 'checksums' and 'modules' objects",
                stage="load-config",
                path=path,
            )
        return cls(
            tm_dir=tm_dir,
            checksums={str(k).lower(): str(v) for k, v in checksums.items()},
            modules={str(k): str(v) for k, v in modules.items()},
        )

    def version_for(self, checksum: str) -> Optional[str]:
        return self.checksums.get(checksum.lower())

    def module_for(self, bwapi_dll: Path, bot: Optional[str] = None) -> Optional[Path]:
        """Tournament module matching ``bwapi_dll``, or None if unknown."""
        if not bwapi_dll.exists():
            return None
        checksum = engine_checksum(bwapi_dll)
        version = self.version_for(checksum)
        if version is None:
            logger.warning(
                "Unknown BWAPI version (crc32 %s) for '%s', running without tournament module",
                checksum, bot or bwapi_dll,
            )
            return None
        module_name = self.modules.get(version)
        if module_name is None:
            logger.warning("No tournament module for BWAPI %s", version)
            return None
        module = self.tm_dir / module_name
        if not module.exists():
            raise ConfigurationError(
                f"Tournament module for BWAPI {version} not found",
                bot=bot,
                stage="resolve-tournament-module",
                path=module,
            )
        logger.debug("BWAPI %s detected for %s, using %s", version, bot, module)
        return module
