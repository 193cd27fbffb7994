"""
bwai_shotgun.types — Shared enums for match configuration
==========================================================

These enums are used by the config models, the launch builders and
the orchestrator:

    from bwai_shotgun import Race, ConnectRole

    >>> Race.parse("z")
    <Race.ZERG: 'Zerg'>
"""

from enum import Enum


class Race(Enum):
    """Playable race, rendered the way bwheadless and bwapi.ini expect it."""
    PROTOSS = "Protoss"
    TERRAN = "Terran"
    ZERG = "Zerg"
    RANDOM = "Random"

    @classmethod
    def parse(cls, value: str) -> "Race":
        """Accept full names or single letters, case-insensitive."""
        aliases = {
            "p": cls.PROTOSS, "protoss": cls.PROTOSS,
            "t": cls.TERRAN, "terran": cls.TERRAN,
            "z": cls.ZERG, "zerg": cls.ZERG,
            "r": cls.RANDOM, "random": cls.RANDOM,
        }
        race = aliases.get(str(value).strip().lower())
        if race is None:
            raise ValueError(
                f"Invalid race '{value}': one of Zerg/Protoss/Terran/Random or z/p/t/r"
            )
        return race

    def __str__(self) -> str:
        return self.value


class ConnectRole(Enum):
    """Whether an engine instance creates the game or joins it."""
    HOST = "host"
    JOIN = "join"
