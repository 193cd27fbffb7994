# Area: Match Tests
"""Tests for per-match bot preparation and launch ordering."""

from pathlib import Path

import pytest

from bwai_shotgun._launch.tournament import TournamentModuleTable
from bwai_shotgun._match.binary import DynamicModule, NativeExecutable, ScriptArchive
from bwai_shotgun._match.prepared_bot import PreparedBot, order_for_launch
from bwai_shotgun.config import BotConfig, BotDefinition
from bwai_shotgun.errors import AmbiguousArtifactError, ArtifactNotFoundError
from bwai_shotgun.types import Race


class TestPrepare:
    """PreparedBot.prepare()"""

    def test_creates_folders(self, make_bot):
        folder = make_bot("Foo")
        PreparedBot.prepare(BotConfig(name="Foo"), folder, BotDefinition(race="p"))
        assert (folder / "bwapi-data" / "read").is_dir()
        assert (folder / "bwapi-data" / "write").is_dir()
        assert (folder / "logs").is_dir()

    def test_prepare_is_idempotent(self, make_bot):
        folder = make_bot("Foo")
        (folder / "bwapi-data" / "read").mkdir()
        (folder / "bwapi-data" / "read" / "learned.txt").write_text("x")
        PreparedBot.prepare(BotConfig(name="Foo"), folder, BotDefinition(race="p"))
        PreparedBot.prepare(BotConfig(name="Foo"), folder, BotDefinition(race="p"))
        assert (folder / "bwapi-data" / "read" / "learned.txt").exists()

    def test_defaults_from_definition(self, make_bot):
        folder = make_bot("Foo", binary="Foo.dll")
        bot = PreparedBot.prepare(BotConfig(name="Foo"), folder, BotDefinition(race="Terran"))
        assert bot.name == "Foo"
        assert bot.display_name == "Foo"
        assert bot.race == Race.TERRAN
        assert isinstance(bot.binary, DynamicModule)
        assert bot.working_dir == folder
        assert bot.log_dir == folder / "logs"
        assert bot.tournament_module is None

    def test_match_overrides(self, make_bot):
        folder = make_bot("Foo")
        config = BotConfig(name="Foo", player_name="Fooey", race="z", headful=True)
        bot = PreparedBot.prepare(config, folder, BotDefinition(race="Terran"))
        assert bot.display_name == "Fooey"
        assert bot.race == Race.ZERG
        assert bot.headful

    def test_bwapi_paths(self, make_bot):
        folder = make_bot("Foo", binary="Foo.dll")
        bot = PreparedBot.prepare(BotConfig(name="Foo"), folder, BotDefinition(race="p"))
        assert bot.bwapi_data_dir == folder / "bwapi-data"
        assert bot.bwapi_dll == folder / "bwapi-data" / "BWAPI.dll"
        assert bot.bwapi_ini == folder / "bwapi-data" / "bwapi.ini"
        assert bot.ai_module_path == str(folder / "bwapi-data" / "AI" / "Foo.dll")

    def test_client_bot_has_no_ai_module(self, make_bot):
        folder = make_bot("Foo", binary="Foo.jar")
        bot = PreparedBot.prepare(BotConfig(name="Foo"), folder, BotDefinition(race="p"))
        assert isinstance(bot.binary, ScriptArchive)
        assert bot.ai_module_path == ""
        assert not bot.runs_in_engine

    def test_relative_executable_override(self, make_bot):
        folder = make_bot("Foo", binary=None)
        definition = BotDefinition(race="p", executable="bin/Foo.exe")
        bot = PreparedBot.prepare(BotConfig(name="Foo"), folder, definition)
        assert isinstance(bot.binary, NativeExecutable)
        assert bot.binary.path == folder / "bin" / "Foo.exe"

    def test_absolute_executable_override(self, make_bot, tmp_path):
        folder = make_bot("Foo")
        target = tmp_path / "elsewhere" / "Foo.jar"
        definition = BotDefinition(race="p", executable=str(target))
        bot = PreparedBot.prepare(BotConfig(name="Foo"), folder, definition)
        assert bot.binary.path == target

    def test_no_binary(self, make_bot):
        folder = make_bot("Foo", binary=None)
        with pytest.raises(ArtifactNotFoundError) as exc_info:
            PreparedBot.prepare(BotConfig(name="Foo"), folder, BotDefinition(race="p"))
        assert exc_info.value.bot == "Foo"

    def test_ambiguous_binary(self, make_bot):
        folder = make_bot("Foo", binary="a.exe")
        (folder / "bwapi-data" / "AI" / "b.exe").write_bytes(b"x")
        with pytest.raises(AmbiguousArtifactError):
            PreparedBot.prepare(BotConfig(name="Foo"), folder, BotDefinition(race="p"))

    def test_tournament_module_only_when_enabled(self, make_bot, tmp_path):
        folder = make_bot("Foo")
        table = TournamentModuleTable(tm_dir=tmp_path)
        bot = PreparedBot.prepare(
            BotConfig(name="Foo"), folder, BotDefinition(race="p"), tm_table=table
        )
        assert bot.tournament_module is None

    def test_tournament_module_resolved(self, make_bot, tmp_path):
        from bwai_shotgun._launch.tournament import engine_checksum

        folder = make_bot("Foo")
        module = tmp_path / "tm_412.dll"
        module.write_bytes(b"tm")
        table = TournamentModuleTable(
            tm_dir=tmp_path,
            checksums={engine_checksum(folder / "bwapi-data" / "BWAPI.dll"): "4.1.2"},
            modules={"4.1.2": "tm_412.dll"},
        )
        bot = PreparedBot.prepare(
            BotConfig(name="Foo"), folder, BotDefinition(race="p"),
            tm_table=table, use_tournament_module=True,
        )
        assert bot.tournament_module == module


def bot_with(name, binary):
    return PreparedBot(
        name=name,
        display_name=name,
        binary=binary,
        race=Race.PROTOSS,
        working_dir=Path(name),
        log_dir=Path(name) / "logs",
    )


class TestOrderForLaunch:
    """In-engine bots go first, relative order is kept."""

    def test_dll_first(self):
        bots = [
            bot_with("exe", NativeExecutable(Path("a.exe"))),
            bot_with("dll", DynamicModule(Path("b.dll"))),
            bot_with("jar", ScriptArchive(Path("c.jar"))),
            bot_with("dll2", DynamicModule(Path("d.dll"))),
        ]
        assert [b.name for b in order_for_launch(bots)] == ["dll", "dll2", "exe", "jar"]

    def test_stable_without_dll(self):
        bots = [
            bot_with("jar", ScriptArchive(Path("c.jar"))),
            bot_with("exe", NativeExecutable(Path("a.exe"))),
        ]
        assert [b.name for b in order_for_launch(bots)] == ["jar", "exe"]

    def test_does_not_mutate_input(self):
        bots = [
            bot_with("exe", NativeExecutable(Path("a.exe"))),
            bot_with("dll", DynamicModule(Path("b.dll"))),
        ]
        order_for_launch(bots)
        assert bots[0].name == "exe"
