# Area: Match Tests
"""Tests for bot binary classification and resolution."""

import pytest

from bwai_shotgun._match.binary import (
    ArtifactKind,
    DynamicModule,
    NativeExecutable,
    ScriptArchive,
    classify,
    resolve,
    resolve_override,
)
from bwai_shotgun.errors import (
    AmbiguousArtifactError,
    ArtifactNotFoundError,
    UnsupportedArtifactError,
)


def touch(directory, *names):
    directory.mkdir(parents=True, exist_ok=True)
    for name in names:
        (directory / name).write_bytes(b"x")
    return directory


class TestClassify:
    """Extension based classification."""

    @pytest.mark.parametrize("name, expected", [
        ("Bot.dll", DynamicModule),
        ("bot.JAR", ScriptArchive),
        ("Bot.Exe", NativeExecutable),
    ])
    def test_known_extensions(self, tmp_path, name, expected):
        artifact = classify(tmp_path / name)
        assert isinstance(artifact, expected)
        assert artifact.path == tmp_path / name

    def test_unknown_extension(self, tmp_path):
        assert classify(tmp_path / "readme.txt") is None
        assert classify(tmp_path / "noext") is None

    def test_only_dll_runs_in_engine(self, tmp_path):
        assert DynamicModule(tmp_path / "a.dll").runs_in_engine
        assert not ScriptArchive(tmp_path / "a.jar").runs_in_engine
        assert not NativeExecutable(tmp_path / "a.exe").runs_in_engine

    def test_kind_strength_order(self):
        assert (ArtifactKind.NATIVE_EXECUTABLE.value
                > ArtifactKind.DYNAMIC_MODULE.value
                > ArtifactKind.SCRIPT_ARCHIVE.value)


class TestResolve:
    """Directory scan with precedence exe > dll > jar."""

    @pytest.mark.parametrize("name, expected", [
        ("bot.dll", DynamicModule),
        ("bot.jar", ScriptArchive),
        ("bot.exe", NativeExecutable),
    ])
    def test_single_candidate(self, tmp_path, name, expected):
        ai = touch(tmp_path / "AI", name, "notes.txt")
        artifact = resolve(ai)
        assert isinstance(artifact, expected)
        assert artifact.path.name == name

    def test_exe_beats_dll_and_jar(self, tmp_path):
        ai = touch(tmp_path / "AI", "a.jar", "b.dll", "c.exe")
        assert isinstance(resolve(ai), NativeExecutable)

    def test_dll_beats_jar(self, tmp_path):
        ai = touch(tmp_path / "AI", "a.jar", "b.dll")
        assert isinstance(resolve(ai), DynamicModule)

    def test_weaker_duplicates_are_ignored(self, tmp_path):
        ai = touch(tmp_path / "AI", "a.jar", "b.jar", "bot.dll")
        assert resolve(ai).path.name == "bot.dll"

    def test_two_of_winning_kind_is_ambiguous(self, tmp_path):
        ai = touch(tmp_path / "AI", "a.dll", "b.dll", "c.jar")
        with pytest.raises(AmbiguousArtifactError) as exc_info:
            resolve(ai, bot="Dupe")
        assert exc_info.value.bot == "Dupe"
        assert sorted(p.name for p in exc_info.value.candidates) == ["a.dll", "b.dll"]

    def test_two_exe_is_ambiguous(self, tmp_path):
        ai = touch(tmp_path / "AI", "a.exe", "b.exe")
        with pytest.raises(AmbiguousArtifactError):
            resolve(ai)

    def test_empty_directory(self, tmp_path):
        ai = touch(tmp_path / "AI", "readme.md")
        with pytest.raises(ArtifactNotFoundError) as exc_info:
            resolve(ai, bot="Empty")
        assert exc_info.value.stage == "resolve-binary"
        assert exc_info.value.path == ai

    def test_missing_directory(self, tmp_path):
        with pytest.raises(ArtifactNotFoundError):
            resolve(tmp_path / "nope")

    def test_subdirectories_are_not_scanned(self, tmp_path):
        ai = touch(tmp_path / "AI")
        touch(ai / "nested", "bot.dll")
        with pytest.raises(ArtifactNotFoundError):
            resolve(ai)

    def test_result_does_not_depend_on_listing_order(self, tmp_path):
        first = touch(tmp_path / "one", "z.exe", "a.dll", "m.jar")
        second = touch(tmp_path / "two", "a.exe", "z.dll", "b.jar")
        assert isinstance(resolve(first), NativeExecutable)
        assert isinstance(resolve(second), NativeExecutable)


class TestResolveOverride:
    """Explicit executable from bot.json."""

    def test_override_is_classified(self, tmp_path):
        artifact = resolve_override(tmp_path / "bin" / "Bot.exe")
        assert isinstance(artifact, NativeExecutable)

    def test_override_need_not_exist(self, tmp_path):
        artifact = resolve_override(tmp_path / "missing.jar")
        assert isinstance(artifact, ScriptArchive)

    def test_unsupported_override(self, tmp_path):
        with pytest.raises(UnsupportedArtifactError) as exc_info:
            resolve_override(tmp_path / "bot.py", bot="Py")
        assert exc_info.value.bot == "Py"
