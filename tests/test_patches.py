import hashlib

import pytest

from ryu_mod_manager.console import ConsoleOutput
from ryu_mod_manager.core.game_detector import Game, GameEnvironment
from ryu_mod_manager.core.patches import (
    LoaderPatch,
    apply_game_specific_patch,
    check_integrity,
    file_md5,
    validate_game_exe,
)


@pytest.fixture
def eve_env(paths):
    (paths.game_dir / "eve.exe").write_bytes(b"eve executable")
    return GameEnvironment(Game.EVE, paths.game_dir, "eve.exe")


def install_loader(paths, *names):
    for name in names:
        (paths.game_dir / name).write_bytes(b"loader")


def test_eve_renames_dinput8_to_version(paths, console, eve_env, stream):
    install_loader(paths, paths.DINPUT8DLL)

    assert apply_game_specific_patch(eve_env, console) == 1

    assert not (paths.game_dir / paths.DINPUT8DLL).exists()
    assert (paths.game_dir / paths.VERSIONDLL).is_file()
    assert "Renaming dinput8.dll to version.dll... DONE!" in stream.getvalue()


def test_eve_deletes_dinput8_when_version_exists(paths, console, eve_env, stream):
    install_loader(paths, paths.DINPUT8DLL)
    (paths.game_dir / paths.VERSIONDLL).write_bytes(b"existing version.dll")

    assert apply_game_specific_patch(eve_env, console) == 1

    assert not (paths.game_dir / paths.DINPUT8DLL).exists()
    assert (paths.game_dir / paths.VERSIONDLL).read_bytes() == b"existing version.dll"
    assert "Deleting dinput8.dll because version.dll exists... DONE!" in stream.getvalue()


def test_eve_without_loader_does_nothing(paths, console, eve_env):
    assert apply_game_specific_patch(eve_env, console) == 0
    assert not (paths.game_dir / paths.VERSIONDLL).exists()


def test_other_games_are_not_patched(paths, console):
    install_loader(paths, paths.DINPUT8DLL)
    env = GameEnvironment(Game.YAKUZA0, paths.game_dir, "Yakuza0.exe")

    assert apply_game_specific_patch(env, console) == 0
    assert (paths.game_dir / paths.DINPUT8DLL).is_file()


def test_custom_patch_table(paths, console):
    install_loader(paths, "a.dll")
    env = GameEnvironment(Game.JUDGMENT, paths.game_dir, "Judgment.exe")
    table = {Game.JUDGMENT: [LoaderPatch("a.dll", "b.dll")]}

    assert apply_game_specific_patch(env, console, patches=table) == 1
    assert (paths.game_dir / "b.dll").is_file()


def test_missing_loader_and_asi_warn(paths, console, eve_env, stream):
    warnings = check_integrity(eve_env, paths, console)

    assert len(warnings) == 2
    assert "dinput8.dll" in warnings[0]
    assert "YakuzaParless.asi" in warnings[1]
    assert stream.getvalue().count("Warning: ") == 2


def test_complete_install_has_no_warnings(paths, console, eve_env):
    install_loader(paths, paths.VERSIONDLL, paths.ASI_NAME)

    assert check_integrity(eve_env, paths, console) == []


def test_missing_loader_warnings_print_with_warnings_disabled(paths, stream, eve_env):
    console = ConsoleOutput(show_warnings=False, stream=stream)

    warnings = check_integrity(eve_env, paths, console)

    assert len(warnings) == 2
    assert stream.getvalue().count("Warning: ") == 2
    assert "dinput8.dll" in stream.getvalue()
    assert "YakuzaParless.asi" in stream.getvalue()


def test_hash_mismatch_warns(paths, console, eve_env):
    install_loader(paths, paths.VERSIONDLL, paths.ASI_NAME)
    known = {Game.EVE: frozenset({"0" * 32})}

    warnings = check_integrity(eve_env, paths, console, known_hashes=known)

    assert len(warnings) == 1
    assert "Game version is unsupported" in warnings[0]


def test_hash_match_passes(paths, console, eve_env):
    install_loader(paths, paths.VERSIONDLL, paths.ASI_NAME)
    digest = hashlib.md5(b"eve executable").hexdigest()
    known = {Game.EVE: frozenset({digest.upper()})}

    assert check_integrity(eve_env, paths, console, known_hashes=known) == []


def test_hash_check_skipped_when_warnings_disabled(paths, stream, eve_env):
    install_loader(paths, paths.VERSIONDLL, paths.ASI_NAME)
    console = ConsoleOutput(show_warnings=False, stream=stream)
    known = {Game.EVE: frozenset({"0" * 32})}

    assert check_integrity(eve_env, paths, console, known_hashes=known) == []


def test_unsupported_game_is_not_hashed(paths, console):
    env = GameEnvironment(Game.UNSUPPORTED, paths.game_dir)

    assert validate_game_exe(env, {Game.UNSUPPORTED: frozenset({"0" * 32})}) is True


def test_unreadable_exe_fails_validation(paths):
    env = GameEnvironment(Game.EVE, paths.game_dir, "missing.exe")

    assert validate_game_exe(env, {Game.EVE: frozenset({"0" * 32})}) is False


def test_file_md5(tmp_path):
    path = tmp_path / "data.bin"
    path.write_bytes(b"x" * 5000)

    assert file_md5(path, chunk_size=1024) == hashlib.md5(b"x" * 5000).hexdigest()
