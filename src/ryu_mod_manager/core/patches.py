"""Game specific fixups and installation integrity checks.

Nothing in here stops the run. Fixups are applied when their files are
present, and integrity problems are reported as warnings.
"""

import hashlib
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from ..config.paths import ManagerPaths
from ..console import ConsoleOutput
from ..logging_config import get_logger
from .game_detector import Game, GameEnvironment

logger = get_logger("patches")


@dataclass(frozen=True)
class LoaderPatch:
    """Move the ASI loader from one dll name to another.

    If ``source`` exists it is renamed to ``target``. When both exist,
    ``source`` is deleted since having both loaded crashes the game.
    """
    source: str
    target: str
    reason: str = ""

    def apply(self, game_dir: Path, console: ConsoleOutput) -> bool:
        """Apply the patch in the game directory.

        Returns:
            True if a file was renamed or deleted
        """
        source = game_dir / self.source
        target = game_dir / self.target

        if not source.is_file():
            return False

        try:
            if target.is_file():
                console.write(f"Game specific patch: Deleting {self.source} because {self.target} exists...")
                source.unlink()
                logger.info(f"Deleted {source} ({self.reason})")
            else:
                console.write(f"Game specific patch: Renaming {self.source} to {self.target}...")
                source.rename(target)
                logger.info(f"Renamed {source} to {target} ({self.reason})")
        except OSError as e:
            logger.error(f"Game specific patch failed: {e}")
            console.write_line(" FAILED!\n")
            return False

        console.write_line(" DONE!\n")
        return True


# Game -> patches applied on every run, in order
GAME_PATCHES: dict[Game, list[LoaderPatch]] = {
    Game.EVE: [
        LoaderPatch(
            source=ManagerPaths.DINPUT8DLL,
            target=ManagerPaths.VERSIONDLL,
            reason="Virtua Fighter 5 Ultimate Showdown crashes with dinput8.dll as the ASI loader",
        ),
    ],
}

# Game -> MD5 digests of supported executables. Games without an entry are
# not checked.
KNOWN_EXE_HASHES: dict[Game, frozenset[str]] = {}


def apply_game_specific_patch(
    env: GameEnvironment,
    console: ConsoleOutput,
    patches: Optional[Mapping[Game, list[LoaderPatch]]] = None,
) -> int:
    """Apply every patch registered for the detected game.

    Returns:
        Number of patches that changed a file
    """
    if patches is None:
        patches = GAME_PATCHES

    applied = 0
    for patch in patches.get(env.game, []):
        if patch.apply(env.game_path, console):
            applied += 1
    return applied


def file_md5(path: Path, chunk_size: int = 1024 * 1024) -> str:
    """Calculate the MD5 hex digest of a file."""
    md5 = hashlib.md5()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            md5.update(chunk)
    return md5.hexdigest()


def validate_game_exe(
    env: GameEnvironment,
    known_hashes: Optional[Mapping[Game, frozenset[str]]] = None,
) -> bool:
    """Check the game executable against the known-good hashes for its game.

    Returns:
        True if the executable matches, or if there is nothing to compare against
    """
    if known_hashes is None:
        known_hashes = KNOWN_EXE_HASHES

    expected = known_hashes.get(env.game)
    if not expected or env.exe_path is None:
        return True

    try:
        digest = file_md5(env.exe_path)
    except OSError as e:
        logger.warning(f"Could not hash {env.exe_path}: {e}")
        return False

    logger.debug(f"{env.exe_name} md5: {digest}")
    return digest.lower() in {h.lower() for h in expected}


def check_integrity(
    env: GameEnvironment,
    paths: ManagerPaths,
    console: ConsoleOutput,
    known_hashes: Optional[Mapping[Game, frozenset[str]]] = None,
) -> list[str]:
    """Look for missing loader files and an unsupported game executable.

    Missing loader files are always printed. The executable hash check only
    runs, and is only printed, when warnings are enabled.

    Returns:
        Every warning found, in the order they were reported
    """
    warnings: list[str] = []

    def warn(message: str) -> None:
        logger.warning(message)
        warnings.append(message)
        console.write_line(f"Warning: {message}\n")

    # Check if the ASI loader is not in the directory (possibly due to incorrect zip extraction)
    dinput8 = paths.game_dir / paths.DINPUT8DLL
    version = paths.game_dir / paths.VERSIONDLL
    if not (dinput8.is_file() or version.is_file()):
        warn(f"\"{paths.DINPUT8DLL}\" is missing from this directory. "
             f"RyuModManager will NOT function properly without this file")

    if not paths.asi_file.is_file():
        warn(f"\"{paths.ASI_NAME}\" is missing from this directory. "
             f"RyuModManager will NOT function properly without this file")

    # Calculate the checksum for the game's exe to inform the user if their version might be unsupported
    if console.show_warnings and env.is_supported and not validate_game_exe(env, known_hashes):
        warn("Game version is unsupported. Please use the latest Steam version of the game.\n"
             "RyuModManager will still generate the load order, but the game might CRASH or not function properly")

    return warnings
