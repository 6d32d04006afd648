"""Interface to the mod packaging engine and cleanup of its old output.

The packaging engine builds YakuzaParless.mlo (the load order read by the
game-side loader) and repacks par archives. It ships separately and registers
itself under the ``ryu_mod_manager.engines`` entry point group::

    [project.entry-points."ryu_mod_manager.engines"]
    parless = "my_engine:ParlessEngine"
"""

import shutil
from abc import ABC, abstractmethod
from importlib.metadata import entry_points
from typing import Optional

from ..config.paths import ManagerPaths
from ..console import ConsoleOutput
from ..logging_config import get_logger
from .manifest import ModSet

logger = get_logger("engine")

ENGINE_GROUP = "ryu_mod_manager.engines"


class PackagingEngine(ABC):
    """Generates the mod load order and repacks archives for a set of mods"""

    @abstractmethod
    def generate(self, mods: ModSet, loose_files_enabled: bool,
                 paths: ManagerPaths, console: ConsoleOutput) -> None:
        """Generate the load order for ``mods``.

        Blocks until generation is complete. Raises on failure.
        """


def load_engine() -> Optional[PackagingEngine]:
    """Instantiate the first installed packaging engine.

    Returns:
        The engine, or None if no engine is installed or it failed to load
    """
    for ep in entry_points(group=ENGINE_GROUP):
        try:
            engine_cls = ep.load()
            engine = engine_cls()
        except Exception:
            logger.exception(f"Failed to load packaging engine \"{ep.name}\"")
            continue

        if not isinstance(engine, PackagingEngine):
            logger.warning(f"Entry point \"{ep.name}\" is not a PackagingEngine, skipping")
            continue

        logger.info(f"Using packaging engine \"{ep.name}\" ({ep.value})")
        return engine

    logger.warning(f"No packaging engine registered under {ENGINE_GROUP}")
    return None


def ensure_mods_dir(paths: ManagerPaths, console: ConsoleOutput) -> None:
    """Create the mods folder if it does not exist."""
    if paths.mods_dir.is_dir():
        return

    console.write(f"\"{paths.MODS_NAME}\" folder was not found. Creating empty folder... ")
    try:
        paths.mods_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Failed to create {paths.mods_dir}: {e}")
        console.write_line("FAILED!\n")
        return
    console.write_line("DONE!\n")


def remove_stale_artifacts(paths: ManagerPaths, console: ConsoleOutput) -> list[str]:
    """Remove the previous load order and repacked pars.

    Runs before generation so old output is never used alongside a new
    (or skipped) generation.

    Returns:
        Names of the artifacts that were removed
    """
    removed = []

    if paths.mlo_file.is_file():
        console.write("Removing old MLO...")
        try:
            paths.mlo_file.unlink()
        except OSError as e:
            logger.error(f"Failed to remove {paths.mlo_file}: {e}")
            console.write_line(" FAILED!\n")
        else:
            removed.append(paths.MLO_NAME)
            console.write_line(" DONE!\n")

    if paths.repacked_dir.is_dir():
        console.write_verbose(f"Removing old repacked pars in {paths.repacked_dir}...")
        try:
            shutil.rmtree(paths.repacked_dir)
        except OSError as e:
            logger.error(f"Failed to remove {paths.repacked_dir}: {e}")
        else:
            removed.append(paths.REPACKED_NAME)

    if removed:
        logger.info(f"Removed stale artifacts: {removed}")
    return removed
