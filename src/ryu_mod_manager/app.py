"""Main application entry point and orchestrator"""

import argparse
import sys
from enum import Enum
from typing import Callable, Optional

from .config.manager import ConfigurationManager
from .config.paths import ManagerPaths
from .config.schema import Settings
from .console import ConsoleOutput
from .core.engine import PackagingEngine, ensure_mods_dir, load_engine, remove_stale_artifacts
from .core.game_detector import GameDetector, GameEnvironment
from .core.manifest import ResolvedMods, resolve_mods
from .core.patches import apply_game_specific_patch, check_integrity
from .core.update_checker import JOIN_TIMEOUT, UpdateChecker
from .logging_config import setup_logging, get_logger
from . import __app_name__, __author__, __version__

logger = get_logger("app")


class RunState(Enum):
    """Steps of a run, in the order they are reached"""
    INIT = "init"
    CONFIG_LOADED = "config_loaded"
    MANIFEST_RESOLVED = "manifest_resolved"
    ENVIRONMENT_DETECTED = "environment_detected"
    ABORTED = "aborted"
    STALE_ARTIFACTS_CLEARED = "stale_artifacts_cleared"
    GENERATION_SKIPPED = "generation_skipped"
    GENERATION_INVOKED = "generation_invoked"
    PATCHES_APPLIED = "patches_applied"
    INTEGRITY_CHECKED = "integrity_checked"
    UPDATE_JOINED = "update_joined"
    DONE = "done"


class RyuModManagerApp:
    """Main application orchestrator.

    Loads the configuration, resolves mods, runs the packaging engine and
    the game fixups, and reports the background update check at the end.

    Args:
        paths: Game directory paths, defaults to the current directory
        silent: Skip the final key press and the update check
        engine: Packaging engine; discovered from installed entry points if None
        update_checker_factory: Creates the update checker (replaceable for tests)
        join_timeout: Seconds to wait for the update check at the end
    """

    def __init__(
        self,
        paths: Optional[ManagerPaths] = None,
        silent: bool = False,
        engine: Optional[PackagingEngine] = None,
        update_checker_factory: Callable[[], UpdateChecker] = UpdateChecker,
        join_timeout: float = JOIN_TIMEOUT,
    ):
        self.paths = paths or ManagerPaths()
        self.silent = silent
        self.engine = engine
        self.update_checker_factory = update_checker_factory
        self.join_timeout = join_timeout

        self.console = ConsoleOutput()
        self.settings: Optional[Settings] = None
        self.resolved: Optional[ResolvedMods] = None
        self.environment: Optional[GameEnvironment] = None
        self.update_checker: Optional[UpdateChecker] = None
        self.warnings: list[str] = []

        self.state = RunState.INIT
        self.history: list[RunState] = [RunState.INIT]

    def _advance(self, state: RunState) -> None:
        logger.debug(f"{self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)

    def run(self) -> int:
        """Run the whole pipeline.

        Returns:
            Exit status, 0 for every anticipated outcome
        """
        config_manager = ConfigurationManager(self.paths, self.console)
        self.settings = config_manager.load()
        # Console flags come from the ini and are passed along explicitly
        self.console.verbose = self.settings.verbose
        self.console.show_warnings = self.settings.show_warnings
        self._advance(RunState.CONFIG_LOADED)

        # Start checking for updates before the actual generation is done
        if self.settings.check_for_updates and not self.silent:
            self.update_checker = self.update_checker_factory()
            self.update_checker.start()

        self.resolved = resolve_mods(self.settings, self.paths, self.console)
        self._advance(RunState.MANIFEST_RESOLVED)

        self.environment = GameDetector(self.paths.game_dir).detect()
        self._advance(RunState.ENVIRONMENT_DETECTED)

        if self.environment.is_supported:
            self._generate()
        else:
            self.console.write_line("Aborting: No supported game was found in this directory\n")
            self._advance(RunState.ABORTED)

        apply_game_specific_patch(self.environment, self.console)
        self._advance(RunState.PATCHES_APPLIED)

        self.warnings = check_integrity(self.environment, self.paths, self.console)
        self._advance(RunState.INTEGRITY_CHECKED)

        if self.update_checker is not None:
            self._report_update()
            self._advance(RunState.UPDATE_JOINED)

        self._advance(RunState.DONE)
        return 0

    def _generate(self) -> None:
        """Clear old output, then generate the load order if there is anything to load."""
        ensure_mods_dir(self.paths, self.console)
        remove_stale_artifacts(self.paths, self.console)
        self._advance(RunState.STALE_ARTIFACTS_CLEARED)

        if not self.resolved.should_generate():
            self.console.write_line("Aborting: No mods were found, and .parless paths are disabled\n")
            self._advance(RunState.GENERATION_SKIPPED)
            return

        engine = self.engine or load_engine()
        if engine is None:
            self.console.warn("No mod packaging engine is installed. The mod load order was not generated\n")
            self._advance(RunState.GENERATION_SKIPPED)
            return

        self._advance(RunState.GENERATION_INVOKED)
        logger.info(f"Generating load order for {len(self.resolved.mods)} mod(s), "
                    f"loose files {'enabled' if self.resolved.loose_files_enabled else 'disabled'}")
        try:
            engine.generate(self.resolved.mods, self.resolved.loose_files_enabled, self.paths, self.console)
        except Exception as e:
            logger.exception("Mod packaging engine failed")
            self.console.warn(f"Failed to generate the mod load order: {e}\n")

    def _report_update(self) -> None:
        self.console.write_line("Checking for updates...")

        # Wait for a maximum of 5 seconds for the update check if it was not finished
        report = self.update_checker.join(self.join_timeout)
        if report is not None:
            report.flush(self.console)
        else:
            self.console.write_line("Unable to check for updates\n")


def wait_for_key() -> None:
    """Block until the user presses a key (Enter outside Windows)."""
    print("Program finished. Press any key to exit...")
    if sys.platform == "win32":
        import msvcrt
        msvcrt.getch()
    else:
        try:
            input()
        except EOFError:
            pass


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ryumm",
        description="Generate the mod load order and repack pars for the game in the current directory.",
    )
    parser.add_argument("-s", "--silent", action="store_true",
                        help="Do not wait for a key press at the end and skip the update check")
    parser.add_argument("--debug", action="store_true", help="Write log messages to the console and to RyuModManager.log")
    # Unknown arguments are ignored for compatibility with launchers
    args, _ = parser.parse_known_args(argv)
    return args


def main(argv: Optional[list[str]] = None) -> int:
    """Application entry point."""
    if argv is None:
        argv = sys.argv[1:]
    args = parse_args(argv)

    # Initialize logging first
    logger = setup_logging(debug=args.debug)
    logger.info(f"Starting {__app_name__} {__version__}")

    print(f"{__app_name__} {__version__}")
    print(f"By {__author__}\n")

    if not argv:
        print("No arguments were passed. Will generate Mod Load Order and repack pars...\n")

    try:
        status = RyuModManagerApp(silent=args.silent).run()
    except Exception as e:
        logger.exception("Fatal error")
        print(f"Fatal error: {e}")
        status = 1
    finally:
        logger.info(f"{__app_name__} shutting down")

    if not args.silent:
        wait_for_key()
    return status


if __name__ == "__main__":
    sys.exit(main())
