"""Core business logic module.

This module contains the steps the orchestrator runs on every launch.

Submodules:
    manifest: ModLoadOrder.txt parsing and mod set resolution
    game_detector: GameDetector for identifying the game in the working directory
    patches: Table of game specific loader fixups and integrity warnings
    update_checker: UpdateChecker running the GitHub release check in the background
    engine: PackagingEngine interface, engine discovery and stale output cleanup
"""

from .engine import PackagingEngine, load_engine, remove_stale_artifacts
from .game_detector import Game, GameDetector, GameEnvironment
from .manifest import ModManifestEntry, ModSet, ResolvedMods, read_manifest, resolve_mods
from .patches import apply_game_specific_patch, check_integrity
from .update_checker import UpdateChecker

__all__ = [
    "Game",
    "GameDetector",
    "GameEnvironment",
    "ModManifestEntry",
    "ModSet",
    "PackagingEngine",
    "ResolvedMods",
    "UpdateChecker",
    "apply_game_specific_patch",
    "check_integrity",
    "load_engine",
    "read_manifest",
    "remove_stale_artifacts",
    "resolve_mods",
]
