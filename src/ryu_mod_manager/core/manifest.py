"""Mod load order resolution.

ModLoadOrder.txt lists one mod folder name per line, highest priority first.
';' starts a comment: a line beginning with ';' is ignored entirely, and
anything after the first ';' on a line is dropped.

Example::

    ; My load order
    BetterTextures
    CoolOutfits   ; needs BetterTextures

When external mods only mode is enabled and mods/_externalMods exists, the
load order file is not read at all and the whole external mods folder is
loaded as a single entry.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator

from ..config.paths import ManagerPaths
from ..config.schema import Settings
from ..console import ConsoleOutput
from ..logging_config import get_logger

logger = get_logger("manifest")

COMMENT_MARKER = ";"

TXT_TEMPLATE = """\
; Ryu Mod Manager - Mod Load Order
; Write the name of each mod folder (inside the "mods" folder) on its own line.
; Mods at the top of the list have priority over the mods below them.
; Lines starting with ';' are comments and will be ignored.
"""


@dataclass
class ModManifestEntry:
    """A mod folder name read from ModLoadOrder.txt"""
    name: str
    line_number: int  # 1-based


@dataclass
class ModSet:
    """Ordered mod folder names without duplicates (first occurrence wins)"""
    names: list[str] = field(default_factory=list)

    def add(self, name: str) -> bool:
        """Append a mod if it is not already in the set.

        Returns:
            True if the mod was added
        """
        if name in self.names:
            return False
        self.names.append(name)
        return True

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)

    def __contains__(self, name: object) -> bool:
        return name in self.names


@dataclass
class ResolvedMods:
    """Result of mod resolution handed to the packaging engine"""
    mods: ModSet
    loose_files_enabled: bool
    external_only: bool = False

    def should_generate(self) -> bool:
        """Generation runs when there is at least one mod or loose files are enabled."""
        return len(self.mods) > 0 or self.loose_files_enabled


def parse_line(line: str) -> str:
    """Extract the mod name from a load order line.

    Returns:
        The mod name, or an empty string for comments and blank lines
    """
    if line.startswith(COMMENT_MARKER):
        return ""
    return line.split(COMMENT_MARKER, 1)[0].strip()


def iter_manifest_lines(lines: Iterable[str]) -> Iterator[ModManifestEntry]:
    """Yield an entry for every line that names a mod."""
    for line_number, line in enumerate(lines, start=1):
        name = parse_line(line.rstrip("\r\n"))
        if name:
            yield ModManifestEntry(name=name, line_number=line_number)


def read_manifest(txt_path: Path) -> list[ModManifestEntry]:
    """Parse ModLoadOrder.txt and return its entries in file order.

    Entries are returned as written; existence and duplicate checks are done
    by resolve_mods().
    """
    # utf-8-sig drops the BOM Windows editors may write at the start of the file
    with open(txt_path, encoding="utf-8-sig", errors="replace") as f:
        return list(iter_manifest_lines(f))


def build_mod_set(entries: Iterable[ModManifestEntry], paths: ManagerPaths) -> ModSet:
    """Keep existing mod folders only, in first-seen order."""
    mods = ModSet()
    for entry in entries:
        if not paths.mod_dir(entry.name).is_dir():
            logger.debug(f"Skipping \"{entry.name}\" (line {entry.line_number}): mod folder not found")
            continue
        if not mods.add(entry.name):
            logger.debug(f"Skipping \"{entry.name}\" (line {entry.line_number}): duplicate entry")
    return mods


def resolve_mods(settings: Settings, paths: ManagerPaths, console: ConsoleOutput) -> ResolvedMods:
    """Resolve the mods to load for this run.

    Args:
        settings: Loaded configuration
        paths: Game directory paths
        console: Output for informational messages

    Returns:
        ResolvedMods with the mod set and the loose files flag from settings
    """
    if settings.external_mods_only and paths.external_mods_dir.is_dir():
        # Only load the files inside the external mods path, and ignore the load order in the txt
        logger.info("External mods only mode: ignoring %s", paths.TXT_NAME)
        return ResolvedMods(
            mods=ModSet([paths.EXTERNAL_MODS]),
            loose_files_enabled=settings.loose_files_enabled,
            external_only=True,
        )

    if paths.txt_file.is_file():
        try:
            entries = read_manifest(paths.txt_file)
        except OSError as e:
            logger.error(f"Failed to read {paths.txt_file}: {e}")
            console.warn(f"Could not read \"{paths.TXT_NAME}\": {e}\n")
            entries = []
        mods = build_mod_set(entries, paths)
        logger.info(f"Resolved {len(mods)} mod(s) from {paths.TXT_NAME}: {mods.names}")
    else:
        # Create txt if it does not exist
        console.write(f"{paths.TXT_NAME} was not found. Creating empty txt... ")
        try:
            paths.txt_file.write_text(TXT_TEMPLATE, encoding="utf-8")
            console.write_line("DONE!\n")
        except OSError as e:
            logger.error(f"Failed to create {paths.txt_file}: {e}")
            console.write_line("FAILED!\n")
        mods = ModSet()

    return ResolvedMods(mods=mods, loose_files_enabled=settings.loose_files_enabled)
