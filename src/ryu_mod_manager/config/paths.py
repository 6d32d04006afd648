"""Well-known file and directory names inside the game installation"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class ManagerPaths:
    """Paths used by the mod manager, rooted at the game directory.

    The tool always runs from the game installation directory, so every
    path here is derived from ``game_dir`` (the current directory by default).
    """

    game_dir: Path = field(default_factory=Path.cwd)

    # File names
    INI_NAME = "YakuzaParless.ini"
    TXT_NAME = "ModLoadOrder.txt"
    MLO_NAME = "YakuzaParless.mlo"
    ASI_NAME = "YakuzaParless.asi"
    LOG_NAME = "RyuModManager.log"

    # Directory names
    MODS_NAME = "mods"
    EXTERNAL_MODS = "_externalMods"
    REPACKED_NAME = "_repacked"

    # ASI loader names
    DINPUT8DLL = "dinput8.dll"
    VERSIONDLL = "version.dll"

    @property
    def ini_file(self) -> Path:
        return self.game_dir / self.INI_NAME

    @property
    def txt_file(self) -> Path:
        return self.game_dir / self.TXT_NAME

    @property
    def mlo_file(self) -> Path:
        return self.game_dir / self.MLO_NAME

    @property
    def asi_file(self) -> Path:
        return self.game_dir / self.ASI_NAME

    @property
    def log_file(self) -> Path:
        return self.game_dir / self.LOG_NAME

    @property
    def mods_dir(self) -> Path:
        return self.game_dir / self.MODS_NAME

    @property
    def external_mods_dir(self) -> Path:
        return self.mods_dir / self.EXTERNAL_MODS

    @property
    def repacked_dir(self) -> Path:
        return self.mods_dir / self.REPACKED_NAME

    def mod_dir(self, mod_name: str) -> Path:
        """Get the directory of a mod listed in the load order.

        Args:
            mod_name: Mod folder name as written in ModLoadOrder.txt

        Returns:
            Path to the mod folder under the mods directory
        """
        return self.mods_dir / mod_name
