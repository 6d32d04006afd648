"""Configuration data models and the canonical ini template"""

from dataclasses import dataclass

# Bump whenever keys are added to INI_TEMPLATE
CURRENT_INI_VERSION = 3


@dataclass(frozen=True)
class IniKey:
    """Location of a Settings field inside the ini file"""
    section: str
    option: str


@dataclass
class Settings:
    """Options read by the mod manager"""
    loose_files_enabled: bool = False
    verbose: bool = False
    check_for_updates: bool = True
    show_warnings: bool = True
    external_mods_only: bool = True
    ini_version: int = CURRENT_INI_VERSION


# Settings field name -> ini location
SETTINGS_KEYS: dict[str, IniKey] = {
    "loose_files_enabled": IniKey("Overrides", "LooseFilesEnabled"),
    "verbose": IniKey("RyuModManager", "Verbose"),
    "check_for_updates": IniKey("RyuModManager", "CheckForUpdates"),
    "show_warnings": IniKey("RyuModManager", "ShowWarnings"),
    "external_mods_only": IniKey("RyuModManager", "LoadExternalModsOnly"),
    "ini_version": IniKey("Parless", "IniVersion"),
}

# Full ini layout, in file order. Keys not backed by a Settings field are read
# by the game-side loader (YakuzaParless.asi) and only need to be carried over.
INI_TEMPLATE: dict[str, dict[str, str]] = {
    "Parless": {
        "IniVersion": str(CURRENT_INI_VERSION),
        "ParlessEnabled": "1",
        "TempDisabled": "0",
    },
    "Overrides": {
        "LooseFilesEnabled": "0",
        "CpkRedirectionEnabled": "1",
        "ModsEnabled": "1",
        "RebuildMLO": "1",
        "Locale": "English",
    },
    "RyuModManager": {
        "Verbose": "0",
        "CheckForUpdates": "1",
        "ShowWarnings": "1",
        "LoadExternalModsOnly": "1",
    },
    "Logs": {
        "LogMods": "0",
        "LogParless": "0",
        "LogAll": "0",
    },
    "Debug": {
        "ConsoleEnabled": "0",
    },
}
