"""Configuration management module.

This module provides ini configuration loading/upgrading and the well-known
paths inside the game directory.

Submodules:
    manager: ConfigurationManager for loading, creating and upgrading YakuzaParless.ini
    schema: Settings data class, ini key mapping and the canonical ini template
    paths: ManagerPaths with every file and folder name the tool touches

The ini file is shared with the game-side loader (YakuzaParless.asi), so
keys the mod manager does not read are still carried over on upgrade.
"""

from .manager import ConfigurationManager
from .schema import CURRENT_INI_VERSION, INI_TEMPLATE, Settings
from .paths import ManagerPaths

__all__ = [
    "ConfigurationManager",
    "CURRENT_INI_VERSION",
    "INI_TEMPLATE",
    "Settings",
    "ManagerPaths",
]
