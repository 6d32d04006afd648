"""Configuration management - load/create/upgrade YakuzaParless.ini"""

import configparser
from dataclasses import fields
from typing import Optional

from ..console import ConsoleOutput
from ..logging_config import get_logger
from .paths import ManagerPaths
from .schema import CURRENT_INI_VERSION, INI_TEMPLATE, SETTINGS_KEYS, Settings

logger = get_logger("config_manager")


class ConfigurationManager:
    """Manages the ini configuration shared with the game-side loader.

    Handles creating the default ini, reading the options the mod manager
    cares about, and rewriting outdated files to the current template.
    Loading never fails the run: unreadable or invalid values fall back to
    their defaults.
    """

    def __init__(self, paths: Optional[ManagerPaths] = None, console: Optional[ConsoleOutput] = None):
        self.paths = paths or ManagerPaths()
        self.config_path = self.paths.ini_file
        self.console = console or ConsoleOutput()
        self.config: Optional[Settings] = None

    def load(self) -> Settings:
        """Load the configuration, creating or upgrading the file if needed.

        Returns:
            Settings with every recognized option resolved
        """
        if not self.config_path.exists():
            self.console.write(f"{self.paths.INI_NAME} was not found. Creating default ini... ")
            self.config = Settings()
            if self._write(self._new_ini()):
                self.console.write_line("DONE!\n")
            return self.config

        logger.debug(f"Loading configuration from {self.config_path}")
        ini = self._read()
        self.config = self._parse_settings(ini)

        if self._needs_upgrade(ini):
            # Update if ini version is old (or does not exist)
            self.console.write(f"{self.paths.INI_NAME} is outdated. Updating ini to the latest version... ")
            if self._write(self._upgrade_ini(ini)):
                self.config.ini_version = CURRENT_INI_VERSION
                self.console.write_line("DONE!\n")

        logger.debug(f"Configuration loaded: {self.config}")
        return self.config

    def _read(self) -> configparser.ConfigParser:
        """Read the ini file as far as it parses.

        Lines that fail to parse are skipped; the keys read before and after
        them are kept. A file that cannot be read at all yields an empty parser.
        """
        ini = self._make_parser()
        try:
            # utf-8-sig also accepts files saved with a BOM by Windows editors
            ini.read(self.config_path, encoding="utf-8-sig")
        except configparser.MissingSectionHeaderError as e:
            logger.warning(f"{self.config_path} has no section header, using defaults: {e}")
            ini = self._make_parser()
        except configparser.ParsingError as e:
            logger.warning(f"Skipped malformed lines in {self.config_path}: {e}")
        except (configparser.Error, UnicodeDecodeError, OSError) as e:
            logger.warning(f"Could not parse {self.config_path}, using defaults: {e}")
            ini = self._make_parser()
        return ini

    def _write(self, ini: configparser.ConfigParser) -> bool:
        """Write the ini file.

        Returns:
            True if the file was written
        """
        try:
            with open(self.config_path, "w", encoding="utf-8") as f:
                ini.write(f, space_around_delimiters=False)
        except OSError as e:
            logger.error(f"Failed to write {self.config_path}: {e}")
            self.console.write_line("FAILED!")
            self.console.warn(f"Could not write \"{self.paths.INI_NAME}\": {e}")
            return False
        return True

    def _parse_settings(self, ini: configparser.ConfigParser) -> Settings:
        """Resolve Settings from the parsed ini, keeping defaults for missing keys."""
        settings = Settings()
        for f in fields(Settings):
            key = SETTINGS_KEYS[f.name]
            value = self._parse_int(ini, key.section, key.option)
            if value is None:
                continue
            if f.type in (bool, "bool"):
                setattr(settings, f.name, value == 1)
            else:
                setattr(settings, f.name, value)

        # Absent version means a pre-versioning ini
        if self._parse_int(ini, "Parless", "IniVersion") is None:
            settings.ini_version = 0
        return settings

    def _needs_upgrade(self, ini: configparser.ConfigParser) -> bool:
        version = self._parse_int(ini, "Parless", "IniVersion")
        return version is None or version < CURRENT_INI_VERSION

    def _new_ini(self) -> configparser.ConfigParser:
        """Build a fresh ini from the template."""
        ini = self._make_parser()
        ini.read_dict(INI_TEMPLATE)
        return ini

    def _upgrade_ini(self, old: configparser.ConfigParser) -> configparser.ConfigParser:
        """Build the current template with every value from the old ini merged in.

        Unknown sections and keys are carried over after the template ones.
        """
        ini = self._new_ini()
        for section in old.sections():
            if not ini.has_section(section):
                ini.add_section(section)
            for option, value in old.items(section, raw=True):
                ini.set(section, option, value)

        ini.set("Parless", "IniVersion", str(CURRENT_INI_VERSION))
        return ini

    # Helper methods for ini parsing
    @staticmethod
    def _make_parser() -> configparser.ConfigParser:
        ini = configparser.ConfigParser(interpolation=None, strict=False)
        # Keys are case sensitive for the game-side loader
        ini.optionxform = str
        return ini

    @staticmethod
    def _parse_int(ini: configparser.ConfigParser, section: str, option: str) -> Optional[int]:
        """Parse an integer value, returning None if missing or invalid."""
        try:
            return int(ini.get(section, option, raw=True).strip())
        except (configparser.Error, ValueError):
            return None
