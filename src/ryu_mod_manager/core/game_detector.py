"""Detect which supported game is installed in the working directory"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from ..logging_config import get_logger

logger = get_logger("game_detector")


class Game(Enum):
    """Games supported by the mod manager"""
    YAKUZA0 = "Yakuza0"
    YAKUZA_KIWAMI = "YakuzaKiwami"
    YAKUZA_KIWAMI2 = "YakuzaKiwami2"
    YAKUZA3 = "Yakuza3"
    YAKUZA4 = "Yakuza4"
    YAKUZA5 = "Yakuza5"
    YAKUZA6 = "Yakuza6"
    YAKUZA_LIKE_A_DRAGON = "YakuzaLikeADragon"
    JUDGMENT = "Judgment"
    LOST_JUDGMENT = "LostJudgment"
    EVE = "eve"  # Virtua Fighter 5 Ultimate Showdown
    UNSUPPORTED = "Unsupported"


# Checked in order, first match wins
GAME_EXECUTABLES: dict[Game, str] = {
    Game.YAKUZA0: "Yakuza0.exe",
    Game.YAKUZA_KIWAMI: "YakuzaKiwami.exe",
    Game.YAKUZA_KIWAMI2: "YakuzaKiwami2.exe",
    Game.YAKUZA3: "Yakuza3.exe",
    Game.YAKUZA4: "Yakuza4.exe",
    Game.YAKUZA5: "Yakuza5.exe",
    Game.YAKUZA6: "Yakuza6.exe",
    Game.YAKUZA_LIKE_A_DRAGON: "YakuzaLikeADragon.exe",
    Game.JUDGMENT: "Judgment.exe",
    Game.LOST_JUDGMENT: "LostJudgment.exe",
    Game.EVE: "eve.exe",
}


@dataclass(frozen=True)
class GameEnvironment:
    """The detected game installation"""
    game: Game
    game_path: Path
    exe_name: str = ""

    @property
    def is_supported(self) -> bool:
        return self.game != Game.UNSUPPORTED

    @property
    def exe_path(self) -> Optional[Path]:
        """Full path of the game executable, None if unsupported."""
        if not self.exe_name:
            return None
        return self.game_path / self.exe_name


class GameDetector:
    """Identify the game from the executables present in the game directory.

    Args:
        game_dir: Directory to search, defaults to the current directory
    """

    def __init__(self, game_dir: Optional[Path] = None):
        self.game_dir = game_dir or Path.cwd()

    def detect(self) -> GameEnvironment:
        """Detect the installed game.

        Returns:
            GameEnvironment, with Game.UNSUPPORTED if no known executable is found
        """
        for game, exe_name in GAME_EXECUTABLES.items():
            try:
                found = (self.game_dir / exe_name).is_file()
            except OSError as e:
                logger.warning(f"Could not check {exe_name}: {e}")
                continue

            if found:
                logger.info(f"Detected game: {game.value} ({exe_name})")
                return GameEnvironment(game=game, game_path=self.game_dir, exe_name=exe_name)

        logger.info(f"No supported game found in {self.game_dir}")
        return GameEnvironment(game=Game.UNSUPPORTED, game_path=self.game_dir)
