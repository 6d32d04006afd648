import io
from pathlib import Path

import pytest

from ryu_mod_manager.config.paths import ManagerPaths
from ryu_mod_manager.console import ConsoleOutput


@pytest.fixture
def paths(tmp_path) -> ManagerPaths:
    return ManagerPaths(game_dir=tmp_path)


@pytest.fixture
def stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(stream) -> ConsoleOutput:
    return ConsoleOutput(stream=stream)


def make_mods(paths: ManagerPaths, *names: str) -> None:
    for name in names:
        paths.mod_dir(name).mkdir(parents=True, exist_ok=True)


def write_lines(path: Path, lines) -> None:
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
