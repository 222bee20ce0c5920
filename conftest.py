import json
from pathlib import PurePosixPath
from typing import Any

import pytest

from sti_modder.fs import MemoryFileSystem

GAME_DIR = PurePosixPath("/steam/common/The Jackbox Party Pack 4/games/SurviveTheInternet")


@pytest.fixture
def game_dir() -> PurePosixPath:
    return GAME_DIR


@pytest.fixture
def fs() -> MemoryFileSystem:
    """A fresh in-memory game folder with an empty content/ directory."""
    memfs = MemoryFileSystem()
    memfs.add_dir(GAME_DIR / "content")
    return memfs


@pytest.fixture
def add_mod(fs):
    """Drop a mod file into <game>/mods/. Dicts are JSON-encoded, strings written as-is."""
    def _add(file_name: str, data: dict[str, Any] | str) -> PurePosixPath:
        path = GAME_DIR / "mods" / file_name
        fs.add_file(path, data if isinstance(data, str) else json.dumps(data))
        return path
    return _add


def mod_data(name: str, target: str, prompts: list[tuple[str, list[str]]], author: str = "tester") -> dict:
    return {
        "name": name,
        "author": author,
        "targetFile": target,
        "promptsAdded": [{"prompt": p, "decoys": d} for p, d in prompts],
    }


@pytest.fixture
def make_mod():
    return mod_data
