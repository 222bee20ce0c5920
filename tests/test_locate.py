"""Tests for finding the game folder."""

from pathlib import PurePosixPath

import pytest

from sti_modder.fs import MemoryFileSystem
from sti_modder.locate import GameDirNotFound, candidate_dirs, find_game_dir

PACK = PurePosixPath("/steam/common/The Jackbox Party Pack 4")
GAME = PACK / "games" / "SurviveTheInternet"


@pytest.fixture
def fs():
    memfs = MemoryFileSystem()
    memfs.add_dir(GAME / "content")
    return memfs


@pytest.mark.asyncio
@pytest.mark.parametrize("cwd", [
    GAME,
    GAME / "content",
    PACK / "games",
    PACK,
])
async def test_found_from_inside_the_install(fs, cwd):
    assert await find_game_dir(fs, cwd, platform="linux") == GAME


@pytest.mark.asyncio
async def test_configured_folder_wins(fs):
    other = PurePosixPath("/elsewhere/SurviveTheInternet")
    fs.add_dir(other / "content")
    assert await find_game_dir(fs, GAME, configured=other) == other


@pytest.mark.asyncio
async def test_configured_folder_without_content_falls_through(fs):
    fs.add_dir(PurePosixPath("/empty"))
    assert await find_game_dir(fs, PACK, configured=PurePosixPath("/empty")) == GAME


@pytest.mark.asyncio
async def test_not_found(fs):
    with pytest.raises(GameDirNotFound):
        await find_game_dir(fs, PurePosixPath("/home/user"), platform="linux")


def test_candidates_end_with_platform_default():
    candidates = candidate_dirs(PurePosixPath("/tmp"), platform="win32")
    assert str(candidates[-1]).endswith("SurviveTheInternet")
    assert "Program Files (x86)" in str(candidates[-1])
