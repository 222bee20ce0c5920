"""Finding the Survive The Internet folder.

The tool is usually run from somewhere inside the Party Pack install.
Candidates, first match wins:

  1. An explicitly configured folder (STI_GAME_DIR or --game-dir).
  2. The working directory or its nearest ancestor named SurviveTheInternet.
  3. <cwd>/SurviveTheInternet when cwd is the `games` folder.
  4. <cwd>/games/SurviveTheInternet when cwd is the Party Pack 4 folder.
  5. The default Steam install location for the platform.

A candidate only counts if it contains a `content` folder.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path, PurePath

from sti_modder.fs import FileSystem

logger = logging.getLogger(__name__)

GAME_FOLDER = "SurviveTheInternet"

DEFAULT_WINDOWS_DIR = (
    "C:\\Program Files (x86)\\Steam\\steamapps\\common\\"
    "The Jackbox Party Pack 4\\games\\SurviveTheInternet"
)
DEFAULT_POSIX_DIR = (
    "~/.steam/steam/steamapps/common/The Jackbox Party Pack 4/games/SurviveTheInternet"
)


class GameDirNotFound(RuntimeError):
    """Raised when no candidate folder contains a `content` folder."""


def default_game_dir(platform: str | None = None) -> PurePath:
    platform = platform or sys.platform
    if platform == "win32":
        return Path(DEFAULT_WINDOWS_DIR)
    return Path(DEFAULT_POSIX_DIR).expanduser()


def candidate_dirs(
    cwd: PurePath, configured: PurePath | None = None, platform: str | None = None
) -> list[PurePath]:
    candidates: list[PurePath] = []
    if configured is not None:
        candidates.append(configured)
    for folder in [cwd, *cwd.parents]:
        if folder.name == GAME_FOLDER:
            candidates.append(folder)
            break
    if cwd.name == "games":
        candidates.append(cwd / GAME_FOLDER)
    candidates.append(cwd / "games" / GAME_FOLDER)
    candidates.append(default_game_dir(platform))
    return candidates


async def is_game_dir(fs: FileSystem, folder: PurePath) -> bool:
    return await fs.is_dir(folder / "content")


async def find_game_dir(
    fs: FileSystem,
    cwd: PurePath,
    configured: PurePath | None = None,
    platform: str | None = None,
) -> PurePath:
    for folder in candidate_dirs(cwd, configured, platform):
        if await is_game_dir(fs, folder):
            logger.debug("Using game folder %s", folder)
            return folder
        logger.debug("Not a game folder: %s", folder)
    raise GameDirNotFound(
        f"Could not find the {GAME_FOLDER} folder (one that contains 'content') "
        f"from {cwd}"
    )
