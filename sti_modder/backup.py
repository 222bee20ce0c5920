"""Timestamped backups of the game's `content` folder.

    SurviveTheInternet/
      content/                                  ← live files
      content-backup-2024-05-01T18-04-12.345Z/  ← one per backup

The timestamp is ISO 8601 UTC with ':' replaced by '-' so the folder name
is valid on Windows. Rename a backup to something memorable if you plan
to restore it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import PurePath

from pydantic import BaseModel

from sti_modder.fs import FileSystem, copy_tree

logger = logging.getLogger(__name__)

Confirm = Callable[[PurePath], bool]


class BackupOutcome(BaseModel):
    folder: PurePath
    performed: bool
    files_copied: int = 0
    replaced_existing: bool = False


def file_stamp(now: datetime | None = None) -> str:
    """Timestamp like `2024-05-01T18-04-12.345Z`, safe to embed in file names."""
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return now.strftime("%Y-%m-%dT%H-%M-%S.") + f"{now.microsecond // 1000:03d}Z"


def backup_folder(game_dir: PurePath, now: datetime | None = None) -> PurePath:
    return game_dir / f"content-backup-{file_stamp(now)}"


async def backup_content(
    fs: FileSystem,
    game_dir: PurePath,
    confirm: Confirm,
    now: datetime | None = None,
) -> BackupOutcome:
    """Copy `<game>/content` into a fresh timestamped folder.

    If the folder already exists `confirm` decides whether to replace it.
    Declining leaves everything untouched and returns `performed=False`.
    """
    content = game_dir / "content"
    target = backup_folder(game_dir, now)

    replaced = False
    if await fs.exists(target):
        logger.warning("Backup folder already exists at %s", target)
        if not confirm(target):
            logger.warning("Not overwriting %s; no backup has been made", target)
            return BackupOutcome(folder=target, performed=False)
        logger.info("Overwriting backup folder at %s", target)
        await fs.remove_tree(target)
        replaced = True
    else:
        logger.info("Creating backup folder at %s", target)

    await fs.mkdir(target, parents=True)
    logger.info("Copying %s to %s", content, target)
    copied = await copy_tree(fs, content, target)
    logger.info(
        "Backup complete! Rename %s to something easy to remember "
        "so you know what to restore later.", target,
    )
    return BackupOutcome(
        folder=target, performed=True, files_copied=copied, replaced_existing=replaced,
    )
