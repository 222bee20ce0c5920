"""The operations behind the command-line tool.

    install         backup, then write_mods
    force-install   write_mods without a backup
    backup-as-mods  snapshot the current content files into the mods folder
    check           load and validate mods, write nothing

Every operation runs strictly in sequence. All three documents are built
in memory before the first write, and the first failed write stops the
run. Failures come back as outcome values; the caller decides how to
report them.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import PurePath

from pydantic import BaseModel, Field

from sti_modder.backup import BackupOutcome, Confirm, backup_content, file_stamp
from sti_modder.config import Settings
from sti_modder.episodes import TARGET_FILES
from sti_modder.fs import FileSystem
from sti_modder.models import ContentDocument, ModRecord
from sti_modder.reconstruct import DocumentError, from_document, parse_document, render_label
from sti_modder.store import ModLoadResult, ModStore
from sti_modder.synthesis import build_document, render_document

logger = logging.getLogger(__name__)


class WriteOutcome(BaseModel):
    path: PurePath
    entries: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class InstallReport(BaseModel):
    backup: BackupOutcome | None = None
    mods_loaded: int = 0
    writes: list[WriteOutcome] = Field(default_factory=list)

    @property
    def aborted(self) -> bool:
        """True when a declined backup stopped the install."""
        return self.backup is not None and not self.backup.performed

    @property
    def ok(self) -> bool:
        return not self.aborted and all(w.ok for w in self.writes)


def content_dir(game_dir: PurePath) -> PurePath:
    return game_dir / "content"


def mods_dir(game_dir: PurePath) -> PurePath:
    return game_dir / "mods"


def build_documents(mods: list[ModRecord]) -> dict[str, ContentDocument]:
    """One document per supported target file, each numbered from 0."""
    return {target: build_document(target, mods) for target in TARGET_FILES}


async def _write(fs: FileSystem, path: PurePath, text: str, entries: int) -> WriteOutcome:
    try:
        await fs.write_text(path, text)
    except OSError as e:
        logger.error("Error writing file %s: %s", path, e)
        return WriteOutcome(path=path, entries=entries, error=str(e))
    logger.info("Wrote %s (%d prompts)", path, entries)
    return WriteOutcome(path=path, entries=entries)


async def write_mods(fs: FileSystem, game_dir: PurePath) -> InstallReport:
    mods = await ModStore(fs, mods_dir(game_dir)).load_all()
    documents = build_documents(mods)

    report = InstallReport(mods_loaded=len(mods))
    for target, document in documents.items():
        outcome = await _write(
            fs,
            content_dir(game_dir) / target,
            render_document(document),
            len(document.entries),
        )
        report.writes.append(outcome)
        if not outcome.ok:
            break
    return report


async def install(
    fs: FileSystem,
    game_dir: PurePath,
    confirm: Confirm,
    now: datetime | None = None,
) -> InstallReport:
    backup = await backup_content(fs, game_dir, confirm, now=now)
    if not backup.performed:
        return InstallReport(backup=backup)
    report = await write_mods(fs, game_dir)
    report.backup = backup
    return report


async def backup_as_mods(
    fs: FileSystem,
    game_dir: PurePath,
    settings: Settings,
    now: datetime | None = None,
) -> list[WriteOutcome]:
    """Save each content file as a mod named `<file>-backup-<stamp>.sti`.

    Raises DocumentError if a content file is missing or malformed.
    """
    now = now or datetime.now(timezone.utc)
    shown = now.astimezone().strftime("%Y-%m-%d %H:%M:%S")
    store = ModStore(fs, mods_dir(game_dir))
    await store.ensure_directory()

    outcomes: list[WriteOutcome] = []
    for target in TARGET_FILES:
        source = content_dir(game_dir) / target
        try:
            text = await fs.read_text(source)
        except OSError as e:
            raise DocumentError(f"Cannot read {source}: {e}") from e
        document = parse_document(text, source=str(source))

        mod = from_document(
            document,
            target_file=settings.backup_target or target,
            name=render_label(settings.backup_name, file=target, timestamp=shown),
            author=render_label(settings.backup_author, file=target, timestamp=shown),
        )
        file_name = f"{target}-backup-{file_stamp(now)}.sti"
        try:
            path = await store.save(mod, file_name)
        except OSError as e:
            logger.error("Error writing mod %s: %s", file_name, e)
            outcomes.append(WriteOutcome(
                path=store.directory / file_name, entries=len(mod.entries), error=str(e),
            ))
            break
        outcomes.append(WriteOutcome(path=path, entries=len(mod.entries)))
    return outcomes


async def check(fs: FileSystem, game_dir: PurePath) -> list[ModLoadResult]:
    return await ModStore(fs, mods_dir(game_dir)).scan()
