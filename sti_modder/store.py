"""Mod storage.

Mods live as flat JSON files in one directory, usually `<game>/mods/`:

    mods/
      my-prompts.json
      STIPrompt.jet-backup-2024-01-01T12-00-00.000Z.sti
      ...

Any regular file in the directory is a candidate, whatever its extension.
Files are visited in name order so the resulting mod order, and therefore
the ids assigned at install time, does not depend on the platform's
directory listing order. Sub-directories are ignored.
"""

from __future__ import annotations

import json
import logging
from pathlib import PurePath

from pydantic import BaseModel, Field

from sti_modder.fs import FileSystem
from sti_modder.models import ModRecord
from sti_modder.validation import Issue, validate_mod

logger = logging.getLogger(__name__)


class ModLoadResult(BaseModel):
    """What happened to one file in the mods directory."""

    path: PurePath
    mod: ModRecord | None = None
    issues: list[Issue] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.mod is not None


def filter_by_target(mods: list[ModRecord], target_file: str) -> list[ModRecord]:
    """Mods contributing to `target_file`, in their original order."""
    return [m for m in mods if m.target_file == target_file]


class ModStore:
    def __init__(self, fs: FileSystem, directory: PurePath) -> None:
        self._fs = fs
        self._dir = directory

    @property
    def directory(self) -> PurePath:
        return self._dir

    async def ensure_directory(self) -> None:
        if not await self._fs.exists(self._dir):
            logger.info("Creating mods folder at %s", self._dir)
            await self._fs.mkdir(self._dir, parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load_file(self, path: PurePath) -> ModLoadResult:
        """Parse and validate a single mod file. Never raises on bad content."""
        try:
            data = json.loads(await self._fs.read_text(path))
        except OSError as e:
            return ModLoadResult(
                path=path,
                issues=[Issue(path="<root>", message=f"Cannot read: {e}")],
            )
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return ModLoadResult(
                path=path,
                issues=[Issue(path="<root>", message=f"Not valid JSON: {e}")],
            )

        validation = validate_mod(data)
        if validation.dropped_entries:
            logger.debug(
                "%s: dropped %d invalid prompt(s)", path.name, validation.dropped_entries
            )
        return ModLoadResult(path=path, mod=validation.mod, issues=validation.issues)

    async def scan(self) -> list[ModLoadResult]:
        """Load every file in the directory, keeping rejected ones with their issues."""
        await self.ensure_directory()
        results: list[ModLoadResult] = []
        for name in sorted(await self._fs.list_dir(self._dir)):
            path = self._dir / name
            if await self._fs.is_dir(path):
                continue
            result = await self.load_file(path)
            if not result.is_valid:
                reasons = "; ".join(str(i) for i in result.issues if i.severity == "error")
                logger.warning("%s is not a valid mod (%s)", name, reasons)
            results.append(result)
        return results

    async def load_all(self) -> list[ModRecord]:
        """Valid mods in directory order. Invalid files are skipped."""
        return [r.mod for r in await self.scan() if r.mod is not None]

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    async def save(self, mod: ModRecord, file_name: str) -> PurePath:
        await self.ensure_directory()
        path = self._dir / file_name
        await self._fs.write_text(path, mod.model_dump_json(by_alias=True, indent=4))
        logger.info("Wrote mod %s", path)
        return path
