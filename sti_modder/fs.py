"""File-system capability.

Everything that touches disk goes through the `FileSystem` protocol so the
installer can run against the real game folder or against an in-memory
fake in tests. Calls are async and are always awaited one at a time; the
installer never has two file operations in flight.

Two implementations are provided:

    LocalFileSystem   : pathlib/shutil, run in a worker thread.
    MemoryFileSystem  : dict-backed fake with the same error behaviour
                        (FileNotFoundError, FileExistsError, ...).
"""

from __future__ import annotations

import asyncio
import logging
import shutil
from pathlib import Path, PurePath
from typing import Protocol

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------

class FileSystem(Protocol):
    async def exists(self, path: PurePath) -> bool: ...

    async def is_dir(self, path: PurePath) -> bool: ...

    async def list_dir(self, path: PurePath) -> list[str]: ...

    async def read_text(self, path: PurePath) -> str: ...

    async def write_text(self, path: PurePath, text: str) -> None: ...

    async def mkdir(
        self, path: PurePath, parents: bool = False, exist_ok: bool = False
    ) -> None: ...

    async def copy_file(self, src: PurePath, dst: PurePath) -> None: ...

    async def remove_tree(self, path: PurePath) -> None: ...


# ---------------------------------------------------------------------------
# LocalFileSystem
# ---------------------------------------------------------------------------

class LocalFileSystem:
    """The real disk. Text is read and written as UTF-8."""

    async def exists(self, path: PurePath) -> bool:
        return await asyncio.to_thread(Path(path).exists)

    async def is_dir(self, path: PurePath) -> bool:
        return await asyncio.to_thread(Path(path).is_dir)

    async def list_dir(self, path: PurePath) -> list[str]:
        entries = await asyncio.to_thread(lambda: list(Path(path).iterdir()))
        return [p.name for p in entries]

    async def read_text(self, path: PurePath) -> str:
        return await asyncio.to_thread(Path(path).read_text, encoding="utf-8")

    async def write_text(self, path: PurePath, text: str) -> None:
        await asyncio.to_thread(Path(path).write_text, text, encoding="utf-8")

    async def mkdir(
        self, path: PurePath, parents: bool = False, exist_ok: bool = False
    ) -> None:
        await asyncio.to_thread(Path(path).mkdir, parents=parents, exist_ok=exist_ok)

    async def copy_file(self, src: PurePath, dst: PurePath) -> None:
        await asyncio.to_thread(shutil.copyfile, src, dst)

    async def remove_tree(self, path: PurePath) -> None:
        await asyncio.to_thread(shutil.rmtree, path)


# ---------------------------------------------------------------------------
# MemoryFileSystem
# ---------------------------------------------------------------------------

class MemoryFileSystem:
    """In-memory fake. Paths are compared as posix strings.

    The root ("/") always exists. Seed it with `add_file`, which creates
    missing parent directories the way a fixture would expect.
    """

    def __init__(self) -> None:
        self._files: dict[str, str] = {}
        self._dirs: set[str] = {"/"}

    @staticmethod
    def _key(path: PurePath | str) -> str:
        return PurePath(path).as_posix()

    def _parent(self, path: PurePath | str) -> str:
        return self._key(PurePath(path).parent)

    # -- seeding / inspection helpers (not part of the protocol) ----------

    def add_file(self, path: PurePath | str, text: str) -> None:
        self._make_parents(PurePath(path).parent)
        self._files[self._key(path)] = text

    def add_dir(self, path: PurePath | str) -> None:
        self._make_parents(PurePath(path))

    def files(self) -> dict[str, str]:
        return dict(self._files)

    def _make_parents(self, path: PurePath) -> None:
        for p in [path, *path.parents]:
            self._dirs.add(self._key(p))

    # -- protocol ----------------------------------------------------------

    async def exists(self, path: PurePath) -> bool:
        key = self._key(path)
        return key in self._files or key in self._dirs

    async def is_dir(self, path: PurePath) -> bool:
        return self._key(path) in self._dirs

    async def list_dir(self, path: PurePath) -> list[str]:
        key = self._key(path)
        if key not in self._dirs:
            raise FileNotFoundError(key)
        names = [
            PurePath(p).name
            for p in (*self._files, *self._dirs)
            if p != key and self._parent(p) == key
        ]
        return names

    async def read_text(self, path: PurePath) -> str:
        key = self._key(path)
        if key in self._dirs:
            raise IsADirectoryError(key)
        if key not in self._files:
            raise FileNotFoundError(key)
        return self._files[key]

    async def write_text(self, path: PurePath, text: str) -> None:
        key = self._key(path)
        if key in self._dirs:
            raise IsADirectoryError(key)
        if self._parent(path) not in self._dirs:
            raise FileNotFoundError(self._parent(path))
        self._files[key] = text

    async def mkdir(
        self, path: PurePath, parents: bool = False, exist_ok: bool = False
    ) -> None:
        key = self._key(path)
        if key in self._files:
            raise FileExistsError(key)
        if key in self._dirs:
            if exist_ok:
                return
            raise FileExistsError(key)
        if self._parent(path) not in self._dirs:
            if not parents:
                raise FileNotFoundError(self._parent(path))
            self._make_parents(PurePath(path).parent)
        self._dirs.add(key)

    async def copy_file(self, src: PurePath, dst: PurePath) -> None:
        await self.write_text(dst, await self.read_text(src))

    async def remove_tree(self, path: PurePath) -> None:
        key = self._key(path)
        if key not in self._dirs:
            raise FileNotFoundError(key)
        prefix = key.rstrip("/") + "/"
        self._files = {p: t for p, t in self._files.items() if not p.startswith(prefix)}
        self._dirs = {d for d in self._dirs if d != key and not d.startswith(prefix)}


# ---------------------------------------------------------------------------
# copy_tree
# ---------------------------------------------------------------------------

async def copy_tree(fs: FileSystem, src: PurePath, dst: PurePath) -> int:
    """Recursively copy `src` into the existing directory `dst`.

    Returns the number of files copied.
    """
    copied = 0
    for name in sorted(await fs.list_dir(src)):
        src_item = src / name
        dst_item = dst / name
        if await fs.is_dir(src_item):
            await fs.mkdir(dst_item, exist_ok=True)
            copied += await copy_tree(fs, src_item, dst_item)
        else:
            await fs.copy_file(src_item, dst_item)
            logger.debug("copied %s -> %s", src_item, dst_item)
            copied += 1
    return copied
