"""Command-line entry point.

    sti-modder install          Back up content/, then install all mods
    sti-modder force-install    Install all mods without a backup
    sti-modder backup           Back up content/ only
    sti-modder backup-as-mods   Save the current content files as mods
    sti-modder check            Validate mods without installing anything
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path, PurePath

from sti_modder import installer
from sti_modder.backup import backup_content
from sti_modder.config import Settings, load_settings
from sti_modder.fs import FileSystem, LocalFileSystem
from sti_modder.locate import (
    GAME_FOLDER,
    GameDirNotFound,
    default_game_dir,
    find_game_dir,
    is_game_dir,
)
from sti_modder.reconstruct import DocumentError, LabelError


def _interactive() -> bool:
    return sys.stdin.isatty()


def _ask_yes_no(question: str) -> bool:
    answer = input(f"{question} [y/N] ").strip().lower()
    return answer in ("y", "yes")


def _confirm_overwrite(assume_yes: bool):
    def confirm(folder: PurePath) -> bool:
        if assume_yes:
            return True
        if not _interactive():
            return False
        return _ask_yes_no(f"{folder} already exists. Overwrite it?")
    return confirm


async def resolve_game_dir(fs: FileSystem, settings: Settings) -> PurePath:
    """Find the game folder, asking the user as a last resort."""
    try:
        return await find_game_dir(fs, Path.cwd(), configured=settings.game_dir)
    except GameDirNotFound:
        if not _interactive():
            raise
    default = default_game_dir()
    answer = input(f"Where is your {GAME_FOLDER} folder? [{default}] ").strip()
    folder = Path(answer).expanduser() if answer else Path(default)
    if not await is_game_dir(fs, folder):
        raise GameDirNotFound(
            f"{folder} does not contain the 'content' folder, "
            "are you sure this is the right folder?"
        )
    return folder


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _report_writes(writes: list[installer.WriteOutcome]) -> bool:
    for w in writes:
        if w.ok:
            print(f"  {w.path} ({w.entries} prompts)")
        else:
            print(f"  FAILED {w.path}: {w.error}")
    return all(w.ok for w in writes)


async def cmd_backup(fs: FileSystem, game_dir: PurePath, args: argparse.Namespace, settings: Settings) -> int:
    outcome = await backup_content(fs, game_dir, _confirm_overwrite(args.yes))
    return 0 if outcome.performed else 1


async def cmd_install(fs: FileSystem, game_dir: PurePath, args: argparse.Namespace, settings: Settings) -> int:
    if args.command == "force-install":
        report = await installer.write_mods(fs, game_dir)
    else:
        report = await installer.install(fs, game_dir, _confirm_overwrite(args.yes))
        if report.aborted:
            print("No backup has been made, so nothing was installed.")
            return 1
    print(f"Installed {report.mods_loaded} mod(s):")
    return 0 if _report_writes(report.writes) else 1


async def cmd_backup_as_mods(fs: FileSystem, game_dir: PurePath, args: argparse.Namespace, settings: Settings) -> int:
    writes = await installer.backup_as_mods(fs, game_dir, settings)
    print("Saved content as mods:")
    return 0 if _report_writes(writes) else 1


async def cmd_check(fs: FileSystem, game_dir: PurePath, args: argparse.Namespace, settings: Settings) -> int:
    results = await installer.check(fs, game_dir)
    valid = [r for r in results if r.is_valid]
    for r in results:
        status = "ok" if r.is_valid else "INVALID"
        print(f"{status:8} {r.path.name}")
        for issue in r.issues:
            print(f"         {issue}")
    print(f"Mods: {len(valid)}")
    return 0


COMMANDS = {
    "backup": cmd_backup,
    "install": cmd_install,
    "force-install": cmd_install,
    "backup-as-mods": cmd_backup_as_mods,
    "check": cmd_check,
}


async def run(args: argparse.Namespace, settings: Settings, fs: FileSystem | None = None) -> int:
    fs = fs or LocalFileSystem()
    if args.game_dir is not None:
        settings = settings.model_copy(update={"game_dir": args.game_dir})
    try:
        game_dir = await resolve_game_dir(fs, settings)
        return await COMMANDS[args.command](fs, game_dir, args, settings)
    except (GameDirNotFound, DocumentError, LabelError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sti-modder",
        description="Install prompt mods into Survive The Internet",
    )
    parser.add_argument("--game-dir", type=Path, default=None,
                        help=f"Path to the {GAME_FOLDER} folder (default: search)")
    parser.add_argument("-y", "--yes", action="store_true",
                        help="Overwrite an existing backup folder without asking")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("backup", help="Back up the current content folder")
    sub.add_parser("install", help="Back up, then install the mods into the content folder")
    sub.add_parser("force-install", help="Install the mods without making a backup")
    sub.add_parser("backup-as-mods", help="Save the current content files as mods")
    sub.add_parser("check", help="Check that all mods are valid; installs nothing")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format="%(message)s")
    sys.exit(asyncio.run(run(args, settings)))


if __name__ == "__main__":
    main()
