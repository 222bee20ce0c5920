"""Settings read from the environment.

A `.env` file in the working directory is loaded first (existing
environment variables win). Recognised variables:

    STI_GAME_DIR        Game folder; skips folder discovery when set.
    STI_BACKUP_NAME     Handlebars template for snapshot mod names. Use
                        {{{file}}} and {{{timestamp}}}; double braces
                        HTML-escape the inserted text.
    STI_BACKUP_AUTHOR   Handlebars template for snapshot mod authors.
    STI_BACKUP_TARGET   Force every snapshot mod to this targetFile.
                        Unset: each snapshot targets the file it came from.
    STI_LOG_LEVEL       DEBUG, INFO, WARNING, ... (default INFO)
"""

from __future__ import annotations

import os
from pathlib import Path, PurePath

from dotenv import load_dotenv
from pydantic import BaseModel

from sti_modder.reconstruct import DEFAULT_AUTHOR, DEFAULT_NAME_TEMPLATE


class Settings(BaseModel):
    game_dir: PurePath | None = None
    backup_name: str = DEFAULT_NAME_TEMPLATE
    backup_author: str = DEFAULT_AUTHOR
    backup_target: str | None = None
    log_level: str = "INFO"


def load_settings(env_file: Path | None = None) -> Settings:
    load_dotenv(env_file or Path.cwd() / ".env")
    game_dir = os.getenv("STI_GAME_DIR", "")
    return Settings(
        game_dir=Path(game_dir).expanduser() if game_dir else None,
        backup_name=os.getenv("STI_BACKUP_NAME", DEFAULT_NAME_TEMPLATE),
        backup_author=os.getenv("STI_BACKUP_AUTHOR", DEFAULT_AUTHOR),
        backup_target=os.getenv("STI_BACKUP_TARGET") or None,
        log_level=os.getenv("STI_LOG_LEVEL", "INFO").upper(),
    )
