"""Tests for settings loaded from the environment and .env."""

from pathlib import Path

import pytest

from sti_modder.config import load_settings
from sti_modder.reconstruct import DEFAULT_AUTHOR, DEFAULT_NAME_TEMPLATE

_VARS = ["STI_GAME_DIR", "STI_BACKUP_NAME", "STI_BACKUP_AUTHOR", "STI_BACKUP_TARGET", "STI_LOG_LEVEL"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start unset, and drop anything load_dotenv() sets once the test ends."""
    for var in _VARS:
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)


def test_defaults(tmp_path):
    settings = load_settings(tmp_path / "missing.env")
    assert settings.game_dir is None
    assert settings.backup_name == DEFAULT_NAME_TEMPLATE
    assert settings.backup_author == DEFAULT_AUTHOR
    assert settings.backup_target is None
    assert settings.log_level == "INFO"


def test_environment_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("STI_GAME_DIR", str(tmp_path / "STI"))
    monkeypatch.setenv("STI_BACKUP_TARGET", "STIPrompt.jet")
    monkeypatch.setenv("STI_LOG_LEVEL", "debug")
    settings = load_settings(tmp_path / "missing.env")
    assert settings.game_dir == tmp_path / "STI"
    assert settings.backup_target == "STIPrompt.jet"
    assert settings.log_level == "DEBUG"


def test_dotenv_file(tmp_path, monkeypatch):
    env = tmp_path / ".env"
    env.write_text('STI_BACKUP_AUTHOR="The Modders"\nSTI_BACKUP_TARGET=\n')
    settings = load_settings(env)
    assert settings.backup_author == "The Modders"
    assert settings.backup_target is None


def test_environment_beats_dotenv(tmp_path, monkeypatch):
    env = tmp_path / ".env"
    env.write_text("STI_BACKUP_AUTHOR=from-file\n")
    monkeypatch.setenv("STI_BACKUP_AUTHOR", "from-env")
    assert load_settings(env).backup_author == "from-env"


def test_game_dir_expands_user(tmp_path, monkeypatch):
    monkeypatch.setenv("STI_GAME_DIR", "~/STI")
    settings = load_settings(tmp_path / "missing.env")
    assert settings.game_dir == Path("~/STI").expanduser()
