"""Helpers for locating application directories."""

from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs


APP_NAME = "aw-digest"
APP_AUTHOR = "aw-digest"


def get_config_dir() -> Path:
    """Return the directory holding user settings (not created)."""
    dirs = PlatformDirs(appname=APP_NAME, appauthor=APP_AUTHOR, roaming=True)
    return Path(dirs.user_config_path)


def get_settings_path() -> Path:
    return get_config_dir() / "settings.json"
