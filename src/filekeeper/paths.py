from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Optional

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "filekeeper"

# Environment variable override (useful for tests and portable installs)
ENV_SETTINGS_DIR = "FILEKEEPER_SETTINGS_DIR"

# Characters rejected in file names on at least one supported platform
_INVALID_FILE_NAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def remove_invalid_file_name_characters(name: Optional[str]) -> str:
    """Strip every character that cannot appear in a file name.

    Intended for building storage locations from arbitrary titles. Never raises;
    None gives an empty string.
    """
    if not name:
        return ""
    return _INVALID_FILE_NAME_CHARS.sub("", str(name))


def user_settings_dir(app_name: str = APP_NAME) -> Path:
    """Return the per-user directory that holds settings and the recent-files list.

    Linux:   ~/.config/<app_name>
    macOS:   ~/Library/Application Support/<app_name>
    Windows: %LOCALAPPDATA%\\<app_name>

    FILEKEEPER_SETTINGS_DIR, when set, takes precedence.
    """
    override = os.getenv(ENV_SETTINGS_DIR)
    if override:
        path = Path(override).expanduser()
        logger.debug("Using settings dir from %s: %s", ENV_SETTINGS_DIR, path)
        return path
    return Path(user_config_dir(appname=app_name, appauthor=False))


__all__ = [
    "APP_NAME",
    "ENV_SETTINGS_DIR",
    "remove_invalid_file_name_characters",
    "user_settings_dir",
]
