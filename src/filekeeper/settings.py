from __future__ import annotations

import codecs
import logging
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

RECENT_FILES_NAME = "recent.txt"
DEFAULT_ENCODING = "utf-8"


class FileManagerSettings(BaseModel):
    """Settings for a FileManager. Frozen: build a new value to reconfigure."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    is_history_enabled: bool = Field(True, description="Track saved/loaded locations in the recent-files list")
    recent_files_path: str = Field(RECENT_FILES_NAME, description="Storage location of the recent-files list")
    encoding: str = Field(DEFAULT_ENCODING, description="Text encoding for payloads and the recent-files list")
    max_recent_files: Optional[int] = Field(
        default=None, ge=0, description="Capacity of the recent-files list; None for unbounded"
    )

    @field_validator("encoding")
    @classmethod
    def normalize_encoding(cls, v: str) -> str:
        try:
            return codecs.lookup(v).name
        except LookupError as e:
            raise ValueError(f"Unknown text encoding: {v}") from e

    @field_validator("recent_files_path")
    @classmethod
    def non_empty_path(cls, v: str) -> str:
        if not v:
            raise ValueError("recent_files_path must be a non-empty string")
        return v


def default_settings(settings_dir: Optional[Union[str, Path]] = None) -> FileManagerSettings:
    """Return a fresh settings value with the defaults.

    When ``settings_dir`` is given, the recent-files list is placed inside it.
    """
    if settings_dir is None:
        return FileManagerSettings()
    return FileManagerSettings(recent_files_path=str(Path(settings_dir) / RECENT_FILES_NAME))


def load_settings(path: Union[str, Path]) -> FileManagerSettings:
    """Load settings from a YAML mapping. A missing file gives the defaults."""
    p = Path(path)
    if not p.exists():
        logger.info("Settings file %s not found; using defaults", p)
        return FileManagerSettings()
    with p.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Settings file {p} must contain a mapping, got {type(raw).__name__}")
    settings = FileManagerSettings(**raw)
    logger.debug("Loaded settings from %s: %s", p, settings)
    return settings


__all__ = [
    "DEFAULT_ENCODING",
    "RECENT_FILES_NAME",
    "FileManagerSettings",
    "default_settings",
    "load_settings",
]
