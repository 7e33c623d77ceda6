"""filekeeper: save/load orchestration with a recent-files history.

This package provides:
- RecencyList, a bounded most-recently-used list of storage locations
- FileManager, which saves and loads objects through a pluggable Serializer
  and Storage and keeps the recent-files list up to date
- A closed error taxonomy (FileOperationError / FileErrorKind) for every
  storage and serialization failure
- Ready-made collaborators: FileStorage, InMemoryStorage and JSON, YAML and
  pickle serializers
- configure_logging, an opt-in handler for the package logger
"""

from .document import Document
from .errors import (
    FileErrorKind,
    FileManagementError,
    FileOperationError,
    FileResult,
    InvalidArgumentError,
    classify_os_error,
)
from .interfaces import Persistable, Serializer, Storage
from .logging_config import configure_logging
from .manager import FileManager
from .paths import remove_invalid_file_name_characters, user_settings_dir
from .recent import RecencyList
from .serializers import JsonSerializer, PickleSerializer, YamlSerializer
from .settings import FileManagerSettings, default_settings, load_settings
from .storage import FileStorage, InMemoryStorage

__version__ = "0.1.0"

__all__ = [
    "Document",
    "FileErrorKind",
    "FileManagementError",
    "FileOperationError",
    "FileResult",
    "InvalidArgumentError",
    "classify_os_error",
    "Persistable",
    "Serializer",
    "Storage",
    "configure_logging",
    "FileManager",
    "remove_invalid_file_name_characters",
    "user_settings_dir",
    "RecencyList",
    "JsonSerializer",
    "PickleSerializer",
    "YamlSerializer",
    "FileManagerSettings",
    "default_settings",
    "load_settings",
    "FileStorage",
    "InMemoryStorage",
]
