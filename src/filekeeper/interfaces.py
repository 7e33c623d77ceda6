from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Optional, Protocol, runtime_checkable


@runtime_checkable
class Persistable(Protocol):
    """An object that knows where it was last saved to or loaded from.

    ``storage_location`` is None for objects that have never been saved.
    """

    storage_location: Optional[str]


class Serializer(ABC):
    """Encodes values to, and decodes values from, a byte stream.

    Implementations must leave the stream open; the caller owns it.
    """

    @abstractmethod
    def serialize(self, stream: BinaryIO, encoding: str, value: Any) -> None:
        """Write ``value`` completely to ``stream``.

        Args:
            stream: Writable binary stream
            encoding: Text encoding for text-based formats
            value: Object to encode
        """
        raise NotImplementedError

    @abstractmethod
    def deserialize(self, stream: BinaryIO, encoding: str, target: Optional[type] = None) -> Any:
        """Read one complete value from ``stream``.

        Args:
            stream: Readable binary stream
            encoding: Text encoding for text-based formats
            target: Type to rebuild, or None for the format's native value

        Raises:
            Any exception on malformed input.
        """
        raise NotImplementedError


class Storage(ABC):
    """Opens byte streams for named storage locations.

    Failures are reported as OSError: FileNotFoundError when a location (or one
    of its directories) is missing, PermissionError or another OSError for
    access problems.
    """

    @abstractmethod
    def get_read_stream(self, location: str) -> BinaryIO:
        raise NotImplementedError

    @abstractmethod
    def get_write_stream(self, location: str) -> BinaryIO:
        """Open ``location`` for writing, creating or truncating it."""
        raise NotImplementedError

    @abstractmethod
    def exists(self, location: str) -> bool:
        """True if anything is stored at ``location``, even if it cannot be read as a file."""
        raise NotImplementedError


__all__ = ["Persistable", "Serializer", "Storage"]
