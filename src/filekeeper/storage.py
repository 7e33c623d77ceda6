from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO, Callable, Dict, Optional, Union

from .interfaces import Storage

logger = logging.getLogger(__name__)


class FileStorage(Storage):
    """Storage backed by the local filesystem.

    Relative locations are resolved against ``root`` when one is given. Write
    streams create missing parent directories unless ``create_dirs`` is False.
    """

    def __init__(self, root: Optional[Union[str, Path]] = None, create_dirs: bool = True) -> None:
        self.root = Path(root) if root is not None else None
        self.create_dirs = create_dirs

    def resolve(self, location: str) -> Path:
        path = Path(location)
        if self.root is not None and not path.is_absolute():
            path = self.root / path
        return path

    def get_read_stream(self, location: str) -> BinaryIO:
        return open(self.resolve(location), "rb")

    def get_write_stream(self, location: str) -> BinaryIO:
        path = self.resolve(location)
        try:
            return open(path, "wb")
        except FileNotFoundError:
            if not self.create_dirs:
                raise
            logger.debug("Creating directory %s for %s", path.parent, location)
            path.parent.mkdir(parents=True, exist_ok=True)
            return open(path, "wb")

    def exists(self, location: str) -> bool:
        return self.resolve(location).exists()


class _CommitOnClose(io.BytesIO):
    """In-memory write buffer that hands its bytes to ``sink`` when closed."""

    def __init__(self, sink: Callable[[bytes], None]) -> None:
        super().__init__()
        self._sink = sink

    def close(self) -> None:
        if not self.closed:
            self._sink(self.getvalue())
        super().close()


class InMemoryStorage(Storage):
    """Test/deterministic storage that keeps every location in a dict.

    Written bytes become visible when the write stream is closed.
    """

    def __init__(self, files: Optional[Dict[str, bytes]] = None) -> None:
        self._files: Dict[str, bytes] = dict(files or {})

    def get_read_stream(self, location: str) -> BinaryIO:
        try:
            data = self._files[location]
        except KeyError:
            raise FileNotFoundError(2, "No such storage location", location) from None
        return io.BytesIO(data)

    def get_write_stream(self, location: str) -> BinaryIO:
        def commit(data: bytes) -> None:
            self._files[location] = data

        return _CommitOnClose(commit)

    def exists(self, location: str) -> bool:
        return location in self._files

    def read_bytes(self, location: str) -> bytes:
        return self._files[location]

    def read_text(self, location: str, encoding: str = "utf-8") -> str:
        return self._files[location].decode(encoding)

    def delete(self, location: str) -> bool:
        return self._files.pop(location, None) is not None

    def snapshot(self) -> Dict[str, bytes]:
        return dict(self._files)


__all__ = ["FileStorage", "InMemoryStorage"]
