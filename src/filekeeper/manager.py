from __future__ import annotations

import logging
import os
from typing import Any, BinaryIO, Callable, Optional, TypeVar

from .errors import FileOperationError, FileResult, InvalidArgumentError
from .interfaces import Persistable, Serializer, Storage
from .paths import remove_invalid_file_name_characters
from .recent import RecencyList
from .settings import FileManagerSettings, default_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FileManager:
    """Saves and loads objects through a Serializer and a Storage.

    Every failure coming from storage or the serializer is raised as a
    FileOperationError carrying its kind, direction and location. Broken
    preconditions raise InvalidArgumentError before storage is touched.

    When history is enabled, each successful save/load rewrites the recent-files
    list stored at ``settings.recent_files_path`` with the location moved to the
    most-recent end. A failure while writing the history propagates, but the
    primary save/load has already completed and is not undone.
    """

    remove_invalid_file_name_characters = staticmethod(remove_invalid_file_name_characters)

    def __init__(
        self,
        storage: Storage,
        serializer: Serializer,
        settings: Optional[FileManagerSettings] = None,
    ) -> None:
        if storage is None:
            raise InvalidArgumentError("storage must not be None")
        if serializer is None:
            raise InvalidArgumentError("serializer must not be None")
        self._storage = storage
        self._serializer = serializer
        self._settings = settings if settings is not None else default_settings()

    @property
    def storage(self) -> Storage:
        return self._storage

    @property
    def serializer(self) -> Serializer:
        return self._serializer

    @property
    def settings(self) -> FileManagerSettings:
        return self._settings

    @property
    def is_history_enabled(self) -> bool:
        return self._settings.is_history_enabled

    @property
    def recent_files_path(self) -> str:
        return self._settings.recent_files_path

    @property
    def encoding(self) -> str:
        return self._settings.encoding

    # Public API

    def save(self, obj: Any, include_in_history: bool = True) -> None:
        """Write ``obj`` to its ``storage_location``.

        Raises:
            InvalidArgumentError: obj is None or has no storage location
            FileOperationError: the write or the history update failed
        """
        if obj is None:
            raise InvalidArgumentError("obj must not be None")
        location = getattr(obj, "storage_location", None)
        if location is None:
            raise InvalidArgumentError("You must set storage_location before saving the object.")

        settings = self._settings
        self._transfer(
            location,
            writing=True,
            action=lambda stream: self._serializer.serialize(stream, settings.encoding, obj),
        )
        logger.debug("Saved %s to %s", type(obj).__name__, location)

        if settings.is_history_enabled and include_in_history:
            self._touch_history(location)

    def load(self, path: str, target: Optional[type] = None, include_in_history: bool = True) -> Any:
        """Read an object from ``path``, decoding it as ``target``.

        The returned object's ``storage_location`` is set to ``path``.

        Raises:
            InvalidArgumentError: path is None
            FileOperationError: the read or the history update failed, or the
                decoded value cannot take a storage location (no ``target`` given)
        """
        if path is None:
            raise InvalidArgumentError("path must not be None")

        settings = self._settings
        obj = self._transfer(
            path,
            writing=False,
            action=lambda stream: self._serializer.deserialize(stream, settings.encoding, target),
        )
        if obj is not None:
            if not isinstance(obj, Persistable):
                error = FileOperationError.serialization(
                    TypeError(f"Decoded {type(obj).__name__} has no storage_location; pass a target type"),
                    writing=False,
                    location=path,
                )
                logger.warning("%s", error)
                raise error
            obj.storage_location = path
        logger.debug("Loaded %s from %s", type(obj).__name__, path)

        if settings.is_history_enabled and include_in_history:
            self._touch_history(path)
        return obj

    def try_save(self, obj: Any, include_in_history: bool = True) -> FileResult:
        """Like :meth:`save`, but return storage/serialization failures as a FileResult."""
        try:
            self.save(obj, include_in_history=include_in_history)
        except FileOperationError as exc:
            return FileResult.failed(exc)
        return FileResult.ok()

    def try_load(self, path: str, target: Optional[type] = None, include_in_history: bool = True) -> FileResult:
        """Like :meth:`load`, but return storage/serialization failures as a FileResult."""
        try:
            obj = self.load(path, target=target, include_in_history=include_in_history)
        except FileOperationError as exc:
            return FileResult.failed(exc)
        return FileResult.ok(obj)

    def get_recent_files(self) -> RecencyList:
        """Read the recent-files list. A missing list means no history yet."""
        settings = self._settings
        location = settings.recent_files_path
        if not self._storage.exists(location):
            logger.debug("No recent-files list at %s; starting empty", location)
            return RecencyList(max_length=settings.max_recent_files)

        def read(stream: BinaryIO) -> RecencyList:
            data = self._raw_io(stream.read, location, writing=False)
            text = data.decode(settings.encoding)
            keys = [line for line in text.splitlines() if line]
            return RecencyList(keys, max_length=settings.max_recent_files)

        return self._transfer(location, writing=False, action=read)

    def save_recent_files(self, recent: RecencyList) -> None:
        """Write ``recent`` one location per line, least recent first."""
        settings = self._settings
        if not settings.is_history_enabled:
            logger.debug("History disabled; not writing recent-files list")
            return

        location = settings.recent_files_path
        payload = "".join(key + os.linesep for key in recent).encode(settings.encoding)

        def write(stream: BinaryIO) -> None:
            self._raw_io(lambda: stream.write(payload), location, writing=True)

        self._transfer(location, writing=True, action=write)
        logger.debug("Wrote %d recent file(s) to %s", len(recent), location)

    # Internal utilities

    def _raw_io(self, op: Callable[[], T], location: str, writing: bool) -> T:
        """Run a plain stream read or write, classifying OSError as a storage failure."""
        try:
            return op()
        except OSError as exc:
            error = FileOperationError.from_os_error(exc, writing=writing, location=location)
            logger.warning("%s [%s]", error, error.kind.value)
            raise error from exc

    def _touch_history(self, location: str) -> None:
        recent = self.get_recent_files()
        recent.add(location)
        self.save_recent_files(recent)

    def _transfer(self, location: str, writing: bool, action: Callable[[BinaryIO], T]) -> T:
        """Open a stream for ``location``, run ``action`` on it and always close it.

        Storage OSErrors are classified by :func:`classify_os_error`; anything
        raised by ``action`` becomes a SERIALIZATION_ERROR unless ``action`` already
        raised a FileOperationError.
        """
        stream = self._open_stream(location, writing)
        failed = True
        try:
            try:
                result = action(stream)
            except FileOperationError:
                raise
            except Exception as exc:
                error = FileOperationError.serialization(exc, writing=writing, location=location)
                logger.warning("%s", error)
                raise error from exc
            failed = False
        finally:
            self._close_stream(stream, location, writing, suppress=failed)
        return result

    def _open_stream(self, location: str, writing: bool) -> BinaryIO:
        try:
            if writing:
                return self._storage.get_write_stream(location)
            return self._storage.get_read_stream(location)
        except OSError as exc:
            error = FileOperationError.from_os_error(exc, writing=writing, location=location)
            logger.warning("%s [%s]", error, error.kind.value)
            raise error from exc

    def _close_stream(self, stream: BinaryIO, location: str, writing: bool, suppress: bool) -> None:
        try:
            stream.close()
        except OSError as exc:
            if suppress:
                # Another error is already propagating; keep that one
                logger.warning("Failed to close stream for %s: %s", location, exc)
                return
            error = FileOperationError.from_os_error(exc, writing=writing, location=location)
            logger.warning("%s [%s]", error, error.kind.value)
            raise error from exc


__all__ = ["FileManager"]
