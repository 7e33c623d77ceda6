from __future__ import annotations

from pathlib import Path

import pytest

from filekeeper import FileStorage, InMemoryStorage


def test_file_storage_creates_parent_directories(tmp_path: Path):
    storage = FileStorage(root=tmp_path)
    with storage.get_write_stream("a/b/c.bin") as f:
        f.write(b"data")

    assert storage.exists("a/b/c.bin")
    assert (tmp_path / "a" / "b" / "c.bin").read_bytes() == b"data"
    with storage.get_read_stream("a/b/c.bin") as f:
        assert f.read() == b"data"


def test_file_storage_without_create_dirs(tmp_path: Path):
    storage = FileStorage(root=tmp_path, create_dirs=False)
    with pytest.raises(FileNotFoundError):
        storage.get_write_stream("missing/c.bin")


def test_file_storage_read_missing(tmp_path: Path):
    storage = FileStorage(root=tmp_path)
    assert not storage.exists("nope.bin")
    with pytest.raises(FileNotFoundError):
        storage.get_read_stream("nope.bin")


def test_file_storage_absolute_location_ignores_root(tmp_path: Path):
    storage = FileStorage(root=tmp_path / "root")
    target = tmp_path / "elsewhere.bin"
    assert storage.resolve(str(target)) == target


def test_directory_counts_as_existing_location(tmp_path: Path):
    (tmp_path / "folder").mkdir()
    storage = FileStorage(root=tmp_path)
    assert storage.exists("folder")
    with pytest.raises(IsADirectoryError):
        storage.get_read_stream("folder")


def test_in_memory_storage_commits_on_close(memory_storage: InMemoryStorage):
    stream = memory_storage.get_write_stream("x")
    stream.write(b"hello")
    assert not memory_storage.exists("x")
    stream.close()
    assert memory_storage.read_bytes("x") == b"hello"
    assert memory_storage.read_text("x") == "hello"


def test_in_memory_storage_read_and_delete(memory_storage: InMemoryStorage):
    with pytest.raises(FileNotFoundError):
        memory_storage.get_read_stream("missing")

    with memory_storage.get_write_stream("k") as f:
        f.write(b"v")
    assert memory_storage.get_read_stream("k").read() == b"v"
    assert memory_storage.snapshot() == {"k": b"v"}
    assert memory_storage.delete("k") is True
    assert memory_storage.delete("k") is False
