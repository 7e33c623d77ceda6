from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from filekeeper import FileManagerSettings, default_settings, load_settings


def test_defaults():
    s = FileManagerSettings()
    assert s.is_history_enabled is True
    assert s.recent_files_path == "recent.txt"
    assert s.encoding == "utf-8"
    assert s.max_recent_files is None


def test_settings_are_frozen():
    s = FileManagerSettings()
    with pytest.raises(ValidationError):
        s.is_history_enabled = False  # type: ignore[misc]


def test_encoding_is_validated_and_normalised():
    assert FileManagerSettings(encoding="UTF8").encoding == "utf-8"
    with pytest.raises(ValidationError):
        FileManagerSettings(encoding="no-such-codec")


@pytest.mark.parametrize("kwargs", [{"max_recent_files": -1}, {"recent_files_path": ""}, {"unknown": 1}])
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ValidationError):
        FileManagerSettings(**kwargs)


def test_default_settings_returns_fresh_values(tmp_path: Path):
    a = default_settings()
    b = default_settings()
    assert a == b and a is not b

    in_dir = default_settings(tmp_path)
    assert Path(in_dir.recent_files_path) == tmp_path / "recent.txt"


def test_load_settings_from_yaml(tmp_path: Path):
    cfg = tmp_path / "filekeeper.yaml"
    cfg.write_text(
        "is_history_enabled: false\nrecent_files_path: history/recent.txt\nmax_recent_files: 10\n",
        encoding="utf-8",
    )
    s = load_settings(cfg)
    assert s.is_history_enabled is False
    assert s.recent_files_path == "history/recent.txt"
    assert s.max_recent_files == 10
    assert s.encoding == "utf-8"


def test_load_settings_missing_or_empty_file(tmp_path: Path):
    assert load_settings(tmp_path / "absent.yaml") == FileManagerSettings()
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert load_settings(empty) == FileManagerSettings()


def test_load_settings_rejects_non_mapping(tmp_path: Path):
    cfg = tmp_path / "list.yaml"
    cfg.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(cfg)
