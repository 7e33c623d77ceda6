from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import List, Optional

import pytest

from filekeeper import Document, JsonSerializer, PickleSerializer, YamlSerializer


class Playlist(Document):
    name: str
    tracks: List[str] = []


@dataclass
class Bookmark:
    url: str
    tags: List[str] = field(default_factory=list)
    storage_location: Optional[str] = None


def encode(serializer, value, encoding="utf-8") -> bytes:
    stream = io.BytesIO()
    serializer.serialize(stream, encoding, value)
    assert not stream.closed
    return stream.getvalue()


def decode(serializer, data: bytes, target=None, encoding="utf-8"):
    stream = io.BytesIO(data)
    value = serializer.deserialize(stream, encoding, target)
    assert not stream.closed
    return value


@pytest.mark.parametrize("serializer", [JsonSerializer(), YamlSerializer()], ids=["json", "yaml"])
def test_text_serializers_rebuild_models_without_location(serializer):
    pl = Playlist(name="Mix", tracks=["a", "b"], storage_location="mix.pl")
    data = encode(serializer, pl)
    assert b"mix.pl" not in data

    back = decode(serializer, data, Playlist)
    assert back.name == "Mix" and back.tracks == ["a", "b"]
    assert back.storage_location is None


@pytest.mark.parametrize("serializer", [JsonSerializer(), YamlSerializer()], ids=["json", "yaml"])
def test_text_serializers_handle_dataclasses(serializer):
    bm = Bookmark(url="https://example.org", tags=["x"], storage_location="bm.json")
    data = encode(serializer, bm)
    assert b"bm.json" not in data
    assert decode(serializer, data, Bookmark) == Bookmark(url="https://example.org", tags=["x"])


def test_json_without_target_returns_plain_data():
    assert decode(JsonSerializer(), b'{"a": [1, 2]}') == {"a": [1, 2]}


def test_json_honours_encoding():
    data = encode(JsonSerializer(indent=None), {"name": "Zoë"}, encoding="utf-16")
    assert decode(JsonSerializer(), data, encoding="utf-16") == {"name": "Zoë"}


def test_target_type_mismatch_raises():
    with pytest.raises(TypeError):
        decode(JsonSerializer(), b"[1, 2]", Bookmark)
    with pytest.raises(TypeError):
        decode(JsonSerializer(), b'"text"', dict)


def test_invalid_model_payload_raises():
    with pytest.raises(ValueError):
        decode(JsonSerializer(), b'{"tracks": []}', Playlist)


def test_yaml_malformed_payload_raises():
    with pytest.raises(Exception):
        decode(YamlSerializer(), b"key: [unclosed")


def test_pickle_round_trip_and_type_check():
    data = encode(PickleSerializer(), {"k": (1, 2)})
    assert decode(PickleSerializer(), data, dict) == {"k": (1, 2)}
    with pytest.raises(TypeError):
        decode(PickleSerializer(), data, list)
