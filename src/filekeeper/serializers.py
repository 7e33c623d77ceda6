from __future__ import annotations

import dataclasses
import json
import pickle
from typing import Any, BinaryIO, Dict, Optional

import yaml
from pydantic import BaseModel

from .interfaces import Serializer

# Attribute that records where an object lives; never written into payloads
STORAGE_LOCATION_FIELD = "storage_location"


def to_primitive(value: Any) -> Any:
    """Convert a model or dataclass into plain JSON/YAML-friendly data."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        data = dataclasses.asdict(value)
        data.pop(STORAGE_LOCATION_FIELD, None)
        return data
    return value


def from_primitive(data: Any, target: Optional[type]) -> Any:
    """Rebuild ``target`` from plain data produced by :func:`to_primitive`."""
    if target is None or data is None:
        return data
    if issubclass(target, BaseModel):
        return target.model_validate(data)
    if dataclasses.is_dataclass(target):
        if not isinstance(data, dict):
            raise TypeError(f"Expected a mapping to build {target.__name__}, got {type(data).__name__}")
        names = {f.name for f in dataclasses.fields(target) if f.init}
        kwargs: Dict[str, Any] = {k: v for k, v in data.items() if k in names and k != STORAGE_LOCATION_FIELD}
        return target(**kwargs)
    if isinstance(data, target):
        return data
    raise TypeError(f"Decoded {type(data).__name__} is not a {target.__name__}")


class JsonSerializer(Serializer):
    """Serializes objects as JSON text."""

    def __init__(self, indent: Optional[int] = 2, sort_keys: bool = False) -> None:
        self.indent = indent
        self.sort_keys = sort_keys

    def serialize(self, stream: BinaryIO, encoding: str, value: Any) -> None:
        text = json.dumps(to_primitive(value), ensure_ascii=False, indent=self.indent, sort_keys=self.sort_keys)
        stream.write(text.encode(encoding))

    def deserialize(self, stream: BinaryIO, encoding: str, target: Optional[type] = None) -> Any:
        data = json.loads(stream.read().decode(encoding))
        return from_primitive(data, target)


class YamlSerializer(Serializer):
    """Serializes objects as YAML using PyYAML's safe dumper and loader."""

    def __init__(self, sort_keys: bool = False) -> None:
        self.sort_keys = sort_keys

    def serialize(self, stream: BinaryIO, encoding: str, value: Any) -> None:
        text = yaml.safe_dump(to_primitive(value), allow_unicode=True, sort_keys=self.sort_keys)
        stream.write(text.encode(encoding))

    def deserialize(self, stream: BinaryIO, encoding: str, target: Optional[type] = None) -> Any:
        data = yaml.safe_load(stream.read().decode(encoding))
        return from_primitive(data, target)


class PickleSerializer(Serializer):
    """Binary serializer based on pickle. The encoding argument is ignored.

    Only load files you trust: unpickling can execute arbitrary code.
    """

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL) -> None:
        self.protocol = protocol

    def serialize(self, stream: BinaryIO, encoding: str, value: Any) -> None:
        pickle.dump(value, stream, protocol=self.protocol)

    def deserialize(self, stream: BinaryIO, encoding: str, target: Optional[type] = None) -> Any:
        value = pickle.load(stream)
        if target is not None and value is not None and not isinstance(value, target):
            raise TypeError(f"Unpickled {type(value).__name__} is not a {target.__name__}")
        return value


__all__ = [
    "JsonSerializer",
    "YamlSerializer",
    "PickleSerializer",
    "to_primitive",
    "from_primitive",
]
