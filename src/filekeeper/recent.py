from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional

# Null slot handle for the arena links
_NIL = -1


class RecencyList:
    """Bounded, deduplicated list of keys ordered from least to most recent.

    Keys live in a flat arena of slots. Each slot stores its key plus the slot
    numbers of its neighbours, and a dict maps every key to its slot. That keeps
    add, remove and membership O(1) on average without shifting a list and
    without node objects pointing at each other.

    Enumeration runs from the least-recent key (head) to the most-recent key
    (tail). Re-adding a key moves it to the tail. When ``max_length`` is set and
    exceeded, keys are evicted from the head inside the call that caused it.
    """

    def __init__(self, keys: Iterable[str] = (), max_length: Optional[int] = None) -> None:
        self._max_length = self._check_max_length(max_length)
        self._index: Dict[str, int] = {}
        self._keys: List[Optional[str]] = []
        self._prev: List[int] = []
        self._next: List[int] = []
        self._free: List[int] = []
        self._head = _NIL
        self._tail = _NIL
        for key in keys:
            self.add(key)

    # Public API

    @property
    def max_length(self) -> Optional[int]:
        """Capacity of the list, or None when unbounded."""
        return self._max_length

    @max_length.setter
    def max_length(self, value: Optional[int]) -> None:
        self._max_length = self._check_max_length(value)
        self._remove_excess()

    @property
    def count(self) -> int:
        return len(self._index)

    def add(self, key: str) -> None:
        """Make ``key`` the most recent entry, evicting old entries if over capacity."""
        if not isinstance(key, str):
            raise TypeError(f"RecencyList keys must be str, not {type(key).__name__}")
        self.remove(key)
        self._append(key)
        self._remove_excess()

    def remove(self, key: str) -> bool:
        """Remove ``key``; return True if it was present."""
        slot = self._index.pop(key, _NIL) if isinstance(key, str) else _NIL
        if slot == _NIL:
            return False
        self._unlink(slot)
        return True

    def clear(self) -> None:
        """Drop every key. The capacity is left as it is."""
        self._index.clear()
        self._keys.clear()
        self._prev.clear()
        self._next.clear()
        self._free.clear()
        self._head = _NIL
        self._tail = _NIL

    def most_recent(self) -> Optional[str]:
        return self._keys[self._tail] if self._tail != _NIL else None

    def least_recent(self) -> Optional[str]:
        return self._keys[self._head] if self._head != _NIL else None

    def copy(self) -> "RecencyList":
        return RecencyList(self, max_length=self._max_length)

    # Container protocol

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key in self._index

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> Iterator[str]:
        slot = self._head
        while slot != _NIL:
            key = self._keys[slot]
            slot = self._next[slot]
            yield key  # type: ignore[misc]

    def __reversed__(self) -> Iterator[str]:
        slot = self._tail
        while slot != _NIL:
            key = self._keys[slot]
            slot = self._prev[slot]
            yield key  # type: ignore[misc]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecencyList):
            return NotImplemented
        return list(self) == list(other)

    def __repr__(self) -> str:
        return f"RecencyList({list(self)!r}, max_length={self._max_length!r})"

    # Internal utilities

    @staticmethod
    def _check_max_length(value: Optional[int]) -> Optional[int]:
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError("max_length must be an int or None")
        if value < 0:
            raise ValueError("max_length must not be negative")
        return value

    def _allocate(self, key: str) -> int:
        if self._free:
            slot = self._free.pop()
            self._keys[slot] = key
            self._prev[slot] = _NIL
            self._next[slot] = _NIL
            return slot
        self._keys.append(key)
        self._prev.append(_NIL)
        self._next.append(_NIL)
        return len(self._keys) - 1

    def _append(self, key: str) -> None:
        slot = self._allocate(key)
        self._prev[slot] = self._tail
        if self._tail != _NIL:
            self._next[self._tail] = slot
        else:
            self._head = slot
        self._tail = slot
        self._index[key] = slot

    def _unlink(self, slot: int) -> None:
        prev_slot = self._prev[slot]
        next_slot = self._next[slot]
        if prev_slot != _NIL:
            self._next[prev_slot] = next_slot
        else:
            self._head = next_slot
        if next_slot != _NIL:
            self._prev[next_slot] = prev_slot
        else:
            self._tail = prev_slot
        self._keys[slot] = None
        self._prev[slot] = _NIL
        self._next[slot] = _NIL
        self._free.append(slot)

    def _remove_excess(self) -> None:
        if self._max_length is None:
            return
        while len(self._index) > self._max_length:
            head = self._head
            del self._index[self._keys[head]]  # type: ignore[arg-type]
            self._unlink(head)


__all__ = ["RecencyList"]
