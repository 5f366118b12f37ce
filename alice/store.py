#!/usr/bin/env python3
"""
Per-type value history with a movable current pointer.

A Store keeps every value of one data type that commands produced during a
session, in insertion order. One of them is "current": the value commands
operate on by default. The current index is -1 exactly when the store is
empty.
"""

from typing import Any, Iterator, List, Tuple

from .errors import OutOfRange


class Store:
    """
    Ordered history of values of one store type.

    Invariants:
    - current_index() is -1 or a valid index into all()
    - append() always makes the new value current
    - clear() resets to the empty state
    """

    def __init__(self, name: str):
        """Initialize an empty store; name is used in error messages."""
        self.name = name
        self._data: List[Any] = []
        self._current = -1

    def append(self, value: Any) -> int:
        """Add a value at the end, make it current and return its index."""
        self._data.append(value)
        self._current = len(self._data) - 1
        return self._current

    def clear(self):
        """Remove all values."""
        self._data = []
        self._current = -1

    def is_empty(self) -> bool:
        return not self._data

    def current_index(self) -> int:
        return self._current

    def set_current_index(self, index: int):
        """Move the current pointer to an existing value."""
        self._check_index(index)
        self._current = index

    def current(self) -> Any:
        """Return the current value."""
        if self._current == -1:
            raise OutOfRange(f"no {self.name} in store")
        return self._data[self._current]

    def set_current(self, value: Any):
        """Replace the current value in place."""
        if self._current == -1:
            raise OutOfRange(f"no {self.name} in store")
        self._data[self._current] = value

    def at(self, index: int) -> Any:
        """Return the value at a given index."""
        self._check_index(index)
        return self._data[index]

    def all(self) -> Tuple[Any, ...]:
        """Return all values in insertion order."""
        return tuple(self._data)

    def _check_index(self, index: int):
        if not 0 <= index < len(self._data):
            raise OutOfRange(f"index {index} is out of range for {self.name} store of size {len(self._data)}")

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data)

    def __repr__(self) -> str:
        return f"Store({self.name!r}, size={len(self._data)}, current={self._current})"
