"""Key-value store contract and the in-memory implementation.

A store holds one JSON-compatible value per key: the whole collection,
overwritten on every save (last write wins).
"""

from __future__ import annotations

import copy
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Load/save pair keyed by collection name."""

    def load(self, key: str, default: Any = None) -> Any:
        """Return the stored value for ``key``, or ``default`` if absent."""
        ...

    def save(self, key: str, value: Any) -> None:
        """Overwrite the value stored under ``key``."""
        ...


class MemoryStore:
    """Store kept in a dict; values are deep-copied in and out."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def load(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def save(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def keys(self) -> list[str]:
        return sorted(self._data)
