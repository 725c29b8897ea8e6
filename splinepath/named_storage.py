"""A keyed store that refuses to overwrite existing entries."""

from __future__ import annotations

from typing import Dict, Generic, TypeVar

T = TypeVar("T")


class NamedStorage(Generic[T]):
    """Objects stored under unique string names."""

    def __init__(self) -> None:
        self._items: Dict[str, T] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def get(self, key: str) -> T:
        """Return the object stored under ``key``; raises KeyError if absent."""
        try:
            return self._items[key]
        except KeyError:
            raise KeyError(f"key {key!r} not found in storage") from None

    def store(self, key: str, item: T) -> "NamedStorage[T]":
        """Store ``item`` under a new ``key``; raises KeyError if the key is taken."""
        if key in self._items:
            raise KeyError(f"key {key!r} already exists in storage")
        self._items[key] = item
        return self

    def clear(self) -> None:
        self._items.clear()