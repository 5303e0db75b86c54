"""Lock-guarded set and mapping wrappers.

Each operation holds one re-entrant lock for its duration. Iteration walks a
snapshot taken under the lock, so concurrent mutation never invalidates an
active iterator.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator, Mapping, MutableMapping, MutableSet


class SynchronizedSet[T](MutableSet[T]):
    """Hash set whose operations are serialized by a single lock."""

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._lock = threading.RLock()
        self._items: set[T] = set(items)

    def __contains__(self, item: object) -> bool:
        with self._lock:
            return item in self._items

    def __iter__(self) -> Iterator[T]:
        with self._lock:
            snapshot = tuple(self._items)
        return iter(snapshot)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def add(self, value: T) -> None:
        with self._lock:
            self._items.add(value)

    def discard(self, value: T) -> None:
        with self._lock:
            self._items.discard(value)

    def snapshot(self) -> frozenset[T]:
        """Return an immutable copy of the current members."""
        with self._lock:
            return frozenset(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SynchronizedSet):
            return self.snapshot() == other.snapshot()
        if isinstance(other, (set, frozenset)):
            return self.snapshot() == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({set(self.snapshot())!r})"


class SynchronizedDict[K, V](MutableMapping[K, V]):
    """Dict whose operations are serialized by a single lock."""

    def __init__(self, entries: Mapping[K, V] | None = None) -> None:
        self._lock = threading.RLock()
        self._entries: dict[K, V] = dict(entries or {})

    def __getitem__(self, key: K) -> V:
        with self._lock:
            return self._entries[key]

    def __setitem__(self, key: K, value: V) -> None:
        with self._lock:
            self._entries[key] = value

    def __delitem__(self, key: K) -> None:
        with self._lock:
            del self._entries[key]

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __iter__(self) -> Iterator[K]:
        with self._lock:
            snapshot = tuple(self._entries)
        return iter(snapshot)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def snapshot(self) -> dict[K, V]:
        """Return a shallow copy of the current entries."""
        with self._lock:
            return dict(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SynchronizedDict):
            return self.snapshot() == other.snapshot()
        if isinstance(other, Mapping):
            return self.snapshot() == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.snapshot()!r})"


__all__ = ["SynchronizedDict", "SynchronizedSet"]
