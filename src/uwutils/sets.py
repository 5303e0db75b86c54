"""Null-safe conversion of collections, sequences and streams to sets."""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable, MutableSet

from uwutils.objects import ArrowArrayLike, as_collection
from uwutils.option import NOTHING, Option, rawify
from uwutils.synchronized import SynchronizedSet

type SetFactory[T] = Callable[[Collection[T]], MutableSet[T]]


def to_set[T](
    source: Iterable[T] | ArrowArrayLike | None,
    factory: SetFactory[T] | None = set,
) -> Option[MutableSet[T]]:
    """Build a set from ``source`` with a pluggable construction strategy.

    Parameters
    ----------
    source
        Collection, sequence, one-shot iterator (consumed) or Arrow array.
    factory
        Callable turning the materialized elements into a set. Defaults to
        the built-in hash set.

    Returns
    -------
    Option[MutableSet[T]]
        Built set, or ``NOTHING`` when ``source`` or ``factory`` is ``None``.
    """
    if source is None or factory is None:
        return NOTHING
    items = as_collection(source)
    if items is None:
        return NOTHING
    return Option.of(factory(items))


def to_synchronized_set[T](
    source: Iterable[T] | ArrowArrayLike | None,
) -> Option[MutableSet[T]]:
    """Build a lock-guarded set from ``source``."""
    return to_set(source, SynchronizedSet)


to_set_raw = rawify(to_set)
to_synchronized_set_raw = rawify(to_synchronized_set)


__all__ = [
    "SetFactory",
    "to_set",
    "to_set_raw",
    "to_synchronized_set",
    "to_synchronized_set_raw",
]
