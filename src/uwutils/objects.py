"""Null-safe object helpers."""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable, Sequence

import pyarrow as pa

type ArrowArrayLike = pa.Array | pa.ChunkedArray


def any_none(*values: object) -> bool:
    """Return whether any of ``values`` is ``None``."""
    return any(value is None for value in values)


def default_if_none[T, D](value: T | None, default: D) -> T | D:
    """Return ``value`` unless it is ``None``."""
    return default if value is None else value


def apply_if_not_none[R, D](
    function: Callable[..., R | None] | None,
    *objects: object,
    default: D = None,
) -> R | D:
    """Call ``function(*objects)`` only when every input is present.

    Parameters
    ----------
    function
        Callable to apply.
    *objects
        Positional arguments; any ``None`` short-circuits to ``default``.
    default
        Value returned for missing inputs or a ``None`` result.

    Returns
    -------
    R | D
        Function result or ``default``.
    """
    if function is None or any_none(*objects):
        return default
    return default_if_none(function(*objects), default)


def as_sequence[T](source: Iterable[T] | ArrowArrayLike | None) -> Sequence[T] | None:
    """Return an indexable view of ``source``, materializing when needed.

    Sequences are returned as-is; Arrow arrays become Python lists; other
    iterables (including one-shot iterators) are drained into a list.

    Returns
    -------
    Sequence[T] | None
        Indexable elements, or ``None`` for a ``None`` source.
    """
    if source is None:
        return None
    if isinstance(source, (pa.Array, pa.ChunkedArray)):
        return source.to_pylist()
    if isinstance(source, Sequence):
        return source
    return list(source)


def as_collection[T](source: Iterable[T] | ArrowArrayLike | None) -> Collection[T] | None:
    """Return a sized, re-iterable view of ``source``.

    Returns
    -------
    Collection[T] | None
        Elements of ``source``, or ``None`` for a ``None`` source.
    """
    if source is None:
        return None
    if isinstance(source, Collection) and not isinstance(source, (pa.Array, pa.ChunkedArray)):
        return source
    return as_sequence(source)


__all__ = [
    "ArrowArrayLike",
    "any_none",
    "apply_if_not_none",
    "as_collection",
    "as_sequence",
    "default_if_none",
]
