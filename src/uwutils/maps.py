"""Field-keyed map builders.

A field-keyed map maps the key extracted from each element (through a
caller-supplied accessor) to the element itself. Builds are fail-fast: a
``None`` key or a key that is already present aborts the build.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, MutableMapping
from enum import Enum

from uwutils.errors import DuplicateKeyError, KeyExtractionError, MissingKeyError
from uwutils.objects import ArrowArrayLike, as_collection
from uwutils.option import NOTHING, Option, Try, rawify
from uwutils.synchronized import SynchronizedDict

_LOGGER = logging.getLogger(__name__)

type KeyGetter[T, K] = Callable[[T], K | None]
type MapFactory[K, T] = Callable[[], MutableMapping[K, T]]


def _extend[K, T](
    getter: KeyGetter[T, K] | None,
    objects: Iterable[T] | ArrowArrayLike | None,
    target: MutableMapping[K, T] | None,
) -> MutableMapping[K, T]:
    if getter is None or objects is None or target is None:
        msg = "getter, objects and target map are required"
        raise KeyExtractionError(msg)
    for element in as_collection(objects) or ():
        key = getter(element)
        if key is None:
            raise MissingKeyError(element)
        if key in target:
            raise DuplicateKeyError(key, element)
        target[key] = element
    return target


def extend_map_by_field[K, T](
    getter: KeyGetter[T, K] | None,
    objects: Iterable[T] | ArrowArrayLike | None,
    target: MutableMapping[K, T] | None,
) -> bool:
    """Insert every element of ``objects`` into ``target`` under its key.

    Stops at the first ``None`` or duplicate key. Elements inserted before
    the failing one stay in ``target``.

    Parameters
    ----------
    getter
        Key accessor applied to each element.
    objects
        Elements to insert.
    target
        Map to extend in place.

    Returns
    -------
    bool
        ``True`` when every element was inserted.
    """
    try:
        _extend(getter, objects, target)
    except KeyExtractionError as exc:
        _LOGGER.debug("Field-keyed map extension stopped: %s", exc)
        return False
    return True


def new_map_by_field[K, T](
    getter: KeyGetter[T, K] | None,
    objects: Iterable[T] | ArrowArrayLike | None,
    map_factory: MapFactory[K, T] | None = dict,
) -> Try[MutableMapping[K, T]]:
    """Build a new field-keyed map.

    Parameters
    ----------
    getter
        Key accessor applied to each element.
    objects
        Elements to index.
    map_factory
        Zero-argument callable creating the empty target map.

    Returns
    -------
    Try[MutableMapping[K, T]]
        The populated map, or a failure carrying ``KeyExtractionError``
        (``MissingKeyError`` / ``DuplicateKeyError`` for key violations).
    """
    try:
        target = map_factory() if map_factory is not None else None
        return Try.success(_extend(getter, objects, target))
    except KeyExtractionError as exc:
        return Try.failure(exc)


def new_concurrent_map_by_field[K, T](
    getter: KeyGetter[T, K] | None,
    objects: Iterable[T] | ArrowArrayLike | None,
) -> Try[MutableMapping[K, T]]:
    """Build a lock-guarded field-keyed map."""
    return new_map_by_field(getter, objects, SynchronizedDict)


def new_enum_map_by_field[K, E: Enum](
    getter: KeyGetter[E, K] | None,
    enum_type: type[E] | None,
    map_factory: MapFactory[K, E] | None = dict,
) -> Try[MutableMapping[K, E]]:
    """Build a field-keyed map over the members of ``enum_type``.

    Aliased members are visited once, in definition order. A ``None`` or
    non-enum type yields a failure.
    """
    is_enum = isinstance(enum_type, type) and issubclass(enum_type, Enum)
    members = list(enum_type) if is_enum else None
    return new_map_by_field(getter, members, map_factory)


def new_concurrent_enum_map_by_field[K, E: Enum](
    getter: KeyGetter[E, K] | None,
    enum_type: type[E] | None,
) -> Try[MutableMapping[K, E]]:
    """Build a lock-guarded field-keyed map over enum members."""
    return new_enum_map_by_field(getter, enum_type, SynchronizedDict)


def get[K, T](key: K | None, mapping: Mapping[K, T] | None) -> Option[T]:
    """Look up ``key`` without raising.

    Returns
    -------
    Option[T]
        Mapped value, or ``NOTHING`` for missing inputs, an unknown key or a
        ``None`` value.
    """
    if key is None or mapping is None:
        return NOTHING
    return Option.of(mapping.get(key))


def get_raw[K, T, D](
    key: K | None, mapping: Mapping[K, T] | None, default: D | None = None
) -> T | D | None:
    """Look up ``key``, returning ``default`` when absent."""
    return get(key, mapping).unwrap_or(default)


new_map_by_field_raw = rawify(new_map_by_field)
new_concurrent_map_by_field_raw = rawify(new_concurrent_map_by_field)
new_enum_map_by_field_raw = rawify(new_enum_map_by_field)
new_concurrent_enum_map_by_field_raw = rawify(new_concurrent_enum_map_by_field)


__all__ = [
    "KeyGetter",
    "MapFactory",
    "extend_map_by_field",
    "get",
    "get_raw",
    "new_concurrent_enum_map_by_field",
    "new_concurrent_enum_map_by_field_raw",
    "new_concurrent_map_by_field",
    "new_concurrent_map_by_field_raw",
    "new_enum_map_by_field",
    "new_enum_map_by_field_raw",
    "new_map_by_field",
    "new_map_by_field_raw",
]
