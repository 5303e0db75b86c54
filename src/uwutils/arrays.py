"""Index-based element access without exceptions."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from uwutils.objects import ArrowArrayLike, as_sequence
from uwutils.option import NOTHING, Option


def get[T](index: int | None, array: Sequence[T] | ArrowArrayLike | None) -> Option[T]:
    """Return the element at ``index``.

    Negative indexes are out of range; they never count from the end.

    Parameters
    ----------
    index
        Zero-based position.
    array
        Sequence or Arrow array to read.

    Returns
    -------
    Option[T]
        Element at ``index``, or ``NOTHING`` for missing inputs, an
        out-of-range index or a ``None`` element.
    """
    if index is None or array is None:
        return NOTHING
    items = as_sequence(array)
    if items is None or not 0 <= index < len(items):
        return NOTHING
    return Option.of(items[index])


def get_raw[T, D](
    index: int | None,
    array: Sequence[T] | ArrowArrayLike | None,
    default: D | None = None,
    *,
    supplier: Callable[[], D] | None = None,
) -> T | D | None:
    """Return the element at ``index`` or a fallback.

    ``supplier`` takes precedence over ``default`` and is only called when
    the element is absent.

    Returns
    -------
    T | D | None
        Element, supplied fallback, default, or ``None``.
    """
    result = get(index, array)
    if supplier is not None:
        return result.unwrap_or_else(supplier)
    return result.unwrap_or(default)


__all__ = ["get", "get_raw"]
