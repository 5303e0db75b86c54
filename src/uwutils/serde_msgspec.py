"""Shared msgspec struct policy."""

from __future__ import annotations

from collections.abc import Mapping

import msgspec


class StructBaseStrict(
    msgspec.Struct,
    frozen=True,
    kw_only=True,
    omit_defaults=True,
    repr_omit_defaults=True,
    forbid_unknown_fields=True,
):
    """Base struct for strict, immutable contracts."""


def convert[T](payload: Mapping[str, object], target: type[T]) -> T:
    """Validate a builtin mapping into ``target``.

    Raises
    ------
    msgspec.ValidationError
        Raised when the payload does not match the struct definition.
    """
    return msgspec.convert(payload, type=target, strict=True)


__all__ = ["StructBaseStrict", "convert"]
