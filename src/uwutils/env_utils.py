"""Environment variable parsing for uwutils defaults."""

from __future__ import annotations

import logging
import os

_LOGGER = logging.getLogger(__name__)

_TRUE_VALUES = frozenset({"1", "true", "yes", "y", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "n", "off"})


def env_value(name: str) -> str | None:
    """Return stripped env var value, or None if empty/not set.

    Parameters
    ----------
    name
        Environment variable name.

    Returns
    -------
    str | None
        Stripped value or None.
    """
    raw = os.environ.get(name)
    if raw is None:
        return None
    stripped = raw.strip()
    return stripped if stripped else None


def env_bool(name: str, *, default: bool) -> bool:
    """Parse environment variable as boolean.

    Unrecognized values are logged and fall back to ``default``.

    Parameters
    ----------
    name
        Environment variable name.
    default
        Value used when the variable is unset, empty or invalid.

    Returns
    -------
    bool
        Parsed boolean or default.
    """
    raw = env_value(name)
    if raw is None:
        return default
    value = raw.lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    _LOGGER.warning("Invalid boolean for %s: %r", name, raw)
    return default


def env_paths(name: str) -> tuple[str, ...]:
    """Parse environment variable as an ``os.pathsep``-separated path list.

    Returns
    -------
    tuple[str, ...]
        Non-empty, stripped path entries in declaration order.
    """
    raw = env_value(name)
    if raw is None:
        return ()
    return tuple(item.strip() for item in raw.split(os.pathsep) if item.strip())


__all__ = ["env_bool", "env_paths", "env_value"]
