"""Process-wide default values consulted by the discovery helpers.

Defaults are resolved once per process. Environment overrides:

- ``UWUTILS_THROW_ON_FAIL``: raise wrapped errors instead of skipping entries.
- ``UWUTILS_SPLIT_CONTENT``: split resource content into lines by default.
- ``UWUTILS_SEARCH_PATH``: extra entries scanned before ``sys.path`` by the
  default loader.
"""

from __future__ import annotations

import threading
from typing import Final

from uwutils.env_utils import env_bool, env_paths
from uwutils.loader import ResourceLoader, SearchPathLoader
from uwutils.serde_msgspec import StructBaseStrict, convert

THROW_ON_FAIL: Final[bool] = True
DEFAULT_SPLIT_CONTENT: Final[bool] = False

_LOCK: Final[threading.Lock] = threading.Lock()
_STATE: dict[str, object] = {}


class DefaultsSpec(StructBaseStrict, frozen=True):
    """Resolved process-wide defaults."""

    throw_on_fail: bool = THROW_ON_FAIL
    split_content: bool = DEFAULT_SPLIT_CONTENT
    extra_search_path: tuple[str, ...] = ()


def load_defaults() -> DefaultsSpec:
    """Build defaults from the environment.

    Returns
    -------
    DefaultsSpec
        Defaults with environment overrides applied.
    """
    payload = {
        "throw_on_fail": env_bool("UWUTILS_THROW_ON_FAIL", default=THROW_ON_FAIL),
        "split_content": env_bool("UWUTILS_SPLIT_CONTENT", default=DEFAULT_SPLIT_CONTENT),
        "extra_search_path": env_paths("UWUTILS_SEARCH_PATH"),
    }
    return convert(payload, DefaultsSpec)


def defaults() -> DefaultsSpec:
    """Return the process defaults, resolving them on first use."""
    with _LOCK:
        spec = _STATE.get("defaults")
        if spec is None:
            spec = load_defaults()
            _STATE["defaults"] = spec
    return spec  # type: ignore[return-value]


def context_loader() -> ResourceLoader:
    """Return the process default loader, creating it on first use.

    The loader reads ``sys.path`` at lookup time; an extra search path from
    the environment is scanned first through a parent loader.

    Returns
    -------
    ResourceLoader
        Shared default loader.
    """
    spec = defaults()
    with _LOCK:
        loader = _STATE.get("loader")
        if loader is None:
            parent = (
                SearchPathLoader(search_path=spec.extra_search_path)
                if spec.extra_search_path
                else None
            )
            loader = SearchPathLoader(parent=parent)
            _STATE["loader"] = loader
    return loader  # type: ignore[return-value]


def resolve_loader(loader: ResourceLoader | None) -> ResourceLoader:
    """Return ``loader`` or the process default."""
    return context_loader() if loader is None else loader


def resolve_throw_on_fail(throw_on_fail: bool | None) -> bool:
    """Return ``throw_on_fail`` or the process default."""
    return defaults().throw_on_fail if throw_on_fail is None else throw_on_fail


def resolve_split_content(split_content: bool | None) -> bool:
    """Return ``split_content`` or the process default."""
    return defaults().split_content if split_content is None else split_content


def reset_defaults() -> None:
    """Forget resolved defaults so the next lookup re-reads the environment.

    Intended for tests; production callers never need it.
    """
    with _LOCK:
        _STATE.clear()


__all__ = [
    "DEFAULT_SPLIT_CONTENT",
    "THROW_ON_FAIL",
    "DefaultsSpec",
    "context_loader",
    "defaults",
    "load_defaults",
    "reset_defaults",
    "resolve_loader",
    "resolve_split_content",
    "resolve_throw_on_fail",
]
