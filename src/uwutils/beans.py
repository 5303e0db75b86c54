"""Service provider discovery and instantiation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from importlib import metadata

from uwutils.defaults import resolve_loader, resolve_throw_on_fail
from uwutils.errors import ServiceLoadError
from uwutils.loader import ResourceLoader
from uwutils.option import NOTHING, Option
from uwutils.reflect import new_instance
from uwutils.resources import find_spi_content

_LOGGER = logging.getLogger(__name__)


def find_spi_types[T](
    cls: type[T] | None,
    *,
    loader: ResourceLoader | None = None,
    throw_on_fail: bool | None = None,
) -> Option[list[type[T]]]:
    """Resolve the providers listed in the service descriptors of ``cls``.

    Each listed name is loaded through ``loader`` and must be a subclass of
    ``cls``. Order follows discovery order; duplicates are kept.

    Parameters
    ----------
    cls
        Service type whose descriptors are read.
    loader
        Loader used for both descriptor lookup and class resolution.
    throw_on_fail
        Raise ``ServiceLoadError`` for the first unresolvable entry instead
        of skipping it. Defaults to the process setting.

    Returns
    -------
    Option[list[type[T]]]
        Provider classes, or ``NOTHING`` when none resolve.

    Raises
    ------
    ServiceLoadError
        Raised for an unresolvable entry when ``throw_on_fail`` is set.
    ResourceError
        Raised when reading the descriptors fails and ``throw_on_fail`` is set.
    """
    if cls is None:
        return NOTHING
    resolved = resolve_loader(loader)
    throw = resolve_throw_on_fail(throw_on_fail)
    names = find_spi_content(cls, loader=resolved, throw_on_fail=throw)
    if names.is_empty():
        return NOTHING
    providers = _resolve_providers(
        cls,
        ((name, lambda name=name: resolved.load_class(name)) for name in names.get()),
        throw=throw,
    )
    return Option.of(providers or None)


def find_spi_instances[T](
    cls: type[T] | None,
    *,
    loader: ResourceLoader | None = None,
    throw_on_fail: bool | None = None,
) -> Option[list[T]]:
    """Instantiate every provider of ``cls`` with its no-argument constructor.

    Returns
    -------
    Option[list[T]]
        Provider instances, or ``NOTHING`` when none could be created.

    Raises
    ------
    ServiceLoadError
        Raised for a provider that cannot be resolved or instantiated when
        ``throw_on_fail`` is set.
    """
    if cls is None:
        return NOTHING
    throw = resolve_throw_on_fail(throw_on_fail)
    instances: list[T] = []
    for provider in find_spi_types(cls, loader=loader, throw_on_fail=throw).unwrap_or(()):
        instance = new_instance(provider)
        if instance.is_present():
            instances.append(instance.get())
            continue
        if throw:
            raise ServiceLoadError(provider.__qualname__, cls, "cannot instantiate")
        _LOGGER.debug("Skipping provider %r: cannot instantiate", provider)
    return Option.of(instances or None)


def find_entry_point_types[T](
    group: str | None,
    cls: type[T] | None,
    *,
    throw_on_fail: bool | None = None,
) -> Option[list[type[T]]]:
    """Resolve the installed entry points of ``group`` as providers of ``cls``.

    Entry points are the packaging-metadata counterpart of service
    descriptors; the same ordering and failure rules apply.

    Returns
    -------
    Option[list[type[T]]]
        Provider classes, or ``NOTHING`` when none resolve.
    """
    if group is None or cls is None:
        return NOTHING
    throw = resolve_throw_on_fail(throw_on_fail)
    entry_points = metadata.entry_points(group=group)
    providers = _resolve_providers(
        cls,
        ((entry_point.value, entry_point.load) for entry_point in entry_points),
        throw=throw,
    )
    return Option.of(providers or None)


def _resolve_providers[T](
    service: type[T],
    candidates: Iterable[tuple[str, Callable[[], object]]],
    *,
    throw: bool,
) -> list[type[T]]:
    providers: list[type[T]] = []
    for name, load in candidates:
        try:
            provider = load()
            if not _is_subtype(provider, service):
                raise ServiceLoadError(name, service, "not a subclass of the service type")
        except Exception as exc:
            if throw:
                if isinstance(exc, ServiceLoadError):
                    raise
                raise ServiceLoadError(name, service, str(exc)) from exc
            _LOGGER.debug("Skipping provider %r: %s", name, exc)
            continue
        providers.append(provider)
    return providers


def _is_subtype(provider: object, service: type) -> bool:
    if not isinstance(provider, type):
        return False
    try:
        return issubclass(provider, service)
    except TypeError:
        return False


__all__ = ["find_entry_point_types", "find_spi_instances", "find_spi_types"]
