"""Resource content lookup and service descriptor reading.

Lookups enumerate every resource matching a path on the loader's search
path, read and trim each one, optionally split the text into lines and
aggregate the entries in discovery order. An empty aggregate is reported as
``NOTHING``; there is no empty-list success.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Final

from uwutils.defaults import resolve_loader, resolve_split_content, resolve_throw_on_fail
from uwutils.errors import ResourceContentError, ResourceError
from uwutils.file_io import read_stream_text
from uwutils.loader import Resource, ResourceLoader
from uwutils.option import NOTHING, Option

_LOGGER = logging.getLogger(__name__)

SPI_PATH_FMT: Final[str] = "META-INF/services/{}"
_COMMENT_PREFIX: Final[str] = "#"


def qualified_name(cls: type) -> str:
    """Return the dotted ``module.QualName`` of ``cls``."""
    return f"{cls.__module__}.{cls.__qualname__}"


def service_path(cls: type) -> str:
    """Return the service descriptor path for ``cls``.

    Returns
    -------
    str
        ``META-INF/services/<module>.<qualname>``.
    """
    return SPI_PATH_FMT.format(qualified_name(cls))


def split_lines(content: str) -> Iterator[str]:
    """Yield the non-empty, stripped lines of ``content``."""
    for line in content.splitlines():
        stripped = line.strip()
        if stripped:
            yield stripped


def read(resource: Resource | None, *, throw_on_fail: bool | None = None) -> Option[str]:
    """Read a resource fully and return its trimmed text.

    Parameters
    ----------
    resource
        Resource to read.
    throw_on_fail
        Raise ``ResourceError`` on read failures instead of returning
        ``NOTHING``. Defaults to the process setting.

    Returns
    -------
    Option[str]
        Trimmed text, or ``NOTHING`` when empty or unreadable.

    Raises
    ------
    ResourceError
        Raised when reading fails and ``throw_on_fail`` is set.
    """
    if resource is None:
        return NOTHING
    throw = resolve_throw_on_fail(throw_on_fail)
    try:
        text = read_stream_text(resource.open())
    except Exception as exc:
        if throw:
            msg = f"Cannot read resource {resource.location}"
            raise ResourceError(msg) from exc
        _LOGGER.debug("Skipping unreadable resource %s: %s", resource.location, exc)
        return NOTHING
    return Option.of(text.strip() or None)


def find_content(
    path: str | None,
    *,
    loader: ResourceLoader | None = None,
    throw_on_fail: bool | None = None,
    split_content: bool | None = None,
) -> Option[list[str]]:
    """Collect the content of every resource named ``path``.

    A matched resource with empty content is a ``ResourceContentError``. When
    ``throw_on_fail`` is false, any failure stops the enumeration and the
    entries gathered so far are returned.

    Parameters
    ----------
    path
        Relative resource path, e.g. ``META-INF/services/pkg.Plugin``.
    loader
        Loader to enumerate with; defaults to the process loader.
    throw_on_fail
        Raise ``ResourceError`` on failures. Defaults to the process setting.
    split_content
        Split each resource into non-empty stripped lines.

    Returns
    -------
    Option[list[str]]
        Entries in discovery order, or ``NOTHING`` when none were found.

    Raises
    ------
    ResourceError
        Raised on enumeration, read or empty-content failures when
        ``throw_on_fail`` is set.
    """
    if path is None:
        return NOTHING
    resolved = resolve_loader(loader)
    throw = resolve_throw_on_fail(throw_on_fail)
    split = resolve_split_content(split_content)
    entries: list[str] = []
    try:
        for resource in resolved.get_resources(path):
            content = read(resource, throw_on_fail=throw).unwrap_or_none()
            if content is None:
                raise ResourceContentError(resource.location)
            if split:
                entries.extend(split_lines(content))
            else:
                entries.append(content)
    except ResourceError as exc:
        if throw:
            raise
        _LOGGER.debug("Resource lookup for %s stopped: %s", path, exc)
    except Exception as exc:
        if throw:
            msg = f"Resource lookup failed for {path}"
            raise ResourceError(msg) from exc
        _LOGGER.debug("Resource lookup for %s stopped: %s", path, exc)
    return Option.of(entries or None)


def find_spi_content(
    cls: type | None,
    *,
    loader: ResourceLoader | None = None,
    throw_on_fail: bool | None = None,
) -> Option[list[str]]:
    """Return the provider names listed in the service descriptors of ``cls``.

    Lines are stripped and ``#`` comments removed.

    Returns
    -------
    Option[list[str]]
        Provider names in discovery order, or ``NOTHING``.
    """
    if cls is None:
        return NOTHING
    lines = find_content(
        service_path(cls),
        loader=loader,
        throw_on_fail=throw_on_fail,
        split_content=True,
    )
    names = [
        name
        for name in (line.partition(_COMMENT_PREFIX)[0].strip() for line in lines.unwrap_or(()))
        if name
    ]
    return Option.of(names or None)


__all__ = [
    "SPI_PATH_FMT",
    "find_content",
    "find_spi_content",
    "qualified_name",
    "read",
    "service_path",
    "split_lines",
]
