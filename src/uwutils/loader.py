"""Resource enumeration and class resolution over a search path.

A loader answers two questions: which resources exist under a relative path
(across every directory and zip archive on its search path, so several
archives may contribute a file with the same name), and which class a dotted
name refers to.
"""

from __future__ import annotations

import importlib.util
import io
import os
import sys
import zipfile
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from importlib.machinery import PathFinder
from pathlib import Path, PurePosixPath
from types import ModuleType
from typing import BinaryIO, Protocol, runtime_checkable

from uwutils.errors import ClassNotFoundError


@runtime_checkable
class Resource(Protocol):
    """Protocol for a readable resource."""

    @property
    def location(self) -> str:
        """Return a human-readable location for diagnostics."""
        ...

    def open(self) -> BinaryIO:
        """Open a binary stream; the caller closes it."""
        ...


@runtime_checkable
class ResourceLoader(Protocol):
    """Protocol for resource and class lookup."""

    def get_resources(self, path: str) -> Iterator[Resource]:
        """Yield every resource matching ``path``."""
        ...

    def load_class(self, name: str) -> type:
        """Resolve a dotted class name."""
        ...


@dataclass(frozen=True)
class FileResource:
    """Resource backed by a file in a search-path directory."""

    path: Path

    @property
    def location(self) -> str:
        return str(self.path)

    def open(self) -> BinaryIO:
        return self.path.open("rb")


@dataclass(frozen=True)
class ZipResource:
    """Resource stored as a member of a zip archive."""

    archive: Path
    member: str

    @property
    def location(self) -> str:
        return f"{self.archive}!/{self.member}"

    def open(self) -> BinaryIO:
        with zipfile.ZipFile(self.archive) as archive:
            return io.BytesIO(archive.read(self.member))


def normalize_resource_path(path: str) -> str:
    """Return ``path`` as a relative POSIX path without leading separators.

    Paths that step outside their search-path entry through ``..`` normalize
    to the empty path, which matches no resource.

    Returns
    -------
    str
        Normalized relative path, empty when nothing remains.
    """
    normalized = PurePosixPath(path.replace("\\", "/").lstrip("/"))
    if ".." in normalized.parts:
        return ""
    return "" if str(normalized) == "." else str(normalized)


@dataclass(frozen=True)
class SearchPathLoader:
    """Loader scanning directories and zip archives in search-path order.

    Parameters
    ----------
    search_path
        Entries to scan. ``None`` reads ``sys.path`` at lookup time.
    parent
        Loader whose resources are yielded before this loader's own.
    """

    search_path: tuple[str, ...] | None = None
    parent: ResourceLoader | None = None

    @classmethod
    def from_paths(
        cls,
        paths: Sequence[str | os.PathLike[str]],
        *,
        parent: ResourceLoader | None = None,
    ) -> SearchPathLoader:
        """Build a loader over explicit search-path entries.

        Returns
        -------
        SearchPathLoader
            Loader scanning ``paths`` in order.
        """
        return cls(search_path=tuple(os.fspath(path) for path in paths), parent=parent)

    def entries(self) -> tuple[Path, ...]:
        """Return the distinct search-path entries in scan order.

        Returns
        -------
        tuple[Path, ...]
            Directory or archive paths; duplicates keep their first position.
        """
        raw_entries = sys.path if self.search_path is None else self.search_path
        seen: set[Path] = set()
        entries: list[Path] = []
        for raw in raw_entries:
            entry = Path(raw or os.curdir)
            key = entry.resolve()
            if key in seen:
                continue
            seen.add(key)
            entries.append(entry)
        return tuple(entries)

    def get_resources(self, path: str) -> Iterator[Resource]:
        """Yield every resource named ``path``, parent loader first.

        Yields
        ------
        Resource
            Matching file or archive member.
        """
        relative = normalize_resource_path(path)
        if not relative:
            return
        if self.parent is not None:
            yield from self.parent.get_resources(relative)
        for entry in self.entries():
            if entry.is_dir():
                candidate = entry.joinpath(*relative.split("/"))
                if candidate.is_file():
                    yield FileResource(candidate)
            elif entry.is_file() and zipfile.is_zipfile(entry):
                with zipfile.ZipFile(entry) as archive:
                    names = set(archive.namelist())
                if relative in names:
                    yield ZipResource(entry, relative)

    def load_class(self, name: str) -> type:
        """Resolve ``pkg.mod.Class``, ``pkg.mod:Class`` or nested class names.

        The parent loader is asked first. Modules that the interpreter cannot
        already import are looked up in this loader's own entries, so classes
        shipped inside a search-path archive resolve too.

        Returns
        -------
        type
            Resolved class.

        Raises
        ------
        ClassNotFoundError
            Raised when no module/attribute split resolves to a class.
        """
        qualified = name.strip()
        if not qualified:
            msg = "Class name must not be empty"
            raise ClassNotFoundError(msg)
        if self.parent is not None:
            try:
                return self.parent.load_class(qualified)
            except ClassNotFoundError:
                pass
        for module_name, attr_path in _candidate_splits(qualified):
            module = self._import(module_name)
            if module is None:
                continue
            value: object = module
            try:
                for attr in attr_path.split("."):
                    value = getattr(value, attr)
            except AttributeError:
                continue
            if isinstance(value, type):
                return value
            msg = f"{qualified!r} resolves to {type(value).__name__}, not a class"
            raise ClassNotFoundError(msg)
        msg = f"Class not found: {qualified!r}"
        raise ClassNotFoundError(msg)

    def _import(self, module_name: str) -> ModuleType | None:
        module = _import_optional(module_name)
        if module is not None:
            return module
        top_level = module_name.partition(".")[0]
        if top_level in sys.modules:
            return None
        spec = PathFinder.find_spec(top_level, [str(entry) for entry in self.entries()])
        if spec is None or spec.loader is None:
            return None
        package = importlib.util.module_from_spec(spec)
        sys.modules[top_level] = package
        try:
            spec.loader.exec_module(package)
        except BaseException:
            del sys.modules[top_level]
            raise
        # Submodules resolve through the package's own __path__.
        return _import_optional(module_name)


def _candidate_splits(name: str) -> list[tuple[str, str]]:
    module_name, sep, attr_path = name.partition(":")
    if sep:
        return [(module_name, attr_path)] if module_name and attr_path else []
    parts = name.split(".")
    # Longest module prefix first.
    return [
        (".".join(parts[:index]), ".".join(parts[index:]))
        for index in range(len(parts) - 1, 0, -1)
    ]


def _import_optional(module_name: str) -> ModuleType | None:
    try:
        return importlib.import_module(module_name)
    except ModuleNotFoundError as exc:
        missing = exc.name or ""
        if module_name == missing or module_name.startswith(f"{missing}."):
            return None
        raise


__all__ = [
    "FileResource",
    "Resource",
    "ResourceLoader",
    "SearchPathLoader",
    "ZipResource",
    "normalize_resource_path",
]
