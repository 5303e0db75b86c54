"""Deferred attribute resolution for package-level exports."""

from __future__ import annotations

import importlib
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass

type ExportTarget = str | tuple[str, str]


@dataclass(frozen=True)
class LazyExports:
    """Export table resolved on first attribute access.

    A target is a module path, in which case the attribute carries the export
    name, or a ``(module_path, attribute)`` pair for renamed exports. Relative
    module paths resolve against ``package``. Resolved values are stored in
    ``namespace`` so later lookups bypass ``__getattr__``.
    """

    package: str
    targets: Mapping[str, ExportTarget]
    namespace: MutableMapping[str, object] | None = None

    def locate(self, name: str) -> tuple[str, str]:
        """Return the ``(module, attribute)`` pair behind ``name``.

        Raises
        ------
        AttributeError
            Raised when ``name`` is not exported.
        """
        target = self.targets.get(name)
        if target is None:
            msg = f"module {self.package!r} has no attribute {name!r}"
            raise AttributeError(msg)
        return target if isinstance(target, tuple) else (target, name)

    def resolve(self, name: str) -> object:
        module_path, attribute = self.locate(name)
        value = getattr(importlib.import_module(module_path, self.package), attribute)
        if self.namespace is not None:
            self.namespace[name] = value
        return value

    def names(self) -> list[str]:
        return sorted(self.targets)


__all__ = ["ExportTarget", "LazyExports"]
