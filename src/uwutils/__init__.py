"""Null-safe collection, reflection and service discovery helpers."""

from __future__ import annotations

from uwutils.lazy_module import ExportTarget, LazyExports

_EXPORTS: dict[str, ExportTarget] = {
    "NOTHING": ".option",
    "Option": ".option",
    "Some": ".option",
    "Try": ".option",
    "Success": ".option",
    "Failure": ".option",
    "raw": ".option",
    "SearchPathLoader": ".loader",
    "ResourceLoader": ".loader",
    "SynchronizedDict": ".synchronized",
    "SynchronizedSet": ".synchronized",
    "context_loader": ".defaults",
    "apply_if_not_none": ".objects",
    "array_get": (".arrays", "get"),
    "to_set": ".sets",
    "to_synchronized_set": ".sets",
    "extend_map_by_field": ".maps",
    "new_map_by_field": ".maps",
    "new_concurrent_map_by_field": ".maps",
    "new_enum_map_by_field": ".maps",
    "get_generic_types": ".reflect",
    "get_generic_type": ".reflect",
    "get_constructor": ".reflect",
    "new_instance": ".reflect",
    "find_class": ".reflect",
    "find_content": ".resources",
    "find_spi_content": ".resources",
    "find_spi_types": ".beans",
    "find_spi_instances": ".beans",
    "trim": ".strings",
}

_LAZY = LazyExports(__name__, _EXPORTS, globals())
__getattr__ = _LAZY.resolve
__dir__ = _LAZY.names

__all__ = sorted(_EXPORTS)
