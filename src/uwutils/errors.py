"""Exception types raised by uwutils helpers."""

from __future__ import annotations


class UwUtilsError(RuntimeError):
    """Base class for wrapped lower-level failures."""


class ResourceError(UwUtilsError):
    """Raised when resource enumeration or reading fails."""


class ResourceContentError(ResourceError):
    """Raised when a matched resource has no content after trimming."""

    def __init__(self, location: str) -> None:
        self.location = location
        super().__init__(f"Resource content is empty: {location}")


class ServiceLoadError(UwUtilsError):
    """Raised when a listed service provider cannot be resolved."""

    def __init__(self, name: str, service: type, reason: str | None = None) -> None:
        self.name = name
        self.service = service
        message = f"Cannot load provider {name!r} for {service.__module__}.{service.__qualname__}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ClassNotFoundError(LookupError):
    """Raised when a dotted name does not resolve to a class."""


class NoSuchElementError(LookupError):
    """Raised when reading the value of an empty result."""


class KeyExtractionError(ValueError):
    """Raised when a field-keyed map cannot be built."""


class MissingKeyError(KeyExtractionError):
    """Raised when the key accessor returns ``None`` for an element."""

    def __init__(self, element: object) -> None:
        self.element = element
        super().__init__(f"Key accessor returned None for {element!r}")


class DuplicateKeyError(KeyExtractionError):
    """Raised when two elements map to the same key."""

    def __init__(self, key: object, element: object) -> None:
        self.key = key
        self.element = element
        super().__init__(f"Key {key!r} already present; rejected {element!r}")


__all__ = [
    "ClassNotFoundError",
    "DuplicateKeyError",
    "KeyExtractionError",
    "MissingKeyError",
    "NoSuchElementError",
    "ResourceContentError",
    "ResourceError",
    "ServiceLoadError",
    "UwUtilsError",
]
