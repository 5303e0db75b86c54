"""Optional and try-style result containers.

Every helper in this package reports "no result" through these containers
instead of returning ``None`` or raising. Callers that prefer nullable values
unwrap with ``unwrap_or`` / ``unwrap_or_none`` or the :func:`raw` adapter.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from functools import wraps
from typing import Final, NoReturn

from uwutils.errors import NoSuchElementError


class Option[T](ABC):
    """Container holding zero or one value."""

    __slots__ = ()

    @staticmethod
    def of[V](value: V | None) -> Option[V]:
        """Wrap a value, mapping ``None`` to :data:`NOTHING`.

        Returns
        -------
        Option[V]
            ``Some(value)`` or ``NOTHING``.
        """
        if value is None:
            return NOTHING
        return Some(value)

    @staticmethod
    def some[V](value: V) -> Option[V]:
        """Wrap a value unconditionally, including ``None``."""
        return Some(value)

    @staticmethod
    def none() -> Option[NoReturn]:
        """Return the empty option."""
        return NOTHING

    @abstractmethod
    def is_present(self) -> bool:
        """Return whether a value is held."""

    def is_empty(self) -> bool:
        """Return whether no value is held."""
        return not self.is_present()

    @abstractmethod
    def get(self) -> T:
        """Return the held value.

        Raises
        ------
        NoSuchElementError
            Raised when the option is empty.
        """

    def unwrap_or[D](self, default: D) -> T | D:
        """Return the held value, or ``default`` when empty.

        Returns
        -------
        T | D
            Held value or the default.
        """
        return self.get() if self.is_present() else default

    def unwrap_or_else[D](self, supplier: Callable[[], D] | None) -> T | D | None:
        """Return the held value, or call ``supplier`` when empty.

        The supplier is only invoked for an empty option; a ``None`` supplier
        yields ``None``.

        Returns
        -------
        T | D | None
            Held value or the supplied fallback.
        """
        if self.is_present():
            return self.get()
        if supplier is None:
            return None
        return supplier()

    def unwrap_or_none(self) -> T | None:
        """Return the held value or ``None``."""
        return self.unwrap_or(None)

    def map[U](self, function: Callable[[T], U | None]) -> Option[U]:
        """Apply ``function`` to the held value.

        A ``None`` result from ``function`` collapses to ``NOTHING``.

        Returns
        -------
        Option[U]
            Mapped option.
        """
        if not self.is_present():
            return NOTHING
        return Option.of(function(self.get()))

    def flat_map[U](self, function: Callable[[T], Option[U]]) -> Option[U]:
        """Chain an option-returning function.

        Returns
        -------
        Option[U]
            The function result, or ``NOTHING`` when empty.
        """
        if not self.is_present():
            return NOTHING
        return function(self.get())

    def filter(self, predicate: Callable[[T], bool]) -> Option[T]:
        """Keep the held value only when ``predicate`` accepts it.

        Returns
        -------
        Option[T]
            This option or ``NOTHING``.
        """
        if self.is_present() and predicate(self.get()):
            return self
        return NOTHING

    def __iter__(self) -> Iterator[T]:
        if self.is_present():
            yield self.get()

    def __bool__(self) -> bool:
        return self.is_present()


@dataclass(frozen=True, slots=True)
class Some[T](Option[T]):
    """Option holding a value."""

    value: T

    def is_present(self) -> bool:
        return True

    def get(self) -> T:
        return self.value


class _Nothing(Option[NoReturn]):
    __slots__ = ()

    _instance: _Nothing | None = None

    def __new__(cls) -> _Nothing:
        # Shared singleton so ``result is NOTHING`` holds.
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def is_present(self) -> bool:
        return False

    def get(self) -> NoReturn:
        msg = "No value present"
        raise NoSuchElementError(msg)

    def __repr__(self) -> str:
        return "NOTHING"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, _Nothing)

    def __hash__(self) -> int:
        return hash(_Nothing)


NOTHING: Final[Option[NoReturn]] = _Nothing()


class Try[T](ABC):
    """Outcome of a computation: a success value or a captured exception."""

    __slots__ = ()

    @staticmethod
    def success[V](value: V) -> Try[V]:
        """Wrap a successful value."""
        return Success(value)

    @staticmethod
    def failure(cause: Exception) -> Try[NoReturn]:
        """Wrap a failure cause."""
        return Failure(cause)

    @staticmethod
    def of[V](function: Callable[..., V], *args: object) -> Try[V]:
        """Call ``function`` and capture any raised ``Exception``.

        Returns
        -------
        Try[V]
            ``Success`` with the return value or ``Failure`` with the cause.
        """
        try:
            return Success(function(*args))
        except Exception as exc:  # noqa: BLE001 - captured into the result
            return Failure(exc)

    @abstractmethod
    def is_success(self) -> bool:
        """Return whether the computation succeeded."""

    def is_failure(self) -> bool:
        """Return whether the computation failed."""
        return not self.is_success()

    @property
    @abstractmethod
    def cause(self) -> Exception | None:
        """Return the failure cause, or ``None`` for a success."""

    @abstractmethod
    def get(self) -> T:
        """Return the success value, re-raising the cause on failure."""

    def to_option(self) -> Option[T]:
        """Return the success value as an option; failures become ``NOTHING``."""
        if self.is_success():
            return Option.of(self.get())
        return NOTHING

    def unwrap_or[D](self, default: D) -> T | D:
        """Return the success value, or ``default`` on failure."""
        return self.get() if self.is_success() else default

    def unwrap_or_else[D](self, supplier: Callable[[], D] | None) -> T | D | None:
        """Return the success value, or call ``supplier`` on failure."""
        if self.is_success():
            return self.get()
        if supplier is None:
            return None
        return supplier()

    def unwrap_or_none(self) -> T | None:
        """Return the success value or ``None``."""
        return self.unwrap_or(None)

    def map[U](self, function: Callable[[T], U]) -> Try[U]:
        """Apply ``function`` to a success value, capturing raised exceptions.

        Returns
        -------
        Try[U]
            Mapped result; failures pass through unchanged.
        """
        if not self.is_success():
            return self  # type: ignore[return-value]
        return Try.of(function, self.get())

    def __bool__(self) -> bool:
        return self.is_success()


@dataclass(frozen=True, slots=True)
class Success[T](Try[T]):
    """Successful outcome."""

    value: T

    def is_success(self) -> bool:
        return True

    @property
    def cause(self) -> None:
        return None

    def get(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Failure(Try[NoReturn]):
    """Failed outcome carrying its cause."""

    error: Exception

    def is_success(self) -> bool:
        return False

    @property
    def cause(self) -> Exception:
        return self.error

    def get(self) -> NoReturn:
        raise self.error


type Result[T] = Option[T] | Try[T]


def raw[T, D](result: Result[T], default: D | None = None) -> T | D | None:
    """Unwrap an option or try result to a nullable value.

    Parameters
    ----------
    result
        Option or Try to unwrap.
    default
        Value returned when the result is empty or failed.

    Returns
    -------
    T | D | None
        Held value or ``default``.
    """
    return result.unwrap_or(default)


def rawify[**P, T](function: Callable[P, Result[T]]) -> Callable[P, T | None]:
    """Build the nullable sibling of a result-returning helper.

    Returns
    -------
    Callable[P, T | None]
        Wrapper returning the unwrapped value or ``None``.
    """

    @wraps(function)
    def _raw(*args: P.args, **kwargs: P.kwargs) -> T | None:
        return function(*args, **kwargs).unwrap_or_none()

    return _raw


__all__ = [
    "NOTHING",
    "Failure",
    "Option",
    "Result",
    "Some",
    "Success",
    "Try",
    "raw",
    "rawify",
]
