"""Reflective helpers for generic type arguments, constructors and classes.

Every lookup reports failure as ``NOTHING``; reflective errors never escape.
"""

from __future__ import annotations

import inspect
import logging
import types
import typing
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Generic, Literal, Protocol, Union, get_args, get_origin

from uwutils import arrays
from uwutils.defaults import resolve_loader
from uwutils.loader import ResourceLoader
from uwutils.option import NOTHING, Option, Some, rawify

_LOGGER = logging.getLogger(__name__)

_UNION_ORIGINS = frozenset({Union, types.UnionType})
_OPAQUE_ORIGINS = frozenset({Literal, typing.ClassVar, typing.Final})
_MARKER_ORIGINS = frozenset({Generic, Protocol})
_WILDCARDS = (inspect.Parameter.empty, Any, object)


def get_generic_types(tp: object) -> Option[tuple[object, ...]]:
    """Return the actual type arguments of a parameterized type.

    Parameters
    ----------
    tp
        A parameterized alias such as ``dict[str, int]``, or a class, in
        which case its first parameterized base (other than ``Generic`` or
        ``Protocol``) is inspected.

    Returns
    -------
    Option[tuple[object, ...]]
        Type arguments in declaration order, or ``NOTHING`` for ``None``, a
        non-parameterized type or zero arguments.
    """
    if tp is None:
        return NOTHING
    if get_origin(tp) is None:
        if isinstance(tp, type):
            return _parameterized_base(tp).flat_map(get_generic_types)
        return NOTHING
    type_args = get_args(tp)
    if not type_args:
        return NOTHING
    return Some(type_args)


def get_generic_type(tp: object, index: int | None = 0) -> Option[object]:
    """Return the type argument at ``index`` (first by default).

    Returns
    -------
    Option[object]
        Type argument, or ``NOTHING`` when missing or out of range.
    """
    return get_generic_types(tp).flat_map(lambda type_args: arrays.get(index, type_args))


def _parameterized_base(cls: type) -> Option[object]:
    for base in types.get_original_bases(cls):
        origin = get_origin(base)
        if origin is None or origin in _MARKER_ORIGINS:
            continue
        return Some(base)
    return NOTHING


@dataclass(frozen=True)
class Constructor[T]:
    """Constructor handle matched against a positional parameter signature.

    ``signature`` is ``None`` for classes whose call signature cannot be
    introspected (many builtins); such handles accept any arguments and fail
    at call time instead.
    """

    owner: type[T]
    parameter_types: tuple[type, ...]
    signature: inspect.Signature | None

    def new_instance(self, *arguments: object) -> T:
        """Invoke the constructor; exceptions propagate to the caller."""
        return self.owner(*arguments)


def get_constructor[T](cls: type[T] | None, *parameter_types: type) -> Option[Constructor[T]]:
    """Find a constructor of ``cls`` accepting ``parameter_types`` positionally.

    With no parameter types the no-argument constructor is requested. A type
    is accepted when it is a subclass of the parameter annotation (unions
    accept any member; unannotated parameters accept anything).

    Returns
    -------
    Option[Constructor[T]]
        Matching constructor, or ``NOTHING``.
    """
    if not isinstance(cls, type):
        return NOTHING
    if not all(isinstance(item, type) for item in parameter_types):
        return NOTHING
    signature = _call_signature(cls)
    if signature is not None and not _signature_accepts(signature, parameter_types):
        return NOTHING
    return Some(Constructor(owner=cls, parameter_types=tuple(parameter_types), signature=signature))


def new_instance[T](cls: type[T] | None, *arguments: object) -> Option[T]:
    """Instantiate ``cls`` with ``arguments``.

    The constructor is selected from the runtime types of the arguments.
    Missing constructors and exceptions raised while constructing both yield
    ``NOTHING``.

    Returns
    -------
    Option[T]
        New instance, or ``NOTHING``.
    """
    constructor = get_constructor(cls, *(type(argument) for argument in arguments))
    if constructor.is_empty():
        return NOTHING
    try:
        return Option.of(constructor.get().new_instance(*arguments))
    except Exception as exc:  # noqa: BLE001 - reflective failures become NOTHING
        _LOGGER.debug("Instantiation of %r failed: %s", cls, exc)
        return NOTHING


def find_class(name: str | None, loader: ResourceLoader | None = None) -> Option[type]:
    """Resolve a dotted class name through ``loader`` (default loader if None).

    Returns
    -------
    Option[type]
        Resolved class, or ``NOTHING`` when it cannot be loaded.
    """
    if name is None:
        return NOTHING
    try:
        return Some(resolve_loader(loader).load_class(name))
    except Exception as exc:  # noqa: BLE001 - reflective failures become NOTHING
        _LOGGER.debug("Class lookup for %r failed: %s", name, exc)
        return NOTHING


def _call_signature(cls: type) -> inspect.Signature | None:
    try:
        return inspect.signature(cls, eval_str=True)
    except (AttributeError, NameError, SyntaxError, TypeError, ValueError):
        pass
    # Unresolvable string annotations are kept as strings and accept anything.
    try:
        return inspect.signature(cls)
    except (TypeError, ValueError):
        return None


def _signature_accepts(signature: inspect.Signature, parameter_types: Sequence[type]) -> bool:
    try:
        signature.bind(*parameter_types)
    except TypeError:
        return False
    remaining = list(parameter_types)
    for parameter in signature.parameters.values():
        if not remaining:
            break
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            consumed, remaining = remaining, []
        elif parameter.kind in {
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        }:
            consumed, remaining = remaining[:1], remaining[1:]
        else:
            break
        if not all(_annotation_accepts(parameter.annotation, given) for given in consumed):
            return False
    return True


def _annotation_accepts(annotation: object, given: type) -> bool:
    if any(annotation is wildcard for wildcard in _WILDCARDS) or isinstance(annotation, str):
        return True
    if annotation is None or annotation is types.NoneType:
        return given is types.NoneType
    origin = get_origin(annotation)
    if origin in _UNION_ORIGINS:
        return any(_annotation_accepts(member, given) for member in get_args(annotation))
    if origin in _OPAQUE_ORIGINS:
        return True
    target = origin if origin is not None else annotation
    if not isinstance(target, type):
        return True
    try:
        return issubclass(given, target)
    except TypeError:
        return True


get_generic_types_raw = rawify(get_generic_types)
get_generic_type_raw = rawify(get_generic_type)
get_constructor_raw = rawify(get_constructor)
new_instance_raw = rawify(new_instance)
find_class_raw = rawify(find_class)


__all__ = [
    "Constructor",
    "find_class",
    "find_class_raw",
    "get_constructor",
    "get_constructor_raw",
    "get_generic_type",
    "get_generic_type_raw",
    "get_generic_types",
    "get_generic_types_raw",
    "new_instance",
    "new_instance_raw",
]
