"""Coarse kinds: the broad type categories used for shallow argument checks.

A kind says "this is an integer" or "this is a mapping", never "this is a
``dict[str, int]``". Values and annotations are both reduced to kinds so a
call can be checked before the arguments cross the process boundary.
"""

from __future__ import annotations

import collections.abc
import enum
import functools
import inspect
import types
import typing
from typing import Any


class Kind(enum.Enum):
    ANY = "any"
    NONE = "none"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    COMPLEX = "complex"
    STRING = "string"
    BYTES = "bytes"
    LIST = "list"
    TUPLE = "tuple"
    MAP = "map"
    SET = "set"
    FUNC = "func"
    STRUCT = "struct"

    def __str__(self) -> str:
        return self.value


ANY_KINDS = frozenset(Kind)

# Order matters: bool is a subclass of int.
_CLASS_KINDS: tuple[tuple[type | tuple[type, ...], Kind], ...] = (
    (bool, Kind.BOOL),
    (int, Kind.INT),
    (float, Kind.FLOAT),
    (complex, Kind.COMPLEX),
    (str, Kind.STRING),
    ((bytes, bytearray, memoryview), Kind.BYTES),
    (list, Kind.LIST),
    (tuple, Kind.TUPLE),
    (dict, Kind.MAP),
    ((set, frozenset), Kind.SET),
    (types.NoneType, Kind.NONE),
    (
        (
            type,
            types.FunctionType,
            types.BuiltinFunctionType,
            types.MethodType,
            functools.partial,
        ),
        Kind.FUNC,
    ),
)

# Annotations that accept more than the kind of the class itself.
_WIDENED: dict[Kind, frozenset[Kind]] = {
    Kind.FLOAT: frozenset({Kind.FLOAT, Kind.INT}),
    Kind.COMPLEX: frozenset({Kind.COMPLEX, Kind.FLOAT, Kind.INT}),
}

_ABSTRACT_KINDS: dict[Any, frozenset[Kind]] = {
    collections.abc.Mapping: frozenset({Kind.MAP}),
    collections.abc.MutableMapping: frozenset({Kind.MAP}),
    collections.abc.Sequence: frozenset({Kind.LIST, Kind.TUPLE, Kind.STRING, Kind.BYTES}),
    collections.abc.MutableSequence: frozenset({Kind.LIST}),
    collections.abc.Set: frozenset({Kind.SET}),
    collections.abc.MutableSet: frozenset({Kind.SET}),
    collections.abc.Callable: frozenset({Kind.FUNC}),
}


def kind_of_class(cls: type) -> Kind:
    """Return the coarse kind of instances of ``cls``."""
    for bases, kind in _CLASS_KINDS:
        if issubclass(cls, bases):
            return kind
    return Kind.STRUCT


def kind_of_value(value: Any) -> Kind:
    """Return the coarse kind of a runtime value."""
    if isinstance(value, type):
        return Kind.FUNC
    return kind_of_class(type(value))


def kinds_of_annotation(annotation: Any) -> frozenset[Kind]:
    """Return every value kind a parameter annotation accepts."""
    if annotation is inspect.Parameter.empty or annotation is Any or annotation is object:
        return ANY_KINDS
    if annotation is None or annotation is types.NoneType:
        return frozenset({Kind.NONE})
    if isinstance(annotation, str):
        # Forward reference that could not be resolved.
        return ANY_KINDS
    if isinstance(annotation, typing.TypeVar):
        if annotation.__constraints__:
            return _union(annotation.__constraints__)
        if annotation.__bound__ is not None:
            return kinds_of_annotation(annotation.__bound__)
        return ANY_KINDS
    if hasattr(annotation, "__supertype__"):
        return kinds_of_annotation(annotation.__supertype__)

    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        return _union(typing.get_args(annotation))
    if origin is typing.Annotated:
        return kinds_of_annotation(typing.get_args(annotation)[0])
    if origin is typing.Literal:
        return frozenset(kind_of_value(arg) for arg in typing.get_args(annotation))
    if origin is not None:
        annotation = origin

    if not isinstance(annotation, type):
        return ANY_KINDS
    if annotation in _ABSTRACT_KINDS:
        return _ABSTRACT_KINDS[annotation]
    if annotation.__module__ == "collections.abc" or getattr(annotation, "_is_protocol", False):
        return ANY_KINDS

    kind = kind_of_class(annotation)
    return _WIDENED.get(kind, frozenset({kind}))


def describe_kinds(kinds: frozenset[Kind]) -> str:
    """Render a kind set the way error messages show it, e.g. ``int|none``."""
    if kinds == ANY_KINDS:
        return str(Kind.ANY)
    return "|".join(str(kind) for kind in Kind if kind in kinds)


def _union(annotations: typing.Iterable[Any]) -> frozenset[Kind]:
    kinds: frozenset[Kind] = frozenset()
    for item in annotations:
        kinds |= kinds_of_annotation(item)
    return kinds
