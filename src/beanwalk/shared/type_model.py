"""Where: src/beanwalk/shared/type_model.py
What: Classify runtime values and type hints into leaves, lists, maps, arrays and beans.
Why: Walker, mutator and resolver must agree on what counts as structure.
"""

from __future__ import annotations

import types
from array import array
from collections.abc import Iterable, Mapping, MutableSequence, Sequence
from datetime import date, time, timedelta
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from pathlib import PurePath
from typing import Annotated, Any, Final, TypeVar, Union, get_args, get_origin
from uuid import UUID


class Shape(Enum):
    """Structural shape of a value or declared type."""

    LEAF = "leaf"
    LIST = "list"
    MAP = "map"
    ARRAY = "array"
    BEAN = "bean"


# Values usable as path segments and walkable map keys.
SCALAR_TYPES: Final[tuple[type, ...]] = (
    str,
    int,
    float,
    Decimal,
    Fraction,
    Enum,
    date,
    time,
    timedelta,
    UUID,
)

LEAF_TYPES: Final[tuple[type, ...]] = (
    *SCALAR_TYPES,
    complex,
    bytes,
    bytearray,
    memoryview,
    PurePath,
    type,
    types.ModuleType,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
)

_NON_LIST_SEQUENCES: Final[tuple[type, ...]] = (
    str,
    bytes,
    bytearray,
    memoryview,
    tuple,
    range,
)

_UNION_ORIGINS: Final[tuple[Any, ...]] = (Union, types.UnionType)


def is_scalar(value: Any) -> bool:
    """Return whether ``value`` is a stable scalar usable as a segment or key."""

    return value is not None and isinstance(value, SCALAR_TYPES)


def shape_of(value: Any) -> Shape:
    """Classify a runtime value."""

    if value is None or isinstance(value, LEAF_TYPES):
        return Shape.LEAF
    if isinstance(value, array):
        return Shape.ARRAY
    if isinstance(value, MutableSequence):
        return Shape.LIST
    if isinstance(value, Mapping):
        return Shape.MAP
    if isinstance(value, Iterable):
        return Shape.LEAF
    return Shape.BEAN


def is_leaf(value: Any) -> bool:
    """Return whether ``value`` is never recursed into."""

    return shape_of(value) is Shape.LEAF


def annotated_metadata(hint: Any) -> tuple[Any, ...]:
    """Return the ``Annotated`` metadata of ``hint``, looking through ``Optional``."""

    if get_origin(hint) in _UNION_ORIGINS:
        members = [arg for arg in get_args(hint) if arg is not type(None)]
        if len(members) == 1:
            return annotated_metadata(members[0])
    if get_origin(hint) is Annotated:
        return tuple(hint.__metadata__)
    return ()


def unwrap_hint(hint: Any) -> Any:
    """Strip ``Annotated`` wrappers and ``Optional`` from a type hint.

    Unions of several non-None members are returned unchanged.
    """

    while True:
        origin = get_origin(hint)
        if origin is Annotated:
            hint = hint.__origin__
            continue
        if origin in _UNION_ORIGINS:
            members = [arg for arg in get_args(hint) if arg is not type(None)]
            if len(members) == 1:
                hint = members[0]
                continue
        return hint


def admits_none(hint: Any) -> bool:
    """Return whether ``hint`` explicitly lists ``None`` as an accepted value."""

    if hint is None or hint is type(None):
        return True
    origin = get_origin(hint)
    if origin is Annotated:
        return admits_none(hint.__origin__)
    if origin in _UNION_ORIGINS:
        return any(admits_none(arg) for arg in get_args(hint))
    return False


def hint_class(hint: Any) -> type | None:
    """Return the runtime class behind a hint, or ``None`` when unknown."""

    hint = unwrap_hint(hint)
    if hint is None or hint is Any or hint is object or isinstance(hint, TypeVar):
        return None
    origin = get_origin(hint)
    candidate = origin if origin is not None else hint
    return candidate if isinstance(candidate, type) else None


def shape_of_hint(hint: Any) -> Shape | None:
    """Classify a declared type, returning ``None`` when it is unknown."""

    cls = hint_class(hint)
    if cls is None:
        return None
    if issubclass(cls, array):
        return Shape.ARRAY
    if issubclass(cls, LEAF_TYPES):
        return Shape.LEAF
    if issubclass(cls, Sequence) and not issubclass(cls, _NON_LIST_SEQUENCES):
        return Shape.LIST
    if issubclass(cls, Mapping):
        return Shape.MAP
    if issubclass(cls, Iterable):
        return Shape.LEAF
    return Shape.BEAN


def needs_recursion(hint: Any) -> bool:
    """Return whether values of ``hint`` are beans worth pre-instantiating."""

    return shape_of_hint(hint) is Shape.BEAN


def element_hint(hint: Any) -> Any:
    """Return the declared element (list) or value (map) type of a container hint."""

    args = get_args(unwrap_hint(hint))
    shape = shape_of_hint(hint)
    if shape is Shape.LIST and len(args) == 1:
        return args[0]
    if shape is Shape.MAP and len(args) == 2:
        return args[1]
    return None


def key_hint(hint: Any) -> Any:
    """Return the declared key type of a map hint, or ``None``."""

    args = get_args(unwrap_hint(hint))
    if shape_of_hint(hint) is Shape.MAP and len(args) == 2:
        return args[0]
    return None


def array_item_type(values: array) -> type:
    """Return the Python type stored by an ``array.array``."""

    if values.typecode in ("f", "d"):
        return float
    if values.typecode in ("u", "w"):
        return str
    return int


__all__ = [
    "LEAF_TYPES",
    "SCALAR_TYPES",
    "Shape",
    "admits_none",
    "annotated_metadata",
    "array_item_type",
    "element_hint",
    "hint_class",
    "is_leaf",
    "is_scalar",
    "key_hint",
    "needs_recursion",
    "shape_of",
    "shape_of_hint",
    "unwrap_hint",
]
