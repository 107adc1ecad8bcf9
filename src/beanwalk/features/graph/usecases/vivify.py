"""Where: src/beanwalk/features/graph/usecases/vivify.py
What: Create default containers and beans, and grow lists and arrays in place.
Why: Deep writes must be able to materialize every missing intermediate.
"""

from __future__ import annotations

import inspect
from array import array, typecodes
from collections.abc import MutableSequence
from typing import Any

from beanwalk.config import settings
from beanwalk.features.methods import instance
from beanwalk.shared.errors import InvalidPathError
from beanwalk.shared.type_model import (
    Shape,
    annotated_metadata,
    array_item_type,
    hint_class,
    needs_recursion,
    shape_of_hint,
)


def array_typecode(hint: Any) -> str:
    """Return the typecode from ``Annotated[array, "<code>"]``, else the configured default."""

    for meta in annotated_metadata(hint):
        if isinstance(meta, str) and meta in typecodes:
            return meta
    return settings.ARRAY_TYPECODE


def _concrete(cls: type | None, fallback: type) -> type:
    if cls is None or inspect.isabstract(cls) or cls.__module__ == "collections.abc":
        return fallback
    return cls


def create_default(hint: Any, following: Any) -> Any:
    """Create an empty value of ``hint`` able to hold the ``following`` segment.

    Unknown hints produce a list when ``following`` is an int, else a dict.

    Raises:
        InvalidPathError: If ``hint`` is a leaf type.
        InvocationError: If a bean constructor raises.
    """
    shape = shape_of_hint(hint)
    if shape is None:
        shape = Shape.LIST if isinstance(following, int) and not isinstance(following, bool) else Shape.MAP

    cls = hint_class(hint)
    if shape is Shape.LIST:
        return _concrete(cls, list)()
    if shape is Shape.MAP:
        return _concrete(cls, dict)()
    if shape is Shape.ARRAY:
        return array(array_typecode(hint))
    if shape is Shape.BEAN and cls is not None:
        return instance(cls)
    raise InvalidPathError(
        f"Cannot create a container for leaf type {hint!r}", segment=following
    )


def grow_list(values: MutableSequence[Any], length: int, element_type: Any) -> int:
    """Append default elements until ``values`` has ``length`` items.

    New slots hold a fresh instance of ``element_type`` when it is a bean
    type, otherwise ``None``.

    Returns:
        int: Number of slots added.
    """
    added = 0
    fill_beans = needs_recursion(element_type)
    while len(values) < length:
        values.append(instance(hint_class(element_type)) if fill_beans else None)
        added += 1
    return added


def grow_array(values: array, length: int) -> int:
    """Extend ``values`` with zero items until it has ``length`` items."""

    missing = length - len(values)
    if missing <= 0:
        return 0
    zero: Any = "\0" if array_item_type(values) is str else array_item_type(values)()
    values.extend([zero] * missing)
    return missing


__all__ = ["array_typecode", "create_default", "grow_array", "grow_list"]
