"""Where: src/beanwalk/features/graph/usecases/accessor.py
What: Read the value stored at a property path.
Why: Counterpart of the mutator for glue code and round-trip checks.
"""

from __future__ import annotations

from typing import Any

from beanwalk.features.introspection import describe
from beanwalk.features.path import PropertyPath, as_index
from beanwalk.shared.errors import InvalidPathError, PropertyNotFoundError
from beanwalk.shared.type_model import Shape, shape_of

from .mutator import as_property_path, existing_key


def _read_item(base: Any, path: PropertyPath, depth: int) -> Any:
    segment = path[depth]
    shape = shape_of(base)

    if shape is Shape.LIST or shape is Shape.ARRAY:
        index = as_index(segment)
        if index is None or index < 0:
            raise InvalidPathError(
                f"Segment {segment!r} of '{path}' is not a valid list index",
                path=path,
                segment=segment,
            )
        if index >= len(base):
            raise PropertyNotFoundError(base, segment, "readable")
        return base[index]

    if shape is Shape.MAP:
        key = existing_key(base, segment)
        if key not in base:
            raise PropertyNotFoundError(base, segment, "readable")
        return base[key]

    if shape is Shape.BEAN:
        return describe(type(base)).require(segment, "readable").read(base)

    raise InvalidPathError(
        f"Cannot read '{path}': '{path[:depth]}' is a leaf of type {type(base).__qualname__}",
        path=path,
        segment=segment,
    )


def get_property(root: Any, path: PropertyPath | str) -> Any:
    """Return the value at ``path`` below ``root``; the empty path returns ``root``.

    Raises:
        PropertyNotFoundError: If a property, index or key along the path is missing.
        InvalidPathError: If the path is malformed or crosses a leaf.
        InvocationError: If a getter raises.
    """
    resolved = as_property_path(path)
    current = root
    for depth in range(len(resolved)):
        current = _read_item(current, resolved, depth)
    return current


__all__ = ["get_property"]
