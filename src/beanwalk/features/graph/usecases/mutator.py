"""Where: src/beanwalk/features/graph/usecases/mutator.py
What: Apply a batch of path/value writes onto an object graph, creating intermediates.
Why: Flat request data such as ``persons[2].name`` must land in nested beans and lists.

Writes run in descending ``PropertyPath`` order (longest first, higher indices
first). Before any write, the largest index each container prefix needs
across the whole batch is computed, and lists/arrays are grown to that size
the first time they are reached, so results do not depend on input order.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any

from beanwalk.config import settings
from beanwalk.features.coercion import coerce_if_text
from beanwalk.features.introspection import describe
from beanwalk.features.path import PropertyPath, as_index
from beanwalk.platform.logging import logger
from beanwalk.shared.errors import InvalidPathError, InvocationError, PropertyNotFoundError
from beanwalk.shared.type_model import (
    Shape,
    array_item_type,
    element_hint,
    hint_class,
    key_hint,
    shape_of,
)

from .vivify import create_default, grow_array, grow_list


def as_property_path(path: PropertyPath | str) -> PropertyPath:
    """Accept a ``PropertyPath`` or its textual form."""

    if isinstance(path, PropertyPath):
        return path
    if isinstance(path, str):
        return PropertyPath.parse(path)
    raise InvalidPathError(f"Expected a PropertyPath or str, got {path!r}", path=path)


def required_sizes(paths: list[PropertyPath]) -> dict[PropertyPath, int]:
    """Return, per container prefix, the length needed by every index below it."""

    sizes: dict[PropertyPath, int] = {}
    for path in paths:
        for position, segment in enumerate(path):
            index = as_index(segment)
            if index is None or index < 0 or index > settings.MAX_INDEX:
                continue
            prefix = path[:position]
            sizes[prefix] = max(sizes.get(prefix, 0), index + 1)
    return sizes


def existing_key(mapping: Mapping[Any, Any], segment: Any) -> Any:
    """Return the key of ``mapping`` that ``segment`` addresses.

    ``[0]`` parses to the int ``0``, so an existing ``"0"`` key matches it, and
    an integer string matches an existing int key. Unmatched segments are
    returned unchanged.
    """

    if segment in mapping:
        return segment
    if not isinstance(segment, str):
        text = str(segment)
        return text if text in mapping else segment
    index = as_index(segment)
    if index is not None and index in mapping:
        return index
    return segment


def _known(declared: Any, value: Any) -> Any:
    """Prefer the declared hint, falling back to the runtime type of ``value``."""

    return declared if hint_class(declared) is not None else type(value)


class GraphWriter:
    """Resolve and write single paths against one root, honoring batch sizes."""

    def __init__(self, root: Any, sizes: Mapping[PropertyPath, int] | None = None) -> None:
        self._root: Any = root
        self._sizes: Mapping[PropertyPath, int] = sizes or {}

    def write(self, path: PropertyPath, value: Any) -> None:
        """Write ``value`` at ``path``, creating intermediates as needed."""

        if path.is_root:
            raise InvalidPathError("Cannot assign the root itself", path=path)

        base, hint = self._root, type(self._root)
        for depth in range(len(path) - 1):
            base, hint = self._step(base, hint, path, depth)
        self._assign(base, hint, path, value)

    def _index(self, path: PropertyPath, depth: int) -> int:
        segment = path[depth]
        index = as_index(segment)
        if index is None or index < 0:
            raise InvalidPathError(
                f"Segment {segment!r} of '{path}' is not a valid list index",
                path=path,
                segment=segment,
            )
        if index > settings.MAX_INDEX:
            raise InvalidPathError(
                f"Index {index} of '{path}' exceeds the maximum of {settings.MAX_INDEX}",
                path=path,
                segment=segment,
            )
        return index

    def _length(self, path: PropertyPath, depth: int, index: int) -> int:
        return max(self._sizes.get(path[:depth], 0), index + 1)

    def _grow(self, base: Any, hint: Any, path: PropertyPath, depth: int, index: int) -> None:
        length = self._length(path, depth, index)
        if shape_of(base) is Shape.ARRAY:
            added = grow_array(base, length)
        else:
            added = grow_list(base, length, element_hint(hint))
        if added:
            logger.debug(
                "Grew %s at '%s' to %d items",
                type(base).__qualname__,
                path[:depth],
                length,
                extra={
                    "graph_event": "graph.apply.vivify",
                    "owner": type(base).__qualname__,
                    "property_path": path[:depth],
                    "count": added,
                },
            )

    def _vivify(self, hint: Any, path: PropertyPath, depth: int) -> Any:
        """Create the missing value at ``path[:depth]`` able to hold ``path[depth]``."""

        try:
            created = create_default(hint, path[depth])
        except InvalidPathError as exc:
            raise InvalidPathError(
                f"Cannot traverse '{path}': '{path[:depth]}' is a leaf ({exc})",
                path=path,
                segment=path[depth],
            ) from exc
        logger.debug(
            "Vivified %s at '%s'",
            type(created).__qualname__,
            path[:depth],
            extra={
                "graph_event": "graph.apply.vivify",
                "owner": type(created).__qualname__,
                "property_path": path[:depth],
            },
        )
        return created

    def _key(self, base: Mapping[Any, Any], hint: Any, segment: Any) -> Any:
        declared = key_hint(hint)
        cls = hint_class(declared)
        if cls is None:
            return existing_key(base, segment)
        if issubclass(cls, str) and not isinstance(segment, str):
            return str(segment)
        return coerce_if_text(segment, declared)

    def _step(self, base: Any, hint: Any, path: PropertyPath, depth: int) -> tuple[Any, Any]:
        """Resolve ``path[depth]`` on ``base``, vivifying it when missing."""

        segment = path[depth]
        shape = shape_of(base)

        if shape is Shape.LIST:
            index = self._index(path, depth)
            self._grow(base, hint, path, depth, index)
            declared = element_hint(hint)
            child = base[index]
            if child is None:
                child = self._vivify(declared, path, depth + 1)
                base[index] = child
            return child, _known(declared, child)

        if shape is Shape.MAP:
            declared = element_hint(hint)
            key = self._key(base, hint, segment)
            child = base.get(key)
            if child is None:
                if not isinstance(base, MutableMapping):
                    raise PropertyNotFoundError(base, segment, "writable")
                child = self._vivify(declared, path, depth + 1)
                base[key] = child
            return child, _known(declared, child)

        if shape is Shape.BEAN:
            prop = describe(type(base)).require(segment, "readable")
            child = prop.read(base)
            if child is None:
                child = self._vivify(prop.declared_type, path, depth + 1)
                describe(type(base)).require(segment, "writable").write(base, child)
            return child, _known(prop.declared_type, child)

        raise InvalidPathError(
            f"Cannot traverse '{path}': '{path[:depth]}' holds a {shape.value} "
            f"of type {type(base).__qualname__}",
            path=path,
            segment=segment,
        )

    def _assign(self, base: Any, hint: Any, path: PropertyPath, value: Any) -> None:
        """Apply the last segment of ``path`` to ``base``."""

        depth = len(path) - 1
        segment = path[depth]
        shape = shape_of(base)

        if shape is Shape.LIST or shape is Shape.ARRAY:
            index = self._index(path, depth)
            self._grow(base, hint, path, depth, index)
            declared = array_item_type(base) if shape is Shape.ARRAY else element_hint(hint)
            item = coerce_if_text(value, declared)
            try:
                base[index] = item
            except (TypeError, OverflowError) as exc:
                raise InvocationError(base, f"[{index}]", exc) from exc
        elif shape is Shape.MAP:
            if not isinstance(base, MutableMapping):
                raise PropertyNotFoundError(base, segment, "writable")
            base[self._key(base, hint, segment)] = coerce_if_text(value, element_hint(hint))
        elif shape is Shape.BEAN:
            prop = describe(type(base)).require(segment, "writable")
            prop.write(base, coerce_if_text(value, prop.declared_type))
        else:
            raise InvalidPathError(
                f"Cannot assign '{path}': '{path.parent}' is a leaf of type "
                f"{type(base).__qualname__}",
                path=path,
                segment=segment,
            )

        logger.debug(
            "Wrote '%s'",
            path,
            extra={"graph_event": "graph.apply.write", "property_path": path},
        )


def apply_properties(root: Any, values: Mapping[PropertyPath | str, Any]) -> None:
    """Write every value of ``values`` at its path below ``root``.

    Keys may be ``PropertyPath`` instances or their textual form
    (``"persons[0].name"``). Missing lists, maps, arrays and beans on the
    way are created from the declared types; lists and arrays are grown as
    needed. Text values are coerced into known non-string declared types.

    Raises:
        PropertyNotFoundError: If a property on the way is not readable, or
            the final property (or an unset intermediate) is not writable.
        InvalidPathError: If a path is malformed, crosses a leaf, or uses an
            invalid or too large index.
        CoercionError: If text cannot be converted to the declared type.
        InvocationError: If a getter, setter or constructor raises.
    """
    batch = {as_property_path(key): value for key, value in values.items()}
    ordered = sorted(batch, reverse=True)
    writer = GraphWriter(root, required_sizes(ordered))

    for path in ordered:
        writer.write(path, batch[path])

    logger.debug(
        "Applied %d properties to %s",
        len(ordered),
        type(root).__qualname__,
        extra={
            "graph_event": "graph.apply.complete",
            "owner": type(root).__qualname__,
            "count": len(ordered),
        },
    )


__all__ = [
    "GraphWriter",
    "apply_properties",
    "as_property_path",
    "existing_key",
    "required_sizes",
]
