"""Where: src/beanwalk/features/graph/usecases/walker.py
What: Enumerate every base object reachable from a root with its first discovered path.
Why: Callers map graph locations (e.g. validation targets) back to symbolic paths.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator
from typing import Any

from beanwalk.features.introspection import PropertyDescriptor, describe
from beanwalk.features.path import PropertyPath
from beanwalk.platform.logging import logger
from beanwalk.shared.identity import IdentityMap
from beanwalk.shared.type_model import Shape, is_leaf, is_scalar, shape_of

TraversalPredicate = Callable[[type, PropertyDescriptor], bool]


def traverse_all(_owner: type, _prop: PropertyDescriptor) -> bool:
    return True


def _children(
    base: Any, path: PropertyPath, predicate: TraversalPredicate
) -> Iterator[tuple[Any, PropertyPath]]:
    """Yield the non-leaf children of ``base`` with their paths."""

    shape = shape_of(base)
    if shape is Shape.LIST or shape is Shape.ARRAY:
        for index, element in enumerate(base):
            if not is_leaf(element):
                yield element, path.with_index(index)
    elif shape is Shape.MAP:
        for key, value in base.items():
            if is_scalar(key) and not is_leaf(value):
                yield value, path.with_index(key)
    elif shape is Shape.BEAN:
        owner = type(base)
        for prop in describe(owner).readable():
            if not predicate(owner, prop):
                continue
            value = prop.peek(base)
            if not is_leaf(value):
                yield value, path.with_segment(prop.name)


def collect_base_paths(
    root: Any, predicate: TraversalPredicate | None = None
) -> IdentityMap[PropertyPath]:
    """Map every reachable base object to the first path that reaches it.

    The traversal is depth-first preorder, children in declaration order,
    driven by an explicit stack so graph depth is not limited by recursion.
    Objects are compared by identity, which makes cyclic graphs safe. The
    root is always present at the empty path, even when it is a leaf.
    Cached properties are only followed once computed; the walk never
    triggers them.

    Args:
        root: Object to start from.
        predicate: Decides per bean property whether it may be traversed;
            every readable property is traversed when omitted.

    Returns:
        IdentityMap[PropertyPath]: Base objects in discovery order.

    Raises:
        InvocationError: If a property getter raises.
        IntrospectionError: If a bean type cannot be introspected.
    """
    accept = predicate if predicate is not None else traverse_all
    found: IdentityMap[PropertyPath] = IdentityMap()
    stack: list[tuple[Any, PropertyPath]] = [(root, PropertyPath.ROOT)]
    started = time.perf_counter()

    while stack:
        base, path = stack.pop()
        if base in found:
            continue
        found[base] = path
        stack.extend(reversed(list(_children(base, path, accept))))

    logger.debug(
        "Collected %d base objects from %s",
        len(found),
        type(root).__qualname__,
        extra={
            "graph_event": "graph.walk.complete",
            "owner": type(root).__qualname__,
            "count": len(found),
            "duration_ms": (time.perf_counter() - started) * 1000,
        },
    )
    return found


__all__ = ["TraversalPredicate", "collect_base_paths", "traverse_all"]
