"""Where: src/beanwalk/features/introspection/usecases/bean_properties.py
What: Bulk property writes in strict and lenient (coercing) modes.
Why: Callers either demand every key be written, or want a best-effort fill from text input.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from beanwalk.features.coercion import coerce_if_text
from beanwalk.shared.errors import PropertyNotFoundError

from .descriptor_cache import describe


def set_properties(obj: Any, values: Mapping[str, Any]) -> None:
    """Write every entry of ``values`` to the same-named property of ``obj``.

    Values are written as given, without coercion. Entries are applied in
    mapping order; writes done before a failure stay applied.

    Raises:
        PropertyNotFoundError: If a key has no writable property on ``obj``.
        InvocationError: If a setter raises.
    """
    descriptor = describe(type(obj))
    for name, value in values.items():
        prop = descriptor.get(name) if isinstance(name, str) else None
        if prop is None or not prop.writable:
            raise PropertyNotFoundError(type(obj), name, "writable")
        prop.write(obj, value)


def set_properties_with_coercion(obj: Any, values: Mapping[str, Any]) -> None:
    """Best-effort write of ``values`` onto the writable properties of ``obj``.

    Iterates the writable properties of the type, not the input. Text values
    are coerced into known non-string declared types; keys without a matching
    writable property are ignored.

    Raises:
        CoercionError: If a text value cannot be converted.
        InvocationError: If a setter raises.
    """
    for prop in describe(type(obj)).writable():
        if prop.name not in values:
            continue
        prop.write(obj, coerce_if_text(values[prop.name], prop.declared_type))


__all__ = ["set_properties", "set_properties_with_coercion"]
