"""Where: src/beanwalk/features/methods/usecases/instances.py
What: Resolve classes by dotted name and create instances through no-arg constructors.
Why: Auto-vivification and configuration-driven glue both need default instances.
"""

from __future__ import annotations

import importlib
from typing import Any

from beanwalk.shared.errors import BeanwalkError, IntrospectionError, InvocationError


def _lookup(module_name: str, attribute_path: str, class_name: str) -> Any:
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None
    obj: Any = module
    for part in attribute_path.split("."):
        obj = getattr(obj, part, None)
        if obj is None:
            raise IntrospectionError(class_name, f"'{module_name}' has no attribute '{attribute_path}'")
    return obj


def to_class(class_name: str) -> type:
    """Return the class named ``class_name``.

    Accepts ``package.module.ClassName``, nested ``package.module.Outer.Inner``
    and the explicit ``package.module:Outer.Inner`` form. Without a colon the
    longest importable module prefix is tried first.

    Raises:
        IntrospectionError: If no module or class matches, or the target is not a class.
    """
    if ":" in class_name:
        module_name, _, attribute_path = class_name.partition(":")
        candidates = [(module_name, attribute_path)]
    else:
        parts = class_name.split(".")
        candidates = [
            (".".join(parts[:index]), ".".join(parts[index:]))
            for index in range(len(parts) - 1, 0, -1)
        ]

    for module_name, attribute_path in candidates:
        if not module_name or not attribute_path:
            continue
        obj = _lookup(module_name, attribute_path, class_name)
        if obj is None:
            continue
        if not isinstance(obj, type):
            raise IntrospectionError(class_name, "not a class")
        return obj

    raise IntrospectionError(class_name, "class not found")


def instance(cls: type | str) -> Any:
    """Create an instance of ``cls`` (a class or a dotted class name) with no arguments.

    Raises:
        IntrospectionError: If a class name cannot be resolved.
        InvocationError: If the constructor raises.
    """
    target = to_class(cls) if isinstance(cls, str) else cls
    try:
        return target()
    except BeanwalkError:
        raise
    except Exception as exc:
        raise InvocationError(target, "__init__", exc) from exc


__all__ = ["instance", "to_class"]
