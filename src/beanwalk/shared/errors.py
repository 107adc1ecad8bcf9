"""Where: src/beanwalk/shared/errors.py
What: Error taxonomy shared by every beanwalk feature.
Why: Give callers one base class plus the closest builtin for idiomatic handling.
"""

from __future__ import annotations

from typing import Any


class BeanwalkError(Exception):
    """Base class for all errors raised by beanwalk."""


def _type_name(owner: Any) -> str:
    if isinstance(owner, type):
        return owner.__qualname__
    return type(owner).__qualname__


class IntrospectionError(BeanwalkError, TypeError):
    """Raised when a type cannot be introspected or resolved."""

    def __init__(self, target: Any, reason: str) -> None:
        super().__init__(f"Cannot introspect {target!r}: {reason}")
        self.target: Any = target
        self.reason: str = reason


class PropertyNotFoundError(BeanwalkError, AttributeError):
    """Raised when a property is absent, or lacks the capability required."""

    def __init__(self, owner: Any, name: Any, capability: str = "writable") -> None:
        super().__init__(
            f"Type '{_type_name(owner)}' has no {capability} property '{name}'"
        )
        self.owner: type = owner if isinstance(owner, type) else type(owner)
        self.name: Any = name
        self.capability: str = capability


class CoercionError(BeanwalkError, ValueError):
    """Raised when text cannot be converted to the requested type."""

    def __init__(self, text: str, target_type: Any, reason: str) -> None:
        super().__init__(f"Cannot coerce {text!r} to {target_type!r}: {reason}")
        self.text: str = text
        self.target_type: Any = target_type
        self.reason: str = reason


class InvocationError(BeanwalkError, RuntimeError):
    """Raised when an accessor, mutator, method or constructor fails."""

    def __init__(self, owner: Any, member: str, cause: BaseException) -> None:
        super().__init__(
            f"Invoking '{_type_name(owner)}.{member}' failed: "
            f"{type(cause).__name__}: {cause}"
        )
        self.owner: type = owner if isinstance(owner, type) else type(owner)
        self.member: str = member


class MethodNotFoundError(BeanwalkError, LookupError):
    """Raised when no method candidate is compatible with the given arguments."""

    def __init__(self, owner: Any, name: str, args: tuple[Any, ...]) -> None:
        arg_types = ", ".join(type(arg).__name__ for arg in args)
        super().__init__(
            f"No method '{name}' on '{_type_name(owner)}' accepts ({arg_types})"
        )
        self.owner: type = owner if isinstance(owner, type) else type(owner)
        self.name: str = name
        self.args_: tuple[Any, ...] = args


class InvalidPathError(BeanwalkError, TypeError):
    """Raised for malformed paths, bad segments and unresolvable path steps."""

    def __init__(self, message: str, *, path: Any = None, segment: Any = None) -> None:
        super().__init__(message)
        self.path: Any = path
        self.segment: Any = segment


__all__ = [
    "BeanwalkError",
    "CoercionError",
    "IntrospectionError",
    "InvalidPathError",
    "InvocationError",
    "MethodNotFoundError",
    "PropertyNotFoundError",
]
