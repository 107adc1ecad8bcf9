"""Where: src/beanwalk/features/methods/usecases/resolver.py
What: Pick a method "overload" from runtime argument values and invoke it.
Why: Glue code only knows argument values, never the declared parameter types.

Python has no native overloading, so overloads are plain methods tagged with
``@overload_of(name)`` (or methods literally named ``name`` anywhere in the
MRO). Resolution is deliberately first-compatible-wins in discovery order,
not most-specific: given ``foo(Number)`` declared before ``foo(int)``, an int
argument selects the ``Number`` variant.
"""

from __future__ import annotations

import inspect
import typing
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from types import UnionType
from typing import Any, Final, Literal, TypeVar, Union, get_args, get_origin

from beanwalk.platform.logging import logger
from beanwalk.shared.errors import (
    BeanwalkError,
    IntrospectionError,
    InvocationError,
    MethodNotFoundError,
)
from beanwalk.shared.type_model import admits_none, hint_class, unwrap_hint

F = TypeVar("F", bound=Callable[..., Any])

OVERLOAD_ATTRIBUTE: Final[str] = "__beanwalk_overload_of__"

# Parameter types that never accept None unless the hint says so explicitly.
PRIMITIVE_TYPES: Final[frozenset[type]] = frozenset({bool, int, float, complex})

# Numeric tower: int passes for float, int and float pass for complex.
_WIDENED: Final[dict[type, tuple[type, ...]]] = {
    float: (int, float),
    complex: (int, float, complex),
}

_POSITIONAL_KINDS: Final[tuple[Any, ...]] = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def overload_of(name: str) -> Callable[[F], F]:
    """Tag a method as an overload of ``name`` for ``find_method``."""

    def decorator(func: F) -> F:
        setattr(func, OVERLOAD_ATTRIBUTE, name)
        return func

    return decorator


@dataclass(frozen=True, slots=True)
class _Candidate:
    function: Callable[..., Any]
    parameter_types: tuple[Any, ...]
    rest_type: Any

    def types_for(self, arity: int) -> tuple[Any, ...]:
        if arity <= len(self.parameter_types):
            return self.parameter_types[:arity]
        return (*self.parameter_types, *([self.rest_type] * (arity - len(self.parameter_types))))


def _candidate(owner: type, func: Callable[..., Any], arity: int) -> _Candidate | None:
    """Describe ``func`` if it can take ``arity`` positional arguments after self."""

    try:
        hints = typing.get_type_hints(func, include_extras=True)
    except Exception as exc:
        raise IntrospectionError(owner, f"unresolvable annotations on '{func.__qualname__}' ({exc})") from exc

    params = list(inspect.signature(func).parameters.values())[1:]
    positional = [p for p in params if p.kind in _POSITIONAL_KINDS]
    variadic = next((p for p in params if p.kind is inspect.Parameter.VAR_POSITIONAL), None)
    keyword_required = any(
        p.kind is inspect.Parameter.KEYWORD_ONLY and p.default is inspect.Parameter.empty
        for p in params
    )
    required = sum(1 for p in positional if p.default is inspect.Parameter.empty)

    if keyword_required or arity < required:
        return None
    if arity > len(positional) and variadic is None:
        return None

    return _Candidate(
        function=func,
        parameter_types=tuple(hints.get(p.name, Any) for p in positional),
        rest_type=hints.get(variadic.name, Any) if variadic is not None else Any,
    )


def candidates(cls: type, name: str, arity: int) -> list[_Candidate]:
    """Collect overload candidates of ``name`` for ``arity`` arguments.

    Classes are scanned most-derived first and each class body in declaration
    order. A signature already collected from a subclass hides the same
    signature further up the MRO.
    """
    found: list[_Candidate] = []
    seen: set[tuple[str, ...]] = set()
    for klass in cls.__mro__:
        for attr, member in vars(klass).items():
            if not inspect.isfunction(member):
                continue
            if attr != name and getattr(member, OVERLOAD_ATTRIBUTE, None) != name:
                continue
            candidate = _candidate(cls, member, arity)
            if candidate is None:
                continue
            signature = tuple(repr(hint) for hint in candidate.types_for(arity))
            if signature in seen:
                continue
            seen.add(signature)
            found.append(candidate)
    return found


def is_compatible(arg: Any, hint: Any) -> bool:
    """Return whether ``arg`` may be passed for a parameter annotated ``hint``."""

    if hint is Any or hint is object:
        return True
    if arg is None:
        if admits_none(hint):
            return True
        return hint_class(hint) not in PRIMITIVE_TYPES

    hint = unwrap_hint(hint)
    origin = get_origin(hint)
    if origin is Union or origin is UnionType:
        return any(is_compatible(arg, member) for member in get_args(hint))
    if origin is Literal:
        return arg in get_args(hint)
    if isinstance(hint, TypeVar):
        return hint.__bound__ is None or is_compatible(arg, hint.__bound__)

    cls = origin if origin is not None else hint
    if not isinstance(cls, type):
        return True
    # bool subclasses int but is not accepted as a number.
    if isinstance(arg, bool) and cls in (int, float, complex):
        return False
    widened = _WIDENED.get(cls)
    if widened is not None:
        return isinstance(arg, widened)
    try:
        return isinstance(arg, cls)
    except TypeError:
        # Non runtime-checkable protocols cannot be tested.
        return True


def find_method(instance: Any, name: str, args: Sequence[Any]) -> Callable[..., Any] | None:
    """Find the method ``name`` of ``instance`` best matching ``args``.

    A single candidate of the right arity is returned unchecked. With several,
    the first whose parameters are all compatible with ``args`` wins.

    Returns:
        The matching function (unbound), or ``None`` when nothing matches.
    """
    args = tuple(args)
    found = candidates(type(instance), name, len(args))
    if len(found) == 1:
        return found[0].function

    for candidate in found:
        if all(is_compatible(arg, hint) for arg, hint in zip(args, candidate.types_for(len(args)))):
            return candidate.function

    logger.debug(
        "No overload of %s.%s accepts %d argument(s)",
        type(instance).__qualname__,
        name,
        len(args),
        extra={
            "graph_event": "methods.resolve.miss",
            "owner": f"{type(instance).__qualname__}.{name}",
            "count": len(found),
        },
    )
    return None


def invoke(instance: Any, method: Callable[..., Any], args: Iterable[Any] = ()) -> Any:
    """Call ``method`` on ``instance`` with ``args``.

    Raises:
        InvocationError: If the method raises; the original error is the cause.
    """
    try:
        if inspect.ismethod(method):
            return method(*args)
        return method(instance, *args)
    except BeanwalkError:
        raise
    except Exception as exc:
        raise InvocationError(instance, getattr(method, "__name__", repr(method)), exc) from exc


def invoke_method(instance: Any, name: str, *args: Any) -> Any:
    """Resolve ``name`` against ``args`` and invoke it on ``instance``.

    Raises:
        MethodNotFoundError: If no candidate matches.
        InvocationError: If the method raises.
    """
    method = find_method(instance, name, args)
    if method is None:
        raise MethodNotFoundError(instance, name, args)
    return invoke(instance, method, args)


__all__ = [
    "OVERLOAD_ATTRIBUTE",
    "PRIMITIVE_TYPES",
    "candidates",
    "find_method",
    "invoke",
    "invoke_method",
    "is_compatible",
    "overload_of",
]
