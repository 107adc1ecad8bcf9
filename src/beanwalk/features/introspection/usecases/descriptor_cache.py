"""Where: src/beanwalk/features/introspection/usecases/descriptor_cache.py
What: Discover and memoize the property capabilities of classes.
Why: Introspection is costly and its result never changes for a given class.
"""

from __future__ import annotations

import inspect
import threading
import typing
from collections.abc import Callable
from dataclasses import InitVar
from functools import cached_property
from typing import Any, ClassVar, Final, get_origin

from beanwalk.features.introspection.domain.descriptor import (
    Descriptor,
    Getter,
    PropertyDescriptor,
    Setter,
)
from beanwalk.platform.logging import logger
from beanwalk.shared.errors import IntrospectionError

_IGNORED_SLOTS: Final[frozenset[str]] = frozenset({"__dict__", "__weakref__"})


def _attribute_getter(name: str) -> Getter:
    # Annotated but never assigned attributes read as None.
    return lambda obj: getattr(obj, name, None)


def _attribute_setter(name: str) -> Setter:
    return lambda obj, value: setattr(obj, name, value)


def _cached_setter(name: str) -> Setter:
    def setter(obj: Any, value: Any) -> None:
        obj.__dict__[name] = value

    return setter


def _function_hints(cls: type, func: Callable[..., Any]) -> dict[str, Any]:
    if not hasattr(func, "__annotations__"):
        return {}
    try:
        return typing.get_type_hints(func, include_extras=True)
    except Exception as exc:
        raise IntrospectionError(
            cls, f"unresolvable annotations on '{func.__qualname__}' ({exc})"
        ) from exc


def _property_type(cls: type, member: property) -> Any:
    """Return a property's declared type from its getter, else its setter."""

    if member.fget is not None:
        declared = _function_hints(cls, member.fget).get("return")
        if declared is not None:
            return declared
    if member.fset is not None:
        hints = _function_hints(cls, member.fset)
        params = list(inspect.signature(member.fset).parameters)
        if len(params) >= 2:
            return hints.get(params[1])
    return None


def _slot_names(klass: type) -> tuple[str, ...]:
    slots = vars(klass).get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    return tuple(name for name in slots if name not in _IGNORED_SLOTS)


def introspect(cls: type) -> Descriptor:
    """Build the descriptor of ``cls`` without consulting any cache.

    Sources, from base class to most derived so that derived definitions win:
    ``property`` and ``cached_property`` members, annotated attributes
    (excluding ``ClassVar``), and unannotated ``__slots__`` entries. Names
    starting with an underscore are never exposed.

    Raises:
        IntrospectionError: If ``cls`` is not a class or its annotations
            cannot be resolved.
    """
    if not isinstance(cls, type):
        raise IntrospectionError(cls, "not a class")

    try:
        hints = typing.get_type_hints(cls, include_extras=True)
    except Exception as exc:
        raise IntrospectionError(cls, f"unresolvable annotations ({exc})") from exc

    params = getattr(cls, "__dataclass_params__", None)
    frozen = bool(params is not None and params.frozen)

    found: dict[str, PropertyDescriptor] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue

        for name in _slot_names(klass):
            if not name.startswith("_"):
                found[name] = PropertyDescriptor(
                    cls, name, hints.get(name), _attribute_getter(name), _attribute_setter(name)
                )

        for name in inspect.get_annotations(klass):
            declared = hints.get(name)
            if name.startswith("_") or isinstance(declared, InitVar):
                continue
            if declared is ClassVar or get_origin(declared) is ClassVar:
                continue
            setter = None if frozen else _attribute_setter(name)
            found[name] = PropertyDescriptor(cls, name, declared, _attribute_getter(name), setter)

        for name, member in vars(klass).items():
            if name.startswith("_"):
                continue
            if isinstance(member, property):
                found[name] = PropertyDescriptor(
                    cls, name, _property_type(cls, member), member.fget, member.fset
                )
            elif isinstance(member, cached_property):
                declared = _function_hints(cls, member.func).get("return")
                found[name] = PropertyDescriptor(
                    cls, name, declared, member.__get__, _cached_setter(name), lazy=True
                )

    return Descriptor(cls, found)


class DescriptorCache:
    """Process-wide memo of ``Descriptor`` instances keyed by class."""

    def __init__(self, factory: Callable[[type], Descriptor] = introspect) -> None:
        self._factory: Callable[[type], Descriptor] = factory
        self._descriptors: dict[type, Descriptor] = {}
        self._lock: Final[threading.Lock] = threading.Lock()

    def describe(self, cls: type) -> Descriptor:
        """Return the cached descriptor of ``cls``, introspecting on first use."""

        if not isinstance(cls, type):
            raise IntrospectionError(cls, "not a class")

        descriptor = self._descriptors.get(cls)
        if descriptor is not None:
            return descriptor

        with self._lock:
            descriptor = self._descriptors.get(cls)
            if descriptor is None:
                descriptor = self._factory(cls)
                self._descriptors[cls] = descriptor
                logger.debug(
                    "Described %s with %d properties",
                    cls.__qualname__,
                    len(descriptor),
                    extra={
                        "graph_event": "introspection.describe",
                        "owner": cls.__qualname__,
                        "count": len(descriptor),
                    },
                )
        return descriptor

    def clear(self) -> None:
        with self._lock:
            self._descriptors.clear()

    def __contains__(self, cls: object) -> bool:
        return cls in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)


_DEFAULT_CACHE: Final[DescriptorCache] = DescriptorCache()


def describe(cls: type) -> Descriptor:
    """Return the shared, memoized descriptor of ``cls``."""
    return _DEFAULT_CACHE.describe(cls)


def clear_cache() -> None:
    """Drop every memoized descriptor."""
    _DEFAULT_CACHE.clear()


def default_cache() -> DescriptorCache:
    return _DEFAULT_CACHE


__all__ = [
    "DescriptorCache",
    "clear_cache",
    "default_cache",
    "describe",
    "introspect",
]
