"""
Summary: Per-type table of named read/write property capabilities.
Why: Walker and mutator consult one immutable capability record per class.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, final, override

from beanwalk.shared.errors import BeanwalkError, InvocationError, PropertyNotFoundError

Getter = Callable[[Any], Any]
Setter = Callable[[Any, Any], None]


@dataclass(frozen=True, slots=True)
class PropertyDescriptor:
    """Capability triple for one named property of ``owner``."""

    owner: type
    name: str
    declared_type: Any = None
    getter: Getter | None = field(default=None, repr=False, compare=False)
    setter: Setter | None = field(default=None, repr=False, compare=False)
    lazy: bool = field(default=False, compare=False)

    @property
    def readable(self) -> bool:
        return self.getter is not None

    @property
    def writable(self) -> bool:
        return self.setter is not None

    def read(self, obj: Any) -> Any:
        """Read the property from ``obj``.

        Raises:
            PropertyNotFoundError: If the property has no read capability.
            InvocationError: If the getter raises.
        """
        if self.getter is None:
            raise PropertyNotFoundError(self.owner, self.name, "readable")
        try:
            return self.getter(obj)
        except BeanwalkError:
            raise
        except Exception as exc:
            raise InvocationError(self.owner, self.name, exc) from exc

    def peek(self, obj: Any) -> Any:
        """Read without side effects: a lazy value not yet computed reads as None."""
        if self.lazy:
            return getattr(obj, "__dict__", {}).get(self.name)
        return self.read(obj)

    def write(self, obj: Any, value: Any) -> None:
        """Write ``value`` to the property of ``obj``.

        Raises:
            PropertyNotFoundError: If the property has no write capability.
            InvocationError: If the setter raises.
        """
        if self.setter is None:
            raise PropertyNotFoundError(self.owner, self.name, "writable")
        try:
            self.setter(obj, value)
        except BeanwalkError:
            raise
        except Exception as exc:
            raise InvocationError(self.owner, self.name, exc) from exc


@final
class Descriptor(Mapping[str, PropertyDescriptor]):
    """Immutable mapping of property name to ``PropertyDescriptor`` for one type."""

    __slots__ = ("_owner", "_properties")

    def __init__(self, owner: type, properties: Mapping[str, PropertyDescriptor]) -> None:
        self._owner: type = owner
        self._properties: Mapping[str, PropertyDescriptor] = MappingProxyType(dict(properties))

    @property
    def owner(self) -> type:
        return self._owner

    def readable(self) -> tuple[PropertyDescriptor, ...]:
        """Properties with a read capability, in discovery order."""
        return tuple(prop for prop in self._properties.values() if prop.readable)

    def writable(self) -> tuple[PropertyDescriptor, ...]:
        """Properties with a write capability, in discovery order."""
        return tuple(prop for prop in self._properties.values() if prop.writable)

    def require(self, name: Any, capability: str = "writable") -> PropertyDescriptor:
        """Return the property ``name`` if it offers ``capability``.

        Raises:
            PropertyNotFoundError: If absent or lacking the capability.
        """
        prop = self._properties.get(name) if isinstance(name, str) else None
        if prop is None:
            raise PropertyNotFoundError(self._owner, name, capability)
        if capability == "readable" and not prop.readable:
            raise PropertyNotFoundError(self._owner, name, capability)
        if capability == "writable" and not prop.writable:
            raise PropertyNotFoundError(self._owner, name, capability)
        return prop

    @override
    def __getitem__(self, name: str) -> PropertyDescriptor:
        return self._properties[name]

    @override
    def __iter__(self) -> Iterator[str]:
        return iter(self._properties)

    @override
    def __len__(self) -> int:
        return len(self._properties)

    @override
    def __repr__(self) -> str:
        return f"Descriptor({self._owner.__qualname__}, {list(self._properties)})"


__all__ = ["Descriptor", "Getter", "PropertyDescriptor", "Setter"]
