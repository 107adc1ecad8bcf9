"""Where: src/beanwalk/shared/identity.py
What: Mapping keyed by object identity instead of equality.
Why: Graph walks must tell apart equal but distinct instances, and handle unhashable ones.
"""

from __future__ import annotations

from collections.abc import Iterator, MutableMapping
from typing import Any, Generic, TypeVar, override

V = TypeVar("V")


class IdentityMap(MutableMapping[Any, V], Generic[V]):
    """Insertion-ordered mapping whose keys compare by ``id()``.

    Keys are held strongly so their ids stay valid for the map's lifetime.
    """

    def __init__(self) -> None:
        self._entries: dict[int, tuple[Any, V]] = {}

    @override
    def __getitem__(self, key: Any) -> V:
        try:
            return self._entries[id(key)][1]
        except KeyError:
            raise KeyError(key) from None

    @override
    def __setitem__(self, key: Any, value: V) -> None:
        self._entries[id(key)] = (key, value)

    @override
    def __delitem__(self, key: Any) -> None:
        try:
            del self._entries[id(key)]
        except KeyError:
            raise KeyError(key) from None

    @override
    def __contains__(self, key: object) -> bool:
        return id(key) in self._entries

    @override
    def __iter__(self) -> Iterator[Any]:
        return (key for key, _ in self._entries.values())

    @override
    def __len__(self) -> int:
        return len(self._entries)

    @override
    def __repr__(self) -> str:
        body = ", ".join(
            f"<{type(key).__name__}@{id(key):#x}>: {value!r}"
            for key, value in self._entries.values()
        )
        return f"{type(self).__name__}({{{body}}})"


__all__ = ["IdentityMap"]
