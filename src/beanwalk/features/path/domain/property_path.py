"""
Summary: Immutable, ordered, comparable property paths into object graphs.
Why: Walker results and mutator batches share one addressing and ordering scheme.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from functools import total_ordering
from typing import Any, ClassVar, Final, final, overload, override

from beanwalk.shared.errors import InvalidPathError
from beanwalk.shared.type_model import is_scalar

_TOKEN: Final[re.Pattern[str]] = re.compile(
    r"(?P<dot>\.)?(?P<name>[^\W\d]\w*)|\[(?P<index>[^\]]*)\]"
)
_INTEGER: Final[re.Pattern[str]] = re.compile(r"-?\d+")
_NUMBER_TYPES: Final[tuple[type, ...]] = (int, float, Decimal, Fraction)


def is_name_segment(segment: Any) -> bool:
    """Return whether ``segment`` names a bean property."""

    return isinstance(segment, str) and segment.isidentifier()


def as_index(segment: Any) -> int | None:
    """Return ``segment`` as a list index, accepting ints and integer strings."""

    if isinstance(segment, bool) or isinstance(segment, Enum):
        return None
    if isinstance(segment, int):
        return segment
    if isinstance(segment, str) and _INTEGER.fullmatch(segment.strip()):
        return int(segment)
    return None


def _is_number(segment: Any) -> bool:
    return isinstance(segment, _NUMBER_TYPES) and not isinstance(segment, (bool, Enum))


def compare_segments(left: Any, right: Any) -> int:
    """Three-way comparison of two segments.

    Segments of the same kind use their natural order; anything else, or a
    natural order that raises, falls back to comparing ``str()`` values.
    """

    if (_is_number(left) and _is_number(right)) or type(left) is type(right):
        try:
            if left < right:
                return -1
            if right < left:
                return 1
            return 0
        except TypeError:
            pass
    left_text, right_text = str(left), str(right)
    return (left_text > right_text) - (left_text < right_text)


@final
@dataclass(frozen=True, slots=True)
class Index:
    """Marks a segment as a bracketed list index or map key.

    Only needed for identifier-like keys such as ``Index("hq")``; any other
    non-identifier segment is already treated as an index.
    """

    key: Any


def _validate(segment: Any) -> Any:
    if not is_scalar(segment):
        raise InvalidPathError(
            f"Path segment must be a stable scalar value, got {segment!r}",
            segment=segment,
        )
    return segment


def _split(segment: Any) -> tuple[Any, bool]:
    """Return the validated value of ``segment`` and whether it is an index."""

    if isinstance(segment, Index):
        return _validate(segment.key), True
    return _validate(segment), not is_name_segment(segment)


def _parse_index(content: str, text: str) -> Index:
    stripped = content.strip()
    if not stripped:
        raise InvalidPathError(f"Empty index in property path {text!r}", path=text)
    if len(stripped) >= 2 and stripped[0] == stripped[-1] and stripped[0] in "'\"":
        return Index(stripped[1:-1])
    if _INTEGER.fullmatch(stripped):
        return Index(int(stripped))
    return Index(stripped)


@final
@total_ordering
class PropertyPath(Sequence[Any]):
    """Ordered sequence of name and index segments identifying a graph location.

    Each segment is either a property name or an index (a list position or a
    map key). The kind is inferred from the value unless wrapped in ``Index``.
    Shorter paths sort before longer ones; equal-length paths compare segment
    by segment (see ``compare_segments``), names before indices on ties.
    """

    __slots__ = ("_segments", "_kinds", "_hash")

    ROOT: ClassVar["PropertyPath"]

    def __init__(self, segments: Iterable[Any] = ()) -> None:
        split = [_split(segment) for segment in segments]
        self._segments: tuple[Any, ...] = tuple(value for value, _ in split)
        self._kinds: tuple[bool, ...] = tuple(kind for _, kind in split)
        self._hash: int = hash((self._segments, self._kinds))

    @classmethod
    def of(cls, *segments: Any) -> "PropertyPath":
        """Build a path from explicit segments."""
        return cls(segments)

    @classmethod
    def parse(cls, text: str) -> "PropertyPath":
        """Parse the textual form produced by ``str()``, e.g. ``persons[0].name``.

        Bracketed content is always an index: integers become ``int``
        segments, anything else a ``str`` key with optional surrounding
        quotes removed.

        Raises:
            InvalidPathError: If ``text`` is malformed.
        """
        segments: list[Any] = []
        pos = 0
        while pos < len(text):
            match = _TOKEN.match(text, pos)
            if match is None:
                raise InvalidPathError(
                    f"Malformed property path {text!r} at offset {pos}", path=text
                )
            name = match.group("name")
            if name is not None:
                has_dot = match.group("dot") is not None
                if has_dot != bool(segments):
                    raise InvalidPathError(
                        f"Malformed property path {text!r} at offset {pos}", path=text
                    )
                segments.append(name)
            else:
                segments.append(_parse_index(match.group("index"), text))
            pos = match.end()
        return cls(segments)

    def _tagged(self) -> tuple[Any, ...]:
        return tuple(
            Index(segment) if kind else segment
            for segment, kind in zip(self._segments, self._kinds)
        )

    def with_segment(self, segment: Any) -> "PropertyPath":
        """Return a new path extended by ``segment``."""
        return PropertyPath((*self._tagged(), segment))

    def with_index(self, key: Any) -> "PropertyPath":
        """Return a new path extended by ``key`` as a list index or map key."""
        return PropertyPath((*self._tagged(), Index(key)))

    def is_index(self, position: int) -> bool:
        """Return whether the segment at ``position`` is an index rather than a name."""
        return self._kinds[position]

    @property
    def segments(self) -> tuple[Any, ...]:
        return self._segments

    @property
    def parent(self) -> "PropertyPath":
        """Path without its last segment; the root is its own parent."""
        return self[:-1]

    @property
    def last(self) -> Any:
        if not self._segments:
            raise InvalidPathError("The root path has no last segment", path=self)
        return self._segments[-1]

    @property
    def is_root(self) -> bool:
        return not self._segments

    @overload
    def __getitem__(self, index: int) -> Any: ...

    @overload
    def __getitem__(self, index: slice) -> "PropertyPath": ...

    @override
    def __getitem__(self, index: int | slice) -> Any:
        if isinstance(index, slice):
            return PropertyPath(self._tagged()[index])
        return self._segments[index]

    @override
    def __len__(self) -> int:
        return len(self._segments)

    @override
    def __iter__(self) -> Iterator[Any]:
        return iter(self._segments)

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropertyPath):
            return NotImplemented
        return self._segments == other._segments and self._kinds == other._kinds

    @override
    def __hash__(self) -> int:
        return self._hash

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PropertyPath):
            return NotImplemented
        if len(self) != len(other):
            return len(self) < len(other)
        for left, right in zip(self._segments, other._segments):
            result = compare_segments(left, right)
            if result:
                return result < 0
        return self._kinds < other._kinds

    @override
    def __str__(self) -> str:
        parts: list[str] = []
        for segment, kind in zip(self._segments, self._kinds):
            if kind:
                parts.append(f"[{segment}]")
            else:
                parts.append(f".{segment}" if parts else segment)
        return "".join(parts)

    @override
    def __repr__(self) -> str:
        rendered = (
            f"Index({segment!r})" if kind and is_name_segment(segment) else repr(segment)
            for segment, kind in zip(self._segments, self._kinds)
        )
        return f"PropertyPath.of({', '.join(rendered)})"


PropertyPath.ROOT = PropertyPath()


__all__ = [
    "Index",
    "PropertyPath",
    "as_index",
    "compare_segments",
    "is_name_segment",
]
