"""Where: src/beanwalk/features/coercion/usecases/text_parsers.py
What: Registry of text parsers converting string input into typed values.
Why: Lenient property writes accept request text for non-string properties.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from pathlib import Path, PurePath
from typing import Any, Final, TypeVar, overload
from uuid import UUID

from beanwalk.shared.errors import CoercionError
from beanwalk.shared.type_model import admits_none, hint_class

Parser = Callable[[str], Any]
P = TypeVar("P", bound=Parser)

_TRUE_WORDS: Final[frozenset[str]] = frozenset({"true", "yes", "on", "1"})
_FALSE_WORDS: Final[frozenset[str]] = frozenset({"false", "no", "off", "0"})


def _parse_bool(text: str) -> bool:
    word = text.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f"{text!r} is not a boolean")


def _parse_bytes(text: str) -> bytes:
    return text.encode("utf-8")


def _enum_parser(enum_type: type[Enum]) -> Parser:
    """Build a parser resolving members by name, then by value text."""

    def parse(text: str) -> Enum:
        member = enum_type.__members__.get(text.strip())
        if member is not None:
            return member
        for candidate in enum_type:
            if str(candidate.value) == text.strip():
                return candidate
        raise ValueError(f"{text!r} is not a member of {enum_type.__name__}")

    return parse


class ParserRegistry:
    """Thread-safe mapping of target types to text parsers."""

    def __init__(self) -> None:
        self._parsers: dict[type, Parser] = {}
        self._lock: Final[threading.Lock] = threading.Lock()

    @classmethod
    def with_defaults(cls) -> "ParserRegistry":
        """Create a registry pre-populated with parsers for common leaf types."""

        registry = cls()
        defaults: dict[type, Parser] = {
            str: str,
            int: int,
            float: float,
            complex: complex,
            bool: _parse_bool,
            Decimal: Decimal,
            Fraction: Fraction,
            bytes: _parse_bytes,
            date: date.fromisoformat,
            datetime: datetime.fromisoformat,
            time: time.fromisoformat,
            UUID: UUID,
            PurePath: PurePath,
            Path: Path,
        }
        for target_type, parser in defaults.items():
            registry.register(target_type, parser)
        return registry

    def register(self, target_type: type, parser: Parser) -> None:
        """Register or replace the parser for ``target_type``."""

        with self._lock:
            self._parsers[target_type] = parser

    def find(self, target_type: type) -> Parser | None:
        """Return the parser for ``target_type``.

        Lookup order: exact registration, Enum member lookup, then the first
        registered class in the target's MRO.
        """
        parser = self._parsers.get(target_type)
        if parser is not None:
            return parser
        if issubclass(target_type, Enum):
            return _enum_parser(target_type)
        for base in target_type.__mro__[1:]:
            parser = self._parsers.get(base)
            if parser is not None:
                return parser
        return None

    def coerce(self, text: str, target_type: Any) -> Any:
        """Parse ``text`` into a value of ``target_type``.

        ``Optional`` targets turn blank text into ``None``.

        Raises:
            CoercionError: If no parser applies or the parser fails.
        """
        if target_type is None:
            raise CoercionError(text, target_type, "no target type")
        if admits_none(target_type) and not text.strip():
            return None

        cls = hint_class(target_type)
        if cls is None:
            raise CoercionError(text, target_type, "target is not a concrete class")

        parser = self.find(cls)
        if parser is None:
            raise CoercionError(text, target_type, "no text parser registered")

        try:
            return parser(text)
        except Exception as exc:
            raise CoercionError(text, target_type, str(exc)) from exc


_REGISTRY: Final[ParserRegistry] = ParserRegistry.with_defaults()


def coerce(text: str, target_type: Any) -> Any:
    """Parse ``text`` into ``target_type`` using the shared registry."""
    return _REGISTRY.coerce(text, target_type)


def find_parser(target_type: type) -> Parser | None:
    return _REGISTRY.find(target_type)


@overload
def register_parser(target_type: type, parser: None = None) -> Callable[[P], P]: ...


@overload
def register_parser(target_type: type, parser: P) -> P: ...


def register_parser(target_type: type, parser: Parser | None = None) -> Any:
    """Register a parser for ``target_type`` in the shared registry.

    Usable directly or as a decorator::

        @register_parser(Money)
        def parse_money(text: str) -> Money: ...
    """
    if parser is not None:
        _REGISTRY.register(target_type, parser)
        return parser

    def decorator(func: P) -> P:
        _REGISTRY.register(target_type, func)
        return func

    return decorator


def coerce_if_text(value: Any, declared_type: Any) -> Any:
    """Coerce ``value`` when it is text and ``declared_type`` is a known non-string class."""

    if not isinstance(value, str):
        return value
    cls = hint_class(declared_type)
    if cls is None or issubclass(cls, str):
        return value
    return coerce(value, declared_type)


__all__ = [
    "Parser",
    "ParserRegistry",
    "coerce",
    "coerce_if_text",
    "find_parser",
    "register_parser",
]
