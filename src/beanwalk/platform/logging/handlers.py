"""Where: src/beanwalk/platform/logging/handlers.py
What: Rich console handler that renders graph events and property paths.
Why: Keep the styling of structured records apart from logger setup.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class PropertyPathRichHandler(RichHandler):
    """Custom Rich handler that highlights property paths in graph events."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "introspection.describe": ("🔎", "cyan"),
        "graph.walk.complete": ("🧭", "green"),
        "graph.apply.vivify": ("🌱", "yellow"),
        "graph.apply.write": ("✏️", "blue"),
        "graph.apply.complete": ("✅", "green"),
        "methods.resolve.miss": ("❓", "red"),
    }
    _EVENT_LABELS: ClassVar[dict[str, str]] = {
        "introspection.describe": "Described ",
        "graph.walk.complete": "Walked ",
        "graph.apply.vivify": "Vivified ",
        "graph.apply.write": "Wrote ",
        "graph.apply.complete": "Applied ",
        "methods.resolve.miss": "No overload for ",
    }
    _SEPARATOR_STYLE: ClassVar[Style] = Style(color="magenta")
    _NAME_STYLE: ClassVar[Style] = Style(color="white")

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Initialize the handler with custom settings.

        Args:
            *args: Positional arguments to pass to RichHandler.
            **kwargs: Keyword arguments to pass to RichHandler.
        """
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        super().__init__(*args, **kwargs)

    @classmethod
    def _style_path(cls, path: str) -> Text:
        """Render a property path with separators and indices in magenta."""

        text = Text()
        if not path:
            _ = text.append("<root>", style=cls._SEPARATOR_STYLE)
            return text

        in_index = False
        for char in path:
            if char == "[":
                in_index = True
                _ = text.append(char, style=cls._SEPARATOR_STYLE)
            elif char == "]":
                in_index = False
                _ = text.append(char, style=cls._SEPARATOR_STYLE)
            elif char == "." and not in_index:
                _ = text.append(char, style=cls._SEPARATOR_STYLE)
            else:
                style = cls._SEPARATOR_STYLE if in_index else cls._NAME_STYLE
                _ = text.append(char, style=style)
        return text

    def _render_graph_event(self, record: logging.LogRecord) -> Text | None:
        """Render structured graph events with dedicated styling."""

        event = getattr(record, "graph_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))

        body = Text(style=Style(color=color))
        _ = body.append(self._EVENT_LABELS.get(event, f"{event} "))

        owner = getattr(record, "owner", None)
        if owner:
            _ = body.append(str(owner))

        if hasattr(record, "property_path"):
            if owner:
                _ = body.append(" @ ")
            _ = body.append_text(self._style_path(str(record.property_path)))

        metrics: list[str] = []
        count = getattr(record, "count", None)
        if isinstance(count, int):
            metrics.append(f"count={count}")
        duration_ms = getattr(record, "duration_ms", None)
        if isinstance(duration_ms, (int, float)):
            metrics.append(f"{duration_ms:.2f} ms")
        if metrics:
            _ = body.append(" [" + ", ".join(metrics) + "]")

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render message with custom styling for graph events."""

        graph_text = self._render_graph_event(record)
        if graph_text is not None:
            return graph_text

        return super().render_message(record, message)


__all__ = ["PropertyPathRichHandler"]
