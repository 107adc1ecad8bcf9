# Where: beanwalk.features.coercion.__init__
# What: Expose the text-to-value coercion registry.
# Why: Introspection and graph use cases share one parser lookup.

from .usecases.text_parsers import (
    Parser,
    ParserRegistry,
    coerce,
    coerce_if_text,
    find_parser,
    register_parser,
)

__all__ = [
    "Parser",
    "ParserRegistry",
    "coerce",
    "coerce_if_text",
    "find_parser",
    "register_parser",
]
