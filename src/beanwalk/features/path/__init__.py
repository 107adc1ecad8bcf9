# Path: `src/beanwalk/features/path/__init__.py`
# Summary: Export property path domain symbols.
# Why: Provide a stable import surface for graph use cases and tests.

from .domain.property_path import (
    Index,
    PropertyPath,
    as_index,
    compare_segments,
    is_name_segment,
)

__all__ = [
    "Index",
    "PropertyPath",
    "as_index",
    "compare_segments",
    "is_name_segment",
]
