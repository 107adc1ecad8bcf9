# Where: beanwalk.features.methods.__init__
# What: Expose method resolution, invocation, and instance creation helpers.
# Why: Graph use cases and glue code share one reflective call surface.

from .usecases.instances import instance, to_class
from .usecases.resolver import (
    OVERLOAD_ATTRIBUTE,
    PRIMITIVE_TYPES,
    candidates,
    find_method,
    invoke,
    invoke_method,
    is_compatible,
    overload_of,
)

__all__ = [
    "OVERLOAD_ATTRIBUTE",
    "PRIMITIVE_TYPES",
    "candidates",
    "find_method",
    "instance",
    "invoke",
    "invoke_method",
    "is_compatible",
    "overload_of",
    "to_class",
]
