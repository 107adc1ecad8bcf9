# Where: beanwalk.shared.__init__
# What: Provide a concise import surface for shared errors and helpers.
# Why: Encourage consistent reuse of the type model across features.

"""Shared cross-cutting utilities exposed at the package level."""

from .errors import (
    BeanwalkError,
    CoercionError,
    IntrospectionError,
    InvalidPathError,
    InvocationError,
    MethodNotFoundError,
    PropertyNotFoundError,
)
from .identity import IdentityMap
from .type_model import Shape, is_leaf, is_scalar, shape_of, shape_of_hint

__all__ = [
    "BeanwalkError",
    "CoercionError",
    "IdentityMap",
    "IntrospectionError",
    "InvalidPathError",
    "InvocationError",
    "MethodNotFoundError",
    "PropertyNotFoundError",
    "Shape",
    "is_leaf",
    "is_scalar",
    "shape_of",
    "shape_of_hint",
]
