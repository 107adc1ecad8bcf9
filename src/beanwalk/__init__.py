# Where: beanwalk.__init__
# What: Public facade over paths, introspection, coercion, graph and method features.
# Why: Give glue code one import location for the whole object-graph toolkit.

"""Reflective property access, auto-vivifying writes and graph walking for Python objects."""

from beanwalk.features.coercion import coerce, register_parser
from beanwalk.features.graph import (
    TraversalPredicate,
    apply_properties,
    collect_base_paths,
    get_property,
)
from beanwalk.features.introspection import (
    Descriptor,
    PropertyDescriptor,
    clear_cache,
    describe,
    set_properties,
    set_properties_with_coercion,
)
from beanwalk.features.methods import (
    find_method,
    instance,
    invoke,
    invoke_method,
    overload_of,
    to_class,
)
from beanwalk.features.path import Index, PropertyPath
from beanwalk.shared import (
    BeanwalkError,
    CoercionError,
    IdentityMap,
    IntrospectionError,
    InvalidPathError,
    InvocationError,
    MethodNotFoundError,
    PropertyNotFoundError,
)

__version__ = "0.1.0"

__all__ = [
    "BeanwalkError",
    "CoercionError",
    "Descriptor",
    "IdentityMap",
    "Index",
    "IntrospectionError",
    "InvalidPathError",
    "InvocationError",
    "MethodNotFoundError",
    "PropertyDescriptor",
    "PropertyNotFoundError",
    "PropertyPath",
    "TraversalPredicate",
    "apply_properties",
    "clear_cache",
    "coerce",
    "collect_base_paths",
    "describe",
    "find_method",
    "get_property",
    "instance",
    "invoke",
    "invoke_method",
    "overload_of",
    "register_parser",
    "set_properties",
    "set_properties_with_coercion",
    "to_class",
]
