# Where: beanwalk.features.introspection.__init__
# What: Expose descriptors, the descriptor cache, and bulk property setters.
# Why: Graph use cases and callers share one introspection surface.

from .domain.descriptor import Descriptor, PropertyDescriptor
from .usecases.bean_properties import set_properties, set_properties_with_coercion
from .usecases.descriptor_cache import (
    DescriptorCache,
    clear_cache,
    default_cache,
    describe,
    introspect,
)

__all__ = [
    "Descriptor",
    "DescriptorCache",
    "PropertyDescriptor",
    "clear_cache",
    "default_cache",
    "describe",
    "introspect",
    "set_properties",
    "set_properties_with_coercion",
]
