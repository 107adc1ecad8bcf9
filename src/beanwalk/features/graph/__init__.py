# Where: beanwalk.features.graph.__init__
# What: Expose the graph walker, the auto-vivifying mutator, and the path accessor.
# Why: Provide a cohesive import surface for glue code and the package facade.

from .usecases.accessor import get_property
from .usecases.mutator import GraphWriter, apply_properties, as_property_path, required_sizes
from .usecases.vivify import create_default, grow_array, grow_list
from .usecases.walker import TraversalPredicate, collect_base_paths, traverse_all

__all__ = [
    "GraphWriter",
    "TraversalPredicate",
    "apply_properties",
    "as_property_path",
    "collect_base_paths",
    "create_default",
    "get_property",
    "grow_array",
    "grow_list",
    "required_sizes",
    "traverse_all",
]
