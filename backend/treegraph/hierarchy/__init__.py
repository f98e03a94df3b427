"""
Hierarchy module: flat parent-pointer rows to a rooted tree.
"""

from treegraph.hierarchy.builder import (
    BuildPolicy,
    HierarchyBuilder,
    build_hierarchy,
    count_nodes,
    flatten_tree,
)
from treegraph.hierarchy.normalize import normalize_rows, row_to_dict

__all__ = [
    "BuildPolicy",
    "HierarchyBuilder",
    "build_hierarchy",
    "count_nodes",
    "flatten_tree",
    "normalize_rows",
    "row_to_dict",
]
