from treegraph.ir.tree import FlatNode, TreeNode, PositionedNode, Edge, GraphLayout
from treegraph.ir.errors import (
    HierarchyError,
    NoRootFound,
    MultipleRootsFound,
    CycleDetected,
    OrphanedNode,
    LayoutError,
)

__all__ = [
    "FlatNode",
    "TreeNode",
    "PositionedNode",
    "Edge",
    "GraphLayout",
    "HierarchyError",
    "NoRootFound",
    "MultipleRootsFound",
    "CycleDetected",
    "OrphanedNode",
    "LayoutError",
]
