from typing import Iterable, Optional

from treegraph.ir.tree import FlatNode, GraphLayout
from treegraph.hierarchy.builder import BuildPolicy, HierarchyBuilder
from treegraph.visual.projector import LayoutProjector
from treegraph.visual.tree_layout import TreeLayout


def map_rows_to_visual(
    rows: Iterable[FlatNode],
    layout: Optional[TreeLayout] = None,
    policy: BuildPolicy = BuildPolicy(),
) -> GraphLayout:
    """
    Transform flat graph rows into a drawable GraphLayout.
    rows -> HierarchyBuilder -> rooted tree -> LayoutProjector -> GraphLayout

    Raises HierarchyError / LayoutError; callers decide how to surface them.
    """
    root = HierarchyBuilder(policy).build(rows)
    return LayoutProjector(layout).project(root)
