from typing import List, Optional

from treegraph.ir.tree import TreeNode, PositionedNode, Edge, GraphLayout
from treegraph.ir.errors import LayoutError
from treegraph.visual.tree_layout import TreeLayout, NetworkxTreeLayout
from treegraph.visual.visual_style import color_token


class LayoutProjector:
    """
    Projects a rooted tree onto positioned, coloured nodes and an edge list.

    Coordinates come entirely from the injected TreeLayout; this class only
    pairs them with nodes, assigns depth colours and derives edges. It never
    draws anything.
    """

    def __init__(self, layout: Optional[TreeLayout] = None):
        self.layout = layout or NetworkxTreeLayout()

    def project(self, root: TreeNode) -> GraphLayout:
        ordered = list(root.iter_preorder())
        points = self.layout.positions(root)

        if len(points) != len(ordered):
            raise LayoutError(
                f"Layout returned {len(points)} positions for {len(ordered)} nodes"
            )

        parent_of = {}
        edges: List[Edge] = []
        for node in ordered:
            for child in node.children:
                parent_of[id(child)] = node.id
                edges.append(Edge(source=node.id, target=child.id))

        nodes: List[PositionedNode] = []
        for node, (x, y) in zip(ordered, points):
            nodes.append(
                PositionedNode(
                    id=node.id,
                    description=node.description,
                    parent_id=parent_of.get(id(node), ""),
                    depth=node.depth,
                    x=float(x),
                    y=float(y),
                    color=color_token(node.depth),
                )
            )

        return GraphLayout(
            nodes=nodes,
            edges=edges,
            width=float(getattr(self.layout, "width", 0.0)),
            height=float(getattr(self.layout, "height", 0.0)),
        )


def project_tree(root: TreeNode, layout: Optional[TreeLayout] = None) -> GraphLayout:
    return LayoutProjector(layout).project(root)
