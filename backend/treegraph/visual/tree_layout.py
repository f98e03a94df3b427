"""
Tree layout algorithms.

A TreeLayout assigns every node of a rooted tree a 2-D coordinate:
- same tree shape and child order -> same coordinates
- the depth axis coordinate grows with depth
- siblings keep their left-to-right order
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Tuple

import networkx as nx

from treegraph.ir.tree import TreeNode


Point = Tuple[float, float]


class TreeLayout(ABC):
    @abstractmethod
    def positions(self, root: TreeNode) -> List[Point]:
        """Return one (x, y) per node, in ``root.iter_preorder()`` order."""
        pass


class NetworkxTreeLayout(TreeLayout):
    """
    Layered top-down layout backed by ``networkx.bfs_layout``.

    Tree nodes are keyed by pre-order index so repeated ids never merge
    into one graph vertex. Each axis is then stretched onto the canvas
    independently; an axis with a single coordinate sits at the centre.
    """

    def __init__(self, width: float = 960, height: float = 600, margin: float = 60):
        self.width = width
        self.height = height
        self.margin = margin

    def positions(self, root: TreeNode) -> List[Point]:
        graph = nx.DiGraph()
        index: Dict[int, int] = {}

        for position, node in enumerate(root.iter_preorder()):
            index[id(node)] = position
            graph.add_node(position)

        for node in root.iter_preorder():
            for child in node.children:
                graph.add_edge(index[id(node)], index[id(child)])

        raw = nx.bfs_layout(graph, 0, align="horizontal")

        xs = [float(raw[i][0]) for i in range(len(index))]
        ys = [float(raw[i][1]) for i in range(len(index))]

        return list(
            zip(
                self._fit(xs, self.width),
                self._fit(ys, self.height),
            )
        )

    def _fit(self, values: List[float], extent: float) -> List[float]:
        low, high = min(values), max(values)
        if high == low:
            return [extent / 2 for _ in values]

        usable = max(extent - 2 * self.margin, 0.0)
        span = high - low
        return [self.margin + (v - low) / span * usable for v in values]
