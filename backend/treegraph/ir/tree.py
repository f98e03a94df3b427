from dataclasses import dataclass, field
from typing import Iterator, List


@dataclass(frozen=True)
class FlatNode:
    id: str                                 # node name, unique
    description: str = ""
    parent_id: str = ""                     # "" marks the root


@dataclass
class TreeNode:
    id: str
    description: str = ""
    depth: int = 0
    children: List["TreeNode"] = field(default_factory=list)

    def iter_preorder(self) -> Iterator["TreeNode"]:
        """Yield this node and its descendants depth-first, parents first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


@dataclass
class PositionedNode:
    id: str
    description: str
    parent_id: str
    depth: int
    x: float
    y: float
    color: str


@dataclass(frozen=True)
class Edge:
    source: str                             # parent id
    target: str                             # child id


@dataclass
class GraphLayout:
    nodes: List[PositionedNode] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    width: float = 0.0
    height: float = 0.0
