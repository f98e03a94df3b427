from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

import yaml
from sqlalchemy import func
from sqlalchemy.orm import Session, aliased

from treegraph.db.models import GraphNode, GraphEdge
from treegraph.hierarchy.normalize import normalize_rows, row_to_dict
from treegraph.ir.errors import CycleDetected
from treegraph.ir.tree import FlatNode


PARENT_OF = "parent_of"


class GraphStore:
    """
    Node / parent_of edge storage on top of a SQLAlchemy session.

    Nodes are addressed by name everywhere outside this class; integer
    primary keys never leave it.
    """

    def __init__(self, session: Session):
        self.session = session

    def count_nodes(self) -> int:
        return self.session.query(func.count(GraphNode.id)).scalar() or 0

    def add_node(self, name: str, description: str = "") -> GraphNode:
        node = GraphNode(name=name, description=description)
        self.session.add(node)
        self.session.flush()
        return node

    def add_edge(self, parent: str, child: str) -> GraphEdge:
        parent_node = self._get(parent)
        child_node = self._get(child)
        edge = GraphEdge(
            parent_id=parent_node.id,
            child_id=child_node.id,
            label=PARENT_OF,
        )
        self.session.add(edge)
        self.session.flush()
        return edge

    def _get(self, name: str) -> GraphNode:
        node = self.session.query(GraphNode).filter(GraphNode.name == name).one_or_none()
        if node is None:
            raise KeyError(f"Unknown node: {name}")
        return node

    def _parent_pairs(self) -> List[tuple]:
        parent = aliased(GraphNode)
        child = aliased(GraphNode)
        return (
            self.session.query(parent.name, child.name)
            .join(GraphEdge, GraphEdge.parent_id == parent.id)
            .join(child, GraphEdge.child_id == child.id)
            .filter(GraphEdge.label == PARENT_OF)
            .order_by(GraphEdge.id)
            .all()
        )

    def fetch_rows(self) -> List[FlatNode]:
        """Every node as a FlatNode; a node's parent comes from its parent_of edge."""
        nodes = self.session.query(GraphNode).order_by(GraphNode.id).all()
        parent_of: Dict[str, str] = {}
        for parent_name, child_name in self._parent_pairs():
            parent_of[child_name] = parent_name

        return [
            FlatNode(
                id=node.name,
                description=node.description or "",
                parent_id=parent_of.get(node.name, ""),
            )
            for node in nodes
        ]

    def fetch_forest(self) -> List[Dict[str, Any]]:
        """Nested ``{name, description, parent, children}`` dicts, one per root.

        Every dict is built fresh while walking down from a root, so the
        result is a plain tree. A parent_of loop reachable from a root raises
        CycleDetected.
        """
        rows = self.fetch_rows()
        rows_by_name = {row.id: row for row in rows}
        children: Dict[str, List[str]] = {}
        for parent_name, child_name in self._parent_pairs():
            children.setdefault(parent_name, []).append(child_name)

        forest: List[Dict[str, Any]] = []
        for row in rows:
            if row.parent_id:
                continue
            root = row_to_dict(row, children=[])
            forest.append(root)

            on_path = {row.id}
            stack = [(root, iter(children.get(row.id, ())))]
            while stack:
                node, pending = stack[-1]
                child_name = next(pending, None)
                if child_name is None:
                    stack.pop()
                    on_path.discard(node["name"])
                    continue

                if child_name in on_path:
                    raise CycleDetected(child_name)

                child = row_to_dict(rows_by_name[child_name], children=[])
                node["children"].append(child)
                on_path.add(child_name)
                stack.append((child, iter(children.get(child_name, ()))))

        return forest


# ============================================================
# SEEDING
# ============================================================

def load_seed_rows(path: Union[str, Path]) -> List[FlatNode]:
    with open(path, "r", encoding="utf-8") as fh:
        return normalize_rows(yaml.safe_load(fh) or {})


def seed_graph(store: GraphStore, rows: Iterable[FlatNode]) -> bool:
    """
    Seed an empty store. Returns True when rows were written, False when
    the store already held nodes.
    """
    existing = store.count_nodes()
    if existing > 0:
        print(f"[Seed] {existing} nodes found, skipping initialization")
        return False

    rows = list(rows)
    print(f"[Seed] No data found. Seeding {len(rows)} nodes...")

    for row in rows:
        store.add_node(row.id, row.description)

    for row in rows:
        if row.parent_id:
            store.add_edge(row.parent_id, row.id)
            print(f"[Seed] Added edge from {row.parent_id} to {row.id}")

    store.session.commit()
    print("[Seed] Initialization complete")
    return True
