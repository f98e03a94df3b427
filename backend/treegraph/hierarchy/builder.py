"""
Hierarchy Builder - Turns flat parent-pointer rows into a single rooted tree.

Rules:
- Exactly one row with an empty parent becomes the root
- Parent references resolve by id (name) equality
- Repeated parent/child pairs collapse to one child entry
- Duplicate ids: the last row wins for descriptions and parent lookup
- Parent cycles fail with CycleDetected instead of recursing forever
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Set, Tuple

from treegraph.ir.tree import FlatNode, TreeNode
from treegraph.ir.errors import (
    NoRootFound,
    MultipleRootsFound,
    CycleDetected,
    OrphanedNode,
)


ORPHAN_POLICIES = ("drop", "error")
ROOT_POLICIES = ("error", "first")


@dataclass(frozen=True)
class BuildPolicy:
    orphans: str = "drop"           # drop | error
    multiple_roots: str = "error"   # error | first

    def __post_init__(self):
        if self.orphans not in ORPHAN_POLICIES:
            raise ValueError(f"Unknown orphan policy: {self.orphans!r}")
        if self.multiple_roots not in ROOT_POLICIES:
            raise ValueError(f"Unknown root policy: {self.multiple_roots!r}")


class HierarchyBuilder:
    """
    Builds a TreeNode hierarchy from FlatNode rows.

    Usage:
        builder = HierarchyBuilder()
        root = builder.build(rows)
    """

    def __init__(self, policy: BuildPolicy = BuildPolicy()):
        self.policy = policy

    def build(self, rows: Iterable[FlatNode]) -> TreeNode:
        rows = list(rows)

        root_id = self._find_root(rows)

        # Last occurrence wins on id collision.
        rows_by_id: Dict[str, FlatNode] = {row.id: row for row in rows}
        children_index = self._index_children(rows)

        root = TreeNode(id=root_id, description=rows_by_id[root_id].description, depth=0)
        reached = self._attach_children(root, children_index, rows_by_id)

        self._check_unreached(rows, rows_by_id, reached)
        return root

    # ---------- root ----------

    def _find_root(self, rows: List[FlatNode]) -> str:
        root_ids: List[str] = []
        for row in rows:
            if not row.parent_id and row.id not in root_ids:
                root_ids.append(row.id)

        if not root_ids:
            raise NoRootFound()
        if len(root_ids) > 1 and self.policy.multiple_roots == "error":
            raise MultipleRootsFound(root_ids)
        return root_ids[0]

    # ---------- children ----------

    @staticmethod
    def _index_children(rows: List[FlatNode]) -> Dict[str, List[str]]:
        """Map parent id -> ordered, de-duplicated child ids in one pass."""
        index: Dict[str, List[str]] = {}
        seen: Set[Tuple[str, str]] = set()
        for row in rows:
            if not row.parent_id:
                continue
            pair = (row.parent_id, row.id)
            if pair in seen:
                continue
            seen.add(pair)
            index.setdefault(row.parent_id, []).append(row.id)
        return index

    @staticmethod
    def _attach_children(
        root: TreeNode,
        children_index: Dict[str, List[str]],
        rows_by_id: Dict[str, FlatNode],
    ) -> Set[str]:
        """Grow the tree under *root*; return every id that was placed.

        Walks with an explicit stack so deep trees never hit the interpreter
        recursion limit. ``on_path`` holds the ids between the root and the
        node being expanded; meeting one of them again is a cycle.
        """
        reached: Set[str] = {root.id}
        on_path: Set[str] = {root.id}
        stack = [(root, iter(children_index.get(root.id, ())))]

        while stack:
            node, pending = stack[-1]
            child_id = next(pending, None)
            if child_id is None:
                stack.pop()
                on_path.discard(node.id)
                continue

            if child_id in on_path:
                raise CycleDetected(child_id)

            child = TreeNode(
                id=child_id,
                description=rows_by_id[child_id].description,
                depth=node.depth + 1,
            )
            node.children.append(child)
            reached.add(child_id)
            on_path.add(child_id)
            stack.append((child, iter(children_index.get(child_id, ()))))

        return reached

    # ---------- leftovers ----------

    def _check_unreached(
        self,
        rows: List[FlatNode],
        rows_by_id: Dict[str, FlatNode],
        reached: Set[str],
    ) -> None:
        orphans: List[str] = []
        for row in rows:
            # A row counts as placed only when its own parent was placed too.
            placed = row.id in reached and (not row.parent_id or row.parent_id in reached)
            if placed or row.id in orphans:
                continue
            if self._trace_to_missing_parent(row, rows_by_id):
                orphans.append(row.id)

        if orphans and self.policy.orphans == "error":
            raise OrphanedNode(orphans)

    @staticmethod
    def _trace_to_missing_parent(row: FlatNode, rows_by_id: Dict[str, FlatNode]) -> bool:
        """Follow parent links from an unreached row.

        Returns True when the chain ends at an unknown parent (an orphan) and
        False when it ends at a secondary root dropped by the root policy.
        Raises CycleDetected when the chain loops back on itself.
        """
        seen: Set[str] = {row.id}
        current = row
        while current.parent_id:
            parent_id = current.parent_id
            if parent_id in seen:
                raise CycleDetected(parent_id)
            parent = rows_by_id.get(parent_id)
            if parent is None:
                return True
            seen.add(parent_id)
            current = parent
        return False


def build_hierarchy(rows: Iterable[FlatNode], policy: BuildPolicy = BuildPolicy()) -> TreeNode:
    return HierarchyBuilder(policy).build(rows)


def flatten_tree(root: TreeNode) -> List[Tuple[str, str]]:
    """Return (parent_id, child_id) pairs depth-first, in attachment order."""
    pairs: List[Tuple[str, str]] = []
    for node in root.iter_preorder():
        for child in node.children:
            pairs.append((node.id, child.id))
    return pairs


def count_nodes(root: TreeNode) -> int:
    return sum(1 for _ in root.iter_preorder())
