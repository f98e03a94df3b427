from typing import List, Optional


class HierarchyError(Exception):
    """Base class for failures while turning flat rows into a tree."""

    code = "HIERARCHY_ERROR"

    def __init__(self, message: str, node_ids: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.node_ids = list(node_ids or [])

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "node_ids": self.node_ids,
        }


class NoRootFound(HierarchyError):
    code = "NO_ROOT_FOUND"

    def __init__(self):
        super().__init__("No row with an empty parent was found")


class MultipleRootsFound(HierarchyError):
    code = "MULTIPLE_ROOTS_FOUND"

    def __init__(self, root_ids: List[str]):
        super().__init__(
            f"Expected exactly one root, found {len(root_ids)}: {', '.join(root_ids)}",
            node_ids=root_ids,
        )


class CycleDetected(HierarchyError):
    code = "CYCLE_DETECTED"

    def __init__(self, node_id: str):
        super().__init__(
            f"Parent reference cycle detected at '{node_id}'",
            node_ids=[node_id],
        )


class OrphanedNode(HierarchyError):
    code = "ORPHANED_NODE"

    def __init__(self, orphan_ids: List[str]):
        super().__init__(
            f"{len(orphan_ids)} row(s) reference a missing parent: {', '.join(orphan_ids)}",
            node_ids=orphan_ids,
        )


class LayoutError(Exception):
    """Raised when a layout algorithm does not position every tree node."""

    code = "LAYOUT_ERROR"

    def to_dict(self) -> dict:
        return {"code": self.code, "message": str(self), "node_ids": []}
