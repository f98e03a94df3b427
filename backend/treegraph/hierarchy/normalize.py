from typing import Any, Dict, List, Optional

from treegraph.ir.tree import FlatNode


# ============================================================
# WIRE PAYLOAD -> FLAT ROWS (API TRUST BOUNDARY)
# ============================================================

def _unwrap(payload: Any) -> List[Any]:
    """Accept the ``{"data": [...]}`` envelope or a bare list."""
    if isinstance(payload, dict):
        payload = payload.get("data", [])
    if isinstance(payload, list):
        return payload
    return []


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def normalize_rows(payload: Any) -> List[FlatNode]:
    """
    Normalize a graph payload into FlatNode rows.

    Handles both shapes seen on the wire:
    - flat rows:   {"name", "description", "parent"}
    - nested rows: {"name", "description", "parent", "children": [...]}

    Nested children with a blank ``parent`` inherit the enclosing node's
    name. Entries without a usable name are skipped.
    """
    rows: List[FlatNode] = []

    # (entry, enclosing parent name)
    stack = [(entry, None) for entry in reversed(_unwrap(payload))]
    while stack:
        entry, enclosing = stack.pop()
        if not isinstance(entry, dict):
            continue

        name = _text(entry.get("name", entry.get("id")))
        if not name:
            continue

        parent = _text(entry.get("parent", entry.get("parent_id")))
        if not parent and enclosing:
            parent = enclosing

        rows.append(
            FlatNode(
                id=name,
                description=_text(entry.get("description")),
                parent_id=parent,
            )
        )

        children = entry.get("children") or []
        if isinstance(children, list):
            stack.extend((child, name) for child in reversed(children))

    return rows


def row_to_dict(row: FlatNode, children: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    """Render a FlatNode in the wire shape used by the graph API."""
    payload: Dict[str, Any] = {
        "name": row.id,
        "description": row.description,
        "parent": row.parent_id,
    }
    if children is not None:
        payload["children"] = children
    return payload
