"""Tests for turning flat parent-pointer rows into a rooted tree"""

import pytest

from treegraph.hierarchy import (
    BuildPolicy,
    HierarchyBuilder,
    build_hierarchy,
    count_nodes,
    flatten_tree,
    normalize_rows,
)
from treegraph.ir import (
    FlatNode,
    NoRootFound,
    MultipleRootsFound,
    CycleDetected,
    OrphanedNode,
)


def make_row(name: str, parent: str = "", description: str = "") -> FlatNode:
    return FlatNode(id=name, description=description or f"This is description {name}", parent_id=parent)


def sample_rows():
    return [
        make_row("A"),
        make_row("B", "A"),
        make_row("C", "A"),
        make_row("B1", "B"),
    ]


def depths(root):
    return {node.id: node.depth for node in root.iter_preorder()}


def test_builds_nested_tree_with_depths():
    root = build_hierarchy(sample_rows())

    assert root.id == "A"
    assert [child.id for child in root.children] == ["B", "C"]
    assert [child.id for child in root.children[0].children] == ["B1"]
    assert root.children[1].children == []
    assert depths(root) == {"A": 0, "B": 1, "C": 1, "B1": 2}
    assert flatten_tree(root) == [("A", "B"), ("A", "C"), ("B", "B1")]


def test_node_count_matches_row_count():
    rows = sample_rows() + [make_row("D", "A"), make_row("B2", "B"), make_row("B2a", "B2")]
    root = build_hierarchy(rows)
    assert count_nodes(root) == len(rows)


def test_input_order_does_not_change_edge_set():
    rows = sample_rows()
    forward = build_hierarchy(rows)
    backward = build_hierarchy(list(reversed(rows)))

    assert set(flatten_tree(forward)) == set(flatten_tree(backward))
    assert depths(forward) == depths(backward)


def test_round_trip_reproduces_input_edges():
    rows = sample_rows() + [
        make_row("C", "A"),             # duplicate pair
        make_row("Z", "missing"),       # orphan
    ]
    root = build_hierarchy(rows)

    expected = {(row.parent_id, row.id) for row in sample_rows() if row.parent_id}
    assert set(flatten_tree(root)) == expected
    assert len(flatten_tree(root)) == len(expected)


def test_build_is_idempotent():
    rows = sample_rows()
    builder = HierarchyBuilder()
    assert builder.build(rows) == builder.build(rows)


def test_duplicate_child_listed_once():
    rows = [make_row("A"), make_row("X", "A"), make_row("X", "A"), make_row("Y", "A")]
    root = build_hierarchy(rows)
    assert [child.id for child in root.children] == ["X", "Y"]


def test_duplicate_id_last_row_wins():
    rows = [
        make_row("A"),
        make_row("B", "A", description="first"),
        make_row("B", "A", description="second"),
    ]
    root = build_hierarchy(rows)
    assert len(root.children) == 1
    assert root.children[0].description == "second"


def test_empty_input_has_no_root():
    with pytest.raises(NoRootFound):
        build_hierarchy([])


def test_rows_without_empty_parent_have_no_root():
    with pytest.raises(NoRootFound):
        build_hierarchy([make_row("B", "A"), make_row("C", "B")])


def test_two_roots_are_rejected_by_default():
    rows = [make_row("A"), make_row("B"), make_row("C", "A")]
    with pytest.raises(MultipleRootsFound) as exc:
        build_hierarchy(rows)
    assert exc.value.node_ids == ["A", "B"]
    assert exc.value.to_dict()["code"] == "MULTIPLE_ROOTS_FOUND"


def test_first_root_policy_keeps_first_root():
    rows = [make_row("A"), make_row("B"), make_row("C", "A"), make_row("D", "B")]
    root = build_hierarchy(rows, BuildPolicy(multiple_roots="first"))
    assert root.id == "A"
    assert [child.id for child in root.children] == ["C"]


def test_repeated_root_row_is_not_ambiguous():
    rows = [make_row("A"), make_row("A"), make_row("B", "A")]
    root = build_hierarchy(rows)
    assert root.id == "A"
    assert count_nodes(root) == 2


def test_orphans_dropped_by_default():
    rows = sample_rows() + [make_row("Z", "missing"), make_row("Z1", "Z")]
    root = build_hierarchy(rows)
    assert count_nodes(root) == 4
    assert "Z" not in depths(root)


def test_orphans_rejected_with_error_policy():
    rows = sample_rows() + [make_row("Z", "missing"), make_row("Z1", "Z")]
    with pytest.raises(OrphanedNode) as exc:
        build_hierarchy(rows, BuildPolicy(orphans="error"))
    assert exc.value.node_ids == ["Z", "Z1"]


def test_row_with_missing_parent_is_orphan_even_if_id_placed_elsewhere():
    rows = [make_row("A"), make_row("B", "A"), make_row("B", "missing")]

    root = build_hierarchy(rows)
    assert [child.id for child in root.children] == ["B"]

    with pytest.raises(OrphanedNode) as exc:
        build_hierarchy(rows, BuildPolicy(orphans="error"))
    assert exc.value.node_ids == ["B"]


def test_self_reference_is_a_cycle():
    rows = [make_row("A"), make_row("X", "X")]
    with pytest.raises(CycleDetected) as exc:
        build_hierarchy(rows)
    assert exc.value.node_ids == ["X"]


def test_detached_cycle_is_detected():
    rows = [make_row("A"), make_row("B", "C"), make_row("C", "B")]
    with pytest.raises(CycleDetected):
        build_hierarchy(rows)


def test_cycle_below_root_is_detected():
    # B is both a child of A and of itself
    rows = [make_row("A"), make_row("B", "A"), make_row("B", "B")]
    with pytest.raises(CycleDetected):
        build_hierarchy(rows)


def test_deep_chain_does_not_hit_recursion_limit():
    rows = [make_row("n0")]
    rows += [make_row(f"n{i}", f"n{i - 1}") for i in range(1, 5000)]
    root = build_hierarchy(rows)
    assert count_nodes(root) == 5000
    assert max(depths(root).values()) == 4999


def test_unknown_policy_rejected():
    with pytest.raises(ValueError):
        BuildPolicy(orphans="ignore")
    with pytest.raises(ValueError):
        BuildPolicy(multiple_roots="last")


# ---------- wire normalization ----------

def test_normalize_flat_envelope():
    payload = {
        "data": [
            {"name": "A", "description": "root", "parent": ""},
            {"name": "B", "description": "child", "parent": "A"},
            {"description": "no name"},
        ]
    }
    assert normalize_rows(payload) == [
        FlatNode(id="A", description="root", parent_id=""),
        FlatNode(id="B", description="child", parent_id="A"),
    ]


def test_normalize_nested_payload():
    payload = {
        "data": [
            {
                "name": "A",
                "description": "",
                "parent": "",
                "children": [
                    {"name": "B", "description": "", "parent": "A", "children": [
                        {"name": "B-1", "description": "", "children": []},
                    ]},
                    {"name": "C", "description": "", "parent": ""},
                ],
            }
        ]
    }
    rows = normalize_rows(payload)
    assert [(row.id, row.parent_id) for row in rows] == [
        ("A", ""),
        ("B", "A"),
        ("B-1", "B"),
        ("C", "A"),
    ]
    assert flatten_tree(build_hierarchy(rows)) == [("A", "B"), ("A", "C"), ("B", "B-1")]


def test_normalize_bare_list_and_garbage():
    assert normalize_rows([{"name": "A"}]) == [FlatNode(id="A")]
    assert normalize_rows(None) == []
    assert normalize_rows({"data": "nope"}) == []
