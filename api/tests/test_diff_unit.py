"""Pure tests of the snapshot differ, no database involved."""

from catalog_models.enums import DifferenceType
from recloser_api.catalog.diff import SnapshotNode, compare_snapshots


def node(key: str, features=(), children=None, name: str = "") -> SnapshotNode:
    return SnapshotNode(
        service_key=key,
        display_name=name or key.title(),
        features=frozenset(features),
        children={c.service_key: c for c in (children or [])},
    )


def tree(*nodes: SnapshotNode) -> dict:
    return {n.service_key: n for n in nodes}


def test_identical_snapshots_produce_no_differences() -> None:
    before = tree(node("A", ["F1"], [node("A1", ["F2"])]), node("B"))
    after = tree(node("A", ["F1"], [node("A1", ["F2"])]), node("B"))

    differences, summary = compare_snapshots(before, after)
    assert differences == []
    assert (summary.added, summary.removed, summary.modified) == (0, 0, 0)


def test_empty_snapshots() -> None:
    differences, summary = compare_snapshots({}, {})
    assert differences == []
    assert summary.describe() == "0 service(s) added, 0 service(s) removed, 0 service(s) modified"


def test_feature_differences_removed_before_added_each_sorted() -> None:
    before = tree(node("A", ["F_Z", "F_KEEP", "F_A"]))
    after = tree(node("A", ["F_KEEP", "F_Y", "F_B"]))

    differences, summary = compare_snapshots(before, after)
    assert summary.modified == 1
    assert [(f.feature_key, f.difference_type) for f in differences[0].feature_differences] == [
        ("F_A", DifferenceType.REMOVED),
        ("F_Z", DifferenceType.REMOVED),
        ("F_B", DifferenceType.ADDED),
        ("F_Y", DifferenceType.ADDED),
    ]


def test_modified_node_uses_display_name_from_first_snapshot() -> None:
    before = tree(node("A", ["F1"], name="Old name"))
    after = tree(node("A", ["F2"], name="New name"))

    differences, _ = compare_snapshots(before, after)
    assert differences[0].display_name == "Old name"


def test_added_and_removed_nodes_do_not_expand_children() -> None:
    before = tree(node("GONE", ["F1"], [node("GONE_CHILD", ["F2"])]))
    after = tree(node("NEW", [], [node("NEW_CHILD")]))

    differences, summary = compare_snapshots(before, after)
    assert (summary.added, summary.removed, summary.modified) == (1, 1, 0)
    assert [d.difference_type for d in differences] == [DifferenceType.REMOVED, DifferenceType.ADDED]
    assert all(d.child_differences == [] for d in differences)


def test_summary_counts_only_top_level() -> None:
    before = tree(node("A", [], [node("A1"), node("A2")]))
    after = tree(node("A", [], [node("A3"), node("A4"), node("A5")]))

    differences, summary = compare_snapshots(before, after)
    assert (summary.added, summary.removed, summary.modified) == (0, 0, 1)
    child_types = [(c.service_key, c.difference_type) for c in differences[0].child_differences]
    assert child_types == [
        ("A1", DifferenceType.REMOVED),
        ("A2", DifferenceType.REMOVED),
        ("A3", DifferenceType.ADDED),
        ("A4", DifferenceType.ADDED),
        ("A5", DifferenceType.ADDED),
    ]


def test_swapping_arguments_swaps_added_and_removed() -> None:
    before = tree(node("A", ["F1"]), node("B"))
    after = tree(node("A", ["F1", "F2"]), node("C"))

    _, forward = compare_snapshots(before, after)
    _, backward = compare_snapshots(after, before)
    assert (forward.added, forward.removed, forward.modified) == (1, 1, 1)
    assert (backward.added, backward.removed, backward.modified) == (
        forward.removed,
        forward.added,
        forward.modified,
    )


def test_service_keys_are_case_sensitive() -> None:
    differences, summary = compare_snapshots(tree(node("sec_prot")), tree(node("SEC_PROT")))
    assert (summary.added, summary.removed) == (1, 1)
    assert [d.service_key for d in differences] == ["sec_prot", "SEC_PROT"]
