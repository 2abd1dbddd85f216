"""Service chains deeper than the interpreter's recursion limit."""

import json
from http import HTTPStatus

from sqlmodel import Session

from catalog_models import Service
from catalog_models.enums import DifferenceType
from factories import make_feature, make_service, two_firmwares
from recloser_api.catalog.diff import SnapshotNode, compare_snapshots
from recloser_api.catalog.schemas import FeatureDiff, ServiceDiff, ServiceNode
from recloser_api.db import engine
from recloser_api.responses import encode_json

DEPTH = 300


def deep_chain(client, firmware_id: int, depth: int = DEPTH) -> list[int]:
    """Root created through the API, descendants written directly one below the other."""
    ids = [make_service(client, firmware_id, "SEC_DEEP")]
    with Session(engine) as session:
        for level in range(1, depth):
            service = Service(
                service_key=f"SEC_DEEP_{level}",
                description_key="SEC_DEEP",
                parent_id=ids[-1],
                firmware_id=firmware_id,
            )
            session.add(service)
            session.flush()
            ids.append(service.id)
        session.commit()
    return ids


def chain_depth(nodes: list, children: str) -> int:
    depth = 0
    while nodes:
        assert len(nodes) == 1
        depth += 1
        nodes = nodes[0][children]
    return depth


def test_service_tree_of_deep_chain(client) -> None:
    fw_id, _ = two_firmwares(client)
    ids = deep_chain(client, fw_id)

    resp = client.get(f"/firmwares/{fw_id}/service-tree")
    assert resp.status_code == HTTPStatus.OK
    tree = resp.json()
    assert chain_depth(tree, "children") == DEPTH
    assert tree[0]["id"] == ids[0]


def test_layout_of_deep_chain(client) -> None:
    fw_id, _ = two_firmwares(client)
    ids = deep_chain(client, fw_id)

    resp = client.get(f"/services/{ids[0]}/layout")
    assert resp.status_code == HTTPStatus.OK
    assert chain_depth([resp.json()], "children") == DEPTH

    resp = client.get(f"/services/{ids[-1]}/layout")
    assert resp.json()["service_key"] == f"SEC_DEEP_{DEPTH - 1}"
    assert resp.json()["children"] == []


def test_compare_deep_chains_reports_bottom_change(client) -> None:
    fw_a, fw_b = two_firmwares(client)
    deep_chain(client, fw_a)
    ids_b = deep_chain(client, fw_b)
    make_feature(client, ids_b[-1], "FEAT_DEEP")

    resp = client.get("/firmwares/compare", params={"firmware_id_a": fw_a, "firmware_id_b": fw_b})
    assert resp.status_code == HTTPStatus.OK
    body = resp.json()
    assert body["summary"] == {"added": 0, "removed": 0, "modified": 1}
    assert chain_depth(body["differences"], "child_differences") == DEPTH

    bottom = body["differences"][0]
    while bottom["child_differences"]:
        assert bottom["difference_type"] == "MODIFIED"
        bottom = bottom["child_differences"][0]
    assert bottom["service_key"] == f"SEC_DEEP_{DEPTH - 1}"
    assert bottom["feature_differences"] == [{"feature_key": "FEAT_DEEP", "difference_type": "ADDED"}]


def test_compare_snapshots_beyond_recursion_limit() -> None:
    depth = 3000
    before = after = None
    for level in reversed(range(depth)):
        key = f"S{level}"
        bottom = level == depth - 1
        before = SnapshotNode(key, key, children={} if before is None else {before.service_key: before})
        after = SnapshotNode(
            key,
            key,
            features=frozenset({"F_NEW"}) if bottom else frozenset(),
            children={} if after is None else {after.service_key: after},
        )

    differences, summary = compare_snapshots({"S0": before}, {"S0": after})
    assert summary.modified == 1
    level = 0
    while differences:
        diff = differences[0]
        assert diff.service_key == f"S{level}"
        level += 1
        differences = diff.child_differences
    assert level == depth
    assert diff.feature_differences == [FeatureDiff(feature_key="F_NEW", difference_type=DifferenceType.ADDED)]


def test_encode_json_matches_model_dump() -> None:
    diff = ServiceDiff(
        service_key="SEC_PROT",
        display_name="Proteção",
        difference_type=DifferenceType.MODIFIED,
        feature_differences=[FeatureDiff(feature_key="F1", difference_type=DifferenceType.REMOVED)],
        child_differences=[ServiceDiff(service_key="SEC_X", display_name="", difference_type=DifferenceType.ADDED)],
    )
    assert json.loads(encode_json([diff, {"empty": [], "none": None}])) == [
        diff.model_dump(mode="json"),
        {"empty": [], "none": None},
    ]
    assert "Proteção" in encode_json(diff).decode("utf-8")


def test_encode_json_of_deep_node_chain() -> None:
    depth = 3000
    node = ServiceNode(id=depth - 1, service_key="LEAF")
    for level in reversed(range(depth - 1)):
        node = ServiceNode(id=level, service_key=f"S{level}", children=[node])

    encoded = encode_json([node])
    assert encoded.startswith(b'[{"id":0,"service_key":"S0"')
    assert encoded.count(b'"children":[') == depth
    assert encoded.endswith(b'"children":[]' + b"}]" * depth)
