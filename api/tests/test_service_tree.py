from http import HTTPStatus

from factories import make_feature, make_firmware, make_recloser, make_service, two_firmwares


def test_service_tree_empty_for_firmware_without_services(client) -> None:
    recloser_id = make_recloser(client)
    firmware_id = make_firmware(client, recloser_id)

    resp = client.get(f"/firmwares/{firmware_id}/service-tree")
    assert resp.status_code == HTTPStatus.OK
    assert resp.json() == []


def test_service_tree_unknown_firmware_is_empty_not_error(client) -> None:
    resp = client.get("/firmwares/424242/service-tree")
    assert resp.status_code == HTTPStatus.OK
    assert resp.json() == []


def test_service_tree_rejects_non_positive_firmware_id(client) -> None:
    assert client.get("/firmwares/0/service-tree").status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    assert client.get("/firmwares/-3/service-tree").status_code == HTTPStatus.UNPROCESSABLE_ENTITY


def test_service_tree_nests_children_features_and_translations(client) -> None:
    fw_id, _ = two_firmwares(client)
    root_id = make_service(client, fw_id, "SEC_PROT", translations={"enUs": "Protection", "ptBr": "Proteção"})
    child_id = make_service(client, fw_id, "SEC_PROT_PHASE", parent_id=root_id)
    grandchild_id = make_service(client, fw_id, "SEC_PROT_PHASE_51", parent_id=child_id)
    feature_id = make_feature(client, root_id, "FEAT_OVERCURRENT", {"enUs": "Overcurrent"})
    make_feature(client, grandchild_id, "FEAT_PICKUP")

    tree = client.get(f"/firmwares/{fw_id}/service-tree").json()

    assert len(tree) == 1
    root = tree[0]
    assert root["id"] == root_id
    assert root["service_key"] == "SEC_PROT"
    assert root["translations"] == [
        {"language_code": "enUs", "value": "Protection"},
        {"language_code": "ptBr", "value": "Proteção"},
    ]
    assert root["features"] == [
        {
            "id": feature_id,
            "feature_key": "FEAT_OVERCURRENT",
            "translations": [{"language_code": "enUs", "value": "Overcurrent"}],
        }
    ]
    assert [c["service_key"] for c in root["children"]] == ["SEC_PROT_PHASE"]
    grandchild = root["children"][0]["children"][0]
    assert grandchild["service_key"] == "SEC_PROT_PHASE_51"
    assert [f["feature_key"] for f in grandchild["features"]] == ["FEAT_PICKUP"]
    assert grandchild["children"] == []


def test_service_tree_siblings_follow_insertion_order(client) -> None:
    fw_id, _ = two_firmwares(client)
    for key in ("ZULU", "ALPHA", "MIKE"):
        make_service(client, fw_id, key)

    tree = client.get(f"/firmwares/{fw_id}/service-tree").json()
    assert [n["service_key"] for n in tree] == ["ZULU", "ALPHA", "MIKE"]


def test_service_tree_is_scoped_to_its_firmware(client) -> None:
    fw_a, fw_b = two_firmwares(client)
    make_service(client, fw_a, "ONLY_A")
    make_service(client, fw_b, "ONLY_B")

    tree_a = client.get(f"/firmwares/{fw_a}/service-tree").json()
    tree_b = client.get(f"/firmwares/{fw_b}/service-tree").json()
    assert [n["service_key"] for n in tree_a] == ["ONLY_A"]
    assert [n["service_key"] for n in tree_b] == ["ONLY_B"]


def test_child_service_must_share_parent_firmware(client) -> None:
    fw_a, fw_b = two_firmwares(client)
    root_a = make_service(client, fw_a, "SEC_PROT")

    resp = client.post(
        "/services",
        json={"service_key": "SEC_CHILD", "description_key": "SEC_CHILD", "firmware_id": fw_b, "parent_id": root_a},
    )
    assert resp.status_code == HTTPStatus.UNPROCESSABLE_ENTITY

    # Every node reachable from a firmware's roots belongs to that firmware
    services_b = client.get("/services", params={"firmware_id": fw_b}).json()
    assert services_b == []
    tree_a = client.get(f"/firmwares/{fw_a}/service-tree").json()
    assert tree_a[0]["children"] == []


def test_inventory_lists_reclosers_firmwares_and_trees(client) -> None:
    fw_a, fw_b = two_firmwares(client)
    make_service(client, fw_a, "SEC_PROT")

    inventory = client.get("/inventory").json()
    assert len(inventory) == 1
    recloser = inventory[0]
    assert recloser["model"] == "Zeus NG"
    assert recloser["translations"] == [{"language_code": "enUs", "value": "Zeus Ng 3P4W"}]
    assert [fw["id"] for fw in recloser["firmwares"]] == [fw_a, fw_b]
    assert [s["service_key"] for s in recloser["firmwares"][0]["services"]] == ["SEC_PROT"]
    assert recloser["firmwares"][1]["services"] == []
