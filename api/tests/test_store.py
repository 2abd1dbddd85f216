"""SqlCatalogStore ordering and failure behaviour."""

import logging
from http import HTTPStatus

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlmodel import Session

from catalog_models import FeatureComponent
from factories import bind_component, make_feature, make_service, two_firmwares
from recloser_api import db
from recloser_api.catalog import SqlCatalogStore, StoreUnavailable, build_tree
from recloser_api.main import app
from recloser_api.routers.catalog import get_store


class BrokenSession:
    """Session stand-in whose every query fails like a dropped connection."""

    def exec(self, *args, **kwargs):  # type: ignore[no-untyped-def]
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    def get(self, *args, **kwargs):  # type: ignore[no-untyped-def]
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))


def test_services_by_orders_by_id_and_filters_firmware(client, store) -> None:
    fw_a, fw_b = two_firmwares(client)
    first = make_service(client, fw_a, "SEC_Z")
    second = make_service(client, fw_a, "SEC_A")
    make_service(client, fw_b, "SEC_OTHER")
    child = make_service(client, fw_a, "SEC_Z_CHILD", parent_id=first)

    assert [s.id for s in store.services_by(None, fw_a)] == [first, second]
    assert [s.id for s in store.services_by(first, fw_a)] == [child]
    # Parent match alone is not enough
    assert store.services_by(first, fw_b) == []


def test_translation_for_missing_value_is_empty_string(client, store) -> None:
    fw_a, _ = two_firmwares(client)
    make_service(client, fw_a, "SEC_PROT", translations={"enUs": "Protection"})

    assert store.translation_for("SEC_PROT", "enUs") == "Protection"
    assert store.translation_for("SEC_PROT", "ptBr") == ""
    assert store.translation_for("NO_SUCH_KEY", "enUs") == ""


def test_translations_for_orders_by_language_code(client, store) -> None:
    fw_a, _ = two_firmwares(client)
    make_service(client, fw_a, "SEC_PROT", translations={"ptBr": "Proteção", "enUs": "Protection"})

    assert [t.language_code for t in store.translations_for("SEC_PROT")] == ["enUs", "ptBr"]


def test_layout_binding_prefers_lowest_id(client, session, store) -> None:
    fw_a, _ = two_firmwares(client)
    feature_id = make_feature(client, make_service(client, fw_a, "SEC_PROT"), "FEAT_PICKUP")
    first_binding = bind_component(client, feature_id, "Decimal", {"MIN_VALUE": "0"})
    # A second row can only appear through direct writes
    toggle_id = next(c["id"] for c in client.get("/components").json() if c["type"] == "Toggle")
    session.add(FeatureComponent(feature_id=feature_id, component_id=toggle_id))
    session.commit()

    component, binding_id = store.layout_binding_for(feature_id)
    assert component.type == "Decimal"
    assert binding_id == first_binding
    assert [(entry.key, entry.value) for entry in store.limits_for(binding_id)] == [("MIN_VALUE", "0")]


def test_store_read_failure_raises_store_unavailable() -> None:
    store = SqlCatalogStore(BrokenSession())  # type: ignore[arg-type]
    with pytest.raises(StoreUnavailable):
        build_tree(store, 1)


def test_store_failure_maps_to_503(client: TestClient) -> None:
    app.dependency_overrides[get_store] = lambda: SqlCatalogStore(BrokenSession())  # type: ignore[arg-type]
    try:
        resp = client.get("/firmwares/1/service-tree")
        assert resp.status_code == HTTPStatus.SERVICE_UNAVAILABLE
        assert resp.json()["error"] == "StoreUnavailable"
        resp = client.get("/services/1/layout")
        assert resp.status_code == HTTPStatus.SERVICE_UNAVAILABLE
    finally:
        app.dependency_overrides.pop(get_store, None)


def test_store_failure_is_logged_once(client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="recloser_api")
    app.dependency_overrides[get_store] = lambda: SqlCatalogStore(BrokenSession())  # type: ignore[arg-type]
    try:
        resp = client.get("/firmwares/1/service-tree")
    finally:
        app.dependency_overrides.pop(get_store, None)

    assert resp.status_code == HTTPStatus.SERVICE_UNAVAILABLE
    reported = [r for r in caplog.records if r.name.startswith("recloser_api") and r.levelno >= logging.WARNING]
    assert [(r.name, r.levelno) for r in reported] == [("recloser_api.main", logging.ERROR)]
    assert reported[0].exception_type == "StoreUnavailable"
    # The failing store operation is still traceable at debug level
    assert any(
        r.name == "recloser_api.catalog.store" and r.operation == "services_by"
        for r in caplog.records
        if r.levelno == logging.DEBUG
    )


def test_snapshot_reads_are_postgres_only(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CATALOG_SNAPSHOT_READS", "true")
    assert db.engine.dialect.name == "sqlite"
    assert not db._snapshot_reads_enabled()


def test_snapshot_read_requests_repeatable_read(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    requested = []

    def record(self, *args, **kwargs):  # type: ignore[no-untyped-def]
        requested.append(kwargs.get("execution_options"))

    monkeypatch.setattr(db, "_snapshot_reads_enabled", lambda: True)
    monkeypatch.setattr(Session, "connection", record)

    resp = client.get("/firmwares/1/service-tree")
    assert resp.status_code == HTTPStatus.OK
    assert resp.json() == []
    assert requested == [{"isolation_level": "REPEATABLE READ"}]


def test_snapshot_read_failure_maps_to_503(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    def refuse(self, *args, **kwargs):  # type: ignore[no-untyped-def]
        raise OperationalError("SET TRANSACTION ISOLATION LEVEL", {}, Exception("connection refused"))

    monkeypatch.setattr(db, "_snapshot_reads_enabled", lambda: True)
    monkeypatch.setattr(Session, "connection", refuse)

    resp = client.get("/firmwares/1/service-tree")
    assert resp.status_code == HTTPStatus.SERVICE_UNAVAILABLE
    assert resp.json()["error"] == "StoreUnavailable"
    assert client.get("/services/1/layout").status_code == HTTPStatus.SERVICE_UNAVAILABLE
