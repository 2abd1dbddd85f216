import logging
import os
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query
from pydantic import BaseModel
from sqlmodel import Session

from recloser_api.catalog import SqlCatalogStore, assemble_layout, build_tree, compare_firmwares, full_inventory
from recloser_api.catalog.errors import NotFound
from recloser_api.catalog.schemas import (
    RecloserInventory,
    ServiceLayout,
    ServiceNode,
    TreeComparison,
    ValidationResult,
)
from recloser_api.catalog.validation import validate_value
from recloser_api.db import get_read_session
from recloser_api.responses import CatalogJSONResponse

router = APIRouter(tags=["catalog"])
logger = logging.getLogger(__name__)


def get_store(session: Session = Depends(get_read_session)) -> SqlCatalogStore:  # noqa: B008
    return SqlCatalogStore(session)


def _default_language() -> str:
    return os.getenv("DEFAULT_LANGUAGE", "enUs")


class FeatureValue(BaseModel):
    value: str


# Static /firmwares/compare is declared here and this router is included
# before the firmwares CRUD router, so it never hits /firmwares/{firmware_id}.
# Tree-shaped payloads are returned as CatalogJSONResponse; response_model
# only documents them.
@router.get("/firmwares/compare", response_model=TreeComparison)
def compare_service_trees(
    firmware_id_a: int = Query(..., gt=0),
    firmware_id_b: int = Query(..., gt=0),
    lang: Optional[str] = None,
    store: SqlCatalogStore = Depends(get_store),  # noqa: B008
) -> CatalogJSONResponse:
    language_code = (lang or "").strip() or _default_language()
    comparison = compare_firmwares(store, firmware_id_a, firmware_id_b, language_code)
    return CatalogJSONResponse(comparison, headers={"Content-Language": language_code})


@router.get("/firmwares/{firmware_id}/service-tree", response_model=List[ServiceNode])
def get_service_tree(
    firmware_id: int = Path(..., gt=0),
    store: SqlCatalogStore = Depends(get_store),  # noqa: B008
) -> CatalogJSONResponse:
    return CatalogJSONResponse(build_tree(store, firmware_id))


@router.get("/services/{service_id}/layout", response_model=ServiceLayout)
def get_screen_layout(
    service_id: int = Path(..., gt=0),
    store: SqlCatalogStore = Depends(get_store),  # noqa: B008
) -> CatalogJSONResponse:
    layout = assemble_layout(store, service_id)
    if layout is None:
        raise NotFound("Service", service_id)
    return CatalogJSONResponse(layout)


@router.get("/inventory", response_model=List[RecloserInventory])
def get_full_inventory(store: SqlCatalogStore = Depends(get_store)) -> CatalogJSONResponse:  # noqa: B008
    return CatalogJSONResponse(full_inventory(store))


@router.post("/features/{feature_id}/validate", response_model=ValidationResult)
def validate_feature_value(
    payload: FeatureValue,
    feature_id: int = Path(..., gt=0),
    store: SqlCatalogStore = Depends(get_store),  # noqa: B008
) -> ValidationResult:
    binding = store.layout_binding_for(feature_id)
    if binding is None:
        logger.warning("Feature has no component binding", extra={"feature_id": feature_id})
        raise NotFound("Feature component", feature_id)
    component, binding_id = binding
    result = validate_value(component.type, store.limits_for(binding_id), payload.value)
    logger.info(
        "Feature value validated",
        extra={"feature_id": feature_id, "component_type": component.type, "valid": result.valid},
    )
    return result
