import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from pydantic import BaseModel, Field
from sqlalchemy import delete
from sqlmodel import Session, select

from catalog_models import ComponentType, Feature, FeatureComponent, FeatureComponentLimit, LimitType, Service
from recloser_api.catalog.errors import InvalidReference
from recloser_api.db import get_session
from recloser_api.utils.descriptions import upsert_translations

router = APIRouter(prefix="/features", tags=["features"])
logger = logging.getLogger(__name__)


class FeatureIn(BaseModel):
    description_key: str = Field(min_length=1)
    service_id: int = Field(gt=0)
    translations: Optional[Dict[str, str]] = None


class ComponentBindingIn(BaseModel):
    component_type: str = Field(min_length=1)
    limits: Dict[str, str] = Field(default_factory=dict)


class LimitsIn(BaseModel):
    limits: Dict[str, str]


def _get_feature(session: Session, feature_id: int) -> Feature:
    feature = session.get(Feature, feature_id)
    if feature is None:
        logger.warning("Feature not found", extra={"feature_id": feature_id})
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Feature not found")
    return feature


def _require_service(session: Session, service_id: int) -> None:
    if session.get(Service, service_id) is None:
        logger.warning("Service not found for feature", extra={"service_id": service_id})
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Service does not exist")


def _first_binding(session: Session, feature_id: int) -> Optional[FeatureComponent]:
    return session.exec(
        select(FeatureComponent).where(FeatureComponent.feature_id == feature_id).order_by(FeatureComponent.id)
    ).first()


def _set_limits(session: Session, binding_id: int, limits: Dict[str, str]) -> None:
    """Upsert one value per (binding, limit type)."""
    for key, value in limits.items():
        limit = session.exec(select(LimitType).where(LimitType.key == key)).first()
        if limit is None:
            raise InvalidReference(f"Unknown limit type '{key}'")
        row = session.exec(
            select(FeatureComponentLimit).where(
                FeatureComponentLimit.feature_component_id == binding_id,
                FeatureComponentLimit.limit_id == limit.id,
            )
        ).first()
        if row is None:
            row = FeatureComponentLimit(feature_component_id=binding_id, limit_id=limit.id, value=value)
        else:
            row.value = value
        session.add(row)


@router.post("", response_model=Feature, status_code=status.HTTP_201_CREATED)
def create_feature(payload: FeatureIn, session: Session = Depends(get_session)) -> Feature:  # noqa: B008
    _require_service(session, payload.service_id)
    upsert_translations(session, payload.description_key, payload.translations)
    feature = Feature(description_key=payload.description_key, service_id=payload.service_id)
    session.add(feature)
    session.commit()
    session.refresh(feature)
    logger.info("Feature created", extra={"feature_id": feature.id, "service_id": feature.service_id})
    return feature


@router.get("", response_model=List[Feature])
def list_features(
    service_id: int = Query(..., gt=0),
    session: Session = Depends(get_session),  # noqa: B008
) -> List[Feature]:
    features = session.exec(select(Feature).where(Feature.service_id == service_id).order_by(Feature.id)).all()
    logger.info("Features listed", extra={"service_id": service_id, "count": len(features)})
    return features


@router.get("/{feature_id}", response_model=Feature)
def get_feature(feature_id: int = Path(..., gt=0), session: Session = Depends(get_session)) -> Feature:  # noqa: B008
    return _get_feature(session, feature_id)


@router.put("/{feature_id}", response_model=Feature)
def update_feature(
    payload: FeatureIn,
    feature_id: int = Path(..., gt=0),
    session: Session = Depends(get_session),  # noqa: B008
) -> Feature:
    feature = _get_feature(session, feature_id)
    _require_service(session, payload.service_id)
    upsert_translations(session, payload.description_key, payload.translations)
    feature.description_key = payload.description_key
    feature.service_id = payload.service_id
    session.add(feature)
    session.commit()
    session.refresh(feature)
    logger.info("Feature updated", extra={"feature_id": feature.id})
    return feature


@router.delete("/{feature_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_feature(feature_id: int = Path(..., gt=0), session: Session = Depends(get_session)) -> None:  # noqa: B008
    feature = _get_feature(session, feature_id)
    session.delete(feature)
    session.commit()
    logger.info("Feature deleted", extra={"feature_id": feature_id})
    return None


@router.put("/{feature_id}/component", response_model=FeatureComponent)
def bind_component(
    payload: ComponentBindingIn,
    feature_id: int = Path(..., gt=0),
    session: Session = Depends(get_session),  # noqa: B008
) -> FeatureComponent:
    """Bind a component type to the feature, replacing any previous binding."""
    _get_feature(session, feature_id)
    component = session.exec(select(ComponentType).where(ComponentType.type == payload.component_type)).first()
    if component is None:
        raise InvalidReference(f"Unknown component type '{payload.component_type}'")
    session.exec(delete(FeatureComponent).where(FeatureComponent.feature_id == feature_id))
    binding = FeatureComponent(feature_id=feature_id, component_id=component.id)
    session.add(binding)
    session.flush()
    _set_limits(session, binding.id, payload.limits)
    session.commit()
    session.refresh(binding)
    logger.info(
        "Feature component bound",
        extra={"feature_id": feature_id, "component_type": component.type, "limits": len(payload.limits)},
    )
    return binding


@router.put("/{feature_id}/component/limits", status_code=status.HTTP_204_NO_CONTENT)
def set_component_limits(
    payload: LimitsIn,
    feature_id: int = Path(..., gt=0),
    session: Session = Depends(get_session),  # noqa: B008
) -> None:
    _get_feature(session, feature_id)
    binding = _first_binding(session, feature_id)
    if binding is None:
        logger.warning("Feature has no component binding", extra={"feature_id": feature_id})
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Feature component not found")
    _set_limits(session, binding.id, payload.limits)
    session.commit()
    logger.info("Feature component limits set", extra={"feature_id": feature_id, "count": len(payload.limits)})
    return None


@router.delete("/{feature_id}/component", status_code=status.HTTP_204_NO_CONTENT)
def unbind_component(feature_id: int = Path(..., gt=0), session: Session = Depends(get_session)) -> None:  # noqa: B008
    _get_feature(session, feature_id)
    session.exec(delete(FeatureComponent).where(FeatureComponent.feature_id == feature_id))
    session.commit()
    logger.info("Feature component unbound", extra={"feature_id": feature_id})
    return None
