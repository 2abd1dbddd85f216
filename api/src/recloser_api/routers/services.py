import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from catalog_models import FirmwareVersion, Service
from recloser_api.catalog.errors import InvalidReference
from recloser_api.db import get_session
from recloser_api.utils.descriptions import upsert_translations
from recloser_api.utils.service_tree import check_parent

router = APIRouter(prefix="/services", tags=["services"])
logger = logging.getLogger(__name__)


class ServiceIn(BaseModel):
    service_key: str = Field(min_length=1)
    description_key: str = Field(min_length=1)
    firmware_id: int = Field(gt=0)
    parent_id: Optional[int] = Field(default=None, gt=0)
    translations: Optional[Dict[str, str]] = None


def _require_firmware(session: Session, firmware_id: int) -> None:
    if session.get(FirmwareVersion, firmware_id) is None:
        logger.warning("Firmware not found for service", extra={"firmware_id": firmware_id})
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Firmware does not exist")


def _commit_service(session: Session, service: Service) -> Service:
    log_extra = {"service_key": service.service_key, "firmware_id": service.firmware_id}
    session.add(service)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        logger.warning("Duplicate service key in firmware", extra=log_extra)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Service key already exists in firmware")
    session.refresh(service)
    return service


@router.post("", response_model=Service, status_code=status.HTTP_201_CREATED)
def create_service(payload: ServiceIn, session: Session = Depends(get_session)) -> Service:  # noqa: B008
    _require_firmware(session, payload.firmware_id)
    check_parent(session, payload.firmware_id, payload.parent_id)
    upsert_translations(session, payload.description_key, payload.translations)
    service = _commit_service(
        session,
        Service(
            service_key=payload.service_key,
            description_key=payload.description_key,
            firmware_id=payload.firmware_id,
            parent_id=payload.parent_id,
        ),
    )
    logger.info("Service created", extra={"service_id": service.id, "firmware_id": service.firmware_id})
    return service


@router.get("", response_model=List[Service])
def list_services(
    firmware_id: int = Query(..., gt=0),
    parent_id: Optional[int] = Query(default=None, gt=0),
    session: Session = Depends(get_session),  # noqa: B008
) -> List[Service]:
    stmt = select(Service).where(Service.firmware_id == firmware_id)
    if parent_id is not None:
        stmt = stmt.where(Service.parent_id == parent_id)
    services = session.exec(stmt.order_by(Service.id)).all()
    logger.info("Services listed", extra={"firmware_id": firmware_id, "count": len(services)})
    return services


@router.get("/{service_id}", response_model=Service)
def get_service(service_id: int = Path(..., gt=0), session: Session = Depends(get_session)) -> Service:  # noqa: B008
    service = session.get(Service, service_id)
    if service is None:
        logger.warning("Service not found", extra={"service_id": service_id})
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service not found")
    return service


@router.put("/{service_id}", response_model=Service)
def update_service(
    payload: ServiceIn,
    service_id: int = Path(..., gt=0),
    session: Session = Depends(get_session),  # noqa: B008
) -> Service:
    service = session.get(Service, service_id)
    if service is None:
        logger.warning("Service not found for update", extra={"service_id": service_id})
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service not found")
    _require_firmware(session, payload.firmware_id)
    if payload.firmware_id != service.firmware_id:
        has_children = session.exec(select(Service.id).where(Service.parent_id == service_id)).first()
        if has_children is not None:
            raise InvalidReference("A service with children cannot move to another firmware")
    check_parent(session, payload.firmware_id, payload.parent_id, service_id=service_id)
    upsert_translations(session, payload.description_key, payload.translations)
    service.service_key = payload.service_key
    service.description_key = payload.description_key
    service.firmware_id = payload.firmware_id
    service.parent_id = payload.parent_id
    service = _commit_service(session, service)
    logger.info("Service updated", extra={"service_id": service.id})
    return service


@router.delete("/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_service(service_id: int = Path(..., gt=0), session: Session = Depends(get_session)) -> None:  # noqa: B008
    service = session.get(Service, service_id)
    if service is None:
        logger.warning("Service not found for delete", extra={"service_id": service_id})
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service not found")
    # Child services and features are removed by ON DELETE CASCADE
    session.delete(service)
    session.commit()
    logger.info("Service deleted", extra={"service_id": service_id})
    return None
