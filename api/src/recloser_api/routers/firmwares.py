import logging

from fastapi import APIRouter, Depends, HTTPException, Path, status
from pydantic import BaseModel, Field
from sqlmodel import Session

from catalog_models import FirmwareVersion, Recloser
from recloser_api.db import get_session

router = APIRouter(prefix="/firmwares", tags=["firmwares"])
logger = logging.getLogger(__name__)


class FirmwareIn(BaseModel):
    version: str = Field(min_length=1)
    recloser_id: int = Field(gt=0)


def _require_recloser(session: Session, recloser_id: int) -> None:
    if session.get(Recloser, recloser_id) is None:
        logger.warning("Recloser not found for firmware", extra={"recloser_id": recloser_id})
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Recloser does not exist")


@router.post("", response_model=FirmwareVersion, status_code=status.HTTP_201_CREATED)
def create_firmware(payload: FirmwareIn, session: Session = Depends(get_session)) -> FirmwareVersion:  # noqa: B008
    _require_recloser(session, payload.recloser_id)
    firmware = FirmwareVersion(version=payload.version, recloser_id=payload.recloser_id)
    session.add(firmware)
    session.commit()
    session.refresh(firmware)
    logger.info("Firmware created", extra={"firmware_id": firmware.id, "recloser_id": firmware.recloser_id})
    return firmware


@router.get("/{firmware_id}", response_model=FirmwareVersion)
def get_firmware(firmware_id: int = Path(..., gt=0), session: Session = Depends(get_session)) -> FirmwareVersion:  # noqa: B008
    firmware = session.get(FirmwareVersion, firmware_id)
    if firmware is None:
        logger.warning("Firmware not found", extra={"firmware_id": firmware_id})
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Firmware not found")
    return firmware


@router.put("/{firmware_id}", response_model=FirmwareVersion)
def update_firmware(
    payload: FirmwareIn,
    firmware_id: int = Path(..., gt=0),
    session: Session = Depends(get_session),  # noqa: B008
) -> FirmwareVersion:
    firmware = session.get(FirmwareVersion, firmware_id)
    if firmware is None:
        logger.warning("Firmware not found for update", extra={"firmware_id": firmware_id})
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Firmware not found")
    _require_recloser(session, payload.recloser_id)
    firmware.version = payload.version
    firmware.recloser_id = payload.recloser_id
    session.add(firmware)
    session.commit()
    session.refresh(firmware)
    logger.info("Firmware updated", extra={"firmware_id": firmware.id})
    return firmware


@router.delete("/{firmware_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_firmware(firmware_id: int = Path(..., gt=0), session: Session = Depends(get_session)) -> None:  # noqa: B008
    firmware = session.get(FirmwareVersion, firmware_id)
    if firmware is None:
        logger.warning("Firmware not found for delete", extra={"firmware_id": firmware_id})
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Firmware not found")
    session.delete(firmware)
    session.commit()
    logger.info("Firmware deleted", extra={"firmware_id": firmware_id})
    return None
