import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, status
from pydantic import BaseModel, Field
from sqlmodel import Session, select

from catalog_models import FirmwareVersion, Recloser
from recloser_api.db import get_session
from recloser_api.utils.descriptions import upsert_translations

router = APIRouter(prefix="/reclosers", tags=["reclosers"])
logger = logging.getLogger(__name__)


class RecloserIn(BaseModel):
    description_key: str = Field(min_length=1)
    model: str = ""
    translations: Optional[Dict[str, str]] = None


@router.post("", response_model=Recloser, status_code=status.HTTP_201_CREATED)
def create_recloser(payload: RecloserIn, session: Session = Depends(get_session)) -> Recloser:  # noqa: B008
    upsert_translations(session, payload.description_key, payload.translations)
    recloser = Recloser(description_key=payload.description_key, model=payload.model)
    session.add(recloser)
    session.commit()
    session.refresh(recloser)
    logger.info("Recloser created", extra={"recloser_id": recloser.id})
    return recloser


@router.get("", response_model=List[Recloser])
def list_reclosers(session: Session = Depends(get_session)) -> List[Recloser]:  # noqa: B008
    reclosers = session.exec(select(Recloser).order_by(Recloser.id)).all()
    logger.info("Reclosers listed", extra={"count": len(reclosers)})
    return reclosers


@router.get("/{recloser_id}", response_model=Recloser)
def get_recloser(recloser_id: int = Path(..., gt=0), session: Session = Depends(get_session)) -> Recloser:  # noqa: B008
    recloser = session.get(Recloser, recloser_id)
    if recloser is None:
        logger.warning("Recloser not found", extra={"recloser_id": recloser_id})
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recloser not found")
    return recloser


@router.get("/{recloser_id}/firmwares", response_model=List[FirmwareVersion])
def list_recloser_firmwares(
    recloser_id: int = Path(..., gt=0),
    session: Session = Depends(get_session),  # noqa: B008
) -> List[FirmwareVersion]:
    if session.get(Recloser, recloser_id) is None:
        logger.warning("Recloser not found", extra={"recloser_id": recloser_id})
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recloser not found")
    return session.exec(
        select(FirmwareVersion).where(FirmwareVersion.recloser_id == recloser_id).order_by(FirmwareVersion.id)
    ).all()


@router.put("/{recloser_id}", response_model=Recloser)
def update_recloser(
    payload: RecloserIn,
    recloser_id: int = Path(..., gt=0),
    session: Session = Depends(get_session),  # noqa: B008
) -> Recloser:
    recloser = session.get(Recloser, recloser_id)
    if recloser is None:
        logger.warning("Recloser not found for update", extra={"recloser_id": recloser_id})
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recloser not found")
    upsert_translations(session, payload.description_key, payload.translations)
    recloser.description_key = payload.description_key
    recloser.model = payload.model
    session.add(recloser)
    session.commit()
    session.refresh(recloser)
    logger.info("Recloser updated", extra={"recloser_id": recloser.id})
    return recloser


@router.delete("/{recloser_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recloser(recloser_id: int = Path(..., gt=0), session: Session = Depends(get_session)) -> None:  # noqa: B008
    recloser = session.get(Recloser, recloser_id)
    if recloser is None:
        logger.warning("Recloser not found for delete", extra={"recloser_id": recloser_id})
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recloser not found")
    # Firmware versions, their services and features go with it (ON DELETE CASCADE)
    session.delete(recloser)
    session.commit()
    logger.info("Recloser deleted", extra={"recloser_id": recloser_id})
    return None
