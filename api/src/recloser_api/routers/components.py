import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session, select

from catalog_models import ComponentType, LimitType
from recloser_api.db import get_session

router = APIRouter(tags=["components"])
logger = logging.getLogger(__name__)


@router.get("/components", response_model=List[ComponentType])
def list_component_types(session: Session = Depends(get_session)) -> List[ComponentType]:  # noqa: B008
    components = session.exec(select(ComponentType).order_by(ComponentType.id)).all()
    logger.info("Component types listed", extra={"count": len(components)})
    return components


@router.get("/limits", response_model=List[LimitType])
def list_limit_types(session: Session = Depends(get_session)) -> List[LimitType]:  # noqa: B008
    limits = session.exec(select(LimitType).order_by(LimitType.id)).all()
    logger.info("Limit types listed", extra={"count": len(limits)})
    return limits
