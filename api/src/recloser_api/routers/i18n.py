import logging
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from catalog_models import DescriptionKey, Language
from recloser_api.catalog import SqlCatalogStore
from recloser_api.catalog.schemas import TranslationEntry
from recloser_api.db import get_session
from recloser_api.utils.descriptions import upsert_translations

router = APIRouter(tags=["i18n"])
logger = logging.getLogger(__name__)


class LanguageIn(BaseModel):
    code: str = Field(min_length=1, max_length=16)
    name: str = Field(min_length=1)


class TranslationsIn(BaseModel):
    translations: Dict[str, str] = Field(default_factory=dict)


@router.post("/languages", response_model=Language, status_code=status.HTTP_201_CREATED)
def create_language(payload: LanguageIn, session: Session = Depends(get_session)) -> Language:  # noqa: B008
    if session.get(Language, payload.code) is not None:
        logger.warning("Language already exists", extra={"language_code": payload.code})
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Language already exists")
    language = Language(code=payload.code, name=payload.name)
    session.add(language)
    session.commit()
    session.refresh(language)
    logger.info("Language created", extra={"language_code": language.code})
    return language


@router.get("/languages", response_model=List[Language])
def list_languages(session: Session = Depends(get_session)) -> List[Language]:  # noqa: B008
    languages = session.exec(select(Language).order_by(Language.code)).all()
    logger.info("Languages listed", extra={"count": len(languages)})
    return languages


@router.delete("/languages/{code}", status_code=status.HTTP_204_NO_CONTENT)
def delete_language(code: str, session: Session = Depends(get_session)) -> None:  # noqa: B008
    language = session.get(Language, code)
    if language is None:
        logger.warning("Language not found for delete", extra={"language_code": code})
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Language not found")
    session.delete(language)
    session.commit()
    logger.info("Language deleted", extra={"language_code": code})
    return None


@router.get("/translations/{key}", response_model=List[TranslationEntry])
def get_translations(key: str, session: Session = Depends(get_session)) -> List[TranslationEntry]:  # noqa: B008
    return SqlCatalogStore(session).translations_for(key)


@router.get("/translations/{key}/{language_code}", response_model=Dict[str, str])
def get_translation(key: str, language_code: str, session: Session = Depends(get_session)) -> Dict[str, str]:  # noqa: B008
    # Missing translations resolve to an empty string, never a 404
    return {"value": SqlCatalogStore(session).translation_for(key, language_code)}


@router.put("/translations/{key}", status_code=status.HTTP_204_NO_CONTENT)
def put_translations(
    key: str,
    payload: TranslationsIn,
    session: Session = Depends(get_session),  # noqa: B008
) -> None:
    upsert_translations(session, key, payload.translations)
    session.commit()
    logger.info("Translations upserted", extra={"description_key": key, "count": len(payload.translations)})
    return None


@router.delete("/translations/{key}", status_code=status.HTTP_204_NO_CONTENT)
def delete_description_key(key: str, session: Session = Depends(get_session)) -> None:  # noqa: B008
    description = session.get(DescriptionKey, key)
    if description is None:
        logger.warning("Description key not found for delete", extra={"description_key": key})
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Description key not found")
    session.delete(description)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        logger.warning("Description key still referenced", extra={"description_key": key})
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Description key is in use")
    logger.info("Description key deleted", extra={"description_key": key})
    return None
