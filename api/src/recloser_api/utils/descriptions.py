from __future__ import annotations

from typing import Mapping, Optional

from sqlmodel import Session, select

from catalog_models import DescriptionKey, Language, Translation

from recloser_api.catalog.errors import InvalidReference


def ensure_description_key(session: Session, key: str) -> DescriptionKey:
    """Register a description key if it is not known yet (no commit)."""
    existing = session.get(DescriptionKey, key)
    if existing is not None:
        return existing
    created = DescriptionKey(key=key)
    session.add(created)
    session.flush()
    return created


def upsert_translation(session: Session, key: str, language_code: str, value: str) -> Translation:
    """Insert or replace the value of ``key`` in one language (no commit)."""
    if session.get(Language, language_code) is None:
        raise InvalidReference(f"Unknown language '{language_code}'")
    ensure_description_key(session, key)
    row = session.exec(
        select(Translation).where(
            Translation.description_key == key,
            Translation.language_code == language_code,
        )
    ).first()
    if row is None:
        row = Translation(description_key=key, language_code=language_code, value=value)
    else:
        row.value = value
    session.add(row)
    return row


def upsert_translations(session: Session, key: str, values: Optional[Mapping[str, str]]) -> None:
    ensure_description_key(session, key)
    for language_code, value in (values or {}).items():
        upsert_translation(session, key, language_code, value)
