from typing import Optional

from sqlalchemy import Column, ForeignKey, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import TEXT
from sqlmodel import Field

from .base import BaseModel


class DescriptionKey(BaseModel, table=True):
    """Language-independent identifier of a unit of display text."""

    __tablename__ = "descriptions"

    key: str = Field(primary_key=True)


class Translation(BaseModel, table=True):
    """Localized value of a description key.

    Uniqueness is enforced per (description_key, language_code). Missing rows
    are tolerated by readers and resolve to an empty string.
    """

    __tablename__ = "translations"
    __table_args__ = (
        UniqueConstraint("description_key", "language_code", name="uq_translation_key_lang"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    description_key: str = Field(
        sa_column=Column(
            String(),
            ForeignKey("descriptions.key", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )
    language_code: str = Field(
        sa_column=Column(
            String(),
            ForeignKey("languages.code", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )
    value: str = Field(sa_type=TEXT)
