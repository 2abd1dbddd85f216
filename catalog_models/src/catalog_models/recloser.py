from typing import Optional

from sqlalchemy import Column, ForeignKey, Integer
from sqlmodel import Field

from .base import BaseModel


class Recloser(BaseModel, table=True):
    """A recloser device family."""

    __tablename__ = "reclosers"

    id: Optional[int] = Field(default=None, primary_key=True)
    description_key: str = Field(foreign_key="descriptions.key", index=True)
    model: str = Field(default="")


class FirmwareVersion(BaseModel, table=True):
    """Firmware release of a recloser. Deleted together with its recloser."""

    __tablename__ = "firmware_versions"

    id: Optional[int] = Field(default=None, primary_key=True)
    version: str
    recloser_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("reclosers.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )
