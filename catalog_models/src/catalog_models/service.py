from typing import Optional

from sqlalchemy import Column, ForeignKey, Integer, UniqueConstraint
from sqlmodel import Field

from .base import BaseModel


class Service(BaseModel, table=True):
    """Node of the per-firmware configuration screen tree.

    A root service has no parent. Parent and child must share a firmware; the
    schema does not enforce it, the API does on write.
    """

    __tablename__ = "services"
    __table_args__ = (
        UniqueConstraint("firmware_id", "service_key", name="uq_service_firmware_key"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    service_key: str = Field(index=True)
    description_key: str = Field(foreign_key="descriptions.key", index=True)
    parent_id: Optional[int] = Field(
        default=None,
        sa_column=Column(
            Integer,
            ForeignKey("services.id", ondelete="CASCADE"),
            nullable=True,
            index=True,
        ),
    )
    firmware_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("firmware_versions.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )


class Feature(BaseModel, table=True):
    """Configurable parameter owned by exactly one service."""

    __tablename__ = "features"

    id: Optional[int] = Field(default=None, primary_key=True)
    description_key: str = Field(foreign_key="descriptions.key", index=True)
    service_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("services.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )
