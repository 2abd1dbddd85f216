from typing import Optional

from sqlalchemy import Column, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.dialects.postgresql import TEXT
from sqlmodel import Field

from .base import BaseModel


class ComponentType(BaseModel, table=True):
    """Catalog of UI widget kinds (static reference data)."""

    __tablename__ = "component_types"

    id: Optional[int] = Field(default=None, primary_key=True)
    type: str = Field(unique=True, index=True)
    key: str


class LimitType(BaseModel, table=True):
    """Catalog of limit kinds (static reference data)."""

    __tablename__ = "limit_types"

    id: Optional[int] = Field(default=None, primary_key=True)
    key: str = Field(unique=True, index=True)


class FeatureComponent(BaseModel, table=True):
    """Binds a component type to a feature.

    Duplicates are not prevented; readers pick the lowest id.
    """

    __tablename__ = "feature_components"

    id: Optional[int] = Field(default=None, primary_key=True)
    feature_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("features.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )
    component_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("component_types.id", ondelete="CASCADE"),
            nullable=False,
        )
    )


class FeatureComponentLimit(BaseModel, table=True):
    __tablename__ = "feature_component_limits"
    __table_args__ = (
        UniqueConstraint("feature_component_id", "limit_id", name="uq_feature_component_limit"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    feature_component_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("feature_components.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )
    limit_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("limit_types.id", ondelete="CASCADE"),
            nullable=False,
        )
    )
    value: str = Field(sa_type=TEXT)
