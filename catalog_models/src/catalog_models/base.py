from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, func
from sqlmodel import Field, SQLModel


def _timestamp_field(**column_kwargs: Any) -> Any:
    # A fresh Field per attribute; catalog tables must not share Column objects
    return Field(
        default=None,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"server_default": func.now(), "nullable": True, **column_kwargs},
    )


class BaseModel(SQLModel, table=False):
    """Server-stamped ``created_at``/``updated_at`` shared by every catalog table.

    Reference rows (languages, component and limit types) carry them too so
    seeding runs can be told apart.
    """

    created_at: datetime | None = _timestamp_field()
    updated_at: datetime | None = _timestamp_field(onupdate=func.now())
