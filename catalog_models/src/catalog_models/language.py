from sqlmodel import Field

from .base import BaseModel


class Language(BaseModel, table=True):
    """A language translations can be written in, e.g. ``enUs``."""

    __tablename__ = "languages"

    code: str = Field(primary_key=True, max_length=16)
    name: str
