"""Shared SQLModel models of the recloser catalog.

Table models and enums reused by the API, its migrations and its seeding.
"""

from .base import BaseModel
from .component import ComponentType, FeatureComponent, FeatureComponentLimit, LimitType
from .enums import COMPONENT_KEYS, ComponentKind, DifferenceType, LimitKey
from .language import Language
from .recloser import FirmwareVersion, Recloser
from .service import Feature, Service
from .translation import DescriptionKey, Translation

__all__ = [
    "BaseModel",
    "Language",
    "DescriptionKey",
    "Translation",
    "Recloser",
    "FirmwareVersion",
    "Service",
    "Feature",
    "ComponentType",
    "LimitType",
    "FeatureComponent",
    "FeatureComponentLimit",
    "ComponentKind",
    "COMPONENT_KEYS",
    "LimitKey",
    "DifferenceType",
]
