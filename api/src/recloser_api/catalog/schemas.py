from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from catalog_models.enums import DifferenceType


class TranslationEntry(BaseModel):
    language_code: str
    value: str


class LimitEntry(BaseModel):
    key: str
    value: str


class FeatureSummary(BaseModel):
    id: int
    feature_key: str
    translations: List[TranslationEntry] = Field(default_factory=list)


class ServiceNode(BaseModel):
    id: int
    service_key: str
    translations: List[TranslationEntry] = Field(default_factory=list)
    features: List[FeatureSummary] = Field(default_factory=list)
    children: List[ServiceNode] = Field(default_factory=list)


class FeatureDiff(BaseModel):
    feature_key: str
    difference_type: DifferenceType


class ServiceDiff(BaseModel):
    service_key: str
    display_name: str
    difference_type: DifferenceType
    feature_differences: List[FeatureDiff] = Field(default_factory=list)
    child_differences: List[ServiceDiff] = Field(default_factory=list)


class DiffSummary(BaseModel):
    added: int = 0
    removed: int = 0
    modified: int = 0

    def describe(self) -> str:
        return (
            f"{self.added} service(s) added, {self.removed} service(s) removed, "
            f"{self.modified} service(s) modified"
        )


class TreeComparison(BaseModel):
    firmware_id_a: int
    firmware_id_b: int
    language_code: str
    summary: DiffSummary
    summary_text: str
    differences: List[ServiceDiff] = Field(default_factory=list)


class FeatureLayout(BaseModel):
    feature_id: int
    feature_key: str
    translations: List[TranslationEntry] = Field(default_factory=list)
    component_type: Optional[str] = None
    component_key: Optional[str] = None
    limits: List[LimitEntry] = Field(default_factory=list)


class ServiceLayout(BaseModel):
    service_id: int
    service_key: str
    translations: List[TranslationEntry] = Field(default_factory=list)
    features: List[FeatureLayout] = Field(default_factory=list)
    children: List[ServiceLayout] = Field(default_factory=list)


class FirmwareInventory(BaseModel):
    id: int
    version: str
    services: List[ServiceNode] = Field(default_factory=list)


class RecloserInventory(BaseModel):
    id: int
    model: str
    translations: List[TranslationEntry] = Field(default_factory=list)
    firmwares: List[FirmwareInventory] = Field(default_factory=list)


class ValidationResult(BaseModel):
    valid: bool
    message: str = ""
