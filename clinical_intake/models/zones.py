"""Anatomical zone models, red flags and pain patterns."""

from pydantic import BaseModel, Field
from typing import Optional, List
from enum import Enum


class ZoneCategory(str, Enum):
    """Top-level body regions."""

    HEAD_NECK = "head_neck"
    CHEST = "chest"
    ABDOMEN = "abdomen"
    BACK = "back"
    PELVIS = "pelvis"
    UPPER_EXTREMITY = "upper_extremity"
    LOWER_EXTREMITY = "lower_extremity"
    WHOLE_BODY = "whole_body"


class BodySystem(str, Enum):
    """Physiological systems a zone belongs to."""

    CARDIOVASCULAR = "cardiovascular"
    RESPIRATORY = "respiratory"
    GASTROINTESTINAL = "gastrointestinal"
    NEUROLOGICAL = "neurological"
    MUSCULOSKELETAL = "musculoskeletal"
    GENITOURINARY = "genitourinary"
    LYMPHATIC = "lymphatic"
    ENDOCRINE = "endocrine"
    INTEGUMENTARY = "integumentary"
    REPRODUCTIVE = "reproductive"


class RedFlagSeverity(str, Enum):
    """Red flag severity, immediate is highest."""

    IMMEDIATE = "immediate"
    URGENT = "urgent"
    MONITOR = "monitor"


class Relationship(str, Enum):
    """How a related zone is connected to its owner."""

    RADIATION = "radiation"
    REFERRED = "referred"
    ADJACENT = "adjacent"
    DERMATOMAL = "dermatomal"


class PatternType(str, Enum):
    """Pain pattern families."""

    RADIATION = "radiation"
    REFERRED = "referred"
    DERMATOMAL = "dermatomal"
    VISCERAL = "visceral"
    DIFFUSE = "diffuse"


class RedFlag(BaseModel):
    """A single finding that points at urgent or emergent pathology."""

    symptom: str
    severity: RedFlagSeverity
    action: str
    condition: str
    criteria: List[str] = Field(default_factory=list)

    class Config:
        frozen = True


class RelatedZone(BaseModel):
    """Reference to another zone with the relationship kind."""

    zone_id: str
    relationship: Relationship

    class Config:
        frozen = True


class ClinicalContext(BaseModel):
    """Clinical metadata carried by a zone."""

    common_diagnoses: List[str] = Field(default_factory=list)
    red_flags: List[RedFlag] = Field(default_factory=list)
    icd10_codes: List[str] = Field(default_factory=list)
    related_zones: List[RelatedZone] = Field(default_factory=list)
    priority: int = Field(default=5, ge=1, le=10)
    is_common: bool = False

    class Config:
        frozen = True


class ZoneDefinition(BaseModel):
    """Flattened record for one node of the anatomical zone tree."""

    id: str
    label_en: str
    label_ur: str
    clinical_term: str
    aliases: List[str] = Field(default_factory=list)
    category: ZoneCategory
    systems: List[BodySystem] = Field(default_factory=list)
    parent_id: Optional[str] = None
    children: List[str] = Field(default_factory=list)
    terminal: bool = True
    clinical: ClinicalContext = Field(default_factory=ClinicalContext)

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "id": "LEFT_PRECORDIAL",
                "label_en": "Left Chest (Heart Area)",
                "label_ur": "بایاں سینہ (دل کا علاقہ)",
                "clinical_term": "Precordium",
                "category": "chest",
                "systems": ["cardiovascular", "respiratory"],
                "parent_id": "CHEST_ANTERIOR",
                "terminal": True,
            }
        }

    def label(self, language: str = "en") -> str:
        """Label in the requested language, English when not available."""
        if language == "ur" and self.label_ur:
            return self.label_ur
        return self.label_en


class ZoneNode(BaseModel):
    """Nested view of the zone tree."""

    id: str
    label: str
    depth: int
    path: List[str]
    terminal: bool
    children: List["ZoneNode"] = Field(default_factory=list)


class PainPattern(BaseModel):
    """A recognised correlation between a primary zone and secondary zones."""

    type: PatternType
    primary_zone: str
    secondary_zones: List[str] = Field(default_factory=list)
    differential: List[str] = Field(default_factory=list)
    urgency: RedFlagSeverity
    recommendation: str
    confidence: float = Field(ge=0.0, le=1.0)


class ClinicalInsight(BaseModel):
    """Pattern analysis result handed to the orchestrator."""

    pattern: Optional[PainPattern] = None
    alerts: List[RedFlag] = Field(default_factory=list)
    next_steps: List[str] = Field(default_factory=list)
    notes: str = ""
