"""Adaptive question catalogue models."""

from pydantic import BaseModel, Field
from typing import Optional, List, Union
from enum import Enum


class QuestionType(str, Enum):
    """Answer widget kinds."""

    YES_NO = "yes-no"
    SINGLE_CHOICE = "single-choice"
    MULTI_CHOICE = "multi-choice"
    SCALE = "scale"
    TEXT = "text"


class UrgencyLevel(str, Enum):
    """Question engine urgency classes, emergency is highest."""

    EMERGENCY = "emergency"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ClinicalSignificance(str, Enum):
    ROUTINE = "routine"
    IMPORTANT = "important"
    CRITICAL = "critical"


class QuestionOption(BaseModel):
    """One selectable answer."""

    value: str
    label: str
    red_flag: bool = False
    urgency: Optional[UrgencyLevel] = None

    class Config:
        frozen = True


class QuestionCondition(BaseModel):
    """Gate: ask only when another question was answered with ``value``."""

    depends_on: str
    value: Union[str, List[str]]

    class Config:
        frozen = True


class QuestionRedFlagRule(BaseModel):
    """Per-question trigger: numeric threshold or exact value."""

    threshold: Optional[float] = None
    value: Optional[str] = None
    urgency: UrgencyLevel
    message: str

    class Config:
        frozen = True


class MedicalQuestion(BaseModel):
    """Immutable catalogue entry."""

    id: str
    text: str
    type: QuestionType
    options: List[QuestionOption] = Field(default_factory=list)
    min: Optional[int] = None
    max: Optional[int] = None
    condition: Optional[QuestionCondition] = None
    red_flag: Optional[QuestionRedFlagRule] = None
    clinical_significance: ClinicalSignificance = ClinicalSignificance.ROUTINE

    class Config:
        frozen = True


class RedFlagCombinationRule(BaseModel):
    """Fires when every trigger holds."""

    id: str
    triggers: List[str]
    urgency: UrgencyLevel
    message: str
    action: str

    class Config:
        frozen = True


class RedFlagAlert(BaseModel):
    """A fired red flag, from a single question or a combination rule."""

    id: str
    urgency: UrgencyLevel
    message: str
    action: str
    source: str = "combination"
    triggered_by: List[str] = Field(default_factory=list)
