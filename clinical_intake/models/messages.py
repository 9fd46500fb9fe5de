"""API request and response models."""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from clinical_intake.models.encounter import IntakeResult, PainAssessment, PainPoint
from clinical_intake.models.questions import MedicalQuestion, RedFlagAlert
from clinical_intake.models.session import NavigationStep
from clinical_intake.models.triage import IntakePhase, TriageCategory, ZoneSeverity
from clinical_intake.models.zones import ClinicalInsight, RedFlag, ZoneCategory


class ZoneSummary(BaseModel):
    """Zone listing entry with a single label in the requested language."""

    id: str
    label: str
    clinical_term: str
    category: ZoneCategory
    parent_id: Optional[str] = None
    terminal: bool


class AnalysisRequest(BaseModel):
    """Zones and symptoms to analyze."""

    zone_ids: List[str] = Field(..., min_length=1, description="Selected zone ids")
    symptoms: List[str] = Field(default_factory=list, description="Symptom tags")
    description: Optional[str] = Field(
        None, max_length=2000, description="Free text; symptom tags are extracted from it"
    )


class AnalysisResponse(BaseModel):
    insight: Optional[ClinicalInsight] = None
    red_flags: List[RedFlag] = Field(default_factory=list)
    next_steps: List[str] = Field(default_factory=list)
    differential: List[str] = Field(default_factory=list)
    symptoms: List[str] = Field(default_factory=list)


class QuestionsRequest(BaseModel):
    zone_id: str
    answers: Dict[str, Any] = Field(default_factory=dict)


class QuestionsResponse(BaseModel):
    zone_id: str
    bank: Optional[str] = None
    questions: List[MedicalQuestion]


class TriageScoreRequest(BaseModel):
    answers: Dict[str, Any] = Field(default_factory=dict)


class TriageScoreResponse(BaseModel):
    """Combination alerts drive the score; per-question alerts are informational."""

    score: int = Field(..., ge=0, le=100)
    category: TriageCategory
    red_flags: List[RedFlagAlert] = Field(default_factory=list)
    question_flags: List[RedFlagAlert] = Field(default_factory=list)


class PainAssessmentRequest(BaseModel):
    pain_points: List[PainPoint]


class PainAssessmentResponse(BaseModel):
    assessment: PainAssessment
    primary: Optional[PainPoint] = None
    zone_severities: Dict[str, ZoneSeverity] = Field(default_factory=dict)


class StartIntakeRequest(BaseModel):
    """Start a new persisted intake session."""

    patient_id: Optional[str] = None
    language: Optional[str] = Field(None, description="en or ur")
    pain_points: List[PainPoint] = Field(default_factory=list)
    symptoms: List[str] = Field(default_factory=list)


class EncounterRequest(StartIntakeRequest):
    """Run a whole intake from answers collected beforehand."""

    answers: Dict[str, Any] = Field(
        default_factory=dict, description="Answers keyed by the exact prompt text"
    )
    default_numeric: float = Field(5, ge=0, le=10)

    class Config:
        json_schema_extra = {
            "example": {
                "patient_id": "patient-001",
                "language": "en",
                "pain_points": [{"zone_id": "LEFT_PRECORDIAL", "intensity": 7}],
                "symptoms": ["diaphoresis"],
                "answers": {"What is your main concern today?": "chest_pain"},
            }
        }


class MessageModel(BaseModel):
    """Individual transcript message."""

    role: str = Field(..., description="user or assistant")
    content: str


class EncounterResponse(BaseModel):
    result: IntakeResult
    transcript: List[MessageModel] = Field(default_factory=list)
    alerts: List[Dict[str, Any]] = Field(default_factory=list)


class BackResponse(BaseModel):
    removed_step: Optional[NavigationStep] = None
    current_phase: IntakePhase
    can_go_back: bool


class BaselineRequest(BaseModel):
    """Past history answers; the first three are required."""

    past_medical_history: Optional[Any] = None
    family_history_conditions: Optional[Any] = None
    social_history: Optional[Any] = None
    current_medications: Optional[Any] = None
    allergies: Optional[Any] = None
