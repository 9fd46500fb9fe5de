"""Encounter record and clinical note output."""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import datetime
from clinical_intake.models.triage import (
    ComplaintType,
    DetectedFlagSeverity,
    IntakePhase,
    Specialty,
    TriageCategory,
    TriageLevel,
    ZoneSeverity,
)
from clinical_intake.models.zones import ClinicalInsight
import uuid


def _encounter_id() -> str:
    return f"enc_{uuid.uuid4().hex[:12]}"


class PainPoint(BaseModel):
    """A body-map selection."""

    zone_id: str
    intensity: int = Field(default=5, ge=0, le=10)
    depth: Optional[str] = None  # superficial / deep
    radiates_to: List[str] = Field(default_factory=list)
    is_primary: bool = False


class FamilyHistoryEntry(BaseModel):
    condition: str
    relative: str = "other"


class EmergencyScreeningResult(BaseModel):
    """Outcome of the emergency checkpoint sequence."""

    completed: bool = False
    has_emergency: bool = False
    triggered_checkpoint: Optional[str] = None
    protocol: Optional[str] = None
    question: Optional[str] = None
    recommended_action: Optional[str] = None
    answers: Dict[str, bool] = Field(default_factory=dict)
    completed_at: Optional[datetime] = None


class DetectedRedFlag(BaseModel):
    """Red flag recorded on the encounter."""

    id: str
    description: str
    severity: DetectedFlagSeverity
    action: Optional[str] = None
    source: str = "zone"
    detected_at: datetime = Field(default_factory=datetime.utcnow)


class PainAssessment(BaseModel):
    """Multi-point severity assessment."""

    max_severity: ZoneSeverity = ZoneSeverity.LOW
    should_escalate: bool = False
    alerts: List[str] = Field(default_factory=list)


class ClinicalNote(BaseModel):
    """Completed intake note."""

    chief_complaint: str
    hpi: str = ""
    ros: List[str] = Field(default_factory=list)
    pmh: str = ""
    medications: str = ""
    allergies: str = ""
    social_history: str = ""
    family_history: List[FamilyHistoryEntry] = Field(default_factory=list)
    red_flags: List[str] = Field(default_factory=list)
    clinical_alerts: List[str] = Field(default_factory=list)
    assessment: str = ""
    plan: str = ""
    triage_category: TriageCategory
    triage: str
    triage_score: Optional[int] = Field(default=None, ge=0, le=100)
    confidence: int = Field(ge=0, le=100)
    emergency: bool = False
    generated_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        json_schema_extra = {
            "example": {
                "chief_complaint": "Left Chest (Heart Area) pain",
                "hpi": "Left Chest (Heart Area) pain. Onset: Suddenly (seconds to minutes).",
                "ros": ["Fever"],
                "red_flags": ["Diaphoresis"],
                "triage_category": "immediate",
                "triage": "IMMEDIATE - Emergency evaluation required",
                "triage_score": 82,
                "confidence": 90,
            }
        }


class IntakeResult(BaseModel):
    """Routing summary for downstream scheduling."""

    encounter_id: str
    triage_level: TriageLevel
    recommended_specialty: Specialty
    red_flag_ids: List[str] = Field(default_factory=list)
    triage_score: Optional[int] = None
    note: Optional[ClinicalNote] = None


class Encounter(BaseModel):
    """Mutable record of one intake attempt."""

    encounter_id: str = Field(default_factory=_encounter_id)
    patient_id: Optional[str] = None
    language: str = "en"
    current_phase: IntakePhase = IntakePhase.EMERGENCY_SCREEN

    # Complaint
    complaint_type: Optional[ComplaintType] = None
    complaint_text: Optional[str] = None
    chief_complaint: str = ""

    # Body map
    pain_points: List[PainPoint] = Field(default_factory=list)
    pain_points_preset: bool = False  # supplied before the interview, not asked
    symptoms: List[str] = Field(default_factory=list)

    # Screening and findings
    emergency_screening: Optional[EmergencyScreeningResult] = None
    insight: Optional[ClinicalInsight] = None
    pain_assessment: Optional[PainAssessment] = None
    red_flags: List[str] = Field(default_factory=list)
    red_flags_detected: List[DetectedRedFlag] = Field(default_factory=list)
    clinical_alerts: List[str] = Field(default_factory=list)

    # Adaptive question answers and complaint-tree responses
    answers: Dict[str, Any] = Field(default_factory=dict)
    responses: Dict[str, Any] = Field(default_factory=dict)
    triage_score: Optional[int] = None
    triage_category: Optional[TriageCategory] = None

    # History
    hpi: str = ""
    ros: str = ""
    pmh: str = ""
    assessment: str = ""
    plan: str = ""
    past_medical_history: str = ""
    current_medications: str = ""
    allergies: str = ""
    social_history: str = ""
    family_history: List[FamilyHistoryEntry] = Field(default_factory=list)
    baseline_committed: bool = False

    active_tree_key: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    completed_at: Optional[datetime] = None
    generated_note: Optional[ClinicalNote] = None

    def has_emergency(self) -> bool:
        return bool(self.emergency_screening and self.emergency_screening.has_emergency)

    def primary_pain_point(self) -> Optional[PainPoint]:
        for point in self.pain_points:
            if point.is_primary:
                return point
        return self.pain_points[0] if self.pain_points else None

    def add_red_flag(
        self,
        flag_id: str,
        description: str,
        severity: DetectedFlagSeverity,
        action: Optional[str] = None,
        source: str = "zone",
    ) -> None:
        """Record a red flag once per id."""
        if any(f.id == flag_id for f in self.red_flags_detected):
            return
        self.red_flags_detected.append(
            DetectedRedFlag(
                id=flag_id,
                description=description,
                severity=severity,
                action=action,
                source=source,
            )
        )
