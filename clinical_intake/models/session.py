"""Persisted intake session schema."""

from pydantic import BaseModel, Field
from typing import Optional, List, Any
from datetime import datetime
from enum import Enum
from clinical_intake.models.encounter import Encounter
from clinical_intake.models.triage import IntakePhase
import uuid


class SessionStatus(str, Enum):
    """Session status."""

    ACTIVE = "active"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


class NavigationStep(BaseModel):
    """One answered prompt, kept for back-navigation and replay."""

    step_id: str = Field(default_factory=lambda: uuid.uuid4().hex[:8])
    phase: IntakePhase
    step_type: str  # yes-no, single-choice, multi-choice, numeric, text
    prompt: str
    options: List[str] = Field(default_factory=list)
    answer: Any = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class IntakeSession(BaseModel):
    """Intake session document."""

    session_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    status: SessionStatus = SessionStatus.ACTIVE
    current_phase: IntakePhase = IntakePhase.EMERGENCY_SCREEN
    encounter: Encounter = Field(default_factory=Encounter)
    navigation_stack: List[NavigationStep] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    last_updated_at: datetime = Field(default_factory=datetime.utcnow)
    completed_at: Optional[datetime] = None

    class Config:
        json_schema_extra = {
            "example": {
                "session_id": "123e4567-e89b-12d3-a456-426614174000",
                "status": "active",
                "current_phase": "BODY_MAP",
                "navigation_stack": [
                    {
                        "phase": "EMERGENCY_SCREEN",
                        "step_type": "yes-no",
                        "prompt": "Are you having severe chest pain or pressure right now?",
                        "answer": False,
                    }
                ],
            }
        }
