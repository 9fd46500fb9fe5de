"""FastAPI dependency providers for the intake engine.

The knowledge base is built once per process and shared read-only; engines
are stateless over it. Tests swap any of these through
``app.dependency_overrides``.
"""

from typing import Optional
from fastapi import Depends
from clinical_intake.engines.pattern_analyzer import ClinicalZoneAnalyzer
from clinical_intake.engines.question_engine import MedicalQuestionEngine
from clinical_intake.knowledge.registry import BodyZoneRegistry, get_zone_registry
from clinical_intake.orchestrator.intake import IntakeOrchestrator
from clinical_intake.services.session_service import IntakeSessionManager, get_session_manager
from clinical_intake.services.zone_triage import ZoneTriageService

_analyzer: Optional[ClinicalZoneAnalyzer] = None
_question_engine: Optional[MedicalQuestionEngine] = None
_triage_service: Optional[ZoneTriageService] = None


def get_registry() -> BodyZoneRegistry:
    return get_zone_registry()


def get_analyzer() -> ClinicalZoneAnalyzer:
    global _analyzer
    if _analyzer is None:
        _analyzer = ClinicalZoneAnalyzer(get_zone_registry())
    return _analyzer


def get_question_engine() -> MedicalQuestionEngine:
    global _question_engine
    if _question_engine is None:
        _question_engine = MedicalQuestionEngine(get_zone_registry())
    return _question_engine


def get_triage_service() -> ZoneTriageService:
    global _triage_service
    if _triage_service is None:
        _triage_service = ZoneTriageService(get_zone_registry())
    return _triage_service


def get_intake_session_manager() -> IntakeSessionManager:
    return get_session_manager()


def get_orchestrator(
    session_manager: IntakeSessionManager = Depends(get_intake_session_manager),
) -> IntakeOrchestrator:
    """A fresh orchestrator per request over the shared session store."""
    return IntakeOrchestrator(
        get_zone_registry(),
        session_manager,
        analyzer=get_analyzer(),
        question_engine=get_question_engine(),
        triage_service=get_triage_service(),
    )
