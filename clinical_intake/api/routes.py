"""Intake API endpoints.

Read access to the anatomical knowledge base, stateless analysis endpoints
(pattern, questions, triage score, pain assessment), a non-interactive
encounter runner and the persisted intake session.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List, Optional
from clinical_intake.api.dependencies import (
    get_analyzer,
    get_intake_session_manager,
    get_orchestrator,
    get_question_engine,
    get_registry,
    get_triage_service,
)
from clinical_intake.engines.pattern_analyzer import ClinicalZoneAnalyzer
from clinical_intake.engines.question_engine import MedicalQuestionEngine
from clinical_intake.exceptions import BaselineValidationError
from clinical_intake.knowledge.registry import BodyZoneRegistry
from clinical_intake.models.messages import (
    AnalysisRequest,
    AnalysisResponse,
    BackResponse,
    BaselineRequest,
    EncounterRequest,
    EncounterResponse,
    MessageModel,
    PainAssessmentRequest,
    PainAssessmentResponse,
    QuestionsRequest,
    QuestionsResponse,
    StartIntakeRequest,
    TriageScoreRequest,
    TriageScoreResponse,
    ZoneSummary,
)
from clinical_intake.models.session import IntakeSession
from clinical_intake.models.zones import BodySystem, ZoneCategory, ZoneDefinition, ZoneNode
from clinical_intake.orchestrator.answer_provider import PrefilledAnswerProvider
from clinical_intake.orchestrator.intake import IntakeOrchestrator
from clinical_intake.services.session_service import IntakeSessionManager
from clinical_intake.services.session_store import InMemorySessionStore
from clinical_intake.services.zone_triage import ZoneTriageService
from clinical_intake.utils.red_flags import extract_symptom_tags, normalize_symptoms
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/intake", tags=["Intake"])


def _summary(zone: ZoneDefinition, language: str) -> ZoneSummary:
    return ZoneSummary(
        id=zone.id,
        label=zone.label(language),
        clinical_term=zone.clinical_term,
        category=zone.category,
        parent_id=zone.parent_id,
        terminal=zone.terminal,
    )


def _zone_or_404(registry: BodyZoneRegistry, zone_id: str) -> ZoneDefinition:
    zone = registry.get_zone(zone_id)
    if zone is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Zone {zone_id} not found"
        )
    return zone


def _session_or_404(orchestrator: IntakeOrchestrator) -> IntakeSession:
    session = orchestrator.restore_session()
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="No active intake session"
        )
    return session


# ----------------------------------------------------------------------
# Knowledge base
# ----------------------------------------------------------------------


@router.get("/zones", response_model=List[ZoneSummary])
async def list_zones(
    category: Optional[ZoneCategory] = None,
    system: Optional[BodySystem] = None,
    terminal: Optional[bool] = None,
    language: str = "en",
    registry: BodyZoneRegistry = Depends(get_registry),
):
    """List zones, optionally filtered by category, system and terminal flag."""
    zones = registry.get_all_zones()
    if category is not None:
        zones = [z for z in zones if z.category == category]
    if system is not None:
        zones = [z for z in zones if system in z.systems]
    if terminal is not None:
        zones = [z for z in zones if z.terminal == terminal]
    return [_summary(z, language) for z in zones]


@router.get("/zones/tree", response_model=List[ZoneNode])
async def zone_tree(language: str = "en", registry: BodyZoneRegistry = Depends(get_registry)):
    return registry.get_zone_tree(language)


@router.get("/zones/search", response_model=List[ZoneSummary])
async def search_zones(
    q: str = Query(..., min_length=1),
    language: str = "en",
    registry: BodyZoneRegistry = Depends(get_registry),
):
    return [_summary(z, language) for z in registry.search_zones(q, language)]


@router.get("/zones/{zone_id}", response_model=ZoneDefinition)
async def get_zone(zone_id: str, registry: BodyZoneRegistry = Depends(get_registry)):
    return _zone_or_404(registry, zone_id)


@router.get("/zones/{zone_id}/path", response_model=List[ZoneSummary])
async def zone_path(
    zone_id: str, language: str = "en", registry: BodyZoneRegistry = Depends(get_registry)
):
    """Root-to-zone breadcrumb."""
    _zone_or_404(registry, zone_id)
    return [_summary(z, language) for z in registry.get_path(zone_id)]


@router.get("/zones/{zone_id}/related", response_model=List[ZoneSummary])
async def related_zones(
    zone_id: str, language: str = "en", registry: BodyZoneRegistry = Depends(get_registry)
):
    _zone_or_404(registry, zone_id)
    return [_summary(z, language) for z in registry.get_related_zones(zone_id)]


# ----------------------------------------------------------------------
# Analysis
# ----------------------------------------------------------------------


@router.post("/analysis", response_model=AnalysisResponse)
async def analyze(
    request: AnalysisRequest, analyzer: ClinicalZoneAnalyzer = Depends(get_analyzer)
):
    """
    Pattern insight, red flags, next steps and differential for a zone selection.

    Symptom tags found in ``description`` are merged into ``symptoms``.
    """
    symptoms = list(request.symptoms)
    if request.description:
        symptoms.extend(extract_symptom_tags(request.description))
    symptoms = normalize_symptoms(symptoms)

    return AnalysisResponse(
        insight=analyzer.analyze_pattern(request.zone_ids, symptoms),
        red_flags=analyzer.detect_red_flags(request.zone_ids, symptoms),
        next_steps=analyzer.recommend_next_steps(request.zone_ids, symptoms),
        differential=analyzer.get_differential_diagnoses(request.zone_ids),
        symptoms=symptoms,
    )


@router.post("/questions", response_model=QuestionsResponse)
async def generate_questions(
    request: QuestionsRequest, engine: MedicalQuestionEngine = Depends(get_question_engine)
):
    return QuestionsResponse(
        zone_id=request.zone_id,
        bank=engine.get_bank_for_zone(request.zone_id),
        questions=engine.generate_questions(request.zone_id, request.answers),
    )


@router.post("/triage-score", response_model=TriageScoreResponse)
async def triage_score(
    request: TriageScoreRequest, engine: MedicalQuestionEngine = Depends(get_question_engine)
):
    red_flags = engine.evaluate_red_flags(request.answers)
    score = engine.calculate_triage_score(request.answers, red_flags)
    return TriageScoreResponse(
        score=score,
        category=engine.categorize_score(score),
        red_flags=red_flags,
        question_flags=engine.evaluate_question_flags(request.answers),
    )


@router.post("/pain-assessment", response_model=PainAssessmentResponse)
async def pain_assessment(
    request: PainAssessmentRequest,
    triage_service: ZoneTriageService = Depends(get_triage_service),
):
    return PainAssessmentResponse(
        assessment=triage_service.assess_pain_points(request.pain_points),
        primary=triage_service.get_primary_pain_point(request.pain_points),
        zone_severities={
            p.zone_id: triage_service.get_zone_severity(p.zone_id) for p in request.pain_points
        },
    )


# ----------------------------------------------------------------------
# Encounters and sessions
# ----------------------------------------------------------------------


@router.post("/encounters", response_model=EncounterResponse)
async def run_encounter(
    request: EncounterRequest, registry: BodyZoneRegistry = Depends(get_registry)
):
    """
    Run a whole intake non-interactively.

    Prompts missing from ``answers`` take the provider defaults. The run uses
    its own in-memory session so the persisted session is untouched.
    """
    orchestrator = IntakeOrchestrator(
        registry,
        IntakeSessionManager(InMemorySessionStore()),
        analyzer=get_analyzer(),
        question_engine=get_question_engine(),
        triage_service=get_triage_service(),
    )
    provider = PrefilledAnswerProvider(request.answers, default_numeric=request.default_numeric)

    await orchestrator.conduct_intake(
        provider,
        patient_id=request.patient_id,
        language=request.language,
        pain_points=request.pain_points,
        symptoms=request.symptoms,
    )
    logger.info(f"Non-interactive encounter finished after {len(provider.asked)} prompts")

    return EncounterResponse(
        result=orchestrator.get_intake_result(),
        transcript=[
            MessageModel(
                role="user" if m.type == "human" else "assistant", content=str(m.content)
            )
            for m in orchestrator.transcript
        ],
        alerts=provider.alerts,
    )


@router.get("/session", response_model=IntakeSession)
async def get_session(orchestrator: IntakeOrchestrator = Depends(get_orchestrator)):
    return _session_or_404(orchestrator)


@router.post("/session", response_model=IntakeSession, status_code=status.HTTP_201_CREATED)
async def start_session(
    request: StartIntakeRequest, orchestrator: IntakeOrchestrator = Depends(get_orchestrator)
):
    return orchestrator.start_session(
        patient_id=request.patient_id,
        language=request.language,
        pain_points=request.pain_points,
        symptoms=request.symptoms,
    )


@router.delete("/session")
async def clear_session(orchestrator: IntakeOrchestrator = Depends(get_orchestrator)):
    orchestrator.cancel()
    return {"status": "cleared"}


@router.post("/session/back", response_model=BackResponse)
async def go_back(orchestrator: IntakeOrchestrator = Depends(get_orchestrator)):
    """Pop the most recent navigation step."""
    session = _session_or_404(orchestrator)
    step = orchestrator.go_back()
    return BackResponse(
        removed_step=step,
        current_phase=session.current_phase,
        can_go_back=orchestrator.session_manager.can_go_back(session),
    )


@router.post("/session/baseline", response_model=IntakeSession)
async def commit_baseline(
    request: BaselineRequest,
    orchestrator: IntakeOrchestrator = Depends(get_orchestrator),
    session_manager: IntakeSessionManager = Depends(get_intake_session_manager),
):
    """Commit past history answers; nothing is saved when a required field is missing."""
    session = _session_or_404(orchestrator)
    try:
        session_manager.commit_baseline_answers(session, request.model_dump())
    except BaselineValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": str(e), "missing_fields": e.missing_fields},
        )
    return session
