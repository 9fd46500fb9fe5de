"""Intake orchestrator: runs the phase graph against an answer provider.

Back navigation and resume both work by replay. The encounter is rebuilt
from its seed fields (identity, baseline history and any body map supplied
up front) and the graph is run again from the start; the recording provider
answers every step already on the navigation stack, so questioning picks up
at the first unanswered prompt.
"""

from typing import List, Optional, Sequence
from langchain_core.messages import BaseMessage
from clinical_intake.config.settings import settings
from clinical_intake.engines.emergency_screening import EmergencyScreeningEngine
from clinical_intake.engines.pattern_analyzer import ClinicalZoneAnalyzer
from clinical_intake.engines.question_engine import MedicalQuestionEngine
from clinical_intake.exceptions import IntakeCancelled, NavigationBack, SessionNotFoundError
from clinical_intake.knowledge.registry import BodyZoneRegistry
from clinical_intake.models.encounter import ClinicalNote, Encounter, IntakeResult, PainPoint
from clinical_intake.models.session import IntakeSession, NavigationStep, SessionStatus
from clinical_intake.orchestrator.answer_provider import AnswerProvider, RecordingAnswerProvider
from clinical_intake.orchestrator.graph import get_intake_graph
from clinical_intake.orchestrator.notes import build_intake_result
from clinical_intake.orchestrator.state import IntakeState
from clinical_intake.services.session_service import IntakeSessionManager
from clinical_intake.services.zone_triage import ZoneTriageService
from clinical_intake.utils.red_flags import normalize_symptoms
import logging

logger = logging.getLogger(__name__)

# Encounter fields that survive a replay
SEED_FIELDS = {
    "encounter_id",
    "patient_id",
    "language",
    "created_at",
    "symptoms",
    "pain_points_preset",
    "past_medical_history",
    "current_medications",
    "allergies",
    "social_history",
    "family_history",
    "baseline_committed",
}


class IntakeOrchestrator:
    """Sequences screening, complaint selection, body mapping, tree and note."""

    def __init__(
        self,
        registry: BodyZoneRegistry,
        session_manager: IntakeSessionManager,
        analyzer: Optional[ClinicalZoneAnalyzer] = None,
        question_engine: Optional[MedicalQuestionEngine] = None,
        triage_service: Optional[ZoneTriageService] = None,
        screening_engine: Optional[EmergencyScreeningEngine] = None,
    ):
        self.registry = registry
        self.session_manager = session_manager
        self.analyzer = analyzer or ClinicalZoneAnalyzer(registry)
        self.question_engine = question_engine or MedicalQuestionEngine(registry)
        self.triage_service = triage_service or ZoneTriageService(registry)
        self.screening_engine = screening_engine or EmergencyScreeningEngine()
        self.graph = get_intake_graph()
        self.session: Optional[IntakeSession] = None
        self.transcript: List[BaseMessage] = []

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def start_session(
        self,
        patient_id: Optional[str] = None,
        language: Optional[str] = None,
        pain_points: Optional[Sequence[PainPoint]] = None,
        symptoms: Optional[Sequence[str]] = None,
    ) -> IntakeSession:
        """
        Create a fresh session, replacing any persisted one.

        Args:
            patient_id: Patient identifier, if known
            language: Label language; defaults to the configured language
            pain_points: Body map collected before the interview
            symptoms: Symptom tags or free-text symptoms

        Returns:
            The new IntakeSession
        """
        encounter = Encounter(
            patient_id=patient_id, language=language or settings.default_language
        )
        if pain_points:
            encounter.pain_points = [PainPoint.model_validate(p) for p in pain_points]
            encounter.pain_points_preset = True
        if symptoms:
            encounter.symptoms = normalize_symptoms(symptoms)

        self.session = self.session_manager.create_session(
            patient_id, encounter, encounter.language
        )
        return self.session

    def restore_session(self) -> Optional[IntakeSession]:
        """Load the persisted session; finished, expired or unreadable sessions are dropped."""
        session = self.session_manager.load_session()
        if session is None:
            return None
        if session.status != SessionStatus.ACTIVE:
            logger.info(f"Intake session {session.session_id} is {session.status.value}, clearing")
            self.session_manager.clear_session()
            return None
        if self.session_manager.is_session_expired(session):
            logger.info(f"Intake session {session.session_id} expired, clearing")
            self.session_manager.clear_session()
            return None
        self.session = session
        return session

    def save(self) -> None:
        if self.session is not None:
            self.session_manager.save_session(self.session)

    def cancel(self) -> None:
        """Exit the intake and discard the persisted session."""
        self.session_manager.clear_session()
        self.session = None
        logger.info("Intake cancelled")

    def go_back(self) -> Optional[NavigationStep]:
        """
        Undo the most recent answer.

        Returns:
            The removed step, or None when there is nothing to undo
        """
        session = self._require_session()
        step = self.session_manager.pop_step(session)
        if step is None:
            logger.info("Back requested with an empty navigation stack")
            return None

        session.encounter = self._seed_encounter(session.encounter)
        self.session_manager.update_phase(session, step.phase)
        logger.info(f"Stepped back to {step.phase.value}: {step.prompt}")
        return step

    # ------------------------------------------------------------------
    # Interview
    # ------------------------------------------------------------------

    async def conduct_intake(
        self,
        provider: AnswerProvider,
        patient_id: Optional[str] = None,
        language: Optional[str] = None,
        pain_points: Optional[Sequence[PainPoint]] = None,
        symptoms: Optional[Sequence[str]] = None,
    ) -> ClinicalNote:
        """
        Run a complete intake, starting a session unless an active one is loaded.

        Args:
            provider: UI boundary answering every question
            patient_id: Patient identifier for a new session
            language: Label language for a new session
            pain_points: Body map collected before the interview
            symptoms: Symptom tags or free-text symptoms

        Returns:
            The clinical note (emergency note on a positive screen)

        Raises:
            IntakeCancelled: if the provider exits; the session is cleared first
        """
        if self.session is None or self.session.status != SessionStatus.ACTIVE:
            self.start_session(patient_id, language, pain_points, symptoms)
        return await self._run(provider)

    async def resume(self, provider: AnswerProvider) -> ClinicalNote:
        """
        Continue the persisted session from its first unanswered prompt.

        Raises:
            SessionNotFoundError: no live session is stored
        """
        if self.restore_session() is None:
            raise SessionNotFoundError("No intake session to resume")
        logger.info(
            f"Resuming session {self.session.session_id} at {self.session.current_phase.value}"
        )
        return await self._run(provider)

    async def _run(self, provider: AnswerProvider) -> ClinicalNote:
        session = self._require_session()
        while True:
            session.encounter = self._seed_encounter(session.encounter)
            recorder = RecordingAnswerProvider(provider, session, self.session_manager)
            state: IntakeState = {
                "messages": [],
                "encounter": session.encounter,
                "session_id": session.session_id,
                "tree_key": None,
                "note": None,
            }

            try:
                result = await self.graph.ainvoke(
                    state,
                    config={"configurable": {"orchestrator": self, "provider": recorder}},
                )
            except NavigationBack:
                self.go_back()
                continue
            except IntakeCancelled:
                self.cancel()
                raise

            session.encounter = result["encounter"]
            self.transcript = list(result["messages"])
            return result["note"]

    def get_intake_result(self) -> IntakeResult:
        """Triage level, specialty and red flag ids for the current encounter."""
        session = self._require_session()
        return build_intake_result(session.encounter)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_session(self) -> IntakeSession:
        if self.session is None:
            raise SessionNotFoundError("No active intake session")
        return self.session

    @staticmethod
    def _seed_encounter(encounter: Encounter) -> Encounter:
        fields = set(SEED_FIELDS)
        if encounter.pain_points_preset:
            fields.add("pain_points")
        return Encounter.model_validate(encounter.model_dump(include=fields))
