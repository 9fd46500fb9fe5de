"""Intake session persistence, navigation stack and baseline history commit."""

from pydantic import ValidationError
from typing import Any, Dict, List, Optional
from datetime import datetime, timedelta
from clinical_intake.config.settings import settings
from clinical_intake.exceptions import BaselineValidationError
from clinical_intake.models.encounter import Encounter, FamilyHistoryEntry
from clinical_intake.models.session import IntakeSession, NavigationStep, SessionStatus
from clinical_intake.models.triage import IntakePhase
from clinical_intake.services.session_store import (
    InMemorySessionStore,
    MongoSessionStore,
    SessionStore,
)
import logging

logger = logging.getLogger(__name__)

REQUIRED_BASELINE_FIELDS = [
    "past_medical_history",
    "family_history_conditions",
    "social_history",
]


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def _as_text(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value if not _is_blank(v))
    return "" if value is None else str(value).strip()


class IntakeSessionManager:
    """Service for persisting the single active intake session."""

    def __init__(self, store: SessionStore, key: Optional[str] = None):
        self.store = store
        self.key = key or settings.session_key

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def create_session(
        self,
        patient_id: Optional[str] = None,
        encounter: Optional[Encounter] = None,
        language: Optional[str] = None,
    ) -> IntakeSession:
        """
        Create and persist a new intake session.

        Args:
            patient_id: Patient identifier, if known
            encounter: Initial encounter; a blank one is created otherwise
            language: Label language for the encounter

        Returns:
            Created IntakeSession
        """
        encounter = encounter or Encounter(
            patient_id=patient_id, language=language or settings.default_language
        )
        if patient_id and not encounter.patient_id:
            encounter.patient_id = patient_id
        session = IntakeSession(encounter=encounter, current_phase=encounter.current_phase)
        self.save_session(session)

        logger.info(f"Created intake session {session.session_id} ({encounter.encounter_id})")
        return session

    def load_session(self) -> Optional[IntakeSession]:
        """
        Load the persisted session.

        Returns:
            IntakeSession, or None when nothing is stored or the data is unreadable
        """
        raw = self.store.get(self.key)
        if not raw:
            return None

        try:
            return IntakeSession.model_validate_json(raw)
        except (ValidationError, ValueError) as e:
            logger.warning(f"Discarding unreadable intake session: {e}")
            return None

    def save_session(self, session: IntakeSession) -> None:
        session.last_updated_at = datetime.utcnow()
        self.store.set(self.key, session.model_dump_json())
        logger.debug(f"Saved intake session {session.session_id}")

    def clear_session(self) -> None:
        self.store.remove(self.key)
        logger.info("Cleared intake session")

    def complete_session(self, session: IntakeSession) -> None:
        """Mark the in-memory session finished and drop it from storage."""
        session.status = SessionStatus.COMPLETED
        session.completed_at = datetime.utcnow()
        session.current_phase = IntakePhase.COMPLETE
        self.clear_session()
        logger.info(f"Completed intake session {session.session_id}")

    def is_session_expired(self, session: IntakeSession, now: Optional[datetime] = None) -> bool:
        """True once the session has been idle longer than the expiry window."""
        now = now or datetime.utcnow()
        return now - session.last_updated_at > timedelta(hours=settings.session_expiry_hours)

    # ------------------------------------------------------------------
    # Navigation stack
    # ------------------------------------------------------------------

    def push_step(self, session: IntakeSession, step: NavigationStep) -> None:
        session.navigation_stack.append(step)
        self.save_session(session)

    def pop_step(self, session: IntakeSession) -> Optional[NavigationStep]:
        """Remove and return the most recent step, saving only when one was removed."""
        if not session.navigation_stack:
            return None
        step = session.navigation_stack.pop()
        self.save_session(session)
        return step

    def get_current_step(self, session: IntakeSession) -> Optional[NavigationStep]:
        return session.navigation_stack[-1] if session.navigation_stack else None

    def can_go_back(self, session: IntakeSession) -> bool:
        return len(session.navigation_stack) > 0

    def update_phase(self, session: IntakeSession, phase: IntakePhase) -> None:
        session.current_phase = phase
        session.encounter.current_phase = phase
        self.save_session(session)
        logger.info(f"Session {session.session_id} entered phase {phase.value}")

    # ------------------------------------------------------------------
    # Baseline history
    # ------------------------------------------------------------------

    @staticmethod
    def validate_baseline_answers(answers: Dict[str, Any]) -> None:
        """
        Require every baseline history field.

        Raises:
            BaselineValidationError: naming each missing field
        """
        missing = [
            field.replace("_", " ")
            for field in REQUIRED_BASELINE_FIELDS
            if _is_blank(answers.get(field))
        ]
        if missing:
            logger.warning(f"Baseline validation failed, missing: {missing}")
            raise BaselineValidationError(missing)

    @staticmethod
    def normalize_family_history(raw: Any) -> List[FamilyHistoryEntry]:
        """Plain strings become entries with relative "other"."""
        if _is_blank(raw):
            return []
        if isinstance(raw, (str, dict)):
            raw = [raw]

        entries = []
        for item in raw:
            if isinstance(item, str):
                if item.strip():
                    entries.append(FamilyHistoryEntry(condition=item.strip()))
            elif isinstance(item, dict):
                entries.append(
                    FamilyHistoryEntry(
                        condition=item.get("condition") or item.get("name") or "unknown",
                        relative=item.get("relative") or "other",
                    )
                )
            elif isinstance(item, FamilyHistoryEntry):
                entries.append(item)
        return entries

    def commit_baseline_answers(self, session: IntakeSession, answers: Dict[str, Any]) -> None:
        """
        Validate, then write all baseline fields and save.

        Nothing is written when validation fails.

        Args:
            session: Session whose encounter receives the history
            answers: Baseline answers keyed by field name

        Raises:
            BaselineValidationError: if a required field is missing
        """
        self.validate_baseline_answers(answers)

        family_history = self.normalize_family_history(answers.get("family_history_conditions"))

        encounter = session.encounter
        encounter.past_medical_history = _as_text(answers.get("past_medical_history"))
        encounter.social_history = _as_text(answers.get("social_history"))
        encounter.current_medications = _as_text(answers.get("current_medications"))
        encounter.allergies = _as_text(answers.get("allergies"))
        encounter.family_history = family_history
        encounter.baseline_committed = True

        self.save_session(session)
        logger.info(f"Committed baseline history for {encounter.encounter_id}")

    @staticmethod
    def is_baseline_complete(session: IntakeSession) -> bool:
        encounter = session.encounter
        return bool(
            encounter.past_medical_history
            or encounter.family_history
            or encounter.social_history
        )


def build_session_store() -> SessionStore:
    """Store selected by the ``session_store`` setting."""
    if settings.session_store == "mongo":
        return MongoSessionStore()
    return InMemorySessionStore()


# Global service instance
_session_manager: Optional[IntakeSessionManager] = None


def get_session_manager() -> IntakeSessionManager:
    """Get or create IntakeSessionManager instance."""
    global _session_manager
    if _session_manager is None:
        _session_manager = IntakeSessionManager(build_session_store())
    return _session_manager
