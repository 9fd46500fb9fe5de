import logging
from datetime import timedelta
import pytest
from clinical_intake.exceptions import BaselineValidationError
from clinical_intake.models.encounter import Encounter, FamilyHistoryEntry
from clinical_intake.models.session import NavigationStep, SessionStatus
from clinical_intake.models.triage import IntakePhase

BASELINE = {
    "past_medical_history": "Hypertension",
    "family_history_conditions": ["Diabetes", {"condition": "Stroke", "relative": "father"}],
    "social_history": "Non-smoker",
    "current_medications": ["Amlodipine"],
    "allergies": "",
}


def _step(prompt, phase=IntakePhase.EMERGENCY_SCREEN, answer=False):
    return NavigationStep(phase=phase, step_type="yes-no", prompt=prompt, answer=answer)


class TestSessionPersistence:
    def test_create_and_load(self, session_manager):
        session = session_manager.create_session("patient-1", Encounter(), "en")
        loaded = session_manager.load_session()
        assert loaded.session_id == session.session_id
        assert loaded.status == SessionStatus.ACTIVE
        assert loaded.encounter.patient_id == "patient-1"

    def test_missing_session(self, session_manager):
        assert session_manager.load_session() is None

    def test_corrupt_session_is_ignored(self, session_manager, store, caplog):
        store.set("test_session", "{not json")
        with caplog.at_level(logging.WARNING):
            assert session_manager.load_session() is None
        assert caplog.records

        store.set("test_session", '{"status": "bogus"}')
        assert session_manager.load_session() is None

    def test_clear(self, session_manager):
        session_manager.create_session(None, Encounter(), "en")
        session_manager.clear_session()
        assert session_manager.load_session() is None

    def test_complete_clears_storage(self, session_manager):
        session = session_manager.create_session(None, Encounter(), "en")
        session_manager.complete_session(session)
        assert session.status == SessionStatus.COMPLETED
        assert session.completed_at is not None
        assert session.current_phase == IntakePhase.COMPLETE
        assert session_manager.load_session() is None

    def test_update_phase_saves(self, session_manager):
        session = session_manager.create_session(None, Encounter(), "en")
        session_manager.update_phase(session, IntakePhase.BODY_MAP)
        assert session_manager.load_session().current_phase == IntakePhase.BODY_MAP


class TestExpiry:
    def test_expired_after_window(self, session_manager):
        session = session_manager.create_session(None, Encounter(), "en")
        later = session.last_updated_at + timedelta(hours=25)
        assert session_manager.is_session_expired(session, now=later)

    def test_live_within_window(self, session_manager):
        session = session_manager.create_session(None, Encounter(), "en")
        later = session.last_updated_at + timedelta(hours=23)
        assert not session_manager.is_session_expired(session, now=later)


class TestNavigationStack:
    def test_last_in_first_out(self, session_manager):
        session = session_manager.create_session(None, Encounter(), "en")
        session_manager.push_step(session, _step("first"))
        session_manager.push_step(session, _step("second"))

        assert session_manager.get_current_step(session).prompt == "second"
        assert session_manager.pop_step(session).prompt == "second"
        assert session_manager.pop_step(session).prompt == "first"
        assert session_manager.pop_step(session) is None
        assert not session_manager.can_go_back(session)

    def test_stack_is_persisted(self, session_manager):
        session = session_manager.create_session(None, Encounter(), "en")
        session_manager.push_step(session, _step("first"))
        loaded = session_manager.load_session()
        assert [s.prompt for s in loaded.navigation_stack] == ["first"]


class TestBaseline:
    def test_commit_writes_every_field(self, session_manager):
        session = session_manager.create_session(None, Encounter(), "en")
        session_manager.commit_baseline_answers(session, BASELINE)

        encounter = session_manager.load_session().encounter
        assert encounter.baseline_committed
        assert encounter.past_medical_history == "Hypertension"
        assert encounter.current_medications == "Amlodipine"
        assert encounter.family_history == [
            FamilyHistoryEntry(condition="Diabetes", relative="other"),
            FamilyHistoryEntry(condition="Stroke", relative="father"),
        ]
        assert session_manager.is_baseline_complete(session)

    def test_missing_field_writes_nothing(self, session_manager):
        session = session_manager.create_session(None, Encounter(), "en")
        answers = dict(BASELINE, social_history="  ")

        with pytest.raises(BaselineValidationError) as exc_info:
            session_manager.commit_baseline_answers(session, answers)

        assert exc_info.value.missing_fields == ["social history"]
        encounter = session_manager.load_session().encounter
        assert encounter.past_medical_history == ""
        assert encounter.family_history == []
        assert not encounter.baseline_committed

    def test_every_missing_field_is_named(self, session_manager):
        with pytest.raises(BaselineValidationError) as exc_info:
            session_manager.validate_baseline_answers({})
        assert exc_info.value.missing_fields == [
            "past medical history",
            "family history conditions",
            "social history",
        ]

    def test_normalize_family_history(self, session_manager):
        assert session_manager.normalize_family_history(None) == []
        assert session_manager.normalize_family_history("Asthma") == [
            FamilyHistoryEntry(condition="Asthma")
        ]
