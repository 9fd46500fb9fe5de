from datetime import datetime, timedelta
import pytest
from clinical_intake.engines.emergency_screening import EMERGENCY_CHECKPOINTS
from clinical_intake.exceptions import IntakeCancelled, NavigationBack, SessionNotFoundError
from clinical_intake.models.encounter import PainPoint
from clinical_intake.models.session import SessionStatus
from clinical_intake.models.triage import IntakePhase, Specialty, TriageCategory, TriageLevel
from clinical_intake.orchestrator.answer_provider import PrefilledAnswerProvider
from clinical_intake.orchestrator.intake import IntakeOrchestrator
from clinical_intake.orchestrator.nodes import (
    BODY_MAP_PROMPT,
    COMPLAINT_PROMPT,
    DESCRIBE_PROMPT,
    INTENSITY_PROMPT,
)

CHECKPOINT_PROMPTS = [c.question["en"] for c in EMERGENCY_CHECKPOINTS]


class BackOnceProvider(PrefilledAnswerProvider):
    """Presses "back" the first time ``back_at`` is asked."""

    def __init__(self, back_at, answers=None, after_back=None):
        super().__init__(answers)
        self.back_at = back_at
        self.after_back = after_back or {}
        self.went_back = False

    async def ask_multiple_choice(self, prompt, options, allow_multiple=False):
        if prompt == self.back_at and not self.went_back:
            self.went_back = True
            self.answers.update(self.after_back)
            raise NavigationBack()
        return await super().ask_multiple_choice(prompt, options, allow_multiple)


class ExitProvider(PrefilledAnswerProvider):
    async def ask_free_text(self, prompt):
        raise IntakeCancelled()


class DisconnectingProvider(PrefilledAnswerProvider):
    async def ask_free_text(self, prompt):
        raise ConnectionError("client went away")


class UnclampedProvider(PrefilledAnswerProvider):
    """Returns numeric answers as given, without range checks."""

    async def ask_numeric(self, prompt, min_value=0, max_value=10):
        return self._lookup(prompt, self.default_numeric)


class TestEmergencyScreen:
    async def test_positive_screen_short_circuits(self, orchestrator, session_manager):
        provider = PrefilledAnswerProvider({"Are you having chest pain RIGHT NOW?": True})
        note = await orchestrator.conduct_intake(provider, patient_id="p-1")

        assert note.emergency
        assert note.triage_category == TriageCategory.IMMEDIATE
        assert note.triage_score == 100
        assert note.chief_complaint == "Emergency screening with EMERGENCY"
        assert note.red_flags == ["CRITICAL: Are you having chest pain RIGHT NOW?"]
        assert provider.asked == ["Are you having chest pain RIGHT NOW?"]
        assert COMPLAINT_PROMPT not in provider.asked
        assert provider.alerts[0]["title"] == "🚨 CRITICAL EMERGENCY"

        result = orchestrator.get_intake_result()
        assert result.triage_level == TriageLevel.EMERGENCY
        assert result.red_flag_ids[0] == "emergency:emergency_chest_pain"
        assert session_manager.load_session() is None
        assert orchestrator.session.status == SessionStatus.COMPLETED

    async def test_later_checkpoint(self, orchestrator):
        provider = PrefilledAnswerProvider({"Are you bleeding heavily that won't stop?": "yes"})
        note = await orchestrator.conduct_intake(provider)

        assert note.emergency
        assert note.ros == ["Emergency protocol: HEMORRHAGE_PROTOCOL"]
        assert provider.asked == CHECKPOINT_PROMPTS[:5]


class TestStandardIntake:
    async def test_preset_chest_pain(self, orchestrator, session_manager):
        provider = PrefilledAnswerProvider()
        note = await orchestrator.conduct_intake(
            provider, pain_points=[PainPoint(zone_id="LEFT_PRECORDIAL", intensity=6)]
        )

        assert not note.emergency
        assert note.chief_complaint == "Chest pain"
        assert note.hpi.startswith("Chest pain. ")
        assert note.triage_category == TriageCategory.URGENT
        assert note.triage.startswith("URGENT")
        assert BODY_MAP_PROMPT not in provider.asked
        assert provider.asked[:6] == CHECKPOINT_PROMPTS
        assert provider.progress[-1] == (IntakePhase.COMPLETE, 100)

        encounter = orchestrator.session.encounter
        assert encounter.active_tree_key == "CHEST_PAIN"
        assert encounter.answers["chest-quality"] == "pressure"
        assert encounter.answers["severity"] == 5

        result = orchestrator.get_intake_result()
        assert result.triage_level == TriageLevel.URGENT
        assert result.recommended_specialty == Specialty.CARDIOLOGY
        assert "chest-quality:pressure" in result.red_flag_ids
        assert session_manager.load_session() is None

    async def test_cardiac_symptoms_raise_to_immediate(self, orchestrator):
        note = await orchestrator.conduct_intake(
            PrefilledAnswerProvider(),
            pain_points=[PainPoint(zone_id="LEFT_PRECORDIAL", intensity=6)],
            symptoms=["sweating"],
        )
        assert note.triage_category == TriageCategory.IMMEDIATE
        assert "Chest pain with associated cardiac symptoms" in note.red_flags

    async def test_body_map_is_asked(self, orchestrator):
        provider = PrefilledAnswerProvider(
            {
                COMPLAINT_PROMPT: "other",
                DESCRIBE_PROMPT: "my knee hurts",
                BODY_MAP_PROMPT: ["Left Knee"],
                INTENSITY_PROMPT: 9,
            }
        )
        note = await orchestrator.conduct_intake(provider)

        encounter = orchestrator.session.encounter
        assert encounter.pain_points[0].zone_id == "LEFT_KNEE"
        assert encounter.pain_points[0].is_primary
        assert encounter.active_tree_key == "LIMB_PAIN"
        assert encounter.pain_assessment.should_escalate
        assert note.chief_complaint == "my knee hurts"
        assert "Severe pain (9/10) in Left Knee" in note.clinical_alerts
        assert orchestrator.get_intake_result().recommended_specialty == Specialty.ORTHOPEDICS

    async def test_body_map_intensity_is_clamped(self, orchestrator):
        for given, stored in ((14, 10), (-3, 0)):
            provider = UnclampedProvider(
                {BODY_MAP_PROMPT: ["Left Knee"], INTENSITY_PROMPT: given}
            )
            await orchestrator.conduct_intake(provider)
            assert orchestrator.session.encounter.pain_points[0].intensity == stored

    async def test_no_body_map_uses_baseline_questions(self, orchestrator):
        note = await orchestrator.conduct_intake(PrefilledAnswerProvider())

        encounter = orchestrator.session.encounter
        assert encounter.pain_points == []
        assert set(encounter.answers) == {"duration", "onset", "severity", "pattern"}
        # <1hour (20) + sudden (15) + severity 5 (10)
        assert note.triage_score == 45

    async def test_baseline_history_reaches_note(self, orchestrator, session_manager):
        orchestrator.start_session()
        session_manager.commit_baseline_answers(
            orchestrator.session,
            {
                "past_medical_history": "Hypertension",
                "family_history_conditions": ["Diabetes"],
                "social_history": "Non-smoker",
            },
        )
        note = await orchestrator.conduct_intake(PrefilledAnswerProvider())

        assert note.pmh.startswith("Hypertension")
        assert note.social_history == "Non-smoker"
        assert [f.condition for f in note.family_history] == ["Diabetes"]

    async def test_transcript(self, orchestrator):
        await orchestrator.conduct_intake(PrefilledAnswerProvider())
        transcript = orchestrator.transcript
        assert transcript[0].content == CHECKPOINT_PROMPTS[0]
        assert transcript[1].type == "human"
        assert transcript[1].content == "False"


class TestNavigation:
    async def test_back_replays_earlier_answers(self, orchestrator):
        provider = BackOnceProvider(
            BODY_MAP_PROMPT,
            answers={DESCRIBE_PROMPT: "first description"},
            after_back={DESCRIBE_PROMPT: "pressure in my chest"},
        )
        await orchestrator.conduct_intake(provider)

        assert provider.went_back
        assert provider.asked.count(DESCRIBE_PROMPT) == 2
        assert provider.asked.count(COMPLAINT_PROMPT) == 1
        for prompt in CHECKPOINT_PROMPTS:
            assert provider.asked.count(prompt) == 1
        assert orchestrator.session.encounter.complaint_text == "pressure in my chest"

    async def test_go_back_pops_last_step(self, orchestrator, session_manager):
        with pytest.raises(ConnectionError):
            await orchestrator.conduct_intake(DisconnectingProvider())

        step = orchestrator.go_back()
        assert step.prompt == COMPLAINT_PROMPT
        session = session_manager.load_session()
        assert len(session.navigation_stack) == 6
        assert session.current_phase == IntakePhase.COMPLAINT_SELECTION

    async def test_back_with_nothing_to_undo(self, orchestrator):
        orchestrator.start_session()
        assert orchestrator.go_back() is None

    async def test_cancel_clears_session(self, orchestrator, session_manager):
        with pytest.raises(IntakeCancelled):
            await orchestrator.conduct_intake(ExitProvider())
        assert session_manager.load_session() is None
        assert orchestrator.session is None


class TestResume:
    async def test_resume_continues_where_it_stopped(self, registry, orchestrator, session_manager):
        with pytest.raises(ConnectionError):
            await orchestrator.conduct_intake(DisconnectingProvider())

        stored = session_manager.load_session()
        assert len(stored.navigation_stack) == 7
        assert stored.current_phase == IntakePhase.COMPLAINT_SELECTION

        provider = PrefilledAnswerProvider()
        note = await IntakeOrchestrator(registry, session_manager).resume(provider)

        assert provider.asked[0] == DESCRIBE_PROMPT
        assert COMPLAINT_PROMPT not in provider.asked
        assert not set(CHECKPOINT_PROMPTS) & set(provider.asked)
        assert note.chief_complaint == "Chest pain"

    async def test_resume_without_session(self, orchestrator):
        with pytest.raises(SessionNotFoundError):
            await orchestrator.resume(PrefilledAnswerProvider())

    async def test_expired_session_is_discarded(self, registry, orchestrator, store):
        session = orchestrator.start_session()
        session.last_updated_at = datetime.utcnow() - timedelta(hours=25)
        store.set("test_session", session.model_dump_json())

        with pytest.raises(SessionNotFoundError):
            await IntakeOrchestrator(registry, orchestrator.session_manager).resume(
                PrefilledAnswerProvider()
            )
        assert store.get("test_session") is None

    async def test_resume_after_completion(self, registry, orchestrator):
        await orchestrator.conduct_intake(
            PrefilledAnswerProvider(),
            pain_points=[PainPoint(zone_id="LEFT_PRECORDIAL", intensity=6)],
        )

        provider = PrefilledAnswerProvider()
        with pytest.raises(SessionNotFoundError):
            await IntakeOrchestrator(registry, orchestrator.session_manager).resume(provider)
        assert provider.asked == []

    async def test_finished_session_record_is_discarded(self, registry, orchestrator, store):
        session = orchestrator.start_session()
        session.status = SessionStatus.COMPLETED
        store.set("test_session", session.model_dump_json())

        with pytest.raises(SessionNotFoundError):
            await IntakeOrchestrator(registry, orchestrator.session_manager).resume(
                PrefilledAnswerProvider()
            )
        assert store.get("test_session") is None

    async def test_second_intake_starts_a_new_session(self, orchestrator, session_manager):
        await orchestrator.conduct_intake(PrefilledAnswerProvider())
        first = orchestrator.session.session_id

        await orchestrator.conduct_intake(PrefilledAnswerProvider())
        assert orchestrator.session.session_id != first
        assert session_manager.load_session() is None
