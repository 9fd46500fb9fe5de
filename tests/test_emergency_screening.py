from clinical_intake.config.settings import settings
from clinical_intake.engines.emergency_screening import (
    EMERGENCY_CHECKPOINTS,
    EmergencyScreeningEngine,
    format_emergency_alert,
    get_emergency_message,
    get_emergency_protocol,
    validate_response,
)
from clinical_intake.models.triage import EmergencyResponse


class TestResponseValidation:
    def test_yes_variants(self):
        for answer in ("yes", "Y", " Yeah ", "ہاں"):
            assert validate_response(answer) == EmergencyResponse.YES

    def test_no_variants(self):
        for answer in ("no", "N", "nope", "نہیں"):
            assert validate_response(answer) == EmergencyResponse.NO

    def test_anything_else_is_invalid(self):
        assert validate_response("maybe") == EmergencyResponse.INVALID
        assert validate_response("") == EmergencyResponse.INVALID


class TestCheckpointContent:
    def test_checkpoint_order(self):
        assert [c.id for c in EMERGENCY_CHECKPOINTS] == [
            "emergency_chest_pain",
            "emergency_breathing",
            "emergency_consciousness",
            "emergency_weakness",
            "emergency_bleeding",
            "emergency_suicide",
        ]

    def test_message_uses_configured_number(self):
        assert settings.emergency_number in get_emergency_message("emergency_chest_pain")
        assert settings.psychiatric_helpline in get_emergency_message("emergency_suicide")
        assert get_emergency_message("nope") == ""

    def test_protocols(self):
        assert get_emergency_protocol("emergency_weakness") == "STROKE_PROTOCOL"
        assert get_emergency_protocol("nope") == "UNKNOWN"

    def test_alert_shape(self):
        alert = format_emergency_alert("emergency_breathing")
        assert set(alert) == {"title", "message", "actions"}
        assert alert["actions"][0] == f"Call {settings.emergency_number}"

        urdu = format_emergency_alert("emergency_breathing", "ur")
        assert urdu["message"] != alert["message"]

        fallback = format_emergency_alert("nope")
        assert fallback["title"] == "Emergency"


class TestScreening:
    async def test_all_clear(self):
        asked = []

        async def ask(question):
            asked.append(question)
            return False

        result = await EmergencyScreeningEngine().screen(ask)
        assert result.completed
        assert not result.has_emergency
        assert len(asked) == len(EMERGENCY_CHECKPOINTS)
        assert result.recommended_action == "continue"

    async def test_stops_at_first_yes(self):
        asked = []

        async def ask(question):
            asked.append(question)
            return question == "Are you struggling to breathe RIGHT NOW?"

        result = await EmergencyScreeningEngine().screen(ask)
        assert result.has_emergency
        assert result.triggered_checkpoint == "emergency_breathing"
        assert result.protocol == "RESPIRATORY_DISTRESS"
        assert len(asked) == 2

    async def test_questions_in_urdu(self):
        asked = []

        async def ask(question):
            asked.append(question)
            return False

        await EmergencyScreeningEngine().screen(ask, language="ur")
        assert asked[0] == EMERGENCY_CHECKPOINTS[0].question["ur"]
