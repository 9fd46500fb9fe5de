from clinical_intake.models.encounter import PainPoint
from clinical_intake.models.questions import UrgencyLevel
from clinical_intake.models.triage import DetectedFlagSeverity, ZoneSeverity
from clinical_intake.models.zones import RedFlag, RedFlagSeverity
from clinical_intake.utils.red_flags import (
    SEVERITY_TO_DETECTED,
    extract_symptom_tags,
    normalize_symptoms,
    severity_to_urgency,
    sort_by_severity,
    urgency_to_severity,
)


class TestSeverityTranslation:
    def test_severity_to_urgency(self):
        assert severity_to_urgency(RedFlagSeverity.IMMEDIATE) == UrgencyLevel.EMERGENCY
        assert severity_to_urgency(RedFlagSeverity.URGENT) == UrgencyLevel.HIGH
        assert severity_to_urgency("monitor") == UrgencyLevel.MEDIUM

    def test_urgency_to_severity(self):
        assert urgency_to_severity(UrgencyLevel.EMERGENCY) == RedFlagSeverity.IMMEDIATE
        assert urgency_to_severity(UrgencyLevel.HIGH) == RedFlagSeverity.URGENT
        assert urgency_to_severity(UrgencyLevel.LOW) == RedFlagSeverity.MONITOR

    def test_translation_round_trips_for_red_flag_levels(self):
        for severity in RedFlagSeverity:
            assert urgency_to_severity(severity_to_urgency(severity)) == severity

    def test_detected_severity(self):
        assert SEVERITY_TO_DETECTED[RedFlagSeverity.IMMEDIATE] == DetectedFlagSeverity.CRITICAL

    def test_sort_is_stable(self):
        flags = [
            RedFlag(symptom="a", severity="monitor", action="x", condition="c"),
            RedFlag(symptom="b", severity="immediate", action="x", condition="c"),
            RedFlag(symptom="c", severity="monitor", action="x", condition="c"),
        ]
        assert [f.symptom for f in sort_by_severity(flags)] == ["b", "a", "c"]


class TestSymptomTags:
    def test_extracts_tags_from_text(self):
        tags = extract_symptom_tags("I feel sick and I'm sweating, I almost fainted")
        assert tags == ["diaphoresis", "nausea", "syncope"]

    def test_normalize_keeps_known_tags_and_dedupes(self):
        assert normalize_symptoms(["Diaphoresis", "clammy skin", " ", "itchy"]) == [
            "diaphoresis",
            "itchy",
        ]


class TestZoneTriage:
    def test_zone_severity_buckets(self, triage_service):
        assert triage_service.get_zone_severity("LEFT_PRECORDIAL") == ZoneSeverity.CRITICAL
        assert triage_service.get_zone_severity("RIGHT_ILIAC") == ZoneSeverity.CRITICAL
        assert triage_service.get_zone_severity("LEFT_KNEE") == ZoneSeverity.MODERATE
        assert triage_service.get_zone_severity("NOT_A_ZONE") == ZoneSeverity.LOW

    def test_intense_pain_escalates_in_moderate_zone(self, triage_service):
        assessment = triage_service.assess_pain_points([PainPoint(zone_id="LEFT_KNEE", intensity=9)])
        assert assessment.max_severity == ZoneSeverity.MODERATE
        assert assessment.should_escalate
        assert "Severe pain (9/10) in Left Knee" in assessment.alerts

    def test_mild_pain_in_moderate_zone(self, triage_service):
        assessment = triage_service.assess_pain_points([PainPoint(zone_id="LEFT_KNEE", intensity=5)])
        assert not assessment.should_escalate
        assert assessment.alerts == []

    def test_critical_zone_escalates(self, triage_service):
        assessment = triage_service.assess_pain_points(
            [PainPoint(zone_id="LEFT_PRECORDIAL", intensity=3)]
        )
        assert assessment.max_severity == ZoneSeverity.CRITICAL
        assert assessment.should_escalate

    def test_multiple_locations(self, triage_service):
        points = [
            PainPoint(zone_id="LEFT_KNEE", intensity=2),
            PainPoint(zone_id="RIGHT_KNEE", intensity=2),
            PainPoint(zone_id="LUMBAR_SPINE", intensity=2),
        ]
        alerts = triage_service.assess_pain_points(points).alerts
        assert "Multiple pain locations reported - comprehensive evaluation needed" in alerts

    def test_empty_assessment(self, triage_service):
        assessment = triage_service.assess_pain_points([])
        assert assessment.max_severity == ZoneSeverity.LOW
        assert not assessment.should_escalate

    def test_primary_pain_point(self, triage_service):
        knee = PainPoint(zone_id="LEFT_KNEE", intensity=9)
        chest = PainPoint(zone_id="LEFT_PRECORDIAL", intensity=2)
        assert triage_service.get_primary_pain_point([knee, chest]) is chest

        explicit = PainPoint(zone_id="LEFT_KNEE", intensity=1, is_primary=True)
        assert triage_service.get_primary_pain_point([chest, explicit]) is explicit
        assert triage_service.get_primary_pain_point([]) is None
