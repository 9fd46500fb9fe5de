import logging
from clinical_intake.models.encounter import Encounter, PainPoint
from clinical_intake.models.triage import ComplaintType, DetectedFlagSeverity
from clinical_intake.orchestrator.answer_provider import PrefilledAnswerProvider
from clinical_intake.trees import (
    TREE_MAP,
    get_tree_by_key,
    requires_urgent_triage,
    resolve_tree_for_zone,
    select_tree_key,
)


class TestTreeSelection:
    def test_zone_category_wins(self, registry):
        encounter = Encounter(
            complaint_type=ComplaintType.HEADACHE,
            pain_points=[PainPoint(zone_id="LEFT_KNEE", intensity=4)],
        )
        assert select_tree_key(encounter, registry) == "LIMB_PAIN"

    def test_abdominal_zone(self, registry):
        encounter = Encounter(pain_points=[PainPoint(zone_id="RIGHT_ILIAC")])
        assert select_tree_key(encounter, registry) == "ABDOMINAL_PAIN"

    def test_complaint_type(self, registry):
        encounter = Encounter(complaint_type=ComplaintType.COUGH)
        assert select_tree_key(encounter, registry) == "RESPIRATORY"

    def test_free_text_keywords(self, registry):
        encounter = Encounter(complaint_type=ComplaintType.OTHER, complaint_text="My belly hurts")
        assert select_tree_key(encounter, registry) == "ABDOMINAL_PAIN"

    def test_fallback_is_logged(self, registry, caplog):
        encounter = Encounter(complaint_type=ComplaintType.OTHER, complaint_text="feeling odd")
        with caplog.at_level(logging.WARNING, logger="clinical_intake.trees"):
            assert select_tree_key(encounter, registry) == "GENERAL"
        assert "using GENERAL" in caplog.text

    def test_resolve_by_zone_name(self):
        assert resolve_tree_for_zone("LEFT_CHEST_WALL") == "CHEST_PAIN"
        assert resolve_tree_for_zone("LOWER_BACK") == "BACK_PAIN"
        assert resolve_tree_for_zone("RIGHT_FOREARM") == "LIMB_PAIN"
        assert resolve_tree_for_zone("UNKNOWN_ZONE") == "GENERAL"

    def test_registry(self):
        assert set(TREE_MAP) == {
            "CHEST_PAIN",
            "ABDOMINAL_PAIN",
            "HEADACHE",
            "BACK_PAIN",
            "PELVIC_PAIN",
            "LIMB_PAIN",
            "RESPIRATORY",
            "GENERAL",
        }
        assert get_tree_by_key("NOPE") is None
        assert requires_urgent_triage("CHEST_PAIN")
        assert not requires_urgent_triage("LIMB_PAIN")


class TestComplaintTrees:
    async def test_headache_meningitis(self):
        encounter = Encounter(chief_complaint="Headache")
        provider = PrefilledAnswerProvider(
            {
                "When did the headache start?": "Gradually (over hours/days)",
                "Do you have a fever?": True,
                "Do you have neck stiffness?": True,
            }
        )
        await TREE_MAP["HEADACHE"].ask(encounter, provider)

        assert encounter.hpi.startswith("Headache. ")
        assert "CONCERN FOR MENINGITIS" in encounter.assessment
        assert encounter.red_flags == ["Fever", "Nuchal rigidity"]
        assert [f.id for f in encounter.red_flags_detected] == [
            "headache:fever",
            "headache:nuchal_rigidity",
        ]
        assert all(f.source == "complaint_tree" for f in encounter.red_flags_detected)

    async def test_chest_red_flags_are_critical(self):
        encounter = Encounter(chief_complaint="Chest pain")
        provider = PrefilledAnswerProvider(
            {"Are you experiencing shortness of breath or difficulty breathing?": "yes"}
        )
        await TREE_MAP["CHEST_PAIN"].ask(encounter, provider)

        assert "HIGH RISK FEATURES PRESENT: Shortness of breath" in encounter.assessment
        assert encounter.red_flags_detected[0].severity == DetectedFlagSeverity.CRITICAL
        assert encounter.plan.startswith("EMERGENCY PLAN")

    async def test_chest_without_flags(self):
        encounter = Encounter(chief_complaint="Chest pain")
        await TREE_MAP["CHEST_PAIN"].ask(encounter, PrefilledAnswerProvider())

        assert encounter.red_flags == []
        assert encounter.ros == "Otherwise negative"
        assert "Sharp, pleuritic-type chest pain" in encounter.assessment

    async def test_back_cauda_equina(self):
        encounter = Encounter(chief_complaint="Back pain")
        provider = PrefilledAnswerProvider(
            {"Any new changes in bowel or bladder control (accidents)?": True}
        )
        await TREE_MAP["BACK_PAIN"].ask(encounter, provider)

        assert encounter.assessment.startswith("CRITICAL: Concern for Cauda Equina Syndrome")
        assert encounter.red_flags_detected[0].severity == DetectedFlagSeverity.CRITICAL

    async def test_back_severity_does_not_leak(self):
        await TREE_MAP["BACK_PAIN"].ask(
            Encounter(chief_complaint="Back pain"),
            PrefilledAnswerProvider(
                {"Any new changes in bowel or bladder control (accidents)?": True}
            ),
        )
        assert TREE_MAP["BACK_PAIN"].flag_severity == DetectedFlagSeverity.HIGH

    async def test_abdominal_appendicitis(self):
        encounter = Encounter(chief_complaint="Abdominal pain")
        provider = PrefilledAnswerProvider(
            {"Where is the pain located?": "Lower right (RLQ)", "How did the pain start?": "Suddenly"}
        )
        await TREE_MAP["ABDOMINAL_PAIN"].ask(encounter, provider)

        assert "CONCERN FOR APPENDICITIS" in encounter.assessment
        assert "Location: Lower right (RLQ)." in encounter.hpi

    async def test_review_of_systems(self):
        provider = PrefilledAnswerProvider({"Do you have any problems with: Fever?": True})
        ros = await TREE_MAP["GENERAL"].perform_review_of_systems(provider, ["Fever", "Cough"])
        assert ros == "Fever"

        ros = await TREE_MAP["GENERAL"].perform_review_of_systems(
            PrefilledAnswerProvider(), ["Fever"]
        )
        assert ros == "No positive findings in reviewed systems."

    async def test_every_tree_completes_with_defaults(self):
        for key, tree in TREE_MAP.items():
            encounter = Encounter(chief_complaint="Complaint")
            await tree.ask(encounter, PrefilledAnswerProvider())
            assert encounter.hpi.startswith("Complaint. "), key
            assert encounter.assessment, key
            assert encounter.plan, key
