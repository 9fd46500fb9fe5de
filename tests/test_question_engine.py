from clinical_intake.models.questions import UrgencyLevel
from clinical_intake.models.triage import TriageCategory
from clinical_intake.engines.question_engine import trigger_holds


def _ids(questions):
    return [q.id for q in questions]


class TestQuestionGeneration:
    def test_baseline_comes_first(self, engine):
        ids = _ids(engine.generate_questions("LEFT_PRECORDIAL"))
        assert ids[:4] == ["duration", "onset", "severity", "pattern"]
        assert "chest-sob" in ids

    def test_unmapped_zone_gets_baseline_only(self, engine):
        assert _ids(engine.generate_questions("NOT_A_ZONE")) == [
            "duration",
            "onset",
            "severity",
            "pattern",
        ]

    def test_bank_lookup(self, engine):
        assert engine.get_bank_for_zone("LEFT_PRECORDIAL") == "chest"
        assert engine.get_bank_for_zone("RIGHT_ILIAC") == "abdomen"
        assert engine.get_bank_for_zone("LEFT_KNEE") == "leg"
        assert engine.get_bank_for_zone("NOT_A_ZONE") is None

    def test_conditional_question_needs_yes(self, engine):
        assert "abd-vomiting-blood" not in _ids(engine.generate_questions("RIGHT_ILIAC"))
        assert "abd-vomiting-blood" not in _ids(
            engine.generate_questions("RIGHT_ILIAC", {"abd-nausea": "no"})
        )
        assert "abd-vomiting-blood" in _ids(
            engine.generate_questions("RIGHT_ILIAC", {"abd-nausea": "yes"})
        )

    def test_get_question(self, engine):
        assert engine.get_question("severity").max == 10
        assert engine.get_question("nope") is None


class TestTriggers:
    def test_equality_and_multi_select(self):
        answers = {"chest-sob": "yes", "chest-radiation": ["jaw", "left-arm"]}
        assert trigger_holds("chest-sob:yes", answers)
        assert trigger_holds("chest-radiation:jaw", answers)
        assert not trigger_holds("chest-radiation:back", answers)
        assert trigger_holds("chest-radiation:left-arm", {"chest-radiation": "jaw,left-arm"})

    def test_thresholds_need_numbers(self):
        assert trigger_holds("severity:>=8", {"severity": 8})
        assert not trigger_holds("severity:>=8", {"severity": 7})
        assert not trigger_holds("severity:>=8", {"severity": "9"})
        assert trigger_holds("severity:<=3", {"severity": 2})

    def test_missing_answer(self):
        assert not trigger_holds("chest-sob:yes", {})


class TestRedFlagRules:
    def test_all_triggers_required(self, engine):
        answers = {"chest-quality": "pressure", "chest-sweating": "yes"}
        alerts = engine.evaluate_red_flags(answers)
        assert [a.id for a in alerts] == ["chest-cardiac-sweating"]
        assert alerts[0].urgency == UrgencyLevel.EMERGENCY
        assert alerts[0].source == "combination"

        assert engine.evaluate_red_flags({"chest-quality": "pressure"}) == []

    def test_thunderclap_threshold(self, engine):
        fired = engine.evaluate_red_flags({"head-sudden": "yes", "severity": 8})
        assert [a.id for a in fired] == ["head-thunderclap"]
        assert engine.evaluate_red_flags({"head-sudden": "yes", "severity": 7}) == []

    def test_alerts_sorted_by_urgency(self, engine):
        alerts = engine.evaluate_red_flags(
            {
                "abd-rebound": "yes",
                "abd-fever": "yes",
                "chest-quality": "pressure",
                "chest-sweating": "yes",
            }
        )
        assert [a.id for a in alerts] == ["chest-cardiac-sweating", "abd-peritonitis"]

    def test_question_and_option_flags(self, engine):
        alerts = engine.evaluate_question_flags({"severity": 9, "chest-quality": "pressure"})
        by_id = {a.id: a for a in alerts}
        assert by_id["severity"].source == "question"
        assert by_id["severity"].urgency == UrgencyLevel.HIGH
        assert by_id["chest-quality:pressure"].source == "option"

    def test_no_question_flags_below_threshold(self, engine):
        assert engine.evaluate_question_flags({"severity": 3, "chest-quality": "sharp"}) == []


class TestTriageScore:
    def test_additive_score(self, engine):
        answers = {"severity": 5, "duration": "1-24hours", "onset": "sudden"}
        assert engine.calculate_triage_score(answers, []) == 40

    def test_flags_add_points(self, engine):
        answers = {
            "severity": 5,
            "duration": "1-24hours",
            "onset": "sudden",
            "chest-quality": "pressure",
            "chest-sweating": "yes",
        }
        flags = engine.evaluate_red_flags(answers)
        assert engine.calculate_triage_score(answers, flags) == 80

    def test_score_is_capped_and_deterministic(self, engine):
        answers = {
            "severity": 10,
            "duration": "<1hour",
            "onset": "sudden",
            "chest-sob": "yes",
            "chest-radiation": ["jaw"],
            "chest-quality": "pressure",
            "chest-sweating": "yes",
        }
        flags = engine.evaluate_red_flags(answers)
        first = engine.calculate_triage_score(answers, flags)
        assert first == 100
        assert engine.calculate_triage_score(answers, flags) == first

    def test_empty_answers(self, engine):
        assert engine.calculate_triage_score({}, []) == 0

    def test_categories(self, engine):
        assert engine.categorize_score(100) == TriageCategory.IMMEDIATE
        assert engine.categorize_score(70) == TriageCategory.IMMEDIATE
        assert engine.categorize_score(69) == TriageCategory.URGENT
        assert engine.categorize_score(50) == TriageCategory.URGENT
        assert engine.categorize_score(30) == TriageCategory.SEMI_URGENT
        assert engine.categorize_score(29) == TriageCategory.NON_URGENT
        assert engine.categorize_score(0) == TriageCategory.NON_URGENT
