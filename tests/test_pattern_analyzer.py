from clinical_intake.models.zones import PatternType, RedFlagSeverity
from clinical_intake.utils.red_flags import SEVERITY_RANK


class TestPatternMatching:
    def test_cardiac_radiation(self, analyzer):
        insight = analyzer.analyze_pattern(["LEFT_PRECORDIAL", "LEFT_ARM"])
        assert insight is not None
        assert insight.pattern.type == PatternType.RADIATION
        assert insight.pattern.primary_zone == "LEFT_PRECORDIAL"
        assert insight.pattern.secondary_zones == ["LEFT_ARM"]
        assert insight.pattern.urgency == RedFlagSeverity.IMMEDIATE

    def test_radiation_predicate(self, analyzer):
        assert analyzer.is_radiating_pain(["LEFT_PRECORDIAL", "JAW_LEFT"])
        assert not analyzer.is_radiating_pain(["LEFT_KNEE"])

    def test_unknown_zones_are_ignored(self, analyzer):
        assert analyzer.analyze_pattern(["NOT_A_ZONE"]) is None
        insight = analyzer.analyze_pattern(["NOT_A_ZONE", "LEFT_PRECORDIAL", "LEFT_ARM"])
        assert insight.pattern.type == PatternType.RADIATION

    def test_referred_shoulder_pain(self, analyzer):
        pattern = analyzer.match_pattern(["LEFT_SHOULDER"])
        assert pattern.type == PatternType.REFERRED
        assert pattern.primary_zone == "LEFT_HYPOCHONDRIAC"
        assert pattern.secondary_zones == ["LEFT_SHOULDER"]
        assert pattern.differential == ["Splenic rupture"]
        assert pattern.urgency == RedFlagSeverity.IMMEDIATE
        assert analyzer.is_referred_pain(["LEFT_SHOULDER"])

    def test_dermatomal_l5(self, analyzer):
        pattern = analyzer.match_pattern(["LATERAL_LEG", "DORSAL_FOOT"])
        assert pattern.type == PatternType.DERMATOMAL
        assert pattern.differential == ["L5 radiculopathy"]
        assert pattern.urgency == RedFlagSeverity.MONITOR
        assert analyzer.is_dermatomal_pattern(["LATERAL_LEG", "DORSAL_FOOT"])

    def test_single_zone_dermatome_never_matches(self, analyzer):
        # T10 lists one zone but every dermatome needs two
        assert not analyzer.is_dermatomal_pattern(["UMBILICAL"])
        assert not analyzer.is_dermatomal_pattern(["LATERAL_LEG"])

    def test_multi_system_is_diffuse(self, analyzer):
        pattern = analyzer.match_pattern(["LEFT_PRECORDIAL", "RETROSTERNAL"])
        assert pattern.type == PatternType.DIFFUSE
        assert pattern.urgency == RedFlagSeverity.MONITOR
        assert not analyzer.is_radiating_pain(["LEFT_PRECORDIAL", "RETROSTERNAL"])

    def test_radiation_wins_over_referred(self, analyzer):
        assert analyzer.is_referred_pain(["EPIGASTRIC", "LEFT_SHOULDER"])
        pattern = analyzer.match_pattern(["EPIGASTRIC", "LEFT_SHOULDER"])
        assert pattern.type == PatternType.RADIATION
        assert pattern.differential == ["Pancreatitis"]
        assert pattern.secondary_zones == ["LEFT_SHOULDER"]

    def test_no_pattern_for_empty_selection(self, analyzer):
        assert analyzer.analyze_pattern([]) is None
        assert analyzer.match_pattern([]) is None


class TestRedFlagDetection:
    def test_cardiac_symptoms_lead_with_immediate_flag(self, analyzer):
        flags = analyzer.detect_red_flags(["LEFT_PRECORDIAL", "LEFT_ARM"], ["diaphoresis"])
        assert flags
        assert flags[0].severity == RedFlagSeverity.IMMEDIATE
        assert "Coronary" in flags[0].condition
        assert any(f.symptom == "Chest pain with associated cardiac symptoms" for f in flags)

    def test_free_text_symptoms_are_tagged(self, analyzer):
        flags = analyzer.detect_red_flags(["LEFT_PRECORDIAL"], ["I'm sweating a lot"])
        assert any(f.symptom == "Chest pain with associated cardiac symptoms" for f in flags)

    def test_right_iliac_appendicitis(self, analyzer):
        flags = analyzer.detect_red_flags(["RIGHT_ILIAC"])
        assert any(
            f.severity == RedFlagSeverity.URGENT and "appendicitis" in f.condition.lower()
            for f in flags
        )

    def test_flags_sorted_by_severity(self, analyzer):
        flags = analyzer.detect_red_flags(
            ["RIGHT_ILIAC", "LEFT_PRECORDIAL", "EPIGASTRIC"], ["rebound", "nausea"]
        )
        ranks = [SEVERITY_RANK[f.severity] for f in flags]
        assert ranks == sorted(ranks)

    def test_unknown_zone_has_no_flags(self, analyzer):
        assert analyzer.detect_red_flags(["NOT_A_ZONE"]) == []

    def test_next_steps_and_differential(self, analyzer):
        steps = analyzer.recommend_next_steps(["LEFT_PRECORDIAL", "LEFT_ARM"])
        assert steps
        differential = analyzer.get_differential_diagnoses(["LEFT_PRECORDIAL"])
        assert "Acute Coronary Syndrome" in differential
