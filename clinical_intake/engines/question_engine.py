"""Adaptive question generation, red flag evaluation and triage scoring."""

from typing import Any, Dict, List, Mapping, Optional, Sequence
from clinical_intake.engines.question_bank import (
    BASELINE_QUESTIONS,
    CATEGORY_BANKS,
    COMBINATION_RULES,
    PREFIX_BANKS,
    ZONE_QUESTION_BANKS,
)
from clinical_intake.knowledge.registry import BodyZoneRegistry
from clinical_intake.models.questions import (
    MedicalQuestion,
    QuestionType,
    RedFlagAlert,
    RedFlagCombinationRule,
    UrgencyLevel,
)
from clinical_intake.models.triage import TriageCategory
from clinical_intake.utils.red_flags import sort_by_urgency
import logging

logger = logging.getLogger(__name__)


URGENCY_POINTS: Dict[UrgencyLevel, int] = {
    UrgencyLevel.EMERGENCY: 40,
    UrgencyLevel.HIGH: 25,
    UrgencyLevel.MEDIUM: 15,
    UrgencyLevel.LOW: 5,
}

DURATION_POINTS: Dict[str, int] = {
    "<1hour": 20,
    "1-24hours": 15,
    "1-7days": 10,
    "1-4weeks": 5,
}

ONSET_POINTS: Dict[str, int] = {
    "sudden": 15,
    "gradual-hours": 10,
}

SEVERITY_WEIGHT = 2
MAX_SCORE = 100

# (minimum score, category), checked top down
SCORE_CATEGORIES = [
    (70, TriageCategory.IMMEDIATE),
    (50, TriageCategory.URGENT),
    (30, TriageCategory.SEMI_URGENT),
]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _answer_values(answer: Any) -> List[str]:
    """Multi-select answers arrive as lists or comma-joined strings."""
    if isinstance(answer, (list, tuple, set)):
        return [str(v).strip() for v in answer]
    if isinstance(answer, str) and "," in answer:
        return [v.strip() for v in answer.split(",")]
    return [str(answer).strip()]


def trigger_holds(trigger: str, answers: Mapping[str, Any]) -> bool:
    """
    Evaluate one ``question_id:expected`` trigger against the answers.

    ``expected`` is a literal value, or ``>=N`` / ``<=N`` for a numeric
    threshold. Thresholds only hold for numeric answers; a list or a
    comma-joined answer holds when it contains the expected value.
    """
    question_id, _, expected = trigger.partition(":")
    if question_id not in answers:
        return False
    answer = answers[question_id]
    if answer is None:
        return False

    if expected.startswith(">=") or expected.startswith("<="):
        if not _is_number(answer):
            return False
        threshold = float(expected[2:])
        return answer >= threshold if expected.startswith(">=") else answer <= threshold

    if isinstance(answer, (list, tuple, set)) or (isinstance(answer, str) and "," in answer):
        return expected in _answer_values(answer)
    if isinstance(answer, bool):
        return expected == ("yes" if answer else "no")
    return str(answer) == expected


class MedicalQuestionEngine:
    """Builds the adaptive question set for a zone and scores the answers."""

    def __init__(
        self,
        registry: BodyZoneRegistry,
        rules: Optional[Sequence[RedFlagCombinationRule]] = None,
    ):
        self.registry = registry
        self.rules = list(rules) if rules is not None else list(COMBINATION_RULES)
        self._by_id: Dict[str, MedicalQuestion] = {q.id: q for q in BASELINE_QUESTIONS}
        for bank in ZONE_QUESTION_BANKS.values():
            for question in bank:
                self._by_id[question.id] = question

    # ------------------------------------------------------------------
    # Question selection
    # ------------------------------------------------------------------

    def get_bank_for_zone(self, zone_id: str) -> Optional[str]:
        """Name of the question bank for a zone, or None for baseline only."""
        zone = self.registry.get_zone(zone_id)
        if zone is not None:
            return CATEGORY_BANKS.get(zone.category.value)

        key = (zone_id or "").lower()
        for prefixes, bank in PREFIX_BANKS:
            if any(key.startswith(p) for p in prefixes):
                return bank
        return None

    def should_ask(self, question: MedicalQuestion, answers: Mapping[str, Any]) -> bool:
        condition = question.condition
        if condition is None:
            return True

        answer = answers.get(condition.depends_on)
        if answer is None:
            return False
        if isinstance(condition.value, list):
            return any(v in condition.value for v in _answer_values(answer))
        if isinstance(answer, bool):
            answer = "yes" if answer else "no"
        return answer == condition.value

    def generate_questions(
        self, zone_id: str, previous_answers: Optional[Mapping[str, Any]] = None
    ) -> List[MedicalQuestion]:
        """
        Baseline questions followed by the zone's bank, gated on earlier answers.

        Args:
            zone_id: Selected zone id
            previous_answers: Answers keyed by question id

        Returns:
            Questions to ask, baseline order fixed
        """
        answers = previous_answers or {}
        bank = self.get_bank_for_zone(zone_id)
        candidates = list(BASELINE_QUESTIONS)
        if bank:
            candidates.extend(ZONE_QUESTION_BANKS[bank])
        else:
            logger.debug(f"No question bank for zone {zone_id}, baseline only")

        return [q for q in candidates if self.should_ask(q, answers)]

    def get_question(self, question_id: str) -> Optional[MedicalQuestion]:
        return self._by_id.get(question_id)

    # ------------------------------------------------------------------
    # Red flags
    # ------------------------------------------------------------------

    def evaluate_red_flags(self, answers: Mapping[str, Any]) -> List[RedFlagAlert]:
        """
        Fire every combination rule whose triggers all hold.

        Returns:
            Alerts sorted emergency, high, medium, low
        """
        alerts = [
            RedFlagAlert(
                id=rule.id,
                urgency=rule.urgency,
                message=rule.message,
                action=rule.action,
                source="combination",
                triggered_by=[t.partition(":")[0] for t in rule.triggers],
            )
            for rule in self.rules
            if rule.triggers and all(trigger_holds(t, answers) for t in rule.triggers)
        ]

        alerts = sort_by_urgency(alerts)
        if alerts:
            logger.info(f"Combination red flags fired: {[a.id for a in alerts]}")
        return alerts

    def evaluate_question_flags(self, answers: Mapping[str, Any]) -> List[RedFlagAlert]:
        """Per-question triggers and red-flagged options among the answers."""
        alerts: List[RedFlagAlert] = []

        for question_id, answer in answers.items():
            question = self._by_id.get(question_id)
            if question is None or answer is None:
                continue

            rule = question.red_flag
            if rule is not None:
                hit = False
                if rule.threshold is not None:
                    hit = _is_number(answer) and answer >= rule.threshold
                elif rule.value is not None:
                    hit = trigger_holds(f"{question_id}:{rule.value}", answers)
                if hit:
                    alerts.append(
                        RedFlagAlert(
                            id=question_id,
                            urgency=rule.urgency,
                            message=rule.message,
                            action="review",
                            source="question",
                            triggered_by=[question_id],
                        )
                    )

            if question.type in (QuestionType.SINGLE_CHOICE, QuestionType.MULTI_CHOICE):
                chosen = _answer_values(answer)
                for option in question.options:
                    if option.red_flag and option.value in chosen:
                        alerts.append(
                            RedFlagAlert(
                                id=f"{question_id}:{option.value}",
                                urgency=option.urgency or UrgencyLevel.HIGH,
                                message=f"{question.text} {option.label}",
                                action="review",
                                source="option",
                                triggered_by=[question_id],
                            )
                        )

        return sort_by_urgency(alerts)

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def calculate_triage_score(
        self, answers: Mapping[str, Any], red_flags: Sequence[RedFlagAlert]
    ) -> int:
        """
        Capped additive urgency score.

        Args:
            answers: Answers keyed by question id
            red_flags: Alerts from evaluate_red_flags

        Returns:
            Score in [0, 100]
        """
        score = 0
        for flag in red_flags:
            score += URGENCY_POINTS.get(UrgencyLevel(flag.urgency), 0)

        severity = answers.get("severity")
        if _is_number(severity):
            score += SEVERITY_WEIGHT * severity

        score += DURATION_POINTS.get(answers.get("duration"), 0)
        score += ONSET_POINTS.get(answers.get("onset"), 0)

        return int(max(0, min(score, MAX_SCORE)))

    @staticmethod
    def categorize_score(score: int) -> TriageCategory:
        for minimum, category in SCORE_CATEGORIES:
            if score >= minimum:
                return category
        return TriageCategory.NON_URGENT
