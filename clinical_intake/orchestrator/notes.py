"""Clinical note assembly and triage level resolution."""

from typing import List
from datetime import datetime
from clinical_intake.config.settings import settings
from clinical_intake.engines.emergency_screening import get_emergency_protocol
from clinical_intake.models.encounter import ClinicalNote, Encounter, IntakeResult
from clinical_intake.models.triage import (
    DetectedFlagSeverity,
    Specialty,
    TriageCategory,
    TriageLevel,
)
from clinical_intake.trees import requires_urgent_triage
import logging

logger = logging.getLogger(__name__)

TRIAGE_DESCRIPTIONS = {
    TriageCategory.IMMEDIATE: "IMMEDIATE - Emergency evaluation required",
    TriageCategory.URGENT: "URGENT - See a clinician within 1-2 hours",
    TriageCategory.SEMI_URGENT: "SEMI-URGENT - See a clinician within a few hours",
    TriageCategory.NON_URGENT: "NON-URGENT - Routine appointment",
    TriageCategory.INFORMATIONAL: "INFORMATIONAL - Self-care advice",
}

# Most urgent first
CATEGORY_ORDER = [
    TriageCategory.IMMEDIATE,
    TriageCategory.URGENT,
    TriageCategory.SEMI_URGENT,
    TriageCategory.NON_URGENT,
    TriageCategory.INFORMATIONAL,
]

TREE_SPECIALTIES = {
    "CHEST_PAIN": Specialty.CARDIOLOGY,
    "HEADACHE": Specialty.NEUROLOGY,
    "ABDOMINAL_PAIN": Specialty.GASTROENTEROLOGY,
    "BACK_PAIN": Specialty.ORTHOPEDICS,
    "LIMB_PAIN": Specialty.ORTHOPEDICS,
    "PELVIC_PAIN": Specialty.GYNECOLOGY,
    "RESPIRATORY": Specialty.PULMONOLOGY,
}

# Completeness weights for note confidence; they sum to 100
CONFIDENCE_WEIGHTS = {
    "chief_complaint": 15,
    "hpi": 20,
    "ros": 10,
    "assessment": 15,
    "pain_points": 15,
    "answers": 15,
    "baseline": 10,
}


def _more_urgent(a: TriageCategory, b: TriageCategory) -> TriageCategory:
    return a if CATEGORY_ORDER.index(a) <= CATEGORY_ORDER.index(b) else b


def determine_triage_category(encounter: Encounter) -> TriageCategory:
    """
    Final category for a standard note.

    Starts from the score category and is raised by detected red flags,
    the pain-point escalation and the urgency of the complaint tree.
    """
    category = encounter.triage_category or TriageCategory.NON_URGENT

    # Static zone flags are a watch list; zone priority reaches the category
    # through the pain assessment instead
    severities = {f.severity for f in encounter.red_flags_detected if f.source != "zone"}
    if DetectedFlagSeverity.CRITICAL in severities:
        category = _more_urgent(category, TriageCategory.IMMEDIATE)
    elif DetectedFlagSeverity.HIGH in severities:
        category = _more_urgent(category, TriageCategory.URGENT)
    elif DetectedFlagSeverity.MODERATE in severities:
        category = _more_urgent(category, TriageCategory.SEMI_URGENT)

    if encounter.pain_assessment and encounter.pain_assessment.should_escalate:
        category = _more_urgent(category, TriageCategory.URGENT)
    if encounter.active_tree_key and requires_urgent_triage(encounter.active_tree_key):
        category = _more_urgent(category, TriageCategory.SEMI_URGENT)

    return category


def compute_confidence(encounter: Encounter) -> int:
    """Percentage of the note sections that were filled in."""
    present = {
        "chief_complaint": bool(encounter.chief_complaint),
        "hpi": bool(encounter.hpi.strip()),
        "ros": bool(encounter.ros),
        "assessment": bool(encounter.assessment),
        "pain_points": bool(encounter.pain_points),
        "answers": bool(encounter.answers),
        "baseline": encounter.baseline_committed,
    }
    return min(100, sum(CONFIDENCE_WEIGHTS[k] for k, ok in present.items() if ok))


def _split_ros(ros: str) -> List[str]:
    return [item.strip() for item in ros.split(",") if item.strip()]


def _pmh(encounter: Encounter) -> str:
    parts = [encounter.past_medical_history.strip(), encounter.pmh.strip()]
    return " ".join(p for p in parts if p)


def build_emergency_note(encounter: Encounter) -> ClinicalNote:
    """Note for an encounter stopped at an emergency checkpoint."""
    screening = encounter.emergency_screening
    checkpoint = screening.triggered_checkpoint if screening else "unknown"
    protocol = screening.protocol if screening and screening.protocol else None
    protocol = protocol or get_emergency_protocol(checkpoint)
    question = screening.question if screening and screening.question else checkpoint

    chief_complaint = encounter.chief_complaint or "Emergency screening"
    note = ClinicalNote(
        chief_complaint=f"{chief_complaint} with EMERGENCY",
        hpi=f"Patient triggered emergency checkpoint: {checkpoint}",
        ros=[f"Emergency protocol: {protocol}"],
        pmh=_pmh(encounter),
        medications=encounter.current_medications,
        allergies=encounter.allergies,
        social_history=encounter.social_history.strip(),
        family_history=list(encounter.family_history),
        red_flags=[f"CRITICAL: {question}"],
        clinical_alerts=[f"EMERGENCY - {settings.emergency_number} recommended"],
        assessment=f"Positive emergency screen ({protocol}).",
        plan=f"Call {settings.emergency_number} or go to the nearest emergency department now.",
        triage_category=TriageCategory.IMMEDIATE,
        triage="IMMEDIATE - Life-threatening emergency",
        triage_score=100,
        confidence=100,
        emergency=True,
    )
    logger.warning(f"Emergency note generated for {encounter.encounter_id} ({protocol})")
    return note


def build_clinical_note(encounter: Encounter) -> ClinicalNote:
    """Standard note merging history, red flags, triage and confidence."""
    category = determine_triage_category(encounter)
    note = ClinicalNote(
        chief_complaint=encounter.chief_complaint or "Not specified",
        hpi=encounter.hpi.strip(),
        ros=_split_ros(encounter.ros),
        pmh=_pmh(encounter),
        medications=encounter.current_medications,
        allergies=encounter.allergies,
        social_history=encounter.social_history.strip(),
        family_history=list(encounter.family_history),
        red_flags=list(encounter.red_flags),
        clinical_alerts=list(encounter.clinical_alerts),
        assessment=encounter.assessment,
        plan=encounter.plan,
        triage_category=category,
        triage=TRIAGE_DESCRIPTIONS[category],
        triage_score=encounter.triage_score,
        confidence=compute_confidence(encounter),
        generated_at=datetime.utcnow(),
    )
    logger.info(
        f"Clinical note for {encounter.encounter_id}: {category.value}, "
        f"confidence {note.confidence}"
    )
    return note


def build_intake_result(encounter: Encounter) -> IntakeResult:
    """Routing summary: triage level, specialty and red flag ids."""
    note = encounter.generated_note
    category = note.triage_category if note else determine_triage_category(encounter)

    if encounter.has_emergency() or category == TriageCategory.IMMEDIATE:
        level = TriageLevel.EMERGENCY
    elif category in (TriageCategory.URGENT, TriageCategory.SEMI_URGENT):
        level = TriageLevel.URGENT
    else:
        level = TriageLevel.ROUTINE

    red_flag_ids = [f.id for f in encounter.red_flags_detected]
    if encounter.has_emergency():
        red_flag_ids.insert(0, f"emergency:{encounter.emergency_screening.triggered_checkpoint}")

    return IntakeResult(
        encounter_id=encounter.encounter_id,
        triage_level=level,
        recommended_specialty=TREE_SPECIALTIES.get(
            encounter.active_tree_key or "", Specialty.GENERAL_MEDICINE
        ),
        red_flag_ids=red_flag_ids,
        triage_score=note.triage_score if note else encounter.triage_score,
        note=note,
    )
