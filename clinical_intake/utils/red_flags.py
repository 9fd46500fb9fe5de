"""Red flag ranking, severity/urgency translation and symptom tag extraction."""

import re
from typing import Dict, List, Iterable, TypeVar
from clinical_intake.models.questions import UrgencyLevel
from clinical_intake.models.triage import DetectedFlagSeverity
from clinical_intake.models.zones import RedFlagSeverity


T = TypeVar("T")

SEVERITY_RANK: Dict[RedFlagSeverity, int] = {
    RedFlagSeverity.IMMEDIATE: 0,
    RedFlagSeverity.URGENT: 1,
    RedFlagSeverity.MONITOR: 2,
}

URGENCY_RANK: Dict[UrgencyLevel, int] = {
    UrgencyLevel.EMERGENCY: 0,
    UrgencyLevel.HIGH: 1,
    UrgencyLevel.MEDIUM: 2,
    UrgencyLevel.LOW: 3,
}

# Zone/pattern red-flag severity -> question-engine urgency
SEVERITY_TO_URGENCY: Dict[RedFlagSeverity, UrgencyLevel] = {
    RedFlagSeverity.IMMEDIATE: UrgencyLevel.EMERGENCY,
    RedFlagSeverity.URGENT: UrgencyLevel.HIGH,
    RedFlagSeverity.MONITOR: UrgencyLevel.MEDIUM,
}

# LOW has no red-flag counterpart and folds into MONITOR
URGENCY_TO_SEVERITY: Dict[UrgencyLevel, RedFlagSeverity] = {
    UrgencyLevel.EMERGENCY: RedFlagSeverity.IMMEDIATE,
    UrgencyLevel.HIGH: RedFlagSeverity.URGENT,
    UrgencyLevel.MEDIUM: RedFlagSeverity.MONITOR,
    UrgencyLevel.LOW: RedFlagSeverity.MONITOR,
}

# Severity recorded on the encounter
SEVERITY_TO_DETECTED: Dict[RedFlagSeverity, DetectedFlagSeverity] = {
    RedFlagSeverity.IMMEDIATE: DetectedFlagSeverity.CRITICAL,
    RedFlagSeverity.URGENT: DetectedFlagSeverity.HIGH,
    RedFlagSeverity.MONITOR: DetectedFlagSeverity.MODERATE,
}


def severity_to_urgency(severity: RedFlagSeverity) -> UrgencyLevel:
    return SEVERITY_TO_URGENCY[RedFlagSeverity(severity)]


def urgency_to_severity(urgency: UrgencyLevel) -> RedFlagSeverity:
    return URGENCY_TO_SEVERITY[UrgencyLevel(urgency)]


def sort_by_severity(flags: Iterable[T]) -> List[T]:
    """Stable sort of objects with a ``severity`` attribute, immediate first."""
    return sorted(flags, key=lambda f: SEVERITY_RANK[RedFlagSeverity(f.severity)])


def sort_by_urgency(alerts: Iterable[T]) -> List[T]:
    """Stable sort of objects with an ``urgency`` attribute, emergency first."""
    return sorted(alerts, key=lambda a: URGENCY_RANK[UrgencyLevel(a.urgency)])


# Free-text phrases mapped to the symptom tags used by co-occurrence rules
SYMPTOM_TAG_PATTERNS = {
    "diaphoresis": [
        r"sweat(ing|y)",
        r"diaphore",
        r"clammy",
    ],
    "dyspnea": [
        r"short(ness)? of breath",
        r"can'?t breathe",
        r"difficulty breathing",
        r"breathless",
        r"dyspn",
    ],
    "nausea": [
        r"nause",
        r"feel(ing)? sick",
        r"vomit",
    ],
    "syncope": [
        r"faint(ed|ing)?",
        r"passed out",
        r"blacked out",
        r"syncop",
    ],
    "rebound": [
        r"rebound",
        r"hurts? (more )?when (i )?let go",
    ],
    "rigidity": [
        r"rigid",
        r"(stomach|abdomen|belly).*(hard|board)",
    ],
    "guarding": [
        r"guarding",
        r"can'?t (let anyone )?touch.*(stomach|abdomen|belly)",
    ],
    "altered_mental_status": [
        r"confus",
        r"disoriented",
        r"not making sense",
    ],
    "focal_weakness": [
        r"(arm|leg|face).*weak",
        r"weak(ness)? (on|in) one side",
        r"face.*droop",
    ],
    "vision_loss": [
        r"(lost|loss of|losing).*(vision|sight)",
        r"can'?t see",
        r"blind",
    ],
    "thunderclap": [
        r"thunderclap",
        r"worst headache",
        r"sudden.*severe.*headache",
    ],
    "fever": [
        r"fever",
        r"high temperature",
    ],
}


def extract_symptom_tags(text: str) -> List[str]:
    """
    Detect symptom tags in free text.

    Args:
        text: Patient-entered description

    Returns:
        Tags in table order, each at most once
    """
    text_lower = text.lower()
    detected = []

    for tag, patterns in SYMPTOM_TAG_PATTERNS.items():
        for pattern in patterns:
            if re.search(pattern, text_lower):
                detected.append(tag)
                break  # Only add tag once

    return detected


def normalize_symptoms(symptoms: Iterable[str]) -> List[str]:
    """Lowercase tags and expand free-text entries into tags."""
    tags: List[str] = []
    for symptom in symptoms:
        s = symptom.strip().lower()
        if not s:
            continue
        candidates = [s] if s in SYMPTOM_TAG_PATTERNS else extract_symptom_tags(s) or [s]
        for tag in candidates:
            if tag not in tags:
                tags.append(tag)
    return tags
