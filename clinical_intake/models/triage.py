"""Triage classification enums."""

from enum import Enum


class TriageCategory(str, Enum):
    """Triage category attached to a clinical note."""

    IMMEDIATE = "immediate"  # See immediately or call emergency services
    URGENT = "urgent"  # See within 1-2 hours
    SEMI_URGENT = "semi_urgent"  # See within a few hours
    NON_URGENT = "non_urgent"  # Routine appointment
    INFORMATIONAL = "informational"


class TriageLevel(str, Enum):
    """Coarse level consumed by scheduling."""

    EMERGENCY = "EMERGENCY"
    URGENT = "URGENT"
    ROUTINE = "ROUTINE"


class ZoneSeverity(str, Enum):
    """Static severity bucket for a zone."""

    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class Specialty(str, Enum):
    """Specialty an encounter is routed to."""

    CARDIOLOGY = "CARDIOLOGY"
    NEUROLOGY = "NEUROLOGY"
    GASTROENTEROLOGY = "GASTROENTEROLOGY"
    ORTHOPEDICS = "ORTHOPEDICS"
    GYNECOLOGY = "GYNECOLOGY"
    PULMONOLOGY = "PULMONOLOGY"
    GENERAL_MEDICINE = "GENERAL_MEDICINE"


class ComplaintType(str, Enum):
    """Chief complaint tags offered during complaint selection."""

    CHEST_PAIN = "chest_pain"
    HEADACHE = "headache"
    ABDOMINAL_PAIN = "abdominal_pain"
    FEVER = "fever"
    COUGH = "cough"
    SHORTNESS_OF_BREATH = "shortness_of_breath"
    BACK_PAIN = "back_pain"
    OTHER = "other"


class IntakePhase(str, Enum):
    """Orchestrator phases, in the order they are entered."""

    EMERGENCY_SCREEN = "EMERGENCY_SCREEN"
    COMPLAINT_SELECTION = "COMPLAINT_SELECTION"
    BODY_MAP = "BODY_MAP"
    COMPLAINT_TREE = "COMPLAINT_TREE"
    SUMMARY = "SUMMARY"
    COMPLETE = "COMPLETE"


PHASE_ORDER = list(IntakePhase)


class EmergencyResponse(str, Enum):
    YES = "YES"
    NO = "NO"
    INVALID = "INVALID"


class DetectedFlagSeverity(str, Enum):
    """Severity of a red flag recorded on the encounter."""

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MODERATE = "MODERATE"
