"""Hand-authored pain pattern rule tables.

Evaluated by ``ClinicalZoneAnalyzer`` in family order: radiation, referred,
dermatomal, multi-system. Within a family, rules are tried in table order.
"""

from typing import List
from pydantic import BaseModel
from clinical_intake.models.zones import RedFlagSeverity


class RadiationRule(BaseModel):
    primary_zone: str
    radiation_targets: List[str]
    condition: str
    urgency: RedFlagSeverity
    confidence: float


class ReferredRule(BaseModel):
    presenting_zone: str
    source_organ: str
    source_zone: str
    condition: str
    urgency: RedFlagSeverity
    confidence: float = 0.7
    sign: str = ""


class DermatomalRule(BaseModel):
    dermatome: str
    zones: List[str]
    urgency: RedFlagSeverity = RedFlagSeverity.MONITOR
    confidence: float = 0.65
    min_matches: int = 2


class SymptomRedFlagRule(BaseModel):
    """Zone/symptom co-occurrence that raises an extra red flag."""

    name: str
    zones: List[str] = []
    categories: List[str] = []
    symptoms: List[str]
    flag_symptom: str
    action: str
    condition: str
    severity: RedFlagSeverity = RedFlagSeverity.IMMEDIATE


RADIATION_PATTERNS: List[RadiationRule] = [
    RadiationRule(
        primary_zone="LEFT_PRECORDIAL",
        radiation_targets=["LEFT_ARM", "JAW_LEFT", "INTERSCAPULAR", "EPIGASTRIC"],
        condition="Acute Coronary Syndrome",
        urgency=RedFlagSeverity.IMMEDIATE,
        confidence=0.9,
    ),
    RadiationRule(
        primary_zone="RIGHT_HYPOCHONDRIAC",
        radiation_targets=["RIGHT_SHOULDER", "INTERSCAPULAR"],
        condition="Cholecystitis",
        urgency=RedFlagSeverity.URGENT,
        confidence=0.85,
    ),
    RadiationRule(
        primary_zone="EPIGASTRIC",
        radiation_targets=["POSTERIOR_THORACIC", "LEFT_SHOULDER"],
        condition="Pancreatitis",
        urgency=RedFlagSeverity.URGENT,
        confidence=0.8,
    ),
    RadiationRule(
        primary_zone="UMBILICAL",
        radiation_targets=["RIGHT_ILIAC"],
        condition="Appendicitis (classic migration)",
        urgency=RedFlagSeverity.URGENT,
        confidence=0.75,
    ),
]

REFERRED_PATTERNS: List[ReferredRule] = [
    ReferredRule(
        presenting_zone="LEFT_SHOULDER",
        source_organ="Spleen",
        source_zone="LEFT_HYPOCHONDRIAC",
        sign="Kehr's sign",
        condition="Splenic rupture",
        urgency=RedFlagSeverity.IMMEDIATE,
    ),
    ReferredRule(
        presenting_zone="RIGHT_SHOULDER",
        source_organ="Gallbladder",
        source_zone="RIGHT_HYPOCHONDRIAC",
        condition="Cholecystitis",
        urgency=RedFlagSeverity.URGENT,
    ),
    ReferredRule(
        presenting_zone="JAW_LEFT",
        source_organ="Heart",
        source_zone="LEFT_PRECORDIAL",
        condition="Myocardial Infarction with atypical presentation",
        urgency=RedFlagSeverity.IMMEDIATE,
    ),
]

DERMATOMAL_PATTERNS: List[DermatomalRule] = [
    DermatomalRule(dermatome="C5", zones=["ANTERIOR_SHOULDER", "LATERAL_ARM"]),
    DermatomalRule(dermatome="C6", zones=["LATERAL_FOREARM", "THUMB"]),
    DermatomalRule(dermatome="L5", zones=["LATERAL_LEG", "DORSAL_FOOT"]),
    DermatomalRule(dermatome="T10", zones=["UMBILICAL"]),
]

# Multi-system (diffuse) pattern
MULTI_SYSTEM_MIN_SYSTEMS = 2
MULTI_SYSTEM_MIN_ZONES_PER_SYSTEM = 2
MULTI_SYSTEM_DIFFERENTIAL = [
    "Systemic inflammatory condition",
    "Fibromyalgia",
    "Polymyalgia",
]
MULTI_SYSTEM_CONFIDENCE = 0.5

SYMPTOM_RED_FLAG_RULES: List[SymptomRedFlagRule] = [
    SymptomRedFlagRule(
        name="cardiac",
        zones=["LEFT_PRECORDIAL", "RETROSTERNAL"],
        symptoms=["diaphoresis", "dyspnea", "nausea", "syncope"],
        flag_symptom="Chest pain with associated cardiac symptoms",
        action="Activate cardiac protocol: ECG, troponin, aspirin, emergency evaluation",
        condition="Acute Coronary Syndrome",
    ),
    SymptomRedFlagRule(
        name="surgical_abdomen",
        categories=["abdomen"],
        symptoms=["rebound", "rigidity", "guarding"],
        flag_symptom="Abdominal pain with peritoneal signs",
        action="Emergency surgical consult",
        condition="Surgical abdomen",
    ),
    SymptomRedFlagRule(
        name="neurological",
        categories=["head_neck"],
        symptoms=["altered_mental_status", "focal_weakness", "vision_loss", "thunderclap"],
        flag_symptom="Head or neck pain with neurological deficit",
        action="Emergency neurological evaluation, consider CT head",
        condition="Stroke, SAH, or other CNS emergency",
    ),
]

# Standard workup per body system, appended to next steps
SYSTEM_WORKUPS = {
    "cardiovascular": [
        "Obtain 12-lead ECG",
        "Check troponin levels",
        "Monitor vital signs",
    ],
    "gastrointestinal": [
        "Perform abdominal examination",
        "Assess for peritoneal signs",
        "Consider abdominal imaging",
    ],
    "respiratory": [
        "Auscultate lung fields",
        "Check oxygen saturation",
        "Consider chest X-ray",
    ],
    "neurological": [
        "Perform neurological examination",
        "Assess cranial nerves",
    ],
}
