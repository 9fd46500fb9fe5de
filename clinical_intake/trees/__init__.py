"""Complaint tree registry."""

import logging
from typing import Dict, Optional
from clinical_intake.models.encounter import Encounter
from clinical_intake.models.triage import ComplaintType
from clinical_intake.trees.base import ComplaintTree
from clinical_intake.trees.abdomen import AbdominalPainTree
from clinical_intake.trees.back import BackPainTree
from clinical_intake.trees.chest import ChestPainTree
from clinical_intake.trees.general import FeverTree
from clinical_intake.trees.head import HeadacheTree
from clinical_intake.trees.limb import LimbPainTree
from clinical_intake.trees.pelvis import PelvicPainTree
from clinical_intake.trees.respiratory import RespiratoryTree

logger = logging.getLogger(__name__)

TREE_MAP: Dict[str, ComplaintTree] = {
    tree.key: tree
    for tree in (
        ChestPainTree(),
        AbdominalPainTree(),
        HeadacheTree(),
        BackPainTree(),
        PelvicPainTree(),
        LimbPainTree(),
        RespiratoryTree(),
        FeverTree(),
    )
}

TREE_METADATA = {
    "CHEST_PAIN": {"label": "Chest Pain", "urgency": "high"},
    "ABDOMINAL_PAIN": {"label": "Abdominal Pain", "urgency": "medium"},
    "HEADACHE": {"label": "Headache", "urgency": "medium"},
    "BACK_PAIN": {"label": "Back Pain", "urgency": "low"},
    "PELVIC_PAIN": {"label": "Pelvic Pain", "urgency": "medium"},
    "LIMB_PAIN": {"label": "Limb Pain", "urgency": "low"},
    "RESPIRATORY": {"label": "Respiratory", "urgency": "high"},
    "GENERAL": {"label": "General Assessment", "urgency": "low"},
}

# Body-map zone category -> tree
CATEGORY_TREES = {
    "chest": "CHEST_PAIN",
    "abdomen": "ABDOMINAL_PAIN",
    "head_neck": "HEADACHE",
    "back": "BACK_PAIN",
    "pelvis": "PELVIC_PAIN",
    "upper_extremity": "LIMB_PAIN",
    "lower_extremity": "LIMB_PAIN",
    "whole_body": "GENERAL",
}

COMPLAINT_TREES = {
    ComplaintType.CHEST_PAIN: "CHEST_PAIN",
    ComplaintType.HEADACHE: "HEADACHE",
    ComplaintType.ABDOMINAL_PAIN: "ABDOMINAL_PAIN",
    ComplaintType.FEVER: "GENERAL",
    ComplaintType.COUGH: "RESPIRATORY",
    ComplaintType.SHORTNESS_OF_BREATH: "RESPIRATORY",
    ComplaintType.BACK_PAIN: "BACK_PAIN",
}

# Checked in order against zone ids and free-text complaints
KEYWORD_TREES = [
    (("chest", "heart"), "CHEST_PAIN"),
    (("abd", "stomach", "belly"), "ABDOMINAL_PAIN"),
    (("head", "skull"), "HEADACHE"),
    (("back", "spine"), "BACK_PAIN"),
    (("pelvi",), "PELVIC_PAIN"),
    (("limb", "leg", "arm", "hand", "foot", "knee"), "LIMB_PAIN"),
    (("resp", "breath", "lung", "throat", "cough"), "RESPIRATORY"),
    (("fever",), "GENERAL"),
]

URGENT_TREES = {"CHEST_PAIN", "RESPIRATORY", "ABDOMINAL_PAIN"}


def get_tree_by_key(key: str) -> Optional[ComplaintTree]:
    return TREE_MAP.get(key)


def _keyword_tree(text: str) -> Optional[str]:
    text = text.lower()
    for keywords, key in KEYWORD_TREES:
        if any(k in text for k in keywords):
            return key
    return None


def resolve_tree_for_zone(zone_id: str) -> str:
    """Map a zone id to a tree key by name; unmatched zones get GENERAL."""
    return _keyword_tree(zone_id) or "GENERAL"


def requires_urgent_triage(tree_key: str) -> bool:
    return tree_key in URGENT_TREES


def select_tree_key(encounter: Encounter, registry=None) -> str:
    """
    Choose the complaint tree for an encounter.

    The primary pain point's zone category wins, then the selected
    complaint type, then keywords in the free-text complaint.

    Args:
        encounter: Encounter after complaint selection and body mapping
        registry: Zone registry used to look up the primary zone

    Returns:
        Tree key; GENERAL when nothing matches
    """
    primary = encounter.primary_pain_point()
    if primary and registry is not None:
        zone = registry.get_zone(primary.zone_id)
        if zone and zone.category.value in CATEGORY_TREES:
            return CATEGORY_TREES[zone.category.value]

    if encounter.complaint_type in COMPLAINT_TREES:
        return COMPLAINT_TREES[encounter.complaint_type]

    for text in (encounter.complaint_text, encounter.chief_complaint):
        if text:
            key = _keyword_tree(text)
            if key:
                return key

    logger.warning(
        f"No complaint tree matched encounter {encounter.encounter_id}; using GENERAL"
    )
    return "GENERAL"


__all__ = [
    "ComplaintTree",
    "TREE_MAP",
    "TREE_METADATA",
    "get_tree_by_key",
    "resolve_tree_for_zone",
    "requires_urgent_triage",
    "select_tree_key",
]
