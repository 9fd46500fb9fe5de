"""Hierarchical body zone table.

Nested nodes keyed by zone id. A node without ``children`` is terminal
(selectable on the body map). Grouping nodes that omit ``category`` or
``systems`` inherit them from their parent when the registry flattens the
tree. ``clinical`` is optional and defaults to empty lists with priority 5.
"""

from typing import Any, Dict, List, Optional


def _flag(
    symptom: str,
    severity: str,
    action: str,
    condition: str,
    criteria: Optional[List[str]] = None,
) -> Dict[str, Any]:
    return {
        "symptom": symptom,
        "severity": severity,
        "action": action,
        "condition": condition,
        "criteria": criteria or [],
    }


def _rel(zone_id: str, relationship: str) -> Dict[str, str]:
    return {"zone_id": zone_id, "relationship": relationship}


def _clinical(
    diagnoses: List[str],
    icd10: List[str],
    red_flags: Optional[List[Dict[str, Any]]] = None,
    related: Optional[List[Dict[str, str]]] = None,
    priority: int = 5,
    is_common: bool = False,
) -> Dict[str, Any]:
    return {
        "common_diagnoses": diagnoses,
        "icd10_codes": icd10,
        "red_flags": red_flags or [],
        "related_zones": related or [],
        "priority": priority,
        "is_common": is_common,
    }


_ACS_REFERRED = _rel("LEFT_PRECORDIAL", "referred")


HEAD_NECK = {
    "label_en": "Head & Neck",
    "label_ur": "سر اور گردن",
    "clinical_term": "Cephalic Region",
    "category": "head_neck",
    "systems": ["neurological", "musculoskeletal"],
    "children": {
        "HEAD": {
            "label_en": "Head",
            "label_ur": "سر",
            "clinical_term": "Caput",
            "systems": ["neurological"],
            "children": {
                "CRANIUM": {
                    "label_en": "Skull",
                    "label_ur": "کھوپڑی",
                    "clinical_term": "Cranium",
                    "children": {
                        "FRONTAL": {
                            "label_en": "Forehead",
                            "label_ur": "پیشانی",
                            "clinical_term": "Frontal Region",
                            "aliases": ["forehead", "front of head"],
                            "systems": ["neurological", "integumentary"],
                            "clinical": _clinical(
                                ["Tension headache", "Frontal sinusitis", "Migraine"],
                                ["R51", "G44.1"],
                                red_flags=[
                                    _flag(
                                        'Sudden severe headache ("thunderclap")',
                                        "immediate",
                                        "Emergency evaluation",
                                        "Subarachnoid hemorrhage",
                                    )
                                ],
                            ),
                        },
                        "TEMPORAL_LEFT": {
                            "label_en": "Left Temple",
                            "label_ur": "بائیں کنپٹی",
                            "clinical_term": "Left Temporal Region",
                            "systems": ["neurological", "cardiovascular"],
                            "clinical": _clinical(
                                ["Temporal arteritis", "Migraine", "TMJ disorder"],
                                ["M31.6", "G43.9"],
                                red_flags=[
                                    _flag(
                                        "Severe temple pain with vision changes in elderly",
                                        "urgent",
                                        "Same-day evaluation, ESR/CRP",
                                        "Giant cell arteritis (risk of blindness)",
                                    )
                                ],
                            ),
                        },
                        "TEMPORAL_RIGHT": {
                            "label_en": "Right Temple",
                            "label_ur": "دائیں کنپٹی",
                            "clinical_term": "Right Temporal Region",
                            "systems": ["neurological", "cardiovascular"],
                            "clinical": _clinical(
                                ["Temporal arteritis", "Migraine", "TMJ disorder"],
                                ["M31.6", "G43.9"],
                            ),
                        },
                        "PARIETAL": {
                            "label_en": "Crown of Head",
                            "label_ur": "سر کا تاج",
                            "clinical_term": "Parietal Region",
                            "systems": ["neurological"],
                            "clinical": _clinical(
                                ["Tension headache", "Migraine"], ["R51"]
                            ),
                        },
                        "OCCIPITAL": {
                            "label_en": "Back of Head",
                            "label_ur": "سر کا پچھلا حصہ",
                            "clinical_term": "Occipital Region",
                            "systems": ["neurological", "musculoskeletal"],
                            "clinical": _clinical(
                                [
                                    "Occipital neuralgia",
                                    "Tension headache",
                                    "Cervicogenic headache",
                                ],
                                ["M54.81", "R51"],
                                red_flags=[
                                    _flag(
                                        "Severe occipital headache with neck stiffness and fever",
                                        "immediate",
                                        "Emergency evaluation",
                                        "Meningitis",
                                    )
                                ],
                            ),
                        },
                    },
                },
                "FACE": {
                    "label_en": "Face",
                    "label_ur": "چہرہ",
                    "clinical_term": "Facies",
                    "children": {
                        "LEFT_EYE": {
                            "label_en": "Left Eye",
                            "label_ur": "بائیں آنکھ",
                            "clinical_term": "Left Orbit",
                            "systems": ["neurological"],
                            "clinical": _clinical(
                                ["Conjunctivitis", "Acute angle-closure glaucoma", "Iritis"],
                                ["H10.9", "H40.2"],
                                red_flags=[
                                    _flag(
                                        "Sudden severe eye pain with vision loss and halos",
                                        "immediate",
                                        "Emergent ophthalmology consult",
                                        "Acute angle-closure glaucoma",
                                    )
                                ],
                            ),
                        },
                        "RIGHT_EYE": {
                            "label_en": "Right Eye",
                            "label_ur": "دائیں آنکھ",
                            "clinical_term": "Right Orbit",
                            "systems": ["neurological"],
                            "clinical": _clinical(
                                ["Conjunctivitis", "Acute angle-closure glaucoma", "Iritis"],
                                ["H10.9", "H40.2"],
                            ),
                        },
                        "JAW_LEFT": {
                            "label_en": "Left Jaw",
                            "label_ur": "بایاں جبڑا",
                            "clinical_term": "Left Mandible",
                            "systems": ["musculoskeletal", "cardiovascular"],
                            "clinical": _clinical(
                                ["TMJ disorder", "Dental abscess", "Referred cardiac pain"],
                                ["M26.62", "K04.7"],
                                red_flags=[
                                    _flag(
                                        "Left jaw pain with chest discomfort and dyspnea",
                                        "immediate",
                                        "Emergency cardiac evaluation",
                                        "Acute Coronary Syndrome (referred pain)",
                                        ["Especially in women", "May be only symptom"],
                                    )
                                ],
                                related=[_ACS_REFERRED],
                            ),
                        },
                        "JAW_RIGHT": {
                            "label_en": "Right Jaw",
                            "label_ur": "دایاں جبڑا",
                            "clinical_term": "Right Mandible",
                            "systems": ["musculoskeletal"],
                            "clinical": _clinical(
                                ["TMJ disorder", "Dental abscess"], ["M26.62", "K04.7"]
                            ),
                        },
                    },
                },
            },
        },
        "NECK": {
            "label_en": "Neck",
            "label_ur": "گردن",
            "clinical_term": "Cervical Region",
            "systems": ["musculoskeletal", "respiratory"],
            "children": {
                "ANTERIOR_NECK": {
                    "label_en": "Front of Neck",
                    "label_ur": "گردن کا سامنے والا حصہ",
                    "clinical_term": "Anterior Cervical",
                    "aliases": ["throat"],
                    "systems": ["respiratory", "endocrine"],
                    "clinical": _clinical(
                        ["Thyroiditis", "Pharyngitis", "Lymphadenopathy"],
                        ["E06.9", "J02.9"],
                        red_flags=[
                            _flag(
                                "Severe throat pain with drooling and stridor",
                                "immediate",
                                "Emergency airway management",
                                "Epiglottitis or retropharyngeal abscess",
                            )
                        ],
                    ),
                },
                "POSTERIOR_NECK": {
                    "label_en": "Back of Neck",
                    "label_ur": "گردن کا پچھلا حصہ",
                    "clinical_term": "Posterior Cervical",
                    "aliases": ["nape"],
                    "systems": ["musculoskeletal", "neurological"],
                    "clinical": _clinical(
                        ["Cervical strain", "Cervical radiculopathy", "Meningismus"],
                        ["M54.2", "M50.9"],
                        red_flags=[
                            _flag(
                                "Severe neck stiffness with fever and altered mental status",
                                "immediate",
                                "Emergency evaluation, consider LP",
                                "Meningitis",
                            )
                        ],
                    ),
                },
            },
        },
    },
}


CHEST = {
    "label_en": "Chest",
    "label_ur": "سینہ",
    "clinical_term": "Thorax",
    "category": "chest",
    "systems": ["cardiovascular", "respiratory"],
    "children": {
        "CHEST_ANTERIOR": {
            "label_en": "Front of Chest",
            "label_ur": "سینے کا سامنے والا حصہ",
            "clinical_term": "Anterior Thorax",
            "children": {
                "LEFT_PRECORDIAL": {
                    "label_en": "Left Chest (Heart Area)",
                    "label_ur": "بایاں سینہ (دل کا علاقہ)",
                    "clinical_term": "Precordium",
                    "aliases": ["heart", "left chest"],
                    "systems": ["cardiovascular", "respiratory"],
                    "clinical": _clinical(
                        [
                            "Acute Coronary Syndrome",
                            "Angina pectoris",
                            "Costochondritis",
                            "Pericarditis",
                            "Pneumonia",
                            "Pulmonary embolism",
                        ],
                        ["I21.9", "I20.9", "M94.0", "I30.9"],
                        red_flags=[
                            _flag(
                                "Crushing chest pain radiating to left arm/jaw with diaphoresis",
                                "immediate",
                                "Call emergency services, aspirin 325mg, oxygen",
                                "Acute Coronary Syndrome",
                                [
                                    "Pain >20 minutes",
                                    "Not relieved by rest",
                                    "Associated symptoms: nausea, dyspnea, diaphoresis",
                                ],
                            ),
                            _flag(
                                "Sharp chest pain worse with breathing, recent immobilization",
                                "urgent",
                                "Urgent evaluation, D-dimer, CT angiography",
                                "Pulmonary Embolism",
                            ),
                        ],
                        related=[
                            _rel("LEFT_ARM", "radiation"),
                            _rel("JAW_LEFT", "radiation"),
                            _rel("INTERSCAPULAR", "radiation"),
                        ],
                        priority=10,
                        is_common=True,
                    ),
                },
                "RETROSTERNAL": {
                    "label_en": "Center Chest (Behind Breastbone)",
                    "label_ur": "سینے کا درمیانی حصہ",
                    "clinical_term": "Retrosternal",
                    "aliases": ["breastbone", "sternum"],
                    "systems": ["cardiovascular", "gastrointestinal", "respiratory"],
                    "clinical": _clinical(
                        [
                            "GERD",
                            "Esophagitis",
                            "Acute Coronary Syndrome",
                            "Aortic dissection",
                            "Mediastinitis",
                        ],
                        ["K21.9", "K20.9"],
                        red_flags=[
                            _flag(
                                "Tearing chest pain radiating to back",
                                "immediate",
                                "Emergency evaluation, CT angiography",
                                "Aortic dissection",
                            )
                        ],
                        priority=9,
                        is_common=True,
                    ),
                },
                "RIGHT_PARASTERNAL": {
                    "label_en": "Right Chest",
                    "label_ur": "دایاں سینہ",
                    "clinical_term": "Right Parasternal",
                    "systems": ["respiratory", "cardiovascular"],
                    "clinical": _clinical(
                        ["Pneumonia", "Pleurisy", "Costochondritis"], ["J18.9", "R07.81"]
                    ),
                },
            },
        },
        "CHEST_LATERAL": {
            "label_en": "Sides of Chest",
            "label_ur": "سینے کی اطراف",
            "clinical_term": "Lateral Thorax",
            "children": {
                "LEFT_AXILLA": {
                    "label_en": "Left Armpit Area",
                    "label_ur": "بائیں بغل",
                    "clinical_term": "Left Axilla",
                    "systems": ["lymphatic", "respiratory"],
                    "clinical": _clinical(
                        ["Lymphadenopathy", "Hidradenitis", "Breast pathology"],
                        ["L73.2", "R59.9"],
                    ),
                },
                "RIGHT_AXILLA": {
                    "label_en": "Right Armpit Area",
                    "label_ur": "دائیں بغل",
                    "clinical_term": "Right Axilla",
                    "systems": ["lymphatic", "respiratory"],
                    "clinical": _clinical(
                        ["Lymphadenopathy", "Hidradenitis"], ["L73.2", "R59.9"]
                    ),
                },
            },
        },
    },
}


ABDOMEN = {
    "label_en": "Abdomen",
    "label_ur": "پیٹ",
    "clinical_term": "9-Region Abdomen",
    "aliases": ["stomach", "belly", "tummy"],
    "category": "abdomen",
    "systems": ["gastrointestinal", "genitourinary"],
    "children": {
        "RIGHT_HYPOCHONDRIAC": {
            "label_en": "Right Upper Abdomen",
            "label_ur": "دایاں اوپری پیٹ",
            "clinical_term": "Right Hypochondrium",
            "aliases": ["ruq"],
            "systems": ["gastrointestinal", "genitourinary"],
            "clinical": _clinical(
                [
                    "Cholecystitis",
                    "Hepatitis",
                    "Right kidney stones",
                    "Pneumonia (referred pain)",
                ],
                ["K80.2", "K75.9", "N20.0"],
                red_flags=[
                    _flag(
                        "Severe RUQ pain with fever and jaundice",
                        "urgent",
                        "Urgent surgical consult",
                        "Acute cholecystitis or cholangitis",
                    )
                ],
                priority=8,
            ),
        },
        "EPIGASTRIC": {
            "label_en": "Upper Middle Abdomen",
            "label_ur": "اوپری درمیانی پیٹ",
            "clinical_term": "Epigastrium",
            "aliases": ["pit of stomach"],
            "systems": ["gastrointestinal", "cardiovascular"],
            "clinical": _clinical(
                [
                    "GERD",
                    "Peptic ulcer disease",
                    "Pancreatitis",
                    "Myocardial infarction (atypical)",
                ],
                ["K21.9", "K27.9", "K85.9"],
                red_flags=[
                    _flag(
                        "Severe epigastric pain radiating to back with vomiting",
                        "urgent",
                        "Urgent evaluation, lipase, CT abdomen",
                        "Acute pancreatitis",
                    ),
                    _flag(
                        "Sudden severe epigastric pain, rigid abdomen",
                        "immediate",
                        "Emergency surgical consult",
                        "Perforated peptic ulcer",
                    ),
                ],
                priority=8,
                is_common=True,
            ),
        },
        "LEFT_HYPOCHONDRIAC": {
            "label_en": "Left Upper Abdomen",
            "label_ur": "بایاں اوپری پیٹ",
            "clinical_term": "Left Hypochondrium",
            "aliases": ["luq"],
            "systems": ["gastrointestinal", "lymphatic"],
            "clinical": _clinical(
                ["Splenomegaly", "Left kidney stones", "Gastritis"], ["R16.1", "N20.0"]
            ),
        },
        "RIGHT_LUMBAR": {
            "label_en": "Right Middle Abdomen",
            "label_ur": "دایاں درمیانی پیٹ",
            "clinical_term": "Right Lumbar",
            "systems": ["gastrointestinal", "genitourinary"],
            "clinical": _clinical(
                ["Kidney stones", "Pyelonephritis", "Ascending colitis"], ["N20.0", "N10"]
            ),
        },
        "UMBILICAL": {
            "label_en": "Around Belly Button",
            "label_ur": "ناف کے ارد گرد",
            "clinical_term": "Umbilical Region",
            "aliases": ["navel", "belly button"],
            "systems": ["gastrointestinal", "cardiovascular"],
            "clinical": _clinical(
                ["Small bowel obstruction", "Early appendicitis", "Gastroenteritis", "AAA"],
                ["K56.60", "K52.9", "I71.4"],
                red_flags=[
                    _flag(
                        "Pulsatile periumbilical mass with back pain",
                        "urgent",
                        "Urgent vascular surgery consult",
                        "Abdominal Aortic Aneurysm",
                    )
                ],
            ),
        },
        "LEFT_LUMBAR": {
            "label_en": "Left Middle Abdomen",
            "label_ur": "بایاں درمیانی پیٹ",
            "clinical_term": "Left Lumbar",
            "systems": ["gastrointestinal", "genitourinary"],
            "clinical": _clinical(
                ["Kidney stones", "Pyelonephritis", "Descending colitis"], ["N20.0", "N10"]
            ),
        },
        "RIGHT_ILIAC": {
            "label_en": "Right Lower Abdomen",
            "label_ur": "دایاں نچلا پیٹ",
            "clinical_term": "Right Iliac Fossa",
            "aliases": ["rlq", "appendix"],
            "systems": ["gastrointestinal", "reproductive"],
            "clinical": _clinical(
                [
                    "Acute appendicitis",
                    "Ovarian cyst/torsion",
                    "Ectopic pregnancy",
                    "Inflammatory bowel disease",
                ],
                ["K35.80", "N83.2", "O00.9"],
                red_flags=[
                    _flag(
                        "McBurney's point tenderness with fever and rebound",
                        "urgent",
                        "Urgent surgical consult",
                        "Acute appendicitis",
                    ),
                    _flag(
                        "RLQ pain in woman of childbearing age with amenorrhea",
                        "urgent",
                        "Urgent evaluation, β-hCG, ultrasound",
                        "Ectopic pregnancy",
                    ),
                ],
                priority=9,
                is_common=True,
            ),
        },
        "HYPOGASTRIC": {
            "label_en": "Lower Middle Abdomen",
            "label_ur": "نچلا درمیانی پیٹ",
            "clinical_term": "Suprapubic/Hypogastric",
            "aliases": ["bladder"],
            "systems": ["genitourinary", "reproductive"],
            "clinical": _clinical(
                ["Cystitis", "Urinary retention", "PID", "Endometriosis"],
                ["N30.90", "R33.9", "N73.9"],
            ),
        },
        "LEFT_ILIAC": {
            "label_en": "Left Lower Abdomen",
            "label_ur": "بایاں نچلا پیٹ",
            "clinical_term": "Left Iliac Fossa",
            "aliases": ["llq"],
            "systems": ["gastrointestinal", "reproductive"],
            "clinical": _clinical(
                ["Diverticulitis", "Ovarian cyst", "IBD"],
                ["K57.92", "N83.2"],
                red_flags=[
                    _flag(
                        "LLQ pain with fever in elderly",
                        "urgent",
                        "Urgent evaluation, CT abdomen",
                        "Diverticulitis",
                    )
                ],
            ),
        },
    },
}


PELVIS = {
    "label_en": "Pelvis & Groin",
    "label_ur": "پیلویس اور پیٹ کا نچلا حصہ",
    "clinical_term": "Pelvic Region",
    "category": "pelvis",
    "systems": ["genitourinary", "reproductive", "musculoskeletal"],
    "children": {
        "LEFT_INGUINAL": {
            "label_en": "Left Groin",
            "label_ur": "بایاں پیٹ کا نچلا حصہ",
            "clinical_term": "Left Inguinal Region",
            "systems": ["musculoskeletal"],
            "clinical": _clinical(
                ["Inguinal hernia", "Lymphadenopathy", "Muscle strain"], ["K40.9"]
            ),
        },
        "RIGHT_INGUINAL": {
            "label_en": "Right Groin",
            "label_ur": "دایاں پیٹ کا نچلا حصہ",
            "clinical_term": "Right Inguinal Region",
            "systems": ["musculoskeletal"],
            "clinical": _clinical(
                ["Inguinal hernia", "Lymphadenopathy", "Muscle strain"], ["K40.9"]
            ),
        },
        "PUBIC_SYMPHYSIS": {
            "label_en": "Pubic Area",
            "label_ur": "شرمگاہ کا اوپری حصہ",
            "clinical_term": "Pubic Region",
            "systems": ["musculoskeletal"],
            "clinical": _clinical(
                ["Osteitis pubis", "Symphysis dysfunction"], ["M84.88"]
            ),
        },
    },
}


BACK = {
    "label_en": "Back",
    "label_ur": "کمر",
    "clinical_term": "Posterior Trunk",
    "category": "back",
    "systems": ["musculoskeletal", "neurological"],
    "children": {
        "BACK_UPPER": {
            "label_en": "Upper Back",
            "label_ur": "اوپری کمر",
            "clinical_term": "Upper Dorsal Region",
            "children": {
                "CERVICAL_SPINE": {
                    "label_en": "Neck/Upper Back",
                    "label_ur": "گردن / اوپری کمر",
                    "clinical_term": "Cervical Spine",
                    "systems": ["musculoskeletal", "neurological"],
                    "clinical": _clinical(
                        ["Cervical spondylosis", "Muscle strain", "Disc herniation"],
                        ["M54.2", "M50.9"],
                    ),
                },
                "UPPER_THORACIC": {
                    "label_en": "Upper Back (Between Shoulder Blades)",
                    "label_ur": "اوپری کمر (کندھوں کے بیچ)",
                    "clinical_term": "Upper Thoracic",
                    "systems": ["musculoskeletal", "respiratory"],
                    "clinical": _clinical(
                        ["Muscle strain", "Thoracic disc disease", "Rib dysfunction"],
                        ["M54.6"],
                    ),
                },
                "INTERSCAPULAR": {
                    "label_en": "Between the Shoulder Blades (Centre)",
                    "label_ur": "کندھوں کے درمیان",
                    "clinical_term": "Interscapular Region",
                    "systems": ["musculoskeletal", "cardiovascular"],
                    "clinical": _clinical(
                        [
                            "Muscle strain",
                            "Referred cardiac pain",
                            "Aortic dissection",
                            "Referred gallbladder pain",
                        ],
                        ["M54.6"],
                        related=[_ACS_REFERRED],
                    ),
                },
                "LEFT_SCAPULA": {
                    "label_en": "Left Shoulder Blade",
                    "label_ur": "بایاں شانہ (کندھے کی ہڈی)",
                    "clinical_term": "Left Scapula",
                    "systems": ["musculoskeletal"],
                    "clinical": _clinical(
                        ["Scapular dyskinesis", "Muscle strain", "Bursitis"], ["M75.8"]
                    ),
                },
                "RIGHT_SCAPULA": {
                    "label_en": "Right Shoulder Blade",
                    "label_ur": "دایاں شانہ (کندھے کی ہڈی)",
                    "clinical_term": "Right Scapula",
                    "systems": ["musculoskeletal"],
                    "clinical": _clinical(
                        ["Scapular dyskinesis", "Muscle strain", "Bursitis"], ["M75.8"]
                    ),
                },
            },
        },
        "BACK_LOWER": {
            "label_en": "Lower Back",
            "label_ur": "نچلی کمر",
            "clinical_term": "Lower Dorsal Region",
            "children": {
                "LOWER_THORACIC": {
                    "label_en": "Mid Back",
                    "label_ur": "درمیانی کمر",
                    "clinical_term": "Lower Thoracic",
                    "systems": ["musculoskeletal"],
                    "clinical": _clinical(
                        ["Muscle strain", "Thoracic disc disease"], ["M54.6"]
                    ),
                },
                "POSTERIOR_THORACIC": {
                    "label_en": "Mid Back (Behind the Stomach)",
                    "label_ur": "پیٹ کے پیچھے درمیانی کمر",
                    "clinical_term": "Posterior Thoracic",
                    "systems": ["musculoskeletal", "gastrointestinal"],
                    "clinical": _clinical(
                        ["Muscle strain", "Referred pancreatic pain"], ["M54.6"]
                    ),
                },
                "LUMBAR_SPINE": {
                    "label_en": "Lower Back",
                    "label_ur": "نچلی کمر",
                    "clinical_term": "Lumbar Region",
                    "aliases": ["lower back", "lumbago"],
                    "systems": ["musculoskeletal", "neurological"],
                    "clinical": _clinical(
                        ["Lumbar strain", "Disc herniation", "Sciatica", "Spinal stenosis"],
                        ["M54.5", "M51.2", "M54.4"],
                        red_flags=[
                            _flag(
                                "Lower back pain with loss of bowel/bladder control",
                                "immediate",
                                "Emergency neurosurgical evaluation",
                                "Cauda equina syndrome",
                            )
                        ],
                        priority=9,
                        is_common=True,
                    ),
                },
                "SACRAL": {
                    "label_en": "Sacrum (Very Low Back)",
                    "label_ur": "سیکرم (بہت نچلی کمر)",
                    "clinical_term": "Sacral Region",
                    "aliases": ["tailbone"],
                    "systems": ["musculoskeletal"],
                    "clinical": _clinical(
                        ["Sacroiliitis", "Coccydynia", "Referred pain"], ["M53.3"]
                    ),
                },
                "LEFT_FLANK": {
                    "label_en": "Left Side (Kidney Area)",
                    "label_ur": "بایاں پہلو (گردے کا علاقہ)",
                    "clinical_term": "Left Flank",
                    "systems": ["genitourinary"],
                    "clinical": _clinical(
                        ["Kidney stones", "Pyelonephritis", "Muscular pain"], ["N20.0", "N10"]
                    ),
                },
                "RIGHT_FLANK": {
                    "label_en": "Right Side (Kidney Area)",
                    "label_ur": "دایاں پہلو (گردے کا علاقہ)",
                    "clinical_term": "Right Flank",
                    "systems": ["genitourinary"],
                    "clinical": _clinical(
                        ["Kidney stones", "Pyelonephritis", "Muscular pain"], ["N20.0", "N10"]
                    ),
                },
            },
        },
    },
}


def _arm(side: str, label: str, label_ur: Dict[str, str], cardiac: bool = False) -> dict:
    """One arm. The left arm carries the referred cardiac red flag."""
    arm_clinical = _clinical(
        ["Muscle strain", "Fracture", "Tendinitis"]
        + (["Referred cardiac pain"] if cardiac else []),
        ["M79.3"],
        red_flags=(
            [
                _flag(
                    "Sudden left arm pain with chest pressure",
                    "immediate",
                    "Emergency cardiac evaluation",
                    "Acute Coronary Syndrome",
                )
            ]
            if cardiac
            else []
        ),
        related=[_ACS_REFERRED] if cardiac else [],
    )
    return {
        "label_en": f"{label} Arm",
        "label_ur": label_ur["group"],
        "clinical_term": f"{label} Upper Limb",
        "children": {
            f"{side}_SHOULDER": {
                "label_en": f"{label} Shoulder",
                "label_ur": label_ur["shoulder"],
                "clinical_term": f"{label} Shoulder",
                "systems": ["musculoskeletal"],
                "clinical": _clinical(
                    ["Rotator cuff tear", "Frozen shoulder", "Bursitis", "Arthritis"],
                    ["M75.1", "M75.0"],
                ),
            },
            f"{side}_ARM": {
                "label_en": f"{label} Arm",
                "label_ur": label_ur["arm"],
                "clinical_term": f"{label} Upper Extremity",
                "systems": ["musculoskeletal", "cardiovascular"]
                if cardiac
                else ["musculoskeletal"],
                "clinical": arm_clinical,
            },
            f"{side}_ELBOW": {
                "label_en": f"{label} Elbow",
                "label_ur": label_ur["elbow"],
                "clinical_term": f"{label} Elbow",
                "systems": ["musculoskeletal"],
                "clinical": _clinical(
                    ["Tennis elbow", "Golfers elbow", "Bursitis"], ["M77.1", "M77.0"]
                ),
            },
            f"{side}_WRIST": {
                "label_en": f"{label} Wrist",
                "label_ur": label_ur["wrist"],
                "clinical_term": f"{label} Wrist",
                "systems": ["musculoskeletal", "neurological"],
                "clinical": _clinical(
                    ["Carpal tunnel syndrome", "Tendinitis", "Fracture"], ["G56.0", "M65.9"]
                ),
            },
            f"{side}_HAND": {
                "label_en": f"{label} Hand",
                "label_ur": label_ur["hand"],
                "clinical_term": f"{label} Hand",
                "systems": ["musculoskeletal"],
                "clinical": _clinical(
                    ["Arthritis", "Fracture", "Sprain", "Tenosynovitis"], ["M79.64"]
                ),
            },
        },
    }


def _leg(side: str, label: str, label_ur: Dict[str, str], dvt_flags: bool = False) -> dict:
    """One leg. The left leg carries the fracture and DVT red flags."""
    return {
        "label_en": f"{label} Leg",
        "label_ur": label_ur["group"],
        "clinical_term": f"{label} Lower Limb",
        "children": {
            f"{side}_HIP": {
                "label_en": f"{label} Hip",
                "label_ur": label_ur["hip"],
                "clinical_term": f"{label} Hip",
                "systems": ["musculoskeletal"],
                "clinical": _clinical(
                    ["Osteoarthritis", "Hip fracture", "Bursitis", "Labral tear"],
                    ["M16.1", "S72.0"],
                    red_flags=[
                        _flag(
                            "Hip pain after fall in elderly",
                            "urgent",
                            "X-ray evaluation",
                            "Hip fracture",
                        )
                    ]
                    if dvt_flags
                    else [],
                ),
            },
            f"{side}_THIGH": {
                "label_en": f"{label} Thigh",
                "label_ur": label_ur["thigh"],
                "clinical_term": f"{label} Thigh",
                "systems": ["musculoskeletal", "cardiovascular"],
                "clinical": _clinical(
                    ["Muscle strain", "DVT", "Femoral fracture"],
                    ["M79.65", "I80.2"],
                    red_flags=[
                        _flag(
                            "Thigh swelling with calf pain and recent immobilization",
                            "urgent",
                            "Urgent D-dimer, ultrasound",
                            "Deep vein thrombosis",
                        )
                    ]
                    if dvt_flags
                    else [],
                ),
            },
            f"{side}_KNEE": {
                "label_en": f"{label} Knee",
                "label_ur": label_ur["knee"],
                "clinical_term": f"{label} Knee",
                "systems": ["musculoskeletal"],
                "clinical": _clinical(
                    ["Osteoarthritis", "Meniscus tear", "ACL injury", "Bursitis"],
                    ["M17.1", "S83.2"],
                    priority=5,
                    is_common=True,
                ),
            },
            f"{side}_ANKLE": {
                "label_en": f"{label} Ankle",
                "label_ur": label_ur["ankle"],
                "clinical_term": f"{label} Ankle",
                "systems": ["musculoskeletal"],
                "clinical": _clinical(
                    ["Ankle sprain", "Fracture", "Tendinitis", "Arthritis"],
                    ["S93.4", "M77.9"],
                ),
            },
            f"{side}_FOOT": {
                "label_en": f"{label} Foot",
                "label_ur": label_ur["foot"],
                "clinical_term": f"{label} Foot",
                "systems": ["musculoskeletal"],
                "clinical": _clinical(
                    ["Plantar fasciitis", "Fracture", "Gout", "Neuropathy"],
                    ["M72.2", "M10.9"],
                ),
            },
        },
    }


UPPER_EXTREMITIES = {
    "label_en": "Arms",
    "label_ur": "بازو",
    "clinical_term": "Upper Limbs",
    "category": "upper_extremity",
    "systems": ["musculoskeletal", "neurological"],
    "children": {
        "ARMS_LEFT": _arm(
            "LEFT",
            "Left",
            {
                "group": "بایاں بازو",
                "shoulder": "بایاں کندھا",
                "arm": "بایاں بازو",
                "elbow": "بائیں کہنی",
                "wrist": "بائیں کلائی",
                "hand": "بایاں ہاتھ",
            },
            cardiac=True,
        ),
        "ARMS_RIGHT": _arm(
            "RIGHT",
            "Right",
            {
                "group": "دایاں بازو",
                "shoulder": "دایاں کندھا",
                "arm": "دایاں بازو",
                "elbow": "دائیں کہنی",
                "wrist": "دائیں کلائی",
                "hand": "دایاں ہاتھ",
            },
        ),
        # Dermatome landmarks, side-independent
        "ANTERIOR_SHOULDER": {
            "label_en": "Front of Shoulder",
            "label_ur": "کندھے کا سامنے والا حصہ",
            "clinical_term": "Anterior Shoulder (C5 dermatome)",
            "systems": ["musculoskeletal", "neurological"],
            "clinical": _clinical(
                ["Cervical radiculopathy (C5)", "Biceps tendinitis"], ["M54.12"]
            ),
        },
        "LATERAL_ARM": {
            "label_en": "Outer Upper Arm",
            "label_ur": "بازو کا بیرونی حصہ",
            "clinical_term": "Lateral Arm (C5 dermatome)",
            "systems": ["neurological"],
            "clinical": _clinical(["Cervical radiculopathy (C5)"], ["M54.12"]),
        },
        "LATERAL_FOREARM": {
            "label_en": "Outer Forearm",
            "label_ur": "کلائی سے کہنی تک بیرونی حصہ",
            "clinical_term": "Lateral Forearm (C6 dermatome)",
            "systems": ["neurological"],
            "clinical": _clinical(["Cervical radiculopathy (C6)"], ["M54.12"]),
        },
        "THUMB": {
            "label_en": "Thumb",
            "label_ur": "انگوٹھا",
            "clinical_term": "Pollex (C6 dermatome)",
            "systems": ["neurological", "musculoskeletal"],
            "clinical": _clinical(
                ["Cervical radiculopathy (C6)", "De Quervain tenosynovitis"],
                ["M54.12", "M65.4"],
            ),
        },
    },
}


LOWER_EXTREMITIES = {
    "label_en": "Legs",
    "label_ur": "ٹانگیں",
    "clinical_term": "Lower Limbs",
    "category": "lower_extremity",
    "systems": ["musculoskeletal", "cardiovascular"],
    "children": {
        "LEGS_LEFT": _leg(
            "LEFT",
            "Left",
            {
                "group": "بائیں ٹانگ",
                "hip": "بایاں کولہا",
                "thigh": "بائیں ران",
                "knee": "بایاں گھٹنا",
                "ankle": "بایاں ٹخنہ",
                "foot": "بایاں پاؤں",
            },
            dvt_flags=True,
        ),
        "LEGS_RIGHT": _leg(
            "RIGHT",
            "Right",
            {
                "group": "دائیں ٹانگ",
                "hip": "دایاں کولہا",
                "thigh": "دائیں ران",
                "knee": "دایاں گھٹنا",
                "ankle": "دایاں ٹخنہ",
                "foot": "دایاں پاؤں",
            },
        ),
        "LATERAL_LEG": {
            "label_en": "Outer Lower Leg",
            "label_ur": "پنڈلی کا بیرونی حصہ",
            "clinical_term": "Lateral Leg (L5 dermatome)",
            "systems": ["neurological"],
            "clinical": _clinical(["Lumbar radiculopathy (L5)"], ["M54.16"]),
        },
        "DORSAL_FOOT": {
            "label_en": "Top of Foot",
            "label_ur": "پاؤں کا اوپری حصہ",
            "clinical_term": "Dorsum of Foot (L5 dermatome)",
            "systems": ["neurological", "musculoskeletal"],
            "clinical": _clinical(
                ["Lumbar radiculopathy (L5)", "Extensor tendinitis"], ["M54.16"]
            ),
        },
    },
}


WHOLE_BODY = {
    "label_en": "Whole Body",
    "label_ur": "پورا جسم",
    "clinical_term": "Generalised",
    "category": "whole_body",
    "systems": ["lymphatic", "endocrine", "integumentary"],
    "children": {
        "GENERALIZED": {
            "label_en": "All Over / Generalised",
            "label_ur": "پورے جسم میں",
            "clinical_term": "Generalised Symptoms",
            "aliases": ["everywhere", "whole body", "body ache"],
            "systems": ["lymphatic", "endocrine", "musculoskeletal"],
            "clinical": _clinical(
                ["Viral illness", "Fibromyalgia", "Polymyalgia rheumatica"],
                ["R52", "M79.7"],
            ),
        },
    },
}


BODY_ZONE_TREE: Dict[str, dict] = {
    "HEAD_NECK": HEAD_NECK,
    "CHEST": CHEST,
    "ABDOMEN": ABDOMEN,
    "PELVIS": PELVIS,
    "BACK": BACK,
    "UPPER_EXTREMITIES": UPPER_EXTREMITIES,
    "LOWER_EXTREMITIES": LOWER_EXTREMITIES,
    "WHOLE_BODY": WHOLE_BODY,
}
