"""Adaptive question catalogue: baseline set, zone banks and combination rules."""

from typing import Dict, List
from clinical_intake.models.questions import (
    ClinicalSignificance,
    MedicalQuestion,
    QuestionCondition,
    QuestionOption,
    QuestionRedFlagRule,
    QuestionType,
    RedFlagCombinationRule,
    UrgencyLevel,
)

YES_NO = QuestionType.YES_NO
SINGLE = QuestionType.SINGLE_CHOICE
MULTI = QuestionType.MULTI_CHOICE
CRITICAL = ClinicalSignificance.CRITICAL
IMPORTANT = ClinicalSignificance.IMPORTANT


def _opt(value: str, label: str, red_flag: bool = False, urgency: UrgencyLevel = None):
    return QuestionOption(value=value, label=label, red_flag=red_flag, urgency=urgency)


def _yes_flag(urgency: UrgencyLevel, message: str) -> QuestionRedFlagRule:
    return QuestionRedFlagRule(value="yes", urgency=urgency, message=message)


BASELINE_QUESTIONS: List[MedicalQuestion] = [
    MedicalQuestion(
        id="duration",
        text="How long have you had this symptom?",
        type=SINGLE,
        options=[
            _opt("<1hour", "Less than 1 hour", urgency=UrgencyLevel.HIGH),
            _opt("1-24hours", "1-24 hours", urgency=UrgencyLevel.MEDIUM),
            _opt("1-7days", "1-7 days", urgency=UrgencyLevel.MEDIUM),
            _opt("1-4weeks", "1-4 weeks", urgency=UrgencyLevel.LOW),
            _opt(">4weeks", "More than 4 weeks", urgency=UrgencyLevel.LOW),
            _opt("chronic", "Ongoing/Chronic (months to years)", urgency=UrgencyLevel.LOW),
        ],
        clinical_significance=CRITICAL,
    ),
    MedicalQuestion(
        id="onset",
        text="How did it start?",
        type=SINGLE,
        options=[
            _opt("sudden", "Suddenly (within minutes)", urgency=UrgencyLevel.HIGH),
            _opt("gradual-hours", "Gradually over hours", urgency=UrgencyLevel.MEDIUM),
            _opt("gradual-days", "Gradually over days", urgency=UrgencyLevel.LOW),
            _opt("gradual-weeks", "Gradually over weeks", urgency=UrgencyLevel.LOW),
        ],
        clinical_significance=CRITICAL,
    ),
    MedicalQuestion(
        id="severity",
        text="On a scale of 0-10, how severe is it right now?",
        type=QuestionType.SCALE,
        min=0,
        max=10,
        red_flag=QuestionRedFlagRule(
            threshold=8,
            urgency=UrgencyLevel.HIGH,
            message="Severe symptoms require immediate attention",
        ),
        clinical_significance=CRITICAL,
    ),
    MedicalQuestion(
        id="pattern",
        text="How would you describe the pattern?",
        type=SINGLE,
        options=[
            _opt("constant", "Constant - always there"),
            _opt("intermittent", "Comes and goes"),
            _opt("getting-worse", "Getting progressively worse", urgency=UrgencyLevel.MEDIUM),
            _opt("getting-better", "Getting better"),
        ],
        clinical_significance=IMPORTANT,
    ),
]


ZONE_QUESTION_BANKS: Dict[str, List[MedicalQuestion]] = {
    # Cardiac / respiratory focus
    "chest": [
        MedicalQuestion(
            id="chest-sob",
            text="Are you experiencing shortness of breath?",
            type=YES_NO,
            red_flag=_yes_flag(
                UrgencyLevel.EMERGENCY,
                "Shortness of breath with chest pain requires immediate evaluation",
            ),
            clinical_significance=CRITICAL,
        ),
        MedicalQuestion(
            id="chest-radiation",
            text="Does the discomfort spread to any of these areas?",
            type=MULTI,
            options=[
                _opt("jaw", "Jaw or teeth", red_flag=True),
                _opt("left-arm", "Left arm or shoulder", red_flag=True),
                _opt("both-arms", "Both arms", red_flag=True),
                _opt("back", "Back between shoulder blades", red_flag=True),
                _opt("none", "No, stays in one place"),
            ],
            clinical_significance=CRITICAL,
        ),
        MedicalQuestion(
            id="chest-quality",
            text="How would you describe the sensation?",
            type=SINGLE,
            options=[
                _opt("pressure", "Pressure or squeezing", red_flag=True),
                _opt("sharp", "Sharp or stabbing"),
                _opt("burning", "Burning"),
                _opt("ache", "Dull ache"),
            ],
            clinical_significance=CRITICAL,
        ),
        MedicalQuestion(
            id="chest-exertion",
            text="Does it get worse with physical activity?",
            type=YES_NO,
            red_flag=_yes_flag(
                UrgencyLevel.HIGH, "Exertional chest pain may indicate cardiac ischemia"
            ),
            clinical_significance=CRITICAL,
        ),
        MedicalQuestion(
            id="chest-sweating",
            text="Are you experiencing sweating or feeling clammy?",
            type=YES_NO,
            red_flag=_yes_flag(
                UrgencyLevel.EMERGENCY, "Diaphoresis with chest pain is a cardiac warning sign"
            ),
            clinical_significance=CRITICAL,
        ),
    ],
    # GI / surgical focus
    "abdomen": [
        MedicalQuestion(
            id="abd-nausea",
            text="Are you experiencing nausea or vomiting?",
            type=YES_NO,
            clinical_significance=IMPORTANT,
        ),
        MedicalQuestion(
            id="abd-vomiting-blood",
            text="Is there any blood in the vomit?",
            type=YES_NO,
            condition=QuestionCondition(depends_on="abd-nausea", value="yes"),
            red_flag=_yes_flag(
                UrgencyLevel.EMERGENCY, "Hematemesis requires immediate medical attention"
            ),
            clinical_significance=CRITICAL,
        ),
        MedicalQuestion(
            id="abd-bowel",
            text="Any changes in bowel movements?",
            type=MULTI,
            options=[
                _opt("normal", "Normal"),
                _opt("diarrhea", "Diarrhea"),
                _opt("constipation", "Constipation"),
                _opt("blood", "Blood in stool", red_flag=True),
                _opt("black-tarry", "Black, tarry stools", red_flag=True),
            ],
            clinical_significance=IMPORTANT,
        ),
        MedicalQuestion(
            id="abd-meals",
            text="Relationship to eating?",
            type=SINGLE,
            options=[
                _opt("worse-eating", "Worse after eating"),
                _opt("better-eating", "Better after eating"),
                _opt("no-relation", "No relationship"),
                _opt("cannot-eat", "Cannot eat at all", red_flag=True),
            ],
            clinical_significance=IMPORTANT,
        ),
        MedicalQuestion(
            id="abd-fever",
            text="Do you have a fever?",
            type=YES_NO,
            red_flag=_yes_flag(
                UrgencyLevel.MEDIUM, "Fever with abdominal pain may indicate infection"
            ),
            clinical_significance=IMPORTANT,
        ),
        MedicalQuestion(
            id="abd-rebound",
            text="Does it hurt more when you release pressure (push and let go quickly)?",
            type=YES_NO,
            red_flag=_yes_flag(
                UrgencyLevel.HIGH, "Rebound tenderness suggests peritoneal irritation"
            ),
            clinical_significance=CRITICAL,
        ),
    ],
    # Neurological focus
    "head": [
        MedicalQuestion(
            id="head-sudden",
            text="Did this headache come on suddenly (worst headache of your life)?",
            type=YES_NO,
            red_flag=_yes_flag(
                UrgencyLevel.EMERGENCY,
                "Thunderclap headache - possible subarachnoid hemorrhage",
            ),
            clinical_significance=CRITICAL,
        ),
        MedicalQuestion(
            id="head-vision",
            text="Any vision changes?",
            type=MULTI,
            options=[
                _opt("none", "No changes"),
                _opt("blurry", "Blurry vision"),
                _opt("double", "Double vision", red_flag=True),
                _opt("loss", "Vision loss", red_flag=True),
                _opt("floaters", "Flashing lights or floaters"),
            ],
            clinical_significance=CRITICAL,
        ),
        MedicalQuestion(
            id="head-neck-stiff",
            text="Is your neck stiff (difficulty touching chin to chest)?",
            type=YES_NO,
            red_flag=_yes_flag(UrgencyLevel.HIGH, "Nuchal rigidity may indicate meningitis"),
            clinical_significance=CRITICAL,
        ),
        MedicalQuestion(
            id="head-weakness",
            text="Any weakness or numbness in face, arm, or leg?",
            type=YES_NO,
            red_flag=_yes_flag(
                UrgencyLevel.EMERGENCY, "Focal neurological symptoms - possible stroke"
            ),
            clinical_significance=CRITICAL,
        ),
        MedicalQuestion(
            id="head-speech",
            text="Any difficulty speaking or slurred speech?",
            type=YES_NO,
            red_flag=_yes_flag(UrgencyLevel.EMERGENCY, "Speech difficulty - possible stroke"),
            clinical_significance=CRITICAL,
        ),
        MedicalQuestion(
            id="head-confusion",
            text="Any confusion or difficulty thinking clearly?",
            type=YES_NO,
            red_flag=_yes_flag(
                UrgencyLevel.HIGH, "Altered mental status requires urgent evaluation"
            ),
            clinical_significance=CRITICAL,
        ),
    ],
    # Vascular / MSK focus
    "arm": [
        MedicalQuestion(
            id="limb-injury",
            text="Did this follow an injury or trauma?",
            type=YES_NO,
            clinical_significance=IMPORTANT,
        ),
        MedicalQuestion(
            id="limb-swelling",
            text="Is there swelling?",
            type=YES_NO,
            clinical_significance=IMPORTANT,
        ),
        MedicalQuestion(
            id="limb-color",
            text="Any color changes?",
            type=MULTI,
            options=[
                _opt("normal", "Normal color"),
                _opt("red", "Red or pink"),
                _opt("pale", "Pale or white", red_flag=True),
                _opt("blue", "Blue or purple", red_flag=True),
            ],
            clinical_significance=CRITICAL,
        ),
        MedicalQuestion(
            id="limb-numbness",
            text="Any numbness or tingling?",
            type=YES_NO,
            red_flag=_yes_flag(
                UrgencyLevel.MEDIUM,
                "Paresthesias may indicate nerve or vascular compromise",
            ),
            clinical_significance=IMPORTANT,
        ),
        MedicalQuestion(
            id="limb-function",
            text="Can you move it normally?",
            type=SINGLE,
            options=[
                _opt("full", "Yes, full range of motion"),
                _opt("limited", "Limited movement (pain or stiffness)"),
                _opt("cannot", "Cannot move it at all", red_flag=True),
            ],
            clinical_significance=CRITICAL,
        ),
    ],
    # DVT screening
    "leg": [
        MedicalQuestion(
            id="leg-calf-pain",
            text="Is the pain specifically in the calf?",
            type=YES_NO,
            clinical_significance=IMPORTANT,
        ),
        MedicalQuestion(
            id="leg-calf-tender",
            text="Is the calf tender to touch?",
            type=YES_NO,
            condition=QuestionCondition(depends_on="leg-calf-pain", value="yes"),
            red_flag=_yes_flag(UrgencyLevel.HIGH, "Calf tenderness and pain may indicate DVT"),
            clinical_significance=CRITICAL,
        ),
        MedicalQuestion(
            id="leg-weight-bearing",
            text="Can you put weight on it?",
            type=SINGLE,
            options=[
                _opt("full", "Yes, can walk normally"),
                _opt("partial", "Can walk with pain/limping"),
                _opt("cannot", "Cannot put any weight on it", red_flag=True),
            ],
            clinical_significance=IMPORTANT,
        ),
    ],
    # Cauda equina screening
    "spine": [
        MedicalQuestion(
            id="back-bowel-bladder",
            text="Any bowel or bladder problems?",
            type=MULTI,
            options=[
                _opt("none", "No problems"),
                _opt("difficulty", "Difficulty urinating", red_flag=True),
                _opt("incontinence", "Loss of control", red_flag=True),
                _opt("numbness-saddle", "Numbness in groin/buttocks area", red_flag=True),
            ],
            clinical_significance=CRITICAL,
        ),
        MedicalQuestion(
            id="back-leg-weakness",
            text="Any weakness in your legs?",
            type=YES_NO,
            red_flag=_yes_flag(
                UrgencyLevel.HIGH,
                "Lower extremity weakness may indicate spinal cord compression",
            ),
            clinical_significance=CRITICAL,
        ),
        MedicalQuestion(
            id="back-sciatica",
            text="Does pain radiate down your leg (below the knee)?",
            type=YES_NO,
            clinical_significance=IMPORTANT,
        ),
        MedicalQuestion(
            id="back-foot-drop",
            text="Any difficulty lifting your foot or toes?",
            type=YES_NO,
            red_flag=_yes_flag(
                UrgencyLevel.MEDIUM, "Foot drop may indicate nerve root compression"
            ),
            clinical_significance=IMPORTANT,
        ),
    ],
}


# Zone category -> question bank; pelvis and whole_body get baseline only
CATEGORY_BANKS: Dict[str, str] = {
    "chest": "chest",
    "abdomen": "abdomen",
    "head_neck": "head",
    "upper_extremity": "arm",
    "lower_extremity": "leg",
    "back": "spine",
}

# Fallback for ids the registry does not know
PREFIX_BANKS = [
    (("chest",), "chest"),
    (("abdomen", "stomach"), "abdomen"),
    (("head",), "head"),
    (("arm", "hand", "shoulder"), "arm"),
    (("leg", "foot", "ankle"), "leg"),
    (("spine", "back"), "spine"),
]


COMBINATION_RULES: List[RedFlagCombinationRule] = [
    RedFlagCombinationRule(
        id="chest-cardiac",
        triggers=["chest-sob:yes", "chest-radiation:jaw", "chest-quality:pressure"],
        urgency=UrgencyLevel.EMERGENCY,
        message="⚠️ EMERGENCY: Possible cardiac event. Call emergency services immediately.",
        action="call-911",
    ),
    RedFlagCombinationRule(
        id="chest-cardiac-sweating",
        triggers=["chest-quality:pressure", "chest-sweating:yes"],
        urgency=UrgencyLevel.EMERGENCY,
        message="⚠️ EMERGENCY: Chest pressure with sweating - possible heart attack.",
        action="call-911",
    ),
    RedFlagCombinationRule(
        id="abd-peritonitis",
        triggers=["abd-rebound:yes", "abd-fever:yes"],
        urgency=UrgencyLevel.HIGH,
        message="⚠️ HIGH PRIORITY: Possible peritonitis. Seek immediate medical evaluation.",
        action="er-visit",
    ),
    RedFlagCombinationRule(
        id="abd-gi-bleeding",
        triggers=["abd-vomiting-blood:yes"],
        urgency=UrgencyLevel.EMERGENCY,
        message="⚠️ EMERGENCY: GI bleeding requires immediate hospital evaluation.",
        action="call-911",
    ),
    RedFlagCombinationRule(
        id="head-stroke",
        triggers=["head-weakness:yes", "head-speech:yes"],
        urgency=UrgencyLevel.EMERGENCY,
        message="⚠️ EMERGENCY: Possible stroke. Call emergency services - TIME CRITICAL.",
        action="call-911",
    ),
    RedFlagCombinationRule(
        id="head-thunderclap",
        triggers=["head-sudden:yes", "severity:>=8"],
        urgency=UrgencyLevel.EMERGENCY,
        message="⚠️ EMERGENCY: Thunderclap headache - possible brain hemorrhage.",
        action="call-911",
    ),
    RedFlagCombinationRule(
        id="spine-cauda-equina",
        triggers=["back-bowel-bladder:incontinence", "back-leg-weakness:yes"],
        urgency=UrgencyLevel.EMERGENCY,
        message="⚠️ EMERGENCY: Possible cauda equina syndrome. Go to ER immediately.",
        action="er-visit",
    ),
    RedFlagCombinationRule(
        id="limb-ischemia",
        triggers=["limb-color:pale", "limb-numbness:yes"],
        urgency=UrgencyLevel.HIGH,
        message="⚠️ HIGH PRIORITY: Possible limb ischemia. Urgent vascular evaluation needed.",
        action="urgent-visit",
    ),
]
