"""Forced-choice emergency checkpoints.

Six yes/no questions asked in a fixed order before any clinical questioning.
The first YES stops screening; the orchestrator then writes an emergency
note instead of continuing the interview.
"""

from pydantic import BaseModel
from typing import Awaitable, Callable, Dict, List, Optional
from datetime import datetime
from clinical_intake.config.settings import settings
from clinical_intake.models.encounter import EmergencyScreeningResult
from clinical_intake.models.triage import EmergencyResponse
import logging

logger = logging.getLogger(__name__)


class EmergencyCheckpoint(BaseModel):
    """One screening question and what a YES means."""

    id: str
    question: Dict[str, str]
    message: Dict[str, str]
    protocol: str
    service: str = "emergency"  # "emergency" or "psychiatric"

    class Config:
        frozen = True


EMERGENCY_CHECKPOINTS: List[EmergencyCheckpoint] = [
    EmergencyCheckpoint(
        id="emergency_chest_pain",
        question={
            "en": "Are you having chest pain RIGHT NOW?",
            "ur": "کیا آپ کو ابھی سینے میں درد ہو رہا ہے؟",
        },
        message={
            "en": "🚨 CALL {number} IMMEDIATELY\n\nPossible heart emergency. Do not wait.\n\n"
            'Tell them: "Chest pain - possible heart attack"',
            "ur": "🚨 فوری طور پر {number} پر کال کریں\n\nدل کی ممکنہ ایمرجنسی۔ انتظار نہ کریں۔",
        },
        protocol="ACS_PROTOCOL",
    ),
    EmergencyCheckpoint(
        id="emergency_breathing",
        question={
            "en": "Are you struggling to breathe RIGHT NOW?",
            "ur": "کیا آپ کو ابھی سانس لینے میں شدید مشکل ہو رہی ہے؟",
        },
        message={
            "en": "🚨 CALL {number} IMMEDIATELY\n\nRespiratory emergency. Get help now.\n\n"
            "Sit upright while waiting.",
            "ur": "🚨 فوری طور پر {number} پر کال کریں\n\nسانس کی ایمرجنسی۔ ابھی مدد لیں۔",
        },
        protocol="RESPIRATORY_DISTRESS",
    ),
    EmergencyCheckpoint(
        id="emergency_consciousness",
        question={
            "en": "Did you lose consciousness or have a seizure?",
            "ur": "کیا آپ بے ہوش ہوئے یا دورہ پڑا؟",
        },
        message={
            "en": "🚨 CALL {number} IMMEDIATELY\n\nNeurological emergency. "
            "You need immediate evaluation.\n\nDo not drive yourself.",
            "ur": "🚨 فوری طور پر {number} پر کال کریں\n\nاعصابی ایمرجنسی۔ خود گاڑی نہ چلائیں۔",
        },
        protocol="NEURO_EMERGENCY",
    ),
    EmergencyCheckpoint(
        id="emergency_weakness",
        question={
            "en": "Do you have sudden weakness on one side of your body?",
            "ur": "کیا آپ کے جسم کے ایک طرف اچانک کمزوری ہے؟",
        },
        message={
            "en": "🚨 CALL {number} IMMEDIATELY - POSSIBLE STROKE\n\nTime is critical. "
            "Every minute counts.\n\nNote the time symptoms started.",
            "ur": "🚨 فوری طور پر {number} پر کال کریں - فالج کا خطرہ\n\nوقت بہت اہم ہے۔",
        },
        protocol="STROKE_PROTOCOL",
    ),
    EmergencyCheckpoint(
        id="emergency_bleeding",
        question={
            "en": "Are you bleeding heavily that won't stop?",
            "ur": "کیا آپ کو شدید خون بہہ رہا ہے جو رک نہیں رہا؟",
        },
        message={
            "en": "🚨 CALL {number} IMMEDIATELY\n\nApply firm pressure to the bleeding area.\n"
            "Elevate if possible. Get help NOW.",
            "ur": "🚨 فوری طور پر {number} پر کال کریں\n\nخون بہنے والی جگہ پر مضبوط دباؤ لگائیں۔",
        },
        protocol="HEMORRHAGE_PROTOCOL",
    ),
    EmergencyCheckpoint(
        id="emergency_suicide",
        question={
            "en": "Are you thinking of harming yourself or others?",
            "ur": "کیا آپ خود کو یا دوسروں کو نقصان پہنچانے کے بارے میں سوچ رہے ہیں؟",
        },
        message={
            "en": "🚨 Mental Health Emergency\n\nCall: {number}\n\n"
            "You are not alone. Help is available.",
            "ur": "🚨 ذہنی صحت کی ایمرجنسی\n\nکال کریں: {number}\n\nآپ تنہا نہیں ہیں۔ مدد دستیاب ہے۔",
        },
        protocol="PSYCHIATRIC_EMERGENCY",
        service="psychiatric",
    ),
]

_CHECKPOINTS_BY_ID = {c.id: c for c in EMERGENCY_CHECKPOINTS}

YES_VARIANTS = {"yes", "y", "yeah", "yep", "ہاں", "جی", "جی ہاں"}
NO_VARIANTS = {"no", "n", "nope", "نہیں"}

RECOMMEND_CALL = "call_1122"
RECOMMEND_CONTINUE = "continue"


def validate_response(response: str) -> EmergencyResponse:
    """Accept only binary answers; anything else is INVALID."""
    normalized = (response or "").strip().lower()
    if normalized in YES_VARIANTS:
        return EmergencyResponse.YES
    if normalized in NO_VARIANTS:
        return EmergencyResponse.NO
    return EmergencyResponse.INVALID


def _service_number(checkpoint: EmergencyCheckpoint) -> str:
    if checkpoint.service == "psychiatric":
        return settings.psychiatric_helpline
    return settings.emergency_number


def get_checkpoint(checkpoint_id: str) -> Optional[EmergencyCheckpoint]:
    return _CHECKPOINTS_BY_ID.get(checkpoint_id)


def get_emergency_message(checkpoint_id: str, language: str = "en") -> str:
    checkpoint = _CHECKPOINTS_BY_ID.get(checkpoint_id)
    if checkpoint is None:
        return ""
    template = checkpoint.message.get(language) or checkpoint.message["en"]
    return template.format(number=_service_number(checkpoint))


def get_emergency_protocol(checkpoint_id: str) -> str:
    checkpoint = _CHECKPOINTS_BY_ID.get(checkpoint_id)
    return checkpoint.protocol if checkpoint else "UNKNOWN"


def format_emergency_alert(checkpoint_id: str, language: str = "en") -> Dict:
    """
    Title, message and actions for an emergency banner.

    Args:
        checkpoint_id: Triggered checkpoint id
        language: "en" or "ur"

    Returns:
        Dict with title, message and actions keys
    """
    urdu = language == "ur"
    checkpoint = _CHECKPOINTS_BY_ID.get(checkpoint_id)
    if checkpoint is None:
        return {
            "title": "ایمرجنسی" if urdu else "Emergency",
            "message": "فوری طبی امداد حاصل کریں" if urdu else "Seek immediate medical attention",
            "actions": [f"Call {settings.emergency_number}"],
        }

    return {
        "title": "🚨 شدید ایمرجنسی" if urdu else "🚨 CRITICAL EMERGENCY",
        "message": get_emergency_message(checkpoint_id, language),
        "actions": [
            f"Call {_service_number(checkpoint)}",
            "قریبی ہسپتال جائیں" if urdu else "Go to nearest hospital",
        ],
    }


class EmergencyScreeningEngine:
    """Runs the checkpoints in order against an async yes/no callback."""

    def __init__(self, checkpoints: Optional[List[EmergencyCheckpoint]] = None):
        self.checkpoints = checkpoints if checkpoints is not None else EMERGENCY_CHECKPOINTS

    async def screen(
        self,
        ask: Callable[[str], Awaitable[bool]],
        language: str = "en",
    ) -> EmergencyScreeningResult:
        """
        Ask each checkpoint until one is answered YES.

        Args:
            ask: Coroutine taking the question text and returning True for YES
            language: Question language

        Returns:
            EmergencyScreeningResult; has_emergency set on the first YES
        """
        result = EmergencyScreeningResult()

        for checkpoint in self.checkpoints:
            text = checkpoint.question.get(language) or checkpoint.question["en"]
            answer = bool(await ask(text))
            result.answers[checkpoint.id] = answer

            if answer:
                logger.warning(
                    f"CRITICAL: Emergency checkpoint triggered: {checkpoint.id} "
                    f"({checkpoint.protocol})"
                )
                result.has_emergency = True
                result.triggered_checkpoint = checkpoint.id
                result.protocol = checkpoint.protocol
                result.question = checkpoint.question["en"]
                result.recommended_action = RECOMMEND_CALL
                result.completed = True
                result.completed_at = datetime.utcnow()
                return result

        result.completed = True
        result.recommended_action = RECOMMEND_CONTINUE
        result.completed_at = datetime.utcnow()
        logger.info("Emergency screening passed")
        return result
