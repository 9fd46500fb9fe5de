"""LangGraph node functions for the intake workflow.

Every node pulls its collaborators from ``config["configurable"]``: the
``orchestrator`` (engines, registry, session) and the recording answer
``provider``. Nodes mutate the encounter in place and return it together
with the transcript messages produced while they ran.
"""

from typing import Any, Dict, Tuple
from langchain_core.runnables import RunnableConfig
from clinical_intake.engines.emergency_screening import format_emergency_alert
from clinical_intake.models.encounter import Encounter, PainPoint
from clinical_intake.models.questions import MedicalQuestion, QuestionType
from clinical_intake.models.triage import ComplaintType, IntakePhase
from clinical_intake.orchestrator.notes import build_clinical_note, build_emergency_note
from clinical_intake.orchestrator.state import IntakeState
from clinical_intake.trees import TREE_MAP, get_tree_by_key, select_tree_key
from clinical_intake.utils.red_flags import (
    SEVERITY_TO_DETECTED,
    extract_symptom_tags,
    normalize_symptoms,
    urgency_to_severity,
)
from datetime import datetime
import logging
import re

logger = logging.getLogger(__name__)

PHASE_PROGRESS = {
    IntakePhase.EMERGENCY_SCREEN: 0,
    IntakePhase.COMPLAINT_SELECTION: 15,
    IntakePhase.BODY_MAP: 35,
    IntakePhase.COMPLAINT_TREE: 60,
    IntakePhase.SUMMARY: 90,
    IntakePhase.COMPLETE: 100,
}

COMPLAINT_PROMPT = "What is your main concern today?"
DESCRIBE_PROMPT = "Please describe your symptoms in your own words."
BODY_MAP_PROMPT = "Where do you feel pain or discomfort? (Select all that apply)"
INTENSITY_PROMPT = "How intense is the pain right now? (0 = none, 10 = worst imaginable)"


def _slug(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "_", text.lower()).strip("_")


def _context(config: RunnableConfig) -> Tuple[Any, Any]:
    configurable = config["configurable"]
    return configurable["orchestrator"], configurable["provider"]


async def _enter_phase(config: RunnableConfig, phase: IntakePhase) -> None:
    orchestrator, provider = _context(config)
    provider.start_phase(phase)
    orchestrator.session_manager.update_phase(orchestrator.session, phase)
    await provider.show_progress(phase, PHASE_PROGRESS[phase])


def _result(encounter: Encounter, provider, **extra) -> Dict[str, Any]:
    update = {"encounter": encounter, "messages": provider.drain_messages()}
    update.update(extra)
    return update


def _complaint_label(complaint: ComplaintType) -> str:
    return complaint.value.replace("_", " ").capitalize()


async def _ask_adaptive(provider, question: MedicalQuestion) -> Any:
    """Ask one catalogue question and convert the answer to its stored form."""
    if question.type == QuestionType.YES_NO:
        return "yes" if await provider.ask_yes_no(question.text) else "no"

    if question.type == QuestionType.SCALE:
        low = question.min if question.min is not None else 0
        high = question.max if question.max is not None else 10
        value = await provider.ask_numeric(question.text, low, high)
        return int(value) if float(value).is_integer() else value

    if question.type in (QuestionType.SINGLE_CHOICE, QuestionType.MULTI_CHOICE):
        by_label = {o.label: o.value for o in question.options}
        multiple = question.type == QuestionType.MULTI_CHOICE
        answer = await provider.ask_multiple_choice(
            question.text, list(by_label), allow_multiple=multiple
        )
        if multiple:
            return [by_label.get(a, a) for a in answer]
        return by_label.get(answer, answer)

    return await provider.ask_free_text(question.text)


# ----------------------------------------------------------------------
# Nodes
# ----------------------------------------------------------------------


async def emergency_screen_node(state: IntakeState, config: RunnableConfig) -> dict:
    """Ask the emergency checkpoints; the first YES ends clinical questioning."""
    orchestrator, provider = _context(config)
    encounter = state["encounter"]
    await _enter_phase(config, IntakePhase.EMERGENCY_SCREEN)

    encounter.emergency_screening = await orchestrator.screening_engine.screen(
        provider.ask_yes_no, encounter.language
    )
    orchestrator.save()
    return _result(encounter, provider)


async def emergency_note_node(state: IntakeState, config: RunnableConfig) -> dict:
    """Generate the emergency note and alert the patient."""
    orchestrator, provider = _context(config)
    encounter = state["encounter"]
    screening = encounter.emergency_screening

    await provider.show_emergency_alert(
        format_emergency_alert(screening.triggered_checkpoint, encounter.language)
    )
    note = build_emergency_note(encounter)
    encounter.generated_note = note
    encounter.completed_at = datetime.utcnow()
    encounter.current_phase = IntakePhase.COMPLETE
    orchestrator.session_manager.complete_session(orchestrator.session)
    await provider.show_progress(IntakePhase.COMPLETE, PHASE_PROGRESS[IntakePhase.COMPLETE])
    return _result(encounter, provider, note=note)


async def complaint_selection_node(state: IntakeState, config: RunnableConfig) -> dict:
    """Pick the chief complaint tag and collect the free-text description."""
    orchestrator, provider = _context(config)
    encounter = state["encounter"]
    await _enter_phase(config, IntakePhase.COMPLAINT_SELECTION)

    options = [c.value for c in ComplaintType]
    choice = await provider.ask_multiple_choice(COMPLAINT_PROMPT, options)
    encounter.complaint_type = ComplaintType(choice) if choice in options else ComplaintType.OTHER

    text = (await provider.ask_free_text(DESCRIBE_PROMPT)).strip()
    encounter.complaint_text = text or None

    if encounter.complaint_type != ComplaintType.OTHER:
        encounter.chief_complaint = _complaint_label(encounter.complaint_type)
    elif text:
        encounter.chief_complaint = text[:120]

    orchestrator.save()
    logger.info(
        f"Complaint for {encounter.encounter_id}: {encounter.complaint_type.value}"
    )
    return _result(encounter, provider)


async def body_map_node(state: IntakeState, config: RunnableConfig) -> dict:
    """
    Map pain points, analyze the pattern and run the adaptive questions.

    Zone red flags, the multi-point assessment, combination and per-question
    alerts and the triage score are all written onto the encounter.
    """
    orchestrator, provider = _context(config)
    encounter = state["encounter"]
    registry = orchestrator.registry
    await _enter_phase(config, IntakePhase.BODY_MAP)

    if not encounter.pain_points:
        zones = {z.label(encounter.language): z.id for z in registry.get_terminal_zones()}
        chosen = await provider.ask_multiple_choice(
            BODY_MAP_PROMPT, list(zones), allow_multiple=True
        )
        chosen = [c for c in chosen if c in zones]
        if chosen:
            answer = await provider.ask_numeric(INTENSITY_PROMPT, 0, 10)
            intensity = max(0, min(10, int(answer)))
            encounter.pain_points = [
                PainPoint(zone_id=zones[label], intensity=intensity, is_primary=i == 0)
                for i, label in enumerate(chosen)
            ]

    zone_ids = [p.zone_id for p in encounter.pain_points]
    symptoms = normalize_symptoms(
        list(encounter.symptoms) + extract_symptom_tags(encounter.complaint_text or "")
    )

    primary = encounter.primary_pain_point()
    if primary and not encounter.chief_complaint:
        zone = registry.get_zone(primary.zone_id)
        name = zone.label("en") if zone else primary.zone_id
        encounter.chief_complaint = f"{name} pain"

    # Pattern and zone red flags
    encounter.insight = orchestrator.analyzer.analyze_pattern(zone_ids, symptoms)
    if encounter.insight and encounter.insight.pattern:
        pattern = encounter.insight.pattern
        encounter.clinical_alerts.append(
            f"{pattern.type.value.capitalize()} pattern: {pattern.recommendation}"
        )

    static = {
        f.symptom
        for zone_id in zone_ids
        if registry.get_zone(zone_id)
        for f in registry.get_zone(zone_id).clinical.red_flags
    }
    for flag in orchestrator.analyzer.detect_red_flags(zone_ids, symptoms):
        if flag.symptom not in encounter.red_flags:
            encounter.red_flags.append(flag.symptom)
        encounter.add_red_flag(
            f"zone:{_slug(flag.symptom)}",
            f"{flag.symptom} ({flag.condition})",
            SEVERITY_TO_DETECTED[flag.severity],
            action=flag.action,
            source="zone" if flag.symptom in static else "symptom",
        )

    assessment = orchestrator.triage_service.assess_pain_points(encounter.pain_points)
    encounter.pain_assessment = assessment
    for alert in assessment.alerts:
        if alert not in encounter.clinical_alerts:
            encounter.clinical_alerts.append(alert)
    orchestrator.save()

    # Adaptive questions, regenerated after each answer so gated ones appear
    engine = orchestrator.question_engine
    zone_id = primary.zone_id if primary else ""
    while True:
        pending = [
            q for q in engine.generate_questions(zone_id, encounter.answers)
            if q.id not in encounter.answers
        ]
        if not pending:
            break
        question = pending[0]
        encounter.answers[question.id] = await _ask_adaptive(provider, question)

    combination = engine.evaluate_red_flags(encounter.answers)
    alerts = combination + engine.evaluate_question_flags(encounter.answers)
    for alert in alerts:
        if alert.message not in encounter.red_flags:
            encounter.red_flags.append(alert.message)
        encounter.add_red_flag(
            alert.id,
            alert.message,
            SEVERITY_TO_DETECTED[urgency_to_severity(alert.urgency)],
            action=alert.action,
            source=alert.source,
        )

    encounter.triage_score = engine.calculate_triage_score(encounter.answers, combination)
    encounter.triage_category = engine.categorize_score(encounter.triage_score)
    orchestrator.save()

    logger.info(
        f"Body map for {encounter.encounter_id}: zones={zone_ids}, "
        f"score={encounter.triage_score}, red flags={len(encounter.red_flags_detected)}"
    )
    return _result(encounter, provider)


async def complaint_tree_node(state: IntakeState, config: RunnableConfig) -> dict:
    """Dispatch to the complaint tree chosen for the encounter."""
    orchestrator, provider = _context(config)
    encounter = state["encounter"]
    await _enter_phase(config, IntakePhase.COMPLAINT_TREE)

    tree_key = select_tree_key(encounter, orchestrator.registry)
    tree = get_tree_by_key(tree_key) or TREE_MAP["GENERAL"]
    encounter.active_tree_key = tree.key
    logger.info(f"Running {tree.key} tree for {encounter.encounter_id}")

    await tree.ask(encounter, provider)
    orchestrator.save()
    return _result(encounter, provider, tree_key=tree.key)


async def summary_node(state: IntakeState, config: RunnableConfig) -> dict:
    """Assemble the clinical note and complete the session."""
    orchestrator, provider = _context(config)
    encounter = state["encounter"]
    await _enter_phase(config, IntakePhase.SUMMARY)

    note = build_clinical_note(encounter)
    encounter.generated_note = note
    encounter.completed_at = datetime.utcnow()
    encounter.current_phase = IntakePhase.COMPLETE
    orchestrator.session_manager.complete_session(orchestrator.session)
    await provider.show_progress(IntakePhase.COMPLETE, PHASE_PROGRESS[IntakePhase.COMPLETE])
    return _result(encounter, provider, note=note)


def route_after_screening(state: IntakeState) -> str:
    """Route based on emergency screening outcome."""
    if state["encounter"].has_emergency():
        return "emergency"
    return "continue"
