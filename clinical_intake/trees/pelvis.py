"""Pelvic pain interview."""

from typing import List
from clinical_intake.models.encounter import Encounter
from clinical_intake.orchestrator.answer_provider import AnswerProvider
from clinical_intake.trees.base import ComplaintTree


class PelvicPainTree(ComplaintTree):
    key = "PELVIC_PAIN"

    async def ask(self, encounter: Encounter, provider: AnswerProvider) -> None:
        self.start_hpi(encounter)

        onset = await provider.ask_multiple_choice(
            "When did the pain start?",
            ["Sudden/Acute", "Gradual", "Cyclical (with periods)", "Chronic"],
        )
        encounter.hpi += f"Onset: {onset}. "

        severity = await provider.ask_numeric("On a scale of 1-10, how severe is the pain?")
        encounter.hpi += f"Severity: {severity}/10. "

        red_flags: List[str] = []
        if await provider.ask_yes_no("Do you have a fever?"):
            red_flags.append("Fever")
            encounter.hpi += "Associated with fever. "
        if await provider.ask_yes_no("Any abnormal vaginal bleeding?"):
            red_flags.append("Abnormal bleeding")
            encounter.hpi += "Associated with abnormal bleeding. "
        if await provider.ask_yes_no("Is there any chance you could be pregnant?"):
            red_flags.append("Possible pregnancy")
            encounter.hpi += "Patient indicates possible pregnancy. "
        if await provider.ask_yes_no("Any pain or burning when passing urine?"):
            encounter.hpi += "With dysuria. "
        self.record_red_flags(encounter, red_flags)

        if "Possible pregnancy" in red_flags and onset == "Sudden/Acute":
            encounter.assessment = (
                "URGENT: Pelvic pain in pregnancy. Differential includes ectopic pregnancy. "
                "IMMEDIATE EVALUATION REQUIRED."
            )
        elif "Fever" in red_flags:
            encounter.assessment = (
                "Pelvic pain with fever. Differential includes Pelvic Inflammatory Disease "
                "(PID) or UTI/Pyelonephritis."
            )
        else:
            encounter.assessment = (
                "Pelvic pain, etiology unclear. Requires clinical correlation and possible imaging."
            )

        if red_flags:
            encounter.plan = (
                "URGENT: Immediate in-person evaluation, pregnancy test if applicable, "
                "urinalysis and cultures, pelvic ultrasound."
            )
        else:
            encounter.plan = (
                "In-person evaluation for physical exam. Monitor for fever or worsening pain."
            )
