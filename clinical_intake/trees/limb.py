"""Limb pain interview."""

from typing import List
from clinical_intake.models.encounter import Encounter
from clinical_intake.orchestrator.answer_provider import AnswerProvider
from clinical_intake.trees.base import ComplaintTree


class LimbPainTree(ComplaintTree):
    key = "LIMB_PAIN"

    async def ask(self, encounter: Encounter, provider: AnswerProvider) -> None:
        self.start_hpi(encounter)

        onset = await provider.ask_multiple_choice(
            "Did the pain start after an injury?",
            [
                "Yes, sudden injury",
                "No, started gradually",
                "No, started suddenly without injury",
            ],
        )
        encounter.hpi += f"Onset: {onset}. "

        severity = await provider.ask_numeric("On a scale of 1-10, how severe is the pain?")
        encounter.hpi += f"Severity: {severity}/10. "

        quality = await provider.ask_multiple_choice(
            "How does the pain feel?",
            ["Sharp", "Dull ache", "Throbbing", "Cramping", "Electrical/Tingling"],
        )
        encounter.hpi += f"Quality: {quality}. "

        red_flags: List[str] = []
        if not await provider.ask_yes_no("Can you bear weight or move the limb fully?"):
            red_flags.append("Inability to bear weight/move")
            encounter.hpi += "Inability to bear weight/move limb. "
        if await provider.ask_yes_no("Is there any significant swelling or deformity?"):
            red_flags.append("Swelling/Deformity")
            encounter.hpi += "Significant swelling/deformity noted. "
        if await provider.ask_yes_no(
            "Any change in color (pale/blue) or temperature (cold) of the limb?"
        ):
            red_flags.append("Vascular compromise")
            encounter.hpi += "Possible vascular compromise (color/temp change). "
        if await provider.ask_yes_no('Any numbness or "pins and needles"?'):
            encounter.hpi += "With paresthesia. "
        self.record_red_flags(encounter, red_flags)

        if "Vascular compromise" in red_flags:
            encounter.assessment = (
                "EMERGENCY: Potential vascular compromise or compartment syndrome. "
                "IMMEDIATE EVALUATION REQUIRED."
            )
        elif "Inability to bear weight/move" in red_flags and "injury" in onset:
            encounter.assessment = "High concern for fracture or significant ligamentous injury."
        elif "Swelling/Deformity" in red_flags:
            encounter.assessment = (
                "Limb injury with deformity/swelling. Differential: fracture, severe sprain, "
                "infection."
            )
        else:
            encounter.assessment = (
                "Limb pain, likely musculoskeletal. Differential: strain, sprain, overuse."
            )

        if red_flags:
            encounter.plan = (
                "URGENT: Immediate in-person evaluation, X-ray of the affected limb, "
                "splint if deformed, elevate and apply ice unless cold or pale."
            )
        else:
            encounter.plan = (
                "Rest, ice, compression, elevation; over-the-counter analgesics; "
                "follow up if pain persists beyond 3-5 days."
            )
