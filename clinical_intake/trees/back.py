"""Back pain interview with cauda equina screening."""

from typing import List
from clinical_intake.models.encounter import Encounter
from clinical_intake.models.triage import DetectedFlagSeverity
from clinical_intake.orchestrator.answer_provider import AnswerProvider
from clinical_intake.trees.base import ComplaintTree

CAUDA_EQUINA_FLAGS = ("Bowel/Bladder dysfunction", "Saddle anesthesia")


class BackPainTree(ComplaintTree):
    key = "BACK_PAIN"

    async def ask(self, encounter: Encounter, provider: AnswerProvider) -> None:
        self.start_hpi(encounter)

        level = await provider.ask_multiple_choice(
            "Where is the back pain centered?",
            [
                "Upper back / Cervical",
                "Middle back / Thoracic",
                "Lower back / Lumbar",
                "Sacral / Tailbone",
            ],
        )
        encounter.hpi += f"Location: {level}. "

        onset = await provider.ask_multiple_choice(
            "When did the pain start?",
            ["Sudden (lifting/injury)", "Sudden (no injury)", "Gradual", "Chronic/Long-term"],
        )
        encounter.hpi += f"Onset: {onset}. "

        character = await provider.ask_multiple_choice(
            "How would you describe the pain?",
            ["Sharp/stabbing", "Dull/aching", "Burning/electric", "Stiff"],
        )
        encounter.hpi += f"Character: {character}. "

        severity = await provider.ask_numeric("On a scale of 1-10, how severe is the pain?")
        encounter.hpi += f"Severity: {severity}/10. "

        red_flags: List[str] = []
        radiation = await provider.ask_yes_no("Does the pain spread to your legs?")
        if radiation:
            encounter.hpi += "Radiates to legs. "
            if await provider.ask_yes_no("Any numbness or tingling (pins and needles)?"):
                encounter.hpi += "With paresthesia. "
            if await provider.ask_yes_no("Any weakness in your legs or difficulty walking?"):
                red_flags.append("Motor weakness")
                encounter.hpi += "With motor weakness. "

        if await provider.ask_yes_no("Any new changes in bowel or bladder control (accidents)?"):
            red_flags.append("Bowel/Bladder dysfunction")
            encounter.hpi += "REPORTED BOWEL/BLADDER DYSFUNCTION. "
        if await provider.ask_yes_no('Any numbness in your groin or "saddle area"?'):
            red_flags.append("Saddle anesthesia")
            encounter.hpi += "Saddle anesthesia reported. "

        cauda_equina = any(f in CAUDA_EQUINA_FLAGS for f in red_flags)
        self.record_red_flags(
            encounter,
            red_flags,
            DetectedFlagSeverity.CRITICAL if cauda_equina else DetectedFlagSeverity.HIGH,
        )

        encounter.ros = await self.perform_review_of_systems(
            provider, ["Fever", "Unexplained weight loss", "Night sweats", "Recent infection"]
        )

        if cauda_equina:
            encounter.assessment = (
                "CRITICAL: Concern for Cauda Equina Syndrome. "
                "Immediate surgical evaluation required."
            )
        elif red_flags:
            encounter.assessment = (
                "Back pain with neurological deficits. Differential includes disc "
                "herniation with nerve root compression."
            )
        elif radiation:
            encounter.assessment = "Radicular back pain (Sciatica). Likely nerve root irritation."
        else:
            encounter.assessment = "Mechanical back pain. Likely musculoskeletal origin."

        if red_flags:
            encounter.plan = (
                "URGENT: Immediate in-person neurological evaluation, urgent MRI of the spine, "
                "avoid heavy lifting, emergency department if symptoms worsen."
            )
        else:
            encounter.plan = (
                "Relative rest without bed rest, heat or ice, over-the-counter analgesics, "
                "gentle stretching; follow up if pain persists beyond 1 week."
            )
