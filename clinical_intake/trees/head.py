"""Headache interview."""

from clinical_intake.models.encounter import Encounter
from clinical_intake.orchestrator.answer_provider import AnswerProvider
from clinical_intake.trees.base import ComplaintTree


class HeadacheTree(ComplaintTree):
    key = "HEADACHE"

    async def ask(self, encounter: Encounter, provider: AnswerProvider) -> None:
        self.start_hpi(encounter)

        onset = await provider.ask_multiple_choice(
            "When did the headache start?",
            ["Suddenly (lightning bolt)", "Gradually (over hours/days)", "Following trauma"],
        )
        encounter.hpi += f"Onset: {onset}. "

        character = await provider.ask_multiple_choice(
            "How would you describe the pain?",
            ["Throbbing/Pulsating", "Tight band/Pressure", "Sharp/Stabbing", "Dull ache"],
        )
        encounter.hpi += f"Character: {character}. "

        red_flags = []
        if await provider.ask_yes_no("Do you have a fever?"):
            red_flags.append("Fever")
        if await provider.ask_yes_no("Do you have neck stiffness?"):
            red_flags.append("Nuchal rigidity")
        if await provider.ask_yes_no("Are you having any vision changes?"):
            red_flags.append("Visual disturbance")
        if onset.startswith("Suddenly"):
            red_flags.append("Thunderclap onset")
        self.record_red_flags(encounter, red_flags)

        encounter.assessment = "Headache. Differential: Tension, Migraine. "
        if "Fever" in red_flags and "Nuchal rigidity" in red_flags:
            encounter.assessment += "CONCERN FOR MENINGITIS."
        elif "Thunderclap onset" in red_flags:
            encounter.assessment += "Sudden onset: rule out subarachnoid hemorrhage."

        if red_flags:
            encounter.plan = "Same-day in-person evaluation. Emergency department if worsening."
        else:
            encounter.plan = "Symptomatic relief. Follow up if persistent."
