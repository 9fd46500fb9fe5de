"""Fever interview used for general assessment."""

from typing import List
from clinical_intake.models.encounter import Encounter
from clinical_intake.orchestrator.answer_provider import AnswerProvider
from clinical_intake.trees.base import ComplaintTree


class FeverTree(ComplaintTree):
    """Fever work-up that localizes a likely source by organ system."""

    key = "GENERAL"

    async def ask(self, encounter: Encounter, provider: AnswerProvider) -> None:
        self.start_hpi(encounter)
        red_flags: List[str] = []
        ros: List[str] = []
        sources: List[str] = []

        if await provider.ask_yes_no("Have you measured your temperature?"):
            temp = await provider.ask_numeric(
                "What was the highest temperature (°F)?", min_value=95, max_value=110
            )
            encounter.hpi += f"Measured temperature: {temp}°F. "
            if temp >= 104:
                red_flags.append("Very high fever")

        onset = await provider.ask_multiple_choice(
            "When did the fever start?",
            ["Today", "1-3 days ago", "4-7 days ago", "More than a week ago"],
        )
        encounter.hpi += f"Onset: {onset}. "
        if onset == "More than a week ago":
            red_flags.append("Prolonged fever")

        pattern = await provider.ask_multiple_choice(
            "How does the fever behave?",
            ["Constant", "Comes and goes", "Mostly at night", "Every few days"],
        )
        encounter.hpi += f"Pattern: {pattern}. "

        # Respiratory
        if await provider.ask_yes_no("Do you have a cough?"):
            ros.append("Cough")
            sources.append("respiratory")
            if await provider.ask_yes_no("Are you coughing up phlegm?"):
                encounter.hpi += "Productive cough. "
        if await provider.ask_yes_no("Are you short of breath?"):
            red_flags.append("Dyspnea")
            sources.append("respiratory")
        if await provider.ask_yes_no("Do you have chest pain?"):
            ros.append("Chest pain")

        # Neurological
        if await provider.ask_yes_no("Do you have a headache?"):
            ros.append("Headache")
            if await provider.ask_yes_no("Is it the worst headache of your life?"):
                red_flags.append("Severe headache")
            if await provider.ask_yes_no("Do you have neck stiffness?"):
                red_flags.append("Neck stiffness")
                sources.append("neurological")

        # ENT
        if await provider.ask_yes_no("Do you have a sore throat?"):
            ros.append("Sore throat")
            sources.append("ent")
        if await provider.ask_yes_no("Do you have ear pain?"):
            ros.append("Ear pain")
            sources.append("ent")

        # Urinary
        if await provider.ask_yes_no("Do you have pain or burning when urinating?"):
            ros.append("Dysuria")
            sources.append("urinary")
        if await provider.ask_yes_no("Are you urinating more often than usual?"):
            ros.append("Urinary frequency")
        if await provider.ask_yes_no("Do you have pain in your side or lower back (flank)?"):
            ros.append("Flank pain")
            sources.append("urinary")

        # Gastrointestinal
        if await provider.ask_yes_no("Do you have abdominal pain?"):
            ros.append("Abdominal pain")
            sources.append("gastrointestinal")
        if await provider.ask_yes_no("Do you have diarrhea?"):
            ros.append("Diarrhea")
            sources.append("gastrointestinal")
            if await provider.ask_yes_no("Is there blood in the stool?"):
                red_flags.append("Bloody diarrhea")
        if await provider.ask_yes_no("Have you been vomiting?"):
            ros.append("Vomiting")

        # Skin
        if await provider.ask_yes_no("Do you have a rash?"):
            ros.append("Rash")
            sources.append("skin")
            if await provider.ask_yes_no(
                "Is the rash purple or does it stay when you press a glass on it?"
            ):
                red_flags.append("Non-blanching rash")

        if await provider.ask_yes_no("Are you confused or unusually drowsy?"):
            red_flags.append("Altered mental status")
        if await provider.ask_yes_no("Have you had any seizures?"):
            red_flags.append("Seizure")

        for prompt, finding in [
            ("Do you have shaking chills?", "Chills"),
            ("Do you have night sweats?", "Night sweats"),
            ("Have you lost weight without trying?", "Weight loss"),
        ]:
            if await provider.ask_yes_no(prompt):
                ros.append(finding)

        exposures = []
        for prompt, exposure in [
            ("Has anyone around you been sick?", "sick contacts"),
            ("Have you travelled recently?", "recent travel"),
            ("Have you been around animals or livestock?", "animal exposure"),
        ]:
            if await provider.ask_yes_no(prompt):
                exposures.append(exposure)
        if exposures:
            encounter.social_history += f" Exposures: {', '.join(exposures)}."

        if not await provider.ask_yes_no("Are your vaccinations up to date?"):
            encounter.pmh += " Vaccinations not up to date."
        if await provider.ask_yes_no("Does the fever come down with paracetamol or ibuprofen?"):
            encounter.hpi += "Responds to antipyretics. "
        else:
            encounter.hpi += "Poor response to antipyretics. "

        self.record_red_flags(encounter, red_flags)
        encounter.ros = ", ".join(ros) or "Fever only"
        encounter.assessment = self._assessment(red_flags, sources)
        if red_flags:
            encounter.plan = (
                "URGENT: Same-day evaluation with CBC, blood cultures and targeted workup. "
                "Emergency department if confusion, rash or breathing difficulty develops."
            )
        else:
            encounter.plan = (
                "Fluids, rest and antipyretics. In-person evaluation if fever persists "
                "beyond 3 days or new symptoms appear."
            )

    @staticmethod
    def _assessment(red_flags: List[str], sources: List[str]) -> str:
        if "Neck stiffness" in red_flags or "Non-blanching rash" in red_flags:
            return "Fever with signs concerning for MENINGITIS or sepsis. IMMEDIATE EVALUATION."
        if "Altered mental status" in red_flags or "Seizure" in red_flags:
            return "Fever with neurological features. Rule out CNS infection."
        if not sources:
            return "Fever without a localizing source. Differential: viral illness, early infection."
        primary = sources[0]
        return {
            "respiratory": "Fever with respiratory source. Differential: pneumonia, bronchitis, influenza.",
            "neurological": "Fever with neurological source. Rule out meningitis.",
            "ent": "Fever with ENT source. Differential: pharyngitis, otitis media, sinusitis.",
            "urinary": "Fever with urinary source. Differential: UTI, pyelonephritis.",
            "gastrointestinal": "Fever with gastrointestinal source. Differential: gastroenteritis, typhoid.",
            "skin": "Fever with rash. Differential: viral exanthem, cellulitis.",
        }[primary]
