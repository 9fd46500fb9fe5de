"""Abdominal pain interview."""

from typing import List
from clinical_intake.models.encounter import Encounter
from clinical_intake.orchestrator.answer_provider import AnswerProvider
from clinical_intake.trees.base import ComplaintTree

LOCATIONS = [
    "Upper right (RUQ)",
    "Upper middle (Epigastric)",
    "Upper left (LUQ)",
    "Around the belly button (Periumbilical)",
    "Lower right (RLQ)",
    "Lower middle (Suprapubic)",
    "Lower left (LLQ)",
    "All over (Diffuse)",
]

LOCATION_DIFFERENTIALS = {
    "RUQ": "Differential: cholecystitis, biliary colic, hepatitis.",
    "Epigastric": "Differential: gastritis, peptic ulcer disease, pancreatitis, cardiac (rule out).",
    "LUQ": "Differential: gastritis, splenic pathology, pancreatitis.",
    "Periumbilical": "Differential: early appendicitis, gastroenteritis, small bowel obstruction.",
    "RLQ": "Differential: appendicitis, ovarian pathology, renal colic.",
    "Suprapubic": "Differential: UTI, cystitis, pelvic pathology.",
    "LLQ": "Differential: diverticulitis, constipation, ovarian pathology.",
    "Diffuse": "Differential: gastroenteritis, bowel obstruction, peritonitis.",
}


class AbdominalPainTree(ComplaintTree):
    key = "ABDOMINAL_PAIN"

    async def ask(self, encounter: Encounter, provider: AnswerProvider) -> None:
        self.start_hpi(encounter)
        red_flags: List[str] = []
        ros: List[str] = []

        location = await provider.ask_multiple_choice("Where is the pain located?", LOCATIONS)
        encounter.hpi += f"Location: {location}. "

        onset = await provider.ask_multiple_choice(
            "How did the pain start?",
            ["Suddenly", "Gradually", "Comes and goes"],
        )
        encounter.hpi += f"Onset: {onset}. "

        character = await provider.ask_multiple_choice(
            "How would you describe the pain?",
            ["Sharp/stabbing", "Cramping/colicky", "Dull/aching", "Burning", "Tearing/ripping"],
        )
        encounter.hpi += f"Character: {character}. "
        if character == "Tearing/ripping":
            red_flags.append("Tearing pain")

        if await provider.ask_yes_no("Does the pain spread anywhere?"):
            spread = await provider.ask_multiple_choice(
                "Where does it spread?",
                ["Back", "Shoulder", "Groin", "Chest", "Right lower abdomen"],
                allow_multiple=True,
            )
            if spread:
                encounter.hpi += f"Radiates to: {', '.join(spread)}. "

        severity = await provider.ask_numeric("On a scale of 0-10, how severe is the pain?")
        encounter.hpi += f"Severity: {severity}/10. "

        duration = await provider.ask_multiple_choice(
            "How long have you had the pain?",
            ["Less than 6 hours", "6-24 hours", "1-3 days", "More than 3 days"],
        )
        encounter.hpi += f"Duration: {duration}. "

        worse = await provider.ask_multiple_choice(
            "What makes the pain worse?",
            ["Eating", "Movement", "Lying down", "Nothing"],
            allow_multiple=True,
        )
        if worse and worse != ["Nothing"]:
            encounter.hpi += f"Worse with: {', '.join(w for w in worse if w != 'Nothing')}. "
        better = await provider.ask_multiple_choice(
            "What makes the pain better?",
            ["Eating", "Passing stool or gas", "Lying still", "Nothing"],
            allow_multiple=True,
        )
        if better and better != ["Nothing"]:
            encounter.hpi += f"Better with: {', '.join(b for b in better if b != 'Nothing')}. "

        if await provider.ask_yes_no("Have you been vomiting?"):
            ros.append("Vomiting")
            if await provider.ask_yes_no("Is there blood or coffee-ground material in the vomit?"):
                red_flags.append("Hematemesis")
            if await provider.ask_yes_no("Is the vomit green or does it smell like stool?"):
                red_flags.append("Bilious/feculent vomiting")

        if await provider.ask_yes_no("Have you seen blood in your stool or black, tarry stool?"):
            red_flags.append("GI bleeding")
        if await provider.ask_yes_no("Have you been unable to pass gas or stool?"):
            red_flags.append("Obstipation")
        if await provider.ask_yes_no("Do you have a fever?"):
            red_flags.append("Fever")
        if await provider.ask_yes_no("Is your belly swollen or bloated?"):
            ros.append("Distension")
        if await provider.ask_yes_no("Is your belly hard and very painful to touch?"):
            red_flags.append("Abdominal rigidity")
        if await provider.ask_yes_no("Do you feel lightheaded or dizzy when standing?"):
            red_flags.append("Lightheadedness")

        for prompt, finding in [
            ("Do you feel nauseous?", "Nausea"),
            ("Do you have diarrhea?", "Diarrhea"),
            ("Are you constipated?", "Constipation"),
            ("Have you lost your appetite?", "Anorexia"),
            ("Have you lost weight without trying?", "Weight loss"),
            ("Have you noticed yellowing of your skin or eyes?", "Jaundice"),
        ]:
            if await provider.ask_yes_no(prompt):
                ros.append(finding)

        pregnant = await provider.ask_yes_no("Is there any chance you could be pregnant?")
        if pregnant:
            encounter.hpi += "Possible pregnancy. "
            if await provider.ask_yes_no("Any vaginal bleeding?"):
                red_flags.append("Pregnancy with vaginal bleeding")

        if await provider.ask_yes_no("Have you had abdominal surgery before?"):
            encounter.pmh += " Prior abdominal surgery."

        self.record_red_flags(encounter, red_flags)
        encounter.ros = ", ".join(ros) or "Otherwise negative"
        encounter.assessment = self._assessment(location, onset, red_flags)
        if red_flags:
            encounter.plan = (
                "URGENT: Same-day evaluation with abdominal exam, CBC, metabolic panel, "
                "lipase and imaging. Nothing by mouth until evaluated."
            )
        else:
            encounter.plan = (
                "In-person evaluation within 1-2 days. Clear fluids, bland diet. "
                "Seek immediate care if pain becomes severe or fever develops."
            )

    @staticmethod
    def _assessment(location: str, onset: str, red_flags: List[str]) -> str:
        text = "Abdominal pain. "
        if "Tearing pain" in red_flags:
            return text + "Tearing pain: RULE OUT AORTIC DISSECTION/ANEURYSM. IMMEDIATE EVALUATION."
        if "Abdominal rigidity" in red_flags:
            text += "Peritoneal signs present. "
        code = location[location.find("(") + 1 : location.find(")")]
        if code == "RLQ" and onset == "Suddenly":
            text += "CONCERN FOR APPENDICITIS. "
        text += LOCATION_DIFFERENTIALS.get(code, "Requires clinical correlation.")
        if red_flags:
            text += f" Red flags: {', '.join(red_flags)}."
        return text
