"""Respiratory complaint interview: cough, dyspnea and wheeze."""

from typing import List
from clinical_intake.models.encounter import Encounter
from clinical_intake.orchestrator.answer_provider import AnswerProvider
from clinical_intake.trees.base import ComplaintTree


class RespiratoryTree(ComplaintTree):
    key = "RESPIRATORY"

    async def ask(self, encounter: Encounter, provider: AnswerProvider) -> None:
        self.start_hpi(encounter)

        concern = await provider.ask_multiple_choice(
            "What is your main breathing concern?",
            ["Cough", "Shortness of breath", "Wheezing", "Chest tightness", "Multiple symptoms"],
        )
        encounter.hpi += f"Main concern: {concern}. "

        onset = await provider.ask_multiple_choice(
            "When did your symptoms start?",
            ["Suddenly (within hours)", "Gradually (over days)", "Chronic (weeks/months)"],
        )
        encounter.hpi += f"Onset: {onset}. "

        red_flags: List[str] = []
        ros: List[str] = []

        has_cough = await provider.ask_yes_no("Do you have a cough?")
        productive = False
        if has_cough:
            productive = await provider.ask_yes_no("Are you coughing up phlegm or mucus?")
            if productive:
                color = await provider.ask_multiple_choice(
                    "What color is the phlegm?",
                    ["Clear/white", "Yellow", "Green", "Brown", "Pink/frothy"],
                )
                amount = await provider.ask_multiple_choice(
                    "How much phlegm do you cough up?",
                    ["A little", "Moderate", "A lot"],
                )
                encounter.hpi += f"Productive cough, {color.lower()} sputum, {amount.lower()}. "
                if color == "Pink/frothy":
                    red_flags.append("Pink frothy sputum")
            else:
                encounter.hpi += "Dry cough. "
            severity = await provider.ask_numeric("On a scale of 0-10, how bad is the cough?")
            encounter.hpi += f"Cough severity: {severity}/10. "

        dyspnea = await provider.ask_yes_no("Are you short of breath?")
        if dyspnea:
            when = await provider.ask_multiple_choice(
                "When are you short of breath?",
                ["Only with heavy exertion", "With light activity", "At rest"],
            )
            encounter.hpi += f"Dyspnea: {when.lower()}. "
            if when == "At rest":
                red_flags.append("Dyspnea at rest")
            if await provider.ask_yes_no("Is it harder to breathe when lying flat?"):
                encounter.hpi += "Orthopnea. "
            if await provider.ask_yes_no("Do you wake up at night short of breath?"):
                encounter.hpi += "Paroxysmal nocturnal dyspnea. "

        wheeze = await provider.ask_yes_no("Do you hear wheezing or whistling when you breathe?")
        if wheeze:
            encounter.hpi += "With wheeze. "
        if await provider.ask_yes_no("Do you have chest pain when breathing or coughing?"):
            encounter.hpi += "Pleuritic chest pain. "

        if await provider.ask_yes_no("Have you coughed up blood?"):
            red_flags.append("Hemoptysis")
        if await provider.ask_yes_no("Have you fainted or nearly fainted?"):
            red_flags.append("Syncope")
        if await provider.ask_yes_no("Do you have new swelling or pain in one leg?"):
            red_flags.append("Unilateral leg swelling")

        fever = await provider.ask_yes_no("Do you have a fever?")
        if fever:
            red_flags.append("Fever")
            ros.append("Fever")
        if await provider.ask_yes_no("Have you lost weight without trying?"):
            red_flags.append("Unexplained weight loss")
            ros.append("Weight loss")
        if await provider.ask_yes_no("Do you have night sweats?"):
            ros.append("Night sweats")
        if await provider.ask_yes_no("Do you feel unusually tired?"):
            ros.append("Fatigue")
        self.record_red_flags(encounter, red_flags)
        encounter.ros = ", ".join(ros) or "Otherwise negative"

        if await provider.ask_yes_no("Have you been diagnosed with asthma?"):
            encounter.pmh += " Asthma."
        if await provider.ask_yes_no("Have you been diagnosed with COPD or emphysema?"):
            encounter.pmh += " COPD."
        smoking = await provider.ask_multiple_choice(
            "Do you smoke?", ["Never", "Former smoker", "Current smoker"]
        )
        encounter.social_history += f" Smoking: {smoking}."

        triggers = await provider.ask_multiple_choice(
            "Does anything trigger your symptoms?",
            ["Exercise", "Cold air", "Dust/pollen", "Smoke", "Pets", "None"],
            allow_multiple=True,
        )
        triggers = [t for t in triggers if t != "None"]
        if triggers:
            encounter.hpi += f"Triggers: {', '.join(triggers)}. "

        encounter.assessment = self._assessment(
            red_flags, fever, productive, wheeze, onset, triggers
        )
        if red_flags:
            encounter.plan = (
                "URGENT: Same-day evaluation with pulse oximetry, chest X-ray and ECG. "
                "Emergency department if breathing worsens."
            )
        else:
            encounter.plan = (
                "In-person evaluation within a few days. Rest, fluids and avoidance of triggers."
            )

    @staticmethod
    def _assessment(red_flags, fever, productive, wheeze, onset, triggers) -> str:
        if "Dyspnea at rest" in red_flags or "Syncope" in red_flags:
            return (
                "Respiratory complaint with HIGH RISK FEATURES. Differential: pulmonary "
                "embolism, pneumonia, acute heart failure, severe asthma exacerbation."
            )
        if "Hemoptysis" in red_flags or "Unexplained weight loss" in red_flags:
            return (
                "Respiratory complaint with concerning features. Differential: tuberculosis, "
                "malignancy, bronchiectasis."
            )
        if fever and productive:
            return "Productive cough with fever. Differential: pneumonia, acute bronchitis."
        if wheeze and triggers:
            return "Wheeze with identifiable triggers. Differential: asthma, reactive airway disease."
        if onset.startswith("Chronic"):
            return "Chronic respiratory symptoms. Differential: COPD, asthma, post-nasal drip, GERD."
        return "Respiratory symptoms, likely viral upper respiratory infection."
