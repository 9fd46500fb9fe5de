"""Chest pain interview with cardiac red flag screening."""

from typing import List
from clinical_intake.models.encounter import Encounter
from clinical_intake.models.triage import DetectedFlagSeverity
from clinical_intake.orchestrator.answer_provider import AnswerProvider
from clinical_intake.trees.base import ComplaintTree


class ChestPainTree(ComplaintTree):
    key = "CHEST_PAIN"
    flag_severity = DetectedFlagSeverity.CRITICAL

    async def ask(self, encounter: Encounter, provider: AnswerProvider) -> None:
        self.start_hpi(encounter)

        onset = await provider.ask_multiple_choice(
            "When did the chest pain start?",
            [
                "Suddenly (seconds to minutes)",
                "Gradually (over hours)",
                "After physical activity",
                "While resting",
            ],
        )
        encounter.hpi += f"Onset: {onset}. "

        character = await provider.ask_multiple_choice(
            "How would you describe the pain?",
            ["Sharp/stabbing", "Crushing/squeezing/pressure", "Burning", "Dull/aching"],
        )
        encounter.hpi += f"Character: {character}. "

        if await provider.ask_yes_no("Does the pain spread to other areas?"):
            sites = await provider.ask_multiple_choice(
                "Where does it spread? (Select all)",
                ["Left arm", "Right arm", "Jaw", "Back", "Neck", "Abdomen"],
                allow_multiple=True,
            )
            if sites:
                encounter.hpi += f"Radiates to: {', '.join(sites)}. "

        duration = await provider.ask_multiple_choice(
            "How long does each episode of pain last?",
            [
                "Less than 5 minutes",
                "5-20 minutes",
                "20-60 minutes",
                "More than 1 hour",
                "Constant/continuous",
            ],
        )
        encounter.hpi += f"Duration: {duration}. "

        severity = await provider.ask_numeric(
            "On a scale of 0-10, how severe is the pain? (0 = no pain, 10 = worst imaginable)"
        )
        encounter.hpi += f"Severity: {severity}/10. "

        timing = await provider.ask_multiple_choice(
            "When does the pain typically occur?",
            [
                "With physical exertion/exercise",
                "At rest",
                "After eating",
                "When lying down",
                "No clear pattern",
            ],
        )
        encounter.hpi += f"Timing: {timing}. "

        relieved = await provider.ask_multiple_choice(
            "Does anything make the pain better?",
            ["Rest", "Nitroglycerin", "Antacids", "Changing position", "Nothing helps"],
            allow_multiple=True,
        )
        if relieved:
            encounter.hpi += f"Relieved by: {', '.join(relieved)}. "

        worsened = await provider.ask_multiple_choice(
            "Does anything make the pain worse?",
            ["Deep breathing", "Coughing", "Movement", "Exertion", "Nothing makes it worse"],
            allow_multiple=True,
        )
        if worsened:
            encounter.hpi += f"Worsened by: {', '.join(worsened)}. "

        red_flags: List[str] = []
        screening = [
            (
                "Are you experiencing shortness of breath or difficulty breathing?",
                "Shortness of breath",
                "Associated with dyspnea. ",
            ),
            ("Are you sweating excessively (diaphoresis)?", "Diaphoresis", "With diaphoresis. "),
            ("Do you have nausea or vomiting?", "Nausea/vomiting", "With nausea. "),
            (
                "Have you fainted or felt like you were going to faint?",
                "Syncope/presyncope",
                "With near-syncope. ",
            ),
            (
                "Are you experiencing heart palpitations (racing or irregular heartbeat)?",
                "Palpitations",
                "With palpitations. ",
            ),
        ]
        for prompt, flag, hpi_text in screening:
            if await provider.ask_yes_no(prompt):
                red_flags.append(flag)
                encounter.hpi += hpi_text
        self.record_red_flags(encounter, red_flags)

        ros = []
        for prompt, finding in [
            ("Do you have fever?", "Fever"),
            ("Do you have a cough?", "Cough"),
            ("Do you have swelling in your legs?", "Leg edema"),
            ("Have you had any recent chest trauma or injury?", "Recent chest trauma"),
        ]:
            if await provider.ask_yes_no(prompt):
                ros.append(finding)
        encounter.ros = ", ".join(ros) or "Otherwise negative"

        if await provider.ask_yes_no("Have you ever had a heart attack before?"):
            encounter.pmh += " Prior MI."
        if await provider.ask_yes_no("Have you had any heart procedures (stents, bypass surgery)?"):
            encounter.pmh += " Prior cardiac intervention."

        encounter.assessment = self._assessment(character, red_flags, timing, relieved)
        encounter.plan = self._plan(character, red_flags)

    @staticmethod
    def _assessment(character: str, red_flags: List[str], timing: str, relieved: List[str]) -> str:
        text = "Chest pain. "
        c = character.lower()

        if red_flags:
            return (
                text
                + f"HIGH RISK FEATURES PRESENT: {', '.join(red_flags)}. "
                + "Differential: Acute Coronary Syndrome (HIGH CONCERN), pulmonary embolism, "
                "aortic dissection, cardiac arrhythmia. IMMEDIATE EMERGENCY EVALUATION REQUIRED."
            )

        if "crush" in c or "squeez" in c or "pressure" in c:
            text += "Pressure-type pain concerning for cardiac origin. "
            if "exertion" in timing.lower():
                text += "Exertional pattern suggestive of stable angina. "
            elif "rest" in timing.lower():
                text += "Rest pain concerning for unstable angina. "
            if any("nitroglycerin" in r.lower() for r in relieved):
                text += "Responsive to nitroglycerin. "
            return text + (
                "Differential: angina pectoris, acute coronary syndrome, coronary vasospasm. "
                "RECOMMEND: Urgent cardiac evaluation within 24 hours."
            )

        if "sharp" in c or "stabbing" in c:
            return text + (
                "Sharp, pleuritic-type chest pain. Differential: pleurisy, costochondritis, "
                "pericarditis, pneumothorax, pulmonary embolism (must rule out)."
            )

        if "burn" in c:
            if "eating" in timing.lower() or any("antacid" in r.lower() for r in relieved):
                text += "Pattern suggestive of GERD/esophageal origin. "
            return text + (
                "Differential: GERD, esophagitis, peptic ulcer disease, "
                "cardiac causes (MUST RULE OUT FIRST)."
            )

        return text + "Requires in-person evaluation for definitive diagnosis."

    @staticmethod
    def _plan(character: str, red_flags: List[str]) -> str:
        c = character.lower()
        if red_flags:
            return (
                "EMERGENCY PLAN: Call emergency services immediately. Rest and avoid exertion. "
                "Emergency workup: stat ECG, cardiac troponin, chest X-ray, CBC, metabolic panel."
            )
        if "crush" in c or "pressure" in c:
            return (
                "URGENT PLAN: In-person evaluation within 24 hours. ECG, troponin, lipid panel. "
                "Avoid strenuous activity. Go to the emergency department if symptoms worsen."
            )
        if "sharp" in c:
            return (
                "SEMI-URGENT PLAN: Clinical evaluation within 2-3 days. Chest X-ray, ECG, "
                "D-dimer if PE risk factors. Seek immediate care if breathlessness develops."
            )
        if "burn" in c:
            return (
                "ROUTINE PLAN: Primary care within 1 week. Rule out cardiac causes first, "
                "then consider a PPI trial and reflux lifestyle measures."
            )
        return (
            "GENERAL PLAN: In-person evaluation with ECG, chest X-ray and labs. "
            "Seek immediate care if symptoms worsen."
        )
