"""Base class for complaint-specific interview scripts."""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional
from clinical_intake.models.encounter import Encounter
from clinical_intake.models.triage import DetectedFlagSeverity
from clinical_intake.orchestrator.answer_provider import AnswerProvider
import re


def _slug(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "_", text.lower()).strip("_")


class ComplaintTree(ABC):
    """
    One interview script behind a uniform ``ask`` contract.

    A tree writes the history of present illness, review of systems,
    red flags, assessment and plan onto the encounter.
    """

    key: str = "GENERAL"
    # Severity recorded for findings the tree treats as red flags
    flag_severity: DetectedFlagSeverity = DetectedFlagSeverity.HIGH

    @abstractmethod
    async def ask(self, encounter: Encounter, provider: AnswerProvider) -> None:
        """Conduct the interview and fill in the encounter."""

    async def perform_review_of_systems(
        self, provider: AnswerProvider, systems: Iterable[str]
    ) -> str:
        positives = []
        for system in systems:
            if await provider.ask_yes_no(f"Do you have any problems with: {system}?"):
                positives.append(system)
        return ", ".join(positives) or "No positive findings in reviewed systems."

    @staticmethod
    def start_hpi(encounter: Encounter) -> None:
        encounter.hpi = f"{encounter.chief_complaint}. "

    def record_red_flags(
        self,
        encounter: Encounter,
        flags: List[str],
        severity: Optional[DetectedFlagSeverity] = None,
    ) -> None:
        for flag in flags:
            if flag not in encounter.red_flags:
                encounter.red_flags.append(flag)
            encounter.add_red_flag(
                f"{self.key.lower()}:{_slug(flag)}",
                flag,
                severity or self.flag_severity,
                source="complaint_tree",
            )
