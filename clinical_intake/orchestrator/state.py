"""LangGraph state definition for the intake workflow."""

from typing import TypedDict, Annotated, Sequence, Optional
from langchain_core.messages import BaseMessage
from operator import add
from clinical_intake.models.encounter import ClinicalNote, Encounter


class IntakeState(TypedDict):
    """State carried between intake phases."""

    # Transcript of prompts (AIMessage) and answers (HumanMessage)
    messages: Annotated[Sequence[BaseMessage], add]

    # The encounter is mutated in place by every phase
    encounter: Encounter
    session_id: str

    # Phase outputs
    tree_key: Optional[str]
    note: Optional[ClinicalNote]
