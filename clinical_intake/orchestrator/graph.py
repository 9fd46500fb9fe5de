"""Intake phase workflow.

EMERGENCY_SCREEN -> COMPLAINT_SELECTION -> BODY_MAP -> COMPLAINT_TREE ->
SUMMARY, with a positive emergency screen jumping straight to the emergency
note.
"""

from langgraph.graph import StateGraph, END
from clinical_intake.orchestrator.state import IntakeState
from clinical_intake.orchestrator.nodes import (
    emergency_screen_node,
    emergency_note_node,
    complaint_selection_node,
    body_map_node,
    complaint_tree_node,
    summary_node,
    route_after_screening,
)
import logging

logger = logging.getLogger(__name__)


def build_intake_graph():
    """Build and compile the intake phase workflow."""
    logger.info("Building intake LangGraph workflow")

    workflow = StateGraph(IntakeState)

    workflow.add_node("emergency_screen", emergency_screen_node)
    workflow.add_node("emergency_note", emergency_note_node)
    workflow.add_node("complaint_selection", complaint_selection_node)
    workflow.add_node("body_map", body_map_node)
    workflow.add_node("complaint_tree", complaint_tree_node)
    workflow.add_node("summary", summary_node)

    workflow.set_entry_point("emergency_screen")

    # Positive checkpoint skips every later phase
    workflow.add_conditional_edges(
        "emergency_screen",
        route_after_screening,
        {"emergency": "emergency_note", "continue": "complaint_selection"},
    )
    workflow.add_edge("emergency_note", END)

    workflow.add_edge("complaint_selection", "body_map")
    workflow.add_edge("body_map", "complaint_tree")
    workflow.add_edge("complaint_tree", "summary")
    workflow.add_edge("summary", END)

    graph = workflow.compile()
    logger.info("Intake workflow compiled successfully")

    return graph


# Global graph instance
_intake_graph = None


def get_intake_graph():
    """Get or create the compiled intake graph."""
    global _intake_graph
    if _intake_graph is None:
        _intake_graph = build_intake_graph()
    return _intake_graph
