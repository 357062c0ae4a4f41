"""
Graph module - LangGraph workflow that dispatches and runs a synthesis.
"""

from chart_synthesizer.graph.dependencies import SynthesisDependencies
from chart_synthesizer.graph.state import SynthesisState, initialize_state
from chart_synthesizer.graph.workflow import create_synthesis_workflow, get_workflow_structure

__all__ = [
    "SynthesisDependencies",
    "SynthesisState",
    "create_synthesis_workflow",
    "get_workflow_structure",
    "initialize_state",
]
