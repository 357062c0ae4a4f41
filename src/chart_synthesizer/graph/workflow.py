"""
LangGraph Workflow for chart synthesis.

Workflow Structure:
    START
      |
    [route_request]
      |-- no document ------> compose_prompt -> generate_completion --+
      |-- supported type ---> build_index -> retrieve_answer ---------+
      '-- other type -------> reject_document (raises)                |
                                                                      v
                                  parse_output -> render_chart -> build_snippet -> END
"""

from typing import Any, Dict

from langgraph.graph import END, START, StateGraph

from chart_synthesizer.graph.dependencies import SynthesisDependencies
from chart_synthesizer.graph.nodes import SynthesisNodes
from chart_synthesizer.graph.state import SynthesisState
from chart_synthesizer.utils.logger import get_logger

logger = get_logger(__name__)


def create_synthesis_workflow(dependencies: SynthesisDependencies):
    """
    Create and compile the synthesis workflow.

    Args:
        dependencies: Collaborators the nodes call

    Returns:
        Compiled StateGraph; run it with ``await workflow.ainvoke(state)``

    Example:
        >>> workflow = create_synthesis_workflow(deps)
        >>> final_state = await workflow.ainvoke(initialize_state("pie of market share"))
        >>> final_state["status"]
        'success'
    """
    nodes = SynthesisNodes(dependencies)
    workflow = StateGraph(SynthesisState)

    workflow.add_node("compose_prompt", nodes.compose_prompt)
    workflow.add_node("generate_completion", nodes.generate_completion)
    workflow.add_node("build_index", nodes.build_index)
    workflow.add_node("retrieve_answer", nodes.retrieve_answer)
    workflow.add_node("reject_document", nodes.reject_document)
    workflow.add_node("parse_output", nodes.parse_output)
    workflow.add_node("render_chart", nodes.render_chart)
    workflow.add_node("build_snippet", nodes.build_snippet)

    workflow.add_conditional_edges(
        START,
        nodes.route_request,
        {
            "compose_prompt": "compose_prompt",
            "build_index": "build_index",
            "reject_document": "reject_document",
        },
    )

    workflow.add_edge("compose_prompt", "generate_completion")
    workflow.add_edge("generate_completion", "parse_output")

    workflow.add_edge("build_index", "retrieve_answer")
    workflow.add_edge("retrieve_answer", "parse_output")

    workflow.add_edge("reject_document", END)

    workflow.add_edge("parse_output", "render_chart")
    workflow.add_edge("render_chart", "build_snippet")
    workflow.add_edge("build_snippet", END)

    compiled = workflow.compile()
    logger.debug("Synthesis workflow compiled")
    return compiled


def get_workflow_structure() -> Dict[str, Any]:
    """Describe the workflow graph (for documentation and debugging)."""
    return {
        "name": "chart_synthesis_workflow",
        "entry": {
            "router": "route_request",
            "routes": ["compose_prompt", "build_index", "reject_document"],
        },
        "nodes": [
            {"name": "compose_prompt", "description": "Prompt with format instructions"},
            {"name": "generate_completion", "description": "One chat completion"},
            {"name": "build_index", "description": "Chunk and embed the document"},
            {"name": "retrieve_answer", "description": "Retrieval-grounded completion"},
            {"name": "reject_document", "description": "Raise UnsupportedFormatError"},
            {"name": "parse_output", "description": "Validate model text as a ChartSpec"},
            {"name": "render_chart", "description": "Rasterize to a data URL"},
            {"name": "build_snippet", "description": "Embeddable Chart.js HTML"},
        ],
        "edges": [
            {"from": "compose_prompt", "to": "generate_completion"},
            {"from": "generate_completion", "to": "parse_output"},
            {"from": "build_index", "to": "retrieve_answer"},
            {"from": "retrieve_answer", "to": "parse_output"},
            {"from": "reject_document", "to": "END"},
            {"from": "parse_output", "to": "render_chart"},
            {"from": "render_chart", "to": "build_snippet"},
            {"from": "build_snippet", "to": "END"},
        ],
    }
