"""
LangGraph State Definition for the synthesis workflow.

The state carries the request, the intermediate artifacts of whichever path
the request takes, and the final outputs.
"""

from typing import Any, Dict, Optional, TypedDict

from chart_synthesizer.models.chart_spec import ChartSpec
from chart_synthesizer.models.documents import UploadedDocument
from chart_synthesizer.retrieval.index_builder import EmbeddingIndex


class SynthesisState(TypedDict, total=False):
    """
    State schema for the synthesis workflow.

    Flow:
        no document:  compose_prompt -> generate_completion -> parse_output
        document:     build_index -> retrieve_answer -> parse_output
        then always:  parse_output -> render_chart -> build_snippet

    Attributes:
        # INPUT
        question: Natural language chart request
        document: Optional uploaded document

        # NO-DOCUMENT PATH
        prompt: Composed prompt text (populated by compose_prompt)

        # DOCUMENT PATH
        index: EmbeddingIndex over the document (populated by build_index)

        # GENERATION
        raw_output: Model text, either path (generate_completion / retrieve_answer)
        chart_spec: Validated ChartSpec (populated by parse_output)
        chart_config: Chart.js configuration derived from chart_spec

        # OUTPUT
        image_data_url: Raster image as a data URL (populated by render_chart)
        embeddable_html: HTML snippet (populated by build_snippet)

        # STATUS
        status: Name of the last completed step; "success" at the end
    """

    question: str
    document: Optional[UploadedDocument]

    prompt: str
    index: EmbeddingIndex

    raw_output: str
    chart_spec: ChartSpec
    chart_config: Dict[str, Any]

    image_data_url: str
    embeddable_html: str

    status: str


def initialize_state(question: str, document: Optional[UploadedDocument] = None) -> SynthesisState:
    """Build the initial state for one workflow invocation."""
    return {"question": question, "document": document, "status": "pending"}
