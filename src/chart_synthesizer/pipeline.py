"""
Pipeline entry point: question (+ optional document) -> chart result.
"""

from typing import Optional

from chart_synthesizer.graph.dependencies import SynthesisDependencies
from chart_synthesizer.graph.state import initialize_state
from chart_synthesizer.graph.workflow import create_synthesis_workflow
from chart_synthesizer.models.documents import (
    ChartSynthesisResult,
    SynthesisRequest,
    UploadedDocument,
)
from chart_synthesizer.utils.logger import get_logger

logger = get_logger(__name__)

# Global dependency bundle (lazy-loaded)
_default_dependencies: Optional[SynthesisDependencies] = None


def get_default_dependencies() -> SynthesisDependencies:
    """
    Get or create the process-wide dependency bundle built from settings.

    Raises:
        ValueError: If settings are invalid (e.g. missing API key)
    """
    global _default_dependencies

    if _default_dependencies is None:
        logger.info("Creating default synthesis dependencies")
        _default_dependencies = SynthesisDependencies.from_settings()

    return _default_dependencies


async def synthesize(
    question: str,
    document: Optional[UploadedDocument] = None,
    *,
    dependencies: Optional[SynthesisDependencies] = None,
) -> ChartSynthesisResult:
    """
    Turn a chart request into a rendered image and an embeddable snippet.

    Without a document the question goes straight to the model; with a
    tabular document the answer is grounded in chunks retrieved from it.

    Args:
        question: Natural language chart request
        document: Optional uploaded document
        dependencies: Collaborators to use; defaults to get_default_dependencies()

    Returns:
        ChartSynthesisResult with the data URL, HTML snippet and ChartSpec

    Raises:
        pydantic.ValidationError: If the question is empty
        UnsupportedFormatError: If the document type has no loader
        UpstreamServiceError: If the chat or embedding service fails
        SchemaValidationError: If the model output is not a valid ChartSpec
        RenderError: If the chart cannot be rendered

    Example:
        >>> result = await synthesize("bar chart of A=1, B=2 titled Totals")
        >>> result.chart_spec.chartType
        'bar'
    """
    request = SynthesisRequest(question=question, document=document)
    deps = dependencies if dependencies is not None else get_default_dependencies()

    workflow = create_synthesis_workflow(deps)
    path = "document" if request.document is not None else "direct"
    logger.info(f"[synthesize] Starting {path} synthesis")

    final_state = await workflow.ainvoke(initialize_state(request.question, request.document))

    result = ChartSynthesisResult(
        image_data_url=final_state["image_data_url"],
        embeddable_html=final_state["embeddable_html"],
        chart_spec=final_state["chart_spec"],
    )
    logger.info(f"[synthesize] Completed {result.chart_spec.chartType} chart")
    return result
