"""
chart_synthesizer - natural language (+ optional CSV) to rendered charts.

Example:
    >>> from chart_synthesizer import synthesize
    >>> result = await synthesize("pie chart of market share: A 40, B 60")
    >>> result.to_dict().keys()
    dict_keys(['imageDataUrl', 'embeddableHtml', 'chartSpec'])
"""

from chart_synthesizer.core.exceptions import (
    ChartSynthesisError,
    RenderError,
    SchemaValidationError,
    UnsupportedFormatError,
    UpstreamServiceError,
)
from chart_synthesizer.graph.dependencies import SynthesisDependencies
from chart_synthesizer.models.chart_spec import ChartSpec
from chart_synthesizer.models.documents import ChartSynthesisResult, UploadedDocument
from chart_synthesizer.pipeline import get_default_dependencies, synthesize

__version__ = "0.1.0"

__all__ = [
    "ChartSpec",
    "ChartSynthesisError",
    "ChartSynthesisResult",
    "RenderError",
    "SchemaValidationError",
    "SynthesisDependencies",
    "UnsupportedFormatError",
    "UploadedDocument",
    "UpstreamServiceError",
    "get_default_dependencies",
    "synthesize",
]
