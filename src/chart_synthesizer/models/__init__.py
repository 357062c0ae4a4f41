"""
Data models: the ChartSpec contract and pipeline request/result types.
"""

from chart_synthesizer.models.chart_spec import (
    ChartData,
    ChartOptions,
    ChartSpec,
    Dataset,
)
from chart_synthesizer.models.documents import ChartSynthesisResult, UploadedDocument

__all__ = [
    "ChartData",
    "ChartOptions",
    "ChartSpec",
    "ChartSynthesisResult",
    "Dataset",
    "UploadedDocument",
]
