"""
Rendering module - Plotly figure generators, raster export and HTML snippets.
"""

from chart_synthesizer.rendering.generators import BaseChartGenerator, to_plotly_color
from chart_synthesizer.rendering.renderer import ChartRenderer, ImageExporter, plotly_image_exporter
from chart_synthesizer.rendering.router import GeneratorRouter
from chart_synthesizer.rendering.snippet import SnippetGenerator

__all__ = [
    "BaseChartGenerator",
    "ChartRenderer",
    "GeneratorRouter",
    "ImageExporter",
    "SnippetGenerator",
    "plotly_image_exporter",
    "to_plotly_color",
]
