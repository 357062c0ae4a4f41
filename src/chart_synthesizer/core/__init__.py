"""
Core module - settings, Gemini configuration and error taxonomy.
"""

from chart_synthesizer.core.exceptions import (
    ChartSynthesisError,
    RenderError,
    SchemaValidationError,
    UnsupportedFormatError,
    UpstreamServiceError,
)
from chart_synthesizer.core.settings import validate_settings

__all__ = [
    "ChartSynthesisError",
    "RenderError",
    "SchemaValidationError",
    "UnsupportedFormatError",
    "UpstreamServiceError",
    "validate_settings",
]
