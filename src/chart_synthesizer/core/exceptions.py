"""
Error taxonomy for the chart synthesis pipeline.

Every error raised inside the pipeline derives from ``ChartSynthesisError``
and keeps its distinct kind all the way up to the caller, so that the
transport layer can decide how much of it to expose.
"""

from typing import Any, Dict, List, Optional


class ChartSynthesisError(Exception):
    """Base exception for all pipeline failures."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the error.

        Args:
            message: Error message
            details: Additional error details
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context."""
        msg = self.message
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            msg = f"{msg} ({details_str})"
        return msg


class UnsupportedFormatError(ChartSynthesisError):
    """Raised when an uploaded document cannot be turned into an index."""

    def __init__(
        self,
        message: str,
        media_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.media_type = media_type
        merged = dict(details or {})
        if media_type is not None:
            merged.setdefault("media_type", media_type)
        super().__init__(message, merged)


class SchemaValidationError(ChartSynthesisError):
    """Raised when generated text does not parse into a valid ChartSpec."""

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        raw_output: Optional[str] = None,
    ):
        self.errors = errors or []
        self.raw_output = raw_output
        details = {"errors": "; ".join(self.errors)} if self.errors else None
        super().__init__(message, details)


class UpstreamServiceError(ChartSynthesisError):
    """Raised when a chat or embedding service call fails."""

    def __init__(self, message: str, service: str):
        self.service = service
        super().__init__(message, {"service": service})


class RenderError(ChartSynthesisError):
    """Raised when a schema-valid ChartSpec cannot be rendered."""

    def __init__(self, message: str, chart_type: Optional[str] = None):
        self.chart_type = chart_type
        details = {"chart_type": chart_type} if chart_type else None
        super().__init__(message, details)
