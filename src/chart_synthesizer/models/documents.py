"""
Request and result types exchanged with the transport layer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chart_synthesizer.models.chart_spec import ChartSpec


def normalize_media_type(media_type: Optional[str]) -> str:
    """Lower-case a media type and drop its parameters (``; charset=...``)."""
    if not media_type:
        return ""
    return media_type.split(";", 1)[0].strip().lower()


@dataclass(frozen=True)
class UploadedDocument:
    """
    Ephemeral input document: raw bytes plus the declared media type.

    Example:
        >>> doc = UploadedDocument("text/csv; charset=utf-8", b"a,b\\n1,2\\n")
        >>> doc.normalized_media_type
        'text/csv'
    """

    media_type: str
    content: bytes = field(repr=False)
    filename: Optional[str] = None

    @property
    def normalized_media_type(self) -> str:
        return normalize_media_type(self.media_type)

    @property
    def source(self) -> str:
        return self.filename or "upload"


class SynthesisRequest(BaseModel):
    """Schema for a synthesis request."""

    question: str = Field(..., min_length=1, description="Natural language chart request")

    document: Optional[UploadedDocument] = Field(
        default=None, description="Optional tabular document grounding the request"
    )

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    @field_validator("question")
    @classmethod
    def validate_question_not_whitespace_only(cls, v: str) -> str:
        """Ensure question is not empty or whitespace-only."""
        if not v.strip():
            raise ValueError("Question cannot be empty or whitespace-only")
        return v


@dataclass(frozen=True)
class ChartSynthesisResult:
    """Output of a synthesis run."""

    image_data_url: str
    embeddable_html: str
    chart_spec: ChartSpec

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the keys the transport layer exposes."""
        return {
            "imageDataUrl": self.image_data_url,
            "embeddableHtml": self.embeddable_html,
            "chartSpec": self.chart_spec.model_dump(mode="json", exclude_none=True),
        }
