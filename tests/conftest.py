"""
Shared fixtures and test doubles.

No test talks to a real model, embedding service or browser: the chat
client, embeddings and image exporter are replaced with deterministic
doubles that also count their calls.
"""

import copy
import hashlib
import json
from typing import Any, Dict, List, Union

import plotly.graph_objects as go
import pytest
from langchain_core.embeddings import Embeddings

from chart_synthesizer.graph.dependencies import SynthesisDependencies
from chart_synthesizer.models.documents import UploadedDocument
from chart_synthesizer.rendering.renderer import ChartRenderer

SAMPLE_CSV = b"month,revenue\nJan,100\nFeb,150\nMar,120\n"

TOTALS_PAYLOAD: Dict[str, Any] = {
    "chartType": "bar",
    "height": 400,
    "width": 600,
    "backgroundColour": "#FFFFFF",
    "data": {
        "labels": ["A", "B", "C"],
        "datasets": [
            {
                "label": "Totals",
                "data": [1, 2, 3],
                "borderColor": "#36A2EB",
                "backgroundColor": ["#9AD0F5"],
                "borderWidth": 1,
                "borderRadius": 0,
                "borderSkipped": False,
            }
        ],
    },
    "options": {
        "indexAxis": "x",
        "plugins": {
            "legend": {"position": "bottom"},
            "title": {"display": True, "text": "Totals"},
        },
        "scales": {"x": {"stacked": False}, "y": {"stacked": False}},
    },
}


class ScriptedChatClient:
    """Chat client double replaying canned responses (or raising canned errors)."""

    def __init__(self, responses: List[Union[str, Exception]]):
        self.responses = list(responses)
        self.prompts: List[str] = []

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        # The last response repeats once the script runs out
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


class CountingEmbeddings(Embeddings):
    """Deterministic hash-based embeddings that count every call."""

    def __init__(self, dimensions: int = 16):
        self.dimensions = dimensions
        self.document_calls = 0
        self.query_calls = 0
        self.embedded_texts: List[str] = []

    @property
    def total_calls(self) -> int:
        return self.document_calls + self.query_calls

    def _vector(self, text: str) -> List[float]:
        digest = hashlib.sha256(text.encode("utf-8")).digest()
        return [0.01 + byte / 255 for byte in digest[: self.dimensions]]

    def embed_documents(self, texts: List[str]) -> List[List[float]]:
        self.document_calls += 1
        self.embedded_texts.extend(texts)
        return [self._vector(text) for text in texts]

    def embed_query(self, text: str) -> List[float]:
        self.query_calls += 1
        return self._vector(text)


class FailingEmbeddings(CountingEmbeddings):
    def embed_documents(self, texts: List[str]) -> List[List[float]]:
        self.document_calls += 1
        raise RuntimeError("embedding quota exceeded")


class StubExporter:
    """Image exporter double: returns the figure JSON as the 'image' bytes."""

    def __init__(self):
        self.calls = 0

    def __call__(self, fig: go.Figure, width: int, height: int) -> bytes:
        self.calls += 1
        return fig.to_json().encode("utf-8")


def make_payload(**overrides: Any) -> Dict[str, Any]:
    """Deep copy of TOTALS_PAYLOAD with top-level keys replaced."""
    payload = copy.deepcopy(TOTALS_PAYLOAD)
    payload.update(overrides)
    return payload


@pytest.fixture
def totals_payload() -> Dict[str, Any]:
    return make_payload()


@pytest.fixture
def totals_json() -> str:
    return json.dumps(TOTALS_PAYLOAD)


@pytest.fixture
def csv_document() -> UploadedDocument:
    return UploadedDocument(media_type="text/csv", content=SAMPLE_CSV, filename="sales.csv")


@pytest.fixture
def embeddings() -> CountingEmbeddings:
    return CountingEmbeddings()


@pytest.fixture
def stub_exporter() -> StubExporter:
    return StubExporter()


@pytest.fixture
def renderer(stub_exporter) -> ChartRenderer:
    return ChartRenderer(exporter=stub_exporter)


@pytest.fixture
def make_dependencies(embeddings, renderer):
    """Factory for a SynthesisDependencies bundle around a scripted chat client."""

    def _make(*responses: Union[str, Exception], **overrides: Any) -> SynthesisDependencies:
        fields: Dict[str, Any] = {
            "chat_client": ScriptedChatClient(list(responses)),
            "embeddings": embeddings,
            "renderer": renderer,
        }
        fields.update(overrides)
        return SynthesisDependencies(**fields)

    return _make
