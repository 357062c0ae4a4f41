"""
End-to-end pipeline tests over the synthesis workflow with test doubles.
"""

import json
from unittest.mock import AsyncMock, Mock, patch

import pytest
from pydantic import ValidationError

from chart_synthesizer import synthesize
from chart_synthesizer.core.exceptions import (
    SchemaValidationError,
    UnsupportedFormatError,
    UpstreamServiceError,
)
from chart_synthesizer.graph.dependencies import SynthesisDependencies
from chart_synthesizer.graph.state import initialize_state
from chart_synthesizer.graph.workflow import create_synthesis_workflow, get_workflow_structure
from chart_synthesizer.llm.chat_client import ChatModelClient
from chart_synthesizer.models.documents import UploadedDocument
from chart_synthesizer.rendering.renderer import ChartRenderer


class TestDirectPath:
    """Requests without a document"""

    @pytest.mark.asyncio
    async def test_totals_bar_chart(self, make_dependencies, totals_json):
        deps = make_dependencies(totals_json)

        result = await synthesize("bar chart of A=1, B=2, C=3 titled Totals", dependencies=deps)

        spec = result.chart_spec
        assert spec.chartType == "bar"
        assert spec.data.labels == ["A", "B", "C"]
        assert spec.data.datasets[0].data == [1, 2, 3]
        assert spec.title_text == "Totals"
        assert result.image_data_url.startswith("data:image/png;base64,")
        assert "new Chart(ctx" in result.embeddable_html
        assert '"Totals"' in result.embeddable_html

    @pytest.mark.asyncio
    async def test_prompt_carries_question_and_instructions(self, make_dependencies, totals_json):
        deps = make_dependencies(totals_json)

        await synthesize("bar chart of A=1, B=2, C=3 titled Totals", dependencies=deps)

        assert deps.chat_client.call_count == 1
        prompt = deps.chat_client.prompts[0]
        assert prompt.endswith("bar chart of A=1, B=2, C=3 titled Totals")
        assert deps.composer.format_instructions in prompt

    @pytest.mark.asyncio
    async def test_no_document_skips_retrieval(self, make_dependencies, embeddings, totals_json):
        deps = make_dependencies(totals_json)

        with patch.object(SynthesisDependencies, "index_builder") as index_builder, patch.object(
            SynthesisDependencies, "retrieval_engine"
        ) as retrieval_engine:
            await synthesize("bar chart of A=1, B=2, C=3", dependencies=deps)

        index_builder.assert_not_called()
        retrieval_engine.assert_not_called()
        assert embeddings.total_calls == 0

    @pytest.mark.asyncio
    async def test_missing_chart_type_never_reaches_renderer(
        self, make_dependencies, totals_payload
    ):
        del totals_payload["chartType"]
        renderer = Mock(spec=ChartRenderer)
        renderer.render = AsyncMock(return_value="data:image/png;base64,")
        deps = make_dependencies(json.dumps(totals_payload), renderer=renderer)

        with pytest.raises(SchemaValidationError) as exc_info:
            await synthesize("bar chart of A=1, B=2", dependencies=deps)

        assert any(error.startswith("chartType:") for error in exc_info.value.errors)
        renderer.render.assert_not_called()

    @pytest.mark.asyncio
    async def test_chat_failure_propagates(self, make_dependencies):
        llm = Mock()
        llm.ainvoke = AsyncMock(side_effect=ConnectionError("connection reset"))
        deps = make_dependencies(chat_client=ChatModelClient(llm))

        with pytest.raises(UpstreamServiceError) as exc_info:
            await synthesize("bar chart of A=1", dependencies=deps)

        assert exc_info.value.service == "chat"

    @pytest.mark.asyncio
    async def test_empty_question_rejected(self, make_dependencies, totals_json):
        deps = make_dependencies(totals_json)

        with pytest.raises(ValidationError):
            await synthesize("   ", dependencies=deps)

        assert deps.chat_client.call_count == 0


class TestDocumentPath:
    """Requests grounded in an uploaded document"""

    @pytest.mark.asyncio
    async def test_csv_document(self, make_dependencies, embeddings, csv_document, totals_json):
        deps = make_dependencies(totals_json)

        result = await synthesize(
            "revenue per month as a bar chart", csv_document, dependencies=deps
        )

        assert result.chart_spec.chartType == "bar"
        assert embeddings.document_calls == 1
        assert embeddings.query_calls == 1
        assert deps.chat_client.call_count == 1
        prompt = deps.chat_client.prompts[0]
        assert "month: Jan\nrevenue: 100" in prompt
        assert "Answer the users question as best as possible." in prompt

    @pytest.mark.asyncio
    async def test_pdf_is_rejected_without_upstream_calls(
        self, make_dependencies, embeddings, totals_json
    ):
        deps = make_dependencies(totals_json)
        document = UploadedDocument("application/pdf", b"%PDF-1.4 ...", filename="report.pdf")

        with pytest.raises(UnsupportedFormatError) as exc_info:
            await synthesize("chart of revenue", document, dependencies=deps)

        assert exc_info.value.media_type == "application/pdf"
        assert deps.chat_client.call_count == 0
        assert embeddings.total_calls == 0

    @pytest.mark.asyncio
    async def test_unparseable_csv_is_unsupported(self, make_dependencies, embeddings, totals_json):
        deps = make_dependencies(totals_json)
        document = UploadedDocument("text/csv", b"")

        with pytest.raises(UnsupportedFormatError):
            await synthesize("chart of revenue", document, dependencies=deps)

        assert deps.chat_client.call_count == 0
        assert embeddings.total_calls == 0

    @pytest.mark.asyncio
    async def test_custom_loader_table(self, make_dependencies, embeddings, csv_document, totals_json):
        deps = make_dependencies(totals_json, loaders={})

        with pytest.raises(UnsupportedFormatError):
            await synthesize("chart of revenue", csv_document, dependencies=deps)

        assert embeddings.total_calls == 0


class TestSynthesisWorkflow:
    @pytest.mark.asyncio
    async def test_final_state_of_direct_path(self, make_dependencies, totals_json):
        workflow = create_synthesis_workflow(make_dependencies(totals_json))

        final_state = await workflow.ainvoke(initialize_state("bar chart of A=1, B=2, C=3"))

        assert final_state["status"] == "success"
        assert final_state["raw_output"] == totals_json
        assert final_state["chart_config"]["type"] == "bar"
        assert "index" not in final_state

    @pytest.mark.asyncio
    async def test_final_state_of_document_path(self, make_dependencies, csv_document, totals_json):
        workflow = create_synthesis_workflow(make_dependencies(totals_json))

        final_state = await workflow.ainvoke(initialize_state("revenue", csv_document))

        assert final_state["status"] == "success"
        assert len(final_state["index"]) == 3
        assert "prompt" not in final_state

    def test_workflow_structure(self):
        structure = get_workflow_structure()

        assert structure["entry"]["routes"] == ["compose_prompt", "build_index", "reject_document"]
        assert {"from": "parse_output", "to": "render_chart"} in structure["edges"]


class TestResultSerialization:
    @pytest.mark.asyncio
    async def test_to_dict_keys(self, make_dependencies, totals_json):
        result = await synthesize("totals", dependencies=make_dependencies(totals_json))

        payload = result.to_dict()

        assert set(payload) == {"imageDataUrl", "embeddableHtml", "chartSpec"}
        assert payload["chartSpec"]["chartType"] == "bar"
        json.dumps(payload)
