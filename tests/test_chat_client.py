"""
Chat client and token usage tests.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

import pytest
from langchain_core.language_models import FakeListChatModel
from langchain_core.messages import AIMessage

from chart_synthesizer.core.exceptions import UpstreamServiceError
from chart_synthesizer.llm.chat_client import ChatModelClient, _message_text
from chart_synthesizer.utils.token_tracker import extract_token_usage


class TestChatModelClient:
    @pytest.mark.asyncio
    async def test_complete_returns_text(self):
        client = ChatModelClient(FakeListChatModel(responses=['{"chartType": "bar"}']))

        assert await client.complete("prompt") == '{"chartType": "bar"}'

    @pytest.mark.asyncio
    async def test_one_call_per_completion(self):
        llm = Mock()
        llm.ainvoke = AsyncMock(return_value=AIMessage(content="ok"))
        client = ChatModelClient(llm)

        await client.complete("first")
        await client.complete("second")

        assert llm.ainvoke.await_count == 2
        llm.ainvoke.assert_awaited_with("second")

    @pytest.mark.asyncio
    async def test_failure_is_upstream_error_without_retry(self):
        llm = Mock()
        llm.ainvoke = AsyncMock(side_effect=RuntimeError("429 quota exceeded"))
        client = ChatModelClient(llm)

        with pytest.raises(UpstreamServiceError) as exc_info:
            await client.complete("prompt")

        assert exc_info.value.service == "chat"
        assert "429 quota exceeded" in str(exc_info.value)
        assert llm.ainvoke.await_count == 1

    def test_multipart_content_is_joined(self):
        message = AIMessage(content=[{"type": "text", "text": '{"a": '}, "1}"])
        assert _message_text(message) == '{"a": 1}'


class TestExtractTokenUsage:
    def test_langchain_usage_metadata(self):
        message = AIMessage(
            content="x",
            usage_metadata={"input_tokens": 120, "output_tokens": 30, "total_tokens": 150},
        )

        tokens = extract_token_usage(message, SimpleNamespace(model="models/gemini-2.5-flash-lite"))

        assert tokens == {
            "input_tokens": 120,
            "output_tokens": 30,
            "total_tokens": 150,
            "model_name": "gemini-2.5-flash-lite",
        }

    def test_gemini_response_metadata(self):
        message = AIMessage(
            content="x",
            response_metadata={
                "model_name": "gemini-2.5-flash-lite",
                "usage_metadata": {"prompt_token_count": 10, "candidates_token_count": 5},
            },
        )

        tokens = extract_token_usage(message)

        assert tokens["input_tokens"] == 10
        assert tokens["output_tokens"] == 5
        assert tokens["total_tokens"] == 15
        assert tokens["model_name"] == "gemini-2.5-flash-lite"

    def test_unknown_response_never_raises(self):
        tokens = extract_token_usage(object())

        assert tokens == {
            "input_tokens": 0,
            "output_tokens": 0,
            "total_tokens": 0,
            "model_name": "unknown",
        }
