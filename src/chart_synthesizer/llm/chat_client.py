"""
Stateless chat-completion client.

Issues exactly one completion call per ``complete`` invocation. Upstream
failures (network, auth, quota) surface as UpstreamServiceError and are never
retried here.
"""

import time
from typing import Any

from langchain_core.language_models import BaseChatModel

from chart_synthesizer.core.exceptions import UpstreamServiceError
from chart_synthesizer.utils.logger import get_logger
from chart_synthesizer.utils.token_tracker import extract_token_usage

logger = get_logger(__name__)


def _message_text(response: Any) -> str:
    """Return the text of a chat response, joining multi-part content."""
    content = getattr(response, "content", response)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return str(content)


class ChatModelClient:
    """
    Thin wrapper around a LangChain chat model.

    Example:
        >>> client = ChatModelClient(load_llm())
        >>> text = await client.complete("Answer the users question ...")
    """

    service_name = "chat"

    def __init__(self, llm: BaseChatModel):
        self.llm = llm

    async def complete(self, prompt: str) -> str:
        """
        Run a single completion.

        Args:
            prompt: Fully composed prompt

        Returns:
            Raw response text

        Raises:
            UpstreamServiceError: If the model call fails for any reason
        """
        start_time = time.perf_counter()
        try:
            response = await self.llm.ainvoke(prompt)
        except Exception as e:
            logger.error(f"[ChatModelClient] Completion call failed: {e}")
            raise UpstreamServiceError(
                f"Chat completion failed: {e}", service=self.service_name
            ) from e

        elapsed = time.perf_counter() - start_time
        tokens = extract_token_usage(response, self.llm)
        logger.info(
            f"[ChatModelClient] Completion received in {elapsed:.2f}s - "
            f"input={tokens['input_tokens']}, "
            f"output={tokens['output_tokens']}, "
            f"total={tokens['total_tokens']}, "
            f"model={tokens.get('model_name', 'unknown')}"
        )

        return _message_text(response)
