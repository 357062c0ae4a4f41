"""
Centralized Gemini configuration.

Chat and embedding clients are built from these dataclasses so that every
component shares the same credential and defaults, while still allowing
per-call overrides (e.g. a different model for experiments).
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from chart_synthesizer.core import settings


@dataclass(frozen=True)
class LLMConfig:
    """Configuration for the chat-completion model."""

    model: str
    temperature: float
    max_output_tokens: int
    timeout: Optional[float]
    max_retries: int
    api_key: Optional[str]

    def to_gemini_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments accepted by ``ChatGoogleGenerativeAI``."""
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "temperature": self.temperature,
            "max_output_tokens": self.max_output_tokens,
            "max_retries": self.max_retries,
        }
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        if self.api_key:
            kwargs["google_api_key"] = self.api_key
        return kwargs


@dataclass(frozen=True)
class EmbeddingConfig:
    """Configuration for the embedding model."""

    model: str
    api_key: Optional[str]

    def to_gemini_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments accepted by ``GoogleGenerativeAIEmbeddings``."""
        kwargs: Dict[str, Any] = {"model": self.model}
        if self.api_key:
            kwargs["google_api_key"] = self.api_key
        return kwargs


def get_chat_config(**overrides: Any) -> LLMConfig:
    """
    Build the chat model configuration from settings.

    Args:
        **overrides: Field values replacing the settings defaults
            (model, temperature, max_output_tokens, timeout, max_retries, api_key)

    Returns:
        LLMConfig instance
    """
    config = LLMConfig(
        model=settings.CHAT_MODEL,
        temperature=settings.TEMPERATURE,
        max_output_tokens=settings.MAX_OUTPUT_TOKENS,
        timeout=settings.LLM_TIMEOUT,
        max_retries=settings.LLM_MAX_RETRIES,
        api_key=settings.GEMINI_API_KEY,
    )
    return replace(config, **overrides) if overrides else config


def get_embedding_config(**overrides: Any) -> EmbeddingConfig:
    """Build the embedding model configuration from settings."""
    config = EmbeddingConfig(
        model=settings.EMBEDDING_MODEL,
        api_key=settings.GEMINI_API_KEY,
    )
    return replace(config, **overrides) if overrides else config
