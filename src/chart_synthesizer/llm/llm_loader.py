"""
LLM and embedding loaders.

This module provides functions to initialize the Gemini chat model and
embedding model used by the synthesis pipeline.

GEMINI:
- Chat: ChatGoogleGenerativeAI, temperature=0 for literal chart definitions
- Embeddings: GoogleGenerativeAIEmbeddings
- max_retries defaults to 0: retry policy belongs to the caller
"""

import logging
from typing import Optional

from langchain_google_genai import ChatGoogleGenerativeAI, GoogleGenerativeAIEmbeddings

from chart_synthesizer.core.config import get_chat_config, get_embedding_config

logger = logging.getLogger(__name__)


def load_llm(
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    max_output_tokens: Optional[int] = None,
) -> ChatGoogleGenerativeAI:
    """
    Initialize and return a configured ChatGoogleGenerativeAI instance.

    Args:
        model: Gemini model name. Defaults to settings.CHAT_MODEL.
        temperature: Temperature for generation (0.0-2.0). Defaults to 0.0.
        max_output_tokens: Maximum tokens in response. Defaults to settings.

    Returns:
        ChatGoogleGenerativeAI: Configured LLM instance.

    Example:
        >>> llm = load_llm()
        >>> response = llm.invoke("Describe a bar chart of A=1, B=2")
    """
    overrides = {}
    if model:
        overrides["model"] = model
    if temperature is not None:
        overrides["temperature"] = temperature
    if max_output_tokens:
        overrides["max_output_tokens"] = max_output_tokens

    config = get_chat_config(**overrides)
    llm = ChatGoogleGenerativeAI(**config.to_gemini_kwargs())

    logger.info(
        f"Gemini LLM initialized - "
        f"Model: {config.model}, "
        f"Timeout: {config.timeout}, "
        f"Max Retries: {config.max_retries}, "
        f"Max Output Tokens: {config.max_output_tokens}, "
        f"Temperature: {config.temperature}"
    )

    return llm


def load_embeddings(model: Optional[str] = None) -> GoogleGenerativeAIEmbeddings:
    """
    Initialize and return a configured GoogleGenerativeAIEmbeddings instance.

    Args:
        model: Embedding model name. Defaults to settings.EMBEDDING_MODEL.

    Returns:
        GoogleGenerativeAIEmbeddings: Configured embedding client.
    """
    config = get_embedding_config(**({"model": model} if model else {}))
    embeddings = GoogleGenerativeAIEmbeddings(**config.to_gemini_kwargs())

    logger.info(f"Gemini embeddings initialized - Model: {config.model}")
    return embeddings
