"""
LLM layer - Gemini loaders and the chat-completion client.
"""

from chart_synthesizer.llm.chat_client import ChatModelClient
from chart_synthesizer.llm.llm_loader import load_embeddings, load_llm

__all__ = ["ChatModelClient", "load_embeddings", "load_llm"]
