"""
Retrieval module - document loaders, embedding index and grounded answering.
"""

from chart_synthesizer.retrieval.engine import RetrievalEngine
from chart_synthesizer.retrieval.index_builder import EmbeddingIndex, EmbeddingIndexBuilder
from chart_synthesizer.retrieval.loaders import DEFAULT_LOADERS, DocumentLoader, resolve_loader
from chart_synthesizer.retrieval.memory import ConversationMemory

__all__ = [
    "ConversationMemory",
    "DEFAULT_LOADERS",
    "DocumentLoader",
    "EmbeddingIndex",
    "EmbeddingIndexBuilder",
    "RetrievalEngine",
    "resolve_loader",
]
