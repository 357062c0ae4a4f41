"""
Collaborators shared by the synthesis workflow nodes.
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional

from langchain_core.embeddings import Embeddings

from chart_synthesizer.core import settings
from chart_synthesizer.llm.chat_client import ChatModelClient
from chart_synthesizer.llm.llm_loader import load_embeddings, load_llm
from chart_synthesizer.parsers.output_parser import ChartSpecOutputParser
from chart_synthesizer.prompts.composer import PromptComposer
from chart_synthesizer.rendering.renderer import ChartRenderer
from chart_synthesizer.rendering.snippet import SnippetGenerator
from chart_synthesizer.retrieval.engine import RetrievalEngine
from chart_synthesizer.retrieval.index_builder import EmbeddingIndexBuilder
from chart_synthesizer.retrieval.loaders import DEFAULT_LOADERS, DocumentLoader


@dataclass
class SynthesisDependencies:
    """
    Explicit bundle of everything a synthesis run talks to.

    Only the upstream-facing pieces (chat client, embeddings) are required;
    the rest default to the standard implementations configured from
    settings. Tests substitute any of them.

    Example:
        >>> deps = SynthesisDependencies.from_settings()
        >>> deps.retrieval_k
        100
    """

    chat_client: ChatModelClient
    embeddings: Embeddings
    renderer: ChartRenderer = field(default_factory=ChartRenderer)
    snippet_generator: SnippetGenerator = field(default_factory=SnippetGenerator)
    composer: PromptComposer = field(default_factory=PromptComposer)
    parser: ChartSpecOutputParser = field(default_factory=ChartSpecOutputParser)
    loaders: Mapping[str, DocumentLoader] = field(default_factory=lambda: dict(DEFAULT_LOADERS))
    retrieval_k: int = field(default_factory=lambda: settings.RETRIEVAL_K)
    score_threshold: Optional[float] = field(
        default_factory=lambda: settings.RETRIEVAL_SCORE_THRESHOLD
    )

    @classmethod
    def from_settings(cls) -> "SynthesisDependencies":
        """
        Build the production bundle (Gemini chat + Gemini embeddings).

        Raises:
            ValueError: If settings are invalid (e.g. missing API key)
        """
        settings.validate_settings()
        return cls(chat_client=ChatModelClient(load_llm()), embeddings=load_embeddings())

    def index_builder(self) -> EmbeddingIndexBuilder:
        return EmbeddingIndexBuilder(self.embeddings, loaders=self.loaders)

    def retrieval_engine(self) -> RetrievalEngine:
        return RetrievalEngine(
            self.chat_client,
            self.composer,
            k=self.retrieval_k,
            score_threshold=self.score_threshold,
        )
