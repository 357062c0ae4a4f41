"""
Embedding index construction for uploaded documents.

The index lives in memory for the duration of one request; nothing is cached
or persisted.
"""

from typing import List, Mapping, Optional, Tuple

from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from langchain_core.vectorstores import InMemoryVectorStore

from chart_synthesizer.core.exceptions import UpstreamServiceError
from chart_synthesizer.models.documents import UploadedDocument
from chart_synthesizer.retrieval.loaders import DocumentLoader, resolve_loader
from chart_synthesizer.utils.logger import get_logger

logger = get_logger(__name__)


class EmbeddingIndex:
    """
    Similarity index over document chunks.

    Backed by ``InMemoryVectorStore``: chunk id -> vector, original text and
    metadata, with cosine-similarity lookup.
    """

    def __init__(self, store: InMemoryVectorStore):
        self.store = store

    def __len__(self) -> int:
        return len(self.store.store)

    @property
    def chunk_ids(self) -> List[str]:
        return list(self.store.store.keys())

    def get_text(self, chunk_id: str) -> str:
        return self.store.store[chunk_id]["text"]

    async def search(
        self,
        query: str,
        k: int,
        score_threshold: Optional[float] = None,
    ) -> List[Tuple[Document, float]]:
        """
        Return up to ``k`` chunks most similar to ``query``.

        Args:
            query: Search text (embedded with the index's embedding model)
            k: Maximum number of chunks
            score_threshold: Minimum cosine similarity; None keeps everything

        Returns:
            List of (Document, similarity) pairs, most similar first

        Raises:
            UpstreamServiceError: If embedding the query fails
        """
        try:
            results = await self.store.asimilarity_search_with_score(query, k=k)
        except Exception as e:
            logger.error(f"[EmbeddingIndex] Similarity search failed: {e}")
            raise UpstreamServiceError(
                f"Query embedding failed: {e}", service="embedding"
            ) from e

        if score_threshold is not None:
            results = [(doc, score) for doc, score in results if score >= score_threshold]
        return results


class EmbeddingIndexBuilder:
    """
    Builds an EmbeddingIndex from an uploaded document.

    The media type is resolved against the loader table before any embedding
    call, so unsupported inputs never cost an upstream request.

    Example:
        >>> builder = EmbeddingIndexBuilder(load_embeddings())
        >>> index = await builder.build(UploadedDocument("text/csv", csv_bytes))
        >>> len(index)
        12
    """

    def __init__(
        self,
        embeddings: Embeddings,
        loaders: Optional[Mapping[str, DocumentLoader]] = None,
    ):
        self.embeddings = embeddings
        self.loaders = loaders

    async def build(self, document: UploadedDocument) -> EmbeddingIndex:
        """
        Chunk, embed and index a document.

        Args:
            document: Uploaded document

        Returns:
            EmbeddingIndex over all chunks

        Raises:
            UnsupportedFormatError: If the media type has no loader or the
                content cannot be parsed
            UpstreamServiceError: If the embedding service fails
        """
        loader = resolve_loader(document.media_type, self.loaders)
        chunks = loader(document)

        store = InMemoryVectorStore(embedding=self.embeddings)
        try:
            await store.aadd_documents(chunks)
        except Exception as e:
            logger.error(f"[EmbeddingIndexBuilder] Embedding {len(chunks)} chunk(s) failed: {e}")
            raise UpstreamServiceError(
                f"Embedding computation failed: {e}", service="embedding"
            ) from e

        index = EmbeddingIndex(store)
        logger.info(
            f"[EmbeddingIndexBuilder] Indexed {len(index)} chunk(s) from '{document.source}'"
        )
        return index
