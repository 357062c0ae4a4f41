"""
Retrieval-augmented answering over an uploaded document.

Retrieval is deliberately wide (cap of 100 chunks, no similarity floor by
default): the document rows are handed to the model, which decides what
belongs in the chart. Both knobs are settings, not constants.
"""

from typing import Optional

from langchain_core.prompts import PromptTemplate

from chart_synthesizer.core import settings
from chart_synthesizer.llm.chat_client import ChatModelClient
from chart_synthesizer.prompts.composer import PromptComposer
from chart_synthesizer.retrieval.index_builder import EmbeddingIndex
from chart_synthesizer.retrieval.memory import ConversationMemory
from chart_synthesizer.utils.logger import get_logger

logger = get_logger(__name__)

QA_PROMPT_TEMPLATE = (
    "Use the following pieces of context to answer the question at the end. "
    "If you don't know the answer, just say that you don't know, "
    "don't try to make up an answer.\n\n"
    "{context}\n\n"
    "{chat_history}"
    "Question: {question}\n"
    "Helpful Answer:"
)


class RetrievalEngine:
    """
    Answers a chart request using chunks retrieved from an EmbeddingIndex.

    The question sent to the model is composed with the same format
    instructions as the no-document path, so the answer goes through the
    same output parser.

    Example:
        >>> engine = RetrievalEngine(chat_client, PromptComposer())
        >>> raw_text = await engine.answer("line chart of sales per month", index)
    """

    def __init__(
        self,
        chat_client: ChatModelClient,
        composer: PromptComposer,
        k: Optional[int] = None,
        score_threshold: Optional[float] = None,
    ):
        self.chat_client = chat_client
        self.composer = composer
        self.k = k if k is not None else settings.RETRIEVAL_K
        self.score_threshold = (
            score_threshold if score_threshold is not None else settings.RETRIEVAL_SCORE_THRESHOLD
        )
        self.qa_prompt = PromptTemplate.from_template(QA_PROMPT_TEMPLATE)

    async def answer(
        self,
        question: str,
        index: EmbeddingIndex,
        memory: Optional[ConversationMemory] = None,
    ) -> str:
        """
        Retrieve context and run one grounded completion.

        Args:
            question: User question
            index: Index built from the uploaded document
            memory: Conversation memory; a fresh one is used when omitted

        Returns:
            Raw model text, destined for the output parser

        Raises:
            UpstreamServiceError: If retrieval or completion fails
        """
        memory = memory if memory is not None else ConversationMemory()

        results = await index.search(question, k=self.k, score_threshold=self.score_threshold)
        context = "\n\n".join(doc.page_content for doc, _ in results)
        logger.info(
            f"[RetrievalEngine] Retrieved {len(results)}/{len(index)} chunk(s) "
            f"(k={self.k}, score_threshold={self.score_threshold})"
        )

        chat_history = memory.as_text()
        prompt = self.qa_prompt.format(
            context=context,
            chat_history=f"Chat History:\n{chat_history}\n\n" if chat_history else "",
            question=self.composer.compose(question),
        )

        answer = await self.chat_client.complete(prompt)
        memory.add_turn(question, answer)
        return answer
