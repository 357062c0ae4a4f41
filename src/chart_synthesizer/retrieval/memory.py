"""
Conversation memory for a single retrieval session.
"""

from typing import List, Tuple

from langchain_core.chat_history import InMemoryChatMessageHistory
from langchain_core.messages import AIMessage, HumanMessage


class ConversationMemory:
    """Ordered (question, answer) turns; lives only as long as one request."""

    def __init__(self):
        self.history = InMemoryChatMessageHistory()

    def __len__(self) -> int:
        return len(self.turns)

    def add_turn(self, question: str, answer: str) -> None:
        self.history.add_messages([HumanMessage(content=question), AIMessage(content=answer)])

    @property
    def turns(self) -> List[Tuple[str, str]]:
        messages = self.history.messages
        return [
            (str(messages[i].content), str(messages[i + 1].content))
            for i in range(0, len(messages) - 1, 2)
        ]

    def as_text(self) -> str:
        """Render the history as ``Human:`` / ``Assistant:`` lines."""
        lines = []
        for question, answer in self.turns:
            lines.append(f"Human: {question}")
            lines.append(f"Assistant: {answer}")
        return "\n".join(lines)

    def clear(self) -> None:
        self.history.clear()
