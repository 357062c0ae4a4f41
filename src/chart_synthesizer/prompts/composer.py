"""
Prompt composition for chart generation.

Merges the user question with machine-readable format instructions derived
from the chart schema, so the generating model emits JSON the output parser
can validate.
"""

from typing import Type

from langchain_core.output_parsers import PydanticOutputParser
from langchain_core.prompts import PromptTemplate
from pydantic import BaseModel

from chart_synthesizer.models.chart_spec import ChartSpec
from chart_synthesizer.utils.logger import get_logger

logger = get_logger(__name__)

CHART_PROMPT_TEMPLATE = (
    "Answer the users question as best as possible.\n"
    "{format_instructions}\n"
    "{question}"
)


class PromptComposer:
    """
    Builds the generation prompt for a user question.

    The schema is injected rather than hard-coded so that a new chart shape
    only needs a new pydantic model.

    Example:
        >>> composer = PromptComposer()
        >>> prompt = composer.compose("bar chart of A=1, B=2")
        >>> "chartType" in prompt
        True
    """

    def __init__(self, schema: Type[BaseModel] = ChartSpec):
        self.schema = schema
        self._format_instructions = PydanticOutputParser(
            pydantic_object=schema
        ).get_format_instructions()
        self.template = PromptTemplate(
            template=CHART_PROMPT_TEMPLATE,
            input_variables=["question"],
            partial_variables={"format_instructions": self._format_instructions},
        )

    @property
    def format_instructions(self) -> str:
        """Textual description of the schema shape, field meanings and defaults."""
        return self._format_instructions

    def compose(self, question: str) -> str:
        """
        Compose the full prompt for a question.

        Args:
            question: Natural language chart request

        Returns:
            Prompt string embedding the format instructions and the question
        """
        prompt = self.template.format(question=question)
        logger.debug(
            f"[PromptComposer] Composed prompt for schema {self.schema.__name__} "
            f"({len(prompt)} chars)"
        )
        return prompt
