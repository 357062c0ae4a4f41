"""
Output parser for generated chart definitions.

Model output is untrusted: this module extracts the JSON payload from the
raw completion text and validates every field against the chart schema.
Validation is all-or-nothing; any violation raises SchemaValidationError.
"""

import json
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from langchain_core.utils.json import parse_json_markdown
from pydantic import BaseModel, ValidationError

from chart_synthesizer.core.exceptions import SchemaValidationError
from chart_synthesizer.models.chart_spec import ChartSpec
from chart_synthesizer.utils.logger import get_logger

logger = get_logger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def _format_validation_errors(error: ValidationError) -> List[str]:
    """Flatten pydantic errors into ``path: message`` strings."""
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "<root>"
        messages.append(f"{location}: {item.get('msg', 'invalid value')}")
    return messages


class ChartSpecOutputParser(Generic[SchemaT]):
    """
    Parses raw model output into a validated schema instance.

    Accepts a bare JSON object, a JSON object inside a markdown code fence,
    or a JSON object surrounded by prose.

    Example:
        >>> parser = ChartSpecOutputParser()
        >>> spec = parser.parse('```json\\n{"chartType": "bar", ...}\\n```')
    """

    def __init__(self, schema: Type[SchemaT] = ChartSpec):  # type: ignore[assignment]
        self.schema = schema

    def parse(self, text: Optional[str]) -> SchemaT:
        """
        Parse and validate model output.

        Args:
            text: Raw completion text

        Returns:
            Validated schema instance

        Raises:
            SchemaValidationError: If the payload is absent, malformed or invalid
        """
        if text is None or not text.strip():
            logger.error("[OutputParser] Empty model output")
            raise SchemaValidationError("Model output is empty", raw_output=text)

        payload = self._extract_payload(text)

        try:
            parsed = self.schema.model_validate(payload)
        except ValidationError as e:
            errors = _format_validation_errors(e)
            logger.error(
                f"[OutputParser] {self.schema.__name__} validation failed with "
                f"{len(errors)} error(s): {errors}"
            )
            raise SchemaValidationError(
                f"Model output does not match the {self.schema.__name__} schema",
                errors=errors,
                raw_output=text,
            ) from e

        logger.info(f"[OutputParser] Parsed valid {self.schema.__name__}")
        return parsed

    def _extract_payload(self, text: str) -> Dict[str, Any]:
        """Locate and decode the JSON object in the completion text."""
        try:
            payload = parse_json_markdown(text, parser=json.loads)
        except (json.JSONDecodeError, ValueError):
            payload = self._extract_embedded_object(text)

        if not isinstance(payload, dict):
            logger.error(
                f"[OutputParser] Expected a JSON object, got {type(payload).__name__}"
            )
            raise SchemaValidationError(
                f"Model output must be a JSON object, got {type(payload).__name__}",
                raw_output=text,
            )
        return payload

    def _extract_embedded_object(self, text: str) -> Any:
        """Fallback for JSON surrounded by prose without a code fence."""
        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end <= start:
            logger.error("[OutputParser] No JSON payload found in model output")
            raise SchemaValidationError(
                "No JSON payload found in model output", raw_output=text
            )

        try:
            return json.loads(text[start : end + 1])
        except json.JSONDecodeError as e:
            logger.error(f"[OutputParser] Malformed JSON payload: {e}")
            raise SchemaValidationError(
                "Malformed JSON payload in model output",
                errors=[str(e)],
                raw_output=text,
            ) from e
