"""
Token Tracking Utilities

Resilient extraction of token usage from chat model responses, used for
per-call usage logging.
"""

import logging
from typing import Any, Dict, Mapping

logger = logging.getLogger(__name__)


def _as_int(value: Any) -> int:
    try:
        if value is None:
            return 0
        return int(value)
    except (TypeError, ValueError):
        return 0


def _zero_tokens() -> Dict[str, int]:
    return {
        "input_tokens": 0,
        "output_tokens": 0,
        "total_tokens": 0,
    }


def _normalize_model_name(model_name: str) -> str:
    """Strip the ``models/`` prefix Gemini puts in front of model names."""
    if model_name and model_name.startswith("models/"):
        return model_name.replace("models/", "", 1)
    return model_name


def _normalize_usage_dict(usage: Mapping[str, Any]) -> Dict[str, int]:
    """Normalize the token-count layouts seen in practice to the internal schema.

    Supports:
    - LangChain standard: input_tokens/output_tokens/total_tokens
    - Gemini raw metadata: prompt_token_count/candidates_token_count/total_token_count
    """
    if not usage:
        return _zero_tokens()

    if any(k in usage for k in ("input_tokens", "output_tokens", "total_tokens")):
        tokens = {
            "input_tokens": _as_int(usage.get("input_tokens")),
            "output_tokens": _as_int(usage.get("output_tokens")),
            "total_tokens": _as_int(usage.get("total_tokens")),
        }
    else:
        tokens = {
            "input_tokens": _as_int(usage.get("prompt_token_count")),
            "output_tokens": _as_int(usage.get("candidates_token_count")),
            "total_tokens": _as_int(usage.get("total_token_count")),
        }

    if tokens["total_tokens"] == 0:
        tokens["total_tokens"] = tokens["input_tokens"] + tokens["output_tokens"]
    return tokens


def extract_token_usage(response: Any, llm_instance: Any = None) -> Dict[str, Any]:
    """
    Extract token usage and model name from a LangChain chat response.

    Never raises: returns zeros and "unknown" when nothing can be extracted.

    Args:
        response: Response object (usually an ``AIMessage``)
        llm_instance: Optional chat model, used to read the model name

    Returns:
        Dict with input_tokens, output_tokens, total_tokens, model_name
    """
    model_name = "unknown"

    try:
        response_metadata = getattr(response, "response_metadata", None)
        if llm_instance is not None and getattr(llm_instance, "model", None):
            model_name = _normalize_model_name(str(llm_instance.model))
        elif isinstance(response_metadata, dict):
            raw_name = response_metadata.get("model_name") or response_metadata.get("model")
            if raw_name:
                model_name = _normalize_model_name(str(raw_name))

        usage_metadata = getattr(response, "usage_metadata", None)
        if usage_metadata:
            tokens = _normalize_usage_dict(usage_metadata)
            if tokens["total_tokens"] > 0:
                tokens["model_name"] = model_name
                return tokens

        if isinstance(response_metadata, dict) and isinstance(
            response_metadata.get("usage_metadata"), dict
        ):
            tokens = _normalize_usage_dict(response_metadata["usage_metadata"])
            if tokens["total_tokens"] > 0:
                tokens["model_name"] = model_name
                return tokens

        logger.debug(
            f"[TokenTracker] No token metadata found in response (type={type(response).__name__})"
        )
    except Exception as e:
        # Token tracking must never break a request
        logger.warning(f"[TokenTracker] Failed to extract tokens: {e}")

    result: Dict[str, Any] = _zero_tokens()
    result["model_name"] = model_name
    return result


__all__ = ["extract_token_usage"]
