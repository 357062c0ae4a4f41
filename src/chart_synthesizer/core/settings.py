"""
Environment settings and configuration variables.

This module loads environment variables and defines project-wide constants
for the chart synthesis pipeline.

GEMINI:
- Primary API key: GEMINI_API_KEY (preferred)
- Fallback: GOOGLE_API_KEY (the name langchain-google-genai reads natively)
- Default chat model: gemini-2.5-flash-lite
- Default embedding model: models/gemini-embedding-001
"""

import os
from typing import Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return float(raw)


# Gemini Configuration
GEMINI_API_KEY: Optional[str] = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
CHAT_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash-lite")
EMBEDDING_MODEL: str = os.getenv("GEMINI_EMBEDDING_MODEL", "models/gemini-embedding-001")

# Generation Configuration
# Chart definitions must be literal, so temperature defaults to 0.
TEMPERATURE: float = float(os.getenv("TEMPERATURE", "0.0"))
MAX_OUTPUT_TOKENS: int = int(os.getenv("MAX_OUTPUT_TOKENS", "4096"))
LLM_TIMEOUT: Optional[float] = _optional_float("LLM_TIMEOUT")
LLM_MAX_RETRIES: int = int(os.getenv("LLM_MAX_RETRIES", "0"))

# Retrieval Configuration
# "Include everything, let the model filter": a wide cap and no similarity floor.
RETRIEVAL_K: int = int(os.getenv("RETRIEVAL_K", "100"))
RETRIEVAL_SCORE_THRESHOLD: Optional[float] = _optional_float("RETRIEVAL_SCORE_THRESHOLD")

# Rendering Configuration
CHARTJS_CDN_URL: str = os.getenv("CHARTJS_CDN_URL", "https://cdn.jsdelivr.net/npm/chart.js")
IMAGE_FORMAT: str = os.getenv("CHART_IMAGE_FORMAT", "png")
IMAGE_SCALE: float = float(os.getenv("CHART_IMAGE_SCALE", "1.0"))
FONT_FAMILY: str = os.getenv("CHART_FONT_FAMILY", "Arial, sans-serif")
FONT_SIZE: int = int(os.getenv("CHART_FONT_SIZE", "12"))

# Logging Configuration
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE: Optional[str] = os.getenv("LOG_FILE")

# Valid Image Formats
VALID_IMAGE_FORMATS = ["png", "jpeg", "webp"]


def validate_settings() -> bool:
    """
    Validate that all critical settings are properly configured.

    Returns:
        bool: True if all settings are valid

    Raises:
        ValueError: If a setting is missing or out of range
    """
    if not GEMINI_API_KEY:
        raise ValueError(
            "API Key not found. Please set GEMINI_API_KEY (preferred) or "
            "GOOGLE_API_KEY in environment variables"
        )

    if TEMPERATURE < 0 or TEMPERATURE > 2:
        raise ValueError(f"TEMPERATURE must be between 0 and 2, got: {TEMPERATURE}")

    if MAX_OUTPUT_TOKENS < 1:
        raise ValueError(f"MAX_OUTPUT_TOKENS must be positive, got: {MAX_OUTPUT_TOKENS}")

    if LLM_MAX_RETRIES < 0:
        raise ValueError(f"LLM_MAX_RETRIES must not be negative, got: {LLM_MAX_RETRIES}")

    if RETRIEVAL_K < 1:
        raise ValueError(f"RETRIEVAL_K must be positive, got: {RETRIEVAL_K}")

    if IMAGE_FORMAT not in VALID_IMAGE_FORMATS:
        raise ValueError(
            f"CHART_IMAGE_FORMAT must be one of {VALID_IMAGE_FORMATS}, got: {IMAGE_FORMAT}"
        )

    if IMAGE_SCALE <= 0:
        raise ValueError(f"CHART_IMAGE_SCALE must be positive, got: {IMAGE_SCALE}")

    return True
