"""
Shared utilities (logging, token usage tracking).
"""

from chart_synthesizer.utils.logger import get_logger, setup_logging
from chart_synthesizer.utils.token_tracker import extract_token_usage

__all__ = ["get_logger", "setup_logging", "extract_token_usage"]
