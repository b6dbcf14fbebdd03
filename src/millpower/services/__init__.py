"""
Optional assistant services (Gemini analysis and speech), wrapped in retry
with exponential backoff. Nothing here is needed to calculate power.
"""

from .retry import (
    RETRYABLE_ERRORS,
    backoff_delay,
    retry_with_backoff,
)

from .assistant import (
    ANALYSIS_FALLBACK_TEXT,
    AssistantError,
    GeminiAssistant,
    build_analysis_query,
    extract_candidate_text,
)

__all__ = [
    "RETRYABLE_ERRORS",
    "backoff_delay",
    "retry_with_backoff",
    "ANALYSIS_FALLBACK_TEXT",
    "AssistantError",
    "GeminiAssistant",
    "build_analysis_query",
    "extract_candidate_text",
]
