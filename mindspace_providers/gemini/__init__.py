"""Gemini adapter package."""

from .client import GeminiAdapter
from .translation import first_candidate_text, from_gemini_response, map_finish_reason, to_gemini_contents

__all__ = [
    "GeminiAdapter",
    "first_candidate_text",
    "from_gemini_response",
    "map_finish_reason",
    "to_gemini_contents",
]
