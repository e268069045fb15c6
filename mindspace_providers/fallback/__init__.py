"""Offline crisis detection and canned supportive replies."""

from .responder import (
    NO_CRISIS,
    PANIC,
    SELF_HARM,
    CrisisAssessment,
    LocalFallbackResponder,
    detect_crisis,
    detect_language,
    extract_emotion_tags,
    match_reply_group,
)

__all__ = [
    "NO_CRISIS",
    "PANIC",
    "SELF_HARM",
    "CrisisAssessment",
    "LocalFallbackResponder",
    "detect_crisis",
    "detect_language",
    "extract_emotion_tags",
    "match_reply_group",
]
