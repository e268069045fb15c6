"""Request/response translation for the Gemini ``generateContent`` API.

Gemini has no system role and calls the assistant ``model``; a conversation is
a flat list of ``{"role": "user"|"model", "parts": [{"text": ...}]}``. These
functions are pure so they can be tested without any transport.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ..base.models import ChatMessage, ChatResponse, FinishReason, TokenUsage

_FINISH_REASONS: Dict[str, FinishReason] = {
    "STOP": FinishReason.STOP,
    "MAX_TOKENS": FinishReason.LENGTH,
    "SAFETY": FinishReason.CONTENT_FILTER,
}


def to_gemini_contents(messages: Sequence[ChatMessage]) -> List[Dict[str, Any]]:
    """Translate a transcript into Gemini ``contents``.

    System text is held back and prefixed (separated by a blank line) to the
    next user turn. System text with no user turn after it becomes a user
    turn of its own so the instruction is not lost.
    """
    contents: List[Dict[str, Any]] = []
    pending_system: List[str] = []
    for message in messages:
        if message.role == "system":
            pending_system.append(message.content)
            continue
        role = "model" if message.role == "assistant" else "user"
        text = message.content
        if role == "user" and pending_system:
            text = "\n\n".join(pending_system + [text])
            pending_system = []
        contents.append({"role": role, "parts": [{"text": text}]})
    if pending_system:
        contents.append({"role": "user", "parts": [{"text": "\n\n".join(pending_system)}]})
    return contents


def first_candidate_text(data: Dict[str, Any]) -> str:
    """Text of the first part of the first candidate, or ``""``."""
    candidates = data.get("candidates") or []
    if not candidates or not isinstance(candidates[0], dict):
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    if not parts or not isinstance(parts[0], dict):
        return ""
    text = parts[0].get("text")
    return text if isinstance(text, str) else ""


def map_finish_reason(value: Optional[str]) -> FinishReason:
    return _FINISH_REASONS.get(value or "", FinishReason.UNKNOWN)


def from_gemini_response(data: Dict[str, Any], model: str, vendor: str = "gemini") -> ChatResponse:
    """Normalize a ``generateContent`` body; usage is copied only when present."""
    candidates = data.get("candidates") or []
    candidate = candidates[0] if candidates and isinstance(candidates[0], dict) else {}
    usage_meta = data.get("usageMetadata")
    usage = None
    if isinstance(usage_meta, dict):
        usage = TokenUsage(
            prompt_tokens=int(usage_meta.get("promptTokenCount", 0) or 0),
            completion_tokens=int(usage_meta.get("candidatesTokenCount", 0) or 0),
            total_tokens=int(usage_meta.get("totalTokenCount", 0) or 0),
        )
    return ChatResponse(
        content=first_candidate_text(data),
        finish_reason=map_finish_reason(candidate.get("finishReason")),
        vendor=vendor,
        model=model,
        usage=usage,
    )


__all__ = [
    "to_gemini_contents",
    "first_candidate_text",
    "map_finish_reason",
    "from_gemini_response",
]
