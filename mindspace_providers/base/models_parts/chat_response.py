"""
ChatResponse DTO representing normalized vendor responses.

``finish_reason`` is normalized to :class:`FinishReason`; ``usage`` is only
present when the vendor reported it.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .token_usage import TokenUsage


class FinishReason(str, Enum):
    """Why the vendor stopped generating."""

    STOP = "stop"
    LENGTH = "length"
    TOOL_CALLS = "tool_calls"
    CONTENT_FILTER = "content_filter"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "FinishReason":
        """Map an OpenAI-style finish reason string; unrecognized values are ``UNKNOWN``."""
        if not value:
            return cls.UNKNOWN
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class ChatResponse:
    """Vendor-agnostic response from a chat invocation.

    Attributes:
        content: Completion text (may be empty).
        finish_reason: Normalized stop reason.
        vendor: Vendor id that produced the response.
        model: Model identifier reported or requested.
        usage: Optional token accounting.
    """

    content: str
    finish_reason: FinishReason
    vendor: str
    model: str
    usage: Optional[TokenUsage] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""
        return {
            "content": self.content,
            "finish_reason": self.finish_reason.value,
            "vendor": self.vendor,
            "model": self.model,
            "usage": self.usage.to_dict() if self.usage else None,
        }


__all__ = [
    "ChatResponse",
    "FinishReason",
]
