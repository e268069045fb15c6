"""
ChatRequest DTO for vendor-agnostic chat invocations.

Adapters map this normalized request shape to specific wire calls. A request
is built fresh per call and never mutated; unset sampling parameters are
filled with adapter defaults at send time.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .message import ChatMessage


@dataclass(frozen=True)
class ChatRequest:
    """Normalized chat request sent to vendor adapters.

    Attributes:
        messages: Ordered transcript of `ChatMessage` instances.
        model: Target model identifier.
        vendor: Vendor id the request is addressed to.
        temperature: Optional sampling temperature.
        max_tokens: Optional completion token limit.
        top_p: Optional nucleus sampling value.
    """

    messages: Tuple[ChatMessage, ...]
    model: str
    vendor: str
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    top_p: Optional[float] = None

    def __post_init__(self) -> None:
        if not isinstance(self.messages, tuple):
            object.__setattr__(self, "messages", tuple(self.messages))

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the request."""
        return {
            "vendor": self.vendor,
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "top_p": self.top_p,
        }


__all__ = [
    "ChatRequest",
]
