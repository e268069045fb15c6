"""
ChatReply DTO returned by the chat orchestrator.

Combines the reply text (vendor or local fallback) with the crisis
assessment and emotion tags computed from the user's newest message.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class ChatReply:
    """Final answer handed back to the caller.

    Attributes:
        content: Reply text.
        needs_escalation: True when the caller should surface crisis resources.
        is_crisis: True when crisis phrases were detected in the new message.
        emotion_tags: Emotion labels detected in the new message.
        vendor: Vendor id that answered, ``None`` for local fallback replies.
        model: Model identifier that answered, ``None`` for fallback replies.
        fallback_used: True when the local responder produced ``content``.
    """

    content: str
    needs_escalation: bool
    is_crisis: bool
    emotion_tags: Tuple[str, ...] = field(default_factory=tuple)
    vendor: Optional[str] = None
    model: Optional[str] = None
    fallback_used: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "needs_escalation": self.needs_escalation,
            "is_crisis": self.is_crisis,
            "emotion_tags": list(self.emotion_tags),
            "vendor": self.vendor,
            "model": self.model,
            "fallback_used": self.fallback_used,
        }


__all__ = ["ChatReply"]
