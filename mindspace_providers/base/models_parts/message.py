"""
Message DTO used across vendors.

Defines the `ChatMessage` dataclass and the `Role` literal representing the
sender role. Messages are immutable; transcript order is preserved by every
adapter.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal


# Message roles used across vendors.
Role = Literal["system", "user", "assistant"]

ROLES = ("system", "user", "assistant")


@dataclass(frozen=True)
class ChatMessage:
    """A single turn in a conversation transcript.

    Attributes:
        role: The role of the message author (``"system"``, ``"user"`` or
            ``"assistant"``).
        content: Plain text of the turn.
    """

    role: Role
    content: str

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire shape shared by OpenAI-compatible vendors."""
        return {"role": self.role, "content": self.content}

    @classmethod
    def system(cls, content: str) -> "ChatMessage":
        return cls("system", content)

    @classmethod
    def user(cls, content: str) -> "ChatMessage":
        return cls("user", content)

    @classmethod
    def assistant(cls, content: str) -> "ChatMessage":
        return cls("assistant", content)


__all__ = [
    "ChatMessage",
    "Role",
    "ROLES",
]
