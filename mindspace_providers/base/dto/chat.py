"""
Pydantic DTOs and validators for inbound conversation payloads.

Purpose
-------
This module defines strict, vendor-agnostic DTOs using Pydantic to validate
the transcript and new message handed to the chat orchestrator before any
crisis detection, adapter lookup or network work happens.

External dependencies: Pydantic only (no network/CLI calls). No timeouts.

Fallback semantics: Not applicable. Validation either succeeds or raises a
`pydantic.ValidationError`. Invalid input is a caller bug, so the
orchestrator lets the error propagate instead of falling back.

Design
------
- Keep DTOs minimal and framework-agnostic.
- Align with the frozen dataclasses in `mindspace_providers.base.models`; the
  `to_messages` helper converts validated input back into them.
"""

from __future__ import annotations

from typing import Any, List, Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models import ChatMessage


Role = Literal["system", "user", "assistant"]


class MessageDTO(BaseModel):
    """Represents one transcript entry.

    Rules:
        - `role` must be one of Role.
        - `content` must be a string; history turns may be empty strings.
    """

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    role: Role
    content: str

    def to_message(self) -> ChatMessage:
        return ChatMessage(self.role, self.content)


class ConversationDTO(BaseModel):
    """Transcript plus the user's newest message.

    Parameters:
        history: Prior turns in order; accepts ``ChatMessage`` instances or
            mappings with ``role``/``content`` keys.
        new_message: The user's new text (must contain non-whitespace).

    Raises:
        ValidationError: On unknown roles, non-string content, or a blank
            new message.
    """

    history: List[MessageDTO] = Field(default_factory=list)
    new_message: str = Field(..., min_length=1)

    @field_validator("new_message")
    @classmethod
    def _validate_new_message(cls, value: str) -> str:
        if value.strip() == "":
            raise ValueError("new_message must be non-empty")
        return value

    @field_validator("history", mode="before")
    @classmethod
    def _coerce_history(cls, value: Any) -> Any:
        """Accept dataclass messages alongside plain mappings."""
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [
                {"role": m.role, "content": m.content} if isinstance(m, ChatMessage) else m
                for m in value
            ]
        return value

    def to_messages(self) -> Tuple[ChatMessage, ...]:
        return tuple(m.to_message() for m in self.history)


__all__ = [
    "Role",
    "MessageDTO",
    "ConversationDTO",
]
