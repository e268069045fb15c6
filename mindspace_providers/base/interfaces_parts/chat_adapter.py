"""ChatAdapter Protocol (single-class module).

Defines the capability set every vendor adapter exposes to the registry and
the chat orchestrator.
"""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

from ..models import ChatRequest, ChatResponse, StreamChunk


@runtime_checkable
class ChatAdapter(Protocol):
    """Uniform contract for vendor adapters.

    Implementations map ``ChatRequest`` to their wire format, normalize replies
    to ``ChatResponse``, and raise the adapter error taxonomy
    (``APIError``/``ConfigError``) on failure so the retry engine can decide.
    """

    @property
    def vendor_id(self) -> str:
        """Canonical vendor identifier, e.g. ``"openai"`` or ``"gemini"``."""
        ...

    def chat(self, request: ChatRequest) -> ChatResponse:
        """Execute a single non-streamed chat completion."""
        ...

    def chat_stream(self, request: ChatRequest, on_chunk: Callable[[StreamChunk], None]) -> None:
        """Stream a completion, invoking ``on_chunk`` per fragment and once with ``done=True``."""
        ...

    def is_configured(self) -> bool:
        """Return True when the adapter holds a usable credential and endpoint."""
        ...

    def validate_key(self, key: str) -> bool:
        """Probe the vendor with ``key``; never raises."""
        ...
