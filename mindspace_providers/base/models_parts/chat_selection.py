"""Active vendor/model choice used by the chat orchestrator."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ChatSelection:
    """Vendor id plus an optional model; ``None`` means the vendor's default model."""

    vendor: str
    model: Optional[str] = None


__all__ = ["ChatSelection"]
