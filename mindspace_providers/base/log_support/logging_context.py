"""Structured logging context object for the gateway.

This module defines :class:`LogContext`, a dataclass carrying the fields common
to every chat event (vendor, model, request id, plus free-form extras). Its
``to_dict`` helper flattens ``extra`` and prunes ``None`` values.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for gateway logging events."""

    vendor: Optional[str] = None
    model: Optional[str] = None
    request_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def with_extra(self, **fields: Any) -> "LogContext":
        """Return a copy whose ``extra`` mapping includes ``fields``."""
        merged = dict(self.extra)
        merged.update(fields)
        return LogContext(self.vendor, self.model, self.request_id, merged)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "vendor": self.vendor,
            "model": self.model,
            "request_id": self.request_id,
        }
        data.update({k: v for k, v in self.extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
