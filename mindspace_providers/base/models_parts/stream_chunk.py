"""Incremental fragment of a streamed completion."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StreamChunk:
    """One delivered piece of a stream.

    A stream ends in exactly one chunk with ``done=True`` (whose ``delta`` is
    empty) unless an error is raised mid-stream.
    """

    delta: str
    done: bool
    model: str = ""


__all__ = ["StreamChunk"]
