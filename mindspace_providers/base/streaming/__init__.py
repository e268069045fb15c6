"""Streaming package for the gateway.

Exposes the line-buffered server-sent events reader shared by every adapter.
"""

from .sse import iter_sse_data, iter_sse_json

__all__ = [
    "iter_sse_data",
    "iter_sse_json",
]
