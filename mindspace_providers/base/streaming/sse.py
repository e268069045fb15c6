"""Line-buffered reader for server-sent event bodies.

Vendors stream ``data: <json>`` lines that can be split anywhere across
network reads (including inside a multi-byte UTF-8 character). The reader
accumulates text, splits on newlines, and carries the trailing partial line
into the next read. Only ``data:`` lines are meaningful; comments, ``event:``
and blank lines are ignored.
"""
from __future__ import annotations

import codecs
import json
import logging
from typing import Any, Dict, Iterable, Iterator, Optional, Union

from ..constants import SSE_DATA_PREFIX, SSE_DONE_SENTINEL
from ..log_support import LogContext
from ..logging import get_logger, log_event

_logger = get_logger("mindspace.streaming")


def _data_payload(line: str) -> Optional[str]:
    line = line.rstrip("\r")
    if not line.startswith(SSE_DATA_PREFIX):
        return None
    return line[len(SSE_DATA_PREFIX):].strip()


def iter_sse_data(chunks: Iterable[Union[bytes, str]]) -> Iterator[str]:
    """Yield the payload of each complete ``data:`` line, in arrival order.

    A final line without a trailing newline is still yielded at end of input.
    """
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    buffer = ""
    for chunk in chunks:
        buffer += decoder.decode(chunk) if isinstance(chunk, bytes) else chunk
        lines = buffer.split("\n")
        buffer = lines.pop()
        for line in lines:
            payload = _data_payload(line)
            if payload:
                yield payload
    buffer += decoder.decode(b"", final=True)
    payload = _data_payload(buffer)
    if payload:
        yield payload


def iter_sse_json(
    chunks: Iterable[Union[bytes, str]],
    ctx: Optional[LogContext] = None,
    logger: logging.Logger = _logger,
) -> Iterator[Dict[str, Any]]:
    """Yield decoded JSON objects until ``[DONE]`` or end of input.

    Malformed payloads are logged as ``stream.malformed`` and skipped.
    """
    for payload in iter_sse_data(chunks):
        if payload == SSE_DONE_SENTINEL:
            return
        try:
            data = json.loads(payload)
        except ValueError:
            log_event(logger, "stream.malformed", ctx, level=logging.WARNING, payload=payload[:200])
            continue
        if isinstance(data, dict):
            yield data
        else:
            log_event(logger, "stream.malformed", ctx, level=logging.WARNING, payload=payload[:200])


__all__ = ["iter_sse_data", "iter_sse_json"]
