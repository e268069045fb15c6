"""Shared builders for mock HTTP traffic used across the gateway tests."""

from __future__ import annotations

import json
from typing import Callable, List, Union

import httpx

Handler = Callable[[httpx.Request], httpx.Response]


def make_client(handler: Handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class RecordingTransport:
    """Mock transport handler that replays queued responses and records requests.

    The last queued item is repeated once the queue is down to one entry.
    Exceptions in the queue are raised instead of answered.
    """

    def __init__(self, *responses: Union[httpx.Response, Exception]) -> None:
        self.responses = list(responses)
        self.requests: List[httpx.Request] = []

    def queue(self, *responses: Union[httpx.Response, Exception]) -> "RecordingTransport":
        self.responses.extend(responses)
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"unexpected request {request.method} {request.url}")
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, Exception):
            raise item
        return item

    def json_bodies(self) -> List[dict]:
        return [json.loads(r.content) for r in self.requests if r.content]


def completion_json(content: str = "hello", finish_reason: str = "stop", model: str = "qwen-plus") -> dict:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": model,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": finish_reason,
            }
        ],
        "usage": {"prompt_tokens": 5, "completion_tokens": 2, "total_tokens": 7},
    }


def sse_body(*payloads: str) -> bytes:
    return "".join(f"data: {p}\n\n" for p in payloads).encode("utf-8")


def delta_event(text: str) -> str:
    return json.dumps({"choices": [{"index": 0, "delta": {"content": text}}]}, ensure_ascii=False)


def gemini_json(text: str = "hi", finish_reason: str = "STOP", usage: bool = True) -> dict:
    body: dict = {
        "candidates": [
            {"content": {"role": "model", "parts": [{"text": text}]}, "finishReason": finish_reason}
        ]
    }
    if usage:
        body["usageMetadata"] = {"promptTokenCount": 3, "candidatesTokenCount": 1, "totalTokenCount": 4}
    return body
