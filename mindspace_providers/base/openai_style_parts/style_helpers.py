"""
Helper utilities for OpenAI-compatible Chat Completions vendors.

Purpose:
- Translate between the gateway DTOs and the chat-completions wire shape.
- Map ``openai`` SDK and ``httpx`` exceptions onto the adapter error taxonomy.

External dependencies:
- ``openai`` exception classes and response objects; ``httpx`` transport errors.
- No network I/O happens here.
"""

from __future__ import annotations

import typing as _t

import httpx
import openai

from ..errors import AdapterError, APIError, ChatErrorCode
from ..models import ChatRequest, ChatResponse, FinishReason, TokenUsage
from ...config.defaults import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, DEFAULT_TOP_P


def build_chat_params(request: ChatRequest, model: str, *, stream: bool = False) -> dict[str, _t.Any]:
    """Build chat-completions parameters; roles map 1:1 and unset sampling values get defaults."""
    params: dict[str, _t.Any] = {
        "model": model,
        "messages": [m.to_dict() for m in request.messages],
        "temperature": request.temperature if request.temperature is not None else DEFAULT_TEMPERATURE,
        "max_tokens": request.max_tokens if request.max_tokens is not None else DEFAULT_MAX_TOKENS,
        "top_p": request.top_p if request.top_p is not None else DEFAULT_TOP_P,
    }
    if stream:
        params["stream"] = True
    return params


def _usage_from(raw: _t.Any) -> TokenUsage | None:
    if raw is None:
        return None
    get = raw.get if isinstance(raw, dict) else (lambda k, d=None: getattr(raw, k, d))
    return TokenUsage(
        prompt_tokens=int(get("prompt_tokens", 0) or 0),
        completion_tokens=int(get("completion_tokens", 0) or 0),
        total_tokens=int(get("total_tokens", 0) or 0),
    )


def to_chat_response(completion: _t.Any, vendor: str, model: str) -> ChatResponse:
    """Normalize an SDK ``ChatCompletion`` into a :class:`ChatResponse`.

    Only the first choice is read; ``usage`` is copied only when reported.
    """
    choices = getattr(completion, "choices", None) or []
    choice = choices[0] if choices else None
    message = getattr(choice, "message", None)
    return ChatResponse(
        content=getattr(message, "content", None) or "",
        finish_reason=FinishReason.parse(getattr(choice, "finish_reason", None)),
        vendor=vendor,
        model=getattr(completion, "model", None) or model,
        usage=_usage_from(getattr(completion, "usage", None)),
    )


def extract_stream_delta(data: dict[str, _t.Any]) -> str:
    """Return the text delta carried by one streamed chunk, or ``""``."""
    choices = data.get("choices") or []
    if not choices or not isinstance(choices[0], dict):
        return ""
    delta = choices[0].get("delta") or {}
    content = delta.get("content") if isinstance(delta, dict) else None
    return content if isinstance(content, str) else ""


def error_message_from_body(response: httpx.Response) -> str:
    """Best-effort error text from a non-2xx vendor response (body must be read)."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        err = body.get("error")
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])
        if isinstance(err, str):
            return err
        if body.get("message"):
            return str(body["message"])
    return f"HTTP {response.status_code}"


def map_sdk_error(exc: BaseException, vendor: str) -> AdapterError:
    """Translate an SDK/transport exception into the adapter taxonomy.

    401 is terminal, 429 retryable, other statuses follow the shared status
    table, connect/timeout failures are retryable, anything else is an unclassified
    retryable ``APIError``.
    """
    if isinstance(exc, AdapterError):
        return exc
    if isinstance(exc, openai.AuthenticationError):
        return APIError("Authentication failed. Please check your API key.", 401, vendor, False)
    if isinstance(exc, openai.RateLimitError):
        return APIError("Rate limit exceeded. Please try again later.", 429, vendor, True)
    if isinstance(exc, openai.APIStatusError):
        return APIError.from_status(exc.status_code, exc.message or "API error occurred", vendor)
    if isinstance(exc, (openai.APITimeoutError, httpx.TimeoutException)):
        return APIError.timeout(vendor)
    if isinstance(exc, (openai.APIConnectionError, httpx.TransportError)):
        return APIError.network(vendor)
    return APIError(str(exc) or "Unknown error occurred", None, vendor, True, ChatErrorCode.UNKNOWN)


__all__ = [
    "build_chat_params",
    "to_chat_response",
    "extract_stream_delta",
    "error_message_from_body",
    "map_sdk_error",
]
