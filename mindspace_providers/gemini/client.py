"""Gemini adapter over the REST ``generateContent`` API.

Uses ``httpx`` directly: requests and responses go through the pure
translation functions in :mod:`.translation`, and the key travels in the
``x-goog-api-key`` header rather than the query string so it never appears
in logged URLs.
"""

from __future__ import annotations

from typing import Any, Callable, Dict

import httpx

from ..base.adapter_base import BaseVendorAdapter, ProbeSpec
from ..base.constants import GEMINI_KEY_HEADER
from ..base.errors import APIError
from ..base.logging import LogContext
from ..base.models import ChatRequest, ChatResponse, StreamChunk
from ..base.openai_style_parts.style_helpers import error_message_from_body
from ..base.timeouts import get_timeout_config
from ..config.defaults import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, DEFAULT_TOP_P
from .translation import first_candidate_text, from_gemini_response, to_gemini_contents


class GeminiAdapter(BaseVendorAdapter):
    """Adapter translating the gateway contract to Gemini's content format."""

    def _headers(self, key: str | None = None) -> Dict[str, str]:
        return {GEMINI_KEY_HEADER: key or self._credential.key, "Content-Type": "application/json"}

    def _url(self, model: str, stream: bool) -> str:
        method = "streamGenerateContent" if stream else "generateContent"
        url = f"{self._api_base}/models/{model}:{method}"
        return f"{url}?alt=sse" if stream else url

    @staticmethod
    def _body(request: ChatRequest) -> Dict[str, Any]:
        return {
            "contents": to_gemini_contents(request.messages),
            "generationConfig": {
                "temperature": request.temperature if request.temperature is not None else DEFAULT_TEMPERATURE,
                "maxOutputTokens": request.max_tokens if request.max_tokens is not None else DEFAULT_MAX_TOKENS,
                "topP": request.top_p if request.top_p is not None else DEFAULT_TOP_P,
            },
        }

    def _status_error(self, response: httpx.Response) -> APIError:
        return APIError.from_status(
            response.status_code,
            f"Gemini API error: {error_message_from_body(response)}",
            self.vendor_id,
        )

    def chat(self, request: ChatRequest) -> ChatResponse:
        self._require_configured()
        model = self._model_for(request)
        ctx = LogContext(vendor=self.vendor_id, model=model)
        self._log_start(ctx, request, stream=False)
        try:
            response = self._http("chat").post(
                self._url(model, stream=False),
                headers=self._headers(),
                json=self._body(request),
                timeout=get_timeout_config().for_request(),
            )
            if response.status_code >= 400:
                raise self._status_error(response)
            data = response.json()
        except APIError as err:
            self._log_error(ctx, err)
            raise
        except httpx.TimeoutException as exc:
            err = APIError.timeout(self.vendor_id)
            self._log_error(ctx, err)
            raise err from exc
        except httpx.TransportError as exc:
            err = APIError.network(self.vendor_id)
            self._log_error(ctx, err)
            raise err from exc
        except ValueError as exc:
            err = APIError(f"Malformed Gemini response: {exc}", response.status_code, self.vendor_id, True)
            self._log_error(ctx, err)
            raise err from exc
        result = from_gemini_response(data if isinstance(data, dict) else {}, model, self.vendor_id)
        self._log_end(ctx, result)
        return result

    def chat_stream(self, request: ChatRequest, on_chunk: Callable[[StreamChunk], None]) -> None:
        self._require_configured()
        model = self._model_for(request)
        ctx = LogContext(vendor=self.vendor_id, model=model)
        self._log_start(ctx, request, stream=True)
        try:
            delivered = self._stream_post(
                self._url(model, stream=True),
                self._headers(),
                self._body(request),
                ctx,
                model,
                on_chunk,
                first_candidate_text,
                self._status_error,
            )
        except APIError as err:
            self._log_error(ctx, err)
            raise
        self._log_end(ctx, chunks=delivered)

    def _probe_spec(self, key: str) -> ProbeSpec:
        return "GET", f"{self._api_base}/models", {GEMINI_KEY_HEADER: key}, None


__all__ = ["GeminiAdapter"]
