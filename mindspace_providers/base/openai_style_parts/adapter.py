"""OpenAI-compatible vendor adapter.

One class serves every vendor whose wire shape is the chat-completions API
(openai, zhipu, grok, deepseek, minimax, alibaba, ollama); behaviour differs
only by the :class:`VendorConfig` it is built from.

- ``chat`` goes through the ``openai`` SDK with SDK-level retries disabled so
  the gateway's retry engine is the only one in play.
- ``chat_stream`` posts directly with ``httpx`` and reads the SSE body with
  the shared line-buffered reader.
- ``validate_key`` lists models, or sends a one-token chat for vendors whose
  key probe is ``"chat"``.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

import httpx
from openai import OpenAI

from ..adapter_base import BaseVendorAdapter, ProbeSpec
from ..constants import KEYLESS_PLACEHOLDER_KEY
from ..errors import APIError
from ..http import get_httpx_client
from ..logging import LogContext
from ..models import ChatRequest, ChatResponse, StreamChunk
from ..timeouts import get_timeout_config
from ...config.defaults import KEY_PROBE_MAX_TOKENS
from .style_helpers import (
    build_chat_params,
    error_message_from_body,
    extract_stream_delta,
    map_sdk_error,
    to_chat_response,
)


class OpenAICompatibleAdapter(BaseVendorAdapter):
    """Adapter for vendors speaking the OpenAI chat-completions format."""

    _client: Optional[OpenAI] = None

    def _bearer(self) -> str:
        return self._credential.key or KEYLESS_PLACEHOLDER_KEY

    def _headers(self, key: Optional[str] = None) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {key or self._bearer()}",
            "Content-Type": "application/json",
        }

    def _get_client(self) -> OpenAI:
        """Create the SDK client on first use."""
        if self._client is None:
            self._client = OpenAI(
                api_key=self._bearer(),
                base_url=self._api_base,
                max_retries=0,
                timeout=get_timeout_config().for_request(),
                http_client=self._http_client if self._http_client is not None else get_httpx_client(None, "openai-sdk"),
            )
        return self._client

    def chat(self, request: ChatRequest) -> ChatResponse:
        self._require_configured()
        model = self._model_for(request)
        ctx = LogContext(vendor=self.vendor_id, model=model)
        self._log_start(ctx, request, stream=False)
        try:
            completion = self._get_client().chat.completions.create(**build_chat_params(request, model))
        except Exception as exc:
            err = map_sdk_error(exc, self.vendor_id)
            self._log_error(ctx, err)
            raise err from exc
        response = to_chat_response(completion, self.vendor_id, model)
        self._log_end(ctx, response)
        return response

    def chat_stream(self, request: ChatRequest, on_chunk: Callable[[StreamChunk], None]) -> None:
        self._require_configured()
        model = self._model_for(request)
        ctx = LogContext(vendor=self.vendor_id, model=model)
        self._log_start(ctx, request, stream=True)
        try:
            delivered = self._stream_post(
                f"{self._api_base}/chat/completions",
                self._headers(),
                build_chat_params(request, model, stream=True),
                ctx,
                model,
                on_chunk,
                extract_stream_delta,
                self._status_error,
            )
        except APIError as err:
            self._log_error(ctx, err)
            raise
        self._log_end(ctx, chunks=delivered)

    def _status_error(self, response: httpx.Response) -> APIError:
        return APIError.from_status(response.status_code, error_message_from_body(response), self.vendor_id)

    def _probe_spec(self, key: str) -> ProbeSpec:
        headers = self._headers(key)
        if self.vendor.key_probe == "chat":
            body: Any = {
                "model": self.vendor.default_model,
                "messages": [{"role": "user", "content": "ping"}],
                "max_tokens": KEY_PROBE_MAX_TOKENS,
            }
            return "POST", f"{self._api_base}/text/chatcompletion_v2", headers, body
        return "GET", f"{self._api_base}/models", headers, None


__all__ = ["OpenAICompatibleAdapter"]
