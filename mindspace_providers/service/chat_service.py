"""Chat orchestrator: vendor call with retries, local fallback on failure.

Purpose
-------
Turn a transcript plus the user's newest message into a :class:`ChatReply`.
The orchestrator owns the whole request lifecycle:

1. Validate input with :class:`ConversationDTO` (invalid input raises
   ``pydantic.ValidationError`` before any work is done).
2. Detect crisis phrases and emotion tags in the new message.
3. Resolve the active vendor/model; unknown or unconfigured vendors, and
   any failure while reading the selection or config, go straight to the
   local responder without any network attempt.
4. Build the outbound transcript: persona prompt, the last
   ``history_window`` transcript messages, then the new user message.
5. Call the adapter through :func:`execute` with the server-error preset.
6. On any failure, answer with :class:`LocalFallbackResponder`.

``send_chat_message`` never raises for valid input.

Retry rules
-----------
* Adapter exceptions are classified with :func:`classify_exception` and the
  resulting ``ChatServiceError.is_retryable`` flag decides.
* Unclassified (``UNKNOWN``) failures are retried at most once.
* A streamed call is not retried once any chunk reached ``on_stream``.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Optional, Union

from ..base.dto import ConversationDTO
from ..base.errors import (
    ChatErrorCode,
    ChatServiceError,
    UnsupportedVendorError,
    classify_exception,
)
from ..base.factory import AdapterRegistry
from ..base.interfaces import ChatAdapter
from ..base.logging import LogContext, get_logger, log_event, normalized_log_event
from ..base.models import (
    ChatMessage,
    ChatReply,
    ChatRequest,
    ChatSelection,
    FinishReason,
    StreamChunk,
)
from ..base.resilience import SERVER_ERROR, RetryPolicy, execute
from ..config import get_gateway_config, get_selection, get_vendor_settings
from ..fallback import CrisisAssessment, LocalFallbackResponder, detect_crisis, extract_emotion_tags

_logger = get_logger("mindspace.chat")

SelectionSource = Union[ChatSelection, Callable[[], ChatSelection], None]
OnStream = Callable[[str], None]


class _Attempts:
    """Mutable per-call state shared by the operation and the retry predicate."""

    def __init__(self) -> None:
        self.unknown_failures = 0
        self.delivered = 0


class ChatOrchestrator:
    """Send chat turns to the selected vendor with retries and a local fallback.

    Parameters
    ----------
    registry: AdapterRegistry
        Owner of adapter instances and credential resolution.
    selection: ChatSelection | Callable[[], ChatSelection] | None
        Fixed selection, a callable consulted on every call, or ``None`` to
        read :func:`get_selection` on every call.
    responder: LocalFallbackResponder | None
        Local responder; a fresh one (unseeded) when omitted.
    retry_policy: RetryPolicy
        Backoff parameters; the predicate and hook are supplied per call.
    system_prompt: str | None
        Persona prompt; ``None`` reads the gateway config on every call.
    history_window: int | None
        Number of most recent transcript messages forwarded to the vendor;
        ``None`` reads the gateway config on every call.
    """

    def __init__(
        self,
        registry: AdapterRegistry,
        selection: SelectionSource = None,
        *,
        responder: Optional[LocalFallbackResponder] = None,
        retry_policy: RetryPolicy = SERVER_ERROR,
        system_prompt: Optional[str] = None,
        history_window: Optional[int] = None,
    ) -> None:
        self.registry = registry
        self._selection = selection
        self.responder = responder or LocalFallbackResponder()
        self.retry_policy = retry_policy
        self._system_prompt = system_prompt
        self._history_window = None if history_window is None else max(0, int(history_window))

    def current_selection(self) -> ChatSelection:
        if self._selection is None:
            return get_selection()
        if callable(self._selection):
            return self._selection()
        return self._selection

    def system_prompt(self) -> str:
        if self._system_prompt is not None:
            return self._system_prompt
        return get_gateway_config()["system_prompt"]

    def history_window(self) -> int:
        if self._history_window is not None:
            return self._history_window
        return get_gateway_config()["history_window"]

    def build_messages(self, history: Iterable[ChatMessage], new_message: str) -> List[ChatMessage]:
        """Persona message, the last ``history_window`` transcript messages, then the new user turn."""
        transcript = list(history)
        window = self.history_window()
        recent = transcript[-window:] if window else []
        return [ChatMessage.system(self.system_prompt()), *recent, ChatMessage.user(new_message)]

    def send_chat_message(
        self,
        history: Iterable[Any],
        new_message: str,
        on_stream: Optional[OnStream] = None,
    ) -> ChatReply:
        """Answer ``new_message`` given the prior ``history``.

        ``history`` items may be ``ChatMessage`` instances or mappings with
        ``role``/``content``. When ``on_stream`` is given, text fragments are
        passed to it as they arrive.
        """
        conversation = ConversationDTO(
            history=list(history) if history is not None else [],
            new_message=new_message,
        )
        crisis = detect_crisis(conversation.new_message)
        tags = extract_emotion_tags(conversation.new_message)

        ctx = LogContext()
        try:
            selection = self.current_selection()
            ctx = LogContext(vendor=selection.vendor, model=selection.model)
            adapter = self._adapter_for(selection, ctx)
            if adapter is None:
                return self._fallback(conversation.new_message, crisis, ctx, ChatErrorCode.PROVIDER_NOT_CONFIGURED)

            model = selection.model or get_vendor_settings(adapter.vendor_id)["model"]
            ctx = LogContext(vendor=adapter.vendor_id, model=model)
            request = ChatRequest(
                messages=tuple(self.build_messages(conversation.to_messages(), conversation.new_message)),
                model=model,
                vendor=adapter.vendor_id,
            )
        except Exception as exc:  # selection and config resolution boundary
            err = ChatServiceError.configuration_error(ctx.vendor, str(exc) or exc.__class__.__name__)
            err.original_error = exc
            return self._fallback(conversation.new_message, crisis, ctx, err.code, err)

        try:
            content = self._call_with_retries(adapter, request, ctx, on_stream)
        except ChatServiceError as err:
            return self._fallback(conversation.new_message, crisis, ctx, err.code, err)

        log_event(
            _logger,
            "chat.reply",
            ctx,
            crisis=crisis.is_crisis,
            stream=on_stream is not None,
            length=len(content),
        )
        return ChatReply(
            content=content,
            needs_escalation=crisis.is_crisis,
            is_crisis=crisis.is_crisis,
            emotion_tags=tags,
            vendor=adapter.vendor_id,
            model=model,
            fallback_used=False,
        )

    def _adapter_for(self, selection: ChatSelection, ctx: LogContext) -> Optional[ChatAdapter]:
        try:
            adapter = self.registry.get_adapter(selection.vendor)
        except UnsupportedVendorError:
            log_event(_logger, "chat.unsupported_vendor", ctx, level=logging.WARNING)
            return None
        if not adapter.is_configured():
            log_event(_logger, "chat.unconfigured_vendor", ctx, level=logging.WARNING)
            return None
        return adapter

    def _call_with_retries(
        self,
        adapter: ChatAdapter,
        request: ChatRequest,
        ctx: LogContext,
        on_stream: Optional[OnStream],
    ) -> str:
        state = _Attempts()

        def operation() -> str:
            try:
                if on_stream is None:
                    return self._complete(adapter, request)
                return self._stream(adapter, request, on_stream, state)
            except ChatServiceError:
                raise
            except Exception as exc:  # adapter error mapping boundary
                raise classify_exception(exc, adapter.vendor_id) from exc

        def is_retryable(error: BaseException) -> bool:
            if state.delivered:
                return False
            if not isinstance(error, ChatServiceError):
                return False
            if error.code is ChatErrorCode.UNKNOWN:
                state.unknown_failures += 1
                return state.unknown_failures <= 1
            return error.is_retryable

        def on_retry(attempt: int, error: BaseException, delay: float) -> None:
            normalized_log_event(
                _logger,
                "retry.attempt",
                ctx,
                phase="retry",
                attempt=attempt,
                error_code=getattr(getattr(error, "code", None), "value", None),
                level=logging.WARNING,
                delay_seconds=round(delay, 3),
                error=str(error),
            )

        return execute(operation, self.retry_policy, is_retryable=is_retryable, on_retry=on_retry)

    @staticmethod
    def _complete(adapter: ChatAdapter, request: ChatRequest) -> str:
        response = adapter.chat(request)
        if response.finish_reason is FinishReason.CONTENT_FILTER and not response.content:
            raise ChatServiceError.content_filtered(adapter.vendor_id)
        return response.content

    @staticmethod
    def _stream(adapter: ChatAdapter, request: ChatRequest, on_stream: OnStream, state: _Attempts) -> str:
        parts: List[str] = []

        def on_chunk(chunk: StreamChunk) -> None:
            if chunk.done or not chunk.delta:
                return
            parts.append(chunk.delta)
            state.delivered += 1
            on_stream(chunk.delta)

        adapter.chat_stream(request, on_chunk)
        return "".join(parts)

    def _fallback(
        self,
        new_message: str,
        crisis: CrisisAssessment,
        ctx: LogContext,
        code: ChatErrorCode,
        error: Optional[ChatServiceError] = None,
    ) -> ChatReply:
        normalized_log_event(
            _logger,
            "fallback.used",
            ctx,
            phase="fallback",
            error_code=code.value,
            level=logging.WARNING,
            crisis=crisis.is_crisis,
            error=error.message if error is not None else None,
        )
        return self.responder.respond(new_message, crisis)


__all__ = ["ChatOrchestrator", "OnStream", "SelectionSource"]
