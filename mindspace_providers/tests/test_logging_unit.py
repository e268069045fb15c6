from __future__ import annotations

import json
import logging

import pytest

from mindspace_providers.base.logging import (
    BASE_LOGGER_NAME,
    REQUIRED_NORMALIZED_KEYS,
    _parse_level,
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)
from mindspace_providers.base.log_support import JsonFormatter, LogContext


@pytest.mark.parametrize(
    "value, expected",
    [("debug", logging.DEBUG), (" WARN ", logging.WARNING), ("error", logging.ERROR), ("loud", logging.INFO), (None, logging.INFO)],
)
def test_parse_level(value, expected):
    assert _parse_level(value) == expected


def test_child_loggers_nest_under_base():
    assert get_logger("adapters.x").name == f"{BASE_LOGGER_NAME}.adapters.x"
    assert get_logger(f"{BASE_LOGGER_NAME}.retry").name == f"{BASE_LOGGER_NAME}.retry"
    assert get_logger().propagate is False


def test_log_event_merges_context_and_drops_none(log_capture):
    ctx = LogContext(vendor="deepseek", model="deepseek-chat", extra={"turn": 3, "skip": None})
    log_event(get_logger("t"), "chat.start", ctx, stream=True, missing=None)

    (event,) = log_capture.events()
    assert event == {
        "event": "chat.start",
        "vendor": "deepseek",
        "model": "deepseek-chat",
        "turn": 3,
        "stream": True,
        "level": "INFO",
    }


def test_normalized_event_always_carries_canonical_keys(log_capture):
    logger = get_logger("t")
    normalized_log_event(logger, "chat.reply", phase="complete")
    normalized_log_event(
        logger, "retry.attempt", phase="retry", attempt=2, error_code="RATE_LIMITED", level=logging.WARNING, phase_hint="x"
    )

    first, second = log_capture.events()
    assert first["phase"] == "complete" and first["attempt"] is None
    assert "error_code" not in first
    assert all(key in second for key in REQUIRED_NORMALIZED_KEYS)
    assert second["attempt"] == 2 and second["level"] == "WARNING"


def test_normalized_event_extras_cannot_override_canonical(log_capture):
    normalized_log_event(get_logger("t"), "x", phase="fallback", attempt=1, **{"extra_ok": 1})
    (event,) = log_capture.events()
    assert event["phase"] == "fallback"
    assert event["extra_ok"] == 1


def test_json_formatter_hoists_json_messages():
    formatter = JsonFormatter()
    record = logging.LogRecord("mindspace.t", logging.INFO, __file__, 1, json.dumps({"event": "e", "n": 1}), None, None)
    out = json.loads(formatter.format(record))
    assert (out["event"], out["n"], out["level"], out["logger"]) == ("e", 1, "INFO", "mindspace.t")
    assert "msg" not in out

    plain = logging.LogRecord("mindspace.t", logging.INFO, __file__, 1, "hello %s", ("there",), None)
    assert json.loads(formatter.format(plain))["msg"] == "hello there"


def test_log_context_with_extra_is_a_copy():
    base = LogContext(vendor="gemini")
    child = base.with_extra(attempt=1)
    assert base.extra == {}
    assert child.to_dict() == {"vendor": "gemini", "attempt": 1}


def test_configure_logger_file_handler(tmp_path):
    target = tmp_path / "logs" / "gateway.log"
    logger = configure_logger(level="DEBUG", file_path=str(target))
    try:
        log_event(get_logger("file"), "file.event", value="中文")
        for handler in logger.handlers:
            handler.flush()
        line = target.read_text(encoding="utf-8").strip().splitlines()[-1]
        assert json.loads(line)["event"] == "file.event"
        assert json.loads(line)["value"] == "中文"
    finally:
        configure_logger(level=logging.INFO, file_path=None)
    handlers = logging.getLogger(BASE_LOGGER_NAME).handlers
    assert not any(getattr(h, "_mindspace_file_handler", False) for h in handlers)
