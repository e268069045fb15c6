"""Line-buffered SSE reader: framing, UTF-8 boundaries, sentinel and malformed lines."""

from __future__ import annotations

import json

from mindspace_providers.base.streaming import iter_sse_data, iter_sse_json


def test_data_lines_split_across_chunks():
    chunks = [b"data: {\"a\"", b": 1}\n", b"\ndata: {\"a\": 2}\n\n"]
    assert list(iter_sse_data(chunks)) == ['{"a": 1}', '{"a": 2}']


def test_multibyte_character_split_between_chunks():
    raw = ("data: " + json.dumps({"t": "你好"}, ensure_ascii=False) + "\n").encode("utf-8")
    cut = raw.index("好".encode("utf-8")) + 1
    events = list(iter_sse_json([raw[:cut], raw[cut:]]))
    assert events == [{"t": "你好"}]


def test_non_data_lines_and_blank_payloads_are_ignored():
    chunks = [": keep-alive\n", "event: message\n", "data:\n", "data:   \n", "id: 7\n", "data: {\"ok\": true}\r\n"]
    assert list(iter_sse_data(chunks)) == ['{"ok": true}']


def test_done_sentinel_stops_iteration():
    chunks = [b'data: {"n": 1}\n', b"data: [DONE]\n", b'data: {"n": 2}\n']
    assert list(iter_sse_json(chunks)) == [{"n": 1}]


def test_trailing_line_without_newline_is_flushed():
    assert list(iter_sse_data([b'data: {"last": 1}'])) == ['{"last": 1}']


def test_malformed_payloads_are_logged_and_skipped(log_capture):
    chunks = [b'data: {"n": 1}\n', b"data: {not json\n", b"data: [1, 2]\n", b'data: {"n": 2}\n']

    assert list(iter_sse_json(chunks)) == [{"n": 1}, {"n": 2}]

    malformed = [e for e in log_capture.events() if e["event"] == "stream.malformed"]
    assert len(malformed) == 2
    assert all(e["level"] == "WARNING" for e in malformed)
