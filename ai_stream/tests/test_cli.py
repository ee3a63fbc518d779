"""CLI tests for ``ai-stream``.

Covers:
- ``KEY=VALUE`` parsing and rejection of malformed pairs.
- ``--plan`` output (no network).
- Exit code 2 on invalid ``--data``.
- A full streaming run over ``httpx.MockTransport`` printing JSON lines.
"""
from __future__ import annotations

import io
import json

import httpx
import pytest

from ai_stream.cli import main
from ai_stream.cli.cli_actions import UsageError, handle_connect, parse_pairs
from ai_stream.cli.cli_parser import build_parser


def test_parse_pairs_splits_on_first_equals():
    assert parse_pairs(["a=1", "b=x=y"], "--header") == {"a": "1", "b": "x=y"}  # nosec B101


@pytest.mark.parametrize("raw", ["novalue", "=value"])
def test_parse_pairs_rejects_malformed(raw):
    with pytest.raises(UsageError):
        parse_pairs([raw], "--header")


def test_plan_prints_resolved_request():
    args = build_parser().parse_args(
        [
            "--base-url", "http://h",
            "--url", "/chat/:id",
            "--path-param", "id=42",
            "--method", "post",
            "--data", '{"q": "hi"}',
            "--header", "X-Custom=1",
            "--plan",
        ]
    )
    out = io.StringIO()
    assert handle_connect(args, out=out) == 0  # nosec B101
    plan = json.loads(out.getvalue())
    assert plan["url"] == "http://h/chat/42"  # nosec B101
    assert plan["method"] == "POST"  # nosec B101
    assert plan["data"] == {"q": "hi"}  # nosec B101
    assert plan["streaming"] is True  # nosec B101
    assert plan["headers"]["x-custom"] == "1"  # nosec B101
    assert plan["headers"]["x-trace-id"] == "<trace-id>"  # nosec B101
    assert plan["headers"]["content-type"] == "application/json"  # nosec B101


def test_invalid_data_exits_with_usage_error(capsys):
    assert main(["--url", "http://h/s", "--data", "{nope"]) == 2  # nosec B101
    err = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert "--data" in err["error"]  # nosec B101


def test_streaming_run_prints_accepted_messages():
    body = (
        b'data: {"type":"agent_response","content":"a"}\n\n'
        b'data: {"type":"other"}\n\n'
        b'data: {"type":"end"}\n\n'
    )

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, headers={"content-type": "text/event-stream"}, content=body)

    args = build_parser().parse_args(["--url", "http://h/s"])
    out = io.StringIO()
    code = handle_connect(args, out=out, http_transport=httpx.MockTransport(handler))
    assert code == 0  # nosec B101
    lines = [json.loads(line) for line in out.getvalue().splitlines()]
    assert lines == [{"type": "agent_response", "content": "a"}]  # nosec B101


def test_single_shot_error_exits_with_one():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="boom")

    args = build_parser().parse_args(["--url", "http://h/q", "--no-streaming"])
    code = handle_connect(args, out=io.StringIO(), http_transport=httpx.MockTransport(handler))
    assert code == 1  # nosec B101
