"""Unit tests for request option merging.

Covers:
- ``:name`` placeholder substitution with URI-component encoding.
- Placeholders only match whole identifiers; missing ones stay as-is.
- Absolute per-call URLs ignore ``base_url``.
- Header precedence and the outbound header set with ``x-trace-id``.
"""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from ai_stream.base.models import (
    BaseRequestOptions,
    RequestOptions,
    build_request_headers,
    merge_request_options,
    normalize_url,
    substitute_path_params,
)


def test_relative_url_is_joined_with_base():
    resolved = merge_request_options(
        BaseRequestOptions(base_url="http://h"),
        RequestOptions(url="/s", method="POST", data={"m": "hi"}),
    )
    assert resolved.url == "http://h/s"  # nosec B101
    assert resolved.method == "POST"  # nosec B101
    assert resolved.data == {"m": "hi"}  # nosec B101
    assert resolved.streaming is True  # nosec B101


def test_path_params_are_encoded_and_first_occurrence_only():
    url = substitute_path_params("/chat/:id/msg/:id", {"id": "a b/c"})
    assert url == "/chat/a%20b%2Fc/msg/:id"  # nosec B101


def test_placeholder_requires_identifier_boundary():
    url = substitute_path_params("/u/:ident/:id", {"id": 7})
    assert url == "/u/:ident/7"  # nosec B101


def test_missing_placeholders_are_left_unsubstituted():
    assert normalize_url("http://h", "/c/:chat_id/:other", {"chat_id": "x"}) == "http://h/c/x/:other"  # nosec B101


def test_absolute_url_ignores_base():
    resolved = merge_request_options(
        BaseRequestOptions(base_url="http://h"),
        RequestOptions(url="https://other.example/s/:id", path_params={"id": "1"}),
    )
    assert resolved.url == "https://other.example/s/1"  # nosec B101


def test_per_call_headers_override_base_headers():
    resolved = merge_request_options(
        BaseRequestOptions(base_url="", headers={"x-app": "a", "x-keep": "k"}),
        RequestOptions(url="http://h/s", headers={"x-app": "b"}),
    )
    assert resolved.headers == {"x-app": "b", "x-keep": "k"}  # nosec B101


def test_outbound_headers_carry_json_and_trace_id_last():
    resolved = merge_request_options(
        BaseRequestOptions(base_url="http://h"),
        RequestOptions(url="/s", headers={"Content-Type": "text/plain", "X-Trace-Id": "spoof"}),
    )
    headers = build_request_headers(resolved, "trace-1")
    assert headers["content-type"] == "text/plain"  # nosec B101 - explicit headers win over the default
    assert headers["x-trace-id"] == "trace-1"  # nosec B101 - trace id always wins


def test_method_is_case_insensitive_and_validated():
    assert RequestOptions(method="post").method == "POST"  # nosec B101
    with pytest.raises(ValidationError):
        RequestOptions(method="TRACE")
    with pytest.raises(ValidationError):
        RequestOptions.model_validate({"url": "/s", "unknown": 1})
