"""Unit tests for transport failure classification.

Covers:
- Structured bodies with ``error_code`` become ``APIException``.
- Streaming errors default to status 200; single-shot keeps the HTTP status.
- Unparseable or code-less bodies fall back to ``NetworkConnectionException``
  with the most specific original message.
"""
from __future__ import annotations

import json

import httpx

from ai_stream.base.errors import (
    APIException,
    NetworkConnectionException,
    TransportFailure,
    classify_failure,
)

URL = "http://h/s"


def test_structured_stream_error_is_api_exception_with_status_200():
    data = json.dumps({"error_code": "RATE_LIMITED", "error_message": "slow down", "error_id": "e-1"})
    exc = classify_failure(TransportFailure(url=URL, data=data))
    assert isinstance(exc, APIException)  # nosec B101 - assert is appropriate in unit tests
    assert exc.status_code == 200  # nosec B101
    assert exc.error_code == "RATE_LIMITED"  # nosec B101
    assert exc.message == "slow down"  # nosec B101
    assert exc.error_id == "e-1"  # nosec B101
    assert exc.request_url == URL  # nosec B101
    assert exc.raw_body["error_code"] == "RATE_LIMITED"  # nosec B101


def test_single_shot_error_keeps_http_status_and_id_fallback():
    data = json.dumps({"error_code": "VALIDATION_ERROR", "error_message": "bad input", "id": 42})
    exc = classify_failure(TransportFailure(url=URL, data=data, status_code=400, status_text="Bad Request"))
    assert isinstance(exc, APIException)  # nosec B101
    assert exc.status_code == 400  # nosec B101
    assert exc.error_id == "42"  # nosec B101


def test_missing_error_message_uses_placeholder():
    exc = classify_failure(TransportFailure(url=URL, data=json.dumps({"error_code": "X"})))
    assert exc.message == "[No Response]"  # nosec B101


def test_code_less_body_is_network_failure_with_status_text():
    exc = classify_failure(
        TransportFailure(url=URL, data=json.dumps({"detail": "x"}), status_code=502, status_text="Bad Gateway")
    )
    assert isinstance(exc, NetworkConnectionException)  # nosec B101
    assert exc.message == f"Failed to connect: {URL}"  # nosec B101
    assert exc.original_error_message == "Bad Gateway"  # nosec B101
    assert exc.error_code == "NETWORK_FAILURE"  # nosec B101


def test_unparseable_data_is_kept_as_original_message():
    exc = classify_failure(TransportFailure(url=URL, data="<html>oops</html>"))
    assert isinstance(exc, NetworkConnectionException)  # nosec B101
    assert exc.original_error_message == "<html>oops</html>"  # nosec B101


def test_cause_text_and_unknown_fallback():
    exc = classify_failure(TransportFailure(url=URL, cause=httpx.ConnectError("refused")))
    assert exc.original_error_message == "refused"  # nosec B101
    bare = classify_failure(TransportFailure(url=URL))
    assert bare.original_error_message == "UNKNOWN"  # nosec B101


def test_exceptions_stay_hashable():
    exc = classify_failure(TransportFailure(url=URL))
    assert exc in {exc}  # nosec B101 - dataclass exceptions use identity equality
