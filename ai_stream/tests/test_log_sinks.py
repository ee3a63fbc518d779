"""Unit tests for the local and HTTP log sinks.

Covers:
- ``LoggerSink`` writes one JSON line at the level matching the severity.
- ``HttpLogSink`` batches entries emitted in one loop iteration into a single
  ``{"events": [...]}`` POST to ``<logger_url>/<app_name>``.
- Delivery failures are logged locally and dropped.
"""
from __future__ import annotations

import asyncio
import json
import logging

import httpx

from ai_stream.base.log_sink import HttpLogSink, LogEntry, LoggerSink, Severity
from ai_stream.base.logging import configure_logger, get_logger


def test_logger_sink_maps_severity_to_level(capsys):
    configure_logger(level=logging.INFO)
    sink = LoggerSink(get_logger("ai_stream.test.sink"))
    sink.emit(Severity.WARN, LogEntry(action="SSE_ERROR", result=Severity.WARN, error_code="NETWORK_FAILURE"))
    line = capsys.readouterr().err.strip()
    data = json.loads(line)
    assert data["level"] == "WARNING"
    assert data["event"] == "SSE_ERROR"
    assert data["errorCode"] == "NETWORK_FAILURE"


def test_http_sink_batches_one_iteration_into_one_request():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append((str(request.url), request.headers["content-type"], json.loads(request.content)))
        return httpx.Response(200)

    sink = HttpLogSink("http://logs/", "AI-api", http_transport=httpx.MockTransport(handler))

    async def _run():
        sink.emit(Severity.OK, LogEntry(action="SSE_START"))
        sink.emit(Severity.OK, LogEntry(action="SSE_OPEN"))
        assert sink.pending == 2
        await sink.aclose()

    asyncio.run(_run())
    assert len(requests) == 1
    url, content_type, body = requests[0]
    assert url == "http://logs/AI-api"
    assert content_type == "application/json"
    assert [e["action"] for e in body["events"]] == ["SSE_START", "SSE_OPEN"]
    assert sink.pending == 0


def test_http_sink_without_loop_buffers_until_flush():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(json.loads(request.content))
        return httpx.Response(204)

    sink = HttpLogSink("http://logs", http_transport=httpx.MockTransport(handler))
    sink.emit(Severity.OK, LogEntry(action="SSE_START"))
    assert sink.pending == 1 and requests == []
    asyncio.run(sink.flush())
    assert len(requests) == 1 and sink.pending == 0


def test_http_sink_delivery_failure_is_dropped(capsys):
    configure_logger(level=logging.INFO)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    sink = HttpLogSink("http://logs", http_transport=httpx.MockTransport(handler))
    sink.emit(Severity.ERROR, LogEntry(action="SSE_ERROR", result=Severity.ERROR))
    asyncio.run(sink.aclose())
    assert sink.pending == 0
    err = capsys.readouterr().err
    assert "LOG_DELIVERY_FAILED" in err


def test_flush_scheduled_by_close_never_fails(capsys):
    configure_logger(level=logging.INFO)

    def handler(request: httpx.Request) -> httpx.Response:
        raise RuntimeError("collector exploded")

    sink = HttpLogSink("http://logs", http_transport=httpx.MockTransport(handler))

    async def main():
        sink.emit(Severity.OK, LogEntry(action="SSE_DISCONNECTED", result=Severity.OK))
        sink.close()
        tasks = list(sink._tasks)
        return await asyncio.gather(*tasks, return_exceptions=True)

    results = asyncio.run(main())
    assert results == [None]
    assert "LOG_DELIVERY_FAILED" in capsys.readouterr().err


def test_closed_http_sink_ignores_new_entries():
    sink = HttpLogSink("http://logs")
    sink.close()
    sink.emit(Severity.OK, LogEntry(action="SSE_START"))
    assert sink.pending == 0
