"""
Log sink contract and the local (stdlib ``logging``) implementation.

A sink receives ``(severity, entry)`` pairs from :class:`LifecycleLogger`.
Sinks must not raise from ``emit``; the controller's operations never fail
because of logging.
"""
from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from ..logging import get_logger, log_event
from .log_entry import LogEntry, Severity

_LEVELS = {
    Severity.OK: logging.INFO,
    Severity.WARN: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


@runtime_checkable
class LogSink(Protocol):  # pragma: no cover - structural protocol
    def emit(self, severity: Severity, entry: LogEntry) -> None: ...

    def close(self) -> None: ...


class LoggerSink:
    """Write entries as JSON lines through the package logger.

    Used whenever no remote ``logger_url`` is configured.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or get_logger("ai_stream.lifecycle")

    def emit(self, severity: Severity, entry: LogEntry) -> None:
        wire = entry.to_wire()
        action = wire.pop("action")
        log_event(self._logger, action, level=_LEVELS[severity], **wire)

    def close(self) -> None:
        return None


__all__ = ["LogSink", "LoggerSink"]
