"""
Lifecycle logger used by the connection controller.

Builds :class:`LogEntry` records for milestones (``info``) and failures
(``exception``) and hands them to a :class:`LogSink`. Every entry carries the
lifecycle trace id in ``info["trace_id"]``.
"""
from __future__ import annotations

from typing import Mapping, Optional

from .log_entry import LogEntry, Severity
from .severity import classify_severity
from .sinks import LogSink

InfoMap = Mapping[str, Optional[str]]
StatsMap = Mapping[str, Optional[float]]


class LifecycleLogger:
    """Structured milestone/failure logging bound to one sink."""

    def __init__(self, sink: LogSink) -> None:
        self.sink = sink

    def info(
        self,
        action: str,
        *,
        trace_id: Optional[str],
        info: Optional[InfoMap] = None,
        stats: Optional[StatsMap] = None,
        elapsed_time: float = 0,
    ) -> None:
        entry = LogEntry(
            action=action,
            result=Severity.OK,
            elapsed_time=elapsed_time,
            info={"trace_id": trace_id, **(info or {})},
            stats=dict(stats or {}),
        )
        self.sink.emit(Severity.OK, entry)

    def warn(
        self,
        action: str,
        *,
        trace_id: Optional[str],
        error_code: str,
        error_message: str,
        info: Optional[InfoMap] = None,
    ) -> None:
        entry = LogEntry(
            action=action,
            result=Severity.WARN,
            info={"trace_id": trace_id, **(info or {})},
            error_code=error_code,
            error_message=error_message,
        )
        self.sink.emit(Severity.WARN, entry)

    def exception(
        self,
        exc: BaseException,
        action: str,
        *,
        trace_id: Optional[str],
        info: Optional[InfoMap] = None,
        stats: Optional[StatsMap] = None,
    ) -> LogEntry:
        """Log ``exc`` with the severity chosen by :func:`classify_severity`.

        Returns the emitted entry so callers (and tests) can inspect it.
        """
        decision = classify_severity(exc)
        message = getattr(exc, "message", None) or str(exc) or type(exc).__name__
        entry = LogEntry(
            action=action,
            result=decision.severity,
            info={"trace_id": trace_id, **(info or {}), **decision.info},
            stats=dict(stats or {}),
            error_code=decision.error_code,
            error_message=message,
        )
        self.sink.emit(decision.severity, entry)
        return entry


__all__ = ["LifecycleLogger"]
