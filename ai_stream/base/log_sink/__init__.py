"""Lifecycle log records, severity routing and sinks.

Kept apart from ``log_support`` (formatter/context used by ``base.logging``)
because the sinks themselves log through ``base.logging``.
"""

from .log_entry import LogEntry, Severity
from .severity import (
    API_VALIDATION_ERROR,
    NETWORK_FAILURE,
    RUNTIME_ERROR,
    SeverityDecision,
    classify_severity,
    is_validation_error,
)
from .sinks import LogSink, LoggerSink
from .http_sink import HttpLogSink
from .lifecycle_logger import LifecycleLogger

__all__ = [
    "LogEntry",
    "Severity",
    "SeverityDecision",
    "classify_severity",
    "is_validation_error",
    "NETWORK_FAILURE",
    "API_VALIDATION_ERROR",
    "RUNTIME_ERROR",
    "LogSink",
    "LoggerSink",
    "HttpLogSink",
    "LifecycleLogger",
]
