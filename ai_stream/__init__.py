"""ai_stream package

Client-side controller for a server-pushed, typed AI chat event stream with a
fallback to a single request/response interaction.

Purpose:
    Provide a small, stable API for UI and service code that needs to display
    incrementally arriving content, recover from transient network failures
    and know precisely when a conversational turn has ended.

Public API (re-exported):
    - Version: ``__version__``
    - Controller: :class:`ConnectionController`, :class:`ControllerOptions`
    - State: :class:`ConnectionState`, :class:`ConnectionStatus`,
      :class:`ErrorInfo`, :class:`StateUpdate`
    - Requests: :class:`RequestOptions`
    - Exceptions: :class:`StreamException`, :class:`APIException`,
      :class:`NetworkConnectionException`
    - Logging: :func:`configure_logger`, :class:`HttpLogSink`,
      :class:`LoggerSink`
"""

from .base.errors import APIException, NetworkConnectionException, StreamException
from .base.log_sink import HttpLogSink, LogEntry, LoggerSink, LogSink, Severity
from .base.logging import configure_logger, get_logger
from .base.models import (
    BaseRequestOptions,
    ConnectionState,
    ConnectionStatus,
    ErrorInfo,
    RequestOptions,
    ResolvedRequestOptions,
)
from .base.state_store import StateUpdate
from .base.transport import TransportKind, default_transport_factory
from .config import get_client_config
from .controller import ConnectionController, ControllerOptions

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ConnectionController",
    "ControllerOptions",
    "ConnectionState",
    "ConnectionStatus",
    "ErrorInfo",
    "StateUpdate",
    "BaseRequestOptions",
    "RequestOptions",
    "ResolvedRequestOptions",
    "StreamException",
    "APIException",
    "NetworkConnectionException",
    "LogEntry",
    "LogSink",
    "LoggerSink",
    "HttpLogSink",
    "Severity",
    "TransportKind",
    "default_transport_factory",
    "configure_logger",
    "get_logger",
    "get_client_config",
]
