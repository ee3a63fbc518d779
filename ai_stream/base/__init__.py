"""
Stream Base Package

Building blocks composed by the connection controller:
- Models: connection snapshot, request options, tagged message variants
- Errors: failure taxonomy and classification of raw transport failures
- StateStore: per-instance snapshot holder with synchronous fan-out
- Transports: streaming (Server-Sent Events) and single-shot HTTP
- Logging: JSON structured logging and lifecycle log sinks
"""

from .cancellation import CancellationToken
from .errors import (
    APIException,
    NetworkConnectionException,
    StreamException,
    TransportFailure,
    classify_failure,
)
from .models import (
    AcceptedMessage,
    BaseRequestOptions,
    ConnectionState,
    ConnectionStatus,
    EndOfStream,
    ErrorInfo,
    RequestOptions,
    ResolvedRequestOptions,
    UnrecognizedMessage,
    classify_message,
    merge_request_options,
)
from .state_store import StateStore, StateUpdate

__all__ = [
    # Models
    "ConnectionStatus",
    "ConnectionState",
    "ErrorInfo",
    "BaseRequestOptions",
    "RequestOptions",
    "ResolvedRequestOptions",
    "merge_request_options",
    "AcceptedMessage",
    "EndOfStream",
    "UnrecognizedMessage",
    "classify_message",
    # Errors
    "StreamException",
    "APIException",
    "NetworkConnectionException",
    "TransportFailure",
    "classify_failure",
    # State
    "StateStore",
    "StateUpdate",
    # Cancellation
    "CancellationToken",
]
