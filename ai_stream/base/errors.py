"""Stream failure taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``ai_stream.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.stream_exception import StreamException
from .errors_parts.api_exception import APIException
from .errors_parts.network_connection_exception import (
    NETWORK_FAILURE_CODE,
    NetworkConnectionException,
)
from .errors_parts.transport_failure import TransportFailure
from .errors_parts.classification import classify_failure

__all__ = [
    "StreamException",
    "APIException",
    "NetworkConnectionException",
    "NETWORK_FAILURE_CODE",
    "TransportFailure",
    "classify_failure",
]
