"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `ai_stream.base.errors` for the stable surface.
"""

from .stream_exception import StreamException
from .api_exception import APIException
from .network_connection_exception import NetworkConnectionException, NETWORK_FAILURE_CODE
from .transport_failure import TransportFailure
from .classification import classify_failure

__all__ = [
    "StreamException",
    "APIException",
    "NetworkConnectionException",
    "NETWORK_FAILURE_CODE",
    "TransportFailure",
    "classify_failure",
]
