"""
Domain models public surface.

This module re-exports the implementations under
``ai_stream.base.models_parts`` to keep a single stable import path.
"""

from .models_parts.connection_state import (
    INITIAL_STATE,
    ConnectionState,
    ConnectionStatus,
    ErrorInfo,
)
from .models_parts.request_options import (
    BaseRequestOptions,
    HttpMethod,
    RequestOptions,
    ResolvedRequestOptions,
    build_request_headers,
    merge_request_options,
    normalize_url,
    substitute_path_params,
)
from .models_parts.stream_message import (
    AcceptedMessage,
    EndOfStream,
    StreamMessage,
    UnrecognizedMessage,
    classify_message,
)

__all__ = [
    "ConnectionStatus",
    "ConnectionState",
    "ErrorInfo",
    "INITIAL_STATE",
    "HttpMethod",
    "BaseRequestOptions",
    "RequestOptions",
    "ResolvedRequestOptions",
    "merge_request_options",
    "normalize_url",
    "substitute_path_params",
    "build_request_headers",
    "StreamMessage",
    "AcceptedMessage",
    "EndOfStream",
    "UnrecognizedMessage",
    "classify_message",
]
