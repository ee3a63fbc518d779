"""
Transport-level failure without a structured server payload.
"""
from __future__ import annotations

from dataclasses import dataclass

from .stream_exception import StreamException

NETWORK_FAILURE_CODE = "NETWORK_FAILURE"


@dataclass(eq=False)
class NetworkConnectionException(StreamException):
    """Connection could not be established or broke without an error body.

    Attributes:
        message: Human-readable summary (``"Failed to connect: <url>"``).
        request_url: Fully qualified URL of the failing request.
        original_error_message: Whatever the transport reported (HTTP status
            text, raw event data, exception text) or ``"UNKNOWN"``.
    """

    message: str
    request_url: str
    original_error_message: str = "UNKNOWN"
    error_code: str = NETWORK_FAILURE_CODE


__all__ = ["NetworkConnectionException", "NETWORK_FAILURE_CODE"]
