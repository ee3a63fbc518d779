"""
Failure classification mapping raw transport signals to the exception taxonomy.

Implements structured-payload detection for server error bodies and falls back
to :class:`NetworkConnectionException` whenever no ``error_code`` can be read.
Classification is total: it never raises.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional

from ..utils.json_parse import safe_parse
from .api_exception import APIException
from .network_connection_exception import NetworkConnectionException
from .stream_exception import StreamException
from .transport_failure import TransportFailure

# Status reported for errors delivered inside an already-open event stream.
STREAM_ERROR_STATUS = 200
NO_RESPONSE_MESSAGE = "[No Response]"
UNKNOWN_ORIGIN = "UNKNOWN"


def _structured_payload(data: Optional[str]) -> Optional[Mapping[str, Any]]:
    """Return the parsed error body when it is an object carrying ``error_code``."""
    parsed = safe_parse(data)
    if isinstance(parsed, Mapping) and parsed.get("error_code"):
        return parsed
    return None


def _original_message(failure: TransportFailure) -> str:
    """Pick the most specific description the transport reported.

    Checked in order: HTTP status text, raw data, cause text.
    """
    for candidate in (failure.status_text, failure.data):
        if candidate:
            return candidate
    if failure.cause is not None and str(failure.cause):
        return str(failure.cause)
    return UNKNOWN_ORIGIN


def classify_failure(failure: TransportFailure) -> StreamException:
    """Classify a raw transport failure.

    Precedence:
        1. Body with an ``error_code`` field -> :class:`APIException`
           (status from the HTTP response, ``200`` inside an open stream).
        2. Anything else, including unparseable bodies ->
           :class:`NetworkConnectionException`.
    """
    payload = _structured_payload(failure.data)
    if payload is not None:
        error_id = payload.get("error_id") or payload.get("id")
        return APIException(
            message=str(payload.get("error_message") or NO_RESPONSE_MESSAGE),
            status_code=failure.status_code if failure.status_code is not None else STREAM_ERROR_STATUS,
            request_url=failure.url,
            raw_body=dict(payload),
            error_id=str(error_id) if error_id is not None else None,
            error_code=str(payload["error_code"]),
        )
    return NetworkConnectionException(
        message=f"Failed to connect: {failure.url}",
        request_url=failure.url,
        original_error_message=_original_message(failure),
    )


__all__ = [
    "classify_failure",
    "STREAM_ERROR_STATUS",
    "NO_RESPONSE_MESSAGE",
]
