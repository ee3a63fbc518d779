"""
Severity routing for exceptions reaching the lifecycle logger.

Network failures and ordinary API errors are warnings; validation-class API
errors and anything outside the stream taxonomy (runtime errors, including
failures raised by user callbacks) are hard errors.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Dict, Optional

from ..errors import APIException, NetworkConnectionException
from .log_entry import Severity

NETWORK_FAILURE = "NETWORK_FAILURE"
API_VALIDATION_ERROR = "API_VALIDATION_ERROR"
RUNTIME_ERROR = "RUNTIME_ERROR"
VALIDATION_STATUS = 400
VALIDATION_CODE = "VALIDATION_ERROR"


@dataclass(frozen=True)
class SeverityDecision:
    """How an exception is logged: severity, log error code, extra info fields."""

    severity: Severity
    error_code: str
    info: Dict[str, Optional[str]] = field(default_factory=dict)


def is_validation_error(exc: BaseException) -> bool:
    """True for API errors the server flagged as request validation failures."""
    return (
        isinstance(exc, APIException)
        and exc.status_code == VALIDATION_STATUS
        and exc.error_code == VALIDATION_CODE
    )


def classify_severity(exc: BaseException) -> SeverityDecision:
    """Map an exception to its :class:`SeverityDecision`."""
    if isinstance(exc, NetworkConnectionException):
        return SeverityDecision(
            Severity.WARN,
            NETWORK_FAILURE,
            {"api_url": exc.request_url, "original_message": exc.original_error_message},
        )
    if isinstance(exc, APIException):
        info: Dict[str, Optional[str]] = {
            "api_url": exc.request_url,
            "api_response": json.dumps(exc.raw_body, default=str),
            "api_error_id": exc.error_id,
            "api_error_code": exc.error_code,
        }
        if is_validation_error(exc):
            return SeverityDecision(Severity.ERROR, API_VALIDATION_ERROR, info)
        return SeverityDecision(Severity.WARN, f"API_ERROR_{exc.status_code}", info)
    return SeverityDecision(Severity.ERROR, RUNTIME_ERROR, {"exception_type": type(exc).__name__})


__all__ = [
    "SeverityDecision",
    "classify_severity",
    "is_validation_error",
    "NETWORK_FAILURE",
    "API_VALIDATION_ERROR",
    "RUNTIME_ERROR",
]
