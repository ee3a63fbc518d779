"""
Structured API error exception type.

Raised (or rather, produced by classification) when the server reports a
failure with a structured body carrying an ``error_code`` field.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .stream_exception import StreamException


@dataclass(eq=False)
class APIException(StreamException):
    """Represents a server-reported error with a structured payload.

    Attributes:
        message: Server supplied ``error_message`` (``"[No Response]"`` if absent).
        status_code: HTTP status. Errors delivered inside an open event stream
            carry ``200`` because the HTTP exchange itself succeeded.
        request_url: Fully qualified URL of the failing request.
        raw_body: Parsed error payload, kept for diagnostics and logging.
        error_id: Optional server-side error identifier.
        error_code: Server error code (e.g. ``"VALIDATION_ERROR"``).
    """

    message: str
    status_code: int
    request_url: str
    raw_body: Any = None
    error_id: Optional[str] = None
    error_code: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.status_code} {self.error_code or '-'}: {self.message}"


__all__ = ["APIException"]
