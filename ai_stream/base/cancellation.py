"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose the cancellation constructs via the canonical
``ai_stream.base.cancellation`` import path while the concrete implementations
live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` lets ``disconnect()`` abort an in-flight request.
"""

from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken"]
