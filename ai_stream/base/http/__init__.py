"""HTTP utilities package.

Exposes the async client factory shared by transports and log sinks.
"""

from .client import build_async_client, build_timeout, STREAM_PURPOSE

__all__ = ["build_async_client", "build_timeout", "STREAM_PURPOSE"]
