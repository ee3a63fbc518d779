"""Typed construction parameters for :class:`ConnectionController`.

Purpose
-------
Capture everything fixed for the lifetime of a controller: base request
options, lifecycle callbacks, remote logging target, retry ceiling and the
accepted message-type set.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation; callbacks are arbitrary callables.

Failure modes & side effects
----------------------------
- Pure data container. ``ValidationError`` is raised for malformed values
  (e.g. a negative ``retry_attempts``).

Notes
-----
- ``from_config`` fills unset fields from :func:`ai_stream.config.get_client_config`
  (defaults, optional JSON file, ``AI_STREAM_*`` environment variables).
"""
from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import get_client_config
from ..config.defaults import (
    DEFAULT_ACCEPT_MSG_TYPES,
    DEFAULT_LOGGER_APP_NAME,
    DEFAULT_RECONNECT_INTERVAL_SECONDS,
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_STRICT_MESSAGE_TYPES,
)
from ..base.models import BaseRequestOptions


class ControllerOptions(BaseModel):
    """Controller construction parameters.

    Attributes
    ----------
    base_url / headers:
        Base request options merged into every ``connect()``.
    on_open / on_message / on_error / on_disconnect:
        Optional lifecycle callbacks. ``on_message`` receives the accepted
        payload, ``on_error`` the classified exception.
    logger_url:
        Remote log collector; when unset entries go to the local logger.
    logger_app_name:
        Path segment appended to ``logger_url``.
    retry_attempts:
        Consecutive streaming errors tolerated before a hard disconnect.
    accept_msg_types:
        Message ``type`` values surfaced to callers.
    strict_message_types:
        Log a WARN entry for every dropped, non-accepted message type.
    reconnect_interval:
        Seconds the streaming transport waits before reconnecting.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    base_url: str = ""
    headers: Dict[str, str] = Field(default_factory=dict)
    on_open: Optional[Callable[[], Any]] = None
    on_message: Optional[Callable[[Any], Any]] = None
    on_error: Optional[Callable[[BaseException], Any]] = None
    on_disconnect: Optional[Callable[[], Any]] = None
    logger_url: Optional[str] = None
    logger_app_name: str = DEFAULT_LOGGER_APP_NAME
    retry_attempts: int = Field(default=DEFAULT_RETRY_ATTEMPTS, ge=1)
    accept_msg_types: Tuple[str, ...] = DEFAULT_ACCEPT_MSG_TYPES
    strict_message_types: bool = DEFAULT_STRICT_MESSAGE_TYPES
    reconnect_interval: float = Field(default=DEFAULT_RECONNECT_INTERVAL_SECONDS, ge=0)

    @field_validator("accept_msg_types", mode="before")
    @classmethod
    def _coerce_types(cls, value: Any) -> Any:
        if isinstance(value, str):
            return (value,)
        if value is None:
            return DEFAULT_ACCEPT_MSG_TYPES
        if isinstance(value, (list, set, frozenset)):
            return tuple(value)
        return value

    @property
    def base_request(self) -> BaseRequestOptions:
        return BaseRequestOptions(base_url=self.base_url, headers=self.headers)

    @classmethod
    def from_config(cls, **overrides: Any) -> "ControllerOptions":
        """Build options from the configuration layer; ``overrides`` win."""
        config_keys = {k: overrides.pop(k) for k in list(overrides) if k in _CONFIG_FIELDS}
        cfg = get_client_config(config_keys)
        return cls(**cfg, **overrides)


_CONFIG_FIELDS = frozenset(
    {
        "base_url",
        "logger_url",
        "logger_app_name",
        "retry_attempts",
        "accept_msg_types",
        "strict_message_types",
        "reconnect_interval",
    }
)


__all__ = ["ControllerOptions"]
