"""Unified configuration layer for the stream controller.

Goals
-----
* Centralize defaults (retry ceiling, accepted message types, reconnect delay).
* Merge sources in a predictable order:
    1. Built-in defaults
    2. Optional external JSON config file pointed to by AI_STREAM_CONFIG_FILE
    3. Environment variables (e.g. AI_STREAM_BASE_URL, AI_STREAM_RETRY_ATTEMPTS)
    4. In-code overrides passed to helper
* Provide a single call site: ``get_client_config(overrides)``.

Environment Variable Conventions
--------------------------------
AI_STREAM_<FIELD> where FIELD is the upper-cased config key, e.g.
AI_STREAM_LOGGER_URL, AI_STREAM_ACCEPT_MSG_TYPES (comma separated).

External Config File (Optional)
-------------------------------
A JSON object with the same keys as the returned mapping::

    {"base_url": "https://chat.example.com", "retry_attempts": 5}

Public API
----------
* get_client_config(overrides: dict | None = None) -> dict
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Optional
import json
import os

from .defaults import (
    DEFAULT_ACCEPT_MSG_TYPES,
    DEFAULT_LOGGER_APP_NAME,
    DEFAULT_RECONNECT_INTERVAL_SECONDS,
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_STRICT_MESSAGE_TYPES,
    ENV_CONFIG_FILE,
    ENV_PREFIX,
)


DEFAULTS: Dict[str, Any] = {
    "base_url": "",
    "logger_url": None,
    "logger_app_name": DEFAULT_LOGGER_APP_NAME,
    "retry_attempts": DEFAULT_RETRY_ATTEMPTS,
    "accept_msg_types": DEFAULT_ACCEPT_MSG_TYPES,
    "strict_message_types": DEFAULT_STRICT_MESSAGE_TYPES,
    "reconnect_interval": DEFAULT_RECONNECT_INTERVAL_SECONDS,
}


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_types(value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


ENV_COERCERS: Dict[str, Callable[[str], Any]] = {
    "base_url": str,
    "logger_url": str,
    "logger_app_name": str,
    "retry_attempts": int,
    "accept_msg_types": _parse_types,
    "strict_message_types": _parse_bool,
    "reconnect_interval": float,
}


def _load_external_config() -> Dict[str, Any]:
    """Read the optional JSON config file; unreadable or non-object files yield ``{}``."""
    path = os.getenv(ENV_CONFIG_FILE)
    if not path:
        return {}
    p = Path(path)
    if not p.is_file():
        return {}
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    if not isinstance(data, dict):
        return {}
    return {k: v for k, v in data.items() if k in DEFAULTS}


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field, coerce in ENV_COERCERS.items():
        raw = os.getenv(f"{ENV_PREFIX}{field.upper()}")
        if raw is None or raw.strip() == "":
            continue
        try:
            out[field] = coerce(raw)
        except ValueError:
            # Malformed numeric env values fall back to the lower layers.
            continue
    return out


def get_client_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged controller configuration.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    ``None`` override values are ignored so callers can pass optional CLI flags
    straight through.
    """
    cfg: Dict[str, Any] = dict(DEFAULTS)
    cfg |= _load_external_config()
    cfg |= _env_overrides()
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    if isinstance(cfg.get("accept_msg_types"), list):
        cfg["accept_msg_types"] = tuple(cfg["accept_msg_types"])
    return cfg


__all__ = [
    "get_client_config",
    "DEFAULTS",
]
