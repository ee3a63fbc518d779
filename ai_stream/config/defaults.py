"""ai_stream.config.defaults
=========================

Central place for small, stable default values used across the ai_stream
package. These defaults can be overridden via environment variables, an
optional JSON config file, or in-code overrides (see ``ai_stream.config``),
but provide sensible fallbacks for local development and tests.

This module intentionally avoids importing from other ai_stream packages to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Controller defaults ----

# Consecutive classified stream errors tolerated before a hard disconnect.
DEFAULT_RETRY_ATTEMPTS = 3
# Message ``type`` discriminators surfaced to callers when none are configured.
DEFAULT_ACCEPT_MSG_TYPES = ("agent_response",)
# Reserved discriminator signalling graceful server-initiated termination.
END_MESSAGE_TYPE = "end"
# Non-accepted message types are dropped silently unless strict mode is on.
DEFAULT_STRICT_MESSAGE_TYPES = False
DEFAULT_REQUEST_METHOD = "GET"

# ---- Transport defaults ----

# Delay before the streaming transport reopens after a failure (seconds).
# The server may override it with the SSE ``retry:`` field.
DEFAULT_RECONNECT_INTERVAL_SECONDS = 3.0
DEFAULT_CONNECT_TIMEOUT_SECONDS = 10.0
# Read timeout for single-shot requests; streaming reads are unbounded.
DEFAULT_REQUEST_TIMEOUT_SECONDS = 60.0
TRACE_HEADER = "x-trace-id"
JSON_CONTENT_TYPE = "application/json"
EVENT_STREAM_CONTENT_TYPE = "text/event-stream"

# ---- Remote log delivery ----

DEFAULT_LOGGER_APP_NAME = "AI-api"
LOG_INFO_VALUE_MAX_CHARS = 500_000
LOG_ERROR_MESSAGE_MAX_CHARS = 1_000

# ---- Environment variable names ----

ENV_PREFIX = "AI_STREAM_"
ENV_CONFIG_FILE = "AI_STREAM_CONFIG_FILE"
ENV_LOG_LEVEL = "AI_STREAM_LOG_LEVEL"
