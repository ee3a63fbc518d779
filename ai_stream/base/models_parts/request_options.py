"""
Request option DTOs and the merger resolving them into one request descriptor.

Purpose
-------
``BaseRequestOptions`` is fixed when the controller is built, ``RequestOptions``
arrives with each ``connect()`` call, and ``merge_request_options`` combines
both into an immutable ``ResolvedRequestOptions`` with a fully qualified URL.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation of caller-supplied mappings.

URL rules
---------
- ``:name`` placeholders are replaced by percent-encoded ``path_params``
  values (first occurrence only). A placeholder must not be followed by
  another identifier character, so ``:id`` never matches inside ``:ident``.
- Placeholders without a matching parameter stay in the URL as-is.
- Absolute per-call URLs (``scheme://...``) ignore ``base_url``.
"""
from __future__ import annotations

import re
from typing import Any, Dict, Literal, Mapping
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...config.defaults import DEFAULT_REQUEST_METHOD, JSON_CONTENT_TYPE, TRACE_HEADER

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]

_ABSOLUTE_URL = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")
# Characters encodeURIComponent leaves untouched besides the unreserved set.
_URI_COMPONENT_SAFE = "!~*'()"


class BaseRequestOptions(BaseModel):
    """Options fixed at controller construction.

    Attributes:
        base_url: Prefix for relative per-call URLs.
        headers: Headers sent with every request unless overridden per call.
    """

    model_config = ConfigDict(frozen=True)

    base_url: str = ""
    headers: Dict[str, str] = Field(default_factory=dict)


class RequestOptions(BaseModel):
    """Per-``connect()`` request description.

    Attributes:
        url: Relative path (joined to ``base_url``) or absolute URL.
        method: HTTP method, ``GET`` by default.
        headers: Per-call headers; override base headers key by key.
        path_params: Values substituted into ``:name`` placeholders.
        data: JSON-serializable request body.
        streaming: ``True`` (default) for the event stream, ``False`` for a
            single request/response.
    """

    model_config = ConfigDict(extra="forbid")

    url: str = ""
    method: HttpMethod = DEFAULT_REQUEST_METHOD
    headers: Dict[str, str] = Field(default_factory=dict)
    path_params: Dict[str, Any] = Field(default_factory=dict)
    data: Any = None
    streaming: bool = True

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


class ResolvedRequestOptions(BaseModel):
    """Fully resolved request handed to a transport."""

    model_config = ConfigDict(frozen=True)

    url: str
    method: HttpMethod = DEFAULT_REQUEST_METHOD
    headers: Dict[str, str] = Field(default_factory=dict)
    data: Any = None
    streaming: bool = True


def substitute_path_params(pattern: str, params: Mapping[str, Any] | None) -> str:
    """Replace ``:name`` placeholders in ``pattern`` with encoded ``params`` values."""
    if not params:
        return pattern
    url = pattern
    for name, value in params.items():
        encoded = quote(str(value), safe=_URI_COMPONENT_SAFE)
        placeholder = re.compile(rf":{re.escape(name)}(?![A-Za-z0-9_])")
        url = placeholder.sub(lambda _m: encoded, url, count=1)
    return url


def is_absolute_url(url: str) -> bool:
    return bool(_ABSOLUTE_URL.match(url))


def normalize_url(base_url: str, url: str, path_params: Mapping[str, Any] | None = None) -> str:
    """Return the fully qualified request URL."""
    path = substitute_path_params(url, path_params)
    if is_absolute_url(url):
        return path
    return f"{base_url}{path}"


def merge_request_options(
    base: BaseRequestOptions,
    per_call: RequestOptions,
) -> ResolvedRequestOptions:
    """Combine construction-time and per-call options into one descriptor."""
    return ResolvedRequestOptions(
        url=normalize_url(base.base_url, per_call.url, per_call.path_params),
        method=per_call.method,
        headers={**base.headers, **per_call.headers},
        data=per_call.data,
        streaming=per_call.streaming,
    )


def build_request_headers(options: ResolvedRequestOptions, trace_id: str) -> Dict[str, str]:
    """Outbound headers: JSON content type, merged headers, then the trace id.

    Header names are lower-cased so later sources replace earlier ones regardless
    of the caller's spelling.
    """
    headers = {"content-type": JSON_CONTENT_TYPE}
    headers.update({k.lower(): v for k, v in options.headers.items()})
    headers[TRACE_HEADER] = trace_id
    return headers


__all__ = [
    "HttpMethod",
    "BaseRequestOptions",
    "RequestOptions",
    "ResolvedRequestOptions",
    "substitute_path_params",
    "is_absolute_url",
    "normalize_url",
    "merge_request_options",
    "build_request_headers",
]
