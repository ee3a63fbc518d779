"""CLI action handlers.

Purpose
-------
Translate parsed arguments into a :class:`ConnectionController` lifecycle,
print accepted messages to stdout as JSON lines and map the outcome to an
exit code. No top-level side effects; safe to import in tests.

Fallback & Error Semantics
--------------------------
- Malformed ``KEY=VALUE`` pairs or ``--data`` JSON are reported as JSON on
  stderr with exit code 2; no request is made.
- A lifecycle that ends with an error in the snapshot exits with 1.
- ``--plan`` resolves the request without any network I/O.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any, Dict, List, Optional, TextIO

import httpx

from ..base.log_sink import HttpLogSink
from ..base.logging import configure_logger
from ..base.models import RequestOptions, build_request_headers, merge_request_options
from ..controller import ConnectionController, ControllerOptions


class UsageError(ValueError):
    """Invalid command-line input detected before connecting."""


def parse_pairs(values: List[str], flag: str) -> Dict[str, str]:
    """Parse repeated ``KEY=VALUE`` arguments into a mapping."""
    out: Dict[str, str] = {}
    for raw in values:
        key, sep, value = raw.partition("=")
        if not sep or not key.strip():
            raise UsageError(f"{flag} expects KEY=VALUE, got {raw!r}")
        out[key.strip()] = value
    return out


def build_request(args: argparse.Namespace) -> RequestOptions:
    """Per-call request options from parsed arguments."""
    data: Any = None
    if args.data is not None:
        try:
            data = json.loads(args.data)
        except ValueError as exc:
            raise UsageError(f"--data is not valid JSON: {exc}") from exc
    return RequestOptions(
        url=args.url,
        method=args.method,
        headers=parse_pairs(args.header, "--header"),
        path_params=parse_pairs(args.path_param, "--path-param"),
        data=data,
        streaming=args.streaming,
    )


def build_options(args: argparse.Namespace, **callbacks: Any) -> ControllerOptions:
    return ControllerOptions.from_config(
        base_url=args.base_url,
        logger_url=args.logger_url,
        retry_attempts=args.retry_attempts,
        accept_msg_types=tuple(args.accept) if args.accept else None,
        strict_message_types=args.strict,
        **callbacks,
    )


def plan_connect(args: argparse.Namespace) -> Dict[str, Any]:
    """Return the request the controller would issue (trace id left as a placeholder)."""
    options = build_options(args)
    resolved = merge_request_options(options.base_request, build_request(args))
    return {
        "url": resolved.url,
        "method": resolved.method,
        "headers": build_request_headers(resolved, "<trace-id>"),
        "data": resolved.data,
        "streaming": resolved.streaming,
    }


async def run_connect(
    args: argparse.Namespace,
    *,
    out: TextIO,
    http_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> int:
    """Run one lifecycle to completion and return the exit code."""

    def _print_message(payload: Any) -> None:
        print(json.dumps(payload, default=str, ensure_ascii=False), file=out, flush=True)

    controller = ConnectionController(
        build_options(args, on_message=_print_message),
        http_transport=http_transport,
    )
    request = build_request(args)
    try:
        controller.connect(request)
        await controller.wait_closed()
    finally:
        failed = controller.state.error is not None
        controller.disconnect()
        sink = controller.log_sink
        if isinstance(sink, HttpLogSink):
            await sink.aclose()
        controller.destroy()
    return 1 if failed else 0


def _usage_failure(exc: UsageError) -> int:
    print(json.dumps({"error": str(exc)}), file=sys.stderr)
    return 2


def handle_connect(
    args: argparse.Namespace,
    *,
    out: Optional[TextIO] = None,
    http_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> int:
    """Execute the parsed command.

    Returns
    -------
    int
        0 on a clean close, 1 when the lifecycle ended in error, 2 on invalid
        input, 130 when interrupted.
    """
    out = out or sys.stdout
    if args.log_level:
        configure_logger(level=args.log_level)
    try:
        if args.plan:
            print(json.dumps(plan_connect(args), default=str, indent=2), file=out)
            return 0
        build_request(args)
        return asyncio.run(run_connect(args, out=out, http_transport=http_transport))
    except UsageError as exc:
        return _usage_failure(exc)
    except KeyboardInterrupt:
        return 130


__all__ = [
    "UsageError",
    "parse_pairs",
    "build_request",
    "build_options",
    "plan_connect",
    "run_connect",
    "handle_connect",
]
