"""CLI parser construction for ai-stream.

This module wires argument shapes only. The handler lives in ``cli_actions``
to keep the presentation layer thin and testable.
"""

from __future__ import annotations

import argparse
from typing import get_args

from ..base.models import HttpMethod


def build_parser() -> argparse.ArgumentParser:
    """Construct the ``ai-stream`` argument parser.

    Returns
    -------
    argparse.ArgumentParser
        Parser for a single connect lifecycle. Options left unset fall back to
        the configuration layer (``AI_STREAM_*`` environment variables, the
        optional JSON config file, built-in defaults).
    """
    p = argparse.ArgumentParser(
        prog="ai-stream",
        description="Connect to an AI chat event stream and print accepted messages as JSON lines",
    )
    p.add_argument("--base-url", default=None, help="Prefix for relative --url values")
    p.add_argument("--url", default="", help="Relative path or absolute URL; ':name' placeholders allowed")
    p.add_argument("--method", default="GET", type=str.upper, choices=list(get_args(HttpMethod)))
    p.add_argument("--data", default=None, help="JSON request body")
    p.add_argument("--header", action="append", default=[], metavar="KEY=VALUE")
    p.add_argument("--path-param", action="append", default=[], metavar="NAME=VALUE")
    p.add_argument(
        "--accept",
        action="append",
        default=None,
        metavar="TYPE",
        help="Accepted message type (repeatable)",
    )
    p.add_argument("--no-streaming", dest="streaming", action="store_false", help="Single request/response")
    p.add_argument("--retry-attempts", type=int, default=None)
    p.add_argument("--strict", action="store_true", default=None, help="Log dropped message types")
    p.add_argument("--logger-url", default=None, help="Remote log collector base URL")
    p.add_argument("--log-level", default=None)
    p.add_argument("--plan", action="store_true", help="Print the resolved request and exit (no network)")
    return p


__all__ = ["build_parser"]
