"""Small shared helpers for the base layer."""

from .json_parse import parse_with_date, safe_parse

__all__ = ["parse_with_date", "safe_parse"]
