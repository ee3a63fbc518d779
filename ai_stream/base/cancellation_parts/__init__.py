"""Cancellation implementation parts; import from ``ai_stream.base.cancellation``."""
