"""One-class-per-file model implementations; import from ``ai_stream.base.models``."""
