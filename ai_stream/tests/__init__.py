"""ai_stream test suite."""
