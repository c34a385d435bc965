"""Chat0 backend: streaming relay for third-party LLM providers."""
