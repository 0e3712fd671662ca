from __future__ import annotations


class LLMError(Exception):
    """Base class for generative-text client failures."""


class LLMConfigError(LLMError):
    """Raised when the client cannot be built (e.g. missing API key)."""


class LLMHTTPError(LLMError):
    def __init__(self, status: int, body: str):
        super().__init__(f"LLM HTTP {status}: {body[:200]}")
        self.status = status
        self.body = body


class LLMResponseError(LLMError):
    """The provider answered 2xx but the payload had no usable content."""
