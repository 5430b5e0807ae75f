"""Typed failures from the Gemini generateContent API."""

from __future__ import annotations


class GeminiError(RuntimeError):
    """Generic Gemini failure. Subclasses narrow the cause."""

    category = "generic"

    def __init__(self, message: str, *, model: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.model = model
        self.status_code = status_code


class GeminiNotConfiguredError(GeminiError):
    """API key (or another required setting) is missing."""

    category = "not_configured"


class GeminiAuthError(GeminiError):
    """HTTP 401/403: bad key, API not enabled, or billing disabled."""

    category = "auth"


class GeminiModelNotFoundError(GeminiError):
    """HTTP 404: the model name does not exist for this key/endpoint."""

    category = "model_not_found"


class GeminiNetworkError(GeminiError):
    """Transport failure before a response arrived."""

    category = "network"


class GeminiTimeoutError(GeminiError):
    """No response within the configured timeout."""

    category = "timeout"


class GeminiEmptyResponseError(GeminiError):
    """The response carried no candidate text."""


def error_for_status(status_code: int, message: str, model: str) -> GeminiError:
    """Map an HTTP error status to the matching GeminiError subclass."""
    if status_code in (401, 403):
        return GeminiAuthError(message, model=model, status_code=status_code)
    if status_code == 404:
        return GeminiModelNotFoundError(message, model=model, status_code=status_code)
    return GeminiError(message, model=model, status_code=status_code)
