"""
Error message sanitization utility.

Development responses carry the underlying error message; production
responses get a generic message per status code. API keys are scrubbed in
both modes.
"""

from __future__ import annotations

import re

from releasenotes.infrastructure.settings import is_development
from releasenotes.observability.logging import get_logger

logger = get_logger(__name__)

# Patterns that might leak sensitive information
SENSITIVE_PATTERNS = [
    # File paths
    r"/[^\s]+\.py",
    r"[A-Za-z]:\\[^\s]+",
    # Stack trace indicators
    r"Traceback \(most recent call last\)",
    r"File \".*\"",
    # Credentials
    r"AIza[0-9A-Za-z_\-]{20,}",
    r"Bearer [A-Za-z0-9._-]+",
    r"private_key",
    # Internal module names
    r"releasenotes\.[a-z_.]+",
]

_API_KEY_PARAM = re.compile(r"([?&]key=)[^&\s]+")
_GOOGLE_API_KEY = re.compile(r"AIza[0-9A-Za-z_\-]{20,}")

GENERIC_MESSAGES = {
    400: "Invalid request. Please check your input and try again.",
    404: "Resource not found.",
    422: "Invalid data format.",
    429: "Too many requests. Please try again later.",
    500: "An internal error occurred. Please try again later.",
    503: "Service temporarily unavailable.",
}


def redact_secrets(message: str) -> str:
    """Mask API keys in URLs and bare Google API keys."""
    message = _API_KEY_PARAM.sub(r"\1***", message)
    return _GOOGLE_API_KEY.sub("***", message)


def sanitize_error_message(message: str, status_code: int = 500) -> str:
    """
    Sanitize an error message to prevent information leakage.

    Returns the generic message for status_code when the message is empty or
    matches a sensitive pattern; short single-line 4xx messages pass through.
    """
    generic = GENERIC_MESSAGES.get(status_code, "An error occurred.")
    if not message:
        return generic

    for pattern in SENSITIVE_PATTERNS:
        if re.search(pattern, message, re.IGNORECASE):
            logger.warning("Sanitized sensitive error pattern: %s", pattern)
            return generic

    if 400 <= status_code < 500 and len(message) < 100 and "\n" not in message:
        return message

    return generic


def client_error_message(
    error: Exception,
    status_code: int = 500,
    verbose: bool | None = None,
) -> str:
    """
    Message to show a client for error.

    Args:
        error: The exception that occurred
        status_code: HTTP status code the response will carry
        verbose: Return the real message; defaults to True in development
    """
    if verbose is None:
        verbose = is_development()

    message = redact_secrets(str(error))
    if verbose:
        return message or GENERIC_MESSAGES.get(status_code, "An error occurred.")
    return sanitize_error_message(message, status_code)
