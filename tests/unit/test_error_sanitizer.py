"""Unit tests for client-facing error messages"""

from __future__ import annotations

import pytest

from releasenotes.utils.error_sanitizer import (
    GENERIC_MESSAGES,
    client_error_message,
    redact_secrets,
    sanitize_error_message,
)


def test_short_client_error_passes_through():
    assert sanitize_error_message("Unknown timeframe: 5d", 400) == "Unknown timeframe: 5d"


@pytest.mark.parametrize(
    "message",
    [
        'File "/srv/app/releasenotes/notes/repository.py", line 80',
        "Traceback (most recent call last):",
        "failure in releasenotes.notes.repository",
        "Authorization: Bearer abc.def.ghi",
    ],
)
def test_sensitive_messages_are_replaced(message):
    assert sanitize_error_message(message, 400) == GENERIC_MESSAGES[400]


def test_server_errors_are_always_generic():
    assert sanitize_error_message("Access Denied: Table ds.notes", 500) == GENERIC_MESSAGES[500]


def test_empty_message_is_generic():
    assert sanitize_error_message("", 404) == GENERIC_MESSAGES[404]


def test_redact_api_keys():
    message = "POST https://host/v1beta/models/m:generateContent?key=secret123&alt=json failed"

    assert redact_secrets(message) == (
        "POST https://host/v1beta/models/m:generateContent?key=***&alt=json failed"
    )
    assert redact_secrets("bad key AIzaSyA1234567890abcdefghijklmnop") == "bad key ***"


def test_verbose_returns_real_message():
    error = RuntimeError("Access Denied: Table ds.notes")

    assert client_error_message(error, 500, verbose=True) == "Access Denied: Table ds.notes"
    assert client_error_message(error, 500, verbose=False) == GENERIC_MESSAGES[500]


def test_verbose_empty_message_falls_back_to_generic():
    assert client_error_message(RuntimeError(""), 500, verbose=True) == GENERIC_MESSAGES[500]
