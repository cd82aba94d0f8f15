"""
Custom exception hierarchy for number transcription.

Each exception type maps to one category of failure, so callers (and the
HTTP layer) can tell a bad number from an unknown language from a broken
language table without parsing messages.

All of them are fail-fast: the pipeline is a pure computation, so there is
nothing to retry.
"""

from __future__ import annotations


class TranscriptionError(Exception):
    """Base exception for all transcription failures."""

    def __init__(self, code: str, message: str, details: dict | None = None):
        self.code = code
        self.details = details or {}
        super().__init__(message)


class InvalidInput(TranscriptionError):
    """The number is negative, not finite, or not a number at all."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("INVALID_INPUT", message, details)


class UnsupportedLanguage(TranscriptionError):
    """No tokenizer / transcription context is registered for the language tag."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("UNSUPPORTED_LANGUAGE", message, details)


class MalformedRegistry(TranscriptionError):
    """A language table is inconsistent (detected when the table is built)."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("MALFORMED_REGISTRY", message, details)
