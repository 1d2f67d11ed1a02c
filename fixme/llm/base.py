"""Rewrite backend protocol and error types."""

from __future__ import annotations

from typing import Protocol


class RewriteError(Exception):
    """Base class for failures of the remote rewrite step."""


class ApiKeyMissingError(RewriteError):
    """No API key is configured for the rewrite service."""

    def __init__(self, message="OpenAI API key is missing (set OPENAI_API_KEY)"):
        super().__init__(message)


class InvalidResponseError(RewriteError):
    """The service answered, but not with usable text."""


class RewriteServiceError(RewriteError):
    """Transport or API error reported by the service."""


class RewriteCancelledError(RewriteError):
    """The caller cancelled the rewrite before its result was used."""

    def __init__(self, message="Rewrite cancelled"):
        super().__init__(message)


class RewriteBackend(Protocol):
    """Language-model service that rewrites text according to instructions."""

    def rewrite(self, text: str, instructions: str) -> str:
        """Return ``text`` rewritten per ``instructions``; raise RewriteError on failure."""
