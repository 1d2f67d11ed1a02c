"""Language-model rewrite backends."""

from fixme.llm.base import (
    ApiKeyMissingError,
    InvalidResponseError,
    RewriteBackend,
    RewriteCancelledError,
    RewriteError,
    RewriteServiceError,
)
from fixme.llm.openai_backend import OpenAIRewriteBackend

__all__ = [
    "RewriteBackend",
    "OpenAIRewriteBackend",
    "RewriteError",
    "ApiKeyMissingError",
    "InvalidResponseError",
    "RewriteServiceError",
    "RewriteCancelledError",
]
