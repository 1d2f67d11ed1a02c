"""OpenAI chat-completions rewrite backend."""

from __future__ import annotations

import logging
import os

from openai import OpenAI, OpenAIError

from fixme.llm.base import ApiKeyMissingError, InvalidResponseError, RewriteServiceError

LOG = logging.getLogger("fixme")


class OpenAIRewriteBackend:
    """Sends text to the OpenAI API with a system prompt and returns the reply."""

    def __init__(self, model="gpt-4o-mini", temperature=0.2, timeout=30.0, api_key=None, client=None):
        self.model = model
        self.temperature = temperature
        self.timeout = timeout
        self._api_key = api_key
        self._client = client

    def _get_client(self):
        if self._client is None:
            api_key = self._api_key or os.environ.get("OPENAI_API_KEY", "")
            if not api_key:
                raise ApiKeyMissingError()
            self._client = OpenAI(api_key=api_key, timeout=self.timeout)
        return self._client

    def rewrite(self, text, instructions):
        """Run one chat completion and return the assistant's text."""
        client = self._get_client()
        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": instructions},
                    {"role": "user", "content": text},
                ],
                temperature=self.temperature,
            )
        except OpenAIError as exc:
            LOG.error(f"OpenAI request failed: {exc}")
            raise RewriteServiceError(str(exc)) from exc

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as exc:
            raise InvalidResponseError(f"Invalid response from OpenAI API: {exc}") from exc

        if not content or not content.strip():
            raise InvalidResponseError("Invalid response from OpenAI API: empty content")
        return content
