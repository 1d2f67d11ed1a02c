"""Grammar rewrite orchestration: mask URLs, call the backend, restore URLs."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass

from fixme.core.masking import mask, unmask
from fixme.llm.base import RewriteBackend, RewriteCancelledError, RewriteError, RewriteServiceError

LOG = logging.getLogger("fixme")

BASE_PROMPT = (
    "You are a helpful assistant that improves grammar and spelling. "
    "Only fix grammar and spelling issues in the text. "
    "If the text is already correct, return it unchanged. "
    "Do not add any additional commentary, quotes or explanations. "
    "Tokens such as ⟦URL_1⟧ stand for links: keep every one of them exactly as written and in place."
)

TRANSLATE_PROMPT = " If the text is not in English, translate it to English."

PRESENTATION_PROMPT = (
    " Rephrase the text so it reads naturally when spoken aloud in a presentation:"
    " short sentences, plain words, no abbreviations that are awkward to say."
)


def build_instructions(translate_to_english=False, presentation_mode=False):
    """Compose the system prompt for the current toggles."""
    prompt = BASE_PROMPT
    if translate_to_english:
        prompt += TRANSLATE_PROMPT
    if presentation_mode:
        prompt += PRESENTATION_PROMPT
    return prompt


@dataclass(frozen=True)
class RewriteResult:
    """Outcome of one rewrite: corrected text on success, a typed error otherwise."""

    original: str
    text: str | None = None
    error: RewriteError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.text is not None

    @property
    def changed(self) -> bool:
        return self.ok and self.text != self.original


def _strip_wrapping_quotes(result, original):
    for quote in ('"', "“"):
        closing = "”" if quote == "“" else quote
        if (
            len(result) >= 2
            and result.startswith(quote)
            and result.endswith(closing)
            and not original.strip().startswith(quote)
        ):
            return result[1:-1].strip()
    return result


def _restore_edges(result, original):
    """Keep the original's leading/trailing whitespace around the rewritten body."""
    body = result.strip()
    if not body:
        return result
    stripped = original.strip()
    if not stripped:
        return body
    leading = original[: len(original) - len(original.lstrip())]
    trailing = original[len(original.rstrip()):]
    return f"{leading}{body}{trailing}"


class RewriteEngine:
    """Rewrites prose through a pluggable backend, protecting URLs on the way."""

    def __init__(self, backend: RewriteBackend, translate_to_english=False, presentation_mode=False):
        self.backend = backend
        self.translate_to_english = translate_to_english
        self.presentation_mode = presentation_mode
        self._executor: ThreadPoolExecutor | None = None

    def set_options(self, translate_to_english=None, presentation_mode=None):
        """Update the prompt toggles used by subsequent rewrites."""
        if translate_to_english is not None:
            self.translate_to_english = translate_to_english
        if presentation_mode is not None:
            self.presentation_mode = presentation_mode

    @property
    def instructions(self):
        return build_instructions(self.translate_to_english, self.presentation_mode)

    def rewrite(self, text, cancel_event: threading.Event | None = None) -> RewriteResult:
        """Rewrite ``text`` synchronously; errors are returned, not raised."""
        if cancel_event is not None and cancel_event.is_set():
            return RewriteResult(text, error=RewriteCancelledError())

        masked = mask(text)
        if masked.placeholders:
            LOG.debug(f"Masked {len(masked.placeholders)} URL(s) before rewrite")

        try:
            rewritten = self.backend.rewrite(masked.text, self.instructions)
        except RewriteError as exc:
            LOG.error(f"Rewrite failed: {exc}")
            return RewriteResult(text, error=exc)
        except Exception as exc:
            LOG.error(f"Rewrite backend crashed: {exc}", exc_info=True)
            return RewriteResult(text, error=RewriteServiceError(f"Unexpected backend error: {exc}"))

        if cancel_event is not None and cancel_event.is_set():
            LOG.info("Rewrite finished after cancellation, discarding result")
            return RewriteResult(text, error=RewriteCancelledError())

        missing = [token for token in masked.placeholders if token not in rewritten]
        if missing:
            LOG.warning(f"Rewrite dropped URL placeholder(s): {', '.join(missing)}")

        restored = unmask(rewritten, masked.placeholders)
        restored = _restore_edges(_strip_wrapping_quotes(restored.strip(), text), text)
        LOG.info(f"Rewrite result: {repr(restored)}")
        return RewriteResult(text, text=restored)

    def submit(self, text, cancel_event: threading.Event | None = None) -> Future:
        """Run :meth:`rewrite` on a worker thread and return its future."""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="fixme-rewrite")
        return self._executor.submit(self.rewrite, text, cancel_event)

    def shutdown(self):
        """Stop the worker thread, dropping queued rewrites."""
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None
