"""Clipboard change detection and gating."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from fixme.core.classifier import score_code

LOG = logging.getLogger("fixme")


class TickOutcome(str, Enum):
    """What a single poll of the clipboard decided."""

    DISABLED = "disabled"
    EMPTY = "empty"
    BASELINE = "baseline"
    UNCHANGED = "unchanged"
    FILTERED_APP = "filtered_app"
    CODE = "code"
    PROCESSED = "processed"


class ClipboardMonitor:
    """Watches clipboard text and hands new prose to ``on_text``.

    The app drives :meth:`tick` from a timer every ``poll_interval`` seconds.
    Settings are read from the shared ``config`` dict on each tick so menu
    toggles apply immediately.
    """

    def __init__(
        self,
        config: dict,
        read_clipboard: Callable[[], str | None],
        on_text: Callable[[str, str | None], None],
        frontmost_app: Callable[[], str | None] | None = None,
    ):
        self.config = config
        self.read_clipboard = read_clipboard
        self.on_text = on_text
        self.frontmost_app = frontmost_app or (lambda: None)
        self.previous_content = ""
        self._skip_next_change = False

    def ignore_next_change(self):
        """Treat the next clipboard content as already handled."""
        self._skip_next_change = True

    def _read(self):
        try:
            return self.read_clipboard()
        except Exception as exc:
            LOG.debug(f"Failed to read clipboard: {exc}")
            return None

    def tick(self) -> TickOutcome:
        """Poll the clipboard once."""
        if not self.config.get("enabled", True):
            return TickOutcome.DISABLED

        content = self._read()
        if not content:
            return TickOutcome.EMPTY

        if self._skip_next_change:
            self._skip_next_change = False
            self.previous_content = content
            return TickOutcome.BASELINE

        if content == self.previous_content:
            return TickOutcome.UNCHANGED
        self.previous_content = content

        return self._dispatch(content)

    def process_now(self) -> TickOutcome:
        """Handle the current clipboard text even if it was seen before."""
        if not self.config.get("enabled", True):
            return TickOutcome.DISABLED

        content = self._read()
        if not content:
            return TickOutcome.EMPTY
        self.previous_content = content
        return self._dispatch(content)

    def _dispatch(self, content) -> TickOutcome:
        source_app = None
        try:
            source_app = self.frontmost_app()
        except Exception as exc:
            LOG.debug(f"Failed to query frontmost app: {exc}")

        if self.config.get("filter_apps") and source_app in self.config.get("ignored_apps", []):
            LOG.info(f"Clipboard change from ignored app {source_app}, skipping")
            return TickOutcome.FILTERED_APP

        if self.config.get("skip_code", True):
            score = score_code(content)
            if score.is_code:
                LOG.info(
                    f"Detected code, skipping grammar check. Score: {score.score}, "
                    f"length factor: {score.threshold}, fence: {score.has_code_fence}"
                )
                return TickOutcome.CODE

        self.on_text(content, source_app)
        return TickOutcome.PROCESSED
