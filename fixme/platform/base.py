"""Platform adapter interfaces."""

from __future__ import annotations

from typing import Protocol


class ClipboardAccess(Protocol):
    """Plain-text system clipboard."""

    def read_text(self) -> str | None:
        """Return the clipboard text, or None when it holds no text."""

    def write_text(self, text: str) -> bool:
        """Replace the clipboard contents with ``text``."""


class FrontmostAppProvider(Protocol):
    """Reports which application is in front when the clipboard changes."""

    def frontmost_bundle_id(self) -> str | None:
        """Return the bundle identifier of the active app, if known."""
