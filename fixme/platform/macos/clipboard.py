"""macOS clipboard and frontmost-app adapters."""

from __future__ import annotations

import logging

import pyperclip

try:
    from AppKit import NSWorkspace

    HAS_APPKIT = True
except ImportError:
    HAS_APPKIT = False

LOG = logging.getLogger("fixme")


class MacOSClipboard:
    """Reads and writes plain text on the general pasteboard."""

    def read_text(self):
        try:
            text = pyperclip.paste()
        except pyperclip.PyperclipException as exc:
            LOG.debug(f"Failed to read clipboard: {exc}")
            return None
        return text or None

    def write_text(self, text):
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as exc:
            LOG.warning(f"Failed to update clipboard with fixed text: {exc}")
            return False
        LOG.info("Successfully updated clipboard with fixed text")
        return True


class MacOSFrontmostApp:
    """Looks up the active application through NSWorkspace."""

    def frontmost_bundle_id(self):
        if not HAS_APPKIT:
            return None
        try:
            app = NSWorkspace.sharedWorkspace().frontmostApplication()
        except Exception as exc:
            LOG.debug(f"Failed to query frontmost application: {exc}")
            return None
        if app is None:
            return None
        bundle_id = app.bundleIdentifier()
        return str(bundle_id) if bundle_id else None
