#!/usr/bin/env python3
"""
FixMe Grammar - macOS Menu Bar App

Watches the clipboard and, when you copy prose, sends it to an OpenAI
model to fix grammar and spelling (optionally translating to English or
rephrasing for a spoken presentation), then puts the corrected text back
on the clipboard. Copied code is detected and left alone.

Usage:
    OPENAI_API_KEY=sk-... python3 fixme_grammar.py [--debug]

Requirements:
    - macOS (uses rumps for the menu bar, pyobjc for the frontmost app)
    - Python 3.9+
    - OPENAI_API_KEY in the environment
"""

from __future__ import annotations

import os
import sys
import threading
import logging
from pathlib import Path

from fixme import __version__
from fixme.core import history
from fixme.core.config import ConfigStore
from fixme.core.monitor import ClipboardMonitor
from fixme.core.rewrite import RewriteEngine
from fixme.core.state import AppState as State, STATE_DESCRIPTIONS, STATE_ICONS
from fixme.llm import ApiKeyMissingError, OpenAIRewriteBackend, RewriteCancelledError
from fixme.platform.base import ClipboardAccess, FrontmostAppProvider
from fixme.platform.macos import MacOSClipboard, MacOSFeedback, MacOSFrontmostApp

# Debug logging - opt-in via --debug flag or FIXME_DEBUG=1 env var
_DEBUG = ("--debug" in sys.argv) or (os.environ.get("FIXME_DEBUG") == "1")
if "--debug" in sys.argv:
    sys.argv.remove("--debug")
_LOG_PATH = Path.home() / ".config" / "fixme-grammar" / "debug.log"
_LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
logging.basicConfig(
    filename=str(_LOG_PATH) if _DEBUG else os.devnull,
    level=logging.DEBUG if _DEBUG else logging.WARNING,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("fixme")

import rumps

RECENT_LIMIT = 5

# ============================================================================
# MENU BAR APPLICATION
# ============================================================================


class FixMeGrammarApp(rumps.App):
    """Main menu bar application."""

    def __init__(
        self,
        store: ConfigStore | None = None,
        clipboard: ClipboardAccess | None = None,
        frontmost: FrontmostAppProvider | None = None,
    ):
        super(FixMeGrammarApp, self).__init__(
            "FixMe Grammar",
            icon=None,
            title=STATE_ICONS[State.READY],
            quit_button="Quit",
        )

        self.store = store or ConfigStore()
        self.config = self.store.load()

        self.state = State.READY
        self.session_fixes = 0
        self.cancel_event = None

        self.clipboard = clipboard or MacOSClipboard()
        frontmost = frontmost or MacOSFrontmostApp()
        self.feedback = MacOSFeedback()
        self.rewrite_engine = RewriteEngine(
            OpenAIRewriteBackend(
                model=self.config["model"],
                temperature=self.config["temperature"],
                timeout=self.config["request_timeout"],
            ),
            translate_to_english=self.config["translate_to_english"],
            presentation_mode=self.config["presentation_mode"],
        )
        self.monitor = ClipboardMonitor(
            self.config,
            read_clipboard=self.clipboard.read_text,
            on_text=self._process_text,
            frontmost_app=frontmost.frontmost_bundle_id,
        )
        # Whatever is on the clipboard at launch is not a fresh copy
        self.monitor.ignore_next_change()

        self._build_menu()

        self.poll_timer = rumps.Timer(self._poll, self.config["poll_interval"])
        self.poll_timer.start()
        self.set_state(State.READY if self.config["enabled"] else State.DISABLED)

    def _build_menu(self):
        """Build the menu bar menu."""
        self.status_item = rumps.MenuItem("Status: Starting...")
        self.stats_item = rumps.MenuItem("Session: 0 fixes")

        self.enabled_item = rumps.MenuItem("Enabled", callback=self.toggle_enabled, key="e")
        self.enabled_item.state = 1 if self.config["enabled"] else 0

        self.translate_item = rumps.MenuItem("Translate to English", callback=self.toggle_translate, key="t")
        self.translate_item.state = 1 if self.config["translate_to_english"] else 0

        self.skip_code_item = rumps.MenuItem("Skip Code", callback=self.toggle_skip_code, key="s")
        self.skip_code_item.state = 1 if self.config["skip_code"] else 0

        self.presentation_item = rumps.MenuItem(
            "Presentation Mode", callback=self.toggle_presentation_mode, key="p"
        )
        self.presentation_item.state = 1 if self.config["presentation_mode"] else 0

        self.filter_apps_item = rumps.MenuItem("Filter Apps", callback=self.toggle_filter_apps, key="a")
        self.filter_apps_item.state = 1 if self.config["filter_apps"] else 0

        self.fix_now_item = rumps.MenuItem("Fix Clipboard Now", callback=self.fix_clipboard_now, key="f")
        self.undo_item = rumps.MenuItem("Undo Last Fix", callback=self.undo_last)
        self.recent_menu = rumps.MenuItem("Recent Fixes")
        self._refresh_stats_title()
        self._rebuild_recent_menu()

        self.about_item = rumps.MenuItem(f"About (v{__version__})", callback=self.show_about)

        self.menu = [
            self.enabled_item,
            self.translate_item,
            self.skip_code_item,
            self.presentation_item,
            self.filter_apps_item,
            None,
            self.fix_now_item,
            self.undo_item,
            self.recent_menu,
            None,
            self.stats_item,
            self.status_item,
            None,
            self.about_item,
        ]

    def set_state(self, state, message=None):
        """Update current state and menu bar icon."""
        self.state = state
        self.title = STATE_ICONS.get(state, STATE_ICONS[State.READY])
        status_text = message or STATE_DESCRIPTIONS.get(state, state)
        self.status_item.title = f"Status: {status_text}"

    def flash(self):
        """Show the fixed checkmark briefly, then go back to the idle icon."""
        self.title = STATE_ICONS[State.FIXED]

        def restore():
            if self.state in (State.READY, State.FIXED):
                self.set_state(State.READY)

        threading.Timer(self.config["flash_duration"], restore).start()

    # ---- Clipboard pipeline ----

    def _poll(self, _timer):
        self.monitor.tick()

    def _process_text(self, text, source_app):
        """Called by the monitor with new prose; rewrites off the main thread."""
        if self.cancel_event is not None:
            self.cancel_event.set()
        cancel_event = threading.Event()
        self.cancel_event = cancel_event

        log.info(f"Processing clipboard text from {source_app}: {repr(text[:80])}")
        self.set_state(State.PROCESSING)
        future = self.rewrite_engine.submit(text, cancel_event)
        future.add_done_callback(lambda f: self._on_rewrite_done(f, source_app, cancel_event))

    def _on_rewrite_done(self, future, source_app, cancel_event):
        if self.cancel_event is cancel_event:
            self.cancel_event = None
        if future.cancelled():
            return
        result = future.result()

        if not result.ok:
            if isinstance(result.error, RewriteCancelledError):
                return
            log.error(f"Error fixing grammar: {result.error}")
            self.set_state(State.ERROR, f"Error: {result.error}")
            if isinstance(result.error, ApiKeyMissingError) or self.config.get("show_notifications"):
                self.feedback.show_notification("FixMe Grammar", str(result.error))
            return

        if not result.changed:
            log.info("No grammar issues found")
            self.set_state(State.READY)
            return

        # Another copy happened while we were waiting; do not clobber it
        if self.clipboard.read_text() != result.original:
            log.info("Clipboard changed during rewrite, dropping fixed text")
            self.set_state(State.READY)
            return

        self.monitor.ignore_next_change()
        if not self.clipboard.write_text(result.text):
            self.set_state(State.ERROR, "Failed to update clipboard")
            return

        log.info(f"Fixed text: {repr(result.text)}")
        history.add(result.original, result.text, source_app)
        self.update_stats()
        self._rebuild_recent_menu()
        self.set_state(State.FIXED)
        self.flash()

        if self.config.get("sound_effects"):
            self.feedback.play_sound("Tink")
        if self.config.get("show_notifications"):
            preview = result.text[:50] + "..." if len(result.text) > 50 else result.text
            self.feedback.show_notification("FixMe Grammar", preview)

    # ---- Menu callbacks ----

    def _toggle(self, key, sender):
        self.config[key] = not self.config.get(key, False)
        sender.state = 1 if self.config[key] else 0
        self.store.save(self.config)
        return self.config[key]

    def toggle_enabled(self, sender):
        """Turn clipboard watching on or off."""
        if self._toggle("enabled", sender):
            self.monitor.ignore_next_change()
            self.set_state(State.READY)
        else:
            if self.cancel_event is not None:
                self.cancel_event.set()
            self.set_state(State.DISABLED)

    def toggle_translate(self, sender):
        """Toggle translation of non-English text."""
        self.rewrite_engine.set_options(translate_to_english=self._toggle("translate_to_english", sender))

    def toggle_skip_code(self, sender):
        """Toggle skipping text that looks like code."""
        self._toggle("skip_code", sender)

    def toggle_presentation_mode(self, sender):
        """Toggle rephrasing for spoken presentation."""
        self.rewrite_engine.set_options(presentation_mode=self._toggle("presentation_mode", sender))

    def toggle_filter_apps(self, sender):
        """Toggle skipping copies made in ignored apps."""
        self._toggle("filter_apps", sender)

    def fix_clipboard_now(self, sender):
        """Process the current clipboard even if it was seen before."""
        outcome = self.monitor.process_now()
        log.info(f"Fix Clipboard Now: {outcome.value}")

    def undo_last(self, sender):
        """Put the original text of the last fix back on the clipboard and forget that fix."""
        entry = history.last()
        if not entry:
            rumps.alert(title="Undo", message="No fix to undo.", ok="OK")
            return
        self.monitor.ignore_next_change()
        if self.clipboard.write_text(entry["original"]):
            history.delete(entry["id"])
            self._rebuild_recent_menu()
            self._refresh_stats_title()
            rumps.notification(
                title="FixMe Grammar",
                subtitle="Undo",
                message=f"Original text copied: {entry['original'][:30]}...",
            )

    def copy_recent(self, text):
        """Copy a recent fixed text back to the clipboard."""
        self.monitor.ignore_next_change()
        self.clipboard.write_text(text)

    def _rebuild_recent_menu(self):
        """Rebuild the recent fixes submenu."""
        for key in list(self.recent_menu.keys()):
            del self.recent_menu[key]

        entries = history.get_all()[:RECENT_LIMIT]
        if not entries:
            self.recent_menu["(none yet)"] = rumps.MenuItem("(none yet)")
        for entry in entries:
            fixed = entry.get("fixed", "")
            display = fixed[:40] + "..." if len(fixed) > 40 else fixed
            stamp = entry.get("timestamp", "")[11:16]
            item = rumps.MenuItem(
                f"[{stamp}] {display}".replace("\n", " "),
                callback=lambda sender, t=fixed: self.copy_recent(t),
            )
            self.recent_menu.add(item)

        self.recent_menu.add(None)  # Separator
        self.recent_menu.add(rumps.MenuItem("Clear History", callback=self.clear_history))

    def clear_history(self, sender):
        """Clear all saved fixes after confirmation."""
        result = rumps.alert(
            title="Clear History",
            message="Delete all saved fixes?",
            ok="Clear",
            cancel="Cancel",
        )
        if result == 1:
            history.clear()
            self._rebuild_recent_menu()
            self._refresh_stats_title()

    def update_stats(self):
        """Update session statistics."""
        self.session_fixes += 1
        self.config["total_fixes"] = self.config.get("total_fixes", 0) + 1
        self.store.save(self.config)
        self._refresh_stats_title()

    def _refresh_stats_title(self):
        self.stats_item.title = (
            f"Session: {self.session_fixes} fixes ({self.config['total_fixes']} total, {history.count()} saved)"
        )

    def show_about(self, sender):
        """Show app information."""
        rumps.alert(
            title=f"FixMe Grammar v{__version__}",
            message=(
                "Copy prose anywhere and the corrected version replaces it on the clipboard.\n\n"
                f"Model: {self.config['model']}\n"
                f"Total fixes: {self.config.get('total_fixes', 0)}"
            ),
            ok="OK",
        )


# ============================================================================
# MAIN
# ============================================================================


def main():
    app = FixMeGrammarApp()
    try:
        app.run()
    finally:
        app.rewrite_engine.shutdown()


if __name__ == "__main__":
    main()
