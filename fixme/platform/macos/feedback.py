"""macOS sound and notification feedback."""

from __future__ import annotations

import logging
import subprocess

LOG = logging.getLogger("fixme")


def escape_applescript_string(text):
    """Escape text for safe inclusion in AppleScript string literals."""
    return str(text).replace("\\", "\\\\").replace('"', '\\"')


class MacOSFeedback:
    """System sounds and Notification Center banners via afplay/osascript."""

    @staticmethod
    def play_sound(sound_name):
        """Play a system sound."""
        try:
            subprocess.run(["afplay", f"/System/Library/Sounds/{sound_name}.aiff"], capture_output=True, timeout=2)
        except Exception as exc:
            LOG.debug(f"Failed to play sound {sound_name}: {exc}")

    @staticmethod
    def show_notification(title, message, sound=False):
        """Show a macOS notification."""
        escaped_title = escape_applescript_string(str(title).replace("\n", " "))
        escaped_message = escape_applescript_string(str(message).replace("\n", " "))
        sound_clause = ' sound name "default"' if sound else ""
        script = f'''
        display notification "{escaped_message}" with title "{escaped_title}"{sound_clause}
        '''
        try:
            subprocess.run(["osascript", "-e", script], capture_output=True, timeout=2)
        except Exception as exc:
            LOG.debug(f"Failed to show notification: {exc}")
