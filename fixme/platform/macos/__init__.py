"""macOS platform adapter implementations."""

from fixme.platform.macos.clipboard import HAS_APPKIT, MacOSClipboard, MacOSFrontmostApp
from fixme.platform.macos.feedback import MacOSFeedback, escape_applescript_string

__all__ = [
    "MacOSClipboard",
    "MacOSFrontmostApp",
    "MacOSFeedback",
    "escape_applescript_string",
    "HAS_APPKIT",
]
