"""Shared application state values."""

from enum import Enum


class AppState(str, Enum):
    """High-level user-visible app states."""

    READY = "ready"
    PROCESSING = "processing"
    FIXED = "fixed"
    DISABLED = "disabled"
    ERROR = "error"


STATE_ICONS = {
    AppState.READY: "📎",
    AppState.PROCESSING: "⏳",
    AppState.FIXED: "✓",
    AppState.DISABLED: "⏸",
    AppState.ERROR: "❌",
}

STATE_DESCRIPTIONS = {
    AppState.READY: "Watching clipboard",
    AppState.PROCESSING: "Fixing clipboard text...",
    AppState.FIXED: "Clipboard text fixed",
    AppState.DISABLED: "Disabled - enable to resume",
    AppState.ERROR: "Error - check debug log",
}
