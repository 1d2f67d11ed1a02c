"""Application configuration management."""

from __future__ import annotations

import json
import logging
from pathlib import Path

CONFIG_DIR = Path.home() / ".config" / "fixme-grammar"
CONFIG_FILE = CONFIG_DIR / "config.json"

DEFAULT_CONFIG = {
    # Behavior toggles (menu bar)
    "enabled": True,
    "translate_to_english": True,
    "skip_code": True,
    "presentation_mode": False,
    "filter_apps": False,
    # Bundle ids skipped when filter_apps is on
    "ignored_apps": [
        "com.apple.Terminal",
        "com.googlecode.iterm2",
        "com.microsoft.VSCode",
        "com.apple.dt.Xcode",
        "dev.zed.Zed",
    ],
    # Rewrite service
    "model": "gpt-4o-mini",
    "temperature": 0.2,
    "request_timeout": 30.0,
    # Timing (seconds)
    "poll_interval": 1.0,
    "flash_duration": 0.5,
    # Feedback
    "sound_effects": False,
    "show_notifications": False,
    # Stats
    "total_fixes": 0,
}

_LOG = logging.getLogger("fixme")


def _positive_float(value, fallback):
    try:
        value = float(value)
    except (TypeError, ValueError):
        return fallback
    return value if value > 0 else fallback


_BOOL_KEYS = (
    "enabled",
    "translate_to_english",
    "skip_code",
    "presentation_mode",
    "filter_apps",
    "sound_effects",
    "show_notifications",
)


def _coerce_bool(value, fallback):
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off", ""):
            return False
    return fallback


def normalize_config(config):
    """Overlay saved values on the defaults and repair invalid entries."""
    normalized = DEFAULT_CONFIG.copy()
    normalized["ignored_apps"] = list(DEFAULT_CONFIG["ignored_apps"])
    if isinstance(config, dict):
        normalized.update(config)

    for key in _BOOL_KEYS:
        normalized[key] = _coerce_bool(normalized.get(key), DEFAULT_CONFIG[key])

    for key in ("poll_interval", "flash_duration", "request_timeout"):
        normalized[key] = _positive_float(normalized.get(key), DEFAULT_CONFIG[key])

    try:
        temperature = float(normalized.get("temperature"))
    except (TypeError, ValueError):
        temperature = DEFAULT_CONFIG["temperature"]
    if not 0.0 <= temperature <= 2.0:
        temperature = DEFAULT_CONFIG["temperature"]
    normalized["temperature"] = temperature

    ignored = normalized.get("ignored_apps")
    if not isinstance(ignored, list):
        ignored = list(DEFAULT_CONFIG["ignored_apps"])
    normalized["ignored_apps"] = [str(app) for app in ignored if app]

    if not isinstance(normalized.get("model"), str) or not normalized["model"].strip():
        normalized["model"] = DEFAULT_CONFIG["model"]
    return normalized


def load_config(path: Path | None = None):
    """Load config from file or create default."""
    config_file = path or CONFIG_FILE
    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        if config_file.exists():
            with open(config_file, encoding="utf-8") as f:
                saved = json.load(f)
                return normalize_config(saved)
    except Exception as exc:
        _LOG.warning(f"Failed to load config from {config_file}: {exc}")
    return normalize_config({})


def save_config(config, path: Path | None = None):
    """Save config to file."""
    config_file = path or CONFIG_FILE
    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        normalized = normalize_config(config)
        tmp_path = config_file.with_suffix(".json.tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(normalized, f, indent=2)
        tmp_path.replace(config_file)
    except Exception as exc:
        _LOG.warning(f"Failed to save config to {config_file}: {exc}")


class ConfigStore:
    """Storage collaborator handed to the app instead of a global settings object."""

    def __init__(self, path: Path | None = None):
        self.path = path

    def load(self) -> dict:
        return load_config(self.path)

    def save(self, config: dict) -> None:
        save_config(config, self.path)
