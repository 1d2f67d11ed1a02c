"""Core platform-agnostic application logic."""

from fixme.core.classifier import CodeScore, CodeWeights, DEFAULT_WEIGHTS, classify, score_code
from fixme.core.config import (
    CONFIG_DIR,
    CONFIG_FILE,
    DEFAULT_CONFIG,
    ConfigStore,
    load_config,
    normalize_config,
    save_config,
)
from fixme.core.masking import MaskResult, find_urls, mask, unmask
from fixme.core.monitor import ClipboardMonitor, TickOutcome
from fixme.core.rewrite import RewriteEngine, RewriteResult, build_instructions
from fixme.core.state import AppState, STATE_DESCRIPTIONS, STATE_ICONS
from fixme.core import history

__all__ = [
    "AppState",
    "STATE_ICONS",
    "STATE_DESCRIPTIONS",
    "classify",
    "score_code",
    "CodeScore",
    "CodeWeights",
    "DEFAULT_WEIGHTS",
    "mask",
    "unmask",
    "find_urls",
    "MaskResult",
    "ClipboardMonitor",
    "TickOutcome",
    "RewriteEngine",
    "RewriteResult",
    "build_instructions",
    "CONFIG_DIR",
    "CONFIG_FILE",
    "DEFAULT_CONFIG",
    "ConfigStore",
    "load_config",
    "normalize_config",
    "save_config",
    "history",
]
