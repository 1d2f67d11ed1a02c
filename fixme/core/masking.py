"""Mask URLs behind placeholder tokens so a rewrite cannot mangle them."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Iterable

LOG = logging.getLogger("fixme")

PLACEHOLDER_TEMPLATE = "⟦URL_{}⟧"

# Stands in for a literal "⟦" from the input while placeholders are in play
ESCAPED_OPEN = "⟦⟦⟧"

_URL_RE = re.compile(r"(?:https?://|www\.)[^\s<>\"'`]+", re.IGNORECASE)

# Sentence punctuation that usually follows a URL rather than belonging to it
_TRAILING_PUNCT = ".,;:!?'\""

_CLOSERS = {")": "(", "]": "[", "}": "{"}

Span = tuple[int, int]
UrlDetector = Callable[[str], Iterable[Span]]


@dataclass(frozen=True)
class MaskResult:
    """Masked text and the placeholder -> original URL mapping."""

    text: str
    placeholders: dict[str, str] = field(default_factory=dict)

    def __iter__(self):
        return iter((self.text, self.placeholders))


def _trim_url(url: str) -> str:
    while url:
        last = url[-1]
        if last in _TRAILING_PUNCT:
            url = url[:-1]
        elif last in _CLOSERS and url.count(last) > url.count(_CLOSERS[last]):
            url = url[:-1]
        else:
            break
    return url


def find_urls(text: str) -> list[Span]:
    """Return (start, end) spans of http(s):// and www. links, left to right."""
    spans = []
    for match in _URL_RE.finditer(text):
        url = _trim_url(match.group(0))
        if url.lower() in {"www.", "http://", "https://"}:
            continue
        spans.append((match.start(), match.start() + len(url)))
    return spans


def _detect(text: str, detector: UrlDetector | None) -> list[Span]:
    detect = detector or find_urls
    try:
        raw = list(detect(text))
    except Exception as exc:
        LOG.warning(f"URL detection failed, masking nothing: {exc}")
        return []

    spans = []
    cursor = 0
    for start, end in sorted(raw):
        if start < cursor or not 0 <= start < end <= len(text):
            LOG.debug(f"Dropping unusable URL span ({start}, {end})")
            continue
        spans.append((start, end))
        cursor = end
    return spans


def _escape(segment: str) -> str:
    return segment.replace("⟦", ESCAPED_OPEN)


def mask(text: str, detector: UrlDetector | None = None) -> MaskResult:
    """Replace each detected URL with ``⟦URL_<n>⟧``, numbering from 1."""
    spans = _detect(text, detector)
    if not spans:
        return MaskResult(text, {})

    parts = []
    placeholders = {}
    cursor = 0
    for index, (start, end) in enumerate(spans, start=1):
        token = PLACEHOLDER_TEMPLATE.format(index)
        parts.append(_escape(text[cursor:start]))
        parts.append(token)
        placeholders[token] = text[start:end]
        cursor = end
    parts.append(_escape(text[cursor:]))

    return MaskResult("".join(parts), placeholders)


def unmask(text: str, placeholders: dict[str, str]) -> str:
    """Restore every placeholder found in ``text``; missing ones are ignored.

    Literal ``⟦`` characters that :func:`mask` escaped are restored in the
    same single pass, so a restored URL is never scanned again.
    """
    if not placeholders:
        return text
    replacements = dict(placeholders)
    replacements[ESCAPED_OPEN] = "⟦"
    # Longest first so a token is never cut short by a shorter prefix
    pattern = "|".join(re.escape(token) for token in sorted(replacements, key=len, reverse=True))
    return re.sub(pattern, lambda match: replacements[match.group(0)], text)
