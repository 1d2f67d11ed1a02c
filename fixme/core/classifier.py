"""Heuristic code-vs-prose classification for clipboard text."""

from __future__ import annotations

import unicodedata
from collections import Counter
from dataclasses import dataclass

CODE_KEYWORDS = (
    "function", "var", "let", "const", "return", "if", "else", "for", "while",
    "class", "import", "from", "def", "public", "private", "static", "void",
    "int", "string", "bool", "float", "double", "export", "require", "module",
    "package", "namespace", "interface", "implements", "extends", "async", "await",
)

SYNTAX_TOKENS = ("=>", "===", "!==", "!=", "&&", "||", "++", "--", "+=", "-=", "*=", "/=", "::", "->")

BRACE_CHARS = frozenset("{}()[]")

CODE_FENCE = "```"

_KEYWORD_SET = frozenset(CODE_KEYWORDS)


@dataclass(frozen=True)
class CodeWeights:
    """Tunable multipliers for the code-likelihood score.

    Keyword hits are already 2 per exact match and 1 per substring match
    before ``keyword`` is applied.
    """

    brace: int = 1
    semicolon: int = 2
    equals: int = 1
    keyword: int = 1
    syntax: int = 2
    indentation: int = 3
    chars_per_unit: int = 30


DEFAULT_WEIGHTS = CodeWeights()

# Heavier weighting seen in the first release of the detector.
LEGACY_WEIGHTS = CodeWeights(keyword=2, syntax=3)


@dataclass(frozen=True)
class CodeScore:
    """Score components for one piece of text."""

    braces: int
    semicolons: int
    equals: int
    keyword_hits: int
    syntax_hits: int
    consistent_indentation: bool
    has_code_fence: bool
    score: int
    threshold: int

    @property
    def is_code(self) -> bool:
        return self.score > self.threshold or self.has_code_fence


def _trim_punctuation(word: str) -> str:
    start, end = 0, len(word)
    while start < end and unicodedata.category(word[start]).startswith("P"):
        start += 1
    while end > start and unicodedata.category(word[end - 1]).startswith("P"):
        end -= 1
    return word[start:end]


def _keyword_hits(words) -> int:
    hits = 0
    for word in words:
        trimmed = _trim_punctuation(word).lower()
        if not trimmed:
            continue
        if trimmed in _KEYWORD_SET:
            hits += 2
        elif any(keyword in trimmed for keyword in CODE_KEYWORDS):
            hits += 1
    return hits


def _syntax_hits(words) -> int:
    # One hit per distinct token found in a word, not per repetition.
    return sum(1 for word in words for token in SYNTAX_TOKENS if token in word)


def _has_consistent_indentation(text: str) -> bool:
    indent_counts = Counter()
    for line in text.splitlines():
        if not line.strip():
            continue
        indent_counts[len(line) - len(line.lstrip(" "))] += 1
    return any(count > 2 for count in indent_counts.values())


def score_code(text: str, weights: CodeWeights = DEFAULT_WEIGHTS) -> CodeScore:
    """Compute the weighted code-likelihood score for ``text``."""
    words = text.split()

    braces = semicolons = equals = 0
    for char in text:
        if char in BRACE_CHARS:
            braces += 1
        elif char == ";":
            semicolons += 1
        elif char == "=":
            equals += 1

    keyword_hits = _keyword_hits(words)
    syntax_hits = _syntax_hits(words)
    consistent = _has_consistent_indentation(text)

    score = (
        braces * weights.brace
        + semicolons * weights.semicolon
        + equals * weights.equals
        + keyword_hits * weights.keyword
        + syntax_hits * weights.syntax
        + (weights.indentation if consistent else 0)
    )
    threshold = max(1, len(text) // weights.chars_per_unit)

    return CodeScore(
        braces=braces,
        semicolons=semicolons,
        equals=equals,
        keyword_hits=keyword_hits,
        syntax_hits=syntax_hits,
        consistent_indentation=consistent,
        has_code_fence=CODE_FENCE in text,
        score=score,
        threshold=threshold,
    )


def classify(text: str, weights: CodeWeights = DEFAULT_WEIGHTS) -> bool:
    """Return True when ``text`` looks like source code rather than prose."""
    return score_code(text, weights).is_code
