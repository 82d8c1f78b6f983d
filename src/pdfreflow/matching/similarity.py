"""Approximate string matching between extracted block text and edit targets."""

from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")

DEFAULT_THRESHOLD = 0.7


def normalize_text(text: str) -> str:
    """Trim, collapse whitespace runs to one space and lowercase."""
    return _WHITESPACE_RE.sub(" ", text.strip()).lower()


def jaccard_similarity(a: str, b: str) -> float:
    """Word-set Jaccard similarity in ``[0, 1]``.

    Identical strings short-circuit to 1.0 before the empty check, so two
    empty strings are fully similar while one empty string scores 0.
    """
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0

    words_a = set(_WHITESPACE_RE.split(a))
    words_b = set(_WHITESPACE_RE.split(b))
    return len(words_a & words_b) / len(words_a | words_b)


def fuzzy_match(a: str, b: str, threshold: float = DEFAULT_THRESHOLD) -> bool:
    """True if either normalized string contains the other, or their word sets
    overlap by more than ``threshold``."""
    norm_a = normalize_text(a)
    norm_b = normalize_text(b)
    return norm_b in norm_a or norm_a in norm_b or jaccard_similarity(norm_a, norm_b) > threshold
