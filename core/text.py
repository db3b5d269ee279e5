"""Whitespace normalisation and length clamping for outbound article text."""

from __future__ import annotations

import re

#: Character budget for the text sent to the completion service.
MAX_CHARS = 12_000

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    """Collapse every whitespace run (newlines included) to one space and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def clamp(text: str, max_chars: int) -> str:
    """Return at most the first *max_chars* characters of *text*.

    No word-boundary handling; the cut may land mid-word.
    """
    if len(text) <= max_chars:
        return text
    return text[:max_chars]


def prepare_text(text: str, max_chars: int = MAX_CHARS) -> str:
    """Normalise whitespace, then clamp to *max_chars*."""
    return clamp(normalize_whitespace(text), max_chars)
