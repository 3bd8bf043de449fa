"""Shared helpers for cleaning admin and solver text."""

from __future__ import annotations

import re

WHITESPACE_RE = re.compile(r"\s+")


def clean_answer(text: str) -> str:
    """Return ``text`` with every whitespace character removed.

    Mobile keyboards insert stray spaces inside Tamil words; an answer is
    always a single run of letters.
    """

    if not text:
        return ""
    return WHITESPACE_RE.sub("", text)


def clean_clue(text: str) -> str:
    """Trim surrounding whitespace from clue text."""

    return (text or "").strip()


def clean_input(text: str | None) -> str:
    """Normalize one cell of solver input; ``None`` counts as empty."""

    return (text or "").strip()


__all__ = ["clean_answer", "clean_clue", "clean_input"]
