"""Split text into user-perceived letters.

Tamil letters such as ``மா`` or ``ம்`` are a consonant followed by a vowel
sign or a pulli, i.e. several codepoints that must stay together on one grid
cell. Segmentation is delegated to the ``regex`` package, whose ``\\X`` token
matches one extended grapheme cluster as defined by Unicode UAX #29.
"""

from __future__ import annotations

from enum import Enum
from typing import List

import regex

from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

GRAPHEME_RE = regex.compile(r"\X")


class SplitStrategy(str, Enum):
    """How a string is broken into letters."""

    CLUSTER = "cluster"
    CODEPOINT = "codepoint"


class GraphemeSplitter:
    """Deterministic text-to-letters decomposition.

    ``CLUSTER`` is the primary strategy. ``CODEPOINT`` splits by scalar value
    and over-splits combining sequences; it exists for puzzles authored by
    clients without cluster segmentation, whose stored letters are single
    codepoints.
    """

    def __init__(self, strategy: SplitStrategy | str = SplitStrategy.CLUSTER) -> None:
        self.strategy = SplitStrategy(strategy)
        if self.strategy is SplitStrategy.CODEPOINT:
            LOGGER.debug("Grapheme splitter running in codepoint mode")

    def split(self, text: str) -> List[str]:
        if not text:
            return []
        if self.strategy is SplitStrategy.CODEPOINT:
            return list(text)
        return GRAPHEME_RE.findall(text)

    def __call__(self, text: str) -> List[str]:
        return self.split(text)

    def __repr__(self) -> str:
        return f"GraphemeSplitter(strategy={self.strategy.value!r})"


DEFAULT_SPLITTER = GraphemeSplitter()


def split_letters(text: str) -> List[str]:
    """Return the letters of ``text`` using the default cluster strategy."""

    return DEFAULT_SPLITTER.split(text)


__all__ = ["GraphemeSplitter", "SplitStrategy", "split_letters", "DEFAULT_SPLITTER"]
