"""Data models supporting the crossword engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

from .constants import Direction


@dataclass
class Cell:
    """A grid cell; occupied cells carry one letter and every entry claiming it."""

    letter: Optional[str] = None
    claimants: Set[int] = field(default_factory=set)

    def is_empty(self) -> bool:
        return self.letter is None

    def is_crossing(self) -> bool:
        return len(self.claimants) > 1


@dataclass(frozen=True)
class EntrySpec:
    """Replayable description of an entry, as persisted in ``questions``."""

    clue: str
    answer: str
    row: int
    col: int
    direction: Direction


@dataclass(frozen=True)
class Entry:
    """A clue and answer placed on the grid."""

    clue: str
    answer: str
    letters: Tuple[str, ...]
    row: int
    col: int
    direction: Direction

    @property
    def length(self) -> int:
        return len(self.letters)

    @property
    def cells(self) -> List[Tuple[int, int]]:
        dr, dc = self.direction.step
        return [(self.row + dr * i, self.col + dc * i) for i in range(self.length)]

    def to_spec(self) -> EntrySpec:
        return EntrySpec(
            clue=self.clue,
            answer=self.answer,
            row=self.row,
            col=self.col,
            direction=self.direction,
        )
