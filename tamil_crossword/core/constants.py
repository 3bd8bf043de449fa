"""Shared constants and enumerations for the crossword engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


DEFAULT_GRID_SIZE = 10


class Direction(str, Enum):
    """Word directions supported by the grid."""

    ACROSS = "ACROSS"
    DOWN = "DOWN"

    @property
    def step(self) -> Tuple[int, int]:
        """Unit ``(row, col)`` step between consecutive letters."""
        return DIRECTION_STEPS[self]

    @property
    def orthogonal(self) -> "Direction":
        return Direction.DOWN if self is Direction.ACROSS else Direction.ACROSS

    @classmethod
    def parse(cls, value: "Direction | str") -> "Direction":
        """Accept enum members, names in any case and the legacy arrow tags."""

        if isinstance(value, Direction):
            return value
        key = str(value).strip()
        if key in DIRECTION_ALIASES:
            return DIRECTION_ALIASES[key]
        try:
            return cls(key.upper())
        except ValueError as exc:
            raise ValueError(f"Unknown direction: {value!r}") from exc


DIRECTION_STEPS: Dict[Direction, Tuple[int, int]] = {
    Direction.ACROSS: (0, 1),
    Direction.DOWN: (1, 0),
}

# Tags written by the earlier browser-only version of the puzzle.
DIRECTION_ALIASES: Dict[str, Direction] = {
    "➡": Direction.ACROSS,
    "⬇": Direction.DOWN,
}


class CellStatus(str, Enum):
    """Display classification of a cell handed to renderers."""

    EMPTY = "EMPTY"
    FILLED = "FILLED"
    CORRECT = "CORRECT"
    WRONG = "WRONG"


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
