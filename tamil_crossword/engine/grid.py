"""Grid representation and helper utilities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from ..core.constants import DEFAULT_GRID_SIZE, Bounds, Direction
from ..core.exceptions import ConflictingLetterError, EmptyAnswerError, OutOfBoundsError
from ..core.models import Cell
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class GridConfig:
    """Configuration values driving the grid layout."""

    size: int = DEFAULT_GRID_SIZE

    def __post_init__(self) -> None:
        if self.size < 1:
            raise ValueError(f"Grid size must be positive, got {self.size}")

    def bounds(self) -> Bounds:
        return Bounds(rows=self.size, cols=self.size)


class CrosswordGrid:
    """Square letter grid where each occupied cell records its claimants."""

    def __init__(self, config: Optional[GridConfig] = None) -> None:
        self.config = config or GridConfig()
        self.bounds = self.config.bounds()
        self.cells: List[List[Cell]] = [
            [Cell() for _ in range(self.bounds.cols)] for _ in range(self.bounds.rows)
        ]

    # ------------------------------------------------------------------
    # Placement checks
    # ------------------------------------------------------------------
    @staticmethod
    def span(length: int, row: int, col: int, direction: Direction) -> List[Tuple[int, int]]:
        dr, dc = direction.step
        return [(row + dr * i, col + dc * i) for i in range(length)]

    def check_placement(
        self, letters: Sequence[str], row: int, col: int, direction: Direction
    ) -> None:
        """Raise the first rule a placement would break; never mutates."""

        if not letters:
            raise EmptyAnswerError("Answer has no letters")
        for index, (r, c) in enumerate(self.span(len(letters), row, col, direction)):
            if not self.bounds.contains(r, c):
                raise OutOfBoundsError(
                    f"Letter {index + 1} of {len(letters)} lands outside the grid at {(r, c)}"
                )
            existing = self.cells[r][c].letter
            if existing is not None and existing != letters[index]:
                raise ConflictingLetterError(
                    f"Cell {(r, c)} holds {existing!r}, word needs {letters[index]!r}"
                )

    def can_place(
        self, letters: Sequence[str], row: int, col: int, direction: Direction
    ) -> bool:
        try:
            self.check_placement(letters, row, col, direction)
        except (EmptyAnswerError, OutOfBoundsError, ConflictingLetterError):
            return False
        return True

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def write(
        self,
        letters: Sequence[str],
        row: int,
        col: int,
        direction: Direction,
        entry_index: int,
    ) -> None:
        """Write a validated word; the whole span is checked before any cell changes."""

        self.check_placement(letters, row, col, direction)
        for letter, (r, c) in zip(letters, self.span(len(letters), row, col, direction)):
            cell = self.cells[r][c]
            cell.letter = letter
            cell.claimants.add(entry_index)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def letter_at(self, row: int, col: int) -> Optional[str]:
        if not self.bounds.contains(row, col):
            return None
        return self.cells[row][col].letter

    def occupied(self) -> Iterator[Tuple[int, int, Cell]]:
        for r, row in enumerate(self.cells):
            for c, cell in enumerate(row):
                if not cell.is_empty():
                    yield r, c, cell

    def is_occupied(self, row: int, col: int) -> bool:
        return self.bounds.contains(row, col) and not self.cells[row][col].is_empty()

    @property
    def filled_count(self) -> int:
        return sum(1 for _ in self.occupied())

    @property
    def crossing_count(self) -> int:
        return sum(1 for _, _, cell in self.occupied() if cell.is_crossing())

    def letters_matrix(self) -> List[List[Optional[str]]]:
        """Plain letter view used for equality checks and text dumps."""

        return [[cell.letter for cell in row] for row in self.cells]

    # ------------------------------------------------------------------
    # Serialization helpers
    # ------------------------------------------------------------------
    def to_jsonable(self) -> List[List[Optional[dict]]]:
        """Snapshot grid: ``None`` or ``{"letter", "entryIndex"}`` per cell.

        ``entryIndex`` is the most recently placed claimant, which is what
        single-owner readers expect.
        """

        serialized: List[List[Optional[dict]]] = []
        for row in self.cells:
            serialized_row: List[Optional[dict]] = []
            for cell in row:
                if cell.is_empty():
                    serialized_row.append(None)
                else:
                    serialized_row.append(
                        {"letter": cell.letter, "entryIndex": max(cell.claimants)}
                    )
            serialized.append(serialized_row)
        return serialized
