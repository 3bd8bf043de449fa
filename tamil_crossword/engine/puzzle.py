"""Puzzle model: the ordered entry sequence plus its derived grid."""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from ..core.models import Entry, EntrySpec
from .grid import CrosswordGrid, GridConfig


class PuzzleModel:
    """Entries in clue-number order and the grid they produce.

    The grid is a cache: replaying ``specs()`` in order onto an empty grid
    reproduces it exactly. Only :class:`PlacementEngine` mutates a model.
    """

    def __init__(
        self,
        config: Optional[GridConfig] = None,
        date_key: Optional[str] = None,
    ) -> None:
        self.config = config or GridConfig()
        self.grid = CrosswordGrid(self.config)
        self.entries: List[Entry] = []
        self.date_key = date_key

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def is_empty(self) -> bool:
        return not self.entries

    @property
    def size(self) -> int:
        return self.config.size

    def entry(self, index: int) -> Entry:
        if not 0 <= index < len(self.entries):
            raise IndexError(f"No entry at index {index} (puzzle has {len(self.entries)})")
        return self.entries[index]

    def specs(self) -> List[EntrySpec]:
        return [entry.to_spec() for entry in self.entries]

    def numbered(self) -> Iterator[Tuple[int, Entry]]:
        """Yield ``(clue_number, entry)`` pairs; numbers start at 1."""

        for index, entry in enumerate(self.entries):
            yield index + 1, entry

