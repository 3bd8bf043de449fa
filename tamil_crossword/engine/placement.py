"""Placement engine: the only code path that mutates a puzzle.

Three ways to add a word:

* ``place_manual``: admin-chosen anchor and direction.
* ``place_first``: the opening word, centered Across.
* ``place_auto``: first-fit crossing search against the words already placed.

Edits and deletions never patch cells in place. The spec list is changed and
the whole grid is replayed onto a scratch model, which replaces the live one
only when every entry placed cleanly.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, List, Optional, Sequence, Tuple

from ..core.constants import Direction
from ..core.exceptions import (EmptyAnswerError, LengthMismatchError, NoCrossingFoundError,
                               RebuildError, SlotPlacementError)
from ..core.models import Entry, EntrySpec
from ..data.graphemes import DEFAULT_SPLITTER
from ..data.normalization import clean_answer, clean_clue
from ..utils.logger import get_logger
from .puzzle import PuzzleModel


LOGGER = get_logger(__name__)

Splitter = Callable[[str], List[str]]
Crossing = Tuple[int, int, Direction]


class PlacementEngine:
    """Validates and performs every insertion into a :class:`PuzzleModel`."""

    def __init__(
        self,
        model: Optional[PuzzleModel] = None,
        splitter: Optional[Splitter] = None,
    ) -> None:
        self.model = model if model is not None else PuzzleModel()
        self.splitter: Splitter = splitter or DEFAULT_SPLITTER

    @property
    def grid(self):
        return self.model.grid

    def letters_of(self, answer: str) -> List[str]:
        return list(self.splitter(clean_answer(answer)))

    @staticmethod
    def _check_length(answer: str, letters: Sequence[str], expected_length: Optional[int]) -> None:
        if expected_length is not None and expected_length != len(letters):
            raise LengthMismatchError(
                f"Declared {expected_length} letters but {answer!r} has {len(letters)}"
            )

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------
    def can_place(
        self, letters: Sequence[str], row: int, col: int, direction: Direction | str
    ) -> bool:
        return self.grid.can_place(letters, row, col, Direction.parse(direction))

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------
    def place_manual(
        self,
        answer: str,
        clue: str,
        row: int,
        col: int,
        direction: Direction | str,
        expected_length: Optional[int] = None,
    ) -> Entry:
        direction = Direction.parse(direction)
        answer = clean_answer(answer)
        letters = self.letters_of(answer)
        self._check_length(answer, letters, expected_length)

        index = len(self.model.entries)
        self.grid.write(letters, row, col, direction, index)
        entry = Entry(
            clue=clean_clue(clue),
            answer=answer,
            letters=tuple(letters),
            row=row,
            col=col,
            direction=direction,
        )
        self.model.entries.append(entry)
        LOGGER.info(
            "Placed #%s %r %s at (%s,%s), %s letters",
            index + 1,
            answer,
            direction.value,
            row,
            col,
            len(letters),
        )
        return entry

    def place_first(
        self, answer: str, clue: str, expected_length: Optional[int] = None
    ) -> Entry:
        if not self.model.is_empty():
            raise SlotPlacementError("First word can only be placed on an empty puzzle")
        letters = self.letters_of(answer)
        size = self.model.size
        row = size // 2
        col = (size - len(letters)) // 2
        return self.place_manual(
            answer, clue, row, col, Direction.ACROSS, expected_length=expected_length
        )

    def find_crossing(self, answer: str) -> Optional[Crossing]:
        """Return the first valid orthogonal anchor sharing a letter, if any.

        Existing entries are scanned in insertion order, then their letters
        by increasing index, then the candidate's letters by increasing index.
        The first structurally valid anchor wins.
        """

        letters = self.letters_of(answer)
        if not letters:
            return None
        for existing in self.model.entries:
            cross_dir = existing.direction.orthogonal
            cdr, cdc = cross_dir.step
            for i, ((r, c), existing_letter) in enumerate(zip(existing.cells, existing.letters)):
                for j, letter in enumerate(letters):
                    if letter != existing_letter:
                        continue
                    start_row = r - cdr * j
                    start_col = c - cdc * j
                    if self.grid.can_place(letters, start_row, start_col, cross_dir):
                        LOGGER.debug(
                            "Crossing for %r: letter %s on %r letter %s",
                            answer,
                            j,
                            existing.answer,
                            i,
                        )
                        return start_row, start_col, cross_dir
        return None

    def place_auto(
        self, answer: str, clue: str, expected_length: Optional[int] = None
    ) -> Entry:
        if self.model.is_empty():
            return self.place_first(answer, clue, expected_length)
        self._check_length(clean_answer(answer), self.letters_of(answer), expected_length)
        crossing = self.find_crossing(answer)
        if crossing is None:
            LOGGER.warning("No crossing found for %r", answer)
            raise NoCrossingFoundError(f"No valid crossing for {clean_answer(answer)!r}")
        row, col, direction = crossing
        return self.place_manual(answer, clue, row, col, direction)

    # ------------------------------------------------------------------
    # Rebuild based editing
    # ------------------------------------------------------------------
    def rebuild_from_entries(self, specs: Sequence[EntrySpec]) -> None:
        """Replace the model with a fresh replay of ``specs`` in order."""

        try:
            self.model = self._replay(specs)
        except SlotPlacementError as exc:
            raise RebuildError(f"Entry sequence failed to replay: {exc}") from exc
        LOGGER.info("Rebuilt grid from %s entries", len(specs))

    def delete_entry(self, index: int) -> Entry:
        removed = self.model.entry(index)
        specs = self.model.specs()
        del specs[index]
        self.rebuild_from_entries(specs)
        LOGGER.info("Deleted entry #%s %r", index + 1, removed.answer)
        return removed

    def edit_entry(
        self,
        index: int,
        clue: Optional[str] = None,
        answer: Optional[str] = None,
    ) -> Entry:
        """Change the clue and/or answer of one entry, keeping its anchor.

        A new answer may no longer fit; the placement error propagates and
        the live model stays as it was. Blank replacements are rejected.
        """

        if clue is not None and not clean_clue(clue):
            raise ValueError("Edited clue must not be blank")
        if answer is not None and not clean_answer(answer):
            raise EmptyAnswerError("Edited answer must not be blank")
        specs = self.model.specs()
        current = self.model.entry(index).to_spec()
        updated = replace(
            current,
            clue=clue if clue is not None else current.clue,
            answer=answer if answer is not None else current.answer,
        )
        specs[index] = updated
        self.model = self._replay(specs)
        LOGGER.info("Edited entry #%s", index + 1)
        return self.model.entries[index]

    def replace_model(self, model: PuzzleModel) -> None:
        """Swap in a whole loaded puzzle; never merged with the current one."""

        self.model = model
        LOGGER.info(
            "Loaded puzzle %s with %s entries", model.date_key or "<unkeyed>", len(model)
        )

    def _replay(self, specs: Sequence[EntrySpec]) -> PuzzleModel:
        scratch = PuzzleModel(self.model.config, date_key=self.model.date_key)
        replayer = PlacementEngine(scratch, self.splitter)
        for spec in specs:
            replayer.place_manual(spec.answer, spec.clue, spec.row, spec.col, spec.direction)
        return scratch
