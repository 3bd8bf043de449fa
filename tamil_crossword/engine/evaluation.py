"""Scoring of solver input against a placed puzzle.

Scoring is two-phase. While the solver is still typing, cells only show
whether they hold text (``FILLED``/``EMPTY``). Once the puzzle is finalized
every entry is compared letter by letter after grapheme splitting, and each
cell is classified from the verdicts of all entries crossing it; a single
wrong claimant marks a shared cell ``WRONG``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from ..core.constants import CellStatus
from ..core.exceptions import OutOfBoundsError
from ..core.models import Entry
from ..data.graphemes import DEFAULT_SPLITTER
from ..data.normalization import clean_input
from ..utils.logger import get_logger
from .puzzle import PuzzleModel


LOGGER = get_logger(__name__)

Coord = Tuple[int, int]
Inputs = Mapping[Coord, Optional[str]]
Splitter = Callable[[str], List[str]]


def classify(filled: bool, correct_count: int = 0, wrong_count: int = 0) -> CellStatus:
    if wrong_count > 0:
        return CellStatus.WRONG
    if correct_count > 0:
        return CellStatus.CORRECT
    if filled:
        return CellStatus.FILLED
    return CellStatus.EMPTY


@dataclass
class CellTally:
    filled: bool = False
    correct_count: int = 0
    wrong_count: int = 0

    @property
    def status(self) -> CellStatus:
        return classify(self.filled, self.correct_count, self.wrong_count)


@dataclass
class EvaluationResult:
    total_entries: int
    correct_count: int
    per_entry_correct: List[bool]
    cell_status: Dict[Coord, CellTally] = field(default_factory=dict)

    @property
    def score(self) -> float:
        return self.correct_count / self.total_entries if self.total_entries else 0.0

    def statuses(self) -> Dict[Coord, CellStatus]:
        return {coord: tally.status for coord, tally in self.cell_status.items()}

    def to_jsonable(self) -> dict:
        return {
            "total_entries": self.total_entries,
            "correct_count": self.correct_count,
            "score": self.score,
            "per_entry_correct": list(self.per_entry_correct),
            "cells": [
                {
                    "row": row,
                    "col": col,
                    "filled": tally.filled,
                    "correct_count": tally.correct_count,
                    "wrong_count": tally.wrong_count,
                    "status": tally.status.value,
                }
                for (row, col), tally in sorted(self.cell_status.items())
            ],
        }


class EvaluationEngine:
    """Turns a per-cell input snapshot into verdicts; never touches the model."""

    def __init__(self, splitter: Optional[Splitter] = None) -> None:
        self.splitter: Splitter = splitter or DEFAULT_SPLITTER

    def live_statuses(self, model: PuzzleModel, inputs: Inputs) -> Dict[Coord, CellStatus]:
        """Neutral fill state for every occupied cell; no correctness."""

        return {
            (row, col): classify(bool(clean_input(inputs.get((row, col)))))
            for row, col, _ in model.grid.occupied()
        }

    def entry_correct(self, entry: Entry, inputs: Inputs) -> bool:
        typed = "".join(clean_input(inputs.get(coord)) for coord in entry.cells)
        typed_letters = list(self.splitter(typed))
        return (
            entry.length > 0
            and len(typed_letters) == entry.length
            and all(a == b for a, b in zip(typed_letters, entry.letters))
        )

    def evaluate(self, model: PuzzleModel, inputs: Inputs) -> EvaluationResult:
        per_entry = [self.entry_correct(entry, inputs) for entry in model.entries]

        cell_status: Dict[Coord, CellTally] = {}
        for row, col, cell in model.grid.occupied():
            filled = bool(clean_input(inputs.get((row, col))))
            tally = CellTally(filled=filled)
            if filled:
                for index in cell.claimants:
                    if per_entry[index]:
                        tally.correct_count += 1
                    else:
                        tally.wrong_count += 1
            cell_status[(row, col)] = tally

        result = EvaluationResult(
            total_entries=len(per_entry),
            correct_count=sum(per_entry),
            per_entry_correct=per_entry,
            cell_status=cell_status,
        )
        LOGGER.info(
            "Evaluated puzzle %s: %s/%s correct",
            model.date_key or "<unkeyed>",
            result.correct_count,
            result.total_entries,
        )
        return result


class SolveSession:
    """Solver-side state: typed cells and whether the puzzle was finalized."""

    def __init__(
        self,
        model: PuzzleModel,
        engine: Optional[EvaluationEngine] = None,
    ) -> None:
        self.model = model
        self.engine = engine or EvaluationEngine()
        self.inputs: Dict[Coord, str] = {}
        self.finalized = False
        self.result: Optional[EvaluationResult] = None

    def enter(self, row: int, col: int, text: Optional[str]) -> None:
        if not self.model.grid.bounds.contains(row, col):
            raise OutOfBoundsError(f"Cell {(row, col)} is outside the grid")
        if not self.model.grid.is_occupied(row, col):
            raise ValueError(f"Cell {(row, col)} is not part of any entry")
        self.inputs[(row, col)] = text or ""
        if self.finalized:
            self.result = self.engine.evaluate(self.model, self.inputs)

    def finalize(self) -> EvaluationResult:
        self.finalized = True
        self.result = self.engine.evaluate(self.model, self.inputs)
        return self.result

    def statuses(self) -> Dict[Coord, CellStatus]:
        if not self.finalized or self.result is None:
            return self.engine.live_statuses(self.model, self.inputs)
        return self.result.statuses()
