"""Deterministic verification of persisted puzzle snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from ..core.constants import Direction
from ..core.exceptions import InvalidSnapshotError, SlotPlacementError
from ..core.models import EntrySpec
from ..utils.logger import get_logger
from .grid import GridConfig
from .placement import PlacementEngine
from .puzzle import PuzzleModel


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]
    model: Optional[PuzzleModel] = None


class SnapshotValidator:
    """Rebuilds a snapshot's questions and checks the stored grid against them.

    A snapshot is accepted only if every stored cell can be traced back to a
    question covering it with the same letter and the replayed grid has no
    cell the stored grid lacks.
    """

    def __init__(
        self,
        splitter: Optional[Callable[[str], List[str]]] = None,
        config: Optional[GridConfig] = None,
    ) -> None:
        self.splitter = splitter
        self.config = config or GridConfig()

    def validate(self, data: Any) -> ValidationResult:
        try:
            self._check_shape(data)
            specs = self._parse_questions(data["questions"])
            self._check_spans(specs)
            model = self._replay(specs, data.get("date"))
            self._check_cells(data["grid"], model)
        except InvalidSnapshotError as exc:
            LOGGER.error("Snapshot rejected: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[], model=model)

    def load(self, data: Any) -> PuzzleModel:
        result = self.validate(data)
        if not result.ok or result.model is None:
            raise InvalidSnapshotError("; ".join(result.messages))
        return result.model

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------
    def _check_shape(self, data: Any) -> None:
        if not isinstance(data, dict):
            raise InvalidSnapshotError("Snapshot must be an object")
        date = data.get("date")
        if date is not None and not isinstance(date, str):
            raise InvalidSnapshotError("Snapshot date must be a string")
        grid = data.get("grid")
        size = self.config.size
        if not isinstance(grid, list) or len(grid) != size:
            raise InvalidSnapshotError(f"Snapshot grid must have {size} rows")
        for r, row in enumerate(grid):
            if not isinstance(row, list) or len(row) != size:
                raise InvalidSnapshotError(f"Snapshot grid row {r} must have {size} cells")
        if not isinstance(data.get("questions"), list):
            raise InvalidSnapshotError("Snapshot questions must be a list")

    def _parse_questions(self, questions: List[Any]) -> List[EntrySpec]:
        specs: List[EntrySpec] = []
        for k, item in enumerate(questions):
            if not isinstance(item, dict):
                raise InvalidSnapshotError(f"Question {k} must be an object")
            clue, answer = item.get("q"), item.get("a")
            row, col = item.get("row"), item.get("col")
            if not isinstance(clue, str) or not isinstance(answer, str):
                raise InvalidSnapshotError(f"Question {k} needs string 'q' and 'a'")
            if not _is_int(row) or not _is_int(col):
                raise InvalidSnapshotError(f"Question {k} needs integer 'row' and 'col'")
            try:
                direction = Direction.parse(item.get("dir", ""))
            except ValueError as exc:
                raise InvalidSnapshotError(f"Question {k}: {exc}") from exc
            specs.append(EntrySpec(clue=clue, answer=answer, row=row, col=col, direction=direction))
        return specs

    def _check_spans(self, specs: List[EntrySpec]) -> None:
        bounds = self.config.bounds()
        probe = PlacementEngine(PuzzleModel(self.config), self.splitter)
        for k, spec in enumerate(specs):
            length = len(probe.letters_of(spec.answer))
            if length == 0:
                raise InvalidSnapshotError(f"Question {k} has an empty answer")
            dr, dc = spec.direction.step
            end = (spec.row + dr * (length - 1), spec.col + dc * (length - 1))
            if not bounds.contains(spec.row, spec.col) or not bounds.contains(*end):
                raise InvalidSnapshotError(
                    f"Question {k} span {(spec.row, spec.col)}..{end} leaves the grid"
                )

    def _replay(self, specs: List[EntrySpec], date_key: Optional[str]) -> PuzzleModel:
        engine = PlacementEngine(PuzzleModel(self.config, date_key=date_key), self.splitter)
        for k, spec in enumerate(specs):
            try:
                engine.place_manual(spec.answer, spec.clue, spec.row, spec.col, spec.direction)
            except SlotPlacementError as exc:
                raise InvalidSnapshotError(f"Question {k} cannot be placed: {exc}") from exc
        return engine.model

    def _check_cells(self, grid_data: List[List[Any]], model: PuzzleModel) -> None:
        for r, row in enumerate(grid_data):
            for c, stored in enumerate(row):
                rebuilt = model.grid.cell(r, c)
                if stored is None:
                    if not rebuilt.is_empty():
                        raise InvalidSnapshotError(f"Cell {(r, c)} is empty but a question covers it")
                    continue
                if not isinstance(stored, dict):
                    raise InvalidSnapshotError(f"Cell {(r, c)} must be null or an object")
                letter, index = stored.get("letter"), stored.get("entryIndex")
                if not isinstance(letter, str) or not _is_int(index):
                    raise InvalidSnapshotError(f"Cell {(r, c)} needs 'letter' and 'entryIndex'")
                if not 0 <= index < len(model.entries):
                    raise InvalidSnapshotError(
                        f"Cell {(r, c)} references missing question {index}"
                    )
                entry = model.entries[index]
                cells = entry.cells
                if (r, c) not in cells:
                    raise InvalidSnapshotError(
                        f"Cell {(r, c)} is outside the span of question {index}"
                    )
                if entry.letters[cells.index((r, c))] != letter:
                    raise InvalidSnapshotError(
                        f"Cell {(r, c)} letter {letter!r} disagrees with question {index}"
                    )


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
