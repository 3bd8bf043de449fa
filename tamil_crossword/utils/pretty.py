"""Pretty-print helpers for puzzle grids and scoring results."""

from __future__ import annotations

import sys
import unicodedata
from typing import TYPE_CHECKING, Dict, Optional, Tuple

from ..core.constants import CellStatus

if TYPE_CHECKING:
    from ..engine.evaluation import EvaluationResult
    from ..engine.puzzle import PuzzleModel


EMPTY_SYMBOL = "."
STATUS_MARKS = {
    CellStatus.EMPTY: " ",
    CellStatus.FILLED: "~",
    CellStatus.CORRECT: "+",
    CellStatus.WRONG: "!",
}


def _pad(text: str, width: int) -> str:
    # Nonspacing marks such as the pulli take no terminal column.
    visible = sum(1 for ch in text if unicodedata.category(ch) != "Mn")
    return " " * max(0, width - visible) + text


def format_grid(
    model: PuzzleModel,
    statuses: Optional[Dict[Tuple[int, int], CellStatus]] = None,
) -> str:
    grid = model.grid
    width = grid.bounds.cols
    letters = grid.letters_matrix()
    lines = ["    " + " ".join(f"{c:>3}" for c in range(width))]
    lines.append("    " + "-" * (4 * width - 1))
    for r in range(grid.bounds.rows):
        rendered = []
        for c in range(width):
            letter = letters[r][c] or EMPTY_SYMBOL
            mark = ""
            if statuses is not None and (r, c) in statuses:
                mark = STATUS_MARKS[statuses[(r, c)]]
            rendered.append(_pad(letter + mark, 3))
        lines.append(f"{r:>2} | " + " ".join(rendered))
    return "\n".join(lines)


def format_clues(model: PuzzleModel) -> str:
    lines = []
    for number, entry in model.numbered():
        lines.append(
            f"{number:>2}. ({entry.direction.value}) {entry.clue}"
            f"  [{entry.length} letters at {entry.row},{entry.col}]"
        )
    return "\n".join(lines)


def pretty_print_puzzle(model: PuzzleModel, *, label: str | None = None, stream=None) -> None:
    """Print the grid followed by the numbered clue list."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(model), file=stream)
    print(
        f"{len(model)} entries, {model.grid.filled_count} cells, "
        f"{model.grid.crossing_count} crossings",
        file=stream,
    )
    print(file=stream)
    print(format_clues(model), file=stream)


def print_evaluation(
    model: PuzzleModel,
    result: EvaluationResult,
    *,
    stream=None,
) -> None:
    """Print the marked grid, per-entry verdicts and the aggregate score."""

    stream = stream or sys.stdout
    print(format_grid(model, result.statuses()), file=stream)
    print(file=stream)
    print("--- Entries ---", file=stream)
    for (number, entry), correct in zip(model.numbered(), result.per_entry_correct):
        verdict = "correct" if correct else "wrong"
        print(f"  {number:>2}. {entry.answer}: {verdict}", file=stream)
    print(file=stream)
    print(
        f"Score: {result.correct_count}/{result.total_entries} ({result.score * 100:.0f}%)",
        file=stream,
    )
