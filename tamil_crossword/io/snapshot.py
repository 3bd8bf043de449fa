"""Conversion between :class:`PuzzleModel` and the exchanged JSON snapshot."""

from __future__ import annotations

import json
from typing import Any, Callable, List, Optional

from ..core.exceptions import InvalidSnapshotError
from ..engine.grid import GridConfig
from ..engine.puzzle import PuzzleModel
from ..engine.validator import SnapshotValidator


def to_snapshot(model: PuzzleModel, date_key: Optional[str] = None) -> dict:
    return {
        "date": date_key if date_key is not None else model.date_key,
        "grid": model.grid.to_jsonable(),
        "questions": [
            {
                "q": entry.clue,
                "a": entry.answer,
                "row": entry.row,
                "col": entry.col,
                "dir": entry.direction.value,
            }
            for entry in model.entries
        ],
    }


def from_snapshot(
    data: Any,
    splitter: Optional[Callable[[str], List[str]]] = None,
    config: Optional[GridConfig] = None,
) -> PuzzleModel:
    """Build a complete model from ``data`` or raise :class:`InvalidSnapshotError`."""

    return SnapshotValidator(splitter=splitter, config=config).load(data)


def dumps(model: PuzzleModel) -> str:
    return json.dumps(to_snapshot(model), ensure_ascii=False, indent=2)


def loads(
    text: str,
    splitter: Optional[Callable[[str], List[str]]] = None,
    config: Optional[GridConfig] = None,
) -> PuzzleModel:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidSnapshotError(f"Snapshot is not valid JSON: {exc}") from exc
    return from_snapshot(data, splitter=splitter, config=config)
