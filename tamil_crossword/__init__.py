"""Placement and scoring engine for Tamil (grapheme-cluster) crosswords.

This package exposes the public API surface via:

- ``tamil_crossword.engine.placement.PlacementEngine``: adds, edits and deletes words.
- ``tamil_crossword.engine.evaluation.EvaluationEngine``: scores solver input.
- ``tamil_crossword.io.snapshot`` helpers: load and save date-keyed snapshots.
"""

from .data.graphemes import GraphemeSplitter, SplitStrategy
from .engine.evaluation import EvaluationEngine, EvaluationResult, SolveSession
from .engine.grid import CrosswordGrid, GridConfig
from .engine.placement import PlacementEngine
from .engine.puzzle import PuzzleModel

__all__ = [
    "CrosswordGrid",
    "EvaluationEngine",
    "EvaluationResult",
    "GraphemeSplitter",
    "GridConfig",
    "PlacementEngine",
    "PuzzleModel",
    "SolveSession",
    "SplitStrategy",
]

__version__ = "0.1.0"
