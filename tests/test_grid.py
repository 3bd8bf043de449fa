import unittest

from tamil_crossword.core.constants import Direction
from tamil_crossword.core.exceptions import (ConflictingLetterError, EmptyAnswerError,
                                             OutOfBoundsError)
from tamil_crossword.engine.grid import CrosswordGrid, GridConfig


class GridPlacementTests(unittest.TestCase):
    def setUp(self) -> None:
        self.grid = CrosswordGrid(GridConfig(size=5))
        self.grid.write(["அ", "ம்", "மா"], 2, 1, Direction.ACROSS, 0)

    def test_write_records_letters_and_claimant(self) -> None:
        self.assertEqual(self.grid.letter_at(2, 1), "அ")
        self.assertEqual(self.grid.letter_at(2, 3), "மா")
        self.assertEqual(self.grid.cell(2, 2).claimants, {0})
        self.assertEqual(self.grid.filled_count, 3)

    def test_shared_cell_gets_second_claimant(self) -> None:
        self.grid.write(["மா", "லை"], 2, 3, Direction.DOWN, 1)
        cell = self.grid.cell(2, 3)
        self.assertEqual(cell.letter, "மா")
        self.assertEqual(cell.claimants, {0, 1})
        self.assertTrue(cell.is_crossing())
        self.assertEqual(self.grid.crossing_count, 1)

    def test_can_place_is_pure(self) -> None:
        before = self.grid.letters_matrix()
        claimants = [[set(cell.claimants) for cell in row] for row in self.grid.cells]
        self.assertFalse(self.grid.can_place(["க", "ட"], 2, 1, Direction.DOWN))
        self.assertTrue(self.grid.can_place(["மா", "லை"], 2, 3, Direction.DOWN))
        self.assertFalse(self.grid.can_place(["க", "ட"], 4, 4, Direction.ACROSS))
        self.assertEqual(self.grid.letters_matrix(), before)
        self.assertEqual([[set(cell.claimants) for cell in row] for row in self.grid.cells], claimants)

    def test_check_placement_reports_first_failure(self) -> None:
        with self.assertRaises(EmptyAnswerError):
            self.grid.check_placement([], 0, 0, Direction.ACROSS)
        with self.assertRaises(OutOfBoundsError):
            self.grid.check_placement(["க", "ட"], 0, 4, Direction.ACROSS)
        with self.assertRaises(OutOfBoundsError):
            self.grid.check_placement(["க"], -1, 0, Direction.DOWN)
        with self.assertRaises(ConflictingLetterError):
            self.grid.check_placement(["க", "ட"], 1, 2, Direction.DOWN)

    def test_rejected_write_leaves_grid_unchanged(self) -> None:
        before = self.grid.letters_matrix()
        with self.assertRaises(ConflictingLetterError):
            # First cell is free, second conflicts: nothing may be written.
            self.grid.write(["க", "ட"], 1, 2, Direction.DOWN, 1)
        self.assertEqual(self.grid.letters_matrix(), before)
        self.assertTrue(self.grid.cell(1, 2).is_empty())

    def test_to_jsonable_uses_latest_claimant(self) -> None:
        self.grid.write(["மா", "லை"], 2, 3, Direction.DOWN, 1)
        data = self.grid.to_jsonable()
        self.assertIsNone(data[0][0])
        self.assertEqual(data[2][1], {"letter": "அ", "entryIndex": 0})
        self.assertEqual(data[2][3], {"letter": "மா", "entryIndex": 1})

    def test_grid_size_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            GridConfig(size=0)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
