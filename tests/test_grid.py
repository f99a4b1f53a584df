import unittest

from wordsearch.core.constants import Direction
from wordsearch.core.exceptions import PlacementError
from wordsearch.engine.grid import GridConfig, LetterGrid


class GridPlacementTests(unittest.TestCase):
    def test_place_word_writes_uppercase_letters_along_direction(self) -> None:
        grid = LetterGrid(GridConfig(size=5))
        placement = grid.place_word("cat", 4, 0, Direction.DIAGONAL_UP)

        self.assertEqual(placement.cells, [(4, 0), (3, 1), (2, 2)])
        self.assertEqual(grid.read_path(placement.cells), "CAT")
        self.assertEqual(grid.letter_at(3, 1), "A")

    def test_crossing_words_share_equal_letters(self) -> None:
        grid = LetterGrid(GridConfig(size=5))
        grid.place_word("cat", 0, 0, Direction.HORIZONTAL)

        self.assertTrue(grid.can_place("tea", 0, 2, Direction.VERTICAL))
        grid.place_word("tea", 0, 2, Direction.VERTICAL)
        self.assertEqual(grid.read_path([(0, 0), (0, 1), (0, 2), (1, 2), (2, 2)]), "CATEA")

    def test_conflicting_letter_is_rejected(self) -> None:
        grid = LetterGrid(GridConfig(size=5))
        grid.place_word("cat", 0, 0, Direction.HORIZONTAL)

        self.assertFalse(grid.can_place("dog", 0, 2, Direction.VERTICAL))
        with self.assertRaises(PlacementError):
            grid.place_word("dog", 0, 2, Direction.VERTICAL)
        self.assertEqual(grid.letter_at(1, 2), None)

    def test_out_of_bounds_paths_are_rejected(self) -> None:
        grid = LetterGrid(GridConfig(size=3))
        self.assertFalse(grid.can_place("cat", 0, 1, Direction.HORIZONTAL))
        self.assertFalse(grid.can_place("cat", 1, 0, Direction.VERTICAL_BACK))
        self.assertTrue(grid.can_place("cat", 2, 0, Direction.VERTICAL_BACK))
        with self.assertRaises(PlacementError):
            grid.place_word("cats", 0, 0, Direction.HORIZONTAL)

    def test_empty_cells_shrink_as_letters_are_set(self) -> None:
        grid = LetterGrid(GridConfig(size=2))
        grid.place_word("ab", 0, 0, Direction.HORIZONTAL)

        self.assertEqual(list(grid.empty_cells()), [(1, 0), (1, 1)])
        grid.set_letter(1, 0, "z")
        grid.set_letter(1, 1, "y")
        self.assertEqual(grid.letters(), (("A", "B"), ("Z", "Y")))
        self.assertEqual(list(grid.empty_cells()), [])

    def test_set_letter_requires_single_character(self) -> None:
        grid = LetterGrid(GridConfig(size=2))
        with self.assertRaises(ValueError):
            grid.set_letter(0, 0, "AB")

    def test_non_positive_size_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            LetterGrid(GridConfig(size=0))

    def test_rejected_placement_leaves_grid_untouched(self) -> None:
        grid = LetterGrid(GridConfig(size=4))
        grid.place_word("sun", 1, 0, Direction.HORIZONTAL)
        before = grid.letters()

        with self.assertRaises(PlacementError):
            grid.place_word("moon", 0, 1, Direction.VERTICAL)
        self.assertEqual(grid.letters(), before)
        self.assertEqual(len(list(grid.empty_cells())), 13)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
