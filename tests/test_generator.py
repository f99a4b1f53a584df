import random
import unittest

from wordsearch.core.constants import ALPHABET
from wordsearch.core.models import SelectedCell
from wordsearch.engine.generator import (
    GeneratorConfig,
    GridGenerator,
    generate_grid,
    letter_weights,
    start_range,
)
from wordsearch.engine.matcher import match_selection


ANIMALS = ["cat", "dog", "horse", "zebra", "giraffe", "lion", "tiger", "parrot"]


class PlacementTests(unittest.TestCase):
    def test_every_placement_reads_back_as_the_word(self) -> None:
        for seed in range(10):
            result = GridGenerator(GeneratorConfig(size=12, seed=seed)).generate(ANIMALS)
            for word, placement in result.placements.items():
                self.assertEqual(result.grid.read_path(placement.cells), word.upper())

    def test_every_cell_holds_one_alphabet_letter(self) -> None:
        result = GridGenerator(GeneratorConfig(size=12, seed=3)).generate(ANIMALS)
        letters = result.grid.letters()
        self.assertEqual(len(letters), 12)
        for row in letters:
            self.assertEqual(len(row), 12)
            for letter in row:
                self.assertEqual(len(letter), 1)
                self.assertIn(letter, ALPHABET)

    def test_every_word_is_placed_or_skipped(self) -> None:
        result = GridGenerator(GeneratorConfig(size=12, seed=5)).generate(ANIMALS)
        self.assertEqual(set(result.placements) | set(result.skipped), set(ANIMALS))
        self.assertFalse(set(result.placements) & set(result.skipped))

    def test_same_seed_reproduces_grid_and_placements(self) -> None:
        first = GridGenerator(GeneratorConfig(seed=42)).generate(ANIMALS)
        second = GridGenerator(GeneratorConfig(seed=42)).generate(ANIMALS)
        self.assertEqual(first.grid.letters(), second.grid.letters())
        self.assertEqual(
            {w: p.cells for w, p in first.placements.items()},
            {w: p.cells for w, p in second.placements.items()},
        )

    def test_single_word_fills_three_by_three_grid(self) -> None:
        result = generate_grid(["cat"], size=3, rng=random.Random(11))
        placement = result.placement_for("cat")
        self.assertIsNotNone(placement)
        assert placement is not None
        self.assertEqual(result.grid.read_path(placement.cells), "CAT")

        selection = [
            SelectedCell(row, col, result.grid.letter_at(row, col) or "")
            for row, col in placement.cells
        ]
        match = match_selection(selection, ["cat"], set())
        self.assertTrue(match.found)
        self.assertEqual(match.word, "cat")

    def test_reverse_pair_on_tiny_grid_does_not_crash(self) -> None:
        for seed in range(20):
            result = GridGenerator(GeneratorConfig(size=2, seed=seed)).generate(["ab", "ba"])
            self.assertEqual(len(result.placements) + len(result.skipped), 2)
            for word, placement in result.placements.items():
                self.assertEqual(result.grid.read_path(placement.cells), word.upper())

    def test_word_longer_than_grid_is_skipped_with_warning(self) -> None:
        generator = GridGenerator(GeneratorConfig(size=5, seed=1, max_attempts=10))
        with self.assertLogs("wordsearch.engine.generator", level="WARNING") as captured:
            result = generator.generate(["elephant", "ant"])
        self.assertEqual(result.skipped, ["elephant"])
        self.assertIn("ant", result.placements)
        self.assertTrue(any("elephant" in line for line in captured.output))

    def test_empty_word_list_still_fills_grid(self) -> None:
        result = generate_grid([], size=4, rng=random.Random(0))
        self.assertEqual(result.placements, {})
        self.assertEqual(list(result.grid.empty_cells()), [])


class FillWeightTests(unittest.TestCase):
    def test_weights_count_letters_case_insensitively(self) -> None:
        weights = letter_weights(["Zoo", "zebra"])
        by_letter = dict(zip(ALPHABET, weights))
        self.assertEqual(by_letter["Z"], 2)
        self.assertEqual(by_letter["O"], 2)
        self.assertEqual(by_letter["A"], 1)
        self.assertEqual(by_letter["Q"], 1)
        self.assertEqual(len(weights), 26)

    def test_non_letters_do_not_enter_the_table(self) -> None:
        weights = letter_weights(["ice-cream", "o'clock"])
        self.assertEqual(len(weights), 26)
        self.assertEqual(dict(zip(ALPHABET, weights))["C"], 4)


class StartRangeTests(unittest.TestCase):
    def test_ranges_follow_step_sign(self) -> None:
        self.assertEqual(start_range(1, 3, 12), (0, 10))
        self.assertEqual(start_range(-1, 3, 12), (2, 12))
        self.assertEqual(start_range(0, 3, 12), (0, 12))

    def test_range_is_empty_when_word_is_too_long(self) -> None:
        low, high = start_range(1, 13, 12)
        self.assertGreaterEqual(low, high)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
