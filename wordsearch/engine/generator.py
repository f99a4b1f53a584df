"""Word search grid generation.

Two-phase approach:
  1. Placement: shuffle the words and give each one a bounded number of
     random direction/start attempts, allowing crossings on equal letters.
  2. Fill: every remaining empty cell receives a letter sampled with weights
     taken from the letter frequencies of the stage words.
"""

from __future__ import annotations

import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..core.constants import ALPHABET, DEFAULT_GRID_SIZE, DEFAULT_MAX_PLACEMENT_ATTEMPTS, Direction
from ..core.models import WordPlacement
from ..utils.logger import get_logger
from .grid import GridConfig, LetterGrid


LOGGER = get_logger(__name__)

DIRECTIONS: Tuple[Direction, ...] = tuple(Direction)


@dataclass
class GeneratorConfig:
    size: int = DEFAULT_GRID_SIZE
    max_attempts: int = DEFAULT_MAX_PLACEMENT_ATTEMPTS
    seed: Optional[int] = None

    def to_grid_config(self) -> GridConfig:
        return GridConfig(size=self.size)


@dataclass
class GenerationResult:
    grid: LetterGrid
    placements: Dict[str, WordPlacement]
    skipped: List[str] = field(default_factory=list)

    def placement_for(self, word: str) -> Optional[WordPlacement]:
        return self.placements.get(word)


def letter_weights(words: Sequence[str]) -> List[int]:
    """Weight per letter of ``ALPHABET``: its count across ``words``, floored at 1."""

    counts = Counter(ch for word in words for ch in word.upper() if ch in ALPHABET)
    return [max(counts[letter], 1) for letter in ALPHABET]


def start_range(step: int, length: int, size: int) -> Tuple[int, int]:
    """Half-open range of start coordinates keeping ``length`` cells on one axis."""

    span = length - 1
    if step > 0:
        return 0, size - span
    if step < 0:
        return span, size
    return 0, size


class GridGenerator:
    """Places a word list into a fresh grid and fills the leftover cells."""

    def __init__(self, config: Optional[GeneratorConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or GeneratorConfig()
        self.rng = rng or random.Random(self.config.seed)

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self, words: Sequence[str], size: Optional[int] = None) -> GenerationResult:
        grid_config = self.config.to_grid_config()
        if size is not None:
            grid_config = GridConfig(size=size)
        grid = LetterGrid(grid_config)

        order = list(words)
        self.rng.shuffle(order)

        placements: Dict[str, WordPlacement] = {}
        skipped: List[str] = []
        for word in order:
            placement = self._place_randomly(grid, word)
            if placement is None:
                LOGGER.warning(
                    "Could not place word %r after %s attempts", word, self.config.max_attempts
                )
                skipped.append(word)
                continue
            placements[word] = placement

        self._fill_weighted(grid, words)
        LOGGER.info(
            "Generated %sx%s grid with %s/%s words placed",
            grid.size,
            grid.size,
            len(placements),
            len(order),
        )
        return GenerationResult(grid=grid, placements=placements, skipped=skipped)

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------
    def _place_randomly(self, grid: LetterGrid, word: str) -> Optional[WordPlacement]:
        if not word:
            return None
        for attempt in range(1, self.config.max_attempts + 1):
            direction = self.rng.choice(DIRECTIONS)
            start = self._random_start(grid.size, word, direction)
            if start is None:
                continue
            row, col = start
            if not grid.can_place(word, row, col, direction):
                continue
            placement = grid.place_word(word, row, col, direction)
            LOGGER.debug(
                "Placed %r at (%s,%s) %s on attempt %s",
                word,
                row,
                col,
                direction.value,
                attempt,
            )
            return placement
        return None

    def _random_start(self, size: int, word: str, direction: Direction) -> Optional[Tuple[int, int]]:
        dr, dc = direction.step
        row_lo, row_hi = start_range(dr, len(word), size)
        col_lo, col_hi = start_range(dc, len(word), size)
        if row_lo >= row_hi or col_lo >= col_hi:
            return None
        return self.rng.randrange(row_lo, row_hi), self.rng.randrange(col_lo, col_hi)

    # ------------------------------------------------------------------
    # Fill
    # ------------------------------------------------------------------
    def _fill_weighted(self, grid: LetterGrid, words: Sequence[str]) -> None:
        weights = letter_weights(words)
        empty = list(grid.empty_cells())
        letters = self.rng.choices(ALPHABET, weights=weights, k=len(empty))
        for (row, col), letter in zip(empty, letters):
            grid.set_letter(row, col, letter)


def generate_grid(
    words: Sequence[str],
    size: int = DEFAULT_GRID_SIZE,
    rng: Optional[random.Random] = None,
) -> GenerationResult:
    """Convenience wrapper returning a filled grid and its placements."""

    return GridGenerator(GeneratorConfig(size=size), rng=rng).generate(words)
