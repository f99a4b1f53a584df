"""Grid representation and placement helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from ..core.constants import Bounds, Direction
from ..core.exceptions import PlacementError
from ..core.models import Cell, WordPlacement


@dataclass
class GridConfig:
    """Configuration values driving the grid layout."""

    size: int

    def bounds(self) -> Bounds:
        return Bounds(rows=self.size, cols=self.size)


class LetterGrid:
    """Square grid of single uppercase letters with placement helpers."""

    def __init__(self, config: GridConfig) -> None:
        if config.size < 1:
            raise ValueError(f"Grid size must be positive, got {config.size}")
        self.config = config
        self.bounds = config.bounds()
        self.cells: List[List[Cell]] = [
            [Cell() for _ in range(self.bounds.cols)] for _ in range(self.bounds.rows)
        ]

    @property
    def size(self) -> int:
        return self.config.size

    # ------------------------------------------------------------------
    # Word placement
    # ------------------------------------------------------------------
    def can_place(self, word: str, row: int, col: int, direction: Direction) -> bool:
        """Every cell on the path is in bounds and empty or already holds the letter."""

        text = word.upper()
        dr, dc = direction.step
        for index, letter in enumerate(text):
            r, c = row + dr * index, col + dc * index
            if not self.bounds.contains(r, c):
                return False
            existing = self.cells[r][c].letter
            if existing is not None and existing != letter:
                return False
        return True

    def place_word(self, word: str, row: int, col: int, direction: Direction) -> WordPlacement:
        placement = WordPlacement(word=word, start_row=row, start_col=col, direction=direction)
        text = word.upper()
        for index, (r, c) in enumerate(placement.cells):
            if not self.bounds.contains(r, c):
                raise PlacementError(f"Word {word!r} extends outside grid at {(r, c)}")
            existing = self.cells[r][c].letter
            if existing is not None and existing != text[index]:
                raise PlacementError(
                    f"Letter conflict for {word!r} at {(r, c)}: {existing} != {text[index]}"
                )

        # All checks passed, mutate grid
        for index, (r, c) in enumerate(placement.cells):
            self.cells[r][c].letter = text[index]
        return placement

    def set_letter(self, row: int, col: int, letter: str) -> None:
        if len(letter) != 1:
            raise ValueError(f"Cells hold exactly one character, got {letter!r}")
        self.cells[row][col].letter = letter.upper()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def letter_at(self, row: int, col: int) -> Optional[str]:
        return self.cells[row][col].letter

    def empty_cells(self) -> Iterable[Tuple[int, int]]:
        for r in range(self.bounds.rows):
            for c in range(self.bounds.cols):
                if self.cells[r][c].is_empty():
                    yield r, c

    def read_path(self, cells: Iterable[Tuple[int, int]]) -> str:
        return "".join(self.cells[r][c].letter or "" for r, c in cells)

    def letters(self) -> Tuple[Tuple[str, ...], ...]:
        return tuple(
            tuple(cell.letter or "" for cell in row) for row in self.cells
        )

