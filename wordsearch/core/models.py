"""Data models supporting the word search game."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Tuple

from .constants import Direction, GamePhase, StatusLevel


@dataclass(frozen=True)
class Stage:
    """One level of the game: a label, a difficulty and its hidden words."""

    name: str
    difficulty: str
    words: Tuple[str, ...]


@dataclass
class Cell:
    """A grid cell; ``None`` until a word or the fill writes a letter."""

    letter: Optional[str] = None

    def is_empty(self) -> bool:
        return self.letter is None


@dataclass
class WordPlacement:
    """A word written into the grid along one direction."""

    word: str
    start_row: int
    start_col: int
    direction: Direction
    _cells: Optional[List[Tuple[int, int]]] = field(default=None, repr=False, compare=False)

    @property
    def length(self) -> int:
        return len(self.word)

    @property
    def cells(self) -> List[Tuple[int, int]]:
        if self._cells is None:
            dr, dc = self.direction.step
            self._cells = [
                (self.start_row + dr * i, self.start_col + dc * i) for i in range(self.length)
            ]
        return self._cells


@dataclass(frozen=True)
class SelectedCell:
    row: int
    col: int
    letter: str


@dataclass(frozen=True)
class MatchResult:
    """Outcome of reading the current selection against the word list."""

    found: bool
    word: Optional[str] = None
    reversed: bool = False


@dataclass(frozen=True)
class HintResult:
    word: str
    cell: Optional[Tuple[int, int]] = None


@dataclass(frozen=True)
class Progress:
    """Persisted position of the player."""

    stage_index: int = 0
    score: int = 0


@dataclass(frozen=True)
class StatusMessage:
    text: str
    level: StatusLevel = StatusLevel.INFO


@dataclass(frozen=True)
class WordStatus:
    word: str
    found: bool


@dataclass(frozen=True)
class RenderSnapshot:
    """Everything a front end needs to draw the game after a transition."""

    letters: Tuple[Tuple[str, ...], ...]
    selected: Tuple[Tuple[int, int], ...]
    found_cells: FrozenSet[Tuple[int, int]]
    hint_cell: Optional[Tuple[int, int]]
    words: Tuple[WordStatus, ...]
    score: int
    status: StatusMessage
    phase: GamePhase
    stage_index: int
    stage_count: int
    stage_name: Optional[str] = None
    stage_difficulty: Optional[str] = None

    @property
    def stage_label(self) -> str:
        if self.stage_name is None:
            return "No stage loaded"
        return f"Stage {self.stage_index + 1}: {self.stage_name} ({self.stage_difficulty or 'unknown'})"
