"""Shared constants and enumerations for the word search game."""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


ALPHABET = string.ascii_uppercase

DEFAULT_GRID_SIZE = 12
DEFAULT_MAX_PLACEMENT_ATTEMPTS = 100
WORD_POINTS = 10
STAGE_BONUS_POINTS = 25

DEFAULT_STAGES_URL = "https://cdn.shopify.com/s/files/1/0771/5536/9212/files/quiz-list.json"
STAGES_URL_ENV = "WORDSEARCH_STAGES_URL"


class Direction(str, Enum):
    """The eight straight lines a hidden word may follow."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"
    DIAGONAL_DOWN = "DIAGONAL_DOWN"
    DIAGONAL_UP = "DIAGONAL_UP"
    HORIZONTAL_BACK = "HORIZONTAL_BACK"
    VERTICAL_BACK = "VERTICAL_BACK"
    DIAGONAL_DOWN_BACK = "DIAGONAL_DOWN_BACK"
    DIAGONAL_UP_BACK = "DIAGONAL_UP_BACK"

    @property
    def step(self) -> Tuple[int, int]:
        return DIRECTION_STEPS[self]


DIRECTION_STEPS: Dict[Direction, Tuple[int, int]] = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN: (1, 1),
    Direction.DIAGONAL_UP: (-1, 1),
    Direction.HORIZONTAL_BACK: (0, -1),
    Direction.VERTICAL_BACK: (-1, 0),
    Direction.DIAGONAL_DOWN_BACK: (-1, -1),
    Direction.DIAGONAL_UP_BACK: (1, -1),
}


class StatusLevel(str, Enum):
    """Severity attached to a status message shown to the player."""

    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


class GamePhase(str, Enum):
    """States of the stage progression machine."""

    LOADING = "LOADING"
    PLAYING = "PLAYING"
    STAGE_COMPLETE = "STAGE_COMPLETE"
    ALL_COMPLETE = "ALL_COMPLETE"


class TransitionKind(str, Enum):
    """Classes of delayed transitions; one pending entry per kind."""

    MESSAGE = "MESSAGE"
    HINT = "HINT"
    STAGE_ADVANCE = "STAGE_ADVANCE"
    PROGRESS_RESET = "PROGRESS_RESET"


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
