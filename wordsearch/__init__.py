"""Word search game core.

This package exposes the public API surface via:

- ``wordsearch.engine.generator.GridGenerator``: places words and fills the grid.
- ``wordsearch.engine.matcher.match_selection``: reads a selection against the word list.
- ``wordsearch.engine.controller.GameController``: stage progression and scoring.
- ``wordsearch.data.stages`` providers: stage lists over HTTP, from a file or in memory.
"""

from .data.progress import InMemoryProgressStore, JsonProgressStore
from .data.stages import FileStageProvider, HttpStageProvider, StaticStageProvider
from .engine.controller import GameConfig, GameController
from .engine.generator import GeneratorConfig, GridGenerator, generate_grid
from .engine.matcher import match_selection

__all__ = [
    "FileStageProvider",
    "GameConfig",
    "GameController",
    "GeneratorConfig",
    "GridGenerator",
    "HttpStageProvider",
    "InMemoryProgressStore",
    "JsonProgressStore",
    "StaticStageProvider",
    "generate_grid",
    "match_selection",
]

__version__ = "0.1.0"
