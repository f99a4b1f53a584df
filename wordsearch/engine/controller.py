"""Stage progression, scoring and selection handling.

The controller owns the only mutable game state. Every public operation
finishes by publishing a :class:`RenderSnapshot` to the subscribed
listeners; none of them lets a :class:`WordSearchError` escape, the error
becomes an ``error`` status instead.
"""

from __future__ import annotations

import functools
import random
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence, Set, Tuple

from ..core.constants import (
    DEFAULT_GRID_SIZE,
    DEFAULT_MAX_PLACEMENT_ATTEMPTS,
    STAGE_BONUS_POINTS,
    WORD_POINTS,
    GamePhase,
    StatusLevel,
    TransitionKind,
)
from ..core.exceptions import ProgressStoreError, SelectionError, StageFetchError, WordSearchError
from ..core.models import (
    HintResult,
    MatchResult,
    Progress,
    RenderSnapshot,
    SelectedCell,
    Stage,
    StatusMessage,
    WordStatus,
)
from ..data.progress import InMemoryProgressStore, ProgressStore
from ..data.stages import StageProvider
from ..utils.logger import get_logger
from .generator import GenerationResult, GeneratorConfig, GridGenerator
from .matcher import NO_MATCH, longest_remaining_length, match_selection
from .scheduler import TransitionScheduler


LOGGER = get_logger(__name__)

LOADING_MESSAGE = "Loading game data..."
LOAD_ERROR_MESSAGE = "Error loading game. Please refresh."
NO_STAGES_MESSAGE = "No stages available."
DEFAULT_PROMPT = "Find the words in the grid! Words can be in any direction."
KEEP_GOING_MESSAGE = "Keep going! Find more words!"
ALL_FOUND_MESSAGE = "You found all words already!"

RenderListener = Callable[[RenderSnapshot], None]


@dataclass
class GameConfig:
    grid_size: int = DEFAULT_GRID_SIZE
    max_placement_attempts: int = DEFAULT_MAX_PLACEMENT_ATTEMPTS
    word_points: int = WORD_POINTS
    stage_bonus_points: int = STAGE_BONUS_POINTS
    message_delay: float = 2.0
    hint_delay: float = 3.0
    stage_advance_delay: float = 3.0
    reset_delay: float = 5.0
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.grid_size < 1:
            raise ValueError(f"grid_size must be positive, got {self.grid_size}")
        if self.max_placement_attempts < 1:
            raise ValueError(
                f"max_placement_attempts must be positive, got {self.max_placement_attempts}"
            )
        if self.word_points < 0 or self.stage_bonus_points < 0:
            raise ValueError("Point values cannot be negative")
        delays = (self.message_delay, self.hint_delay, self.stage_advance_delay, self.reset_delay)
        if any(delay < 0 for delay in delays):
            raise ValueError("Transition delays cannot be negative")

    def to_generator_config(self) -> GeneratorConfig:
        return GeneratorConfig(
            size=self.grid_size,
            max_attempts=self.max_placement_attempts,
            seed=self.seed,
        )


@dataclass
class GameState:
    stage_index: int = 0
    score: int = 0
    found: Set[str] = field(default_factory=set)
    selection: List[SelectedCell] = field(default_factory=list)
    found_cells: Set[Tuple[int, int]] = field(default_factory=set)
    hint_cell: Optional[Tuple[int, int]] = None
    phase: GamePhase = GamePhase.LOADING
    status: StatusMessage = field(default_factory=lambda: StatusMessage(LOADING_MESSAGE))
    generation: Optional[GenerationResult] = None


def _absorbs_errors(default: Any = None):
    """Turn a :class:`WordSearchError` raised by a public operation into an error status."""

    def decorator(method):
        @functools.wraps(method)
        def wrapper(self: "GameController", *args, **kwargs):
            try:
                return method(self, *args, **kwargs)
            except WordSearchError as exc:
                LOGGER.error("%s failed: %s", method.__name__, exc)
                self._set_status(str(exc), StatusLevel.ERROR)
                self._emit()
                return default

        return wrapper

    return decorator


class GameController:
    """Runs the stage state machine over the grid generator and matcher."""

    def __init__(
        self,
        stages: Sequence[Stage] = (),
        store: Optional[ProgressStore] = None,
        config: Optional[GameConfig] = None,
        scheduler: Optional[TransitionScheduler] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.stages: List[Stage] = list(stages)
        self.store: ProgressStore = store or InMemoryProgressStore()
        self.scheduler = scheduler or TransitionScheduler()
        self.rng = rng or random.Random(self.config.seed)
        self.generator = GridGenerator(self.config.to_generator_config(), rng=self.rng)
        self.state = GameState()
        self._listeners: List[RenderListener] = []

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def total_stages(self) -> int:
        return len(self.stages)

    @property
    def current_stage(self) -> Optional[Stage]:
        if self.state.generation is None or not self.stages:
            return None
        return self.stages[self.state.stage_index]

    @property
    def current_words(self) -> Tuple[str, ...]:
        stage = self.current_stage
        return stage.words if stage else ()

    def snapshot(self) -> RenderSnapshot:
        state = self.state
        stage = self.current_stage
        letters = state.generation.grid.letters() if state.generation else ()
        return RenderSnapshot(
            letters=letters,
            selected=tuple((cell.row, cell.col) for cell in state.selection),
            found_cells=frozenset(state.found_cells),
            hint_cell=state.hint_cell,
            words=tuple(WordStatus(word, word in state.found) for word in self.current_words),
            score=state.score,
            status=state.status,
            phase=state.phase,
            stage_index=state.stage_index,
            stage_count=self.total_stages,
            stage_name=stage.name if stage else None,
            stage_difficulty=stage.difficulty if stage else None,
        )

    def subscribe(self, listener: RenderListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------
    @_absorbs_errors(False)
    def initialize(self, provider: StageProvider) -> bool:
        """Fetch the stages once, then resume from the saved progress."""

        self.state.phase = GamePhase.LOADING
        self._set_status(LOADING_MESSAGE)
        self._emit()
        try:
            self.stages = provider.fetch()
        except StageFetchError as exc:
            LOGGER.error("Error fetching stages: %s", exc)
            self.stages = []
            self.state.generation = None
            self._set_status(LOAD_ERROR_MESSAGE, StatusLevel.ERROR)
            self._emit()
            return False
        return self.start()

    @_absorbs_errors(False)
    def start(self) -> bool:
        progress = self.store.get()
        self.state.score = progress.score
        LOGGER.info(
            "Starting from stage %s, score %s", progress.stage_index + 1, progress.score
        )
        return self.load_stage(progress.stage_index)

    # ------------------------------------------------------------------
    # Stage transitions
    # ------------------------------------------------------------------
    @_absorbs_errors(False)
    def load_stage(self, stage_index: int) -> bool:
        state = self.state
        if not self.stages:
            LOGGER.error("No stages available")
            state.phase = GamePhase.LOADING
            state.generation = None
            self._set_status(NO_STAGES_MESSAGE, StatusLevel.ERROR)
            self._emit()
            return False

        index = min(max(stage_index, 0), self.total_stages - 1)
        if index != stage_index:
            LOGGER.info("Clamped stage index %s to %s", stage_index, index)

        self.scheduler.cancel_all()
        stage = self.stages[index]
        state.stage_index = index
        state.found = set()
        state.selection = []
        state.found_cells = set()
        state.hint_cell = None
        state.generation = self.generator.generate(stage.words, self.config.grid_size)
        state.phase = GamePhase.PLAYING
        LOGGER.info("Loaded stage %s: %s (%s)", index + 1, stage.name, stage.difficulty)
        self._set_status(
            f"Find the {len(stage.words)} words in the grid! Words can be in any direction."
        )
        self._save_progress()
        self._emit()
        return True

    @_absorbs_errors(False)
    def new_stage(self) -> bool:
        """Move to the next stage, wrapping after the last one."""

        if not self.stages:
            return self.load_stage(0)
        return self.load_stage((self.state.stage_index + 1) % self.total_stages)

    @_absorbs_errors(False)
    def reset_stage(self) -> bool:
        """Replay the current stage on a freshly generated grid."""

        return self.load_stage(self.state.stage_index)

    @_absorbs_errors(False)
    def reset_all_progress(self) -> bool:
        self.scheduler.cancel_all()
        self._clear_progress()
        self.state.score = 0
        self.state.stage_index = 0
        LOGGER.info("All progress reset")
        return self.load_stage(0)

    @_absorbs_errors(False)
    def check_stage_complete(self) -> bool:
        """Award the stage bonus once every listed word has been found.

        Words that could not be placed still count toward the total, so a
        stage with an unplaced word never completes.
        """

        state = self.state
        stage = self.current_stage
        if stage is None or len(state.found) != len(stage.words):
            return False
        if state.phase != GamePhase.PLAYING:
            return True

        bonus = len(stage.words) * self.config.stage_bonus_points
        state.score += bonus
        state.phase = GamePhase.STAGE_COMPLETE
        self.scheduler.cancel(TransitionKind.MESSAGE)
        LOGGER.info("Stage %s complete, bonus %s", state.stage_index + 1, bonus)
        self._set_status(
            f"Stage {state.stage_index + 1} Complete! Bonus: +{bonus} points!",
            StatusLevel.SUCCESS,
        )
        self._save_progress()
        self.scheduler.schedule(
            TransitionKind.STAGE_ADVANCE,
            self.config.stage_advance_delay,
            self._advance_after_completion,
        )
        return True

    def _advance_after_completion(self) -> None:
        state = self.state
        if state.phase != GamePhase.STAGE_COMPLETE:
            return
        if state.stage_index < self.total_stages - 1:
            self.load_stage(state.stage_index + 1)
            return

        state.phase = GamePhase.ALL_COMPLETE
        LOGGER.info("All %s stages complete, final score %s", self.total_stages, state.score)
        self._set_status(
            f"Congratulations! You completed all {self.total_stages} stages! "
            f"Final Score: {state.score}",
            StatusLevel.SUCCESS,
        )
        self.scheduler.schedule(
            TransitionKind.PROGRESS_RESET, self.config.reset_delay, self.reset_all_progress
        )
        self._emit()

    # ------------------------------------------------------------------
    # Player input
    # ------------------------------------------------------------------
    @_absorbs_errors(NO_MATCH)
    def select(self, row: int, col: int) -> MatchResult:
        """Toggle a cell in the selection and test the selection for a word."""

        state = self.state
        if state.generation is None:
            raise SelectionError("No stage is loaded")
        if state.phase != GamePhase.PLAYING:
            LOGGER.debug("Ignoring selection at (%s,%s) during %s", row, col, state.phase.value)
            return NO_MATCH
        grid = state.generation.grid
        if not grid.bounds.contains(row, col):
            raise SelectionError(f"Cell ({row}, {col}) is outside the {grid.size}x{grid.size} grid")

        existing = next(
            (cell for cell in state.selection if (cell.row, cell.col) == (row, col)), None
        )
        if existing is not None:
            state.selection.remove(existing)
        else:
            state.selection.append(SelectedCell(row, col, grid.letter_at(row, col) or ""))

        result = self._check_selection()
        self._emit()
        return result

    def clear_selection(self) -> None:
        self.state.selection.clear()
        self._emit()

    @_absorbs_errors(None)
    def hint(self) -> Optional[HintResult]:
        """Point at the first cell of a random unfound word."""

        state = self.state
        stage = self.current_stage
        if stage is None or state.generation is None:
            raise SelectionError("No stage is loaded")
        if state.phase != GamePhase.PLAYING:
            return None

        unfound = [word for word in stage.words if word not in state.found]
        if not unfound:
            self._set_status(ALL_FOUND_MESSAGE)
            self._emit()
            return None

        word = self.rng.choice(unfound)
        placement = state.generation.placement_for(word)
        cell: Optional[Tuple[int, int]] = None
        if placement is not None and placement.cells:
            cell = placement.cells[0]
            state.hint_cell = cell
            self._set_status(f'Hint: Look for "{word.upper()}" starting here!')
        else:
            state.hint_cell = None
            self._set_status(f'Hint: Look for "{word.upper()}" somewhere in the grid!')
        self.scheduler.schedule(TransitionKind.HINT, self.config.hint_delay, self._clear_hint)
        self._emit()
        return HintResult(word=word, cell=cell)

    def tick(self, now: Optional[float] = None) -> int:
        """Run the delayed transitions that are due."""

        return self.scheduler.run_due(now)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _check_selection(self) -> MatchResult:
        state = self.state
        words = self.current_words
        result = match_selection(state.selection, words, state.found)
        if result.found and result.word is not None:
            self._record_match(result.word)
            return result
        if len(state.selection) > longest_remaining_length(words, state.found):
            LOGGER.debug("Selection longer than every remaining word; clearing")
            state.selection.clear()
        return result

    def _record_match(self, word: str) -> None:
        state = self.state
        points = len(word) * self.config.word_points
        state.found.add(word)
        state.found_cells.update((cell.row, cell.col) for cell in state.selection)
        state.selection.clear()
        state.score += points
        LOGGER.info("Found %r for %s points", word, points)
        self._set_status(f'Great! Found "{word.upper()}"! +{points} points', StatusLevel.SUCCESS)
        self._save_progress()
        if not self.check_stage_complete():
            self.scheduler.schedule(
                TransitionKind.MESSAGE, self.config.message_delay, self._keep_going
            )

    def _keep_going(self) -> None:
        if self.state.phase != GamePhase.PLAYING:
            return
        if len(self.state.found) < len(self.current_words):
            self._set_status(KEEP_GOING_MESSAGE)
            self._emit()

    def _clear_hint(self) -> None:
        self.state.hint_cell = None
        if self.state.phase == GamePhase.PLAYING:
            self._set_status(DEFAULT_PROMPT)
        self._emit()

    def _save_progress(self) -> None:
        progress = Progress(stage_index=self.state.stage_index, score=self.state.score)
        try:
            self.store.set(progress)
        except ProgressStoreError as exc:
            LOGGER.warning("Progress not saved: %s", exc)
            self._set_status(f"Progress could not be saved: {exc}", StatusLevel.ERROR)

    def _clear_progress(self) -> None:
        try:
            self.store.clear()
        except ProgressStoreError as exc:
            LOGGER.warning("Saved progress not cleared: %s", exc)

    def _set_status(self, text: str, level: StatusLevel = StatusLevel.INFO) -> None:
        self.state.status = StatusMessage(text=text, level=level)

    def _emit(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                LOGGER.exception("Render listener %r failed", listener)
