"""Cancellable delayed transitions keyed by kind."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from ..core.constants import TransitionKind
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class ScheduledTransition:
    kind: TransitionKind
    due: float
    callback: Callable[[], None]


class TransitionScheduler:
    """Holds at most one pending callback per :class:`TransitionKind`.

    Nothing runs on its own: the owner calls :meth:`run_due` from its event
    loop. Scheduling a kind that is already pending replaces the old entry.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self.clock = clock
        self._pending: Dict[TransitionKind, ScheduledTransition] = {}

    def schedule(self, kind: TransitionKind, delay: float, callback: Callable[[], None]) -> None:
        due = self.clock() + max(delay, 0.0)
        if kind in self._pending:
            LOGGER.debug("Replacing pending %s transition", kind.value)
        self._pending[kind] = ScheduledTransition(kind=kind, due=due, callback=callback)

    def cancel(self, kind: TransitionKind) -> bool:
        return self._pending.pop(kind, None) is not None

    def cancel_all(self) -> None:
        if self._pending:
            LOGGER.debug("Cancelling %s pending transitions", len(self._pending))
        self._pending.clear()

    def is_pending(self, kind: TransitionKind) -> bool:
        return kind in self._pending

    def next_due(self) -> Optional[float]:
        if not self._pending:
            return None
        return min(entry.due for entry in self._pending.values())

    def run_due(self, now: Optional[float] = None) -> int:
        """Fire every transition due at ``now``; returns how many ran."""

        now = self.clock() if now is None else now
        fired = 0
        while True:
            due: List[ScheduledTransition] = sorted(
                (entry for entry in self._pending.values() if entry.due <= now),
                key=lambda entry: entry.due,
            )
            if not due:
                return fired
            entry = due[0]
            # Pop before firing: the callback may schedule the same kind again.
            del self._pending[entry.kind]
            LOGGER.debug("Running %s transition", entry.kind.value)
            entry.callback()
            fired += 1
