"""Persistence of the player's stage index and score.

Both values are kept as string entries under two keys, mirroring the
browser storage the game was first written against. Anything that does not
parse as a non-negative integer reads back as the default ``0``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional, Protocol

from ..core.exceptions import ProgressStoreError
from ..core.models import Progress
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

STAGE_KEY = "current_stage"
SCORE_KEY = "current_score"
DEFAULT_PROGRESS_PATH = Path("local_db/progress.json")


class ProgressStore(Protocol):
    def get(self) -> Progress:
        ...

    def set(self, progress: Progress) -> None:
        ...

    def clear(self) -> None:
        ...


def parse_counter(raw: object, key: str) -> int:
    """Parse a stored non-negative integer, falling back to ``0``."""

    if raw is None:
        return 0
    try:
        value = int(str(raw).strip())
    except ValueError:
        LOGGER.warning("Ignoring invalid stored %s value %r", key, raw)
        return 0
    if value < 0:
        LOGGER.warning("Ignoring negative stored %s value %r", key, raw)
        return 0
    return value


def progress_from_entries(entries: Dict[str, object]) -> Progress:
    return Progress(
        stage_index=parse_counter(entries.get(STAGE_KEY), STAGE_KEY),
        score=parse_counter(entries.get(SCORE_KEY), SCORE_KEY),
    )


def progress_to_entries(progress: Progress) -> Dict[str, str]:
    return {STAGE_KEY: str(progress.stage_index), SCORE_KEY: str(progress.score)}


class InMemoryProgressStore:
    """Dictionary-backed store; raw entries may be seeded directly."""

    def __init__(self, entries: Optional[Dict[str, object]] = None) -> None:
        self.entries: Dict[str, object] = dict(entries or {})

    def get(self) -> Progress:
        return progress_from_entries(self.entries)

    def set(self, progress: Progress) -> None:
        self.entries.update(progress_to_entries(progress))

    def clear(self) -> None:
        self.entries.pop(STAGE_KEY, None)
        self.entries.pop(SCORE_KEY, None)


class JsonProgressStore:
    """Keeps progress entries in a small JSON document on disk."""

    def __init__(self, path: Path | str = DEFAULT_PROGRESS_PATH) -> None:
        self.path = Path(path)

    def get(self) -> Progress:
        return progress_from_entries(self._read_entries())

    def set(self, progress: Progress) -> None:
        entries = self._read_entries()
        entries.update(progress_to_entries(progress))
        self._write_entries(entries)
        LOGGER.debug(
            "Saved progress - stage %s, score %s", progress.stage_index + 1, progress.score
        )

    def clear(self) -> None:
        entries = self._read_entries()
        entries.pop(STAGE_KEY, None)
        entries.pop(SCORE_KEY, None)
        self._write_entries(entries)
        LOGGER.info("All progress reset")

    def _read_entries(self) -> Dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            doc = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            LOGGER.warning("Progress file unreadable (%s): %s", self.path, exc)
            return {}
        if not isinstance(doc, dict):
            LOGGER.warning("Progress file %s does not hold an object; ignoring", self.path)
            return {}
        return doc

    def _write_entries(self, entries: Dict[str, object]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(entries, indent=2), encoding="utf-8")
        except OSError as exc:
            raise ProgressStoreError(f"Cannot write progress to {self.path}: {exc}") from exc
