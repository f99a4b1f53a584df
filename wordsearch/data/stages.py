"""Stage providers and the stage document schema."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional, Protocol, Sequence

from ..core.exceptions import StageFetchError
from ..core.models import Stage
from ..io.stage_client import StageClient
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

UNKNOWN_DIFFICULTY = "unknown"


class StageProvider(Protocol):
    """Protocol implemented by all stage sources."""

    def fetch(self) -> List[Stage]:
        ...


def parse_stage_document(payload: Any) -> List[Stage]:
    """Validate ``{"stages": [{name, difficulty, words}]}`` and build :class:`Stage` objects.

    Raises :class:`StageFetchError` on any schema mismatch; a partially valid
    document is rejected as a whole. A stage whose ``words`` list is empty
    cannot be played and is skipped with a warning.
    """

    if not isinstance(payload, dict):
        raise StageFetchError("Stage document must be a JSON object")
    raw_stages = payload.get("stages")
    if not isinstance(raw_stages, list):
        raise StageFetchError("Stage document is missing a 'stages' list")

    stages: List[Stage] = []
    for index, raw in enumerate(raw_stages):
        if not isinstance(raw, dict):
            raise StageFetchError(f"Stage #{index + 1} is not an object")
        words = raw.get("words")
        if not isinstance(words, list):
            raise StageFetchError(f"Stage #{index + 1} has no 'words' list")
        if not words:
            LOGGER.warning("Skipping stage #%s: it has no words", index + 1)
            continue
        cleaned: List[str] = []
        for word in words:
            if not isinstance(word, str) or not word.strip():
                raise StageFetchError(f"Stage #{index + 1} contains an invalid word: {word!r}")
            cleaned.append(word.strip())

        name = raw.get("name")
        if name is None:
            name = f"Stage {index + 1}"
        elif not isinstance(name, str):
            raise StageFetchError(f"Stage #{index + 1} has a non-string name")

        difficulty = raw.get("difficulty") or UNKNOWN_DIFFICULTY
        if not isinstance(difficulty, str):
            raise StageFetchError(f"Stage #{index + 1} has a non-string difficulty")

        stages.append(Stage(name=name, difficulty=difficulty, words=tuple(cleaned)))
    return stages


class HttpStageProvider:
    """Fetches the stage document over HTTP."""

    def __init__(self, client: Optional[StageClient] = None, url: Optional[str] = None) -> None:
        self.client = client or StageClient(url=url)

    def fetch(self) -> List[Stage]:
        stages = parse_stage_document(self.client.fetch_document())
        LOGGER.info("Loaded %s stages from %s", len(stages), self.client.url)
        return stages


class FileStageProvider:
    """Reads the stage document from a local JSON file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def fetch(self) -> List[Stage]:
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            raise StageFetchError(f"Cannot read stage file {self.path}: {exc}") from exc
        stages = parse_stage_document(payload)
        LOGGER.info("Loaded %s stages from %s", len(stages), self.path)
        return stages


class StaticStageProvider:
    def __init__(self, stages: Sequence[Stage]) -> None:
        self.stages = list(stages)

    def fetch(self) -> List[Stage]:
        return list(self.stages)
