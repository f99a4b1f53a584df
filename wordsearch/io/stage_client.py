"""Lightweight HTTP client for the stage list endpoint."""

from __future__ import annotations

import os
from typing import Any, Optional

import requests

from ..core.constants import DEFAULT_STAGES_URL, STAGES_URL_ENV
from ..core.exceptions import StageFetchError
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


class StageClient:
    """Minimal client performing the single GET that returns the stage document."""

    def __init__(
        self,
        url: Optional[str] = None,
        url_env: str = STAGES_URL_ENV,
        timeout_seconds: float = 15.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.url = url or os.environ.get(url_env) or DEFAULT_STAGES_URL
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    def fetch_document(self) -> Any:
        """Return the decoded JSON body, raising :class:`StageFetchError` on any failure."""
        try:
            response = self.session.get(self.url, timeout=self.timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise StageFetchError(f"Stage request failed: {exc}") from exc

        try:
            return response.json()
        except ValueError as exc:
            LOGGER.warning("Stage response from %s is not JSON", self.url)
            raise StageFetchError(f"Stage response is not valid JSON: {exc}") from exc
