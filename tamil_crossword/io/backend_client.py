"""HTTP gateway to the puzzle backend."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from ..core.exceptions import PersistenceError
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)

PUZZLE_PATH = "/api/crossword/today"
BACKEND_URL_ENV = "CROSSWORD_BACKEND_URL"
BACKEND_TIMEOUT_ENV = "CROSSWORD_BACKEND_TIMEOUT"


@dataclass
class BackendConfig:
    base_url: str
    timeout_seconds: float = 30.0

    @classmethod
    def from_env(
        cls,
        base_url: Optional[str] = None,
        url_env: str = BACKEND_URL_ENV,
        timeout_env: str = BACKEND_TIMEOUT_ENV,
    ) -> "BackendConfig":
        """Read backend settings from the environment; an explicit URL wins."""

        base_url = base_url or os.environ.get(url_env)
        if not base_url:
            raise RuntimeError(f"Missing backend URL in environment variable {url_env}")
        timeout = os.environ.get(timeout_env)
        return cls(
            base_url=base_url,
            timeout_seconds=float(timeout) if timeout else cls.timeout_seconds,
        )


class RemotePuzzleStore:
    """Minimal client for the backend's date-keyed puzzle endpoint."""

    def __init__(self, config: BackendConfig, session: Optional[requests.Session] = None) -> None:
        self.config = config
        self.session = session or requests.Session()

    @property
    def url(self) -> str:
        return self.config.base_url.rstrip("/") + PUZZLE_PATH

    def save(self, key: str, snapshot: dict) -> None:
        payload = dict(snapshot)
        payload["date"] = key
        try:
            response = self.session.post(
                self.url, json=payload, timeout=self.config.timeout_seconds
            )
        except requests.RequestException as exc:
            raise PersistenceError(f"Backend save failed: {exc}") from exc
        if not response.ok:
            raise PersistenceError(self._error_message(response, "Backend save failed"))
        LOGGER.info("Puzzle saved to backend for %s", key)

    def load(self, key: str) -> Optional[dict]:
        try:
            response = self.session.get(
                self.url, params={"date": key}, timeout=self.config.timeout_seconds
            )
        except requests.RequestException as exc:
            raise PersistenceError(f"Backend load failed: {exc}") from exc
        if response.status_code == 404:
            LOGGER.warning("No puzzle on backend for %s", key)
            return None
        if not response.ok:
            raise PersistenceError(self._error_message(response, "Backend load failed"))
        try:
            data = response.json()
        except ValueError as exc:
            raise PersistenceError(f"Backend returned non-JSON puzzle for {key}") from exc
        LOGGER.info("Puzzle loaded from backend for %s", key)
        return data

    @staticmethod
    def _error_message(response: requests.Response, prefix: str) -> str:
        message = f"{prefix}: {response.status_code}"
        try:
            payload: Dict[str, Any] = response.json()
        except ValueError:
            return message
        if isinstance(payload, dict) and payload.get("message"):
            return f"{message} {payload['message']}"
        return message
