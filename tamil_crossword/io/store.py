"""Local puzzle persistence.

Puzzles are stored one JSON document per date key under
``local_db/puzzles/``. The documents are exactly the exchanged snapshot so
the same file can be posted to the backend unchanged.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Protocol

from ..core.exceptions import PersistenceError
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

DEFAULT_STORE_DIR = Path("local_db/puzzles")
KEY_PREFIX = "murli-puzzle-"


def today_key() -> str:
    """Default date key, ``YYYY-MM-DD`` in UTC."""

    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


class PuzzleGateway(Protocol):
    """Anything that can persist whole snapshots by key."""

    def save(self, key: str, snapshot: dict) -> None:
        ...

    def load(self, key: str) -> Optional[dict]:
        ...


class LocalPuzzleStore:
    """Save puzzle snapshots as JSON documents on disk."""

    def __init__(self, store_dir: Path | str = DEFAULT_STORE_DIR) -> None:
        self.store_dir = Path(store_dir)
        self.store_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key in {".", ".."}:
            raise PersistenceError(f"Invalid puzzle key: {key!r}")
        return self.store_dir / f"{KEY_PREFIX}{key}.json"

    def save(self, key: str, snapshot: dict) -> None:
        path = self.path_for(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            tmp_path.write_text(
                json.dumps(snapshot, ensure_ascii=False, indent=2), encoding="utf-8"
            )
            # Readers never see a half-written document.
            tmp_path.replace(path)
        except OSError as exc:
            raise PersistenceError(f"Could not save puzzle {key}: {exc}") from exc
        LOGGER.info("Puzzle saved: %s", path.name)

    def load(self, key: str) -> Optional[dict]:
        path = self.path_for(key)
        if not path.exists():
            LOGGER.debug("Puzzle store miss: %s", path.name)
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            raise PersistenceError(f"Could not read puzzle {key}: {exc}") from exc

    def keys(self) -> list:
        return sorted(
            path.stem[len(KEY_PREFIX):] for path in self.store_dir.glob(f"{KEY_PREFIX}*.json")
        )


class WriteThroughStore:
    """Read from ``primary``; every save lands in ``mirror`` first.

    The mirror write happens before the primary one so a backend outage
    still leaves a local copy behind.
    """

    def __init__(self, primary: PuzzleGateway, mirror: PuzzleGateway) -> None:
        self.primary = primary
        self.mirror = mirror

    def save(self, key: str, snapshot: dict) -> None:
        self.mirror.save(key, snapshot)
        self.primary.save(key, snapshot)

    def load(self, key: str) -> Optional[dict]:
        return self.primary.load(key)
