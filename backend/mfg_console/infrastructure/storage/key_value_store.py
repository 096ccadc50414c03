"""Key-value stores for locally persisted records.

Storage layout (JsonFileKeyValueStore):
    <storage_dir>/<key>.json        — one file per storage key, fully rewritten on set
"""

import logging
import re
from pathlib import Path

from mfg_console.application.interfaces import KeyValueStore

logger = logging.getLogger(__name__)


def _sanitise(key: str, max_len: int = 120) -> str:
    """Replace non-word characters with underscores and truncate."""
    return re.sub(r"[^\w\-]", "_", key)[:max_len].strip("_") or "unnamed"


class JsonFileKeyValueStore(KeyValueStore):
    """Infrastructure adapter that keeps each key in its own file on disk."""

    def __init__(self, storage_dir: str | Path):
        self._storage_dir = Path(storage_dir)
        self._storage_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self._storage_dir / f"{_sanitise(key)}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        # Write-then-rename so readers never observe a half-written file
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)
        logger.debug("Stored %s (%d bytes)", path, len(value))

    def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store, used for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)
