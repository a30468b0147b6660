"""Key-value stores for client-side state.

Values are plain strings. Two keys are used: the chosen account identifier
and the JSON-encoded bookmark list.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

IDENTITY_KEY = "identity"
BOOKMARKS_KEY = "bookmarks"


class KeyValueStore:
    """String-valued persisted store."""

    def get(self, key: str) -> str | None:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """In-process store, used by tests and one-shot CLI runs."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """Store backed by a single JSON object file.

    Every write atomically replaces the whole file before returning. A missing or
    unreadable file is treated as an empty store.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._data = self._read()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable state file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring state file %s: expected a JSON object", self.path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self) -> None:
        """Write the whole file atomically via a temp file and rename."""
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, temp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".state_", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=2, ensure_ascii=False)
            Path(temp_path).replace(self.path)
        except Exception:
            Path(temp_path).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._write()

    def delete(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._write()


def load_identity(store: KeyValueStore) -> str | None:
    """Read the remembered account identifier."""
    return store.get(IDENTITY_KEY) or None


def save_identity(store: KeyValueStore, identity: str) -> str:
    """Remember an account identifier. Returns the stripped value."""
    identity = identity.strip()
    if not identity:
        raise ValueError("Account identifier must not be empty")
    store.set(IDENTITY_KEY, identity)
    return identity


def clear_identity(store: KeyValueStore) -> None:
    store.delete(IDENTITY_KEY)
