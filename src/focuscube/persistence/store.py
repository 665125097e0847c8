"""Key-value snapshot stores.

The config store only needs get/set-by-key with whole-value replace
semantics, so any backend implementing SnapshotStore can hold the
persisted snapshot.
"""

import logging
import re
from pathlib import Path
from threading import Lock
from typing import Protocol, runtime_checkable

from focuscube.persistence.files import atomic_write_text

logger = logging.getLogger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]")


@runtime_checkable
class SnapshotStore(Protocol):
    """Opaque key-value blob storage."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Replace the value stored under key."""
        ...

    def delete(self, key: str) -> None:
        """Remove key if present."""
        ...


class InMemorySnapshotStore:
    """Dictionary-backed store; contents vanish with the process."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})
        self._lock = Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._data


class FileSnapshotStore:
    """
    Directory-backed store holding one <key>.json file per key.

    Writes are atomic (temp file + rename) and keep a .bak copy of the
    previous value. Read errors are reported as an absent key so that a
    damaged file never prevents start-up.
    """

    def __init__(self, directory: Path, backup: bool = True):
        """
        Args:
            directory: Directory for snapshot files (created on first write)
            backup: Keep <key>.json.bak with the previous value
        """
        self._directory = Path(directory)
        self._backup = backup
        self._lock = Lock()

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        """File path used for key (unsafe characters replaced with '_')."""
        return self._directory / f"{_UNSAFE_KEY_CHARS.sub('_', key)}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        with self._lock:
            if not path.exists():
                return None
            try:
                return path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Could not read snapshot file {path}: {e}")
                return None

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        with self._lock:
            atomic_write_text(path, value, backup=self._backup)
        logger.debug(f"Wrote snapshot '{key}' to {path}")

    def delete(self, key: str) -> None:
        path = self.path_for(key)
        with self._lock:
            if path.exists():
                path.unlink()
                logger.debug(f"Deleted snapshot file {path}")
