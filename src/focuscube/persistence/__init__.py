"""Persistence backends: JSON model files and key-value snapshot stores."""

from .files import PydanticPersistence, atomic_write_text
from .store import FileSnapshotStore, InMemorySnapshotStore, SnapshotStore

__all__ = [
    "FileSnapshotStore",
    "InMemorySnapshotStore",
    "PydanticPersistence",
    "SnapshotStore",
    "atomic_write_text",
]
