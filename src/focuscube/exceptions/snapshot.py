"""Snapshot persistence exceptions.

This module defines exceptions for the persisted snapshot:
- SnapshotError: Base class for snapshot problems
- SnapshotLoadError: Stored snapshot is unreadable or fails validation
- SnapshotWriteError: Snapshot could not be written
"""

from typing import Optional

from .base import FocusCubeError


class SnapshotError(FocusCubeError):
    """Persisted snapshot is invalid or cannot be accessed."""
    pass


class SnapshotLoadError(SnapshotError):
    """Stored snapshot (or one of its fields) could not be restored."""

    def __init__(self, key: str, reason: str, field: Optional[str] = None):
        """
        Initialize snapshot load error.

        Args:
            key: Storage key of the snapshot
            reason: Why the snapshot (or field) was rejected
            field: Field that failed, or None if the whole record failed
        """
        where = f"field '{field}' of snapshot '{key}'" if field else f"snapshot '{key}'"
        super().__init__(
            user_message=f"Could not restore {where}; defaults were used",
            technical_message=f"Snapshot load failed for {where}: {reason}",
            recoverable=True,
            recovery_hint="Saved settings will be rewritten on the next change",
        )
        self.key = key
        self.reason = reason
        self.field = field


class SnapshotWriteError(SnapshotError):
    """Snapshot could not be written to the backing store."""

    def __init__(self, key: str, reason: str):
        super().__init__(
            user_message=f"Failed to save settings snapshot '{key}'",
            technical_message=f"Snapshot write failed for '{key}': {reason}",
            recoverable=True,
            recovery_hint="Check file permissions and disk space. A backup file (.bak) may be available.",
        )
        self.key = key
        self.reason = reason
