"""Core state components: the config store, connection simulation and scheduling."""

from .connection import ConnectionController, RandomSource
from .scheduler import ScheduledCall, Scheduler, ThreadingScheduler
from .snapshot import SnapshotCodec, default_snapshot
from .store import EMISSION_INTENSITY_SCALE, ConfigStore

__all__ = [
    "ConfigStore",
    "ConnectionController",
    "EMISSION_INTENSITY_SCALE",
    "RandomSource",
    "ScheduledCall",
    "Scheduler",
    "SnapshotCodec",
    "ThreadingScheduler",
    "default_snapshot",
]
