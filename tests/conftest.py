"""Pytest fixtures for tests."""

import logging
from collections.abc import Callable
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from focuscube.core import ConfigStore, ConnectionController
from focuscube.persistence import InMemorySnapshotStore


class ManualCall:
    """Handle returned by ManualScheduler.call_later."""

    def __init__(self, when: float, seq: int, callback: Callable[[], None]):
        self.when = when
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler with a virtual clock; callbacks run only inside advance()."""

    def __init__(self):
        self.now = 0.0
        self._calls: list[ManualCall] = []
        self._seq = 0

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualCall:
        self._seq += 1
        call = ManualCall(self.now + delay, self._seq, callback)
        self._calls.append(call)
        return call

    def advance(self, seconds: float) -> None:
        """Move the clock forward, running due callbacks in time order."""
        target = self.now + seconds
        while True:
            due = [c for c in self._calls if not c.cancelled and c.when <= target + 1e-9]
            if not due:
                break
            call = min(due, key=lambda c: (c.when, c.seq))
            self._calls.remove(call)
            self.now = call.when
            call.callback()
        self.now = target

    @property
    def pending(self) -> int:
        return sum(1 for c in self._calls if not c.cancelled)


class ScriptedRandom:
    """Random source returning a fixed sequence of values (repeating the last one)."""

    def __init__(self, *values: float):
        self._values = list(values) or [0.5]
        self.calls = 0

    def random(self) -> float:
        value = self._values[min(self.calls, len(self._values) - 1)]
        self.calls += 1
        return value


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def restore_root_logger():
    """Remove handlers added to the root logger during a test and reset its level."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def snapshots():
    """Empty in-memory snapshot backend."""
    return InMemorySnapshotStore()


@pytest.fixture
def store(snapshots):
    """ConfigStore over an empty in-memory backend (clamping enabled)."""
    return ConfigStore(snapshots)


@pytest.fixture
def strict_store(snapshots):
    """ConfigStore that rejects out-of-range values instead of clamping."""
    return ConfigStore(snapshots, clamp_out_of_range=False)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def succeeding_rng():
    """Draw above the default failure probability: attempts succeed."""
    return ScriptedRandom(0.5)


@pytest.fixture
def failing_rng():
    """Draw below the default failure probability: attempts fail."""
    return ScriptedRandom(0.05)


@pytest.fixture
def controller(store, scheduler, succeeding_rng):
    """ConnectionController with default timings on a manual clock."""
    return ConnectionController(store, scheduler=scheduler, rng=succeeding_rng)


@pytest.fixture
def make_rng():
    """Factory for ScriptedRandom sources."""
    return ScriptedRandom
