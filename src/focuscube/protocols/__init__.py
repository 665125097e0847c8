"""Store events and observer protocol."""

from .events import StoreEvent
from .observers import StoreObserver

__all__ = [
    "StoreEvent",
    "StoreObserver",
]
