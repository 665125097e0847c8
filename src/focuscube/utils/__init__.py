"""Generic utilities that are not specific to the configurator domain."""

from .log_setup import setup_logging
from .observer import ObserverManager

__all__ = ["ObserverManager", "setup_logging"]
