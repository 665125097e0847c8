"""Enumerations for the Smart Focus Cube."""

from enum import Enum

from focuscube.exceptions import UnknownMaterialError, UnknownModeError


class Mode(str, Enum):
    """Operating profiles, each bundling one ModeSettings record."""

    STUDY = "study"
    SLEEP = "sleep"
    PARTY = "party"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: "Mode | str") -> "Mode":
        """Coerce a name to a Mode, raising UnknownModeError if it isn't one."""
        try:
            return cls(value)
        except ValueError as e:
            raise UnknownModeError(value, [m.value for m in cls]) from e


class CaseMaterial(str, Enum):
    """Finish of the outer case."""

    MATTE = "matte"
    METAL = "metal"
    TRANSPARENT = "transparent"

    @classmethod
    def parse(cls, value: "CaseMaterial | str") -> "CaseMaterial":
        """Coerce a name to a CaseMaterial, raising UnknownMaterialError if it isn't one."""
        try:
            return cls(value)
        except ValueError as e:
            raise UnknownMaterialError(value, [m.value for m in cls]) from e


class ConnectionStatus(str, Enum):
    """Simulated device pairing states."""

    IDLE = "idle"  # Not paired, nothing in flight
    CONNECTING = "connecting"  # Attempt in flight
    CONNECTED = "connected"  # Attempt succeeded
    FAILED = "failed"  # Attempt failed, user may retry
