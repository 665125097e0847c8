"""Data models for the Smart Focus Cube."""

from .color import HSL, Color, normalize_hex
from .config import AppConfig
from .enums import CaseMaterial, ConnectionStatus, Mode
from .hardware import HardwareConfig, Part, ProductColor
from .settings import CUSTOM_MODE_NAME_MAX_LENGTH, SETTING_BOUNDS, ModeSettings
from .snapshot import DEFAULT_STORAGE_KEY, SNAPSHOT_VERSION, PersistedSnapshot, SnapshotEnvelope

__all__ = [
    "AppConfig",
    # Enums
    "CaseMaterial",
    "ConnectionStatus",
    "Mode",
    # Models
    "Color",
    "HSL",
    "HardwareConfig",
    "ModeSettings",
    "Part",
    "PersistedSnapshot",
    "ProductColor",
    "SnapshotEnvelope",
    # Constants and helpers
    "CUSTOM_MODE_NAME_MAX_LENGTH",
    "DEFAULT_STORAGE_KEY",
    "SETTING_BOUNDS",
    "SNAPSHOT_VERSION",
    "normalize_hex",
]
