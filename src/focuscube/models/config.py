"""Application configuration model."""

import logging
from pathlib import Path

from pydantic import BaseModel, Field, field_serializer

from focuscube.models.snapshot import DEFAULT_STORAGE_KEY
from focuscube.persistence.files import PydanticPersistence

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".focuscube" / "config.json"


class AppConfig(BaseModel):
    """Application configuration and settings."""

    # Snapshot storage
    storage_dir: Path = Field(
        default_factory=lambda: Path.home() / ".focuscube" / "storage",
        description="Directory holding the file-backed snapshot store",
    )
    storage_key: str = Field(
        default=DEFAULT_STORAGE_KEY,
        description="Key under which the persisted snapshot is stored",
    )

    # Validation policy
    clamp_out_of_range: bool = Field(
        default=True,
        description=(
            "Clamp out-of-range settings to their bounds and emit a warning. "
            "When False, out-of-range values are rejected with ValueOutOfRangeError."
        ),
    )

    # Connection simulation
    connect_latency: float = Field(
        default=2.0, gt=0, description="Simulated pairing latency (seconds)"
    )
    failure_probability: float = Field(
        default=0.1, ge=0, le=1, description="Chance that a pairing attempt fails"
    )
    notification_timeout: float = Field(
        default=3.0, gt=0, description="Seconds before the connection popup auto-dismisses"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Root log level (DEBUG/INFO/WARNING/ERROR)")
    log_file: Path | None = Field(
        default=None,
        description="Log file path (None = ~/.focuscube/logs/focuscube.log)",
    )

    @field_serializer("storage_dir")
    def serialize_path(self, path: Path) -> str:
        """Serialize Path to string."""
        return str(path)

    @field_serializer("log_file")
    def serialize_optional_path(self, path: Path | None) -> str | None:
        return str(path) if path is not None else None

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "AppConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses ~/.focuscube/config.json.

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        if path is None:
            path = DEFAULT_CONFIG_PATH

        return PydanticPersistence.load_json_or_default(path, cls)

    def save(self, path: Path | None = None) -> None:
        """Save config to file."""
        PydanticPersistence.save_json(self, path or DEFAULT_CONFIG_PATH)
