"""Per-mode settings model."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from focuscube.models.color import normalize_hex

# Documented bounds per numeric field: (minimum, maximum); None = unbounded
SETTING_BOUNDS: dict[str, tuple[float | None, float | None]] = {
    "noise_threshold": (30, 90),
    "light_threshold": (0, None),
    "brightness": (0, 100),
    "white_noise_volume": (0, 100),
}

CUSTOM_MODE_NAME_MAX_LENGTH = 12


class ModeSettings(BaseModel):
    """Settings bundled by one mode.

    Serialized with camelCase keys (noiseThreshold, ledColor, ...) so that
    stored snapshots keep their established shape.
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False
    )

    noise_threshold: float = Field(ge=30, le=90, description="Noise level (dB) that triggers cancellation")
    light_threshold: float = Field(ge=0, description="Ambient light target (lux)")
    brightness: float = Field(ge=0, le=100, description="LED brightness (%)")
    white_noise_volume: float = Field(ge=0, le=100, description="White noise volume (%)")
    led_color: str = Field(description="LED color as '#RRGGBB'")

    @field_validator("led_color")
    @classmethod
    def validate_led_color(cls, v: str) -> str:
        """Expand shorthand and reject malformed hex strings."""
        return normalize_hex(v)
