"""Static catalogs: default mode settings, product colors and parts.

Everything here is fixed for the lifetime of the process. ModeRegistry
hands out immutable pydantic models, so callers can keep references
without risk of the defaults drifting.
"""

from types import MappingProxyType

from focuscube.models import Mode, ModeSettings, Part, ProductColor

DEFAULT_MODE_SETTINGS: MappingProxyType[Mode, ModeSettings] = MappingProxyType({
    Mode.STUDY: ModeSettings(
        noise_threshold=60,  # dB level that triggers noise cancellation
        light_threshold=400,  # Ambient light target (lux)
        brightness=80,
        white_noise_volume=20,
        led_color="#00eaff",  # Cyan
    ),
    Mode.SLEEP: ModeSettings(
        noise_threshold=30,
        light_threshold=100,
        brightness=20,
        white_noise_volume=60,
        led_color="#ff4d00",  # Warm orange
    ),
    Mode.PARTY: ModeSettings(
        noise_threshold=90,
        light_threshold=800,
        brightness=100,
        white_noise_volume=0,
        led_color="#d900ff",  # Purple
    ),
    Mode.CUSTOM: ModeSettings(
        noise_threshold=50,
        light_threshold=300,
        brightness=50,
        white_noise_volume=0,
        led_color="#00ff00",
    ),
})

PRODUCT_COLORS: tuple[ProductColor, ...] = (
    ProductColor(name="Arctic White", hex="#FFFFFF"),
    ProductColor(name="Midnight Black", hex="#111111"),
    ProductColor(name="Electric Blue", hex="#0066CC"),
    ProductColor(name="Ruby Red", hex="#CC0033"),
    ProductColor(name="Forest Green", hex="#106636"),
)

COMPONENT_MANIFEST: tuple[Part, ...] = (
    Part(
        id="shell_top",
        name="Top Shell",
        description="Outer housing, top section. PC/ABS Blend.",
        mesh="ShellTopMesh",
        color_editable=True,
    ),
    Part(
        id="led_strip",
        name="LED Strip",
        description="WS2812B LEDs for lighting effects.",
        mesh="LEDStripMesh",
        color_editable=True,
    ),
    Part(
        id="pcb_main",
        name="Main PCB",
        description="ESP32 Core + Power Management.",
        mesh="PCBMesh",
    ),
    Part(
        id="battery_pack",
        name="Battery Pack",
        description="1200mAh LiPo Cell.",
        mesh="BatteryMesh",
    ),
    Part(
        id="speaker_unit",
        name="Speaker Unit",
        description="3W 4Ω Full Range Driver.",
        mesh="SpeakerMesh",
    ),
    Part(
        id="shell_bottom",
        name="Bottom Shell",
        description="Base housing with non-slip pad.",
        mesh="ShellBottomMesh",
        color_editable=True,
    ),
    Part(
        id="sensors",
        name="Sensors Array",
        description="Mic Array (x2) + Ambient Light.",
        mesh="SensorMesh",
    ),
)

DEFAULT_CUSTOM_MODE_NAME = "My Mode"
DEFAULT_MODE = Mode.STUDY


class ModeRegistry:
    """Read-only lookups into the fixed catalogs."""

    @staticmethod
    def defaults_for(mode: Mode | str) -> ModeSettings:
        """
        Get the factory settings for a mode.

        Raises:
            UnknownModeError: If mode is not one of the fixed modes
        """
        return DEFAULT_MODE_SETTINGS[Mode.parse(mode)]

    @staticmethod
    def default_modes() -> dict[Mode, ModeSettings]:
        """Fresh table with one default entry per mode."""
        return dict(DEFAULT_MODE_SETTINGS)

    @staticmethod
    def product_color_catalog() -> tuple[ProductColor, ...]:
        """Official case colors, in display order."""
        return PRODUCT_COLORS

    @staticmethod
    def default_case_color() -> str:
        """First catalog color."""
        return PRODUCT_COLORS[0].hex

    @staticmethod
    def find_product_color(hex_value: str) -> ProductColor | None:
        """Catalog entry with this hex value (case-insensitive), if any."""
        wanted = hex_value.lower()
        for color in PRODUCT_COLORS:
            if color.hex.lower() == wanted:
                return color
        return None

    @staticmethod
    def part_catalog() -> tuple[Part, ...]:
        """Physical components, in manifest order."""
        return COMPONENT_MANIFEST

    @staticmethod
    def find_part(part_id: str) -> Part | None:
        for part in COMPONENT_MANIFEST:
            if part.id == part_id:
                return part
        return None
