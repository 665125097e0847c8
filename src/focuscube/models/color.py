"""Color models for LED and case colors."""

import math
import string

from pydantic import BaseModel, ConfigDict, Field

from focuscube.exceptions import InvalidColorFormatError

_HEX_DIGITS = frozenset(string.hexdigits)


def normalize_hex(value: str) -> str:
    """Validate a hex color and return it as '#RRGGBB'.

    A missing '#' is tolerated and 3-digit shorthand is expanded by
    duplicating each digit. Letter case is preserved.

    Raises:
        InvalidColorFormatError: If the value is not a 3- or 6-digit hex string

    Example:
        >>> normalize_hex("0af")
        '#00aaff'
    """
    if not isinstance(value, str):
        raise InvalidColorFormatError(value, "expected a string")

    digits = value[1:] if value.startswith("#") else value
    if len(digits) not in (3, 6):
        raise InvalidColorFormatError(value, "expected 3 or 6 hex digits")
    if not _HEX_DIGITS.issuperset(digits):
        raise InvalidColorFormatError(value, "contains non-hex characters")

    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return f"#{digits}"


class Color(BaseModel):
    """Standard 8-bit RGB color model."""

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255, description="Red (0-255)")
    g: int = Field(ge=0, le=255, description="Green (0-255)")
    b: int = Field(ge=0, le=255, description="Blue (0-255)")

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse a hex color string ('#RGB', '#RRGGBB', with or without '#').

        Raises:
            InvalidColorFormatError: If the string is malformed
        """
        digits = normalize_hex(value)[1:]
        return cls(r=int(digits[0:2], 16), g=int(digits[2:4], 16), b=int(digits[4:6], 16))

    def to_hex(self) -> str:
        """Convert to CSS hex color string (e.g., '#FF0000').

        Example:
            >>> Color(r=255, g=0, b=0).to_hex()
            '#FF0000'
        """
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


class HSL(BaseModel):
    """Hue/saturation/lightness triple.

    Hue is in degrees [0, 360); saturation and lightness are percentages.
    Values are kept unrounded so that converting back to hex reproduces
    the original channels; use rounded() for display.
    """

    model_config = ConfigDict(frozen=True)

    h: float = Field(ge=0, lt=360, description="Hue in degrees")
    s: float = Field(ge=0, le=100, description="Saturation (%)")
    l: float = Field(ge=0, le=100, description="Lightness (%)")

    def rounded(self) -> tuple[int, int, int]:
        """Return (h, s, l) rounded half-up to whole units, hue wrapped into [0, 360)."""
        def half_up(value: float) -> int:
            return math.floor(value + 0.5)

        return (half_up(self.h) % 360, half_up(self.s), half_up(self.l))
