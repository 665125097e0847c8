"""Color conversion exceptions."""

from .base import FocusCubeError


class ColorError(FocusCubeError):
    """A color value could not be parsed or converted."""
    pass


class InvalidColorFormatError(ColorError):
    """Hex color string is malformed (bad characters or wrong length)."""

    def __init__(self, value: object, reason: str):
        """
        Initialize invalid color format error.

        Args:
            value: The rejected input
            reason: Why the input was rejected
        """
        super().__init__(
            user_message=f"Invalid color {value!r}: {reason}",
            technical_message=f"Hex color parse failed for {value!r}: {reason}",
            recoverable=True,
            recovery_hint="Use a 3- or 6-digit hex color such as '#0af' or '#00AAFF'",
        )
        self.value = value
        self.reason = reason
