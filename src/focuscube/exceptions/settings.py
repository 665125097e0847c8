"""Settings and command validation exceptions.

This module defines exceptions raised by store commands:
- SettingsError: Base class for rejected settings changes
- ValueOutOfRangeError: A value lies outside its documented bounds
- UnknownModeError: A mode name outside the fixed set
- UnknownMaterialError: A case material outside the fixed set
"""

from typing import Any, Optional

from .base import FocusCubeError


class SettingsError(FocusCubeError):
    """A settings command was given an unusable value."""
    pass


class ValueOutOfRangeError(SettingsError):
    """Value lies outside the documented bounds for its field."""

    def __init__(
        self,
        field: str,
        value: Any,
        minimum: Optional[float] = None,
        maximum: Optional[float] = None,
        clamped_to: Any = None,
    ):
        """
        Initialize value out of range error.

        Args:
            field: Name of the field being written
            value: The rejected value
            minimum: Lower bound (None if unbounded below)
            maximum: Upper bound (None if unbounded above)
            clamped_to: Value actually stored when the clamp policy applied
        """
        if minimum is not None and maximum is not None:
            bounds = f"between {minimum:g} and {maximum:g}"
        elif minimum is not None:
            bounds = f"at least {minimum:g}"
        else:
            bounds = f"at most {maximum:g}"

        user_msg = f"'{field}' must be {bounds} (got {value!r})"
        if clamped_to is not None:
            user_msg += f"; stored {clamped_to!r} instead"

        super().__init__(
            user_message=user_msg,
            technical_message=f"Out of range {field}={value!r} (min={minimum}, max={maximum})",
            recoverable=True,
            recovery_hint=f"Pass a value {bounds}",
        )
        self.field = field
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        self.clamped_to = clamped_to


class UnknownModeError(SettingsError):
    """Mode name is not one of the fixed modes."""

    def __init__(self, value: Any, valid: list[str]):
        super().__init__(
            user_message=f"Unknown mode: {value!r}",
            technical_message=f"Mode lookup failed for {value!r}; valid modes: {valid}",
            recoverable=True,
            recovery_hint=f"Choose one of: {', '.join(valid)}",
        )
        self.value = value


class UnknownMaterialError(SettingsError):
    """Case material is not one of the fixed materials."""

    def __init__(self, value: Any, valid: list[str]):
        super().__init__(
            user_message=f"Unknown case material: {value!r}",
            technical_message=f"Material lookup failed for {value!r}; valid materials: {valid}",
            recoverable=True,
            recovery_hint=f"Choose one of: {', '.join(valid)}",
        )
        self.value = value
