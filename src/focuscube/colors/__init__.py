"""Color space conversion between hex RGB and HSL.

The hue slider in the configurator edits a single axis of a color. The
conversions here let it read the current hue out of a hex string and write
a new hex string back.

## Representations

### Hex RGB
**Format**: `'#00eaff'`, `'00EAFF'`, `'#0af'`
Input may omit the '#', use either letter case, and use 3-digit shorthand
(each digit is duplicated). Output is always `'#rrggbb'`, lowercase.

### HSL
**Format**: `HSL(h=184.9, s=100.0, l=50.0)`
Hue in degrees [0, 360), saturation and lightness in percent [0, 100].
Values are not rounded, so hex -> HSL -> hex is exact; call
`HSL.rounded()` for integer display values.

## Hue Edits

`shift_hue()` replaces the hue but floors saturation and lightness at 50,
so dragging the hue slider from a grey or near-black color still produces
a vivid result:

```python
shift_hue("#202020", 120)   # '#40bf40' rather than a dark grey-green
```
"""

import math

from focuscube.exceptions import ValueOutOfRangeError
from focuscube.models.color import HSL, Color

# Saturation/lightness floor applied by shift_hue
HUE_EDIT_FLOOR = 50.0

# Starting point when there is no current color to edit
DEFAULT_HUE_EDIT_BASE = HSL(h=0, s=100, l=50)


def hex_to_hsl(hex_value: str) -> HSL:
    """
    Convert a hex color to HSL.

    Achromatic colors (all channels equal) yield h=0, s=0.

    Raises:
        InvalidColorFormatError: If hex_value is not a 3- or 6-digit hex string

    Example:
        >>> hex_to_hsl("#ff0000").rounded()
        (0, 100, 50)
    """
    color = Color.from_hex(hex_value)
    r, g, b = color.r / 255, color.g / 255, color.b / 255

    high = max(r, g, b)
    low = min(r, g, b)
    lightness = (high + low) / 2

    if high == low:
        return HSL(h=0, s=0, l=lightness * 100)

    d = high - low
    saturation = d / (2 - high - low) if lightness > 0.5 else d / (high + low)

    if high == r:
        hue = (g - b) / d + (6 if g < b else 0)
    elif high == g:
        hue = (b - r) / d + 2
    else:
        hue = (r - g) / d + 4

    # Guard against float drift landing exactly on 360
    hue_degrees = (hue * 60) % 360
    return HSL(h=hue_degrees, s=min(saturation * 100, 100), l=lightness * 100)


def hsl_to_hex(h: float, s: float, l: float) -> str:
    """
    Convert HSL to a '#rrggbb' hex string.

    Hue wraps modulo 360. Each channel is rounded half-up to the nearest integer.

    Raises:
        ValueOutOfRangeError: If s or l lies outside [0, 100]

    Example:
        >>> hsl_to_hex(120, 100, 50)
        '#00ff00'
    """
    for name, value in (("s", s), ("l", l)):
        if not 0 <= value <= 100:
            raise ValueOutOfRangeError(name, value, minimum=0, maximum=100)

    lightness = l / 100
    a = s * min(lightness, 1 - lightness) / 100

    def channel(n: int) -> int:
        k = (n + h / 30) % 12
        value = lightness - a * max(min(k - 3, 9 - k, 1), -1)
        return math.floor(255 * value + 0.5)

    return Color(r=channel(0), g=channel(8), b=channel(4)).to_hex().lower()


def shift_hue(current: str | None, hue: float) -> str:
    """
    Replace the hue of a color, keeping it vivid.

    Saturation and lightness of the current color are each floored at
    HUE_EDIT_FLOOR before re-encoding. An empty or missing current color
    starts from pure red (h=0, s=100, l=50).

    Args:
        current: Current hex color, or None/'' if there is none
        hue: New hue in degrees

    Returns:
        New '#rrggbb' color

    Raises:
        InvalidColorFormatError: If current is a malformed hex string
    """
    base = hex_to_hsl(current) if current else DEFAULT_HUE_EDIT_BASE
    _, s, l = base.rounded()
    return hsl_to_hex(hue, max(s, HUE_EDIT_FLOOR), max(l, HUE_EDIT_FLOOR))


def matches_preset(color: str | None, preset: str) -> bool:
    """Case-insensitive hex comparison used to mark the selected palette swatch."""
    if not color:
        return False
    return color.lower() == preset.lower()


__all__ = [
    "DEFAULT_HUE_EDIT_BASE",
    "HUE_EDIT_FLOOR",
    "hex_to_hsl",
    "hsl_to_hex",
    "matches_preset",
    "shift_hue",
]
