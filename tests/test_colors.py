"""Tests for hex/HSL conversion and the hue edit policy."""

import pytest

from focuscube.colors import hex_to_hsl, hsl_to_hex, matches_preset, shift_hue
from focuscube.exceptions import InvalidColorFormatError, ValueOutOfRangeError


class TestHexToHsl:
    """Test hex_to_hsl."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "hex_value,expected",
        [
            ("#ff0000", (0, 100, 50)),
            ("#00ff00", (120, 100, 50)),
            ("#0000ff", (240, 100, 50)),
            ("#00eaff", (185, 100, 50)),
            ("#000000", (0, 0, 0)),
            ("#ffffff", (0, 0, 100)),
        ],
    )
    def test_known_colors(self, hex_value, expected):
        assert hex_to_hsl(hex_value).rounded() == expected

    @pytest.mark.unit
    def test_achromatic_has_zero_hue_and_saturation(self):
        hsl = hex_to_hsl("#808080")
        assert hsl.h == 0
        assert hsl.s == 0
        assert hsl.l == pytest.approx(50.196, abs=0.001)

    @pytest.mark.unit
    def test_accepts_shorthand_missing_hash_and_uppercase(self):
        assert hex_to_hsl("0AF") == hex_to_hsl("#00aaff")
        assert hex_to_hsl("00EAFF") == hex_to_hsl("#00eaff")

    @pytest.mark.unit
    @pytest.mark.parametrize("bad", ["", "#", "#12", "#1234", "#gggggg", "#00eaff0", "red"])
    def test_malformed_input_raises(self, bad):
        with pytest.raises(InvalidColorFormatError):
            hex_to_hsl(bad)

    @pytest.mark.unit
    def test_non_string_raises(self):
        with pytest.raises(InvalidColorFormatError):
            hex_to_hsl(0xFF0000)


class TestHslToHex:
    """Test hsl_to_hex."""

    @pytest.mark.unit
    def test_primary_colors(self):
        assert hsl_to_hex(0, 100, 50) == "#ff0000"
        assert hsl_to_hex(120, 100, 50) == "#00ff00"
        assert hsl_to_hex(240, 100, 50) == "#0000ff"

    @pytest.mark.unit
    def test_extremes(self):
        assert hsl_to_hex(0, 0, 0) == "#000000"
        assert hsl_to_hex(200, 0, 100) == "#ffffff"

    @pytest.mark.unit
    def test_hue_wraps(self):
        assert hsl_to_hex(360, 100, 50) == hsl_to_hex(0, 100, 50)
        assert hsl_to_hex(-120, 100, 50) == "#0000ff"

    @pytest.mark.unit
    def test_output_is_lowercase(self):
        result = hsl_to_hex(185, 100, 50)
        assert result == result.lower()
        assert len(result) == 7

    @pytest.mark.unit
    @pytest.mark.parametrize("s,l", [(-1, 50), (101, 50), (50, -0.5), (50, 100.1)])
    def test_out_of_range_saturation_or_lightness_raises(self, s, l):
        with pytest.raises(ValueOutOfRangeError):
            hsl_to_hex(0, s, l)


class TestRoundTrip:
    """hex -> HSL -> hex."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "hex_value", ["#00eaff", "#ff4d00", "#d900ff", "#0066cc", "#cc0033", "#106636"]
    )
    def test_unrounded_round_trip_is_exact(self, hex_value):
        hsl = hex_to_hsl(hex_value)
        assert hsl_to_hex(hsl.h, hsl.s, hsl.l) == hex_value

    @pytest.mark.unit
    @pytest.mark.parametrize("hex_value", ["#00eaff", "#ff4d00", "#d900ff", "#cc0033"])
    def test_rounded_round_trip_stays_close(self, hex_value):
        h, s, l = hex_to_hsl(hex_value).rounded()
        result = hsl_to_hex(h, s, l)

        for i in (1, 3, 5):
            original = int(hex_value[i:i + 2], 16)
            converted = int(result[i:i + 2], 16)
            assert abs(original - converted) <= 3


class TestHslRoundTrip:
    """HSL -> hex -> HSL.

    Restricted to chromatic, mid-lightness colors. Achromatic colors lose
    their hue and near-black or near-white ones lose saturation, because
    8-bit channels cannot carry them.
    """

    @pytest.mark.unit
    @pytest.mark.parametrize("l", [40, 50, 60])
    @pytest.mark.parametrize("s", [50, 75, 100])
    @pytest.mark.parametrize("h", range(0, 360, 15))
    def test_within_one_unit(self, h, s, l):
        rh, rs, rl = hex_to_hsl(hsl_to_hex(h, s, l)).rounded()

        hue_distance = abs(rh - h) % 360
        assert min(hue_distance, 360 - hue_distance) <= 1
        assert abs(rs - s) <= 1
        assert abs(rl - l) <= 1


class TestShiftHue:
    """Test the vivid hue edit."""

    @pytest.mark.unit
    def test_vivid_color_keeps_saturation_and_lightness(self):
        assert shift_hue("#00eaff", 0) == "#ff0000"

    @pytest.mark.unit
    def test_dull_color_is_floored_to_50(self):
        # grey: s=0, l=13 -> both raised to 50
        assert shift_hue("#202020", 120) == "#40bf40"

    @pytest.mark.unit
    def test_light_color_keeps_lightness_above_floor(self):
        assert shift_hue("#ff8080", 120) == "#80ff80"

    @pytest.mark.unit
    @pytest.mark.parametrize("empty", [None, ""])
    def test_empty_color_starts_from_pure_red(self, empty):
        assert shift_hue(empty, 0) == "#ff0000"
        assert shift_hue(empty, 240) == "#0000ff"

    @pytest.mark.unit
    def test_malformed_current_color_raises(self):
        with pytest.raises(InvalidColorFormatError):
            shift_hue("#zz0000", 90)


class TestMatchesPreset:
    @pytest.mark.unit
    def test_case_insensitive(self):
        assert matches_preset("#FFFFFF", "#ffffff")
        assert matches_preset("#0066cc", "#0066CC")

    @pytest.mark.unit
    def test_different_or_missing(self):
        assert not matches_preset("#111111", "#FFFFFF")
        assert not matches_preset(None, "#FFFFFF")
        assert not matches_preset("", "#FFFFFF")
