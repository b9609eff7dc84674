"""
Tests for color parsing, conversion and contrast math.
"""

from __future__ import annotations

import random

import pytest

from src.components.palette import (
    Oklch,
    calculate_contrast,
    convert_color,
    convert_to_all_formats,
    in_gamut,
    is_out_of_gamut,
    parse_color,
    relative_luminance,
    wcag_levels,
)


def _channels(hex_color: str) -> tuple[int, int, int]:
    return tuple(int(hex_color[i : i + 2], 16) for i in (1, 3, 5))  # type: ignore[return-value]


# --- Parsing ---


class TestParseColor:
    """Tests for parse_color."""

    @pytest.mark.parametrize(
        "text",
        [
            "#3264c8",
            "#3264C8",
            "rgb(50, 100, 200)",
            "rgb(50,100,200)",
        ],
    )
    def test_equivalent_inputs(self, text: str) -> None:
        parsed = parse_color(text)
        assert parsed is not None
        assert parsed.to_hex() == "#3264c8"

    def test_short_hex(self) -> None:
        parsed = parse_color("#fff")
        assert parsed is not None
        assert parsed.to_hex() == "#ffffff"

    def test_oklch_percent_and_fraction(self) -> None:
        a = parse_color("oklch(62.5% 0.1 250)")
        b = parse_color("oklch(0.625 0.1 250)")
        assert a == b

    def test_cmyk(self) -> None:
        parsed = parse_color("cmyk(0%, 100%, 100%, 0%)")
        assert parsed is not None
        assert parsed.to_hex() == "#ff0000"

    @pytest.mark.parametrize("text", ["", "red", "#12345", "rgb(1, 2)", "oklch()", None])
    def test_unparseable(self, text: str | None) -> None:
        assert parse_color(text) is None

    def test_gray_is_achromatic(self) -> None:
        parsed = parse_color("#808080")
        assert parsed is not None
        assert parsed.c < 1e-3


# --- Conversion ---


class TestConversion:
    """Tests for format conversion."""

    def test_all_formats(self) -> None:
        values = convert_to_all_formats("#FF0000")
        assert values.hex == "#ff0000"
        assert values.rgb == "rgb(255, 0, 0)"
        assert values.cmyk == "cmyk(0%, 100%, 100%, 0%)"
        assert values.oklch.startswith("oklch(62.")
        assert values.pantone is None

    def test_unparseable_gives_black(self) -> None:
        assert convert_to_all_formats("garbage").hex == "#000000"

    def test_hex_to_oklch_and_back(self) -> None:
        oklch = convert_color("#3264c8", "hex", "oklch")
        assert oklch.startswith("oklch(")
        back = convert_color(oklch, "oklch", "hex")
        for a, b in zip(_channels("#3264c8"), _channels(back), strict=True):
            assert abs(a - b) <= 1

    def test_rgb_to_cmyk(self) -> None:
        assert convert_color("rgb(0, 0, 0)", "rgb", "cmyk") == "cmyk(0%, 0%, 0%, 100%)"

    def test_out_of_gamut_oklch_is_mapped_into_srgb(self) -> None:
        hex_color = convert_color("oklch(70% 0.4 150)", "oklch", "hex")
        assert hex_color.startswith("#") and len(hex_color) == 7

    def test_round_trip_random_hex_within_one(self) -> None:
        """hex -> oklch string -> hex stays within 1 per channel."""
        rng = random.Random(20240518)
        for _ in range(100):
            original = "#" + "".join(f"{rng.randrange(256):02x}" for _ in range(3))
            back = convert_color(convert_color(original, "hex", "oklch"), "oklch", "hex")
            for a, b in zip(_channels(original), _channels(back), strict=True):
                assert abs(a - b) <= 1, f"{original} -> {back}"

    def test_round_trip_through_internal_is_exact(self) -> None:
        rng = random.Random(7)
        for _ in range(100):
            original = "#" + "".join(f"{rng.randrange(256):02x}" for _ in range(3))
            parsed = Oklch.from_hex(original)
            assert parsed is not None
            assert parsed.to_hex() == original


# --- Contrast ---


class TestContrast:
    """Tests for WCAG contrast math."""

    def test_black_on_white(self) -> None:
        assert calculate_contrast("#000000", "#ffffff") == pytest.approx(21.0)

    def test_symmetric(self) -> None:
        assert calculate_contrast("#3264c8", "#ffffff") == pytest.approx(
            calculate_contrast("#ffffff", "#3264c8")
        )

    def test_same_color_is_one(self) -> None:
        assert calculate_contrast("#777777", "#777777") == pytest.approx(1.0)

    def test_unparseable_is_one(self) -> None:
        assert calculate_contrast("nope", "#ffffff") == 1.0

    def test_known_gray(self) -> None:
        # #767676 is the classic lightest gray passing AA on white
        assert calculate_contrast("#767676", "#ffffff") == pytest.approx(4.54, abs=0.01)

    def test_luminance_endpoints(self) -> None:
        assert relative_luminance(0, 0, 0) == 0
        assert relative_luminance(1, 1, 1) == pytest.approx(1.0)

    def test_threshold_boundaries(self) -> None:
        assert wcag_levels(4.5) == (True, True, False)
        assert wcag_levels(4.49) == (False, True, False)
        assert wcag_levels(3.0) == (False, True, False)
        assert wcag_levels(2.99) == (False, False, False)
        assert wcag_levels(7.0) == (True, True, True)


# --- Gamut ---


class TestGamut:
    def test_heuristic_thresholds(self) -> None:
        assert is_out_of_gamut("oklch(50% 0.14 200)", "srgb")
        assert not is_out_of_gamut("oklch(50% 0.12 200)", "srgb")
        assert is_out_of_gamut("oklch(50% 0.31 200)", "display-p3")
        assert not is_out_of_gamut("oklch(50% 0.31 200)", "unlimited")

    def test_custom_thresholds(self) -> None:
        assert is_out_of_gamut("oklch(50% 0.1 200)", "srgb", srgb_threshold=0.05)

    def test_exact_gamut(self) -> None:
        assert in_gamut(Oklch(l=0.5, c=0.0, h=0.0), "srgb")
        assert not in_gamut(Oklch(l=0.7, c=0.35, h=150.0), "srgb")

    def test_p3_is_wider_than_srgb(self) -> None:
        # Saturated sRGB green sits inside P3
        green = parse_color("#00ff00")
        assert green is not None
        assert in_gamut(green, "display-p3")
