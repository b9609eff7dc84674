"""
Palette Functional Core: color-space conversions and contrast math.

No I/O operations - all functions are pure and deterministic.
Conversions run through OKLab (Björn Ottosson's reference matrices) and
linear sRGB. Hex is the canonical identity of a color.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from src.domain.entities import AccessibilityResult, ColorFormat, ColorValues, Gamut

# ═══════════════════════════════════════════════════════════════════════════
# INTERNAL COLOR TYPE
# ═══════════════════════════════════════════════════════════════════════════

ACHROMATIC_CHROMA = 1e-4
"""Chroma below this is treated as gray (hue undefined)."""

ACHROMATIC_HUE = 240.0
"""Hue assigned to grays so hue shift and chroma ramps have a direction."""


@dataclass(frozen=True)
class Oklch:
    """Perceptual color: lightness 0-1, chroma 0-0.4+, hue degrees 0-360."""

    l: float  # noqa: E741
    c: float
    h: float

    @classmethod
    def from_hex(cls, hex_color: str) -> Oklch | None:
        rgb = _parse_hex(hex_color)
        if rgb is None:
            return None
        return srgb_to_oklch(*rgb)

    def to_srgb(self) -> tuple[float, float, float]:
        """Gamut-mapped sRGB channels in 0-1."""
        return _fit_to_srgb(self.l, self.c, self.h)

    def to_hex(self) -> str:
        return format_hex(self.to_srgb())


# ═══════════════════════════════════════════════════════════════════════════
# TRANSFER FUNCTIONS AND MATRICES
# ═══════════════════════════════════════════════════════════════════════════

_GAMUT_EPSILON = 1e-6

# Linear sRGB -> linear Display-P3 (both D65)
_SRGB_TO_P3 = (
    (0.8224621, 0.1775380, 0.0),
    (0.0331941, 0.9668058, 0.0),
    (0.0170827, 0.0723974, 0.9105199),
)


def _srgb_to_linear(c: float) -> float:
    if c <= 0.04045:
        return c / 12.92
    return float(((c + 0.055) / 1.055) ** 2.4)


def _linear_to_srgb(c: float) -> float:
    if c <= 0.0031308:
        return 12.92 * c
    return 1.055 * c ** (1 / 2.4) - 0.055


def _cbrt(x: float) -> float:
    return math.copysign(abs(x) ** (1 / 3), x)


def _linear_srgb_to_oklab(r: float, g: float, b: float) -> tuple[float, float, float]:
    l_ = _cbrt(0.4122214708 * r + 0.5363325363 * g + 0.0514459929 * b)
    m_ = _cbrt(0.2119034982 * r + 0.6806995451 * g + 0.1073969566 * b)
    s_ = _cbrt(0.0883024619 * r + 0.2817188376 * g + 0.6299787005 * b)

    return (
        0.2104542553 * l_ + 0.7936177850 * m_ - 0.0040720468 * s_,
        1.9779984951 * l_ - 2.4285922050 * m_ + 0.4505937099 * s_,
        0.0259040371 * l_ + 0.7827717662 * m_ - 0.8086757660 * s_,
    )


def _oklab_to_linear_srgb(L: float, a: float, b: float) -> tuple[float, float, float]:  # noqa: N803
    l_ = L + 0.3963377774 * a + 0.2158037573 * b
    m_ = L - 0.1055613458 * a - 0.0638541728 * b
    s_ = L - 0.0894841775 * a - 1.2914855480 * b

    l3, m3, s3 = l_**3, m_**3, s_**3

    return (
        4.0767416621 * l3 - 3.3077115913 * m3 + 0.2309699292 * s3,
        -1.2684380046 * l3 + 2.6097574011 * m3 - 0.3413193965 * s3,
        -0.0041960863 * l3 - 0.7034186147 * m3 + 1.7076147010 * s3,
    )


def _oklch_to_linear_srgb(l: float, c: float, h: float) -> tuple[float, float, float]:  # noqa: E741
    rad = math.radians(h)
    return _oklab_to_linear_srgb(l, c * math.cos(rad), c * math.sin(rad))


def srgb_to_oklch(r: float, g: float, b: float) -> Oklch:
    """Convert gamma-encoded sRGB channels (0-1) to OKLCH."""
    L, a, b_ = _linear_srgb_to_oklab(_srgb_to_linear(r), _srgb_to_linear(g), _srgb_to_linear(b))
    c = math.hypot(a, b_)
    if c < ACHROMATIC_CHROMA:
        return Oklch(l=L, c=0.0, h=ACHROMATIC_HUE)
    h = math.degrees(math.atan2(b_, a)) % 360
    return Oklch(l=L, c=c, h=h)


def _within_unit(channels: tuple[float, float, float]) -> bool:
    return all(-_GAMUT_EPSILON <= ch <= 1 + _GAMUT_EPSILON for ch in channels)


def _fit_to_srgb(l: float, c: float, h: float) -> tuple[float, float, float]:  # noqa: E741
    """
    Map an OKLCH color into sRGB.

    Lightness is clamped to 0-1; chroma is reduced by bisection (hue and
    lightness preserved) until the color fits. Remaining float error is clipped.
    """
    l = min(max(l, 0.0), 1.0)  # noqa: E741
    c = max(c, 0.0)

    linear = _oklch_to_linear_srgb(l, c, h)
    if not _within_unit(linear):
        lo, hi = 0.0, c
        for _ in range(24):
            mid = (lo + hi) / 2
            if _within_unit(_oklch_to_linear_srgb(l, mid, h)):
                lo = mid
            else:
                hi = mid
        linear = _oklch_to_linear_srgb(l, lo, h)

    r, g, b = (min(max(_linear_to_srgb(min(max(ch, 0.0), 1.0)), 0.0), 1.0) for ch in linear)
    return r, g, b


def in_gamut(color: Oklch, gamut: Gamut = "srgb") -> bool:
    """
    Exact gamut test: convert to linear RGB of the target space and check
    every channel lies within 0-1.
    """
    if gamut == "unlimited":
        return True

    r, g, b = _oklch_to_linear_srgb(color.l, color.c, color.h)
    if gamut == "srgb":
        return _within_unit((r, g, b))

    p3 = tuple(row[0] * r + row[1] * g + row[2] * b for row in _SRGB_TO_P3)
    return _within_unit(p3)  # type: ignore[arg-type]


# ═══════════════════════════════════════════════════════════════════════════
# PARSING
# ═══════════════════════════════════════════════════════════════════════════

HEX_COLOR_PATTERN = re.compile(r"^#([0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$")
_NUM = r"([+-]?(?:\d+\.?\d*|\.\d+))"
RGB_PATTERN = re.compile(
    rf"^rgba?\(\s*{_NUM}\s*[,\s]\s*{_NUM}\s*[,\s]\s*{_NUM}\s*(?:[,/]\s*{_NUM}\s*)?\)$", re.I
)
OKLCH_PATTERN = re.compile(
    rf"^oklch\(\s*{_NUM}(%?)\s+{_NUM}\s+{_NUM}(?:deg)?\s*(?:/\s*{_NUM}%?\s*)?\)$", re.I
)
CMYK_PATTERN = re.compile(
    rf"^cmyk\(\s*{_NUM}%?\s*,\s*{_NUM}%?\s*,\s*{_NUM}%?\s*,\s*{_NUM}%?\s*\)$", re.I
)


def _parse_hex(hex_color: str) -> tuple[float, float, float] | None:
    if not HEX_COLOR_PATTERN.match(hex_color):
        return None

    digits = hex_color.lstrip("#")
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)

    return (
        int(digits[0:2], 16) / 255,
        int(digits[2:4], 16) / 255,
        int(digits[4:6], 16) / 255,
    )


def _clamp_unit(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def parse_color(color: str | None) -> Oklch | None:
    """
    Parse a color string into OKLCH.

    Accepts #rgb, #rrggbb, rgb(r, g, b) with 0-255 channels, oklch(L% C H) or
    oklch(L C H) with L in 0-1, and cmyk(c%, m%, y%, k%).

    Returns:
        Oklch, or None when the string is not a recognised color
    """
    if not color or not isinstance(color, str):
        return None
    text = color.strip()

    rgb = _parse_hex(text)
    if rgb is not None:
        return srgb_to_oklch(*rgb)

    match = RGB_PATTERN.match(text)
    if match:
        r, g, b = (_clamp_unit(float(match.group(i)) / 255) for i in (1, 2, 3))
        return srgb_to_oklch(r, g, b)

    match = OKLCH_PATTERN.match(text)
    if match:
        lightness = float(match.group(1))
        if match.group(2) == "%":
            lightness /= 100
        chroma = max(float(match.group(3)), 0.0)
        hue = float(match.group(4)) % 360
        if chroma < ACHROMATIC_CHROMA:
            return Oklch(l=_clamp_unit(lightness), c=0.0, h=ACHROMATIC_HUE)
        return Oklch(l=_clamp_unit(lightness), c=chroma, h=hue)

    match = CMYK_PATTERN.match(text)
    if match:
        c, m, y, k = (_clamp_unit(float(match.group(i)) / 100) for i in (1, 2, 3, 4))
        return srgb_to_oklch((1 - c) * (1 - k), (1 - m) * (1 - k), (1 - y) * (1 - k))

    return None


def parse_color_values(values: ColorValues) -> Oklch | None:
    """Parse a ColorValues record, trusting hex first as the canonical field."""
    for candidate in (values.hex, values.oklch, values.rgb, values.cmyk):
        parsed = parse_color(candidate)
        if parsed is not None:
            return parsed
    return None


# ═══════════════════════════════════════════════════════════════════════════
# FORMATTING
# ═══════════════════════════════════════════════════════════════════════════


def _channel_byte(c: float) -> int:
    return min(max(math.floor(c * 255 + 0.5), 0), 255)


def format_hex(rgb: tuple[float, float, float]) -> str:
    return "#" + "".join(f"{_channel_byte(c):02x}" for c in rgb)


def format_rgb(rgb: tuple[float, float, float]) -> str:
    r, g, b = (_channel_byte(c) for c in rgb)
    return f"rgb({r}, {g}, {b})"


def format_oklch(color: Oklch) -> str:
    return f"oklch({color.l * 100:.2f}% {color.c:.4f} {color.h:.2f})"


def format_cmyk(rgb: tuple[float, float, float]) -> str:
    # Work from the 8-bit channels so cmyk agrees with hex
    r, g, b = (_channel_byte(c) / 255 for c in rgb)
    k = 1 - max(r, g, b)
    if k >= 1:
        c = m = y = 0.0
    else:
        c = (1 - r - k) / (1 - k)
        m = (1 - g - k) / (1 - k)
        y = (1 - b - k) / (1 - k)

    def pct(v: float) -> int:
        return math.floor(v * 100 + 0.5)

    return f"cmyk({pct(c)}%, {pct(m)}%, {pct(y)}%, {pct(k)}%)"


def oklch_to_values(color: Oklch) -> ColorValues:
    """Express an OKLCH color in every supported format."""
    rgb = color.to_srgb()
    return ColorValues(
        oklch=format_oklch(color),
        rgb=format_rgb(rgb),
        hex=format_hex(rgb),
        cmyk=format_cmyk(rgb),
    )


BLACK_VALUES = oklch_to_values(Oklch(l=0.0, c=0.0, h=ACHROMATIC_HUE))


def convert_to_all_formats(color: str) -> ColorValues:
    """
    Convert a color string to all supported formats.

    Unparseable input yields black, matching what a renderer would show.
    """
    parsed = parse_color(color)
    if parsed is None:
        return BLACK_VALUES
    return oklch_to_values(parsed)


def convert_color(color: str, from_format: ColorFormat, to_format: ColorFormat) -> str:
    """
    Convert a color string between formats.

    Pantone has no lookup table, so it passes through unchanged in either
    direction. Unparseable input is returned unchanged.
    """
    if from_format == "pantone" or to_format == "pantone":
        return color

    parsed = parse_color(color)
    if parsed is None:
        return color

    if to_format == "oklch":
        return format_oklch(parsed)

    rgb = parsed.to_srgb()
    if to_format == "hex":
        return format_hex(rgb)
    if to_format == "rgb":
        return format_rgb(rgb)
    if to_format == "cmyk":
        return format_cmyk(rgb)
    return color


# ═══════════════════════════════════════════════════════════════════════════
# CONTRAST
# WCAG 2.1: AA 4.5:1 normal text, 3:1 large text, AAA 7:1
# ═══════════════════════════════════════════════════════════════════════════

AA_NORMAL = 4.5
AA_LARGE = 3.0
AAA = 7.0

DEGRADED_ACCESSIBILITY = AccessibilityResult(
    contrast_with_white=1.0,
    contrast_with_black=1.0,
    wcag_aa_normal=False,
    wcag_aa_large=False,
    wcag_aaa=False,
    readable_on="black",
)
"""Scores reported when a color cannot be evaluated."""


def relative_luminance(r: float, g: float, b: float) -> float:
    """
    Calculate relative luminance per WCAG 2.1.

    Formula: L = 0.2126 * R + 0.7152 * G + 0.0722 * B
    Where R, G, B are sRGB values (0-1) linearized.
    """
    return (
        0.2126 * _srgb_to_linear(r)
        + 0.7152 * _srgb_to_linear(g)
        + 0.0722 * _srgb_to_linear(b)
    )


def _luminance_of(color: str) -> float | None:
    parsed = parse_color(color)
    if parsed is None:
        return None
    # Score the 8-bit color that will actually be displayed
    rgb = tuple(_channel_byte(c) / 255 for c in parsed.to_srgb())
    return relative_luminance(*rgb)


def contrast_from_luminance(l1: float, l2: float) -> float:
    lighter = max(l1, l2)
    darker = min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def calculate_contrast(color_a: str, color_b: str) -> float:
    """
    Calculate WCAG contrast ratio between two colors.

    Returns:
        Contrast ratio (1.0 to 21.0); 1.0 when either color is unparseable
    """
    l1 = _luminance_of(color_a)
    l2 = _luminance_of(color_b)
    if l1 is None or l2 is None:
        return 1.0
    return contrast_from_luminance(l1, l2)


def wcag_levels(
    contrast: float,
    aa_normal: float = AA_NORMAL,
    aa_large: float = AA_LARGE,
    aaa: float = AAA,
) -> tuple[bool, bool, bool]:
    """Return (AA normal, AA large, AAA) pass flags for a contrast ratio."""
    return contrast >= aa_normal, contrast >= aa_large, contrast >= aaa


def check_accessibility(
    color: str,
    aa_normal: float = AA_NORMAL,
    aa_large: float = AA_LARGE,
    aaa: float = AAA,
) -> AccessibilityResult:
    """
    Score a color against pure white and pure black.

    Pass flags use whichever background gives the higher contrast.
    """
    luminance = _luminance_of(color)
    if luminance is None:
        return DEGRADED_ACCESSIBILITY

    with_white = contrast_from_luminance(luminance, 1.0)
    with_black = contrast_from_luminance(luminance, 0.0)
    best = max(with_white, with_black)
    normal, large, enhanced = wcag_levels(best, aa_normal, aa_large, aaa)

    return AccessibilityResult(
        contrast_with_white=with_white,
        contrast_with_black=with_black,
        wcag_aa_normal=normal,
        wcag_aa_large=large,
        wcag_aaa=enhanced,
        readable_on="white" if with_white >= with_black else "black",
    )


# ═══════════════════════════════════════════════════════════════════════════
# GAMUT HEURISTIC
# ═══════════════════════════════════════════════════════════════════════════

SRGB_CHROMA_THRESHOLD = 0.13
DISPLAY_P3_CHROMA_THRESHOLD = 0.3


def is_out_of_gamut(
    color: str,
    target_gamut: Gamut = "srgb",
    srgb_threshold: float = SRGB_CHROMA_THRESHOLD,
    display_p3_threshold: float = DISPLAY_P3_CHROMA_THRESHOLD,
) -> bool:
    """
    Approximate out-of-gamut flag for a UI warning indicator.

    Flags on OKLCH chroma alone; the thresholds are empirical and ignore
    lightness and hue, so this is not colorimetrically exact. Use in_gamut()
    for an exact answer.
    """
    if target_gamut == "unlimited":
        return False

    parsed = parse_color(color)
    if parsed is None:
        return False

    if target_gamut == "srgb":
        return parsed.c > srgb_threshold
    return parsed.c > display_p3_threshold
