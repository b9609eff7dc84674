"""
Type scale calculator.

Two ways to size type:
- Modular: a geometric sequence from a base size and a ratio
- Distance: the base size is derived from the minimum legible visual angle
  at a viewing distance, then fed through the same modular sequence

All rounding is half-up to whole pixels so repeated calls with identical
input never flicker between values.
"""

from __future__ import annotations

import logging
import math
from typing import Any
from uuid import uuid4

from src.domain.entities import ScaleValue, TypeStyle, TypographyPlatform

from .models import RatioPreset, ResolvedTypeStyle

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════
# CONSTANTS
# ═══════════════════════════════════════════════════════════════════════════

MIN_VISUAL_ANGLE_DEG = 0.21
"""Minimum legible visual angle in degrees."""

MM_PER_INCH = 25.4
REM_BASE_PX = 16

LIGHTING_FACTORS: dict[str, float] = {
    "good": 1.0,
    "moderate": 1.25,
    "poor": 1.5,
}

TEXT_TYPE_FACTORS: dict[str, float] = {
    "continuous": 1.0,
    "isolated": 1.5,
}

MIN_VISUAL_ACUITY = 0.1
MIN_RATIO = 1.001
MAX_RATIO = 10.0
MAX_FONT_SIZE = 100_000.0
"""Largest pixel size the calculator returns; bigger results are capped."""

# Input ceilings for distance sizing; keeps every product finite
MAX_DISTANCE_CM = 1_000_000.0
MAX_PPI = 100_000.0
MAX_LENGTH_RATIO = 1_000.0

MAX_SCALE_STEPS = 24
DEFAULT_BASE_SIZE = 16.0

RATIO_PRESETS: tuple[RatioPreset, ...] = (
    RatioPreset(name="Minor Second", ratio=1.067),
    RatioPreset(name="Major Second", ratio=1.125),
    RatioPreset(name="Minor Third", ratio=1.2),
    RatioPreset(name="Major Third", ratio=1.25),
    RatioPreset(name="Perfect Fourth", ratio=1.333),
    RatioPreset(name="Augmented Fourth", ratio=1.414),
    RatioPreset(name="Perfect Fifth", ratio=1.5),
    RatioPreset(name="Golden Ratio", ratio=1.618),
)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going up, independent of float formatting."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def _finite_at_least(
    value: float, minimum: float, name: str, maximum: float = math.inf
) -> float:
    if not isinstance(value, int | float) or not math.isfinite(value) or value < minimum:
        logger.warning("Clamping %s=%r to %s", name, value, minimum)
        return minimum
    if value > maximum:
        logger.warning("Clamping %s=%r to %s", name, value, maximum)
        return maximum
    return float(value)


def _capped_px(value: float, name: str, max_font_size: float) -> float:
    """Pixel result guard: NaN falls back to the default base size."""
    if math.isnan(value):
        logger.warning("Invalid %s=%r, using %s", name, value, DEFAULT_BASE_SIZE)
        return DEFAULT_BASE_SIZE
    if value > max_font_size:
        logger.warning("Capping %s=%r to %s", name, value, max_font_size)
        return max_font_size
    return value


# ═══════════════════════════════════════════════════════════════════════════
# DISTANCE-BASED SIZE
# ═══════════════════════════════════════════════════════════════════════════


def calculate_distance_based_size(
    distance: float,
    visual_acuity: float,
    mean_length_ratio: float,
    text_type: str,
    lighting: str,
    ppi: float,
    *,
    lighting_factors: dict[str, float] = LIGHTING_FACTORS,
    text_type_factors: dict[str, float] = TEXT_TYPE_FACTORS,
    min_visual_acuity: float = MIN_VISUAL_ACUITY,
    max_font_size: float = MAX_FONT_SIZE,
) -> int:
    """
    Derive a base font size in pixels from viewing conditions.

    Args:
        distance: Viewing distance in cm
        visual_acuity: Decimal acuity (1.0 = normal); clamped to >= 0.1
        mean_length_ratio: Word-length heuristic multiplier
        text_type: "continuous" or "isolated"
        lighting: "good", "moderate" or "poor"
        ppi: Pixels per inch of the target display

    Returns:
        Pixel size rounded half-up. Never NaN: invalid inputs are clamped,
        and results past max_font_size are capped.
    """
    distance = _finite_at_least(distance, 0.0, "distance", MAX_DISTANCE_CM)
    visual_acuity = _finite_at_least(visual_acuity, min_visual_acuity, "visual_acuity")
    mean_length_ratio = _finite_at_least(
        mean_length_ratio, 0.0, "mean_length_ratio", MAX_LENGTH_RATIO
    )
    ppi = _finite_at_least(ppi, 0.0, "ppi", MAX_PPI)

    distance_mm = distance * 10
    visual_angle_rad = (MIN_VISUAL_ANGLE_DEG * math.pi) / 180

    size_mm = 2 * distance_mm * math.tan(visual_angle_rad / 2)
    size_mm /= visual_acuity
    size_mm *= mean_length_ratio
    size_mm *= lighting_factors.get(lighting, 1.0)
    size_mm *= text_type_factors.get(text_type, 1.0)

    pixels = _capped_px(size_mm * ppi / MM_PER_INCH, "pixel_size", max_font_size)
    return int(round_half_up(pixels))


# ═══════════════════════════════════════════════════════════════════════════
# MODULAR SCALE
# ═══════════════════════════════════════════════════════════════════════════


def scale_label(step: int) -> str:
    return f"f{step}"


def _clamp_steps(value: int, name: str) -> int:
    try:
        steps = int(value)
    except (TypeError, ValueError):
        logger.warning("Invalid %s=%r, using 0", name, value)
        return 0
    clamped = min(max(steps, 0), MAX_SCALE_STEPS)
    if clamped != steps:
        logger.warning("Clamping %s=%d to %d", name, steps, clamped)
    return clamped


def get_scale_values(
    base_size: float,
    ratio: float,
    steps_up: int,
    steps_down: int,
    *,
    min_ratio: float = MIN_RATIO,
    max_ratio: float = MAX_RATIO,
    max_font_size: float = MAX_FONT_SIZE,
) -> list[ScaleValue]:
    """
    Generate a modular scale from f-steps_down to f+steps_up.

    Sizes are whole pixels; ratio factors are rounded to 3 decimals.
    Always returns steps_down + 1 + steps_up entries (after clamping),
    ordered smallest to largest. Ratio is clamped to [min_ratio, max_ratio]
    and sizes are capped at max_font_size.
    """
    if not isinstance(base_size, int | float) or not math.isfinite(base_size) or base_size <= 0:
        logger.warning("Invalid base_size=%r, using %s", base_size, DEFAULT_BASE_SIZE)
        base_size = DEFAULT_BASE_SIZE
    base_size = _capped_px(base_size, "base_size", max_font_size)
    ratio = _finite_at_least(ratio, min_ratio, "ratio", max_ratio)
    steps_up = _clamp_steps(steps_up, "steps_up")
    steps_down = _clamp_steps(steps_down, "steps_down")

    values: list[ScaleValue] = []

    for k in range(steps_down, 0, -1):
        factor = ratio**k
        size = int(round_half_up(base_size / factor))
        values.append(
            ScaleValue(
                label=scale_label(-k),
                step=-k,
                size=size,
                ratio=round_half_up(1 / factor, 3),
                rem=round_half_up(size / REM_BASE_PX, 3),
            )
        )

    base = int(round_half_up(base_size))
    values.append(
        ScaleValue(
            label="f0", step=0, size=base, ratio=1.0, rem=round_half_up(base / REM_BASE_PX, 3)
        )
    )

    for k in range(1, steps_up + 1):
        factor = ratio**k
        size = int(round_half_up(_capped_px(base_size * factor, scale_label(k), max_font_size)))
        values.append(
            ScaleValue(
                label=scale_label(k),
                step=k,
                size=size,
                ratio=round_half_up(factor, 3),
                rem=round_half_up(size / REM_BASE_PX, 3),
            )
        )

    return values


def platform_base_size(
    platform: TypographyPlatform,
    *,
    lighting_factors: dict[str, float] = LIGHTING_FACTORS,
    text_type_factors: dict[str, float] = TEXT_TYPE_FACTORS,
    min_visual_acuity: float = MIN_VISUAL_ACUITY,
    max_font_size: float = MAX_FONT_SIZE,
) -> float:
    """Base size for a platform: configured, or derived from viewing distance."""
    if platform.scale_method == "distance":
        d = platform.distance_scale
        return calculate_distance_based_size(
            d.viewing_distance,
            d.visual_acuity,
            d.mean_length_ratio,
            d.text_type,
            d.lighting,
            d.ppi,
            lighting_factors=lighting_factors,
            text_type_factors=text_type_factors,
            min_visual_acuity=min_visual_acuity,
            max_font_size=max_font_size,
        )
    return platform.scale.base_size


def build_platform_scale(platform: TypographyPlatform, **factors: Any) -> list[ScaleValue]:
    """Scale values for a platform using its scale method."""
    scale = platform.scale
    return get_scale_values(
        platform_base_size(platform, **factors),
        scale.ratio,
        scale.steps_up,
        scale.steps_down,
        max_font_size=factors.get("max_font_size", MAX_FONT_SIZE),
    )


# ═══════════════════════════════════════════════════════════════════════════
# TYPE STYLES
# Resolved against freshly computed scale values, never stored with sizes.
# ═══════════════════════════════════════════════════════════════════════════


def default_type_styles() -> list[TypeStyle]:
    return [
        TypeStyle(id="display", name="Display", scale_step="f6", font_weight=700,
                  line_height=1.1, optical_size=48, letter_spacing=-0.02),
        TypeStyle(id="h1", name="Heading 1", scale_step="f5", font_weight=700,
                  line_height=1.2, optical_size=40, letter_spacing=-0.015),
        TypeStyle(id="h2", name="Heading 2", scale_step="f4", font_weight=700,
                  line_height=1.3, optical_size=32, letter_spacing=-0.01),
        TypeStyle(id="h3", name="Heading 3", scale_step="f3", font_weight=600,
                  line_height=1.4, optical_size=24, letter_spacing=-0.005),
        TypeStyle(id="h4", name="Heading 4", scale_step="f2", font_weight=600,
                  line_height=1.4, optical_size=20, letter_spacing=0),
        TypeStyle(id="h5", name="Heading 5", scale_step="f1", font_weight=600,
                  line_height=1.5, optical_size=16, letter_spacing=0),
        TypeStyle(id="body", name="Body", scale_step="f0", font_weight=400,
                  line_height=1.6, optical_size=16, letter_spacing=0),
        TypeStyle(id="small", name="Small", scale_step="f-1", font_weight=400,
                  line_height=1.6, optical_size=14, letter_spacing=0.01),
        TypeStyle(id="tiny", name="Tiny", scale_step="f-2", font_weight=400,
                  line_height=1.6, optical_size=12, letter_spacing=0.02),
    ]


def resolve_type_styles(
    styles: list[TypeStyle],
    scale: list[ScaleValue],
) -> list[ResolvedTypeStyle]:
    """Attach the current pixel size to each style via its scale_step label."""
    by_label = {value.label: value for value in scale}
    resolved: list[ResolvedTypeStyle] = []
    for style in styles:
        value = by_label.get(style.scale_step)
        if value is None:
            logger.warning("Type style %s references unknown step %s", style.id, style.scale_step)
        resolved.append(
            ResolvedTypeStyle(
                style=style,
                size=value.size if value else None,
                ratio=value.ratio if value else None,
            )
        )
    return resolved


def add_type_style(
    styles: list[TypeStyle],
    name: str | None = None,
    scale_step: str = "f0",
) -> list[TypeStyle]:
    """Append a new style, inheriting the first style's font family."""
    family = styles[0].font_family if styles else None
    new_style = TypeStyle(
        name=name or f"Style {len(styles) + 1}",
        scale_step=scale_step,
        font_family=family,
    )
    return [*styles, new_style]


def duplicate_type_style(styles: list[TypeStyle], style_id: str) -> list[TypeStyle]:
    """Insert a copy right after the source style. Unknown id is a no-op."""
    result: list[TypeStyle] = []
    for style in styles:
        result.append(style)
        if style.id == style_id:
            result.append(
                style.model_copy(update={"id": str(uuid4()), "name": f"{style.name} Copy"})
            )
    return result


def delete_type_style(styles: list[TypeStyle], style_id: str) -> list[TypeStyle]:
    return [s for s in styles if s.id != style_id]


def reorder_type_styles(
    styles: list[TypeStyle],
    from_index: int,
    to_index: int,
) -> list[TypeStyle]:
    """Move one style; display order only. Out-of-range indexes are a no-op."""
    if not (0 <= from_index < len(styles) and 0 <= to_index < len(styles)):
        return list(styles)
    result = list(styles)
    moved = result.pop(from_index)
    result.insert(to_index, moved)
    return result
