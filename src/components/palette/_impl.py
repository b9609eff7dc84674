"""
Palette generation engine.

Turns a base color plus a shape configuration into an ordered list of
ColorStep, darkest to lightest. Pure and deterministic: step ids are derived
from position and color, so identical inputs give identical output.

Key behaviors:
- Output length always equals the (clamped) step count
- Malformed input never raises; it degrades to a neutral-gray palette
- Degradations are logged and reported through FaultReporterPort
- The middle step (index num_steps // 2) is the base-color slot
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from uuid import UUID, uuid5

from src.domain.entities import ColorPalette, ColorStep, ColorValues, PaletteConfig

from ._color import (
    DEGRADED_ACCESSIBILITY,
    Oklch,
    check_accessibility,
    convert_to_all_formats,
    oklch_to_values,
    parse_color,
    parse_color_values,
)
from .models import PaletteFault, WcagThresholds
from .ports import FaultReporterPort

logger = logging.getLogger(__name__)

MIN_STEPS = 3
MAX_STEPS = 25
MAX_HUE_SHIFT = 180.0
DEFAULT_FALLBACK_GRAY = "#808080"
DEFAULT_THRESHOLDS = WcagThresholds()

_STEP_NAMESPACE = UUID("5b0f7c1e-8a3d-4f59-9c55-2f1d8e6a7b40")


# --- Fault Reporting ---


class FaultCollector:
    """In-memory reporter that keeps every fault for the caller."""

    def __init__(self) -> None:
        self.faults: list[PaletteFault] = []

    def report(self, fault: PaletteFault) -> None:
        self.faults.append(fault)


def _emit(reporter: FaultReporterPort | None, code: str, message: str, field: str) -> None:
    fault = PaletteFault(code=code, message=message, field=field)
    logger.warning("Palette fault %s: %s", code, message)
    if reporter is not None:
        reporter.report(fault)


# --- Distributions ---


def ease_linear(t: float) -> float:
    return t


def ease_in(t: float) -> float:
    return t**3


def ease_out(t: float) -> float:
    return 1 - (1 - t) ** 3


def ease_s_curve(t: float) -> float:
    if t < 0.5:
        return 4 * t**3
    return 1 - (-2 * t + 2) ** 3 / 2


EASINGS: dict[str, Callable[[float], float]] = {
    "linear": ease_linear,
    "easeIn": ease_in,
    "easeOut": ease_out,
    "s-curve": ease_s_curve,
    "curved": ease_s_curve,  # legacy name
}


def _easing_for(
    preset: str, field: str, reporter: FaultReporterPort | None
) -> Callable[[float], float]:
    easing = EASINGS.get(preset)
    if easing is None:
        _emit(reporter, "unknown_preset", f"Unknown preset '{preset}', using linear", field)
        return ease_linear
    return easing


# --- Helpers ---


def _clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


def _position(index: int, total: int) -> float:
    """Normalized position 0-1 of a step; total is always >= MIN_STEPS."""
    return index / (total - 1)


def step_name(index: int) -> str:
    return str((index + 1) * 100)


def step_id(index: int, hex_color: str) -> str:
    return str(uuid5(_STEP_NAMESPACE, f"{index}:{hex_color}"))


def clamp_num_steps(
    num_steps: object,
    reporter: FaultReporterPort | None = None,
    min_steps: int = MIN_STEPS,
    max_steps: int = MAX_STEPS,
) -> int:
    """Clamp a requested step count into [min_steps, max_steps]."""
    try:
        requested = int(num_steps)  # type: ignore[call-overload]
    except (TypeError, ValueError, OverflowError):
        _emit(
            reporter,
            "num_steps_clamped",
            f"Step count {num_steps!r} is not a number, using {min_steps}",
            "num_steps",
        )
        return min_steps

    clamped = int(_clamp(requested, min_steps, max_steps))
    if clamped != requested:
        _emit(
            reporter,
            "num_steps_clamped",
            f"Step count {requested} outside [{min_steps}, {max_steps}], using {clamped}",
            "num_steps",
        )
    return clamped


def _make_step(
    index: int,
    values: ColorValues,
    is_base: bool,
    thresholds: WcagThresholds,
) -> ColorStep:
    return ColorStep(
        id=step_id(index, values.hex),
        name=step_name(index),
        values=values,
        accessibility=check_accessibility(
            values.hex, thresholds.aa_normal, thresholds.aa_large, thresholds.aaa
        ),
        is_base_color=is_base,
    )


def _parse_base(base_color: ColorValues | str) -> Oklch | None:
    if isinstance(base_color, ColorValues):
        return parse_color_values(base_color)
    return parse_color(base_color)


def _locked_base_values(base_color: ColorValues | str, base: Oklch) -> ColorValues:
    """
    Values for a locked base slot.

    A stored ColorValues is kept as given (pantone and format strings
    included); only the hex is lower-cased and a missing cmyk filled in.
    Strings, and stored values whose hex does not parse, are derived.
    """
    derived = oklch_to_values(base)
    if not isinstance(base_color, ColorValues) or parse_color(base_color.hex) is None:
        return derived
    return base_color.model_copy(
        update={"hex": base_color.hex.lower(), "cmyk": base_color.cmyk or derived.cmyk}
    )


# --- Axis Values ---


def lightness_values(
    total: int,
    options: PaletteConfig,
    reporter: FaultReporterPort | None = None,
) -> list[float]:
    """Lightness for every step, per the lightness preset and range."""
    lo, hi = (_clamp(v, 0.0, 1.0) for v in options.lightness_range)

    preset: str = options.lightness_preset
    if preset == "custom":
        custom = options.custom_lightness_values
        if len(custom) == total:
            return [_clamp(v, 0.0, 1.0) for v in custom]
        _emit(
            reporter,
            "custom_lightness_mismatch",
            f"Custom lightness has {len(custom)} values for {total} steps, using linear",
            "custom_lightness_values",
        )
        preset = "linear"

    easing = _easing_for(preset, "lightness_preset", reporter)
    return [lo + easing(_position(i, total)) * (hi - lo) for i in range(total)]


def chroma_values(
    total: int,
    options: PaletteConfig,
    lightness: list[float] | None,
    reporter: FaultReporterPort | None = None,
) -> list[float]:
    """
    Chroma for every step.

    When lightness is given (lightness mode) the increase/decrease presets
    follow each step's position within the lightness range. Without it chroma
    is the primary axis and follows the step position; "constant" then
    behaves as "linear" so the steps actually differ.
    """
    lo, hi = (max(v, 0.0) for v in options.chroma_range)

    preset: str = options.chroma_preset
    if preset == "custom":
        custom = options.custom_chroma_values
        if len(custom) == total:
            return [max(v, 0.0) for v in custom]
        _emit(
            reporter,
            "custom_chroma_mismatch",
            f"Custom chroma has {len(custom)} values for {total} steps, using linear",
            "custom_chroma_values",
        )
        preset = "linear"

    if preset == "constant":
        if lightness is not None:
            return [(lo + hi) / 2] * total
        preset = "linear"

    if preset in ("increase", "decrease"):
        positions = [_position(i, total) for i in range(total)]
        if lightness is not None:
            l_lo, l_hi = (_clamp(v, 0.0, 1.0) for v in options.lightness_range)
            if abs(l_hi - l_lo) > 1e-9:
                positions = [_clamp((v - l_lo) / (l_hi - l_lo), 0.0, 1.0) for v in lightness]
        if preset == "increase":
            return [lo + p * (hi - lo) for p in positions]
        return [hi - p * (hi - lo) for p in positions]

    easing = _easing_for(preset, "chroma_preset", reporter)
    return [lo + easing(_position(i, total)) * (hi - lo) for i in range(total)]


# --- Palettes ---


def fallback_palette(
    num_steps: int,
    fallback_color: str = DEFAULT_FALLBACK_GRAY,
) -> list[ColorStep]:
    """Neutral-gray palette with degraded scores, for when input is unusable."""
    values = convert_to_all_formats(fallback_color)
    base_index = num_steps // 2
    return [
        ColorStep(
            id=step_id(i, values.hex),
            name=step_name(i),
            values=values,
            accessibility=DEGRADED_ACCESSIBILITY,
            is_base_color=i == base_index,
        )
        for i in range(num_steps)
    ]


def generate_palette(
    base_color: ColorValues | str,
    num_steps: int,
    use_lightness: bool = True,
    options: PaletteConfig | None = None,
    *,
    faults: FaultReporterPort | None = None,
    thresholds: WcagThresholds = DEFAULT_THRESHOLDS,
    fallback_color: str = DEFAULT_FALLBACK_GRAY,
    min_steps: int = MIN_STEPS,
    max_steps: int = MAX_STEPS,
) -> list[ColorStep]:
    """
    Generate an ordered palette from a base color.

    Args:
        base_color: Color string (hex, rgb, oklch, cmyk) or ColorValues
        num_steps: Step count, clamped to [min_steps, max_steps]
        use_lightness: Vary lightness (True) or chroma (False) across steps
        options: Shape configuration (ranges, presets, hue shift, base lock)
        faults: Optional side channel for recovered degradations
        thresholds: WCAG contrast thresholds for scoring
        fallback_color: Gray used when the palette cannot be generated

    Returns:
        Exactly num_steps (clamped) ColorStep, darkest to lightest in
        lightness mode. Never raises on bad input.
    """
    options = options or PaletteConfig()
    total = clamp_num_steps(num_steps, faults, min_steps, max_steps)

    base = _parse_base(base_color)
    if base is None:
        _emit(
            faults,
            "invalid_base_color",
            f"Could not parse base color {base_color!r}, using neutral gray",
            "base_color",
        )
        return fallback_palette(total, fallback_color)

    try:
        base_values = _locked_base_values(base_color, base)
        base_index = total // 2
        hue_shift = _clamp(options.hue_shift, -MAX_HUE_SHIFT, MAX_HUE_SHIFT)

        lightness = lightness_values(total, options, faults) if use_lightness else None
        chroma = chroma_values(total, options, lightness, faults)

        steps: list[ColorStep] = []
        for i in range(total):
            is_base = i == base_index
            if is_base and options.lock_base_color:
                values = base_values
            else:
                step_l = lightness[i] if lightness is not None else base.l
                hue = (base.h + hue_shift * (_position(i, total) - 0.5)) % 360
                values = oklch_to_values(Oklch(l=step_l, c=chroma[i], h=hue))
            steps.append(_make_step(i, values, is_base, thresholds))
    except (ArithmeticError, ValueError, TypeError) as e:
        _emit(faults, "generation_failed", f"Palette generation failed: {e}", "options")
        return fallback_palette(total, fallback_color)

    logger.debug(
        "Generated %d-step palette from %s (lightness=%s)", total, base_values.hex, use_lightness
    )
    return steps


def override_step(
    steps: list[ColorStep],
    index: int,
    color: str,
    *,
    faults: FaultReporterPort | None = None,
    thresholds: WcagThresholds = DEFAULT_THRESHOLDS,
) -> list[ColorStep]:
    """
    Replace one step's color, keeping its id, name and base flag.

    Other steps are returned untouched. A bad index or color leaves the
    palette unchanged and reports a fault.
    """
    result = list(steps)

    if not 0 <= index < len(result):
        _emit(
            faults,
            "step_index_out_of_range",
            f"Step index {index} outside palette of {len(result)} steps",
            "index",
        )
        return result

    parsed = parse_color(color)
    if parsed is None:
        _emit(faults, "invalid_override_color", f"Could not parse color {color!r}", "color")
        return result

    values = oklch_to_values(parsed)
    current = result[index]
    result[index] = current.model_copy(
        update={
            "values": values,
            "accessibility": check_accessibility(
                values.hex, thresholds.aa_normal, thresholds.aa_large, thresholds.aaa
            ),
        }
    )
    return result


def regenerate_palette(
    palette: ColorPalette,
    config: PaletteConfig,
    use_lightness: bool = True,
    *,
    faults: FaultReporterPort | None = None,
    thresholds: WcagThresholds = DEFAULT_THRESHOLDS,
    fallback_color: str = DEFAULT_FALLBACK_GRAY,
    min_steps: int = MIN_STEPS,
    max_steps: int = MAX_STEPS,
) -> ColorPalette:
    """
    Regenerate a stored palette's steps from its base color.

    With lock_base_color the stored base color is kept; otherwise it is
    re-derived from the regenerated base slot.
    """
    steps = generate_palette(
        palette.base_color,
        config.num_steps,
        use_lightness,
        config,
        faults=faults,
        thresholds=thresholds,
        fallback_color=fallback_color,
        min_steps=min_steps,
        max_steps=max_steps,
    )
    base_color = palette.base_color
    if not config.lock_base_color:
        base_color = steps[len(steps) // 2].values

    return palette.model_copy(update={"steps": steps, "base_color": base_color})
