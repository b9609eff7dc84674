"""
Palette component - color palette generation and accessibility scoring.

Entry points wrap the functional core and collect faults into the output,
so callers get renderable steps and a list of what was degraded.
"""

from __future__ import annotations

from src.domain.entities import PaletteConfig
from src.rules.models import Rules

from ._color import (
    DISPLAY_P3_CHROMA_THRESHOLD,
    SRGB_CHROMA_THRESHOLD,
    check_accessibility,
    convert_color,
    in_gamut,
    is_out_of_gamut,
    parse_color,
)
from ._impl import (
    DEFAULT_FALLBACK_GRAY,
    MAX_STEPS,
    MIN_STEPS,
    FaultCollector,
    generate_palette,
    override_step,
    regenerate_palette,
)
from .models import (
    CheckAccessibilityInput,
    CheckAccessibilityOutput,
    ConvertColorInput,
    ConvertColorOutput,
    GamutCheckInput,
    GamutCheckOutput,
    GeneratePaletteInput,
    GeneratePaletteOutput,
    OverrideStepInput,
    PaletteFault,
    RegeneratePaletteInput,
    RegeneratePaletteOutput,
    WcagThresholds,
)
from .ports import FaultReporterPort


def thresholds_from_rules(rules: Rules) -> WcagThresholds:
    acc = rules.accessibility
    return WcagThresholds(aa_normal=acc.aa_normal, aa_large=acc.aa_large, aaa=acc.aaa)


def palette_config_from_rules(rules: Rules) -> PaletteConfig:
    """Default shape configuration from the palette rules."""
    p = rules.palette
    return PaletteConfig(
        num_steps=p.default_num_steps,
        lightness_range=p.lightness_range,
        chroma_range=p.chroma_range,
        hue_shift=p.hue_shift,
        lightness_preset=p.lightness_preset,
        chroma_preset=p.chroma_preset,
        lock_base_color=p.lock_base_color,
    )


def _generation_limits(rules: Rules | None) -> dict:
    if rules is None:
        return {
            "fallback_color": DEFAULT_FALLBACK_GRAY,
            "min_steps": MIN_STEPS,
            "max_steps": MAX_STEPS,
        }
    p = rules.palette
    return {
        "fallback_color": p.fallback_gray,
        "min_steps": p.min_steps,
        "max_steps": p.max_steps,
    }


class _Tee:
    """Forward faults to the caller's reporter while collecting them."""

    def __init__(self, collector: FaultCollector, extra: FaultReporterPort | None) -> None:
        self._collector = collector
        self._extra = extra

    def report(self, fault: PaletteFault) -> None:
        self._collector.report(fault)
        if self._extra is not None:
            self._extra.report(fault)


def run_generate(
    inp: GeneratePaletteInput,
    *,
    rules: Rules | None = None,
    faults: FaultReporterPort | None = None,
) -> GeneratePaletteOutput:
    """
    Generate a palette.

    Args:
        inp: Base color, step count, axis and shape options.
        rules: Optional rules supplying thresholds and the fallback gray.
        faults: Optional extra reporter (e.g. for metrics or UI toasts).

    Returns:
        GeneratePaletteOutput with steps and collected faults.
    """
    collector = FaultCollector()
    thresholds = thresholds_from_rules(rules) if rules is not None else WcagThresholds()
    steps = generate_palette(
        inp.base_color,
        inp.num_steps,
        inp.use_lightness,
        inp.options,
        faults=_Tee(collector, faults),
        thresholds=thresholds,
        **_generation_limits(rules),
    )
    return GeneratePaletteOutput(steps=steps, faults=collector.faults)


def run_override(
    inp: OverrideStepInput,
    *,
    rules: Rules | None = None,
) -> GeneratePaletteOutput:
    """Override one step's color and rescore it."""
    collector = FaultCollector()
    thresholds = thresholds_from_rules(rules) if rules is not None else WcagThresholds()
    steps = override_step(
        inp.steps, inp.index, inp.color, faults=collector, thresholds=thresholds
    )
    return GeneratePaletteOutput(steps=steps, faults=collector.faults)


def run_regenerate(
    inp: RegeneratePaletteInput,
    *,
    rules: Rules | None = None,
) -> RegeneratePaletteOutput:
    """Regenerate a stored palette after its shape configuration changed."""
    collector = FaultCollector()
    thresholds = thresholds_from_rules(rules) if rules is not None else WcagThresholds()
    palette = regenerate_palette(
        inp.palette,
        inp.config,
        inp.use_lightness,
        faults=collector,
        thresholds=thresholds,
        **_generation_limits(rules),
    )
    return RegeneratePaletteOutput(palette=palette, faults=collector.faults)


def run_check_accessibility(
    inp: CheckAccessibilityInput,
    *,
    rules: Rules | None = None,
) -> CheckAccessibilityOutput:
    """Score a color against white and black."""
    t = thresholds_from_rules(rules) if rules is not None else WcagThresholds()
    return CheckAccessibilityOutput(
        accessibility=check_accessibility(inp.color, t.aa_normal, t.aa_large, t.aaa)
    )


def run_convert(inp: ConvertColorInput) -> ConvertColorOutput:
    """Convert a color between formats; unconvertible input is echoed back."""
    result = convert_color(inp.color, inp.from_format, inp.to_format)
    converted = parse_color(inp.color) is not None and "pantone" not in (
        inp.from_format,
        inp.to_format,
    )
    return ConvertColorOutput(color=result, converted=converted)


def run_gamut_check(
    inp: GamutCheckInput,
    *,
    rules: Rules | None = None,
) -> GamutCheckOutput:
    """Heuristic out-of-gamut flag plus the exact gamut test."""
    srgb, p3 = SRGB_CHROMA_THRESHOLD, DISPLAY_P3_CHROMA_THRESHOLD
    if rules is not None:
        srgb = rules.gamut.srgb_chroma_threshold
        p3 = rules.gamut.display_p3_chroma_threshold
    parsed = parse_color(inp.color)
    return GamutCheckOutput(
        likely_out_of_gamut=is_out_of_gamut(inp.color, inp.gamut, srgb, p3),
        in_gamut=in_gamut(parsed, inp.gamut) if parsed is not None else None,
    )


def run(
    inp: GeneratePaletteInput
    | OverrideStepInput
    | RegeneratePaletteInput
    | CheckAccessibilityInput
    | ConvertColorInput
    | GamutCheckInput,
    *,
    rules: Rules | None = None,
) -> (
    GeneratePaletteOutput
    | RegeneratePaletteOutput
    | CheckAccessibilityOutput
    | ConvertColorOutput
    | GamutCheckOutput
):
    """
    Main entry point for the palette component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, GeneratePaletteInput):
        return run_generate(inp, rules=rules)
    elif isinstance(inp, OverrideStepInput):
        return run_override(inp, rules=rules)
    elif isinstance(inp, RegeneratePaletteInput):
        return run_regenerate(inp, rules=rules)
    elif isinstance(inp, CheckAccessibilityInput):
        return run_check_accessibility(inp, rules=rules)
    elif isinstance(inp, ConvertColorInput):
        return run_convert(inp)
    elif isinstance(inp, GamutCheckInput):
        return run_gamut_check(inp, rules=rules)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
