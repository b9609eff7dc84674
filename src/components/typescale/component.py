"""
Typescale component - modular and distance-based type scales.

Entry points take factor tables and limits from the loaded rules when given,
falling back to the built-in defaults otherwise.
"""

from __future__ import annotations

from src.domain.entities import TypographyPlatform
from src.rules.models import Rules

from ._impl import (
    LIGHTING_FACTORS,
    MAX_FONT_SIZE,
    MAX_RATIO,
    MIN_RATIO,
    MIN_VISUAL_ACUITY,
    RATIO_PRESETS,
    TEXT_TYPE_FACTORS,
    calculate_distance_based_size,
    default_type_styles,
    get_scale_values,
    platform_base_size,
    resolve_type_styles,
)
from .models import (
    DistanceSizeInput,
    DistanceSizeOutput,
    PlatformScaleInput,
    PlatformScaleOutput,
    RatioPreset,
    ScaleInput,
    ScaleOutput,
)


def _factors(rules: Rules | None) -> dict:
    if rules is None:
        return {
            "lighting_factors": LIGHTING_FACTORS,
            "text_type_factors": TEXT_TYPE_FACTORS,
            "min_visual_acuity": MIN_VISUAL_ACUITY,
            "max_font_size": MAX_FONT_SIZE,
        }
    ts = rules.typescale
    return {
        "lighting_factors": ts.lighting_factors,
        "text_type_factors": ts.text_type_factors,
        "min_visual_acuity": ts.min_visual_acuity,
        "max_font_size": ts.max_font_size,
    }


def _scale_limits(rules: Rules | None) -> dict:
    if rules is None:
        return {"min_ratio": MIN_RATIO, "max_ratio": MAX_RATIO, "max_font_size": MAX_FONT_SIZE}
    ts = rules.typescale
    return {
        "min_ratio": ts.min_ratio,
        "max_ratio": ts.max_ratio,
        "max_font_size": ts.max_font_size,
    }


def ratio_presets(rules: Rules | None = None) -> list[RatioPreset]:
    if rules is None:
        return list(RATIO_PRESETS)
    return [RatioPreset(name=p.name, ratio=p.ratio) for p in rules.typescale.ratio_presets]


def platforms_from_rules(rules: Rules) -> dict[str, TypographyPlatform]:
    """Build the configured platform presets, each with the default styles."""
    return {
        platform_id: TypographyPlatform(
            id=platform_id,
            name=rule.name,
            scale_method=rule.scale_method,
            scale=rules.typescale.default_scale,
            distance_scale=rule.distance_scale,
            type_styles=default_type_styles(),
        )
        for platform_id, rule in rules.platforms.items()
    }


def run_scale(inp: ScaleInput, *, rules: Rules | None = None) -> ScaleOutput:
    """Compute a modular scale."""
    s = inp.scale
    return ScaleOutput(
        values=get_scale_values(
            s.base_size, s.ratio, s.steps_up, s.steps_down, **_scale_limits(rules)
        )
    )


def run_distance(inp: DistanceSizeInput, *, rules: Rules | None = None) -> DistanceSizeOutput:
    """Compute a base size from viewing conditions."""
    p = inp.params
    size = calculate_distance_based_size(
        p.viewing_distance,
        p.visual_acuity,
        p.mean_length_ratio,
        p.text_type,
        p.lighting,
        p.ppi,
        **_factors(rules),
    )
    return DistanceSizeOutput(pixel_size=size)


def run_platform_scale(
    inp: PlatformScaleInput,
    *,
    rules: Rules | None = None,
) -> PlatformScaleOutput:
    """
    Compute a platform's scale and resolve its type styles against it.

    Distance platforms derive their base size from viewing conditions;
    modular platforms use the configured base size.
    """
    platform = inp.platform
    base_size = platform_base_size(platform, **_factors(rules))
    s = platform.scale
    values = get_scale_values(
        base_size, s.ratio, s.steps_up, s.steps_down, **_scale_limits(rules)
    )
    return PlatformScaleOutput(
        base_size=base_size,
        values=values,
        styles=resolve_type_styles(platform.type_styles, values),
    )


def run(
    inp: ScaleInput | DistanceSizeInput | PlatformScaleInput,
    *,
    rules: Rules | None = None,
) -> ScaleOutput | DistanceSizeOutput | PlatformScaleOutput:
    """
    Main entry point for the typescale component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, ScaleInput):
        return run_scale(inp, rules=rules)
    elif isinstance(inp, DistanceSizeInput):
        return run_distance(inp, rules=rules)
    elif isinstance(inp, PlatformScaleInput):
        return run_platform_scale(inp, rules=rules)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
