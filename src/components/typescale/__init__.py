"""
Typescale component - modular and distance-based type scale calculator.
"""

from ._impl import (
    DEFAULT_BASE_SIZE,
    LIGHTING_FACTORS,
    MAX_FONT_SIZE,
    MAX_RATIO,
    MAX_SCALE_STEPS,
    MIN_RATIO,
    MIN_VISUAL_ACUITY,
    RATIO_PRESETS,
    TEXT_TYPE_FACTORS,
    add_type_style,
    build_platform_scale,
    calculate_distance_based_size,
    default_type_styles,
    delete_type_style,
    duplicate_type_style,
    get_scale_values,
    platform_base_size,
    reorder_type_styles,
    resolve_type_styles,
    round_half_up,
    scale_label,
)
from .component import (
    platforms_from_rules,
    ratio_presets,
    run,
    run_distance,
    run_platform_scale,
    run_scale,
)
from .models import (
    DistanceSizeInput,
    DistanceSizeOutput,
    PlatformScaleInput,
    PlatformScaleOutput,
    RatioPreset,
    ResolvedTypeStyle,
    ScaleInput,
    ScaleOutput,
)

__all__ = [
    # Entry points
    "run",
    "run_scale",
    "run_distance",
    "run_platform_scale",
    "platforms_from_rules",
    "ratio_presets",
    # Input/output models
    "DistanceSizeInput",
    "DistanceSizeOutput",
    "PlatformScaleInput",
    "PlatformScaleOutput",
    "RatioPreset",
    "ResolvedTypeStyle",
    "ScaleInput",
    "ScaleOutput",
    # Calculator
    "DEFAULT_BASE_SIZE",
    "LIGHTING_FACTORS",
    "MAX_FONT_SIZE",
    "MAX_RATIO",
    "MAX_SCALE_STEPS",
    "MIN_RATIO",
    "MIN_VISUAL_ACUITY",
    "RATIO_PRESETS",
    "TEXT_TYPE_FACTORS",
    "build_platform_scale",
    "calculate_distance_based_size",
    "get_scale_values",
    "platform_base_size",
    "round_half_up",
    "scale_label",
    # Type styles
    "add_type_style",
    "default_type_styles",
    "delete_type_style",
    "duplicate_type_style",
    "reorder_type_styles",
    "resolve_type_styles",
]
