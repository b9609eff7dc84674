"""
Palette component - color palette engine and accessibility scoring.

Pure functions: base color + shape configuration in, ordered accessible
color steps out.
"""

from ._color import (
    AA_LARGE,
    AA_NORMAL,
    AAA,
    DEGRADED_ACCESSIBILITY,
    DISPLAY_P3_CHROMA_THRESHOLD,
    SRGB_CHROMA_THRESHOLD,
    Oklch,
    calculate_contrast,
    check_accessibility,
    convert_color,
    convert_to_all_formats,
    in_gamut,
    is_out_of_gamut,
    oklch_to_values,
    parse_color,
    relative_luminance,
    wcag_levels,
)
from ._impl import (
    DEFAULT_FALLBACK_GRAY,
    EASINGS,
    MAX_STEPS,
    MIN_STEPS,
    FaultCollector,
    chroma_values,
    clamp_num_steps,
    fallback_palette,
    generate_palette,
    lightness_values,
    override_step,
    regenerate_palette,
)
from .component import (
    palette_config_from_rules,
    run,
    run_check_accessibility,
    run_convert,
    run_gamut_check,
    run_generate,
    run_override,
    run_regenerate,
    thresholds_from_rules,
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

__all__ = [
    # Entry points
    "run",
    "run_generate",
    "run_override",
    "run_regenerate",
    "run_check_accessibility",
    "run_convert",
    "run_gamut_check",
    "palette_config_from_rules",
    "thresholds_from_rules",
    # Input/output models
    "CheckAccessibilityInput",
    "CheckAccessibilityOutput",
    "ConvertColorInput",
    "ConvertColorOutput",
    "GamutCheckInput",
    "GamutCheckOutput",
    "GeneratePaletteInput",
    "GeneratePaletteOutput",
    "OverrideStepInput",
    "PaletteFault",
    "RegeneratePaletteInput",
    "RegeneratePaletteOutput",
    "WcagThresholds",
    # Ports
    "FaultReporterPort",
    # Engine
    "DEFAULT_FALLBACK_GRAY",
    "EASINGS",
    "MAX_STEPS",
    "MIN_STEPS",
    "FaultCollector",
    "chroma_values",
    "clamp_num_steps",
    "fallback_palette",
    "generate_palette",
    "lightness_values",
    "override_step",
    "regenerate_palette",
    # Color math
    "AA_LARGE",
    "AA_NORMAL",
    "AAA",
    "DEGRADED_ACCESSIBILITY",
    "DISPLAY_P3_CHROMA_THRESHOLD",
    "SRGB_CHROMA_THRESHOLD",
    "Oklch",
    "calculate_contrast",
    "check_accessibility",
    "convert_color",
    "convert_to_all_formats",
    "in_gamut",
    "is_out_of_gamut",
    "oklch_to_values",
    "parse_color",
    "relative_luminance",
    "wcag_levels",
]
