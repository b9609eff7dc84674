import logging
import os
import sys

from src.rules.models import Rules

logger = logging.getLogger(__name__)

ABSOLUTE_MIN_STEPS = 3
ABSOLUTE_MAX_STEPS = 25


def rules_errors(rules: Rules) -> list[str]:
    """
    Collect every inconsistency in the loaded rules.
    Returns an empty list when the configuration is usable.
    """
    errors: list[str] = []
    palette = rules.palette

    # 1. Step bounds
    if not ABSOLUTE_MIN_STEPS <= palette.min_steps <= palette.max_steps <= ABSOLUTE_MAX_STEPS:
        errors.append(
            f"palette step bounds [{palette.min_steps}, {palette.max_steps}] must lie within "
            f"[{ABSOLUTE_MIN_STEPS}, {ABSOLUTE_MAX_STEPS}] and be ordered"
        )
    if not palette.min_steps <= palette.default_num_steps <= palette.max_steps:
        errors.append(f"palette.default_num_steps {palette.default_num_steps} outside step bounds")

    # 2. Ranges
    lo, hi = palette.lightness_range
    if not 0.0 <= lo <= hi <= 1.0:
        errors.append(f"palette.lightness_range {palette.lightness_range} not ordered in [0, 1]")
    lo, hi = palette.chroma_range
    if not 0.0 <= lo <= hi:
        errors.append(f"palette.chroma_range {palette.chroma_range} must be ordered, non-negative")

    # 3. Thresholds
    acc = rules.accessibility
    if min(acc.aa_normal, acc.aa_large, acc.aaa) <= 0:
        errors.append("accessibility thresholds must be positive")
    gamut = rules.gamut
    if min(gamut.srgb_chroma_threshold, gamut.display_p3_chroma_threshold) <= 0:
        errors.append("gamut chroma thresholds must be positive")

    # 4. Type scale
    ts = rules.typescale
    if ts.min_ratio <= 1.0:
        errors.append("typescale.min_ratio must be greater than 1")
    if ts.max_ratio < ts.min_ratio:
        errors.append("typescale.max_ratio must be at least min_ratio")
    if ts.max_font_size < ts.default_scale.base_size:
        errors.append("typescale.max_font_size must be at least the default base size")
    if ts.min_visual_acuity <= 0:
        errors.append("typescale.min_visual_acuity must be positive")
    if ts.default_scale.base_size <= 0:
        errors.append("typescale.default_scale.base_size must be positive")

    # 5. Required env
    missing = [env_var for env_var in rules.ops.required_env if env_var not in os.environ]
    if missing:
        errors.append(f"Missing required environment variables: {', '.join(missing)}")

    return errors


def validate_rules(rules: Rules) -> None:
    """
    Validate configuration before startup.
    Exits the process on any inconsistency.
    """
    errors = rules_errors(rules)
    if errors:
        for error in errors:
            logger.critical("Invalid rules: %s", error)
        print(f"CRITICAL: Invalid rules: {'; '.join(errors)}", file=sys.stderr)
        sys.exit(1)

    logger.info("Configuration validated (rules %s)", rules.project.rules_version)
