"""
Color endpoints: accessibility scoring, conversion, contrast, gamut checks.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from src.api.deps import get_rules
from src.components.palette import (
    CheckAccessibilityInput,
    ConvertColorInput,
    GamutCheckInput,
    calculate_contrast,
    run_check_accessibility,
    run_convert,
    run_gamut_check,
    thresholds_from_rules,
    wcag_levels,
)
from src.domain.entities import AccessibilityResult, ColorFormat, Gamut
from src.rules.models import Rules

router = APIRouter()


# --- Response Models ---


class ConvertResponse(BaseModel):
    color: str
    from_format: ColorFormat
    to_format: ColorFormat
    converted: bool


class ContrastResponse(BaseModel):
    ratio: float
    wcag_aa_normal: bool
    wcag_aa_large: bool
    wcag_aaa: bool


class GamutResponse(BaseModel):
    color: str
    gamut: Gamut
    likely_out_of_gamut: bool
    in_gamut: bool | None


# --- Endpoints ---


@router.get("/accessibility", response_model=AccessibilityResult)
def accessibility_endpoint(
    color: str = Query(..., description="Any supported color string"),
    rules: Rules = Depends(get_rules),
) -> AccessibilityResult:
    """Contrast against white and black with WCAG pass flags."""
    return run_check_accessibility(CheckAccessibilityInput(color=color), rules=rules).accessibility


@router.get("/convert", response_model=ConvertResponse)
def convert_endpoint(
    color: str = Query(...),
    from_format: ColorFormat = Query(...),
    to_format: ColorFormat = Query(...),
) -> ConvertResponse:
    result = run_convert(
        ConvertColorInput(color=color, from_format=from_format, to_format=to_format)
    )
    return ConvertResponse(
        color=result.color,
        from_format=from_format,
        to_format=to_format,
        converted=result.converted,
    )


@router.get("/contrast", response_model=ContrastResponse)
def contrast_endpoint(
    foreground: str = Query(...),
    background: str = Query(...),
    rules: Rules = Depends(get_rules),
) -> ContrastResponse:
    """WCAG contrast between two arbitrary colors."""
    t = thresholds_from_rules(rules)
    ratio = calculate_contrast(foreground, background)
    normal, large, enhanced = wcag_levels(ratio, t.aa_normal, t.aa_large, t.aaa)
    return ContrastResponse(
        ratio=ratio, wcag_aa_normal=normal, wcag_aa_large=large, wcag_aaa=enhanced
    )


@router.get("/gamut", response_model=GamutResponse)
def gamut_endpoint(
    color: str = Query(...),
    gamut: Gamut = Query("srgb"),
    rules: Rules = Depends(get_rules),
) -> GamutResponse:
    result = run_gamut_check(GamutCheckInput(color=color, gamut=gamut), rules=rules)
    return GamutResponse(
        color=color,
        gamut=gamut,
        likely_out_of_gamut=result.likely_out_of_gamut,
        in_gamut=result.in_gamut,
    )
