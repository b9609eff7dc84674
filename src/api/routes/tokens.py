"""
Design-token export endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from src.api.deps import get_rules
from src.api.schemas import TokensResponse
from src.components.tokens import (
    COLOR_FORMATS,
    TYPOGRAPHY_FORMATS,
    ColorTokensInput,
    TypographyTokensInput,
    run_color_tokens,
    run_typography_tokens,
)
from src.components.typescale import (
    PlatformScaleInput,
    default_type_styles,
    platforms_from_rules,
    run_platform_scale,
)
from src.domain.entities import ColorPalette, ScaleConfig, TypeStyle, TypographyPlatform
from src.rules.models import Rules

router = APIRouter()


# --- Request Models ---


class TypographyTokensRequest(BaseModel):
    """Either a platform preset id, or an explicit scale and styles."""

    platform_id: str | None = None
    scale: ScaleConfig | None = None
    styles: list[TypeStyle] | None = None
    formats: list[str] | None = None


class ColorTokensRequest(BaseModel):
    palettes: list[ColorPalette]
    formats: list[str] | None = None


def _unsupported(error: ValueError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(error))


# --- Endpoints ---


@router.post("/typography", response_model=TokensResponse)
def typography_tokens_endpoint(
    request: TypographyTokensRequest,
    rules: Rules = Depends(get_rules),
) -> TokensResponse:
    if request.platform_id is not None:
        platform = platforms_from_rules(rules).get(request.platform_id)
        if platform is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Unknown platform: {request.platform_id}",
            )
        if request.styles is not None:
            platform = platform.model_copy(update={"type_styles": request.styles})
    else:
        platform = TypographyPlatform(
            id="custom",
            name="Custom",
            scale=request.scale or rules.typescale.default_scale,
            type_styles=request.styles if request.styles is not None else default_type_styles(),
        )

    resolved = run_platform_scale(PlatformScaleInput(platform=platform), rules=rules).styles
    formats = tuple(request.formats) if request.formats else TYPOGRAPHY_FORMATS
    try:
        result = run_typography_tokens(
            TypographyTokensInput(styles=resolved, formats=formats)  # type: ignore[arg-type]
        )
    except ValueError as e:
        raise _unsupported(e) from e
    return TokensResponse(files=result.files, skipped=result.skipped)


@router.post("/colors", response_model=TokensResponse)
def color_tokens_endpoint(request: ColorTokensRequest) -> TokensResponse:
    formats = tuple(request.formats) if request.formats else COLOR_FORMATS
    try:
        result = run_color_tokens(
            ColorTokensInput(palettes=request.palettes, formats=formats)  # type: ignore[arg-type]
        )
    except ValueError as e:
        raise _unsupported(e) from e
    return TokensResponse(files=result.files)
