"""
Typography endpoints: modular scales, distance sizing, platform presets.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel

from src.adapters.render.mpl_renderer import MatplotlibSwatchRenderer
from src.api.deps import get_renderer, get_rules
from src.api.schemas import PlatformScaleResponse, ResolvedStyleModel, ScaleResponse
from src.components.typescale import (
    DistanceSizeInput,
    PlatformScaleInput,
    ScaleInput,
    platforms_from_rules,
    ratio_presets,
    run_distance,
    run_platform_scale,
    run_scale,
)
from src.domain.entities import DistanceScaleParams, ScaleConfig, ScaleMethod
from src.rules.models import Rules

router = APIRouter()


# --- Response Models ---


class DistanceResponse(BaseModel):
    pixel_size: int


class RatioPresetModel(BaseModel):
    name: str
    ratio: float


class PlatformSummary(BaseModel):
    id: str
    name: str
    scale_method: ScaleMethod


# --- Endpoints ---


@router.post("/scale", response_model=ScaleResponse, summary="Modular scale")
def scale_endpoint(
    scale: ScaleConfig,
    rules: Rules = Depends(get_rules),
) -> ScaleResponse:
    result = run_scale(ScaleInput(scale=scale), rules=rules)
    return ScaleResponse(base_size=scale.base_size, values=result.values)


@router.post(
    "/scale.png",
    response_class=Response,
    responses={200: {"content": {"image/png": {}}}},
    summary="Type scale specimen",
)
def scale_specimen_endpoint(
    scale: ScaleConfig,
    rules: Rules = Depends(get_rules),
    renderer: MatplotlibSwatchRenderer = Depends(get_renderer),
) -> Response:
    values = run_scale(ScaleInput(scale=scale), rules=rules).values
    return Response(content=renderer.render_scale(values), media_type="image/png")


@router.post("/distance", response_model=DistanceResponse, summary="Distance-based size")
def distance_endpoint(
    params: DistanceScaleParams,
    rules: Rules = Depends(get_rules),
) -> DistanceResponse:
    """Base font size for the given viewing conditions."""
    result = run_distance(DistanceSizeInput(params=params), rules=rules)
    return DistanceResponse(pixel_size=result.pixel_size)


@router.get("/ratios", response_model=list[RatioPresetModel])
def ratios_endpoint(rules: Rules = Depends(get_rules)) -> list[RatioPresetModel]:
    return [RatioPresetModel(name=p.name, ratio=p.ratio) for p in ratio_presets(rules)]


@router.get("/platforms", response_model=list[PlatformSummary])
def platforms_endpoint(rules: Rules = Depends(get_rules)) -> list[PlatformSummary]:
    return [
        PlatformSummary(id=p.id, name=p.name, scale_method=p.scale_method)
        for p in platforms_from_rules(rules).values()
    ]


@router.get("/platforms/{platform_id}/scale", response_model=PlatformScaleResponse)
def platform_scale_endpoint(
    platform_id: str,
    rules: Rules = Depends(get_rules),
) -> PlatformScaleResponse:
    """Scale and resolved default type styles for a platform preset."""
    platform = platforms_from_rules(rules).get(platform_id)
    if platform is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown platform: {platform_id}",
        )

    result = run_platform_scale(PlatformScaleInput(platform=platform), rules=rules)
    return PlatformScaleResponse(
        platform_id=platform.id,
        name=platform.name,
        scale_method=platform.scale_method,
        base_size=result.base_size,
        values=result.values,
        styles=[
            ResolvedStyleModel(style=r.style, size=r.size, ratio=r.ratio) for r in result.styles
        ],
    )
