"""
Palette endpoints.

Endpoints:
- POST /api/palettes/generate: base color + options -> steps
- POST /api/palettes/override: replace one step's color
- POST /api/palettes/regenerate: regenerate a stored palette
- POST /api/palettes/swatch.png: PNG preview of a generated palette

Malformed colors and out-of-range step counts are not request errors:
the response is 200 with a fallback or clamped palette and a faults list.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from src.adapters.render.mpl_renderer import MatplotlibSwatchRenderer
from src.api.deps import get_renderer, get_rules
from src.api.schemas import (
    FaultModel,
    GeneratePaletteRequest,
    OverrideStepRequest,
    PaletteStepsResponse,
    RegeneratePaletteRequest,
    RegeneratePaletteResponse,
)
from src.components.palette import (
    GeneratePaletteInput,
    GeneratePaletteOutput,
    OverrideStepInput,
    RegeneratePaletteInput,
    palette_config_from_rules,
    run_generate,
    run_override,
    run_regenerate,
)
from src.rules.models import Rules

router = APIRouter()


def _generate(request: GeneratePaletteRequest, rules: Rules) -> GeneratePaletteOutput:
    options = request.options or palette_config_from_rules(rules)
    num_steps = request.num_steps if request.num_steps is not None else options.num_steps
    return run_generate(
        GeneratePaletteInput(
            base_color=request.base_color,
            num_steps=num_steps,
            use_lightness=request.use_lightness,
            options=options,
        ),
        rules=rules,
    )


def _steps_response(result: GeneratePaletteOutput) -> PaletteStepsResponse:
    return PaletteStepsResponse(
        steps=result.steps,
        faults=[FaultModel.from_fault(f) for f in result.faults],
        is_fallback=result.is_fallback,
    )


@router.post("/generate", response_model=PaletteStepsResponse, summary="Generate palette")
def generate_palette_endpoint(
    request: GeneratePaletteRequest,
    rules: Rules = Depends(get_rules),
) -> PaletteStepsResponse:
    """Generate an ordered, accessibility-scored palette from a base color."""
    return _steps_response(_generate(request, rules))


@router.post("/override", response_model=PaletteStepsResponse, summary="Override one step")
def override_step_endpoint(
    request: OverrideStepRequest,
    rules: Rules = Depends(get_rules),
) -> PaletteStepsResponse:
    result = run_override(
        OverrideStepInput(steps=request.steps, index=request.index, color=request.color),
        rules=rules,
    )
    return _steps_response(result)


@router.post(
    "/regenerate", response_model=RegeneratePaletteResponse, summary="Regenerate palette"
)
def regenerate_palette_endpoint(
    request: RegeneratePaletteRequest,
    rules: Rules = Depends(get_rules),
) -> RegeneratePaletteResponse:
    result = run_regenerate(
        RegeneratePaletteInput(
            palette=request.palette, config=request.config, use_lightness=request.use_lightness
        ),
        rules=rules,
    )
    return RegeneratePaletteResponse(
        palette=result.palette,
        faults=[FaultModel.from_fault(f) for f in result.faults],
    )


@router.post(
    "/swatch.png",
    response_class=Response,
    responses={200: {"content": {"image/png": {}}}},
    summary="Palette swatch preview",
)
def palette_swatch_endpoint(
    request: GeneratePaletteRequest,
    rules: Rules = Depends(get_rules),
    renderer: MatplotlibSwatchRenderer = Depends(get_renderer),
) -> Response:
    result = _generate(request, rules)
    png = renderer.render_palette(result.steps)
    return Response(content=png, media_type="image/png")
