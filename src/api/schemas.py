from pydantic import BaseModel, Field

from src.components.palette import PaletteFault
from src.domain.entities import (
    ColorPalette,
    ColorStep,
    ColorValues,
    PaletteConfig,
    ScaleValue,
    TypeStyle,
)


# --- Faults ---
class FaultModel(BaseModel):
    code: str
    message: str
    field: str | None = None

    @classmethod
    def from_fault(cls, fault: PaletteFault) -> "FaultModel":
        return cls(code=fault.code, message=fault.message, field=fault.field)


# --- Palettes ---
class GeneratePaletteRequest(BaseModel):
    base_color: str | ColorValues
    num_steps: int | None = None  # rules default when omitted
    use_lightness: bool = True
    options: PaletteConfig | None = None


class PaletteStepsResponse(BaseModel):
    steps: list[ColorStep]
    faults: list[FaultModel] = []
    is_fallback: bool = False


class OverrideStepRequest(BaseModel):
    steps: list[ColorStep]
    index: int
    color: str


class RegeneratePaletteRequest(BaseModel):
    palette: ColorPalette
    config: PaletteConfig
    use_lightness: bool = True


class RegeneratePaletteResponse(BaseModel):
    palette: ColorPalette
    faults: list[FaultModel] = []


# --- Typography ---
class ScaleResponse(BaseModel):
    base_size: float
    values: list[ScaleValue]


class ResolvedStyleModel(BaseModel):
    style: TypeStyle
    size: int | None = Field(None, description="Pixel size; null when the step is not on the scale")
    ratio: float | None = None


class PlatformScaleResponse(ScaleResponse):
    platform_id: str
    name: str
    scale_method: str
    styles: list[ResolvedStyleModel] = []


# --- Tokens ---
class TokensResponse(BaseModel):
    files: dict[str, str]
    skipped: list[str] = []
