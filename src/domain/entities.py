from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

# --- Enums / Literals ---
ColorFormat = Literal["oklch", "rgb", "hex", "cmyk", "pantone"]
Gamut = Literal["srgb", "display-p3", "unlimited"]
LightnessPreset = Literal["linear", "easeIn", "easeOut", "s-curve", "custom"]
ChromaPreset = Literal[
    "constant", "increase", "decrease", "linear", "easeIn", "easeOut", "s-curve", "custom"
]
ReadableOn = Literal["white", "black"]
ScaleMethod = Literal["modular", "distance"]
TextType = Literal["continuous", "isolated"]
Lighting = Literal["good", "moderate", "poor"]

# --- Color ---

class ColorValues(BaseModel):
    """One color expressed in every supported format. Hex is canonical."""

    model_config = ConfigDict(frozen=True)

    oklch: str
    rgb: str
    hex: str
    cmyk: str | None = None
    pantone: str | None = None

class AccessibilityResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    contrast_with_white: float
    contrast_with_black: float
    wcag_aa_normal: bool
    wcag_aa_large: bool
    wcag_aaa: bool
    readable_on: ReadableOn

class ColorStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    values: ColorValues
    accessibility: AccessibilityResult
    is_base_color: bool = False

class PaletteConfig(BaseModel):
    """Generation parameters shared across a brand's palettes."""

    model_config = ConfigDict(frozen=True)

    num_steps: int = 9
    lightness_range: tuple[float, float] = (0.0, 1.0)
    chroma_range: tuple[float, float] = (0.0, 0.4)
    hue_shift: float = 0.0
    lightness_preset: LightnessPreset = "linear"
    chroma_preset: ChromaPreset = "constant"
    custom_lightness_values: tuple[float, ...] = ()
    custom_chroma_values: tuple[float, ...] = ()
    lock_base_color: bool = True

class ColorPalette(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    brand_id: str
    name: str
    description: str = ""
    base_color: ColorValues
    steps: list[ColorStep] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    is_core: bool = True  # primary brand palette vs accent palette

# --- Typography ---

class ScaleConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_size: float = 16
    ratio: float = 1.25
    steps_up: int = 6
    steps_down: int = 2

class DistanceScaleParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    viewing_distance: float = 50  # cm
    visual_acuity: float = 1.0
    mean_length_ratio: float = 1.0
    text_type: TextType = "continuous"
    lighting: Lighting = "good"
    ppi: float = 96

class ScaleValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str  # "f-2" .. "f0" .. "f6"
    step: int
    size: int
    ratio: float
    rem: float

class TypeStyle(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    scale_step: str
    font_weight: int = 400
    line_height: float = 1.5
    letter_spacing: float = 0.0
    optical_size: float = 16
    font_family: str | None = None

class TypographyPlatform(BaseModel):
    id: str
    name: str
    scale_method: ScaleMethod = "modular"
    scale: ScaleConfig = Field(default_factory=ScaleConfig)
    distance_scale: DistanceScaleParams = Field(default_factory=DistanceScaleParams)
    type_styles: list[TypeStyle] = Field(default_factory=list)
