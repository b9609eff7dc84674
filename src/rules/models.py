from pydantic import BaseModel, Field

from src.domain.entities import (
    ChromaPreset,
    DistanceScaleParams,
    LightnessPreset,
    ScaleConfig,
    ScaleMethod,
)


class ProjectRules(BaseModel):
    slug: str
    rules_version: str

class PaletteRules(BaseModel):
    default_base_color: str
    fallback_gray: str
    default_num_steps: int
    min_steps: int
    max_steps: int
    lightness_range: tuple[float, float]
    chroma_range: tuple[float, float]
    hue_shift: float = 0.0
    lightness_preset: LightnessPreset = "linear"
    chroma_preset: ChromaPreset = "constant"
    lock_base_color: bool = True

class AccessibilityRules(BaseModel):
    aa_normal: float
    aa_large: float
    aaa: float

class GamutRules(BaseModel):
    srgb_chroma_threshold: float
    display_p3_chroma_threshold: float

class RatioPresetRule(BaseModel):
    name: str
    ratio: float

class TypeScaleRules(BaseModel):
    default_scale: ScaleConfig
    min_visual_acuity: float
    min_ratio: float
    max_ratio: float = 10.0
    max_font_size: float = 100_000.0
    ratio_presets: list[RatioPresetRule]
    lighting_factors: dict[str, float]
    text_type_factors: dict[str, float]

class PlatformRule(BaseModel):
    name: str
    scale_method: ScaleMethod
    distance_scale: DistanceScaleParams

class OpsRules(BaseModel):
    required_env: list[str] = Field(default_factory=list)

class Rules(BaseModel):
    project: ProjectRules
    palette: PaletteRules
    accessibility: AccessibilityRules
    gamut: GamutRules
    typescale: TypeScaleRules
    platforms: dict[str, PlatformRule]
    ops: OpsRules
