"""
Palette component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.domain.entities import (
    AccessibilityResult,
    ColorFormat,
    ColorPalette,
    ColorStep,
    ColorValues,
    Gamut,
    PaletteConfig,
)


@dataclass(frozen=True)
class WcagThresholds:
    """Minimum contrast ratios for each WCAG level."""

    aa_normal: float = 4.5
    aa_large: float = 3.0
    aaa: float = 7.0


@dataclass(frozen=True)
class PaletteFault:
    """A degradation the engine recovered from instead of raising."""

    code: str
    message: str
    field: str | None = None


@dataclass(frozen=True)
class GeneratePaletteInput:
    """Input for generating a palette."""

    base_color: ColorValues | str
    num_steps: int
    use_lightness: bool = True
    options: PaletteConfig = field(default_factory=PaletteConfig)


@dataclass(frozen=True)
class GeneratePaletteOutput:
    """Generated steps plus any faults reported along the way."""

    steps: list[ColorStep]
    faults: list[PaletteFault] = field(default_factory=list)

    @property
    def is_fallback(self) -> bool:
        return any(f.code == "invalid_base_color" for f in self.faults)


@dataclass(frozen=True)
class OverrideStepInput:
    """Input for replacing one step's color."""

    steps: list[ColorStep]
    index: int
    color: str


@dataclass(frozen=True)
class RegeneratePaletteInput:
    """Input for regenerating a stored palette."""

    palette: ColorPalette
    config: PaletteConfig
    use_lightness: bool = True


@dataclass(frozen=True)
class RegeneratePaletteOutput:
    palette: ColorPalette
    faults: list[PaletteFault] = field(default_factory=list)


@dataclass(frozen=True)
class CheckAccessibilityInput:
    color: str


@dataclass(frozen=True)
class CheckAccessibilityOutput:
    accessibility: AccessibilityResult


@dataclass(frozen=True)
class ConvertColorInput:
    color: str
    from_format: ColorFormat
    to_format: ColorFormat


@dataclass(frozen=True)
class ConvertColorOutput:
    color: str
    converted: bool


@dataclass(frozen=True)
class GamutCheckInput:
    color: str
    gamut: Gamut = "srgb"


@dataclass(frozen=True)
class GamutCheckOutput:
    """Heuristic flag for the UI indicator plus the exact answer."""

    likely_out_of_gamut: bool
    in_gamut: bool | None  # None when the color could not be parsed
