"""
Typescale component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.domain.entities import (
    DistanceScaleParams,
    ScaleConfig,
    ScaleValue,
    TypeStyle,
    TypographyPlatform,
)


@dataclass(frozen=True)
class RatioPreset:
    """A named musical-interval ratio."""

    name: str
    ratio: float


@dataclass(frozen=True)
class ResolvedTypeStyle:
    """A type style with its size looked up from the current scale."""

    style: TypeStyle
    size: int | None
    ratio: float | None

    @property
    def resolved(self) -> bool:
        return self.size is not None


@dataclass(frozen=True)
class ScaleInput:
    """Input for a modular scale."""

    scale: ScaleConfig = field(default_factory=ScaleConfig)


@dataclass(frozen=True)
class ScaleOutput:
    values: list[ScaleValue]


@dataclass(frozen=True)
class DistanceSizeInput:
    """Input for a distance-based base size."""

    params: DistanceScaleParams = field(default_factory=DistanceScaleParams)


@dataclass(frozen=True)
class DistanceSizeOutput:
    pixel_size: int


@dataclass(frozen=True)
class PlatformScaleInput:
    """Input for a platform's scale and resolved styles."""

    platform: TypographyPlatform


@dataclass(frozen=True)
class PlatformScaleOutput:
    base_size: float
    values: list[ScaleValue]
    styles: list[ResolvedTypeStyle] = field(default_factory=list)
