"""
Tokens component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from src.components.typescale.models import ResolvedTypeStyle
from src.domain.entities import ColorPalette

TypographyFormat = Literal["css", "scss", "tailwind", "javascript", "ios", "android", "web"]
ColorTokenFormat = Literal["css", "scss", "javascript", "web"]

TYPOGRAPHY_FORMATS: tuple[TypographyFormat, ...] = (
    "css", "scss", "tailwind", "javascript", "ios", "android", "web",
)
COLOR_FORMATS: tuple[ColorTokenFormat, ...] = ("css", "scss", "javascript", "web")


@dataclass(frozen=True)
class TypographyToken:
    """A resolved type style flattened to exportable strings."""

    name: str
    font_size: str
    line_height: str
    font_weight: int
    letter_spacing: str
    font_family: str | None = None
    description: str = ""


@dataclass(frozen=True)
class ColorToken:
    group: str
    name: str
    hex: str
    oklch: str


@dataclass(frozen=True)
class TypographyTokensInput:
    styles: list[ResolvedTypeStyle]
    formats: tuple[TypographyFormat, ...] = TYPOGRAPHY_FORMATS


@dataclass(frozen=True)
class ColorTokensInput:
    palettes: list[ColorPalette]
    formats: tuple[ColorTokenFormat, ...] = COLOR_FORMATS


@dataclass(frozen=True)
class TokensOutput:
    """Generated file contents keyed by format, plus names that were skipped."""

    files: dict[str, str]
    skipped: list[str] = field(default_factory=list)
