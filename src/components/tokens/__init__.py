"""
Tokens component - design-token export for typography and color.
"""

from ._impl import (
    IOS_WEIGHTS,
    color_tokens,
    generate_color_tokens,
    generate_typography_tokens,
    identifier,
    slugify,
    typography_tokens,
)
from .component import run, run_color_tokens, run_typography_tokens
from .models import (
    COLOR_FORMATS,
    TYPOGRAPHY_FORMATS,
    ColorToken,
    ColorTokenFormat,
    ColorTokensInput,
    TokensOutput,
    TypographyFormat,
    TypographyToken,
    TypographyTokensInput,
)

__all__ = [
    # Entry points
    "run",
    "run_color_tokens",
    "run_typography_tokens",
    # Input/output models
    "COLOR_FORMATS",
    "TYPOGRAPHY_FORMATS",
    "ColorToken",
    "ColorTokenFormat",
    "ColorTokensInput",
    "TokensOutput",
    "TypographyFormat",
    "TypographyToken",
    "TypographyTokensInput",
    # Generators
    "IOS_WEIGHTS",
    "color_tokens",
    "generate_color_tokens",
    "generate_typography_tokens",
    "identifier",
    "slugify",
    "typography_tokens",
]
