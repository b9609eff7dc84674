"""
Tokens component - design-token export for typography and color.
"""

from __future__ import annotations

from ._impl import generate_color_tokens, generate_typography_tokens, typography_tokens
from .models import ColorTokensInput, TokensOutput, TypographyTokensInput


def run_typography_tokens(inp: TypographyTokensInput) -> TokensOutput:
    """
    Export resolved type styles.

    Raises:
        ValueError: If a requested format is not supported
    """
    _, skipped = typography_tokens(inp.styles)
    files = generate_typography_tokens(inp.styles, inp.formats)
    return TokensOutput(files=files, skipped=skipped)


def run_color_tokens(inp: ColorTokensInput) -> TokensOutput:
    """
    Export palette steps.

    Raises:
        ValueError: If a requested format is not supported
    """
    return TokensOutput(files=generate_color_tokens(inp.palettes, inp.formats))


def run(inp: TypographyTokensInput | ColorTokensInput) -> TokensOutput:
    """
    Main entry point for the tokens component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, TypographyTokensInput):
        return run_typography_tokens(inp)
    elif isinstance(inp, ColorTokensInput):
        return run_color_tokens(inp)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
