"""
Design-token export.

Flattens resolved type styles and palette steps into platform token files:
CSS, SCSS, Tailwind config, JavaScript module, iOS Swift, Android XML and
style-dictionary JSON.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable

from src.components.typescale.models import ResolvedTypeStyle
from src.domain.entities import ColorPalette

from .models import ColorToken, TypographyToken

logger = logging.getLogger(__name__)

IOS_WEIGHTS: dict[int, str] = {
    100: "ultraLight",
    200: "thin",
    300: "light",
    400: "regular",
    500: "medium",
    600: "semibold",
    700: "bold",
    800: "heavy",
    900: "black",
}

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


# --- Naming ---


def slugify(name: str) -> str:
    """'Heading 1' -> 'heading-1'."""
    return _NON_ALNUM.sub("-", name.lower()).strip("-") or "token"


def identifier(name: str) -> str:
    """'Heading 1' -> 'heading1'; safe as a JS/Swift identifier."""
    first, *rest = slugify(name).split("-")
    ident = first + "".join(part.capitalize() for part in rest)
    return f"_{ident}" if ident[0].isdigit() else ident


def _num(value: float) -> str:
    return f"{value:g}"


# --- Typography ---


def typography_tokens(styles: list[ResolvedTypeStyle]) -> tuple[list[TypographyToken], list[str]]:
    """
    Convert resolved styles to tokens.

    Returns:
        (tokens, skipped style names); styles whose scale step is missing
        from the scale are skipped.
    """
    tokens: list[TypographyToken] = []
    skipped: list[str] = []
    for resolved in styles:
        style = resolved.style
        if resolved.size is None:
            logger.warning("Skipping token %s: step %s unresolved", style.name, style.scale_step)
            skipped.append(style.name)
            continue
        tokens.append(
            TypographyToken(
                name=style.name,
                font_size=f"{resolved.size}px",
                line_height=_num(style.line_height),
                font_weight=style.font_weight,
                letter_spacing=f"{_num(style.letter_spacing)}em",
                font_family=style.font_family,
                description=f"{style.name} ({style.scale_step})",
            )
        )
    return tokens, skipped


def _typography_css(tokens: list[TypographyToken]) -> str:
    blocks = []
    for t in tokens:
        family = f"  font-family: {t.font_family};\n" if t.font_family else ""
        blocks.append(
            f".{slugify(t.name)} {{\n"
            f"{family}"
            f"  font-size: {t.font_size};\n"
            f"  line-height: {t.line_height};\n"
            f"  font-weight: {t.font_weight};\n"
            f"  letter-spacing: {t.letter_spacing};\n"
            "}"
        )
    return "\n\n".join(blocks) + "\n"


def _typography_scss(tokens: list[TypographyToken]) -> str:
    blocks = [
        f"$typography-{slugify(t.name)}: (\n"
        f"  font-size: {t.font_size},\n"
        f"  line-height: {t.line_height},\n"
        f"  font-weight: {t.font_weight},\n"
        f"  letter-spacing: {t.letter_spacing}\n"
        ");"
        for t in tokens
    ]
    return "\n\n".join(blocks) + "\n"


def _typography_tailwind(tokens: list[TypographyToken]) -> str:
    entries = ",\n".join(
        f"        '{slugify(t.name)}': ['{t.font_size}', {{ "
        f"lineHeight: '{t.line_height}', "
        f"letterSpacing: '{t.letter_spacing}', "
        f"fontWeight: '{t.font_weight}' }}]"
        for t in tokens
    )
    return (
        "module.exports = {\n"
        "  theme: {\n"
        "    extend: {\n"
        "      fontSize: {\n"
        f"{entries}\n"
        "      },\n"
        "    },\n"
        "  },\n"
        "};\n"
    )


def _typography_javascript(tokens: list[TypographyToken]) -> str:
    entries = ",\n".join(
        f"  {identifier(t.name)}: {{\n"
        f"    fontSize: '{t.font_size}',\n"
        f"    lineHeight: {t.line_height},\n"
        f"    fontWeight: {t.font_weight},\n"
        f"    letterSpacing: '{t.letter_spacing}',\n"
        "  }"
        for t in tokens
    )
    return f"export const typography = {{\n{entries}\n}};\n"


def _typography_ios(tokens: list[TypographyToken]) -> str:
    lines = [
        f"    static let {identifier(t.name)} = UIFont.systemFont(\n"
        f"        ofSize: {t.font_size.removesuffix('px')},\n"
        f"        weight: .{IOS_WEIGHTS.get(t.font_weight, 'regular')}\n"
        "    )"
        for t in tokens
    ]
    body = "\n".join(lines)
    return f"import UIKit\n\npublic enum Typography {{\n{body}\n}}\n"


def _typography_android(tokens: list[TypographyToken]) -> str:
    items = []
    for t in tokens:
        key = slugify(t.name).replace("-", "_")
        items.append(
            f'    <dimen name="typography_{key}_size">{t.font_size.replace("px", "sp")}</dimen>\n'
            f'    <item name="typography_{key}_line_height" format="float" type="dimen">'
            f"{t.line_height}</item>\n"
            f'    <item name="typography_{key}_letter_spacing" format="float" type="dimen">'
            f"{t.letter_spacing.removesuffix('em')}</item>"
        )
    body = "\n".join(items)
    return f'<?xml version="1.0" encoding="utf-8"?>\n<resources>\n{body}\n</resources>\n'


def _style_dictionary(properties: dict) -> str:
    return json.dumps(
        {
            "properties": properties,
            "extensions": {
                "org.amzn.style-dictionary.web": {
                    "transformGroup": "web",
                    "buildPath": "build/web/",
                    "files": [{"destination": "tokens.json", "format": "json/nested"}],
                }
            },
        },
        indent=2,
    )


def _typography_web(tokens: list[TypographyToken]) -> str:
    properties = {
        f"typography.{slugify(t.name)}": {
            "value": {
                "fontSize": t.font_size,
                "lineHeight": t.line_height,
                "fontWeight": t.font_weight,
                "letterSpacing": t.letter_spacing,
            },
            "type": "typography",
            "category": "typography",
            "comment": t.description,
        }
        for t in tokens
    }
    return _style_dictionary(properties)


TYPOGRAPHY_RENDERERS: dict[str, Callable[[list[TypographyToken]], str]] = {
    "css": _typography_css,
    "scss": _typography_scss,
    "tailwind": _typography_tailwind,
    "javascript": _typography_javascript,
    "ios": _typography_ios,
    "android": _typography_android,
    "web": _typography_web,
}


def generate_typography_tokens(
    styles: list[ResolvedTypeStyle],
    formats: tuple[str, ...] | None = None,
) -> dict[str, str]:
    """
    Render resolved type styles into token files.

    Raises:
        ValueError: If a requested format is not supported
    """
    tokens, _ = typography_tokens(styles)
    return _render(tokens, TYPOGRAPHY_RENDERERS, formats)


# --- Color ---


def color_tokens(palettes: list[ColorPalette]) -> list[ColorToken]:
    return [
        ColorToken(
            group=slugify(palette.name),
            name=step.name,
            hex=step.values.hex,
            oklch=step.values.oklch,
        )
        for palette in palettes
        for step in palette.steps
    ]


def _color_css(tokens: list[ColorToken]) -> str:
    lines = "\n".join(f"  --{t.group}-{t.name}: {t.hex};" for t in tokens)
    return f":root {{\n{lines}\n}}\n"


def _color_scss(tokens: list[ColorToken]) -> str:
    return "".join(f"${t.group}-{t.name}: {t.hex};\n" for t in tokens)


def _color_javascript(tokens: list[ColorToken]) -> str:
    groups: dict[str, list[ColorToken]] = {}
    for t in tokens:
        groups.setdefault(t.group, []).append(t)
    blocks = []
    for group, members in groups.items():
        entries = "\n".join(f"    {t.name}: '{t.hex}'," for t in members)
        blocks.append(f"  {identifier(group)}: {{\n{entries}\n  }},")
    body = "\n".join(blocks)
    return f"export const colors = {{\n{body}\n}};\n"


def _color_web(tokens: list[ColorToken]) -> str:
    properties: dict[str, dict] = {}
    for t in tokens:
        properties.setdefault("color", {}).setdefault(t.group, {})[t.name] = {
            "value": t.hex,
            "type": "color",
            "comment": t.oklch,
        }
    return _style_dictionary(properties)


COLOR_RENDERERS: dict[str, Callable[[list[ColorToken]], str]] = {
    "css": _color_css,
    "scss": _color_scss,
    "javascript": _color_javascript,
    "web": _color_web,
}


def generate_color_tokens(
    palettes: list[ColorPalette],
    formats: tuple[str, ...] | None = None,
) -> dict[str, str]:
    """
    Render palette steps into color token files.

    Raises:
        ValueError: If a requested format is not supported
    """
    return _render(color_tokens(palettes), COLOR_RENDERERS, formats)


def _render(
    tokens: list,
    renderers: dict[str, Callable[[list], str]],
    formats: tuple[str, ...] | None,
) -> dict[str, str]:
    selected = formats if formats is not None else tuple(renderers)
    unknown = [f for f in selected if f not in renderers]
    if unknown:
        raise ValueError(f"Unsupported token format(s): {', '.join(unknown)}")
    return {fmt: renderers[fmt](tokens) for fmt in selected}
