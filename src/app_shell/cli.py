import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from src.app_shell.config import validate_rules
from src.components.palette import (
    GeneratePaletteInput,
    calculate_contrast,
    convert_color,
    palette_config_from_rules,
    run_generate,
    thresholds_from_rules,
    wcag_levels,
)
from src.components.tokens import (
    COLOR_FORMATS,
    TYPOGRAPHY_FORMATS,
    generate_color_tokens,
    generate_typography_tokens,
)
from src.components.typescale import (
    DistanceSizeInput,
    PlatformScaleInput,
    ScaleInput,
    platforms_from_rules,
    run_distance,
    run_platform_scale,
    run_scale,
)
from src.domain.entities import ColorPalette, DistanceScaleParams, ScaleConfig
from src.rules.loader import default_rules_path, load_rules
from src.rules.models import Rules

logger = logging.getLogger("cli")

COLOR_FORMAT_CHOICES = ["oklch", "rgb", "hex", "cmyk", "pantone"]


def get_rules(path: str | None) -> Rules:
    rules_path = Path(path) if path else default_rules_path()
    try:
        rules = load_rules(rules_path)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Could not load rules: {e}")
        sys.exit(1)
    validate_rules(rules)
    return rules


def emit(payload: Any) -> None:
    print(json.dumps(payload, indent=2))


def handle_palette(rules: Rules, args: argparse.Namespace) -> None:
    defaults = palette_config_from_rules(rules)
    updates: dict[str, Any] = {}
    if args.lightness_preset:
        updates["lightness_preset"] = args.lightness_preset
    if args.chroma_preset:
        updates["chroma_preset"] = args.chroma_preset
    if args.hue_shift is not None:
        updates["hue_shift"] = args.hue_shift
    if args.unlock_base:
        updates["lock_base_color"] = False
    options = defaults.model_copy(update=updates)

    result = run_generate(
        GeneratePaletteInput(
            base_color=args.base_color or rules.palette.default_base_color,
            num_steps=args.steps if args.steps is not None else options.num_steps,
            use_lightness=not args.chroma,
            options=options,
        ),
        rules=rules,
    )

    if args.swatch:
        from src.adapters.render.mpl_renderer import MatplotlibSwatchRenderer

        Path(args.swatch).write_bytes(MatplotlibSwatchRenderer().render_palette(result.steps))
        logger.info(f"Swatch written to {args.swatch}")

    emit(
        {
            "steps": [s.model_dump() for s in result.steps],
            "faults": [{"code": f.code, "message": f.message} for f in result.faults],
            "is_fallback": result.is_fallback,
        }
    )


def handle_contrast(rules: Rules, args: argparse.Namespace) -> None:
    t = thresholds_from_rules(rules)
    ratio = calculate_contrast(args.foreground, args.background)
    normal, large, enhanced = wcag_levels(ratio, t.aa_normal, t.aa_large, t.aaa)
    emit(
        {
            "ratio": round(ratio, 2),
            "wcag_aa_normal": normal,
            "wcag_aa_large": large,
            "wcag_aaa": enhanced,
        }
    )


def handle_convert(rules: Rules, args: argparse.Namespace) -> None:
    emit({"color": convert_color(args.color, args.from_format, args.to_format)})


def handle_scale(rules: Rules, args: argparse.Namespace) -> None:
    if args.platform:
        platform = platforms_from_rules(rules).get(args.platform)
        if platform is None:
            logger.error(f"Unknown platform {args.platform}. Known: {', '.join(rules.platforms)}")
            sys.exit(1)
        result = run_platform_scale(PlatformScaleInput(platform=platform), rules=rules)
        emit(
            {
                "platform": platform.id,
                "base_size": result.base_size,
                "values": [v.model_dump() for v in result.values],
            }
        )
        return

    default = rules.typescale.default_scale
    scale = ScaleConfig(
        base_size=args.base if args.base is not None else default.base_size,
        ratio=args.ratio if args.ratio is not None else default.ratio,
        steps_up=args.up if args.up is not None else default.steps_up,
        steps_down=args.down if args.down is not None else default.steps_down,
    )
    values = run_scale(ScaleInput(scale=scale), rules=rules).values
    emit({"base_size": scale.base_size, "values": [v.model_dump() for v in values]})


def handle_distance(rules: Rules, args: argparse.Namespace) -> None:
    params = DistanceScaleParams(
        viewing_distance=args.distance,
        visual_acuity=args.acuity,
        mean_length_ratio=args.length_ratio,
        text_type=args.text_type,
        lighting=args.lighting,
        ppi=args.ppi,
    )
    emit({"pixel_size": run_distance(DistanceSizeInput(params=params), rules=rules).pixel_size})


def handle_tokens(rules: Rules, args: argparse.Namespace) -> None:
    formats = tuple(args.format) if args.format else None
    try:
        if args.kind == "typography":
            platform = platforms_from_rules(rules).get(args.platform)
            if platform is None:
                logger.error(f"Unknown platform {args.platform}.")
                sys.exit(1)
            styles = run_platform_scale(PlatformScaleInput(platform=platform), rules=rules).styles
            files = generate_typography_tokens(styles, formats)
        else:
            steps = run_generate(
                GeneratePaletteInput(
                    base_color=args.base_color or rules.palette.default_base_color,
                    num_steps=rules.palette.default_num_steps,
                    options=palette_config_from_rules(rules),
                ),
                rules=rules,
            ).steps
            palette = ColorPalette(
                brand_id="cli",
                name=args.name,
                base_color=steps[len(steps) // 2].values,
                steps=steps,
            )
            files = generate_color_tokens([palette], formats)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    if args.out:
        out_dir = Path(args.out)
        out_dir.mkdir(parents=True, exist_ok=True)
        for fmt, content in files.items():
            (out_dir / f"{args.kind}.{fmt}.txt").write_text(content, encoding="utf-8")
        logger.info(f"Wrote {len(files)} token files to {out_dir}")
    emit(files)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Brandkit color and typography CLI")
    parser.add_argument("--rules", help="Path to rules.yaml (default: $BRANDKIT_RULES_PATH)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # palette
    palette_parser = subparsers.add_parser("palette", help="Generate a color palette")
    palette_parser.add_argument("base_color", nargs="?", help="Base color (hex, rgb, oklch, cmyk)")
    palette_parser.add_argument("--steps", type=int, help="Number of steps (3-25)")
    palette_parser.add_argument("--chroma", action="store_true", help="Vary chroma, not lightness")
    palette_parser.add_argument(
        "--lightness-preset", choices=["linear", "easeIn", "easeOut", "s-curve"]
    )
    palette_parser.add_argument(
        "--chroma-preset",
        choices=["constant", "increase", "decrease", "linear", "easeIn", "easeOut", "s-curve"],
    )
    palette_parser.add_argument("--hue-shift", type=float, help="Hue shift in degrees")
    palette_parser.add_argument("--unlock-base", action="store_true", help="Do not pin base color")
    palette_parser.add_argument("--swatch", help="Write a PNG swatch to this path")

    # contrast
    contrast_parser = subparsers.add_parser("contrast", help="WCAG contrast of two colors")
    contrast_parser.add_argument("foreground")
    contrast_parser.add_argument("background")

    # convert
    convert_parser = subparsers.add_parser("convert", help="Convert a color between formats")
    convert_parser.add_argument("color")
    convert_parser.add_argument(
        "--from", dest="from_format", choices=COLOR_FORMAT_CHOICES, required=True
    )
    convert_parser.add_argument(
        "--to", dest="to_format", choices=COLOR_FORMAT_CHOICES, required=True
    )

    # scale
    scale_parser = subparsers.add_parser("scale", help="Compute a modular type scale")
    scale_parser.add_argument("--base", type=float, help="Base size in px")
    scale_parser.add_argument("--ratio", type=float, help="Scale ratio, e.g. 1.25")
    scale_parser.add_argument("--up", type=int, help="Steps above base")
    scale_parser.add_argument("--down", type=int, help="Steps below base")
    scale_parser.add_argument("--platform", help="Use a platform preset from rules")

    # distance
    distance_parser = subparsers.add_parser("distance", help="Base size from viewing distance")
    distance_parser.add_argument("--distance", type=float, default=50, help="Viewing distance (cm)")
    distance_parser.add_argument("--acuity", type=float, default=1.0)
    distance_parser.add_argument("--length-ratio", type=float, default=1.0)
    distance_parser.add_argument(
        "--text-type", choices=["continuous", "isolated"], default="continuous"
    )
    distance_parser.add_argument("--lighting", choices=["good", "moderate", "poor"], default="good")
    distance_parser.add_argument("--ppi", type=float, default=96)

    # tokens
    tokens_parser = subparsers.add_parser("tokens", help="Export design tokens")
    tokens_parser.add_argument("kind", choices=["typography", "colors"])
    tokens_parser.add_argument(
        "--format",
        action="append",
        choices=sorted(set(TYPOGRAPHY_FORMATS) | set(COLOR_FORMATS)),
        help="Repeatable; default is every format for the kind",
    )
    tokens_parser.add_argument("--platform", default="web", help="Platform preset (typography)")
    tokens_parser.add_argument("--base-color", help="Base color (colors)")
    tokens_parser.add_argument("--name", default="primary", help="Palette name (colors)")
    tokens_parser.add_argument("--out", help="Directory to write token files into")

    return parser


HANDLERS = {
    "palette": handle_palette,
    "contrast": handle_contrast,
    "convert": handle_convert,
    "scale": handle_scale,
    "distance": handle_distance,
    "tokens": handle_tokens,
}


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)
    rules = get_rules(args.rules)
    HANDLERS[args.command](rules, args)


if __name__ == "__main__":
    main()
