"""
Unit tests for Palette component.

Tests:
- Output length always matches the clamped step count
- Base-color slot keeps the base color when locked
- Malformed input degrades to a gray palette and reports faults
- Accessibility scoring against white and black
- Heuristic gamut flag per target gamut
"""

from __future__ import annotations

from pathlib import Path

import pytest

from src.domain.entities import ColorPalette, ColorValues, PaletteConfig
from src.rules.loader import load_rules
from src.rules.models import Rules

from .._color import parse_color
from .._impl import (
    FaultCollector,
    chroma_values,
    clamp_num_steps,
    generate_palette,
    lightness_values,
)
from ..component import (
    run,
    run_check_accessibility,
    run_convert,
    run_gamut_check,
    run_generate,
    run_override,
    run_regenerate,
)
from ..models import (
    CheckAccessibilityInput,
    ConvertColorInput,
    GamutCheckInput,
    GeneratePaletteInput,
    OverrideStepInput,
    PaletteFault,
    RegeneratePaletteInput,
)

# --- Test Fixtures ---


class RecordingReporter:
    """In-memory FaultReporterPort."""

    def __init__(self) -> None:
        self.codes: list[str] = []

    def report(self, fault: PaletteFault) -> None:
        self.codes.append(fault.code)


@pytest.fixture
def base_input() -> GeneratePaletteInput:
    return GeneratePaletteInput(base_color="#3264c8", num_steps=9)


@pytest.fixture
def stored_base() -> ColorValues:
    return ColorValues(
        hex="#3264C8",
        rgb="rgb(50, 100, 200)",
        oklch="oklch(50% 0.15 260)",
        pantone="PMS 2728 C",
    )


@pytest.fixture
def rules() -> Rules:
    return load_rules(Path(__file__).parents[4] / "rules.yaml")


# --- Generation Tests ---


class TestGeneratePalette:
    """Tests for palette generation."""

    def test_returns_requested_step_count(self, base_input: GeneratePaletteInput) -> None:
        """Nine steps requested gives nine steps."""
        result = run_generate(base_input)
        assert len(result.steps) == 9
        assert result.faults == []

    def test_locked_base_slot_keeps_base_color(self, base_input: GeneratePaletteInput) -> None:
        """The middle step is the base color, exactly."""
        result = run_generate(base_input)
        middle = result.steps[4]
        assert middle.is_base_color
        assert middle.values.hex == "#3264c8"
        assert sum(s.is_base_color for s in result.steps) == 1

    def test_locked_base_keeps_stored_values(self, stored_base: ColorValues) -> None:
        """A stored base is kept as given: pantone and oklch string survive."""
        steps = generate_palette(stored_base, 9, True, PaletteConfig(lock_base_color=True))
        values = steps[4].values
        assert values.hex == "#3264c8"
        assert values.oklch == "oklch(50% 0.15 260)"
        assert values.rgb == "rgb(50, 100, 200)"
        assert values.pantone == "PMS 2728 C"
        assert values.cmyk is not None
        assert values == stored_base.model_copy(update={"hex": "#3264c8", "cmyk": values.cmyk})

    def test_locked_base_keeps_stored_cmyk(self, stored_base: ColorValues) -> None:
        base = stored_base.model_copy(update={"cmyk": "cmyk(75%, 50%, 0%, 22%)"})
        steps = generate_palette(base, 5)
        assert steps[2].values.cmyk == "cmyk(75%, 50%, 0%, 22%)"

    def test_unlocked_stored_base_is_derived(self, stored_base: ColorValues) -> None:
        steps = generate_palette(stored_base, 9, True, PaletteConfig(lock_base_color=False))
        assert steps[4].values.pantone is None

    def test_lightness_mode_spans_black_to_white(self, base_input: GeneratePaletteInput) -> None:
        """Default lightness range 0..1 puts black first and white last."""
        steps = run_generate(base_input).steps
        assert steps[0].values.hex == "#000000"
        assert steps[-1].values.hex == "#ffffff"

    def test_step_names_are_hundreds(self, base_input: GeneratePaletteInput) -> None:
        steps = run_generate(base_input).steps
        assert [s.name for s in steps] == [str(i * 100) for i in range(1, 10)]

    def test_deterministic(self, base_input: GeneratePaletteInput) -> None:
        """Identical inputs give identical steps, ids included."""
        assert run_generate(base_input).steps == run_generate(base_input).steps

    def test_unlocked_base_slot_follows_distribution(self) -> None:
        options = PaletteConfig(lock_base_color=False)
        steps = run_generate(
            GeneratePaletteInput(base_color="#3264c8", num_steps=9, options=options)
        ).steps
        assert steps[4].is_base_color
        assert steps[4].values.hex != "#3264c8"

    def test_chroma_mode_keeps_base_lightness(self) -> None:
        """Chroma mode varies chroma; lightness stays at the base color's."""
        base = parse_color("#3264c8")
        assert base is not None
        steps = generate_palette("#3264c8", 5, use_lightness=False)
        for step in steps:
            parsed = parse_color(step.values.oklch)
            assert parsed is not None
            assert parsed.l == pytest.approx(base.l, abs=1e-3)

    def test_accepts_oklch_base(self) -> None:
        result = run_generate(GeneratePaletteInput(base_color="oklch(60% 0.1 250)", num_steps=5))
        assert len(result.steps) == 5
        assert not result.is_fallback


class TestGenerateFaults:
    """Malformed input never raises."""

    def test_invalid_base_color_gives_gray_palette(self) -> None:
        result = run_generate(GeneratePaletteInput(base_color="not-a-color", num_steps=7))
        assert len(result.steps) == 7
        assert result.is_fallback
        assert all(s.values.hex == "#808080" for s in result.steps)
        assert all(not s.accessibility.wcag_aa_large for s in result.steps)

    def test_empty_base_color_gives_gray_palette(self) -> None:
        result = run_generate(GeneratePaletteInput(base_color="", num_steps=9))
        assert len(result.steps) == 9
        assert result.is_fallback

    @pytest.mark.parametrize(("requested", "expected"), [(1, 3), (0, 3), (-5, 3), (100, 25)])
    def test_step_count_is_clamped(self, requested: int, expected: int) -> None:
        result = run_generate(GeneratePaletteInput(base_color="#3264c8", num_steps=requested))
        assert len(result.steps) == expected
        assert [f.code for f in result.faults] == ["num_steps_clamped"]

    def test_custom_lightness_length_mismatch_falls_back_to_linear(self) -> None:
        options = PaletteConfig(lightness_preset="custom", custom_lightness_values=(0.2, 0.8))
        result = run_generate(
            GeneratePaletteInput(base_color="#3264c8", num_steps=5, options=options)
        )
        assert len(result.steps) == 5
        assert "custom_lightness_mismatch" in [f.code for f in result.faults]

    def test_faults_forwarded_to_extra_reporter(self) -> None:
        reporter = RecordingReporter()
        run_generate(GeneratePaletteInput(base_color="nope", num_steps=9), faults=reporter)
        assert reporter.codes == ["invalid_base_color"]


# --- Axis Value Tests ---


class TestAxisValues:
    """Tests for lightness and chroma distributions."""

    def test_linear_lightness_is_evenly_spaced(self) -> None:
        values = lightness_values(5, PaletteConfig())
        assert values == pytest.approx([0.0, 0.25, 0.5, 0.75, 1.0])

    def test_ease_in_starts_slow(self) -> None:
        values = lightness_values(5, PaletteConfig(lightness_preset="easeIn"))
        assert values[1] < 0.25
        assert values[0] == pytest.approx(0.0)
        assert values[-1] == pytest.approx(1.0)

    def test_custom_lightness_used_when_lengths_match(self) -> None:
        options = PaletteConfig(lightness_preset="custom", custom_lightness_values=(0.1, 0.5, 0.9))
        assert lightness_values(3, options) == [0.1, 0.5, 0.9]

    def test_constant_chroma_in_lightness_mode(self) -> None:
        options = PaletteConfig(chroma_range=(0.0, 0.2))
        values = chroma_values(3, options, [0.0, 0.5, 1.0])
        assert values == pytest.approx([0.1, 0.1, 0.1])

    def test_decrease_chroma_follows_lightness(self) -> None:
        options = PaletteConfig(chroma_range=(0.0, 0.2), chroma_preset="decrease")
        values = chroma_values(3, options, [0.0, 0.5, 1.0])
        assert values == pytest.approx([0.2, 0.1, 0.0])

    def test_clamp_num_steps_reports(self) -> None:
        collector = FaultCollector()
        assert clamp_num_steps(40, collector) == 25
        assert collector.faults[0].field == "num_steps"


# --- Override / Regenerate Tests ---


class TestOverrideStep:
    """Tests for manual step overrides."""

    def test_override_replaces_one_step(self, base_input: GeneratePaletteInput) -> None:
        steps = run_generate(base_input).steps
        result = run_override(OverrideStepInput(steps=steps, index=2, color="#ff0000"))
        assert result.steps[2].values.hex == "#ff0000"
        assert result.steps[2].id == steps[2].id
        assert result.steps[:2] == steps[:2]
        assert result.steps[3:] == steps[3:]

    def test_out_of_range_index_is_reported(self, base_input: GeneratePaletteInput) -> None:
        steps = run_generate(base_input).steps
        result = run_override(OverrideStepInput(steps=steps, index=42, color="#ff0000"))
        assert result.steps == steps
        assert [f.code for f in result.faults] == ["step_index_out_of_range"]

    def test_invalid_color_is_reported(self, base_input: GeneratePaletteInput) -> None:
        steps = run_generate(base_input).steps
        result = run_override(OverrideStepInput(steps=steps, index=0, color="bogus"))
        assert result.steps == steps
        assert [f.code for f in result.faults] == ["invalid_override_color"]


class TestRegeneratePalette:
    """Tests for regenerating a stored palette."""

    def test_regenerate_with_new_step_count(self, base_input: GeneratePaletteInput) -> None:
        steps = run_generate(base_input).steps
        palette = ColorPalette(
            brand_id="brand-1", name="Primary", base_color=steps[4].values, steps=steps
        )
        result = run_regenerate(
            RegeneratePaletteInput(palette=palette, config=PaletteConfig(num_steps=11))
        )
        assert len(result.palette.steps) == 11
        assert result.palette.base_color == palette.base_color
        assert result.palette.steps[5].values.hex == "#3264c8"
        assert result.palette.id == palette.id

    def test_regenerate_keeps_stored_base_values(self, stored_base: ColorValues) -> None:
        palette = ColorPalette(brand_id="brand-1", name="Primary", base_color=stored_base)
        result = run_regenerate(
            RegeneratePaletteInput(palette=palette, config=PaletteConfig(num_steps=7))
        )
        assert result.palette.base_color == stored_base
        assert result.palette.steps[3].values.pantone == "PMS 2728 C"

    def test_regenerate_applies_configured_step_bounds(
        self, rules: Rules, base_input: GeneratePaletteInput
    ) -> None:
        rules = rules.model_copy(
            update={"palette": rules.palette.model_copy(update={"max_steps": 9})}
        )
        steps = run_generate(base_input).steps
        palette = ColorPalette(
            brand_id="brand-1", name="Primary", base_color=steps[4].values, steps=steps
        )
        result = run_regenerate(
            RegeneratePaletteInput(palette=palette, config=PaletteConfig(num_steps=11)),
            rules=rules,
        )
        assert len(result.palette.steps) == 9
        assert [f.code for f in result.faults] == ["num_steps_clamped"]

    def test_regenerate_uses_configured_fallback_gray(self, rules: Rules) -> None:
        rules = rules.model_copy(
            update={"palette": rules.palette.model_copy(update={"fallback_gray": "#777777"})}
        )
        unusable = ColorValues(hex="nope", rgb="nope", oklch="nope")
        palette = ColorPalette(brand_id="brand-1", name="Primary", base_color=unusable)
        result = run_regenerate(
            RegeneratePaletteInput(palette=palette, config=PaletteConfig(num_steps=5)),
            rules=rules,
        )
        assert {s.values.hex for s in result.palette.steps} == {"#777777"}
        assert [f.code for f in result.faults] == ["invalid_base_color"]


# --- Accessibility / Conversion / Gamut Tests ---


class TestCheckAccessibility:
    """Tests for WCAG scoring."""

    def test_black_reads_on_white(self) -> None:
        result = run_check_accessibility(CheckAccessibilityInput(color="#000000")).accessibility
        assert result.contrast_with_white == pytest.approx(21.0)
        assert result.readable_on == "white"
        assert result.wcag_aaa

    def test_white_reads_on_black(self) -> None:
        result = run_check_accessibility(CheckAccessibilityInput(color="#ffffff")).accessibility
        assert result.contrast_with_black == pytest.approx(21.0)
        assert result.readable_on == "black"

    def test_unparseable_color_is_degraded(self) -> None:
        result = run_check_accessibility(CheckAccessibilityInput(color="???")).accessibility
        assert result.contrast_with_white == 1.0
        assert not result.wcag_aa_large


class TestConvert:
    """Tests for format conversion."""

    def test_hex_to_rgb(self) -> None:
        result = run_convert(ConvertColorInput(color="#FF0000", from_format="hex", to_format="rgb"))
        assert result.color == "rgb(255, 0, 0)"
        assert result.converted

    def test_pantone_passthrough(self) -> None:
        result = run_convert(
            ConvertColorInput(color="PANTONE 286 C", from_format="pantone", to_format="hex")
        )
        assert result.color == "PANTONE 286 C"
        assert not result.converted

    def test_invalid_input_echoed(self) -> None:
        result = run_convert(ConvertColorInput(color="zzz", from_format="hex", to_format="rgb"))
        assert result.color == "zzz"
        assert not result.converted


class TestGamutCheck:
    """Tests for the chroma-threshold gamut flag."""

    def test_high_chroma_flagged_for_srgb(self) -> None:
        result = run_gamut_check(GamutCheckInput(color="oklch(60% 0.2 30)", gamut="srgb"))
        assert result.likely_out_of_gamut

    def test_same_color_fits_display_p3_threshold(self) -> None:
        result = run_gamut_check(GamutCheckInput(color="oklch(60% 0.2 30)", gamut="display-p3"))
        assert not result.likely_out_of_gamut

    def test_unlimited_never_flags(self) -> None:
        result = run_gamut_check(GamutCheckInput(color="oklch(60% 0.39 30)", gamut="unlimited"))
        assert not result.likely_out_of_gamut
        assert result.in_gamut is True

    def test_exact_check_for_in_gamut_hex(self) -> None:
        result = run_gamut_check(GamutCheckInput(color="#808080"))
        assert result.in_gamut is True
        assert not result.likely_out_of_gamut

    def test_unparseable_color(self) -> None:
        result = run_gamut_check(GamutCheckInput(color="nope"))
        assert not result.likely_out_of_gamut
        assert result.in_gamut is None


class TestRun:
    """Tests for main entry point dispatch."""

    def test_dispatches_generate(self, base_input: GeneratePaletteInput) -> None:
        result = run(base_input)
        assert len(result.steps) == 9  # type: ignore[union-attr]

    def test_unknown_input_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown input type"):
            run("not an input")  # type: ignore[arg-type]
