# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""Tests for widget layout generators and the default sheet."""

import dataclasses

import pytest

from censor.runtime.orchestrator import AnalysisConfig, build_context
from censor.schema import CycleReport, Label, Palette, Point, Polygon, Polyline
from censor.widgets import (
    COMPLEMENTARY_AXES,
    EvalState,
    GreyscaleConfig,
    IndexedConfig,
    RGBGridConfig,
    WidgetKind,
    WidgetSpec,
    default_widgets,
    generate,
)


PRIMARIES = Palette.from_hex(["#000000", "#FFFFFF", "#FF0000", "#0000FF"])
PAIR = Palette.from_hex(["#000000", "#FFFFFF"])
TRIPLE = Palette.from_hex(["#000000", "#FFFFFF", "#FF0000"])

FIELD_KINDS = (
    WidgetKind.GREYSCALE,
    WidgetKind.HUE_LIGHTNESS_POLAR,
    WidgetKind.RECT_HUE_LIGHTNESS,
    WidgetKind.SPECTRUM,
    WidgetKind.COMPLEMENTARIES,
    WidgetKind.RGB_GRID,
    WidgetKind.SPECTRO_BOX,
)


def _context(palette):
    return build_context(palette, AnalysisConfig(mix_budget=64))


def _coordinates(prim):
    if isinstance(prim, (Point, Label)):
        return [(prim.x, prim.y)]
    return list(prim.points)


def _texts(layout):
    return [p.text for p in layout if isinstance(p, Label)]


def _cell_at(layout, x, y):
    for p in layout:
        (x0, y0), _, (x1, y1), _ = p.points
        if x0 - 1e-9 <= x <= x1 + 1e-9 and y0 - 1e-9 <= y <= y1 + 1e-9:
            return p.fill
    return None


@pytest.fixture(scope="module")
def ctx():
    return _context(PRIMARIES)


@pytest.fixture(scope="module")
def pair_ctx():
    return _context(PAIR)


class TestWidgetSpec:

    def test_default_config_and_name(self):
        spec = WidgetSpec(WidgetKind.INDEXED)
        assert spec.config == IndexedConfig()
        assert spec.name == "indexed"

    def test_wrong_config_type(self):
        with pytest.raises(TypeError, match="IndexedConfig"):
            WidgetSpec(WidgetKind.INDEXED, GreyscaleConfig())


class TestDefaultWidgets:

    def test_names_unique(self):
        names = [s.name for s in default_widgets()]
        assert len(names) == len(set(names))

    def test_every_kind_present(self):
        kinds = {s.kind for s in default_widgets()}
        assert kinds == set(WidgetKind)

    def test_complementaries(self):
        specs = [s for s in default_widgets() if s.kind is WidgetKind.COMPLEMENTARIES]
        assert [s.config.title for s in specs] == list(COMPLEMENTARY_AXES)

    def test_large_palette_drops_swatch_widgets(self):
        kinds = {s.kind for s in default_widgets(100)}
        assert WidgetKind.USEFUL_MIXES not in kinds
        assert WidgetKind.NEUTRALISERS not in kinds


class TestLayoutBounds:
    """Every default widget stays inside its normalised box."""

    @pytest.mark.parametrize("fixture", ["ctx", "pair_ctx"])
    def test_all_coordinates_normalised(self, fixture, request):
        context = request.getfixturevalue(fixture)
        for spec in default_widgets(context.n):
            for prim in generate(spec, context):
                for x, y in _coordinates(prim):
                    assert -1e-9 <= x <= 1.0 + 1e-9, spec.name
                    assert -1e-9 <= y <= 1.0 + 1e-9, spec.name

    def test_field_fills_are_palette_colours(self, ctx):
        for spec in default_widgets():
            if spec.kind not in FIELD_KINDS:
                continue
            fills = {p.fill for p in generate(spec, ctx) if isinstance(p, Polygon)}
            assert fills <= set(ctx.hexes), spec.name

    def test_indexed_fills_every_slot(self, ctx):
        layout = generate(WidgetSpec(WidgetKind.INDEXED), ctx)
        rects = [p for p in layout if isinstance(p, Polygon)]
        assert len(rects) == 32 * 8
        assert [r.fill for r in rects[:4]] == list(ctx.hexes)


class TestReducedLayout:

    @pytest.mark.parametrize("kind", [WidgetKind.CHROMA_LIGHTNESS_HUE, WidgetKind.HUE_CHROMA_POLAR])
    def test_two_colours_get_note(self, kind, pair_ctx):
        assert "hue needs 3+ colours" in _texts(generate(WidgetSpec(kind), pair_ctx))

    @pytest.mark.parametrize("kind", [WidgetKind.CHROMA_LIGHTNESS_HUE, WidgetKind.HUE_CHROMA_POLAR])
    def test_three_colours_get_full_plot(self, kind):
        assert "hue needs 3+ colours" not in _texts(generate(WidgetSpec(kind), _context(TRIPLE)))

    def test_two_colours_share_one_row(self, pair_ctx):
        layout = generate(WidgetSpec(WidgetKind.HUE_CHROMA_POLAR), pair_ctx)
        points = [p for p in layout if isinstance(p, Point)]
        assert len(points) == 2
        assert points[0].y == points[1].y
        assert points[0].x < points[1].x


class TestGauges:

    @pytest.mark.parametrize("score,state", [(1.0, EvalState.OK), (2.5, EvalState.WARN), (4.0, EvalState.ALERT)])
    def test_similarity_badge(self, ctx, score, state):
        layout = generate(WidgetSpec(WidgetKind.INTERNAL_SIMILARITY), dataclasses.replace(ctx, similarity=score))
        assert state.value in _texts(layout)
        assert f"{score:.2f}" in _texts(layout)

    def test_acyclic_warns_on_larger_palettes(self, ctx):
        texts = _texts(generate(WidgetSpec(WidgetKind.ACYCLIC), ctx))
        assert "<yes>" in texts
        assert EvalState.WARN.value in texts

    def test_acyclic_with_loop(self, ctx):
        looped = dataclasses.replace(ctx, cycles=CycleReport(((0, 1, 2),)))
        texts = _texts(generate(WidgetSpec(WidgetKind.ACYCLIC), looped))
        assert "<no>" in texts
        assert "0-1-2" in texts
        assert EvalState.OK.value in texts

    def test_distribution_curve(self, ctx):
        layout = generate(WidgetSpec(WidgetKind.TEMPERATURE_DISTRIBUTION), ctx)
        assert {"COLD", "WARM"} <= set(_texts(layout))
        assert any(isinstance(p, Polyline) for p in layout)


class TestSwatches:

    def test_main_palette_darkest_first(self, ctx):
        layout = generate(WidgetSpec(WidgetKind.MAIN_PALETTE), ctx)
        assert layout[0].fill == "#000000"
        assert layout[-1].fill == "#FFFFFF"

    def test_mixes_are_dithered(self, ctx):
        layout = generate(WidgetSpec(WidgetKind.USEFUL_MIXES), ctx)
        dithered = [p for p in layout if isinstance(p, Polygon) and p.fill_alt is not None]
        assert dithered
        for p in dithered:
            assert {p.fill, p.fill_alt} <= set(ctx.hexes)

    def test_close_colours_one_label_per_weighting(self, ctx):
        texts = _texts(generate(WidgetSpec(WidgetKind.CLOSE_COLOURS), ctx))
        assert texts == ["close cols: lightness x1", "close cols: lightness x3"]

    def test_neutralisers_note_when_none_exist(self, pair_ctx):
        lonely = dataclasses.replace(pair_ctx, neutralisers=(None, None))
        layout = generate(WidgetSpec(WidgetKind.NEUTRALISERS), lonely)
        assert _texts(layout) == ["no neutralisers"]
        assert not [p for p in layout if isinstance(p, Polygon)]

    def test_neutralisers_swatches_without_note(self, ctx):
        paired = dataclasses.replace(ctx, neutralisers=(None, None, 3, 2))
        layout = generate(WidgetSpec(WidgetKind.NEUTRALISERS), paired)
        assert "no neutralisers" not in _texts(layout)
        assert len([p for p in layout if isinstance(p, Polygon)]) == 4


class TestRGBGrid:

    def test_cube_corners(self, ctx):
        layout = generate(WidgetSpec(WidgetKind.RGB_GRID), ctx)
        # green 0 tile top left: black at its origin, red along its top row
        assert _cell_at(layout, 0.001, 0.001) == "#000000"
        assert _cell_at(layout, 0.124, 0.001) == "#FF0000"
        assert _cell_at(layout, 0.001, 0.499) == "#0000FF"
        # green 255 tile bottom right
        assert _cell_at(layout, 0.999, 0.999) == "#FFFFFF"

    def test_grid_is_covered(self, ctx):
        layout = generate(WidgetSpec(WidgetKind.RGB_GRID), ctx)
        area = 0.0
        for p in layout:
            (x0, y0), _, (x1, y1), _ = p.points
            area += (x1 - x0) * (y1 - y0)
        assert area == pytest.approx(1.0)

    def test_partial_last_row_left_blank(self, ctx):
        layout = generate(WidgetSpec(WidgetKind.RGB_GRID, RGBGridConfig(levels=3, tiles_per_row=2)), ctx)
        assert _cell_at(layout, 0.999, 0.999) is None

    @pytest.mark.parametrize("levels,per_row", [(1, 8), (16, 0)])
    def test_bad_shape(self, levels, per_row):
        with pytest.raises(ValueError):
            RGBGridConfig(levels=levels, tiles_per_row=per_row)


class TestSpectroBox:

    def test_fades_to_white_and_black(self, ctx):
        layout = generate(WidgetSpec(WidgetKind.SPECTRO_BOX), ctx)
        top = {p.fill for p in layout if p.points[0][1] == pytest.approx(0.0)}
        bottom = {p.fill for p in layout if p.points[2][1] == pytest.approx(1.0)}
        assert top == {"#FFFFFF"}
        assert bottom == {"#000000"}

    def test_middle_row_is_the_spectrum(self, ctx):
        box = generate(WidgetSpec(WidgetKind.SPECTRO_BOX), ctx)
        strip = generate(WidgetSpec(WidgetKind.SPECTRUM), ctx)
        for k in range(0, 100, 7):
            x = (k + 0.5) / 100.0
            assert _cell_at(box, x, 0.5) == _cell_at(strip, x, 0.5)
