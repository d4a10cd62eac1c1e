# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""Tests for sheet packing and Pillow rendering."""

from pathlib import Path

from PIL import Image

from censor.runtime.orchestrator import AnalysisConfig, analyse
from censor.runtime.render import (
    SHEET_WIDTH,
    SheetRenderer,
    output_path,
    pack_boxes,
    render_report,
    render_sheet,
)
from censor.schema import Label, Palette, Polygon
from censor.widgets import WidgetKind, WidgetSpec, default_widgets


PALETTE = Palette.from_hex(["#1A1C2C", "#F4F4F4", "#B13E53", "#41A6F6"])


def _overlaps(a, b):
    return a[0] < b[2] and b[0] < a[2] and a[1] < b[3] and b[1] < a[3]


class TestOutputPath:

    def test_suffixes(self):
        assert output_path("sheet") == Path("sheet.png")
        assert output_path("sheet.png") == Path("sheet.png")
        assert output_path("SHEET.PNG") == Path("SHEET.PNG")
        assert output_path("sheet.jpg") == Path("sheet.jpg.png")


class TestPacking:

    def test_boxes_fit_and_do_not_overlap(self):
        report = analyse(PALETTE, AnalysisConfig(mix_budget=64))
        boxes, height = pack_boxes(report)
        assert set(boxes) == {s.name for s in default_widgets(4)}
        values = list(boxes.values())
        for k, a in enumerate(values):
            assert a[2] <= SHEET_WIDTH and a[3] <= height
            for b in values[k + 1:]:
                assert not _overlaps(a, b)


class TestRenderer:

    def test_checkerboard_fill(self):
        r = SheetRenderer(10, 10, "#000000")
        r.primitive(Polygon.rect(0.0, 0.0, 1.0, 1.0, "#FF0000", fill_alt="#0000FF"), (0, 0, 10, 10))
        assert r.image.getpixel((2, 2)) == (255, 0, 0)
        assert r.image.getpixel((3, 2)) == (0, 0, 255)
        assert r.image.getpixel((3, 3)) == (255, 0, 0)

    def test_primitive_scaled_into_box(self):
        r = SheetRenderer(20, 20, "#000000")
        r.primitive(Polygon.rect(0.0, 0.0, 1.0, 1.0, "#FFFFFF"), (10, 10, 20, 20))
        assert r.image.getpixel((5, 5)) == (0, 0, 0)
        assert r.image.getpixel((15, 15)) == (255, 255, 255)

    def test_label_draws_text(self):
        r = SheetRenderer(60, 20, "#000000")
        r.primitive(Label(0.5, 0.5, "OK", "#FFFFFF", anchor="centre"), (0, 0, 60, 20))
        assert r.image.getbbox() is not None


class TestRenderSheet:

    def test_width_and_background(self):
        config = AnalysisConfig(widgets=(WidgetSpec(WidgetKind.MAIN_PALETTE),))
        report = analyse(PALETTE, config)
        image = render_sheet(report)
        assert image.width == SHEET_WIDTH
        assert image.getpixel((SHEET_WIDTH - 1, image.height - 1)) == (0x1A, 0x1C, 0x2C)

    def test_writes_png(self, tmp_path):
        report = analyse(PALETTE, AnalysisConfig(mix_budget=64))
        path = render_report(report, tmp_path / "sheet")
        assert path == tmp_path / "sheet.png"
        with Image.open(path) as img:
            assert img.format == "PNG"
            assert img.width == SHEET_WIDTH
