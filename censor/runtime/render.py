# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""
Raster rendering of an AnalysisReport with Pillow.

Widgets are packed into rows in sheet order, each in a box of fixed pixel
size for its kind; primitives are scaled from the normalised box into it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, ImageChops, ImageDraw, ImageFont

from censor import __version__
from censor.runtime.orchestrator import AnalysisReport
from censor.schema.primitives import Label, Point, Polygon, Polyline, Primitive
from censor.widgets import WidgetKind


logger = logging.getLogger(__name__)


SHEET_WIDTH = 800
MARGIN = 8
TITLE_HEIGHT = 24
DOT_SPACING = 3

# Pixel box per widget kind: (width, height)
BOX_SIZES: dict[WidgetKind, tuple[int, int]] = {
    WidgetKind.INDEXED: (256, 64),
    WidgetKind.MAIN_PALETTE: (256, 24),
    WidgetKind.CLOSE_COLOURS: (256, 96),
    WidgetKind.INTERNAL_SIMILARITY: (120, 80),
    WidgetKind.ACYCLIC: (120, 80),
    WidgetKind.SPECTRAL_DISTRIBUTION: (256, 80),
    WidgetKind.TEMPERATURE_DISTRIBUTION: (256, 80),
    WidgetKind.GREYSCALE: (128, 128),
    WidgetKind.ISO_CUBES: (256, 128),
    WidgetKind.CHROMA_LIGHTNESS_HUE: (256, 128),
    WidgetKind.HUE_CHROMA_POLAR: (128, 128),
    WidgetKind.HUE_LIGHTNESS_POLAR: (96, 96),
    WidgetKind.RECT_HUE_LIGHTNESS: (128, 128),
    WidgetKind.SPECTRUM: (256, 16),
    WidgetKind.USEFUL_MIXES: (128, 128),
    WidgetKind.LIGHTNESS_CHROMA: (128, 160),
    WidgetKind.NEUTRALISERS: (256, 40),
    WidgetKind.COMPLEMENTARIES: (96, 96),
    WidgetKind.RGB_GRID: (256, 64),
    WidgetKind.SPECTRO_BOX: (256, 84),
}

Box = tuple[int, int, int, int]


def _hex_rgb(colour: str) -> tuple[int, int, int]:
    return int(colour[1:3], 16), int(colour[3:5], 16), int(colour[5:7], 16)


def pack_boxes(report: AnalysisReport, width: int = SHEET_WIDTH) -> tuple[dict[str, Box], int]:
    """
    Shelf-pack widget boxes under the title.

    Returns:
        (boxes keyed by widget name as (x0, y0, x1, y1), sheet height)
    """
    boxes: dict[str, Box] = {}
    x, y = MARGIN, TITLE_HEIGHT + MARGIN
    row_h = 0
    for spec in report.specs:
        w, h = BOX_SIZES[spec.kind]
        if x > MARGIN and x + w > width - MARGIN:
            x, y = MARGIN, y + row_h + MARGIN
            row_h = 0
        boxes[spec.name] = (x, y, x + w, y + h)
        x += w + MARGIN
        row_h = max(row_h, h)
    return boxes, y + row_h + MARGIN


class SheetRenderer:
    """Draws primitives onto one RGB canvas."""

    def __init__(self, width: int, height: int, background: str):
        self.image = Image.new("RGB", (width, height), _hex_rgb(background))
        self.draw = ImageDraw.Draw(self.image)
        self.font = ImageFont.load_default()
        yy, xx = np.indices((height, width))
        self._checker = Image.fromarray(((xx + yy) % 2 * 255).astype(np.uint8))

    def text(self, x: float, y: float, text: str, colour: str, anchor: str = "left") -> None:
        left, top, right, bottom = self.draw.textbbox((0, 0), text, font=self.font)
        w, h = right - left, bottom - top
        if anchor == "centre":
            x -= w / 2.0
        elif anchor == "right":
            x -= w
        self.draw.text((x - left, y - top - h / 2.0), text, fill=_hex_rgb(colour), font=self.font)

    def _line(self, points: list[tuple[float, float]], colour: str, dotted: bool) -> None:
        rgb = _hex_rgb(colour)
        if not dotted:
            self.draw.line(points, fill=rgb, width=1)
            return
        for (x0, y0), (x1, y1) in zip(points, points[1:]):
            steps = max(1, int(np.hypot(x1 - x0, y1 - y0) // DOT_SPACING))
            for k in range(steps + 1):
                t = k / steps
                self.draw.point((x0 + (x1 - x0) * t, y0 + (y1 - y0) * t), fill=rgb)

    def _polygon(self, points: list[tuple[float, float]], prim: Polygon) -> None:
        self.draw.polygon(points, fill=_hex_rgb(prim.fill))
        if prim.fill_alt is not None:
            mask = Image.new("L", self.image.size, 0)
            ImageDraw.Draw(mask).polygon(points, fill=255)
            mask = ImageChops.multiply(mask, self._checker)
            self.image.paste(_hex_rgb(prim.fill_alt), mask=mask)
        if prim.outline is not None:
            self.draw.polygon(points, outline=_hex_rgb(prim.outline))

    def primitive(self, prim: Primitive, box: Box) -> None:
        x0, y0, x1, y1 = box
        w, h = x1 - x0, y1 - y0

        def at(px: float, py: float) -> tuple[float, float]:
            return x0 + px * w, y0 + py * h

        if isinstance(prim, Point):
            cx, cy = at(prim.x, prim.y)
            r = max(prim.size * w / 2.0, 0.5)
            outline = _hex_rgb(prim.outline) if prim.outline else None
            self.draw.ellipse((cx - r, cy - r, cx + r, cy + r), fill=_hex_rgb(prim.colour), outline=outline)
        elif isinstance(prim, Polyline):
            points = [at(px, py) for px, py in prim.points]
            if prim.closed:
                points.append(points[0])
            self._line(points, prim.colour, prim.dotted)
        elif isinstance(prim, Polygon):
            self._polygon([at(px, py) for px, py in prim.points], prim)
        elif isinstance(prim, Label):
            self.text(*at(prim.x, prim.y), prim.text, prim.colour, prim.anchor)
        else:
            raise TypeError(f"Unknown primitive: {type(prim).__name__}")


def render_sheet(report: AnalysisReport, width: int = SHEET_WIDTH) -> Image.Image:
    """Draw every widget of report onto a new image."""
    boxes, height = pack_boxes(report, width)
    renderer = SheetRenderer(width, height, report.roles.blank)
    renderer.text(
        width / 2.0, TITLE_HEIGHT / 2.0,
        f"= CENSOR v{__version__} - PALETTE ANALYSER =", report.roles.title, anchor="centre",
    )
    for spec in report.specs:
        for prim in report.layouts[spec.name]:
            renderer.primitive(prim, boxes[spec.name])
    return renderer.image


def output_path(path: Union[str, Path]) -> Path:
    """Force a .png suffix; other suffixes are kept and .png appended."""
    path = Path(path)
    if path.suffix.lower() != ".png":
        path = path.with_name(path.name + ".png")
    return path


def render_report(report: AnalysisReport, path: Union[str, Path]) -> Path:
    """
    Render report and save it as PNG.

    Returns:
        The path actually written
    """
    path = output_path(path)
    image = render_sheet(report)
    image.save(path, format="PNG")
    logger.info("Wrote %s (%dx%d)", path, image.width, image.height)
    return path
