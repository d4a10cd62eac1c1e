# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""
Scatter widgets: palette colours placed by their appearance coordinates.

Hue is meaningless for fewer than three colours, so the hue-based plots fall
back to a lightness axis with a note.
"""

from __future__ import annotations

import math

import numpy as np

from censor.engine.statistics import PRIMARY_HUES
from censor.schema.primitives import Label, Point, Polyline, Primitive
from censor.widgets.base import WidgetContext, circle_outline, rect_outline
from censor.widgets.config import ChromaLightnessHueConfig, HueChromaPolarConfig, IsoCubesConfig


_MIN_HUE_COLOURS = 3


def _point_size(n: int, scale: float, lo: float, hi: float) -> float:
    return min(max(scale / math.sqrt(n), lo), hi)


def iso_cubes(ctx: WidgetContext, config: IsoCubesConfig) -> list[Primitive]:
    """
    The (a, b, J) cube in isometric projection, once per view angle.

    Each view turns the cube a further quarter turn about the lightness axis.
    """
    out: list[Primitive] = []
    coords = ctx.palette.appearance_array
    base = np.stack([
        np.clip(coords[:, 1] / 200.0 + 0.5, 0.0, 1.0),
        np.clip(coords[:, 2] / 200.0 + 0.5, 0.0, 1.0),
        np.clip(coords[:, 0] / 100.0, 0.0, 1.0),
    ], axis=1)
    size = _point_size(ctx.n, 0.4, 0.025, 0.06)
    width = 1.0 / config.angles
    for view in range(config.angles):
        vx0 = view * width + width * 0.04
        vx1 = (view + 1) * width - width * 0.04
        cx = (vx0 + vx1) / 2.0
        w = vx1 - vx0
        hexagon = ((cx, 0.0), (vx1, 0.25), (vx1, 0.75), (cx, 1.0), (vx0, 0.75), (vx0, 0.25))
        out.append(Polyline(hexagon, ctx.frame, closed=True))
        for k in (0, 2, 4):
            out.append(Polyline(((cx, 0.5), hexagon[k]), ctx.frame))

        pts = base.copy()
        for _ in range(view % 4):
            pts = np.stack([1.0 - pts[:, 1], pts[:, 0], pts[:, 2]], axis=1)
        depth = pts.sum(axis=1)
        for i in np.argsort(depth, kind="stable"):
            px, py, pz = pts[i]
            x = cx + (py - px) * w / 2.0
            y = 0.5 + (px + py) * 0.25 - pz * 0.5
            outline = ctx.frame if i == ctx.blank_index else None
            out.append(Point(float(x), float(y), ctx.hexes[i], size=size, outline=outline))
    return out


def chroma_lightness_hue(ctx: WidgetContext, config: ChromaLightnessHueConfig) -> list[Primitive]:
    """
    Lightness against hue, split into three chroma bands on the left and
    all colours together on the right.
    """
    low, high = config.bands
    coords = ctx.palette.appearance_array
    J = np.clip(coords[:, 0] / 100.0, 0.0, 1.0)
    chroma = np.hypot(coords[:, 1], coords[:, 2])
    hue = np.arctan2(coords[:, 2], coords[:, 1]) % (2.0 * math.pi) / (2.0 * math.pi)
    reduced = ctx.n < _MIN_HUE_COLOURS
    if reduced:
        hue = np.full(ctx.n, 0.5)
    group = np.where(chroma < low, 0, np.where(chroma < high, 1, 2))

    out: list[Primitive] = [Label(0.06, 0.02, "CHR", ctx.ink)]
    bx0, bx1 = 0.06, 0.3
    band_h = 0.96 / 3.0
    counts = np.bincount(group, minlength=3)
    for g in range(3):
        y0 = 0.04 + (2 - g) * band_h
        out.append(rect_outline(bx0, y0, bx1, y0 + band_h, ctx.frame))
        if counts[g]:
            half = counts[g] / ctx.n * band_h / 2.0
            mid = y0 + band_h / 2.0
            out.append(Polyline(((0.02, mid - half), (0.02, mid + half)), ctx.ink))
    for i in range(ctx.n):
        y0 = 0.04 + (2 - group[i]) * band_h
        x = bx0 + 0.01 + J[i] * (bx1 - bx0 - 0.02)
        y = y0 + band_h - 0.01 - hue[i] * (band_h - 0.02)
        out.append(Point(float(x), float(y), ctx.hexes[i], size=0.01))

    px0, px1, py0, py1 = 0.34, 1.0, 0.04, 1.0
    out.append(Label(px1, 0.02, "LI-HUE", ctx.ink, anchor="right"))
    out.append(rect_outline(px0, py0, px1, py1, ctx.frame))
    for k in range(1, 6):
        gy = py0 + k * (py1 - py0) / 6.0
        out.append(Polyline(((px0, gy), (px1, gy)), ctx.frame, dotted=True))
    out.append(Polyline((((px0 + px1) / 2.0, py0), ((px0 + px1) / 2.0, py1)), ctx.frame))
    size = _point_size(ctx.n, 0.12, 0.01, 0.05)
    for i in range(ctx.n):
        x = px0 + 0.03 + J[i] * (px1 - px0 - 0.06)
        y = py1 - 0.03 - hue[i] * (py1 - py0 - 0.06)
        outline = ctx.frame if i == ctx.blank_index else None
        out.append(Point(float(x), float(y), ctx.hexes[i], size=size, outline=outline))
    if reduced:
        out.append(Label((px0 + px1) / 2.0, 0.5, "hue needs 3+ colours", ctx.ink, anchor="centre"))
    return out


def hue_chroma_polar(ctx: WidgetContext, config: HueChromaPolarConfig) -> list[Primitive]:
    """
    Hue around the disc, chroma out from the centre, inside the sRGB gamut
    boundary. Primary and secondary hues are marked on the rim.
    """
    cx = cy = r = 0.5
    out: list[Primitive] = [
        circle_outline(cx, cy, r, ctx.frame),
        Polyline(((cx - 0.05, cy), (cx + 0.05, cy)), ctx.frame),
        Polyline(((cx, cy - 0.05), (cx, cy + 0.05)), ctx.frame),
    ]
    for ring in (0.25, 0.5, 0.75):
        out.append(circle_outline(cx, cy, r * ring, ctx.frame, dotted=True))

    buckets = len(ctx.gamut)
    angles = (np.arange(buckets) + 0.5) / buckets * 2.0 * math.pi
    radii = np.clip(ctx.gamut / config.max_chroma, 0.0, 1.0) * r * 0.9
    boundary = tuple(
        (float(cx + rr * math.cos(a)), float(cy - rr * math.sin(a))) for a, rr in zip(angles, radii)
    )
    out.append(Polyline(boundary, ctx.ink, closed=True))

    for label, h, c in PRIMARY_HUES:
        rr = min(c / config.max_chroma, 1.0) * r * 0.9 + 0.05
        rr = min(rr, r - 0.02)
        out.append(Label(cx + rr * math.cos(h), cy - rr * math.sin(h), label, ctx.ink, anchor="centre"))

    reduced = ctx.n < _MIN_HUE_COLOURS
    for i, colour in enumerate(ctx.palette):
        rel = min(colour.appearance.chroma / config.max_chroma, 1.0)
        if rel <= 0.1:
            rel = 0.0
        if reduced:
            # lightness along the horizontal diameter
            J = min(max(colour.appearance.J / 100.0, 0.0), 1.0)
            x, y = cx + (J * 2.0 - 1.0) * r * 0.9, cy
        else:
            h = colour.appearance.hue
            x = cx + rel * r * 0.9 * math.cos(h)
            y = cy - rel * r * 0.9 * math.sin(h)
        size = 0.03 + rel * 0.04
        outline = ctx.frame if i == ctx.blank_index else None
        out.append(Point(x, y, ctx.hexes[i], size=size, outline=outline))
    if reduced:
        out.append(Label(cx, cy + r * 0.6, "hue needs 3+ colours", ctx.ink, anchor="centre"))
    return out
