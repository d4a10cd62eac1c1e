# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""
Swatch widgets: palette strips, close pairs, mixes and neutralisers.
"""

from __future__ import annotations

from censor.engine.statistics import close_colour_pairs, lightness_order
from censor.schema.primitives import Label, Polygon, Polyline, Primitive
from censor.widgets.base import WidgetContext, rect_outline
from censor.widgets.config import (
    CloseColoursConfig,
    IndexedConfig,
    LightnessChromaConfig,
    MainPaletteConfig,
    NeutralisersConfig,
    UsefulMixesConfig,
)


def indexed(ctx: WidgetContext, config: IndexedConfig) -> list[Primitive]:
    """Palette in index order on a fixed slot grid; unused slots are marked."""
    out: list[Primitive] = [rect_outline(0.0, 0.0, 1.0, 1.0, ctx.frame)]
    cw = 1.0 / config.columns
    ch = 1.0 / config.rows
    last = ctx.hexes[-1]
    for iy in range(config.rows):
        for ix in range(config.columns):
            i = iy * config.columns + ix
            x0, y0 = ix * cw, iy * ch
            if i < ctx.n:
                out.append(Polygon.rect(x0, y0, x0 + cw, y0 + ch, ctx.hexes[i]))
            else:
                out.append(Polygon.rect(x0, y0, x0 + cw, y0 + ch, last))
                out.append(Polyline(((x0 + cw * 0.2, y0 + ch * 0.25), (x0 + cw * 0.8, y0 + ch * 0.25)), ctx.ink))
                out.append(Polyline(((x0 + cw * 0.2, y0 + ch * 0.75), (x0 + cw * 0.8, y0 + ch * 0.75)), ctx.roles.blank))
    return out


def main_palette(ctx: WidgetContext, config: MainPaletteConfig) -> list[Primitive]:
    """One strip, darkest colour on the left."""
    out: list[Primitive] = []
    w = 1.0 / ctx.n
    for k, i in enumerate(lightness_order(ctx.palette)):
        outline = ctx.frame if config.frame_blank and i == ctx.blank_index else None
        out.append(Polygon.rect(k * w, 0.0, (k + 1) * w, 1.0, ctx.hexes[i], outline=outline))
    return out


def close_colours(ctx: WidgetContext, config: CloseColoursConfig) -> list[Primitive]:
    """
    Closest pairs, one row per lightness weighting.

    Each pair is a two-cell column (i above j); slots without a pair get a
    dithered placeholder.
    """
    out: list[Primitive] = []
    rows = close_colour_pairs(ctx.palette, config.weightings)
    band = 1.0 / len(config.weightings)
    cw = 1.0 / config.pairs
    for r, (weight, nearest) in enumerate(zip(config.weightings, rows)):
        seen = {}
        for p in nearest:
            key = (min(p.i, p.j), max(p.i, p.j))
            seen.setdefault(key, p.distance)
        ranked = sorted(seen.items(), key=lambda kv: (kv[1], kv[0]))[:config.pairs]

        top = r * band
        label_h = band * 0.3
        out.append(Label(0.5, top + label_h / 2.0, f"close cols: lightness x{weight:g}", ctx.ink, anchor="centre"))
        cell_top = top + label_h
        cell_h = (band - label_h) / 2.0
        for k in range(config.pairs):
            x0 = k * cw
            x1 = x0 + cw * 0.9
            if k < len(ranked):
                (i, j), _ = ranked[k]
                outline = ctx.frame if ctx.blank_index in (i, j) else None
                out.append(Polygon.rect(x0, cell_top, x1, cell_top + cell_h, ctx.hexes[i], outline=outline))
                out.append(Polygon.rect(x0, cell_top + cell_h, x1, cell_top + 2 * cell_h, ctx.hexes[j], outline=outline))
            else:
                out.append(Polygon.rect(
                    x0, cell_top, x1, cell_top + 2 * cell_h, ctx.frame, fill_alt=ctx.roles.blank,
                ))
    return out


def useful_mixes(ctx: WidgetContext, config: UsefulMixesConfig) -> list[Primitive]:
    """
    Best mixing pairs as dithered cells, each with its mixed colour below.

    A pair appears once, at the rank of its best mix.
    """
    out: list[Primitive] = []
    slots = config.columns * config.rows
    pairs = []
    for m in ctx.mixes:
        if all(m.pair != p.pair for p in pairs):
            pairs.append(m)
        if len(pairs) == slots:
            break
    cw = 1.0 / config.columns
    ch = 1.0 / config.rows
    for k in range(slots):
        x0 = (k % config.columns) * cw
        y0 = (k // config.columns) * ch
        x1, y1 = x0 + cw * 0.9, y0 + ch * 0.9
        if k < len(pairs):
            mix = pairs[k]
            i, j = mix.pair
            split = y0 + (y1 - y0) * 0.7
            out.append(Polygon.rect(x0, y0, x1, split, ctx.hexes[i], fill_alt=ctx.hexes[j]))
            out.append(Polygon.rect(x0, split, x1, y1, mix.colour.hex))
        else:
            out.append(rect_outline(x0, y0, x1, y1, ctx.frame))
    return out


def lightness_chroma(ctx: WidgetContext, config: LightnessChromaConfig) -> list[Primitive]:
    """
    Per-colour bars in index order: lightness grows left from the middle,
    chroma grows right.
    """
    out: list[Primitive] = [
        Label(0.0, 0.02, "LI", ctx.ink),
        Label(1.0, 0.02, "CHR", ctx.ink, anchor="right"),
    ]
    top = 0.05
    row_h = (1.0 - top) / ctx.n
    half = 0.46
    right = 1.0 - half
    for i, colour in enumerate(ctx.palette):
        y0 = top + i * row_h
        y1 = y0 + row_h * 0.85
        J = min(max(colour.appearance.J / 100.0, 0.0), 1.0)
        C = min(max(colour.appearance.chroma / config.max_chroma, 0.0), 1.0)
        if J > 0.0:
            out.append(Polygon.rect(half - J * half, y0, half, y1, ctx.hexes[i]))
        if C > 0.0:
            out.append(Polygon.rect(right, y0, right + C * half, y1, ctx.hexes[i]))
        out.append(rect_outline(0.0, y0, half, y1, ctx.frame, dotted=True))
        out.append(rect_outline(right, y0, 1.0, y1, ctx.frame, dotted=True))
    return out


def neutralisers(ctx: WidgetContext, config: NeutralisersConfig) -> list[Primitive]:
    """
    For each colour in lightness order, the colour that greys it out: the
    partner swatch on top, the dithered pair beneath. Empty where none exists;
    a palette with no neutralising pair at all gets a note instead.
    """
    out: list[Primitive] = []
    if all(j is None for j in ctx.neutralisers):
        out.append(Label(0.5, 0.5, "no neutralisers", ctx.ink, anchor="centre"))
        return out
    w = 1.0 / ctx.n
    split = config.swatch_share
    for k, i in enumerate(lightness_order(ctx.palette)):
        j = ctx.neutralisers[i]
        if j is None:
            continue
        x0, x1 = k * w + w * 0.1, (k + 1) * w - w * 0.1
        out.append(Polygon.rect(x0, 0.0, x1, split, ctx.hexes[j]))
        out.append(Polygon.rect(x0, split, x1, 1.0, ctx.hexes[j], fill_alt=ctx.hexes[i]))
    return out
