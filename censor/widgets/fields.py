# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""
Field widgets: a grid of appearance-space samples, each cell painted with
the palette colour nearest to it.
"""

from __future__ import annotations

import numpy as np

from censor.engine.colorspace import appearance_from_polar, to_appearance, to_tristimulus
from censor.engine.locus import SPECTRAL_LOCUS, WAVELENGTH_MAX, WAVELENGTH_MIN
from censor.engine.statistics import nearest_indices
from censor.schema.primitives import Label, Polygon, Primitive
from censor.widgets.base import WidgetContext, circle_outline, field_polygons, grid_samples
from censor.widgets.config import (
    ComplementariesConfig,
    GreyscaleConfig,
    HueLightnessPolarConfig,
    RectHueLightnessConfig,
    RGBGridConfig,
    SpectroBoxConfig,
    SpectrumConfig,
    SpectrumVariant,
)


def rect_hue_lightness(ctx: WidgetContext, config: RectHueLightnessConfig) -> list[Primitive]:
    """Hue along x, lightness up y, at one fixed chroma."""
    x, y = grid_samples(config.columns, config.rows)
    coords = appearance_from_polar(y * 100.0, config.chroma, x * 2.0 * np.pi)
    return field_polygons(nearest_indices(ctx.palette, coords), ctx.hexes)


def hue_lightness_polar(ctx: WidgetContext, config: HueLightnessPolarConfig) -> list[Primitive]:
    """
    Hue around the disc, lightness along the radius, at one fixed chroma.

    Black sits at the centre, or at the rim when inverted.
    """
    x, y = grid_samples(config.resolution, config.resolution)
    x, y = x * 2.0 - 1.0, y * 2.0 - 1.0
    r = np.hypot(x, y)
    hue = np.arctan2(y, x) % (2.0 * np.pi)
    J = (1.0 - r) * 100.0 if config.inverted else r * 100.0
    idx = nearest_indices(ctx.palette, appearance_from_polar(J, config.chroma, hue))
    idx = np.where(r <= 1.0, idx, -1)
    out = field_polygons(idx, ctx.hexes)
    out.append(circle_outline(0.5, 0.5, 0.5, ctx.frame))
    return out


def greyscale(ctx: WidgetContext, config: GreyscaleConfig) -> list[Primitive]:
    """
    Palette stand-ins for a neutral ramp, one column per li-match fraction,
    with each colour's own lightness marked alongside.
    """
    _, y = grid_samples(1, config.rows)
    greys = np.zeros((config.rows, 3))
    greys[:, 0] = y[:, 0] * 100.0
    columns = [nearest_indices(ctx.palette, greys, match) for match in config.matches]
    out = field_polygons(np.stack(columns, axis=1), ctx.hexes, box=(0.0, 0.0, 0.75, 1.0))

    row_h = 1.0 / config.rows
    mark_w = 0.25 / 8.0
    stacks: dict[int, int] = {}
    for i, colour in enumerate(ctx.palette):
        row = int(np.clip(round((1.0 - colour.appearance.J / 100.0) * (config.rows - 1)), 0, config.rows - 1))
        level = stacks.get(row, 0)
        stacks[row] = level + 1
        x0 = 0.78 + (level % 7) * mark_w
        out.append(Polygon.rect(x0, row * row_h, x0 + mark_w * 0.7, (row + 1) * row_h, ctx.hexes[i]))
    return out


def complementaries(ctx: WidgetContext, config: ComplementariesConfig) -> list[Primitive]:
    """
    Lightness runs along the diagonal; the anti-diagonal sweeps from one hue
    through grey to its opposite.
    """
    x, y = grid_samples(config.resolution, config.resolution)
    J = (x + y) / 2.0 * 100.0
    coords = appearance_from_polar(J, (y - x) * config.chroma, config.hue)
    out = field_polygons(nearest_indices(ctx.palette, coords), ctx.hexes)
    if config.title:
        out.append(Label(0.02, 0.05, config.title, ctx.ink))
    return out


def _locus_row(columns: int, spectral_share: float) -> np.ndarray:
    """Locus coordinates from violet to red, then along the purple line back."""
    n_spectral = max(1, int(columns * spectral_share))
    n_purple = columns - n_spectral
    wavelengths = np.linspace(WAVELENGTH_MIN, WAVELENGTH_MAX, n_spectral)
    samples = [SPECTRAL_LOCUS.wavelength_sample(w) for w in wavelengths]
    purple = [s for s in SPECTRAL_LOCUS.samples if not s.spectral]
    if n_purple > 0:
        picks = np.linspace(0, len(purple) - 1, n_purple).round().astype(int)
        samples += [purple[k] for k in picks]
    return np.array([s.appearance.to_array() for s in samples])


def spectrum(ctx: WidgetContext, config: SpectrumConfig) -> list[Primitive]:
    """
    Monochromatic colours from violet to red, then the purple line back,
    each quantised to the palette.
    """
    coords = _locus_row(config.columns, config.spectral_share)
    if config.variant is SpectrumVariant.CHROMA_50:
        coords[:, 1:] *= 0.5
    elif config.variant is SpectrumVariant.LIGHTNESS_50:
        coords[:, 0] *= 0.5
    idx = nearest_indices(ctx.palette, coords)[None, :]
    return field_polygons(idx, ctx.hexes)


def spectro_box(ctx: WidgetContext, config: SpectroBoxConfig) -> list[Primitive]:
    """
    The spectrum strip stretched vertically: each column fades from its
    locus colour up to white and down to black, losing chroma as it goes.
    """
    row = _locus_row(config.columns, config.spectral_share)
    _, y = grid_samples(1, config.rows)
    t = 2.0 * y - 1.0
    fade = 1.0 - t * t
    J = np.where(t < 0.0, row[None, :, 0] * (1.0 + t), row[None, :, 0] + (100.0 - row[None, :, 0]) * t)
    coords = np.stack([J, row[None, :, 1] * fade, row[None, :, 2] * fade], axis=-1)
    return field_polygons(nearest_indices(ctx.palette, coords), ctx.hexes)


def rgb_grid(ctx: WidgetContext, config: RGBGridConfig) -> list[Primitive]:
    """
    The reduced-precision RGB cube quantised to the palette: one tile per
    green level, red across and blue down each tile.
    """
    n = config.levels
    steps = np.round(np.linspace(0.0, 255.0, n)).astype(np.int64)
    tile_rows = -(-n // config.tiles_per_row)
    idx = np.full((tile_rows * n, min(n, config.tiles_per_row) * n), -1, dtype=np.int64)

    r, b = np.meshgrid(steps, steps)
    for k, g in enumerate(steps):
        rgb = np.stack([r, np.full_like(r, g), b], axis=-1)
        ty, tx = divmod(k, config.tiles_per_row)
        idx[ty * n:(ty + 1) * n, tx * n:(tx + 1) * n] = nearest_indices(
            ctx.palette, to_appearance(to_tristimulus(rgb)),
        )
    return field_polygons(idx, ctx.hexes)
