# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""
Shared inputs and geometry helpers for widget layout generators.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from censor.schema.palette import (
    CycleReport,
    DistanceMatrix,
    MixCandidate,
    NeighbourGraph,
    Palette,
    SpectralStats,
    TemperatureStats,
    UIRoles,
)
from censor.schema.primitives import Label, Polygon, Polyline, Primitive


@dataclass(frozen=True, eq=False)
class WidgetContext:
    """
    Everything a generator may read: the palette and its derived artifacts.

    Built once per request by the orchestrator.
    """
    palette: Palette
    matrix: DistanceMatrix
    graph: NeighbourGraph
    cycles: CycleReport
    similarity: float
    roles: UIRoles
    temperatures: TemperatureStats
    spectral: SpectralStats
    mixes: tuple[MixCandidate, ...]
    neutralisers: tuple[Optional[int], ...]
    gamut: NDArray[np.float64]

    @property
    def hexes(self) -> tuple[str, ...]:
        return self.palette.hexes

    @property
    def n(self) -> int:
        return len(self.palette)

    @property
    def frame(self) -> str:
        """Colour for frames and guide lines."""
        return self.roles.background

    @property
    def ink(self) -> str:
        """Colour for curves and text."""
        return self.roles.foreground

    @property
    def blank_index(self) -> Optional[int]:
        return self.roles.indices[0] if self.roles.indices else None


class EvalState(Enum):
    """Verdict badge shown next to a metric."""

    OK = "OK"
    WARN = "WARN"
    ALERT = "ALERT"


# =============================================================================
# Geometry
# =============================================================================


def rect_outline(x0: float, y0: float, x1: float, y1: float, colour: str, dotted: bool = False) -> Polyline:
    return Polyline(((x0, y0), (x1, y0), (x1, y1), (x0, y1)), colour, closed=True, dotted=dotted)


def circle_outline(cx: float, cy: float, r: float, colour: str, segments: int = 64, dotted: bool = False) -> Polyline:
    t = np.linspace(0.0, 2.0 * np.pi, segments, endpoint=False)
    points = tuple((float(cx + r * np.cos(a)), float(cy - r * np.sin(a))) for a in t)
    return Polyline(points, colour, closed=True, dotted=dotted)


def grid_samples(columns: int, rows: int) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """
    Sample coordinates for a cell grid.

    Returns:
        (x, y) arrays of shape (rows, columns); x runs 0..1 left to right,
        y runs 1..0 top to bottom
    """
    xs = np.linspace(0.0, 1.0, columns) if columns > 1 else np.array([0.5])
    ys = np.linspace(1.0, 0.0, rows) if rows > 1 else np.array([0.5])
    return np.meshgrid(xs, ys)


def field_polygons(
    indices: NDArray[np.int64],
    hexes: Sequence[str],
    box: tuple[float, float, float, float] = (0.0, 0.0, 1.0, 1.0),
) -> list[Primitive]:
    """
    Turn a grid of palette indices into filled rectangles.

    Horizontal runs of one index merge into a single rectangle; -1 cells
    are left empty.
    """
    x0, y0, x1, y1 = box
    rows, columns = indices.shape
    cw = (x1 - x0) / columns
    ch = (y1 - y0) / rows
    out: list[Primitive] = []
    for r in range(rows):
        row = indices[r]
        start = 0
        for c in range(1, columns + 1):
            if c < columns and row[c] == row[start]:
                continue
            if row[start] >= 0:
                out.append(Polygon.rect(
                    x0 + start * cw, y0 + r * ch, x0 + c * cw, y0 + (r + 1) * ch,
                    hexes[int(row[start])],
                ))
            start = c
    return out


def kde_curve(
    centres: Sequence[float],
    weights: Sequence[float],
    resolution: int,
    bandwidth: float,
) -> NDArray[np.float64]:
    """
    Gaussian kernel density over [0, 1], scaled so the peak is 1.

    An empty or all-zero input gives a flat zero curve.
    """
    xs = np.linspace(0.0, 1.0, resolution)
    c = np.asarray(centres, dtype=np.float64)
    w = np.asarray(weights, dtype=np.float64)
    if c.size == 0:
        return np.zeros(resolution)
    t = (xs[:, None] - c[None, :]) / bandwidth
    data = (w[None, :] * np.exp(-0.5 * t * t)).sum(axis=1)
    peak = float(data.max())
    return data / peak if peak > 0.0 else data


def eval_badge(state: EvalState, x: float, y: float, size: float, colour: str) -> list[Primitive]:
    """Framed verdict label with its top-left corner at (x, y)."""
    return [
        rect_outline(x, y, x + size, y + size, colour),
        Label(x + size / 2.0, y + size / 2.0, state.value, colour, anchor="centre"),
    ]
