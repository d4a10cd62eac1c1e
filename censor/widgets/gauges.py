# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""
Metric gauges: internal similarity, acyclicity, and the wavelength and
temperature distributions.
"""

from __future__ import annotations

from typing import Sequence

from censor.engine.locus import WAVELENGTH_MAX, WAVELENGTH_MIN
from censor.schema.primitives import Label, Point, Polygon, Polyline, Primitive
from censor.widgets.base import EvalState, WidgetContext, eval_badge, kde_curve, rect_outline
from censor.widgets.config import AcyclicConfig, DistributionConfig, InternalSimilarityConfig


_BADGE = 0.22


def internal_similarity(ctx: WidgetContext, config: InternalSimilarityConfig) -> list[Primitive]:
    """Score bar from minimum to alert, with the warn threshold marked."""
    iss = ctx.similarity
    span = config.alert - config.minimum
    progress = min(max((iss - config.minimum) / span, 0.0), 1.0)
    threshold = (config.warn - config.minimum) / span

    if iss < config.warn:
        state = EvalState.OK
    elif iss < config.alert:
        state = EvalState.WARN
    else:
        state = EvalState.ALERT

    bx0, bx1, by0, by1 = 0.05, 0.95, 0.72, 0.88
    out: list[Primitive] = [
        rect_outline(0.0, 0.0, 1.0, 1.0, ctx.frame),
        Label(0.05, 0.15, "internal", ctx.ink),
        Label(0.05, 0.35, "similarity", ctx.ink),
        Label(0.05, 0.55, f"{iss:.2f}", ctx.ink),
        rect_outline(bx0, by0, bx1, by1, ctx.frame),
    ]
    if progress > 0.0:
        out.append(Polygon.rect(bx0, by0, bx0 + (bx1 - bx0) * progress, by1, ctx.ink))
    tx = bx0 + (bx1 - bx0) * threshold
    out.append(Polyline(((tx, by0 - 0.04), (bx1, by0 - 0.04)), ctx.frame))
    out.append(Polyline(((tx, by1 + 0.04), (bx1, by1 + 0.04)), ctx.frame))
    out.extend(eval_badge(state, 1.0 - _BADGE, 0.0, _BADGE, ctx.ink))
    return out


def acyclic(ctx: WidgetContext, config: AcyclicConfig) -> list[Primitive]:
    """
    Whether nearest-neighbour links close any loop of three or more colours.

    Mutual nearest pairs are counted separately rather than as loops.
    """
    report = ctx.cycles
    loops = report.long_cycles
    no_loops = not loops
    state = EvalState.WARN if no_loops and ctx.n > config.warn_above else EvalState.OK

    out: list[Primitive] = [
        rect_outline(0.0, 0.0, 1.0, 1.0, ctx.frame),
        Label(0.5, 0.15, "acyclic?", ctx.ink, anchor="centre"),
        Label(0.5, 0.4, "<yes>" if no_loops else "<no>", ctx.ink, anchor="centre"),
        Label(0.05, 0.65, f"pairs: {len(report.mutual_pairs)}", ctx.ink),
        Label(0.05, 0.85, f"loops: {len(loops)}", ctx.ink),
    ]
    if loops:
        members = "-".join(str(i) for i in loops[0])
        out.append(Label(0.95, 0.85, members, ctx.ink, anchor="right"))
    out.extend(eval_badge(state, 1.0 - _BADGE, 0.0, _BADGE, ctx.ink))
    return out


def _distribution(
    ctx: WidgetContext,
    config: DistributionConfig,
    positions: Sequence[tuple[int, float, float]],
    left: str,
    right: str,
) -> list[Primitive]:
    """
    Density curve plus stacked colour marks.

    positions holds (palette index, x in [0, 1], weight) per placed colour.
    """
    px0, px1, py0, py1 = 0.03, 0.97, 0.04, 0.8
    curve = kde_curve([p[1] for p in positions], [p[2] for p in positions],
                      config.resolution, config.bandwidth)
    xs = [px0 + (px1 - px0) * k / (config.resolution - 1) for k in range(config.resolution)]
    points = tuple((x, py1 - (py1 - py0) * float(v)) for x, v in zip(xs, curve))

    out: list[Primitive] = [rect_outline(0.0, 0.0, 1.0, py1 + 0.04, ctx.frame)]
    stacks: dict[int, int] = {}
    step = 0.05
    for i, x, _ in sorted(positions, key=lambda p: ctx.palette[p[0]].appearance.chroma):
        bucket = int(round(x * (config.resolution - 1)))
        height = max(1, int(curve[bucket] * (py1 - py0) / step))
        level = stacks.get(bucket, 0)
        stacks[bucket] = level + 1
        out.append(Point(px0 + (px1 - px0) * x, py1 - step * (level % height), ctx.hexes[i], size=0.03))
    out.append(Polyline(points, ctx.ink))
    out.append(Label(0.0, 0.94, left, ctx.frame))
    out.append(Label(1.0, 0.94, right, ctx.frame, anchor="right"))
    return out


def spectral_distribution(ctx: WidgetContext, config: DistributionConfig) -> list[Primitive]:
    """Chroma-weighted dominant wavelengths across the visible range."""
    span = WAVELENGTH_MAX - WAVELENGTH_MIN
    positions = [
        (i, (w - WAVELENGTH_MIN) / span, weight)
        for i, (w, weight) in enumerate(zip(ctx.spectral.wavelengths, ctx.spectral.weights))
        if w is not None
    ]
    return _distribution(ctx, config, positions, f"{WAVELENGTH_MIN:g}", f"{WAVELENGTH_MAX:g}")


def temperature_distribution(ctx: WidgetContext, config: DistributionConfig) -> list[Primitive]:
    """Correlated colour temperatures on a log axis, cold on the left."""
    positions = [
        (i, est.score, weight)
        for i, (est, weight) in enumerate(zip(ctx.temperatures.estimates, ctx.temperatures.weights))
        if est is not None
    ]
    return _distribution(ctx, config, positions, "COLD", "WARM")
