# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""
Request orchestration.

One request is one palette: every derived artifact is computed once, then
every configured widget is laid out from the same context. Any error aborts
the whole request; nothing partial is returned.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Union

from censor.engine.statistics import (
    DEFAULT_MIX_BUDGET,
    DEFAULT_MIX_LIMIT,
    GAMUT_BOUNDARY,
    acyclic_check,
    build_distance_matrix,
    build_neighbour_graph,
    derive_ui_roles,
    internal_similarity,
    neutralisers,
    search_mix_candidates,
    spectral_stats,
    temperature_stats,
)
from censor.schema.palette import CycleReport, Palette, UIRoles
from censor.schema.primitives import Primitive
from censor.widgets import WidgetContext, WidgetSpec, default_widgets, generate


logger = logging.getLogger(__name__)


METRIC_NAMES = ("iss", "acyclic", "cycles", "min_distance", "mean_distance")

MetricValue = Union[float, int, bool]


@dataclass(frozen=True)
class AnalysisConfig:
    """
    What one analysis request produces.

    Attributes:
        widgets: Widgets to lay out, in order. None selects the default sheet
            for the palette's size.
        neutral_ui: Draw frames and text in fixed greys instead of palette
            colours
        mix_budget: Total tristimulus mixes evaluated by the mix search
        mix_limit: Mix candidates kept
    """
    widgets: Optional[tuple[WidgetSpec, ...]] = None
    neutral_ui: bool = False
    mix_budget: int = DEFAULT_MIX_BUDGET
    mix_limit: int = DEFAULT_MIX_LIMIT

    def __post_init__(self) -> None:
        if self.mix_budget < 1:
            raise ValueError(f"mix_budget must be >= 1, got {self.mix_budget}")
        if self.mix_limit < 1:
            raise ValueError(f"mix_limit must be >= 1, got {self.mix_limit}")
        if self.widgets is not None:
            names = [spec.name for spec in self.widgets]
            if len(set(names)) != len(names):
                raise ValueError("Widget names must be unique")

    def widgets_for(self, palette: Palette) -> tuple[WidgetSpec, ...]:
        if self.widgets is None:
            return default_widgets(len(palette))
        return self.widgets


@dataclass(frozen=True)
class AnalysisReport:
    """
    Result of one analysis request.

    layouts maps each widget name to its primitives, in configured order.
    """
    palette: Palette
    roles: UIRoles
    metrics: Mapping[str, MetricValue]
    specs: tuple[WidgetSpec, ...]
    layouts: Mapping[str, tuple[Primitive, ...]] = field(default_factory=dict)

    def layout(self, name: str) -> tuple[Primitive, ...]:
        return self.layouts[name]

    def to_dict(self) -> dict[str, Any]:
        return {
            "palette": self.palette.to_dict(),
            "roles": self.roles.to_dict(),
            "metrics": dict(self.metrics),
            "widgets": [
                {
                    "name": spec.name,
                    "kind": spec.kind.value,
                    "primitives": [p.to_dict() for p in self.layouts[spec.name]],
                }
                for spec in self.specs
            ],
        }


# =============================================================================
# Metrics
# =============================================================================


def _metrics(cycles: CycleReport, matrix_values, similarity: float) -> dict[str, MetricValue]:
    return {
        "iss": similarity,
        "acyclic": cycles.acyclic,
        "cycles": len(cycles.cycles),
        "min_distance": float(matrix_values.min()),
        "mean_distance": float(matrix_values.mean()),
    }


def compute_metrics(
    palette: Palette,
    names: Optional[Sequence[str]] = None,
) -> dict[str, MetricValue]:
    """
    Machine-readable palette metrics.

    Args:
        palette: Palette to measure
        names: Metrics to return, in order; None for all of METRIC_NAMES

    Returns:
        Ordered mapping of metric name to value

    Raises:
        ValueError: If a name is not in METRIC_NAMES
        DegenerateMetric: If two colours are indistinguishable
    """
    names = tuple(METRIC_NAMES if names is None else names)
    unknown = [n for n in names if n not in METRIC_NAMES]
    if unknown:
        raise ValueError(f"Unknown metrics: {', '.join(unknown)}")

    matrix = build_distance_matrix(palette)
    cycles = acyclic_check(build_neighbour_graph(matrix))
    values = _metrics(cycles, matrix.off_diagonal(), internal_similarity(matrix))
    return {name: values[name] for name in names}


# =============================================================================
# Analysis
# =============================================================================


def build_context(palette: Palette, config: AnalysisConfig = AnalysisConfig()) -> WidgetContext:
    """Compute every artifact the widgets read."""
    matrix = build_distance_matrix(palette)
    graph = build_neighbour_graph(matrix)
    cycles = acyclic_check(graph)
    similarity = internal_similarity(matrix)
    logger.debug(
        "%d colours: iss=%.3f, %d neighbour cycles", len(palette), similarity, len(cycles.cycles)
    )
    temperatures = temperature_stats(palette)
    missing = sum(1 for e in temperatures.estimates if e is None)
    if missing:
        logger.debug("%d colours have no temperature estimate", missing)
    return WidgetContext(
        palette=palette,
        matrix=matrix,
        graph=graph,
        cycles=cycles,
        similarity=similarity,
        roles=derive_ui_roles(palette, neutral=config.neutral_ui),
        temperatures=temperatures,
        spectral=spectral_stats(palette),
        mixes=search_mix_candidates(palette, config.mix_budget, config.mix_limit),
        neutralisers=neutralisers(palette),
        gamut=GAMUT_BOUNDARY,
    )


def analyse(palette: Palette, config: AnalysisConfig = AnalysisConfig()) -> AnalysisReport:
    """
    Run the full analysis of one palette.

    Args:
        palette: Validated palette
        config: Widget selection and request options

    Returns:
        AnalysisReport with one layout per configured widget

    Raises:
        CensorError: Any core failure; no partial report is produced
    """
    started = time.perf_counter()
    ctx = build_context(palette, config)
    specs = config.widgets_for(palette)
    layouts = {}
    for spec in specs:
        layouts[spec.name] = generate(spec, ctx)
        logger.debug("widget %s: %d primitives", spec.name, len(layouts[spec.name]))
    logger.info(
        "Analysed %d colours into %d widgets in %.2fs",
        len(palette), len(specs), time.perf_counter() - started,
    )
    return AnalysisReport(
        palette=palette,
        roles=ctx.roles,
        metrics=_metrics(ctx.cycles, ctx.matrix.off_diagonal(), ctx.similarity),
        specs=specs,
        layouts=layouts,
    )
