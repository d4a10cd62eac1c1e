# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""
Widget layout generators.

A widget turns a WidgetContext into drawable primitives in normalised
coordinates (origin top-left, y down, box [0, 1] x [0, 1]). Nothing here
touches pixels; see censor.runtime.render for that.

Usage::

    from censor.widgets import WidgetKind, WidgetSpec, generate

    layout = generate(WidgetSpec(WidgetKind.ACYCLIC), ctx)
"""

from __future__ import annotations

import math
from typing import Callable, Optional

from censor.schema.primitives import Primitive
from censor.widgets import fields, gauges, scatter, swatches
from censor.widgets.base import EvalState, WidgetContext
from censor.widgets.config import (
    CONFIG_TYPES,
    AcyclicConfig,
    ChromaLightnessHueConfig,
    CloseColoursConfig,
    ComplementariesConfig,
    DistributionConfig,
    GreyscaleConfig,
    HueChromaPolarConfig,
    HueLightnessPolarConfig,
    IndexedConfig,
    InternalSimilarityConfig,
    IsoCubesConfig,
    LightnessChromaConfig,
    MainPaletteConfig,
    NeutralisersConfig,
    RectHueLightnessConfig,
    RGBGridConfig,
    SpectroBoxConfig,
    SpectrumConfig,
    SpectrumVariant,
    UsefulMixesConfig,
    WidgetKind,
    WidgetSpec,
)


_GENERATORS: dict[WidgetKind, Callable[[WidgetContext, object], list[Primitive]]] = {
    WidgetKind.INDEXED: swatches.indexed,
    WidgetKind.MAIN_PALETTE: swatches.main_palette,
    WidgetKind.CLOSE_COLOURS: swatches.close_colours,
    WidgetKind.INTERNAL_SIMILARITY: gauges.internal_similarity,
    WidgetKind.ACYCLIC: gauges.acyclic,
    WidgetKind.SPECTRAL_DISTRIBUTION: gauges.spectral_distribution,
    WidgetKind.TEMPERATURE_DISTRIBUTION: gauges.temperature_distribution,
    WidgetKind.GREYSCALE: fields.greyscale,
    WidgetKind.ISO_CUBES: scatter.iso_cubes,
    WidgetKind.CHROMA_LIGHTNESS_HUE: scatter.chroma_lightness_hue,
    WidgetKind.HUE_CHROMA_POLAR: scatter.hue_chroma_polar,
    WidgetKind.HUE_LIGHTNESS_POLAR: fields.hue_lightness_polar,
    WidgetKind.RECT_HUE_LIGHTNESS: fields.rect_hue_lightness,
    WidgetKind.SPECTRUM: fields.spectrum,
    WidgetKind.USEFUL_MIXES: swatches.useful_mixes,
    WidgetKind.LIGHTNESS_CHROMA: swatches.lightness_chroma,
    WidgetKind.NEUTRALISERS: swatches.neutralisers,
    WidgetKind.COMPLEMENTARIES: fields.complementaries,
    WidgetKind.RGB_GRID: fields.rgb_grid,
    WidgetKind.SPECTRO_BOX: fields.spectro_box,
}

# Colour pairs at each sixth of the hue circle, starting from hue 0
COMPLEMENTARY_AXES = (
    "purple/seaweed",
    "red/cyan",
    "orange/blue",
    "olive/ultramarine",
    "lime/violet",
    "emerald/rose",
)

# Mixes and neutralisers are unreadable past this many colours
SWATCH_WIDGET_LIMIT = 64


def generate(spec: WidgetSpec, ctx: WidgetContext) -> tuple[Primitive, ...]:
    """
    Lay out one widget.

    Args:
        spec: Widget kind and configuration
        ctx: Palette and its precomputed artifacts

    Returns:
        Primitives in the widget's normalised box
    """
    return tuple(_GENERATORS[spec.kind](ctx, spec.config))


def default_widgets(n: Optional[int] = None) -> tuple[WidgetSpec, ...]:
    """
    The full analysis sheet, in drawing order.

    Args:
        n: Palette size; mixes and neutralisers are left out above
           SWATCH_WIDGET_LIMIT colours. None includes everything.
    """
    specs = [
        WidgetSpec(WidgetKind.INDEXED),
        WidgetSpec(WidgetKind.MAIN_PALETTE),
        WidgetSpec(WidgetKind.CLOSE_COLOURS),
        WidgetSpec(WidgetKind.INTERNAL_SIMILARITY),
        WidgetSpec(WidgetKind.ACYCLIC),
        WidgetSpec(WidgetKind.SPECTRAL_DISTRIBUTION),
        WidgetSpec(WidgetKind.TEMPERATURE_DISTRIBUTION),
        WidgetSpec(WidgetKind.GREYSCALE),
        WidgetSpec(WidgetKind.ISO_CUBES),
        WidgetSpec(WidgetKind.CHROMA_LIGHTNESS_HUE),
        WidgetSpec(WidgetKind.HUE_CHROMA_POLAR),
        WidgetSpec(WidgetKind.RECT_HUE_LIGHTNESS),
        WidgetSpec(WidgetKind.LIGHTNESS_CHROMA),
        WidgetSpec(WidgetKind.RGB_GRID),
        WidgetSpec(WidgetKind.SPECTRO_BOX),
    ]
    for chroma in (10.0, 50.0):
        for inverted in (False, True):
            suffix = "_inverted" if inverted else ""
            specs.append(WidgetSpec(
                WidgetKind.HUE_LIGHTNESS_POLAR,
                HueLightnessPolarConfig(chroma=chroma, inverted=inverted),
                name=f"hue_lightness_polar_c{chroma:g}{suffix}",
            ))
    for variant in SpectrumVariant:
        specs.append(WidgetSpec(
            WidgetKind.SPECTRUM, SpectrumConfig(variant=variant), name=f"spectrum_{variant.value}",
        ))
    for k, title in enumerate(COMPLEMENTARY_AXES):
        specs.append(WidgetSpec(
            WidgetKind.COMPLEMENTARIES,
            ComplementariesConfig(hue=k * math.pi / 6.0, title=title),
            name=f"complementaries_{k}",
        ))
    if n is None or n <= SWATCH_WIDGET_LIMIT:
        specs.append(WidgetSpec(WidgetKind.USEFUL_MIXES))
        specs.append(WidgetSpec(WidgetKind.NEUTRALISERS))
    return tuple(specs)


__all__ = [
    "CONFIG_TYPES",
    "COMPLEMENTARY_AXES",
    "SWATCH_WIDGET_LIMIT",
    "EvalState",
    "WidgetContext",
    "WidgetKind",
    "WidgetSpec",
    "SpectrumVariant",
    "AcyclicConfig",
    "ChromaLightnessHueConfig",
    "CloseColoursConfig",
    "ComplementariesConfig",
    "DistributionConfig",
    "GreyscaleConfig",
    "HueChromaPolarConfig",
    "HueLightnessPolarConfig",
    "IndexedConfig",
    "InternalSimilarityConfig",
    "IsoCubesConfig",
    "LightnessChromaConfig",
    "MainPaletteConfig",
    "NeutralisersConfig",
    "RectHueLightnessConfig",
    "RGBGridConfig",
    "SpectroBoxConfig",
    "SpectrumConfig",
    "UsefulMixesConfig",
    "generate",
    "default_widgets",
]
