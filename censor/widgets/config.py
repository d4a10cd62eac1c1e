# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""
Widget selector and per-widget configuration.

Each WidgetKind has exactly one frozen config type; WidgetSpec pairs the two
and is the only way a widget is requested.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class WidgetKind(Enum):
    """Closed set of analysis widgets."""

    INDEXED = "indexed"
    MAIN_PALETTE = "main_palette"
    CLOSE_COLOURS = "close_colours"
    INTERNAL_SIMILARITY = "internal_similarity"
    ACYCLIC = "acyclic"
    SPECTRAL_DISTRIBUTION = "spectral_distribution"
    TEMPERATURE_DISTRIBUTION = "temperature_distribution"
    GREYSCALE = "greyscale"
    ISO_CUBES = "iso_cubes"
    CHROMA_LIGHTNESS_HUE = "chroma_lightness_hue"
    HUE_CHROMA_POLAR = "hue_chroma_polar"
    HUE_LIGHTNESS_POLAR = "hue_lightness_polar"
    RECT_HUE_LIGHTNESS = "rect_hue_lightness"
    SPECTRUM = "spectrum"
    USEFUL_MIXES = "useful_mixes"
    LIGHTNESS_CHROMA = "lightness_chroma"
    NEUTRALISERS = "neutralisers"
    COMPLEMENTARIES = "complementaries"
    RGB_GRID = "rgb_grid"
    SPECTRO_BOX = "spectro_box"


class SpectrumVariant(Enum):
    """Which appearance transform the spectrum strip is drawn with."""

    FULL = "full"
    CHROMA_50 = "chroma_50"
    LIGHTNESS_50 = "lightness_50"


# =============================================================================
# Per-widget configuration
# =============================================================================


@dataclass(frozen=True, slots=True)
class IndexedConfig:
    columns: int = 32
    rows: int = 8


@dataclass(frozen=True, slots=True)
class MainPaletteConfig:
    """Strip of colours sorted by lightness."""
    frame_blank: bool = True


@dataclass(frozen=True, slots=True)
class CloseColoursConfig:
    """
    Attributes:
        weightings: Lightness-axis scales; one row of pairs per weighting
        pairs: Closest pairs shown per row
    """
    weightings: tuple[float, ...] = (1.0, 3.0)
    pairs: int = 10


@dataclass(frozen=True, slots=True)
class InternalSimilarityConfig:
    """Score thresholds; the bar spans minimum..alert."""
    minimum: float = 0.4
    warn: float = 2.0
    alert: float = 3.5

    def __post_init__(self) -> None:
        if not self.minimum < self.warn < self.alert:
            raise ValueError("Thresholds must satisfy minimum < warn < alert")


@dataclass(frozen=True, slots=True)
class AcyclicConfig:
    """A palette larger than warn_above with no loops is flagged."""
    warn_above: int = 3


@dataclass(frozen=True, slots=True)
class DistributionConfig:
    """
    Attributes:
        resolution: Number of curve samples across the box
        bandwidth: Gaussian kernel width, as a fraction of the axis
    """
    resolution: int = 96
    bandwidth: float = 1.0 / 48.0


@dataclass(frozen=True, slots=True)
class GreyscaleConfig:
    """
    Attributes:
        matches: Li-match fractions, one column each, left to right
        rows: Lightness steps, top = white
    """
    matches: tuple[float, ...] = (0.0, 0.25, 0.5, 0.75, 1.0)
    rows: int = 64


@dataclass(frozen=True, slots=True)
class IsoCubesConfig:
    """
    Attributes:
        angles: Number of views, each rotated a further quarter turn about J
    """
    angles: int = 2

    def __post_init__(self) -> None:
        if self.angles < 1:
            raise ValueError(f"angles must be >= 1, got {self.angles}")


@dataclass(frozen=True, slots=True)
class ChromaLightnessHueConfig:
    """
    Attributes:
        bands: Chroma thresholds splitting colours into low/mid/high bands
    """
    bands: tuple[float, float] = (12.0, 25.0)


@dataclass(frozen=True, slots=True)
class HueChromaPolarConfig:
    """Chroma at the rim of the polar plot."""
    max_chroma: float = 50.0


@dataclass(frozen=True, slots=True)
class HueLightnessPolarConfig:
    """
    Attributes:
        chroma: Fixed chroma of the sampled ring colours
        inverted: Black at the rim instead of the centre
        resolution: Cells across the square box
    """
    chroma: float = 10.0
    inverted: bool = False
    resolution: int = 45


@dataclass(frozen=True, slots=True)
class RectHueLightnessConfig:
    chroma: float = 40.0
    columns: int = 48
    rows: int = 48


@dataclass(frozen=True, slots=True)
class SpectrumConfig:
    """
    Attributes:
        variant: Full locus colours, halved chroma or halved lightness
        columns: Cells across the strip
        spectral_share: Fraction of the strip used by monochromatic samples;
            the rest shows the purple line
    """
    variant: SpectrumVariant = SpectrumVariant.FULL
    columns: int = 100
    spectral_share: float = 0.8


@dataclass(frozen=True, slots=True)
class UsefulMixesConfig:
    columns: int = 7
    rows: int = 7


@dataclass(frozen=True, slots=True)
class LightnessChromaConfig:
    """Chroma that fills the chroma bar."""
    max_chroma: float = 50.0


@dataclass(frozen=True, slots=True)
class NeutralisersConfig:
    """Fraction of each slot's height given to the neutraliser swatch."""
    swatch_share: float = 0.45


@dataclass(frozen=True, slots=True)
class ComplementariesConfig:
    """
    Attributes:
        hue: Hue of the positive axis end, radians
        chroma: Chroma reached at the field corners
        resolution: Cells per side
        title: Caption naming the two ends
    """
    hue: float = 0.0
    chroma: float = 42.0
    resolution: int = 35
    title: Optional[str] = None


@dataclass(frozen=True, slots=True)
class RGBGridConfig:
    """
    Attributes:
        levels: Steps per channel; 16 gives the 4096-colour 12-bit cube
        tiles_per_row: Green tiles laid side by side before wrapping
    """
    levels: int = 16
    tiles_per_row: int = 8

    def __post_init__(self) -> None:
        if self.levels < 2 or self.tiles_per_row < 1:
            raise ValueError(f"Invalid RGB grid shape: {self.levels} levels, {self.tiles_per_row} per row")


@dataclass(frozen=True, slots=True)
class SpectroBoxConfig:
    """
    Attributes:
        columns: Cells across, spectral samples then the purple line
        rows: Cells down, white at the top through the pure hue to black
        spectral_share: Fraction of the columns used by monochromatic samples
    """
    columns: int = 100
    rows: int = 33
    spectral_share: float = 0.8


CONFIG_TYPES: dict[WidgetKind, type] = {
    WidgetKind.INDEXED: IndexedConfig,
    WidgetKind.MAIN_PALETTE: MainPaletteConfig,
    WidgetKind.CLOSE_COLOURS: CloseColoursConfig,
    WidgetKind.INTERNAL_SIMILARITY: InternalSimilarityConfig,
    WidgetKind.ACYCLIC: AcyclicConfig,
    WidgetKind.SPECTRAL_DISTRIBUTION: DistributionConfig,
    WidgetKind.TEMPERATURE_DISTRIBUTION: DistributionConfig,
    WidgetKind.GREYSCALE: GreyscaleConfig,
    WidgetKind.ISO_CUBES: IsoCubesConfig,
    WidgetKind.CHROMA_LIGHTNESS_HUE: ChromaLightnessHueConfig,
    WidgetKind.HUE_CHROMA_POLAR: HueChromaPolarConfig,
    WidgetKind.HUE_LIGHTNESS_POLAR: HueLightnessPolarConfig,
    WidgetKind.RECT_HUE_LIGHTNESS: RectHueLightnessConfig,
    WidgetKind.SPECTRUM: SpectrumConfig,
    WidgetKind.USEFUL_MIXES: UsefulMixesConfig,
    WidgetKind.LIGHTNESS_CHROMA: LightnessChromaConfig,
    WidgetKind.NEUTRALISERS: NeutralisersConfig,
    WidgetKind.COMPLEMENTARIES: ComplementariesConfig,
    WidgetKind.RGB_GRID: RGBGridConfig,
    WidgetKind.SPECTRO_BOX: SpectroBoxConfig,
}


@dataclass(frozen=True)
class WidgetSpec:
    """
    A widget request: the selector plus its configuration.

    config defaults to the kind's default configuration.

    Raises:
        TypeError: If config is not the kind's configuration type
    """
    kind: WidgetKind
    config: Any = None
    name: Optional[str] = None

    def __post_init__(self) -> None:
        expected = CONFIG_TYPES[self.kind]
        if self.config is None:
            object.__setattr__(self, "config", expected())
        elif not isinstance(self.config, expected):
            raise TypeError(
                f"{self.kind.value} expects {expected.__name__}, got {type(self.config).__name__}"
            )
        if self.name is None:
            object.__setattr__(self, "name", self.kind.value)
