# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""
Censor -- restricted palette analyser.

Converts palette colours into CAM16-UCS, measures how they relate to each
other, and lays out an analysis sheet of widgets.

Quick start::

    from censor import Palette, analyse, compute_metrics

    palette = Palette.from_hex(["#1A1C2C", "#5D275D", "#B13E53", "#EF7D57"])
    compute_metrics(palette)         # {'iss': ..., 'acyclic': ..., ...}
    report = analyse(palette)        # layouts for every widget
"""

from __future__ import annotations

__version__ = "1.0.0"

from censor.errors import (
    CensorError,
    DegenerateMetric,
    DuplicateColours,
    InvalidColour,
    InvalidPaletteSize,
    OutOfLocusRange,
    SourceUnavailable,
)
from censor.schema import AppearanceCoord, Colour, Palette
from censor.runtime import AnalysisConfig, AnalysisReport, analyse, compute_metrics, load_palette

__all__ = [
    # Core API
    "analyse",
    "compute_metrics",
    "load_palette",
    "AnalysisConfig",
    "AnalysisReport",
    # Types
    "Colour",
    "AppearanceCoord",
    "Palette",
    # Errors
    "CensorError",
    "InvalidColour",
    "InvalidPaletteSize",
    "DuplicateColours",
    "DegenerateMetric",
    "OutOfLocusRange",
    "SourceUnavailable",
    # Version
    "__version__",
]
