# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""Immutable data model for palettes, analysis artifacts and drawables."""

from censor.schema.palette import (
    MAX_PALETTE_SIZE,
    MIN_PALETTE_SIZE,
    AppearanceCoord,
    CCTEstimate,
    ClosePair,
    Colour,
    CycleReport,
    DistanceMatrix,
    MixCandidate,
    NeighbourGraph,
    Palette,
    SpectralStats,
    TemperatureStats,
    UIRoles,
)
from censor.schema.primitives import (
    Label,
    Point,
    Polygon,
    Polyline,
    Primitive,
    PrimitiveKind,
)

__all__ = [
    "MAX_PALETTE_SIZE",
    "MIN_PALETTE_SIZE",
    "AppearanceCoord",
    "CCTEstimate",
    "ClosePair",
    "Colour",
    "CycleReport",
    "DistanceMatrix",
    "MixCandidate",
    "NeighbourGraph",
    "Palette",
    "SpectralStats",
    "TemperatureStats",
    "UIRoles",
    "Label",
    "Point",
    "Polygon",
    "Polyline",
    "Primitive",
    "PrimitiveKind",
]
