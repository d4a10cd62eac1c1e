# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""
Perceptual distance in CAM16-UCS.

Every colour distance in the package comes from this module. The base
metric is Euclidean over (J, a, b); callers may scale the lightness axis,
or blend in pure lightness difference ("li-match").
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from censor.schema.palette import AppearanceCoord


def _weighted_norm(delta: NDArray[np.float64], lightness_weight: float) -> NDArray[np.float64]:
    scale = np.array([lightness_weight, 1.0, 1.0], dtype=np.float64)
    return np.sqrt(np.sum((delta * scale) ** 2, axis=-1))


def distance_array(
    x: NDArray[np.float64],
    y: NDArray[np.float64],
    lightness_weight: float = 1.0,
) -> NDArray[np.float64]:
    """
    Elementwise distance between broadcastable (..., 3) coordinate arrays.

    Args:
        x, y: (J, a, b) arrays
        lightness_weight: Scale applied to the J difference

    Returns:
        Array of distances with the broadcast leading shape
    """
    delta = np.asarray(x, dtype=np.float64) - np.asarray(y, dtype=np.float64)
    return _weighted_norm(delta, lightness_weight)


def distance(a: AppearanceCoord, b: AppearanceCoord, lightness_weight: float = 1.0) -> float:
    """Distance between two appearance coordinates."""
    return float(distance_array(a.to_array(), b.to_array(), lightness_weight))


def cross_distances(
    x: NDArray[np.float64],
    y: NDArray[np.float64],
    lightness_weight: float = 1.0,
) -> NDArray[np.float64]:
    """(m, n) distances between every row of x (m, 3) and y (n, 3)."""
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    return distance_array(x[:, None, :], y[None, :, :], lightness_weight)


def pairwise_distances(coords: NDArray[np.float64], lightness_weight: float = 1.0) -> NDArray[np.float64]:
    """Symmetric (n, n) distances with an exact zero diagonal."""
    d = cross_distances(coords, coords, lightness_weight)
    d = (d + d.T) / 2.0
    np.fill_diagonal(d, 0.0)
    return d


def lightness_matched_distance(
    x: NDArray[np.float64],
    y: NDArray[np.float64],
    match: float,
) -> NDArray[np.float64]:
    """
    Blend of full distance and lightness difference: (1 - t)·d + t·|ΔJ|.

    match = 0 is the plain metric; match = 1 compares lightness only.
    """
    if not 0.0 <= match <= 1.0:
        raise ValueError(f"match must be 0-1, got {match}")
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    full = distance_array(x, y)
    lightness = np.abs(x[..., 0] - y[..., 0])
    return (1.0 - match) * full + match * lightness
