# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""
Spectral locus model.

The locus is the closed curve of monochromatic chromaticities (410-665 nm)
plus the non-spectral purple line joining its ends. Samples are indexed by
their chromaticity hue angle around the viewing white point, so any hue has
a nearest sample.

The table is built once at import and never mutated.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from censor.engine.colorspace import (
    DEFAULT_VIEWING,
    ViewingConditions,
    cmf_xyz,
    to_appearance,
    xyz_to_xy,
)
from censor.schema.palette import AppearanceCoord


WAVELENGTH_MIN = 410.0
WAVELENGTH_MAX = 665.0
WAVELENGTH_STEP = 0.5
PURPLE_SAMPLES = 48
MAX_ANGULAR_GAP = 0.1

_TAU = 2.0 * math.pi


@dataclass(frozen=True, slots=True)
class SpectralSample:
    """
    One locus sample.

    Attributes:
        wavelength: Wavelength in nm, None on the purple line
        xy: Chromaticity
        appearance: CAM16-UCS coordinates of the sample at unit observer scale
        hue: Chromaticity hue angle around the white point, [0, 2π)
    """
    wavelength: Optional[float]
    xy: tuple[float, float]
    appearance: AppearanceCoord
    hue: float

    @property
    def spectral(self) -> bool:
        return self.wavelength is not None


def chromaticity_hue(xyz: NDArray[np.float64], white_xy: tuple[float, float]) -> NDArray[np.float64]:
    """Hue angle(s) in [0, 2π) of tristimulus values around a white point."""
    xy = xyz_to_xy(xyz)
    return np.arctan2(xy[..., 1] - white_xy[1], xy[..., 0] - white_xy[0]) % _TAU


@dataclass(frozen=True, eq=False)
class SpectralLocus:
    """
    Immutable locus table with a sorted hue index.

    Use nearest() for lookups; samples keeps the construction order
    (increasing wavelength, then the purple line from red back to violet).
    """
    samples: tuple[SpectralSample, ...]
    white_xy: tuple[float, float]
    _order: NDArray[np.int64]
    _sorted_hues: NDArray[np.float64]

    @classmethod
    def build(cls, viewing: ViewingConditions = DEFAULT_VIEWING) -> SpectralLocus:
        """
        Sample the locus and check that it encircles the white point.

        Raises:
            RuntimeError: If the closed locus does not wind once around the
                white point or leaves an angular gap wider than MAX_ANGULAR_GAP
        """
        nm = np.arange(WAVELENGTH_MIN, WAVELENGTH_MAX + WAVELENGTH_STEP / 2, WAVELENGTH_STEP)
        spectral_xyz = cmf_xyz(nm) * 100.0
        red, violet = spectral_xyz[-1], spectral_xyz[0]
        t = np.arange(1, PURPLE_SAMPLES + 1)[:, None] / (PURPLE_SAMPLES + 1)
        purple_xyz = (1.0 - t) * red + t * violet

        xyz = np.concatenate([spectral_xyz, purple_xyz])
        xy = xyz_to_xy(xyz)
        white = viewing.white_xy
        hues = chromaticity_hue(xyz, white)
        jab = to_appearance(xyz, viewing)
        wavelengths: list[Optional[float]] = [float(w) for w in nm] + [None] * PURPLE_SAMPLES

        _check_encloses(hues)

        samples = tuple(
            SpectralSample(
                wavelength=wavelengths[i],
                xy=(float(xy[i, 0]), float(xy[i, 1])),
                appearance=AppearanceCoord.from_array(jab[i]),
                hue=float(hues[i]),
            )
            for i in range(len(wavelengths))
        )
        # Tie-break key: lower wavelength first, purple line last
        tie = np.array([w if w is not None else math.inf for w in wavelengths])
        order = np.lexsort((tie, hues))
        sorted_hues = hues[order]
        order.setflags(write=False)
        sorted_hues.setflags(write=False)
        return cls(samples, (float(white[0]), float(white[1])), order, sorted_hues)

    def __len__(self) -> int:
        return len(self.samples)

    @property
    def spectral_samples(self) -> tuple[SpectralSample, ...]:
        return tuple(s for s in self.samples if s.spectral)

    def nearest(self, hue: float) -> SpectralSample:
        """
        Sample whose hue angle is circularly closest to `hue` (radians).

        Equal angular distances resolve to the lower wavelength, with purple
        line samples after all spectral ones.
        """
        if not math.isfinite(hue):
            raise ValueError(f"Hue angle must be finite, got {hue}")
        h = hue % _TAU
        n = len(self._sorted_hues)
        pos = int(np.searchsorted(self._sorted_hues, h))
        best_key = None
        best = None
        # Neighbours of the insertion point, wrapping at 2π
        for k in (pos - 2, pos - 1, pos, pos + 1):
            idx = int(self._order[k % n])
            sample = self.samples[idx]
            diff = abs(sample.hue - h)
            diff = min(diff, _TAU - diff)
            key = (diff, sample.wavelength if sample.spectral else math.inf)
            if best_key is None or key < best_key:
                best_key, best = key, sample
        return best

    def wavelength_sample(self, wavelength: float) -> SpectralSample:
        """Spectral sample closest to a wavelength in nm (clamped to range)."""
        w = min(max(wavelength, WAVELENGTH_MIN), WAVELENGTH_MAX)
        return self.samples[int(round((w - WAVELENGTH_MIN) / WAVELENGTH_STEP))]


def _check_encloses(hues: NDArray[np.float64]) -> None:
    steps = np.diff(np.append(hues, hues[0]))
    steps = (steps + math.pi) % _TAU - math.pi
    winding = abs(float(steps.sum())) / _TAU
    if abs(winding - 1.0) > 1e-6:
        raise RuntimeError(f"Spectral locus winds {winding:.3f} times around the white point")
    ordered = np.sort(hues)
    gaps = np.diff(np.append(ordered, ordered[0] + _TAU))
    if float(gaps.max()) > MAX_ANGULAR_GAP:
        raise RuntimeError(f"Spectral locus leaves a hue gap of {gaps.max():.3f} rad")


SPECTRAL_LOCUS = SpectralLocus.build()


def nearest_spectral_sample(hue: float, locus: SpectralLocus = SPECTRAL_LOCUS) -> SpectralSample:
    """Nearest locus sample to a hue angle around the locus white point."""
    return locus.nearest(hue)
