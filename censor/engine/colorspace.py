# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""
Colour space conversions.

Conversion chain: sRGB → Linear RGB → CIE XYZ → CAM16 → CAM16-UCS

References:
- CAM16: Li et al., "Comprehensive color solutions: CAM16, CAT16, and CAM16-UCS" (2017)
- Inverse model: CIE 159:2004 (CIECAM02), shared by CAM16
- Observer fit: Wyman, Sloan & Shirley, "Simple Analytic Approximations to the
  CIE XYZ Color Matching Functions" (2013)

All conversions are pure NumPy on arrays of shape (..., 3). Tristimulus values
use Y = 100 for the reference white.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from censor.errors import InvalidColour, OutOfLocusRange
from censor.schema.palette import AppearanceCoord, CCTEstimate


# =============================================================================
# sRGB ↔ Linear RGB
# =============================================================================


def srgb_to_linear(srgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert sRGB values [0,1] to linear RGB.

    Piecewise curve: x/12.92 up to 0.04045, ((x + 0.055) / 1.055) ^ 2.4 above.
    """
    srgb = np.asarray(srgb, dtype=np.float64)
    return np.where(
        srgb <= 0.04045,
        srgb / 12.92,
        np.power((np.maximum(srgb, 0.04045) + 0.055) / 1.055, 2.4),
    )


def linear_to_srgb(linear: NDArray[np.float64]) -> NDArray[np.float64]:
    """Inverse of srgb_to_linear, clipped to [0, 1]."""
    linear = np.maximum(np.asarray(linear, dtype=np.float64), 0.0)
    srgb = np.where(
        linear <= 0.0031308,
        linear * 12.92,
        1.055 * np.power(np.maximum(linear, 0.0031308), 1.0 / 2.4) - 0.055,
    )
    return np.clip(srgb, 0.0, 1.0)


# =============================================================================
# Linear RGB ↔ XYZ
# =============================================================================

_SRGB_TO_XYZ = np.array([
    [0.4124, 0.3576, 0.1805],
    [0.2126, 0.7152, 0.0722],
    [0.0193, 0.1192, 0.9505],
], dtype=np.float64)

_XYZ_TO_SRGB = np.linalg.inv(_SRGB_TO_XYZ)


def to_tristimulus(rgb: NDArray, normalized: bool = False) -> NDArray[np.float64]:
    """
    Convert encoded sRGB to CIE XYZ.

    Args:
        rgb: Array of shape (..., 3). Integers 0-255, or floats 0-1 when
            normalized is True.
        normalized: Whether rgb is already scaled to [0, 1]

    Returns:
        Array of shape (..., 3) with XYZ values, white Y = 100

    Raises:
        InvalidColour: On wrong shape, non-finite or out-of-range components
    """
    rgb = np.asarray(rgb, dtype=np.float64)
    if rgb.shape[-1:] != (3,):
        raise InvalidColour(f"Expected 3 colour components, got shape {rgb.shape}")
    if not np.all(np.isfinite(rgb)):
        raise InvalidColour("Colour components must be finite")
    if normalized:
        if np.any((rgb < 0.0) | (rgb > 1.0)):
            raise InvalidColour("Normalised components must be within [0, 1]")
        srgb = rgb
    else:
        if np.any((rgb < 0) | (rgb > 255)) or np.any(rgb != np.round(rgb)):
            raise InvalidColour("8-bit components must be integers within [0, 255]")
        srgb = rgb / 255.0
    linear = srgb_to_linear(srgb)
    return np.einsum('...j,ij->...i', linear, _SRGB_TO_XYZ) * 100.0


def tristimulus_to_rgb(xyz: NDArray[np.float64]) -> NDArray[np.int64]:
    """Convert XYZ to the nearest in-gamut 8-bit sRGB triple(s)."""
    xyz = np.asarray(xyz, dtype=np.float64)
    linear = np.einsum('...j,ij->...i', xyz / 100.0, _XYZ_TO_SRGB)
    return np.rint(linear_to_srgb(linear) * 255.0).astype(np.int64)


# =============================================================================
# Hex helpers
# =============================================================================

_HEX_RE = re.compile(r"#?([0-9a-fA-F]{6})")


def parse_hex(hex_str: str) -> tuple[int, int, int]:
    """
    Parse '#RRGGBB' or 'RRGGBB' into an (r, g, b) tuple.

    Raises:
        InvalidColour: If the string is not a 6-digit hex colour
    """
    m = _HEX_RE.fullmatch(hex_str.strip())
    if not m:
        raise InvalidColour(f"Not a hex colour: {hex_str!r}")
    digits = m.group(1)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def rgb_to_hex(rgb: Sequence[int]) -> str:
    r, g, b = (int(c) for c in rgb)
    return f"#{r:02X}{g:02X}{b:02X}"


# =============================================================================
# Chromaticity
# =============================================================================


def xyz_to_xy(xyz: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    CIE 1931 xy chromaticity. Zero-luminance input maps to (0, 0).

    Returns:
        Array of shape (..., 2)
    """
    xyz = np.asarray(xyz, dtype=np.float64)
    total = xyz.sum(axis=-1, keepdims=True)
    safe = np.where(total > 0.0, total, 1.0)
    return np.where(total > 0.0, xyz[..., :2] / safe, 0.0)


def xy_to_uv(xy: NDArray[np.float64]) -> NDArray[np.float64]:
    """CIE 1960 UCS (u, v) from xy."""
    xy = np.asarray(xy, dtype=np.float64)
    x, y = xy[..., 0], xy[..., 1]
    denom = -2.0 * x + 12.0 * y + 3.0
    return np.stack([4.0 * x / denom, 6.0 * y / denom], axis=-1)


def daylight_xy(temperature: float) -> tuple[float, float]:
    """
    Chromaticity of CIE daylight (D series) at a correlated temperature.

    Valid for 4000-25000 K.
    """
    T = float(temperature)
    if not 4000.0 <= T <= 25000.0:
        raise ValueError(f"Daylight locus is defined for 4000-25000 K, got {T}")
    if T <= 7000.0:
        x = -4.6070e9 / T**3 + 2.9678e6 / T**2 + 0.09911e3 / T + 0.244063
    else:
        x = -2.0064e9 / T**3 + 1.9018e6 / T**2 + 0.24748e3 / T + 0.237040
    y = -3.0 * x**2 + 2.870 * x - 0.275
    return x, y


# =============================================================================
# Standard observer
# =============================================================================

# (amplitude, mean nm, sigma below mean, sigma above mean)
_CMF_LOBES = (
    ((1.056, 599.8, 37.9, 31.0), (0.362, 442.0, 16.0, 26.7), (-0.065, 501.1, 20.4, 26.2)),
    ((0.821, 568.8, 46.9, 40.5), (0.286, 530.9, 16.3, 31.1)),
    ((1.217, 437.0, 11.8, 36.0), (0.681, 459.0, 26.0, 13.8)),
)


def cmf_xyz(wavelength_nm: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    CIE 1931 2° colour matching functions, multi-lobe Gaussian fit.

    Args:
        wavelength_nm: Array of wavelengths in nanometres

    Returns:
        Array of shape (..., 3) with x̄, ȳ, z̄
    """
    lam = np.asarray(wavelength_nm, dtype=np.float64)
    channels = []
    for lobes in _CMF_LOBES:
        total = np.zeros_like(lam)
        for amplitude, mu, s1, s2 in lobes:
            t = (lam - mu) / np.where(lam < mu, s1, s2)
            total = total + amplitude * np.exp(-0.5 * t * t)
        channels.append(total)
    return np.stack(channels, axis=-1)


# =============================================================================
# Planckian locus and CCT
# =============================================================================

CCT_MIN = 1000.0
CCT_MAX = 25000.0
CCT_STEP = 100.0
CCT_TOLERANCE = 0.05

# Second radiation constant, m·K
_PLANCK_C2 = 1.4388e-2


def planckian_xy(temperatures: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Chromaticity of black-body radiators, integrated over 360-830 nm.

    Returns:
        Array of shape (n, 2)
    """
    T = np.atleast_1d(np.asarray(temperatures, dtype=np.float64))
    nm = np.arange(360.0, 831.0, 1.0)
    lam = nm * 1e-9
    spd = lam[None, :] ** -5 / np.expm1(_PLANCK_C2 / (lam[None, :] * T[:, None]))
    return xyz_to_xy(spd @ cmf_xyz(nm))


_CCT_KELVIN = np.arange(CCT_MIN, CCT_MAX + CCT_STEP / 2, CCT_STEP)
_CCT_UV = xy_to_uv(planckian_xy(_CCT_KELVIN))
_CCT_KELVIN.setflags(write=False)
_CCT_UV.setflags(write=False)


def temperature_score(kelvin: float) -> float:
    """Log-normalised warmth: 1 at CCT_MIN, 0 at CCT_MAX."""
    span = math.log10(CCT_MAX) - math.log10(CCT_MIN)
    return 1.0 - (math.log10(kelvin) - math.log10(CCT_MIN)) / span


def cct_from_tristimulus(xyz: NDArray[np.float64]) -> CCTEstimate:
    """
    Nearest Planckian locus sample in CIE 1960 uv.

    Raises:
        OutOfLocusRange: If the colour has no chromaticity or lies further
            than CCT_TOLERANCE from every locus sample
    """
    xyz = np.asarray(xyz, dtype=np.float64)
    if xyz[1] <= 1e-6 or xyz.sum() <= 1e-6:
        raise OutOfLocusRange("Colour has no chromaticity at zero luminance")
    uv = xy_to_uv(xyz_to_xy(xyz))
    d = np.hypot(_CCT_UV[:, 0] - uv[0], _CCT_UV[:, 1] - uv[1])
    i = int(np.argmin(d))
    if d[i] > CCT_TOLERANCE:
        raise OutOfLocusRange(
            f"Nearest locus sample is {d[i]:.4f} away (tolerance {CCT_TOLERANCE})"
        )
    kelvin = float(_CCT_KELVIN[i])
    return CCTEstimate(kelvin=kelvin, distance=float(d[i]), score=temperature_score(kelvin))


# =============================================================================
# Viewing conditions (CAT16)
# =============================================================================

_M16 = np.array([
    [0.401288, 0.650173, -0.051461],
    [-0.250268, 1.204414, 0.045854],
    [-0.002079, 0.048952, 0.953127],
], dtype=np.float64)

_M16_INV = np.linalg.inv(_M16)


def _adapt(rgb_c: NDArray[np.float64], F_L: float) -> NDArray[np.float64]:
    f = np.power(F_L * np.abs(rgb_c) / 100.0, 0.42)
    return 400.0 * np.sign(rgb_c) * f / (f + 27.13) + 0.1


def _unadapt(rgb_a: NDArray[np.float64], F_L: float) -> NDArray[np.float64]:
    x = rgb_a - 0.1
    ax = np.abs(x)
    return np.sign(x) * (100.0 / F_L) * np.power(27.13 * ax / (400.0 - ax), 1.0 / 0.42)


@dataclass(frozen=True)
class ViewingConditions:
    """
    CAM16 viewing conditions and the constants derived from them.

    Attributes:
        white_xy: Chromaticity of the adopted white (Y_w = 100)
        F, c, Nc: Surround parameters
        L_A: Adapting luminance in cd/m²
        Y_b: Relative background luminance
    """
    white_xy: tuple[float, float]
    F: float = 0.9
    c: float = 0.59
    Nc: float = 0.9
    L_A: float = 64.0 / math.pi * 20.0 / 100.0
    Y_b: float = 20.0

    white_xyz: tuple[float, float, float] = field(init=False)
    d_rgb: tuple[float, float, float] = field(init=False)
    F_L: float = field(init=False)
    n: float = field(init=False)
    z: float = field(init=False)
    N_bb: float = field(init=False)
    N_cb: float = field(init=False)
    A_w: float = field(init=False)

    def __post_init__(self) -> None:
        x, y = self.white_xy
        white = np.array([100.0 * x / y, 100.0, 100.0 * (1.0 - x - y) / y])
        rgb_w = _M16 @ white
        D = float(np.clip(self.F * (1.0 - (1.0 / 3.6) * math.exp((-self.L_A - 42.0) / 92.0)), 0.0, 1.0))
        d_rgb = D * 100.0 / rgb_w + 1.0 - D
        k = 1.0 / (5.0 * self.L_A + 1.0)
        k4 = k**4
        F_L = 0.2 * k4 * (5.0 * self.L_A) + 0.1 * (1.0 - k4) ** 2 * (5.0 * self.L_A) ** (1.0 / 3.0)
        n = self.Y_b / 100.0
        N_bb = 0.725 * (1.0 / n) ** 0.2
        R, G, B = _adapt(rgb_w * d_rgb, F_L)
        A_w = N_bb * (2.0 * R + G + 0.05 * B - 0.305)

        derived = {
            "white_xyz": tuple(float(v) for v in white),
            "d_rgb": tuple(float(v) for v in d_rgb),
            "F_L": F_L,
            "n": n,
            "z": 1.48 + math.sqrt(n),
            "N_bb": N_bb,
            "N_cb": N_bb,
            "A_w": float(A_w),
        }
        for name, value in derived.items():
            object.__setattr__(self, name, value)

    @classmethod
    def daylight(cls, temperature: float) -> ViewingConditions:
        """Dim-surround conditions adapted to CIE daylight at `temperature`."""
        return cls(white_xy=daylight_xy(temperature))


DEFAULT_WHITE_TEMPERATURE = 5500.0
DEFAULT_VIEWING = ViewingConditions.daylight(DEFAULT_WHITE_TEMPERATURE)

_DISPLAY_WHITE = 100.0 * _SRGB_TO_XYZ.sum(axis=1)


def adapt_to_viewing_white(
    xyz: NDArray[np.float64],
    viewing: ViewingConditions = DEFAULT_VIEWING,
) -> NDArray[np.float64]:
    """
    Carry display-referred XYZ over to the viewing white (CAT16, full adaptation).

    sRGB white lands exactly on `viewing.white_xyz`.
    """
    xyz = np.asarray(xyz, dtype=np.float64)
    gain = (_M16 @ np.asarray(viewing.white_xyz)) / (_M16 @ _DISPLAY_WHITE)
    rgb = np.einsum('...j,ij->...i', xyz, _M16) * gain
    return np.einsum('...j,ij->...i', rgb, _M16_INV)


# =============================================================================
# XYZ ↔ CAM16-UCS
# =============================================================================


def to_appearance(
    xyz: NDArray[np.float64],
    viewing: ViewingConditions = DEFAULT_VIEWING,
) -> NDArray[np.float64]:
    """
    Convert XYZ to CAM16-UCS.

    Args:
        xyz: Array of shape (..., 3), white Y = 100
        viewing: Viewing conditions

    Returns:
        Array of shape (..., 3) with (J', a', b')
    """
    xyz = np.asarray(xyz, dtype=np.float64)
    rgb = np.einsum('...j,ij->...i', xyz, _M16)
    rgb_a = _adapt(rgb * np.asarray(viewing.d_rgb), viewing.F_L)
    R, G, B = rgb_a[..., 0], rgb_a[..., 1], rgb_a[..., 2]

    a = R - 12.0 * G / 11.0 + B / 11.0
    b = (R + G - 2.0 * B) / 9.0
    h = np.arctan2(b, a)
    e_t = 0.25 * (np.cos(h + 2.0) + 3.8)

    A = viewing.N_bb * (2.0 * R + G + 0.05 * B - 0.305)
    J = 100.0 * np.power(np.maximum(A, 0.0) / viewing.A_w, viewing.c * viewing.z)

    t = (50000.0 / 13.0 * viewing.Nc * viewing.N_cb * e_t * np.hypot(a, b)) / (R + G + 21.0 / 20.0 * B)
    t = np.maximum(t, 0.0)
    C = np.power(t, 0.9) * np.sqrt(J / 100.0) * (1.64 - 0.29**viewing.n) ** 0.73
    M = C * viewing.F_L**0.25

    J_ucs = 1.7 * J / (1.0 + 0.007 * J)
    M_ucs = np.log1p(0.0228 * M) / 0.0228
    return np.stack([J_ucs, M_ucs * np.cos(h), M_ucs * np.sin(h)], axis=-1)


def from_appearance(
    jab: NDArray[np.float64],
    viewing: ViewingConditions = DEFAULT_VIEWING,
) -> NDArray[np.float64]:
    """
    Convert CAM16-UCS back to XYZ. Exact inverse of to_appearance.

    Args:
        jab: Array of shape (..., 3) with (J', a', b')
        viewing: Viewing conditions

    Returns:
        Array of shape (..., 3) with XYZ values
    """
    jab = np.asarray(jab, dtype=np.float64)
    J_ucs, a_ucs, b_ucs = jab[..., 0], jab[..., 1], jab[..., 2]

    h = np.arctan2(b_ucs, a_ucs)
    M = np.expm1(0.0228 * np.hypot(a_ucs, b_ucs)) / 0.0228
    C = M / viewing.F_L**0.25
    J = np.maximum(J_ucs / (1.7 - 0.007 * J_ucs), 0.0)

    with np.errstate(divide="ignore", invalid="ignore"):
        root = np.sqrt(J / 100.0)
        alpha = np.where(root > 0.0, C / (root * (1.64 - 0.29**viewing.n) ** 0.73), 0.0)
        t = np.power(alpha, 1.0 / 0.9)
        e_t = 0.25 * (np.cos(h + 2.0) + 3.8)
        A = viewing.A_w * np.power(J / 100.0, 1.0 / (viewing.c * viewing.z))

        p1 = (50000.0 / 13.0 * viewing.Nc * viewing.N_cb) * e_t / t
        p2 = A / viewing.N_bb + 0.305
        p3 = 21.0 / 20.0
        sin_h, cos_h = np.sin(h), np.cos(h)
        numer = p2 * (2.0 + p3) * (460.0 / 1403.0)

        b_s = numer / (p1 / sin_h + (2.0 + p3) * (220.0 / 1403.0) * (cos_h / sin_h)
                       - 27.0 / 1403.0 + p3 * (6300.0 / 1403.0))
        a_s = b_s * cos_h / sin_h
        a_c = numer / (p1 / cos_h + (2.0 + p3) * (220.0 / 1403.0)
                       - (27.0 / 1403.0 - p3 * (6300.0 / 1403.0)) * (sin_h / cos_h))
        b_c = a_c * sin_h / cos_h

        use_sin = np.abs(sin_h) >= np.abs(cos_h)
        chromatic = t > 0.0
        a = np.where(chromatic, np.where(use_sin, a_s, a_c), 0.0)
        b = np.where(chromatic, np.where(use_sin, b_s, b_c), 0.0)

    R_a = (460.0 * p2 + 451.0 * a + 288.0 * b) / 1403.0
    G_a = (460.0 * p2 - 891.0 * a - 261.0 * b) / 1403.0
    B_a = (460.0 * p2 - 220.0 * a - 6300.0 * b) / 1403.0
    rgb_c = _unadapt(np.stack([R_a, G_a, B_a], axis=-1), viewing.F_L)
    rgb = rgb_c / np.asarray(viewing.d_rgb)
    return np.einsum('...j,ij->...i', rgb, _M16_INV)


def appearance_from_polar(
    J: NDArray[np.float64],
    chroma: NDArray[np.float64],
    hue: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Build (J, a, b) arrays from lightness, chroma and hue in radians."""
    J, chroma, hue = np.broadcast_arrays(
        np.asarray(J, dtype=np.float64),
        np.asarray(chroma, dtype=np.float64),
        np.asarray(hue, dtype=np.float64),
    )
    return np.stack([J, chroma * np.cos(hue), chroma * np.sin(hue)], axis=-1)


def estimate_cct(
    coord: AppearanceCoord,
    viewing: ViewingConditions = DEFAULT_VIEWING,
) -> CCTEstimate:
    """
    Correlated colour temperature of an appearance coordinate.

    The colour is read relative to the viewing white, so sRGB white gets the
    viewing white's own temperature.

    Raises:
        OutOfLocusRange: If the colour is too far from the Planckian locus
    """
    xyz = from_appearance(coord.to_array(), viewing)
    return cct_from_tristimulus(adapt_to_viewing_white(xyz, viewing))
