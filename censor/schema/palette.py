# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""
Palette data model.

Design principles:
- Immutable: all types are frozen dataclasses
- Deterministic: same colours in, same artifacts out
- Self-consistent: a Colour's RGB, XYZ and appearance coordinates are
  derived once, at construction, under the fixed viewing conditions

Appearance space (CAM16-UCS):
- J: lightness, 0 = black, ~100 = reference white
- a, b: opponent chroma axes (roughly -50..50 for sRGB colours)
- hue: atan2(b, a) in radians, [0, 2π)
- chroma: hypot(a, b)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from censor.errors import InvalidColour, InvalidPaletteSize


# =============================================================================
# Limits
# =============================================================================

MIN_PALETTE_SIZE = 2
MAX_PALETTE_SIZE = 256


# =============================================================================
# Colour Types
# =============================================================================


@dataclass(frozen=True, slots=True)
class AppearanceCoord:
    """
    A point in CAM16-UCS.

    Attributes:
        J: Lightness (UCS-compressed)
        a: Red/green opponent axis
        b: Yellow/blue opponent axis
    """
    J: float
    a: float
    b: float

    def __post_init__(self) -> None:
        if not all(math.isfinite(v) for v in (self.J, self.a, self.b)):
            raise InvalidColour(f"Appearance coordinates must be finite, got {self}")

    @property
    def hue(self) -> float:
        """Hue angle in radians, [0, 2π)."""
        return math.atan2(self.b, self.a) % (2.0 * math.pi)

    @property
    def chroma(self) -> float:
        """Chroma magnitude, distance from the neutral axis."""
        return math.hypot(self.a, self.b)

    def to_array(self) -> NDArray[np.float64]:
        return np.array([self.J, self.a, self.b], dtype=np.float64)

    @classmethod
    def from_array(cls, values: Sequence[float]) -> AppearanceCoord:
        return cls(float(values[0]), float(values[1]), float(values[2]))

    def to_dict(self) -> dict:
        return {"J": round(self.J, 4), "a": round(self.a, 4), "b": round(self.b, 4)}


@dataclass(frozen=True, slots=True)
class Colour:
    """
    A palette colour in its three co-maintained representations.

    Build with the classmethods rather than the constructor; they derive the
    other two representations from whichever one is the source of truth.

    Attributes:
        rgb: Encoded 8-bit sRGB triple
        xyz: CIE XYZ tristimulus, reference white Y = 100
        appearance: CAM16-UCS coordinates
    """
    rgb: tuple[int, int, int]
    xyz: tuple[float, float, float]
    appearance: AppearanceCoord

    def __post_init__(self) -> None:
        if len(self.rgb) != 3 or not all(0 <= c <= 255 for c in self.rgb):
            raise InvalidColour(f"RGB components must be 0-255, got {self.rgb}")

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> Colour:
        """Build from encoded 8-bit sRGB components."""
        from censor.engine.colorspace import to_appearance, to_tristimulus

        xyz = to_tristimulus(np.array([r, g, b]))
        jab = to_appearance(xyz)
        return cls(
            rgb=(int(r), int(g), int(b)),
            xyz=(float(xyz[0]), float(xyz[1]), float(xyz[2])),
            appearance=AppearanceCoord.from_array(jab),
        )

    @classmethod
    def from_hex(cls, hex_str: str) -> Colour:
        """Build from '#RRGGBB' or 'RRGGBB'."""
        from censor.engine.colorspace import parse_hex

        return cls.from_rgb(*parse_hex(hex_str))

    @classmethod
    def from_xyz(cls, xyz: Sequence[float]) -> Colour:
        """
        Build from tristimulus values (used for synthesized mixes).

        The encoded RGB is the nearest in-gamut 8-bit triple; the appearance
        coordinates come from the tristimulus values themselves.
        """
        from censor.engine.colorspace import to_appearance, tristimulus_to_rgb

        xyz_arr = np.asarray(xyz, dtype=np.float64)
        if xyz_arr.shape != (3,) or not np.all(np.isfinite(xyz_arr)):
            raise InvalidColour(f"Tristimulus must be 3 finite values, got {xyz}")
        r, g, b = tristimulus_to_rgb(xyz_arr)
        return cls(
            rgb=(int(r), int(g), int(b)),
            xyz=(float(xyz_arr[0]), float(xyz_arr[1]), float(xyz_arr[2])),
            appearance=AppearanceCoord.from_array(to_appearance(xyz_arr)),
        )

    @property
    def hex(self) -> str:
        """Hex string like '#3941C8'."""
        from censor.engine.colorspace import rgb_to_hex

        return rgb_to_hex(self.rgb)

    @property
    def lightness(self) -> float:
        return self.appearance.J

    def to_dict(self) -> dict:
        return {
            "hex": self.hex,
            "xyz": [round(v, 4) for v in self.xyz],
            "jab": self.appearance.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class Palette:
    """
    An ordered, immutable set of 2-256 colours.

    Index order is the user's order; sorted views are derived on demand.
    """
    colours: tuple[Colour, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.colours, tuple):
            object.__setattr__(self, "colours", tuple(self.colours))
        n = len(self.colours)
        if n < MIN_PALETTE_SIZE or n > MAX_PALETTE_SIZE:
            raise InvalidPaletteSize(
                f"Palette must hold {MIN_PALETTE_SIZE}-{MAX_PALETTE_SIZE} colours, got {n}"
            )

    @classmethod
    def from_hex(cls, hex_values: Sequence[str]) -> Palette:
        return cls(tuple(Colour.from_hex(h) for h in hex_values))

    @classmethod
    def from_rgb(cls, rgb_values: Sequence[Sequence[int]]) -> Palette:
        return cls(tuple(Colour.from_rgb(*rgb) for rgb in rgb_values))

    def __len__(self) -> int:
        return len(self.colours)

    def __getitem__(self, index: int) -> Colour:
        return self.colours[index]

    def __iter__(self):
        return iter(self.colours)

    @property
    def appearance_array(self) -> NDArray[np.float64]:
        """(n, 3) array of (J, a, b)."""
        return np.array([c.appearance.to_array() for c in self.colours])

    @property
    def xyz_array(self) -> NDArray[np.float64]:
        """(n, 3) array of tristimulus values."""
        return np.array([c.xyz for c in self.colours], dtype=np.float64)

    @property
    def hexes(self) -> tuple[str, ...]:
        return tuple(c.hex for c in self.colours)

    def to_dict(self) -> dict:
        return {"colours": [c.to_dict() for c in self.colours]}


# =============================================================================
# Relational Artifacts
# =============================================================================


@dataclass(frozen=True, eq=False)
class DistanceMatrix:
    """
    Symmetric (n, n) matrix of pairwise appearance distances, zero diagonal.

    The wrapped array is made read-only.
    """
    values: NDArray[np.float64]

    def __post_init__(self) -> None:
        values = np.array(self.values, dtype=np.float64)
        if values.ndim != 2 or values.shape[0] != values.shape[1]:
            raise ValueError(f"Distance matrix must be square, got shape {values.shape}")
        values.setflags(write=False)
        object.__setattr__(self, "values", values)

    @property
    def n(self) -> int:
        return self.values.shape[0]

    def __getitem__(self, key):
        return self.values[key]

    def off_diagonal(self) -> NDArray[np.float64]:
        """Upper-triangle values, one per unordered pair."""
        i, j = np.triu_indices(self.n, k=1)
        return self.values[i, j]

    def to_dict(self) -> dict:
        return {"n": self.n, "values": np.round(self.values, 4).tolist()}


@dataclass(frozen=True, slots=True)
class NeighbourGraph:
    """
    Functional graph: each colour points at its nearest other colour.

    Attributes:
        targets: targets[i] is the index of i's nearest neighbour
        distances: distances[i] is the distance to that neighbour
    """
    targets: tuple[int, ...]
    distances: tuple[float, ...] = ()

    def __post_init__(self) -> None:
        n = len(self.targets)
        for i, t in enumerate(self.targets):
            if t == i:
                raise ValueError(f"Neighbour graph has a self loop at {i}")
            if not 0 <= t < n:
                raise ValueError(f"Neighbour target {t} out of range for {n} nodes")
        if self.distances and len(self.distances) != n:
            raise ValueError("distances must match targets in length")

    def __len__(self) -> int:
        return len(self.targets)


@dataclass(frozen=True, slots=True)
class CycleReport:
    """
    Cycles found in a neighbour graph.

    Each cycle lists its members in edge order, starting at its smallest
    index. Mutual nearest pairs show up as 2-cycles; every nearest-neighbour
    graph has at least one, so they do not count against acyclic.
    """
    cycles: tuple[tuple[int, ...], ...] = ()

    @property
    def acyclic(self) -> bool:
        """True when no cycle has three or more members."""
        return not self.long_cycles

    @property
    def cycle(self) -> Optional[tuple[int, ...]]:
        """First cycle of three or more members, or None when acyclic."""
        long = self.long_cycles
        return long[0] if long else None

    @property
    def lengths(self) -> tuple[int, ...]:
        return tuple(len(c) for c in self.cycles)

    @property
    def mutual_pairs(self) -> tuple[tuple[int, ...], ...]:
        return tuple(c for c in self.cycles if len(c) == 2)

    @property
    def long_cycles(self) -> tuple[tuple[int, ...], ...]:
        return tuple(c for c in self.cycles if len(c) > 2)

    def to_dict(self) -> dict:
        return {
            "acyclic": self.acyclic,
            "cycles": [list(c) for c in self.cycles],
            "lengths": list(self.lengths),
        }


@dataclass(frozen=True, slots=True)
class ClosePair:
    """A palette member and its nearest other member under some weighting."""
    i: int
    j: int
    distance: float


@dataclass(frozen=True, slots=True)
class CCTEstimate:
    """
    Correlated colour temperature of one colour.

    Attributes:
        kelvin: Temperature of the nearest Planckian locus sample
        distance: CIE 1960 uv distance to that sample
        score: Log-normalised warmth, 0 = 25000 K (cold) .. 1 = 1000 K (warm)
    """
    kelvin: float
    distance: float
    score: float

    @property
    def weight(self) -> float:
        """Confidence weight, 1 on the locus falling to 0 at the tolerance."""
        return max(0.0, 1.0 - 20.0 * self.distance)

    def to_dict(self) -> dict:
        return {
            "kelvin": self.kelvin,
            "distance": round(self.distance, 5),
            "score": round(self.score, 4),
        }


@dataclass(frozen=True, slots=True)
class MixCandidate:
    """
    A synthesized tristimulus mix of two palette colours.

    Attributes:
        colour: The mixed colour
        pair: Source indices (i, j), i < j
        t: Mix fraction of colour j (0 = pure i, 1 = pure j)
        min_distance: Distance from the mix to its nearest palette colour
    """
    colour: Colour
    pair: tuple[int, int]
    t: float
    min_distance: float

    def to_dict(self) -> dict:
        return {
            "hex": self.colour.hex,
            "pair": list(self.pair),
            "t": round(self.t, 4),
            "min_distance": round(self.min_distance, 4),
        }


@dataclass(frozen=True, slots=True)
class UIRoles:
    """
    Palette colours chosen to draw the analysis sheet itself.

    Indices are None when the neutral UI is in use.
    """
    blank: str
    background: str
    foreground: str
    title: str
    indices: Optional[tuple[int, int, int, int]] = None

    @classmethod
    def neutral(cls) -> UIRoles:
        return cls(blank="#000000", background="#7F7F7F", foreground="#FFFFFF", title="#FFFFFF")

    def to_dict(self) -> dict:
        result = {
            "blank": self.blank,
            "background": self.background,
            "foreground": self.foreground,
            "title": self.title,
        }
        if self.indices is not None:
            result["indices"] = list(self.indices)
        return result


# =============================================================================
# Distributions
# =============================================================================


@dataclass(frozen=True, slots=True)
class SpectralStats:
    """
    Chroma-weighted dominant wavelengths of a palette.

    Attributes:
        wavelengths: Per-colour nearest wavelength in nm, None if non-spectral
        weights: Per-colour weight (normalised over spectral colours)
    """
    wavelengths: tuple[Optional[float], ...]
    weights: tuple[float, ...]


@dataclass(frozen=True, slots=True)
class TemperatureStats:
    """
    Per-colour temperature estimates with normalised weights.

    Colours off the locus carry None and weight 0.
    """
    estimates: tuple[Optional[CCTEstimate], ...]
    weights: tuple[float, ...] = field(default=())
