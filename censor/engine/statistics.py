# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""
Palette statistics kernel.

Relational metrics over a palette: the distance matrix, the nearest-neighbour
graph and its cycles, internal similarity, close pairs, tristimulus mixes,
interface roles, and the temperature and wavelength distributions.

Everything here is a pure function of the palette; distances come from
censor.engine.metric and conversions from censor.engine.colorspace.
"""

from __future__ import annotations

import math
from itertools import combinations
from typing import Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from censor.engine.colorspace import estimate_cct, to_appearance, to_tristimulus
from censor.engine.locus import SPECTRAL_LOCUS, SpectralLocus, chromaticity_hue
from censor.engine.metric import (
    cross_distances,
    distance_array,
    lightness_matched_distance,
    pairwise_distances,
)
from censor.errors import DegenerateMetric, OutOfLocusRange
from censor.schema.palette import (
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


DEFAULT_MIX_BUDGET = 4096
DEFAULT_MIX_LIMIT = 32

# Chroma at which a colour counts fully towards the wavelength distribution
CHROMA_REFERENCE = 50.0

# Lightness-match fractions used to pick interface roles and neutralisers
ROLE_MATCH = 0.6
NEUTRALISER_MATCH = 0.1
NEUTRALISER_MAX_RESIDUAL = 10.0


# =============================================================================
# Distance matrix and neighbour graph
# =============================================================================


def build_distance_matrix(palette: Palette, lightness_weight: float = 1.0) -> DistanceMatrix:
    """All pairwise appearance distances of a palette."""
    return DistanceMatrix(pairwise_distances(palette.appearance_array, lightness_weight))


def build_neighbour_graph(matrix: DistanceMatrix) -> NeighbourGraph:
    """
    Point every colour at its nearest other colour.

    Ties resolve to the lowest index.
    """
    d = np.array(matrix.values, dtype=np.float64)
    np.fill_diagonal(d, np.inf)
    targets = np.argmin(d, axis=1)
    return NeighbourGraph(
        targets=tuple(int(t) for t in targets),
        distances=tuple(float(d[i, t]) for i, t in enumerate(targets)),
    )


def internal_similarity(matrix: DistanceMatrix) -> float:
    """
    Internal similarity score: (mean / min) / n^(2/3) over distinct pairs.

    Low values mean evenly spread colours; high values mean a few colours
    crowd together relative to the rest.

    Raises:
        DegenerateMetric: If two colours are identical
    """
    off = matrix.off_diagonal()
    lo = float(off.min())
    if lo <= 0.0:
        raise DegenerateMetric("Palette contains indistinguishable colours (minimum distance 0)")
    return float(off.mean()) / lo / matrix.n ** (2.0 / 3.0)


def acyclic_check(graph: NeighbourGraph) -> CycleReport:
    """
    Find every cycle of a functional graph.

    Walks from each unvisited node along its single out-edge; reaching a node
    on the current walk closes a cycle.
    """
    n = len(graph)
    state = [0] * n  # 0 unvisited, 1 on current walk, 2 finished
    cycles = []
    for start in range(n):
        if state[start]:
            continue
        path = []
        node = start
        while state[node] == 0:
            state[node] = 1
            path.append(node)
            node = graph.targets[node]
        if state[node] == 1:
            cycle = path[path.index(node):]
            k = cycle.index(min(cycle))
            cycles.append(tuple(cycle[k:] + cycle[:k]))
        for p in path:
            state[p] = 2
    return CycleReport(tuple(cycles))


def close_colour_pairs(
    palette: Palette,
    weightings: Sequence[float],
) -> tuple[tuple[ClosePair, ...], ...]:
    """
    Nearest other member of every colour, once per lightness weighting.

    Returns:
        One tuple of ClosePair per weighting, indexed by colour
    """
    coords = palette.appearance_array
    result = []
    for weight in weightings:
        graph = build_neighbour_graph(DistanceMatrix(pairwise_distances(coords, weight)))
        result.append(tuple(
            ClosePair(i, t, d) for i, (t, d) in enumerate(zip(graph.targets, graph.distances))
        ))
    return tuple(result)


# =============================================================================
# Mixes
# =============================================================================


def search_mix_candidates(
    palette: Palette,
    sample_budget: int = DEFAULT_MIX_BUDGET,
    limit: Optional[int] = DEFAULT_MIX_LIMIT,
) -> tuple[MixCandidate, ...]:
    """
    Tristimulus mixes of palette pairs that sit furthest from the palette.

    Every pair is sampled at t = k/(s+1), k = 1..s, with s = budget // pairs
    (at least one sample, the midpoint). Candidates are ranked by descending
    distance to their nearest palette colour, ties by pair then t.

    Args:
        palette: Source palette
        sample_budget: Total number of mixes to evaluate
        limit: Maximum number of candidates returned, None for all

    Returns:
        Ranked MixCandidates
    """
    if sample_budget < 1:
        raise ValueError(f"sample_budget must be >= 1, got {sample_budget}")
    xyz = palette.xyz_array
    coords = palette.appearance_array
    pairs = np.array(list(combinations(range(len(palette)), 2)), dtype=np.int64)
    s = max(1, sample_budget // len(pairs))
    ts = np.arange(1, s + 1, dtype=np.float64) / (s + 1)

    mixed = (1.0 - ts[None, :, None]) * xyz[pairs[:, 0]][:, None, :] \
        + ts[None, :, None] * xyz[pairs[:, 1]][:, None, :]
    mixed = mixed.reshape(-1, 3)
    nearest = cross_distances(to_appearance(mixed), coords).min(axis=1)

    order = np.argsort(-nearest, kind="stable")
    if limit is not None:
        order = order[:limit]
    candidates = []
    for k in order:
        p, ti = divmod(int(k), s)
        candidates.append(MixCandidate(
            colour=Colour.from_xyz(mixed[k]),
            pair=(int(pairs[p, 0]), int(pairs[p, 1])),
            t=float(ts[ti]),
            min_distance=float(nearest[k]),
        ))
    return tuple(candidates)


# =============================================================================
# Lookups
# =============================================================================


def nearest_indices(
    palette: Palette,
    coords: NDArray[np.float64],
    lightness_match: float = 0.0,
) -> NDArray[np.int64]:
    """
    Quantise appearance coordinates to palette indices.

    Args:
        palette: Target palette
        coords: Array of shape (..., 3)
        lightness_match: Li-match fraction, 0 for the plain metric

    Returns:
        Integer array with coords' leading shape
    """
    coords = np.asarray(coords, dtype=np.float64)
    flat = coords.reshape(-1, 3)
    d = lightness_matched_distance(flat[:, None, :], palette.appearance_array[None, :, :], lightness_match)
    return np.argmin(d, axis=1).reshape(coords.shape[:-1])


def lightness_order(palette: Palette) -> tuple[int, ...]:
    """Palette indices sorted by lightness, darkest first, stable."""
    J = palette.appearance_array[:, 0]
    return tuple(int(i) for i in np.argsort(J, kind="stable"))


def derive_ui_roles(palette: Palette, neutral: bool = False) -> UIRoles:
    """
    Choose palette colours to draw the analysis sheet with.

    blank is the colour closest to black; background the most saturated-looking
    colour unlike blank; foreground the colour furthest from blank; title the
    colour that stands out most on background.
    """
    if neutral:
        return UIRoles.neutral()
    coords = palette.appearance_array
    bl = int(np.argmin(distance_array(coords, np.zeros(3))))

    not_blank = lightness_matched_distance(coords, coords[bl], ROLE_MATCH)
    not_grey = np.maximum(100.0 - distance_array(coords, np.array([50.0, 0.0, 0.0])), 0.0)
    score = np.power(not_blank, 0.02) * np.power(not_grey, 0.98)
    score[bl] = -np.inf
    bg = int(np.argmax(score))

    from_blank = distance_array(coords, coords[bl])
    from_blank[bl] = -np.inf
    fg = int(np.argmax(from_blank))

    contrast = lightness_matched_distance(coords, coords[bg], ROLE_MATCH)
    contrast[bg] = -np.inf
    tl = int(np.argmax(contrast))

    hexes = palette.hexes
    return UIRoles(
        blank=hexes[bl],
        background=hexes[bg],
        foreground=hexes[fg],
        title=hexes[tl],
        indices=(bl, bg, fg, tl),
    )


def neutraliser(palette: Palette, index: int) -> int:
    """Palette colour closest to the complement of colour `index`."""
    coords = palette.appearance_array
    complement = coords[index] * np.array([1.0, -1.0, -1.0])
    return int(np.argmin(lightness_matched_distance(coords, complement, NEUTRALISER_MATCH)))


def neutralisers(palette: Palette) -> tuple[Optional[int], ...]:
    """
    Neutralising partner of every colour, or None.

    j neutralises i when it is the complement lookup of i and the mean of
    their chroma axes lies within NEUTRALISER_MAX_RESIDUAL of grey.
    """
    coords = palette.appearance_array
    result: list[Optional[int]] = []
    for i in range(len(palette)):
        j = neutraliser(palette, i)
        a = (coords[i, 1] + coords[j, 1]) / 2.0
        b = (coords[i, 2] + coords[j, 2]) / 2.0
        ok = i != j and math.hypot(a, b) <= NEUTRALISER_MAX_RESIDUAL
        result.append(j if ok else None)
    return tuple(result)


# =============================================================================
# Distributions
# =============================================================================


def estimate_temperatures(palette: Palette) -> tuple[Optional[CCTEstimate], ...]:
    """Per-colour CCT; colours off the Planckian locus get None."""
    estimates = []
    for colour in palette:
        try:
            estimates.append(estimate_cct(colour.appearance))
        except OutOfLocusRange:
            estimates.append(None)
    return tuple(estimates)


def _normalise(weights: Sequence[float]) -> tuple[float, ...]:
    total = float(sum(weights))
    if total <= 0.0:
        return tuple(0.0 for _ in weights)
    return tuple(float(w) / total for w in weights)


def temperature_stats(palette: Palette) -> TemperatureStats:
    """Temperature estimates weighted by closeness to the locus."""
    estimates = estimate_temperatures(palette)
    raw = [e.weight if e is not None else 0.0 for e in estimates]
    return TemperatureStats(estimates=estimates, weights=_normalise(raw))


def spectral_stats(palette: Palette, locus: SpectralLocus = SPECTRAL_LOCUS) -> SpectralStats:
    """
    Dominant wavelength of each colour, weighted by chroma.

    Colours whose hue falls on the purple line, or that have no luminance,
    get no wavelength and weight 0.
    """
    wavelengths: list[Optional[float]] = []
    raw: list[float] = []
    for colour in palette:
        if colour.xyz[1] <= 1e-6:
            wavelengths.append(None)
            raw.append(0.0)
            continue
        hue = float(chromaticity_hue(np.asarray(colour.xyz), locus.white_xy))
        sample = locus.nearest(hue)
        wavelengths.append(sample.wavelength)
        raw.append(
            min(max(colour.appearance.chroma / CHROMA_REFERENCE, 0.0), 1.0) if sample.spectral else 0.0
        )
    return SpectralStats(wavelengths=tuple(wavelengths), weights=_normalise(raw))


# =============================================================================
# Gamut
# =============================================================================


def gamut_boundary(buckets: int = 72, levels: int = 49) -> NDArray[np.float64]:
    """
    Largest sRGB chroma per hue bucket.

    Samples the surface of the RGB cube; buckets no sample lands in are
    interpolated from their neighbours.

    Returns:
        Array of shape (buckets,), bucket k covering hues [k, k+1)·2π/buckets
    """
    u = np.linspace(0.0, 1.0, levels)
    a, b = np.meshgrid(u, u)
    a, b = a.ravel(), b.ravel()
    faces = []
    for axis in range(3):
        for value in (0.0, 1.0):
            face = np.empty((a.size, 3))
            others = [k for k in range(3) if k != axis]
            face[:, axis] = value
            face[:, others[0]] = a
            face[:, others[1]] = b
            faces.append(face)
    rgb = np.concatenate(faces)
    jab = to_appearance(to_tristimulus(rgb, normalized=True))
    hue = np.arctan2(jab[:, 2], jab[:, 1]) % (2.0 * math.pi)
    chroma = np.hypot(jab[:, 1], jab[:, 2])
    idx = np.minimum((hue / (2.0 * math.pi) * buckets).astype(np.int64), buckets - 1)

    boundary = np.full(buckets, np.nan)
    np.fmax.at(boundary, idx, chroma)
    filled = ~np.isnan(boundary)
    if not filled.all():
        known = np.flatnonzero(filled)
        boundary = np.interp(
            np.arange(buckets), known, boundary[known], period=buckets,
        )
    return boundary


GAMUT_BOUNDARY = gamut_boundary()
GAMUT_BOUNDARY.setflags(write=False)


_PRIMARIES = (
    ("R", (255, 0, 0)),
    ("Y", (255, 255, 0)),
    ("G", (0, 255, 0)),
    ("C", (0, 255, 255)),
    ("B", (0, 0, 255)),
    ("M", (255, 0, 255)),
)


def primary_hues() -> tuple[tuple[str, float, float], ...]:
    """(label, hue, chroma) of the sRGB primaries and secondaries."""
    rgb = np.array([c for _, c in _PRIMARIES])
    jab = to_appearance(to_tristimulus(rgb))
    hue = np.arctan2(jab[:, 2], jab[:, 1]) % (2.0 * math.pi)
    chroma = np.hypot(jab[:, 1], jab[:, 2])
    return tuple(
        (label, float(h), float(c)) for (label, _), h, c in zip(_PRIMARIES, hue, chroma)
    )


PRIMARY_HUES = primary_hues()
