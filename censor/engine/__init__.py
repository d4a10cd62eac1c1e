# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""
Colour science and palette statistics.

Pure numerical code: conversions into CAM16-UCS, the perceptual metric, the
spectral locus table and the relational palette metrics. No I/O, no logging.
"""

from censor.engine.colorspace import (
    DEFAULT_VIEWING,
    ViewingConditions,
    appearance_from_polar,
    estimate_cct,
    from_appearance,
    parse_hex,
    rgb_to_hex,
    to_appearance,
    to_tristimulus,
    tristimulus_to_rgb,
)
from censor.engine.locus import SPECTRAL_LOCUS, SpectralLocus, SpectralSample, nearest_spectral_sample
from censor.engine.metric import distance, lightness_matched_distance, pairwise_distances
from censor.engine.statistics import (
    GAMUT_BOUNDARY,
    PRIMARY_HUES,
    acyclic_check,
    build_distance_matrix,
    build_neighbour_graph,
    close_colour_pairs,
    derive_ui_roles,
    gamut_boundary,
    internal_similarity,
    nearest_indices,
    neutralisers,
    search_mix_candidates,
    spectral_stats,
    temperature_stats,
)

__all__ = [
    # Colour space
    "DEFAULT_VIEWING",
    "ViewingConditions",
    "to_tristimulus",
    "tristimulus_to_rgb",
    "to_appearance",
    "from_appearance",
    "appearance_from_polar",
    "estimate_cct",
    "parse_hex",
    "rgb_to_hex",
    # Locus
    "SPECTRAL_LOCUS",
    "SpectralLocus",
    "SpectralSample",
    "nearest_spectral_sample",
    # Metric
    "distance",
    "pairwise_distances",
    "lightness_matched_distance",
    # Statistics
    "build_distance_matrix",
    "build_neighbour_graph",
    "internal_similarity",
    "acyclic_check",
    "close_colour_pairs",
    "search_mix_candidates",
    "nearest_indices",
    "derive_ui_roles",
    "neutralisers",
    "temperature_stats",
    "spectral_stats",
    "GAMUT_BOUNDARY",
    "PRIMARY_HUES",
    "gamut_boundary",
]
