# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""
Request layer: ingestion, orchestration, rendering and the service surfaces.
"""

from censor.runtime.loader import check_palette, load_palette, parse_source
from censor.runtime.orchestrator import (
    METRIC_NAMES,
    AnalysisConfig,
    AnalysisReport,
    analyse,
    build_context,
    compute_metrics,
)

__all__ = [
    "METRIC_NAMES",
    "AnalysisConfig",
    "AnalysisReport",
    "analyse",
    "build_context",
    "compute_metrics",
    "check_palette",
    "load_palette",
    "parse_source",
]
