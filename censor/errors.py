# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""
Error types raised by the analysis core and its ingestion layer.

All errors derive from ValueError so callers that only guard against bad
input keep working.
"""

from __future__ import annotations


class CensorError(ValueError):
    """Base class for all analysis errors."""


class InvalidColour(CensorError):
    """A colour value is malformed, out of range or non-finite."""


class InvalidPaletteSize(CensorError):
    """Palette has fewer than 2 or more than 256 colours."""


class DuplicateColours(CensorError):
    """An ingested palette lists the same colour more than once."""


class DegenerateMetric(CensorError):
    """A metric is undefined for this palette (e.g. zero minimum distance)."""


class OutOfLocusRange(CensorError):
    """A colour lies too far from the Planckian locus to have a temperature."""


class SourceUnavailable(CensorError):
    """A palette source could not be read or fetched."""
