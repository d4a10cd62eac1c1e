# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""
JSON export of a full analysis: palette, roles, metrics and every widget's
primitives in normalised coordinates.
"""

from __future__ import annotations

import json

from censor.runtime.orchestrator import AnalysisReport
from censor.runtime.serializers.base import SerializerFormat


def to_report_json(
    report: AnalysisReport,
    *,
    format: SerializerFormat = SerializerFormat.JSON,
    include_primitives: bool = True,
) -> str:
    """
    Serialize an AnalysisReport.

    Args:
        report: Result of analyse()
        format: JSON or JSON_PRETTY
        include_primitives: Drop the per-widget primitive lists when False,
            keeping only widget names and kinds

    Raises:
        ValueError: For the CSV format, which cannot hold a report
    """
    if format == SerializerFormat.CSV:
        raise ValueError("Reports serialize to JSON only")
    data = report.to_dict()
    if not include_primitives:
        for widget in data["widgets"]:
            del widget["primitives"]
    if format == SerializerFormat.JSON_PRETTY:
        return json.dumps(data, indent=2)
    return json.dumps(data, separators=(",", ":"))
