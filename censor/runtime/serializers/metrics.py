# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""
Metric output for scripts and the daemon's compute command.

CSV output is one ``name,value`` line per metric, in request order.
"""

from __future__ import annotations

import json
from typing import Mapping, Union

from censor.runtime.serializers.base import SerializerFormat, format_value


def to_metrics_text(
    metrics: Mapping[str, Union[float, int, bool]],
    *,
    format: SerializerFormat = SerializerFormat.CSV,
) -> str:
    """
    Serialize computed metrics.

    Args:
        metrics: Ordered metric name to value mapping
        format: CSV lines, or a JSON object

    Returns:
        Text with a trailing newline for CSV, none for JSON
    """
    if format == SerializerFormat.CSV:
        return "".join(f"{name},{format_value(value)}\n" for name, value in metrics.items())
    data = {
        name: value if isinstance(value, (bool, int)) else round(value, 4)
        for name, value in metrics.items()
    }
    if format == SerializerFormat.JSON_PRETTY:
        return json.dumps(data, indent=2)
    return json.dumps(data, separators=(",", ":"))
