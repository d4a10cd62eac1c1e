# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""
Text serializers for analysis results.

Metrics go out as delimited lines or JSON; full reports as JSON.
"""

from censor.runtime.serializers.base import SerializerFormat, format_value
from censor.runtime.serializers.metrics import to_metrics_text
from censor.runtime.serializers.report import to_report_json

__all__ = [
    "SerializerFormat",
    "format_value",
    "to_metrics_text",
    "to_report_json",
]
