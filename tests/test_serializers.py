# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""Tests for the metric and report serializers."""

import json

import pytest

from censor.runtime.orchestrator import AnalysisConfig, analyse
from censor.runtime.serializers import (
    SerializerFormat,
    format_value,
    to_metrics_text,
    to_report_json,
)
from censor.schema import Palette
from censor.widgets import WidgetKind, WidgetSpec


METRICS = {"iss": 1.234, "acyclic": True, "cycles": 2}


def _report():
    palette = Palette.from_hex(["#000000", "#FFFFFF", "#FF0000"])
    config = AnalysisConfig(widgets=(WidgetSpec(WidgetKind.MAIN_PALETTE), WidgetSpec(WidgetKind.ACYCLIC)))
    return analyse(palette, config)


class TestFormatValue:

    @pytest.mark.parametrize("value,text", [(True, "true"), (False, "false"), (3, "3"), (0.5, "0.50"), (2.0, "2.00")])
    def test_values(self, value, text):
        assert format_value(value) == text


class TestMetricsText:

    def test_csv(self):
        assert to_metrics_text(METRICS) == "iss,1.23\nacyclic,true\ncycles,2\n"

    def test_csv_empty(self):
        assert to_metrics_text({}) == ""

    def test_json_compact(self):
        text = to_metrics_text(METRICS, format=SerializerFormat.JSON)
        assert text == '{"iss":1.234,"acyclic":true,"cycles":2}'

    def test_json_rounds_floats(self):
        data = json.loads(to_metrics_text({"iss": 1.23456789}, format=SerializerFormat.JSON_PRETTY))
        assert data == {"iss": 1.2346}


class TestReportJson:

    def test_structure(self):
        data = json.loads(to_report_json(_report()))
        assert set(data) == {"palette", "roles", "metrics", "widgets"}
        assert [w["name"] for w in data["widgets"]] == ["main_palette", "acyclic"]
        assert data["metrics"]["acyclic"] is True
        kinds = {p["kind"] for w in data["widgets"] for p in w["primitives"]}
        assert kinds <= {"point", "polyline", "polygon", "label"}

    def test_without_primitives(self):
        data = json.loads(to_report_json(_report(), include_primitives=False))
        assert all(set(w) == {"name", "kind"} for w in data["widgets"])

    def test_pretty_is_indented(self):
        assert "\n  " in to_report_json(_report(), format=SerializerFormat.JSON_PRETTY)

    def test_csv_rejected(self):
        with pytest.raises(ValueError):
            to_report_json(_report(), format=SerializerFormat.CSV)
