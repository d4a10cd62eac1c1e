# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""Tests for the command-line entry point."""

import json

import pytest

from censor.runtime.cli import build_parser, main


PAIR = "#000000,#FFFFFF"


class TestParser:

    def test_sources_exclusive(self):
        with pytest.raises(SystemExit) as exc:
            build_parser().parse_args(["-c", PAIR, "-l", "sweetie-16"])
        assert exc.value.code == 2

    def test_metric_list(self):
        args = build_parser().parse_args(["-c", PAIR, "-m", "iss,cycles"])
        assert args.metrics == ("iss", "cycles")

    def test_metric_all(self):
        args = build_parser().parse_args(["-c", PAIR, "-m", "all"])
        assert "mean_distance" in args.metrics

    def test_unknown_metric(self):
        with pytest.raises(SystemExit) as exc:
            build_parser().parse_args(["-c", PAIR, "-m", "iss,nope"])
        assert exc.value.code == 2


class TestMain:

    def test_missing_source(self):
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 2

    def test_metrics_to_stdout(self, capsys):
        assert main(["-c", PAIR, "-m", "acyclic,cycles"]) == 0
        assert capsys.readouterr().out == "acyclic,true\ncycles,1\n"

    def test_metrics_json(self, capsys):
        assert main(["-c", PAIR, "-m", "cycles", "--json"]) == 0
        assert json.loads(capsys.readouterr().out) == {"cycles": 1}

    def test_bad_colour(self, capsys):
        assert main(["-c", "#000000,#GGGGGG", "-m", "iss"]) == 1
        assert "[censor][ERROR]" in capsys.readouterr().err

    def test_duplicate_colours(self):
        assert main(["-c", "#000000,#000000", "-m", "iss"]) == 1

    def test_sheet_and_report(self, tmp_path):
        report = tmp_path / "report.json"
        assert main(["-c", PAIR, "-o", str(tmp_path / "sheet"), "--report", str(report)]) == 0
        assert (tmp_path / "sheet.png").exists()
        assert json.loads(report.read_text())["metrics"]["cycles"] == 1

    def test_hexfile(self, tmp_path, capsys):
        path = tmp_path / "pal.hex"
        path.write_text("000000\nFFFFFF\n")
        assert main(["-f", str(path), "-m", "cycles"]) == 0
        assert capsys.readouterr().out == "cycles,1\n"
