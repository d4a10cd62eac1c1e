# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""
Command-line entry point.

    censor -c "#1A1C2C,#5D275D,#B13E53" -o sheet.png
    censor -l sweetie-16 -m iss,acyclic
    censor --daemon 9000
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from censor import __version__
from censor.errors import CensorError
from censor.runtime.loader import load_palette
from censor.runtime.orchestrator import METRIC_NAMES, AnalysisConfig, analyse, compute_metrics
from censor.runtime.render import render_report
from censor.runtime.serializers import SerializerFormat, to_metrics_text, to_report_json


logger = logging.getLogger("censor")

LOG_FORMAT = "[censor][%(levelname)s] %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Send censor's log records to stderr with a tagged format."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def _metric_list(value: str) -> tuple[str, ...]:
    names = tuple(v.strip() for v in value.split(",") if v.strip())
    if not names or "all" in names:
        return METRIC_NAMES
    unknown = [n for n in names if n not in METRIC_NAMES]
    if unknown:
        raise argparse.ArgumentTypeError(
            f"unknown metric(s) {', '.join(unknown)}; choose from {', '.join(METRIC_NAMES)} or all"
        )
    return names


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="censor",
        description="Analyse a restricted colour palette and draw an analysis sheet.",
    )
    parser.add_argument("--version", action="version", version=f"censor {__version__}")

    source = parser.add_mutually_exclusive_group()
    source.add_argument("-c", "--colours", metavar="HEX,HEX,...", help="comma-separated hex colours")
    source.add_argument("-f", "--hexfile", metavar="PATH", help="file with one hex colour per line")
    source.add_argument("-i", "--image", metavar="PATH", help="image whose opaque colours form the palette")
    source.add_argument("-l", "--lospec", metavar="SLUG", help="palette name on lospec.com")

    parser.add_argument("-o", "--out", default="plot.png", help="output image (default: plot.png)")
    parser.add_argument("--grey-ui", action="store_true", help="draw the sheet in greys, not palette colours")
    parser.add_argument(
        "-m", "--metrics", type=_metric_list, metavar="LIST",
        help=f"print metrics instead of drawing: comma-separated from {', '.join(METRIC_NAMES)}, or all",
    )
    parser.add_argument("--json", action="store_true", help="with -m, print JSON instead of name,value lines")
    parser.add_argument("--report", metavar="PATH", help="also write the full analysis as JSON")
    parser.add_argument("--daemon", type=int, metavar="PORT", help="serve requests on a local TCP port")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def _source(args: argparse.Namespace) -> Optional[tuple[str, str]]:
    for scheme, value in (
        ("hex", args.colours),
        ("file", args.hexfile),
        ("img", args.image),
        ("lospec", args.lospec),
    ):
        if value is not None:
            return scheme, value
    return None


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if args.daemon is not None:
        from censor.runtime.daemon import serve
        serve(args.daemon)
        return 0

    source = _source(args)
    if source is None:
        parser.error("one of -c/--colours, -f/--hexfile, -i/--image, -l/--lospec is required")

    try:
        palette = load_palette(*source)
        if args.metrics is not None:
            fmt = SerializerFormat.JSON if args.json else SerializerFormat.CSV
            text = to_metrics_text(compute_metrics(palette, args.metrics), format=fmt)
            sys.stdout.write(text if text.endswith("\n") else text + "\n")
            return 0

        report = analyse(palette, AnalysisConfig(neutral_ui=args.grey_ui))
        path = render_report(report, args.out)
        if args.report:
            with open(args.report, "w", encoding="utf-8") as f:
                f.write(to_report_json(report, format=SerializerFormat.JSON_PRETTY))
        logger.debug("Sheet saved to %s", path)
    except CensorError as e:
        logger.error("%s", e)
        return 1
    except OSError as e:
        logger.error("Cannot write output: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
