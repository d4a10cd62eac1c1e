# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""
Line-oriented TCP service.

One command per connection, one line per command:

    analyse <scheme>://<data> <output-path> [--grey-ui]
    compute <scheme>://<data> [metric ...]

analyse answers ``OK``; compute answers ``name,value`` lines then ``OK``.
Any failure answers ``ERR``. Diagnostics go to the log, never to the client.
"""

from __future__ import annotations

import argparse
import logging
import shlex
import socketserver
from dataclasses import dataclass
from typing import Optional

from censor.runtime.loader import load_palette, parse_source
from censor.runtime.orchestrator import METRIC_NAMES, AnalysisConfig, analyse, compute_metrics
from censor.runtime.render import render_report
from censor.runtime.serializers import to_metrics_text


logger = logging.getLogger(__name__)


DEFAULT_HOST = "127.0.0.1"
MAX_LINE = 64 * 1024

OK = "OK\n"
ERR = "ERR\n"


class _RequestParser(argparse.ArgumentParser):
    """Argument parser that raises instead of exiting the process."""

    def error(self, message):
        raise ValueError(message)


def _build_parser() -> argparse.ArgumentParser:
    parser = _RequestParser(prog="censor", add_help=False)
    commands = parser.add_subparsers(dest="command", required=True)

    p_analyse = commands.add_parser("analyse", add_help=False)
    p_analyse.add_argument("source")
    p_analyse.add_argument("output")
    p_analyse.add_argument("--grey-ui", action="store_true")

    p_compute = commands.add_parser("compute", add_help=False)
    p_compute.add_argument("source")
    p_compute.add_argument("metrics", nargs="*")
    return parser


_PARSER = _build_parser()


@dataclass(frozen=True)
class DaemonRequest:
    """A parsed command line."""
    command: str
    scheme: str
    data: str
    output: Optional[str] = None
    grey_ui: bool = False
    metrics: Optional[tuple[str, ...]] = None


def parse_request(line: str) -> DaemonRequest:
    """
    Parse one command line.

    An empty metric list, or ``all`` anywhere in it, selects every metric.

    Raises:
        ValueError: Malformed quoting, unknown command, bad arguments or
            an unknown source scheme
    """
    args = _PARSER.parse_args(shlex.split(line))
    scheme, data = parse_source(args.source)
    if args.command == "analyse":
        return DaemonRequest("analyse", scheme, data, output=args.output, grey_ui=args.grey_ui)
    unknown = [m for m in args.metrics if m != "all" and m not in METRIC_NAMES]
    if unknown:
        raise ValueError(f"Unknown metrics: {', '.join(unknown)}")
    metrics = None if not args.metrics or "all" in args.metrics else tuple(args.metrics)
    return DaemonRequest("compute", scheme, data, metrics=metrics)


def handle_request(line: str) -> str:
    """
    Execute one command line and return the full response text.

    Never raises for request failures; they are logged and answered with ERR.
    """
    try:
        request = parse_request(line)
        palette = load_palette(request.scheme, request.data)
        if request.command == "analyse":
            report = analyse(palette, AnalysisConfig(neutral_ui=request.grey_ui))
            render_report(report, request.output)
            return OK
        return to_metrics_text(compute_metrics(palette, request.metrics)) + OK
    except Exception:
        logger.exception("Command processing failed: %r", line)
        return ERR


class RequestHandler(socketserver.StreamRequestHandler):
    """Reads one command line, writes the response, closes."""

    def handle(self) -> None:
        raw = self.rfile.readline(MAX_LINE)
        try:
            line = raw.decode("utf-8").rstrip("\r\n")
        except UnicodeDecodeError:
            logger.warning("Undecodable command from %s", self.client_address[0])
            self.wfile.write(ERR.encode("ascii"))
            return
        logger.debug("%s: %s", self.client_address[0], line)
        self.wfile.write(handle_request(line).encode("utf-8"))


class CensorServer(socketserver.ThreadingTCPServer):
    daemon_threads = True
    allow_reuse_address = True


def make_server(port: int, host: str = DEFAULT_HOST) -> CensorServer:
    """Bind the service; port 0 picks a free port."""
    return CensorServer((host, port), RequestHandler)


def serve(port: int, host: str = DEFAULT_HOST) -> None:
    """Serve until interrupted."""
    with make_server(port, host) as server:
        logger.info("Started daemon on port %d", server.server_address[1])
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            logger.info("Daemon stopped")
