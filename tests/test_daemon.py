# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""Tests for the line-oriented TCP service."""

import shlex
import socket
import threading

import pytest

from censor.runtime.daemon import handle_request, make_server, parse_request


PAIR = "hex://#000000,#FFFFFF"


class TestParseRequest:

    def test_analyse(self):
        req = parse_request(f"analyse {PAIR} out.png --grey-ui")
        assert (req.command, req.scheme, req.data) == ("analyse", "hex", "#000000,#FFFFFF")
        assert req.output == "out.png"
        assert req.grey_ui

    def test_compute_all_by_default(self):
        assert parse_request(f"compute {PAIR}").metrics is None
        assert parse_request(f"compute {PAIR} iss all").metrics is None

    def test_compute_selection(self):
        assert parse_request(f"compute {PAIR} cycles iss").metrics == ("cycles", "iss")

    def test_quoted_path(self):
        assert parse_request(f"analyse {PAIR} 'my sheet.png'").output == "my sheet.png"

    @pytest.mark.parametrize("line", [
        "",
        "render hex://000000,FFFFFF",
        f"analyse {PAIR}",
        f"compute {PAIR} bogus",
        "compute ftp://x",
        f"analyse {PAIR} 'unterminated",
    ])
    def test_rejects(self, line):
        with pytest.raises(ValueError):
            parse_request(line)


class TestHandleRequest:

    def test_compute(self):
        response = handle_request(f"compute {PAIR} acyclic cycles")
        assert response == "acyclic,true\ncycles,1\nOK\n"

    def test_analyse_writes_sheet(self, tmp_path):
        out = tmp_path / "sheet"
        assert handle_request(f"analyse {PAIR} {shlex.quote(str(out))}") == "OK\n"
        assert (tmp_path / "sheet.png").exists()

    @pytest.mark.parametrize("line", [
        "nonsense",
        "compute hex://#000000",
        "compute hex://#000000,#000000",
        "compute hex://#000000,#ZZZZZZ",
    ])
    def test_failures_answer_err(self, line):
        assert handle_request(line) == "ERR\n"


class TestServer:

    def _ask(self, port, line):
        with socket.create_connection(("127.0.0.1", port), timeout=30) as sock:
            sock.sendall(line.encode("utf-8") + b"\n")
            chunks = []
            while True:
                data = sock.recv(4096)
                if not data:
                    break
                chunks.append(data)
        return b"".join(chunks).decode("utf-8")

    def test_round_trip(self):
        server = make_server(0)
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        try:
            port = server.server_address[1]
            assert self._ask(port, f"compute {PAIR} cycles") == "cycles,1\nOK\n"
            assert self._ask(port, "compute nowhere") == "ERR\n"
        finally:
            server.shutdown()
            server.server_close()
