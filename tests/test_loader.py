# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""Tests for palette ingestion from hex lists, files, images and lospec."""

import io
import urllib.error
import urllib.request

import pytest
from PIL import Image

from censor.errors import DuplicateColours, InvalidColour, InvalidPaletteSize, SourceUnavailable
from censor.runtime.loader import (
    check_palette,
    load_from_file,
    load_from_hex,
    load_from_image,
    load_from_lospec,
    load_palette,
    parse_source,
)


class TestCheckPalette:

    def test_too_few(self):
        with pytest.raises(InvalidPaletteSize, match="Too few colours: 1"):
            check_palette([(0, 0, 0)])

    def test_too_many(self):
        with pytest.raises(InvalidPaletteSize, match="Too many colours: 257"):
            check_palette([(i % 256, i // 256, 0) for i in range(257)])

    def test_duplicates(self):
        with pytest.raises(DuplicateColours):
            check_palette([(0, 0, 0), (255, 255, 255), (0, 0, 0)])


class TestHexAndFile:

    def test_comma_string(self):
        p = load_from_hex("#1A1C2C,5d275d, B13E53")
        assert p.hexes == ("#1A1C2C", "#5D275D", "#B13E53")

    def test_invalid(self):
        with pytest.raises(InvalidColour):
            load_from_hex("#000000,#GGGGGG")

    def test_file_skips_blank_lines(self, tmp_path):
        path = tmp_path / "pal.hex"
        path.write_text("000000\n\nffffff\n  \nff0000\n")
        assert load_from_file(path).hexes == ("#000000", "#FFFFFF", "#FF0000")

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceUnavailable):
            load_from_file(tmp_path / "nope.hex")


class TestImage:

    def _save(self, tmp_path, pixels, size):
        img = Image.new("RGBA", size)
        img.putdata(pixels)
        path = tmp_path / "sprite.png"
        img.save(path)
        return path

    def test_scan_order_and_transparency(self, tmp_path):
        pixels = [
            (255, 0, 0, 255), (0, 0, 0, 255), (255, 0, 0, 255),
            (0, 255, 0, 128), (0, 0, 255, 255), (0, 0, 0, 255),
        ]
        p = load_from_image(self._save(tmp_path, pixels, (3, 2)))
        assert p.hexes == ("#FF0000", "#000000", "#0000FF")

    def test_single_colour(self, tmp_path):
        path = self._save(tmp_path, [(9, 9, 9, 255)] * 4, (2, 2))
        with pytest.raises(InvalidPaletteSize):
            load_from_image(path)

    def test_not_an_image(self, tmp_path):
        path = tmp_path / "bad.png"
        path.write_bytes(b"not a png")
        with pytest.raises(SourceUnavailable):
            load_from_image(path)


class TestLospec:

    def test_fetch(self, monkeypatch):
        seen = {}

        def fake_urlopen(request, timeout):
            seen["url"] = request.full_url
            seen["agent"] = request.get_header("User-agent")
            return io.BytesIO(b"Tiny,someone,000000,ffffff,ff0000\n")

        monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)
        p = load_from_lospec("tiny")
        assert p.hexes == ("#000000", "#FFFFFF", "#FF0000")
        assert seen["url"] == "https://lospec.com/palette-list/tiny.csv"
        assert seen["agent"].startswith("censor v")

    def test_not_found(self, monkeypatch):
        monkeypatch.setattr(urllib.request, "urlopen", lambda request, timeout: io.BytesIO(b"file not found"))
        with pytest.raises(SourceUnavailable, match="not found"):
            load_from_lospec("missing")

    def test_network_error(self, monkeypatch):
        def fail(request, timeout):
            raise urllib.error.URLError("offline")

        monkeypatch.setattr(urllib.request, "urlopen", fail)
        with pytest.raises(SourceUnavailable):
            load_from_lospec("any")


class TestSources:

    def test_parse(self):
        assert parse_source("hex://#000000,#FFFFFF") == ("hex", "#000000,#FFFFFF")
        assert parse_source("file://a/b.hex") == ("file", "a/b.hex")

    @pytest.mark.parametrize("source", ["#000000", "ftp://x", "hex:/000000"])
    def test_parse_rejects(self, source):
        with pytest.raises(ValueError):
            parse_source(source)

    def test_dispatch(self):
        assert len(load_palette("hex", "000000,FFFFFF")) == 2

    def test_unknown_scheme(self):
        with pytest.raises(ValueError, match="scheme"):
            load_palette("gopher", "x")
