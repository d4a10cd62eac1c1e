# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""
Palette ingestion.

Sources are addressed as ``<scheme>://<data>``:

    hex://#1A1C2C,5D275D,B13E53     comma-separated hex list
    file://palette.hex              one hex colour per line
    img://sprite.png                unique fully opaque pixels, scan order
    lospec://sweetie-16             named palette fetched from lospec.com

Every loader validates the result with check_palette before returning.
"""

from __future__ import annotations

import logging
import urllib.error
import urllib.request
from pathlib import Path
from typing import Sequence, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from censor import __version__
from censor.engine.colorspace import parse_hex
from censor.errors import DuplicateColours, InvalidPaletteSize, SourceUnavailable
from censor.schema.palette import MAX_PALETTE_SIZE, MIN_PALETTE_SIZE, Palette


logger = logging.getLogger(__name__)


SCHEMES = ("hex", "file", "img", "lospec")

LOSPEC_URL = "https://lospec.com/palette-list/{slug}.csv"
FETCH_TIMEOUT = 10.0


def check_palette(rgb: Sequence[tuple[int, int, int]]) -> Palette:
    """
    Validate raw colours and build the Palette.

    Raises:
        InvalidPaletteSize: Fewer than 2 or more than 256 colours
        DuplicateColours: The same colour is listed twice
    """
    n = len(rgb)
    if n < MIN_PALETTE_SIZE:
        raise InvalidPaletteSize(f"Too few colours: {n}")
    if n > MAX_PALETTE_SIZE:
        raise InvalidPaletteSize(f"Too many colours: {n}")
    if len(set(map(tuple, rgb))) < n:
        raise DuplicateColours("Duplicated colours")
    return Palette.from_rgb(rgb)


def load_from_hex(hexes: Union[str, Sequence[str]]) -> Palette:
    """Palette from hex strings, or one comma-separated string of them."""
    if isinstance(hexes, str):
        hexes = hexes.split(",")
    return check_palette([parse_hex(h) for h in hexes])


def load_from_file(path: Union[str, Path]) -> Palette:
    """Palette from a text file with one hex colour per line; blank lines are skipped."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnavailable(f"Cannot read {path}: {e}") from e
    return check_palette([parse_hex(line) for line in text.splitlines() if line.strip()])


def load_from_image(path: Union[str, Path]) -> Palette:
    """
    Palette from the distinct colours of an image.

    Only fully opaque pixels count; colours keep the order in which a
    row-major scan first meets them.
    """
    try:
        with Image.open(path) as img:
            pixels = np.asarray(img.convert("RGBA"), dtype=np.uint8)
    except (OSError, UnidentifiedImageError) as e:
        raise SourceUnavailable(f"Cannot load image {path}: {e}") from e

    flat = pixels.reshape(-1, 4)
    opaque = flat[flat[:, 3] == 255, :3]
    if opaque.size == 0:
        return check_palette([])
    _, first = np.unique(opaque, axis=0, return_index=True)
    unique = opaque[np.sort(first)]
    logger.debug("%s: %d distinct opaque colours", path, len(unique))
    return check_palette([tuple(int(v) for v in c) for c in unique])


def load_from_lospec(slug: str, timeout: float = FETCH_TIMEOUT) -> Palette:
    """
    Fetch a named palette from lospec.com.

    The CSV body is ``name,author,hex,hex,...`` with bare hex digits.
    """
    url = LOSPEC_URL.format(slug=slug)
    request = urllib.request.Request(url, headers={"User-Agent": f"censor v{__version__}"})
    logger.info("Downloading palette %s", slug)
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            body = response.read().decode("utf-8").strip()
    except (urllib.error.URLError, OSError, UnicodeDecodeError) as e:
        raise SourceUnavailable(f"Cannot fetch {url}: {e}") from e
    if body == "file not found":
        raise SourceUnavailable(f"Palette not found: {slug}")
    return check_palette([parse_hex(h) for h in body.split(",")[2:] if h.strip()])


_LOADERS = {
    "hex": load_from_hex,
    "file": load_from_file,
    "img": load_from_image,
    "lospec": load_from_lospec,
}


def parse_source(source: str) -> tuple[str, str]:
    """
    Split ``<scheme>://<data>``.

    Raises:
        ValueError: Missing separator or unknown scheme
    """
    scheme, sep, data = source.partition("://")
    if not sep or scheme not in _LOADERS:
        raise ValueError(f"Expected one of {', '.join(s + '://' for s in SCHEMES)}, got {source!r}")
    return scheme, data


def load_palette(scheme: str, data: str) -> Palette:
    """Dispatch to the loader for scheme."""
    try:
        loader = _LOADERS[scheme]
    except KeyError:
        raise ValueError(f"Unknown palette scheme: {scheme!r}") from None
    return loader(data)
