# Copyright (c) 2026 Censor
# SPDX-License-Identifier: MIT

"""
Drawable primitives emitted by widget layout generators.

Coordinates are normalised to the widget box: (0, 0) is the top-left corner,
(1, 1) the bottom-right, y grows downward. Colours are '#RRGGBB' strings.
A renderer scales these into pixels; nothing here knows about pixels.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class PrimitiveKind(Enum):
    """Tag of the closed primitive variant."""

    POINT = "point"
    POLYLINE = "polyline"
    POLYGON = "polygon"
    LABEL = "label"


def _round_points(points: tuple[tuple[float, float], ...]) -> list[list[float]]:
    return [[round(x, 5), round(y, 5)] for x, y in points]


@dataclass(frozen=True, slots=True)
class Point:
    """A filled dot; size is its diameter as a fraction of the box width."""
    x: float
    y: float
    colour: str
    size: float = 0.02
    outline: Optional[str] = None

    kind = PrimitiveKind.POINT

    def to_dict(self) -> dict:
        d = {
            "kind": self.kind.value,
            "x": round(self.x, 5),
            "y": round(self.y, 5),
            "colour": self.colour,
            "size": self.size,
        }
        if self.outline is not None:
            d["outline"] = self.outline
        return d


@dataclass(frozen=True, slots=True)
class Polyline:
    """Connected line segments, optionally closed or dotted."""
    points: tuple[tuple[float, float], ...]
    colour: str
    closed: bool = False
    dotted: bool = False

    kind = PrimitiveKind.POLYLINE

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "points": _round_points(self.points),
            "colour": self.colour,
            "closed": self.closed,
            "dotted": self.dotted,
        }


@dataclass(frozen=True, slots=True)
class Polygon:
    """
    A filled polygon.

    fill_alt, when set, asks for a two-colour checkerboard of fill and
    fill_alt, which is how dithered mixes are shown.
    """
    points: tuple[tuple[float, float], ...]
    fill: str
    fill_alt: Optional[str] = None
    outline: Optional[str] = None

    kind = PrimitiveKind.POLYGON

    @classmethod
    def rect(
        cls,
        x0: float,
        y0: float,
        x1: float,
        y1: float,
        fill: str,
        fill_alt: Optional[str] = None,
        outline: Optional[str] = None,
    ) -> Polygon:
        return cls(((x0, y0), (x1, y0), (x1, y1), (x0, y1)), fill, fill_alt, outline)

    def to_dict(self) -> dict:
        d = {"kind": self.kind.value, "points": _round_points(self.points), "fill": self.fill}
        if self.fill_alt is not None:
            d["fill_alt"] = self.fill_alt
        if self.outline is not None:
            d["outline"] = self.outline
        return d


@dataclass(frozen=True, slots=True)
class Label:
    """
    Text anchored at (x, y).

    anchor is one of 'left', 'centre', 'right'; y is the text's vertical middle.
    """
    x: float
    y: float
    text: str
    colour: str
    anchor: str = "left"

    kind = PrimitiveKind.LABEL

    def __post_init__(self) -> None:
        if self.anchor not in ("left", "centre", "right"):
            raise ValueError(f"Unknown label anchor: {self.anchor}")

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "x": round(self.x, 5),
            "y": round(self.y, 5),
            "text": self.text,
            "colour": self.colour,
            "anchor": self.anchor,
        }


Primitive = Union[Point, Polyline, Polygon, Label]
