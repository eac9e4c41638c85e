from __future__ import annotations

import math
from typing import NamedTuple


class Point(NamedTuple):
    """A point (or free vector) in the map's local SVG units. Every operation returns a new Point."""

    x: float
    y: float

    def add(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def sub(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def mul(self, f: float) -> Point:
        return Point(self.x * f, self.y * f)

    def div(self, f: float) -> Point:
        return Point(self.x / f, self.y / f)

    def length(self) -> float:
        return math.sqrt(self.x**2 + self.y**2)

    # rotates by 90 degrees
    def orth(self) -> Point:
        return Point(-self.y, self.x)

    def __neg__(self) -> Point:
        return Point(-self.x, -self.y)


class Vector(NamedTuple):
    """Directed segment from p1 to p2."""

    p1: Point
    p2: Point

    def length(self) -> float:
        return self.p2.sub(self.p1).length()

    # undefined for zero-length vectors; raises ZeroDivisionError
    def dir(self) -> Point:
        return self.p2.sub(self.p1).div(self.length())

    def orth(self) -> Point:
        return self.dir().orth()
