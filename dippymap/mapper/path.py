from __future__ import annotations

import numpy as np

from dippymap.mapper.geometry import Point


def format_number(value: float) -> str:
    return np.format_float_positional(float(value), precision=4, trim="-")


def format_point(point: Point) -> str:
    return f"{format_number(point.x)},{format_number(point.y)}"


class SvgPath:
    """
    Sequence of path segments, kept as points until serialized.
    segments holds (command, points) pairs with command in M, L, C, z.
    """

    def __init__(self):
        self.segments: list[tuple[str, tuple[Point, ...]]] = []

    def move_to(self, point: Point) -> SvgPath:
        self.segments.append(("M", (point,)))
        return self

    def line_to(self, point: Point) -> SvgPath:
        self.segments.append(("L", (point,)))
        return self

    def curve_to(self, control1: Point, control2: Point, end: Point) -> SvgPath:
        self.segments.append(("C", (control1, control2, end)))
        return self

    def close(self) -> SvgPath:
        self.segments.append(("z", ()))
        return self

    def points(self) -> list[Point]:
        return [point for _, points in self.segments for point in points]

    def __str__(self):
        parts = []
        for command, points in self.segments:
            if points:
                parts.append(f"{command} {' '.join(map(format_point, points))}")
            else:
                parts.append(command)
        return " ".join(parts)
