import re

import numpy as np
from lxml import etree

from dippymap.errors import MalformedAssetError

_SEPARATOR = r"[,\s]"


def _arguments(name: str, transform_string: str) -> list[float]:
    match = re.fullmatch(rf"{name}\((.*)\)", transform_string)
    if not match:
        raise MalformedAssetError(f"Can't parse transformation: {transform_string}")
    values = [value for value in re.split(_SEPARATOR, match.group(1)) if value != ""]
    try:
        return [float(value) for value in values]
    except ValueError:
        raise MalformedAssetError(f"Can't parse transformation: {transform_string}") from None


class TransGL3:
    """Affine transform of an SVG element, stored as a 3x3 matrix acting on row vectors (x, y, 1)."""

    def __init__(self, transform_string: str | etree._Element | None = None):
        if transform_string is None:
            transform_string = ""
        if not isinstance(transform_string, str):
            transform_string = transform_string.get("transform", "")

        x_dx = 1
        y_dy = 1
        x_dy = 0
        y_dx = 0
        x_c = 0
        y_c = 0
        transform_string = transform_string.strip()

        if transform_string.startswith("matrix"):
            args = _arguments("matrix", transform_string)
            if len(args) != 6:
                raise MalformedAssetError(f"matrix needs 6 arguments: {transform_string}")
            x_dx, y_dx, x_dy, y_dy, x_c, y_c = args

        elif transform_string.startswith("translate"):
            args = _arguments("translate", transform_string)
            if len(args) not in (1, 2):
                raise MalformedAssetError(f"translate needs 1 or 2 arguments: {transform_string}")
            x_c = args[0]
            y_c = args[1] if len(args) == 2 else 0

        elif transform_string.startswith("scale"):
            args = _arguments("scale", transform_string)
            if len(args) not in (1, 2):
                raise MalformedAssetError(f"scale needs 1 or 2 arguments: {transform_string}")
            x_dx = args[0]
            y_dy = args[1] if len(args) == 2 else args[0]

        elif transform_string.startswith("rotate"):
            args = _arguments("rotate", transform_string)
            if len(args) == 3:
                coord = args[1], args[2]
            elif len(args) == 1:
                coord = 0, 0
            else:
                raise MalformedAssetError(f"rotate needs 1 or 3 arguments: {transform_string}")
            angle = args[0] * np.pi / 180
            pre = TransGL3().init(x_c=-coord[0], y_c=-coord[1])
            post = TransGL3().init(x_c=coord[0], y_c=coord[1])
            cos = np.cos(angle)
            sin = np.sin(angle)
            x_dx =  cos
            y_dx =  sin
            x_dy = -sin
            y_dy =  cos

        elif transform_string != "":
            raise MalformedAssetError(f"Unknown transformation: {transform_string}")

        # the matrix represents the transformation from (x, y, const) to (x, y, const)
        # we preserve the const via a 1 so that compositions work correctly
        self.matrix = np.array([
            [x_dx, y_dx, 0],
            [x_dy, y_dy, 0],
            [x_c , y_c , 1]
        ], dtype=float)
        if transform_string.startswith("rotate"):
            self.matrix = pre.matrix @ self.matrix @ post.matrix

    # this is so that functions can create TransGL3 with specific values, not from an element
    def init(self, x_dx=1, y_dy=1, x_dy=0, y_dx=0, x_c=0, y_c=0):
        self.matrix = np.array([
            [x_dx, y_dx, 0],
            [x_dy, y_dy, 0],
            [x_c , y_c , 1]
        ], dtype=float)
        return self

    def transform(self, point: tuple[float, float]) -> tuple[float, float]:
        point = np.concatenate((point, (1,)))
        return tuple((point @ self.matrix)[:2].tolist())

    def translation(self) -> tuple[float, float]:
        return float(self.matrix[2, 0]), float(self.matrix[2, 1])

    def is_translation(self) -> bool:
        return bool(np.allclose(self.matrix[:2, :2], np.identity(2)))

    # (t1 * t2).transform(p) == t2.transform(t1.transform(p)),
    # so an element's own transform goes on the left and its ancestors' on the right
    def __mul__(self, other):
        out = TransGL3()
        out.matrix = self.matrix @ other.matrix
        return out

    def __str__(self):
        return f"matrix({','.join(map(str, self.matrix[:, :2].flatten().tolist()))})"


def accumulated_transform(element: etree._Element, stop: etree._Element | None = None) -> TransGL3:
    """Composition of the element's own transform and that of every ancestor below stop."""
    total = TransGL3()
    current = element
    while current is not None and current is not stop:
        total = total * TransGL3(current)
        current = current.getparent()
    return total
