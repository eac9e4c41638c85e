import copy
import logging
from typing import Sequence

import numpy as np
from lxml import etree

from dippymap.errors import MissingElementError
from dippymap.map_parser.vector.utils import find_svg_element, get_svg_element
from dippymap.mapper.geometry import Point, Vector
from dippymap.mapper.path import SvgPath, format_number
from dippymap.mapper.resolver import center_of
from dippymap.mapper.scene import Scene
from dippymap.persistence.order import (
    Build,
    Convoy,
    Disband,
    Hold,
    Move,
    MoveViaConvoy,
    Order,
    Support,
    parse_order,
)

logger = logging.getLogger(__name__)

# boxes and crosses are centered a little up and left of the province anchor
GLYPH_OFFSET = Point(-3, -3)
BOX_RADII = (27, 20)

ARROW_HALF_WIDTH = 3
ARROW_HEAD_WIDTH = ARROW_HALF_WIDTH * 3
ARROW_HEAD_LENGTH = ARROW_HALF_WIDTH * 6
ARROW_SPACER = ARROW_HALF_WIDTH * 2

CROSS_BOUND = 14
CROSS_WIDTH = 4

DISLODGED_OFFSET = Point(5, 5)
DISLODGED_OPACITY = 0.73
BUILD_COLOR = "#000000"

BOX_STYLE = "fill-rule:evenodd;fill:{color};stroke:#000000;stroke-width:0.5;stroke-miterlimit:4;stroke-opacity:1.0;fill-opacity:0.9;"
ARROW_STYLE = "fill:{color};stroke:#000000;stroke-width:0.5;stroke-miterlimit:4;stroke-opacity:1.0;fill-opacity:0.7;"
CROSS_STYLE = "fill:{color};stroke:#000000;stroke-width:0.5;stroke-miterlimit:4;stroke-opacity:1.0;fill-opacity:0.9;"
UNIT_STYLE = "fill:{color};fill-opacity:{opacity};stroke:#000000;stroke-width:1;stroke-miterlimit:4;stroke-opacity:1;stroke-dasharray:none"


def box_path(center: Point, corners: int) -> SvgPath:
    """
    Two concentric regular polygons; drawn with fill-rule evenodd they make a ring.
    Even corner counts are turned half a step so an edge, not a corner, faces up.
    """
    if corners < 3:
        raise ValueError(f"A box needs at least 3 corners, got {corners}")
    step = np.pi * 2 / corners
    start_angle = np.pi * 1.5
    if corners % 2 == 0:
        start_angle += step / 2
    angles = start_angle + step * np.arange(corners)

    path = SvgPath()
    for radius in BOX_RADII:
        xs = center.x + np.cos(angles) * radius
        ys = center.y + np.sin(angles) * radius
        path.move_to(Point(float(xs[0]), float(ys[0])))
        for x, y in zip(xs[1:], ys[1:]):
            path.line_to(Point(float(x), float(y)))
        path.close()
    return path


def arrow_path(points: Sequence[Point]) -> SvgPath:
    """
    Outline of an arrow through 2 or 3 points. The shaft bends at the middle point
    and stops short of both ends so it doesn't cover the glyphs drawn there.
    """
    if len(points) == 2:
        start, end = points
        middle = start.add(end.sub(start).div(2.0))
    elif len(points) == 3:
        start, middle, end = points
    else:
        raise ValueError(f"An arrow runs through 2 or 3 points, got {len(points)}")

    part1 = Vector(start, middle)
    part2 = Vector(middle, end)

    start0 = start.add(part1.dir().mul(ARROW_SPACER)).add(part1.orth().mul(ARROW_HALF_WIDTH))
    start1 = start.add(part1.dir().mul(ARROW_SPACER)).sub(part1.orth().mul(ARROW_HALF_WIDTH))
    sum_orth = part1.orth().add(part2.orth())
    avg_orth = sum_orth.div(sum_orth.length())
    control0 = middle.add(avg_orth.mul(ARROW_HALF_WIDTH))
    control1 = middle.sub(avg_orth.mul(ARROW_HALF_WIDTH))
    neck = end.sub(part2.dir().mul(ARROW_SPACER + ARROW_HEAD_LENGTH))
    end0 = neck.add(part2.orth().mul(ARROW_HALF_WIDTH))
    end1 = neck.sub(part2.orth().mul(ARROW_HALF_WIDTH))
    tip = end.sub(part2.dir().mul(ARROW_SPACER))
    head0 = end0.add(part2.orth().mul(ARROW_HEAD_WIDTH))
    head1 = end1.sub(part2.orth().mul(ARROW_HEAD_WIDTH))

    return (
        SvgPath()
        .move_to(start0)
        .curve_to(control0, control0, end0)
        .line_to(head0)
        .line_to(tip)
        .line_to(head1)
        .line_to(end1)
        .curve_to(control1, control1, start1)
        .close()
    )


def cross_path(center: Point) -> SvgPath:
    # three points of one arm; the other arms are the same points turned by 90 degrees
    init = np.array(
        [
            (0, CROSS_WIDTH),
            (CROSS_BOUND, CROSS_BOUND + CROSS_WIDTH),
            (CROSS_BOUND + CROSS_WIDTH, CROSS_BOUND),
        ]
    )
    rotate_90 = np.array([[0, -1], [1, 0]])
    points = np.concatenate((init, init @ rotate_90, -init, -init @ rotate_90)) + center

    path = SvgPath().move_to(Point(*map(float, points[0])))
    for point in points[1:]:
        path.line_to(Point(*map(float, point)))
    return path.close()


def _path_element(scene: Scene, path: SvgPath, style: str) -> etree._Element:
    return scene.create_element("path", {"style": style, "d": path})


def box_element(scene: Scene, province: str, corners: int, color: str) -> etree._Element:
    center = center_of(scene, province).add(GLYPH_OFFSET)
    return _path_element(scene, box_path(center, corners), BOX_STYLE.format(color=color))


def arrow_element(scene: Scene, provinces: Sequence[str], color: str) -> etree._Element:
    provinces = list(provinces)
    if len(provinces) == 3 and provinces[1] == provinces[2]:
        provinces = provinces[:2]
    if len(provinces) not in (2, 3):
        raise ValueError(f"An arrow runs through 2 or 3 provinces, got {provinces}")
    points = [center_of(scene, province) for province in provinces]
    return _path_element(scene, arrow_path(points), ARROW_STYLE.format(color=color))


def cross_element(scene: Scene, province: str, color: str) -> etree._Element:
    center = center_of(scene, province).add(GLYPH_OFFSET)
    return _path_element(scene, cross_path(center), CROSS_STYLE.format(color=color))


def unit_elements(
    scene: Scene,
    template_id: str,
    province: str,
    color: str,
    dislodged: bool = False,
    build: bool = False,
) -> list[etree._Element]:
    """Shadow and unit artwork cloned from the page's unit template, placed on the province."""
    template = get_svg_element(scene.page(), template_id)
    shadow = find_svg_element(template, "shadow")
    if shadow is None:
        raise MissingElementError(f"Unit template {template_id} has no shadow")
    hull = find_svg_element(template, "hull")
    body = find_svg_element(template, "body")
    if hull is None and body is None:
        raise MissingElementError(f"Unit template {template_id} has neither hull nor body")

    loc = center_of(scene, province)
    opacity = 1
    if dislodged:
        loc = loc.add(DISLODGED_OFFSET)
        opacity = DISLODGED_OPACITY
    loc = loc.add(Point(0, -11))
    # hull artwork has a bigger bounding box
    if hull is not None:
        unit = copy.deepcopy(hull)
        loc = loc.add(Point(-65, -15))
    else:
        unit = copy.deepcopy(body)
        loc = loc.add(Point(-40, -5))
    shadow = copy.deepcopy(shadow)

    if build:
        color = BUILD_COLOR
    transform = f"translate({format_number(loc.x)}, {format_number(loc.y)})"
    for element in (shadow, unit):
        element.tail = None
        element.set("transform", transform)
    unit.set("style", UNIT_STYLE.format(color=color, opacity=format_number(opacity)))
    return [shadow, unit]


def order_elements(scene: Scene, order: Order | Sequence[str], color: str) -> list[etree._Element]:
    if not isinstance(order, Order):
        order = parse_order(order)

    match order:
        case Hold():
            return [box_element(scene, order.province, 4, color)]
        case MoveViaConvoy():
            return [
                arrow_element(scene, [order.province, order.destination], color),
                box_element(scene, order.province, 5, color),
            ]
        case Move():
            return [arrow_element(scene, [order.province, order.destination], color)]
        case Build():
            return unit_elements(scene, order.unit_type.template_id, order.province, color, build=True)
        case Disband():
            return [cross_element(scene, order.province, color)]
        case Convoy():
            return [
                box_element(scene, order.province, 5, color),
                arrow_element(scene, [order.source, order.province, order.destination], color),
            ]
        case Support():
            route = [order.province, order.source]
            if order.destination is not None:
                route.append(order.destination)
            return [
                box_element(scene, order.province, 3, color),
                arrow_element(scene, route, color),
            ]
        case _:
            raise ValueError(f"Can't draw {order!r}")


def _append(scene: Scene, layer: str, elements: list[etree._Element]) -> list[etree._Element]:
    target = scene.layer(layer)
    for element in elements:
        target.append(element)
    return elements


def add_box(scene: Scene, province: str, corners: int, color: str) -> etree._Element:
    return _append(scene, "orders", [box_element(scene, province, corners, color)])[0]


def add_arrow(scene: Scene, provinces: Sequence[str], color: str) -> etree._Element:
    return _append(scene, "orders", [arrow_element(scene, provinces, color)])[0]


def add_cross(scene: Scene, province: str, color: str) -> etree._Element:
    return _append(scene, "orders", [cross_element(scene, province, color)])[0]


def add_unit(
    scene: Scene,
    template_id: str,
    province: str,
    color: str,
    dislodged: bool = False,
    build: bool = False,
    layer: str = "units",
) -> list[etree._Element]:
    return _append(scene, layer, unit_elements(scene, template_id, province, color, dislodged, build))


def add_order(scene: Scene, order: Order | Sequence[str], color: str) -> list[etree._Element]:
    # everything is built before anything is appended, so a bad order leaves the layer as it was
    elements = order_elements(scene, order, color)
    logger.debug(f"drawing {order} in {color}")
    return _append(scene, "orders", elements)
