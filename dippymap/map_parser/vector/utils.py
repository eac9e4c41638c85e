import logging
import re

import shapely
from lxml import etree

from dippymap.errors import MalformedAssetError, MissingElementError
from dippymap.map_parser.vector.transform import TransGL3

logger = logging.getLogger(__name__)

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


def find_svg_element(root: etree._Element, element_id: str) -> etree._Element | None:
    # xpath variables take care of ids that aren't valid selectors (spa/nc)
    found = root.xpath("descendant-or-self::*[@id=$element_id]", element_id=element_id)
    if not found:
        return None
    return found[0]


def get_svg_element(root: etree._Element, element_id: str) -> etree._Element:
    element = find_svg_element(root, element_id)
    if element is None:
        raise MissingElementError(f"{element_id} isn't contained in the svg")
    return element


def find_all_svg_elements(root: etree._Element, element_id: str) -> list[etree._Element]:
    return root.xpath("descendant-or-self::*[@id=$element_id]", element_id=element_id)


# a command letter, or one number; "M10-20" and "1.5.5" split the way svg renderers split them
_PATH_TOKEN = re.compile(r"[A-Za-z]|[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")

# numbers consumed by one repetition of each command
_ARGUMENT_COUNTS: dict[str, int] = {"m": 2, "l": 2, "h": 1, "v": 1, "c": 6, "s": 4, "q": 4, "t": 2, "a": 7, "z": 0}


def _tokenize(path_string: str) -> list[str]:
    leftover = _PATH_TOKEN.sub(" ", path_string)
    if leftover.strip(" \t\r\n,"):
        raise MalformedAssetError(f"Unexpected characters in path data: {path_string[:40]}")
    return _PATH_TOKEN.findall(path_string)


def _end_point(command: str, values: list[float], current: tuple[float, float]) -> tuple[float, float]:
    # only the end point of a segment matters, control points and arc radii are skipped
    relative = command.islower()
    x, y = current
    match command.lower():
        case "h":
            return (x + values[0] if relative else values[0], y)
        case "v":
            return (x, y + values[0] if relative else values[0])
        case _:
            if relative:
                return (x + values[-2], y + values[-1])
            return (values[-2], values[-1])


def parse_path(path_string: str, translation: TransGL3) -> list[list[tuple[float, float]]]:
    """
    Reduces SVG path data to the polygons through its vertices, one list per subpath.
    Curves contribute only their end points, which is close enough for hit-testing.
    """
    tokens = _tokenize(path_string)
    rings: list[list[tuple[float, float]]] = []
    ring: list[tuple[float, float]] | None = None
    current = (0.0, 0.0)
    start: tuple[float, float] | None = None
    command: str | None = None

    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token.isalpha():
            command = token
            index += 1
            if command.lower() not in _ARGUMENT_COUNTS:
                raise MalformedAssetError(f"Unknown SVG path command {command}")
            if command.lower() == "z":
                if ring is None:
                    raise MalformedAssetError(f"'z' closes nothing in {path_string[:40]}")
                ring.append(translation.transform(start))
                current = start
                ring = None
            continue

        if command is None:
            raise MalformedAssetError(f"Path data doesn't start with a command: {path_string[:40]}")
        if command.lower() == "z":
            raise MalformedAssetError(f"'z' was followed by numbers in {path_string[:40]}")

        count = _ARGUMENT_COUNTS[command.lower()]
        arguments = tokens[index : index + count]
        if len(arguments) < count or any(argument.isalpha() for argument in arguments):
            raise MalformedAssetError(f"Ran out of arguments for {command} in {path_string[:40]}")
        index += count

        if command.lower() == "m":
            current = _end_point(command, [float(a) for a in arguments], current)
            start = current
            ring = [translation.transform(current)]
            rings.append(ring)
            # numbers repeated after a moveto are linetos
            command = "l" if command == "m" else "L"
            continue

        if ring is None:
            # drawing on after 'z' starts a new subpath at the closed one's start
            if start is None:
                raise MalformedAssetError(f"Path data doesn't start with a moveto: {path_string[:40]}")
            ring = [translation.transform(current)]
            rings.append(ring)
        current = _end_point(command, [float(a) for a in arguments], current)
        ring.append(translation.transform(current))
    return rings


def path_geometry(path_string: str, translation: TransGL3) -> shapely.Polygon | shapely.MultiPolygon:
    rings = [ring for ring in parse_path(path_string, translation) if len(ring) >= 3]
    if not rings:
        return shapely.Polygon()
    if len(rings) == 1:
        return shapely.Polygon(rings[0])
    poly = shapely.MultiPolygon(map(shapely.Polygon, rings))
    return poly.buffer(0.1)
