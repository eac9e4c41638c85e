import logging
import re

from dippymap.errors import MalformedAssetError, MissingElementError
from dippymap.map_parser.vector.transform import TransGL3
from dippymap.mapper.geometry import Point
from dippymap.mapper.scene import Scene

logger = logging.getLogger(__name__)

# center markers are drawn as a path starting "m x,y ..."
_MOVETO = re.compile(r"^\s*[mM]\s*(-?[\d.]+(?:[eE]-?\d+)?)\s*[,\s]\s*(-?[\d.]+(?:[eE]-?\d+)?)")

# the marker artwork is offset from the point it marks
CENTER_OFFSET = Point(-1.5, -2)


def center_of(scene: Scene, province: str) -> Point:
    """
    Anchor point of a province: the start of its <province>Center marker, moved by the
    transform of the marker's parent group. Only one level of grouping is taken into account.
    """
    center = scene.find(f"{province}Center")
    if center is None:
        raise MissingElementError(f"No center marker for province {province}")

    path_string = center.get("d", "")
    match = _MOVETO.match(path_string)
    if not match:
        raise MalformedAssetError(f"Center marker of {province} doesn't start with a moveto: {path_string[:30]}")
    try:
        raw = float(match.group(1)), float(match.group(2))
    except ValueError:
        raise MalformedAssetError(f"Center marker of {province} has bad coordinates: {match.group(0)}") from None

    parent = center.getparent()
    if parent is not None:
        raw = TransGL3(parent).transform(raw)
    return Point(*raw).add(CENTER_OFFSET)
