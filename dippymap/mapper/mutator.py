import copy
import logging

from lxml import etree

from dippymap import config
from dippymap.map_parser.vector.utils import find_all_svg_elements
from dippymap.mapper.scene import Scene

logger = logging.getLogger(__name__)


def show_provinces(scene: Scene) -> None:
    # the provinces layer ships hidden by an inline style
    layer = scene.layer("provinces")
    if "style" in layer.attrib:
        del layer.attrib["style"]


def _restyle(element: etree._Element, fill: str, opacity: float) -> None:
    if "style" in element.attrib:
        del element.attrib["style"]
    element.set("fill", fill)
    element.set("fill-opacity", str(opacity))


def color_province(scene: Scene, province: str, color: str) -> None:
    _restyle(scene.province(province), color, config.PROVINCE_FILL_OPACITY)
    logger.debug(f"colored {province} {color}")


def hide_province(scene: Scene, province: str) -> None:
    _restyle(scene.province(province), "#ffffff", 0)
    logger.debug(f"hid {province}")


def _nearest_transform(element: etree._Element) -> str | None:
    current = element
    while current is not None:
        transform = current.get("transform")
        if transform is not None:
            return transform
        current = current.getparent()
    return None


def highlight_province(scene: Scene, province: str) -> etree._Element:
    """
    Lays a striped copy of the province over it. The copy takes the nearest transform found
    on the province or its ancestors; transforms further up are not composed in.
    """
    element = scene.province(province)
    if scene.find(config.HIGHLIGHT_PATTERN_ID) is None and config.HIGHLIGHT_PATTERN_ID not in scene.reported:
        logger.warning(f"Pattern {config.HIGHLIGHT_PATTERN_ID} is not defined, highlights won't be striped")
        scene.reported.add(config.HIGHLIGHT_PATTERN_ID)

    highlight = copy.deepcopy(element)
    highlight.tail = None
    highlight.set("id", f"{element.get('id')}_highlight")
    highlight.set("style", f"fill:url(#{config.HIGHLIGHT_PATTERN_ID})")
    highlight.set("fill-opacity", "1")
    highlight.set("stroke", "none")
    if "transform" in highlight.attrib:
        del highlight.attrib["transform"]
    transform = _nearest_transform(element)
    if transform is not None:
        highlight.set("transform", transform)

    scene.layer("highlights").append(highlight)
    logger.debug(f"highlighted {province}")
    return highlight


def unhighlight_province(scene: Scene, province: str) -> None:
    # a mistyped id fails here; a province without highlights is a no-op
    scene.province(province)
    for highlight in find_all_svg_elements(scene.svg, f"{province}_highlight"):
        highlight.getparent().remove(highlight)


def remove_orders(scene: Scene) -> None:
    layer = scene.layer("orders")
    for child in list(layer):
        layer.remove(child)
    layer.text = None
