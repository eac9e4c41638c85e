import copy
import logging

from lxml import etree

from dippymap import config
from dippymap.errors import MissingElementError
from dippymap.map_parser.vector.utils import SVG_NAMESPACE, find_svg_element, get_svg_element

logger = logging.getLogger(__name__)

LAYERS: dict[str, str] = {
    "provinces": config.PROVINCES_LAYER_ID,
    "highlights": config.HIGHLIGHTS_LAYER_ID,
    "orders": config.ORDERS_LAYER_ID,
    "units": config.UNITS_LAYER_ID,
}


def _first_svg(element: etree._Element) -> etree._Element | None:
    for svg in element.iter(f"{{{SVG_NAMESPACE}}}svg", "svg"):
        return svg
    return None


class Scene:
    """
    Handle to the live map document. The caller owns the tree; the scene only
    remembers the container and which svg inside it is current.
    """

    def __init__(self, container: etree._Element):
        self.container: etree._Element = container
        self.svg: etree._Element = self._resolve_svg()
        # asset problems already logged, so they are reported once per document
        self.reported: set[str] = set()

    def _resolve_svg(self) -> etree._Element:
        svg = _first_svg(self.container)
        if svg is None:
            raise MissingElementError(f"container {self.container.get('id')} has no svg")
        return svg

    def page(self) -> etree._Element:
        """Root of the whole document the container lives in (unit templates are found here)."""
        return self.container.getroottree().getroot()

    def element(self, element_id: str) -> etree._Element:
        return get_svg_element(self.svg, element_id)

    def find(self, element_id: str) -> etree._Element | None:
        return find_svg_element(self.svg, element_id)

    def province(self, province: str) -> etree._Element:
        element = self.find(province)
        if element is None:
            raise MissingElementError(f"Province {province} not found in the map")
        return element

    def layer(self, name: str) -> etree._Element:
        return self.element(LAYERS.get(name, name))

    def create_element(self, tag: str, attributes: dict[str, object]) -> etree._Element:
        namespace = etree.QName(self.svg).namespace
        if namespace is not None:
            tag = f"{{{namespace}}}{tag}"
        attributes_str = {key: str(val) for key, val in attributes.items()}
        return etree.Element(tag, attributes_str)

    def copy_svg(self, source_id: str) -> None:
        source = get_svg_element(self.page(), source_id)
        svg = _first_svg(source)
        if svg is None:
            raise MissingElementError(f"{source_id} has no svg to copy")
        clone = copy.deepcopy(svg)
        for child in list(self.container):
            self.container.remove(child)
        self.container.text = None
        self.container.append(clone)
        self.svg = self._resolve_svg()
        self.reported = set()
        logger.debug(f"copied svg from {source_id}")

    def to_string(self) -> bytes:
        return etree.tostring(self.svg, encoding="utf-8")
