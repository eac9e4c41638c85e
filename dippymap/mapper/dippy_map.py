import logging
from typing import Callable, Sequence

from lxml import etree

from dippymap import palette
from dippymap.mapper import mutator, renderer
from dippymap.mapper.clicks import ClickEvent, ClickHandler, ClickRegistration, ClickRegistry
from dippymap.mapper.geometry import Point
from dippymap.mapper.resolver import center_of
from dippymap.mapper.scene import Scene
from dippymap.persistence.order import Order

logger = logging.getLogger(__name__)


class DippyMap:
    """
    Map overlay for one container element: province colors and highlights, click regions,
    units and order glyphs. The container's document belongs to the caller.
    """

    contrasts: tuple[str, ...] = palette.CONTRASTS
    contrast_neutral: str = palette.CONTRAST_NEUTRAL

    def __init__(self, container: etree._Element):
        self.scene: Scene = Scene(container)
        self.clicks: ClickRegistry = ClickRegistry()
        logger.debug(f"map created in container {container.get('id')}")

    # the document is parsed before the map exists, so it is always ready
    def add_ready_action(self, callback: Callable[[], None]) -> None:
        callback()

    def center_of(self, province: str) -> Point:
        return center_of(self.scene, province)

    def show_provinces(self) -> None:
        mutator.show_provinces(self.scene)

    def copy_svg(self, source_id: str) -> None:
        self.scene.copy_svg(source_id)
        # regions of the replaced svg went with it
        self.clicks.prune(self.scene)

    def color_province(self, province: str, color: str) -> None:
        mutator.color_province(self.scene, province, color)

    def hide_province(self, province: str) -> None:
        mutator.hide_province(self.scene, province)

    def highlight_province(self, province: str) -> etree._Element:
        return mutator.highlight_province(self.scene, province)

    def unhighlight_province(self, province: str) -> None:
        mutator.unhighlight_province(self.scene, province)

    def add_click_listener(
        self, province: str, handler: ClickHandler, nohighlight: bool = False, permanent: bool = False
    ) -> ClickRegistration:
        return self.clicks.add(self.scene, province, handler, nohighlight=nohighlight, permanent=permanent)

    def clear_click_listeners(self) -> None:
        self.clicks.clear()

    def click(self, province: str) -> ClickEvent | None:
        return self.clicks.click(self.scene, province)

    def click_at(self, x: float, y: float) -> ClickEvent | None:
        return self.clicks.click_at(self.scene, x, y)

    def add_box(self, province: str, corners: int, color: str) -> etree._Element:
        return renderer.add_box(self.scene, province, corners, color)

    def add_arrow(self, provinces: Sequence[str], color: str) -> etree._Element:
        return renderer.add_arrow(self.scene, provinces, color)

    def add_cross(self, province: str, color: str) -> etree._Element:
        return renderer.add_cross(self.scene, province, color)

    def add_order(self, order: Order | Sequence[str], color: str) -> list[etree._Element]:
        return renderer.add_order(self.scene, order, color)

    def add_unit(
        self,
        template_id: str,
        province: str,
        color: str,
        dislodged: bool = False,
        build: bool = False,
        layer: str = "units",
    ) -> list[etree._Element]:
        return renderer.add_unit(self.scene, template_id, province, color, dislodged, build, layer)

    def remove_orders(self) -> None:
        mutator.remove_orders(self.scene)

    def to_string(self) -> bytes:
        return self.scene.to_string()
