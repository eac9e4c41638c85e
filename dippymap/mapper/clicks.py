from __future__ import annotations

import copy
import logging
from typing import Callable

import shapely
from lxml import etree

from dippymap.map_parser.vector.transform import accumulated_transform
from dippymap.map_parser.vector.utils import path_geometry
from dippymap.mapper.mutator import highlight_province
from dippymap.mapper.path import format_number
from dippymap.mapper.scene import Scene

logger = logging.getLogger(__name__)

ClickHandler = Callable[[str], None]


class ClickEvent:
    def __init__(self, province: str):
        self.province: str = province
        self.default_prevented: bool = False
        self.propagation_stopped: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


class ClickRegistration:
    """What addClickListener put into the scene, and so what clearing has to take out again."""

    def __init__(
        self,
        province: str,
        handler: ClickHandler,
        region: etree._Element,
        highlight: etree._Element | None,
        permanent: bool,
    ):
        self.province: str = province
        self.handler: ClickHandler = handler
        self.region: etree._Element = region
        self.highlight: etree._Element | None = highlight
        self.permanent: bool = permanent

    def is_live(self, scene: Scene) -> bool:
        return any(ancestor is scene.svg for ancestor in self.region.iterancestors())

    def handle(self, event: ClickEvent) -> ClickEvent:
        self.handler(self.province)
        event.prevent_default()
        event.stop_propagation()
        return event

    def geometry(self, scene: Scene) -> shapely.Polygon | shapely.MultiPolygon:
        shapes = []
        for element in self.region.iter():
            path_string = element.get("d") if isinstance(element.tag, str) else None
            if path_string:
                shapes.append(path_geometry(path_string, accumulated_transform(element, stop=scene.svg)))
        if not shapes:
            return shapely.Polygon()
        return shapely.union_all(shapes)

    def teardown(self) -> None:
        for element in (self.region, self.highlight):
            if element is not None and element.getparent() is not None:
                element.getparent().remove(element)

    def __repr__(self):
        return f"ClickRegistration {self.province}{' (permanent)' if self.permanent else ''}"


def _transform_attribute(element: etree._Element, scene: Scene) -> str:
    total = accumulated_transform(element, stop=scene.svg)
    if total.is_translation():
        x, y = total.translation()
        return f"translate({format_number(x)},{format_number(y)})"
    return str(total)


class ClickRegistry:
    """
    Click regions of one map. Every registration is kept for dispatch; non-permanent ones are
    also queued so clear() can take them all down between order-entry turns.
    """

    def __init__(self):
        self.registrations: list[ClickRegistration] = []
        self.pending: list[ClickRegistration] = []

    def add(
        self,
        scene: Scene,
        province: str,
        handler: ClickHandler,
        nohighlight: bool = False,
        permanent: bool = False,
    ) -> ClickRegistration:
        element = scene.province(province)

        region = copy.deepcopy(element)
        region.tail = None
        region.set("id", f"{element.get('id')}_click")
        region.set("style", "fill:#000000;fill-opacity:0;stroke:none;")
        region.set("stroke", "none")
        # the region sits directly under the svg root, so it carries every transform above the province
        region.set("transform", _transform_attribute(element, scene))

        highlight = None
        if not nohighlight:
            highlight = highlight_province(scene, province)

        scene.svg.append(region)

        registration = ClickRegistration(province, handler, region, highlight, permanent)
        self.registrations.append(registration)
        if not permanent:
            self.pending.append(registration)
        logger.debug(f"click listener added for {province}")
        return registration

    def clear(self) -> None:
        for registration in self.pending:
            registration.teardown()
            self.registrations.remove(registration)
        if self.pending:
            logger.debug(f"cleared {len(self.pending)} click listeners")
        self.pending = []

    def prune(self, scene: Scene) -> None:
        """Forgets registrations whose region left the scene's svg, permanent ones included."""
        dead = [registration for registration in self.registrations if not registration.is_live(scene)]
        for registration in dead:
            self.registrations.remove(registration)
            if registration in self.pending:
                self.pending.remove(registration)
        if dead:
            logger.debug(f"dropped {len(dead)} click listeners no longer in the map")

    def click(self, scene: Scene, province: str) -> ClickEvent | None:
        for registration in reversed(self.registrations):
            if registration.province == province and registration.is_live(scene):
                return registration.handle(ClickEvent(province))
        return None

    def click_at(self, scene: Scene, x: float, y: float) -> ClickEvent | None:
        point = shapely.Point(x, y)
        # last appended is drawn on top
        for registration in reversed(self.registrations):
            if not registration.is_live(scene):
                continue
            if registration.geometry(scene).contains(point):
                return registration.handle(ClickEvent(registration.province))
        return None

    def __len__(self):
        return len(self.registrations)
