from lxml import etree

from dippymap.mapper.dippy_map import DippyMap

SVG = "http://www.w3.org/2000/svg"

# A small page: the map container, a second map variant and the two unit templates.
# par and mar sit directly in their layers, bur is nested inside two translated groups
# and its center marker inside one.
PAGE = f"""<html>
<body>
<div id="map">
<svg xmlns="{SVG}" viewBox="0 0 1000 1000">
  <defs>
    <pattern id="stripes" patternUnits="userSpaceOnUse" width="4" height="4">
      <path d="M -1,1 l 2,-2" stroke="#000000"/>
    </pattern>
  </defs>
  <g id="provinces" style="display:none">
    <path id="par" d="m 90,190 l 20,0 l 0,20 l -20,0 z" style="fill:#aaaaaa"/>
    <path id="mar" d="m 290,90 l 20,0 l 0,20 l -20,0 z"/>
    <g id="east" transform="translate(10,20)">
      <g id="inner" transform="translate(5,5)">
        <path id="bur" d="m 190,180 l 20,0 l 0,20 l -20,0 z"/>
      </g>
    </g>
    <path id="spa/nc" d="m 400,400 l 20,0 l 0,20 l -20,0 z"/>
  </g>
  <g id="centers">
    <path id="parCenter" d="m 100,200 c 0,1 1,1 1,0 z"/>
    <path id="marCenter" d="m 300,100 c 0,1 1,1 1,0 z"/>
    <path id="spa/ncCenter" d="m 410,410 c 0,1 1,1 1,0 z"/>
    <g transform="translate(10,20)">
      <path id="burCenter" d="m 200,200 c 0,1 1,1 1,0 z"/>
    </g>
  </g>
  <g id="highlights"/>
  <g id="orders"/>
  <g id="units"/>
</svg>
</div>
<div id="unitArmy">
  <svg xmlns="{SVG}">
    <path id="shadow" d="m 0,0 l 10,0 l 0,10 z"/>
    <path id="body" d="m 0,0 l 8,0 l 0,8 z"/>
  </svg>
</div>
<div id="unitFleet">
  <svg xmlns="{SVG}">
    <path id="shadow" d="m 0,0 l 12,0 l 0,12 z"/>
    <path id="hull" d="m 0,0 l 9,0 l 0,9 z"/>
  </svg>
</div>
<div id="autumn">
  <svg xmlns="{SVG}">
    <g id="provinces">
      <path id="lon" d="m 10,10 l 20,0 l 0,20 l -20,0 z"/>
    </g>
    <g id="centers">
      <path id="lonCenter" d="m 20,20 c 0,1 1,1 1,0 z"/>
    </g>
    <g id="highlights"/>
    <g id="orders"/>
    <g id="units"/>
  </svg>
</div>
</body>
</html>"""

CENTERS = {
    "par": (98.5, 198),
    "mar": (298.5, 98),
    "bur": (208.5, 218),
    "spa/nc": (408.5, 408),
}


def build_page() -> etree._ElementTree:
    return etree.fromstring(PAGE).getroottree()


def build_container() -> etree._Element:
    return build_page().getroot().xpath("//*[@id='map']")[0]


def build_map() -> DippyMap:
    return DippyMap(build_container())


def all_ids(element: etree._Element) -> set[str]:
    return {e.get("id") for e in element.iter() if isinstance(e.tag, str) and e.get("id") is not None}


def children(element: etree._Element) -> list[etree._Element]:
    return [child for child in element if isinstance(child.tag, str)]
