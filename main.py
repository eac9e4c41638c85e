import argparse
import json
import logging
import sys

from lxml import etree

# Importing config for the first time initialises it.
import dippymap.config as config
from dippymap.config import ConfigException
from dippymap.mapper.dippy_map import DippyMap
from dippymap.palette import assign_colors

match config.LOGGING_LEVEL:
    case "CRITICAL":
        log_level = logging.CRITICAL
    case "ERROR":
        log_level = logging.ERROR
    case "WARN" | "WARNING":
        log_level = logging.WARNING
    case "INFO":
        log_level = logging.INFO
    case "DEBUG":
        log_level = logging.DEBUG
    case _:
        raise ConfigException("logging.level is set to an invalid value")


logging.basicConfig(
    format="%(asctime)-15s | %(levelname)-7s: | %(filename)-16s (line %(lineno)-4d) | %(message)s",
    level=log_level,
)

logger = logging.getLogger(__name__)


def render(page: etree._ElementTree, container_id: str, orders: dict[str, list[list[str]]]) -> bytes:
    container = page.getroot().xpath("descendant-or-self::*[@id=$id]", id=container_id)
    if not container:
        raise RuntimeError(f"No element with id {container_id} in the page")

    dippy_map = DippyMap(container[0])
    dippy_map.show_provinces()
    dippy_map.remove_orders()

    colors = assign_colors(orders.keys())
    for power, power_orders in orders.items():
        for order in power_orders:
            dippy_map.add_order(order, colors[power])
    logger.info(f"drew {sum(map(len, orders.values()))} orders for {len(orders)} powers")
    return dippy_map.to_string()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Draw orders onto a map svg.")
    parser.add_argument("page", help="xml/xhtml page holding the map container and unit templates")
    parser.add_argument("orders", help="json object mapping each power to its list of orders")
    parser.add_argument("-c", "--container", default="map", help="id of the element holding the map svg")
    parser.add_argument("-o", "--output", help="where to write the svg (default: stdout)")
    args = parser.parse_args(argv)

    page = etree.parse(args.page)
    with open(args.orders, "r") as f:
        orders = json.load(f)

    try:
        svg = render(page, args.container, orders)
    except (ValueError, RuntimeError) as err:
        logger.error(f"Rendering {args.orders} failed", exc_info=err)
        return 1

    if args.output:
        with open(args.output, "wb") as f:
            f.write(svg)
    else:
        sys.stdout.buffer.write(svg)
    return 0


if __name__ == "__main__":
    sys.exit(main())
