import unittest

from dippymap.errors import MissingElementError
from tests.scene_builder import all_ids, build_map, children


class TestProvinces(unittest.TestCase):
    def test_show_provinces(self):
        m = build_map()
        m.show_provinces()
        self.assertIsNone(m.scene.layer("provinces").get("style"))
        # a second call is harmless
        m.show_provinces()
        self.assertIsNone(m.scene.layer("provinces").get("style"))

    def test_color_province(self):
        m = build_map()
        self.assertEqual(m.scene.province("par").get("style"), "fill:#aaaaaa")
        m.color_province("par", "#ff0000")
        par = m.scene.province("par")
        self.assertIsNone(par.get("style"))
        self.assertEqual(par.get("fill"), "#ff0000")
        self.assertEqual(par.get("fill-opacity"), "0.8")

    def test_recolor(self):
        m = build_map()
        m.color_province("mar", "#ff0000")
        m.color_province("mar", "#00ff00")
        self.assertEqual(m.scene.province("mar").get("fill"), "#00ff00")

    def test_hide_province(self):
        m = build_map()
        m.hide_province("spa/nc")
        spa = m.scene.province("spa/nc")
        self.assertEqual(spa.get("fill"), "#ffffff")
        self.assertEqual(spa.get("fill-opacity"), "0")

    def test_missing_province(self):
        m = build_map()
        with self.assertRaises(MissingElementError):
            m.color_province("xyz", "#ff0000")
        with self.assertRaises(MissingElementError):
            m.hide_province("xyz")
        with self.assertRaises(MissingElementError):
            m.highlight_province("xyz")
        with self.assertRaises(MissingElementError):
            m.unhighlight_province("xyz")


class TestHighlight(unittest.TestCase):
    def test_highlight(self):
        m = build_map()
        highlight = m.highlight_province("par")
        self.assertIs(highlight.getparent(), m.scene.layer("highlights"))
        self.assertEqual(highlight.get("id"), "par_highlight")
        self.assertEqual(highlight.get("style"), "fill:url(#stripes)")
        self.assertEqual(highlight.get("fill-opacity"), "1")
        self.assertEqual(highlight.get("stroke"), "none")
        self.assertEqual(highlight.get("d"), m.scene.province("par").get("d"))
        self.assertIsNone(highlight.get("transform"))
        # the province itself is untouched
        self.assertEqual(m.scene.province("par").get("style"), "fill:#aaaaaa")

    def test_highlight_nested(self):
        """
            bur sits in two translated groups; the highlight takes the nearest one only.
        """
        m = build_map()
        highlight = m.highlight_province("bur")
        self.assertEqual(highlight.get("transform"), "translate(5,5)")

    def test_highlight_own_transform(self):
        m = build_map()
        m.scene.province("bur").set("transform", "translate(1,2)")
        self.assertEqual(m.highlight_province("bur").get("transform"), "translate(1,2)")

    def test_highlight_twice(self):
        m = build_map()
        m.highlight_province("mar")
        m.highlight_province("mar")
        self.assertEqual(len(children(m.scene.layer("highlights"))), 2)
        m.unhighlight_province("mar")
        self.assertEqual(children(m.scene.layer("highlights")), [])

    def test_unhighlight_keeps_others(self):
        m = build_map()
        m.highlight_province("par")
        m.highlight_province("spa/nc")
        m.unhighlight_province("par")
        self.assertNotIn("par_highlight", all_ids(m.scene.svg))
        self.assertIn("spa/nc_highlight", all_ids(m.scene.svg))

    def test_unhighlight_without_highlight(self):
        m = build_map()
        m.unhighlight_province("par")
        self.assertEqual(children(m.scene.layer("highlights")), [])

    def test_missing_pattern_warns_once(self):
        m = build_map()
        pattern = m.scene.element("stripes")
        pattern.getparent().remove(pattern)
        with self.assertLogs("dippymap.mapper.mutator", level="WARNING") as logs:
            m.highlight_province("par")
            m.highlight_province("mar")
        self.assertEqual(len(logs.records), 1)
        self.assertEqual(len(children(m.scene.layer("highlights"))), 2)


class TestRemoveOrders(unittest.TestCase):
    def test_remove_orders(self):
        m = build_map()
        m.add_box("par", 4, "#ff0000")
        m.add_arrow(["par", "mar"], "#ff0000")
        layer = m.scene.layer("orders")
        self.assertEqual(len(children(layer)), 2)
        m.remove_orders()
        self.assertIs(m.scene.layer("orders"), layer)
        self.assertEqual(children(layer), [])

    def test_remove_orders_keeps_units(self):
        m = build_map()
        m.add_unit("unitArmy", "par", "#ff0000")
        m.remove_orders()
        self.assertEqual(len(children(m.scene.layer("units"))), 2)

    def test_remove_empty(self):
        m = build_map()
        m.remove_orders()
        self.assertEqual(children(m.scene.layer("orders")), [])
