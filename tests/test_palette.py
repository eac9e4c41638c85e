import unittest

from dippymap import palette
from dippymap.mapper.dippy_map import DippyMap


class TestPalette(unittest.TestCase):
    def test_contrasts(self):
        self.assertEqual(palette.CONTRASTS[0], "#FF2F80")
        self.assertEqual(len(set(palette.CONTRASTS)), len(palette.CONTRASTS))
        for color in palette.CONTRASTS:
            self.assertRegex(color, r"^#[0-9A-F]{6}$")

    def test_exposed_on_map(self):
        self.assertIs(DippyMap.contrasts, palette.CONTRASTS)
        self.assertEqual(DippyMap.contrast_neutral, "#ffffff")

    def test_contrast_wraps(self):
        self.assertEqual(palette.contrast(len(palette.CONTRASTS)), palette.CONTRASTS[0])
        self.assertEqual(palette.contrast(3), palette.CONTRASTS[3])

    def test_assign_colors(self):
        colors = palette.assign_colors(["Italy", "None", "Austria", "England"])
        self.assertEqual(colors["None"], palette.CONTRAST_NEUTRAL)
        self.assertEqual(colors["Austria"], palette.CONTRASTS[0])
        self.assertEqual(colors["England"], palette.CONTRASTS[1])
        self.assertEqual(colors["Italy"], palette.CONTRASTS[2])

    def test_assign_colors_stable(self):
        self.assertEqual(
            palette.assign_colors(["b", "a"]),
            palette.assign_colors(["a", "b", "a"]),
        )
