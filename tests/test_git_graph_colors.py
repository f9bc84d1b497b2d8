import os
import sys
import unittest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from git_graph_colors import BRANCH_PALETTE, BranchColorizer, name_hash


class TestBranchColorizer(unittest.TestCase):
    def setUp(self):
        self.colorizer = BranchColorizer()

    def test_known_hash(self):
        # ((109 * 31 + 97) * 31 + 105) * 31 + 110
        self.assertEqual(name_hash("main"), 3343801)
        self.assertEqual(name_hash(""), 0)

    def test_hash_wraps_to_int32(self):
        h = name_hash("feature/" + "x" * 200)
        self.assertGreaterEqual(h, -(2**31))
        self.assertLess(h, 2**31)

    def test_known_colors(self):
        self.assertEqual(self.colorizer.color_of("main"), BRANCH_PALETTE[1])
        self.assertEqual(self.colorizer.color_of(""), BRANCH_PALETTE[0])

    def test_color_is_stable(self):
        self.assertEqual(self.colorizer.color_of("main"), self.colorizer.color_of("main"))
        self.assertEqual(self.colorizer.color_of("origin/dev"), BranchColorizer().color_of("origin/dev"))

    def test_colors_come_from_palette(self):
        for name in ["main", "develop", "origin/main", "v1.0", "feature/ä-ü", "修复"]:
            self.assertIn(self.colorizer.color_of(name), BRANCH_PALETTE)

    def test_custom_palette(self):
        colorizer = BranchColorizer(["#000000"])
        self.assertEqual(colorizer.color_of("anything"), "#000000")

    def test_empty_palette_rejected(self):
        with self.assertRaises(ValueError):
            BranchColorizer([])


if __name__ == "__main__":
    unittest.main()
