"""
Unit tests for the color codec: hex, 8-bit RGB, normalized RGB, Lab.
Run from project root: python -m pytest tests/ -v
Or: python -m unittest discover -s tests -p "test_*.py" -v
"""
import sys
import unittest
from pathlib import Path

# Project root on path so "from recolor. ..." works
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from recolor.color.codec import (
    hex_to_normalized,
    hex_to_rgb8,
    lab_to_rgb,
    normalize_hex,
    normalized_to_rgb8,
    rgb8_to_hex,
    rgb8_to_normalized,
    rgb_to_lab,
)
from recolor.errors import InvalidFormat


class TestHex(unittest.TestCase):

    def test_red_to_rgb8_and_normalized(self):
        """#FF0000 → (255, 0, 0) → (1, 0, 0)."""
        rgb = hex_to_rgb8("#FF0000")
        self.assertEqual(rgb, (255, 0, 0))
        self.assertEqual(rgb8_to_normalized(rgb), (1.0, 0.0, 0.0))

    def test_leading_hash_optional(self):
        self.assertEqual(hex_to_rgb8("0080ff"), (0, 128, 255))
        self.assertEqual(hex_to_rgb8("#0080FF"), (0, 128, 255))

    def test_invalid_hex_raises(self):
        bad_values = (
            "", "#FFF", "#GGGGGG", "12345", "#1234567", "##123456",
            " FF0000", "FF0000\n", "# FF0000", None, 0xFF0000,
        )
        for bad in bad_values:
            with self.subTest(value=bad):
                with self.assertRaises(InvalidFormat):
                    hex_to_rgb8(bad)

    def test_invalid_format_carries_context(self):
        with self.assertRaises(InvalidFormat) as ctx:
            hex_to_rgb8("#12ZZ56")
        self.assertEqual(ctx.exception.kind, "InvalidFormat")
        self.assertEqual(ctx.exception.context["value"], "#12ZZ56")

    def test_hex_round_trip_is_normalized_form(self):
        for h in ("#a1b2c3", "00ff7f", "#FFFFFF", "000000", "#7F7F7F"):
            with self.subTest(hex=h):
                self.assertEqual(rgb8_to_hex(hex_to_rgb8(h)), normalize_hex(h))
        self.assertEqual(normalize_hex("a1b2c3"), "#A1B2C3")

    def test_rgb8_to_hex_clamps(self):
        self.assertEqual(rgb8_to_hex((-5, 300, 128)), "#00FF80")

    def test_normalized_to_rgb8_rounds_and_clamps(self):
        self.assertEqual(normalized_to_rgb8((0.5, 1.2, -0.1)), (128, 255, 0))
        self.assertEqual(hex_to_normalized("#000000"), (0.0, 0.0, 0.0))


class TestLab(unittest.TestCase):

    def test_white_and_black(self):
        L, a, b = rgb_to_lab((255, 255, 255))
        self.assertAlmostEqual(L, 100.0, places=1)
        self.assertLess(abs(a), 0.1)
        self.assertLess(abs(b), 0.1)
        L, a, b = rgb_to_lab((0, 0, 0))
        self.assertAlmostEqual(L, 0.0, places=3)

    def test_red_has_positive_a_and_b(self):
        L, a, b = rgb_to_lab((255, 0, 0))
        self.assertAlmostEqual(L, 53.2, delta=0.5)
        self.assertGreater(a, 70)
        self.assertGreater(b, 60)

    def test_round_trip_within_one_per_channel(self):
        """labToRgb(rgbToLab(x)) differs from x by at most 1 per channel."""
        values = list(range(0, 256, 15)) + [1, 254, 255]
        for r in values:
            for g in values:
                for b in values:
                    back = lab_to_rgb(rgb_to_lab((r, g, b)))
                    self.assertLessEqual(
                        max(abs(back[0] - r), abs(back[1] - g), abs(back[2] - b)), 1,
                        msg=f"{(r, g, b)} → {back}",
                    )

    def test_out_of_gamut_lab_is_clamped(self):
        rgb = lab_to_rgb((50.0, 127.0, -128.0))
        self.assertEqual(len(rgb), 3)
        self.assertTrue(all(isinstance(c, int) and 0 <= c <= 255 for c in rgb))
        self.assertEqual(lab_to_rgb((150.0, 0.0, 0.0)), (255, 255, 255))

    def test_full_hex_lab_pipeline(self):
        for h in ("#336699", "#F0E68C", "#101010"):
            with self.subTest(hex=h):
                back = lab_to_rgb(rgb_to_lab(hex_to_rgb8(h)))
                orig = hex_to_rgb8(h)
                self.assertTrue(all(abs(x - y) <= 1 for x, y in zip(back, orig)))


if __name__ == "__main__":
    unittest.main()
