"""
Unit tests for gradient stop blending and dominant-color adjustment.
"""
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from recolor.color.blending import adjust_dominant_color, blend_stop_color, shift_chroma
from recolor.color.codec import rgb_to_lab

WHITE = (1.0, 1.0, 1.0)
BLACK = (0.0, 0.0, 0.0)
BLUE = (0.0, 0.0, 1.0)


class TestBlendStopColor(unittest.TestCase):

    def test_position_zero_keeps_original(self):
        color, alpha = blend_stop_color((0.2, 0.4, 0.6), BLUE, 0.0, 0.7)
        for got, want in zip(color, (0.2, 0.4, 0.6)):
            self.assertAlmostEqual(got, want)
        self.assertEqual(alpha, 0.7)

    def test_position_one_adopts_target(self):
        color, _ = blend_stop_color(BLACK, BLUE, 1.0)
        self.assertEqual(color, BLUE)

    def test_midpoint_is_even_blend(self):
        color, _ = blend_stop_color(WHITE, BLUE, 0.5)
        for got, want in zip(color, (0.5, 0.5, 1.0)):
            self.assertAlmostEqual(got, want)

    def test_alpha_is_preserved(self):
        _, alpha = blend_stop_color(WHITE, BLUE, 0.3, alpha=0.25)
        self.assertEqual(alpha, 0.25)

    def test_position_outside_unit_range_is_clamped(self):
        color, _ = blend_stop_color(WHITE, BLUE, 1.5)
        self.assertEqual(color, BLUE)
        color, _ = blend_stop_color(WHITE, BLUE, -0.5)
        self.assertEqual(color, WHITE)


class TestDominantColor(unittest.TestCase):

    def test_scale_zero_returns_original(self):
        self.assertEqual(adjust_dominant_color((12, 200, 99), (255, 0, 0), 0.0), (12, 200, 99))

    def test_same_color_returns_original(self):
        self.assertEqual(adjust_dominant_color((40, 80, 160), (40, 80, 160), 1.0), (40, 80, 160))

    def test_shifts_chroma_and_keeps_lightness(self):
        layer = (100, 100, 100)
        target = (200, 150, 150)
        out = adjust_dominant_color(layer, target, 1.0)
        L_layer, _, _ = rgb_to_lab(layer)
        L_out, a_out, _ = rgb_to_lab(out)
        _, a_target, _ = rgb_to_lab(target)
        self.assertAlmostEqual(L_out, L_layer, delta=1.5)
        self.assertAlmostEqual(a_out, a_target, delta=2.0)
        self.assertNotEqual(out, layer)

    def test_partial_scale_moves_part_way(self):
        layer = (100, 100, 100)
        target = (200, 150, 150)
        _, a_half, _ = rgb_to_lab(adjust_dominant_color(layer, target, 0.5))
        _, a_full, _ = rgb_to_lab(adjust_dominant_color(layer, target, 1.0))
        self.assertGreater(a_half, 1.0)
        self.assertLess(a_half, a_full)

    def test_chroma_clamped_to_lab_range(self):
        L, a, b = shift_chroma((50.0, 0.0, 0.0), (50.0, 300.0, -300.0), 1.0)
        self.assertEqual((L, a, b), (50.0, 127.0, -128.0))


if __name__ == "__main__":
    unittest.main()
