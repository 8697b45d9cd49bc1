"""
Color conversions and blending.
"""
from .codec import (
    hex_to_rgb8,
    rgb8_to_hex,
    normalize_hex,
    rgb8_to_normalized,
    normalized_to_rgb8,
    hex_to_normalized,
    rgb_to_lab,
    lab_to_rgb,
)
from .blending import blend_stop_color, adjust_dominant_color, shift_chroma

__all__ = [
    "hex_to_rgb8",
    "rgb8_to_hex",
    "normalize_hex",
    "rgb8_to_normalized",
    "normalized_to_rgb8",
    "hex_to_normalized",
    "rgb_to_lab",
    "lab_to_rgb",
    "blend_stop_color",
    "adjust_dominant_color",
    "shift_chroma",
]
