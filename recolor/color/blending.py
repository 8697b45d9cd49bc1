"""
Blending: gradient stop blending and dominant-color adjustment.
Gradient stops blend in normalized RGB by stop position; dominant-color
adjustment shifts chroma in Lab while holding the layer's own lightness.
"""
from .codec import Lab, RGB8, RGBNorm, lab_to_rgb, rgb_to_lab

# Native range of the a*/b* chroma axes
LAB_CHROMA_MIN = -128.0
LAB_CHROMA_MAX = 127.0


def _blend_linear(a: float, b: float, weight: float) -> float:
    return a * (1 - weight) + b * weight


def blend_stop_color(
    original: RGBNorm,
    target: RGBNorm,
    position: float,
    alpha: float = 1.0,
) -> tuple[RGBNorm, float]:
    """
    Blend a gradient stop color toward target by the stop's position.
    position=0 keeps the original, position=1 adopts the target.
    Returns (blended color, alpha) with the original alpha unchanged.
    """
    weight = max(0.0, min(1.0, float(position)))
    blended = (
        _blend_linear(original[0], target[0], weight),
        _blend_linear(original[1], target[1], weight),
        _blend_linear(original[2], target[2], weight),
    )
    return blended, alpha


def _clamp_chroma(value: float) -> float:
    return max(LAB_CHROMA_MIN, min(LAB_CHROMA_MAX, value))


def shift_chroma(layer_lab: Lab, target_lab: Lab, scale_factor: float = 1.0) -> Lab:
    """Move a*/b* of layer_lab toward target_lab by scale_factor; L is kept."""
    L, a, b = layer_lab
    _, target_a, target_b = target_lab
    new_a = _clamp_chroma(a + (target_a - a) * scale_factor)
    new_b = _clamp_chroma(b + (target_b - b) * scale_factor)
    return (L, new_a, new_b)


def adjust_dominant_color(
    layer_color: RGB8,
    target_color: RGB8,
    scale_factor: float = 1.0,
) -> RGB8:
    """
    Nudge layer_color toward the hue/chroma of target_color, preserving the
    layer's luminance. scale_factor=0 returns layer_color unchanged.
    """
    if scale_factor == 0 or tuple(layer_color) == tuple(target_color):
        return (int(layer_color[0]), int(layer_color[1]), int(layer_color[2]))
    adjusted = shift_chroma(rgb_to_lab(layer_color), rgb_to_lab(target_color), scale_factor)
    return lab_to_rgb(adjusted)
