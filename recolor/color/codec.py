"""
Color codec: hex string <-> 8-bit RGB <-> normalized RGB <-> CIE Lab (D65).
Alpha never enters these conversions; callers carry it separately.
"""
import re

import numpy as np

from ..errors import InvalidFormat

RGB8 = tuple[int, int, int]
RGBNorm = tuple[float, float, float]
Lab = tuple[float, float, float]

_HEX_PATTERN = re.compile(r"[0-9a-fA-F]{6}")

# sRGB (linear) -> XYZ, D65
_RGB_TO_XYZ = np.array([
    [0.4124564, 0.3575761, 0.1804375],
    [0.2126729, 0.7151522, 0.0721750],
    [0.0193339, 0.1191920, 0.9503041],
])
_XYZ_TO_RGB = np.linalg.inv(_RGB_TO_XYZ)

# D65 reference white
_WHITE = np.array([0.95047, 1.0, 1.08883])

# CIE constants (exact rational forms keep the round trip stable)
_EPSILON = 216.0 / 24389.0
_KAPPA = 24389.0 / 27.0


def _clamp_channel(value: float) -> int:
    return int(max(0, min(255, round(float(value)))))


def hex_to_rgb8(hex_str: str) -> RGB8:
    """
    Parse '#RRGGBB' or 'RRGGBB' as a big-endian 24-bit integer.
    Raises InvalidFormat unless the string holds exactly 6 hex digits.
    """
    if not isinstance(hex_str, str):
        raise InvalidFormat(f"Hex color must be a string, got {type(hex_str).__name__}", value=hex_str)
    digits = hex_str
    if digits.startswith("#"):
        digits = digits[1:]
    if not _HEX_PATTERN.fullmatch(digits):
        raise InvalidFormat(f"Invalid hex color: {hex_str!r}", value=hex_str)
    value = int(digits, 16)
    return ((value >> 16) & 255, (value >> 8) & 255, value & 255)


def rgb8_to_hex(rgb: RGB8) -> str:
    """(r, g, b) 0-255 -> '#RRGGBB' (uppercase). Channels are clamped."""
    r, g, b = (_clamp_channel(c) for c in rgb)
    return f"#{r:02X}{g:02X}{b:02X}"


def normalize_hex(hex_str: str) -> str:
    """Canonical form of a hex color: leading '#', uppercase."""
    return rgb8_to_hex(hex_to_rgb8(hex_str))


def rgb8_to_normalized(rgb: RGB8) -> RGBNorm:
    r, g, b = rgb
    return (r / 255.0, g / 255.0, b / 255.0)


def normalized_to_rgb8(rgb: RGBNorm) -> RGB8:
    """[0, 1] channels -> 0-255 ints (clamped, rounded to nearest)."""
    r, g, b = rgb
    return (_clamp_channel(r * 255.0), _clamp_channel(g * 255.0), _clamp_channel(b * 255.0))


def hex_to_normalized(hex_str: str) -> RGBNorm:
    return rgb8_to_normalized(hex_to_rgb8(hex_str))


def rgb_to_lab(rgb: RGB8) -> Lab:
    """Convert 8-bit sRGB to CIE Lab (D65)."""
    rgb_norm = np.clip(np.asarray(rgb, dtype=np.float64), 0, 255) / 255.0

    # Undo sRGB gamma
    linear = np.where(rgb_norm > 0.04045, ((rgb_norm + 0.055) / 1.055) ** 2.4, rgb_norm / 12.92)

    xyz = _RGB_TO_XYZ @ linear / _WHITE
    f = np.where(xyz > _EPSILON, np.cbrt(xyz), (_KAPPA * xyz + 16.0) / 116.0)
    fx, fy, fz = f

    L = 116.0 * fy - 16.0
    a = 500.0 * (fx - fy)
    b = 200.0 * (fy - fz)
    return (float(L), float(a), float(b))


def lab_to_rgb(lab: Lab) -> RGB8:
    """Convert CIE Lab (D65) to 8-bit sRGB; channels clamped to 0-255 and rounded."""
    L, a, b = (float(c) for c in lab)

    fy = (L + 16.0) / 116.0
    fx = a / 500.0 + fy
    fz = fy - b / 200.0

    x = fx ** 3 if fx ** 3 > _EPSILON else (116.0 * fx - 16.0) / _KAPPA
    y = fy ** 3 if L > _KAPPA * _EPSILON else L / _KAPPA
    z = fz ** 3 if fz ** 3 > _EPSILON else (116.0 * fz - 16.0) / _KAPPA

    linear = _XYZ_TO_RGB @ (np.array([x, y, z]) * _WHITE)

    # Re-apply sRGB gamma
    positive = np.clip(linear, 0, None)
    srgb = np.where(linear > 0.0031308, 1.055 * np.power(positive, 1 / 2.4) - 0.055, 12.92 * linear)
    r, g, b_out = np.clip(srgb, 0, 1) * 255.0
    return (_clamp_channel(r), _clamp_channel(g), _clamp_channel(b_out))
