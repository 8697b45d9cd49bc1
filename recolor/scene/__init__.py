"""
Scene graph: paint/layer schema, abstract host boundary, document-backed scene.
"""
from .schema import (
    GRADIENT_TYPES,
    Frame,
    GradientPaint,
    GradientStop,
    ImagePaint,
    Layer,
    Paint,
    SolidPaint,
    UnknownPaint,
    paint_from_dict,
)
from .base import Scene
from .document import DocumentScene

__all__ = [
    "GRADIENT_TYPES",
    "Frame",
    "GradientPaint",
    "GradientStop",
    "ImagePaint",
    "Layer",
    "Paint",
    "SolidPaint",
    "UnknownPaint",
    "paint_from_dict",
    "Scene",
    "DocumentScene",
]
