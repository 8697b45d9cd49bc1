"""
Paint rewriter: apply one assigned color to a layer's paints by paint kind.
Solid fills take the color (or are harmonized toward it); gradient stops are
blended toward it by position; image fills are left alone. Layers without fills
fall back to their first stroke when it is solid.
"""
import dataclasses
import logging
from typing import Literal

from ..color.blending import adjust_dominant_color, blend_stop_color
from ..color.codec import RGB8, RGBNorm, normalized_to_rgb8, rgb8_to_normalized
from ..config import DEFAULT_SENTINEL
from ..errors import UnsupportedPaintKind
from ..scene.base import Scene
from ..scene.schema import GRADIENT_TYPES, GradientPaint, ImagePaint, Layer, Paint, SolidPaint

logger = logging.getLogger(__name__)

SolidMode = Literal["replace", "harmonize"]

RewriteOutcome = Literal["recolored", "unchanged", "skipped"]


def recolor_solid(
    paint: SolidPaint,
    target: RGB8,
    *,
    solid_mode: SolidMode = "replace",
    scale_factor: float = 1.0,
) -> SolidPaint:
    """New solid paint with the target color; opacity, visibility, blend mode kept."""
    if solid_mode == "harmonize":
        current = normalized_to_rgb8(paint.color)
        adjusted = adjust_dominant_color(current, target, scale_factor)
        if adjusted == current:
            return paint
        return dataclasses.replace(paint, color=rgb8_to_normalized(adjusted))
    return dataclasses.replace(paint, color=rgb8_to_normalized(target))


def recolor_gradient(paint: GradientPaint, target: RGBNorm) -> GradientPaint:
    """
    New gradient paint whose stops are blended toward target by their positions.
    Stop order, alpha, transform, opacity, visibility and blend mode are kept.
    """
    stops = []
    for stop in paint.stops:
        color, alpha = blend_stop_color(stop.color, target, stop.position, stop.alpha)
        stops.append(dataclasses.replace(stop, color=color, alpha=alpha))
    return GradientPaint(
        type=paint.type,
        stops=stops,
        transform=[list(row) for row in paint.transform],
        opacity=paint.opacity,
        visible=paint.visible,
        blend_mode=paint.blend_mode,
    )


def recolor_paint(
    paint: Paint,
    target: RGB8,
    *,
    solid_mode: SolidMode = "replace",
    scale_factor: float = 1.0,
) -> Paint:
    """Dispatch on paint kind. Raises UnsupportedPaintKind for anything outside the closed set."""
    if isinstance(paint, SolidPaint) and paint.type == "SOLID":
        return recolor_solid(paint, target, solid_mode=solid_mode, scale_factor=scale_factor)
    if isinstance(paint, GradientPaint) and paint.type in GRADIENT_TYPES:
        return recolor_gradient(paint, rgb8_to_normalized(target))
    if isinstance(paint, ImagePaint):
        return paint
    raise UnsupportedPaintKind(
        f"Cannot recolor paint of type {getattr(paint, 'type', type(paint).__name__)!r}",
        paint_type=getattr(paint, "type", None),
    )


def recolor_fills(
    paints: list[Paint],
    target: RGB8,
    *,
    layer_name: str = "",
    solid_mode: SolidMode = "replace",
    scale_factor: float = 1.0,
) -> tuple[list[Paint], int]:
    """Recolor every fill in place order. Returns (new fills, number of paints changed)."""
    out: list[Paint] = []
    changed = 0
    for paint in paints:
        try:
            new_paint = recolor_paint(paint, target, solid_mode=solid_mode, scale_factor=scale_factor)
        except UnsupportedPaintKind as e:
            logger.info("Layer %r: %s, leaving it unchanged", layer_name, e)
            out.append(paint)
            continue
        if isinstance(paint, ImagePaint):
            logger.info("Layer %r has an image fill, skipping color update", layer_name)
        elif new_paint != paint:
            changed += 1
        out.append(new_paint)
    return out, changed


def rewrite_layer(
    scene: Scene,
    layer: Layer,
    target: RGB8,
    *,
    sentinel: str = DEFAULT_SENTINEL,
    solid_mode: SolidMode = "replace",
    scale_factor: float = 1.0,
) -> RewriteOutcome:
    """
    Apply target (0-255 RGB) to the layer through the scene boundary.
    Only this layer's fills (or, without fills, its first solid stroke) change.

    Returns "recolored" when a paint changed, "unchanged" when the layer has
    recolorable paints that already match, and "skipped" when there is nothing
    to recolor. The sentinel layer is always skipped.
    """
    if layer.name == sentinel:
        logger.debug("Layer %r is the sentinel, not recoloring", layer.name)
        return "skipped"

    fills = scene.get_paints(layer)
    if fills:
        new_fills, changed = recolor_fills(
            fills, target, layer_name=layer.name, solid_mode=solid_mode, scale_factor=scale_factor,
        )
        if changed:
            scene.set_paints(layer, new_fills)
            logger.info("Layer %r color updated to RGB: %s, %s, %s", layer.name, *target)
            return "recolored"
        if any(isinstance(p, (SolidPaint, GradientPaint)) for p in fills):
            logger.info("Layer %r already matches RGB: %s, %s, %s", layer.name, *target)
            return "unchanged"
        return "skipped"

    strokes = scene.get_strokes(layer)
    if strokes and isinstance(strokes[0], SolidPaint):
        new_stroke = recolor_solid(strokes[0], target, solid_mode=solid_mode, scale_factor=scale_factor)
        if new_stroke == strokes[0]:
            logger.info("Layer %r stroke already matches RGB: %s, %s, %s", layer.name, *target)
            return "unchanged"
        strokes[0] = new_stroke
        scene.set_strokes(layer, strokes)
        logger.info("Layer %r stroke color updated to RGB: %s, %s, %s", layer.name, *target)
        return "recolored"

    logger.info("Layer %r has no recolorable fills or strokes", layer.name)
    return "skipped"
