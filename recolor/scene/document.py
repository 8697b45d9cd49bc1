"""
Document scene: an in-memory scene graph loaded from a JSON document.
Stands in for the host design tool (CLI runs, tests). Renders with Pillow/numpy.
"""
import copy
import io
import json
import logging
from pathlib import Path
from typing import Any, Iterator

from ..errors import DuplicateName
from .base import Scene
from .schema import GradientPaint, Frame, ImagePaint, Layer, Paint, SolidPaint

logger = logging.getLogger(__name__)

DUPLICATE_POLICIES = ("error", "first")

# Placeholder tone for image fills (no pixel data in documents)
_IMAGE_PLACEHOLDER = (128, 128, 128)


class DocumentScene(Scene):
    """
    Scene backed by plain data: {"frames": [...], "nodes": [...]}.
    `nodes` are page-level layers outside any frame (palette swatches land here).
    """

    def __init__(
        self,
        frames: list[Frame] | None = None,
        nodes: list[Layer] | None = None,
        *,
        duplicate_names: str = "error",
        jpeg_quality: int = 90,
        background: tuple[int, int, int] = (255, 255, 255),
    ):
        if duplicate_names not in DUPLICATE_POLICIES:
            raise ValueError(f"duplicate_names must be one of {DUPLICATE_POLICIES}, got {duplicate_names!r}")
        self.frames = list(frames or [])
        self.nodes = list(nodes or [])
        self.duplicate_names = duplicate_names
        self.jpeg_quality = jpeg_quality
        self.background = background

    # --- Document I/O ---

    @classmethod
    def from_dict(cls, data: dict[str, Any], **kwargs: Any) -> "DocumentScene":
        return cls(
            frames=[Frame.from_dict(f) for f in data.get("frames") or []],
            nodes=[Layer.from_dict(n) for n in data.get("nodes") or []],
            **kwargs,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "frames": [f.to_dict() for f in self.frames],
            "nodes": [n.to_dict() for n in self.nodes],
        }

    @classmethod
    def load(cls, path: Path, **kwargs: Any) -> "DocumentScene":
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data, **kwargs)

    def save(self, path: Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
        return path

    # --- Scene boundary ---

    def get_frame(self, name: str) -> Frame | None:
        for frame in self.frames:
            if frame.name == name:
                return frame
        return None

    def list_layers(self, frame: Frame) -> list[dict[str, str]]:
        return [{"name": layer.name} for layer in frame.descendants()]

    def find_layer_by_name(self, frame: Frame, name: str) -> Layer | None:
        matches = [layer for layer in frame.descendants() if layer.name == name]
        if not matches:
            return None
        if len(matches) > 1:
            if self.duplicate_names == "error":
                raise DuplicateName(
                    f"{len(matches)} layers named {name!r} in frame {frame.name!r}",
                    layer=name,
                    frame=frame.name,
                    count=len(matches),
                )
            logger.debug("Layer %r matches %s nodes; using the first", name, len(matches))
        return matches[0]

    def get_paints(self, layer: Layer) -> list[Paint] | None:
        return copy.deepcopy(layer.fills)

    def set_paints(self, layer: Layer, paints: list[Paint]) -> None:
        layer.fills = list(paints)

    def get_strokes(self, layer: Layer) -> list[Paint] | None:
        return copy.deepcopy(layer.strokes)

    def set_strokes(self, layer: Layer, strokes: list[Paint]) -> None:
        layer.strokes = list(strokes)

    def create_rectangle(
        self,
        name: str,
        x: float,
        y: float,
        width: float,
        height: float,
        fills: list[Paint],
    ) -> Layer:
        rect = Layer(name=name, x=x, y=y, width=width, height=height, fills=list(fills), strokes=[])
        self.nodes.append(rect)
        return rect

    def render_frame_as_image(self, frame: Frame) -> bytes:
        """
        Rasterize the frame: each layer is a rectangle painted with its first
        visible fill (gradients as a left-to-right ramp). Returns JPEG bytes.
        """
        import numpy as np
        from PIL import Image

        width = max(1, int(frame.width))
        height = max(1, int(frame.height))
        canvas = np.empty((height, width, 3), dtype=np.float64)
        canvas[:, :] = self.background
        frame_paint = _first_visible(frame.fills)
        if frame_paint is not None:
            _paint_rect(canvas, 0, 0, width, height, frame_paint)

        for layer, ox, oy in _walk_with_offsets(frame.children, 0.0, 0.0):
            paint = _first_visible(layer.fills)
            if paint is None:
                continue
            _paint_rect(canvas, ox, oy, layer.width, layer.height, paint)

        img = Image.fromarray(np.clip(canvas, 0, 255).astype(np.uint8))
        buf = io.BytesIO()
        img.save(buf, format="JPEG", quality=self.jpeg_quality)
        return buf.getvalue()


def _walk_with_offsets(layers: list[Layer], ox: float, oy: float) -> Iterator[tuple[Layer, float, float]]:
    """Yield (layer, absolute x, absolute y); children are positioned relative to their parent."""
    for layer in layers:
        ax, ay = ox + layer.x, oy + layer.y
        yield layer, ax, ay
        yield from _walk_with_offsets(layer.children, ax, ay)


def _first_visible(paints: list[Paint] | None) -> Paint | None:
    for p in paints or []:
        if getattr(p, "visible", True) and isinstance(p, (SolidPaint, GradientPaint, ImagePaint)):
            return p
    return None


def _paint_rect(canvas, x: float, y: float, w: float, h: float, paint: Paint) -> None:
    """Alpha-composite one paint over a rectangle of the canvas (in place)."""
    import numpy as np

    height, width = canvas.shape[:2]
    x0, y0 = max(0, int(round(x))), max(0, int(round(y)))
    x1, y1 = min(width, int(round(x + w))), min(height, int(round(y + h)))
    if x1 <= x0 or y1 <= y0:
        return
    region = canvas[y0:y1, x0:x1]
    opacity = max(0.0, min(1.0, float(getattr(paint, "opacity", 1.0))))

    if isinstance(paint, SolidPaint):
        color = np.array(paint.color, dtype=np.float64) * 255.0
        region[:] = region * (1 - opacity) + color * opacity
    elif isinstance(paint, GradientPaint):
        if not paint.stops:
            return
        stops = sorted(paint.stops, key=lambda s: s.position)
        positions = [s.position for s in stops]
        t = np.linspace(0.0, 1.0, x1 - x0)
        ramp = np.stack([
            np.interp(t, positions, [s.color[c] for s in stops]) for c in range(3)
        ], axis=-1) * 255.0
        alpha = np.interp(t, positions, [s.alpha for s in stops])[:, None] * opacity
        region[:] = region * (1 - alpha) + ramp[None, :, :] * alpha
    elif isinstance(paint, ImagePaint):
        color = np.array(_IMAGE_PLACEHOLDER, dtype=np.float64)
        region[:] = region * (1 - opacity) + color * opacity
