"""
Scene schema: paints, gradient stops, layers, frames.
Mirrors the host's node/paint dict shape so documents round-trip unchanged.
"""
from dataclasses import dataclass, field
from typing import Any, Iterator, Literal

from ..color.codec import RGBNorm

PaintType = Literal[
    "SOLID",
    "GRADIENT_LINEAR",
    "GRADIENT_RADIAL",
    "GRADIENT_ANGULAR",
    "GRADIENT_DIAMOND",
    "IMAGE",
]

GRADIENT_TYPES: tuple[str, ...] = (
    "GRADIENT_LINEAR",
    "GRADIENT_RADIAL",
    "GRADIENT_ANGULAR",
    "GRADIENT_DIAMOND",
)

IDENTITY_TRANSFORM: list[list[float]] = [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]]


def _color_from_dict(d: dict[str, Any]) -> RGBNorm:
    return (float(d.get("r", 0.0)), float(d.get("g", 0.0)), float(d.get("b", 0.0)))


def _color_to_dict(color: RGBNorm) -> dict[str, float]:
    return {"r": color[0], "g": color[1], "b": color[2]}


@dataclass
class SolidPaint:
    color: RGBNorm
    opacity: float = 1.0
    visible: bool = True
    blend_mode: str = "NORMAL"
    type: str = "SOLID"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "color": _color_to_dict(self.color),
            "opacity": self.opacity,
            "visible": self.visible,
            "blendMode": self.blend_mode,
        }


@dataclass
class GradientStop:
    position: float  # 0–1
    color: RGBNorm
    alpha: float = 1.0

    def to_dict(self) -> dict[str, Any]:
        return {"position": self.position, "color": {**_color_to_dict(self.color), "a": self.alpha}}


@dataclass
class GradientPaint:
    """Any of the four gradient kinds; `type` names which one."""

    type: str
    stops: list[GradientStop] = field(default_factory=list)
    transform: list[list[float]] = field(default_factory=lambda: [row[:] for row in IDENTITY_TRANSFORM])
    opacity: float = 1.0
    visible: bool = True
    blend_mode: str = "NORMAL"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "gradientTransform": [list(row) for row in self.transform],
            "gradientStops": [s.to_dict() for s in self.stops],
            "opacity": self.opacity,
            "visible": self.visible,
            "blendMode": self.blend_mode,
        }


@dataclass
class ImagePaint:
    image_hash: str | None = None
    scale_mode: str = "FILL"
    opacity: float = 1.0
    visible: bool = True
    blend_mode: str = "NORMAL"
    type: str = "IMAGE"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "imageHash": self.image_hash,
            "scaleMode": self.scale_mode,
            "opacity": self.opacity,
            "visible": self.visible,
            "blendMode": self.blend_mode,
        }


@dataclass
class UnknownPaint:
    """Paint of a kind we do not recolor (e.g. video). Kept verbatim."""

    type: str
    raw: dict[str, Any] = field(default_factory=dict)
    visible: bool = True

    def to_dict(self) -> dict[str, Any]:
        return dict(self.raw)


Paint = SolidPaint | GradientPaint | ImagePaint | UnknownPaint


def paint_from_dict(d: dict[str, Any]) -> Paint:
    """Build a Paint from the host's paint dict."""
    kind = d.get("type", "")
    opacity = float(d.get("opacity", 1.0))
    visible = bool(d.get("visible", True))
    blend_mode = d.get("blendMode", "NORMAL")
    if kind == "SOLID":
        return SolidPaint(
            color=_color_from_dict(d.get("color") or {}),
            opacity=opacity,
            visible=visible,
            blend_mode=blend_mode,
        )
    if kind in GRADIENT_TYPES:
        stops = []
        for s in d.get("gradientStops") or []:
            c = s.get("color") or {}
            stops.append(GradientStop(
                position=float(s.get("position", 0.0)),
                color=_color_from_dict(c),
                alpha=float(c.get("a", 1.0)),
            ))
        transform = d.get("gradientTransform") or IDENTITY_TRANSFORM
        return GradientPaint(
            type=kind,
            stops=stops,
            transform=[[float(v) for v in row] for row in transform],
            opacity=opacity,
            visible=visible,
            blend_mode=blend_mode,
        )
    if kind == "IMAGE":
        return ImagePaint(
            image_hash=d.get("imageHash"),
            scale_mode=d.get("scaleMode", "FILL"),
            opacity=opacity,
            visible=visible,
            blend_mode=blend_mode,
        )
    return UnknownPaint(type=str(kind), raw=dict(d), visible=visible)


def _paints_from_list(items: list[dict[str, Any]] | None) -> list[Paint] | None:
    if items is None:
        return None
    return [paint_from_dict(p) for p in items]


@dataclass
class Layer:
    """
    A scene node. fills/strokes are None when the node does not expose them
    at all (groups), and [] when it exposes them but has none.
    """

    name: str
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    fills: list[Paint] | None = None
    strokes: list[Paint] | None = None
    children: list["Layer"] = field(default_factory=list)

    def walk(self) -> Iterator["Layer"]:
        """This layer, then its descendants depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "name": self.name,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }
        if self.fills is not None:
            d["fills"] = [p.to_dict() for p in self.fills]
        if self.strokes is not None:
            d["strokes"] = [p.to_dict() for p in self.strokes]
        if self.children:
            d["children"] = [c.to_dict() for c in self.children]
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "Layer":
        return cls(
            name=str(d.get("name", "")),
            x=float(d.get("x", 0.0)),
            y=float(d.get("y", 0.0)),
            width=float(d.get("width", 0.0)),
            height=float(d.get("height", 0.0)),
            fills=_paints_from_list(d.get("fills")),
            strokes=_paints_from_list(d.get("strokes")),
            children=[cls.from_dict(c) for c in d.get("children") or []],
        )


@dataclass
class Frame:
    """Top-level container whose descendants are recolored."""

    name: str
    width: int = 0
    height: int = 0
    fills: list[Paint] | None = None
    children: list[Layer] = field(default_factory=list)

    def descendants(self) -> Iterator[Layer]:
        """All layers under the frame (the frame itself excluded), root-to-leaf."""
        for child in self.children:
            yield from child.walk()

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"name": self.name, "width": self.width, "height": self.height}
        if self.fills is not None:
            d["fills"] = [p.to_dict() for p in self.fills]
        d["children"] = [c.to_dict() for c in self.children]
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "Frame":
        return cls(
            name=str(d.get("name", "")),
            width=int(d.get("width", 0)),
            height=int(d.get("height", 0)),
            fills=_paints_from_list(d.get("fills")),
            children=[Layer.from_dict(c) for c in d.get("children") or []],
        )
