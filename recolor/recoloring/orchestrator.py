"""
Orchestrator: one frame -> palette -> per-layer assignment -> recolored layers.

Stages: collect layer names, request a palette (from the frame render or a prompt),
request the assignment, apply it. Service failures abort the run before any layer
is touched; per-layer problems (missing layer, duplicate name, malformed color)
are logged and skipped. Every outcome is returned as a RunResult, never raised.
"""
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from ..color.codec import RGB8, hex_to_rgb8, normalize_hex, rgb8_to_normalized
from ..config import DEFAULT_SENTINEL, get_recolor_config, load_config
from ..errors import Cancelled, DuplicateName, FrameNotFound, PaletteUnavailable, RecolorError
from ..scene.base import Scene
from ..scene.schema import Frame, Layer, SolidPaint
from .rewriter import rewrite_layer
from .service import PaletteAssignment, PaletteService

logger = logging.getLogger(__name__)

CancelCheck = Callable[[], bool]


@dataclass
class RunResult:
    """Outcome of one run. ok=False carries error = {"kind", "message", "context"}."""

    ok: bool
    frame: str | None = None
    palette: list[str] = field(default_factory=list)
    assignment: dict[str, RGB8] = field(default_factory=dict)
    recolored: list[str] = field(default_factory=list)
    skipped: list[dict[str, Any]] = field(default_factory=list)
    created: list[str] = field(default_factory=list)
    error: dict[str, Any] | None = None

    @property
    def error_kind(self) -> str | None:
        return self.error["kind"] if self.error else None

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logging and CLI output."""
        d: dict[str, Any] = {
            "ok": self.ok,
            "frame": self.frame,
            "palette": self.palette,
            "recolored": self.recolored,
            "skipped": self.skipped,
        }
        if self.assignment:
            d["assignment"] = {k: list(v) for k, v in self.assignment.items()}
        if self.created:
            d["created"] = self.created
        if self.error:
            d["error"] = self.error
        return d


def _log_summary(event: str, result: RunResult) -> None:
    """One JSON line per finished run; aborted runs log at WARNING."""
    line = json.dumps({"event": event, **result.to_dict()}, default=str)
    logger.log(logging.INFO if result.ok else logging.WARNING, "%s", line)


def _failed(result: RunResult, err: RecolorError) -> RunResult:
    result.ok = False
    result.error = err.to_dict()
    logger.warning("Run aborted (%s): %s", err.kind, err.message)
    _log_summary("run aborted", result)
    return result


def _check_cancelled(should_cancel: CancelCheck | None, stage: str) -> None:
    if should_cancel is not None and should_cancel():
        raise Cancelled(f"Run cancelled before {stage}", stage=stage)


def _resolve_frame(scene: Scene, frame_name: str) -> Frame:
    frame = scene.get_frame(frame_name)
    if frame is None:
        raise FrameNotFound(f"Frame {frame_name!r} not found", frame=frame_name)
    return frame


def _render(scene: Scene, frame: Frame) -> bytes:
    try:
        return scene.render_frame_as_image(frame)
    except Exception as e:
        raise PaletteUnavailable(f"Could not render frame {frame.name!r}: {e}", stage="render", frame=frame.name) from e


def collect_layer_names(scene: Scene, frame: Frame) -> list[str]:
    """Names of every layer under the frame, in scene order. Nothing is excluded here."""
    return [item["name"] for item in scene.list_layers(frame)]


def request_palette(
    scene: Scene,
    frame: Frame | None,
    service: PaletteService,
    *,
    prompt: str | None = None,
) -> list[str]:
    """Palette from a free-text prompt when given, otherwise from the rendered frame."""
    if prompt is not None:
        return service.palette_from_prompt(prompt)
    if frame is None:
        raise PaletteUnavailable("Need a frame or a prompt to request a palette")
    return service.palette_from_image(_render(scene, frame))


def apply_assignment(
    scene: Scene,
    frame: Frame,
    assignment: PaletteAssignment,
    *,
    sentinel: str = DEFAULT_SENTINEL,
    solid_mode: str = "replace",
    scale_factor: float = 1.0,
) -> tuple[list[str], list[dict[str, Any]]]:
    """
    Rewrite every assigned layer except the sentinel.
    Returns (recolored layer names, skipped entries with kind/reason).
    """
    recolored: list[str] = []
    skipped: list[dict[str, Any]] = []

    for name, value in assignment.invalid.items():
        logger.info("Layer %r: assigned value %r is not a color, skipping", name, value)
        skipped.append({"layer": name, "kind": "InvalidFormat", "reason": f"not an [r, g, b] color: {value!r}"})

    for name, color in assignment.colors.items():
        if name == sentinel:
            skipped.append({"layer": name, "kind": "Sentinel", "reason": "reserved layer"})
            continue
        try:
            layer = scene.find_layer_by_name(frame, name)
        except DuplicateName as e:
            logger.warning("Layer %r skipped: %s", name, e.message)
            skipped.append({"layer": name, "kind": e.kind, "reason": e.message})
            continue
        if layer is None:
            logger.info("Layer %r not found in frame %r, skipping", name, frame.name)
            skipped.append({"layer": name, "kind": "LayerNotFound", "reason": "not in scene"})
            continue
        outcome = rewrite_layer(
            scene, layer, color, sentinel=sentinel, solid_mode=solid_mode, scale_factor=scale_factor,
        )
        if outcome == "recolored":
            recolored.append(name)
        elif outcome == "unchanged":
            skipped.append({"layer": name, "kind": "Unchanged", "reason": "already matches the assigned color"})
        else:
            skipped.append({"layer": name, "kind": "NoRecolorablePaint", "reason": "nothing to recolor"})
    return recolored, skipped


def recolor_frame(
    scene: Scene,
    frame_name: str,
    service: PaletteService,
    *,
    prompt: str | None = None,
    config: dict[str, Any] | None = None,
    should_cancel: CancelCheck | None = None,
) -> RunResult:
    """
    Full run against one frame. With `prompt`, the palette comes from the prompt
    instead of the frame render. No layer changes unless both service calls succeed.
    """
    if config is None:
        config = load_config()
    recolor_cfg = get_recolor_config(config)
    result = RunResult(ok=False, frame=frame_name)
    try:
        frame = _resolve_frame(scene, frame_name)
        layer_names = collect_layer_names(scene, frame)
        logger.info("Frame %r selected: %s layers", frame.name, len(layer_names))

        _check_cancelled(should_cancel, "palette request")
        result.palette = request_palette(scene, frame, service, prompt=prompt)

        _check_cancelled(should_cancel, "assignment request")
        assignment = service.request_assignment(layer_names, result.palette)
        result.assignment = dict(assignment.colors)

        _check_cancelled(should_cancel, "applying assignment")
    except RecolorError as e:
        return _failed(result, e)

    result.recolored, result.skipped = apply_assignment(
        scene,
        frame,
        assignment,
        sentinel=recolor_cfg["sentinel_layer"],
        solid_mode=recolor_cfg["solid_mode"],
        scale_factor=recolor_cfg["scale_factor"],
    )
    result.ok = True
    _log_summary("colors assigned", result)
    return result


def create_palette_swatches(
    scene: Scene,
    palette: list[str],
    config: dict[str, Any] | None = None,
) -> list[Layer]:
    """One square solid rectangle per palette color, laid out left to right on the page."""
    if config is None:
        config = load_config()
    sw = config.get("swatches", {})
    origin_x = float(sw.get("origin_x", 100))
    origin_y = float(sw.get("origin_y", 100))
    size = float(sw.get("size", 100))
    spacing = float(sw.get("spacing", 110))

    created = []
    for i, hex_color in enumerate(palette):
        color = normalize_hex(hex_color)
        rect = scene.create_rectangle(
            f"Swatch {i + 1} {color}",
            origin_x + i * spacing,
            origin_y,
            size,
            size,
            [SolidPaint(color=rgb8_to_normalized(hex_to_rgb8(color)))],
        )
        created.append(rect)
    return created


def _palette_run(
    scene: Scene,
    frame_name: str | None,
    service: PaletteService,
    *,
    prompt: str | None,
    config: dict[str, Any] | None,
    should_cancel: CancelCheck | None,
) -> RunResult:
    if config is None:
        config = load_config()
    result = RunResult(ok=False, frame=frame_name)
    try:
        frame = _resolve_frame(scene, frame_name) if frame_name is not None else None
        _check_cancelled(should_cancel, "palette request")
        result.palette = request_palette(scene, frame, service, prompt=prompt)
        _check_cancelled(should_cancel, "creating swatches")
    except RecolorError as e:
        return _failed(result, e)

    result.created = [rect.name for rect in create_palette_swatches(scene, result.palette, config)]
    result.ok = True
    _log_summary("palette created", result)
    return result


def create_palette_from_frame(
    scene: Scene,
    frame_name: str,
    service: PaletteService,
    *,
    config: dict[str, Any] | None = None,
    should_cancel: CancelCheck | None = None,
) -> RunResult:
    """Render the frame, ask the service for its palette, and lay the palette out as swatches."""
    return _palette_run(scene, frame_name, service, prompt=None, config=config, should_cancel=should_cancel)


def create_palette_from_prompt(
    scene: Scene,
    prompt: str,
    service: PaletteService,
    *,
    config: dict[str, Any] | None = None,
    should_cancel: CancelCheck | None = None,
) -> RunResult:
    """Ask the service for a palette matching a prompt and lay it out as swatches."""
    return _palette_run(scene, None, service, prompt=prompt, config=config, should_cancel=should_cancel)
