"""
Palette service client: image -> hex palette, prompt -> hex palette,
(layer names, palette) -> per-layer color assignment.
Service failures become PaletteUnavailable / AssignmentUnavailable with context.
"""
import logging
from dataclasses import dataclass, field
from typing import Any

from ..api_client import APIError, api_post, api_post_binary
from ..color.codec import RGB8, hex_to_rgb8, normalize_hex
from ..config import PROMPT_SUFFIX, get_service_config
from ..errors import AssignmentUnavailable, InvalidFormat, PaletteUnavailable

logger = logging.getLogger(__name__)


@dataclass
class PaletteAssignment:
    """Layer name -> target color (0-255 RGB). `invalid` keeps entries whose value was not a color."""

    colors: dict[str, RGB8] = field(default_factory=dict)
    invalid: dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.colors)


def parse_rgb8(value: Any) -> RGB8:
    """[r, g, b] with each channel a number in 0-255 -> (r, g, b) ints. Raises InvalidFormat."""
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise InvalidFormat(f"Expected [r, g, b], got {value!r}", value=value)
    out = []
    for c in value:
        if isinstance(c, bool) or not isinstance(c, (int, float)) or not 0 <= c <= 255:
            raise InvalidFormat(f"Channel out of range in {value!r}", value=value)
        out.append(int(round(c)))
    return (out[0], out[1], out[2])


def parse_palette(raw: Any, *, source: str) -> list[str]:
    """
    Validate a list of hex strings and normalize each to '#RRGGBB'.
    Empty or malformed palettes raise PaletteUnavailable.
    """
    if not isinstance(raw, list) or not raw:
        raise PaletteUnavailable(f"Palette service returned no colors ({source})", source=source, response=raw)
    try:
        return [normalize_hex(h) for h in raw]
    except InvalidFormat as e:
        raise PaletteUnavailable(
            f"Palette service returned a malformed color ({source}): {e}",
            source=source,
            response=raw,
        ) from e


def tokenize_palette(text: Any) -> list[str]:
    """Whitespace-separated hex string -> list of tokens."""
    if not isinstance(text, str):
        return []
    return text.strip().split()


class PaletteService:
    """Client for the palette/assignment service. One request per call, no retries."""

    def __init__(
        self,
        api_base: str,
        *,
        image_path: str = "/process_image",
        prompt_path: str = "/process_prompt",
        assign_path: str = "/assign_colors",
        timeout: float = 60,
        prompt_suffix: str = PROMPT_SUFFIX,
    ):
        self.api_base = api_base
        self.image_path = image_path
        self.prompt_path = prompt_path
        self.assign_path = assign_path
        self.timeout = timeout
        self.prompt_suffix = prompt_suffix

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "PaletteService":
        svc = get_service_config(config)
        return cls(
            svc["api_base"],
            image_path=svc["image_path"],
            prompt_path=svc["prompt_path"],
            assign_path=svc["assign_path"],
            timeout=float(svc["timeout"]),
            prompt_suffix=(config.get("prompt") or {}).get("suffix", PROMPT_SUFFIX),
        )

    def palette_from_image(self, image: bytes) -> list[str]:
        """POST a JPEG render; returns the palette as normalized hex strings."""
        try:
            data = api_post_binary(
                self.api_base, self.image_path, image, content_type="image/jpeg", timeout=self.timeout,
            )
        except APIError as e:
            raise PaletteUnavailable(
                f"Palette request failed: {e}", source="image", status_code=e.status_code, path=e.path,
            ) from e
        raw = data.get("color_palette") if isinstance(data, dict) else None
        palette = parse_palette(raw, source="image")
        logger.info("Palette received from image: %s", " ".join(palette))
        return palette

    def palette_from_prompt(self, prompt: str) -> list[str]:
        """POST prompt + fixed suffix; the service answers with whitespace-separated hex codes."""
        try:
            data = api_post(
                self.api_base, self.prompt_path, data={"input_string": prompt + self.prompt_suffix},
                timeout=self.timeout,
            )
        except APIError as e:
            raise PaletteUnavailable(
                f"Palette request failed: {e}", source="prompt", status_code=e.status_code, path=e.path,
            ) from e
        raw = data.get("palette") if isinstance(data, dict) else None
        palette = parse_palette(tokenize_palette(raw), source="prompt")
        logger.info("Palette received from prompt: %s", " ".join(palette))
        return palette

    def request_assignment(self, layer_names: list[str], palette: list[str]) -> PaletteAssignment:
        """POST layer names + palette (as [r, g, b]); returns the per-layer assignment."""
        payload = {
            "layers": [{"name": name} for name in layer_names],
            "palette": [list(hex_to_rgb8(h)) for h in palette],
        }
        try:
            data = api_post(self.api_base, self.assign_path, data=payload, timeout=self.timeout)
        except APIError as e:
            raise AssignmentUnavailable(
                f"Assignment request failed: {e}", status_code=e.status_code, path=e.path,
            ) from e
        if not isinstance(data, dict):
            raise AssignmentUnavailable("Assignment service returned a non-object response", response=data)
        if not data:
            raise AssignmentUnavailable("Assignment service returned no layers", response=data)

        assignment = PaletteAssignment()
        for name, value in data.items():
            try:
                assignment.colors[str(name)] = parse_rgb8(value)
            except InvalidFormat:
                assignment.invalid[str(name)] = value
        if not assignment.colors:
            raise AssignmentUnavailable(
                f"Assignment service returned no valid colors ({len(assignment.invalid)} malformed)",
                response=data,
            )
        logger.info(
            "Color assignment received: %s layers (%s malformed)", len(assignment.colors), len(assignment.invalid),
        )
        return assignment
