"""
Load and expose app config (YAML). Used by the orchestrator and scripts to get the
palette service endpoints, sentinel layer, recolor mode, swatch layout, etc.
"""
from pathlib import Path
from typing import Any

import yaml


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load config from YAML. Path is optional; defaults to config/default.yaml."""
    if config_path is None:
        config_path = _project_root() / "config" / "default.yaml"
    path = Path(config_path)
    if not path.exists():
        return _defaults()
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return _merge(_defaults(), data)


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Section-wise merge: keys missing from a YAML section keep their defaults."""
    out = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = {**out[key], **value}
        else:
            out[key] = value
    return out


# Layer name reserved as the frame's root container; never recolored
DEFAULT_SENTINEL = "main"

PROMPT_SUFFIX = (
    " And make sure the colors are not too similar to each other and used together to create a beautiful design."
    " Also, the color palette must consist of 5 colors "
    " and make sure to return the color codes of the color palette in hex format "
    " and return only the color codes in the response, do not return text or anything else."
)


def _defaults() -> dict[str, Any]:
    return {
        "service": {
            "api_base": "http://localhost:5000",
            "image_path": "/process_image",
            "prompt_path": "/process_prompt",
            "assign_path": "/assign_colors",
            "timeout": 60,
        },
        "prompt": {"suffix": PROMPT_SUFFIX},
        "recolor": {
            "sentinel_layer": DEFAULT_SENTINEL,
            "solid_mode": "replace",  # replace | harmonize
            "scale_factor": 1.0,
            "duplicate_names": "error",  # error | first
        },
        "swatches": {
            "origin_x": 100,
            "origin_y": 100,
            "size": 100,
            "spacing": 110,
        },
        "render": {"jpeg_quality": 90, "background": [255, 255, 255]},
    }


def get_service_config(config: dict[str, Any]) -> dict[str, Any]:
    return {**_defaults()["service"], **config.get("service", {})}


def get_recolor_config(config: dict[str, Any]) -> dict[str, Any]:
    """Recolor section with defaults filled in; validates solid_mode."""
    out = {**_defaults()["recolor"], **config.get("recolor", {})}
    if out["solid_mode"] not in ("replace", "harmonize"):
        raise ValueError(f"recolor.solid_mode must be 'replace' or 'harmonize', got {out['solid_mode']!r}")
    out["scale_factor"] = float(out["scale_factor"])
    return out
