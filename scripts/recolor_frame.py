#!/usr/bin/env python3
"""
CLI: Recolor one frame of a scene document with a palette from the palette service.
Usage:
  python scripts/recolor_frame.py scene.json "Landing Page"
  python scripts/recolor_frame.py scene.json "Landing Page" --prompt "autumn forest at dusk"
  python scripts/recolor_frame.py scene.json "Landing Page" --output recolored.json
"""
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import argparse
import json
import logging

from recolor.config import get_recolor_config, load_config
from recolor.recoloring import PaletteService, recolor_frame
from recolor.scene import DocumentScene
from recolor.workflow_utils import request_shutdown, setup_graceful_shutdown


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Recolor a frame's layers with a palette assigned by the palette service."
    )
    parser.add_argument("document", type=Path, help="Scene document (JSON).")
    parser.add_argument("frame", type=str, help="Name of the frame to recolor.")
    parser.add_argument(
        "--prompt",
        "-p",
        type=str,
        default=None,
        help="Generate the palette from this prompt instead of the frame render.",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Where to write the recolored document (default: overwrite the input).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config YAML (default: config/default.yaml).",
    )
    parser.add_argument(
        "--api-base",
        type=str,
        default=None,
        help="Override service.api_base from config.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s: %(message)s")
    setup_graceful_shutdown()

    config = load_config(args.config)
    if args.api_base:
        config["service"] = {**config.get("service", {}), "api_base": args.api_base}
    render_cfg = config.get("render", {})
    scene = DocumentScene.load(
        args.document,
        duplicate_names=get_recolor_config(config)["duplicate_names"],
        jpeg_quality=int(render_cfg.get("jpeg_quality", 90)),
        background=tuple(render_cfg.get("background", (255, 255, 255))),
    )
    service = PaletteService.from_config(config)

    result = recolor_frame(
        scene,
        args.frame,
        service,
        prompt=args.prompt,
        config=config,
        should_cancel=request_shutdown,
    )
    print(json.dumps(result.to_dict(), indent=2))
    if not result.ok:
        return 1

    out_path = scene.save(args.output or args.document)
    print(f"Done. {len(result.recolored)} layers recolored → {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
