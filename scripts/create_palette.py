#!/usr/bin/env python3
"""
CLI: Add palette swatches to a scene document, from a frame render or a prompt.
Usage:
  python scripts/create_palette.py scene.json --frame "Landing Page"
  python scripts/create_palette.py scene.json --prompt "calm ocean morning"
"""
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import argparse
import json
import logging

from recolor.config import load_config
from recolor.recoloring import PaletteService, create_palette_from_frame, create_palette_from_prompt
from recolor.scene import DocumentScene
from recolor.workflow_utils import request_shutdown, setup_graceful_shutdown


def main() -> int:
    parser = argparse.ArgumentParser(description="Create palette swatches in a scene document.")
    parser.add_argument("document", type=Path, help="Scene document (JSON).")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--frame", "-f", type=str, help="Extract the palette from this frame's render.")
    source.add_argument("--prompt", "-p", type=str, help="Generate the palette from a prompt.")
    parser.add_argument("--output", "-o", type=Path, default=None, help="Output document (default: overwrite).")
    parser.add_argument("--config", type=Path, default=None, help="Path to config YAML.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    setup_graceful_shutdown()

    config = load_config(args.config)
    scene = DocumentScene.load(args.document, jpeg_quality=int(config.get("render", {}).get("jpeg_quality", 90)))
    service = PaletteService.from_config(config)

    if args.frame is not None:
        result = create_palette_from_frame(scene, args.frame, service, config=config, should_cancel=request_shutdown)
    else:
        result = create_palette_from_prompt(scene, args.prompt, service, config=config, should_cancel=request_shutdown)
    print(json.dumps(result.to_dict(), indent=2))
    if not result.ok:
        return 1

    out_path = scene.save(args.output or args.document)
    print(f"Palette: {' '.join(result.palette)} → {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
