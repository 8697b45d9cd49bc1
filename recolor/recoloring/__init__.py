"""
Recoloring: paint rewriter, palette service client, run orchestration.
"""
from .rewriter import recolor_fills, recolor_paint, rewrite_layer
from .service import PaletteAssignment, PaletteService, parse_palette, parse_rgb8, tokenize_palette
from .orchestrator import (
    RunResult,
    apply_assignment,
    collect_layer_names,
    create_palette_from_frame,
    create_palette_from_prompt,
    create_palette_swatches,
    recolor_frame,
)

__all__ = [
    "recolor_fills",
    "recolor_paint",
    "rewrite_layer",
    "PaletteAssignment",
    "PaletteService",
    "parse_palette",
    "parse_rgb8",
    "tokenize_palette",
    "RunResult",
    "apply_assignment",
    "collect_layer_names",
    "create_palette_from_frame",
    "create_palette_from_prompt",
    "create_palette_swatches",
    "recolor_frame",
]
