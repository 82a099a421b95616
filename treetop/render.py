"""Render analysis grids as PNG images, with the report embedded.

Two renderings are available:

  render_visibility      Height map in greyscale (taller is lighter), with
                         trees visible from outside the grid tinted green.
  render_scenic_scores   Heat map of scenic scores scaled to the grid's
                         maximum; the best cell is marked red.

Each grid cell becomes a ``cell_size`` x ``cell_size`` square. Pixels are
built as a numpy RGB array at one pixel per cell and scaled up with
nearest-neighbour resampling.

``save_report_png`` stores the ``ForestReport`` as JSON in a PNG tEXt chunk
(key: ``treetop_report``), so a saved image also carries the numbers it
illustrates. ``load_report_png`` reads them back.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image
from PIL.PngImagePlugin import PngInfo

from treetop.grid import Grid
from treetop.report import ForestReport
from treetop.scenic import best_scenic_location

logger = logging.getLogger(__name__)

METADATA_KEY = "treetop_report"

MAX_HEIGHT = 9


@dataclass
class RenderOptions:
    cell_size: int = 8
    show_visibility: bool = True

    @staticmethod
    def from_dict(d: dict | None) -> RenderOptions:
        if not d:
            return RenderOptions()
        return RenderOptions(
            cell_size=d.get("cell_size", 8),
            show_visibility=d.get("show_visibility", True),
        )


def _to_image(pixels: np.ndarray, cell_size: int) -> Image.Image:
    if pixels.shape[0] == 0 or pixels.shape[1] == 0:
        raise ValueError("Cannot render an empty grid")
    if cell_size < 1:
        raise ValueError(f"cell_size must be positive, got {cell_size}")
    img = Image.fromarray(pixels.astype(np.uint8))
    h, w = pixels.shape[:2]
    return img.resize(
        (w * cell_size, h * cell_size), Image.Resampling.NEAREST
    )


def render_visibility(
    heights: Grid[int],
    visibility: Grid[bool],
    options: RenderOptions | None = None,
) -> Image.Image:
    options = options or RenderOptions()
    if heights.shape != visibility.shape:
        raise ValueError(
            f"Height grid {heights.shape} and visibility grid "
            f"{visibility.shape} differ in shape"
        )
    shade = 40 + heights.as_array().astype(np.int32) * (180 // MAX_HEIGHT)
    pixels = np.stack([shade, shade, shade], axis=-1)
    if options.show_visibility:
        visible = visibility.as_array()
        pixels[visible, 0] //= 3
        pixels[visible, 2] //= 3
    return _to_image(pixels, options.cell_size)


def render_scenic_scores(
    scores: Grid[int], options: RenderOptions | None = None
) -> Image.Image:
    options = options or RenderOptions()
    values = scores.as_array().astype(np.float64)
    top = values.max() if values.size else 0.0
    level = values / top if top > 0 else np.zeros_like(values)
    pixels = np.stack(
        [level * 255.0, level * 220.0, (1.0 - level) * 120.0], axis=-1
    ).astype(np.int32)
    best = best_scenic_location(scores)
    if best is not None and top > 0:
        x, y = best
        pixels[y, x] = (255, 0, 0)
    return _to_image(pixels, options.cell_size)


def save_report_png(
    img: Image.Image, report: ForestReport, path: str | Path
) -> None:
    """Save a rendering with the report JSON embedded as a PNG tEXt chunk."""
    info = PngInfo()
    info.add_text(METADATA_KEY, json.dumps(report.to_dict()))
    img.save(path, format="PNG", pnginfo=info)
    logger.debug("Wrote %dx%d image to %s", img.width, img.height, path)


def load_report_png(path: str | Path) -> ForestReport:
    """Load the report embedded in a PNG written by ``save_report_png``.

    Raises ValueError if the PNG does not contain report metadata.
    """
    with Image.open(path) as img:
        text_data = getattr(img, "text", None)
        if not text_data or METADATA_KEY not in text_data:
            raise ValueError(
                f"PNG file does not contain report metadata "
                f"(missing '{METADATA_KEY}' chunk)"
            )
        return ForestReport.from_dict(json.loads(text_data[METADATA_KEY]))
