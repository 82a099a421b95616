"""Scenic scores: how far a tree house at each tree could see.

From a tree at ``(x, y)`` we look out along four rays, each ordered nearest
tree first:

  right  the rest of the row after x
  left   the row before x, reversed
  down   the rest of the column after y
  up     the column before y, reversed

The viewing distance along a ray stops at the first tree at least as tall as
the viewer, and that blocking tree is counted. If nothing blocks, every tree
on the ray is visible and the distance is the ray's length. The scenic score
is the product of the four distances.

Cells on the left column or top row score 0 by an explicit shortcut. Cells on
the right column or bottom row are not special-cased: their outward ray is
empty, so the product comes out to 0 on its own.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np

from treetop.grid import Coordinate, Grid
from treetop.heights import HeightGrid

logger = logging.getLogger(__name__)

ScenicScoreGrid = Grid[int]

# Scores are products of four distances; u32 overflows on large grids.
SCORE_DTYPE = np.uint64


def viewing_distance(viewer_height: int, ray: Sequence[int]) -> int:
    """Trees visible along ``ray`` up to and including the first blocker."""
    for i, height in enumerate(ray):
        if height >= viewer_height:
            return i + 1
    return len(ray)


def rays_from(
    heights: HeightGrid, x: int, y: int
) -> tuple[list[int], list[int], list[int], list[int]]:
    """The (right, left, down, up) rays from ``(x, y)``, nearest first."""
    row = heights.row(y)
    column = heights.column(x)
    right = row[x + 1 :]
    left = row[:x][::-1]
    down = column[y + 1 :]
    up = column[:y][::-1]
    return right, left, down, up


def scenic_score_at(heights: HeightGrid, x: int, y: int) -> int:
    if x == 0 or y == 0:
        return 0
    viewer = heights.at(x, y)
    if viewer is None:
        raise IndexError(
            f"({x}, {y}) is outside a {heights.width}x{heights.height} grid"
        )
    return math.prod(
        viewing_distance(viewer, ray) for ray in rays_from(heights, x, y)
    )


def compute_scenic_scores(heights: HeightGrid) -> ScenicScoreGrid:
    scores = [
        scenic_score_at(heights, x, y) for x, y in heights.coordinates()
    ]
    grid = Grid(scores, heights.height, heights.width, dtype=SCORE_DTYPE)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Scenic scores for %dx%d grid: max %d",
            heights.height,
            heights.width,
            max_scenic_score(grid),
        )
    return grid


def max_scenic_score(scores: ScenicScoreGrid) -> int:
    """Highest score in the grid, or 0 when the grid is empty."""
    if len(scores) == 0:
        return 0
    return int(scores.as_array().max())


def best_scenic_location(scores: ScenicScoreGrid) -> Coordinate | None:
    """First coordinate in row-major order holding the highest score."""
    if len(scores) == 0:
        return None
    # argmax returns the first occurrence, which matches row-major order.
    flat_index = int(np.argmax(scores.as_array()))
    y, x = divmod(flat_index, scores.width)
    return (x, y)
