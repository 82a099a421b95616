"""Which trees can be seen from outside the grid.

A tree is visible from one side of the grid when every tree between it and
that edge is strictly shorter. The module answers this for all four sides
and unions the results: a tree counts as visible if it can be seen from at
least one side.

The core is ``scan_line``, a single left-to-right sweep that keeps the
tallest height seen so far. The running maximum starts at -1, below any
valid height, so the first tree of every line is always visible. A tree is
visible only when it is *strictly* taller than the running maximum; a tie
neither counts as visible nor raises the maximum.

The other three directions reuse the same sweep rather than reimplementing
it:

  LEFT     each row, as is
  RIGHT    each row reversed, scanned, then reversed back
  TOP      each column, as is
  BOTTOM   each column reversed, scanned, then reversed back

Row results are reassembled with ``Grid.from_rows`` and column results with
``Grid.from_columns``, so all four directional grids share the height grid's
orientation and can be combined cell by cell with a vectorized OR.
"""

from __future__ import annotations

import enum
import logging
from typing import Sequence

import numpy as np

from treetop.grid import Grid, ShapeError
from treetop.heights import HeightGrid

logger = logging.getLogger(__name__)

VisibilityGrid = Grid[bool]

# Lower than any valid tree height.
_NO_TREE = -1


class Direction(enum.Enum):
    """The side of the grid a tree is viewed from."""

    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"


def scan_line(heights: Sequence[int]) -> list[bool]:
    """Visibility of each tree in a line, viewed from index 0.

    >>> scan_line([3, 0, 3, 7, 3])
    [True, False, False, True, False]
    """
    tallest = _NO_TREE
    visible: list[bool] = []
    for height in heights:
        is_visible = height > tallest
        visible.append(is_visible)
        if is_visible:
            tallest = height
    return visible


def scan_line_reversed(heights: Sequence[int]) -> list[bool]:
    """Visibility of each tree in a line, viewed from the far end.

    The result is in the line's original order.
    """
    return list(reversed(scan_line(list(reversed(heights)))))


def visibility_from(
    heights: HeightGrid, direction: Direction
) -> VisibilityGrid:
    """Visibility of every tree when viewed from one side of the grid."""
    if direction is Direction.LEFT:
        return Grid.from_rows(
            [scan_line(row) for row in heights.rows()], dtype=bool
        )
    if direction is Direction.RIGHT:
        return Grid.from_rows(
            [scan_line_reversed(row) for row in heights.rows()], dtype=bool
        )
    if direction is Direction.TOP:
        return Grid.from_columns(
            [scan_line(column) for column in heights.columns()], dtype=bool
        )
    if direction is Direction.BOTTOM:
        return Grid.from_columns(
            [scan_line_reversed(column) for column in heights.columns()],
            dtype=bool,
        )
    raise ValueError(f"Unknown direction: {direction!r}")


def union_visibility(grids: Sequence[VisibilityGrid]) -> VisibilityGrid:
    """Cell-wise OR of equally shaped visibility grids."""
    if not grids:
        raise ValueError("union_visibility needs at least one grid")
    shape = grids[0].shape
    for g in grids[1:]:
        if g.shape != shape:
            raise ShapeError(
                f"Cannot union grids of shape {shape} and {g.shape}"
            )
    combined = np.logical_or.reduce([g.as_array() for g in grids])
    height, width = shape
    return Grid(combined.reshape(-1), height, width, dtype=bool)


def compute_visibility(heights: HeightGrid) -> VisibilityGrid:
    """Visibility from outside the grid along at least one direction."""
    if len(heights) == 0:
        # No rows or no columns to scan; from_rows/from_columns would
        # collapse the shape to 0x0.
        return Grid([], heights.height, heights.width, dtype=bool)
    per_direction = [visibility_from(heights, d) for d in Direction]
    visibility = union_visibility(per_direction)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Visibility for %dx%d grid: %d visible",
            heights.height,
            heights.width,
            count_visible(visibility),
        )
    return visibility


def count_visible(visibility: VisibilityGrid) -> int:
    return int(np.count_nonzero(visibility.as_array()))
