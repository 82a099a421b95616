"""Tests for directional scans and combined tree visibility."""

import logging

import numpy as np
import pytest

from treetop.grid import Grid, ShapeError
from treetop.heights import parse_height_grid
from treetop.visibility import (
    Direction,
    compute_visibility,
    count_visible,
    scan_line,
    scan_line_reversed,
    union_visibility,
    visibility_from,
)

EXAMPLE = """\
30373
25512
65332
33549
35390
"""


def _random_heights(seed, height, width):
    rng = np.random.default_rng(seed)
    return Grid.from_rows(
        rng.integers(0, 10, size=(height, width)).tolist(), dtype=np.uint8
    )


def _brute_force_visible(heights, x, y):
    """Visible if every tree toward some edge is strictly shorter."""
    h = heights.at(x, y)
    row = heights.row(y)
    column = heights.column(x)
    lines = [row[:x], row[x + 1 :], column[:y], column[y + 1 :]]
    return any(all(t < h for t in line) for line in lines)


class TestScanLine:
    def test_example_row(self):
        assert scan_line([3, 0, 3, 7, 3]) == [True, False, False, True, False]

    def test_strictly_increasing(self):
        assert scan_line([0, 1, 2, 5, 9]) == [True] * 5

    def test_strictly_decreasing(self):
        assert scan_line([9, 5, 2, 0]) == [True, False, False, False]

    def test_ties_not_visible(self):
        assert scan_line([5, 5, 5]) == [True, False, False]

    def test_zero_height_first_is_visible(self):
        assert scan_line([0, 0]) == [True, False]

    def test_empty(self):
        assert scan_line([]) == []

    def test_reversed_keeps_original_order(self):
        assert scan_line_reversed([3, 0, 3, 7, 3]) == [
            False,
            False,
            False,
            True,
            True,
        ]

    def test_reversed_does_not_mutate_input(self):
        line = [1, 2, 3]
        scan_line_reversed(line)
        assert line == [1, 2, 3]


class TestVisibilityFrom:
    def test_left(self):
        vis = visibility_from(parse_height_grid(EXAMPLE), Direction.LEFT)
        assert vis.row(0) == [True, False, False, True, False]
        assert vis.row(2) == [True, False, False, False, False]

    def test_right(self):
        vis = visibility_from(parse_height_grid(EXAMPLE), Direction.RIGHT)
        assert vis.row(0) == [False, False, False, True, True]
        assert vis.row(1) == [False, False, True, False, True]

    def test_top(self):
        vis = visibility_from(parse_height_grid(EXAMPLE), Direction.TOP)
        assert vis.column(0) == [True, False, True, False, False]
        assert vis.column(3) == [True, False, False, False, True]

    def test_bottom(self):
        vis = visibility_from(parse_height_grid(EXAMPLE), Direction.BOTTOM)
        assert vis.column(2) == [False, False, False, True, True]
        assert vis.column(4) == [False, False, False, True, True]

    def test_keeps_shape(self):
        heights = _random_heights(0, 3, 7)
        for d in Direction:
            assert visibility_from(heights, d).shape == (3, 7)


class TestUnionVisibility:
    def test_or(self):
        a = Grid.from_rows([[True, False], [False, False]], dtype=bool)
        b = Grid.from_rows([[False, False], [False, True]], dtype=bool)
        assert union_visibility([a, b]).values() == [
            True,
            False,
            False,
            True,
        ]

    def test_mismatched_shapes(self):
        a = Grid.from_rows([[True, False]], dtype=bool)
        b = Grid.from_rows([[True], [False]], dtype=bool)
        with pytest.raises(ShapeError):
            union_visibility([a, b])

    def test_needs_a_grid(self):
        with pytest.raises(ValueError):
            union_visibility([])


class TestComputeVisibility:
    def test_example_count(self):
        vis = compute_visibility(parse_height_grid(EXAMPLE))
        assert count_visible(vis) == 21

    def test_example_interior(self):
        vis = compute_visibility(parse_height_grid(EXAMPLE))
        assert vis.at(1, 1) is True  # top-left 5
        assert vis.at(2, 1) is True  # top-middle 5
        assert vis.at(3, 1) is False  # top-right 1
        assert vis.at(1, 2) is True  # left-middle 5
        assert vis.at(2, 2) is False  # center 3
        assert vis.at(3, 2) is True  # right-middle 3
        assert vis.at(2, 3) is True  # bottom-middle 5
        assert vis.at(1, 3) is False
        assert vis.at(3, 3) is False

    def test_single_tree(self):
        vis = compute_visibility(parse_height_grid("7"))
        assert count_visible(vis) == 1

    def test_flat_grid_only_border_visible(self):
        for rows, cols in [(3, 3), (4, 6), (2, 5)]:
            heights = Grid([5] * (rows * cols), rows, cols, dtype=np.uint8)
            vis = compute_visibility(heights)
            assert count_visible(vis) == 2 * rows + 2 * cols - 4

    def test_edges_always_visible(self):
        for seed, (h, w) in enumerate([(1, 1), (1, 6), (6, 1), (8, 11)]):
            heights = _random_heights(seed, h, w)
            vis = compute_visibility(heights)
            for x, y in vis.coordinates():
                if x in (0, w - 1) or y in (0, h - 1):
                    assert vis.at(x, y) is True

    def test_matches_brute_force(self):
        heights = _random_heights(42, 12, 9)
        vis = compute_visibility(heights)
        for x, y in heights.coordinates():
            assert vis.at(x, y) == _brute_force_visible(heights, x, y)

    def test_empty_grid_keeps_shape(self):
        heights = Grid([], 3, 0, dtype=np.uint8)
        vis = compute_visibility(heights)
        assert vis.shape == (3, 0)
        assert count_visible(vis) == 0

    def test_does_not_modify_heights(self):
        heights = parse_height_grid(EXAMPLE)
        before = heights.values()
        compute_visibility(heights)
        assert heights.values() == before


def test_debug_count_skipped_when_logging_off(monkeypatch, caplog):
    """The visible-count summary is only computed for debug logging."""
    calls = []
    monkeypatch.setattr(
        "treetop.visibility.count_visible",
        lambda vis: calls.append(vis) or 0,
    )
    caplog.set_level(logging.WARNING, logger="treetop.visibility")
    compute_visibility(parse_height_grid(EXAMPLE))
    assert calls == []
