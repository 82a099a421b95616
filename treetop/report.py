"""Run both analyses over a height map and collect the results.

``analyze(heights)`` is the public entry point; ``analyze_text`` parses
first. The returned ``ForestReport`` is what the CLI prints and what the PNG
renderer embeds as metadata.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from treetop.grid import Coordinate, Grid
from treetop.heights import parse_height_grid
from treetop.scenic import (
    best_scenic_location,
    compute_scenic_scores,
    max_scenic_score,
)
from treetop.visibility import compute_visibility, count_visible

logger = logging.getLogger(__name__)


@dataclass
class ForestReport:
    width: int
    height: int
    visible_count: int = 0
    max_scenic_score: int = 0
    best_location: Coordinate | None = None

    @staticmethod
    def from_dict(d: dict) -> ForestReport:
        loc = d.get("best_location")
        return ForestReport(
            width=d["width"],
            height=d["height"],
            visible_count=d.get("visible_count", 0),
            max_scenic_score=d.get("max_scenic_score", 0),
            best_location=(loc["x"], loc["y"]) if loc else None,
        )

    def to_dict(self) -> dict:
        d: dict = {
            "width": self.width,
            "height": self.height,
            "visible_count": self.visible_count,
            "max_scenic_score": self.max_scenic_score,
        }
        if self.best_location is not None:
            x, y = self.best_location
            d["best_location"] = {"x": x, "y": y}
        return d


def summarize(
    heights: Grid[int], visibility: Grid[bool], scores: Grid[int]
) -> ForestReport:
    """Reduce already computed visibility and score grids to a report."""
    return ForestReport(
        width=heights.width,
        height=heights.height,
        visible_count=count_visible(visibility),
        max_scenic_score=max_scenic_score(scores),
        best_location=best_scenic_location(scores),
    )


def analyze(heights: Grid[int]) -> ForestReport:
    report = summarize(
        heights, compute_visibility(heights), compute_scenic_scores(heights)
    )
    logger.debug("Analysis complete: %s", report)
    return report


def analyze_text(text: str) -> ForestReport:
    return analyze(parse_height_grid(text))
