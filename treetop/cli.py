"""Command-line entry point.

Usage:
    treetop                         # analyze ./input.txt
    treetop forest.txt              # analyze another file
    treetop forest.txt --json       # print the report as JSON
    treetop forest.txt --png vis.png --scenic-png scores.png
    treetop forest.txt -v           # debug logging
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from treetop.grid import ShapeError
from treetop.heights import ParseError, load_height_grid
from treetop.render import (
    RenderOptions,
    render_scenic_scores,
    render_visibility,
    save_report_png,
)
from treetop.report import summarize
from treetop.scenic import compute_scenic_scores
from treetop.visibility import compute_visibility

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(name)-24s  %(levelname)-7s  %(message)s",
    )


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {n}")
    return n


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="treetop",
        description="Count visible trees and find the best scenic score",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="input.txt",
        help="Height map file, one digit per tree (default: input.txt)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full report as JSON",
    )
    parser.add_argument(
        "--png",
        metavar="PATH",
        help="Write a visibility rendering to PATH",
    )
    parser.add_argument(
        "--scenic-png",
        metavar="PATH",
        help="Write a scenic score heat map to PATH",
    )
    parser.add_argument(
        "--cell-size",
        type=_positive_int,
        default=8,
        help="Pixels per tree in renderings (default: 8)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    _setup_logging(args.verbose)

    try:
        heights = load_height_grid(args.input)
    except FileNotFoundError:
        print(f"Input file not found: {args.input}", file=sys.stderr)
        return 1
    except (ParseError, ShapeError) as e:
        print(f"Invalid height map in {args.input}: {e}", file=sys.stderr)
        return 1

    visibility = compute_visibility(heights)
    scores = compute_scenic_scores(heights)
    report = summarize(heights, visibility, scores)

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print(
            f"There are {report.visible_count} trees visible "
            f"from outside the grid"
        )
        print(
            f"The highest scenic score possible in the grid is "
            f"{report.max_scenic_score}"
        )

    options = RenderOptions(cell_size=args.cell_size)
    if args.png:
        save_report_png(
            render_visibility(heights, visibility, options), report, args.png
        )
        logger.info("Visibility rendering written to %s", args.png)
    if args.scenic_png:
        save_report_png(
            render_scenic_scores(scores, options), report, args.scenic_png
        )
        logger.info("Scenic score heat map written to %s", args.scenic_png)
    return 0


if __name__ == "__main__":
    sys.exit(main())
