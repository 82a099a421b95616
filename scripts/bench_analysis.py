#!/usr/bin/env python3
"""Benchmark visibility and scenic-score analysis on synthetic forests.

Usage (from the repository root):
    python scripts/bench_analysis.py               # 3 iterations, 99x99
    python scripts/bench_analysis.py -n 5          # 5 iterations
    python scripts/bench_analysis.py --size 200    # 200x200 grid
    python scripts/bench_analysis.py --dump f.txt  # also write the grid
"""

import argparse
import statistics
import sys
import time
from pathlib import Path

import numpy as np

# Add the repository root to path
SCRIPT_DIR = Path(__file__).resolve().parent
ROOT_DIR = SCRIPT_DIR.parent
sys.path.insert(0, str(ROOT_DIR))

from treetop.grid import Grid  # noqa: E402
from treetop.heights import HEIGHT_DTYPE, format_height_grid  # noqa: E402
from treetop.scenic import compute_scenic_scores  # noqa: E402
from treetop.visibility import compute_visibility  # noqa: E402


def random_forest(seed: int, size: int) -> Grid[int]:
    rng = np.random.default_rng(seed)
    heights = rng.integers(0, 10, size=(size, size))
    return Grid(heights.reshape(-1), size, size, dtype=HEIGHT_DTYPE)


def _time_ms(fn, heights, iterations):
    times_ms = []
    for i in range(iterations):
        start = time.perf_counter()
        fn(heights)
        elapsed_ms = (time.perf_counter() - start) * 1000
        times_ms.append(elapsed_ms)
        print(f"  Run {i + 1}: {elapsed_ms:.1f} ms")
    return times_ms


def _print_summary(times_ms):
    print(f"  Median: {statistics.median(times_ms):.1f} ms")
    print(f"  Mean:   {statistics.mean(times_ms):.1f} ms")
    if len(times_ms) > 1:
        print(f"  Stdev:  {statistics.stdev(times_ms):.1f} ms")


def main():
    parser = argparse.ArgumentParser(
        description="Benchmark treetop grid analysis"
    )
    parser.add_argument(
        "-n",
        "--iterations",
        type=int,
        default=3,
        help="Number of iterations (default: 3)",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=99,
        help="Grid side length (default: 99)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Seed for the synthetic height map (default: 0)",
    )
    parser.add_argument(
        "--dump",
        metavar="PATH",
        help="Write the synthetic height map to PATH",
    )
    args = parser.parse_args()

    heights = random_forest(args.seed, args.size)
    if args.dump:
        Path(args.dump).write_text(format_height_grid(heights) + "\n")
        print(f"Height map written to {args.dump}")

    print(f"Benchmark: {args.size}x{args.size} grid, seed={args.seed}")
    print(f"Iterations: {args.iterations}")
    print()

    # Warmup
    print("Warmup...", end=" ", flush=True)
    compute_visibility(heights)
    compute_scenic_scores(heights)
    print("done")

    for name, fn in (
        ("visibility", compute_visibility),
        ("scenic scores", compute_scenic_scores),
    ):
        print(f"\n{name}:")
        _print_summary(_time_ms(fn, heights, args.iterations))


if __name__ == "__main__":
    main()
