"""Parse tree-height maps from text.

The input format is one line per grid row and one ASCII digit (0-9) per
tree. Leading and trailing whitespace around the whole block is ignored;
whitespace inside it is not.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from treetop.grid import Grid

logger = logging.getLogger(__name__)

HeightGrid = Grid[int]

HEIGHT_DTYPE = np.uint8
_DIGITS = "0123456789"


class ParseError(ValueError):
    """Raised when text is not a valid height map.

    ``line`` and ``column`` are 1-based and point at the offending character
    when there is one.
    """

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ) -> None:
        if line is not None and column is not None:
            message = f"line {line}, column {column}: {message}"
        super().__init__(message)
        self.line = line
        self.column = column


def _parse_line(line: str, line_number: int) -> list[int]:
    row: list[int] = []
    for column_number, ch in enumerate(line, start=1):
        if ch not in _DIGITS:
            raise ParseError(
                f"expected a digit 0-9, got {ch!r}", line_number, column_number
            )
        row.append(ord(ch) - ord("0"))
    return row


def parse_height_grid(text: str) -> HeightGrid:
    """Parse a block of digit lines into a height grid.

    Raises ParseError for empty input or a non-digit character, and
    ShapeError when lines differ in length.
    """
    lines = text.strip().splitlines()
    if not lines:
        raise ParseError("height map is empty")
    rows = [_parse_line(line, n) for n, line in enumerate(lines, start=1)]
    heights = Grid.from_rows(rows, dtype=HEIGHT_DTYPE)
    logger.debug("Parsed %dx%d height map", heights.height, heights.width)
    return heights


def load_height_grid(path: str | Path) -> HeightGrid:
    """Read and parse a height map file.

    Bytes that are not valid UTF-8 raise ParseError pointing at the first
    bad byte.
    """
    with open(path, "rb") as f:
        data = f.read()
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        line_start = data.rfind(b"\n", 0, e.start) + 1
        raise ParseError(
            f"invalid UTF-8 byte {data[e.start:e.start + 1]!r}",
            data.count(b"\n", 0, e.start) + 1,
            e.start - line_start + 1,
        ) from e
    logger.debug("Read %d characters from %s", len(text), path)
    return parse_height_grid(text)


def format_height_grid(heights: HeightGrid) -> str:
    """Render a height grid back to its text form, one line per row."""
    return "\n".join(
        "".join(str(h) for h in row) for row in heights.rows()
    )
