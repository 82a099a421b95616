"""Immutable rectangular grids with row, column and coordinate views.

Every grid in this package (tree heights, per-direction visibility, scenic
scores) is a ``Grid``: a flat row-major buffer plus its ``height`` and
``width``. The buffer is a read-only numpy array, so a grid never changes
after construction; anything that looks like a transformation (reversing a
row, transposing columns) builds a new list or a new grid.

Two construction paths exist and are equivalent:

  from_rows      Concatenate complete rows in order.
  from_columns   Transpose complete columns, so that
                 ``grid.row(y)[x] == columns[x][y]``.

Accessors return plain Python scalars and fresh lists rather than numpy
views. Callers can reverse or slice what they get back without affecting the
grid. ``as_array()`` is the one exception: it exposes a read-only 2D view for
vectorized reductions (union, count, max).
"""

from __future__ import annotations

from typing import Generic, Iterable, Iterator, Sequence, TypeVar

import numpy as np
from numpy.typing import DTypeLike

T = TypeVar("T")

Coordinate = tuple[int, int]  # (x, y)


class ShapeError(ValueError):
    """Raised when values cannot form a rectangular grid of the given shape."""


class Coordinates:
    """Row-major ``(x, y)`` pairs of a ``height`` x ``width`` grid.

    Lazy and restartable: each ``iter()`` starts again from ``(0, 0)``.
    """

    def __init__(self, height: int, width: int) -> None:
        self._height = height
        self._width = width

    def __iter__(self) -> Iterator[Coordinate]:
        for y in range(self._height):
            for x in range(self._width):
                yield (x, y)

    def __len__(self) -> int:
        return self._height * self._width


class Grid(Generic[T]):
    """Immutable row-major grid of one scalar element type."""

    __slots__ = ("_values", "_height", "_width")

    def __init__(
        self,
        values: Iterable[T],
        height: int,
        width: int,
        dtype: DTypeLike = None,
    ) -> None:
        if height < 0 or width < 0:
            raise ShapeError(
                f"Grid dimensions must be non-negative, got {height}x{width}"
            )
        try:
            arr = np.array(list(values), dtype=dtype)
        except ValueError as e:
            raise ShapeError(
                f"Values must be a flat sequence of scalars: {e}"
            ) from e
        if arr.ndim != 1:
            raise ShapeError(
                f"Values must be a flat sequence of scalars, got {arr.ndim} "
                f"dimensions"
            )
        if arr.size != height * width:
            raise ShapeError(
                f"Expected {height * width} values for a {height}x{width} "
                f"grid, got {arr.size}"
            )
        arr.setflags(write=False)
        self._values = arr
        self._height = height
        self._width = width

    @staticmethod
    def from_rows(
        rows: Sequence[Sequence[T]], dtype: DTypeLike = None
    ) -> Grid[T]:
        if not rows:
            return Grid([], 0, 0, dtype)
        width = len(rows[0])
        for i, row in enumerate(rows):
            if len(row) != width:
                raise ShapeError(
                    f"Row {i} has length {len(row)}, expected {width}"
                )
        values = [v for row in rows for v in row]
        return Grid(values, len(rows), width, dtype)

    @staticmethod
    def from_columns(
        columns: Sequence[Sequence[T]], dtype: DTypeLike = None
    ) -> Grid[T]:
        if not columns:
            return Grid([], 0, 0, dtype)
        height = len(columns[0])
        for i, column in enumerate(columns):
            if len(column) != height:
                raise ShapeError(
                    f"Column {i} has length {len(column)}, expected {height}"
                )
        values = [column[y] for y in range(height) for column in columns]
        return Grid(values, height, len(columns), dtype)

    @property
    def height(self) -> int:
        return self._height

    @property
    def width(self) -> int:
        return self._width

    @property
    def shape(self) -> tuple[int, int]:
        return (self._height, self._width)

    @property
    def dtype(self) -> np.dtype:
        return self._values.dtype

    def values(self) -> list[T]:
        """Flat row-major copy of every element."""
        return self._values.tolist()

    def as_array(self) -> np.ndarray:
        """Read-only ``(height, width)`` view of the backing buffer."""
        return self._values.reshape(self._height, self._width)

    def row(self, y: int) -> list[T]:
        if not 0 <= y < self._height:
            raise IndexError(
                f"Row {y} out of range for grid of height {self._height}"
            )
        start = y * self._width
        return self._values[start : start + self._width].tolist()

    def column(self, x: int) -> list[T]:
        if not 0 <= x < self._width:
            raise IndexError(
                f"Column {x} out of range for grid of width {self._width}"
            )
        return self._values[x :: self._width].tolist()

    def rows(self) -> list[list[T]]:
        return [self.row(y) for y in range(self._height)]

    def columns(self) -> list[list[T]]:
        return [self.column(x) for x in range(self._width)]

    def at(self, x: int, y: int) -> T | None:
        """Element at ``(x, y)``, or None when off the grid."""
        if 0 <= x < self._width and 0 <= y < self._height:
            return self._values[y * self._width + x].item()
        return None

    def coordinates(self) -> Coordinates:
        return Coordinates(self._height, self._width)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape and bool(
            np.array_equal(self._values, other._values)
        )

    __hash__ = None  # type: ignore[assignment]

    def __len__(self) -> int:
        return self._values.size

    def __repr__(self) -> str:
        return (
            f"Grid(height={self._height}, width={self._width}, "
            f"dtype={self._values.dtype})"
        )
