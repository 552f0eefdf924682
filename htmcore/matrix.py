"""A small dense two-dimensional matrix of floats."""

from __future__ import annotations

import math
import random
from collections.abc import Iterable, Iterator, Sequence


class Matrix:
    """Row-major 2-D array of floats with a few linear-algebra operations."""

    def __init__(self, data: Iterable[Iterable[float]]) -> None:
        rows = [[float(value) for value in row] for row in data]
        cols = len(rows[0]) if rows else 0
        if any(len(row) != cols for row in rows):
            raise ValueError("all rows must have the same length")
        self._rows = rows
        self._cols = cols

    @classmethod
    def zeros(cls, rows: int, cols: int) -> Matrix:
        """Return a ``rows`` x ``cols`` matrix filled with zeros."""
        if rows < 0 or cols < 0:
            raise ValueError("matrix dimensions must be non-negative")
        matrix = cls([[0.0] * cols for _ in range(rows)])
        matrix._cols = cols
        return matrix

    @classmethod
    def from_row(cls, values: Sequence[float]) -> Matrix:
        """Return a one-row matrix holding ``values``."""
        return cls([values])

    def randomize(self, rng: random.Random | None = None) -> None:
        """Fill the matrix with samples of the standard normal distribution."""
        rng = rng if rng is not None else random.Random()
        for row in self._rows:
            row[:] = [rng.gauss(0.0, 1.0) for _ in row]

    def dot(self, other: Matrix) -> Matrix:
        """Return the matrix product ``self x other``."""
        if self._cols != other.shape[0]:
            raise ValueError("the shapes of the two matrices do not match")
        columns = list(zip(*other._rows))
        result = Matrix.zeros(self.shape[0], other.shape[1])
        for out_row, row in zip(result._rows, self._rows):
            out_row[:] = [sum(a * b for a, b in zip(row, col)) for col in columns]
        return result

    def softmax(self, axis: int) -> None:
        """Apply softmax in place, along each row (axis 0) or column (axis 1)."""
        if axis not in (0, 1):
            raise ValueError(f"axis must be 0 or 1, got {axis}")
        exps = [[math.exp(value) for value in row] for row in self._rows]
        if axis == 0:
            self._rows = [[value / sum(row) for value in row] for row in exps]
        else:
            totals = [sum(col) for col in zip(*exps)]
            self._rows = [
                [value / total for value, total in zip(row, totals)] for row in exps
            ]

    @property
    def shape(self) -> tuple[int, int]:
        """``(rows, columns)`` of the matrix."""
        return len(self._rows), self._cols

    def __getitem__(self, key: tuple[int, int]) -> float:
        row, col = key
        return self._rows[row][col]

    def __setitem__(self, key: tuple[int, int], value: float) -> None:
        row, col = key
        self._rows[row][col] = float(value)

    def __iter__(self) -> Iterator[tuple[float, ...]]:
        return (tuple(row) for row in self._rows)

    def _elementwise(self, other: Matrix, op) -> Matrix:
        if self.shape != other.shape:
            raise ValueError("the shapes of the two matrices do not match")
        result = Matrix(
            [[op(a, b) for a, b in zip(mine, theirs)]
             for mine, theirs in zip(self._rows, other._rows)]
        )
        result._cols = self._cols
        return result

    def __add__(self, other: Matrix) -> Matrix:
        return self._elementwise(other, lambda a, b: a + b)

    def __sub__(self, other: Matrix) -> Matrix:
        return self._elementwise(other, lambda a, b: a - b)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and self._rows == other._rows

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix({self._rows!r})"

    def __str__(self) -> str:
        return "\n".join(" ".join(f"{value:g}" for value in row) for row in self._rows)