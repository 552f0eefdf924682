"""Coordinate helpers and neighbourhood iteration over n-dimensional grids.

Points on a grid are addressed either by a coordinate list or by a single
flat index, with the dimensions read as a mixed radix (the last dimension
varies fastest).
"""

from __future__ import annotations

import random
from collections.abc import Iterator, Sequence
from itertools import product
from typing import TypeVar

T = TypeVar("T")


def sample(
    population: Sequence[T], n_choices: int, rng: random.Random | None = None
) -> list[T]:
    """Pick ``n_choices`` distinct items from ``population``, keeping their order.

    Each item is considered once and chosen with probability
    ``remaining_needed / remaining_items``, so the result is a uniform sample
    that preserves the original ordering.
    """
    if n_choices == 0:
        return []
    if n_choices > len(population):
        raise ValueError("population size must be greater than number of choices")
    rng = rng if rng is not None else random.Random()
    total = len(population)
    chosen: list[T] = []
    for position, item in enumerate(population):
        if rng.randrange(total - position) < n_choices - len(chosen):
            chosen.append(item)
            if len(chosen) == n_choices:
                break
    return chosen


def _check_dimensions(dimensions: Sequence[int]) -> None:
    if not dimensions:
        raise ValueError("dimensions must not be empty")
    if any(dim <= 0 for dim in dimensions):
        raise ValueError(f"dimensions must be positive: {list(dimensions)}")


def coordinates_from_index(index: int, dimensions: Sequence[int]) -> list[int]:
    """Translate a flat index into coordinates in the given coordinate system."""
    _check_dimensions(dimensions)
    if index < 0:
        raise ValueError(f"index must be non-negative: {index}")
    coordinates = [0] * len(dimensions)
    shifted = index
    for axis in range(len(dimensions) - 1, 0, -1):
        shifted, coordinates[axis] = divmod(shifted, dimensions[axis])
    if shifted >= dimensions[0]:
        raise ValueError(f"index {index} is outside dimensions {list(dimensions)}")
    coordinates[0] = shifted
    return coordinates


def index_from_coordinates(
    coordinates: Sequence[int], dimensions: Sequence[int]
) -> int:
    """Translate coordinates into a flat index in the given coordinate system."""
    if len(coordinates) != len(dimensions):
        raise ValueError("coordinates and dimensions must have the same length")
    index = 0
    for coordinate, dim in zip(coordinates, dimensions):
        if not 0 <= coordinate < dim:
            raise ValueError(
                f"coordinate {coordinate} is outside the range [0, {dim})"
            )
        index = index * dim + coordinate
    return index


class CoordinateConverter2D:
    """Converts between flat indices and (row, column) pairs of a 2-D grid."""

    def __init__(self, nrows: int, ncols: int) -> None:
        if ncols <= 0:
            raise ValueError("ncols must be positive")
        self.nrows = nrows
        self.ncols = ncols

    def to_row(self, index: int) -> int:
        return index // self.ncols

    def to_col(self, index: int) -> int:
        return index % self.ncols

    def to_index(self, row: int, col: int) -> int:
        return row * self.ncols + col


class CoordinateConverterND:
    """Converts between flat indices and coordinates of an n-dimensional grid."""

    def __init__(self, dimensions: Sequence[int]) -> None:
        _check_dimensions(dimensions)
        self.dimensions = list(dimensions)
        bounds: list[int] = []
        stride = 1
        for dim in reversed(self.dimensions):
            bounds.insert(0, stride)
            stride *= dim
        self.bounds = bounds

    def to_coord(self, index: int) -> list[int]:
        return [
            (index // bound) % dim for bound, dim in zip(self.bounds, self.dimensions)
        ]

    def to_index(self, coord: Sequence[int]) -> int:
        return sum(c * bound for c, bound in zip(coord, self.bounds))


class Neighborhood:
    """All points within ``radius`` of a centre, truncated at the grid edges.

    The neighbourhood is the hypercube ``[centre - radius, centre + radius]``
    in every dimension, the centre included. Points are yielded as flat
    indices, last dimension varying fastest.
    """

    def __init__(
        self, center_index: int, radius: int, dimensions: Sequence[int]
    ) -> None:
        self.dimensions = list(dimensions)
        self.center = coordinates_from_index(center_index, self.dimensions)
        self.radius = radius

    def __iter__(self) -> Iterator[int]:
        axes = [
            range(max(c - self.radius, 0), min(c + self.radius, dim - 1) + 1)
            for c, dim in zip(self.center, self.dimensions)
        ]
        for coordinates in product(*axes):
            yield index_from_coordinates(coordinates, self.dimensions)


class WrappingNeighborhood:
    """Like :class:`Neighborhood`, but wrapping around at the grid edges.

    No point is yielded twice, even when the radius exceeds the grid size.
    """

    def __init__(
        self, center_index: int, radius: int, dimensions: Sequence[int]
    ) -> None:
        self.dimensions = list(dimensions)
        self.center = coordinates_from_index(center_index, self.dimensions)
        self.radius = radius

    def __iter__(self) -> Iterator[int]:
        offsets = [
            range(-self.radius, min(self.radius, dim - self.radius - 1) + 1)
            for dim in self.dimensions
        ]
        for offset in product(*offsets):
            coordinates = [
                (c + o) % dim for c, o, dim in zip(self.center, offset, self.dimensions)
            ]
            yield index_from_coordinates(coordinates, self.dimensions)