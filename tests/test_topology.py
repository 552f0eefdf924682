import math
import random

import pytest

from htmcore.topology import (
    CoordinateConverter2D,
    CoordinateConverterND,
    Neighborhood,
    WrappingNeighborhood,
    coordinates_from_index,
    index_from_coordinates,
    sample,
)


# ---------------------------------------------------------------- sample


def test_sample_zero_choices_is_empty():
    assert sample([1, 2, 3], 0, random.Random(1)) == []


def test_sample_too_many_choices_raises():
    with pytest.raises(ValueError):
        sample([1, 2, 3], 4, random.Random(1))


def test_sample_all_returns_whole_population():
    population = list(range(10))
    assert sample(population, 10, random.Random(7)) == population


@pytest.mark.parametrize("seed", range(5))
def test_sample_is_ordered_distinct_subset(seed):
    population = list(range(50, 100))
    chosen = sample(population, 12, random.Random(seed))
    assert len(chosen) == 12
    assert len(set(chosen)) == 12
    assert set(chosen) <= set(population)
    assert chosen == sorted(chosen)


def test_sample_is_reproducible_with_seed():
    population = list(range(100))
    first = sample(population, 20, random.Random(42))
    second = sample(population, 20, random.Random(42))
    assert len(first) == 20
    assert len(set(first)) == 20
    assert set(first) <= set(population)
    assert first == sorted(first)
    assert second == first


# ------------------------------------------------------ index conversions


@pytest.mark.parametrize("dimensions", [[7], [4, 5], [2, 3, 4]])
def test_index_coordinate_round_trip(dimensions):
    total = math.prod(dimensions)
    for index in range(total):
        coords = coordinates_from_index(index, dimensions)
        assert len(coords) == len(dimensions)
        assert all(0 <= c < d for c, d in zip(coords, dimensions))
        assert index_from_coordinates(coords, dimensions) == index


def test_last_dimension_varies_fastest():
    assert coordinates_from_index(1, [3, 4]) == [0, 1]
    assert index_from_coordinates([1, 0], [3, 4]) == 4


def test_coordinates_from_index_out_of_range():
    with pytest.raises(ValueError):
        coordinates_from_index(12, [3, 4])


def test_index_from_coordinates_out_of_range():
    with pytest.raises(ValueError):
        index_from_coordinates([3, 0], [3, 4])


def test_index_from_coordinates_length_mismatch():
    with pytest.raises(ValueError):
        index_from_coordinates([1], [3, 4])


def test_converter_nd_matches_free_functions():
    dims = [3, 5, 2]
    conv = CoordinateConverterND(dims)
    for index in range(math.prod(dims)):
        coord = conv.to_coord(index)
        assert coord == coordinates_from_index(index, dims)
        assert conv.to_index(coord) == index


def test_converter_2d_round_trip():
    conv = CoordinateConverter2D(4, 6)
    for index in range(24):
        row, col = conv.to_row(index), conv.to_col(index)
        assert 0 <= col < 6
        assert conv.to_index(row, col) == index


# ---------------------------------------------------------- neighbourhoods


def _chebyshev(a, b):
    return max(abs(x - y) for x, y in zip(a, b))


def test_neighborhood_one_dimensional_interior():
    assert list(Neighborhood(5, 2, [10])) == [3, 4, 5, 6, 7]


@pytest.mark.parametrize(
    "center,radius,dims",
    [(0, 2, [10]), (9, 3, [10]), (13, 1, [5, 5]), (0, 2, [4, 6]), (23, 10, [4, 6])],
)
def test_neighborhood_invariants(center, radius, dims):
    points = list(Neighborhood(center, radius, dims))
    center_coords = coordinates_from_index(center, dims)
    assert center in points
    assert len(points) == len(set(points))
    assert points == sorted(points)
    for p in points:
        assert _chebyshev(coordinates_from_index(p, dims), center_coords) <= radius
    expected_count = math.prod(
        min(c + radius, d - 1) - max(c - radius, 0) + 1
        for c, d in zip(center_coords, dims)
    )
    assert len(points) == expected_count


def test_neighborhood_large_radius_covers_grid():
    dims = [3, 4]
    assert sorted(Neighborhood(5, 100, dims)) == list(range(12))


def test_wrapping_neighborhood_wraps_at_edge():
    assert list(WrappingNeighborhood(0, 1, [10])) == [9, 0, 1]


@pytest.mark.parametrize(
    "center,radius,dims",
    [(0, 2, [10]), (9, 3, [10]), (0, 1, [5, 5]), (7, 2, [3, 4]), (0, 4, [5])],
)
def test_wrapping_neighborhood_invariants(center, radius, dims):
    points = list(WrappingNeighborhood(center, radius, dims))
    assert center in points
    assert len(points) == len(set(points))
    assert all(0 <= p < math.prod(dims) for p in points)
    assert len(points) == math.prod(min(2 * radius + 1, d) for d in dims)


def test_wrapping_neighborhood_huge_radius_has_no_duplicates():
    dims = [3, 3]
    points = list(WrappingNeighborhood(4, 50, dims))
    assert sorted(points) == list(range(9))


def test_neighborhood_rejects_center_outside_grid():
    with pytest.raises(ValueError):
        Neighborhood(10, 1, [10])
    with pytest.raises(ValueError):
        WrappingNeighborhood(10, 1, [10])