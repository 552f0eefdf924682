import pytest

from htmcore.neighbours import iter_neighbours, map_index, wrapped_ranges


def test_wrapped_ranges_left_edge_splits_in_two():
    assert wrapped_ranges(0, 1, 10, 2) == [(range(0, 3), range(8, 10))]


def test_wrapped_ranges_interior_is_single_range():
    result = wrapped_ranges(5, 6, 10, 2)
    assert result == [(range(3, 8),)]


@pytest.mark.parametrize("size,radius", [(10, 2), (7, 1), (12, 3)])
def test_wrapped_ranges_cover_the_ring_neighbourhood(size, radius):
    result = wrapped_ranges(0, size, size, radius)
    assert len(result) == size
    for index, ranges in enumerate(result):
        neighbours = list(iter_neighbours(ranges))
        assert len(neighbours) == 2 * radius + 1
        expected = {(index + d) % size for d in range(-radius, radius + 1)}
        assert set(neighbours) == expected


def test_map_index_wide_radius_covers_everything():
    result = map_index(4, 5, 2)
    assert len(result) == 4
    for ranges in result:
        assert list(iter_neighbours(ranges)) == list(range(5))


def test_map_index_equal_sizes_matches_wrapped_ranges():
    assert map_index(9, 9, 1) == wrapped_ranges(0, 9, 9, 1)


def test_map_index_fewer_targets_reuses_and_centres():
    source, target, radius = 11, 4, 1
    result = map_index(source, target, radius)
    assert len(result) == source
    block = wrapped_ranges(0, target, target, radius)
    assert result[:target] == block
    assert result[target:2 * target] == block
    remain = source % target
    start = (target - remain) // 2
    assert result[2 * target:] == wrapped_ranges(start, start + remain, target, radius)


def test_map_index_more_targets_than_sources_is_empty():
    assert map_index(5, 8, 1) == []


def test_map_index_unfair_mapping_raises():
    with pytest.raises(ValueError):
        map_index(2, 20, 1)


def test_iter_neighbours_chains_ranges():
    assert list(iter_neighbours((range(0, 2), range(7, 9)))) == [0, 1, 7, 8]