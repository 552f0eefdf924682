"""Neighbour ranges for columns laid out on a ring.

Every column's neighbourhood is stored as a tuple of at most two
half-open ranges. Two ranges are needed when the neighbourhood runs past one
edge and continues from the other.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from itertools import chain

Ranges = tuple[range, ...]


def wrapped_ranges(begin: int, end: int, size: int, radius: int) -> list[Ranges]:
    """Return the wrapped neighbour ranges of the indices ``begin..end-1``.

    Each index ``i`` maps to ``[i - radius, i + radius]`` on a ring of
    ``size`` positions, split into two ranges where it crosses an edge.
    """
    result: list[Ranges] = []
    for index in range(begin, end):
        left, right = index - radius, index + radius
        if left < 0:
            result.append((range(0, right + 1), range(size + left, size)))
        elif right >= size:
            result.append((range(left, size), range(0, right - size + 1)))
        else:
            result.append((range(left, right + 1),))
    return result


def map_index(source_size: int, target_size: int, radius: int) -> list[Ranges]:
    """Map each of ``source_size`` indices to ``2 * radius + 1`` target indices.

    When the neighbourhood is at least as wide as the target every source
    index covers the whole target. When there are fewer targets than
    sources, the targets are reused in turn and the leftover sources are
    centred on the target ring. More targets than sources yields no mapping.

    Raises ``ValueError`` when the sources cannot cover every target.
    """
    diameter = 2 * radius + 1
    if diameter >= target_size:
        return [(range(0, target_size),) for _ in range(source_size)]
    if diameter * source_size < target_size:
        raise ValueError(
            "(2 * radius + 1) * source_size < target_size: no fair mapping exists"
        )
    if target_size == source_size:
        return wrapped_ranges(0, target_size, target_size, radius)
    if target_size < source_size:
        cover_count, remain_count = divmod(source_size, target_size)
        block = wrapped_ranges(0, target_size, target_size, radius)
        result = block * cover_count
        start = (target_size - remain_count) // 2
        result.extend(wrapped_ranges(start, start + remain_count, target_size, radius))
        return result
    return []


def iter_neighbours(ranges: Iterable[range]) -> Iterator[int]:
    """Yield every index covered by ``ranges``, in order."""
    return chain.from_iterable(ranges)