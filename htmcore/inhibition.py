"""Column inhibition: choosing which columns win the competition."""

from __future__ import annotations

from collections.abc import Sequence

from htmcore.neighbours import Ranges, iter_neighbours

Winner = tuple[int, float]


def is_winner(
    score: float,
    winners: Sequence[Winner],
    num_winners: int,
    stimulus_threshold: float,
) -> bool:
    """Tell whether ``score`` earns a place among ``num_winners`` winners.

    ``winners`` is ordered by descending score.
    """
    if score < stimulus_threshold:
        return False
    if len(winners) < num_winners:
        return True
    return score >= winners[num_winners - 1][1]


def add_to_winners(index: int, score: float, winners: list[Winner]) -> None:
    """Insert ``(index, score)`` into ``winners``, keeping descending order.

    A new entry goes ahead of entries with an equal score.
    """
    position = next(
        (pos for pos, (_, other) in enumerate(winners) if score >= other),
        len(winners),
    )
    winners.insert(position, (index, score))


def inhibit_global(
    overlaps: Sequence[float], density: float, stimulus_threshold: float
) -> list[int]:
    """Return the columns with the highest overlaps across the whole layer."""
    num_desired = int(density * len(overlaps))
    if num_desired <= 0:
        raise ValueError("density is too low: no column could become active")
    winners: list[Winner] = []
    for index, score in enumerate(overlaps):
        if is_winner(score, winners, num_desired, stimulus_threshold):
            add_to_winners(index, score, winners)
    return [index for index, _ in winners[:num_desired]]


def inhibit_local(
    overlaps: Sequence[float],
    density: float,
    stimulus_threshold: float,
    neighbours: Sequence[Ranges],
) -> list[int]:
    """Return the columns that win within their own neighbourhoods.

    On equal overlap, a neighbour that is already active counts as bigger.
    """
    active: list[int] = []
    is_active = [False] * len(overlaps)
    for column, score in enumerate(overlaps):
        if score < stimulus_threshold:
            continue
        num_neighbours = 0
        num_bigger = 0
        for neighbour in iter_neighbours(neighbours[column]):
            if neighbour == column:
                continue
            num_neighbours += 1
            difference = overlaps[neighbour] - score
            if difference > 0 or (difference == 0 and is_active[neighbour]):
                num_bigger += 1
        num_active = int(0.5 + density * (num_neighbours + 1))
        if num_bigger < num_active:
            active.append(column)
            is_active[column] = True
    return active


def kth_score(overlaps: Sequence[float], ranges: Ranges, k: int) -> float:
    """Return the ``k``-th largest overlap among the columns in ``ranges``."""
    if k < 1:
        raise ValueError(f"k must be >= 1, got {k}")
    scores = sorted((overlaps[i] for i in iter_neighbours(ranges)), reverse=True)
    if k > len(scores):
        raise IndexError(f"k = {k} exceeds the {len(scores)} neighbours")
    return scores[k - 1]