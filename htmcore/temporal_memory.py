"""Temporal memory: learns sequences of column activations.

Each column holds a fixed number of cells. Cells grow dendrite segments whose
synapses point at cells that were winners one step earlier. A segment with
enough active connected synapses puts its cell into a predictive state; when
the column then becomes active only the predicted cells fire, otherwise the
whole column bursts.
"""

from __future__ import annotations

import math
import random
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from htmcore.helpers import parse_uints


@dataclass
class DendriteSynapse:
    """A synapse on a segment, listening to one presynaptic cell."""

    presynaptic_cell: int
    permanence: float


@dataclass
class Segment:
    """A dendrite segment attached to a cell."""

    cell: int
    synapses: list[DendriteSynapse] = field(default_factory=list)
    num_active_potential_synapses: int = 0


@dataclass
class Column:
    """A column's cells and the segments that predicted it on the last step."""

    cells: range
    active_segments: list[int] = field(default_factory=list)
    matching_segments: list[int] = field(default_factory=list)


class TemporalMemory:
    """Sequence memory over columns of cells with learned dendrite segments."""

    def __init__(
        self,
        column_dimensions: Sequence[int],
        cells_per_column: int = 32,
        activation_threshold: int = 13,
        initial_permanence: float = 0.21,
        connected_permanence: float = 0.50,
        learning_threshold: int = 10,
        permanence_increment: float = 0.10,
        permanence_decrement: float = 0.10,
        predicted_segment_decrement: float = 0.0,
        seed: int | None = None,
    ) -> None:
        self.column_dimensions = list(column_dimensions)
        if not self.column_dimensions or any(d <= 0 for d in self.column_dimensions):
            raise ValueError("column_dimensions must be a non-empty list of positives")
        if cells_per_column <= 0:
            raise ValueError("cells_per_column must be positive")

        self.num_columns = math.prod(self.column_dimensions)
        self.cells_per_column = cells_per_column
        self.activation_threshold = activation_threshold
        self.initial_permanence = initial_permanence
        self.connected_permanence = connected_permanence
        self.learning_threshold = learning_threshold
        self.permanence_increment = permanence_increment
        self.permanence_decrement = permanence_decrement
        self.predicted_segment_decrement = predicted_segment_decrement
        # Upper bound on active potential synapses a learning segment aims for;
        # None lets a segment grow towards every available winner cell.
        self.synapse_sample_size: int | None = None
        self.iteration = 0

        self._rng = random.Random(seed)
        self._learning = True

        self.columns = [
            Column(range(i * cells_per_column, (i + 1) * cells_per_column))
            for i in range(self.num_columns)
        ]
        self.segments: list[Segment] = []
        self._segments_per_cell = [0] * self.number_of_cells

        self._prev_active: set[int] = set()
        self._active: set[int] = set()
        self._winners: set[int] = set()
        self._candidates: set[int] = set()
        self._active_segments: list[int] = []
        self._matching_segments: list[int] = []

    @classmethod
    def from_config(
        cls, config: Mapping[str, str], seed: int | None = None
    ) -> TemporalMemory:
        """Build a temporal memory from a configuration section of strings."""
        return cls(
            column_dimensions=parse_uints(config["columnDimensions"]),
            cells_per_column=int(config["cellsPerColumn"]),
            activation_threshold=int(config["activationThreshold"]),
            initial_permanence=float(config["initialPermanence"]),
            connected_permanence=float(config["connectedPermanence"]),
            learning_threshold=int(config["LearningThreshold"]),
            permanence_increment=float(config["permanenceIncrement"]),
            permanence_decrement=float(config["permanenceDecrement"]),
            predicted_segment_decrement=float(config["predictedSegmentDecrement"]),
            seed=seed,
        )

    @property
    def number_of_cells(self) -> int:
        """Total number of cells over all columns."""
        return self.num_columns * self.cells_per_column

    def compute(self, active_columns: Sequence[int], learn: bool = True) -> list[int]:
        """Process one 0/1 column vector and return the active cells, ascending."""
        if len(active_columns) > self.num_columns:
            raise ValueError(
                f"got {len(active_columns)} column flags, "
                f"but there are only {self.num_columns} columns"
            )
        self._learning = learn
        self.iteration += 1

        for column, flag in zip(self.columns, active_columns):
            if flag:
                if column.active_segments:
                    self._activate_predicted_column(column)
                else:
                    self._burst_column(column)
            elif column.active_segments:
                self._punish_predicted_column(column)

        self._activate_dendrites()
        self._update_segments()
        result = sorted(self._active)
        self._update_cells()
        return result

    def _new_synapse_budget(self, segment: Segment) -> float:
        if self.synapse_sample_size is None:
            return math.inf
        return max(self.synapse_sample_size - segment.num_active_potential_synapses, 0)

    def _reinforce(self, segment: Segment) -> None:
        for synapse in segment.synapses:
            if synapse.presynaptic_cell in self._prev_active:
                synapse.permanence += self.permanence_increment
            else:
                synapse.permanence -= self.permanence_decrement

    def _activate_predicted_column(self, column: Column) -> None:
        for index in column.active_segments:
            segment = self.segments[index]
            self._active.add(segment.cell)
            self._winners.add(segment.cell)
            if self._learning:
                self._reinforce(segment)
                self._grow_synapses(segment, self._new_synapse_budget(segment))

    def _burst_column(self, column: Column) -> None:
        self._active.update(column.cells)
        learning_segment: Segment | None = None
        if column.matching_segments:
            learning_segment = self.segments[self._best_matching_segment(column)]
            winner = learning_segment.cell
        else:
            winner = self._least_used_cell(column)
            if self._learning:
                learning_segment = self._grow_new_segment(winner)
        self._winners.add(winner)
        if self._learning and learning_segment is not None:
            self._reinforce(learning_segment)
            self._grow_synapses(
                learning_segment, self._new_synapse_budget(learning_segment)
            )

    def _punish_predicted_column(self, column: Column) -> None:
        if not self._learning:
            return
        for index in column.matching_segments:
            for synapse in self.segments[index].synapses:
                if synapse.presynaptic_cell in self._prev_active:
                    synapse.permanence -= self.predicted_segment_decrement

    def _activate_dendrites(self) -> None:
        self._active_segments = []
        self._matching_segments = []
        for index, segment in enumerate(self.segments):
            connected = 0
            potential = 0
            for synapse in segment.synapses:
                if synapse.presynaptic_cell in self._active:
                    if synapse.permanence >= self.connected_permanence:
                        connected += 1
                    if synapse.permanence >= 0:
                        potential += 1
            if connected >= self.activation_threshold:
                self._active_segments.append(index)
            if potential >= self.learning_threshold:
                self._matching_segments.append(index)
            segment.num_active_potential_synapses = potential

    def _grow_new_segment(self, cell: int) -> Segment:
        segment = Segment(cell)
        self.segments.append(segment)
        self._segments_per_cell[cell] += 1
        return segment

    def _least_used_cell(self, column: Column) -> int:
        fewest = min(self._segments_per_cell[cell] for cell in column.cells)
        least_used = [
            cell for cell in column.cells if self._segments_per_cell[cell] == fewest
        ]
        return self._rng.choice(least_used)

    def _best_matching_segment(self, column: Column) -> int:
        return max(
            column.matching_segments,
            key=lambda index: self.segments[index].num_active_potential_synapses,
        )

    def _grow_synapses(self, segment: Segment, budget: float) -> None:
        while self._candidates and budget > 0:
            cell = self._rng.choice(sorted(self._candidates))
            self._candidates.discard(cell)
            if any(s.presynaptic_cell == cell for s in segment.synapses):
                continue
            segment.synapses.append(DendriteSynapse(cell, self.initial_permanence))
            budget -= 1

    def _update_segments(self) -> None:
        for column in self.columns:
            column.active_segments = []
            column.matching_segments = []
        for index in self._matching_segments:
            column = self.columns[self.segments[index].cell // self.cells_per_column]
            column.matching_segments.append(index)
        for index in self._active_segments:
            column = self.columns[self.segments[index].cell // self.cells_per_column]
            column.active_segments.append(index)

    def _update_cells(self) -> None:
        self._prev_active = self._active
        self._active = set()
        self._candidates = self._winners
        self._winners = set()