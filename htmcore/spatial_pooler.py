"""Spatial pooler: turns binary input vectors into sparse column activations."""

from __future__ import annotations

import math
import random
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from htmcore.helpers import parse_uints
from htmcore.inhibition import inhibit_global, inhibit_local
from htmcore.neighbours import Ranges, iter_neighbours, map_index
from htmcore.topology import CoordinateConverterND, WrappingNeighborhood, sample


@dataclass
class Synapse:
    """A link from a column to one input bit, with its permanence."""

    source_input_index: int
    permanence: float = 0.0


def _product(values: Sequence[int]) -> int:
    return math.prod(values) if values else 1


def _round_half_away(value: float) -> int:
    return int(math.floor(value + 0.5))


class SpatialPooler:
    """Maps input bits to columns and picks the active columns by inhibition.

    Each column is connected to a random subset of the inputs around its
    centre. On every step the overlap of each column with the input is
    computed, optionally boosted, and the columns that win the inhibition
    become active. With learning on, permanences, duty cycles and boost
    factors are adapted.
    """

    _UPDATE_PERIOD = 10
    _INIT_CONNECTED_PCT = 0.5

    def __init__(
        self,
        input_dimensions: Sequence[int],
        column_dimensions: Sequence[int],
        potential_radius: int = 3,
        potential_pct: float = 0.5,
        global_inhibition: bool = True,
        local_area_density: float = -1.0,
        num_active_columns_per_inh_area: int = 10,
        stimulus_threshold: int = 0,
        syn_perm_inactive_dec: float = 0.008,
        syn_perm_active_inc: float = 0.05,
        syn_perm_connected: float = 0.1,
        min_pct_overlap_duty_cycles: float = 0.001,
        duty_cycle_period: int = 1000,
        boost_strength: float = 0.0,
        seed: int | None = None,
    ) -> None:
        self.input_dimensions = list(input_dimensions)
        self.column_dimensions = list(column_dimensions)
        self._num_inputs = _product(self.input_dimensions)
        self._num_columns = _product(self.column_dimensions)

        if self._num_columns <= 0:
            raise ValueError("the number of columns must be positive")
        if self._num_inputs <= 0:
            raise ValueError("the number of inputs must be positive")
        if len(self.input_dimensions) != len(self.column_dimensions):
            raise ValueError(
                "input_dimensions and column_dimensions must have the same length"
            )
        if not (
            num_active_columns_per_inh_area > 0
            or 0 < local_area_density <= 0.5
        ):
            raise ValueError(
                "either num_active_columns_per_inh_area must be > 0 or "
                "local_area_density must be in (0, 0.5]"
            )
        if not 0 < potential_pct <= 1:
            raise ValueError("potential_pct must be in (0, 1]")

        self.potential_radius = min(potential_radius, self._num_inputs)
        self.potential_pct = potential_pct
        self.global_inhibition = global_inhibition
        self.local_area_density = local_area_density
        self.num_active_columns_per_inh_area = num_active_columns_per_inh_area
        self.stimulus_threshold = stimulus_threshold
        self.syn_perm_inactive_dec = syn_perm_inactive_dec
        self.syn_perm_active_inc = syn_perm_active_inc
        self.syn_perm_connected = syn_perm_connected
        self.min_pct_overlap_duty_cycles = min_pct_overlap_duty_cycles
        self.duty_cycle_period = duty_cycle_period
        self.boost_strength = boost_strength
        self.iteration = 0
        self._rng = random.Random(seed)

        n = self._num_columns
        self._overlaps = [0] * n
        self._boosted_overlaps = [0.0] * n
        self._boost_factors = [1.0] * n
        self._active_duty_cycles = [0.0] * n
        self._overlap_duty_cycles = [0.0] * n
        self._min_overlap_duty_cycles = [0.0] * n
        self._active_columns: list[int] = []

        self._potential: list[list[Synapse]] = []
        self._connected: list[list[int]] = []
        for column in range(n):
            self._assign_synapses(self._map_potential(column))

        self.inhibition_radius = 0
        self._neighbours: list[Ranges] = []
        self._update_inhibition_radius()
        self._update_neighbours()

    @classmethod
    def from_config(
        cls, config: Mapping[str, str], seed: int | None = None
    ) -> SpatialPooler:
        """Build a spatial pooler from a configuration section of strings."""
        return cls(
            input_dimensions=parse_uints(config["inputDimensions"]),
            column_dimensions=parse_uints(config["columnDimensions"]),
            potential_radius=int(config["potentialRadius"]),
            potential_pct=float(config["potentialPct"]),
            global_inhibition=config["globalInhibition"] == "true",
            local_area_density=float(config["localAreaDensity"]),
            num_active_columns_per_inh_area=int(config["numActiveColumnsPerInhArea"]),
            stimulus_threshold=int(config["stimulusThreshold"]),
            syn_perm_inactive_dec=float(config["synPermInactiveDec"]),
            syn_perm_active_inc=float(config["synPermActiveInc"]),
            syn_perm_connected=float(config["synPermConnected"]),
            min_pct_overlap_duty_cycles=float(config["minPctOverlapDutyCycles"]),
            duty_cycle_period=int(config["dutyCyclePeriod"]),
            boost_strength=float(config["boostStrength"]),
            seed=seed,
        )

    @property
    def num_columns(self) -> int:
        """Number of columns in the pooler."""
        return self._num_columns

    @property
    def num_inputs(self) -> int:
        """Number of input bits the pooler expects."""
        return self._num_inputs

    def compute(self, input_vector: Sequence[int], learn: bool = True) -> list[int]:
        """Return a 0/1 vector marking the columns active for ``input_vector``."""
        if len(input_vector) != self._num_inputs:
            raise ValueError(
                f"input vector has {len(input_vector)} bits, "
                f"expected {self._num_inputs}"
            )
        self.iteration += 1
        self._calculate_overlaps(input_vector)

        if learn:
            self._boosted_overlaps = [
                overlap * factor
                for overlap, factor in zip(self._overlaps, self._boost_factors)
            ]
        else:
            self._boosted_overlaps = [float(overlap) for overlap in self._overlaps]

        active_vector = self._inhibit_columns()

        if learn:
            self._adapt_synapses()
            self._update_duty_cycles(active_vector)
            self._update_boost_factors()
            self._bump_up_weak_columns()
            if self.iteration % self._UPDATE_PERIOD == 0:
                self._update_inhibition_radius()
                self._update_neighbours()
                self._update_min_duty_cycles()
        return active_vector

    def describe(self) -> str:
        """Return a readable listing of the pooler's parameters."""
        rows = [
            ("iterationNum", self.iteration),
            ("numInputs", self._num_inputs),
            ("numColumns", self._num_columns),
            ("localAreaDensity", self.local_area_density),
            ("numActiveColumnsPerInhArea", self.num_active_columns_per_inh_area),
            ("potentialRadius", self.potential_radius),
            ("potentialPct", self.potential_pct),
            ("initConnectedPct", self._INIT_CONNECTED_PCT),
            ("globalInhibition", self.global_inhibition),
            ("inhibitionRadius", self.inhibition_radius),
            ("stimulusThreshold", self.stimulus_threshold),
            ("synPermActiveInc", self.syn_perm_active_inc),
            ("synPermInactiveDec", self.syn_perm_inactive_dec),
            ("synPermConnected", self.syn_perm_connected),
            ("minPctOverlapDutyCycles", self.min_pct_overlap_duty_cycles),
            ("dutyCyclePeriod", self.duty_cycle_period),
            ("boostStrength", self.boost_strength),
        ]
        lines = ["------------ SpatialPooler Parameters ------------------"]
        lines.extend(f"{name:<28}= {value}" for name, value in rows)
        return "\n".join(lines)

    def _map_column(self, column: int) -> int:
        column_coords = CoordinateConverterND(self.column_dimensions).to_coord(column)
        input_coords = [
            math.floor((coord + 0.5) * (in_dim / col_dim))
            for coord, in_dim, col_dim in zip(
                column_coords, self.input_dimensions, self.column_dimensions
            )
        ]
        return CoordinateConverterND(self.input_dimensions).to_index(input_coords)

    def _map_potential(self, column: int) -> list[int]:
        center = self._map_column(column)
        inputs = list(
            WrappingNeighborhood(center, self.potential_radius, self.input_dimensions)
        )
        num_potential = _round_half_away(len(inputs) * self.potential_pct)
        return sample(inputs, num_potential, self._rng)

    def _assign_synapses(self, receptive_field: Sequence[int]) -> None:
        connected_perm = self.syn_perm_connected
        potential: list[Synapse] = []
        connected: list[int] = []
        for index in receptive_field:
            if self._rng.random() <= self._INIT_CONNECTED_PCT:
                permanence = connected_perm + (1.0 - connected_perm) * self._rng.random()
                connected.append(index)
            else:
                permanence = connected_perm * self._rng.random()
            potential.append(Synapse(index, permanence))
        self._potential.append(potential)
        self._connected.append(connected)

    def _update_inhibition_radius(self) -> None:
        if self.global_inhibition:
            self.inhibition_radius = self._num_columns
            return
        avg_connected = sum(map(len, self._connected)) / self._num_columns
        columns_per_input = self._num_columns / self._num_inputs
        diameter = avg_connected * columns_per_input
        radius = max(1.0, (diameter - 1) / 2.0)
        self.inhibition_radius = _round_half_away(radius)

    def _update_neighbours(self) -> None:
        self._neighbours = map_index(
            self._num_columns, self._num_columns, self.inhibition_radius
        )

    def _calculate_overlaps(self, input_vector: Sequence[int]) -> None:
        self._overlaps = [
            sum(input_vector[index] for index in connected)
            for connected in self._connected
        ]

    def _inhibit_columns(self) -> list[int]:
        density = self.local_area_density
        if self.num_active_columns_per_inh_area > 0:
            area = int((2 * self.inhibition_radius + 1) ** len(self.column_dimensions))
            area = min(area, self._num_columns)
            density = min(self.num_active_columns_per_inh_area / area, 0.5)
        if self.global_inhibition or self.inhibition_radius > max(
            self.column_dimensions
        ):
            active = inhibit_global(
                self._boosted_overlaps, density, self.stimulus_threshold
            )
        else:
            active = inhibit_local(
                self._boosted_overlaps,
                density,
                self.stimulus_threshold,
                self._neighbours,
            )
        self._active_columns = active
        active_vector = [0] * self._num_columns
        for column in active:
            active_vector[column] = 1
        return active_vector

    def _adapt_synapses(self) -> None:
        for column in self._active_columns:
            for synapse in self._potential[column]:
                if synapse.permanence > self.syn_perm_connected:
                    synapse.permanence = min(
                        1.0, synapse.permanence + self.syn_perm_active_inc
                    )
                else:
                    synapse.permanence = max(
                        0.0, synapse.permanence - self.syn_perm_inactive_dec
                    )

    def _update_duty_cycles(self, active_vector: Sequence[int]) -> None:
        period = min(self.duty_cycle_period, self.iteration)
        self._active_duty_cycles = [
            (cycle * (period - 1) + (1.0 if overlap > 0 else 0.0)) / period
            for cycle, overlap in zip(self._active_duty_cycles, self._overlaps)
        ]
        self._overlap_duty_cycles = [
            (cycle * (period - 1) + (1.0 if active > 0 else 0.0)) / period
            for cycle, active in zip(self._overlap_duty_cycles, active_vector)
        ]

    def _update_boost_factors(self) -> None:
        window = 2 * self.inhibition_radius + 1
        for column, ranges in enumerate(self._neighbours):
            neighbour_mean = (
                sum(self._active_duty_cycles[i] for i in iter_neighbours(ranges))
                / window
            )
            self._boost_factors[column] = math.exp(
                self.boost_strength
                * (neighbour_mean - self._active_duty_cycles[column])
            )

    def _bump_up_weak_columns(self) -> None:
        for column, (cycle, minimum) in enumerate(
            zip(self._overlap_duty_cycles, self._min_overlap_duty_cycles)
        ):
            if cycle < minimum:
                self._increase_permanences(column, 0.1)

    def _update_min_duty_cycles(self) -> None:
        if self.global_inhibition:
            floor = self.min_pct_overlap_duty_cycles * max(self._overlap_duty_cycles)
            self._min_overlap_duty_cycles = [floor] * self._num_columns
            return
        self._min_overlap_duty_cycles = [
            self.min_pct_overlap_duty_cycles
            * max(self._overlap_duty_cycles[i] for i in iter_neighbours(ranges))
            for ranges in self._neighbours
        ]

    def _increase_permanences(self, column: int, inc_factor: float) -> None:
        for synapse in self._potential[column]:
            synapse.permanence += self.syn_perm_connected * inc_factor