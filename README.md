# htmcore

Building blocks for hierarchical temporal memory (HTM) in plain Python, with
no third-party dependencies.

- `htmcore.encoder.ScalarEncoder` turns a number into a binary vector of
  `output_width` bits with `w` consecutive active bits; nearby values share
  active bits. `decode(bucket_idx)` returns the lower bound of a bucket's
  value range, and `last_bucket_idx` holds the bucket of the last encoded
  value.
- `htmcore.spatial_pooler.SpatialPooler` maps an encoded input onto a 0/1
  vector of active columns, using global or local inhibition, and adapts
  synapse permanences, duty cycles and boost factors when learning.
- `htmcore.temporal_memory.TemporalMemory` takes a 0/1 vector of active
  columns per step, learns dendrite segments between cells, and returns the
  active cells of each step in ascending order.
- `htmcore.topology` converts between flat indices and grid coordinates
  (`coordinates_from_index`, `index_from_coordinates`,
  `CoordinateConverter2D`, `CoordinateConverterND`), iterates over
  neighbourhoods (`Neighborhood`, `WrappingNeighborhood`) and draws
  order-preserving random samples (`sample`).
- `htmcore.neighbours` and `htmcore.inhibition` hold the neighbour-range
  mapping and the column competition the spatial pooler uses.
- `htmcore.matrix.Matrix` is a small two-dimensional array of floats with
  `dot`, in-place `softmax`, `randomize`, `+` and `-`.
- `htmcore.helpers` reads INI-style configuration files (`read_config`) and
  whitespace-separated numeric data files (`read_data`), and offers
  `array_range`, `format_coded`, `parse_uints` and `open_input_stream`.

The encoder, spatial pooler and temporal memory accept an optional `seed`
(spatial pooler and temporal memory) so runs can be made reproducible.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Usage

```python
from htmcore.encoder import ScalarEncoder
from htmcore.spatial_pooler import SpatialPooler
from htmcore.temporal_memory import TemporalMemory

encoder = ScalarEncoder(5, 1.0, 2.0, 11, True)
bits = encoder.encode(1.3)
print(encoder.last_bucket_idx, encoder.decode(encoder.last_bucket_idx))

pooler = SpatialPooler(
    [encoder.output_width], [50],
    potential_radius=3,
    potential_pct=0.5,
    global_inhibition=False,
    local_area_density=0.3,
    num_active_columns_per_inh_area=-1,
    syn_perm_connected=0.2,
    boost_strength=0.1,
    seed=42,
)
columns = pooler.compute(bits, learn=True)

memory = TemporalMemory([pooler.num_columns], seed=42)
active_cells = memory.compute(columns, learn=True)
print(memory.number_of_cells, len(active_cells))
```

Components can also be built from a section of a configuration file:

```python
from htmcore.helpers import read_config
from htmcore.encoder import ScalarEncoder

config = read_config("config.txt")
encoder = ScalarEncoder.from_config(config["ScalarEncoder"])
```

A configuration file has `[Section]` headers and `key = value` lines; empty
lines and lines starting with `#` are ignored. `SpatialPooler.from_config`
and `TemporalMemory.from_config` read their own sections the same way.

## Demo

```
htmcore-demo
htmcore-demo encoder
htmcore-demo spatial-pooler --seed 42
```

`spatial-pooler` (the default) feeds encoded values from 1.0 to 2.0 through
a locally inhibited spatial pooler, printing its parameters before and after
learning and the active columns of each step. `encoder` prints the encodings
of the values 1.0 to 10.0 in steps of 0.1.

## What is not included

There is no classifier that turns the temporal memory's active cells into
predicted values, so the package does not forecast the next values of a
stream by itself; `ScalarEncoder.decode` only maps a bucket index you
already have back to a value.