"""Command-line demonstrations of the encoder and the spatial pooler."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from typing import TextIO

from htmcore.encoder import ScalarEncoder
from htmcore.helpers import format_coded
from htmcore.spatial_pooler import SpatialPooler


def _stream(w: int, min_value: float, max_value: float, gap: float):
    """Build an encoder over evenly spaced values and return it with the values."""
    bucket_num = int((max_value - min_value) / gap + 1)
    encoder = ScalarEncoder(w, min_value, max_value, bucket_num, True)
    values = [min_value + gap * i for i in range(bucket_num)]
    return encoder, values


def run_encoder_demo(out: TextIO | None = None) -> list[list[int]]:
    """Encode values 1.0 to 10.0 in steps of 0.1 and print every encoding.

    Returns the encodings in input order.
    """
    out = out if out is not None else sys.stdout
    encoder, values = _stream(5, 1.0, 10.0, 0.1)
    print(encoder.describe(), file=out)
    encodings = []
    for value in values:
        bits = encoder.encode(value)
        encodings.append(bits)
        out.write(format_coded(bits, len(bits)))
    return encodings


def run_spatial_pooler_demo(
    out: TextIO | None = None, seed: int | None = None
) -> list[list[int]]:
    """Feed encoded values 1.0 to 2.0 through a locally inhibited spatial pooler.

    Prints the pooler's parameters before and after learning, and the active
    columns of every step. Returns the active-column vectors in input order.
    """
    out = out if out is not None else sys.stdout
    encoder, values = _stream(5, 1.0, 2.0, 0.1)
    print(encoder.describe(), file=out)

    pooler = SpatialPooler(
        input_dimensions=[encoder.output_width],
        column_dimensions=[50],
        potential_radius=3,
        potential_pct=0.5,
        global_inhibition=False,
        local_area_density=0.3,
        num_active_columns_per_inh_area=-1,
        stimulus_threshold=0,
        syn_perm_inactive_dec=0.008,
        syn_perm_active_inc=0.05,
        syn_perm_connected=0.2,
        min_pct_overlap_duty_cycles=0.001,
        duty_cycle_period=1000,
        boost_strength=0.1,
        seed=seed,
    )
    print(pooler.describe(), file=out)

    results = []
    for value in values:
        active_vector = pooler.compute(encoder.encode(value), learn=True)
        results.append(active_vector)
        active = [index for index, flag in enumerate(active_vector) if flag]
        print(" ".join(map(str, active)), file=out)
        print(f"activeColumns size : {len(active)}", file=out)

    print(pooler.describe(), file=out)
    print(file=out)
    return results


def main(argv: Sequence[str] | None = None) -> int:
    """Run one of the demonstrations; the spatial pooler by default."""
    parser = argparse.ArgumentParser(
        prog="htmcore", description="Run an HTM demonstration."
    )
    parser.add_argument(
        "demo",
        nargs="?",
        choices=("encoder", "spatial-pooler"),
        default="spatial-pooler",
        help="which demonstration to run",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="seed for the random generator"
    )
    args = parser.parse_args(argv)
    if args.demo == "encoder":
        run_encoder_demo(sys.stdout)
    else:
        run_spatial_pooler_demo(sys.stdout, seed=args.seed)
    return 0


if __name__ == "__main__":
    sys.exit(main())