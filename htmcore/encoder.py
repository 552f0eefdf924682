"""Scalar encoder producing sparse binary representations of numbers.

Nearby values share active bits: the range ``[min_value, max_value]`` is cut
into ``bucket_num`` buckets, and a value falling into bucket ``i`` switches
on the ``w`` consecutive bits starting at position ``i``.
"""

from __future__ import annotations

import math
from collections.abc import Mapping

_CONFIG_KEYS = ("w", "minValue", "maxValue", "bucketNum", "clipInput")


class ScalarEncoder:
    """Encodes scalars into fixed-width binary vectors with ``w`` active bits."""

    def __init__(
        self,
        w: int,
        min_value: float,
        max_value: float,
        bucket_num: int,
        clip_input: bool,
    ) -> None:
        if w <= 0:
            raise ValueError(f"w must be > 0, got {w}")
        if bucket_num <= 0:
            raise ValueError(f"bucket_num must be > 0, got {bucket_num}")
        if min_value >= max_value:
            raise ValueError(
                f"min_value must be < max_value, got min_value={min_value} "
                f"max_value={max_value}"
            )
        self.w = w
        self.min_value = float(min_value)
        self.max_value = float(max_value)
        self.clip_input = clip_input
        self._bucket_num = bucket_num
        self._width = bucket_num + w - 1
        self._last_bucket_idx = 0

    @classmethod
    def from_config(cls, config: Mapping[str, str]) -> ScalarEncoder:
        """Build an encoder from a configuration section of string values."""
        missing = [key for key in _CONFIG_KEYS if key not in config]
        if missing:
            raise ValueError(f"config is not complete, missing: {', '.join(missing)}")
        return cls(
            w=int(config["w"]),
            min_value=float(config["minValue"]),
            max_value=float(config["maxValue"]),
            bucket_num=int(config["bucketNum"]),
            clip_input=config["clipInput"] == "true",
        )

    def encode(self, value: float) -> list[int]:
        """Return the binary encoding of ``value`` and remember its bucket."""
        if not self.min_value <= value <= self.max_value:
            if not self.clip_input:
                raise ValueError(
                    f"input ({value}) out of range "
                    f"[{self.min_value}, {self.max_value}]"
                )
            value = self.min_value if value < self.min_value else self.max_value

        span = self.max_value - self.min_value
        offset = value - self.min_value
        bucket = math.floor(self._bucket_num * offset / span)
        if offset == span:
            bucket -= 1
        self._last_bucket_idx = bucket

        bits = [0] * self._width
        end = min(self.w + bucket, self._width)
        bits[bucket:end] = [1] * (end - bucket)
        return bits

    def decode(self, bucket_idx: int) -> float:
        """Return the lower bound of the value range covered by a bucket."""
        if not 0 <= bucket_idx < self._bucket_num:
            raise IndexError(
                f"bucket index = {bucket_idx} is out of range "
                f"[0, {self._bucket_num - 1}]"
            )
        return (
            bucket_idx * (self.max_value - self.min_value) / self._bucket_num
            + self.min_value
        )

    @property
    def output_width(self) -> int:
        """Number of bits in every encoding."""
        return self._width

    @property
    def bucket_num(self) -> int:
        """Number of buckets the value range is split into."""
        return self._bucket_num

    @property
    def last_bucket_idx(self) -> int:
        """Bucket of the most recently encoded value."""
        return self._last_bucket_idx

    def describe(self) -> str:
        """Return a readable listing of the encoder's parameters."""
        rows = [
            ("w", self.w),
            ("minValue", self.min_value),
            ("maxValue", self.max_value),
            ("bucketNum", self._bucket_num),
            ("n", self._width),
            ("clipInput", self.clip_input),
        ]
        lines = ["------------ ScalarEncoder Parameters ------------------"]
        lines.extend(f"{name:<28}= {value}" for name, value in rows)
        return "\n".join(lines)