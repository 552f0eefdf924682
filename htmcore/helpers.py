"""Small utilities: configuration files, data files and value parsing."""

from __future__ import annotations

import re
import sys
from collections.abc import Iterable, Mapping, Sequence
from os import PathLike
from typing import Dict, TextIO, Tuple, Union

Config = Dict[str, Dict[str, str]]
StrPath = Union[str, "PathLike[str]"]

_UINT = re.compile(r"[0-9]+")


def array_range(values: Sequence[float]) -> Tuple[float, float]:
    """Return ``(low, high)`` bounds for ``values``.

    ``high`` is the maximum extended by one average gap, so that the largest
    value falls strictly inside the range.
    """
    if len(values) < 2:
        raise ValueError("at least two values are needed to compute a range")
    low = min(values)
    high = max(values)
    return low, high + (high - low) / (len(values) - 1)


def format_coded(values: Iterable[object], per_line: int) -> str:
    """Lay out ``values`` separated by spaces, ``per_line`` values per line."""
    if per_line <= 0:
        raise ValueError("per_line must be positive")
    parts = []
    for count, value in enumerate(values, start=1):
        parts.append(f"{value} ")
        if count % per_line == 0:
            parts.append("\n")
    return "".join(parts)


def read_config(path: StrPath) -> Config:
    """Read an INI-style file into ``{section: {key: value}}``.

    Blank lines and lines starting with ``#`` are skipped; keys before the
    first section header go into the section named ``""``.
    """
    config: Config = {}
    section = ""
    with open(path, encoding="utf-8") as handle:
        for raw in handle:
            line = raw.rstrip("\n")
            if not line or line.startswith("#"):
                continue
            if len(line) >= 2 and line[0] == "[" and line[-1] == "]":
                section = line[1:-1]
                continue
            key, sep, value = line.partition("=")
            if sep:
                config.setdefault(section, {})[key.strip(" \t")] = value.strip(" \t")
    return config


def read_data(path: StrPath) -> list[float]:
    """Read all whitespace-separated numbers from a file."""
    with open(path, encoding="utf-8") as handle:
        tokens = handle.read().split()
    try:
        return [float(token) for token in tokens]
    except ValueError as err:
        raise ValueError("Input terminated by data mismatch.") from err


def open_input_stream(config: Mapping[str, str]) -> TextIO:
    """Return the input stream a configuration section selects.

    With ``flag`` set to ``"true"`` the file at ``path`` is opened;
    otherwise standard input is returned.
    """
    if config["flag"] == "true":
        return open(config["path"], encoding="utf-8")
    return sys.stdin


def parse_uints(text: str) -> list[int]:
    """Extract every unsigned integer written in ``text``."""
    return [int(match) for match in _UINT.findall(text)]