"""Synthetic integer columns for compression benchmarks."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Union

import numpy as np

PathLike = Union[str, Path]

DEFAULT_LENGTH = 1 << 28
NORMAL_STDDEV = 20.0

_MASK = 0xFFFFFFFF
_RAND_LIMIT = 1 << 31


def _check_length(length: int) -> None:
    if length <= 0:
        raise ValueError("length must be positive")


def uniform_column(num_bits: int, length: int = DEFAULT_LENGTH, seed: Optional[int] = None) -> np.ndarray:
    """Return ``length`` random 31-bit values masked down to ``num_bits`` bits."""
    if not 0 <= num_bits <= 32:
        raise ValueError("num_bits must be between 0 and 32")
    _check_length(length)
    rng = np.random.default_rng(seed)
    mask = (1 << num_bits) - 1
    raw = rng.integers(0, _RAND_LIMIT, size=length, dtype=np.int64)
    return (raw & mask).astype(np.uint32)


def segmented_column(num_distinct: int, length: int = DEFAULT_LENGTH) -> np.ndarray:
    """Split the column into ``2**num_distinct`` runs holding 1, 2, 3, ..."""
    if num_distinct < 0:
        raise ValueError("num_distinct must not be negative")
    _check_length(length)
    segment_len = length // (1 << num_distinct)
    if segment_len == 0:
        raise ValueError("column is too short for that many segments")
    return (np.arange(length, dtype=np.int64) // segment_len + 1).astype(np.uint32)


def normal_column(mean: float, length: int = DEFAULT_LENGTH, seed: Optional[int] = None) -> np.ndarray:
    """Draw from a normal distribution, clamp below at 1 and truncate."""
    _check_length(length)
    rng = np.random.default_rng(seed)
    numbers = np.maximum(rng.normal(mean, NORMAL_STDDEV, size=length), 1.0)
    return numbers.astype(np.uint32)


def read_values(path: PathLike, count: int) -> np.ndarray:
    """Read the first ``count`` whitespace-separated integers of a text file."""
    if count <= 0:
        raise ValueError("count must be positive")
    values: list[int] = []
    with open(path, "r", encoding="ascii") as handle:
        for line in handle:
            for token in line.split():
                try:
                    values.append(int(token))
                except ValueError:
                    raise ValueError(f"{path}: not an integer: {token!r}") from None
                if len(values) == count:
                    return np.array(values, dtype=np.int64)
    raise ValueError(f"{path} holds fewer than {count} values")


def tiled_column(values: Sequence[int], length: int = DEFAULT_LENGTH) -> np.ndarray:
    """Repeat ``values`` until the column is ``length`` long, as unsigned words."""
    _check_length(length)
    arr = np.asarray(values, dtype=np.int64)
    if arr.ndim != 1 or arr.size == 0:
        raise ValueError("values must be a non-empty one-dimensional sequence")
    return (np.resize(arr, length) & _MASK).astype(np.uint32)