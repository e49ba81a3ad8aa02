"""Reading and writing raw and packed columns as binary files."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence, Union

import numpy as np

PathLike = Union[str, Path]

_MASK = 0xFFFFFFFF
_WORD = np.dtype("<u4")


def _suffix(extension: str) -> str:
    return extension if extension.startswith(".") else "." + extension


def column_path(directory: PathLike, name: str, extension: str) -> Path:
    """Return the file path of column ``name`` with the given extension."""
    return Path(directory) / f"{name}{_suffix(extension)}"


def _words(values: Sequence[int]) -> np.ndarray:
    arr = np.asarray(values)
    if arr.ndim != 1:
        raise ValueError("expected a one-dimensional sequence")
    if arr.size == 0:
        return np.empty(0, dtype=_WORD)
    if arr.dtype.kind not in "iu":
        raise ValueError("values must be integers")
    if int(arr.min()) < 0 or int(arr.max()) > _MASK:
        raise ValueError("values do not fit in unsigned 32 bits")
    return arr.astype(_WORD)


def store_column(path: PathLike, values: Sequence[int]) -> Path:
    """Write ``values`` as little-endian unsigned 32-bit words."""
    target = Path(path)
    target.write_bytes(_words(values).tobytes())
    return target


def load_column(path: PathLike, length: int) -> np.ndarray:
    """Read the first ``length`` unsigned 32-bit words of a column file."""
    if length < 0:
        raise ValueError("length must not be negative")
    with open(path, "rb") as handle:
        raw = handle.read(length * _WORD.itemsize)
    if len(raw) < length * _WORD.itemsize:
        raise ValueError(f"{path} holds fewer than {length} values")
    return np.frombuffer(raw, dtype=_WORD).astype(np.uint32)


def store_encoded_column(
    directory: PathLike,
    name: str,
    data: Sequence[int],
    offsets: Sequence[int],
    extension: str,
) -> tuple[Path, Path]:
    """Write packed words and block offsets next to each other.

    The offsets go to a file whose extension is the data extension
    followed by ``off``.  Returns the two paths written.
    """
    data_path = column_path(directory, name, extension)
    offsets_path = column_path(directory, name, _suffix(extension) + "off")
    data_path.write_bytes(_words(data).tobytes())
    offsets_path.write_bytes(_words(offsets).tobytes())
    return data_path, offsets_path