"""Frame-of-reference bit packing of 32-bit integer columns.

A packed column is a sequence of little-endian 32-bit words.  It starts
with a four-word header (block size, miniblock count, value count, first
value).  Every block of 128 values then stores its minimum, a word holding
the bit width of each of its four miniblocks (one byte each), and the
values minus the minimum packed into a contiguous bit stream.  A miniblock
of 32 values packed at ``w`` bits takes ``w`` words, and one word when
``w`` is zero.

The delta variant works on tiles of 512 values.  Each tile is preceded by
its first value, and its blocks hold the differences between neighbouring
values instead of the values themselves.
"""

from __future__ import annotations

from typing import Iterator, NamedTuple, Sequence

import numpy as np

BLOCK_SIZE = 128
MINIBLOCK_COUNT = 4
MINIBLOCK_SIZE = BLOCK_SIZE // MINIBLOCK_COUNT
ELEM_PER_THREAD = 4
TILE_SIZE = BLOCK_SIZE * ELEM_PER_THREAD
HEADER_WORDS = 4

_MASK = 0xFFFFFFFF
_SIGN = 1 << 31
_MAX_BITWIDTH = 32


class EncodedColumn(NamedTuple):
    """Packed words and the word offset of every block plus the end offset."""

    data: np.ndarray
    offsets: np.ndarray


class _WordBuffer:
    """Growing buffer of little-endian 32-bit words."""

    def __init__(self) -> None:
        self._buf = bytearray()

    def __len__(self) -> int:
        return len(self._buf) // 4

    def word(self, value: int) -> None:
        self._buf += (value & _MASK).to_bytes(4, "little")

    def raw(self, payload: bytes) -> None:
        self._buf += payload

    def array(self) -> np.ndarray:
        return np.frombuffer(bytes(self._buf), dtype="<u4").astype(np.uint32)


def delta(values: Sequence[int]) -> np.ndarray:
    """Return the differences between neighbouring values, with 0 first."""
    arr = np.asarray(values, dtype=np.int64)
    if arr.ndim != 1:
        raise ValueError("expected a one-dimensional sequence")
    out = np.zeros_like(arr)
    out[1:] = np.diff(arr)
    return out


def pad_to_tile(values: Sequence[int], tile_size: int = TILE_SIZE) -> np.ndarray:
    """Extend ``values`` with its last value up to a multiple of ``tile_size``."""
    if tile_size <= 0:
        raise ValueError("tile size must be positive")
    arr = np.asarray(values)
    if arr.ndim != 1:
        raise ValueError("expected a one-dimensional sequence")
    if arr.size == 0:
        raise ValueError("cannot pad an empty column")
    padded_len = -(-arr.size // tile_size) * tile_size
    filler = np.full(padded_len - arr.size, arr[-1], dtype=arr.dtype)
    return np.concatenate([arr, filler])


def _integers(values: Sequence[int], lowest: int) -> np.ndarray:
    arr = np.asarray(values)
    if arr.ndim != 1:
        raise ValueError("expected a one-dimensional sequence")
    if arr.size == 0:
        raise ValueError("cannot encode an empty column")
    if arr.dtype.kind not in "iu":
        raise ValueError("values must be integers")
    if int(arr.min()) < lowest or int(arr.max()) > _MASK:
        raise ValueError("values do not fit in 32 bits")
    return arr.astype(np.int64)


def _signed32(value):
    """Interpret 32-bit unsigned words as signed integers."""
    return np.where(value >= _SIGN, value - (1 << 32), value)


def _bitwidth_word(bitwidth: int) -> int:
    return sum(bitwidth << (8 * shift) for shift in range(MINIBLOCK_COUNT))


def _pack_block(residuals: list[int], bitwidth: int) -> bytes:
    stream = 0
    for position, value in enumerate(residuals):
        stream |= value << (position * bitwidth)
    return stream.to_bytes(4 * MINIBLOCK_COUNT * max(bitwidth, 1), "little")


def _write_blocks(buf: _WordBuffer, blocks: np.ndarray, offsets: list[int]) -> None:
    minima = blocks.min(axis=1)
    residuals = blocks - minima[:, None]
    for minimum, row in zip(minima.tolist(), residuals.tolist()):
        offsets.append(len(buf))
        bitwidth = max(row).bit_length()
        buf.word(minimum)
        buf.word(_bitwidth_word(bitwidth))
        buf.raw(_pack_block(row, bitwidth))


def bin_pack(values: Sequence[int]) -> EncodedColumn:
    """Pack unsigned 32-bit values whose count is a multiple of 128."""
    arr = _integers(values, 0)
    if arr.size % BLOCK_SIZE:
        raise ValueError(f"value count must be a multiple of {BLOCK_SIZE}")
    buf = _WordBuffer()
    for word in (BLOCK_SIZE, MINIBLOCK_COUNT, arr.size, int(arr[0])):
        buf.word(word)
    offsets: list[int] = []
    _write_blocks(buf, arr.reshape(-1, BLOCK_SIZE), offsets)
    offsets.append(len(buf))
    return EncodedColumn(buf.array(), np.array(offsets, dtype=np.uint32))


def delta_bin_pack(values: Sequence[int]) -> EncodedColumn:
    """Delta-encode and pack 32-bit values whose count is a multiple of 512.

    Values may be given as unsigned or as signed 32-bit integers.
    """
    arr = _integers(values, -_SIGN) & _MASK
    if arr.size % TILE_SIZE:
        raise ValueError(f"value count must be a multiple of {TILE_SIZE}")
    buf = _WordBuffer()
    for word in (BLOCK_SIZE, MINIBLOCK_COUNT, arr.size, int(arr[0])):
        buf.word(word)

    tiles = arr.reshape(-1, TILE_SIZE)
    deltas = np.zeros_like(tiles)
    deltas[:, 1:] = _signed32((tiles[:, 1:] - tiles[:, :-1]) & _MASK)

    offsets: list[int] = []
    for first, tile_deltas in zip(tiles[:, 0].tolist(), deltas):
        buf.word(first)
        _write_blocks(buf, tile_deltas.reshape(-1, BLOCK_SIZE), offsets)
    offsets.append(len(buf))
    return EncodedColumn(buf.array(), np.array(offsets, dtype=np.uint32))


def _checked(data: Sequence[int], offsets: Sequence[int]) -> tuple[np.ndarray, list[int]]:
    words = np.asarray(data).astype("<u4")
    starts = [int(offset) for offset in offsets]
    if words.size < HEADER_WORDS:
        raise ValueError("packed column is shorter than its header")
    if int(words[0]) != BLOCK_SIZE or int(words[1]) != MINIBLOCK_COUNT:
        raise ValueError("unsupported block layout in header")
    if len(starts) < 2:
        raise ValueError("offsets must hold at least one block and the end")
    if int(words[2]) != (len(starts) - 1) * BLOCK_SIZE:
        raise ValueError("value count in header does not match the offsets")
    return words, starts


def _read_blocks(words: np.ndarray, starts: list[int]) -> Iterator[tuple[int, np.ndarray]]:
    """Yield the stored minimum and the residuals of every block."""
    for start in starts[:-1]:
        if start + 2 > words.size:
            raise ValueError("block offset points past the end of the data")
        minimum = int(words[start])
        widths = int(words[start + 1])
        position = start + 2
        residuals: list[int] = []
        for shift in range(MINIBLOCK_COUNT):
            bitwidth = (widths >> (8 * shift)) & 0xFF
            if bitwidth > _MAX_BITWIDTH:
                raise ValueError(f"invalid bit width {bitwidth}")
            length = max(bitwidth, 1)
            chunk = words[position:position + length]
            if chunk.size < length:
                raise ValueError("packed column is truncated")
            stream = int.from_bytes(chunk.tobytes(), "little")
            mask = (1 << bitwidth) - 1
            residuals.extend(
                (stream >> (index * bitwidth)) & mask for index in range(MINIBLOCK_SIZE)
            )
            position += length
        yield minimum, np.array(residuals, dtype=np.int64)


def bin_unpack(data: Sequence[int], offsets: Sequence[int]) -> np.ndarray:
    """Decode a column written by :func:`bin_pack`."""
    words, starts = _checked(data, offsets)
    pieces = [(residuals + minimum) & _MASK for minimum, residuals in _read_blocks(words, starts)]
    return np.concatenate(pieces).astype(np.uint32)


def delta_bin_unpack(data: Sequence[int], offsets: Sequence[int]) -> np.ndarray:
    """Decode a column written by :func:`delta_bin_pack` as unsigned values."""
    words, starts = _checked(data, offsets)
    per_tile = TILE_SIZE // BLOCK_SIZE
    if (len(starts) - 1) % per_tile:
        raise ValueError(f"block count must be a multiple of {per_tile}")

    blocks = _read_blocks(words, starts)
    pieces = []
    for tile_start, group in zip(starts[:-1:per_tile], zip(*[blocks] * per_tile)):
        if tile_start - 1 < HEADER_WORDS:
            raise ValueError("tile offset overlaps the header")
        first = int(words[tile_start - 1])
        deltas = np.concatenate(
            [residuals + int(_signed32(minimum)) for minimum, residuals in group]
        )
        pieces.append((first + np.cumsum(deltas)) & _MASK)
    return np.concatenate(pieces).astype(np.uint32)