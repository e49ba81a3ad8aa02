# ssbpack

`ssbpack` encodes columns of 32-bit integers in two block-based layouts,
decodes them again, and produces the synthetic columns used to benchmark
the encodings. All data is kept in numpy arrays.

## Encodings (`ssbpack.encoding`)

Both encodings work on blocks of 128 values, each split into four miniblocks
of 32 values. The packed stream is a sequence of little-endian 32-bit words
and starts with a four-word header: block size (128), miniblock count (4),
number of values, and the first value. Each block is then stored as:

1. its minimum,
2. a word holding the bit width of each miniblock, one byte per miniblock
   (all four are set to the widest width needed in the block),
3. the values minus the minimum, packed into a continuous bit stream. A
   miniblock packed at `w` bits takes `w` words, or one word when `w` is 0.

- `bin_pack(values)` packs unsigned 32-bit values whose count is a multiple
  of 128. `bin_unpack(data, offsets)` returns the values as `uint32`.
- `delta_bin_pack(values)` works on tiles of 512 values (four blocks). Each
  tile is preceded by its first value, and its blocks hold the differences
  between neighbouring values (0 for the first value of the tile). Input may
  be signed or unsigned 32-bit, and its count must be a multiple of 512.
  `delta_bin_unpack(data, offsets)` returns the values as `uint32`.

The packers return an `EncodedColumn` named tuple `(data, offsets)`: the
packed words and the word position at which each block starts, followed by
one final entry for the end of the data.

Helpers:

- `pad_to_tile(values, tile_size=512)` extends a column with its last value
  up to a multiple of `tile_size`.
- `delta(values)` returns the differences between neighbouring values, with
  0 in the first position.

Invalid input (empty columns, wrong lengths, values outside 32 bits, corrupt
or truncated packed data) raises `ValueError`.

```python
import numpy as np
from ssbpack.encoding import pad_to_tile, bin_pack, bin_unpack

values = pad_to_tile(np.arange(1000, dtype=np.uint32) % 37, 512)
data, offsets = bin_pack(values)
assert (bin_unpack(data, offsets) == values).all()
```

## Column files (`ssbpack.columns`)

Columns are stored as raw little-endian unsigned 32-bit words.

- `column_path(directory, name, extension)` returns `directory/name.extension`.
- `store_column(path, values)` writes a column; `load_column(path, length)`
  reads its first `length` values and raises `ValueError` if the file is too
  short.
- `store_encoded_column(directory, name, data, offsets, extension)` writes the
  packed words to `name.<extension>` and the offsets to `name.<extension>off`
  (for example `.bin` with `.binoff`, or `.dbin` with `.dbinoff`) and returns
  both paths.

## Benchmark columns (`ssbpack.generators`)

The default length of a generated column is `2**28` values.

- `uniform_column(num_bits, length, seed)`: random 31-bit values masked to
  the low `num_bits` bits.
- `segmented_column(num_distinct, length)`: consecutive runs of
  `length // 2**num_distinct` equal values, numbered 1, 2, 3, ...
- `normal_column(mean, length, seed)`: draws from a normal distribution with
  the given mean and a standard deviation of 20, raised to at least 1 and
  truncated to integers.
- `read_values(path, count)`: the first `count` whitespace-separated integers
  of a text file.
- `tiled_column(values, length)`: `values` repeated until the column is
  `length` long.

## Command line

Installing the package provides the `ssbpack` command:

```
ssbpack --help
```

Sub-commands, each taking one integer argument:

| command | argument | writes |
|---|---|---|
| `gen` | `num_bits` | `test<num_bits>.col` from `uniform_column` |
| `gen-d1` | `num_distinct` | `testd1_<num_distinct>.col` from `segmented_column` |
| `gen-d2` | `mean` | `testd2_<mean>.col` from `normal_column` |
| `gen-d3` | `alpha` | `testd3_<alpha>.col`, tiled from the text file `datad3_<alpha>` |
| `binpack` | `num_bits` | `test<num_bits>.bin` and `.binoff` from `test<num_bits>.col` |
| `deltabinpack` | `num_bits` | `test<num_bits>.dbin` and `.dbinoff` from `test<num_bits>.col` |

Options common to all sub-commands:

- `--data-dir DIR` — where columns are read and written (default `.`).
- `--length N` — number of values (default `2**28`); use a smaller value for
  quick runs.

`gen` and `gen-d2` accept `--seed` (default 1). `gen-d3` accepts
`--zipf-dir` (where `datad3_<alpha>` is found; defaults to the data directory)
and `--count` (how many values to read from it, default `2**20`).

`binpack` and `deltabinpack` pad the column to a multiple of 512 with its
last value before packing, and report the sizes of input and output. The
command exits with status 1 and prints a message on standard error when a file
cannot be read or written or the input is invalid.

## What it does not do

The package only produces and checks the encoded files. It has no query
engine and no GPU decoder; `bin_unpack` and `delta_bin_unpack` are plain
Python decoders meant for verification, not for speed.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```