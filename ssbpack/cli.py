"""Command line for generating benchmark columns and packing them."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

import numpy as np

from ssbpack.columns import column_path, load_column, store_column, store_encoded_column
from ssbpack.encoding import BLOCK_SIZE, TILE_SIZE, bin_pack, delta_bin_pack, pad_to_tile
from ssbpack.generators import (
    DEFAULT_LENGTH,
    normal_column,
    read_values,
    segmented_column,
    tiled_column,
    uniform_column,
)

RAW_EXTENSION = "col"
ZIPF_COUNT = 1 << 20


def _store(args: argparse.Namespace, name: str, values: np.ndarray) -> None:
    print("Generated Column")
    path = column_path(args.data_dir, name, RAW_EXTENSION)
    print(f"Writing to {path}")
    store_column(path, values)
    print("Stored Column")


def _gen(args: argparse.Namespace) -> None:
    print(f"Encoding with {args.value} bits")
    values = uniform_column(args.value, args.length, args.seed)
    print(" ".join(str(v) for v in values[:10].tolist()) + " ")
    _store(args, f"test{args.value}", values)


def _gen_d1(args: argparse.Namespace) -> None:
    print(f"Encoding with {1 << args.value} values")
    _store(args, f"testd1_{args.value}", segmented_column(args.value, args.length))


def _gen_d2(args: argparse.Namespace) -> None:
    print(f"Encoding with {1 << args.value} mean")
    _store(args, f"testd2_{args.value}", normal_column(args.value, args.length, args.seed))


def _gen_d3(args: argparse.Namespace) -> None:
    print(f"Encoding with {args.value} alpha")
    zipf_dir = Path(args.zipf_dir) if args.zipf_dir else Path(args.data_dir)
    source = read_values(zipf_dir / f"datad3_{args.value}", args.count)
    print(" ".join(str(v) for v in source[:10].tolist()) + " ")
    values = tiled_column(source, args.length)
    print(" ".join(str(v) for v in values[:10].tolist()) + " ")
    _store(args, f"testd3_{args.value}", values)


def _encode(args: argparse.Namespace, packer: Callable, extension: str) -> None:
    print(f"Encoding test{args.value}")
    name = f"test{args.value}"
    raw = load_column(column_path(args.data_dir, name, RAW_EXTENSION), args.length)
    print("Loaded Column")
    column = pad_to_tile(raw, TILE_SIZE)
    num_blocks = column.size // BLOCK_SIZE
    data, offsets = packer(column)
    first_width = int(data[int(offsets[0]) + 1]) & 0xFF
    print(f"max_bitwidth {first_width}")
    print(f"Num Elements {args.length}")
    print(f"Input: ArrSize {args.length * 4}")
    print(f"Output: ArrSize {data.size} Offsets {num_blocks + 1}")
    store_encoded_column(args.data_dir, name, data, offsets, extension)


def _binpack(args: argparse.Namespace) -> None:
    _encode(args, bin_pack, "bin")


def _deltabinpack(args: argparse.Namespace) -> None:
    _encode(args, delta_bin_pack, "dbin")


def _parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--data-dir", default=".", help="directory holding the columns")
    common.add_argument("--length", type=int, default=DEFAULT_LENGTH, help="number of values")

    parser = argparse.ArgumentParser(prog="ssbpack", description=__doc__)
    sub = parser.add_subparsers(dest="command", required=True)

    commands = [
        ("gen", _gen, "uniform values of <num_bits> bits", "num_bits"),
        ("gen-d1", _gen_d1, "2**<num_distinct> runs of distinct values", "num_distinct"),
        ("gen-d2", _gen_d2, "normally distributed values around <mean>", "mean"),
        ("gen-d3", _gen_d3, "values tiled from a zipf sample file", "alpha"),
        ("binpack", _binpack, "bit-pack column test<num_bits>", "num_bits"),
        ("deltabinpack", _deltabinpack, "delta bit-pack column test<num_bits>", "num_bits"),
    ]
    for name, handler, help_text, metavar in commands:
        command = sub.add_parser(name, parents=[common], help=help_text)
        command.add_argument("value", type=int, metavar=metavar)
        command.set_defaults(handler=handler)
        if name in ("gen", "gen-d2"):
            command.add_argument("--seed", type=int, default=1, help="random seed")
        if name == "gen-d3":
            command.add_argument("--zipf-dir", default=None, help="directory of datad3_<alpha>")
            command.add_argument("--count", type=int, default=ZIPF_COUNT, help="values to read")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line and return the exit status."""
    args = _parser().parse_args(argv)
    try:
        args.handler(args)
    except (ValueError, OSError) as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())