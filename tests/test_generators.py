import numpy as np
import pytest

from ssbpack.generators import (
    normal_column,
    read_values,
    segmented_column,
    tiled_column,
    uniform_column,
)


def test_uniform_column_fits_bits():
    values = uniform_column(5, 1000, seed=3)
    assert values.size == 1000
    assert int(values.max()) < 2 ** 5
    assert values.dtype == np.uint32


def test_uniform_column_is_reproducible():
    first = uniform_column(12, 64, seed=7)
    second = uniform_column(12, 64, seed=7)
    assert first.size == 64
    assert int(first.max()) < 2 ** 12
    assert first.tolist() == second.tolist()


def test_uniform_column_zero_bits_is_all_zero():
    assert not uniform_column(0, 50, seed=1).any()


@pytest.mark.parametrize("bits", [-1, 33])
def test_uniform_column_rejects_bad_bits(bits):
    with pytest.raises(ValueError):
        uniform_column(bits, 10, seed=1)


def test_segmented_column_runs():
    values = segmented_column(2, 16)
    assert values.tolist() == [1] * 4 + [2] * 4 + [3] * 4 + [4] * 4


def test_segmented_column_is_sorted_with_equal_runs():
    values = segmented_column(3, 800)
    assert np.all(np.diff(values.astype(np.int64)) >= 0)
    assert set(np.bincount(values)[1:].tolist()) == {100}


def test_segmented_column_too_short():
    with pytest.raises(ValueError):
        segmented_column(4, 8)


def test_normal_column_clamped_at_one():
    values = normal_column(5, 2000, seed=2)
    assert int(values.min()) >= 1
    assert values.size == 2000


def test_normal_column_negative_mean_all_one():
    values = normal_column(-1000, 100, seed=2)
    assert values.tolist() == [1] * 100


def test_normal_column_mean_close():
    values = normal_column(500, 20000, seed=4)
    assert abs(float(values.mean()) - 500) < 2


def test_read_values_reads_prefix(tmp_path):
    path = tmp_path / "sample"
    path.write_text("3 1\n4 1 5\n")
    assert read_values(path, 4).tolist() == [3, 1, 4, 1]


def test_read_values_too_few(tmp_path):
    path = tmp_path / "sample"
    path.write_text("3 1\n")
    with pytest.raises(ValueError):
        read_values(path, 3)


def test_read_values_bad_token(tmp_path):
    path = tmp_path / "sample"
    path.write_text("3 x 4\n")
    with pytest.raises(ValueError):
        read_values(path, 3)


def test_tiled_column_repeats():
    assert tiled_column([1, 2, 3], 7).tolist() == [1, 2, 3, 1, 2, 3, 1]


def test_tiled_column_wraps_negative():
    assert tiled_column([-1], 2).tolist() == [2 ** 32 - 1] * 2


def test_tiled_column_rejects_empty():
    with pytest.raises(ValueError):
        tiled_column([], 4)