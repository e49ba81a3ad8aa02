import numpy as np
import pytest

from ssbpack.columns import column_path, load_column, store_column, store_encoded_column


def test_column_path_adds_dot(tmp_path):
    assert column_path(tmp_path, "test8", "bin") == tmp_path / "test8.bin"


def test_column_path_keeps_given_dot(tmp_path):
    assert column_path(tmp_path, "test8", ".dbin") == tmp_path / "test8.dbin"


def test_store_and_load_round_trip(tmp_path):
    values = np.random.default_rng(1).integers(0, 1 << 32, size=300, dtype=np.uint64)
    path = store_column(tmp_path / "col", values)
    loaded = load_column(path, len(values))
    assert np.array_equal(loaded, values.astype(np.uint32))


def test_store_column_writes_little_endian_words(tmp_path):
    path = store_column(tmp_path / "col", [1, 258])
    assert path.read_bytes() == b"\x01\x00\x00\x00\x02\x01\x00\x00"


def test_load_column_reads_prefix(tmp_path):
    path = store_column(tmp_path / "col", [5, 6, 7, 8, 9])
    assert list(load_column(path, 2)) == [5, 6]


def test_load_column_too_long_raises(tmp_path):
    path = store_column(tmp_path / "col", [5, 6, 7])
    with pytest.raises(ValueError):
        load_column(path, 4)


def test_load_column_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_column(tmp_path / "absent", 1)


def test_store_column_rejects_negative(tmp_path):
    with pytest.raises(ValueError):
        store_column(tmp_path / "col", [1, -1])


def test_store_encoded_column_writes_both_files(tmp_path):
    data = np.arange(20, dtype=np.uint32)
    offsets = np.array([4, 12, 20], dtype=np.uint32)
    data_path, offsets_path = store_encoded_column(tmp_path, "test8", data, offsets, "bin")
    assert data_path == tmp_path / "test8.bin"
    assert offsets_path == tmp_path / "test8.binoff"
    assert np.array_equal(load_column(data_path, len(data)), data)
    assert np.array_equal(load_column(offsets_path, len(offsets)), offsets)


def test_store_encoded_column_delta_extension(tmp_path):
    _, offsets_path = store_encoded_column(tmp_path, "col", [1], [4, 5], ".dbin")
    assert offsets_path.name == "col.dbinoff"
    assert offsets_path.read_bytes() == np.array([4, 5], dtype="<u4").tobytes()


def test_store_encoded_column_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        store_encoded_column(tmp_path / "nowhere", "col", [1], [4, 5], "bin")