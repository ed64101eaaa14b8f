"""Tests for writing and reading solved grids."""

import numpy as np
import pytest

from heatedplate.config import PlateConfig
from heatedplate.controller.solver import solve
from heatedplate.model.io import (
    GridFormatError,
    load_result,
    read_grid,
    save_result,
    write_grid,
)


def test_text_layout(tmp_path):
    path = tmp_path / "plate.txt"
    grid = np.array([[0.0, 0.0, 0.0], [100.0, 62.5, 100.0]])

    write_grid(path, grid)

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines == ["2", "3", "0 0 0", "100 62.5 100"]


def test_round_trip_is_exact(tmp_path):
    path = tmp_path / "plate.txt"
    result = solve(PlateConfig(epsilon=1e-3, rows=7, cols=5))

    write_grid(path, result.grid)
    loaded = read_grid(path)

    assert loaded.shape == (7, 5)
    np.testing.assert_array_equal(loaded, result.grid)


def test_awkward_floats_survive(tmp_path):
    path = tmp_path / "plate.txt"
    grid = np.array([[1.0 / 3.0, -2.0e-300, 1.7976931348623157e308], [0.1, 0.2, 0.30000000000000004]])

    write_grid(path, grid)

    np.testing.assert_array_equal(read_grid(path), grid)


def test_write_rejects_non_2d(tmp_path):
    with pytest.raises(ValueError, match="2D"):
        write_grid(tmp_path / "plate.txt", np.zeros(4))


@pytest.mark.parametrize(
    "content, message",
    [
        ("", "dimensions"),
        ("3\n", "dimensions"),
        ("three\n3\n", "dimensions"),
        ("0\n3\n", "empty"),
        ("2\n2\n1 2\n", "declares 2 rows"),
        ("2\n2\n1 2\n3 4 5\n", "unequal|declares"),
        ("2\n3\n1 2\n3 4\n", "declares 2 x 3"),
        ("2\n2\n1 x\n3 4\n", "non-numeric"),
    ],
)
def test_malformed_files(tmp_path, content, message):
    path = tmp_path / "bad.txt"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(GridFormatError, match=message):
        read_grid(path)


def test_hdf5_round_trip(tmp_path):
    path = tmp_path / "plate.h5"
    config = PlateConfig(epsilon=1e-2, rows=6, cols=8, max_iterations=10_000, record_history=True)
    result = solve(config)

    save_result(path, result, config)
    loaded = load_result(path)

    np.testing.assert_array_equal(loaded.grid, result.grid)
    assert loaded.iterations == result.iterations
    assert loaded.max_change == result.max_change
    assert loaded.mean == result.mean
    assert loaded.converged
    assert loaded.history == result.history


def test_hdf5_stores_configuration(tmp_path):
    import h5py

    path = tmp_path / "plate.h5"
    config = PlateConfig(epsilon=0.5, rows=4, cols=4)
    save_result(path, solve(config), config)

    with h5py.File(path, "r") as f:
        assert f["config"].attrs["epsilon"] == 0.5
        assert f["config"].attrs["backend"] == "numba"
        assert f["config"].attrs["north"] == 0.0
        assert "max_iterations" not in f["config"].attrs


def test_load_rejects_non_hdf5(tmp_path):
    path = tmp_path / "plate.txt"
    write_grid(path, np.zeros((3, 3)))

    with pytest.raises(ValueError, match="not a valid HDF5"):
        load_result(path)


def test_hdf5_without_history(tmp_path):
    path = tmp_path / "plate.h5"
    config = PlateConfig(epsilon=0.5, rows=5, cols=5)
    result = solve(config)

    save_result(path, result, config)

    loaded = load_result(path)
    assert loaded.history is None
    assert loaded.iterations == result.iterations
