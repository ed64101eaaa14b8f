"""
Input/Output
Writes the solved temperature field for downstream visualization.

Text format (one value per cell, rows in order from north to south):

    <M>
    <N>
    <row 0: N values separated by single spaces>
    ...
    <row M-1>

Values are written with 17 significant digits so reading a file back gives
the exact floats that were written.

An HDF5 variant stores the grid together with the run parameters.
"""
from __future__ import annotations

import logging
import os
from importlib.metadata import PackageNotFoundError, version
from typing import TYPE_CHECKING, Optional

import h5py
import numpy as np

from heatedplate.model.state import SolveResult

if TYPE_CHECKING:
    import numpy.typing as npt

    from heatedplate.config import PlateConfig

logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("heatedplate")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"

VALUE_FORMAT = "%.17g"


class GridFormatError(ValueError):
    """Raised when a grid file does not follow the text format."""


def write_grid(path: str | os.PathLike[str], grid: npt.NDArray[np.float64]) -> None:
    """
    Write ``grid`` in the text format.

    Args:
        path: Destination file, overwritten if it exists.
        grid: Two-dimensional array of temperatures.
    """
    if grid.ndim != 2:
        raise ValueError(f"Expected a 2D grid, got an array with {grid.ndim} dimensions.")
    rows, cols = grid.shape
    logger.debug(f"Writing {rows} x {cols} grid to: {path}")
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(f"{rows}\n{cols}\n")
            np.savetxt(f, grid, fmt=VALUE_FORMAT, delimiter=" ")
    except OSError as e:
        logger.exception(f"Failed to write grid: {e}")
        raise
    logger.info(f"Solution written to the output file: {path}")


def read_grid(path: str | os.PathLike[str]) -> npt.NDArray[np.float64]:
    """
    Read a grid written by :func:`write_grid`.

    Raises:
        GridFormatError: If the header is missing or malformed, or the values
            do not form the declared M x N array.
    """
    with open(path, "r", encoding="utf-8") as f:
        header = [f.readline(), f.readline()]
        try:
            rows, cols = (int(line.strip()) for line in header)
        except ValueError as e:
            raise GridFormatError(f"'{path}' does not start with the grid dimensions.") from e
        if rows < 1 or cols < 1:
            raise GridFormatError(f"'{path}' declares an empty grid ({rows} x {cols}).")

        lines = [line for line in f if line.strip()]

    if len(lines) != rows:
        raise GridFormatError(f"'{path}' declares {rows} rows but contains {len(lines)}.")
    try:
        grid = np.loadtxt(lines, dtype=np.float64, ndmin=2)
    except ValueError as e:
        raise GridFormatError(f"'{path}' contains rows of unequal length or non-numeric values.") from e
    if grid.shape != (rows, cols):
        raise GridFormatError(f"'{path}' declares {rows} x {cols} values but contains {grid.shape[0]} x {grid.shape[1]}.")
    return grid


def save_result(
    path: str | os.PathLike[str],
    result: SolveResult,
    config: Optional[PlateConfig] = None,
) -> None:
    """Store the grid and the run bookkeeping in an HDF5 file."""
    logger.info(f"Saving result to: {path}")
    try:
        with h5py.File(path, "w") as f:
            f.attrs["version"] = APP_VERSION
            f.attrs["iterations"] = result.iterations
            f.attrs["max_change"] = result.max_change
            f.attrs["mean"] = result.mean
            f.attrs["elapsed"] = result.elapsed
            f.attrs["converged"] = result.converged

            f.create_dataset("temperature", data=result.grid, compression="gzip")

            if result.history:
                f.create_dataset("history", data=np.asarray(result.history, dtype=np.float64))

            if config is not None:
                grp = f.create_group("config")
                grp.attrs["epsilon"] = config.epsilon
                grp.attrs["backend"] = config.backend.value
                if config.max_iterations is not None:
                    grp.attrs["max_iterations"] = config.max_iterations
                for edge, temperature in config.boundary.as_dict().items():
                    grp.attrs[edge] = temperature
    except Exception as e:
        logger.exception(f"Failed to save result: {e}")
        raise


def load_result(path: str | os.PathLike[str]) -> SolveResult:
    """Read a result stored with :func:`save_result`."""
    if not h5py.is_hdf5(path):
        msg = f"File '{path}' is not a valid HDF5 file."
        logger.error(msg)
        raise ValueError(msg)

    with h5py.File(path, "r") as f:
        history = None
        if "history" in f:
            history = [(int(it), float(change)) for it, change in f["history"][()]]
        return SolveResult(
            grid=np.asarray(f["temperature"][()], dtype=np.float64),
            iterations=int(f.attrs["iterations"]),
            max_change=float(f.attrs["max_change"]),
            mean=float(f.attrs["mean"]),
            elapsed=float(f.attrs["elapsed"]),
            converged=bool(f.attrs["converged"]),
            history=history,
        )
