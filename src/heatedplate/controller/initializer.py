"""
Grid Initializer
================
Sets the fixed boundary temperatures and seeds the interior with their mean.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from heatedplate.config import BoundaryTemperatures, PlateConfig
from heatedplate.model.state import SolverState

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


def set_boundary_values(grid: npt.NDArray[np.float64], boundary: BoundaryTemperatures) -> None:
    """
    Write the edge temperatures into ``grid`` in place.

    West and east cover rows 1..M-2 only; the south row and then the north
    row are written over all columns. The two north corners therefore hold
    the north temperature and the two south corners the south temperature.
    """
    grid[1:-1, 0] = boundary.west
    grid[1:-1, -1] = boundary.east
    grid[-1, :] = boundary.south
    grid[0, :] = boundary.north


def boundary_mean(grid: npt.NDArray[np.float64]) -> float:
    """
    Arithmetic mean of the 2M + 2N - 4 boundary cells, corners counted once.
    """
    rows, cols = grid.shape
    total = (
        grid[1:-1, 0].sum()
        + grid[1:-1, -1].sum()
        + grid[-1, :].sum()
        + grid[0, :].sum()
    )
    return float(total / (2 * rows + 2 * cols - 4))


def set_interior_mean(grid: npt.NDArray[np.float64]) -> float:
    """
    Assign the boundary mean to every interior cell.

    Returns:
        The mean that was assigned.
    """
    mean = boundary_mean(grid)
    grid[1:-1, 1:-1] = mean
    return mean


def initialize_state(config: PlateConfig) -> SolverState:
    """Allocate the buffers for ``config`` and apply the initial condition."""
    state = SolverState.allocate(config.rows, config.cols, record_history=config.record_history)
    set_boundary_values(state.grid, config.boundary)
    state.mean = set_interior_mean(state.grid)
    logger.debug(
        f"Initialized {config.rows} x {config.cols} grid, interior seeded with {state.mean:.6f}."
    )
    return state
