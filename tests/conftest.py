"""Test configuration for heatedplate."""

import logging

import numpy as np
import pytest
import scipy as sp
import scipy.sparse.linalg  # noqa: F401

from heatedplate.config import BoundaryTemperatures
from heatedplate.controller.initializer import set_boundary_values


def exact_steady_state(rows: int, cols: int, boundary: BoundaryTemperatures) -> np.ndarray:
    """
    Solve the discrete steady state directly with a sparse 5-point system.

    Used only as a reference for the relaxation results.
    """
    grid = np.zeros((rows, cols), dtype=np.float64)
    set_boundary_values(grid, boundary)

    ni, nj = rows - 2, cols - 2
    index = np.arange(ni * nj).reshape(ni, nj)
    row, col, data = [], [], []
    rhs = np.zeros(ni * nj, dtype=np.float64)

    for i in range(ni):
        for j in range(nj):
            k = index[i, j]
            row.append(k)
            col.append(k)
            data.append(4.0)
            for di, dj in ((-1, 0), (1, 0), (0, -1), (0, 1)):
                ii, jj = i + di, j + dj
                if 0 <= ii < ni and 0 <= jj < nj:
                    row.append(k)
                    col.append(index[ii, jj])
                    data.append(-1.0)
                else:
                    rhs[k] += grid[ii + 1, jj + 1]

    matrix = sp.sparse.coo_matrix((data, (row, col)), shape=(ni * nj, ni * nj)).tocsr()
    grid[1:-1, 1:-1] = sp.sparse.linalg.spsolve(matrix, rhs).reshape(ni, nj)
    return grid


@pytest.fixture
def exact_solution():
    return exact_steady_state


@pytest.fixture(autouse=True)
def reset_package_logger():
    """setup_logging() binds handlers to the current stdout; drop them after each test."""
    yield
    logger = logging.getLogger("heatedplate")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)

    progress = logging.getLogger("heatedplate.controller.reporting")
    for handler in list(progress.handlers):
        progress.removeHandler(handler)
        handler.close()
    progress.propagate = True
