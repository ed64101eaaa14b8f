"""
Relaxation Engine
=================
Jacobi iteration for the steady-state heat equation on the plate.

At every interior point the steady state satisfies

    W[Central] = (W[North] + W[South] + W[East] + W[West]) / 4

Using this condition as an assignment, with all neighbours taken from the
previous pass, gives a better estimate. The pass is repeated until the largest
change of any cell is no more than the tolerance.

There is no built-in limit on the number of passes. A tolerance that cannot be
reached in floating point keeps the solver running unless
``PlateConfig.max_iterations`` is set.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional

import numpy as np
import numba as nb
from numba import prange

from heatedplate.config import Backend, PlateConfig
from heatedplate.controller.initializer import initialize_state
from heatedplate.model.state import SolveResult, SolverState
from heatedplate.utils import cpu_time

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

# Called after every committed pass with (iteration, max_change).
# Returning False requests a stop before the next pass.
PassCallback = Callable[[int, float], Optional[bool]]


@nb.njit(cache=True)
def _relax_pass_sequential(
    previous: npt.NDArray[np.float64],
    grid: npt.NDArray[np.float64],
) -> float:
    """
    One row-major Jacobi pass over the interior of ``grid``.

    Args:
        previous: Frozen values of the last pass (read only).
        grid: Output buffer; only interior cells are written.

    Returns:
        Largest absolute change of an interior cell.
    """
    rows, cols = grid.shape
    max_change = 0.0
    for i in range(1, rows - 1):
        for j in range(1, cols - 1):
            value = (previous[i - 1, j] + previous[i + 1, j] + previous[i, j - 1] + previous[i, j + 1]) / 4.0
            grid[i, j] = value
            change = abs(value - previous[i, j])
            if change > max_change:
                max_change = change
    return max_change


@nb.njit(cache=True, parallel=True)
def _relax_pass_parallel(
    previous: npt.NDArray[np.float64],
    grid: npt.NDArray[np.float64],
) -> float:
    """
    Same pass as ``_relax_pass_sequential`` with rows spread over threads.

    Each row keeps its own maximum; the maxima are reduced once all rows are
    done, so the result does not depend on scheduling.
    """
    rows, cols = grid.shape
    row_max = np.zeros(rows, dtype=np.float64)
    for i in prange(1, rows - 1):
        local_max = 0.0
        for j in range(1, cols - 1):
            value = (previous[i - 1, j] + previous[i + 1, j] + previous[i, j - 1] + previous[i, j + 1]) / 4.0
            grid[i, j] = value
            change = abs(value - previous[i, j])
            if change > local_max:
                local_max = change
        row_max[i] = local_max
    return row_max.max()


def _relax_pass_numpy(
    previous: npt.NDArray[np.float64],
    grid: npt.NDArray[np.float64],
) -> float:
    """Vectorized pass; neighbours are summed in the same order as the kernels."""
    updated = (previous[:-2, 1:-1] + previous[2:, 1:-1] + previous[1:-1, :-2] + previous[1:-1, 2:]) / 4.0
    max_change = np.abs(updated - previous[1:-1, 1:-1]).max()
    grid[1:-1, 1:-1] = updated
    return float(max_change)


_KERNELS: dict[Backend, Callable[[npt.NDArray[np.float64], npt.NDArray[np.float64]], float]] = {
    Backend.NUMBA: _relax_pass_sequential,
    Backend.NUMBA_PARALLEL: _relax_pass_parallel,
    Backend.NUMPY: _relax_pass_numpy,
}


def relax_pass(
    previous: npt.NDArray[np.float64],
    grid: npt.NDArray[np.float64],
    backend: Backend | str = Backend.NUMBA,
) -> float:
    """
    Compute one Jacobi pass from ``previous`` into ``grid``.

    Every interior cell of ``grid`` becomes the mean of its four neighbours
    in ``previous``. Boundary cells of ``grid`` are left untouched.

    Args:
        previous: Values of the last pass. Must be a separate buffer.
        grid: Buffer receiving the new interior values.
        backend: Which implementation to run.

    Returns:
        Maximum absolute change over all interior cells.
    """
    if np.may_share_memory(previous, grid):
        raise ValueError("'previous' and 'grid' must be separate buffers.")
    if previous.shape != grid.shape:
        raise ValueError(f"Shape mismatch: {previous.shape} vs {grid.shape}.")
    return float(_KERNELS[Backend(backend)](previous, grid))


class SolveInterrupted(RuntimeError):
    """Base for solves that ended before reaching the tolerance."""

    def __init__(self, message: str, result: SolveResult) -> None:
        super().__init__(message)
        self.result = result


class ConvergenceError(SolveInterrupted):
    """The iteration limit was reached before the tolerance."""


class SolveCancelled(SolveInterrupted):
    """A callback asked the solver to stop."""


class RelaxationSolver:
    """
    Class for the Jacobi relaxation solver.
    """

    def __init__(
        self,
        config: PlateConfig,
        callback: Optional[PassCallback] = None,
    ) -> None:
        """
        Initialize the solver.

        Args:
            config: Validated run configuration.
            callback: Observer invoked after every pass with
                ``(iteration, max_change)``.
        """
        self.config = config
        self.callback = callback
        self.state: Optional[SolverState] = None

    def _result(self, start: float, converged: bool) -> SolveResult:
        state = self.state
        return SolveResult(
            grid=state.grid,
            iterations=state.iterations,
            max_change=state.max_change,
            mean=state.mean,
            elapsed=cpu_time() - start,
            converged=converged,
            history=None if state.history is None else list(state.history),
        )

    def solve(self) -> SolveResult:
        """
        Initialize the plate and iterate until the change is <= epsilon.

        Returns:
            The converged grid and its bookkeeping.

        Raises:
            ConvergenceError: ``max_iterations`` passes ran without converging.
            SolveCancelled: The callback returned ``False``.
        """
        config = self.config
        config.validate()
        kernel = _KERNELS[config.backend]

        logger.info(
            f"Solving {config.rows} x {config.cols} plate, epsilon = {config.epsilon:g}, "
            f"backend = {config.backend.value}"
        )
        self.state = state = initialize_state(config)
        start = cpu_time()

        while True:
            np.copyto(state.previous, state.grid)
            max_change = float(kernel(state.previous, state.grid))
            state.record_pass(max_change)

            keep_going = True
            if self.callback is not None:
                keep_going = self.callback(state.iterations, max_change) is not False

            if state.converged(config.epsilon):
                break

            if not keep_going:
                logger.warning(f"Solve cancelled after {state.iterations} iterations (change = {max_change:g}).")
                raise SolveCancelled(
                    f"Solve cancelled after {state.iterations} iterations.",
                    self._result(start, converged=False),
                )

            if config.max_iterations is not None and state.iterations >= config.max_iterations:
                logger.error(
                    f"No convergence after {state.iterations} iterations "
                    f"(change = {max_change:g}, epsilon = {config.epsilon:g})."
                )
                raise ConvergenceError(
                    f"Relaxation did not converge after {state.iterations} iterations "
                    f"(change = {max_change:g} > epsilon = {config.epsilon:g}).",
                    self._result(start, converged=False),
                )

        result = self._result(start, converged=True)
        logger.info(
            f"Converged after {result.iterations} iterations "
            f"(change = {result.max_change:g}, CPU time = {result.elapsed:.3f} s)"
        )
        return result


def solve(config: PlateConfig, callback: Optional[PassCallback] = None) -> SolveResult:
    """Shortcut for ``RelaxationSolver(config, callback).solve()``."""
    return RelaxationSolver(config, callback=callback).solve()
