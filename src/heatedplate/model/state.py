"""
Solver State (Data Model)
=========================
Holds everything a solve mutates: the current grid, the snapshot of the
previous pass and the convergence bookkeeping.

The state is owned by one solver at a time. The initializer fills it before
the first pass; afterwards only the relaxation engine writes to it.

Classes:
    SolverState: Grid buffers and counters of a running solve.
    SolveResult: What a finished (or stopped) solve hands to the writers.
"""
from __future__ import annotations

from dataclasses import dataclass
import math
from typing import TYPE_CHECKING, Optional

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(eq=False)
class SolverState:
    """
    Attributes:
        grid: Current temperatures, shape (M, N).
        previous: Snapshot of ``grid`` taken at the start of the current pass.
        iterations: Number of completed passes.
        max_change: Largest absolute change of the last pass
            (``inf`` before the first pass).
        mean: Mean of the boundary values used to seed the interior.
        history: Every (iteration, max_change) pair, or None when the run
            does not keep one.
    """
    grid: npt.NDArray[np.float64]
    previous: npt.NDArray[np.float64]
    iterations: int = 0
    max_change: float = math.inf
    mean: float = 0.0
    history: Optional[list[tuple[int, float]]] = None

    def __post_init__(self) -> None:
        if self.grid.shape != self.previous.shape:
            raise ValueError(
                f"Grid buffers differ in shape: {self.grid.shape} vs {self.previous.shape}."
            )

    @classmethod
    def allocate(cls, rows: int, cols: int, record_history: bool = False) -> SolverState:
        """Create a state with zero-filled (rows x cols) buffers."""
        return cls(
            grid=np.zeros((rows, cols), dtype=np.float64),
            previous=np.zeros((rows, cols), dtype=np.float64),
            history=[] if record_history else None,
        )

    @property
    def rows(self) -> int:
        return self.grid.shape[0]

    @property
    def cols(self) -> int:
        return self.grid.shape[1]

    @property
    def interior(self) -> npt.NDArray[np.float64]:
        """View of the cells the relaxation is allowed to change."""
        return self.grid[1:-1, 1:-1]

    def converged(self, epsilon: float) -> bool:
        return self.max_change <= epsilon

    def record_pass(self, max_change: float) -> None:
        """Bookkeeping after a pass has been committed."""
        self.iterations += 1
        self.max_change = max_change
        if self.history is not None:
            self.history.append((self.iterations, max_change))


@dataclass(eq=False)
class SolveResult:
    """Outcome of a solve, handed to the output writers."""
    grid: npt.NDArray[np.float64]
    iterations: int
    max_change: float
    mean: float
    elapsed: float
    converged: bool = True
    history: Optional[list[tuple[int, float]]] = None

    @property
    def rows(self) -> int:
        return self.grid.shape[0]

    @property
    def cols(self) -> int:
        return self.grid.shape[1]
