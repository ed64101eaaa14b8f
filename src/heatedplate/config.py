"""
Run Configuration
=================
Central place for the physical constants and the parameters of a single solve.

The plate is indexed [row][col]; row 0 is the north edge, row M-1 the south
edge, column 0 the west edge and column N-1 the east edge.

Exports:
    DEFAULT_ROWS, DEFAULT_COLS (int): Reference grid size (1000 x 1000).
    HOT_TEMPERATURE, COLD_TEMPERATURE (float): Reference edge temperatures.
    BoundaryTemperatures: Fixed temperature of each edge.
    PlateConfig: Grid size, tolerance and solver options.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Optional


DEFAULT_ROWS: int = 1000
DEFAULT_COLS: int = 1000
MIN_GRID_SIZE: int = 3

HOT_TEMPERATURE: float = 100.0
COLD_TEMPERATURE: float = 0.0


class ConfigurationError(ValueError):
    """Raised when a run is configured with values the solver cannot accept."""


class Backend(StrEnum):
    NUMBA = "numba"
    NUMBA_PARALLEL = "numba-parallel"
    NUMPY = "numpy"


@dataclass
class BoundaryTemperatures:
    """
    Temperatures held fixed on the four edges of the plate.

    The default is the reference layout: the north edge cold, the other
    three edges hot.
    """
    north: float = COLD_TEMPERATURE
    south: float = HOT_TEMPERATURE
    east: float = HOT_TEMPERATURE
    west: float = HOT_TEMPERATURE

    @classmethod
    def uniform_hot(cls, hot: float = HOT_TEMPERATURE, cold: float = COLD_TEMPERATURE) -> BoundaryTemperatures:
        """Cold north edge, every other edge at ``hot``."""
        return cls(north=cold, south=hot, east=hot, west=hot)

    def as_dict(self) -> dict[str, float]:
        return {"north": self.north, "south": self.south, "east": self.east, "west": self.west}


@dataclass
class PlateConfig:
    """
    Parameters of one solve.

    Attributes:
        epsilon: Tolerance on the largest per-cell change of a pass. The solve
            stops at the first pass whose change is <= epsilon.
        rows: Number of grid rows (M), at least 3.
        cols: Number of grid columns (N), at least 3.
        boundary: Edge temperatures.
        max_iterations: Optional safety bound. ``None`` keeps the iteration
            unbounded.
        backend: Implementation of the relaxation pass.
        record_history: Keep the change of every pass in the result. Off by
            default; long runs take millions of passes.

    Raises:
        ConfigurationError: On construction, if any value is out of range.
    """
    epsilon: float
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    boundary: BoundaryTemperatures = field(default_factory=BoundaryTemperatures)
    max_iterations: Optional[int] = None
    backend: Backend = Backend.NUMBA
    record_history: bool = False

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        for name in ("rows", "cols"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"'{name}' must be an integer, got {value!r}.")
            if value < MIN_GRID_SIZE:
                raise ConfigurationError(
                    f"'{name}' must be at least {MIN_GRID_SIZE} so the plate has an interior, got {value}."
                )

        try:
            epsilon = float(self.epsilon)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"'epsilon' must be a number, got {self.epsilon!r}.") from e
        if not math.isfinite(epsilon) or epsilon <= 0.0:
            raise ConfigurationError(f"'epsilon' must be a finite number greater than 0, got {self.epsilon!r}.")
        self.epsilon = epsilon

        if self.max_iterations is not None:
            if isinstance(self.max_iterations, bool) or not isinstance(self.max_iterations, int):
                raise ConfigurationError(f"'max_iterations' must be an integer, got {self.max_iterations!r}.")
            if self.max_iterations < 1:
                raise ConfigurationError(f"'max_iterations' must be at least 1, got {self.max_iterations}.")

        for edge, temperature in self.boundary.as_dict().items():
            if not math.isfinite(temperature):
                raise ConfigurationError(f"Temperature of the {edge} edge must be finite, got {temperature!r}.")

        try:
            self.backend = Backend(self.backend)
        except ValueError as e:
            choices = ", ".join(b.value for b in Backend)
            raise ConfigurationError(f"Unknown backend {self.backend!r}, expected one of: {choices}.") from e

    @property
    def boundary_cell_count(self) -> int:
        """Number of boundary cells, corners counted once."""
        return 2 * self.rows + 2 * self.cols - 4
