"""
Heated Plate
============
Steady-state temperature distribution on a rectangular plate, computed by
Jacobi relaxation of the discrete heat equation.
"""
from heatedplate.config import BoundaryTemperatures, ConfigurationError, PlateConfig
from heatedplate.controller.solver import RelaxationSolver, solve
from heatedplate.model.state import SolveResult

__all__ = [
    "BoundaryTemperatures",
    "ConfigurationError",
    "PlateConfig",
    "RelaxationSolver",
    "SolveResult",
    "solve",
]
