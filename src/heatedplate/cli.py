"""
Command Line
============
Reads the tolerance and the output file name, runs the solver and writes the
steady-state solution.

    heatedplate EPSILON OUTPUT_FILENAME [options]

Missing positional arguments are asked for on stdin.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence, TextIO

from heatedplate.config import (
    COLD_TEMPERATURE,
    DEFAULT_COLS,
    DEFAULT_ROWS,
    HOT_TEMPERATURE,
    Backend,
    BoundaryTemperatures,
    ConfigurationError,
    PlateConfig,
)
from heatedplate.controller.reporting import PowerOfTwoReporter
from heatedplate.controller.solver import ConvergenceError, RelaxationSolver
from heatedplate.logging_config import setup_logging
from heatedplate.model.io import save_result, write_grid
from heatedplate.model.state import SolveResult
from heatedplate.utils import timer

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_BAD_INPUT = 1
EXIT_BAD_CONFIG = 2
EXIT_NOT_CONVERGED = 3
EXIT_WRITE_FAILED = 4


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="heatedplate",
        description="Solve for the steady state temperature distribution over a rectangular plate.",
    )
    parser.add_argument("epsilon", nargs="?", default=None, help="Error tolerance on the change per iteration.")
    parser.add_argument("output", nargs="?", default=None, help="File the steady state solution is written to.")
    parser.add_argument("--rows", type=int, default=DEFAULT_ROWS, help="Number of grid rows (M).")
    parser.add_argument("--cols", type=int, default=DEFAULT_COLS, help="Number of grid columns (N).")
    parser.add_argument("--hot", type=float, default=HOT_TEMPERATURE, help="Temperature of the west, east and south edges.")
    parser.add_argument("--cold", type=float, default=COLD_TEMPERATURE, help="Temperature of the north edge.")
    parser.add_argument("--max-iterations", type=int, default=None, help="Give up after this many iterations.")
    parser.add_argument("--backend", choices=[b.value for b in Backend], default=Backend.NUMBA.value)
    parser.add_argument("--hdf5", default=None, help="Also store the result in this HDF5 file.")
    parser.add_argument("--plot", default=None, help="Save a picture of the solution to this file.")
    parser.add_argument(
        "--plot-convergence", default=None, help="Save a plot of the change per iteration to this file."
    )
    parser.add_argument("--log-file", default=None, help="Copy log messages to this file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug messages.")
    return parser


def _prompt(message: str, stdin: TextIO) -> str:
    print()
    print(f"  {message}")
    return stdin.readline().strip()


@timer
def run(config: PlateConfig) -> SolveResult:
    print()
    print(" Iteration  Change")
    print()
    reporter = PowerOfTwoReporter()
    result = RelaxationSolver(config, callback=reporter).solve()
    print()
    print(f"  {result.iterations:8d}  {result.max_change:g}")
    print()
    print("  Error tolerance achieved.")
    print(f"  CPU time = {result.elapsed:.3f} s")
    return result


def main(argv: Optional[Sequence[str]] = None, stdin: TextIO = sys.stdin) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=args.log_file,
        progress_stream=sys.stdout,
    )

    print()
    print("HEATED_PLATE")
    print("  A program to solve for the steady state temperature distribution")
    print("  over a rectangular plate.")
    print()
    print(f"  Spatial grid of {args.rows} by {args.cols} points.")

    raw_epsilon = args.epsilon
    if raw_epsilon is None:
        raw_epsilon = _prompt("Enter EPSILON, the error tolerance:", stdin)
    try:
        epsilon = float(raw_epsilon)
    except ValueError:
        print()
        print("HEATED_PLATE")
        print("  Error reading in the value of EPSILON.")
        return EXIT_BAD_INPUT

    print()
    print(f"  The iteration will be repeated until the change is <= {epsilon:g}")

    output = args.output
    if output is None:
        output = _prompt("Enter OUTPUT_FILENAME, the name of the output file:", stdin)
    if not output:
        print()
        print("HEATED_PLATE")
        print("  Error reading in the value of OUTPUT_FILENAME.")
        return EXIT_BAD_INPUT

    print()
    print(f"  The steady state solution will be written to \"{output}\".")

    try:
        config = PlateConfig(
            epsilon=epsilon,
            rows=args.rows,
            cols=args.cols,
            boundary=BoundaryTemperatures.uniform_hot(hot=args.hot, cold=args.cold),
            max_iterations=args.max_iterations,
            backend=Backend(args.backend),
            record_history=args.plot_convergence is not None,
        )
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_BAD_CONFIG

    try:
        result = run(config)
    except ConvergenceError:
        print()
        print("  Error tolerance not achieved.")
        return EXIT_NOT_CONVERGED

    try:
        write_grid(output, result.grid)
    except OSError as e:
        print()
        print("HEATED_PLATE")
        print(f"  Error writing the output file \"{output}\": {e.strerror or e}")
        return EXIT_WRITE_FAILED

    print()
    print(f"  Solution written to the output file \"{output}\".")

    if args.hdf5:
        save_result(args.hdf5, result, config)

    if args.plot or args.plot_convergence:
        # Imported here so plain runs do not load matplotlib
        import matplotlib.pyplot as plt
        from heatedplate.view.plot import plot_convergence, plot_temperature_distribution

        if args.plot:
            fig = plot_temperature_distribution(result.grid)
            fig.savefig(args.plot, dpi=150)
            plt.close(fig)
            logger.info(f"Plot saved to: {args.plot}")

        if args.plot_convergence:
            fig = plot_convergence(result.history, epsilon=config.epsilon)
            fig.savefig(args.plot_convergence, dpi=150)
            plt.close(fig)
            logger.info(f"Convergence plot saved to: {args.plot_convergence}")

    print()
    print("HEATED_PLATE:")
    print("  Normal end of execution.")
    return EXIT_OK
