from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional

import numpy as np
import matplotlib.pyplot as plt

if TYPE_CHECKING:
    import numpy.typing as npt
    from matplotlib.axes import Axes
    from matplotlib.figure import Figure


def plot_temperature_distribution(
    grid: npt.NDArray[np.float64],
    ax: Optional[Axes] = None,
    title: str = "Steady-state temperature",
    cmap: str = "jet",
) -> Figure:
    """
    Plot the temperature field as an image.

    Row 0 (the north edge) is drawn at the top.

    Args:
        grid: (M, N) array of temperatures.
        ax: Axes to draw into. A new figure is created when omitted.
        title: Axes title.
        cmap: Matplotlib colormap name.

    Returns:
        The figure containing the plot.
    """
    if ax is None:
        plt.rcParams["figure.constrained_layout.use"] = True
        fig, ax = plt.subplots(figsize=(7, 6))
    else:
        fig = ax.figure

    image = ax.imshow(grid, cmap=cmap, origin="upper", interpolation="nearest")
    fig.colorbar(image, ax=ax, label="Temperature")

    rows, cols = grid.shape
    ax.set_title(f"{title} ({rows} x {cols})")
    ax.set_xlabel("Column")
    ax.set_ylabel("Row")
    return fig


def plot_convergence(
    history: Iterable[tuple[int, float]],
    epsilon: Optional[float] = None,
    ax: Optional[Axes] = None,
) -> Figure:
    """
    Plot the maximum change per pass on log-log axes.
    """
    data = np.asarray(list(history), dtype=np.float64)
    if data.size == 0:
        raise ValueError("History is empty, nothing to plot.")

    if ax is None:
        plt.rcParams["figure.constrained_layout.use"] = True
        fig, ax = plt.subplots(figsize=(7, 5))
    else:
        fig = ax.figure

    ax.loglog(data[:, 0], data[:, 1], 'r', lw=2, label="Max change")
    if epsilon is not None:
        ax.axhline(epsilon, color='gray', linestyle='--', lw=1, label="Tolerance")

    ax.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)
    ax.grid(visible=True, which='minor', axis='both', linestyle=':', color='gray', lw=0.5)

    ax.set_title("Convergence of the relaxation")
    ax.set_xlabel("Iteration")
    ax.set_ylabel("Max change")
    ax.legend()
    return fig
